"""
dotstair
========

Adaptive difficulty control for two-alternative dot-counting experiments.

Trial by trial, dotstair decides how large the dot difference of the next
trial should be, from a stream of correct/incorrect responses tagged with a
difficulty condition ("easy" / "difficult"), so that each condition tracks
the participant's threshold at its own target accuracy.

----------------------------------------------------------------------
Workflow
----------------------------------------------------------------------

Core design
-----------
1. Numeric helpers (utils/math.py):
   - sigmoid, logit, clamp, log-sum-exp normalization.

2. PsychometricFunction (model/psychometric.py):
   - guess + (1 - guess - lapse) * sigmoid((delta - alpha) / beta)
   - inverse(target_accuracy, alpha) for placement.

3. PosteriorEstimator (posterior/grid_posterior.py):
   - Log-space posterior over the threshold alpha on an integer grid.
   - suggest(estimator, target_accuracy) turns the MAP estimate into a value.

4. Procedures (trial_placement/):
   - StaircaseProcedure: independent n-up/n-down staircase per condition.
   - QuestProcedure: one shared posterior, per-condition target accuracy.

5. AdaptiveSession (session/experiment_session.py):
   - Validates StaircaseConfig, resolves the method once, keeps practice
     responses out of estimator state, exposes the trial-loop interface.

Unified import style
--------------------
  from dotstair import AdaptiveSession, StaircaseConfig
  from dotstair.posterior import PosteriorEstimator, suggest
  from dotstair.model import PsychometricFunction, SimulatedObserver

Data flow
---------
- session.next_value(condition) -> value shown on the trial.
- session.record_response(condition, correct) -> updated/next value.
- session.trial_log_data(condition) and session.summary() -> plain dicts
  handed untouched to the caller's serialization layer.

----------------------------------------------------------------------
"""

from . import config as config
from . import data as data
from . import model as model
from . import posterior as posterior
from . import session as session
from . import trial_placement as trial_placement
from . import utils as utils
from .config import (
    ConditionConfig,
    ConfigurationError,
    Method,
    QuestConfig,
    StaircaseConfig,
)
from .data.dataset import ResponseData
from .model.observer import SimulatedObserver
from .model.psychometric import PsychometricFunction
from .posterior.grid_posterior import PosteriorEstimator, suggest
from .session.experiment_session import AdaptiveSession
from .trial_placement.quest import QuestProcedure
from .trial_placement.staircase import StaircaseProcedure, UpDownStaircase

__all__ = [
    # Configuration
    "StaircaseConfig",
    "ConditionConfig",
    "QuestConfig",
    "Method",
    "ConfigurationError",
    # Models
    "PsychometricFunction",
    "SimulatedObserver",
    # Posterior
    "PosteriorEstimator",
    "suggest",
    # Procedures
    "UpDownStaircase",
    "StaircaseProcedure",
    "QuestProcedure",
    # Session orchestration
    "AdaptiveSession",
    # Data handling
    "ResponseData",
    # Subpackages
    "config",
    "model",
    "posterior",
    "trial_placement",
    "utils",
    "data",
    "session",
]
