"""
trial_placement
===============

Adaptive difficulty procedures.

- StaircaseProcedure: independent n-up/n-down staircases per condition
- QuestProcedure: Bayesian placement over one threshold posterior shared by
  all conditions, queried at each condition's target accuracy

Both implement AdaptiveProcedure, so the session can swap them freely.

Examples
--------
>>> from dotstair.config import StaircaseConfig
>>> from dotstair.trial_placement import StaircaseProcedure
>>> procedure = StaircaseProcedure.from_config(StaircaseConfig())
>>> procedure.record_response("easy", True)
38
"""

from dotstair.trial_placement.base import AdaptiveProcedure
from dotstair.trial_placement.quest import QuestProcedure
from dotstair.trial_placement.staircase import StaircaseProcedure, UpDownStaircase

__all__ = [
    "AdaptiveProcedure",
    "StaircaseProcedure",
    "UpDownStaircase",
    "QuestProcedure",
]
