"""
experiment_session.py
---------------------

AdaptiveSession is the single object the trial loop talks to.

Responsibilities
----------------
1. Validate the run configuration.
2. Build the classic staircases (always) and, for the QUEST method, the shared
   posterior; resolve the method once into a procedure object.
3. Keep practice trials out of estimator state unless configured otherwise.
4. Log every response that reached the estimator (ResponseData).
5. Present one method-agnostic interface for values, trial logs and summaries.

One session is constructed per experiment run and passed to whatever drives
the trials; there is no module-level estimator state.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from dotstair.config import Method, StaircaseConfig
from dotstair.data.dataset import ResponseData
from dotstair.trial_placement.base import AdaptiveProcedure
from dotstair.trial_placement.quest import QuestProcedure
from dotstair.trial_placement.staircase import StaircaseProcedure

logger = logging.getLogger(__name__)


class AdaptiveSession:
    """
    High-level dispatcher for adaptive difficulty.

    Parameters
    ----------
    config : StaircaseConfig or Mapping, optional
        If given, the session is initialized immediately.

    Attributes
    ----------
    config : StaircaseConfig or None
        Active configuration (None before initialize()).
    staircases : StaircaseProcedure or None
        Classic trackers, built for every method.
    quest : QuestProcedure or None
        Shared-posterior procedure, built only for the QUEST method.
    procedure : AdaptiveProcedure or None
        The procedure selected by `config.method`.
    """

    def __init__(self, config: StaircaseConfig | Mapping[str, Any] | None = None):
        self.config: StaircaseConfig | None = None
        self.staircases: StaircaseProcedure | None = None
        self.quest: QuestProcedure | None = None
        self.procedure: AdaptiveProcedure | None = None
        self._responses = ResponseData()
        if config is not None:
            self.initialize(config)

    # ------------------------------------------------------------------
    # SETUP
    # ------------------------------------------------------------------
    def initialize(self, config: StaircaseConfig | Mapping[str, Any]) -> None:
        """
        Build estimator state for a fresh run.

        Parameters
        ----------
        config : StaircaseConfig or Mapping
            Mappings use the experiment option names, see
            StaircaseConfig.from_dict().

        Raises
        ------
        ConfigurationError
            If the configuration is invalid. Nothing is built in that case.
        """
        if not isinstance(config, StaircaseConfig):
            config = StaircaseConfig.from_dict(config)

        staircases = StaircaseProcedure.from_config(config)
        quest = QuestProcedure.from_config(config) if config.method is Method.QUEST else None

        self.config = config
        self.staircases = staircases
        self.quest = quest
        self.procedure = quest if quest is not None else staircases
        self._responses = ResponseData()
        logger.log(
            logging.INFO if config.logging else logging.DEBUG,
            "adaptive session initialized: method=%s conditions=%s update_on_practice=%s",
            config.method.value,
            list(self.procedure.conditions),
            config.update_on_practice,
        )

    def _require_procedure(self, condition: str) -> AdaptiveProcedure:
        if self.procedure is None:
            raise RuntimeError("Session not initialized. Call initialize() first.")
        self.procedure.check_condition(condition)
        return self.procedure

    def _excluded(self, is_practice: bool) -> bool:
        return is_practice and not self.config.update_on_practice

    @property
    def method(self) -> Method:
        if self.config is None:
            raise RuntimeError("Session not initialized. Call initialize() first.")
        return self.config.method

    @property
    def responses(self) -> ResponseData:
        """Responses that were folded into the estimator, in order."""
        return self._responses

    # ------------------------------------------------------------------
    # TRIAL INTERFACE
    # ------------------------------------------------------------------
    def next_value(self, condition: str, is_practice: bool = False) -> int:
        """
        Value to present on the next trial.

        Parameters
        ----------
        condition : str
            "easy" or "difficult".
        is_practice : bool, default=False
            Practice trials get the fixed practice value unless
            update_on_practice is enabled.

        Returns
        -------
        int
        """
        procedure = self._require_procedure(condition)
        if self._excluded(is_practice):
            return self.config.practice_value
        return procedure.next_value(condition)

    def record_response(self, condition: str, correct: bool, is_practice: bool = False) -> int:
        """
        Fold a response into the active estimator.

        Parameters
        ----------
        condition : str
            "easy" or "difficult".
        correct : bool
            Whether the response was correct.
        is_practice : bool, default=False
            Excluded practice responses leave all state untouched.

        Returns
        -------
        int
            Classic: the staircase's new current value.
            QUEST: a fresh suggestion from the updated posterior.
            Excluded practice: the current value/suggestion, nothing stored.
        """
        procedure = self._require_procedure(condition)
        if self._excluded(is_practice):
            return procedure.peek_value(condition)
        presented = procedure.presented_value(condition)
        value = procedure.record_response(condition, correct)
        self._responses.add_trial(condition, presented, correct, is_practice)
        return value

    # ------------------------------------------------------------------
    # REPORTING
    # ------------------------------------------------------------------
    def trial_log_data(self, condition: str) -> dict[str, Any]:
        """Per-trial snapshot for the data log of `condition`."""
        return self._require_procedure(condition).trial_log(condition)

    def summary(self) -> dict[str, dict[str, Any]]:
        """Summary of every condition, same shape for both methods."""
        if self.procedure is None:
            raise RuntimeError("Session not initialized. Call initialize() first.")
        return {name: self.procedure.summary(name) for name in self.procedure.conditions}
