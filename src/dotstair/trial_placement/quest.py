"""
quest.py
--------

QUEST placement over a shared threshold posterior.

One PosteriorEstimator serves every condition: each response, whatever its
condition, sharpens the same estimate of perceptual sensitivity. Conditions
differ only in the target accuracy at which the posterior is queried, so an
"easy" condition targeting 85% correct is placed at a larger intensity than a
"difficult" one targeting 71%.

The procedure remembers the last value it handed out (`last_delta`): the
likelihood update must use what was actually presented, not what would be
suggested now.
"""

from __future__ import annotations

import logging
from typing import Any

from dotstair.config import Method, StaircaseConfig
from dotstair.model.psychometric import PsychometricFunction
from dotstair.posterior.grid_posterior import PosteriorEstimator, suggest
from dotstair.trial_placement.base import AdaptiveProcedure

logger = logging.getLogger(__name__)


class _ConditionTrack:
    """Per-condition bookkeeping; the posterior itself is never split."""

    def __init__(self, target_correct_rate: float, initial_value: int):
        self.target_correct_rate = target_correct_rate
        self.value_history = [initial_value]
        self.total_trials = 0
        self.correct_trials = 0

    @property
    def current_accuracy(self) -> float:
        if self.total_trials == 0:
            return 0.0
        return self.correct_trials / self.total_trials


class QuestProcedure(AdaptiveProcedure):
    """
    QUEST procedure with one posterior shared across conditions.

    Parameters
    ----------
    estimator : PosteriorEstimator
        Shared threshold posterior.
    target_rates : dict[str, float]
        Target accuracy per condition name.
    verbose : bool, default=False
        Trace every response at INFO level (DEBUG otherwise).

    Attributes
    ----------
    last_delta : int | None
        Most recently handed-out value; None before the first request.
    last_condition : str | None
        Condition that `last_delta` was suggested for.
    """

    method = Method.QUEST

    def __init__(
        self,
        estimator: PosteriorEstimator,
        target_rates: dict[str, float],
        verbose: bool = False,
    ):
        super().__init__(target_rates)
        self.estimator = estimator
        self.verbose = verbose
        self.last_delta: int | None = None
        self.last_condition: str | None = None
        self.tracks = {
            name: _ConditionTrack(rate, suggest(estimator, rate))
            for name, rate in target_rates.items()
        }

    @classmethod
    def from_config(cls, config: StaircaseConfig) -> QuestProcedure:
        estimator = PosteriorEstimator(
            min_delta=config.min_value,
            max_delta=config.max_value,
            psychometric=PsychometricFunction.from_config(config.quest),
            t_guess=config.quest.t_guess,
            t_guess_sd=config.quest.t_guess_sd,
        )
        rates = {
            name: cond.target_correct_rate for name, cond in config.conditions().items()
        }
        return cls(estimator, rates, verbose=config.logging)

    def _log(self, msg, *args):
        logger.log(logging.INFO if self.verbose else logging.DEBUG, msg, *args)

    def _track(self, condition: str) -> _ConditionTrack:
        self.check_condition(condition)
        return self.tracks[condition]

    # ------------------------------------------------------------------
    # PLACEMENT
    # ------------------------------------------------------------------
    def peek_value(self, condition: str) -> int:
        """Suggestion for `condition` without recording it as presented."""
        return suggest(self.estimator, self._track(condition).target_correct_rate)

    def next_value(self, condition: str) -> int:
        """Suggest the next value for `condition` and remember it as presented."""
        value = self.peek_value(condition)
        self.last_delta = value
        self.last_condition = condition
        return value

    def presented_value(self, condition: str) -> int:
        """`last_delta`, or the current suggestion if nothing was handed out yet."""
        self.check_condition(condition)
        if self.last_delta is None:
            return self.peek_value(condition)
        return self.last_delta

    def record_response(self, condition: str, correct: bool) -> int:
        """
        Update the shared posterior with a response at `last_delta`.

        Returns
        -------
        int
            A fresh suggestion for `condition`, computed from the updated
            posterior (and stored as the new `last_delta`).
        """
        track = self._track(condition)
        if self.last_delta is None:
            self.next_value(condition)
        presented = self.last_delta

        self.estimator.update(presented, bool(correct))
        track.total_trials += 1
        if correct:
            track.correct_trials += 1

        value = self.next_value(condition)
        track.value_history.append(value)
        self._log(
            "%s trial %d at %s: %s -> next %s (map %.1f, entropy %.3f)",
            condition,
            track.total_trials,
            presented,
            "correct" if correct else "incorrect",
            value,
            self.estimator.map_estimate(),
            self.estimator.entropy(),
        )
        return value

    # ------------------------------------------------------------------
    # REPORTING
    # ------------------------------------------------------------------
    def _shape(self) -> dict[str, Any]:
        psy = self.estimator.psychometric
        return {
            "alpha_map": self.estimator.map_estimate(),
            "entropy": self.estimator.entropy(),
            "beta": psy.beta,
            "lapse": psy.lapse,
            "guess": psy.guess,
        }

    def trial_log(self, condition: str) -> dict[str, Any]:
        track = self._track(condition)
        return {
            "method": self.method.value,
            "condition": condition,
            "value": self.peek_value(condition),
            "trials_so_far": track.total_trials,
            "running_accuracy": track.current_accuracy,
            "target_rate": track.target_correct_rate,
            **self._shape(),
        }

    def summary(self, condition: str) -> dict[str, Any]:
        track = self._track(condition)
        return {
            "target_correct_rate": track.target_correct_rate,
            "initial_value": track.value_history[0],
            "final_value": track.value_history[-1],
            "total_trials": track.total_trials,
            "correct_trials": track.correct_trials,
            "current_accuracy": track.current_accuracy,
            "value_history": list(track.value_history),
            "n_updates": self.estimator.n_updates,
            **self._shape(),
        }
