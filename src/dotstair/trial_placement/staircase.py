"""
staircase.py
------------

Classical n-up/n-down staircase.

A correct-streak of length n_up makes the task harder (value - step_size);
an incorrect-streak of length n_down makes it easier (value + step_size).
Values are clamped into [min_value, max_value], never wrapped or rejected.
Here "harder" means a smaller dot difference.

Conditions are fully independent: StaircaseProcedure keeps one
UpDownStaircase per condition.
"""

from __future__ import annotations

import logging
from typing import Any

from dotstair.config import Method, StaircaseConfig
from dotstair.trial_placement.base import AdaptiveProcedure

logger = logging.getLogger(__name__)

HARDER = -1
EASIER = 1


class UpDownStaircase:
    """
    Staircase for a single condition.

    Parameters
    ----------
    target_correct_rate : float
        Reported only; the convergence point is set by n_up/n_down.
    n_up : int
        Consecutive correct responses before stepping harder.
    n_down : int
        Consecutive incorrect responses before stepping easier.
    step_size : float
        Step increment.
    initial_value : float
        Starting value.
    min_value, max_value : float
        Inclusive bounds.
    verbose : bool, default=False
        Trace every response at INFO level (DEBUG otherwise).

    Attributes
    ----------
    value_history : list
        Initial value followed by the value after each response.
    reversal_points : list of dict
        ``{"trial": n, "value": v}`` where adjustment direction flipped;
        ``v`` is the value before the flipping adjustment.
    """

    def __init__(
        self,
        target_correct_rate: float,
        n_up: int,
        n_down: int,
        step_size: float,
        initial_value: float,
        min_value: float,
        max_value: float,
        verbose: bool = False,
    ):
        self.target_correct_rate = target_correct_rate
        self.n_up = n_up
        self.n_down = n_down
        self.step_size = step_size
        self.min_value = min_value
        self.max_value = max_value
        self.current_value = initial_value
        self.verbose = verbose

        self.responses: list[bool] = []
        self.consecutive_correct = 0
        self.consecutive_incorrect = 0
        self.value_history = [initial_value]
        self.reversal_points: list[dict[str, Any]] = []
        self.total_trials = 0
        self.correct_trials = 0
        self._last_direction: int | None = None

        self._log(
            "staircase initialized: target %d%%, %d-up-%d-down, initial value %s",
            round(target_correct_rate * 100),
            n_up,
            n_down,
            initial_value,
        )

    def _log(self, msg, *args):
        logger.log(logging.INFO if self.verbose else logging.DEBUG, msg, *args)

    @property
    def current_accuracy(self) -> float:
        """Proportion correct so far (0 before any trial)."""
        if self.total_trials == 0:
            return 0.0
        return self.correct_trials / self.total_trials

    def record_response(self, correct: bool) -> float:
        """
        Update the staircase with one response.

        Parameters
        ----------
        correct : bool
            Whether the response was correct.

        Returns
        -------
        float
            The new current value.
        """
        correct = bool(correct)
        self.responses.append(correct)
        self.total_trials += 1

        if correct:
            self.correct_trials += 1
            self.consecutive_correct += 1
            self.consecutive_incorrect = 0
            if self.consecutive_correct >= self.n_up:
                self._adjust(HARDER)
                self.consecutive_correct = 0
        else:
            self.consecutive_incorrect += 1
            self.consecutive_correct = 0
            if self.consecutive_incorrect >= self.n_down:
                self._adjust(EASIER)
                self.consecutive_incorrect = 0

        self.value_history.append(self.current_value)
        self._log(
            "trial %d: %s -> value %s (accuracy %.0f%%, %d reversals)",
            self.total_trials,
            "correct" if correct else "incorrect",
            self.current_value,
            self.current_accuracy * 100,
            len(self.reversal_points),
        )
        return self.current_value

    def _adjust(self, direction: int) -> None:
        previous = self.current_value
        requested = previous + direction * self.step_size
        self.current_value = min(max(requested, self.min_value), self.max_value)
        if requested != self.current_value:
            self._log("bound hit: requested %s, clamped to %s", requested, self.current_value)

        # Reversals follow the requested direction, even when clamped.
        if self._last_direction is not None and direction != self._last_direction:
            self.reversal_points.append({"trial": self.total_trials, "value": previous})
            self._log(
                "reversal #%d at trial %d (value %s)",
                len(self.reversal_points),
                self.total_trials,
                previous,
            )
        self._last_direction = direction

    def reset_counters(self) -> None:
        """Zero both streak counters (e.g. when switching between blocks)."""
        self.consecutive_correct = 0
        self.consecutive_incorrect = 0

    def summary(self) -> dict[str, Any]:
        """Return summary statistics (lists are copies)."""
        return {
            "target_correct_rate": self.target_correct_rate,
            "n_up": self.n_up,
            "n_down": self.n_down,
            "step_size": self.step_size,
            "initial_value": self.value_history[0],
            "final_value": self.current_value,
            "total_trials": self.total_trials,
            "correct_trials": self.correct_trials,
            "current_accuracy": self.current_accuracy,
            "reversal_count": len(self.reversal_points),
            "value_history": list(self.value_history),
            "reversal_points": [dict(r) for r in self.reversal_points],
        }


class StaircaseProcedure(AdaptiveProcedure):
    """
    Independent up/down staircases, one per condition.

    Parameters
    ----------
    staircases : dict[str, UpDownStaircase]
        Staircase per condition name.
    """

    method = Method.CLASSIC

    def __init__(self, staircases: dict[str, UpDownStaircase]):
        super().__init__(staircases)
        self.staircases = dict(staircases)

    @classmethod
    def from_config(cls, config: StaircaseConfig) -> StaircaseProcedure:
        return cls(
            {
                name: UpDownStaircase(
                    target_correct_rate=cond.target_correct_rate,
                    n_up=cond.n_up,
                    n_down=cond.n_down,
                    step_size=config.step_size,
                    initial_value=config.initial_value,
                    min_value=config.min_value,
                    max_value=config.max_value,
                    verbose=config.logging,
                )
                for name, cond in config.conditions().items()
            }
        )

    def __getitem__(self, condition: str) -> UpDownStaircase:
        self.check_condition(condition)
        return self.staircases[condition]

    def next_value(self, condition: str) -> int:
        return self[condition].current_value

    def peek_value(self, condition: str) -> int:
        return self[condition].current_value

    def presented_value(self, condition: str) -> int:
        return self[condition].current_value

    def record_response(self, condition: str, correct: bool) -> int:
        return self[condition].record_response(correct)

    def trial_log(self, condition: str) -> dict[str, Any]:
        stair = self[condition]
        return {
            "method": self.method.value,
            "condition": condition,
            "value": stair.current_value,
            "trials_so_far": stair.total_trials,
            "running_accuracy": stair.current_accuracy,
            "reversals": len(stair.reversal_points),
            "consecutive_correct": stair.consecutive_correct,
            "consecutive_incorrect": stair.consecutive_incorrect,
        }

    def summary(self, condition: str) -> dict[str, Any]:
        return self[condition].summary()
