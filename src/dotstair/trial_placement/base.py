"""
base.py
-------

Abstract base class for adaptive difficulty procedures.

Every procedure tracks a fixed set of named conditions and answers the same
three questions for the trial loop: what value to present next, how to fold
in a response, and what to log.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from dotstair.config import Method


class AdaptiveProcedure(ABC):
    """
    Abstract interface for adaptive difficulty procedures.

    Methods
    -------
    next_value(condition) -> int
        Value to present on the next trial of `condition`.
    peek_value(condition) -> int
        Same value, without any bookkeeping side effect.
    presented_value(condition) -> int
        Value the next recorded response is taken to have been shown at.
    record_response(condition, correct) -> int
        Fold in a response, return the value to log as the new difficulty.
    trial_log(condition) -> dict
        Per-trial state snapshot.
    summary(condition) -> dict
        End-of-run statistics.

    Both StaircaseProcedure and QuestProcedure subclass this.
    """

    method: Method

    def __init__(self, conditions):
        self.conditions = tuple(conditions)

    def check_condition(self, condition: str) -> None:
        """Raise ValueError for a condition this procedure does not track."""
        if condition not in self.conditions:
            raise ValueError(
                f"unknown condition {condition!r}; expected one of {list(self.conditions)}"
            )

    @abstractmethod
    def next_value(self, condition: str) -> int: ...

    @abstractmethod
    def peek_value(self, condition: str) -> int: ...

    @abstractmethod
    def presented_value(self, condition: str) -> int: ...

    @abstractmethod
    def record_response(self, condition: str, correct: bool) -> int: ...

    @abstractmethod
    def trial_log(self, condition: str) -> dict[str, Any]: ...

    @abstractmethod
    def summary(self, condition: str) -> dict[str, Any]: ...
