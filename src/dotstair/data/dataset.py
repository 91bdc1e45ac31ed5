"""
dataset.py
-----------

Core data container for dotstair.

defines:
- ResponseData: append-only log of the responses a session folded into its
  estimator (practice responses excluded from the estimator are not logged).

Notes
-----
- Data is stored in plain Python lists.
"""

from __future__ import annotations


class ResponseData:
    """
    Log of recorded trials.

    Attributes
    ----------
    conditions : list[str]
        Condition of each trial.
    values : list[int]
        Value the estimator reported for the trial (the presented value).
    responses : list[int]
        1 = correct, 0 = incorrect.
    practice : list[bool]
        Whether the trial came from the practice phase.
    """

    def __init__(self) -> None:
        self.conditions: list[str] = []
        self.values: list[int] = []
        self.responses: list[int] = []
        self.practice: list[bool] = []

    def add_trial(self, condition: str, value: int, correct: bool, is_practice: bool = False) -> None:
        """
        append a single trial.

        Parameters
        ----------
        condition : str
            Condition name.
        value : int
            Presented value.
        correct : bool
            Response outcome.
        is_practice : bool, default=False
            Practice-phase flag.
        """
        self.conditions.append(condition)
        self.values.append(value)
        self.responses.append(int(bool(correct)))
        self.practice.append(bool(is_practice))

    @property
    def trials(self) -> list[tuple[str, int, int]]:
        """Return list of (condition, value, response) tuples."""
        return list(zip(self.conditions, self.values, self.responses))

    def __len__(self) -> int:
        """Return number of trials."""
        return len(self.responses)
