"""
config.py
---------

Run configuration for the adaptive difficulty estimators.

defines:
- Method : closed choice of estimator ("classic" up/down or "quest").
- ConditionConfig : per-condition target accuracy and up/down rule.
- QuestConfig : psychometric shape and prior for the QUEST posterior.
- StaircaseConfig : the whole run configuration.
- ConfigurationError : raised for any invalid setting.

All dataclasses validate themselves on construction, so an invalid run is
rejected before the first trial is ever presented.

Examples
--------
>>> from dotstair.config import StaircaseConfig
>>> config = StaircaseConfig.from_dict(
...     {"method": "quest", "initialValue": 40, "easy": {"nDown": 3}}
... )
>>> config.easy.n_down
3
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

CONDITIONS: tuple[str, ...] = ("easy", "difficult")


class ConfigurationError(ValueError):
    """Invalid estimator configuration; fatal, raised before any trial runs."""


class Method(str, Enum):
    """Estimator selected for the run."""

    CLASSIC = "classic"
    QUEST = "quest"


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class ConditionConfig:
    """
    Tuning for one difficulty condition.

    Attributes
    ----------
    target_correct_rate : float
        Desired proportion correct, strictly inside (0, 1). QUEST inverts the
        psychometric function at this accuracy; the classic staircase only
        reports it.
    n_up : int
        Consecutive correct responses that make the task harder.
    n_down : int
        Consecutive incorrect responses that make the task easier.
    """

    target_correct_rate: float
    n_up: int = 1
    n_down: int = 2

    def __post_init__(self):
        if not 0.0 < self.target_correct_rate < 1.0:
            raise ConfigurationError(
                f"target_correct_rate must lie in (0, 1), got {self.target_correct_rate}"
            )
        for name in ("n_up", "n_down"):
            value = getattr(self, name)
            if not _is_int(value) or value < 1:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")


@dataclass
class QuestConfig:
    """
    Psychometric shape and prior for the shared QUEST posterior.

    Attributes
    ----------
    t_guess : float | None
        Prior mean of the threshold. Only used together with t_guess_sd.
    t_guess_sd : float | None
        Prior standard deviation. None keeps the posterior uniform at start.
    beta : float
        Slope (spread) of the logistic, in stimulus units.
    lapse : float
        Probability of an error at arbitrarily easy intensities.
    guess : float
        Floor of the psychometric function (0.5 for 2AFC).
    """

    t_guess: float | None = None
    t_guess_sd: float | None = None
    beta: float = 10.0
    lapse: float = 0.02
    guess: float = 0.5

    def __post_init__(self):
        if self.beta <= 0:
            raise ConfigurationError(f"quest beta must be positive, got {self.beta}")
        if not 0.0 <= self.guess < 1.0:
            raise ConfigurationError(f"quest guess must lie in [0, 1), got {self.guess}")
        if not 0.0 <= self.lapse < 1.0:
            raise ConfigurationError(f"quest lapse must lie in [0, 1), got {self.lapse}")
        if self.guess + self.lapse >= 1.0:
            raise ConfigurationError(
                f"quest guess + lapse must be < 1, got {self.guess} + {self.lapse}"
            )
        if self.t_guess_sd is not None and self.t_guess_sd <= 0:
            raise ConfigurationError(
                f"quest t_guess_sd must be positive, got {self.t_guess_sd}"
            )


@dataclass
class StaircaseConfig:
    """
    Configuration for one experiment run.

    Attributes
    ----------
    method : Method
        Which estimator drives difficulty. Strings are coerced.
    initial_value, step_size, min_value, max_value : int
        Stimulus bounds shared by both methods (the QUEST grid spans
        [min_value, max_value]); initial value and step are classic only.
    easy, difficult : ConditionConfig
        Per-condition tuning.
    quest : QuestConfig
        QUEST shape/prior parameters.
    update_on_practice : bool
        When False, practice responses never touch estimator state.
    practice_value : int | None
        Fixed intensity for excluded practice trials. Defaults to initial_value.
    logging : bool
        Verbose per-trial tracing at INFO level. No behavioural effect.
    """

    method: Method = Method.CLASSIC
    initial_value: int = 40
    step_size: int = 2
    min_value: int = 2
    max_value: int = 100
    easy: ConditionConfig = field(
        default_factory=lambda: ConditionConfig(target_correct_rate=0.85, n_up=1, n_down=4)
    )
    difficult: ConditionConfig = field(
        default_factory=lambda: ConditionConfig(target_correct_rate=0.71, n_up=1, n_down=2)
    )
    quest: QuestConfig = field(default_factory=QuestConfig)
    update_on_practice: bool = False
    practice_value: int | None = None
    logging: bool = False

    def __post_init__(self):
        try:
            self.method = Method(self.method)
        except ValueError:
            raise ConfigurationError(
                f"method must be one of {[m.value for m in Method]}, got {self.method!r}"
            ) from None

        for name in ("initial_value", "step_size", "min_value", "max_value"):
            value = getattr(self, name)
            if not _is_int(value):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if self.practice_value is not None and not _is_int(self.practice_value):
            raise ConfigurationError(
                f"practice_value must be an integer, got {self.practice_value!r}"
            )

        if self.min_value > self.max_value:
            raise ConfigurationError(
                f"min_value ({self.min_value}) must not exceed max_value ({self.max_value})"
            )
        if self.step_size <= 0:
            raise ConfigurationError(f"step_size must be positive, got {self.step_size}")
        if not self.min_value <= self.initial_value <= self.max_value:
            raise ConfigurationError(
                f"initial_value {self.initial_value} outside "
                f"[{self.min_value}, {self.max_value}]"
            )
        if self.practice_value is None:
            self.practice_value = self.initial_value
        elif not self.min_value <= self.practice_value <= self.max_value:
            raise ConfigurationError(
                f"practice_value {self.practice_value} outside "
                f"[{self.min_value}, {self.max_value}]"
            )

    def conditions(self) -> dict[str, ConditionConfig]:
        """Return the per-condition settings keyed by condition name."""
        return {"easy": self.easy, "difficult": self.difficult}

    # ------------------------------------------------------------------
    # MAPPING INTERFACE
    # ------------------------------------------------------------------
    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> StaircaseConfig:
        """
        Build a config from the experiment's option names.

        Parameters
        ----------
        options : Mapping
            Keys as used by the experiment configuration: ``method``,
            ``initialValue``, ``stepSize``, ``minValue``, ``maxValue``,
            ``updateOnPractice``, ``practiceValue``, ``logging``, and the nested
            groups ``easy``/``difficult`` (``targetCorrectRate``, ``nUp``,
            ``nDown``) and ``quest`` (``tGuess``, ``tGuessSd``, ``beta``,
            ``lapse``, ``guess``). Nested groups may also be given flat, e.g.
            ``"easy.nUp": 1``. Omitted keys keep their defaults.

        Returns
        -------
        StaircaseConfig

        Raises
        ------
        ConfigurationError
            On unknown keys or invalid values.
        """
        flat: dict[str, Any] = {}
        for key, value in options.items():
            if key in _GROUPS and isinstance(value, Mapping):
                for sub_key, sub_value in value.items():
                    flat[f"{key}.{sub_key}"] = sub_value
            else:
                flat[key] = value

        top: dict[str, Any] = {}
        groups: dict[str, dict[str, Any]] = {name: {} for name in _GROUPS}
        for key, value in flat.items():
            group, _, sub_key = key.partition(".")
            if sub_key:
                names = _QUEST_KEYS if group == "quest" else _CONDITION_KEYS
                if group not in _GROUPS or sub_key not in names:
                    raise ConfigurationError(f"unknown configuration option {key!r}")
                groups[group][names[sub_key]] = value
            elif key in _TOP_LEVEL_KEYS:
                top[_TOP_LEVEL_KEYS[key]] = value
            else:
                raise ConfigurationError(f"unknown configuration option {key!r}")

        defaults = cls()
        for name in CONDITIONS:
            if groups[name]:
                top[name] = replace(getattr(defaults, name), **groups[name])
        if groups["quest"]:
            top["quest"] = replace(defaults.quest, **groups["quest"])
        return cls(**top)


_GROUPS = ("easy", "difficult", "quest")

_TOP_LEVEL_KEYS = {
    "method": "method",
    "initialValue": "initial_value",
    "stepSize": "step_size",
    "minValue": "min_value",
    "maxValue": "max_value",
    "updateOnPractice": "update_on_practice",
    "practiceValue": "practice_value",
    "logging": "logging",
}

_CONDITION_KEYS = {
    "targetCorrectRate": "target_correct_rate",
    "nUp": "n_up",
    "nDown": "n_down",
}

_QUEST_KEYS = {
    "tGuess": "t_guess",
    "tGuessSd": "t_guess_sd",
    "beta": "beta",
    "lapse": "lapse",
    "guess": "guess",
}
