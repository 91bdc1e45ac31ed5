"""
Central pytest configuration for this project.

This file is automatically discovered by pytest and is intended for:

- **Fixtures**: reusable configurations and simulated observers shared across
  test files.

Notes
-----
- Install the package in editable mode (`pip install -e ".[test]"`) so that
  imports resolve the same way locally and in CI.
- Keep this file focused on test setup. Do not add application logic here.
"""

import pytest

from dotstair.config import ConditionConfig, QuestConfig, StaircaseConfig
from dotstair.model import PsychometricFunction


@pytest.fixture
def classic_config():
    """Classic 1-up/4-down setup on [2, 100], starting at 40."""
    return StaircaseConfig(
        method="classic",
        initial_value=40,
        step_size=2,
        min_value=2,
        max_value=100,
        easy=ConditionConfig(target_correct_rate=0.85, n_up=1, n_down=4),
        difficult=ConditionConfig(target_correct_rate=0.71, n_up=1, n_down=2),
    )


@pytest.fixture
def quest_config():
    """QUEST setup with beta=10, lapse=0.02, guess=0.5 and a flat prior."""
    return StaircaseConfig(
        method="quest",
        initial_value=40,
        step_size=2,
        min_value=2,
        max_value=100,
        quest=QuestConfig(beta=10.0, lapse=0.02, guess=0.5),
    )


@pytest.fixture
def psychometric():
    return PsychometricFunction(beta=10.0, lapse=0.02, guess=0.5)
