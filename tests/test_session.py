"""
test_session.py
---------------

Tests for AdaptiveSession, the method-agnostic dispatcher the trial loop uses:
- failure semantics (uninitialized use, unknown conditions, bad configs)
- practice exclusion
- determinism for both methods
- trial log and summary shapes
"""

import logging

import numpy as np
import pytest

from dotstair import AdaptiveSession
from dotstair.config import ConfigurationError, Method, StaircaseConfig
from dotstair.model import PsychometricFunction, SimulatedObserver
from dotstair.trial_placement import QuestProcedure, StaircaseProcedure
from dotstair.utils.rng import seed

COMMON_SUMMARY_KEYS = {
    "target_correct_rate",
    "initial_value",
    "final_value",
    "total_trials",
    "correct_trials",
    "current_accuracy",
    "value_history",
}


def response_sequence(key, n=120):
    """Interleaved (condition, correct) inputs from a seeded observer."""
    observer = SimulatedObserver(PsychometricFunction(), 0.0, key, fixed_accuracy=0.75)
    conditions = ["easy", "difficult"]
    return [(conditions[i % 2], observer.respond(0)) for i in range(n)]


def run(session, sequence):
    outputs = []
    for condition, correct in sequence:
        outputs.append(session.next_value(condition))
        outputs.append(session.record_response(condition, correct))
    return outputs


class TestFailureSemantics:
    @pytest.mark.parametrize(
        "call",
        [
            lambda s: s.next_value("easy"),
            lambda s: s.record_response("easy", True),
            lambda s: s.trial_log_data("easy"),
            lambda s: s.summary(),
            lambda s: s.method,
        ],
    )
    def test_use_before_initialize_raises(self, call):
        with pytest.raises(RuntimeError):
            call(AdaptiveSession())

    @pytest.mark.parametrize("method", ["classic", "quest"])
    def test_unknown_condition_raises(self, method):
        session = AdaptiveSession({"method": method})
        with pytest.raises(ValueError):
            session.next_value("medium")
        with pytest.raises(ValueError):
            session.record_response("Easy", True)

    def test_invalid_config_leaves_session_uninitialized(self):
        session = AdaptiveSession()
        with pytest.raises(ConfigurationError):
            session.initialize({"minValue": 50, "maxValue": 10, "initialValue": 20})
        with pytest.raises(RuntimeError):
            session.next_value("easy")

    def test_failed_reinitialize_keeps_previous_run(self, classic_config):
        session = AdaptiveSession(classic_config)
        session.record_response("easy", True)
        with pytest.raises(ConfigurationError):
            session.initialize({"stepSize": 0})
        assert session.next_value("easy") == 38

    def test_degenerate_quest_prior_rejected(self):
        session = AdaptiveSession()
        with pytest.raises(ConfigurationError):
            session.initialize(
                {"method": "quest", "quest": {"tGuess": 1e6, "tGuessSd": 1e-200}}
            )
        with pytest.raises(RuntimeError):
            session.next_value("easy")


class TestMethodSelection:
    def test_classic_builds_no_posterior(self, classic_config):
        session = AdaptiveSession(classic_config)
        assert session.method is Method.CLASSIC
        assert isinstance(session.procedure, StaircaseProcedure)
        assert session.quest is None

    def test_quest_still_builds_classic_trackers(self, quest_config):
        session = AdaptiveSession(quest_config)
        assert session.method is Method.QUEST
        assert isinstance(session.procedure, QuestProcedure)
        assert isinstance(session.staircases, StaircaseProcedure)

    def test_quest_responses_do_not_touch_classic_trackers(self, quest_config):
        session = AdaptiveSession(quest_config)
        session.next_value("easy")
        session.record_response("easy", True)
        assert session.staircases["easy"].total_trials == 0

    def test_mapping_config(self):
        session = AdaptiveSession({"method": "classic", "initialValue": 40, "stepSize": 2})
        assert session.record_response("easy", True) == 38


class TestClassicFlow:
    def test_values_and_updates(self, classic_config):
        session = AdaptiveSession(classic_config)
        assert session.next_value("easy") == 40
        assert session.record_response("easy", True) == 38
        assert session.record_response("easy", True) == 36
        assert session.next_value("difficult") == 40

    def test_responses_are_logged_with_presented_value(self, classic_config):
        session = AdaptiveSession(classic_config)
        session.record_response("easy", True)
        session.record_response("difficult", False)
        assert session.responses.trials == [("easy", 40, 1), ("difficult", 40, 0)]


class TestQuestFlow:
    def test_record_returns_fresh_suggestion(self, quest_config):
        session = AdaptiveSession(quest_config)
        presented = session.next_value("easy")
        value = session.record_response("easy", True)
        assert value == session.quest.last_delta
        assert session.quest.estimator.n_updates == 1
        assert session.responses.trials == [("easy", presented, 1)]


class TestPractice:
    @pytest.mark.parametrize("method", ["classic", "quest"])
    def test_practice_uses_fixed_value(self, method):
        session = AdaptiveSession({"method": method, "initialValue": 40})
        assert session.next_value("easy", is_practice=True) == 40
        assert session.next_value("difficult", is_practice=True) == 40

    def test_custom_practice_value(self):
        session = AdaptiveSession({"practiceValue": 70})
        assert session.next_value("easy", is_practice=True) == 70

    def test_classic_practice_excluded(self, classic_config):
        session = AdaptiveSession(classic_config)
        for correct in [True, True, False, True, False]:
            assert session.record_response("easy", correct, is_practice=True) == 40
        assert session.staircases["easy"].total_trials == 0
        assert session.summary()["easy"]["total_trials"] == 0
        assert len(session.responses) == 0

    def test_quest_practice_excluded(self, quest_config):
        session = AdaptiveSession(quest_config)
        before = session.quest.estimator.log_posterior.copy()
        for correct in [True, False, True, True]:
            session.next_value("easy", is_practice=True)
            value = session.record_response("easy", correct, is_practice=True)
            assert value == session.quest.peek_value("easy")
        np.testing.assert_array_equal(session.quest.estimator.log_posterior, before)
        assert session.quest.estimator.n_updates == 0
        assert session.quest.last_delta is None
        assert session.summary()["easy"]["total_trials"] == 0

    def test_update_on_practice_enabled(self, classic_config):
        classic_config.update_on_practice = True
        session = AdaptiveSession(classic_config)
        assert session.record_response("easy", True, is_practice=True) == 38
        assert session.next_value("easy", is_practice=True) == 38
        assert session.responses.practice == [True]


class TestDeterminism:
    @pytest.mark.parametrize("method", ["classic", "quest"])
    def test_replay_gives_identical_outputs(self, method):
        sequence = response_sequence(seed(21))
        config = StaircaseConfig(method=method)
        first, second = AdaptiveSession(config), AdaptiveSession(config)
        assert run(first, sequence) == run(second, sequence)
        assert first.summary() == second.summary()

    def test_reinitialize_resets_state(self, classic_config):
        sequence = response_sequence(seed(5), n=30)
        session = AdaptiveSession(classic_config)
        out_a = run(session, sequence)
        session.initialize(classic_config)
        assert len(session.responses) == 0
        assert run(session, sequence) == out_a


class TestReporting:
    def test_classic_trial_log(self, classic_config):
        session = AdaptiveSession(classic_config)
        session.record_response("difficult", False)
        assert session.trial_log_data("difficult") == {
            "method": "classic",
            "condition": "difficult",
            "value": 40,
            "trials_so_far": 1,
            "running_accuracy": 0.0,
            "reversals": 0,
            "consecutive_correct": 0,
            "consecutive_incorrect": 1,
        }

    def test_quest_trial_log(self, quest_config):
        session = AdaptiveSession(quest_config)
        log = session.trial_log_data("easy")
        assert log["method"] == "quest"
        assert log["value"] == 61
        assert log["trials_so_far"] == 0

    @pytest.mark.parametrize("method", ["classic", "quest"])
    def test_summary_shape_is_method_agnostic(self, method):
        session = AdaptiveSession({"method": method})
        run(session, response_sequence(seed(2), n=10))
        summary = session.summary()
        assert set(summary) == {"easy", "difficult"}
        for condition_summary in summary.values():
            assert COMMON_SUMMARY_KEYS <= set(condition_summary)
            assert condition_summary["total_trials"] == 5


class TestLogging:
    def test_verbose_flag_traces_at_info(self, caplog):
        with caplog.at_level(logging.INFO, logger="dotstair"):
            session = AdaptiveSession({"logging": True})
            session.record_response("easy", True)
        assert any("trial 1" in r.getMessage() for r in caplog.records)

    def test_quiet_by_default(self, caplog):
        with caplog.at_level(logging.INFO, logger="dotstair"):
            session = AdaptiveSession({})
            session.record_response("easy", True)
        assert caplog.records == []
