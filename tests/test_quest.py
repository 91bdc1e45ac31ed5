"""
test_quest.py
-------------

Tests for QuestProcedure: one posterior shared by all conditions, queried at
each condition's own target accuracy.
"""

import numpy as np
import pytest

from dotstair.trial_placement import QuestProcedure


@pytest.fixture
def procedure(quest_config):
    return QuestProcedure.from_config(quest_config)


class TestPlacement:
    def test_initial_suggestions_follow_target_rates(self, procedure):
        # flat prior -> MAP at grid centre (51)
        assert procedure.next_value("easy") == 61
        assert procedure.next_value("difficult") == 48

    def test_next_value_remembers_last_delta(self, procedure):
        assert procedure.last_delta is None
        value = procedure.next_value("difficult")
        assert procedure.last_delta == value
        assert procedure.last_condition == "difficult"

    def test_peek_has_no_side_effects(self, procedure):
        procedure.peek_value("easy")
        assert procedure.last_delta is None

    def test_unknown_condition(self, procedure):
        with pytest.raises(ValueError):
            procedure.next_value("medium")


class TestRecordResponse:
    def test_updates_shared_posterior(self, procedure):
        procedure.next_value("easy")
        procedure.record_response("easy", True)
        procedure.next_value("difficult")
        procedure.record_response("difficult", False)
        assert procedure.estimator.n_updates == 2
        assert procedure.summary("easy")["total_trials"] == 1
        assert procedure.summary("difficult")["total_trials"] == 1

    def test_returns_fresh_suggestion_from_updated_posterior(self, procedure):
        first = procedure.next_value("easy")
        after = procedure.record_response("easy", True)
        assert after == procedure.last_delta
        assert after == procedure.peek_value("easy")
        # a correct response at 61 pulls the threshold estimate down
        assert after < first

    def test_likelihood_uses_presented_value(self, quest_config):
        a = QuestProcedure.from_config(quest_config)
        b = QuestProcedure.from_config(quest_config)
        a.next_value("easy")  # presented 61
        b.next_value("difficult")  # presented 48
        a.record_response("easy", False)
        b.record_response("easy", False)
        assert not np.array_equal(a.estimator.log_posterior, b.estimator.log_posterior)

    def test_record_without_request_suggests_first(self, procedure, quest_config):
        procedure.record_response("easy", True)
        reference = QuestProcedure.from_config(quest_config)
        reference.next_value("easy")
        reference.record_response("easy", True)
        np.testing.assert_array_equal(
            procedure.estimator.log_posterior, reference.estimator.log_posterior
        )

    def test_posterior_normalized(self, procedure):
        for i in range(40):
            condition = "easy" if i % 2 else "difficult"
            procedure.next_value(condition)
            procedure.record_response(condition, i % 3 != 0)
            assert np.exp(procedure.estimator.log_posterior).sum() == pytest.approx(
                1.0, abs=1e-9
            )


class TestReporting:
    def test_trial_log(self, procedure):
        procedure.next_value("easy")
        procedure.record_response("easy", True)
        log = procedure.trial_log("easy")
        assert log["method"] == "quest"
        assert log["condition"] == "easy"
        assert log["value"] == procedure.peek_value("easy")
        assert log["trials_so_far"] == 1
        assert log["running_accuracy"] == 1.0
        assert log["target_rate"] == 0.85
        for key in ("alpha_map", "entropy", "beta", "lapse", "guess"):
            assert key in log
        assert (log["beta"], log["lapse"], log["guess"]) == (10.0, 0.02, 0.5)

    def test_summary(self, procedure):
        procedure.next_value("easy")
        procedure.record_response("easy", False)
        summary = procedure.summary("easy")
        assert summary["initial_value"] == 61
        assert summary["final_value"] == summary["value_history"][-1]
        assert len(summary["value_history"]) == 2
        assert summary["correct_trials"] == 0
        assert summary["current_accuracy"] == 0.0
        assert summary["n_updates"] == 1
        assert summary["entropy"] < np.log(99)
