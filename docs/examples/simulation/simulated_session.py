"""
Simulated session: classic staircase vs QUEST on a synthetic observer
---------------------------------------------------------------------

This script runs the trial loop an experiment would run, but answers every
trial with a SimulatedObserver whose true threshold is known:

1. Build an AdaptiveSession for each method from the same option mapping.
2. Interleave "easy" and "difficult" trials; ask the session for a value,
   draw a response from the observer, feed it back.
3. Plot the value trajectories per condition and the QUEST posterior.

The observer responds with
    p_correct = guess + (1 - guess - lapse) * sigmoid((delta - alpha*) / beta)
with alpha* = TRUE_THRESHOLD, so QUEST's MAP estimate should approach it.

Note:
- The classic rule with 1-up/n-down moves toward low accuracy (any correct
  response makes the task harder), so its trajectories settle near the
  intensity where n incorrect-in-a-row is as likely as one correct.
"""

from __future__ import annotations

import os
import sys

import matplotlib.pyplot as plt

# Allow running the script directly from repo root without installing the package.
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../../../src")))
# --8<-- [start:imports]
from dotstair import AdaptiveSession, PsychometricFunction, SimulatedObserver
from dotstair.posterior import posterior_sd
from dotstair.utils.rng import seed, split

# --8<-- [end:imports]

PLOTS_DIR = os.path.join(os.path.dirname(__file__), "plots")
TRUE_THRESHOLD = 30.0
N_TRIALS = 160

OPTIONS = {
    "initialValue": 40,
    "stepSize": 2,
    "minValue": 2,
    "maxValue": 100,
    "easy": {"targetCorrectRate": 0.85, "nUp": 1, "nDown": 4},
    "difficult": {"targetCorrectRate": 0.71, "nUp": 1, "nDown": 2},
    "quest": {"beta": 10, "lapse": 0.02, "guess": 0.5},
}


def run_session(method: str, key) -> AdaptiveSession:
    session = AdaptiveSession({**OPTIONS, "method": method})
    observer = SimulatedObserver(
        PsychometricFunction(beta=10.0, lapse=0.02, guess=0.5),
        threshold=TRUE_THRESHOLD,
        key=key,
    )
    for i in range(N_TRIALS):
        condition = "easy" if i % 2 == 0 else "difficult"
        value = session.next_value(condition)
        session.record_response(condition, observer.respond(value))
    return session


def main() -> None:
    os.makedirs(PLOTS_DIR, exist_ok=True)
    k_classic, k_quest = split(seed(0))

    sessions = {
        "classic": run_session("classic", k_classic),
        "quest": run_session("quest", k_quest),
    }

    fig, axes = plt.subplots(1, 3, figsize=(15, 4))
    for ax, (method, session) in zip(axes[:2], sessions.items()):
        for condition, summary in session.summary().items():
            ax.plot(summary["value_history"], label=f"{condition} ({summary['current_accuracy']:.0%})")
        ax.set_title(f"{method}")
        ax.set_xlabel("trial (per condition)")
        ax.set_ylabel("dot difference")
        ax.legend()

    estimator = sessions["quest"].quest.estimator
    axes[2].plot(estimator.alpha_grid, estimator.probabilities())
    axes[2].axvline(TRUE_THRESHOLD, color="k", linestyle="--", label="true threshold")
    axes[2].axvline(estimator.map_estimate(), color="r", label="MAP")
    axes[2].set_title("QUEST posterior")
    axes[2].set_xlabel("alpha")
    axes[2].legend()

    fig.tight_layout()
    out = os.path.join(PLOTS_DIR, "simulated_session.png")
    fig.savefig(out, dpi=150)
    print(f"saved {out}")
    print(
        f"QUEST MAP threshold: {estimator.map_estimate():.0f} "
        f"(true {TRUE_THRESHOLD:.0f}), entropy {estimator.entropy():.3f} nats, "
        f"posterior sd {posterior_sd(estimator):.2f}"
    )


if __name__ == "__main__":
    main()
