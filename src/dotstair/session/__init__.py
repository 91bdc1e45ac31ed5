"""
session
=======

Experiment orchestration.

This subpackage provides:
- AdaptiveSession : the dispatcher the trial loop drives; selects the
  classic staircase or QUEST from configuration and exposes one interface
  for next values, response updates, trial logs and summaries.
"""

from .experiment_session import AdaptiveSession

__all__ = ["AdaptiveSession"]
