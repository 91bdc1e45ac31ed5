"""
dotstair.model
==============

Response models.

Includes
--------
- PsychometricFunction (guess/lapse-bounded logistic, forward and inverse)
- SimulatedObserver (seeded synthetic responder)

Typical usage
-------------
    from dotstair.model import PsychometricFunction, SimulatedObserver
"""

from .observer import SimulatedObserver
from .psychometric import PsychometricFunction

__all__ = [
    "PsychometricFunction",
    "SimulatedObserver",
]
