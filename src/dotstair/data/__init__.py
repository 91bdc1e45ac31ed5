"""
dotstair.data
=============

submodule for the per-run response log.

Includes:
- dataset: ResponseData
"""

from .dataset import ResponseData

__all__ = ["ResponseData"]
