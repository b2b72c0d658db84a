"""Utilities for benefitquiz."""

from .logging import reset_logging, setup_logging
from .rng import RandomSource, make_random_source

__all__ = [
    "setup_logging",
    "reset_logging",
    "RandomSource",
    "make_random_source",
]
