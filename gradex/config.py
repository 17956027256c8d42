"""
Configuration constants for Gradex.

Everything that is policy rather than arithmetic lives here so the grading
and aggregation modules stay free of magic numbers.
"""

import logging
import os

# ------------------------
# Precision
# ------------------------

# Bookkeeping values (totals, GPA, CGPA) are rounded half-up to this many
# places so repeated aggregation of the same inputs is reproducible.
INTERMEDIATE_PRECISION = 6

# Caller-facing GPA / CGPA values.
DISPLAY_PRECISION = 2

# ------------------------
# Scores and units
# ------------------------

SCORE_FLOOR = 0.0
SCORE_CEILING = 100.0

# Course entry form limits
MIN_UNITS = 1
MAX_UNITS = 6
DEFAULT_UNITS = 3

# ------------------------
# Course load (units per semester)
# ------------------------

MAX_RECOMMENDED_LOAD = 24
OPTIMAL_LOAD_MIN = 18
OPTIMAL_LOAD_MAX = 22

# ------------------------
# Class of degree (5-point scale), highest first
# ------------------------

STANDING_THRESHOLDS = [
    ("First Class", 4.50),
    ("Second Class Upper", 3.50),
    ("Second Class Lower", 2.50),
    ("Third Class", 1.50),
    ("Pass", 1.00),
]
PROBATION_LABEL = "Probation"

# ------------------------
# Logging
# ------------------------

LOG_LEVEL_ENV = "GRADEX_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level=None):
    """Set up root logging once; level defaults to $GRADEX_LOG_LEVEL or INFO."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    return level
