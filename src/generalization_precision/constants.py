"""
Shared constants for the generalization precision metric.

This module defines constants used across the package for consistency in
operations like equality comparisons and naming.
"""

import math

# Used to determine equality of floats
MAXIMUM_PRECISION_DIGITS: int = 8
EPSILON: float = math.pow(10, -MAXIMUM_PRECISION_DIGITS)

GTREE_ROOT_TAG: str = "*"

METRIC_NAME: str = "Non-Monotonic Precision"
