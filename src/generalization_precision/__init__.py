"""
Generalization Precision - information loss scoring for k-anonymity searches.

This package implements the non-monotonic precision metric, which scores a
candidate generalization scheme from the equivalence classes it induces, along
with the hierarchy and equivalence class types it consumes.
"""

from generalization_precision._version import __version__
from generalization_precision.equivalence_classes import (
    DatasetShape,
    EquivalenceClass,
    iterate_ordered,
    iterate_visible,
    link_equivalence_classes,
)
from generalization_precision.gtrees import GTree, ReadOnlyGTree, make_flat_default_gtree
from generalization_precision.hierarchies import Hierarchy, LevelTableHierarchy, compute_heights
from generalization_precision.information_loss import InformationLoss
from generalization_precision.precision import (
    MetricNotInitializedError,
    NonMonotonicPrecisionMetric,
    PrecisionState,
    initialize_state,
)
from generalization_precision.scoring import evaluate_partitions

__all__ = [
    "__version__",
    "NonMonotonicPrecisionMetric",
    "PrecisionState",
    "initialize_state",
    "MetricNotInitializedError",
    "InformationLoss",
    "EquivalenceClass",
    "DatasetShape",
    "link_equivalence_classes",
    "iterate_ordered",
    "iterate_visible",
    "Hierarchy",
    "LevelTableHierarchy",
    "compute_heights",
    "GTree",
    "ReadOnlyGTree",
    "make_flat_default_gtree",
    "evaluate_partitions",
]
