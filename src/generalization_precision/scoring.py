"""
Scoring many candidate partitions with one initialized metric.

A search over generalization schemes typically scores many candidates with
the same metric. Once the metric is initialized its state is read-only, so
candidates can be evaluated on a concurrent.futures executor. Each partition
is materialized into a list before submission; lazy generators supplied by the
caller are never consumed from a worker thread.
"""

import concurrent.futures as cf
from collections.abc import Iterable
from typing import Optional

from generalization_precision.equivalence_classes import (
    EquivalenceClass,
    EquivalenceClasses,
    iterate_ordered,
)
from generalization_precision.information_loss import InformationLoss
from generalization_precision.precision import (
    MetricNotInitializedError,
    NonMonotonicPrecisionMetric,
)


def _materialize(partition: EquivalenceClasses) -> list[EquivalenceClass]:
    if partition is None:
        return []
    if isinstance(partition, EquivalenceClass):
        return list(iterate_ordered(partition))
    return list(partition)


def evaluate_partitions(
    metric: NonMonotonicPrecisionMetric,
    partitions: Iterable[EquivalenceClasses],
    executor: Optional[cf.Executor] = None,
) -> list[InformationLoss]:
    """
    Evaluate every partition and return the losses in input order.

    Parameters
    ----------
    metric : NonMonotonicPrecisionMetric
        An initialized metric. It must not be re-initialized while this runs.
    partitions : Iterable[EquivalenceClasses]
        Candidate partitions, each the head of a linked chain or an iterable of classes.
    executor : concurrent.futures.Executor, optional
        If not None, partitions are evaluated concurrently on this executor.
        If None, they are evaluated in the current thread.

    Returns
    -------
    List[InformationLoss]
        One loss per partition, in the order the partitions were given.

    Raises
    ------
    MetricNotInitializedError
        If the metric has not been initialized; raised before any work is submitted.
    """
    if metric.state is None:
        raise MetricNotInitializedError(f"{metric.name} metric must be initialized before evaluate")
    materialized = [_materialize(partition) for partition in partitions]
    if executor is None:
        return [metric.evaluate(partition) for partition in materialized]
    futures = [executor.submit(metric.evaluate, partition) for partition in materialized]
    try:
        return [future.result() for future in futures]
    finally:
        for future in futures:
            future.cancel()
