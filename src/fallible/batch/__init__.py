"""Batch combinators: collect, partition, count and fold sequences of Results.

Example:
    >>> from fallible import Ok, Err
    >>> from fallible.batch import all_, partition
    >>> all_([Ok(1), Ok(2)])
    Ok([1, 2])
    >>> partition([Ok(1), Err("e")]).errors
    ['e']
"""

from .batch import (
    BatchStats,
    FirstFound,
    Partition,
    PartitionStats,
    all_,
    all_async,
    all_settled_async,
    analyze,
    collect_results,
    errs,
    find_first,
    first,
    oks,
    partition,
    partition_with,
    reduce,
    traverse,
)

__all__ = [
    # Records
    "Partition",
    "PartitionStats",
    "BatchStats",
    "FirstFound",
    # Fail-fast
    "all_",
    "all_async",
    "traverse",
    "first",
    # Complete
    "all_settled_async",
    "oks",
    "errs",
    "partition",
    "collect_results",
    # Statistics
    "partition_with",
    "analyze",
    "find_first",
    # Folding
    "reduce",
]
