"""
Traversal engine: collection primitives that work the same on sequences and mappings.

A collection is either an ordered sequence (walked by ascending index) or a
mapping (walked over its keys, in the mapping's own order). Every entry point
takes either shape; callers never branch on which one they hold.
"""

from typing import Any, Callable, List, Mapping, Sequence, Union

from models import CollectionShape
from utils import (
    EmptyCollectionError,
    collection_shape,
    require_callable,
    require_sequence,
    strict_equals,
)

Collection = Union[Sequence, Mapping]

# Marks an omitted seed so that None can still be passed as one
_MISSING = object()


# --------- helpers ----------
def identity(value):
    """Return the argument unchanged (the default predicate)"""
    return value


def first(sequence: Sequence, n: int = None):
    """Return the first element, or a list of the first n elements"""
    require_sequence(sequence)
    if n is None:
        return sequence[0] if len(sequence) else None
    return list(sequence[:max(n, 0)])


def last(sequence: Sequence, n: int = None):
    """Return the last element, or a list of the last n elements"""
    require_sequence(sequence)
    length = len(sequence)
    if n is None:
        return sequence[length - 1] if length else None
    # sequence[-0:] would be the whole sequence, so slice from an explicit start
    n = min(max(n, 0), length)
    return list(sequence[length - n:])


# --------- enumeration ----------
def each(collection: Collection, callback: Callable) -> None:
    """
    Call callback(value, key_or_index, collection) for every element.

    Sequences are visited by index, 0 through len - 1. Mappings are visited
    once per key, in the mapping's iteration order.
    """
    shape = collection_shape(collection)
    require_callable(callback)

    if shape is CollectionShape.SEQUENCE:
        for index in range(len(collection)):
            callback(collection[index], index, collection)
    else:
        for key in list(collection.keys()):
            callback(collection[key], key, collection)


def index_of(sequence: Sequence, target: Any) -> int:
    """Lowest index holding a value strictly equal to target, or -1"""
    require_sequence(sequence)
    result = -1

    def _check(item, index, _):
        nonlocal result
        if result == -1 and strict_equals(item, target):
            result = index

    each(sequence, _check)
    return result


# --------- selection ----------
def select(collection: Collection, predicate: Callable) -> List[Any]:
    """Elements, in visitation order, for which predicate(element) is truthy"""
    require_callable(predicate, "predicate")
    results = []

    def _keep(item, *_):
        if predicate(item):
            results.append(item)

    each(collection, _keep)
    return results


def reject(collection: Collection, predicate: Callable) -> List[Any]:
    """Elements for which predicate(element) is falsy"""
    require_callable(predicate, "predicate")
    return select(collection, lambda item: not predicate(item))


def dedupe(sequence: Sequence) -> List[Any]:
    """First occurrence of each distinct value, in original order"""
    require_sequence(sequence)
    results = []

    def _add(item, *_):
        if index_of(results, item) == -1:
            results.append(item)

    each(sequence, _add)
    return results


# --------- transformation ----------
def transform(collection: Collection, callback: Callable) -> List[Any]:
    """Collect callback(value, key_or_index, collection) for every element into a list"""
    require_callable(callback)
    results = []
    each(collection, lambda value, key, coll: results.append(callback(value, key, coll)))
    return results


def pluck(collection: Collection, key: Any) -> List[Any]:
    """Value stored under key in each element"""
    return transform(collection, lambda item, *_: item[key])


# --------- reductions ----------
def accumulate(collection: Collection, iterator: Callable, seed: Any = _MISSING):
    """
    Fold the collection left to right with iterator(accumulator, element).

    With a seed, every element is folded into it. Without one, the first
    visited element becomes the accumulator and is not passed to iterator,
    so a single-element collection comes back as-is. The collection itself
    is never modified.
    """
    shape = collection_shape(collection)
    require_callable(iterator, "iterator")

    if shape is CollectionShape.SEQUENCE:
        items = iter(collection)
    else:
        items = (collection[key] for key in list(collection.keys()))

    if seed is _MISSING:
        try:
            accumulator = next(items)
        except StopIteration:
            raise EmptyCollectionError("accumulate() of an empty collection with no seed") from None
    else:
        accumulator = seed

    for item in items:
        accumulator = iterator(accumulator, item)
    return accumulator


def contains(collection: Collection, target: Any) -> bool:
    """True if any element is strictly equal to target"""
    def _found(was_found, item):
        if was_found:
            return True
        return strict_equals(item, target)

    return accumulate(collection, _found, False)


def every(collection: Collection, predicate: Callable = None) -> bool:
    """True if predicate holds for all elements (vacuously true when empty)"""
    if predicate is None:
        predicate = identity
    require_callable(predicate, "predicate")
    return accumulate(collection, lambda passed, item: passed and bool(predicate(item)), True)


def some(collection: Collection, predicate: Callable = None) -> bool:
    """True if predicate holds for at least one element (false when empty)"""
    if predicate is None:
        predicate = identity
    require_callable(predicate, "predicate")
    return not every(collection, lambda item: not predicate(item))
