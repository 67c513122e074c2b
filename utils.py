"""Shared plumbing: logging setup, error taxonomy, argument checks, shape detection."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Callable

from models import CollectionShape, get_settings

# Configure logging
logging.basicConfig(level=get_settings().log_level)
logger = logging.getLogger(__name__)


class UnderbarError(Exception):
    """Base class for every error raised by this library."""
    pass


class InvalidArgumentError(UnderbarError, TypeError):
    """Raised when a required collection or function argument is missing or of the wrong kind."""
    pass


class EmptyCollectionError(InvalidArgumentError):
    """Raised when folding an empty collection without a seed."""
    pass


class SchedulingError(UnderbarError, RuntimeError):
    """Raised when a deferred call cannot be handed to any scheduler."""
    pass


def strict_equals(a: Any, b: Any) -> bool:
    """Equality without coercion: 1, 1.0 and True are all different."""
    return type(a) is type(b) and a == b


def collection_shape(collection: Any) -> CollectionShape:
    """Classify a collection, raising InvalidArgumentError for anything else"""
    if isinstance(collection, Mapping):
        return CollectionShape.MAPPING
    if isinstance(collection, Sequence):
        return CollectionShape.SEQUENCE
    logger.debug(f"Rejected collection of type {type(collection).__name__}")
    raise InvalidArgumentError(
        f"Expected a sequence or a mapping, got {type(collection).__name__}"
    )


def require_sequence(sequence: Any, name: str = "sequence"):
    """Ensure an argument is an ordered sequence (mappings are rejected)"""
    if isinstance(sequence, Mapping) or not isinstance(sequence, Sequence):
        logger.debug(f"Rejected {name} of type {type(sequence).__name__}")
        raise InvalidArgumentError(
            f"{name} must be a sequence, got {type(sequence).__name__}"
        )


def require_callable(fn: Any, name: str = "callback") -> Callable:
    """Ensure an argument can be called; returns it unchanged"""
    if not callable(fn):
        logger.debug(f"Rejected non-callable {name}: {fn!r}")
        raise InvalidArgumentError(
            f"{name} must be callable, got {type(fn).__name__}"
        )
    return fn


def describe(fn: Callable) -> str:
    """Best-effort readable name for a callable, used in log lines"""
    return getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or repr(fn)
