"""
Function adapters: wrap a callable and return a new one with different call semantics.

once() and memoize() close over private state owned by the returned
function; delay() hands a one-shot call to a scheduler; shuffle() builds a
random permutation without touching its input.
"""

import asyncio
import functools
import logging
import math
import numbers
import random
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Sequence

from models import DelayBackend, get_settings
from traversal import each
from utils import (
    InvalidArgumentError,
    SchedulingError,
    describe,
    require_callable,
    require_sequence,
)

logger = logging.getLogger(__name__)


# --------- call-count / cache adapters ----------
def once(fn: Callable) -> Callable:
    """
    Return a function that calls fn on its first invocation only.

    Every later call, whatever its arguments, returns the first result. If
    the first call raises, nothing is stored and the next call tries again.
    """
    require_callable(fn, "fn")
    fired = False
    result = None

    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        nonlocal fired, result
        if not fired:
            logger.debug(f"once: first call to {describe(fn)}")
            result = fn(*args, **kwargs)
            fired = True
        return result

    return wrapper


def memoize(fn: Callable) -> Callable:
    """
    Return a function that caches fn's result per argument list.

    The cache key is each positional argument's str() followed by the
    configured separator, then each keyword argument as ``name=value`` in
    name order, so only primitive arguments are told apart reliably. The
    first stored result for a key is kept for the lifetime of the wrapper.
    """
    require_callable(fn, "fn")
    separator = get_settings().memoize_key_separator
    cache = {}

    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        parts = []
        each(args, lambda arg, *_: parts.append(f"{arg}{separator}"))
        for name, value in sorted(kwargs.items()):
            parts.append(f"{name}={value}{separator}")
        key = "".join(parts)

        if key in cache:
            logger.debug(f"memoize: cache hit for {describe(fn)} key={key!r}")
            return cache[key]

        logger.debug(f"memoize: computing {describe(fn)} key={key!r}")
        result = fn(*args, **kwargs)
        cache[key] = result
        return result

    return wrapper


# --------- deferred invocation ----------
class Scheduler(ABC):
    """Runs a zero-argument thunk once, after at least the given number of seconds"""

    @abstractmethod
    def call_later(self, seconds: float, thunk: Callable[[], Any]) -> None:
        pass


class EventLoopScheduler(Scheduler):
    """
    Schedule on the running asyncio loop, falling back to a timer thread.

    The backend setting decides what happens: ``auto`` uses the running loop
    when there is one and a daemon timer thread otherwise, ``loop`` refuses to
    run without a loop, and ``thread`` always uses a timer thread.

    Only the loop path keeps the deferred call on the caller's thread. On a
    timer thread it runs concurrently with the caller, and the state inside
    once() and memoize() wrappers is not locked, so a thunk that touches an
    adapted function shared with the caller can race. Set the backend to
    ``loop`` to forbid the thread path.
    """

    def call_later(self, seconds: float, thunk: Callable[[], Any]) -> None:
        backend = get_settings().delay_backend

        if backend is not DelayBackend.THREAD:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                loop = None

            if loop is not None:
                loop.call_later(seconds, thunk)
                return

            if backend is DelayBackend.LOOP:
                raise SchedulingError("delay backend is 'loop' but no event loop is running")

        timer = threading.Timer(seconds, thunk)
        timer.daemon = True
        timer.start()


_scheduler: Scheduler = EventLoopScheduler()


def get_scheduler() -> Scheduler:
    return _scheduler


def set_scheduler(scheduler: Optional[Scheduler]) -> Scheduler:
    """Install the scheduler used by delay(); None restores the default. Returns the previous one."""
    global _scheduler
    previous = _scheduler
    _scheduler = scheduler if scheduler is not None else EventLoopScheduler()
    return previous


def delay(fn: Callable, wait_ms, *args) -> None:
    """
    Call fn(*args) once, after at least wait_ms milliseconds.

    Nothing is returned and there is no way to cancel. If the deferred call
    raises, the error is logged; it never reaches the caller of delay().
    Without a running event loop the default backend runs fn on a timer
    thread (see EventLoopScheduler).
    """
    require_callable(fn, "fn")
    if (isinstance(wait_ms, bool) or not isinstance(wait_ms, numbers.Real)
            or not math.isfinite(wait_ms) or wait_ms < 0):
        raise InvalidArgumentError(f"wait_ms must be a finite non-negative number, got {wait_ms!r}")

    def _run():
        try:
            fn(*args)
        except Exception:
            logger.exception(f"Delayed call to {describe(fn)} failed")

    logger.debug(f"delay: scheduling {describe(fn)} in {wait_ms} ms")
    _scheduler.call_later(wait_ms / 1000, _run)


# --------- randomized permutation ----------
def shuffle(sequence: Sequence, rng: Callable[[], float] = None) -> List[Any]:
    """
    Return a new list holding the elements of sequence in random order.

    Each step draws a uniform index over what is left of a working copy,
    moves that element to the output, and repeats until the copy is empty.
    rng must return floats in [0, 1); it defaults to random.random.
    """
    require_sequence(sequence)
    draw = require_callable(rng, "rng") if rng is not None else random.random

    working = list(sequence)
    shuffled = []
    while working:
        # Clamp so a draw of exactly 1.0 still lands on the last element
        index = min(int(draw() * len(working)), len(working) - 1)
        shuffled.append(working.pop(index))
    return shuffled
