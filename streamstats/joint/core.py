"""Core bookkeeping of means and joint centralized power sums for a stream."""

import threading
from abc import ABC, abstractmethod
from collections import deque
from contextlib import contextmanager

from streamstats.errors import StreamError
from streamstats.joint.config import set_config_defaults, validate_config
from streamstats.joint.tuple import abs_sum, iter_tuples, multinom, power, sub


def _sign(k):
    """Return (-1) ** k."""
    return -1 if k % 2 else 1


def _format_ints(xs):
    return "[" + " ".join(str(x) for x in xs) + "]"


class CoreWrapper(ABC):
    """Something that wraps a Core and describes the Core it needs."""

    @abstractmethod
    def set_core(self, core):
        """Attach the Core to the wrapper."""

    @abstractmethod
    def config(self):
        """Return the CoreConfig the wrapper needs."""


def init_core(wrapper):
    """Build a Core from the wrapper's config and attach it to the wrapper."""
    try:
        core = Core(wrapper.config())
    except StreamError as exc:
        raise StreamError(f"error creating Core: {exc}") from exc
    wrapper.set_core(core)


class Core:
    """Tracks means and joint centralized power sums of a multivariate stream.

    Updates follow the numerically stable online formulas of Pebay,
    Terriberry, Kolla and Bennett (2016) for multivariate central moments,
    optionally over a rolling window or with exponential decay.
    """

    def __init__(self, config):
        config = set_config_defaults(config)
        try:
            validate_config(config)
        except StreamError as exc:
            raise StreamError(f"error validating config: {exc}") from exc

        n_vars = config.vars if config.vars is not None else len(config.sums[0])

        self._window = config.window
        self._decay = config.decay
        self._tuples = list(config.sums)
        self._means = [0.0] * n_vars
        self._sums = {}
        for tuple_ in self._tuples:
            for lower in iter_tuples(tuple_):
                self._sums[lower] = 0.0
        self._new_sums = dict(self._sums)
        self._count = 0
        self._queue = deque()
        self._lock = threading.RLock()

    @property
    def window(self):
        """Size of the rolling window, 0 for a global core."""
        return self._window

    @property
    def decay(self):
        """Exponential decay rate, or None when no decay is applied."""
        return self._decay

    @property
    def tuples(self):
        """The exponent tuples this core was configured with."""
        return list(self._tuples)

    @property
    def means(self):
        """Current means of each variable."""
        return list(self._means)

    @property
    def sums(self):
        """Mapping of every tracked exponent tuple to its current power sum."""
        return dict(self._sums)

    def lock(self):
        """Acquire the core's lock."""
        self._lock.acquire()

    def unlock(self):
        """Release the core's lock."""
        self._lock.release()

    @contextmanager
    def locked(self):
        """Hold the core's lock for the duration of a ``with`` block."""
        with self._lock:
            yield self

    def push(self, *args):
        """Consume a new joint observation."""
        with self._lock:
            self.unsafe_push(*args)

    def unsafe_push(self, *args):
        """Consume a new joint observation without taking the lock."""
        if len(args) != len(self._means):
            raise StreamError(
                f"tried to push {len(args)} values when core is tracking "
                f"{len(self._means)} variables"
            )
        xs = [float(x) for x in args]

        if self._window != 0:
            if len(self._queue) == self._window:
                self._remove(self._queue.popleft())
            self._queue.append(xs)

        if self._decay is None:
            self._add(xs)
        else:
            self._add_decay(xs)

    def _next_sum(self, a, delta, keep, own, cross, lower):
        """Compute the updated power sum for exponent tuple ``a``."""
        total = 0.0
        for b in iter_tuples(a):
            degree = abs_sum(b)
            delta_pow = power(delta, b)
            if degree == 0:
                total += keep * self._sums[a]
            elif b == a:
                total += own(degree) * delta_pow
            else:
                total += (
                    multinom(a, b) * cross(degree) * delta_pow * lower[sub(a, b)]
                )
        return total

    def _add(self, xs):
        self._count += 1
        n = float(self._count)

        delta = [x - m for x, m in zip(xs, self._means)]
        self._means = [m + d / n for m, d in zip(self._means, delta)]

        def own(p):
            return (n - 1) / n**p * ((n - 1) ** (p - 1) + _sign(p))

        def cross(p):
            return _sign(p) / n**p

        for tuple_ in self._tuples:
            for a in iter_tuples(tuple_, reverse=True):
                self._new_sums[a] = self._next_sum(
                    a, delta, 1.0, own, cross, self._sums
                )
        self._sums.update(self._new_sums)

    def _add_decay(self, xs):
        self._count += 1
        decay = 1.0 if self._count == 1 else self._decay

        delta = [x - m for x, m in zip(xs, self._means)]
        self._means = [m + decay * d for m, d in zip(self._means, delta)]

        def own(p):
            return (1 - decay) * (-decay) ** p + decay * (1 - decay) ** p

        def cross(p):
            return _sign(p) * decay**p * (1 - decay)

        for tuple_ in self._tuples:
            for a in iter_tuples(tuple_, reverse=True):
                self._new_sums[a] = self._next_sum(
                    a, delta, 1 - decay, own, cross, self._sums
                )
        self._sums.update(self._new_sums)

    def _remove(self, xs):
        """Undo the effect of adding ``xs``; reset everything when empty."""
        self._count -= 1
        if self._count <= 0:
            self._reset_stats()
            return

        n = float(self._count)
        self._means = [m - (x - m) / n for x, m in zip(xs, self._means)]
        delta = [x - m for x, m in zip(xs, self._means)]

        def own(p):
            return -(n / (n + 1) ** p * (n ** (p - 1) + _sign(p)))

        def cross(p):
            return -_sign(p) / (n + 1) ** p

        for tuple_ in self._tuples:
            for a in iter_tuples(tuple_):
                self._new_sums[a] = self._next_sum(
                    a, delta, 1.0, own, cross, self._new_sums
                )
            self._sums.update(self._new_sums)

    def _reset_stats(self):
        self._means = [0.0] * len(self._means)
        for key in self._sums:
            self._sums[key] = 0.0
        for key in self._new_sums:
            self._new_sums[key] = 0.0

    def count(self):
        """Return the number of observations currently tracked."""
        with self._lock:
            return self.unsafe_count()

    def unsafe_count(self):
        """Return the observation count without taking the lock."""
        return self._count

    def mean(self, i):
        """Return the mean of variable ``i``."""
        with self._lock:
            return self.unsafe_mean(i)

    def unsafe_mean(self, i):
        """Return the mean of variable ``i`` without taking the lock."""
        if self._count == 0:
            raise StreamError("no values seen yet")
        if i < 0 or i >= len(self._means):
            raise StreamError(f"{i} is not a tracked variable")
        return self._means[i]

    def sum(self, *args):
        """Return the joint centralized power sum for the given exponents."""
        with self._lock:
            return self.unsafe_sum(*args)

    def unsafe_sum(self, *args):
        """Return a joint centralized power sum without taking the lock."""
        if self._count == 0:
            raise StreamError("no values seen yet")
        key = tuple(args)
        if key not in self._sums:
            raise StreamError(f"{_format_ints(args)} is not a tracked power sum")
        return self._sums[key]

    def clear(self):
        """Reset all tracked statistics."""
        with self._lock:
            self.unsafe_clear()

    def unsafe_clear(self):
        """Reset all tracked statistics without taking the lock."""
        self._reset_stats()
        self._count = 0
        self._queue.clear()