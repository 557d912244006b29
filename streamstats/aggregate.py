"""Helpers for tracking several metrics at a time."""

import math
import threading

from streamstats.errors import MultiError
from streamstats.metric import AggregateMetric, JointAggregateMetric


def _format_float(x):
    x = float(x)
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "+Inf" if x > 0 else "-Inf"
    if x == 0 and math.copysign(1.0, x) < 0:
        return "-0"
    if x.is_integer() and abs(x) < 1e21:
        return str(int(x))
    return repr(x)


def _format_values(xs):
    return "[" + " ".join(_format_float(x) for x in xs) + "]"


def _collect_values(metrics):
    values = {}
    errors = []
    for metric in metrics:
        try:
            val = metric.value()
        except Exception as exc:
            errors.append(exc)
        else:
            values[str(metric)] = val
    if errors:
        raise MultiError("error retrieving values from metrics", errors)
    return values


class SimpleAggregateMetric(AggregateMetric):
    """Pushes each value to several univariate single-value metrics."""

    def __init__(self, *args):
        self._metrics = list(args)
        self._lock = threading.Lock()

    @property
    def metrics(self):
        """The wrapped metrics, in the order given."""
        return list(self._metrics)

    def push(self, x):
        """Push ``x`` to every metric; raise MultiError if any of them fail."""
        with self._lock:
            errors = []
            for metric in self._metrics:
                try:
                    metric.push(x)
                except Exception as exc:
                    errors.append(exc)
            if errors:
                raise MultiError(f"error pushing {x:f} to metrics", errors)

    def values(self):
        """Return a mapping of each metric's string form to its value."""
        with self._lock:
            return _collect_values(self._metrics)

    def clear(self):
        """Reset every metric."""
        with self._lock:
            for metric in self._metrics:
                metric.clear()


class SimpleJointAggregateMetric(JointAggregateMetric):
    """Pushes each observation to several multivariate single-value metrics."""

    def __init__(self, *args):
        self._metrics = list(args)
        self._lock = threading.Lock()

    @property
    def metrics(self):
        """The wrapped metrics, in the order given."""
        return list(self._metrics)

    def push(self, *args):
        """Push the observation to every metric; raise MultiError on failure."""
        with self._lock:
            errors = []
            for metric in self._metrics:
                try:
                    metric.push(*args)
                except Exception as exc:
                    errors.append(exc)
            if errors:
                raise MultiError(
                    f"error pushing {_format_values(args)} to metrics", errors
                )

    def values(self):
        """Return a mapping of each metric's string form to its value."""
        with self._lock:
            return _collect_values(self._metrics)

    def clear(self):
        """Reset every metric."""
        with self._lock:
            for metric in self._metrics:
                metric.clear()