"""Interfaces shared by every metric that consumes values from a stream."""

from abc import ABC, abstractmethod


class Metric(ABC):
    """A metric that consumes single numeric values, one at a time."""

    @abstractmethod
    def push(self, x):
        """Consume a new value."""

    @abstractmethod
    def clear(self):
        """Reset the metric to its initial state."""


class SimpleMetric(Metric):
    """A metric that reports a single value."""

    @abstractmethod
    def value(self):
        """Return the current value of the metric."""


class AggregateMetric(ABC):
    """A metric tracking several univariate single-value metrics at once."""

    @abstractmethod
    def push(self, x):
        """Consume a new value."""

    @abstractmethod
    def values(self):
        """Return a mapping of metric names to their current values."""

    @abstractmethod
    def clear(self):
        """Reset every tracked metric."""


class JointMetric(ABC):
    """A metric that consumes several values at a time (joint statistics)."""

    @abstractmethod
    def push(self, *args):
        """Consume a new joint observation."""

    @abstractmethod
    def clear(self):
        """Reset the metric to its initial state."""


class SimpleJointMetric(JointMetric):
    """A joint metric that reports a single value."""

    @abstractmethod
    def value(self):
        """Return the current value of the metric."""


class JointAggregateMetric(ABC):
    """A metric tracking several multivariate single-value metrics at once."""

    @abstractmethod
    def push(self, *args):
        """Consume a new joint observation."""

    @abstractmethod
    def values(self):
        """Return a mapping of metric names to their current values."""

    @abstractmethod
    def clear(self):
        """Reset every tracked metric."""