# streamstats

Online statistics computed one observation at a time, without keeping the
whole stream in memory. The heart of the package is a `Core` that tracks
the means and joint centralised power sums of a multivariate stream, using
numerically stable update formulas. A core can cover the whole stream seen
so far (a window of `0`), only the most recent `window` observations, or
weight observations with an exponential decay.

## Modules

- `streamstats.joint.core`: `Core`, the `CoreWrapper` interface and
  `init_core`, which builds a `Core` from a wrapper's configuration and
  attaches it.
- `streamstats.joint.config`: `CoreConfig` (fields `sums`, `window`, `vars`,
  `decay`) with `validate_config`, `set_config_defaults`, `merge_configs`
  and `simplify_sums`.
- `streamstats.joint.tuple`: helpers for exponent tuples: `abs_sum`,
  `tuple_hash`, `sub`, `multinom`, `power` and `iter_tuples`.
- `streamstats.aggregate`: `SimpleAggregateMetric` and
  `SimpleJointAggregateMetric`, which push to several metrics at once and
  report their values keyed by each metric's string form.
- `streamstats.metric`: the abstract interfaces `Metric`, `SimpleMetric`,
  `AggregateMetric`, `JointMetric`, `SimpleJointMetric` and
  `JointAggregateMetric`.
- `streamstats.errors`: `StreamError` and `MultiError`.

## Installation

```
pip install .
```

## Usage

A core tracking everything needed for a correlation between two variables:

```python
import math

from streamstats.joint.config import CoreConfig
from streamstats.joint.core import Core

core = Core(CoreConfig(sums=[(1, 1), (2, 0), (0, 2)], window=0))
for x in (1.0, 2.0, 3.0):
    core.push(x, 2 * x)

print(core.count())    # 3
print(core.mean(0))    # about 2.0
cov = core.sum(1, 1) / (core.count() - 1)
corr = core.sum(1, 1) / math.sqrt(core.sum(2, 0) * core.sum(0, 2))
```

Every tuple that is elementwise less than or equal to a configured tuple is
tracked as well, so `core.sum(1, 0)` is also available above. A rolling
window is set with `window=n`; exponential weighting with `window=0` and
`decay` in `(0, 1)`.

`Core.push`, `count`, `mean`, `sum` and `clear` take the core's lock; the
`unsafe_*` variants do not, for use inside `with core.locked():` or between
`core.lock()` and `core.unlock()`.

Your own metric can describe the core it needs by implementing
`CoreWrapper` and be set up with `init_core`:

```python
from streamstats.joint.config import CoreConfig
from streamstats.joint.core import CoreWrapper, init_core


class Covariance(CoreWrapper):
    def __init__(self, window):
        self.window = window
        self.core = None

    def set_core(self, core):
        self.core = core

    def config(self):
        return CoreConfig(sums=[(1, 1)], window=self.window)


cov = Covariance(5)
init_core(cov)
cov.core.push(1.0, 3.0)
```

Several configs can be combined with `merge_configs`, which raises if
their windows, variable counts or decays disagree and drops duplicate or
dominated tuples.

Aggregating several metrics that implement `SimpleMetric`:

```python
from streamstats.aggregate import SimpleAggregateMetric
from streamstats.metric import SimpleMetric


class Last(SimpleMetric):
    def __init__(self):
        self.last = None

    def push(self, x):
        self.last = x

    def value(self):
        return self.last

    def clear(self):
        self.last = None

    def __str__(self):
        return "last"


agg = SimpleAggregateMetric(Last())
agg.push(4.0)
print(agg.values())  # {'last': 4.0}
```

## Errors

Invalid configurations, pushing the wrong number of values, asking for a
mean or sum before any value has been seen, or asking for an untracked sum
raise `streamstats.errors.StreamError`. Aggregates gather the failures of
their members into a single `streamstats.errors.MultiError`.

## What this package does not do

It offers no ready-made correlation, covariance, autocorrelation or
minimum/maximum metrics; those are computed from a `Core` as shown above.
It has no command-line program.

## Running the tests

```
pip install ".[test]"
pytest
```