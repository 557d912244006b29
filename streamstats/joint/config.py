"""Configuration of the power sums and window tracked by a joint core."""

import dataclasses
from dataclasses import dataclass

from streamstats.errors import StreamError


def _format_tuple(t):
    return "[" + " ".join(str(k) for k in t) + "]"


@dataclass
class CoreConfig:
    """Options for building a joint Core.

    ``sums`` lists exponent tuples to track (each of length > 1),
    ``window`` must be non-negative (and 0 when ``decay`` is set),
    ``vars`` must be > 1 or inferable from ``sums``, and ``decay``,
    when given, must lie in (0, 1).
    """

    sums: list | None = None
    window: int | None = None
    vars: int | None = None
    decay: float | None = None

    def __post_init__(self):
        if self.sums is not None:
            self.sums = [tuple(t) for t in self.sums]


def merge_configs(*args):
    """Merge several configs into one, checking that they agree."""
    if not args:
        raise StreamError("no configs available to merge")
    if len(args) == 1:
        return args[0]

    sums = []
    window = None
    vars_ = None
    decay = None
    for config in args:
        if config.sums is not None:
            sums.extend(config.sums)

        if config.window is not None:
            if window is None:
                window = config.window
            elif window != config.window:
                raise StreamError("configs have differing windows")

        if config.vars is not None:
            if vars_ is None:
                vars_ = config.vars
            elif vars_ != config.vars:
                raise StreamError("configs have differing vars")

        if config.decay is not None:
            if decay is None:
                decay = config.decay
            elif decay != config.decay:
                raise StreamError("configs have differing decays")

    return CoreConfig(
        sums=simplify_sums(sums), window=window, vars=vars_, decay=decay
    )


def simplify_sums(sums):
    """Drop duplicates and tuples dominated by an earlier tuple.

    A tuple dominated elementwise by another is tracked automatically,
    so it need not be listed.
    """
    seen = set()
    result = []
    for i, m in enumerate(sums):
        m = tuple(m)
        if m in seen:
            continue
        if any(all(a <= b for a, b in zip(m, n)) for n in sums[:i]):
            continue
        seen.add(m)
        result.append(m)
    return result


def _validate_tuple(tuple_, config):
    if len(tuple_) != len(config.sums[0]):
        raise StreamError("sums have differing length")
    if len(tuple_) < 2:
        raise StreamError(
            f"config has a Tuple ({_format_tuple(tuple_)}) "
            f"with length {len(tuple_)} < 2"
        )
    if config.vars is not None and len(tuple_) != config.vars:
        raise StreamError(
            f"config has a Tuple ({_format_tuple(tuple_)}) with length "
            f"{len(tuple_)} but Vars = {config.vars}"
        )
    for k in tuple_:
        # 0 is allowed: it lets a tuple ignore a variable entirely.
        if k < 0:
            raise StreamError(f"config has a Tuple with a negative exponent of {k}")
    if sum(tuple_) == 0:
        raise StreamError(
            "config has a Tuple that is all 0s (i.e. skips all variables)"
        )


def validate_config(config):
    """Raise StreamError if the config is not usable for a Core."""
    if config.window is None:
        raise StreamError("config Window is not set")
    if config.window < 0:
        raise StreamError(f"config has a negative window of {config.window}")

    if config.vars is not None and config.vars < 2:
        raise StreamError(f"config has less than 2 vars: {config.vars} < 2")

    if config.decay is not None:
        if config.decay <= 0 or config.decay >= 1:
            raise StreamError(
                f"config has a decay of {config.decay:f}, which is not in (0, 1)"
            )
        if config.window > 0:
            raise StreamError("config cannot have Decay set with a nonzero window")

    sums = config.sums or []
    for tuple_ in sums:
        _validate_tuple(tuple_, config)

    if config.vars is None and not sums:
        raise StreamError(
            "config Vars is not set and cannot be inferred from empty Sums"
        )


def set_config_defaults(config):
    """Return a copy of the config with unset fields filled by defaults."""
    if config.sums is None:
        return dataclasses.replace(config, sums=[])
    return dataclasses.replace(config)