"""Exponent tuples used to describe multivariate moments.

A tuple of non-negative integers (m_1, ..., m_k) stands for the joint
centralized power sum of (x_1 - mu_1)^m_1 * ... * (x_k - mu_k)^m_k.
"""

import itertools
import math

from streamstats.errors import StreamError

_MASK = (1 << 64) - 1


def abs_sum(m):
    """Return the total degree of the tuple."""
    return sum(m)


def tuple_hash(m):
    """Return a 64-bit hash of the tuple (collision-free for entries below 31)."""
    result = 0
    for k in m:
        result = (31 * result + k) & _MASK
    return result


def _check_lengths(m, n):
    if len(m) != len(n):
        raise StreamError(f"Tuples have different lengths: {len(m)} != {len(n)}")


def sub(m, n):
    """Return the elementwise difference m - n."""
    _check_lengths(m, n)
    return tuple(a - b for a, b in zip(m, n))


def multinom(m, n):
    """Return the product of binomial coefficients C(m_i, n_i)."""
    _check_lengths(m, n)
    return math.prod(math.comb(a, b) for a, b in zip(m, n))


def power(xs, n):
    """Return the product of xs_i ** n_i."""
    if len(xs) != len(n):
        raise StreamError(
            "Cannot exponentiate slice and Tuple with different lengths: "
            f"{len(xs)} != {len(n)}"
        )
    return math.prod(float(x) ** k for x, k in zip(xs, n))


def iter_tuples(tuple_, reverse=False):
    """Yield every tuple that is elementwise <= ``tuple_``.

    The last position varies slowest and the first fastest; with ``reverse``
    every position counts down instead of up.
    """
    ranges = [
        range(k, -1, -1) if reverse else range(k + 1) for k in reversed(tuple_)
    ]
    for combo in itertools.product(*ranges):
        yield combo[::-1]