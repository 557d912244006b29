import threading

import pytest

from streamstats.errors import StreamError
from streamstats.joint.config import CoreConfig
from streamstats.joint.core import Core, CoreWrapper, init_core
from streamstats.joint.tuple import iter_tuples


class _Wrapper(CoreWrapper):
    def __init__(self, window=None, decay=None):
        self.core = None
        self.window = window
        self.decay = decay

    def set_core(self, core):
        self.core = core

    def config(self):
        return CoreConfig(sums=[(2, 2)], window=self.window, decay=self.decay)


class _InvalidWrapper(CoreWrapper):
    def __init__(self):
        self.core_set = False

    def set_core(self, core):
        self.core_set = True

    def config(self):
        return CoreConfig(vars=-1)


def _approx(x):
    return pytest.approx(x, rel=1e-6, abs=1e-6)


def _window_wrapper():
    wrapper = _Wrapper(window=3)
    init_core(wrapper)
    for x in [1, 2, 3, 4, 8]:
        wrapper.core.push(x, x * x)
    return wrapper


WINDOW_SUMS = {
    (0, 0): 0.0,
    (0, 1): 0.0,
    (0, 2): 5378.0 / 3.0,
    (1, 0): 0.0,
    (1, 1): 158.0,
    (1, 2): 7486.0 / 3.0,
    (2, 0): 14.0,
    (2, 1): 638.0 / 3.0,
    (2, 2): 112538.0 / 9.0,
}

DECAY_SUMS = {
    (0, 0): 0.0,
    (0, 1): 0.0,
    (0, 2): 594.8691,
    (1, 0): 0.0,
    (1, 1): 53.2413,
    (1, 2): 1064.876778,
    (2, 0): 4.7859,
    (2, 1): 93.336054,
    (2, 2): 4928.09302293,
}


def test_new_core_invalid_config():
    with pytest.raises(StreamError, match="error validating config"):
        Core(CoreConfig(vars=-1))


def test_new_core_valid_config():
    config = CoreConfig(sums=[(2, 2), (3, 1)], window=2)
    core = Core(config)
    assert core.window == 2
    assert core.tuples == [(2, 2), (3, 1)]
    assert core.means == [0.0, 0.0]
    assert core.count() == 0
    for tuple_ in config.sums:
        for lower in iter_tuples(tuple_):
            assert core.sums[lower] == 0.0


def test_new_core_valid_decay_config():
    config = CoreConfig(sums=[(2, 2), (3, 1)], window=0, decay=0.3)
    core = Core(config)
    assert core.window == 0
    assert core.tuples == [(2, 2), (3, 1)]
    assert core.means == [0.0, 0.0]
    assert core.decay == 0.3
    for tuple_ in config.sums:
        for lower in iter_tuples(tuple_):
            assert core.sums[lower] == 0.0


def test_init_invalid_config():
    wrapper = _InvalidWrapper()
    with pytest.raises(StreamError, match="error creating Core"):
        init_core(wrapper)
    assert wrapper.core_set is False


@pytest.mark.parametrize("window,decay", [(0, 0.3), (3, None)])
def test_init_valid_config(window, decay):
    wrapper = _Wrapper(window=window, decay=decay)
    init_core(wrapper)
    assert isinstance(wrapper.core, Core)
    assert wrapper.core.window == window


def test_push_updates_sums_without_decay():
    core = _window_wrapper().core
    assert core.means == [_approx(5.0), _approx(89.0 / 3.0)]
    sums = core.sums
    assert len(sums) == len(WINDOW_SUMS)
    for key, expected in WINDOW_SUMS.items():
        assert sums[key] == _approx(expected)


def test_push_updates_sums_with_decay():
    wrapper = _Wrapper(window=0, decay=0.3)
    init_core(wrapper)
    for x in [3, 4, 8]:
        wrapper.core.push(x, x * x)
    core = wrapper.core
    assert core.means == [_approx(4.71), _approx(26.97)]
    sums = core.sums
    assert len(sums) == len(DECAY_SUMS)
    for key, expected in DECAY_SUMS.items():
        assert sums[key] == _approx(expected)


def test_push_window_of_one_clears_stats():
    core = Core(CoreConfig(sums=[(2, 2)], window=1))
    core.push(1.0, 1.0)
    core.push(2.0, 2.0)
    sums = core.sums
    assert len(sums) == 9
    for value in sums.values():
        assert value == _approx(0.0)
    assert core.count() == 1


def test_push_wrong_number_of_values():
    wrapper = _Wrapper(window=3)
    init_core(wrapper)
    with pytest.raises(StreamError) as info:
        wrapper.core.push(3.0, 4.0, 5.0)
    assert "tried to push 3 values when core is tracking 2 variables" in str(
        info.value
    )


def test_clear():
    core = _window_wrapper().core
    core.clear()
    assert core.sums == {key: 0.0 for key in WINDOW_SUMS}
    assert core.means == [0.0, 0.0]
    assert core.count() == 0
    with pytest.raises(StreamError, match="no values seen yet"):
        core.sum(2, 0)


def test_count():
    assert _window_wrapper().core.count() == 3


def test_mean_success():
    assert _window_wrapper().core.mean(0) == _approx(5.0)


def test_mean_fails_if_no_values_seen():
    core = Core(CoreConfig(vars=2, window=0))
    with pytest.raises(StreamError) as info:
        core.mean(0)
    assert str(info.value) == "no values seen yet"


@pytest.mark.parametrize("index", [-1, 2])
def test_mean_fails_for_invalid_variable(index):
    core = _window_wrapper().core
    with pytest.raises(StreamError) as info:
        core.mean(index)
    assert str(info.value) == f"{index} is not a tracked variable"


def test_sum_success():
    core = _window_wrapper().core
    for tuple_ in iter_tuples((2, 2)):
        assert core.sum(*tuple_) == _approx(WINDOW_SUMS[tuple_])


def test_sum_fails_if_no_values_seen():
    core = Core(CoreConfig(vars=2, window=0))
    with pytest.raises(StreamError) as info:
        core.sum(2, 0)
    assert str(info.value) == "no values seen yet"


def test_sum_fails_for_untracked_sum():
    core = _window_wrapper().core
    with pytest.raises(StreamError) as info:
        core.sum(3, 2)
    assert str(info.value) == "[3 2] is not a tracked power sum"


def test_lock_blocks_writers():
    core = _window_wrapper().core
    errors = []

    def writer():
        try:
            with core.locked():
                core.unsafe_push(5.0, 25.0)
        except Exception as exc:  # pragma: no cover - surfaced below
            errors.append(exc)

    core.lock()
    thread = threading.Thread(target=writer)
    thread.start()
    thread.join(timeout=0.1)
    assert thread.is_alive()

    # Reading while holding the lock does not deadlock.
    assert core.sum(2, 0) == _approx(14.0)

    core.unlock()
    thread.join(timeout=5)
    assert not thread.is_alive()
    assert errors == []
    assert core.sum(2, 0) == _approx(26.0 / 3.0)