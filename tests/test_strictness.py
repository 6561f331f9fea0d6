import warnings

import pytest

from pcapng_writer import strictness
from pcapng_writer.exceptions import PcapngStrictnessError, PcapngStrictnessWarning
from pcapng_writer.strictness import Strictness, get_strictness, set_strictness


def test_default_is_forbid():
    assert get_strictness() is Strictness.FORBID

    with pytest.raises(PcapngStrictnessError, match="bad thing"):
        strictness.problem("bad thing")
    assert strictness.should_fix() is False


@pytest.mark.parametrize("level", [Strictness.WARN, Strictness.FIX])
def test_problem_warns(level):
    set_strictness(level)
    with pytest.warns(PcapngStrictnessWarning, match="bad thing"):
        strictness.problem("bad thing")
    assert strictness.should_fix() is (level is Strictness.FIX)


def test_none_is_silent():
    set_strictness(Strictness.NONE)
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        strictness.problem("bad thing")
        strictness.warn("odd thing")


def test_warn_never_raises():
    with pytest.warns(PcapngStrictnessWarning, match="odd thing"):
        strictness.warn("odd thing")


def test_set_strictness_type():
    with pytest.raises(TypeError):
        set_strictness(3)
    assert get_strictness() is Strictness.FORBID


def test_error_mentions_writing():
    with pytest.raises(PcapngStrictnessError, match="^Refusing to write: bad thing$"):
        strictness.problem("bad thing")
