import pytest

from pcapng_writer.strictness import Strictness, set_strictness


@pytest.fixture(autouse=True)
def reset_strictness():
    # Strictness is global; don't let a test leak its level into the next
    set_strictness(Strictness.FORBID)
    yield
    set_strictness(Strictness.FORBID)
