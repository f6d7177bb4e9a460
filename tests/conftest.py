"""
Minimal Conftest.
"""

import pytest

from tests.support.builders import make_series


@pytest.fixture(autouse=True)
def reset_run_context():
    """Reset run context before and after each test to prevent pollution."""
    from ta_engine.logging.correlation import set_run_fields, set_run_id

    set_run_id("")
    set_run_fields({})

    yield

    set_run_id("")
    set_run_fields({})


@pytest.fixture(autouse=True)
def clear_settings_cache():
    from ta_engine.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def tema_closes() -> list[float]:
    return [
        0.73, 0.72, 0.86, 0.72, 0.62, 0.76, 0.84, 0.69, 0.65, 0.71, 0.53, 0.73, 0.77, 0.67, 0.68,
    ]


@pytest.fixture
def spike_series():
    """Flat at 10, spike to 20 for two bars, drop to 5, then recover to 10."""
    return make_series([10, 10, 10, 10, 10, 20, 20, 5, 5, 10, 10, 10], name="spike")
