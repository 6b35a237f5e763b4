import pytest

from webhandle.config import AutomationConfig, get_config, set_config


@pytest.fixture(autouse=True)
def default_config():
    """Run every test with default settings and restore the previous ones afterwards."""
    previous = get_config()
    set_config(AutomationConfig())
    yield
    set_config(previous)
