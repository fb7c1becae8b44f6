"""
pytest fixtures that inject stablescout helpers into tests.

Enable in a conftest.py:

    pytest_plugins = ["stablescout.fixtures"]

The project must provide `page` and `playwright` fixtures (pytest-playwright
does, or define them yourself). Every test then gets its own ElementActions,
NavigationActions and ActionTrace bound to that page, and API tests get an
ApiClient whose request context is disposed on teardown.
"""

import pytest

from .actions import ElementActions
from .api import ApiClient, new_api_context
from .config import Timeouts, load_env_config
from .navigation import NavigationActions
from .trace import ActionTrace


@pytest.fixture(scope="session")
def env_config():
    """Deployment settings from the environment and .env."""
    return load_env_config()


@pytest.fixture(scope="session")
def timeouts():
    """Interaction time budgets from STABLESCOUT_* variables."""
    return Timeouts.from_env()


@pytest.fixture
def action_trace():
    """Fresh trace per test."""
    return ActionTrace()


@pytest.fixture
def element_actions(page, timeouts, action_trace):
    return ElementActions(page, timeouts=timeouts, trace=action_trace)


@pytest.fixture
def navigation(page, env_config, timeouts, action_trace):
    return NavigationActions(
        page, base_url=env_config.base_url, timeouts=timeouts, trace=action_trace
    )


@pytest.fixture
def api_context(playwright, env_config, timeouts):
    """APIRequestContext for the base URL, disposed after the test."""
    context = new_api_context(playwright, env_config, timeouts)
    yield context
    context.dispose()


@pytest.fixture
def api_client(api_context, timeouts, action_trace):
    return ApiClient(api_context, timeouts=timeouts, trace=action_trace)
