"""
Pytest configuration and fixtures for the Foody API suite
Runs against the in-process fake service unless --live is given
"""

import pytest
import pytest_asyncio

from foody_api.config import get_config
from foody_api.context import FoodyTestContext
from foody_api.data_factory import DataFactory
from foody_api.rest_client import AuthenticationError, FoodyRestClient
from tests.fake_foody import FakeFoodyService

food_context_key = pytest.StashKey[FoodyTestContext]()

# Cases that prove the service is up and usable
SMOKE_CASES = ["create_food_with_required_fields", "get_all_foods"]


def pytest_addoption(parser):
    """Add custom command line options"""
    parser.addoption(
        "--live",
        action="store_true",
        default=False,
        help="Run the e2e sequence against the remote Foody server (or set FOODY_LIVE=1)"
    )


def pytest_collection_modifyitems(config, items):
    """Add markers based on test location and names"""
    for item in items:
        is_e2e = "e2e" in item.nodeid.split("::")[0]
        if is_e2e:
            item.add_marker(pytest.mark.e2e)

        name = item.name.lower()
        if any(word in name for word in ["invalid", "non_existing"]):
            item.add_marker(pytest.mark.negative)
        elif any(word in name for word in ["create", "edit", "delete", "get_all"]):
            item.add_marker(pytest.mark.crud)

        if is_e2e and any(word in name for word in SMOKE_CASES):
            item.add_marker(pytest.mark.smoke)


# === SESSION SETUP ===

@pytest.fixture(scope="session")
def foody_config():
    return get_config()


@pytest.fixture(scope="session")
def live_mode(request, foody_config) -> bool:
    return request.config.getoption("--live") or foody_config.live


@pytest.fixture(scope="session")
def session_fake_service(foody_config):
    return FakeFoodyService(foody_config.username, foody_config.password)


@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def foody_client(foody_config, live_mode, session_fake_service):
    """Authenticated client shared by the whole ordered sequence"""
    transport = None if live_mode else session_fake_service.transport()
    target = foody_config.base_url if live_mode else "fake Foody service"
    print(f"\n🚀 Authenticating against {target}...")

    client = FoodyRestClient(foody_config, transport=transport)
    try:
        await client.open()
    except AuthenticationError as e:
        pytest.exit(f"❌ Authentication failed, aborting suite: {e}", returncode=pytest.ExitCode.INTERRUPTED)

    print(f"✅ Access token obtained: {client.token.masked()}")
    yield client

    await client.close()


@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def food_context(request, foody_client, foody_config):
    """Shared state for the ordered create → edit → list → delete cases"""
    ctx = FoodyTestContext(client=foody_client, data_factory=DataFactory(foody_config))
    request.config.stash[food_context_key] = ctx
    yield ctx

    removed = await ctx.cleanup_created_foods()
    if removed:
        print(f"\n🗑️ Removed {len(removed)} leftover food(s): {', '.join(removed)}")


# === REPORTING ===

def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """Print call timings of the ordered sequence"""
    ctx = config.stash.get(food_context_key, None)
    if ctx is None or not ctx.records:
        return

    terminalreporter.section("Foody API suite timings")
    for line in ctx.summary_lines():
        terminalreporter.write_line(line)
