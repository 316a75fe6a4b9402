# Fixtures shared across the suite live in tests/fixtures
from tests.fixtures.telegram_fixtures import (  # noqa: F401
    client,
    file_store,
    settings,
    stub_session,
    unconfigured_client,
)
