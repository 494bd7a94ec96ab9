"""Root pytest configuration for all tests."""

import pytest

from coda_pages.config.models import ExportSettings, PackConfig
from coda_pages.connection.endpoints import SystemEndpointResolver
from coda_pages.formulas.context import InvocationContext
from tests.fixtures.sample_coda_responses import API_BASE, DOC_ID
from tests.helpers.fake_api import FakeAPI


@pytest.fixture(autouse=True)
def no_token_env(monkeypatch):
    """Keep real tokens (and a developer's .env) out of unit tests."""
    monkeypatch.delenv("CODA_API_TOKEN", raising=False)
    monkeypatch.delenv("CODA_USER_TOKEN", raising=False)
    monkeypatch.delenv("CODA_DOC_ID", raising=False)


@pytest.fixture
def fake_api():
    return FakeAPI()


@pytest.fixture
def fast_config():
    """Config whose export polling never sleeps for long."""
    return PackConfig(
        api_base_url=API_BASE,
        export=ExportSettings(poll_interval=0.0, max_attempts=5),
    )


@pytest.fixture
def invocation_context(fake_api, fast_config):
    return InvocationContext(
        api=fake_api,
        config=fast_config,
        endpoint_resolver=SystemEndpointResolver(API_BASE),
        doc_id=DOC_ID,
    )
