import os
import sys

import pytest

# Ensure project root is on sys.path so 'app', 'config', and 'src' import correctly
_TESTS_DIR = os.path.dirname(__file__)
_ROOT_DIR = os.path.abspath(os.path.join(_TESTS_DIR, os.pardir))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)

from tests.support import stubs as test_stubs


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep real Pinata credentials from leaking into tests."""
    monkeypatch.delenv("PINATA_API_KEY", raising=False)
    monkeypatch.delenv("PINATA_SECRET_API_KEY", raising=False)
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "http://localhost:3000")
    yield


@pytest.fixture
def clock():
    return test_stubs.StepClock()


@pytest.fixture
def state(clock):
    from src.core import LedgerState

    return LedgerState(clock=clock)


@pytest.fixture
def projects(state):
    from src.domain.projects import ProjectStore

    return ProjectStore(state)


@pytest.fixture
def ledger(state):
    from src.domain.marketplace import MarketplaceLedger

    return MarketplaceLedger(state)


@pytest.fixture
def queries(state):
    from src.domain.marketplace import MarketplaceQueries

    return MarketplaceQueries(state)


@pytest.fixture
def pinning_stub():
    return test_stubs.PinningClientStub()


@pytest.fixture
def app(state, pinning_stub):
    import app as app_module

    # Pin settings that other tests may have reloaded from the environment
    overrides = {
        "pinata_api_key": None,
        "pinata_secret_api_key": None,
        "max_upload_bytes": 1024 * 1024,
        "readiness_max_nfts": 0,
    }
    application = app_module.create_app(state=state, pinning_client=pinning_stub, settings_overrides=overrides)
    application.config['TESTING'] = True
    yield application


@pytest.fixture
def app_context(app):
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()
