import pytest

from drafter.core.config import settings
from drafter.services.llm import ModelGateway
from tests.fakes import FakeClient

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def fast_retries(monkeypatch):
    """Keep retry backoff at zero so tests never wait."""
    monkeypatch.setattr(settings, "llm_retry_base_delay", 0.0)
    monkeypatch.setattr(settings, "llm_retry_jitter", 0.0)
    monkeypatch.setattr(settings, "llm_max_attempts", 3)


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def completions(fake_client):
    return fake_client.completions


@pytest.fixture
def gateway(fake_client):
    return ModelGateway(fake_client, model_id="test-model", temperature=0.0)


class PartialRecorder(list):
    """Callable list used as an on_partial callback."""

    def __call__(self, text: str) -> None:
        self.append(text)


@pytest.fixture
def partials():
    return PartialRecorder()
