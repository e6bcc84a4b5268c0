import httpx
import pytest
from fastapi.testclient import TestClient

from saathi.core.config import get_settings
from saathi.core.deps import get_http_client, get_llm_client
from saathi.main import create_app
from saathi.services.llm import LLMError


@pytest.fixture(scope="session")
def test_client():
    """
    Crée un TestClient sans clé LLM (générateurs locaux),
    et force quelques variables d'env pour les tests.
    """
    mp = pytest.MonkeyPatch()
    mp.setenv("APP_ENV", "test")
    mp.setenv("APP_NAME", "Project Saathi API (tests)")
    mp.setenv("OPENAI_API_KEY", "")
    mp.setenv("LLM_FALLBACK", "true")
    mp.setenv("MAX_UPLOAD_MB", "2")  # limite faible pour tests
    mp.setenv("CORS_ORIGINS", "http://localhost")

    # IMPORTANT: vider le cache des settings pour prendre en compte les env
    get_settings.cache_clear()

    app = create_app()
    client = TestClient(app)
    yield client

    mp.undo()
    get_settings.cache_clear()


class FakeLLM:
    """
    Remplace LLMClient : renvoie `reply` (ou lève LLMError) et garde les prompts reçus.
    """

    enabled = True

    def __init__(self):
        self.reply = "ok"
        self.fail = False
        self.prompts = []
        self.systems = []

    def complete(self, prompt, system=None, max_tokens=None):
        self.prompts.append(prompt)
        self.systems.append(system)
        if self.fail:
            raise LLMError("upstream error")
        return self.reply


@pytest.fixture
def fake_llm(test_client):
    llm = FakeLLM()
    test_client.app.dependency_overrides[get_llm_client] = lambda: llm
    yield llm
    test_client.app.dependency_overrides.pop(get_llm_client, None)


@pytest.fixture
def mock_web(test_client):
    """
    mock_web(handler) : les requêtes HTTP sortantes passent par `handler(request) -> httpx.Response`.
    """

    def install(handler):
        def override():
            with httpx.Client(transport=httpx.MockTransport(handler)) as client:
                yield client

        test_client.app.dependency_overrides[get_http_client] = override

    yield install
    test_client.app.dependency_overrides.pop(get_http_client, None)
