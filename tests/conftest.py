import pytest
from fastapi.testclient import TestClient

from realcheck.core.config import Settings
from realcheck.main import create_app

VERDICT_TEXT = '{"is_ai":true,"confidence":87,"reason":"unnatural texture"}'


class StubClient:
    """Records calls and returns a canned model answer."""

    def __init__(self, text: str = VERDICT_TEXT, error: Exception = None):
        self.text = text
        self.error = error
        self.calls = []

    async def generate(self, image: bytes, mime_type: str, instruction: str) -> str:
        self.calls.append((image, mime_type, instruction))
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def settings() -> Settings:
    return Settings(gemini_api_key="test-secret-key")


@pytest.fixture
def stub() -> StubClient:
    return StubClient()


@pytest.fixture
def client(settings, stub) -> TestClient:
    return TestClient(create_app(settings, client=stub))
