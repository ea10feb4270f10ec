# tests/conftest.py
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from review_engine.main import app
from review_engine.models.report import ReviewScope

FAKE_REVIEW = (
    "Logic Issues:\n"
    "- The argument in section 2 is incorrect\n"
    "Citation Issues:\n"
    "- Consider citing recent work on transformers\n"
)

# --------------------------------------------------------------------
# FastAPI test client available as fixture `client`
# --------------------------------------------------------------------
@pytest.fixture(scope="session")
def client() -> TestClient:
    return TestClient(app)

@pytest.fixture
def scope() -> ReviewScope:
    return ReviewScope(article_id="art1")

@pytest.fixture
def code_scope() -> ReviewScope:
    return ReviewScope(article_id="art1", snippet_id="s1", language="Python")

# --------------------------------------------------------------------
# Stubs: never reach OpenAI during tests
# --------------------------------------------------------------------
class FakeChat:
    def __init__(self, replies=None, error: Exception | None = None):
        self.replies = list(replies or [FAKE_REVIEW])
        self.error = error
        self.calls: list[list] = []

    def __call__(self, messages: list, model: str) -> str:
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.replies[min(len(self.calls), len(self.replies)) - 1]

@pytest.fixture(autouse=True)
def fake_chat(monkeypatch) -> FakeChat:
    from review_engine.services import llm as llm_mod

    fake = FakeChat()
    monkeypatch.setattr(llm_mod, "_chat", fake)
    monkeypatch.setattr(llm_mod.time, "sleep", lambda _s: None)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    return fake

@pytest.fixture
def ai_key(monkeypatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
