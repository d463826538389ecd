from __future__ import annotations

from datetime import timedelta

import pytest
from django.utils import timezone
from langchain_core.messages import AIMessage
from rest_framework.test import APIClient

from api.completion import CompletionGateway
from history.models import ChatSession, Message


class FakeChatModel:
    """Stands in for a langchain chat model; records every invoke call."""

    def __init__(self, replies=None, error: Exception | None = None) -> None:
        self.replies = list(replies or [])
        self.error = error
        self.calls: list[tuple[list, dict]] = []

    def invoke(self, messages, **kwargs):
        self.calls.append((messages, kwargs))
        if self.error is not None:
            raise self.error
        text = self.replies.pop(0) if self.replies else f"Reply #{len(self.calls)}"
        return AIMessage(content=text)


class ProviderError(Exception):
    """Shaped like an SDK error: message text plus an optional HTTP status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def chat_model() -> FakeChatModel:
    return FakeChatModel()


@pytest.fixture
def gateway(chat_model, monkeypatch) -> CompletionGateway:
    gw = CompletionGateway(chat_model)
    monkeypatch.setattr("api.views.get_completion_gateway", lambda: gw)
    return gw


@pytest.fixture
def seeded_session():
    """Build a session holding `count` alternating user/assistant messages one second apart."""

    def _seed(count: int) -> ChatSession:
        session = ChatSession.objects.create()
        start = timezone.now() - timedelta(hours=1)
        for i in range(count):
            Message.objects.create(
                session=session,
                role=Message.Role.USER if i % 2 == 0 else Message.Role.ASSISTANT,
                content=f"message {i}",
                created_at=start + timedelta(seconds=i),
            )
        return session

    return _seed
