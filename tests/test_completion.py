from __future__ import annotations

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from api import completion
from api.completion import MAX_OUTPUT_TOKENS, CompletionGateway
from api.prompts import SYSTEM_PROMPT
from history.context import MODEL_ROLE, USER_ROLE, Turn

from .conftest import FakeChatModel, ProviderError


def test_messages_wrap_history_between_system_prompt_and_current_turn():
    model = FakeChatModel(replies=["We open at 9 AM."])
    gw = CompletionGateway(model)
    history = [Turn(USER_ROLE, "hi"), Turn(MODEL_ROLE, "hello!")]

    assert gw.complete(history, "What are your hours?") == "We open at 9 AM."

    sent, kwargs = model.calls[0]
    assert [type(m) for m in sent] == [SystemMessage, HumanMessage, AIMessage, HumanMessage]
    assert sent[0].content == SYSTEM_PROMPT
    assert [m.content for m in sent[1:]] == ["hi", "hello!", "What are your hours?"]
    assert kwargs == {"max_tokens": 500}


def test_output_cap_is_fixed_for_any_prompt():
    model = FakeChatModel()
    CompletionGateway(model, system_prompt="Be brief.").complete([], "hey")
    sent, kwargs = model.calls[0]
    assert sent[0].content == "Be brief."
    assert kwargs["max_tokens"] == MAX_OUTPUT_TOKENS == 500


def test_provider_errors_propagate_without_retry():
    model = FakeChatModel(error=ProviderError("rate limit exceeded", status_code=429))
    with pytest.raises(ProviderError):
        CompletionGateway(model).complete([], "hello")
    assert len(model.calls) == 1


def test_system_prompt_is_a_fixed_persona():
    assert 400 <= len(SYSTEM_PROMPT) <= 1500


def test_default_gateway_is_built_once_from_settings(settings):
    settings.OPENAI_API_KEY = "sk-test"
    settings.CHAT_MODEL = "gpt-4o-mini"
    settings.LLM_TIMEOUT_SECONDS = 12.0
    completion.get_completion_gateway.cache_clear()
    try:
        gw = completion.get_completion_gateway()
        assert gw is completion.get_completion_gateway()
        assert gw.chat_model.model_name == "gpt-4o-mini"
        assert gw.chat_model.max_retries == 0
        assert gw.chat_model.request_timeout == 12.0
    finally:
        completion.get_completion_gateway.cache_clear()
