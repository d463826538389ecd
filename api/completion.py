import logging
from functools import lru_cache
from typing import Iterable, List

from django.conf import settings
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from api.prompts import SYSTEM_PROMPT
from history.context import USER_ROLE, Turn

logger = logging.getLogger(__name__)

MAX_OUTPUT_TOKENS = 500


class CompletionGateway:
    """
    Single call to the chat model: fixed system prompt, prior turns, current message.

    The chat model is any langchain chat model; it is injected so tests can
    substitute a fake. No retries happen here, errors propagate to the caller.
    """

    def __init__(self, chat_model, system_prompt=SYSTEM_PROMPT):
        self.chat_model = chat_model
        self.system_prompt = system_prompt

    def build_messages(self, history: Iterable[Turn], current_message: str) -> List[BaseMessage]:
        msgs: List[BaseMessage] = [SystemMessage(content=self.system_prompt)]
        for turn in history:
            if turn.role == USER_ROLE:
                msgs.append(HumanMessage(content=turn.text))
            else:
                msgs.append(AIMessage(content=turn.text))
        msgs.append(HumanMessage(content=current_message))
        return msgs

    def complete(self, history: Iterable[Turn], current_message: str) -> str:
        msgs = self.build_messages(history, current_message)
        logger.debug(f"[COMPLETION] Invoking model with {len(msgs) - 2} prior turns")
        response = self.chat_model.invoke(msgs, max_tokens=MAX_OUTPUT_TOKENS)
        return response.content


@lru_cache(maxsize=1)
def get_completion_gateway() -> CompletionGateway:
    """Process-wide gateway backed by ChatOpenAI, built on first use."""
    chat = ChatOpenAI(
        model=settings.CHAT_MODEL,
        api_key=settings.OPENAI_API_KEY,
        temperature=settings.CHAT_TEMPERATURE,
        timeout=settings.LLM_TIMEOUT_SECONDS,
        max_retries=0,
    )
    logger.info(f"[COMPLETION] Chat model configured: model={settings.CHAT_MODEL} key_set={bool(settings.OPENAI_API_KEY)}")
    return CompletionGateway(chat)
