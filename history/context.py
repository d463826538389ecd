from typing import List, NamedTuple

from history.models import Message
from history.repository import recent_messages

USER_ROLE = "user"
MODEL_ROLE = "model"

# Six prior turns plus the message that was just appended.
CONTEXT_FETCH_LIMIT = 7


class Turn(NamedTuple):
    role: str
    text: str


def build_context(session_id, current_message: str) -> List[Turn]:
    """Prior turns to hand to the model, oldest first.

    The message that was just appended is usually the newest row; it is
    dropped so it is only sent once, as the active turn. If the read does not
    see it yet, the whole fetch is kept and one extra turn slips in.
    """
    recent = recent_messages(session_id, CONTEXT_FETCH_LIMIT)
    if recent and recent[0].content == current_message:
        recent = recent[1:]

    return [
        Turn(USER_ROLE if m.role == Message.Role.USER else MODEL_ROLE, m.content)
        for m in reversed(recent)
    ]
