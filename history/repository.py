import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, transaction

from history.exceptions import PersistenceError
from history.models import ChatSession, Message

logger = logging.getLogger(__name__)

# Anything the ORM raises for an unreachable database or a malformed UUID.
LOOKUP_ERRORS = (DatabaseError, DjangoValidationError, ValueError)


def session_exists(session_id) -> bool:
    """
    Return True if the session is known. Malformed ids are simply unknown.
    """
    try:
        return ChatSession.objects.filter(pk=session_id).exists()
    except DjangoValidationError:
        return False
    except (DatabaseError, ValueError) as e:
        raise PersistenceError() from e


def ensure_session(session_id=None) -> str:
    """
    Resolve the session a message belongs to, creating it when needed.

    A stale, forged or malformed client id never fails the request: the
    supplied id is adopted if possible, otherwise a fresh one is minted.
    """
    if session_id:
        try:
            if ChatSession.objects.filter(pk=session_id).exists():
                return str(session_id)
        except LOOKUP_ERRORS as e:
            logger.warning(f"[SESSION] Lookup failed for session {session_id!r}, minting a new one: {e}")
        else:
            try:
                with transaction.atomic():
                    session = ChatSession.objects.create(id=session_id)
                logger.info(f"[SESSION] Recreated unknown session {session.id}")
                return str(session.id)
            except LOOKUP_ERRORS as e:
                logger.warning(f"[SESSION] Could not adopt session id {session_id!r}, minting a new one: {e}")

    try:
        with transaction.atomic():
            session = ChatSession.objects.create()
    except DatabaseError as e:
        raise PersistenceError() from e
    logger.info(f"[SESSION] New session created ({session.id})")
    return str(session.id)


def append_message(session_id, role, content) -> Message:
    """
    Save a single conversation message in the database.
    """
    try:
        with transaction.atomic():
            return Message.objects.create(session_id=session_id, role=role, content=content)
    except LOOKUP_ERRORS as e:
        raise PersistenceError() from e


def recent_messages(session_id, limit=None) -> list[Message]:
    """
    Return up to `limit` messages of a session, newest first.
    """
    queryset = Message.objects.filter(session_id=session_id).order_by("-created_at", "-id")
    if limit is not None:
        queryset = queryset[:limit]
    try:
        return list(queryset)
    except LOOKUP_ERRORS as e:
        raise PersistenceError() from e


def all_messages(session_id) -> list[Message]:
    """
    Return the full history of a session, oldest first.
    """
    try:
        return list(Message.objects.filter(session_id=session_id).order_by("created_at", "id"))
    except LOOKUP_ERRORS as e:
        raise PersistenceError() from e
