import logging

from rest_framework import status, viewsets
from rest_framework.decorators import api_view
from rest_framework.response import Response

from history import repository
from history.context import build_context
from history.models import Message
from .completion import get_completion_gateway
from .errors import classify
from .serializers import HistoryQuerySerializer, MessageSerializer, SendMessageSerializer

logger = logging.getLogger(__name__)


class ChatViewSet(viewsets.ViewSet):
    """
    POST /chat sends a message, GET /chat?sessionId=... returns the transcript.
    """

    def create(self, request):
        serializer = SendMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user_msg = serializer.validated_data["message"]

        session_id = repository.ensure_session(serializer.validated_data.get("sessionId"))
        repository.append_message(session_id, Message.Role.USER, user_msg)
        logger.info(f"[SEND] Message received in session {session_id} ({len(user_msg)} chars)")

        history = build_context(session_id, user_msg)

        # The user message stays persisted even when no reply comes back.
        try:
            reply = get_completion_gateway().complete(history, user_msg)
        except Exception as e:
            result = classify(e)
            logger.error(
                f"[SEND][ERROR] Model call failed in session {session_id} "
                f"({result.category.value}): {e!r}",
                exc_info=True,
            )
            return Response({"error": result.user_message}, status=result.http_status)

        repository.append_message(session_id, Message.Role.ASSISTANT, reply)
        logger.info(f"[SEND] Assistant replied in session {session_id} with {len(history)} prior turns")
        return Response({"reply": reply, "sessionId": session_id}, status=status.HTTP_200_OK)

    def list(self, request):
        query = HistoryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        session_id = query.validated_data["sessionId"]

        if not repository.session_exists(session_id):
            logger.info(f"[HISTORY] Unknown session {session_id!r}, returning empty transcript")
            return Response({"messages": []})

        msgs = repository.all_messages(session_id)
        logger.info(f"[HISTORY] Returning {len(msgs)} messages for session {session_id}")
        return Response({"messages": MessageSerializer(msgs, many=True).data})


@api_view(["GET"])
def health(request):
    return Response({"status": "ok"})
