import logging

from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _first_message(detail):
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
        return ""
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ""
    return str(detail)


def error_envelope_handler(exc, context):
    """
    Render every DRF error as {"error": "<message>"}.
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    if response.status_code >= 500:
        logger.error(f"[ERROR] {context['view'].__class__.__name__} failed: {exc!r}", exc_info=exc.__cause__)
    response.data = {"error": _first_message(response.data)}
    return response
