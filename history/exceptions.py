from rest_framework import status
from rest_framework.exceptions import APIException


class PersistenceError(APIException):
    """Storage was unreachable or rejected a write."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Failed to process your request."
    default_code = "persistence_error"
