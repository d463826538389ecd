"""
Maps provider and network failures onto a small set of client-safe errors.

Provider exceptions have no common shape, so classification only looks at the
exception text (plus its class name), any HTTP-like status code it carries
and, for socket-level failures, the exception type. Explicit causes (`raise
X from Y`) are inspected too, since SDKs wrap transport errors.
Rules are checked in order and the first match wins: an error text can hold
keywords of several categories, e.g. a timeout wrapping a rate limit message.
"""
import enum
from typing import List, NamedTuple, Optional, Tuple

from rest_framework import status


class Category(str, enum.Enum):
    SERVICE_UNAVAILABLE = "ServiceUnavailable"
    CONFIG_ERROR = "ConfigError"
    RATE_LIMITED = "RateLimited"
    TIMEOUT = "Timeout"
    CONTENT_BLOCKED = "ContentBlocked"
    INTERNAL = "Internal"


class Classification(NamedTuple):
    category: Category
    http_status: int
    user_message: str


class Rule(NamedTuple):
    keywords: Tuple[str, ...]
    statuses: Tuple[int, ...]
    result: Classification
    exc_types: Tuple[type, ...] = ()

    def matches(self, chain: List[BaseException], text: str, code: Optional[int]) -> bool:
        if code in self.statuses or any(k in text for k in self.keywords):
            return True
        return any(isinstance(e, self.exc_types) for e in chain)


UNAVAILABLE = Classification(
    Category.SERVICE_UNAVAILABLE,
    status.HTTP_503_SERVICE_UNAVAILABLE,
    "The assistant is temporarily unavailable. Please try again later.",
)

INTERNAL = Classification(
    Category.INTERNAL,
    status.HTTP_500_INTERNAL_SERVER_ERROR,
    "An error occurred while processing your request.",
)

RULES = (
    Rule(("quota", "exhausted", "billing", "insufficient"), (402,), UNAVAILABLE),
    Rule(
        ("api_key", "api key", "invalid key", "unauthorized", "authentication"),
        (401, 403),
        Classification(
            Category.CONFIG_ERROR,
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "Service configuration error. Please contact support.",
        ),
    ),
    Rule(
        ("rate", "limit", "too many"),
        (429,),
        Classification(
            Category.RATE_LIMITED,
            status.HTTP_429_TOO_MANY_REQUESTS,
            "Too many requests. Please wait a moment and try again.",
        ),
    ),
    Rule(
        ("timeout", "timed out", "etimedout", "econnreset", "connection reset"),
        (504, 408),
        Classification(
            Category.TIMEOUT,
            status.HTTP_504_GATEWAY_TIMEOUT,
            "The request took too long. Please try again.",
        ),
        (TimeoutError, ConnectionResetError),
    ),
    Rule(("model", "not found", "unavailable"), (404,), UNAVAILABLE),
    Rule(
        ("safety", "blocked", "harmful", "policy"),
        (),
        Classification(
            Category.CONTENT_BLOCKED,
            status.HTTP_400_BAD_REQUEST,
            "I can't respond to that. Please try asking a different question.",
        ),
    ),
)


def status_of(error: BaseException) -> Optional[int]:
    """First integer status found on the error or its response, if any."""
    candidates = [getattr(error, attr, None) for attr in ("status_code", "status", "code")]
    response = getattr(error, "response", None)
    if response is not None:
        candidates.append(getattr(response, "status_code", None))
    for value in candidates:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def cause_chain(error: BaseException, depth: int = 5) -> List[BaseException]:
    """The error followed by its explicit causes, outermost first."""
    chain = []
    while error is not None and len(chain) < depth and error not in chain:
        chain.append(error)
        error = error.__cause__
    return chain


def classify(error: BaseException) -> Classification:
    chain = cause_chain(error)
    text = " ".join(f"{type(e).__name__} {e}" for e in chain).lower()
    code = next((c for c in map(status_of, chain) if c is not None), None)
    for rule in RULES:
        if rule.matches(chain, text, code):
            return rule.result
    return INTERNAL
