"""Error taxonomy and HTTP response classification for the Stash REST API.

Every failure a client call can raise is a StashError:

- TransportError: the request never produced a response (connect failure,
  timeout, bad URL).
- HttpStatusError: a response arrived with a status other than the one the
  operation expects. Carries the status code, a human-readable reason and a
  coarse DomainHint.
- DecodeError: a successful response whose body could not be decoded.
"""

from enum import Enum

UNHANDLED_REASON = "unhandled reason"


class DomainHint(Enum):
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    BAD_REQUEST = "bad_request"
    UNKNOWN = "unknown"


_HINTS = {
    400: DomainHint.BAD_REQUEST,
    401: DomainHint.UNAUTHORIZED,
    404: DomainHint.NOT_FOUND,
    409: DomainHint.CONFLICT,
}


class StashError(Exception):
    """Base exception for Stash client errors."""


class ConfigurationError(StashError):
    """Raised when the client cannot be configured, e.g. STASH_URL is unset."""


class TransportError(StashError):
    """Raised when no HTTP response could be obtained."""


class DecodeError(StashError):
    """Raised when a successful response body cannot be decoded."""


class HttpStatusError(StashError):
    """Raised when a response status does not match the expected success code."""

    def __init__(self, status_code: int, reason: str, hint: DomainHint = DomainHint.UNKNOWN):
        self.status_code = status_code
        self.reason = reason
        self.hint = hint
        super().__init__(f"{reason} ({status_code})")


def classify(status_code: int, success_code: int, reasons: dict[int, str]) -> HttpStatusError | None:
    """Return an HttpStatusError unless status_code is the operation's success code.

    reasons is the operation's table of known failure codes. Codes outside it
    are reported as "unhandled reason" with an UNKNOWN hint.
    """
    if status_code == success_code:
        return None
    if status_code not in reasons:
        return HttpStatusError(status_code, UNHANDLED_REASON, DomainHint.UNKNOWN)
    return HttpStatusError(status_code, reasons[status_code], _HINTS.get(status_code, DomainHint.UNKNOWN))


def is_conflict(err: BaseException | None) -> bool:
    """True when err is a classified 409, e.g. the repository already exists."""
    return isinstance(err, HttpStatusError) and err.status_code == 409


def is_not_found(err: BaseException | None) -> bool:
    """True when err is a classified 404."""
    return isinstance(err, HttpStatusError) and err.status_code == 404
