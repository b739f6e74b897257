"""
Adapter error taxonomy.

Errors are collected into lists and returned next to any bids produced by the
same call, so a failed impression never hides the bids of its siblings.

- BadInput: the request or its impression parameters are unusable
- BadServerResponse: the partner answered with something we cannot use
- InternalError: serialization failures and impossible states
"""

from typing import Any


class AdapterError(Exception):
    """Base class for errors reported by a bidder adapter."""

    def __init__(self, message: str, imp_index: int | None = None):
        super().__init__(message)
        self.message = message
        self.imp_index = imp_index

    @property
    def scope(self) -> str:
        """'imp' when attributable to a single impression, else 'request'."""
        return "imp" if self.imp_index is not None else "request"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {
            "type": type(self).__name__,
            "message": self.message,
            "scope": self.scope,
        }
        if self.imp_index is not None:
            result["imp_index"] = self.imp_index
        return result

    def __eq__(self, other: object) -> bool:
        return (
            type(self) is type(other)
            and self.message == other.message
            and self.imp_index == other.imp_index
        )

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.message, self.imp_index))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class BadInput(AdapterError):
    """Raised when the caller's request cannot be sent to the partner."""
    pass


class BadServerResponse(AdapterError):
    """Raised when the partner's response is unusable."""

    def __init__(
        self,
        message: str,
        imp_index: int | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, imp_index)
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.status_code is not None:
            result["status_code"] = self.status_code
        return result


class InternalError(AdapterError):
    """Raised for serialization failures and impossible states."""
    pass
