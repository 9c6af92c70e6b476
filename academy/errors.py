"""Custom exceptions for the lesson sandbox."""

from typing import Optional

USER_REJECTED = 4001
REQUEST_PENDING = -32002

WALLET_ERROR_HINTS = {
    USER_REJECTED: "User rejected the request",
    REQUEST_PENDING: "Request pending, check your wallet for a notification",
}


class MissingConfigurationError(Exception):
    """A lesson needs a config field (endpoint, focus address) that is empty."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class CapabilityUnavailableError(Exception):
    """The selected backend cannot perform the requested operation."""

    def __init__(self, capability: str, message: str):
        self.capability = capability
        self.message = message
        super().__init__(message)


class WalletRequestError(Exception):
    """The wallet answered a JSON-RPC request with an error object."""

    def __init__(self, message: str, code: Optional[int] = None):
        self.message = message
        self.code = code
        if code is None:
            super().__init__(message)
        else:
            super().__init__(f"{message} (Code: {code})")

    @property
    def hint(self) -> str:
        return WALLET_ERROR_HINTS.get(self.code, "Connection error")


class BackendError(Exception):
    """Every endpoint behind a backend failed."""


class CurriculumError(Exception):
    """Invalid or missing curriculum definition."""
