"""
Core data models for the Web3 Academy sandbox.

These dataclasses define the shared vocabulary used across all modules:
- Module: one immutable lesson in the curriculum
- SessionConfig: the user-editable endpoint and focus address
- LogEntry: one line in the run console
- RunOutcome: record of a single Action Runner invocation
- WalletConnection: result of the connect-wallet flow
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, List, Optional

if TYPE_CHECKING:
    from academy.actions import LessonAction


class LogKind(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"
    OUTPUT = "output"


class RunStatus(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    REJECTED = "rejected"
    SUPERSEDED = "superseded"


class BackendKind(str, Enum):
    CUSTOM_ENDPOINT = "custom_endpoint"
    INJECTED_WALLET = "injected_wallet"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class Module:
    """One lesson of the curriculum.

    The text fields come from the curriculum file; ``action`` is the
    registered LessonAction for ``id`` and carries both the reference
    snippet and the live demonstration.
    """
    id: str
    order: int
    title: str
    short_description: str
    explanation: str
    tip: str
    action: "LessonAction" = field(compare=False, repr=False)

    def code_template(self, endpoint: str = "", address: str = "") -> str:
        """Render the reference snippet for the given endpoint and address."""
        return self.action.code_template(endpoint, address)


@dataclass
class SessionConfig:
    """User-supplied configuration. Validated lazily by the lesson that reads it."""
    custom_endpoint: str = ""
    focus_address: str = ""


@dataclass(frozen=True)
class LogEntry:
    kind: LogKind
    message: str
    timestamp: str = field(
        default_factory=lambda: datetime.now().isoformat(timespec="seconds")
    )

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class NetworkIdentity:
    chain_id: int


@dataclass
class RunOutcome:
    """Record of one Action Runner invocation."""
    module_id: str
    generation: int
    status: RunStatus
    result: Any = None
    error: Optional[str] = None
    started_at: str = field(default_factory=lambda: datetime.now().isoformat())
    finished_at: str = ""


@dataclass
class WalletConnection:
    """Result of asking the local wallet for account access."""
    accounts: List[str] = field(default_factory=list)
    chain_id: Optional[int] = None
    error: Optional[str] = None
    error_code: Optional[int] = None

    @property
    def connected(self) -> bool:
        return bool(self.accounts) and self.error is None
