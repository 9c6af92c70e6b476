"""Shared test fixtures."""

import asyncio
from typing import List, Optional

import pytest

from academy.actions import LessonAction
from academy.backends import Backend
from academy.models import BackendKind, LogKind, Module, NetworkIdentity
from academy.registry import ModuleRegistry, load_registry


class FakeBackend(Backend):
    """Backend with canned answers and no network access."""

    kind = BackendKind.CUSTOM_ENDPOINT

    def __init__(
        self,
        balance: int = 0,
        block: int = 19_000_000,
        chain_id: int = 1,
        accounts: Optional[List[str]] = None,
        contract_fields: Optional[dict] = None,
        kind: Optional[BackendKind] = None,
    ):
        super().__init__(None)
        self.balance = balance
        self.block = block
        self.chain_id = chain_id
        self.accounts = accounts
        self.contract_fields = contract_fields or {}
        if kind is not None:
            self.kind = kind
        self.calls = []
        self.closed = False

    def describe(self) -> str:
        return "Using Fake Backend..."

    async def query_block_height(self) -> int:
        self.calls.append(("query_block_height",))
        return self.block

    async def query_balance(self, address: str) -> int:
        self.calls.append(("query_balance", address))
        return self.balance

    async def query_network_identity(self) -> NetworkIdentity:
        self.calls.append(("query_network_identity",))
        return NetworkIdentity(chain_id=self.chain_id)

    async def request_account_access(self) -> List[str]:
        self.calls.append(("request_account_access",))
        if self.accounts is None:
            return await super().request_account_access()
        return list(self.accounts)

    async def sign_message(self, text: str) -> str:
        self.calls.append(("sign_message", text))
        if self.kind != BackendKind.INJECTED_WALLET:
            return await super().sign_message(text)
        return "0x" + "ab" * 65

    async def read_contract_field(self, address, abi, field_name):
        self.calls.append(("read_contract_field", field_name))
        return self.contract_fields[field_name]

    async def close(self) -> None:
        self.closed = True


class LogCollector:
    """Stands in for the run logger handed to lesson actions."""

    def __init__(self):
        self.entries = []

    def __call__(self, message: str, kind: LogKind = LogKind.INFO) -> None:
        self.entries.append((kind, message))

    @property
    def messages(self) -> List[str]:
        return [message for _, message in self.entries]


class GatedAction(LessonAction):
    """Action that blocks until released, for single-flight tests.

    Create it inside the running event loop.
    """

    template = "print('gated lesson reference snippet')"

    def __init__(self, label: str = "gated"):
        self.label = label
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def execute(self, backend, endpoint, log, address):
        log(f"{self.label}: step 1", LogKind.INFO)
        self.started.set()
        await self.release.wait()
        log(f"{self.label}: step 2", LogKind.OUTPUT)
        return self.label


class FailingAction(LessonAction):
    template = "raise RuntimeError('boom')"

    async def execute(self, backend, endpoint, log, address):
        log("about to fail", LogKind.INFO)
        raise RuntimeError("Lesson crashed!")


def make_module(action: LessonAction, module_id: str = "test-module", order: int = 0) -> Module:
    return Module(
        id=module_id,
        order=order,
        title="Test Module",
        short_description="for tests",
        explanation="",
        tip="",
        action=action,
    )


@pytest.fixture(scope="session")
def registry() -> ModuleRegistry:
    """The bundled ten-module curriculum."""
    return load_registry()


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend(balance=1_500_000_000_000_000_000)


@pytest.fixture
def log_collector() -> LogCollector:
    return LogCollector()
