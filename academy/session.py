"""Session: one learner's sandbox state and every operation the UI can trigger.

The session owns the config, Log Stream, practice buffer, cursor and
runner. The front end never mutates those directly; it calls the methods
below so that the cancellation rules (navigation and clearing supersede
any pending run) hold no matter which widget fired.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from academy.backends import Backend, InjectedWalletClient, WalletCapability
from academy.cursor import NavigationCursor
from academy.errors import WalletRequestError
from academy.log_stream import LogStream
from academy.matcher import PracticeBuffer
from academy.models import (
    LogKind,
    Module,
    RunOutcome,
    RunStatus,
    SessionConfig,
    WalletConnection,
)
from academy.registry import ModuleRegistry
from academy.runner import ActionRunner
from academy.selector import select_backend
from academy.settings import AppSettings

logger = logging.getLogger(__name__)

BackendFactory = Callable[..., Backend]


class Session:
    """Sandbox state for one learner."""

    def __init__(
        self,
        registry: ModuleRegistry,
        settings: Optional[AppSettings] = None,
        wallet: Optional[WalletCapability] = None,
        backend_factory: BackendFactory = select_backend,
    ):
        self.registry = registry
        self.settings = settings or AppSettings()
        self.wallet = wallet
        self.backend_factory = backend_factory

        self.config = SessionConfig()
        self.log = LogStream()
        self.practice = PracticeBuffer()
        self.cursor = NavigationCursor(registry, self.practice)
        self.runner = ActionRunner(self.log)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def current_module(self) -> Module:
        return self.cursor.current()

    def advance(self) -> bool:
        moved = self.cursor.advance()
        if moved:
            self.runner.cancel()
        return moved

    def retreat(self) -> bool:
        moved = self.cursor.retreat()
        if moved:
            self.runner.cancel()
        return moved

    def select(self, module_id: str) -> bool:
        """Jump to ``module_id``. False for an unknown id."""
        before = self.cursor.index
        found = self.cursor.select(module_id)
        if self.cursor.index != before:
            self.runner.cancel()
        return found

    # ------------------------------------------------------------------
    # Config and console
    # ------------------------------------------------------------------

    def set_endpoint(self, value: str) -> None:
        self.config.custom_endpoint = value

    def set_focus_address(self, value: str) -> None:
        self.config.focus_address = value

    def clear_logs(self) -> None:
        self.runner.cancel()
        self.log.clear()

    # ------------------------------------------------------------------
    # Practice
    # ------------------------------------------------------------------

    def reference_code(self) -> str:
        return self.current_module().code_template(
            self.config.custom_endpoint, self.config.focus_address
        )

    def type_practice(self, text: str) -> bool:
        """Store practice input. True when it has just started matching."""
        return self.practice.update(text, self.reference_code())

    def fill_solution(self) -> None:
        self.practice.fill(self.reference_code())

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def run_current(self) -> RunOutcome:
        module = self.current_module()
        if self.runner.busy:
            logger.info("Run of '%s' rejected: runner busy", module.id)
            return RunOutcome(
                module_id=module.id,
                generation=self.runner.generation,
                status=RunStatus.REJECTED,
                finished_at=datetime.now().isoformat(),
            )

        backend = self.backend_factory(
            self.config,
            self.wallet,
            self.settings.fallback_endpoints,
            receipt_timeout=self.settings.receipt_timeout,
        )
        try:
            return await self.runner.run(module, backend, self.config)
        finally:
            await backend.close()

    async def connect_wallet(self) -> WalletConnection:
        """Ask the local wallet for accounts and adopt the first as focus address."""
        log = self.runner.bind_logger()
        if self.wallet is None:
            message = "Critical: no wallet capability is configured"
            log(message, LogKind.ERROR)
            return WalletConnection(error=message)

        client = InjectedWalletClient(
            self.wallet, receipt_timeout=self.settings.receipt_timeout
        )
        try:
            accounts = await client.request_account_access()
            if not accounts:
                message = "No accounts returned from the wallet."
                log(message, LogKind.ERROR)
                return WalletConnection(error=message)

            self.set_focus_address(accounts[0])
            log(f"Connection Success: {accounts[0]}", LogKind.SUCCESS)
            identity = await client.query_network_identity()
            log(f"Chain ID: {identity.chain_id}", LogKind.OUTPUT)
            return WalletConnection(accounts=accounts, chain_id=identity.chain_id)
        except WalletRequestError as e:
            logger.warning("Wallet request failed: %s (%s)", e, e.hint)
            log(f"Request failed: {e}", LogKind.ERROR)
            return WalletConnection(error=e.message, error_code=e.code)
        except Exception as e:
            logger.warning("Wallet connection failed: %s", e)
            log(f"Request failed: {e}", LogKind.ERROR)
            return WalletConnection(error=str(e))
        finally:
            await client.close()
