"""Network backends: the three client variants a lesson can run against.

All variants expose the same async capability interface. They differ in:
- how the AsyncWeb3 instance (or instances) are built
- which wallet-only operations they allow (account access, signing, sending)

Backends are cheap to build: constructing an AsyncHTTPProvider opens no
connection. The HTTP session is created lazily on the first request and is
released by ``close()``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.exceptions import MismatchedABI, Web3RPCError

from academy.errors import (
    BackendError,
    CapabilityUnavailableError,
    MissingConfigurationError,
    WalletRequestError,
)
from academy.models import BackendKind, NetworkIdentity

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_ENDPOINTS = [
    "https://ethereum-rpc.publicnode.com",
    "https://cloudflare-eth.com",
    "https://rpc.ankr.com/eth",
]
DEFAULT_RECEIPT_TIMEOUT = 120.0

Web3Call = Callable[[AsyncWeb3], Awaitable[Any]]

# Raised while building a request, before anything reaches a node.
LOCAL_ERRORS = (ValueError, TypeError, AttributeError, MismatchedABI)


@dataclass(frozen=True)
class WalletCapability:
    """A locally running wallet that exposes an EIP-1193 style JSON-RPC endpoint."""
    url: str
    name: str = "local wallet"


class Backend(ABC):
    """Capability interface shared by every backend variant."""

    kind: BackendKind

    def __init__(
        self,
        w3: Optional[AsyncWeb3],
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
    ):
        self.w3 = w3
        self.receipt_timeout = receipt_timeout

    @abstractmethod
    def describe(self) -> str:
        """One console line saying which backend a run is using."""
        ...

    async def _call(self, fn: Web3Call) -> Any:
        return await fn(self.w3)

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    async def query_block_height(self) -> int:
        return await self._call(lambda w3: w3.eth.block_number)

    async def query_balance(self, address: str) -> int:
        """Balance in wei. Raises ValueError for a malformed address."""
        checksum = Web3.to_checksum_address(address)
        return await self._call(lambda w3: w3.eth.get_balance(checksum))

    async def query_network_identity(self) -> NetworkIdentity:
        chain_id = await self._call(lambda w3: w3.eth.chain_id)
        return NetworkIdentity(chain_id=int(chain_id))

    async def read_contract_field(
        self, address: str, abi: List[Dict[str, Any]], field_name: str
    ) -> Any:
        checksum = Web3.to_checksum_address(address)

        def call(w3: AsyncWeb3) -> Awaitable[Any]:
            contract = w3.eth.contract(address=checksum, abi=abi)
            return contract.functions[field_name]().call()

        return await self._call(call)

    async def await_transaction_receipt(self, handle: Any) -> Any:
        return await self._call(
            lambda w3: w3.eth.wait_for_transaction_receipt(
                handle, timeout=self.receipt_timeout
            )
        )

    # ------------------------------------------------------------------
    # Wallet-only operations
    # ------------------------------------------------------------------

    async def request_account_access(self) -> List[str]:
        raise CapabilityUnavailableError(
            "accounts",
            "No wallet detected. Set ACADEMY_WALLET_URL to your wallet's RPC "
            "endpoint and enter a focus address.",
        )

    async def sign_message(self, text: str) -> str:
        raise CapabilityUnavailableError(
            "signing", "Message signing requires a connected wallet."
        )

    async def send_contract_transaction(
        self,
        address: str,
        abi: List[Dict[str, Any]],
        method_name: str,
        args: Sequence[Any],
    ) -> Any:
        raise CapabilityUnavailableError(
            "transactions", "Sending transactions requires a connected wallet."
        )

    async def close(self) -> None:
        """Release cached HTTP sessions."""
        if self.w3 is not None:
            await self.w3.provider.disconnect()


class CustomEndpointClient(Backend):
    """Backend for an explicit node URL (Infura, Alchemy, a local node...)."""

    kind = BackendKind.CUSTOM_ENDPOINT

    def __init__(self, endpoint: str, receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT):
        super().__init__(AsyncWeb3(AsyncHTTPProvider(endpoint)), receipt_timeout)
        self.endpoint = endpoint

    def describe(self) -> str:
        return f"Using Custom RPC: {self.endpoint[:20]}..."


class InjectedWalletClient(Backend):
    """Backend that talks to the user's wallet, able to grant accounts and sign."""

    kind = BackendKind.INJECTED_WALLET

    def __init__(
        self,
        wallet: WalletCapability,
        focus_address: str = "",
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
    ):
        super().__init__(AsyncWeb3(AsyncHTTPProvider(wallet.url)), receipt_timeout)
        self.wallet = wallet
        self.focus_address = focus_address

    def describe(self) -> str:
        return f"Using Connected Wallet ({self.wallet.name})..."

    async def _wallet_request(self, method: str, params: List[Any]) -> Any:
        """Send a raw JSON-RPC request, turning an error object into WalletRequestError."""
        response = await self.w3.provider.make_request(method, params)
        error = response.get("error")
        if error:
            if isinstance(error, dict):
                raise WalletRequestError(
                    error.get("message", "Wallet request failed"), error.get("code")
                )
            raise WalletRequestError(str(error))
        return response.get("result")

    def _sender(self) -> str:
        if not self.focus_address:
            raise MissingConfigurationError(
                "focus_address", "Please enter a Target Address first."
            )
        return Web3.to_checksum_address(self.focus_address)

    async def request_account_access(self) -> List[str]:
        accounts = await self._wallet_request("eth_requestAccounts", [])
        return [str(account) for account in accounts or []]

    async def sign_message(self, text: str) -> str:
        sender = self._sender()
        return await self._wallet_request(
            "personal_sign", [Web3.to_hex(text=text), sender]
        )

    async def send_contract_transaction(
        self,
        address: str,
        abi: List[Dict[str, Any]],
        method_name: str,
        args: Sequence[Any],
    ) -> Any:
        sender = self._sender()
        contract = self.w3.eth.contract(
            address=Web3.to_checksum_address(address), abi=abi
        )
        try:
            return await contract.functions[method_name](*args).transact({"from": sender})
        except Web3RPCError as e:
            # Same error shape as _wallet_request, so rejections keep their code.
            error = (e.rpc_response or {}).get("error")
            if isinstance(error, dict):
                raise WalletRequestError(
                    error.get("message", e.message), error.get("code")
                ) from e
            raise WalletRequestError(e.message) from e


class FallbackClient(Backend):
    """Backend over a list of public nodes, tried in order for every call."""

    kind = BackendKind.FALLBACK

    def __init__(
        self,
        endpoints: Optional[Sequence[str]] = None,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
    ):
        self.endpoints = list(endpoints or DEFAULT_FALLBACK_ENDPOINTS)
        self.clients = [AsyncWeb3(AsyncHTTPProvider(url)) for url in self.endpoints]
        super().__init__(self.clients[0], receipt_timeout)

    def describe(self) -> str:
        return f"Using Fallback Provider ({len(self.endpoints)} public mainnet nodes)..."

    async def _call(self, fn: Web3Call) -> Any:
        """Run ``fn`` against each node until one answers.

        Only transport and RPC failures move on to the next node. Local
        errors (a bad argument, a function missing from the ABI) would fail
        the same way everywhere and propagate unchanged.
        """
        last_error: Optional[Exception] = None
        for endpoint, w3 in zip(self.endpoints, self.clients):
            try:
                return await fn(w3)
            except LOCAL_ERRORS:
                raise
            except Exception as e:
                logger.warning("Fallback endpoint %s failed: %s", endpoint, e)
                last_error = e
        raise BackendError(
            f"All {len(self.clients)} fallback endpoints failed; last error: {last_error}"
        ) from last_error

    async def close(self) -> None:
        for w3 in self.clients:
            await w3.provider.disconnect()
