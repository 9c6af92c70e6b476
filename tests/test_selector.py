"""Tests for backend selection precedence."""

from academy.backends import (
    DEFAULT_FALLBACK_ENDPOINTS,
    CustomEndpointClient,
    FallbackClient,
    InjectedWalletClient,
    WalletCapability,
)
from academy.models import BackendKind, SessionConfig
from academy.selector import select_backend

WALLET = WalletCapability(url="http://127.0.0.1:1248")
FOCUS = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"


class TestSelectBackend:
    def test_custom_endpoint_wins(self):
        config = SessionConfig(custom_endpoint="https://node.example/v3/key", focus_address=FOCUS)

        backend = select_backend(config, WALLET)

        assert isinstance(backend, CustomEndpointClient)
        assert backend.kind == BackendKind.CUSTOM_ENDPOINT
        assert backend.endpoint == "https://node.example/v3/key"

    def test_wallet_with_focus_address(self):
        backend = select_backend(SessionConfig(focus_address=FOCUS), WALLET)

        assert isinstance(backend, InjectedWalletClient)
        assert backend.focus_address == FOCUS
        assert backend.wallet is WALLET

    def test_wallet_without_focus_address_falls_back(self):
        backend = select_backend(SessionConfig(), WALLET)
        assert isinstance(backend, FallbackClient)

    def test_focus_address_without_wallet_falls_back(self):
        backend = select_backend(SessionConfig(focus_address=FOCUS))
        assert isinstance(backend, FallbackClient)
        assert backend.endpoints == DEFAULT_FALLBACK_ENDPOINTS

    def test_custom_fallback_endpoints(self):
        backend = select_backend(SessionConfig(), None, ["https://a.example", "https://b.example"])
        assert backend.endpoints == ["https://a.example", "https://b.example"]
        assert len(backend.clients) == 2

    def test_receipt_timeout_passed_through(self):
        backend = select_backend(SessionConfig(custom_endpoint="http://localhost:8545"),
                                 receipt_timeout=7.5)
        assert backend.receipt_timeout == 7.5

    def test_descriptions(self):
        custom = select_backend(SessionConfig(custom_endpoint="https://mainnet.infura.io/v3/abcdef"))
        assert custom.describe() == "Using Custom RPC: https://mainnet.infu..."
        wallet = select_backend(SessionConfig(focus_address=FOCUS), WALLET)
        assert wallet.describe().startswith("Using Connected Wallet")
        fallback = select_backend(SessionConfig())
        assert fallback.describe().startswith("Using Fallback Provider")
