"""Backend Selector: picks which backend variant a run should use.

Precedence mirrors what a learner expects from the sidebar:
an explicit endpoint always wins, then a connected wallet (only when a
focus address is set), then the public fallback pool. No network calls
happen here and missing configuration is never an error at this stage.
"""

from __future__ import annotations

from typing import Optional, Sequence

from academy.backends import (
    DEFAULT_FALLBACK_ENDPOINTS,
    DEFAULT_RECEIPT_TIMEOUT,
    Backend,
    CustomEndpointClient,
    FallbackClient,
    InjectedWalletClient,
    WalletCapability,
)
from academy.models import SessionConfig


def select_backend(
    config: SessionConfig,
    wallet: Optional[WalletCapability] = None,
    fallback_endpoints: Optional[Sequence[str]] = None,
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
) -> Backend:
    """Build the backend for one run from the current session config."""
    if config.custom_endpoint:
        return CustomEndpointClient(config.custom_endpoint, receipt_timeout)
    if wallet is not None and config.focus_address:
        return InjectedWalletClient(wallet, config.focus_address, receipt_timeout)
    return FallbackClient(fallback_endpoints or DEFAULT_FALLBACK_ENDPOINTS, receipt_timeout)
