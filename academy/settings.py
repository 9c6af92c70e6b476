"""Application settings read from the environment (and an optional .env file).

These are operator settings, fixed for the lifetime of the process. The
learner's endpoint and focus address are session state and live on
``SessionConfig`` instead.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from academy.backends import (
    DEFAULT_FALLBACK_ENDPOINTS,
    DEFAULT_RECEIPT_TIMEOUT,
    WalletCapability,
)

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


@dataclass
class AppSettings:
    wallet_url: str = ""
    fallback_endpoints: List[str] = field(
        default_factory=lambda: list(DEFAULT_FALLBACK_ENDPOINTS)
    )
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: Optional[str | Path] = None) -> AppSettings:
        """Load settings, reading ``env_file`` (default: PROJECT_ROOT/.env) first.

        Values already present in the process environment take precedence
        over the file.
        """
        load_dotenv(env_file or PROJECT_ROOT / ".env")

        endpoints = [
            url.strip()
            for url in os.environ.get("ACADEMY_FALLBACK_RPC_URLS", "").split(",")
            if url.strip()
        ]

        raw_timeout = os.environ.get("ACADEMY_RECEIPT_TIMEOUT", "")
        receipt_timeout = DEFAULT_RECEIPT_TIMEOUT
        if raw_timeout:
            try:
                receipt_timeout = float(raw_timeout)
            except ValueError:
                logger.warning(
                    "Ignoring invalid ACADEMY_RECEIPT_TIMEOUT=%r, using %s",
                    raw_timeout, DEFAULT_RECEIPT_TIMEOUT,
                )
            else:
                if receipt_timeout <= 0:
                    logger.warning(
                        "Ignoring non-positive ACADEMY_RECEIPT_TIMEOUT=%r", raw_timeout
                    )
                    receipt_timeout = DEFAULT_RECEIPT_TIMEOUT

        return cls(
            wallet_url=os.environ.get("ACADEMY_WALLET_URL", "").strip(),
            fallback_endpoints=endpoints or list(DEFAULT_FALLBACK_ENDPOINTS),
            receipt_timeout=receipt_timeout,
            log_level=os.environ.get("ACADEMY_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )


def detect_wallet(settings: AppSettings) -> Optional[WalletCapability]:
    """The configured local wallet, or None when ACADEMY_WALLET_URL is unset."""
    if not settings.wallet_url:
        return None
    return WalletCapability(url=settings.wallet_url)


def configure_logging(level: str = "INFO") -> None:
    """Set up stdlib logging for the operator-facing trace."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
