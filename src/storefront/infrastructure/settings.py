"""Runtime configuration read from ``STOREFRONT_*`` environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from storefront.domain.model.order import DEFAULT_STATUS_VOCABULARY, OrderStatus

# When installed in editable mode the project root is the repo root.
_PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_DB_PATH = _PROJECT_ROOT / "data" / "storefront.db"

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")
_REQUIRED_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.CANCELLED})


@dataclass(frozen=True)
class Settings:
    db_path: Path = DEFAULT_DB_PATH
    db_timeout: float = 5.0
    log_level: str = "INFO"
    log_file: Path | None = None
    order_statuses: frozenset[OrderStatus] = DEFAULT_STATUS_VOCABULARY

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings, raising ValueError on malformed values."""
        env = os.environ if environ is None else environ

        db_path = Path(env.get("STOREFRONT_DB_PATH") or DEFAULT_DB_PATH)

        raw_timeout = env.get("STOREFRONT_DB_TIMEOUT", "5.0")
        try:
            db_timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(f"STOREFRONT_DB_TIMEOUT must be a number, got {raw_timeout!r}") from None
        if db_timeout <= 0:
            raise ValueError(f"STOREFRONT_DB_TIMEOUT must be positive, got {db_timeout}")

        log_level = env.get("STOREFRONT_LOG_LEVEL", "INFO").upper()
        if log_level not in _LOG_LEVELS:
            raise ValueError(f"Unknown STOREFRONT_LOG_LEVEL {log_level!r}")

        log_file = env.get("STOREFRONT_LOG_FILE")

        raw_statuses = env.get("STOREFRONT_ORDER_STATUSES")
        statuses = (
            parse_status_list(raw_statuses) if raw_statuses else DEFAULT_STATUS_VOCABULARY
        )

        return cls(
            db_path=db_path,
            db_timeout=db_timeout,
            log_level=log_level,
            log_file=Path(log_file) if log_file else None,
            order_statuses=statuses,
        )


def parse_status_list(raw: str) -> frozenset[OrderStatus]:
    """Parse ``"pending,processing,..."``; pending and cancelled are always kept."""
    statuses: set[OrderStatus] = set(_REQUIRED_STATUSES)
    for name in raw.split(","):
        name = name.strip().lower()
        if not name:
            continue
        try:
            statuses.add(OrderStatus(name))
        except ValueError:
            raise ValueError(f"Unknown order status {name!r} in STOREFRONT_ORDER_STATUSES") from None
    return frozenset(statuses)
