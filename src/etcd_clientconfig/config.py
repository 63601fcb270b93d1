from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .models import CertPool, KeyPair


DEFAULT_DIAL_TIMEOUT_S = 15.0
DEFAULT_AUTO_SYNC_INTERVAL_S = 5 * 60.0


def _mask_secret(value: Optional[str]) -> str:
    if value is None:
        return "None"
    return "'***'"


@dataclass(frozen=True)
class TLSConfig:
    """TLS material for connecting to etcd."""

    insecure_skip_verify: bool = False
    root_cas: Optional[CertPool] = None
    certificates: Tuple[KeyPair, ...] = ()


@dataclass(frozen=True)
class ClientConfig:
    """Immutable connection configuration for an etcd client."""

    endpoints: Tuple[str, ...] = ()
    username: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)
    tls: Optional[TLSConfig] = None
    dial_timeout_s: float = 0.0
    auto_sync_interval_s: float = 0.0

    def __repr__(self) -> str:
        return (
            f"ClientConfig(endpoints={self.endpoints!r}, username={self.username!r}, "
            f"password={_mask_secret(self.password)}, tls={self.tls!r}, "
            f"dial_timeout_s={self.dial_timeout_s!r}, "
            f"auto_sync_interval_s={self.auto_sync_interval_s!r})"
        )


def defaults() -> ClientConfig:
    """Baseline configuration; customise it before passing it to ``resolver.apply``."""
    return ClientConfig(
        dial_timeout_s=DEFAULT_DIAL_TIMEOUT_S,
        auto_sync_interval_s=DEFAULT_AUTO_SYNC_INTERVAL_S,
    )
