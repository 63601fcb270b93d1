from __future__ import annotations
from typing import Any, Dict, Optional
import logging
import os
import ssl
import tempfile

import httpx

from .config import ClientConfig, TLSConfig
from .errors import ConfigError
from .util import ensure_scheme


log = logging.getLogger(__name__)


def build_ssl_context(tls: TLSConfig) -> ssl.SSLContext:
    """Translate a resolved TLSConfig into a client-side SSLContext."""
    if tls.root_cas is not None:
        ctx = ssl.create_default_context(cadata=tls.root_cas.to_pem())
    else:
        ctx = ssl.create_default_context()

    if tls.certificates:
        pair = tls.certificates[0]
        # load_cert_chain only takes paths; the files never outlive this block.
        with tempfile.TemporaryDirectory(prefix="etcd-tls-") as tmp:
            cert_path = os.path.join(tmp, "client.crt")
            key_path = os.path.join(tmp, "client.key")
            with open(cert_path, "w", encoding="ascii") as fh:
                fh.write(pair.chain_pem())
            with open(os.open(key_path, os.O_WRONLY | os.O_CREAT, 0o600), "w", encoding="ascii") as fh:
                fh.write(pair.private_key_pem())
            ctx.load_cert_chain(cert_path, key_path)

    if tls.insecure_skip_verify:
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
        log.debug("TLS certificate verification disabled")
    return ctx


class HttpClient:
    """Synchronous JSON client for the etcd gateway at the first configured endpoint."""

    def __init__(self, config: ClientConfig, transport: Optional[httpx.BaseTransport] = None) -> None:
        if not config.endpoints:
            raise ConfigError("no etcd endpoints configured", config)
        self._config = config
        secure = config.tls is not None
        verify: Any = build_ssl_context(config.tls) if config.tls is not None else True
        auth = None
        if config.username and config.password:
            auth = httpx.BasicAuth(config.username, config.password)
        self.base_url = ensure_scheme(config.endpoints[0], secure)
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(None, connect=config.dial_timeout_s or None),
            auth=auth,
            verify=verify,
            transport=transport,
        )

    def get(self, url: str) -> httpx.Response:
        return self._client.get(url)

    def post_json(self, url: str, payload: Dict[str, Any]) -> httpx.Response:
        return self._client.post(url, json=payload)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
