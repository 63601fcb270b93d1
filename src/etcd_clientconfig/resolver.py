"""Resolve an etcd client configuration from environment variables.

Simple mode: call :func:`get` and take the library defaults. To customise the
defaults, either adjust what :func:`get` returns, or call
:func:`etcd_clientconfig.config.defaults`, change it, and pass it to
:func:`apply` so the environment still takes precedence.
"""
from __future__ import annotations
from dataclasses import replace
from typing import Mapping, Optional
import logging

from .config import ClientConfig, TLSConfig, defaults
from .env import (
    ETCD_CLIENT_CERT,
    ETCD_CLIENT_KEY,
    ETCD_ENDPOINTS,
    ETCD_INSECURE_SKIP_VERIFY,
    ETCD_PASSWORD,
    ETCD_SERVER_CA,
    ETCD_USERNAME,
    ETCD_USERNAME_AND_PASSWORD,
    load_settings,
    parse_bool,
)
from .errors import (
    BoolParseError,
    CertificateParseError,
    ConfigError,
    IncompleteKeyPairError,
    KeyPairParseError,
    MalformedCredentialError,
    MutuallyExclusiveError,
)
from .pem import parse_cert_pool, parse_key_pair


log = logging.getLogger(__name__)


def _tls(c: ClientConfig) -> TLSConfig:
    return c.tls if c.tls is not None else TLSConfig()


def get(environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
    """Defaults overlaid with the environment."""
    return apply(defaults(), environ)


def apply(config: ClientConfig, environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
    """Return a copy of ``config`` with the environment applied.

    ``environ`` defaults to ``os.environ``. Any :class:`ConfigError` carries the
    configuration as merged so far in its ``config`` attribute.
    """
    c = config
    try:
        settings = load_settings(environ)
    except ConfigError as e:
        e.config = c
        raise

    v = settings.get(ETCD_ENDPOINTS)
    if v:
        c = replace(c, endpoints=tuple(v.split(",")))

    v = settings.get(ETCD_USERNAME_AND_PASSWORD)
    if v:
        if settings.get(ETCD_USERNAME) or settings.get(ETCD_PASSWORD):
            raise MutuallyExclusiveError(
                f"you can't set both {ETCD_USERNAME_AND_PASSWORD} and {ETCD_USERNAME} or {ETCD_PASSWORD}",
                c,
            )
        user, sep, password = v.partition(":")
        if not sep:
            raise MalformedCredentialError(
                f"invalid {ETCD_USERNAME_AND_PASSWORD}: user and password should be separated with a colon (:)",
                c,
            )
        settings[ETCD_USERNAME] = user
        settings[ETCD_PASSWORD] = password

    # Username and password are not required to come as a pair;
    # HttpClient only sends basic auth when both are set.
    v = settings.get(ETCD_USERNAME)
    if v:
        c = replace(c, username=v)
    v = settings.get(ETCD_PASSWORD)
    if v:
        c = replace(c, password=v)

    v = settings.get(ETCD_INSECURE_SKIP_VERIFY)
    if v:
        try:
            skip = parse_bool(v)
        except ValueError as e:
            raise BoolParseError(
                f"failed to parse {ETCD_INSECURE_SKIP_VERIFY} as bool ({v!r})", c
            ) from e
        c = replace(c, tls=replace(_tls(c), insecure_skip_verify=skip))
        log.debug("TLS verification skip set to %s", skip)

    v = settings.get(ETCD_SERVER_CA)
    if v:
        try:
            pool = parse_cert_pool(v)
        except ValueError as e:
            raise CertificateParseError(
                f"certificate(s) in {ETCD_SERVER_CA}(_FILE) were invalid PEM certificates", c
            ) from e
        c = replace(c, tls=replace(_tls(c), root_cas=pool))
        log.debug("TLS root pool set with %d certificate(s)", len(pool))

    vc, vk = settings.get(ETCD_CLIENT_CERT), settings.get(ETCD_CLIENT_KEY)
    if vc and vk:
        try:
            pair = parse_key_pair(vc, vk)
        except ValueError as e:
            raise KeyPairParseError(
                f"failed to parse {ETCD_CLIENT_CERT}+{ETCD_CLIENT_KEY}: {e}", c
            ) from e
        c = replace(c, tls=replace(_tls(c), certificates=(pair,)))
        log.debug("TLS client certificate set for %s", pair.certificate.subject.rfc4514_string())
    elif vc or vk:
        raise IncompleteKeyPairError(
            f"either both of {ETCD_CLIENT_CERT}(_FILE) and {ETCD_CLIENT_KEY}(_FILE) must be given or neither",
            c,
        )

    return c
