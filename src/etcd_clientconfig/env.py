"""Load the ETCD_* variables, directly or from the files named by their _FILE siblings.

File contents are taken verbatim, trailing newline included, but must be
UTF-8 text; anything else raises FileEncodingError.
"""
from __future__ import annotations
from typing import Dict, Mapping, Optional
import logging
import os

from .errors import ConflictingSourceError, FileEncodingError, FileReadError


log = logging.getLogger(__name__)

ETCD_ENDPOINTS = "ETCD_ENDPOINTS"
ETCD_USERNAME = "ETCD_USERNAME"
ETCD_PASSWORD = "ETCD_PASSWORD"
ETCD_USERNAME_AND_PASSWORD = "ETCD_USERNAME_AND_PASSWORD"
ETCD_INSECURE_SKIP_VERIFY = "ETCD_INSECURE_SKIP_VERIFY"
ETCD_SERVER_CA = "ETCD_SERVER_CA"
ETCD_CLIENT_CERT = "ETCD_CLIENT_CERT"
ETCD_CLIENT_KEY = "ETCD_CLIENT_KEY"

ENV_VARS = (
    ETCD_ENDPOINTS,
    ETCD_USERNAME,
    ETCD_PASSWORD,
    ETCD_USERNAME_AND_PASSWORD,
    ETCD_INSECURE_SKIP_VERIFY,
    ETCD_SERVER_CA,
    ETCD_CLIENT_CERT,
    ETCD_CLIENT_KEY,
)

FILE_SUFFIX = "_FILE"


def _read_file(name: str, path: str) -> str:
    try:
        with open(path, "rb") as fh:
            raw = fh.read()
    except OSError as e:
        raise FileReadError(name, path, e) from e
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FileEncodingError(name, path, e) from e


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Read the recognised variables, directly or through their ``_FILE`` siblings.

    Empty values count as unset. ``environ`` defaults to ``os.environ``.
    """
    env = os.environ if environ is None else environ
    settings: Dict[str, str] = {}
    for name in ENV_VARS:
        direct = env.get(name) or ""
        path = env.get(name + FILE_SUFFIX) or ""
        if direct and path:
            raise ConflictingSourceError(name)
        if direct:
            log.debug("%s read from environment", name)
            settings[name] = direct
        elif path:
            value = _read_file(name, path)
            log.debug("%s read from file %s", name, path)
            if value:
                settings[name] = value
    return settings


def parse_bool(value: str) -> bool:
    """Accept the conventional spellings: 1/t/T/TRUE/true/True and 0/f/F/FALSE/false/False."""
    if value in ("1", "t", "T", "TRUE", "true", "True"):
        return True
    if value in ("0", "f", "F", "FALSE", "false", "False"):
        return False
    raise ValueError(f"invalid boolean: {value!r}")
