from __future__ import annotations
from typing import Iterator, List, Optional, Tuple
import logging
import re

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

from .models import CertPool, KeyPair


log = logging.getLogger(__name__)

_PEM_BLOCK = re.compile(
    r"-----BEGIN (?P<label>[A-Z0-9 ]+)-----[ \t]*\r?\n"
    r"(?P<body>(?:(?!-----BEGIN ).)*?)"
    r"-----END (?P=label)-----",
    re.DOTALL,
)


def iter_blocks(text: str) -> Iterator[Tuple[str, str]]:
    """Yield ``(label, block)`` for every PEM block in ``text``; other content is ignored.

    Blocks are re-emitted in canonical form: whitespace around each line is
    dropped, as are blank lines. A BEGIN line without a matching END is
    skipped and scanning resumes at the next BEGIN.
    """
    for m in _PEM_BLOCK.finditer(text):
        label = m.group("label")
        lines = [line.strip() for line in m.group("body").splitlines()]
        body = "".join(f"{line}\n" for line in lines if line)
        yield label, f"-----BEGIN {label}-----\n{body}-----END {label}-----\n"


def parse_cert_pool(text: str) -> CertPool:
    """Collect every parsable CERTIFICATE block; raise ValueError if there is none."""
    certs: List[x509.Certificate] = []
    for label, block in iter_blocks(text):
        if label != "CERTIFICATE":
            continue
        try:
            certs.append(x509.load_pem_x509_certificate(block.encode("ascii")))
        except ValueError as e:
            log.debug("skipping unparsable certificate block: %s", e)
    if not certs:
        raise ValueError("no valid PEM certificate found")
    return CertPool(tuple(certs))


def _public_der(key) -> bytes:
    return key.public_bytes(
        serialization.Encoding.DER, serialization.PublicFormat.SubjectPublicKeyInfo
    )
def parse_key_pair(cert_text: str, key_text: str) -> KeyPair:
    """Parse a certificate chain and its private key; the key must match the leaf certificate.

    Only the leaf (first CERTIFICATE block) must parse. Intermediates that do
    not parse are left out of the chain.
    """
    blocks = [block for label, block in iter_blocks(cert_text) if label == "CERTIFICATE"]
    if not blocks:
        raise ValueError("failed to find any PEM data in certificate input")
    try:
        leaf = x509.load_pem_x509_certificate(blocks[0].encode("ascii"))
    except ValueError as e:
        raise ValueError(f"failed to parse certificate: {e}") from e
    chain: List[x509.Certificate] = [leaf]
    for block in blocks[1:]:
        try:
            chain.append(x509.load_pem_x509_certificate(block.encode("ascii")))
        except ValueError as e:
            log.debug("dropping unparsable intermediate certificate: %s", e)

    key_block: Optional[str] = None
    for label, block in iter_blocks(key_text):
        if label == "PRIVATE KEY" or label.endswith(" PRIVATE KEY"):
            key_block = block
            break
    if key_block is None:
        raise ValueError("failed to find PEM block with type ending in \"PRIVATE KEY\" in key input")

    try:
        key = serialization.load_pem_private_key(key_block.encode("ascii"), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        # TypeError: the key is encrypted and there is no way to pass a password.
        raise ValueError(f"failed to parse private key: {e}") from e

    try:
        matches = _public_der(key.public_key()) == _public_der(leaf.public_key())
    except (ValueError, UnsupportedAlgorithm) as e:
        raise ValueError(f"unsupported public key in certificate: {e}") from e
    if not matches:
        raise ValueError("private key does not match public key")

    return KeyPair(certificate=leaf, chain=tuple(chain), private_key=key)
