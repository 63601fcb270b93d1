from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Iterator, Tuple

from cryptography import x509
from cryptography.hazmat.primitives import serialization


def _cert_to_pem(cert: x509.Certificate) -> str:
    return cert.public_bytes(serialization.Encoding.PEM).decode("ascii")


@dataclass(frozen=True)
class CertPool:
    """Ordered set of trusted root certificates."""

    certificates: Tuple[x509.Certificate, ...] = ()

    def __len__(self) -> int:
        return len(self.certificates)

    def __iter__(self) -> Iterator[x509.Certificate]:
        return iter(self.certificates)

    def to_pem(self) -> str:
        return "".join(_cert_to_pem(c) for c in self.certificates)


@dataclass(frozen=True)
class KeyPair:
    """Client certificate chain plus the private key matching its leaf."""

    certificate: x509.Certificate
    chain: Tuple[x509.Certificate, ...]
    private_key: Any = field(repr=False, compare=False)

    def chain_pem(self) -> str:
        return "".join(_cert_to_pem(c) for c in self.chain)

    def private_key_pem(self) -> str:
        # Re-encoded as unencrypted PKCS#8 so ssl can load it regardless of the input flavour.
        return self.private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        ).decode("ascii")
