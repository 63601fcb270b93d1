from __future__ import annotations


def ensure_scheme(endpoint: str, secure: bool) -> str:
    """Ensure an explicit scheme is present; https when TLS is configured."""
    if "://" in endpoint:
        return endpoint
    return f"{'https' if secure else 'http'}://{endpoint}"
