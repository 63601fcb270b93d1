from __future__ import annotations
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .config import ClientConfig


class ConfigError(ValueError):
    """Raised when the environment does not describe a usable etcd connection.

    ``config`` holds the configuration as merged up to the failing step. It is
    there for inspection only; never connect with it.
    """

    def __init__(self, message: str, config: Optional["ClientConfig"] = None) -> None:
        super().__init__(message)
        self.config = config


class ConflictingSourceError(ConfigError):
    """Both ``X`` and ``X_FILE`` are set."""

    def __init__(self, name: str, config: Optional["ClientConfig"] = None) -> None:
        super().__init__(
            f"conflicting value for {name}: both {name} and {name}_FILE are set", config
        )
        self.name = name


class FileReadError(ConfigError):
    """The file named by an ``X_FILE`` variable could not be read."""

    def __init__(self, name: str, path: str, reason: object, config: Optional["ClientConfig"] = None) -> None:
        super().__init__(f"error reading {path!r} (for {name}_FILE): {reason}", config)
        self.name = name
        self.path = path


class FileEncodingError(ConfigError):
    """The file named by an ``X_FILE`` variable was read but is not UTF-8 text."""

    def __init__(self, name: str, path: str, reason: object, config: Optional["ClientConfig"] = None) -> None:
        super().__init__(f"contents of {path!r} (for {name}_FILE) are not valid UTF-8: {reason}", config)
        self.name = name
        self.path = path


class MutuallyExclusiveError(ConfigError):
    pass


class MalformedCredentialError(ConfigError):
    pass


class BoolParseError(ConfigError):
    pass


class CertificateParseError(ConfigError):
    pass


class KeyPairParseError(ConfigError):
    pass


class IncompleteKeyPairError(ConfigError):
    pass
