"""Core configuration loading for droidsign."""

from droidsign.core.errors import (
    BuildConfigError,
    ConfigError,
    MissingFieldError,
    MissingFileError,
    PropertiesError,
)
from droidsign.core.signing import SigningCredential, load_signing_credential

__all__ = [
    "BuildConfigError",
    "ConfigError",
    "MissingFieldError",
    "MissingFileError",
    "PropertiesError",
    "SigningCredential",
    "load_signing_credential",
]
