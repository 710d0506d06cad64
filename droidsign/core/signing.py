"""
Release signing configuration loader.

Reads key.properties once at configuration time and either returns a fully
populated SigningCredential or raises a ConfigError. A partial credential is
never produced.
"""

import os
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from droidsign.core.errors import MissingFieldError, MissingFileError
from droidsign.core.properties import load_properties


KEY_PROPERTIES_FILE_NAME = "key.properties"

STORE_FILE_KEY = "storeFile"
STORE_PASSWORD_KEY = "storePassword"
KEY_ALIAS_KEY = "keyAlias"
KEY_PASSWORD_KEY = "keyPassword"

REQUIRED_KEYS = (STORE_FILE_KEY, STORE_PASSWORD_KEY, KEY_ALIAS_KEY, KEY_PASSWORD_KEY)

# ASCII whitespace only; \x85 and friends can be the tail of a UTF-8 secret read as Latin-1
TRIM_CHARS = " \t\n\r\f\v"


class SigningCredential(BaseModel):
    """Key material for signing a release build."""

    model_config = ConfigDict(frozen=True)

    store_file: Path = Field(description="Absolute path to the keystore")
    store_password: str = Field(min_length=1, repr=False, description="Keystore password")
    key_alias: str = Field(min_length=1, description="Alias of the signing key")
    key_password: str = Field(min_length=1, repr=False, description="Signing key password")

    @field_validator("store_password", "key_alias", "key_password", mode="before")
    @classmethod
    def _trim(cls, value):
        if isinstance(value, str):
            return value.strip(TRIM_CHARS)
        return value

    @field_validator("store_file", mode="before")
    @classmethod
    def _store_file_not_blank(cls, value):
        if isinstance(value, str) and not value.strip(TRIM_CHARS):
            raise ValueError("store_file must not be empty")
        return value


def resolve_store_file(value: str, base_dir: Path) -> Path:
    """Resolve a storeFile value against base_dir into a normalized absolute path."""
    store_file = Path(value)
    if not store_file.is_absolute():
        store_file = Path(base_dir) / store_file
    return Path(os.path.normpath(store_file.absolute()))


def load_signing_credential(
    path: Union[str, Path],
    base_dir: Optional[Union[str, Path]] = None,
) -> SigningCredential:
    """
    Load release signing credentials from a key.properties file.

    Args:
        path: Location of the properties file.
        base_dir: Directory a relative storeFile is resolved against.
            Defaults to the directory holding the properties file.

    Returns:
        The populated credential.

    Raises:
        MissingFileError: No file exists at ``path``.
        MissingFieldError: storeFile, or any of storePassword, keyAlias and
            keyPassword, is absent or blank.
        PropertiesError: The file could not be read or decoded.
    """
    path = Path(path)
    if not path.is_file():
        raise MissingFileError(path)

    properties = load_properties(path)

    store_file = properties.get(STORE_FILE_KEY, "").strip(TRIM_CHARS)
    if not store_file:
        raise MissingFieldError([STORE_FILE_KEY], path)

    secrets = {
        key: properties.get(key, "").strip(TRIM_CHARS)
        for key in (STORE_PASSWORD_KEY, KEY_ALIAS_KEY, KEY_PASSWORD_KEY)
    }
    missing = [key for key, value in secrets.items() if not value]
    if missing:
        raise MissingFieldError(missing, path)

    if base_dir is None:
        base_dir = path.parent

    return SigningCredential(
        store_file=resolve_store_file(store_file, Path(base_dir)),
        store_password=secrets[STORE_PASSWORD_KEY],
        key_alias=secrets[KEY_ALIAS_KEY],
        key_password=secrets[KEY_PASSWORD_KEY],
    )
