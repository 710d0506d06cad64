"""
Shared fixtures for droidsign tests.
"""

import pytest


VALID_PROPERTIES = (
    "storeFile=release.keystore\n"
    "storePassword=secret1\n"
    "keyAlias=upload\n"
    "keyPassword=secret2\n"
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep DROIDSIGN_* variables from the developer's shell out of the tests."""
    for name in ("DROIDSIGN_PROJECT_DIR", "DROIDSIGN_KEY_PROPERTIES", "DROIDSIGN_CONFIG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_key_properties(tmp_path):
    """Write a key.properties file into tmp_path (or a given directory) and return its path."""
    def _write(content: str = VALID_PROPERTIES, directory=None):
        directory = directory or tmp_path
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "key.properties"
        path.write_text(content, encoding="iso-8859-1")
        return path
    return _write
