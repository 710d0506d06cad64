"""
Keystore sanity checks and secret masking.

Gradle only opens the keystore when it signs, so a missing or odd keystore is
reported as a warning at configuration time rather than an error.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


JKS_MAGIC = b"\xfe\xed\xfe\xed"
JCEKS_MAGIC = b"\xce\xce\xce\xce"
DER_SEQUENCE = 0x30


@dataclass
class KeystoreReport:
    """Result of inspecting a keystore file."""

    path: Path
    exists: bool
    size: int
    format: Optional[str]  # "jks", "jceks", "pkcs12", "unknown" or None when missing

    @property
    def is_usable(self) -> bool:
        return self.exists and self.size > 0 and self.format != "unknown"

    @property
    def concerns(self) -> list[str]:
        if not self.exists:
            return [f"Keystore not found: {self.path}"]
        concerns = []
        if self.size == 0:
            concerns.append(f"Keystore is empty: {self.path}")
        elif self.format == "unknown":
            concerns.append(f"Keystore format not recognised: {self.path}")
        return concerns


def detect_keystore_format(header: bytes) -> str:
    """Guess the keystore type from its first bytes."""
    if header.startswith(JKS_MAGIC):
        return "jks"
    if header.startswith(JCEKS_MAGIC):
        return "jceks"
    if header[:1] and header[0] == DER_SEQUENCE:
        return "pkcs12"
    return "unknown"


def inspect_keystore(path: Path) -> KeystoreReport:
    """Check that the keystore exists and looks like a keystore."""
    path = Path(path)
    if not path.is_file():
        return KeystoreReport(path=path, exists=False, size=0, format=None)

    with open(path, "rb") as f:
        header = f.read(4)

    return KeystoreReport(
        path=path,
        exists=True,
        size=path.stat().st_size,
        format=detect_keystore_format(header),
    )


def mask_secret(value: str) -> str:
    """Mask a password for display without revealing its length past 8 chars."""
    if not value:
        return ""
    return "*" * min(len(value), 8)
