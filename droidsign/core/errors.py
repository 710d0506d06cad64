"""
Exceptions raised while evaluating droidsign configuration.

Every error here is fatal for the build: there is no fallback credential
and no partial-signing mode. The CLI turns them into a single message and
a non-zero exit code.
"""

from pathlib import Path
from typing import Iterable, Optional


class ConfigError(Exception):
    """Base class for configuration problems that abort the build."""


class MissingFileError(ConfigError):
    """The signing properties file does not exist."""

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(
            f"{self.path.name} not found at {self.path} - please create it with "
            "storeFile, storePassword, keyAlias and keyPassword for release signing."
        )


class MissingFieldError(ConfigError):
    """The signing properties file exists but required keys are absent or blank."""

    def __init__(self, fields: Iterable[str], path: Optional[Path] = None):
        self.fields = tuple(fields)
        self.path = Path(path) if path is not None else None
        source = self.path.name if self.path is not None else "key.properties"

        if len(self.fields) == 1:
            message = f"{self.fields[0]} missing in {source} for release signing."
        else:
            message = f"{source} must contain {', '.join(self.fields)} for release signing."
        super().__init__(message)


class PropertiesError(ConfigError):
    """A properties file could not be read or decoded."""


class BuildConfigError(ConfigError):
    """droidsign.yaml failed validation."""

    def __init__(self, path: Path, problems: list[str]):
        self.path = Path(path)
        self.problems = problems
        details = "; ".join(problems)
        super().__init__(f"Invalid build config {self.path}: {details}")
