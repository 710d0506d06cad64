"""
Build configuration management for droidsign.

Handles droidsign.yaml parsing and environment variables. The values are
declarative Android build settings; they are validated here and otherwise
forwarded unchanged to Gradle.
"""

import os
from pathlib import Path
from typing import Optional, Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from droidsign.core.errors import BuildConfigError
from droidsign.core.signing import KEY_PROPERTIES_FILE_NAME


# Default paths
CONFIG_FILE_NAME = "droidsign.yaml"
APP_MODULE = "app"

RELEASE_SIGNING_CONFIG = "release"
SIGNING_CONFIG_NAMES = (RELEASE_SIGNING_CONFIG,)

DESUGARING_CONFIGURATION = "coreLibraryDesugaring"


class DefaultConfig(BaseModel):
    """Settings shared by every build variant."""

    application_id: str = Field(default="com.example.app", description="Application ID on the store")
    min_sdk: int = Field(default=24, ge=1, description="Lowest supported API level")
    target_sdk: int = Field(default=36, ge=1, description="API level the app is tested against")
    version_code: int = Field(default=1, ge=1, description="Monotonic integer version")
    version_name: str = Field(default="1.0.0", description="User-visible version string")
    multidex_enabled: bool = Field(default=True, description="Enable multidex")


class BuildType(BaseModel):
    """A debug or release build type."""

    minify_enabled: bool = Field(default=False, description="Run code shrinking")
    shrink_resources: bool = Field(default=False, description="Remove unused resources")
    default_proguard_file: Optional[str] = Field(
        default=None,
        description="Name passed to getDefaultProguardFile()",
    )
    proguard_files: list[str] = Field(default_factory=list, description="Module proguard rule files")
    signing_config: Optional[str] = Field(default=None, description="Signing config name")

    @model_validator(mode="after")
    def _shrink_requires_minify(self) -> "BuildType":
        if self.shrink_resources and not self.minify_enabled:
            raise ValueError("shrink_resources requires minify_enabled")
        return self


def _default_build_types() -> dict[str, BuildType]:
    return {
        "debug": BuildType(),
        "release": BuildType(
            minify_enabled=True,
            shrink_resources=True,
            default_proguard_file="proguard-android-optimize.txt",
            proguard_files=["proguard-rules.pro"],
            signing_config=RELEASE_SIGNING_CONFIG,
        ),
    }


class CompileOptions(BaseModel):
    """Java/Kotlin compiler targets."""

    source_compatibility: str = Field(default="17", description="Java source level")
    target_compatibility: str = Field(default="17", description="Java bytecode level")
    jvm_target: str = Field(default="17", description="Kotlin JVM target")
    core_library_desugaring: bool = Field(default=True, description="Enable core library desugaring")


class PackagingConfig(BaseModel):
    """APK/AAB packaging options."""

    resource_excludes: list[str] = Field(
        default=[
            "META-INF/DEPENDENCIES",
            "META-INF/NOTICE",
            "META-INF/NOTICE.txt",
            "META-INF/LICENSE",
            "META-INF/LICENSE.txt",
        ],
        description="Resource paths left out of the package",
    )
    use_legacy_jni_packaging: bool = Field(default=False, description="Compress native libraries")


class Dependency(BaseModel):
    """A Maven dependency declared on a Gradle configuration."""

    configuration: str = Field(default="implementation", description="Gradle configuration name")
    coordinate: str = Field(description="group:artifact:version")

    @field_validator("coordinate")
    @classmethod
    def _check_coordinate(cls, value: str) -> str:
        parts = value.split(":")
        if len(parts) < 3 or not all(part.strip() for part in parts):
            raise ValueError(f"dependency coordinate must be group:artifact:version, got '{value}'")
        return value


def _default_dependencies() -> list[Dependency]:
    return [
        Dependency(configuration="implementation", coordinate="androidx.multidex:multidex:2.0.1"),
        Dependency(
            configuration=DESUGARING_CONFIGURATION,
            coordinate="com.android.tools:desugar_jdk_libs:2.1.3",
        ),
    ]


class AndroidBuildConfig(BaseModel):
    """Complete droidsign configuration (droidsign.yaml schema)."""

    namespace: str = Field(default="com.example.app", description="Kotlin/Java namespace of the module")
    ndk_version: Optional[str] = Field(default="27.0.12077973", description="Pinned NDK version")
    compile_sdk: int = Field(default=36, ge=1, description="API level compiled against")

    default_config: DefaultConfig = Field(default_factory=DefaultConfig)
    build_types: dict[str, BuildType] = Field(default_factory=_default_build_types)
    compile_options: CompileOptions = Field(default_factory=CompileOptions)
    packaging: PackagingConfig = Field(default_factory=PackagingConfig)
    dependencies: list[Dependency] = Field(default_factory=_default_dependencies)

    # Paths relative to the Android project root
    key_properties: str = Field(default=KEY_PROPERTIES_FILE_NAME, description="Signing properties file")
    app_module: str = Field(default=APP_MODULE, description="Application module directory")

    @model_validator(mode="after")
    def _check_consistency(self) -> "AndroidBuildConfig":
        defaults = self.default_config
        if defaults.min_sdk > defaults.target_sdk:
            raise ValueError(
                f"min_sdk ({defaults.min_sdk}) must not exceed target_sdk ({defaults.target_sdk})"
            )
        if defaults.target_sdk > self.compile_sdk:
            raise ValueError(
                f"target_sdk ({defaults.target_sdk}) must not exceed compile_sdk ({self.compile_sdk})"
            )

        if RELEASE_SIGNING_CONFIG not in self.build_types:
            raise ValueError("build_types must define 'release'")
        for name, build_type in self.build_types.items():
            if build_type.signing_config not in (None, *SIGNING_CONFIG_NAMES):
                raise ValueError(
                    f"build type '{name}' references unknown signing config "
                    f"'{build_type.signing_config}'"
                )

        if self.compile_options.core_library_desugaring and not any(
            dep.configuration == DESUGARING_CONFIGURATION for dep in self.dependencies
        ):
            raise ValueError(
                f"core_library_desugaring needs a '{DESUGARING_CONFIGURATION}' dependency"
            )
        return self

    @property
    def release(self) -> BuildType:
        return self.build_types[RELEASE_SIGNING_CONFIG]


def get_config_path(base_path: Optional[Path] = None) -> Path:
    """Get the droidsign.yaml config file path."""
    if base_path is None:
        base_path = Path.cwd()
    return Path(base_path) / CONFIG_FILE_NAME


def _format_validation_error(error: ValidationError) -> list[str]:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        message = item["msg"].removeprefix("Value error, ")
        problems.append(f"{location}: {message}" if location else message)
    return problems


def load_build_config(config_path: Optional[Path] = None) -> AndroidBuildConfig:
    """
    Load configuration from droidsign.yaml.

    A missing file yields the defaults. A file that does not validate raises
    BuildConfigError.
    """
    if config_path is None:
        config_path = get_config_path()
    config_path = Path(config_path)

    if not config_path.exists():
        return AndroidBuildConfig()

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise BuildConfigError(config_path, [f"not valid YAML ({e})"]) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise BuildConfigError(config_path, ["top level must be a mapping"])

    try:
        return AndroidBuildConfig.model_validate(data)
    except ValidationError as e:
        raise BuildConfigError(config_path, _format_validation_error(e)) from e


def save_build_config(config: AndroidBuildConfig, config_path: Optional[Path] = None) -> Path:
    """Save configuration to droidsign.yaml."""
    if config_path is None:
        config_path = get_config_path()

    data = config.model_dump(exclude_none=True)

    with open(config_path, "w") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

    return Path(config_path)


def get_env_config() -> dict[str, Any]:
    """Get configuration from environment variables."""
    return {
        "project_dir": Path(os.getenv("DROIDSIGN_PROJECT_DIR", ".")),
        "key_properties": os.getenv("DROIDSIGN_KEY_PROPERTIES") or None,
        "config_path": os.getenv("DROIDSIGN_CONFIG") or None,
    }
