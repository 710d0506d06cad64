"""
Release plan: the validated build configuration plus its signing credential.

This is the hand-off object for Gradle. Resolving a plan fails as soon as the
signing credential cannot be loaded, so nothing downstream ever sees a build
without complete signing material.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from droidsign.core.config import AndroidBuildConfig, BuildType, get_config_path, load_build_config
from droidsign.core.keystore import mask_secret
from droidsign.core.signing import SigningCredential, load_signing_credential


# Properties understood by the Android Gradle plugin for injected signing
INJECTED_STORE_FILE = "android.injected.signing.store.file"
INJECTED_STORE_PASSWORD = "android.injected.signing.store.password"
INJECTED_KEY_ALIAS = "android.injected.signing.key.alias"
INJECTED_KEY_PASSWORD = "android.injected.signing.key.password"


@dataclass(frozen=True)
class ReleasePlan:
    """Everything the release build needs from configuration time."""

    project_root: Path
    config: AndroidBuildConfig
    credential: SigningCredential

    @property
    def release(self) -> BuildType:
        return self.config.release

    def gradle_properties(self) -> dict[str, str]:
        return {
            INJECTED_STORE_FILE: str(self.credential.store_file),
            INJECTED_STORE_PASSWORD: self.credential.store_password,
            INJECTED_KEY_ALIAS: self.credential.key_alias,
            INJECTED_KEY_PASSWORD: self.credential.key_password,
        }

    def gradle_args(self) -> list[str]:
        """Render the signing properties as ``-Pname=value`` arguments."""
        return [f"-P{name}={value}" for name, value in self.gradle_properties().items()]

    def summary(self, mask: bool = True) -> dict[str, Any]:
        """Flat, display-friendly view of the plan. Secrets are masked unless mask=False."""
        config = self.config
        defaults = config.default_config
        release = self.release
        credential = self.credential

        def secret(value: str) -> str:
            return mask_secret(value) if mask else value

        proguard = list(release.proguard_files)
        if release.default_proguard_file:
            proguard.insert(0, f"default:{release.default_proguard_file}")

        return {
            "namespace": config.namespace,
            "application_id": defaults.application_id,
            "version_name": defaults.version_name,
            "version_code": defaults.version_code,
            "min_sdk": defaults.min_sdk,
            "target_sdk": defaults.target_sdk,
            "compile_sdk": config.compile_sdk,
            "ndk_version": config.ndk_version,
            "multidex_enabled": defaults.multidex_enabled,
            "minify_enabled": release.minify_enabled,
            "shrink_resources": release.shrink_resources,
            "proguard_files": proguard,
            "java_target": config.compile_options.target_compatibility,
            "core_library_desugaring": config.compile_options.core_library_desugaring,
            "resource_excludes": list(config.packaging.resource_excludes),
            "dependencies": [f"{dep.configuration} {dep.coordinate}" for dep in config.dependencies],
            "store_file": str(credential.store_file),
            "store_password": secret(credential.store_password),
            "key_alias": credential.key_alias,
            "key_password": secret(credential.key_password),
        }


def resolve_release_plan(
    project_root: Optional[Union[str, Path]] = None,
    config: Optional[AndroidBuildConfig] = None,
    key_properties: Optional[Union[str, Path]] = None,
) -> ReleasePlan:
    """
    Build the release plan for an Android project.

    Args:
        project_root: The Android project root (the directory holding
            key.properties). Defaults to the current directory.
        config: Build configuration. Loaded from droidsign.yaml in
            project_root when not given.
        key_properties: Override for the signing properties location.

    Raises:
        ConfigError: Build configuration or signing credential is invalid.
    """
    root = Path(project_root) if project_root is not None else Path.cwd()

    if config is None:
        config = load_build_config(get_config_path(root))

    properties_path = Path(key_properties) if key_properties is not None else root / config.key_properties
    credential = load_signing_credential(properties_path, base_dir=root / config.app_module)

    return ReleasePlan(project_root=root, config=config, credential=credential)
