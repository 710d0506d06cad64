"""
Tests for release plan resolution and keystore checks.
"""

import pytest

from droidsign.core.config import AndroidBuildConfig
from droidsign.core.errors import MissingFieldError, MissingFileError
from droidsign.core.keystore import KeystoreReport, detect_keystore_format, inspect_keystore, mask_secret
from droidsign.core.plan import resolve_release_plan


class TestResolveReleasePlan:
    """Plan = build config + signing credential."""

    def test_store_file_relative_to_app_module(self, write_key_properties, tmp_path):
        """storeFile resolves against android/app, like file() in the app build script."""
        write_key_properties()

        plan = resolve_release_plan(tmp_path)

        assert plan.credential.store_file == tmp_path / "app" / "release.keystore"
        assert plan.config == AndroidBuildConfig()
        assert plan.project_root == tmp_path

    def test_store_file_outside_module(self, write_key_properties, tmp_path):
        write_key_properties(
            "storeFile=../keys/upload.jks\nstorePassword=secret1\nkeyAlias=upload\nkeyPassword=secret2\n"
        )

        plan = resolve_release_plan(tmp_path)

        assert plan.credential.store_file == tmp_path / "keys" / "upload.jks"

    def test_missing_key_properties_aborts(self, tmp_path):
        with pytest.raises(MissingFileError):
            resolve_release_plan(tmp_path)

    def test_incomplete_key_properties_aborts(self, write_key_properties, tmp_path):
        write_key_properties("storeFile=release.keystore\n")

        with pytest.raises(MissingFieldError):
            resolve_release_plan(tmp_path)

    def test_reads_droidsign_yaml(self, write_key_properties, tmp_path):
        """key_properties and app_module come from droidsign.yaml."""
        write_key_properties(directory=tmp_path / "signing")
        (tmp_path / "droidsign.yaml").write_text(
            "key_properties: signing/key.properties\napp_module: mobile\n"
        )

        plan = resolve_release_plan(tmp_path)

        assert plan.credential.store_file == tmp_path / "mobile" / "release.keystore"

    def test_explicit_key_properties(self, write_key_properties, tmp_path):
        path = write_key_properties(directory=tmp_path / "elsewhere")

        plan = resolve_release_plan(tmp_path, config=AndroidBuildConfig(), key_properties=path)

        assert plan.credential.key_alias == "upload"


class TestReleasePlanOutput:
    """What is handed to Gradle."""

    @pytest.fixture
    def plan(self, write_key_properties, tmp_path):
        write_key_properties()
        return resolve_release_plan(tmp_path)

    def test_gradle_properties(self, plan, tmp_path):
        assert plan.gradle_properties() == {
            "android.injected.signing.store.file": str(tmp_path / "app" / "release.keystore"),
            "android.injected.signing.store.password": "secret1",
            "android.injected.signing.key.alias": "upload",
            "android.injected.signing.key.password": "secret2",
        }

    def test_gradle_args(self, plan):
        args = plan.gradle_args()

        assert len(args) == 4
        assert "-Pandroid.injected.signing.key.alias=upload" in args
        assert "-Pandroid.injected.signing.store.password=secret1" in args

    def test_summary_masks_secrets(self, plan):
        summary = plan.summary()

        assert summary["store_password"] == "*******"
        assert summary["key_password"] == "*******"
        assert summary["key_alias"] == "upload"
        assert summary["proguard_files"] == ["default:proguard-android-optimize.txt", "proguard-rules.pro"]
        assert "coreLibraryDesugaring com.android.tools:desugar_jdk_libs:2.1.3" in summary["dependencies"]

    def test_summary_unmasked(self, plan):
        summary = plan.summary(mask=False)

        assert summary["store_password"] == "secret1"
        assert summary["key_password"] == "secret2"


class TestKeystore:
    """Keystore inspection and masking."""

    def test_mask_secret(self):
        assert mask_secret("") == ""
        assert mask_secret("abc") == "***"
        assert mask_secret("a-very-long-password") == "********"

    def test_missing_keystore(self, tmp_path):
        report = inspect_keystore(tmp_path / "upload.jks")

        assert not report.exists
        assert not report.is_usable
        assert report.format is None
        assert "not found" in report.concerns[0]

    def test_jks_keystore(self, tmp_path):
        path = tmp_path / "upload.jks"
        path.write_bytes(b"\xfe\xed\xfe\xed" + b"\x00" * 60)

        report = inspect_keystore(path)

        assert report.exists
        assert report.format == "jks"
        assert report.size == 64
        assert report.is_usable
        assert report.concerns == []

    def test_pkcs12_keystore(self, tmp_path):
        path = tmp_path / "upload.p12"
        path.write_bytes(b"\x30\x82\x0a\x1b" + b"\x00" * 12)

        assert inspect_keystore(path).format == "pkcs12"

    def test_unrecognised_keystore(self, tmp_path):
        path = tmp_path / "upload.jks"
        path.write_text("not a keystore")

        report = inspect_keystore(path)

        assert report.format == "unknown"
        assert not report.is_usable
        assert "not recognised" in report.concerns[0]

    def test_empty_keystore(self, tmp_path):
        path = tmp_path / "upload.jks"
        path.write_bytes(b"")

        report = inspect_keystore(path)

        assert not report.is_usable
        assert "empty" in report.concerns[0]

    def test_detect_jceks(self):
        assert detect_keystore_format(b"\xce\xce\xce\xce") == "jceks"

    def test_report_is_plain_data(self, tmp_path):
        report = KeystoreReport(path=tmp_path / "a.jks", exists=True, size=10, format="jks")
        assert report.is_usable
