"""
Unit tests for the command-line builder.

Covers validation order, credential precedence, flag formatting, file-spec versus
source/target mode and certificate decisions on both platforms.
"""

import doctest
import importlib

import pytest

from artifactory_upload.builder import (
    AccessToken,
    ApiKey,
    CertificateRequest,
    PathTransfer,
    SpecTransfer,
    UserPassword,
    build_command,
    parse_bool,
    select_credentials,
    select_transfer,
)
from artifactory_upload.errors import (
    MissingCredentials,
    MissingSource,
    MissingTarget,
    MissingURL,
    ValidationError,
)
from artifactory_upload.platform import Platform
from artifactory_upload.utils.config import PluginConfig


def make_config(**overrides) -> PluginConfig:
    values = dict(
        url="https://example.com",
        username="u",
        password="p",
        source="build/app.zip",
        target="libs/app.zip",
    )
    values.update(overrides)
    return PluginConfig(**values)


class TestParseBool:
    @pytest.mark.parametrize("value", ["1", "t", "T", "TRUE", "true", "True"])
    def test_true_values(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["0", "f", "F", "FALSE", "false", "False"])
    def test_false_values(self, value):
        assert parse_bool(value, default=True) is False

    @pytest.mark.parametrize("value", ["", "yes", "on", "tRuE", " true"])
    def test_unparseable_uses_default(self, value):
        assert parse_bool(value) is False
        assert parse_bool(value, default=True) is True


class TestSelectCredentials:
    def test_user_password_wins_over_api_key(self):
        config = make_config(api_key="k", access_token="t")
        assert select_credentials(config) == UserPassword()

    def test_api_key_when_password_missing(self):
        config = make_config(password="", api_key="k", access_token="t")
        assert select_credentials(config) == ApiKey()

    def test_access_token_last(self):
        config = make_config(username="", password="", access_token="t")
        assert select_credentials(config) == AccessToken()

    @pytest.mark.parametrize(
        "overrides",
        [
            dict(username="", password=""),
            dict(username="u", password=""),
            dict(username="", password="p"),
        ],
    )
    def test_nothing_resolvable(self, overrides):
        with pytest.raises(MissingCredentials):
            select_credentials(make_config(**overrides))


class TestSelectTransfer:
    def test_spec_mode_ignores_source_and_target(self):
        config = make_config(spec="upload.json", source="", target="")
        assert select_transfer(config) == SpecTransfer(spec="upload.json")

    def test_path_mode(self):
        assert select_transfer(make_config()) == PathTransfer(
            source="build/app.zip", target="libs/app.zip"
        )

    def test_missing_source(self):
        with pytest.raises(MissingSource):
            select_transfer(make_config(source=""))

    def test_missing_target(self):
        with pytest.raises(MissingTarget):
            select_transfer(make_config(target=""))

    def test_missing_source_reported_before_target(self):
        with pytest.raises(MissingSource):
            select_transfer(make_config(source="", target=""))


class TestBuildCommand:
    def test_module_example_runs(self):
        module = importlib.import_module("artifactory_upload.builder.builder")

        result = doctest.testmod(module)

        assert result.attempted > 0
        assert result.failed == 0

    def test_minimal_posix(self):
        plan = build_command(make_config(), Platform.POSIX)

        assert plan.tokens == [
            "jfrog", "rt", "u",
            "--url", "https://example.com",
            "--user", "$PLUGIN_USERNAME",
            "--password", "$PLUGIN_PASSWORD",
            "--flat=false",
            '"build/app.zip"', "libs/app.zip",
        ]
        assert plan.certificate is None
        assert plan.command_line == (
            "jfrog rt u --url https://example.com --user $PLUGIN_USERNAME "
            '--password $PLUGIN_PASSWORD --flat=false "build/app.zip" libs/app.zip'
        )

    def test_windows_binary_and_env_prefix(self):
        plan = build_command(make_config(), Platform.WINDOWS)

        assert plan.tokens[0] == "C:/bin/jfrog.exe"
        assert "$Env:PLUGIN_USERNAME" in plan.tokens
        assert "$Env:PLUGIN_PASSWORD" in plan.tokens

    def test_secrets_never_inlined(self):
        config = make_config(
            username="deployer", password="hunter2", api_key="AKCp", access_token="eyJ"
        )
        line = build_command(config, Platform.POSIX).command_line

        for secret in ("deployer", "hunter2", "AKCp", "eyJ"):
            assert secret not in line

    def test_api_key_flag(self):
        plan = build_command(make_config(username="", api_key="k"), Platform.POSIX)
        assert plan.tokens[5:7] == ["--apikey", "$PLUGIN_API_KEY"]
        assert "--user" not in plan.tokens

    def test_access_token_flag(self):
        plan = build_command(
            make_config(username="", password="", access_token="t"), Platform.POSIX
        )
        assert plan.tokens[5:7] == ["--access-token", "$PLUGIN_ACCESS_TOKEN"]

    def test_full_flag_order(self):
        config = make_config(
            retries=3,
            flat="true",
            threads=4,
            insecure="true",
            spec="upload.json",
            spec_vars="a=1;b=2",
        )
        plan = build_command(config, Platform.POSIX)

        assert plan.tokens == [
            "jfrog", "rt", "u",
            "--url", "https://example.com",
            "--retries=3",
            "--user", "$PLUGIN_USERNAME",
            "--password", "$PLUGIN_PASSWORD",
            "--flat=true",
            "--threads=4",
            "--insecure-tls",
            "--spec=upload.json",
            "--spec-vars='a=1;b=2'",
        ]

    def test_negative_retries_emitted(self):
        plan = build_command(make_config(retries=-1), Platform.POSIX)
        assert "--retries=-1" in plan.tokens

    def test_zero_and_negative_threads_omitted(self):
        for threads in (0, -2):
            plan = build_command(make_config(threads=threads), Platform.POSIX)
            assert not any(t.startswith("--threads") for t in plan.tokens)

    @pytest.mark.parametrize("flat", ["", "maybe", "false"])
    def test_flat_defaults_false(self, flat):
        plan = build_command(make_config(flat=flat), Platform.POSIX)
        assert "--flat=false" in plan.tokens

    def test_flat_true(self):
        plan = build_command(make_config(flat="true"), Platform.POSIX)
        assert "--flat=true" in plan.tokens

    def test_unparseable_insecure_is_secure(self):
        plan = build_command(make_config(insecure="yes"), Platform.POSIX)
        assert "--insecure-tls" not in plan.tokens

    def test_spec_without_vars(self):
        plan = build_command(make_config(spec="upload.json"), Platform.POSIX)

        assert plan.tokens[-1] == "--spec=upload.json"
        assert '"build/app.zip"' not in plan.tokens
        assert "libs/app.zip" not in plan.tokens

    def test_spec_vars_ignored_without_spec(self):
        plan = build_command(make_config(spec_vars="a=1"), Platform.POSIX)
        assert not any(t.startswith("--spec") for t in plan.tokens)

    def test_source_with_spaces_is_quoted(self):
        plan = build_command(make_config(source="my build/*.zip"), Platform.POSIX)
        assert plan.tokens[-2:] == ['"my build/*.zip"', "libs/app.zip"]


class TestBuildValidation:
    def test_missing_url(self):
        with pytest.raises(MissingURL, match="url needs to be set"):
            build_command(make_config(url=""), Platform.POSIX)

    def test_missing_url_checked_before_credentials(self):
        with pytest.raises(MissingURL):
            build_command(PluginConfig(), Platform.POSIX)

    def test_missing_credentials(self):
        with pytest.raises(MissingCredentials):
            build_command(make_config(username="", password=""), Platform.POSIX)

    def test_missing_target(self):
        with pytest.raises(MissingTarget, match="target path needs to be set"):
            build_command(make_config(target=""), Platform.POSIX)

    def test_errors_share_base_class(self):
        with pytest.raises(ValidationError):
            build_command(make_config(source=""), Platform.POSIX)


class TestCertificateDecision:
    PEM = "-----BEGIN CERTIFICATE-----\nMIIB\n-----END CERTIFICATE-----\n"

    def test_no_contents_no_certificate(self):
        plan = build_command(make_config(pem_file_path="/tmp/x.pem"), Platform.POSIX)
        assert plan.certificate is None

    def test_default_posix_path(self):
        plan = build_command(make_config(pem_file_contents=self.PEM), Platform.POSIX)
        assert plan.certificate == CertificateRequest(
            path="/root/.jfrog/security/certs/cert.pem", contents=self.PEM
        )

    def test_default_windows_path(self):
        plan = build_command(make_config(pem_file_contents=self.PEM), Platform.WINDOWS)
        assert plan.certificate.path == (
            "C:/users/ContainerAdministrator/.jfrog/security/certs/cert.pem"
        )

    def test_explicit_path(self):
        plan = build_command(
            make_config(pem_file_contents=self.PEM, pem_file_path="/etc/ssl/af.pem"),
            Platform.POSIX,
        )
        assert plan.certificate.path == "/etc/ssl/af.pem"

    def test_insecure_suppresses_certificate(self):
        plan = build_command(
            make_config(pem_file_contents=self.PEM, insecure="true"), Platform.POSIX
        )
        assert plan.certificate is None
        assert "--insecure-tls" in plan.tokens

    def test_certificate_repr_hides_contents(self):
        request = CertificateRequest(path="/tmp/c.pem", contents=self.PEM)
        assert "BEGIN CERTIFICATE" not in repr(request)
