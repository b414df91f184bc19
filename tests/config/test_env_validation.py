"""
Environment variable validation tests.

Tests regex rules for account names, chunk size, cleanup scope and logging
variables, the authentication cross-check, and boolean flag parsing.
"""

import logging

import pytest

from config.env_validation import (
    ENV_VAR_RULES,
    EnvValidationIssue,
    env_flag,
    log_validation_results,
    validate_environment,
    validate_single_var,
)


class TestAccountNameValidation:
    """BATCH_ACCOUNT_NAME must be 3-24 lowercase letters and digits."""

    rule = ENV_VAR_RULES["BATCH_ACCOUNT_NAME"]

    @pytest.mark.parametrize("value", ["abc", "batchdemo01", "a" * 24])
    def test_valid_names_accepted(self, monkeypatch, value):
        monkeypatch.setenv("BATCH_ACCOUNT_NAME", value)
        assert validate_single_var("BATCH_ACCOUNT_NAME", self.rule) is None

    @pytest.mark.parametrize("value", ["ab", "Batch01", "batch-demo", "a" * 25])
    def test_invalid_names_rejected(self, monkeypatch, value):
        monkeypatch.setenv("BATCH_ACCOUNT_NAME", value)
        result = validate_single_var("BATCH_ACCOUNT_NAME", self.rule)
        assert result is not None
        assert result.severity == "error"

    def test_unset_optional_passes(self, clean_env):
        assert validate_single_var("BATCH_ACCOUNT_NAME", self.rule) is None


class TestChunkSizeValidation:
    """BATCH_SUBMIT_CHUNK_SIZE must be 1..100."""

    rule = ENV_VAR_RULES["BATCH_SUBMIT_CHUNK_SIZE"]

    @pytest.mark.parametrize("value", ["1", "50", "99", "100"])
    def test_in_range_accepted(self, monkeypatch, value):
        monkeypatch.setenv("BATCH_SUBMIT_CHUNK_SIZE", value)
        assert validate_single_var("BATCH_SUBMIT_CHUNK_SIZE", self.rule) is None

    @pytest.mark.parametrize("value", ["0", "101", "1000", "-5", "ten"])
    def test_out_of_range_rejected(self, monkeypatch, value):
        monkeypatch.setenv("BATCH_SUBMIT_CHUNK_SIZE", value)
        assert validate_single_var("BATCH_SUBMIT_CHUNK_SIZE", self.rule) is not None


class TestCleanupScopeValidation:

    rule = ENV_VAR_RULES["BATCH_CLEANUP_SCOPE"]

    @pytest.mark.parametrize("value", ["resource_group", "job", "none"])
    def test_known_scopes_accepted(self, monkeypatch, value):
        monkeypatch.setenv("BATCH_CLEANUP_SCOPE", value)
        assert validate_single_var("BATCH_CLEANUP_SCOPE", self.rule) is None

    def test_unknown_scope_rejected(self, monkeypatch):
        monkeypatch.setenv("BATCH_CLEANUP_SCOPE", "everything")
        assert validate_single_var("BATCH_CLEANUP_SCOPE", self.rule) is not None


class TestLoggingVariables:
    """LOG_LEVEL takes a logging level name, DEBUG_MODE a boolean."""

    @pytest.mark.parametrize("value", ["DEBUG", "info", "Warning"])
    def test_level_names_accepted(self, monkeypatch, value):
        monkeypatch.setenv("LOG_LEVEL", value)
        assert validate_single_var("LOG_LEVEL", ENV_VAR_RULES["LOG_LEVEL"]) is None

    def test_unknown_level_rejected(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")
        assert validate_single_var("LOG_LEVEL", ENV_VAR_RULES["LOG_LEVEL"]) is not None

    def test_debug_mode_must_be_boolean(self, monkeypatch):
        monkeypatch.setenv("DEBUG_MODE", "sometimes")
        assert validate_single_var("DEBUG_MODE", ENV_VAR_RULES["DEBUG_MODE"]) is not None


class TestAuthenticationCrossCheck:

    def test_no_auth_configured_is_an_issue(self, clean_env):
        issues = validate_environment()
        assert [i.var_name for i in issues] == ["AZURE_AUTH_LOCATION"]

    def test_subscription_alone_is_enough(self, clean_env):
        clean_env.setenv("AZURE_SUBSCRIPTION_ID", "12345678-1234-1234-1234-123456789abc")
        assert validate_environment() == []

    def test_auth_file_alone_is_enough(self, clean_env):
        clean_env.setenv("AZURE_AUTH_LOCATION", "/tmp/my.azureauth")
        assert validate_environment() == []

    def test_malformed_subscription_rejected(self, clean_env):
        clean_env.setenv("AZURE_SUBSCRIPTION_ID", "not-a-guid")
        issues = validate_environment()
        assert any(i.var_name == "AZURE_SUBSCRIPTION_ID" for i in issues)


class TestLogValidationResults:

    def test_returns_false_and_logs_errors(self, clean_env, caplog):
        logger = logging.getLogger("test.env_validation")
        with caplog.at_level(logging.ERROR):
            assert log_validation_results(logger) is False
        assert "STARTUP_FAILED" in caplog.text

    def test_returns_true_when_valid(self, clean_env):
        clean_env.setenv("AZURE_SUBSCRIPTION_ID", "12345678-1234-1234-1234-123456789abc")
        assert log_validation_results(logging.getLogger("test.env_validation")) is True


class TestIssueMasking:

    def test_secret_like_names_masked(self):
        issue = EnvValidationIssue(
            var_name="CLIENT_SECRET",
            message="Invalid format",
            current_value="hunter2",
            expected_pattern="x",
            fix_suggestion="y",
        )
        assert issue.to_dict()["current_value"] == "***MASKED***"

    def test_long_values_truncated(self):
        issue = EnvValidationIssue(
            var_name="BATCH_REGION",
            message="Invalid format",
            current_value="x" * 40,
            expected_pattern="x",
            fix_suggestion="y",
        )
        assert issue.to_dict()["current_value"].endswith("(40 chars)")


class TestEnvFlag:

    @pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", " Yes "])
    def test_truthy_values(self, monkeypatch, value):
        monkeypatch.setenv("BATCH_ROTATE_KEYS", value)
        assert env_flag("BATCH_ROTATE_KEYS", False) is True

    @pytest.mark.parametrize("value", ["false", "0", "no", "off"])
    def test_falsy_values(self, monkeypatch, value):
        monkeypatch.setenv("BATCH_ROTATE_KEYS", value)
        assert env_flag("BATCH_ROTATE_KEYS", True) is False

    def test_unset_or_empty_uses_default(self, clean_env):
        assert env_flag("BATCH_ROTATE_KEYS", True) is True
        clean_env.setenv("BATCH_ROTATE_KEYS", "")
        assert env_flag("BATCH_ROTATE_KEYS", True) is True
