"""
Environment Variable Validation Module.

Validates environment variables at startup using regex patterns to catch
configuration errors EARLY with clear, actionable error messages, before
any Azure call is made.

Design Philosophy:
    - FAIL FAST: Catch config errors at startup, not halfway through provisioning
    - CLEAR ERRORS: Show exactly what's wrong and how to fix it
    - ZERO DEPENDENCIES: Only standard library imports

Usage:
    from config.env_validation import validate_environment

    issues = validate_environment()
    for issue in issues:
        print(f"{issue.var_name}: {issue.message}")

Exports:
    ENV_VAR_RULES: Dict of all validation rules
    EnvVarRule: Rule definition
    EnvValidationIssue: Dataclass for a failed check
    env_flag: Read a boolean environment variable
    validate_environment: Main validation function
    validate_single_var: Validate one variable
    log_validation_results: Log issues and return overall pass/fail
"""

import os
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern, Any


_TRUE_VALUES = {"true", "1", "yes"}


def env_flag(name: str, default: bool) -> bool:
    """Read a boolean environment variable (true/1/yes, case-insensitive)."""
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in _TRUE_VALUES


# ============================================================================
# VALIDATION ISSUE
# ============================================================================

@dataclass
class EnvValidationIssue:
    """Result of a failed environment variable validation."""
    var_name: str
    message: str
    current_value: Optional[str]
    expected_pattern: str
    fix_suggestion: str
    severity: str = "error"  # error, warning

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "var_name": self.var_name,
            "message": self.message,
            "current_value": self._mask_sensitive(self.current_value),
            "expected_pattern": self.expected_pattern,
            "fix_suggestion": self.fix_suggestion,
            "severity": self.severity,
        }

    def _mask_sensitive(self, value: Optional[str]) -> Optional[str]:
        """Mask potentially sensitive values."""
        if value is None:
            return None
        sensitive_keywords = ["password", "secret", "key", "token"]
        var_lower = self.var_name.lower()
        if any(kw in var_lower for kw in sensitive_keywords):
            return "***MASKED***"
        if len(value) > 30:
            return f"{value[:20]}...({len(value)} chars)"
        return value


# ============================================================================
# VALIDATION RULE DEFINITION
# ============================================================================

@dataclass
class EnvVarRule:
    """
    Validation rule for an environment variable.

    Attributes:
        pattern: Compiled regex pattern for validation
        pattern_description: Human-readable description of expected format
        required: Whether this variable must be set
        fix_suggestion: How to fix if validation fails
        example: Example valid value
    """
    pattern: Pattern
    pattern_description: str
    required: bool
    fix_suggestion: str
    example: str


# ============================================================================
# VALIDATION RULES
# ============================================================================

_ACCOUNT_NAME = re.compile(r"^[a-z0-9]{3,24}$")
_REGION = re.compile(r"^[A-Za-z0-9 ]{2,40}$")
_RESOURCE_GROUP = re.compile(r"^[-\w.()]{1,89}[-\w()]$")
_BATCH_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")
_GUID = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")
_NON_NEGATIVE_INT = re.compile(r"^[0-9]+$")
_NON_NEGATIVE_NUMBER = re.compile(r"^[0-9]+(\.[0-9]+)?$")
_CHUNK_SIZE = re.compile(r"^([1-9]|[1-9][0-9]|100)$")
_BOOLEAN = re.compile(r"^(true|false|1|0|yes|no)$", re.IGNORECASE)
_CLEANUP_SCOPE = re.compile(r"^(resource_group|job|none)$")
_ANY_PATH = re.compile(r"^.+$")
_LOG_LEVEL = re.compile(r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$", re.IGNORECASE)


ENV_VAR_RULES: Dict[str, EnvVarRule] = {
    # =========================================================================
    # AUTHENTICATION
    # =========================================================================
    "AZURE_AUTH_LOCATION": EnvVarRule(
        pattern=_ANY_PATH,
        pattern_description="Path to a service principal credential file",
        required=False,
        fix_suggestion="Create one with 'az ad sp create-for-rbac --sdk-auth > my.azureauth'",
        example="/home/me/my.azureauth",
    ),
    "AZURE_SUBSCRIPTION_ID": EnvVarRule(
        pattern=_GUID,
        pattern_description="Subscription GUID (used when AZURE_AUTH_LOCATION is not set)",
        required=False,
        fix_suggestion="Use 'az account show --query id -o tsv'",
        example="00000000-0000-0000-0000-000000000000",
    ),

    # =========================================================================
    # ACCOUNT
    # =========================================================================
    "BATCH_REGION": EnvVarRule(
        pattern=_REGION,
        pattern_description="Azure region name",
        required=False,
        fix_suggestion="Use a region name such as 'eastus' or 'West Europe'",
        example="eastus",
    ),
    "BATCH_RESOURCE_GROUP": EnvVarRule(
        pattern=_RESOURCE_GROUP,
        pattern_description="1-90 chars: letters, digits, '-', '_', '.', '(' and ')'; not ending in '.'",
        required=False,
        fix_suggestion="Pick a resource group name without spaces",
        example="rg-batch-demo",
    ),
    "BATCH_ACCOUNT_NAME": EnvVarRule(
        pattern=_ACCOUNT_NAME,
        pattern_description="3-24 lowercase letters and digits",
        required=False,
        fix_suggestion="Remove uppercase letters, hyphens and underscores",
        example="batchdemo01",
    ),
    "BATCH_STORAGE_ACCOUNT_NAME": EnvVarRule(
        pattern=_ACCOUNT_NAME,
        pattern_description="3-24 lowercase letters and digits",
        required=False,
        fix_suggestion="Remove uppercase letters, hyphens and underscores",
        example="batchstorage01",
    ),
    "BATCH_ROTATE_KEYS": EnvVarRule(
        pattern=_BOOLEAN,
        pattern_description="Boolean",
        required=False,
        fix_suggestion="Use 'true' or 'false'",
        example="false",
    ),
    "BATCH_DELETE_ACCOUNT": EnvVarRule(
        pattern=_BOOLEAN,
        pattern_description="Boolean",
        required=False,
        fix_suggestion="Use 'true' or 'false'",
        example="false",
    ),

    # =========================================================================
    # POOL
    # =========================================================================
    "BATCH_POOL_ID": EnvVarRule(
        pattern=_BATCH_ID,
        pattern_description="1-64 letters, digits, '-' or '_'",
        required=False,
        fix_suggestion="Remove spaces and punctuation",
        example="demo-pool",
    ),
    "BATCH_POOL_DEDICATED_NODES": EnvVarRule(
        pattern=_NON_NEGATIVE_INT,
        pattern_description="Non-negative integer",
        required=False,
        fix_suggestion="Use a whole number of nodes",
        example="3",
    ),
    "BATCH_POOL_STEADY_TIMEOUT_SECONDS": EnvVarRule(
        pattern=_NON_NEGATIVE_NUMBER,
        pattern_description="Positive number of seconds",
        required=False,
        fix_suggestion="Use a number of seconds",
        example="300",
    ),
    "BATCH_POOL_POLL_INTERVAL_SECONDS": EnvVarRule(
        pattern=_NON_NEGATIVE_NUMBER,
        pattern_description="Non-negative number of seconds",
        required=False,
        fix_suggestion="Use a number of seconds",
        example="30",
    ),
    "BATCH_FAIL_ON_POOL_TIMEOUT": EnvVarRule(
        pattern=_BOOLEAN,
        pattern_description="Boolean",
        required=False,
        fix_suggestion="Use 'true' or 'false'",
        example="true",
    ),

    # =========================================================================
    # JOB / TASKS
    # =========================================================================
    "BATCH_JOB_ID": EnvVarRule(
        pattern=_BATCH_ID,
        pattern_description="1-64 letters, digits, '-' or '_'",
        required=False,
        fix_suggestion="Remove spaces and punctuation",
        example="demo-job",
    ),
    "BATCH_TASK_COUNT": EnvVarRule(
        pattern=_NON_NEGATIVE_INT,
        pattern_description="Non-negative integer",
        required=False,
        fix_suggestion="Use a whole number of tasks",
        example="1500",
    ),
    "BATCH_SUBMIT_CHUNK_SIZE": EnvVarRule(
        pattern=_CHUNK_SIZE,
        pattern_description="Integer from 1 to 100 (Batch add_collection limit)",
        required=False,
        fix_suggestion="The Batch service accepts at most 100 tasks per request",
        example="100",
    ),
    "BATCH_MONITOR_ITERATIONS": EnvVarRule(
        pattern=_NON_NEGATIVE_INT,
        pattern_description="Non-negative integer",
        required=False,
        fix_suggestion="Use a whole number of polls",
        example="300",
    ),
    "BATCH_MONITOR_INTERVAL_SECONDS": EnvVarRule(
        pattern=_NON_NEGATIVE_NUMBER,
        pattern_description="Non-negative number of seconds",
        required=False,
        fix_suggestion="Use a number of seconds",
        example="10",
    ),
    "BATCH_MONITOR_STOP_WHEN_COMPLETE": EnvVarRule(
        pattern=_BOOLEAN,
        pattern_description="Boolean",
        required=False,
        fix_suggestion="Use 'true' or 'false'",
        example="true",
    ),
    "BATCH_CLEANUP_SCOPE": EnvVarRule(
        pattern=_CLEANUP_SCOPE,
        pattern_description="One of resource_group, job, none",
        required=False,
        fix_suggestion="Use 'resource_group' to delete everything the run created",
        example="resource_group",
    ),

    # =========================================================================
    # LOGGING
    # =========================================================================
    "LOG_LEVEL": EnvVarRule(
        pattern=_LOG_LEVEL,
        pattern_description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
        required=False,
        fix_suggestion="Use a standard logging level name",
        example="INFO",
    ),
    "DEBUG_MODE": EnvVarRule(
        pattern=_BOOLEAN,
        pattern_description="Boolean (true forces DEBUG logging)",
        required=False,
        fix_suggestion="Use 'true' or 'false'",
        example="false",
    ),
}


# ============================================================================
# VALIDATION FUNCTIONS
# ============================================================================

def validate_single_var(var_name: str, rule: EnvVarRule) -> Optional[EnvValidationIssue]:
    """
    Validate a single environment variable against its rule.

    Returns:
        EnvValidationIssue if validation fails, None if it passes or is unset and optional
    """
    value = os.environ.get(var_name)

    if rule.required and not value:
        return EnvValidationIssue(
            var_name=var_name,
            message="Required environment variable not set",
            current_value=value,
            expected_pattern=rule.pattern_description,
            fix_suggestion=f"{rule.fix_suggestion}. Example: {rule.example}",
        )

    if not value:
        return None

    if not rule.pattern.match(value):
        return EnvValidationIssue(
            var_name=var_name,
            message="Invalid format",
            current_value=value,
            expected_pattern=rule.pattern_description,
            fix_suggestion=f"{rule.fix_suggestion}. Example: {rule.example}",
        )

    return None


def validate_environment(rules: Optional[Dict[str, EnvVarRule]] = None) -> List[EnvValidationIssue]:
    """
    Validate all environment variables against their rules, plus the
    cross-variable requirement that some form of authentication is configured.

    Returns:
        List of EnvValidationIssue objects (empty when everything is valid)
    """
    if rules is None:
        rules = ENV_VAR_RULES

    issues = []
    for var_name, rule in rules.items():
        issue = validate_single_var(var_name, rule)
        if issue:
            issues.append(issue)

    if not os.environ.get("AZURE_AUTH_LOCATION") and not os.environ.get("AZURE_SUBSCRIPTION_ID"):
        issues.append(EnvValidationIssue(
            var_name="AZURE_AUTH_LOCATION",
            message="No authentication configured",
            current_value=None,
            expected_pattern="AZURE_AUTH_LOCATION or AZURE_SUBSCRIPTION_ID",
            fix_suggestion="Set AZURE_AUTH_LOCATION to a credential file, "
                           "or AZURE_SUBSCRIPTION_ID to use DefaultAzureCredential",
        ))

    return issues


def log_validation_results(logger) -> bool:
    """
    Log validation results at ERROR level.

    Returns:
        True if no errors, False if there are errors
    """
    issues = validate_environment()

    for issue in issues:
        logger.error(
            f"ENV VAR ERROR: {issue.var_name} - {issue.message}",
            extra={'custom_dimensions': issue.to_dict()}
        )

    if issues:
        logger.error(f"❌ STARTUP_FAILED: {len(issues)} environment variable errors")
        return False

    logger.info("✅ Environment validation passed")
    return True


__all__ = [
    "ENV_VAR_RULES",
    "EnvVarRule",
    "EnvValidationIssue",
    "env_flag",
    "validate_environment",
    "validate_single_var",
    "log_validation_results",
]
