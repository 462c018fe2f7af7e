"""Unified exception hierarchy for lambdaaccess.

Every configuration failure raised by the compiler, the emitter or the
host adapter inherits from AccessConfigError. There is one taxonomy
("the configuration is invalid"); subclasses only exist so callers can
catch narrower cases, and each carries a stable error code.

Usage:
    from lambdaaccess.exceptions import AccessConfigError

    try:
        plugin.before_deploy()
    except AccessConfigError as e:
        print(e.code, e.message, e.details)
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "AccessConfigError",
    "ConfigurationError",
    "GroupReferenceError",
    "PolicyConfigError",
    "RoleConfigError",
    "DuplicateRoleError",
    "PrincipalConfigError",
    "SchemaValidationError",
]


# ---- Exception Hierarchy ----------------------------------------------------


class AccessConfigError(Exception):
    """Base exception for all lambdaaccess failures.

    Attributes:
        code: Stable error code string (e.g. "DUPLICATE_ROLE_ERROR").
        message: Human-readable error description.
        details: Offending group/function/role names as keyword arguments.
    """

    code: str = "ACCESS_CONFIG_ERROR"
    message: str = "Invalid access configuration"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(AccessConfigError):
    """Invalid or missing top-level configuration."""

    code: str = "CONFIGURATION_ERROR"


class GroupReferenceError(AccessConfigError, ReferenceError):
    """A function references an access group that is not declared."""

    code: str = "GROUP_REFERENCE_ERROR"


class PolicyConfigError(AccessConfigError):
    """Group policy is malformed."""

    code: str = "POLICY_CONFIG_ERROR"


class RoleConfigError(AccessConfigError):
    """Group role directive is malformed."""

    code: str = "ROLE_CONFIG_ERROR"


class DuplicateRoleError(RoleConfigError):
    """Two role directives resolve to the same resource name."""

    code: str = "DUPLICATE_ROLE_ERROR"


class PrincipalConfigError(AccessConfigError):
    """Principal value has an unsupported shape."""

    code: str = "PRINCIPAL_CONFIG_ERROR"


class SchemaValidationError(ConfigurationError):
    """Access block does not match the declared schema."""

    code: str = "SCHEMA_VALIDATION_ERROR"
