"""Declared shape of the access configuration.

Pydantic models for ``provider.access`` and the ``allowAccess`` function
property. The host uses the generated JSON schemas to reject malformed
configuration before the build step runs; :func:`validate_access` runs the
same check in-process.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, Field, ValidationError, model_validator

from .exceptions import SchemaValidationError
from .resources import DEFAULT_MAX_SESSION_DURATION, MAX_SESSION_DURATION, MIN_SESSION_DURATION

PROVIDER_NAME = "aws"

PrincipalValue = Union[str, int, dict[str, Any]]
Principals = Union[PrincipalValue, list[PrincipalValue]]


class RoleSchema(BaseModel):
    """Assumable role granted to a group."""

    model_config = {"extra": "forbid", "populate_by_name": True}

    name: str
    principals: Principals
    allow_tag_session: bool = Field(default=False, alias="allowTagSession")
    max_session_duration: int = Field(
        default=DEFAULT_MAX_SESSION_DURATION,
        ge=MIN_SESSION_DURATION,
        le=MAX_SESSION_DURATION,
        alias="maxSessionDuration",
        description="Maximum session duration in seconds",
    )


class PolicySchema(BaseModel):
    """Direct invoke permission granted to a group."""

    principals: Principals


class GroupSchema(BaseModel):
    """A named access group; needs a policy, a role, or both."""

    model_config = {"extra": "forbid", "json_schema_extra": {"minProperties": 1}}

    policy: Optional[PolicySchema] = None
    role: Optional[Union[RoleSchema, list[RoleSchema]]] = None

    @model_validator(mode="after")
    def check_not_empty(self) -> "GroupSchema":
        if self.policy is None and self.role is None:
            raise ValueError("Access group must define a policy or a role")
        return self


class AccessSchema(BaseModel):
    """The ``provider.access`` block."""

    model_config = {"extra": "forbid"}

    groups: dict[str, GroupSchema] = Field(min_length=1)


class FunctionAccessSchema(BaseModel):
    """The ``allowAccess`` property added to every function."""

    model_config = {"extra": "allow", "populate_by_name": True}

    allow_access: Optional[Union[str, list[str]]] = Field(default=None, alias="allowAccess")


_DEFS_PREFIX = "#/$defs/"


def _inline_refs(node: Any, defs: dict[str, Any]) -> Any:
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str) and ref.startswith(_DEFS_PREFIX):
            resolved = _inline_refs(defs[ref[len(_DEFS_PREFIX) :]], defs)
            siblings = {k: _inline_refs(v, defs) for k, v in node.items() if k != "$ref"}
            return {**resolved, **siblings}
        return {k: _inline_refs(v, defs) for k, v in node.items() if k != "$defs"}
    if isinstance(node, list):
        return [_inline_refs(item, defs) for item in node]
    return node


def model_schema(model: type[BaseModel]) -> dict[str, Any]:
    """JSON schema of ``model`` with every ``$defs`` reference inlined.

    The host nests these schemas inside its own document, where
    root-relative references would no longer resolve.
    """
    schema = model.model_json_schema(by_alias=True)
    return _inline_refs(schema, schema.get("$defs", {}))


def function_properties_schema() -> dict[str, Any]:
    schema = model_schema(FunctionAccessSchema)
    return {"properties": schema["properties"]}


def provider_schema() -> dict[str, Any]:
    return {
        "provider": {
            "properties": {
                "access": model_schema(AccessSchema),
            },
        },
    }


def _supports(handler: Any, method: str) -> bool:
    return handler is not None and callable(getattr(handler, method, None))


def define_schemas(handler: Any) -> bool:
    """Register the function-property and provider schemas with a host handler.

    Hosts without schema support (no handler, or a handler lacking
    ``define_function_properties`` / ``define_provider``) are skipped.

    Returns:
        True if at least one schema was registered.
    """
    registered = False
    if _supports(handler, "define_function_properties"):
        handler.define_function_properties(PROVIDER_NAME, function_properties_schema())
        registered = True
    if _supports(handler, "define_provider"):
        handler.define_provider(PROVIDER_NAME, provider_schema())
        registered = True
    return registered


def validate_access(access: Any) -> AccessSchema:
    """Check a raw ``provider.access`` block against :class:`AccessSchema`.

    Raises:
        SchemaValidationError: the block does not match; ``details["errors"]``
            holds the pydantic error list.
    """
    try:
        return AccessSchema.model_validate(access)
    except ValidationError as e:
        raise SchemaValidationError(
            f"Invalid access configuration: {e.error_count()} error(s)\n{e}",
            errors=e.errors(include_url=False),
        ) from e


__all__ = [
    "AccessSchema",
    "FunctionAccessSchema",
    "GroupSchema",
    "PROVIDER_NAME",
    "PolicySchema",
    "RoleSchema",
    "define_schemas",
    "function_properties_schema",
    "model_schema",
    "provider_schema",
    "validate_access",
]
