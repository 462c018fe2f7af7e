"""Name and principal normalization for generated resources.

Provides:
- ``normalize_name()``: identifier-safe fragment for logical names.
- ``LiteralPrincipal`` / ``ExportedPrincipal``: the two principal shapes.
- ``normalize_principal()``: dispatch raw values onto those shapes.
- ``lambda_logical_id()``: the host's default function logical id.
- ``permission_resource_name()`` / ``role_resource_name()``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Union

from .exceptions import PrincipalConfigError

_WORD_START = re.compile(r"\b\w", re.ASCII)
_SEPARATORS = re.compile(r"[_\W]+", re.ASCII)

# Marker for template intrinsic functions, e.g. ``Fn::ImportValue``
INTRINSIC_MARKER = "Fn::"


def as_list(value: Any) -> list[Any]:
    """Normalize a scalar-or-list input to a list.

    ``None`` becomes an empty list, lists and tuples are copied,
    anything else becomes a one-element list.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def normalize_name(name: str) -> str:
    """Title-case each word and strip separators.

    Example::

        >>> normalize_name("arn:aws:iam::111111111111:root")
        'ArnAwsIam111111111111Root'
    """
    titled = _WORD_START.sub(lambda m: m.group(0).upper(), name)
    return _SEPARATORS.sub("", titled)


@dataclass(frozen=True)
class LiteralPrincipal:
    """Account id or ARN given as a plain value."""

    value: str

    @property
    def name(self) -> str:
        return normalize_name(self.value)

    @property
    def emitted(self) -> str:
        return self.value


@dataclass(frozen=True)
class ExportedPrincipal:
    """Principal produced elsewhere in the template.

    ``value`` is the original intrinsic-function mapping and is emitted
    unchanged; ``embedded_name`` only feeds the logical name.
    """

    function: str
    embedded_name: str
    value: dict[str, Any]

    @property
    def name(self) -> str:
        return normalize_name(self.embedded_name)

    @property
    def emitted(self) -> dict[str, Any]:
        return self.value


Principal = Union[LiteralPrincipal, ExportedPrincipal]


def _embedded_name(argument: Any) -> str:
    """Template-engine string form of an intrinsic argument.

    Nested mappings render as ``[object Object]`` and lists join their
    items with ``,`` so logical names stay stable for existing stacks.
    """
    if isinstance(argument, dict):
        return "[object Object]"
    if isinstance(argument, (list, tuple)):
        return ",".join("" if item is None else _embedded_name(item) for item in argument)
    if isinstance(argument, bool):
        return "true" if argument else "false"
    return str(argument)


def normalize_principal(value: Any) -> Principal:
    """Map a raw principal value onto its tagged shape.

    Raises:
        PrincipalConfigError: value is neither a literal nor an intrinsic reference.
    """
    if isinstance(value, dict):
        function = next((key for key in value if isinstance(key, str) and INTRINSIC_MARKER in key), None)
        if function is None:
            raise PrincipalConfigError(
                f"Principal {value!r} is not a string, a number or an intrinsic function reference",
                principal=value,
            )
        return ExportedPrincipal(
            function=function,
            embedded_name=_embedded_name(value[function]),
            value=value,
        )

    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise PrincipalConfigError(
            f"Principal {value!r} is not a string, a number or an intrinsic function reference",
            principal=value,
        )
    return LiteralPrincipal(value=str(value))


def lambda_logical_id(function_name: str) -> str:
    """Default function name → logical id mapping used by the host.

    Example::

        >>> lambda_logical_id("my-function_1")
        'MyDashfunctionUnderscore1LambdaFunction'
    """
    normalized = function_name.replace("-", "Dash").replace("_", "Underscore")
    return f"{normalized[:1].upper()}{normalized[1:]}LambdaFunction"


def permission_resource_name(function_logical_id: str, principal: Principal) -> str:
    return f"{function_logical_id}PermitInvokeFrom{principal.name}"


def role_resource_name(role_name: str) -> str:
    return f"LambdaAccessRole{normalize_name(role_name)}"


__all__ = [
    "ExportedPrincipal",
    "INTRINSIC_MARKER",
    "LiteralPrincipal",
    "Principal",
    "as_list",
    "lambda_logical_id",
    "normalize_name",
    "normalize_principal",
    "permission_resource_name",
    "role_resource_name",
]
