"""Access config compiler.

Resolves ``allowAccess`` declarations on functions against the declared
access groups and produces the intermediate representation consumed by
:mod:`lambdaaccess.emitter`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from .exceptions import GroupReferenceError
from .naming import as_list, lambda_logical_id

logger = logging.getLogger(__name__)


@dataclass
class ResolvedGroup:
    """A group with the logical ids of every function that joined it.

    ``policy`` and ``role`` are carried through from the declaration
    unchanged; the emitter validates them.
    """

    name: str
    functions: list[str] = field(default_factory=list)
    policy: Any = None
    role: Any = None

    @property
    def is_used(self) -> bool:
        return bool(self.functions)


def compile_access_config(
    groups: Mapping[str, Any],
    functions: Mapping[str, Any],
    name_to_logical_id: Callable[[str], str] = lambda_logical_id,
) -> dict[str, ResolvedGroup]:
    """Resolve function membership for every declared group.

    Args:
        groups: Group name → ``{"policy": ..., "role": ...}``.
        functions: Function name → declaration, optionally with ``allowAccess``.
        name_to_logical_id: Maps a function name to its logical id.

    Returns:
        Group name → :class:`ResolvedGroup`, in the declaration order of ``groups``.

    Raises:
        GroupReferenceError: a function references an undeclared group.

    Example::

        resolved = compile_access_config(
            {"api": {"policy": {"principals": 111111111111}}},
            {"function1": {"allowAccess": "api"}},
        )
        resolved["api"].functions  # ["Function1LambdaFunction"]
    """
    resolved: dict[str, ResolvedGroup] = {}
    for group_name, group in groups.items():
        group = group or {}
        resolved[group_name] = ResolvedGroup(
            name=group_name,
            policy=group.get("policy"),
            role=group.get("role"),
        )

    for function_name, function in functions.items():
        allow_access = (function or {}).get("allowAccess")
        if not allow_access:
            continue

        function_logical_id = name_to_logical_id(function_name)
        for group_name in as_list(allow_access):
            group = resolved.get(group_name)
            if group is None:
                raise GroupReferenceError(
                    f'Function "{function_name}" references an access group "{group_name}" that does not exist',
                    function=function_name,
                    group=group_name,
                )
            group.functions.append(function_logical_id)
            logger.debug("Function %s joined access group %s", function_logical_id, group_name)

    return resolved


__all__ = [
    "ResolvedGroup",
    "compile_access_config",
]
