"""Resource emitter.

Turns the compiler's resolved groups into template resources:

- one ``AWS::Lambda::Permission`` per (function, principal) pair, and
- one ``AWS::IAM::Role`` per declared role name.

Permissions for the same function are chained with ``DependsOn`` so the
provisioner creates them one at a time; Lambda rejects concurrent
permission updates on a single function.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from .compiler import ResolvedGroup
from .exceptions import DuplicateRoleError, PolicyConfigError, RoleConfigError
from .logging import get_access_logger, safe_preview
from .naming import as_list, normalize_principal, permission_resource_name, role_resource_name
from .resources import DEFAULT_MAX_SESSION_DURATION, ResourceCollection, build_permission, build_role

# function logical id -> name of the last permission created for it
PermissionChain = dict[str, str]


def emit_access_resources(
    resolved: Mapping[str, ResolvedGroup],
    resources: Optional[ResourceCollection] = None,
    log: Optional[Callable[[str], None]] = None,
) -> ResourceCollection:
    """Add permission and role resources for every used group.

    Groups are processed in order; within a group the policy comes before
    the role. Resources inserted before a failure are kept.

    Args:
        resolved: Output of :func:`lambdaaccess.compiler.compile_access_config`.
        resources: Collection to insert into (a new one when omitted).
        log: Diagnostic sink for unused groups (default: module logger).

    Returns:
        The collection that was written to.

    Raises:
        PolicyConfigError: a policy has no principals.
        RoleConfigError: a role has no name or no principals.
        DuplicateRoleError: a role name was already emitted.
    """
    if resources is None:
        resources = ResourceCollection()

    chain: PermissionChain = {}
    for group in resolved.values():
        if not group.is_used:
            if log is None:
                get_access_logger(__name__, group=group.name).warning('Group "%s" is not used', group.name)
            else:
                log(f'WARNING: Group "{group.name}" is not used')
            continue

        if group.policy is not None:
            chain = _emit_policy(group, resources, chain)
        if group.role is not None:
            _emit_roles(group, resources)

    return resources


def _emit_policy(group: ResolvedGroup, resources: ResourceCollection, chain: PermissionChain) -> PermissionChain:
    principals = group.policy.get("principals") if isinstance(group.policy, Mapping) else None
    if principals is None:
        raise PolicyConfigError(
            f'Policy of access group "{group.name}" must define principals',
            group=group.name,
        )

    log = get_access_logger(__name__, group=group.name)
    for raw_principal in as_list(principals):
        principal = normalize_principal(raw_principal)
        for function_logical_id in group.functions:
            name = permission_resource_name(function_logical_id, principal)
            resource = build_permission(function_logical_id, principal, depends_on=chain.get(function_logical_id))
            if resources.add_if_absent(name, resource):
                chain[function_logical_id] = name
                log.debug(
                    "Added %s for principal %s",
                    name,
                    safe_preview(principal.emitted),
                    function=function_logical_id,
                )

    return chain


def _emit_roles(group: ResolvedGroup, resources: ResourceCollection) -> None:
    log = get_access_logger(__name__, group=group.name)
    for directive in as_list(group.role):
        if not isinstance(directive, Mapping):
            raise RoleConfigError(
                f'Role of access group "{group.name}" must be a mapping, got {safe_preview(directive)}',
                group=group.name,
            )

        role_name: Any = directive.get("name")
        if not role_name:
            raise RoleConfigError(f'Role of access group "{group.name}" must define a name', group=group.name)
        if directive.get("principals") is None:
            raise RoleConfigError(
                f'Role "{role_name}" of access group "{group.name}" must define principals',
                group=group.name,
                role=role_name,
            )

        name = role_resource_name(str(role_name))
        if name in resources:
            raise DuplicateRoleError(
                f"Roles must have unique names [{role_name}]",
                group=group.name,
                role=role_name,
            )

        raw_principals = directive["principals"]
        principals = [] if raw_principals == "" else [normalize_principal(p) for p in as_list(raw_principals)]
        if not principals:
            log.debug("Skipping role %s without principals", role_name)
            continue

        max_session_duration = directive.get("maxSessionDuration")
        resources.add_if_absent(
            name,
            build_role(
                str(role_name),
                group.functions,
                principals,
                allow_tag_session=bool(directive.get("allowTagSession", False)),
                max_session_duration=(
                    DEFAULT_MAX_SESSION_DURATION if max_session_duration is None else max_session_duration
                ),
            ),
        )
        log.debug("Added %s covering %d function(s)", name, len(group.functions))


__all__ = [
    "emit_access_resources",
]
