"""Template resource collection and resource builders.

The collection wraps the deployment template's ``Resources`` mapping.
Generated entries are only ever added: existing entries are never
overwritten or removed.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from .naming import Principal

INVOKE_ACTION = "lambda:InvokeFunction"
ASSUME_ROLE_ACTION = "sts:AssumeRole"
TAG_SESSION_ACTION = "sts:TagSession"
POLICY_VERSION = "2012-10-17"

DEFAULT_MAX_SESSION_DURATION = 3600
MIN_SESSION_DURATION = 3600
MAX_SESSION_DURATION = 43200


class ResourceCollection:
    """Insert-only view over a template ``Resources`` mapping.

    Args:
        resources: Mapping to write into. A new dict is created when omitted;
            passing the template's own dict makes insertions visible there.
    """

    __slots__ = ("_resources",)

    def __init__(self, resources: Optional[dict[str, Any]] = None) -> None:
        self._resources = resources if resources is not None else {}

    def __contains__(self, name: object) -> bool:
        return name in self._resources

    def __getitem__(self, name: str) -> dict[str, Any]:
        return self._resources[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._resources)

    def __len__(self) -> int:
        return len(self._resources)

    def add_if_absent(self, name: str, resource: dict[str, Any]) -> bool:
        """Insert ``resource`` under ``name`` unless the name is taken.

        Returns:
            True if the resource was inserted.
        """
        if name in self._resources:
            return False
        self._resources[name] = resource
        return True

    def as_dict(self) -> dict[str, Any]:
        """The underlying mapping (not a copy)."""
        return self._resources

    def __repr__(self) -> str:
        return f"ResourceCollection({list(self._resources)!r})"


def function_arn(function_logical_id: str) -> dict[str, list[str]]:
    return {"Fn::GetAtt": [function_logical_id, "Arn"]}


def build_permission(
    function_logical_id: str,
    principal: Principal,
    depends_on: Optional[str] = None,
) -> dict[str, Any]:
    """Lambda permission granting ``principal`` invoke rights on one function."""
    resource: dict[str, Any] = {
        "Type": "AWS::Lambda::Permission",
        "Properties": {
            "Action": INVOKE_ACTION,
            "FunctionName": function_arn(function_logical_id),
            "Principal": principal.emitted,
        },
    }
    if depends_on:
        resource["DependsOn"] = depends_on
    return resource


def build_role(
    name: str,
    function_logical_ids: list[str],
    principals: list[Principal],
    allow_tag_session: bool = False,
    max_session_duration: int = DEFAULT_MAX_SESSION_DURATION,
) -> dict[str, Any]:
    """IAM role assumable by ``principals`` that may invoke every listed function."""
    sts_action: str | list[str] = ASSUME_ROLE_ACTION
    if allow_tag_session:
        sts_action = [ASSUME_ROLE_ACTION, TAG_SESSION_ACTION]

    return {
        "Type": "AWS::IAM::Role",
        "Properties": {
            "RoleName": name,
            "Policies": [
                {
                    "PolicyName": name,
                    "PolicyDocument": {
                        "Version": POLICY_VERSION,
                        "Statement": [
                            {
                                "Effect": "Allow",
                                "Action": INVOKE_ACTION,
                                "Resource": [function_arn(f) for f in function_logical_ids],
                            }
                        ],
                    },
                }
            ],
            "AssumeRolePolicyDocument": {
                "Version": POLICY_VERSION,
                "Statement": [
                    {
                        "Effect": "Allow",
                        "Action": sts_action,
                        "Principal": {"AWS": [p.emitted for p in principals]},
                    }
                ],
            },
            "MaxSessionDuration": max_session_duration,
        },
    }


__all__ = [
    "ASSUME_ROLE_ACTION",
    "DEFAULT_MAX_SESSION_DURATION",
    "INVOKE_ACTION",
    "MAX_SESSION_DURATION",
    "MIN_SESSION_DURATION",
    "POLICY_VERSION",
    "ResourceCollection",
    "TAG_SESSION_ACTION",
    "build_permission",
    "build_role",
    "function_arn",
]
