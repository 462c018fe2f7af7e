"""Tests for the access config compiler."""

from __future__ import annotations

import pytest

from lambdaaccess import GroupReferenceError, ResolvedGroup, compile_access_config


class TestCompileAccessConfig:
    """Tests for compile_access_config."""

    def test_single_group_reference(self) -> None:
        resolved = compile_access_config(
            {"api": {"policy": {"principals": 111111111111}}},
            {"function1": {"allowAccess": "api"}},
        )
        assert resolved == {
            "api": ResolvedGroup(
                name="api",
                functions=["Function1LambdaFunction"],
                policy={"principals": 111111111111},
            )
        }

    def test_keeps_group_order_and_key_set(self) -> None:
        """Every declared group is present, in declaration order."""
        groups = {
            "zeta": {"policy": {"principals": 1}},
            "alpha": {"role": {"name": "alpha", "principals": 2}},
            "mid": {"policy": {"principals": 3}},
        }
        resolved = compile_access_config(groups, {})
        assert list(resolved) == ["zeta", "alpha", "mid"]
        assert all(not group.is_used for group in resolved.values())

    def test_multiple_groups_per_function(self) -> None:
        resolved = compile_access_config(
            {"api": {}, "admin": {}},
            {
                "function1": {"allowAccess": ["api", "admin"]},
                "function2": {"allowAccess": "api"},
            },
        )
        assert resolved["api"].functions == ["Function1LambdaFunction", "Function2LambdaFunction"]
        assert resolved["admin"].functions == ["Function1LambdaFunction"]

    def test_function_without_allow_access(self) -> None:
        """Functions that do not opt in never become targets."""
        resolved = compile_access_config(
            {"api": {"policy": {"principals": 1}}},
            {"function1": {"allowAccess": "api"}, "function2": {}, "function3": None},
        )
        assert resolved["api"].functions == ["Function1LambdaFunction"]

    def test_empty_allow_access_is_ignored(self) -> None:
        resolved = compile_access_config({"api": {}}, {"function1": {"allowAccess": []}})
        assert resolved["api"].functions == []

    def test_custom_naming(self) -> None:
        calls = []

        def to_logical_id(name: str) -> str:
            calls.append(name)
            return name.upper()

        resolved = compile_access_config({"api": {}}, {"f1": {"allowAccess": "api"}}, to_logical_id)
        assert resolved["api"].functions == ["F1"]
        assert calls == ["f1"]

    def test_role_and_policy_carried_through(self) -> None:
        role = [{"name": "foo", "principals": []}]
        policy = {"principals": [1, 2]}
        resolved = compile_access_config({"api": {"role": role, "policy": policy}}, {})
        assert resolved["api"].role is role
        assert resolved["api"].policy is policy

    def test_unknown_group(self) -> None:
        """Unresolved references name both the function and the group."""
        with pytest.raises(
            GroupReferenceError,
            match='Function "function1" references an access group "api" that does not exist',
        ) as exc_info:
            compile_access_config({}, {"function1": {"allowAccess": "api"}})

        assert exc_info.value.details == {"function": "function1", "group": "api"}
        assert isinstance(exc_info.value, ReferenceError)

    def test_unknown_group_in_list(self) -> None:
        with pytest.raises(GroupReferenceError, match='"missing"'):
            compile_access_config({"api": {}}, {"function1": {"allowAccess": ["api", "missing"]}})

    def test_inputs_not_mutated(self) -> None:
        groups = {"api": {"policy": {"principals": 1}}}
        functions = {"function1": {"allowAccess": "api"}}
        compile_access_config(groups, functions)
        assert groups == {"api": {"policy": {"principals": 1}}}
        assert functions == {"function1": {"allowAccess": "api"}}
