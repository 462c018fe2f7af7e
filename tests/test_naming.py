"""Tests for name and principal normalization."""

from __future__ import annotations

import pytest

from lambdaaccess import (
    ExportedPrincipal,
    LiteralPrincipal,
    PrincipalConfigError,
    as_list,
    lambda_logical_id,
    normalize_name,
    normalize_principal,
)
from lambdaaccess.naming import permission_resource_name, role_resource_name


class TestNormalizeName:
    """Tests for normalize_name."""

    def test_arn(self) -> None:
        """ARN separators are stripped and each word is capitalized."""
        assert normalize_name("arn:aws:iam::111111111111:root") == "ArnAwsIam111111111111Root"

    def test_dashes(self) -> None:
        assert normalize_name("output-role-arn") == "OutputRoleArn"

    def test_underscore_is_not_a_word_boundary(self) -> None:
        """Underscores are removed but do not start a new word."""
        assert normalize_name("my_role") == "Myrole"

    def test_digits_only(self) -> None:
        assert normalize_name("111111111111") == "111111111111"


class TestNormalizePrincipal:
    """Tests for normalize_principal."""

    def test_numeric_account_id(self) -> None:
        """Numbers become strings for both the name and the emitted value."""
        principal = normalize_principal(111111111111)
        assert principal == LiteralPrincipal(value="111111111111")
        assert principal.name == "111111111111"
        assert principal.emitted == "111111111111"

    def test_arn_string(self) -> None:
        principal = normalize_principal("arn:aws:iam::111111111111:root")
        assert principal.name == "ArnAwsIam111111111111Root"
        assert principal.emitted == "arn:aws:iam::111111111111:root"

    def test_import_value(self) -> None:
        """Intrinsic references keep their mapping and name from the argument."""
        raw = {"Fn::ImportValue": "output-role-arn"}
        principal = normalize_principal(raw)
        assert isinstance(principal, ExportedPrincipal)
        assert principal.function == "Fn::ImportValue"
        assert principal.name == "OutputRoleArn"
        assert principal.emitted == raw

    def test_list_argument_is_joined(self) -> None:
        principal = normalize_principal({"Fn::GetAtt": ["ConsumerRole", "Arn"]})
        assert principal.embedded_name == "ConsumerRole,Arn"
        assert principal.name == "ConsumerRoleArn"

    def test_nested_intrinsic_argument(self) -> None:
        """Nested references are named like the template engine stringifies them."""
        raw = {"Fn::ImportValue": {"Fn::Sub": "${AWS::StackName}-role-arn"}}
        principal = normalize_principal(raw)
        assert principal.embedded_name == "[object Object]"
        assert principal.name == "ObjectObject"
        assert principal.emitted == raw

    def test_list_argument_with_nested_mapping(self) -> None:
        principal = normalize_principal({"Fn::Join": ["", ["arn:", {"Ref": "AWS::AccountId"}]]})
        assert principal.embedded_name == ",arn:,[object Object]"
        assert principal.name == "ArnObjectObject"

    def test_mapping_without_intrinsic(self) -> None:
        with pytest.raises(PrincipalConfigError, match="not a string"):
            normalize_principal({"Ref": "SomeRole"})

    @pytest.mark.parametrize("value", [None, True, ["111111111111"]])
    def test_unsupported_values(self, value) -> None:
        with pytest.raises(PrincipalConfigError):
            normalize_principal(value)


class TestAsList:
    """Tests for scalar-or-list coercion."""

    def test_scalar(self) -> None:
        assert as_list("api") == ["api"]

    def test_list_is_copied(self) -> None:
        original = ["api", "admin"]
        result = as_list(original)
        assert result == original
        assert result is not original

    def test_none(self) -> None:
        assert as_list(None) == []

    def test_empty_list(self) -> None:
        assert as_list([]) == []


class TestLogicalIds:
    """Tests for logical id helpers."""

    def test_lambda_logical_id(self) -> None:
        assert lambda_logical_id("function1") == "Function1LambdaFunction"

    def test_lambda_logical_id_separators(self) -> None:
        assert lambda_logical_id("my-function_1") == "MyDashfunctionUnderscore1LambdaFunction"

    def test_permission_resource_name(self) -> None:
        name = permission_resource_name("F1", normalize_principal(111111111111))
        assert name == "F1PermitInvokeFrom111111111111"

    def test_role_resource_name(self) -> None:
        assert role_resource_name("foo-bar") == "LambdaAccessRoleFooBar"
