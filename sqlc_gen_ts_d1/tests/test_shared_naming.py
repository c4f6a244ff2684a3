import pytest

from sqlc_gen_ts_d1.shared.naming import (
    const_query_name,
    embed_column_name,
    function_name,
    model_type_name,
    params_type_name,
    property_name,
    raw_row_type_name,
    row_type_name,
    to_lower_camel,
    to_upper_camel,
)


class TestToUpperCamel:
    @pytest.mark.parametrize(
        "input_str,expected",
        [
            ("hello_world", "HelloWorld"),
            ("display_name", "DisplayName"),
            ("single", "Single"),
            ("a", "A"),
            ("", ""),
            ("_", ""),
            ("__", ""),
            ("_leading", "Leading"),
            ("trailing_", "Trailing"),
            ("double__underscore", "DoubleUnderscore"),
            ("camelCase", "CamelCase"),
            ("PascalCase", "PascalCase"),
            ("user_id2", "UserId2"),
        ],
    )
    def test_to_upper_camel(self, input_str, expected):
        assert to_upper_camel(input_str) == expected

    def test_keeps_case_of_remaining_letters(self):
        assert to_upper_camel("http_URL") == "HttpURL"


class TestToLowerCamel:
    @pytest.mark.parametrize(
        "input_str,expected",
        [
            ("hello_world", "helloWorld"),
            ("display_name", "displayName"),
            ("id", "id"),
            ("", ""),
            ("_", ""),
            ("_private_field", "privateField"),
            ("GetAccount", "getAccount"),
            ("ListAccounts", "listAccounts"),
        ],
    )
    def test_to_lower_camel(self, input_str, expected):
        assert to_lower_camel(input_str) == expected

    @pytest.mark.parametrize(
        "value",
        ["display_name", "user_id", "a_b_c", "_x_", "created__at", "id", ""],
    )
    def test_lower_of_upper_matches_lower(self, value):
        assert to_lower_camel(to_upper_camel(value)) == to_lower_camel(value)

    @pytest.mark.parametrize("value", ["displayName", "userId", "id", "abcDef"])
    def test_idempotent_without_underscores(self, value):
        assert to_lower_camel(to_lower_camel(value)) == to_lower_camel(value)
        assert to_upper_camel(to_upper_camel(value)) == to_upper_camel(value)

    def test_caching(self):
        result1 = to_lower_camel("hello_world")
        result2 = to_lower_camel("hello_world")
        assert result1 is result2


class TestDerivedNames:
    def test_model_type_name(self):
        assert model_type_name("user_accounts") == "UserAccounts"

    def test_property_name(self):
        assert property_name("display_name") == "displayName"

    def test_const_query_name(self):
        assert const_query_name("GetAccount") == "getAccountQuery"

    def test_params_type_name(self):
        assert params_type_name("GetAccount") == "GetAccountParams"

    def test_row_type_name(self):
        assert row_type_name("GetAccount") == "GetAccountRow"

    def test_raw_row_type_name(self):
        assert raw_row_type_name("GetAccount") == "RawGetAccountRow"

    def test_embed_column_name(self):
        assert embed_column_name("users", "id") == "users_id"
        assert embed_column_name("users", "display_name") == "users_display_name"

    def test_function_name(self):
        assert function_name("GetAccount") == "getAccount"
