"""Tests for JSON payload detection and field extraction."""

from logstash_redis.payload import is_json_object, parse_payload, string_field


class TestIsJsonObject:
    def test_plain_text(self):
        assert is_json_object("whateverthefuckever") is False

    def test_empty_object(self):
        assert is_json_object("{}") is True

    def test_array(self):
        assert is_json_object("[1,2]") is False

    def test_scalars(self):
        for raw in ("42", '"text"', "true", "null", "3.14"):
            assert is_json_object(raw) is False

    def test_empty_string(self):
        assert is_json_object("") is False

    def test_truncated_object(self):
        assert is_json_object('{"message": "half') is False

    def test_object_with_whitespace(self):
        assert is_json_object('  { "logtype": "applog", "line": 42}\n') is True

    def test_non_standard_constants_rejected(self):
        assert is_json_object('{"value": NaN}') is False
        assert is_json_object('{"value": Infinity}') is False

    def test_deep_nesting_is_not_an_error(self):
        raw = "[" * 100000 + "]" * 100000
        assert is_json_object(raw) is False

    def test_repeatable(self):
        raw = '{"a": 1}'
        assert is_json_object(raw) == is_json_object(raw) is True


class TestParsePayload:
    def test_returns_object(self):
        assert parse_payload('{"a": 1, "b": [true, null]}') == {"a": 1, "b": [True, None]}

    def test_returns_none_for_non_object(self):
        assert parse_payload("[1,2]") is None
        assert parse_payload("garbage") is None


class TestStringField:
    def test_string_value(self):
        assert string_field({"message": "hi"}, "message") == "hi"

    def test_missing_key(self):
        assert string_field({}, "message") is None

    def test_non_string_values(self):
        payload = {"n": 1, "b": False, "z": None, "l": ["x"], "o": {"x": "y"}}
        for key in payload:
            assert string_field(payload, key) is None
