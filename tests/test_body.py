"""Tests for tern.http.body and tern.http.query — request decoding."""

import pytest

from tern.errors import DecodeError
from tern.http.body import decode_body, media_type
from tern.http.query import QueryParams, parse_query


class TestMediaType:
    def test_strips_parameters(self) -> None:
        assert media_type("application/json; charset=utf-8") == "application/json"

    def test_lowercases(self) -> None:
        assert media_type("Application/JSON") == "application/json"

    def test_missing(self) -> None:
        assert media_type(None) == ""


class TestDecodeForm:
    def test_fields(self) -> None:
        body = decode_body(b"name=Ada&email=ada%40example.com", "application/x-www-form-urlencoded")
        assert body == {"name": "Ada", "email": "ada@example.com"}

    def test_plus_is_space(self) -> None:
        assert decode_body(b"name=Ada+Lovelace", "application/x-www-form-urlencoded") == {
            "name": "Ada Lovelace"
        }

    def test_repeated_names_become_list(self) -> None:
        body = decode_body(b"tag=a&tag=b&one=1", "application/x-www-form-urlencoded")
        assert body == {"tag": ["a", "b"], "one": "1"}

    def test_blank_values_kept(self) -> None:
        assert decode_body(b"name=", "application/x-www-form-urlencoded") == {"name": ""}

    def test_content_type_parameters_ignored(self) -> None:
        body = decode_body(b"a=1", "application/x-www-form-urlencoded; charset=utf-8")
        assert body == {"a": "1"}

    def test_invalid_utf8(self) -> None:
        with pytest.raises(DecodeError):
            decode_body(b"name=%ff", "application/x-www-form-urlencoded")


class TestDecodeJson:
    def test_object(self) -> None:
        assert decode_body(b'{"name": "Ada", "age": 36}', "application/json") == {"name": "Ada", "age": 36}

    def test_malformed(self) -> None:
        with pytest.raises(DecodeError, match="Malformed JSON"):
            decode_body(b"{oops", "application/json")

    def test_non_object_rejected(self) -> None:
        with pytest.raises(DecodeError, match="must be an object"):
            decode_body(b"[1, 2, 3]", "application/json")

    def test_invalid_utf8(self) -> None:
        with pytest.raises(DecodeError, match="UTF-8"):
            decode_body(b'{"a": "\xff"}', "application/json")


class TestDecodeOther:
    def test_empty_body(self) -> None:
        assert decode_body(b"", "application/json") == {}

    def test_unknown_type(self) -> None:
        assert decode_body(b"<xml/>", "application/xml") == {}

    def test_no_content_type(self) -> None:
        assert decode_body(b"a=1", None) == {}


class TestParseQuery:
    def test_empty(self) -> None:
        assert parse_query(b"") == {}

    def test_single_and_repeated(self) -> None:
        assert parse_query(b"message=User%20Created&id=1&id=2") == {
            "message": "User Created",
            "id": ["1", "2"],
        }

    def test_accepts_str(self) -> None:
        assert parse_query("a=1") == {"a": "1"}

    def test_blank_values_kept(self) -> None:
        assert parse_query(b"flag=&x=1") == {"flag": "", "x": "1"}

    def test_invalid_percent_encoding(self) -> None:
        with pytest.raises(DecodeError):
            parse_query(b"a=%ff")


class TestQueryParams:
    def test_first_value(self) -> None:
        qp = QueryParams(b"a=1&a=2")
        assert qp["a"] == "1"
        assert qp.get_list("a") == ["1", "2"]

    def test_get_default(self) -> None:
        assert QueryParams(b"").get("missing", "x") == "x"

    def test_raw(self) -> None:
        assert QueryParams(b"a=1").raw == b"a=1"

    def test_decodes_utf8_like_parse_query(self) -> None:
        raw = "name=%C3%A9mile".encode()
        assert QueryParams(raw)["name"] == parse_query(raw)["name"] == "émile"

    def test_malformed_raises_on_access(self) -> None:
        qp = QueryParams(b"a=%ff")
        assert qp.raw == b"a=%ff"
        with pytest.raises(DecodeError):
            qp.get("a")
