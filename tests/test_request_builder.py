"""
Tests for request construction

Covers payload marshaling, URL resolution, header canonicalization and
the merge rules for default headers and query parameters.
"""

import json
from dataclasses import dataclass

import pytest

from gaxios.config import ClientConfig
from gaxios.exceptions import MarshalError, RequestConstructionError
from gaxios.request_builder import (
    build_request,
    canonical_header_key,
    marshal_body,
    merge_headers,
    resolve_url,
)


@dataclass
class Person:
    name: str
    age: int


class TestMarshalBody:
    """JSON serialization of payloads"""

    def test_none_payload_has_no_body(self):
        assert marshal_body(None) is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "John Doe"},
            [1, 2, 3],
            {"nested": {"list": [True, None, 1.5]}},
            "plain string",
            0,
        ],
    )
    def test_body_decodes_to_payload(self, payload):
        assert json.loads(marshal_body(payload)) == payload

    def test_dataclass_payload(self):
        assert json.loads(marshal_body(Person("Ada", 36))) == {"name": "Ada", "age": 36}

    def test_unserializable_payload(self):
        """Should wrap the serializer error"""
        payload = {"items": {1, 2}}

        with pytest.raises(MarshalError) as exc_info:
            marshal_body(payload)

        assert exc_info.value.payload is payload
        assert isinstance(exc_info.value.__cause__, TypeError)

    @pytest.mark.parametrize("number", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_numbers_rejected(self, number):
        """NaN and Infinity have no JSON representation"""
        with pytest.raises(MarshalError) as exc_info:
            build_request("POST", "http://h/test", {"v": number})

        assert isinstance(exc_info.value.__cause__, ValueError)


class TestResolveUrl:
    """Base URL composition"""

    def test_joins_with_single_separator(self):
        assert resolve_url("test", "http://h") == "http://h/test"

    def test_path_used_verbatim_without_base(self):
        assert resolve_url("http://h/test") == "http://h/test"

    def test_separators_are_not_deduplicated(self):
        assert resolve_url("/test", "http://h/") == "http://h///test"


class TestCanonicalHeaderKey:
    """Header name canonicalization"""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("accept", "Accept"),
            ("CONTENT-TYPE", "Content-Type"),
            ("x-request-id", "X-Request-Id"),
            ("Accept", "Accept"),
        ],
    )
    def test_canonical_form(self, name, expected):
        assert canonical_header_key(name) == expected

    def test_invalid_token_unchanged(self):
        assert canonical_header_key("bad header") == "bad header"


class TestMergeHeaders:
    """Default and per-call header merging"""

    def test_multiple_values_joined(self):
        merged = merge_headers({"Accept": ("application/json", "text/plain")})

        assert merged["Accept"] == "application/json,text/plain"

    def test_per_call_overwrites_default(self):
        merged = merge_headers({"Accept": ("application/json",)}, {"accept": "text/html"})

        assert merged["Accept"] == "text/html"
        assert len(merged) == 1

    def test_non_string_values_coerced(self):
        merged = merge_headers({"X-Tags": ("a", "b")}, {"X-N": 5, "X-Ids": [1, 2]})

        assert merged["X-N"] == "5"
        assert merged["X-Ids"] == "1,2"
        assert merged["X-Tags"] == "a,b"

    def test_per_call_int_header_sent(self):
        request = build_request("GET", "http://h/test", headers={"x-n": 5})

        assert request.headers["X-N"] == "5"


class TestBuildRequest:
    """Full request construction"""

    def test_accept_header_from_config(self):
        config = ClientConfig(headers={"accept": "application/json"})

        request = build_request("GET", "http://h/test", config=config)

        assert request.headers["Accept"] == "application/json"
        assert "Accept" in list(request.headers.keys())

    def test_base_url_composition(self):
        request = build_request("GET", "test", config=ClientConfig(base_url="http://h"))

        assert request.url == "http://h/test"

    def test_json_body_and_content_type(self):
        request = build_request("POST", "http://h/test", {"name": "John Doe"})

        assert request.method == "POST"
        assert json.loads(request.body) == {"name": "John Doe"}
        assert request.headers["Content-Type"] == "application/json"

    def test_configured_content_type_kept(self):
        config = ClientConfig(headers={"Content-Type": "application/merge-patch+json"})

        request = build_request("PATCH", "http://h/test/2", {"a": 1}, config)

        assert request.headers["Content-Type"] == "application/merge-patch+json"

    def test_no_body_without_payload(self):
        request = build_request("DELETE", "http://h/test/2")

        assert request.body is None
        assert "Content-Type" not in request.headers

    def test_query_appended_without_deduplication(self):
        config = ClientConfig(query={"page": "2", "lang": "en"})

        request = build_request("GET", "http://h/items?page=1", config=config)

        assert request.url == "http://h/items?page=1&page=2&lang=en"

    def test_no_config_uses_defaults(self):
        request = build_request("GET", "http://h/items")

        assert request.url == "http://h/items"
        assert "Accept" not in request.headers

    def test_missing_scheme_raises_construction_error(self):
        with pytest.raises(RequestConstructionError) as exc_info:
            build_request("GET", "test")

        assert exc_info.value.url == "test"
        assert exc_info.value.method == "GET"

    def test_invalid_header_value_raises_construction_error(self):
        config = ClientConfig(headers={"X-Token": "abc\r\ninjected: 1"})

        with pytest.raises(RequestConstructionError):
            build_request("GET", "http://h/test", config=config)
