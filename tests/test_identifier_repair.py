"""
Numeric ids must reach callers as strings carrying the exact digits the service sent.
"""

from __future__ import annotations

import json

import pytest

from vineapple.envelope import IDENTIFIER_FIELDS, parse_body, repair_identifiers


@pytest.mark.parametrize("field", IDENTIFIER_FIELDS)
@pytest.mark.parametrize(
    "digits",
    [
        "0",
        "7",
        str(2**53 - 1),
        str(2**53 + 1),
        "906345798374060032",
        "123456789012345678901234567890",
    ],
)
def test_repair_quotes_identifier_with_exact_digits(field: str, digits: str) -> None:
    text = '{"%s":%s,"other":1}' % (field, digits)
    repaired = repair_identifiers(text)

    assert repaired == '{"%s":"%s","other":1}' % (field, digits)
    assert json.loads(repaired)[field] == digits


def test_repair_preserves_whitespace_and_trailing_comma() -> None:
    text = '{"userId" :  906345798374060032 , "postId":\n1, "id": 5}'
    assert repair_identifiers(text) == '{"userId" :  "906345798374060032" , "postId":\n"1", "id": "5"}'


def test_repair_handles_nested_records_and_arrays() -> None:
    text = '{"data":{"records":[{"postId":1016137497532895232,"likes":{"count":3}},{"postId":2}]}}'
    parsed = parse_body(text)

    assert [r["postId"] for r in parsed["data"]["records"]] == ["1016137497532895232", "2"]
    assert parsed["data"]["records"][0]["likes"]["count"] == 3


def test_repair_keeps_negative_sign() -> None:
    assert repair_identifiers('{"venueId":-12}') == '{"venueId":"-12"}'


@pytest.mark.parametrize(
    "text",
    [
        '{"parentPostId":123}',
        '{"userIdx":123}',
        '{"ID":123}',
        '{"count":123}',
        '{"id":"already-a-string"}',
        '{"id":null}',
        '{"id":1.5}',
        '{"id":1e5}',
        '{"description":"\\"id\\":42 in prose"}',
    ],
)
def test_repair_leaves_other_values_alone(text: str) -> None:
    assert repair_identifiers(text) == text


def test_parse_body_without_repair_matches_json_loads() -> None:
    text = '{"data":{"username":"dave","followerCount":42}}'
    assert parse_body(text) == json.loads(text)
