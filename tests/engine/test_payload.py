"""Tests for remote ranking payload validation."""

import json

import pytest

from replyassist.engine.payload import (
    MAX_REASON_CHARS,
    Invalid,
    Valid,
    extract_json_object,
    parse_ranked_payload,
)


def _payload(*items):
    return json.dumps({"ranked": list(items)}, ensure_ascii=False)


def _item(intent_id="a", pct=80, reason="matches"):
    return {"intentId": intent_id, "confidencePct": pct, "reason": reason}


class TestExtractJsonObject:

    def test_strips_surrounding_prose(self):
        assert extract_json_object('Sure! {"a": {"b": 1}} hope it helps') == '{"a": {"b": 1}}'

    def test_no_braces(self):
        assert extract_json_object("no json here") is None

    def test_reversed_braces(self):
        assert extract_json_object("} oops {") is None


class TestParseRankedPayload:

    def test_valid_payload(self):
        result = parse_ranked_payload(_payload(_item("a", 91, "exact"), _item("b", 40, "partial")))
        assert isinstance(result, Valid)
        assert [i.intent_id for i in result.items] == ["a", "b"]
        assert result.items[0].confidence_pct == 91
        assert result.items[0].reason == "exact"

    def test_payload_wrapped_in_markdown_fence(self):
        text = "```json\n" + _payload(_item()) + "\n```"
        assert isinstance(parse_ranked_payload(text), Valid)

    @pytest.mark.parametrize("raw,expected", [(150, 100), (-5, 0), (87.6, 88), (42.0, 42)])
    def test_confidence_is_clamped_and_rounded(self, raw, expected):
        result = parse_ranked_payload(_payload(_item(pct=raw)))
        assert result.items[0].confidence_pct == expected

    @pytest.mark.parametrize("bad", [
        {"intentId": 5, "confidencePct": 80, "reason": "x"},
        {"intentId": "a", "confidencePct": "80", "reason": "x"},
        {"intentId": "a", "confidencePct": True, "reason": "x"},
        {"intentId": "a", "confidencePct": 80, "reason": None},
        {"intentId": "a", "confidencePct": 80},
        "a",
    ])
    def test_wrong_typed_items_are_dropped(self, bad):
        result = parse_ranked_payload(_payload(bad, _item("ok")))
        assert isinstance(result, Valid)
        assert [i.intent_id for i in result.items] == ["ok"]

    def test_reason_is_truncated(self):
        result = parse_ranked_payload(_payload(_item(reason="가" * 300)))
        assert len(result.items[0].reason) == MAX_REASON_CHARS

    def test_capped_at_three_items(self):
        result = parse_ranked_payload(_payload(*[_item(str(i)) for i in range(6)]))
        assert [i.intent_id for i in result.items] == ["0", "1", "2"]

    def test_duplicate_ids_keep_first(self):
        result = parse_ranked_payload(_payload(_item("a", 90), _item("a", 10), _item("b")))
        assert [(i.intent_id, i.confidence_pct) for i in result.items] == [("a", 90), ("b", 80)]

    def test_ids_outside_candidates_are_dropped(self):
        result = parse_ranked_payload(_payload(_item("ghost"), _item("a")), allowed_ids={"a", "b"})
        assert [i.intent_id for i in result.items] == ["a"]

    @pytest.mark.parametrize("text,reason", [
        (None, "empty response"),
        ("   ", "empty response"),
        ("I cannot help with that", "no JSON object in response"),
        ("{not json}", "unparseable JSON"),
        ('{"ranked": {"a": 1}}', "missing 'ranked' list"),
        ('{"results": []}', "missing 'ranked' list"),
        ('{"ranked": []}', "no usable ranked items"),
    ])
    def test_invalid_payloads(self, text, reason):
        result = parse_ranked_payload(text)
        assert isinstance(result, Invalid)
        assert result.reason.startswith(reason)

    def test_all_items_outside_candidates_is_invalid(self):
        result = parse_ranked_payload(_payload(_item("ghost")), allowed_ids={"a"})
        assert result == Invalid("no usable ranked items")
