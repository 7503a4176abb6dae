"""Tests for loading and validating the intent catalog."""

import json

import pytest

from replyassist.catalog import index_catalog, load_catalog, parse_catalog
from replyassist.config import INTENTS_PATH
from replyassist.core.errors import CatalogError


def _raw(id="a", **overrides):
    data = {
        "id": id,
        "title": "제목",
        "answer": "답변입니다.",
        "examples": ["질문입니다"],
        "tags": ["태그"],
    }
    data.update(overrides)
    return data


class TestParseCatalog:

    def test_list_form(self):
        intents = parse_catalog([_raw("a"), _raw("b")])
        assert [i.id for i in intents] == ["a", "b"]
        assert intents[0].examples == ("질문입니다",)
        assert intents[0].tags == ("태그",)

    def test_wrapped_form(self):
        assert len(parse_catalog({"intents": [_raw()]})) == 1

    def test_tags_optional(self):
        raw = _raw()
        del raw["tags"]
        assert parse_catalog([raw])[0].tags == ()

    def test_fields_are_cleaned(self):
        intent = parse_catalog([_raw(
            id="  a ", examples=["  질문   하나 ", "", "   "], tags=[" 배송 ", ""],
        )])[0]
        assert intent.id == "a"
        assert intent.examples == ("질문 하나",)
        assert intent.tags == ("배송",)

    @pytest.mark.parametrize("overrides", [
        {"id": "  "},
        {"title": ""},
        {"answer": " "},
        {"examples": []},
        {"examples": ["", "  "]},
        {"examples": "not a list"},
    ])
    def test_invalid_records(self, overrides):
        with pytest.raises(CatalogError):
            parse_catalog([_raw(**overrides)])

    def test_duplicate_ids(self):
        with pytest.raises(CatalogError, match="duplicate intent id: a"):
            parse_catalog([_raw("a"), _raw("a")])

    @pytest.mark.parametrize("data", [None, "intents", {"items": []}, 3])
    def test_wrong_top_level_shape(self, data):
        with pytest.raises(CatalogError):
            parse_catalog(data)

    def test_empty_catalog_is_allowed(self):
        assert parse_catalog([]) == []


class TestLoadCatalog:

    def test_loads_file(self, tmp_path):
        path = tmp_path / "intents.json"
        path.write_text(json.dumps([_raw("x")], ensure_ascii=False), encoding="utf-8")
        assert [i.id for i in load_catalog(path)] == ["x"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError) as exc:
            load_catalog(tmp_path / "missing.json")
        assert exc.value.path.endswith("missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "intents.json"
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_shipped_sample_catalog(self):
        intents = load_catalog(INTENTS_PATH)
        by_id = index_catalog(intents)
        assert "deposit_limit" in by_id
        assert len(by_id) == len(intents)
