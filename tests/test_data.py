from decimal import Decimal

import pytest

from sfex.data import (
    describe,
    detect,
    detect_from_string,
    guess_format_priority,
    media_type_for_format,
    sanitize_content,
    structure,
)
from sfex.value import Maybe, SfxList, SfxMap, SfxValueError


def test_sanitize_strips_bom():
    assert sanitize_content(b"\xef\xbb\xbf{}") == "{}"


def test_sanitize_plain_round_trip():
    text = "héllo, wörld"
    assert sanitize_content(text.encode("utf-8")) == text


def test_sanitize_replaces_invalid_bytes():
    assert sanitize_content(b"a\xffb") == "a\ufffdb"


def test_guess_json():
    assert guess_format_priority('{"a": 1}') == ["JSON"]


def test_guess_doctype_html():
    assert guess_format_priority("<!DOCTYPE html><html></html>") == ["HTML"]


def test_guess_xml_then_html():
    assert guess_format_priority("<root><a/></root>") == ["XML", "HTML"]


def test_guess_toml():
    assert guess_format_priority("name = 1") == ["TOML"]


def test_guess_csv():
    assert guess_format_priority("a,b\n1,2") == ["CSV"]


def test_guess_extension_ranks_first():
    assert guess_format_priority("a,b\n1,2", "data.json") == ["JSON"]


def test_guess_csv_extension_keeps_csv():
    assert guess_format_priority("a,b\n1,2", "data.CSV") == ["CSV"]


def test_guess_yaml_extension():
    assert guess_format_priority("key: value", "conf.yml") == ["YAML"]


def test_guess_nothing():
    assert guess_format_priority("just some words") == []


def test_guess_no_duplicates():
    result = guess_format_priority('{"a": 1}', "x.json")
    assert result.count("JSON") == 1


@pytest.mark.parametrize(
    "fmt,expected",
    [
        ("JSON", "application/json"),
        ("XML", "text/xml"),
        ("HTML", "text/html"),
        ("TOML", "application/toml"),
        ("CSV", "text/csv"),
        ("YAML", "application/yaml"),
        ("Comma-Separated Values", "text/csv"),
    ],
)
def test_media_types(fmt, expected):
    assert media_type_for_format(fmt, "fallback/x") == expected


def test_media_type_fallback():
    assert media_type_for_format("Unknown", "fallback/x") == "fallback/x"


def test_detect_from_string_json():
    info = detect_from_string('[1, 2, 3]')
    assert info == {"Format": "JSON", "MediaType": "application/json", "Kind": "Text"}


def test_detect_from_string_plain():
    info = detect_from_string("hello")
    assert info["Format"] == "Plain Text"
    assert info["MediaType"] == "text/plain"


def test_detect_json_file(tmp_path):
    path = tmp_path / "sample.json"
    path.write_text('{"a": 1}', encoding="utf-8")
    info = detect(str(path))
    assert info["Format"] == "JSON"
    assert info["MediaType"] == "application/json"
    assert list(info["Candidates"]) == ["JSON"]


def test_detect_csv_by_content(tmp_path):
    path = tmp_path / "table.txt"
    path.write_text("a,b\n1,2\n", encoding="utf-8")
    info = detect(str(path))
    assert info["Format"] == "CSV"
    assert info["MediaType"] == "text/csv"


def test_detect_binary_not_overridden(tmp_path):
    path = tmp_path / "image.json"
    path.write_bytes(b"\x89PNG\r\n\x1a\n" + b"\x00" * 16)
    info = detect(str(path))
    assert info["MediaType"] == "image/png"
    assert "JSON" in info["Candidates"]
    assert info["Format"] != "JSON"


def test_detect_missing_file(tmp_path):
    with pytest.raises(SfxValueError, match="Failed to read file"):
        detect(str(tmp_path / "missing.json"))


def test_describe_reports_size_and_parseable(tmp_path):
    content = "<root><item/></root>"
    path = tmp_path / "doc.xml"
    path.write_text(content, encoding="utf-8")
    info = describe(str(path))
    assert info["Format"] == "XML"
    assert info["Size"] == Decimal(len(content.encode("utf-8")))
    assert info["Parseable"] is True


def test_describe_binary_not_parseable(tmp_path):
    path = tmp_path / "blob.gif"
    path.write_bytes(b"GIF89a" + b"\x01\x02")
    info = describe(str(path))
    assert info["Parseable"] is False
    assert info["MediaType"] == "image/gif"


def test_describe_missing_file(tmp_path):
    with pytest.raises(SfxValueError, match="IO Error"):
        describe(str(tmp_path / "missing.txt"))


def test_structure_scalars():
    data = SfxMap(name="x", age=Decimal(3), ok=True)
    assert structure(data) == {"name": "String", "age": "Number", "ok": "Boolean"}


def test_structure_list():
    data = SfxList([SfxMap(a=Decimal(1)), SfxMap(a=Decimal(2))])
    result = structure(data)
    assert result["type"] == "List"
    assert result["count"] == Decimal(2)
    assert result["sample_item"] == {"a": "Number"}


def test_structure_empty_list_has_no_sample():
    result = structure(SfxList())
    assert "sample_item" not in result
    assert result["count"] == Decimal(0)


def test_structure_depth_limit():
    data = SfxMap(a=SfxMap(b=Decimal(1)))
    assert structure(data, Decimal(0)) == {"a": "..."}
    assert structure(data, Decimal(1)) == {"a": {"b": "..."}}
    assert structure(data, Decimal(2)) == {"a": {"b": "Number"}}


def test_structure_non_number_depth_uses_default():
    data = SfxMap(a=SfxMap(b=Decimal(1)))
    assert structure(data, "deep") == structure(data)


def test_structure_other_values_use_display_prefix():
    assert structure(Maybe(Decimal(1))) == "Some"
    assert structure(Maybe()) == "None"