from decimal import Decimal

import pytest

from sfex import envvars
from sfex.value import SfxMap, SfxValueError


def test_get_existing_variable(monkeypatch):
    monkeypatch.setenv("SFEX_TEST_GREETING", "hello")
    assert envvars.get("SFEX_TEST_GREETING") == "hello"


def test_get_missing_variable_uses_default(monkeypatch):
    monkeypatch.delenv("SFEX_TEST_MISSING", raising=False)
    assert envvars.get("SFEX_TEST_MISSING", "fallback") == "fallback"
    assert envvars.get("SFEX_TEST_MISSING") == ""


def test_has(monkeypatch):
    monkeypatch.setenv("SFEX_TEST_PRESENT", "1")
    monkeypatch.delenv("SFEX_TEST_ABSENT", raising=False)
    assert envvars.has("SFEX_TEST_PRESENT") is True
    assert envvars.has("SFEX_TEST_ABSENT") is False


def test_all_vars_contains_set_variable(monkeypatch):
    monkeypatch.setenv("SFEX_TEST_LISTED", "listed")
    everything = envvars.all_vars()
    assert isinstance(everything, SfxMap)
    assert everything["SFEX_TEST_LISTED"] == "listed"


def test_load_sets_variables_and_counts(tmp_path, monkeypatch):
    entries = {
        "SFEX_TEST_PLAIN": "plain",
        "SFEX_TEST_DOUBLE": "quoted value",
        "SFEX_TEST_SINGLE": "single value",
    }
    for key in entries:
        monkeypatch.delenv(key, raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# a comment\n"
        "\n"
        "SFEX_TEST_PLAIN = plain\n"
        'SFEX_TEST_DOUBLE="quoted value"\n'
        "SFEX_TEST_SINGLE='single value'\n"
        "not an assignment\n",
        encoding="utf-8",
    )
    count = envvars.load(str(env_file))
    assert count == Decimal(len(entries))
    for key, value in entries.items():
        assert envvars.get(key) == value


def test_load_keeps_text_after_first_equals(tmp_path, monkeypatch):
    monkeypatch.delenv("SFEX_TEST_EXPR", raising=False)
    env_file = tmp_path / "vars.env"
    env_file.write_text("SFEX_TEST_EXPR=a=b\n", encoding="utf-8")
    envvars.load(str(env_file))
    assert envvars.get("SFEX_TEST_EXPR") == "a=b"


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(SfxValueError, match="Failed to load .env file"):
        envvars.load(str(tmp_path / "nope.env"))