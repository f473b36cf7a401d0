"""Tests for the Slop document model."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from slop import Slop, SlopValue
from slop.types import InvalidKeyError, SlopIOError


def test_new_document_is_empty():
    slop = Slop()
    assert slop.is_empty()
    assert len(slop) == 0
    assert not slop.contains_key("anything")
    assert slop.get("anything") is None
    assert slop.to_slop_string() == ""


def test_insert_and_get():
    slop = Slop()
    assert slop.insert("key", "value") is None
    assert slop.insert("list", ["a", "b"]) is None

    assert not slop.is_empty()
    assert slop.contains_key("key")
    assert "list" in slop
    assert slop.get("key") == SlopValue.string("value")
    assert slop.get("list") == SlopValue.from_items(["a", "b"])


def test_typed_getters():
    slop = Slop.parse("str-kv=value\nlist-kv{\nvalue 1\nvalue 2\n}")

    assert slop.get_string("str-kv") == "value"
    assert slop.get_string("list-kv") is None
    assert slop.get_string("missing") is None

    assert slop.get_list("list-kv") == ["value 1", "value 2"]
    assert slop.get_list("str-kv") is None
    assert slop.get_list("missing") is None


def test_insert_duplicate_returns_previous():
    slop = Slop()
    slop.insert("key", "first")
    previous = slop.insert("key", "second")
    assert previous == SlopValue.string("first")
    assert slop.get_string("key") == "second"
    assert len(slop) == 1


@pytest.mark.parametrize("key", ["bad=key", "=", "a{", "{", "a=b{", "this key = bad"])
def test_insert_rejects_invalid_key(key):
    slop = Slop.parse("a=1")
    with pytest.raises(InvalidKeyError) as exc_info:
        slop.insert(key, "v")
    assert exc_info.value.key == key
    assert slop.entries == {"a": SlopValue.string("1")}


@pytest.mark.parametrize("key", ["", "a{b", "{a", "a}", " spaced key ", "#hash"])
def test_insert_accepts_valid_key(key):
    slop = Slop()
    slop.insert(key, "v")
    assert slop.get_string(key) == "v"


def test_insert_unchecked_skips_validation():
    slop = Slop()
    assert slop.insert_unchecked("key", "value") is None
    slop.insert_unchecked("bad=key", "v")
    assert slop.get_string("bad=key") == "v"


def test_remove():
    slop = Slop.parse("a=1\nb=2")
    assert slop.remove("a") == SlopValue.string("1")
    assert slop.remove("a") is None
    assert list(slop) == [("b", SlopValue.string("2"))]


def test_iteration_does_not_consume():
    slop = Slop.parse("a=1\nb=2\nc=3")
    assert dict(slop) == dict(slop.items())
    assert sorted(key for key, _ in slop) == ["a", "b", "c"]
    assert len(slop) == 3


def test_iteration_allows_mutating_values():
    slop = Slop.parse("a=1\nc{\nalpha\nbeta\n}")
    for _, value in slop:
        if value.is_list():
            value.as_list().append("gamma")
    assert slop.get_list("c") == ["alpha", "beta", "gamma"]


def test_drain_consumes():
    slop = Slop.parse("a=1\nb{\nx\n}")
    drained = dict(slop.drain())
    assert drained == {"a": SlopValue.string("1"), "b": SlopValue.from_items(["x"])}
    assert slop.is_empty()


def test_render_compact():
    slop = Slop()
    slop.insert("greeting", "hi")
    assert slop.to_slop_string() == "greeting=hi\n"
    assert str(slop) == "greeting=hi\n"


def test_render_pretty():
    slop = Slop()
    slop.insert("items", ["a", "b"])
    assert slop.to_string_pretty() == "items{\n    a\n    b\n}\n"
    assert slop.to_string_pretty(indent="  ") == "items{\n  a\n  b\n}\n"
    assert slop.to_slop_string() == "items{\na\nb\n}\n"


def test_round_trip():
    source = "a=1\n  b = two \nempty=\nl{\n  x\n\ny\n}\n# comment\n"
    slop = Slop.parse(source)
    assert Slop.parse(slop.to_slop_string()) == slop


@pytest.mark.parametrize("source", ["list{\n}\n", "a=1\nlist{\n}\nb{\nx\n}\n"])
def test_round_trip_empty_list(source):
    slop = Slop.parse(source)
    assert slop.get_list("list") == []
    assert Slop.parse(slop.to_slop_string()) == slop
    assert Slop.parse(slop.to_string_pretty()) == slop


def test_render_is_idempotent():
    slop = Slop.parse("a=1\nb=2\nl{\nx\ny\n}\n")
    text = slop.to_slop_string()
    assert Slop.parse(text).to_slop_string() == text


def test_pretty_output_indents_list_items_on_reparse():
    slop = Slop.parse("l{\nx\n}")
    reparsed = Slop.parse(slop.to_string_pretty())
    assert reparsed.get_list("l") == ["    x"]


def test_save_and_open(tmp_path: Path):
    path = tmp_path / "test.slop"
    slop = Slop()
    slop.insert("some-key", "some value")
    slop.insert_unchecked("other-key", ["value 1", "value 2"])

    slop.save(path)
    assert path.read_text(encoding="utf-8") == slop.to_slop_string()
    assert Slop.open(path) == slop


def test_save_pretty(tmp_path: Path):
    path = tmp_path / "pretty.slop"
    slop = Slop()
    slop.insert("items", ["a", "b"])

    slop.save_pretty(str(path))
    assert path.read_text(encoding="utf-8") == "items{\n    a\n    b\n}\n"


def test_open_keeps_crlf(tmp_path: Path):
    path = tmp_path / "crlf.slop"
    path.write_bytes(b"a=1\r\nl{\r\n x\r\n}\r\n")
    slop = Slop.open(path)
    assert slop.get_string("a") == "1"
    assert slop.get_list("l") == [" x"]


def test_open_missing_file(tmp_path: Path):
    with pytest.raises(SlopIOError) as exc_info:
        Slop.open(tmp_path / "missing.slop")
    assert isinstance(exc_info.value.cause, FileNotFoundError)
    assert exc_info.value.__cause__ is exc_info.value.cause


def test_save_into_missing_directory(tmp_path: Path):
    slop = Slop.parse("a=1")
    with pytest.raises(SlopIOError) as exc_info:
        slop.save(tmp_path / "no-such-dir" / "out.slop")
    assert isinstance(exc_info.value.cause, FileNotFoundError)


def test_file_io_logs_at_debug(tmp_path: Path, caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.DEBUG, logger="slop.document")
    path = tmp_path / "log.slop"
    Slop.parse("a=1").save(path)
    Slop.open(path)
    assert "wrote 4 characters" in caplog.text
    assert "read 4 characters" in caplog.text


def test_open_undecodable_file(tmp_path: Path):
    path = tmp_path / "latin.slop"
    path.write_bytes(b"a=\xff\xfe\n")
    with pytest.raises(SlopIOError) as exc_info:
        Slop.open(path)
    assert isinstance(exc_info.value.cause, UnicodeDecodeError)
    assert exc_info.value.__cause__ is exc_info.value.cause


def test_save_unencodable_text(tmp_path: Path):
    slop = Slop()
    slop.insert("a", "\udcff")
    with pytest.raises(SlopIOError) as exc_info:
        slop.save(tmp_path / "out.slop")
    assert isinstance(exc_info.value.cause, UnicodeEncodeError)
