from pathlib import Path

import pytest

from fastthumbhash.io.config import get_section, load_yaml, pick_bool, pick_int, pick_str


def test_load_yaml_mapping(tmp_path: Path):
    p = tmp_path / "x.yml"
    p.write_text("decode:\n  base_size: 64\n  upscale: 4\nencode:\n  format: base64\n", encoding="utf-8")
    cfg = load_yaml(p)
    assert cfg["decode"] == {"base_size": 64, "upscale": 4}
    assert cfg["encode"]["format"] == "base64"


def test_load_yaml_empty_returns_empty_dict(tmp_path: Path):
    p = tmp_path / "empty.yml"
    p.write_text("", encoding="utf-8")
    assert load_yaml(p) == {}


def test_load_yaml_root_must_be_mapping(tmp_path: Path):
    p = tmp_path / "list.yml"
    p.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_yaml(p)


def test_load_yaml_invalid_syntax(tmp_path: Path):
    p = tmp_path / "bad.yml"
    p.write_text("a: [1, 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_yaml(p)


def test_get_section_missing_returns_empty():
    assert get_section({}, "missing") == {}


def test_get_section_non_mapping_raises():
    with pytest.raises(ValueError):
        get_section({"decode": 123}, "decode")


def test_pick_int_precedence():
    assert pick_int({}, "k", None, 7) == 7
    assert pick_int({"k": 3}, "k", None, 7) == 3
    assert pick_int({"k": 3}, "k", 9, 7) == 9
    assert pick_int({"k": 3.0}, "k", None, 0) == 3


def test_pick_int_rejects_bool_and_non_integral_float():
    with pytest.raises(ValueError):
        pick_int({"k": True}, "k", None, 0)
    with pytest.raises(ValueError):
        pick_int({"k": 3.5}, "k", None, 0)
    with pytest.raises(ValueError):
        pick_int({"k": "3"}, "k", None, 0)


def test_pick_bool_accepts_bool_and_0_1():
    assert pick_bool({}, "k", None, True) is True
    assert pick_bool({"k": False}, "k", None, True) is False
    assert pick_bool({"k": 1}, "k", None, False) is True
    assert pick_bool({"k": False}, "k", True, False) is True


def test_pick_bool_rejects_other_values():
    with pytest.raises(ValueError):
        pick_bool({"k": 2}, "k", None, False)
    with pytest.raises(ValueError):
        pick_bool({"k": "true"}, "k", None, False)


def test_pick_str():
    assert pick_str({}, "k", None, "d") == "d"
    assert pick_str({"k": "x"}, "k", None, "d") == "x"
    assert pick_str({"k": "x"}, "k", "y", "d") == "y"
    with pytest.raises(ValueError):
        pick_str({"k": 1}, "k", None, "d")
