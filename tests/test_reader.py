import pytest

from bootmeta.core.errors import BootFileError
from bootmeta.core.models import RepeatedValue, ScalarValue, key_values_to_json
from bootmeta.parsing.reader import KeyValueReader, read_key_values


def test_single_values_keep_trimmed_text(tmp_path):
    path = tmp_path / "loader.conf"
    path.write_text("default   arch.conf  \n\ntimeout 3\n   \n  editor no\n")

    kvs = read_key_values(path)

    assert kvs == {
        "default": ScalarValue("arch.conf"),
        "timeout": ScalarValue("3"),
        "editor": ScalarValue("no"),
    }


def test_repeated_key_promotes_to_sequence(tmp_path):
    """
    PROMOTION TEST: the first repeat turns the scalar into a two-element
    sequence, later repeats append.
    """
    path = tmp_path / "entry.conf"
    path.write_text("A 1\nA 2\nA 3\n")

    kvs = read_key_values(path)

    assert kvs["A"] == RepeatedValue(("1", "2", "3"))
    assert key_values_to_json(kvs) == {"A": ["1", "2", "3"]}


def test_key_without_value_is_empty_string(tmp_path):
    path = tmp_path / "entry.conf"
    path.write_text("title Arch\nauto-entries\n")

    kvs = read_key_values(path)

    assert kvs["auto-entries"] == ScalarValue("")
    assert "missing" not in kvs


def test_value_keeps_inner_whitespace_and_tabs():
    reader = KeyValueReader()
    kvs = reader.parse_text("title\tArch  Linux   LTS\n")
    assert kvs["title"].value == "Arch  Linux   LTS"


def test_comments_bom_and_crlf_are_ignored():
    reader = KeyValueReader()
    kvs = reader.parse_text("\ufeff# managed by build\r\ntimeout 5\r\n  # another\r\n")
    assert key_values_to_json(kvs) == {"timeout": "5"}


def test_missing_file_raises_boot_file_error(tmp_path):
    with pytest.raises(BootFileError) as exc:
        read_key_values(tmp_path / "nope.conf")
    assert "nope.conf" in str(exc.value)


def test_binary_file_raises_boot_file_error(tmp_path):
    path = tmp_path / "garbage.conf"
    path.write_bytes(b"\xff\xfe\xfa\x00garbage")
    with pytest.raises(BootFileError):
        read_key_values(path)


def test_hash_prefixed_key_is_a_comment(tmp_path):
    path = tmp_path / "arch.conf"
    path.write_text("#title Disabled\ntitle Arch\n#options quiet\n")

    kvs = read_key_values(path)

    assert key_values_to_json(kvs) == {"title": "Arch"}
