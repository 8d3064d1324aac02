import pytest

from alertcord.sanitize import clean_text, is_empty_label_value, is_valid_field, truncate


@pytest.mark.parametrize(
    "text,max_len",
    [
        ("short", 10),
        ("exactly ten", 11),
        ("a" * 300, 256),
        ("some long description that goes on", 4),
        ("", 5),
    ],
)
def test_truncate_is_length_safe_and_idempotent(text, max_len):
    once = truncate(text, max_len)
    assert len(once) <= max_len
    assert truncate(once, max_len) == once


def test_truncate_appends_ellipsis():
    assert truncate("abcdefghij", 8) == "abcde..."
    assert truncate("abcdefgh", 8) == "abcdefgh"


def test_clean_text_strips_placeholders():
    assert clean_text("  CPU high (instance ) map[]  ") == "CPU high"
    assert clean_text("(instance)") == ""


@pytest.mark.parametrize(
    "name,value",
    [
        ("", "value"),
        ("Name", "   "),
        ("-", "value"),
        ("Name", "..."),
        ("Name", "No details available"),
        ("Name", "map[]"),
        ("Name", "(instance )"),
        ("Name", "value is undefined"),
        ("Name", "null pointer"),
        ("Name", "map[] (instance)"),
    ],
)
def test_is_valid_field_rejects_placeholders(name, value):
    assert not is_valid_field(name, value)


def test_is_valid_field_accepts_real_content():
    assert is_valid_field(" Message ", " Disk usage above 90% ")


def test_is_empty_label_value():
    assert is_empty_label_value(" ")
    assert is_empty_label_value("undefined")
    assert not is_empty_label_value("host1")
