import pytest

from subtitle_payload.sanitize import sanitize_text

SAMPLES = [
    "",
    "plain",
    "\uFEFF1\r\n00:00:01,000 --> 00:00:02,000\r\nHi\r\n",
    "\x00\x01\uFFFDHello",
    "\x00\uFEFF\x01x",
    "\uFEFF\uFEFFx",
    "a\r\r\nb",
    "a\n\r\n\n\nb",
    "a\n\n\n\n\n\nb",
    "\tindented\n",
    "mid\x00dle\rcr",
    "\uFFFD\uFFFD\n\n\n\ntext",
]


def test_strips_bom():
    assert sanitize_text("\uFEFFHello") == "Hello"


def test_strips_leading_controls_and_replacements():
    assert sanitize_text("\x00\x01\uFFFDHello") == "Hello"


def test_keeps_leading_tab_and_newlines():
    assert sanitize_text("\tHello") == "\tHello"
    assert sanitize_text("\nHello") == "\nHello"


def test_crlf_to_lf():
    assert sanitize_text("a\r\nb\r\n") == "a\nb\n"


def test_collapses_blank_runs():
    assert sanitize_text("a\n\n\n\nb") == "a\n\nb"
    assert sanitize_text("a\n\nb") == "a\n\nb"


def test_inner_controls_are_left_alone():
    assert sanitize_text("mid\x00dle") == "mid\x00dle"


@pytest.mark.parametrize("text", SAMPLES)
def test_idempotent(text):
    once = sanitize_text(text)
    assert sanitize_text(once) == once
