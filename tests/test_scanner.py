"""Tests for the tag scanner."""

import pytest

from stache.errors import (
    BadDelimitersError,
    BadUnescapeTagError,
    EmptyTagError,
    TagTooLongError,
    UnexpectedEndError,
)
from stache.scanner import NAME_LENGTH_MAX, Delimiters, Scanner, TagKind

DEFAULT = Delimiters()


def scan(template, pos=0, delimiters=DEFAULT, **kwargs):
    return Scanner(**kwargs).scan(template, pos, delimiters)


def test_literal_only():
    match = scan("no tags here")
    assert match.text == "no tags here"
    assert match.tag is None
    assert match.end == len("no tags here")


def test_value_tag_name_is_trimmed():
    match = scan("Hello {{  name \t}}!")
    assert match.text == "Hello "
    assert match.tag.kind is TagKind.VALUE
    assert match.tag.name == "name"
    assert match.tag.escape is True
    assert "Hello {{  name \t}}!"[match.end :] == "!"


@pytest.mark.parametrize(
    "template, kind, name",
    [
        ("{{#list}}", TagKind.SECTION, "list"),
        ("{{^ list }}", TagKind.INVERTED, "list"),
        ("{{/list}}", TagKind.CLOSE, "list"),
        ("{{> header }}", TagKind.PARTIAL, "header"),
        ("{{& html}}", TagKind.RAW, "html"),
        ("{{! a comment }}", TagKind.COMMENT, ""),
    ],
)
def test_sigils(template, kind, name):
    match = scan(template)
    assert match.tag.kind is kind
    assert match.tag.name == name
    assert match.end == len(template)


def test_triple_brace_consumes_extra_brace():
    template = "{{{ html }}}rest"
    match = scan(template)
    assert match.tag.kind is TagKind.RAW
    assert match.tag.name == "html"
    assert match.tag.escape is False
    assert template[match.end :] == "rest"


def test_triple_brace_with_custom_delimiters():
    template = "<%{ html }%>rest"
    match = scan(template, delimiters=Delimiters("<%", "%>"))
    assert match.tag.kind is TagKind.RAW
    assert match.tag.name == "html"
    assert template[match.end :] == "rest"


@pytest.mark.parametrize(
    "template, delimiters",
    [
        ("{{{html}}", DEFAULT),
        ("<%{html%>", Delimiters("<%", "%>")),
    ],
)
def test_bad_unescape_tag(template, delimiters):
    with pytest.raises(BadUnescapeTagError):
        scan(template, delimiters=delimiters)


def test_delimiter_redefinition():
    match = scan("a{{=<% %>=}}b")
    assert match.text == "a"
    assert match.tag.kind is TagKind.DELIMITERS
    assert match.tag.delimiters == Delimiters("<%", "%>")


def test_delimiter_redefinition_allows_padding():
    match = scan("{{= | | =}}")
    assert match.tag.delimiters == Delimiters("|", "|")


@pytest.mark.parametrize(
    "template",
    ["{{=<%=}}", "{{=<%%>=}}", "{{=<% %> x=}}", "{{=<% %>}}", "{{=   =}}"],
)
def test_bad_delimiters(template):
    with pytest.raises(BadDelimitersError):
        scan(template)


def test_unterminated_tag():
    with pytest.raises(UnexpectedEndError):
        scan("text {{name")


def test_empty_tag_allowed_by_default():
    match = scan("{{ }}")
    assert match.tag.kind is TagKind.VALUE
    assert match.tag.name == ""


def test_empty_tag_rejected_when_disabled():
    with pytest.raises(EmptyTagError):
        scan("{{#  }}", allow_empty_tag=False)


def test_name_length_limit():
    longest = "a" * NAME_LENGTH_MAX
    assert scan("{{" + longest + "}}").tag.name == longest

    with pytest.raises(TagTooLongError):
        scan("{{" + longest + "a}}")


def test_colon_extension_takes_name_verbatim():
    match = scan("{{:#hash}}")
    assert match.tag.kind is TagKind.VALUE
    assert match.tag.name == "#hash"


def test_colon_extension_disabled():
    match = scan("{{:name}}", colon_extension=False)
    assert match.tag.kind is TagKind.VALUE
    assert match.tag.name == ":name"


def test_scan_resumes_at_position():
    template = "{{a}}-{{b}}"
    first = scan(template)
    second = scan(template, first.end)
    assert second.text == "-"
    assert second.tag.name == "b"


def test_empty_delimiters_rejected():
    with pytest.raises(BadDelimitersError):
        Delimiters("", "}}")
