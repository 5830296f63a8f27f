from __future__ import annotations

import pytest
from pages import pageHTML

from doxpost import availability, h
from doxpost.Page import Page


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Available on clay-web, clay-native", "Available on clay"),
        ("Available on clay-native, clay-web", "Available on clay"),
        ("Available on clay-web", "Available on clay web"),
        ("Available on clay-web, elements-plugin", "Available on clay web"),
        ("Available on clay-native", "Available on clay native"),
        ("Available on clay-native, elements-plugin", "Available with clay native, elements plugin"),
        ("Available on elements-plugin, ui-plugin", "Available with ui plugin"),
        ("Available on ui-plugin, elements-plugin", "Available with ui plugin"),
        ("Available on elements-plugin", "Available with elements plugin"),
        (
            "Available on clay-native, elements-plugin, ui-plugin",
            "Available with clay native, elements plugin, ui plugin",
        ),
        ("Available on all platforms", "Available on all targets"),
        ("Deprecated; works on all platforms", "Available on all targets"),
        ("Available on windows, macos", "Available on windows, macos"),
        ("Available on apple-tv, windows", "Available on apple tv, windows"),
        ("Available on macos, clay-web", "Available on clay web"),
        ("  Available on clay-native \n", "Available on clay native"),
    ],
)
def test_inline_text(text: str, expected: str) -> None:
    assert availability.rewriteInlineText(text) == expected


def test_inline_text_ignores_other_notes() -> None:
    assert availability.rewriteInlineText("Deprecated since 2.0") is None


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("clay-native, elements-plugin", "clay native, elements plugin"),
        ("elements-plugin, ui-plugin", "elements plugin, ui plugin"),
        ("clay-web, clay-native", "clay"),
        (" clay-web ", "clay web"),
        ("clay-native", "clay native"),
        ("apple-tv, windows", "apple tv, windows"),
    ],
)
def test_section_text(text: str, expected: str) -> None:
    assert availability.rewriteSectionText(text) == expected


def test_parse_tokens() -> None:
    tokens = availability.parseTokens("clay-web , elements-plugin")
    assert tokens.raw == ["clay-web", "elements-plugin"]
    assert tokens.display == ["clay web", "elements plugin"]
    assert tokens.isWeb
    assert tokens.hasPlugin
    assert not tokens.isNative


def test_rewrites_inline_notes_in_page() -> None:
    doc = Page(
        "-",
        html=pageHTML(
            '<p class="availability"><em>Available on <b>clay-web</b>, clay-native</em></p>'
            '<p class="availability"><em>Since 2.0</em></p>'
            "<p><em>Available on clay-native</em></p>",
        ),
    )
    assert availability.rewriteInlineAvailability(doc) == 1

    ems = h.findAll("em", doc)
    assert ems[0].text == "Available on clay"
    assert len(ems[0]) == 0
    assert h.textContent(ems[1]) == "Since 2.0"
    # Only notes inside an availability paragraph are touched.
    assert h.textContent(ems[2]) == "Available on clay-native"


def test_rewrites_section_notes_in_page() -> None:
    doc = Page(
        "-",
        html=pageHTML(
            '<div class="section-availability">clay-web, clay-native</div>'
            '<p class="section-availability">elements-plugin, ui-plugin</p>',
        ),
    )
    assert availability.rewriteSectionAvailability(doc) == 2
    assert [h.textContent(el) for el in h.findAll(".section-availability", doc)] == [
        "clay",
        "elements plugin, ui plugin",
    ]
