"""Builders for dox-style page markup used across the tests."""

from __future__ import annotations


def pageHTML(body: str) -> str:
    return f"<!DOCTYPE html><html><head><title>Page</title></head><body>{body}</body></html>"


def fieldHTML(name: str, extra: str = "") -> str:
    return (
        '<div class="field">'
        f'<h3><code><a href="#{name}"><span class="identifier">{name}</span></a></code></h3>'
        f"{extra}"
        "</div>"
    )


def inheritedGroupHTML(typeName: str, label: str, fields: list[str]) -> str:
    return (
        "<div>"
        f'<h4>Defined by <a class="type" title="{typeName}" href="{label}.html">{label}</a></h4>'
        f'<div class="fields">{"".join(fields)}</div>'
        "</div>"
    )


def classPageHTML(ownFields: list[str], inheritedGroups: list[str] | None = None) -> str:
    body = (
        '<nav class="sidebar-nav"><div class="dropdown">Versions</div><ul><li>Button</li></ul></nav>'
        '<div class="doc doc-main"><p>A button.</p></div>'
        '<h3 class="section">Variables</h3>'
        f'<div class="fields">{"".join(ownFields)}</div>'
    )
    if inheritedGroups is not None:
        body += (
            '<div class="inherited-fields">'
            '<h3 class="section">Inherited Variables</h3>'
            f'{"".join(inheritedGroups)}'
            "</div>"
        )
    return pageHTML(body)
