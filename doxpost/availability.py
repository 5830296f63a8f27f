from __future__ import annotations

import dataclasses

from . import constants, h, t


@dataclasses.dataclass
class AvailabilityTokens:
    """
    A comma-separated list of targets, like "clay-web, elements-plugin".

    `raw` holds the trimmed tokens as written,
    `display` the same tokens with hyphens turned into spaces.
    The flags are computed from the raw tokens.
    """

    raw: list[str]
    display: list[str]
    hasPlugin: bool = False
    isWeb: bool = False
    isNative: bool = False


def parseTokens(text: str) -> AvailabilityTokens:
    raw = [item.strip() for item in text.split(",")]
    return AvailabilityTokens(
        raw=raw,
        display=[displayForm(item) for item in raw],
        hasPlugin=any(item.endswith(constants.pluginSuffix) for item in raw),
        isWeb=constants.webTarget in raw,
        isNative=constants.nativeTarget in raw,
    )


def displayForm(token: str) -> str:
    return token.replace("-", " ")


def webTargetsOnly(tokens: AvailabilityTokens) -> list[str]:
    # When the web target is listed, only it is worth mentioning;
    # it's just the product itself if the native target is also there.
    pluginSuffix = displayForm(constants.pluginSuffix)
    productPrefix = constants.productName + " "
    webTarget = displayForm(constants.webTarget)
    filtered = []
    for item in tokens.display:
        if item.endswith(pluginSuffix) or not item.startswith(productPrefix):
            continue
        if item == webTarget:
            filtered.append(constants.productName if tokens.isNative else webTarget)
    return filtered


def collapsePlugins(display: list[str]) -> list[str]:
    # The ui plugin pulls in the elements plugin, so don't list both.
    if len(display) == 2 and set(display) == {"elements plugin", "ui plugin"}:
        return ["ui plugin"]
    return display


def rewriteInlineText(text: str) -> str | None:
    """
    Rewrites an "Available on ..." sentence.
    Returns None if the text isn't an availability sentence at all.
    """
    text = text.strip()
    if constants.allPlatforms in text:
        return constants.allTargets
    if not text.startswith(constants.availablePrefix):
        return None
    tokens = parseTokens(text[len(constants.availablePrefix) :])
    if tokens.isWeb:
        return constants.availablePrefix + ", ".join(webTargetsOnly(tokens))
    if tokens.hasPlugin:
        return constants.availableWithPrefix + ", ".join(collapsePlugins(tokens.display))
    return constants.availablePrefix + ", ".join(tokens.display)


def rewriteSectionText(text: str) -> str:
    tokens = parseTokens(text.strip())
    if tokens.isWeb:
        return ", ".join(webTargetsOnly(tokens))
    return ", ".join(tokens.display)


def rewriteInlineAvailability(doc: t.PageT) -> int:
    count = 0
    for el in h.findAll(constants.inlineAvailabilitySel, doc):
        newText = rewriteInlineText(h.textContent(el))
        if newText is not None:
            h.setTextContent(el, newText)
            count += 1
    return count


def rewriteSectionAvailability(doc: t.PageT) -> int:
    els = h.findAll(constants.sectionAvailabilitySel, doc)
    for el in els:
        h.setTextContent(el, rewriteSectionText(h.textContent(el)))
    return len(els)
