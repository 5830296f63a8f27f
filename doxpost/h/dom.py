from __future__ import annotations

import functools

import html5lib
from cssselect import SelectorError
from lxml import etree
from lxml.cssselect import CSSSelector
from lxml.html import tostring

from .. import t
from ..messages import die

if t.TYPE_CHECKING:
    ElementPredT: t.TypeAlias = t.Callable[[t.ElementT], bool]
    ContextT: t.TypeAlias = t.PageT | t.ElementT | t.DocumentT


@functools.lru_cache(maxsize=None)
def compiledSelector(sel: str) -> CSSSelector:
    return CSSSelector(sel)


def findAll(sel: str, context: ContextT) -> list[t.ElementT]:
    # Pages are searched through their document.
    root = getattr(context, "document", context)
    try:
        selector = compiledSelector(sel)
    except SelectorError as e:
        die(f"The selector '{sel}' isn't valid:\n{e}")
        return []
    return t.cast("list[t.ElementT]", selector(root))


def find(sel: str, context: ContextT) -> t.ElementT | None:
    return next(iter(findAll(sel, context)), None)


def textContent(el: t.ElementT) -> str:
    return t.cast(str, tostring(el, method="text", with_tail=False, encoding="unicode"))


def setTextContent(el: t.ElementT, text: str) -> t.ElementT:
    # Same as the DOM's .textContent setter: the children are replaced by the text.
    del el[:]
    el.text = text
    return el


def outerHTML(el: t.ElementT) -> str:
    return t.cast(str, tostring(el, with_tail=False, encoding="unicode"))


def parseDocument(text: str) -> t.DocumentT:
    return t.cast("t.DocumentT", html5lib.parse(text, treebuilder="lxml", namespaceHTMLElements=False))


def parseElement(markup: str) -> t.ElementT:
    # Markup for a single body-level element, parsed back into one.
    body = parseDocument(markup).getroot().find("body")
    assert body is not None
    return next(childElements(body))


def createElement(tag: str, attrs: dict[str, str] | None = None, text: str | None = None) -> t.ElementT:
    el = etree.Element(tag, attrs or {})
    el.text = text
    return el


def prependChild(parent: t.ElementT, *children: t.ElementT) -> None:
    # Any text the parent started with now follows the new children.
    leadingText, parent.text = parent.text, None
    for index, child in enumerate(children):
        parent.insert(index, child)
    if not children:
        parent.text = leadingText
    elif leadingText:
        children[-1].tail = (children[-1].tail or "") + leadingText


def insertAfter(target: t.ElementT, *els: t.ElementT) -> None:
    parent = target.getparent()
    assert parent is not None
    if not els:
        return
    # lxml moves tails with their elements, so the target's tail
    # has to go after the last inserted element instead.
    tail, target.tail = target.tail, None
    start = parent.index(target) + 1
    for offset, el in enumerate(els):
        parent.insert(start + offset, el)
    els[-1].tail = (els[-1].tail or "") + (tail or "")


def removeNode(node: t.ElementT) -> t.ElementT:
    parent = node.getparent()
    if parent is None:
        return node
    # The tail is the parent's content, so it stays behind.
    if node.tail:
        previous = node.getprevious()
        if previous is None:
            parent.text = (parent.text or "") + node.tail
        else:
            previous.tail = (previous.tail or "") + node.tail
    node.tail = None
    parent.remove(node)
    return node


def scopingElements(startEl: t.ElementT, tags: list[str], within: t.ElementT | None = None) -> t.Iterator[t.ElementT]:
    # Preceding siblings of startEl, then of each of its ancestors,
    # nearest first, without leaving `within`.
    el: t.ElementT | None = startEl
    while el is not None and el is not within:
        yield from el.itersiblings(*tags, preceding=True)
        el = el.getparent()


def childElements(parent: t.ElementT, oddNodes: bool = False) -> t.Iterator[t.ElementT]:
    # With oddNodes, comments come along too.
    if oddNodes:
        return iter(parent)
    return parent.iterchildren(etree.Element)


def closestAncestor(el: t.ElementT, pred: ElementPredT) -> t.ElementT | None:
    return next((ancestor for ancestor in el.iterancestors() if pred(ancestor)), None)


def hasAncestor(el: t.ElementT, pred: ElementPredT) -> bool:
    return closestAncestor(el, pred) is not None


def hasClass(el: t.ElementT, cls: str) -> bool:
    return cls in (el.get("class") or "").split()


def isElement(node: t.Any) -> t.TypeGuard[t.ElementT]:
    # Comments and processing instructions are _Elements too, but their tag isn't a string.
    return isinstance(node, etree._Element) and isinstance(node.tag, str)
