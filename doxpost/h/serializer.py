from __future__ import annotations

import dataclasses
import io
import re

from lxml import etree

from .. import t
from . import dom

if t.TYPE_CHECKING:
    WriterFn: t.TypeAlias = t.Callable[[str], t.Any]


@dataclasses.dataclass
class SourceSpelling:
    """
    The bits of a page's original spelling that html5lib throws away.

    The parser uppercases the doctype, decodes every character reference,
    and adds the <tbody> a table implies.
    Judging from the source text, the serializer puts those back
    the way the page wrote them.
    Pages that mix spellings (some `&gt;`, some bare `>`)
    come out with the escaped spelling throughout.
    """

    doctype: str | None = None
    escapeGt: bool = False
    escapeNbsp: bool = False
    writtenTbody: bool = True

    @staticmethod
    def fromSource(html: str) -> SourceSpelling:
        match = re.match(r"\s*(<!doctype[^>]*>)", html, re.IGNORECASE)
        return SourceSpelling(
            doctype=match.group(1) if match else None,
            escapeGt="&gt;" in html,
            escapeNbsp="&nbsp;" in html,
            writtenTbody=re.search(r"<tbody[\s>]", html, re.IGNORECASE) is not None,
        )


class Serializer:
    """
    Writes a parsed page back out without reformatting it:
    no whitespace is added or removed and attributes keep their source order,
    so a page nothing was done to comes out the way it went in.
    """

    rawEls = frozenset(["script", "style", "xmp", "iframe", "noembed", "noframes", "plaintext"])
    voidEls = frozenset(
        ["area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "param", "source", "track", "wbr"],
    )

    def __init__(self, spelling: SourceSpelling | None = None) -> None:
        self.spelling = spelling or SourceSpelling()

    def serialize(self, tree: t.DocumentT) -> str:
        out = io.StringIO()
        root = tree.getroot()
        if tree.docinfo.doctype:
            out.write(self.spelling.doctype or tree.docinfo.doctype)
        nodes = [*reversed(list(root.itersiblings(preceding=True))), root, *root.itersiblings()]
        for node in nodes:
            self.writeNode(node, out.write)
        return out.getvalue()

    def serializeFragment(self, el: t.ElementT) -> str:
        out = io.StringIO()
        self.writeNode(el, out.write)
        return out.getvalue()

    def escapeText(self, text: str) -> str:
        text = text.replace("&", "&amp;").replace("<", "&lt;")
        if self.spelling.escapeGt:
            text = text.replace(">", "&gt;")
        if self.spelling.escapeNbsp:
            text = text.replace("\xa0", "&nbsp;")
        return text

    def escapeAttr(self, value: str) -> str:
        value = value.replace("&", "&amp;").replace('"', "&quot;")
        if self.spelling.escapeNbsp:
            value = value.replace("\xa0", "&nbsp;")
        return value

    def startTag(self, el: t.ElementT) -> str:
        parts = [localName(el.tag)]
        for name, value in el.items():
            name = localName(name)
            # Empty attributes were most likely written bare.
            parts.append(name if value == "" else f'{name}="{self.escapeAttr(value)}"')
        return "<" + " ".join(parts) + ">"

    def isImplied(self, el: t.ElementT) -> bool:
        return el.tag == "tbody" and not self.spelling.writtenTbody and not el.attrib

    def writeNode(self, node: t.ElementT, write: WriterFn) -> None:
        if node.tag is etree.Comment:
            write(f"<!--{node.text or ''}-->")
        elif dom.isElement(node):
            self.writeElement(node, write)

    def writeElement(self, el: t.ElementT, write: WriterFn) -> None:
        implied = self.isImplied(el)
        if not implied:
            write(self.startTag(el))
        if localName(el.tag) in self.voidEls:
            return
        if localName(el.tag) in self.rawEls:
            write(el.text or "")
        else:
            if el.text:
                write(self.escapeText(el.text))
            for child in dom.childElements(el, oddNodes=True):
                self.writeNode(child, write)
                if child.tail:
                    write(self.escapeText(child.tail))
        if not implied:
            write(f"</{localName(el.tag)}>")


def localName(name: str) -> str:
    # html5lib keeps svg and mathml names in lxml's "{namespace}name" form.
    return name.rpartition("}")[2]
