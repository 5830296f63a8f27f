# pylint: skip-file
# Shared type names. Only TYPE_CHECKING and cast are real at runtime,
# so everything else is only usable in annotations.
from __future__ import annotations

from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from typing import Any, Callable, Iterator, TextIO, TypeAlias, TypeGuard

    from lxml import etree

    from .Page import Page

    ElementT: TypeAlias = etree._Element
    DocumentT: TypeAlias = etree._ElementTree
    PageT: TypeAlias = Page
