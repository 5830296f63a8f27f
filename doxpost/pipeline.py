from __future__ import annotations

import glob
import os

from . import constants
from . import messages as m
from .Page import Page


def findDocuments(docsDir: str | None = None) -> list[str]:
    if docsDir is None:
        docsDir = constants.docsDir
    return sorted(glob.glob(os.path.join(docsDir, "**", "*.html"), recursive=True))


def run(docsDir: str | None = None) -> bool:
    """
    Rewrites every page under docsDir in place.
    Returns whether every page was saved.
    """
    if docsDir is None:
        docsDir = constants.docsDir
    if not os.path.isdir(docsDir):
        m.die(f"Couldn't find the docs folder '{docsDir}'.")
        return False
    paths = findDocuments(docsDir)
    if not paths:
        m.warn(f"No .html pages were found in '{docsDir}'.")
        return True
    saved = 0
    for path in paths:
        if processPage(path):
            saved += 1
    if saved == len(paths):
        m.success(f"Processed {saved} pages.")
        return True
    m.failure(f"Saved {saved}/{len(paths)} pages.")
    return False


def processPage(path: str) -> bool:
    doc = Page(inputFilename=path)
    if not doc.valid:
        return False
    doc.process()
    return doc.finish()


def processString(html: str, inputFilename: str = "-") -> tuple[Page, str | None]:
    # Used by tests: runs the full transform without touching the disk.
    doc = Page(inputFilename=inputFilename, html=html).process()
    return doc, doc.serialize()
