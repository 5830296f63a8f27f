from __future__ import annotations

import sys

from . import availability, constants, events, h, t
from . import messages as m


class Page:
    def __init__(self, inputFilename: str, html: str | None = None) -> None:
        # Pass html to process a page that isn't read from inputFilename.
        self.inputFilename: str = inputFilename
        self.valid: bool = False
        self.html: str | None = html
        # Fatal errors already reported before this page,
        # so finish() can tell whether this page added any.
        self.fatalsBefore: int = m.state.categoryCounts["fatal"]
        self.events: events.EventFields = events.EventFields()
        self.valid = self.initializeState()

    def initializeState(self) -> bool:
        if self.html is not None:
            self.document: t.DocumentT = h.parseDocument(self.html)
            return True
        try:
            with open(self.inputFilename, encoding="utf-8") as fh:
                self.html = fh.read()
        except FileNotFoundError:
            m.die(f"Couldn't find the page at the specified location '{self.inputFilename}'.")
            return False
        except OSError as e:
            m.die(f"Couldn't open the page '{self.inputFilename}':\n{e}")
            return False

        self.document = h.parseDocument(self.html)
        return True

    def process(self) -> Page:
        removeSidebarDropdown(self)
        self.events = events.processEvents(self)
        availability.rewriteInlineAvailability(self)
        availability.rewriteSectionAvailability(self)
        return self

    def hasNewFatals(self) -> bool:
        return m.state.categoryCounts["fatal"] > self.fatalsBefore

    def serialize(self) -> str | None:
        spelling = h.SourceSpelling.fromSource(self.html or "")
        try:
            return h.Serializer(spelling).serialize(self.document)
        except Exception as e:
            m.die(f"Couldn't serialize {self.inputFilename}:\n{e}")
            return None

    def finish(self, outputFilename: str | None = None) -> bool:
        if outputFilename is None:
            outputFilename = self.inputFilename
        if self.hasNewFatals() and m.state.shouldDie("fatal", timing="late"):
            m.failure(f"Did not save {outputFilename}, due to errors.")
            return False
        rendered = self.serialize()
        if rendered is None:
            return False
        if constants.dryRun:
            return True
        try:
            if outputFilename == "-":
                sys.stdout.write(rendered)
            else:
                with open(outputFilename, "w", encoding="utf-8", newline="") as f:
                    f.write(rendered)
        except Exception as e:
            m.die(f"Something prevented me from saving the page to {outputFilename}:\n{e}")
            return False
        m.say(f"save {outputFilename}")
        return True


def removeSidebarDropdown(doc: Page) -> None:
    for el in h.findAll(constants.sidebarDropdownSel, doc):
        h.removeNode(el)
