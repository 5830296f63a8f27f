from __future__ import annotations

import contextlib
import dataclasses
import json
import sys
from collections import Counter

from . import t

MESSAGE_LEVELS = {name: level for level, name in enumerate(["everything", "message", "warning", "fatal", "nothing"])}

# "early" stops at the first disallowed error,
# "late" finishes the run and fails at the end.
DEATH_TIMING = ["early", "late"]

PRINT_MODES = ["plain", "console", "markup", "json"]

COLOR_CODES = {"red": 31, "green": 32, "light cyan": 96, "white": 97}
STYLE_CODES = {"bold": 1, "invert": 7}

# How each reported category is headed in plain and console output.
HEADINGS = {
    "fatal": ("FATAL ERROR:", "red", "bold"),
    "warning": ("WARNING:", "light cyan", "bold"),
    "success": (" ✔ ", "green", "invert"),
    "failure": (" ✘ ", "red", "invert"),
}


@dataclasses.dataclass
class MessagesState:
    dieOn: str = "fatal"
    dieWhen: str = "late"
    printOn: str = "everything"
    # Also hides the final success/failure line.
    silent: bool = False
    printMode: str = "console"
    fh: t.TextIO = dataclasses.field(default_factory=lambda: sys.stdout)
    seenMessages: set[str] = dataclasses.field(default_factory=set)
    # Every report is counted, even ones not printed again.
    categoryCounts: Counter[str] = dataclasses.field(default_factory=Counter)

    def record(self, category: str, message: str) -> bool:
        self.categoryCounts[category] += 1
        if message in self.seenMessages:
            return False
        self.seenMessages.add(message)
        return True

    def shouldDie(self, category: str, timing: str = "early") -> bool:
        if timing == "early" and self.dieWhen == "late":
            return False
        return MESSAGE_LEVELS[category] >= MESSAGE_LEVELS[self.dieOn]

    def shouldPrint(self, category: str) -> bool:
        if self.silent:
            return False
        if category in ("success", "failure"):
            return True
        return MESSAGE_LEVELS[category] >= MESSAGE_LEVELS[self.printOn]

    @staticmethod
    def categoryName(quietness: int) -> str:
        names = list(MESSAGE_LEVELS)
        return names[min(quietness, len(names) - 1)]


state = MessagesState()


def p(msg: str) -> None:
    try:
        print(msg, file=state.fh)
    except UnicodeEncodeError:
        print(msg.encode("ascii", "replace").decode(), file=state.fh)


def elementExcerpt(el: t.ElementT | None) -> str:
    if el is None:
        return ""
    from . import h

    return "\n" + h.outerHTML(el)[:100]


def report(category: str, msg: str, el: t.ElementT | None = None) -> None:
    formatted = formatMessage(category, msg + elementExcerpt(el))
    if state.record(category, formatted) and state.shouldPrint(category):
        p(formatted)
    if state.shouldDie(category):
        errorAndExit()


def die(msg: str, el: t.ElementT | None = None) -> None:
    report("fatal", msg, el)


def warn(msg: str, el: t.ElementT | None = None) -> None:
    report("warning", msg, el)


def say(msg: str) -> None:
    if state.shouldPrint("message"):
        p(formatMessage("message", msg))


def success(msg: str) -> None:
    if state.shouldPrint("success"):
        p(formatMessage("success", msg))


def failure(msg: str) -> None:
    if state.shouldPrint("failure"):
        p(formatMessage("failure", msg))


def retroactivelyCheckErrorLevel(timing: str = "early") -> bool:
    for category, count in state.categoryCounts.items():
        if count and state.shouldDie(category, timing):
            errorAndExit()
    return True


def errorAndExit() -> None:
    failure("Did not finish, due to errors exceeding the allowed error level.")
    sys.exit(2)


def printColor(text: str, color: str = "white", style: str | None = None) -> str:
    if state.printMode != "console":
        return text
    codes = [str(STYLE_CODES[style])] if style else []
    codes.append(str(COLOR_CODES[color]))
    return f"\033[{';'.join(codes)}m{text}\033[0m"


def formatMessage(category: str, text: str) -> str:
    if state.printMode == "json":
        # One object per line
        return json.dumps({"messageType": category, "text": text})
    if state.printMode == "markup":
        tag = "final-" + category if category in ("success", "failure") else category
        return f"<{tag}>{text.replace('<', '&lt;')}</{tag}>"
    if category == "message":
        return text
    heading, color, style = HEADINGS[category]
    return printColor(heading, color, style) + " " + text


@contextlib.contextmanager
def withMessageState(fh: t.TextIO, **settings: t.Any) -> t.Iterator[t.TextIO]:
    # Fresh counts and seen messages for the duration, then the old state comes back.
    global state
    outer = state
    state = dataclasses.replace(outer, fh=fh, seenMessages=set(), categoryCounts=Counter(), **settings)
    try:
        yield fh
    finally:
        state = outer
