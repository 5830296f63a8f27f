from __future__ import annotations

import dataclasses
import difflib
import glob
import io
import os

from alive_progress import alive_it

from . import config
from . import messages as m
from .Page import Page

# Only present in a source checkout; the golden files aren't installed with the package.
TEST_DIR = config.scriptPath("tests", "golden")
TEST_FILE_EXTENSION = ".src.html"


@dataclasses.dataclass
class TestFilter:
    # Substrings of the filenames to run; None runs everything.
    files: list[str] | None = None

    def matches(self, path: str) -> bool:
        return not self.files or any(substring in os.path.basename(path) for substring in self.files)


def testPaths(filters: TestFilter, testDir: str = TEST_DIR) -> list[str]:
    pattern = os.path.join(testDir, "**", "*" + TEST_FILE_EXTENSION)
    return sorted(path for path in glob.glob(pattern, recursive=True) if filters.matches(path))


def testNameForPath(path: str, testDir: str = TEST_DIR) -> str:
    return os.path.relpath(path, testDir)


def goldenPath(path: str, suffix: str) -> str:
    # foo.src.html -> foo.html / foo.console.txt
    return path[: -len(TEST_FILE_EXTENSION)] + suffix


def readGolden(path: str) -> str:
    with open(path, encoding="utf-8", newline="") as fh:
        return fh.read()


def writeGolden(path: str, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as fh:
        fh.write(text)


def processTest(path: str, testDir: str = TEST_DIR) -> tuple[str | None, str]:
    # Messages are captured separately, so they can be compared too.
    console = io.StringIO()
    with m.withMessageState(console, printMode="plain"):
        doc = Page(testNameForPath(path, testDir), html=readGolden(path)).process()
        output = doc.serialize()
    return output, console.getvalue()


def collectTests(filters: TestFilter, testDir: str) -> list[str] | None:
    if not os.path.isdir(testDir):
        m.p(m.printColor(f"There's no golden test folder at {testDir}; the tests need a source checkout.", "red"))
        return None
    paths = testPaths(filters, testDir)
    if not paths:
        m.p("No tests were found.")
    return paths


def run(filters: TestFilter, testDir: str = TEST_DIR) -> bool:
    paths = collectTests(filters, testDir)
    if paths is None:
        return False
    failed = []
    for path in alive_it(paths, dual_line=True, length=20):
        name = testNameForPath(path, testDir)
        output, console = processTest(path, testDir)
        if output is None:
            m.p(m.printColor(f"Couldn't serialize '{name}'.", "red"))
            failed.append(name)
            continue
        try:
            expected = readGolden(goldenPath(path, ".html"))
            expectedConsole = readGolden(goldenPath(path, ".console.txt"))
        except FileNotFoundError:
            m.p(m.printColor(f"No expected output for '{name}'; generate it with --rebase.", "red"))
            failed.append(name)
            continue
        # Both comparisons run, so both diffs get printed.
        sameOutput = compare(output, expected, path)
        sameConsole = compare(console, expectedConsole, path)
        if not (sameOutput and sameConsole):
            failed.append(name)
    if not failed:
        m.p(m.printColor("✔ All tests passed.", "green"))
        return True
    m.p(m.printColor(f"✘ {len(paths) - len(failed)}/{len(paths)} tests passed. Failed:", "red"))
    for name in failed:
        m.p("* " + name)
    return False


def rebase(filters: TestFilter, testDir: str = TEST_DIR) -> bool:
    paths = collectTests(filters, testDir)
    if paths is None:
        return False
    for path in alive_it(paths, dual_line=True, length=20):
        output, console = processTest(path, testDir)
        if output is None:
            m.p(m.printColor(f"Couldn't serialize '{testNameForPath(path, testDir)}'.", "red"))
            continue
        writeGolden(goldenPath(path, ".html"), output)
        writeGolden(goldenPath(path, ".console.txt"), console)
    return True


def compare(actual: str, expected: str, path: str) -> bool:
    if actual == expected:
        return True
    m.p(f"FILE: {path}")
    diff = difflib.unified_diff(expected.split("\n"), actual.split("\n"), fromfile="expected", tofile="actual")
    for line in diff:
        color = {"-": "red", "+": "green"}.get(line[:1])
        m.p(m.printColor(line, color) if color else line)
    m.p("")
    return False
