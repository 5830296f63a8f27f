from __future__ import annotations

import io
from pathlib import Path

from pages import classPageHTML, fieldHTML, pageHTML

from doxpost import test


def writeTest(testDir: Path, name: str, html: str) -> Path:
    path = testDir / f"{name}{test.TEST_FILE_EXTENSION}"
    path.write_text(html, encoding="utf-8")
    return path


def test_repo_golden_tests_pass() -> None:
    assert test.testPaths(test.TestFilter())
    assert test.run(test.TestFilter()) is True


def test_rebase_then_run_passes(tmp_path: Path) -> None:
    writeTest(tmp_path, "button", classPageHTML([fieldHTML("_dox_event_click")]))
    assert test.rebase(test.TestFilter(), str(tmp_path)) is True

    assert "_dox_event_" not in (tmp_path / "button.html").read_text(encoding="utf-8")
    assert (tmp_path / "button.console.txt").read_text(encoding="utf-8") == ""
    assert test.run(test.TestFilter(), str(tmp_path)) is True


def test_console_output_is_part_of_the_expectation(tmp_path: Path) -> None:
    writeTest(tmp_path, "broken", pageHTML(f'<div class="fields">{fieldHTML("_dox_event_click")}</div>'))
    test.rebase(test.TestFilter(), str(tmp_path))
    assert "FATAL ERROR" in (tmp_path / "broken.console.txt").read_text(encoding="utf-8")
    assert test.run(test.TestFilter(), str(tmp_path)) is True


def test_changed_output_fails(tmp_path: Path, console: io.StringIO) -> None:
    writeTest(tmp_path, "button", classPageHTML([fieldHTML("_dox_event_click")]))
    test.rebase(test.TestFilter(), str(tmp_path))
    (tmp_path / "button.html").write_text("<p>Something else</p>", encoding="utf-8")

    assert test.run(test.TestFilter(), str(tmp_path)) is False
    output = console.getvalue()
    assert "+++ actual" in output
    assert "* button.src.html" in output


def test_missing_expectations_fail(tmp_path: Path, console: io.StringIO) -> None:
    writeTest(tmp_path, "button", classPageHTML([]))
    assert test.run(test.TestFilter(), str(tmp_path)) is False
    assert "generate it with --rebase" in console.getvalue()


def test_file_filter(tmp_path: Path) -> None:
    writeTest(tmp_path, "button", classPageHTML([]))
    writeTest(tmp_path, "view", classPageHTML([]))

    test.rebase(test.TestFilter(files=["view"]), str(tmp_path))
    assert (tmp_path / "view.html").exists()
    assert not (tmp_path / "button.html").exists()

    paths = test.testPaths(test.TestFilter(files=["view"]), str(tmp_path))
    assert [Path(p).name for p in paths] == ["view.src.html"]


def test_no_tests_found(tmp_path: Path) -> None:
    assert test.run(test.TestFilter(), str(tmp_path)) is True


def test_missing_golden_folder_fails(tmp_path: Path, console: io.StringIO) -> None:
    missing = str(tmp_path / "golden")
    assert test.run(test.TestFilter(), missing) is False
    assert test.rebase(test.TestFilter(), missing) is False
    assert "the tests need a source checkout" in console.getvalue()
