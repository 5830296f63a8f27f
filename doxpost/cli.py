from __future__ import annotations

import argparse
import os
import sys

from . import config, constants
from . import messages as m

SUBCOMMANDS = ("run", "test")


def main() -> None:
    # argparse has no optional subcommands, so a bare `doxpost` (or one
    # starting straight with a folder or a flag) means `doxpost run ...`.
    if len(sys.argv) == 1 or sys.argv[1] not in (*SUBCOMMANDS, "-h", "--help", "--version"):
        sys.argv.insert(1, "run")

    semver = config.semver()
    messageOptions = messageOptionsParser()
    argparser = argparse.ArgumentParser(
        description=f"doxpost v{semver}: tidies up the HTML pages dox generated, in place.",
    )
    argparser.add_argument("--version", action="version", version=semver)
    subparsers = argparser.add_subparsers(title="Subcommands", dest="subparserName")

    runParser = subparsers.add_parser("run", parents=[messageOptions], help="Rewrite the docs pages. (The default.)")
    runParser.add_argument(
        "docsDir",
        nargs="?",
        default=constants.docsDir,
        help=f"Folder searched, recursively, for .html pages. Defaults to '{constants.docsDir}'.",
    )
    runParser.add_argument("-d", "--dry-run", dest="dryRun", action="store_true", help="Process, but save nothing.")

    testParser = subparsers.add_parser("test", parents=[messageOptions], help="Run the golden-file tests.")
    testParser.add_argument("--rebase", action="store_true", help="Regenerate the expected output instead.")
    testParser.add_argument(
        "--file",
        dest="files",
        nargs="+",
        help="Only the tests whose filename contains one of these substrings.",
    )

    options = argparser.parse_args()
    configureMessages(options)
    if options.subparserName == "run":
        handleRun(options)
    else:
        handleTest(options)


def messageOptionsParser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    group = parser.add_argument_group("messages")
    group.add_argument("-q", "--quiet", action="count", default=0, help="Hide one more level of messages.")
    group.add_argument("-s", "--silent", action="store_true", help="Hide every message.")
    group.add_argument(
        "-f",
        "--force",
        dest="errorLevel",
        action="store_const",
        const="nothing",
        help="Save pages even when they had fatal errors.",
    )
    group.add_argument(
        "--print",
        dest="printMode",
        choices=m.PRINT_MODES,
        help="Message format. 'console' (the default) colors the headings; 'json' prints a JSON line per message.",
    )
    group.add_argument(
        "--die-on",
        dest="errorLevel",
        choices=list(m.MESSAGE_LEVELS),
        help="Lowest message level that keeps a page from being saved. Defaults to 'fatal'.",
    )
    group.add_argument(
        "--die-when",
        dest="errorTiming",
        choices=m.DEATH_TIMING,
        default="late",
        help="'early' stops at the first such error. 'late' (the default) saves the good pages, then fails.",
    )
    return parser


def configureMessages(options: argparse.Namespace) -> None:
    m.state.silent = options.silent
    m.state.printOn = "nothing" if options.silent else m.MessagesState.categoryName(options.quiet)
    if options.errorLevel is not None:
        m.state.dieOn = options.errorLevel
    m.state.dieWhen = options.errorTiming
    if options.printMode is not None:
        m.state.printMode = options.printMode
    elif "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb":
        m.state.printMode = "plain"
    else:
        m.state.printMode = "console"


def handleRun(options: argparse.Namespace) -> None:
    from . import pipeline

    constants.dryRun = options.dryRun
    constants.docsDir = options.docsDir
    pipeline.run(constants.docsDir)
    m.retroactivelyCheckErrorLevel(timing="late")


def handleTest(options: argparse.Namespace) -> None:
    from . import test

    filters = test.TestFilter(files=options.files)
    ok = test.rebase(filters) if options.rebase else test.run(filters)
    sys.exit(0 if ok else 1)
