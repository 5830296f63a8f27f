from __future__ import annotations

import io
from collections.abc import Iterator

import pytest

from doxpost import constants
from doxpost import messages as m


@pytest.fixture(autouse=True)
def console() -> Iterator[io.StringIO]:
    # Every test gets its own message state, so counts and settings don't leak.
    fh = io.StringIO()
    with m.withMessageState(fh=fh, printMode="plain"):
        yield fh


@pytest.fixture(autouse=True)
def resetConstants() -> Iterator[None]:
    dryRun, docsDir = constants.dryRun, constants.docsDir
    yield
    constants.dryRun, constants.docsDir = dryRun, docsDir
