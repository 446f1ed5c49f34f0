import os
from pathlib import Path
from typing import Callable

import pytest

# Subprocess-spawned CLI runs report coverage when started under `coverage run`
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()


@pytest.fixture  # type: ignore[misc]
def lex_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Writes token-file text to `<tmp>/<name>` and returns the path."""

    def write(text: str, name: str = "input.lex") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return write
