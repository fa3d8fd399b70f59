"""Shared test fixtures."""

import logging
from pathlib import Path

import pytest

from futhorc.rules import EH, LAGU, NYD, OS, THORN


@pytest.fixture(autouse=True)
def _restore_futhorc_logger():
    """The CLI installs its own handler; undo that after each test."""
    logger = logging.getLogger("futhorc")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def lexicon_file(tmp_path: Path) -> Path:
    """A small spelling lexicon with a comment and one malformed line."""
    p = tmp_path / "spellings.tsv"
    p.write_text(
        "# word\trunes\n"
        "\n"
        f"thee\t{THORN}{EH}{EH}\n"
        f"noll\t{NYD}{OS}{LAGU}\n"
        "broken line without a tab\n",
        encoding="utf-8",
    )
    return p


@pytest.fixture
def config_file(tmp_path: Path, lexicon_file: Path) -> Path:
    """A futhorc.toml next to the lexicon file, using a relative glob."""
    p = tmp_path / "futhorc.toml"
    p.write_text(
        "[settings]\n"
        "mark_separators = true\n"
        "\n"
        "[lexicon]\n"
        'paths = ["*.tsv"]\n'
        "builtin = true\n",
        encoding="utf-8",
    )
    return p
