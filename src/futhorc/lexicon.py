"""
Whole-word rune spellings that override the rule table.

The rule table spells by letters, which is wrong for many common words
("know" is ᚾᚩᚹ, not ᚳᚾᚪᚹ).  A SpellingLexicon holds word -> runes entries
and plugs into the editor as its word converter: when a tracked word is
completed and the lexicon knows it, its spelling replaces the rule
table's.

Lexicon files are UTF-8, one entry per line, tab separated:

    # word<TAB>runes
    know	ᚾᚩᚹ
    leaf	ᛚᛁᛁᚠᚠ

Usage:
    from futhorc.lexicon import SpellingLexicon

    lexicon = SpellingLexicon.from_files("data/spellings.tsv")
    lexicon.lookup("know")          # 'ᚾᚩᚹ'
    lexicon("know ", " ")           # 'ᚾᚩᚹ '
"""

from __future__ import annotations

import logging
from pathlib import Path

from futhorc.rules import (
    AC, AESC, BEORC, CEN, DAEG, EH, ETHEL, FEOH, HAEGL, IS, LAGU, MANN,
    NYD, OS, RAD, SIGEL, THORN, TIW, UR, WYNN, YR,
    is_rune,
)

logger = logging.getLogger(__name__)


# Spellings that follow pronunciation rather than letters.
COMMON_SPELLINGS: dict[str, str] = {
    "the":     THORN + EH,
    "and":     AESC + NYD + DAEG,
    "of":      ETHEL + FEOH,
    "to":      TIW + YR,
    "be":      BEORC + IS,
    "no":      NYD + OS,
    "know":    NYD + OS + WYNN,
    "any":     EH + NYD + IS,
    "ask":     AESC + SIGEL + CEN,
    "after":   AESC + FEOH + TIW + UR + RAD,
    "comma":   CEN + ETHEL + MANN + AC,
    "bottle":  BEORC + ETHEL + TIW + UR + LAGU,
    "wheel":   WYNN + IS + IS + LAGU,
    "leaf":    LAGU + IS + IS + FEOH + FEOH,
    "leave":   LAGU + IS + IS + FEOH,
    "leaves":  LAGU + IS + IS + FEOH + SIGEL,
    "lose":    LAGU + YR + SIGEL,
    "loose":   LAGU + YR + SIGEL + SIGEL,
    "futhorc": FEOH + UR + THORN + OS + RAD + CEN,
    "who":     HAEGL + YR,
}


class SpellingLexicon:
    """
    Word -> rune spelling overrides, usable as a word converter.

    Lookup is case-insensitive.  Later entries replace earlier ones, so
    files loaded after the built-in table win.
    """

    def __init__(self, entries: dict[str, str] | None = None, *, builtin: bool = True):
        self.entries: dict[str, str] = {}
        self.sources: list[Path] = []
        self._skipped: int = 0
        if builtin:
            self.entries.update(COMMON_SPELLINGS)
        if entries:
            for word, runes in entries.items():
                self.add(word, runes)

    @classmethod
    def from_files(cls, *paths: str | Path, builtin: bool = True) -> SpellingLexicon:
        """Load one or more lexicon files, merged in order."""
        lexicon = cls(builtin=builtin)
        for path in paths:
            lexicon.load(path)
        return lexicon

    def add(self, word: str, runes: str) -> None:
        word = word.strip().lower()
        runes = runes.strip()
        if not word or not runes:
            raise ValueError(f"empty lexicon entry: {word!r} -> {runes!r}")
        self.entries[word] = runes

    def load(self, path: str | Path) -> None:
        path = Path(path)
        before = len(self.entries)
        with path.open(encoding="utf-8-sig") as f:
            for lineno, line in enumerate(f, 1):
                self._parse_line(line, path, lineno)
        self.sources.append(path)
        logger.info("loaded %d spellings from %s", len(self.entries) - before, path)

    def _parse_line(self, line: str, path: Path | None = None, lineno: int = 0) -> None:
        line = line.strip()
        if not line or line.startswith("#"):
            return

        parts = line.split("\t")
        if len(parts) < 2 or not parts[0].strip() or not parts[1].strip():
            logger.warning("%s:%d: expected word<TAB>runes, skipping", path, lineno)
            self._skipped += 1
            return

        word, runes = parts[0], parts[1].strip()
        if not all(is_rune(ch) or not ch.isalpha() for ch in runes):
            logger.warning("%s:%d: %r contains Latin letters, skipping", path, lineno, runes)
            self._skipped += 1
            return

        self.add(word, runes)

    def lookup(self, word: str) -> str | None:
        return self.entries.get(word.strip().lower())

    def __call__(self, text: str, boundary: str) -> str:
        """Word converter interface: spell `text` = word + boundary.

        Returns `text` unchanged for unknown words, which the patch
        applier reads as "no better answer".
        """
        word = text[:-len(boundary)] if boundary and text.endswith(boundary) else text
        runes = self.lookup(word)
        if runes is None:
            return text
        return runes + boundary

    def __contains__(self, word: str) -> bool:
        return self.lookup(word) is not None

    def __len__(self) -> int:
        return len(self.entries)

    def summary(self) -> str:
        lines = ["Spelling lexicon"]
        lines.append(f"  Entries:  {len(self.entries):,}")
        for src in self.sources:
            lines.append(f"  Source:   {src}")
        if self._skipped:
            lines.append(f"  Skipped:  {self._skipped} malformed lines")
        return "\n".join(lines)
