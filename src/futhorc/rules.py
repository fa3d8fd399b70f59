"""
Latin-to-futhorc substitution rules for futhorc.

Principles:
- Made for live typing: every keystroke re-runs the whole table, so the
  compound rules match a rune already on screen followed by the Latin
  letter just typed (``ᛏ`` + ``h`` -> ``ᚦ``)
- A ``.`` between two letters keeps them apart (``o.a`` -> ``ᛟᚫ``)
- Phases run strictly in order, each rule replaces every occurrence
- The reverse table is only used to un-type runes on deletion

Usage:
    from futhorc.rules import PHASES, LATIN_OPTIONS, is_boundary
"""

from __future__ import annotations

# Runes by Unicode codepoint, for reference and readability.
_ = chr

FEOH = _(0x16A0)     # ᚠ  f, v
UR = _(0x16A2)       # ᚢ  u, schwa
YR = _(0x16A3)       # ᚣ  uu, oo
THORN = _(0x16A6)    # ᚦ  th
OS = _(0x16A9)       # ᚩ  long o
AC = _(0x16AA)       # ᚪ  aa, final a
AESC = _(0x16AB)     # ᚫ  a
RAD = _(0x16B1)      # ᚱ  r
CEN = _(0x16B3)      # ᚳ  k, c
GYFU = _(0x16B7)     # ᚷ  g
WYNN = _(0x16B9)     # ᚹ  w
HAEGL = _(0x16BB)    # ᚻ  h
NYD = _(0x16BE)      # ᚾ  n
IS = _(0x16C1)       # ᛁ  i
GER = _(0x16C4)      # ᛄ  y
PEORTH = _(0x16C8)   # ᛈ  p
EOLHX = _(0x16C9)    # ᛉ  x
SIGEL = _(0x16CB)    # ᛋ  s, z
TIW = _(0x16CF)      # ᛏ  t
BEORC = _(0x16D2)    # ᛒ  b
EH = _(0x16D6)       # ᛖ  e
MANN = _(0x16D7)     # ᛗ  m
LAGU = _(0x16DA)     # ᛚ  l
ING = _(0x16DD)      # ᛝ  ng
DAEG = _(0x16DE)     # ᛞ  d
ETHEL = _(0x16DF)    # ᛟ  o
EAR = _(0x16E0)      # ᛠ  ai, ay
IOR = _(0x16E1)      # ᛡ  ii
CWEORTH = _(0x16E2)  # ᛢ  q, qu
STAN = _(0x16E5)     # ᛥ  st

SEPARATOR = _(0x16EB)  # ᛫  visible word separator
ET = _(0x204A)         # ⁊  Tironian et, for "&"

Rule = tuple[str, str]


# ── Phase 1: compound vowels ────────────────────────────────────────
# Each rune is already on screen when the second letter arrives.
# The ".x" twin of every rule is the escape that keeps the pair apart.

COMPOUND_VOWELS: list[Rule] = [
    (ETHEL + "a",       OS),
    (ETHEL + ".a",      ETHEL + AESC),
    (ETHEL + "h",       OS),
    (ETHEL + ".h",      ETHEL + HAEGL),
    (EH + "e",          IS + IS),
    (EH + ".e",         EH + EH),
    (AESC + "a",        AC),
    (AESC + ".a",       AESC + AESC),
    (AESC + "u",        ETHEL),
    (AESC + ".u",       AESC + UR),
    (UR + "u",          YR),
    (UR + ".u",         UR + UR),
    (ETHEL + "o",       YR),
    (ETHEL + ".o",      ETHEL + ETHEL),
    (ETHEL + "u",       AC + WYNN),
    (ETHEL + ".u",      ETHEL + UR),
    (IS + "i",          IOR),
    (IS + ".i",         IS + IS),
    (AESC + "i",        EAR),
    (AESC + ".i",       AESC + GER),
    (AESC + "y",        EAR),
    (AESC + ".y",       AESC + GER),
    # "eer" keeps its long vowel, a lone "ir" is schwa + r
    (IS + IS + "r",     IS + IS + RAD),
    (IS + "r",          UR + RAD),
    (IS + ".r",         IS + RAD),
    (ETHEL + "i",       OS + IS),
    (ETHEL + ".i",      ETHEL + IS),
    (ETHEL + "y",       OS + IS),
    (ETHEL + ".y",      ETHEL + GER),
    (EH + "r",          UR + RAD),
    (EH + ".r",         EH + RAD),
    (AESC + "r",        AC + RAD),
    (AESC + ".r",       AESC + RAD),
    (ETHEL + "r",       AC + RAD),
    (ETHEL + ".r",      ETHEL + RAD),
    (ETHEL + "w",       AC + WYNN),
    (ETHEL + ".w",      ETHEL + WYNN),
    (CWEORTH + "u",     CWEORTH),
    (CWEORTH + ".u",    CWEORTH + UR),
]


# ── Phase 2: compound consonants ────────────────────────────────────

COMPOUND_CONSONANTS: list[Rule] = [
    (TIW + "h",         THORN),
    (TIW + ".h",        TIW + HAEGL),
    (NYD + "g",         ING),
    (NYD + ".g",        NYD + GYFU),
    (NYD + "k",         ING + CEN),
    (NYD + ".k",        NYD + CEN),
    (SIGEL + "t",       STAN),
    (SIGEL + ".t",      SIGEL + TIW),
]


# ── Phase 3: word-final short vowels ────────────────────────────────
# Only recognised in front of a space, so every punctuation mark gets a
# temporary space in front of it first.  A bare "." does not count: it
# is the escape character of the compound rules above.

PUNCTUATION: tuple[str, ...] = (". ", ",", ":", ";", "!", "?", ")")

FINAL_VOWELS: list[Rule] = [
    (AESC + " ",        AC + " "),
    (IS + IS + " ",     IS + " "),   # /i/ simplified word-finally
    (ETHEL + " ",       OS + " "),
]


# ── Phase 4: basic letters ──────────────────────────────────────────

BASIC: list[Rule] = [
    ("q", CWEORTH),
    ("w", WYNN),
    ("e", EH),
    ("r", RAD),
    ("t", TIW),
    ("y", GER),
    ("u", UR),
    ("i", IS),
    ("o", ETHEL),
    ("p", PEORTH),
    ("a", AESC),
    ("s", SIGEL),
    ("d", DAEG),
    ("f", FEOH),
    ("g", GYFU),
    ("h", HAEGL),
    ("j", GYFU + HAEGL),
    ("k", CEN),
    ("l", LAGU),
    ("z", SIGEL),
    ("x", EOLHX),
    ("c", CEN),
    ("v", FEOH),
    ("b", BEORC),
    ("n", NYD),
    ("m", MANN),
]


# ── Phase 5: other symbols ──────────────────────────────────────────

OTHER: list[Rule] = [
    ("&", ET),
]


PHASES: tuple[tuple[str, list[Rule]], ...] = (
    ("compound_vowels", COMPOUND_VOWELS),
    ("compound_consonants", COMPOUND_CONSONANTS),
    ("final_vowels", FINAL_VOWELS),
    ("basic", BASIC),
    ("other", OTHER),
)


# ── Word boundaries ─────────────────────────────────────────────────

BOUNDARY_PUNCTUATION = frozenset(".,:;!?()[]{}\"'-/")
BOUNDARY_SYMBOLS = frozenset({SEPARATOR, "&", ET})

LATIN_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyz")


def is_boundary(ch: str) -> bool:
    """True for characters that end a word."""
    return ch.isspace() or ch in BOUNDARY_PUNCTUATION or ch in BOUNDARY_SYMBOLS


def is_latin(ch: str) -> bool:
    return ch.lower() in LATIN_LETTERS


# ── Reverse table: rune -> Latin spellings it may have come from ────
# Longest / most specific first.  A rune made by a compound rule lists
# the two-letter spelling before the single letter.

LATIN_OPTIONS: dict[str, tuple[str, ...]] = {
    FEOH:    ("f", "v"),
    UR:      ("u", "e", "i"),       # "er" / "ir" -> ᚢᚱ
    YR:      ("uu", "oo"),
    THORN:   ("th",),
    OS:      ("oa", "oh", "o"),     # bare "o" only word-finally
    AC:      ("aa", "a", "o"),      # "ar" / "or" / "ou" -> ᚪ...
    AESC:    ("a",),
    RAD:     ("r",),
    CEN:     ("k", "c"),
    GYFU:    ("g",),
    WYNN:    ("w", "u"),            # "ou" -> ᚪᚹ
    HAEGL:   ("h", "j"),
    NYD:     ("n",),
    IS:      ("i", "e", "y"),       # "ee" -> ᛁᛁ, "oy" -> ᚩᛁ
    GER:     ("y",),
    PEORTH:  ("p",),
    EOLHX:   ("x",),
    SIGEL:   ("s", "z"),
    TIW:     ("t",),
    BEORC:   ("b",),
    EH:      ("e",),
    MANN:    ("m",),
    LAGU:    ("l",),
    ING:     ("ng", "n"),           # "nk" -> ᛝᚳ
    DAEG:    ("d",),
    ETHEL:   ("au", "o"),
    EAR:     ("ai", "ay"),
    IOR:     ("ii",),
    CWEORTH: ("qu", "q"),
    STAN:    ("st",),
}

RUNES = frozenset(LATIN_OPTIONS)


def is_rune(ch: str) -> bool:
    return ch in RUNES


# ── Convenience accessors ───────────────────────────────────────────

def iter_rules():
    """Yield (phase_name, pattern, replacement) in application order."""
    for name, rules in PHASES:
        for pattern, replacement in rules:
            yield name, pattern, replacement


def rule_count() -> int:
    return sum(1 for _rule in iter_rules())
