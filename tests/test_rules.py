"""Tests for the rule table (rules.py)."""

from futhorc.rules import (
    AC, AESC, BASIC, COMPOUND_CONSONANTS, COMPOUND_VOWELS, ET, ETHEL,
    FINAL_VOWELS, IS, LATIN_OPTIONS, OS, PHASES, PUNCTUATION, SEPARATOR,
    THORN, TIW,
    is_boundary, is_latin, is_rune, iter_rules, rule_count,
)


# ── Phase layout ──────────────────────────────────────────────────────────────

def test_phases_in_order():
    names = [name for name, _ in PHASES]
    assert names == [
        "compound_vowels", "compound_consonants", "final_vowels", "basic", "other",
    ]


def test_rule_count_matches_iteration():
    assert rule_count() == sum(len(rules) for _name, rules in PHASES)
    assert rule_count() == len(list(iter_rules()))
    assert rule_count() > 60


def test_basic_covers_whole_alphabet():
    letters = {pattern for pattern, _ in BASIC}
    assert letters == set("abcdefghijklmnopqrstuvwxyz")


def test_compound_patterns_end_in_latin_letter():
    """Compound rules fire when the next Latin letter is typed."""
    for pattern, _ in COMPOUND_VOWELS + COMPOUND_CONSONANTS:
        assert is_latin(pattern[-1]), pattern


def test_every_compound_has_escape_twin():
    """Each 'XY' rule has a 'X.Y' twin that keeps the letters apart."""
    for rules in (COMPOUND_VOWELS, COMPOUND_CONSONANTS):
        patterns = {p for p, _ in rules}
        for p in patterns:
            if "." not in p and len(p) == 2:
                assert p[0] + "." + p[1] in patterns, p


def test_longer_ir_rule_comes_first():
    patterns = [p for p, _ in COMPOUND_VOWELS]
    assert patterns.index(IS + IS + "r") < patterns.index(IS + "r")


def test_th_rule():
    assert (TIW + "h", THORN) in COMPOUND_CONSONANTS


def test_final_vowels_need_space():
    for pattern, replacement in FINAL_VOWELS:
        assert pattern.endswith(" ")
        assert replacement.endswith(" ")
    assert (AESC + " ", AC + " ") in FINAL_VOWELS
    assert (ETHEL + " ", OS + " ") in FINAL_VOWELS


def test_bare_period_is_not_punctuation():
    assert "." not in PUNCTUATION
    assert ". " in PUNCTUATION


# ── Boundaries ────────────────────────────────────────────────────────────────

def test_is_boundary():
    for ch in (" ", "\n", "\t", ".", ",", "!", "?", "(", ")", "'", "-", SEPARATOR, "&", ET):
        assert is_boundary(ch), repr(ch)


def test_letters_and_runes_are_not_boundaries():
    for ch in ("a", "Z", THORN, ETHEL, "7"):
        assert not is_boundary(ch), repr(ch)


def test_is_latin_is_case_insensitive():
    assert is_latin("a")
    assert is_latin("Q")
    assert not is_latin(THORN)
    assert not is_latin("é")


# ── Reverse table ─────────────────────────────────────────────────────────────

def test_every_produced_rune_has_latin_options():
    """Anything the rules can write must be reversible (or a boundary)."""
    for _phase, _pattern, replacement in iter_rules():
        for ch in replacement:
            assert is_rune(ch) or is_boundary(ch), repr(ch)


def test_latin_options_are_lower_case_latin():
    for rune, options in LATIN_OPTIONS.items():
        assert options, rune
        for spelling in options:
            assert spelling and all(is_latin(c) and c.islower() for c in spelling)


def test_two_letter_spellings_listed_first():
    for rune, options in LATIN_OPTIONS.items():
        lengths = [len(s) for s in options]
        assert lengths == sorted(lengths, reverse=True), rune


def test_thorn_comes_from_th():
    assert LATIN_OPTIONS[THORN] == ("th",)
