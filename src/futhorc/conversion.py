"""
Rule-table conversion of Latin text into futhorc runes.

Two layers:
- apply_pass runs every rule of the table once, phase by phase
- convert_string rebuilds the text one character at a time, re-running the
  pass after each character, then settles the result to a fixed point

Usage:
    from futhorc.conversion import convert_string

    convert_string("the cat")                      # 'ᚦᛖ ᚳᚫᛏ'
    convert_string("go home", mark_separators=True)
"""

from __future__ import annotations

import logging

from futhorc.rules import PHASES, PUNCTUATION, SEPARATOR, Rule

logger = logging.getLogger(__name__)

# Each pass that still changes settled text either shortens a run of ᛁ
# or downgrades a final vowel, so real input settles long before this.
SETTLE_LIMIT = 64


def _replace_all(text: str, rules: list[Rule]) -> str:
    for pattern, replacement in rules:
        if pattern in text:
            text = text.replace(pattern, replacement)
    return text


def _final_vowels(text: str, rules: list[Rule], closed: bool) -> str:
    """Downgrade vowel runes that end a word.

    The rules only look for "<rune><space>", so each punctuation mark gets
    a temporary space in front of it while they run.
    """
    for mark in PUNCTUATION:
        text = text.replace(mark, " " + mark)

    # A period at the very end of complete input closes the word as well
    padded = closed and text.endswith(".") and not text.endswith(" .")
    if padded:
        text = text[:-1] + " ."

    text = _replace_all(text, rules)

    for mark in PUNCTUATION:
        text = text.replace(" " + mark, mark)
    if padded and text.endswith(" ."):
        text = text[:-2] + "."
    return text


def _normalize_separators(text: str, mark_separators: bool) -> str:
    if mark_separators:
        text = text.replace(" ", SEPARATOR)
    # No separator mark right after punctuation or right before "("
    for mark in PUNCTUATION:
        text = text.replace(mark + SEPARATOR, mark + " ")
    text = text.replace("." + SEPARATOR, ". ")
    text = text.replace(SEPARATOR + "(", " (")
    return text


def apply_pass(text: str, *, mark_separators: bool = False, closed: bool = False) -> str:
    """Apply the full rule table to text once.

    Args:
        text: lower-case Latin, runes, or a mix of both
        mark_separators: replace spaces with the visible separator ᛫
        closed: the text is complete, so a trailing "." ends the last word

    Returns:
        The converted text.  Pure: the same input always gives the same
        output.
    """
    for name, rules in PHASES:
        if name == "final_vowels":
            text = _final_vowels(text, rules, closed)
        else:
            text = _replace_all(text, rules)
    return _normalize_separators(text, mark_separators)


def settle(text: str, *, mark_separators: bool = False, closed: bool = True) -> str:
    """Re-apply the pass until the text stops changing."""
    for _attempt in range(SETTLE_LIMIT):
        converted = apply_pass(text, mark_separators=mark_separators, closed=closed)
        if converted == text:
            return text
        text = converted
    logger.warning(
        "conversion did not settle after %d passes (%d chars)", SETTLE_LIMIT, len(text),
    )
    return text


def convert_string(raw: str, *, mark_separators: bool = False, closed: bool = True) -> str:
    """Convert raw text (Latin, runes, or both) into its stable rune form.

    The text is rebuilt one character at a time with a full pass after
    every character, the way it would be typed, so that compound rules
    see a rune followed by the next Latin letter.  The result is then
    settled to a fixed point.

    Args:
        raw: editor text; it is lower-cased first
        mark_separators: replace spaces with the visible separator ᛫
        closed: treat the end of raw as the end of the text.  Live editing
            passes False because the user may still be typing.
    """
    text = ""
    for ch in raw.lower():
        text = apply_pass(text + ch, mark_separators=mark_separators)
    return settle(text, mark_separators=mark_separators, closed=closed)
