"""
Per-word patching of the bulk-converted buffer.

When a word is completed, an alternate word converter (for example a
SpellingLexicon, or any faster / more accurate engine) may know a better
rune spelling than the rule table.  The patch applier swaps exactly that
word's span inside the already converted buffer and leaves everything
else alone.

A word converter is any callable ``(word_plus_boundary, boundary) -> str``.
It may be missing, raise, or return junk: consult_hook turns all of those
into HookResult.not_applicable() and the rule table's own conversion is
used instead.

Usage:
    from futhorc.patch import apply_completions

    buffer = apply_completions(buffer, raw, events, converter=lexicon)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from futhorc.conversion import convert_string
from futhorc.tracker import CompletionEvent

logger = logging.getLogger(__name__)

WordConverter = Callable[[str, str], str]


@dataclass(frozen=True, slots=True)
class HookResult:
    """Answer of an alternate word converter: a value, or nothing."""
    value: str | None = None

    @property
    def applicable(self) -> bool:
        return self.value is not None

    @classmethod
    def of(cls, value: str) -> HookResult:
        return cls(value=value)

    @classmethod
    def not_applicable(cls) -> HookResult:
        return cls(value=None)


def consult_hook(converter: WordConverter | None, text: str, boundary: str) -> HookResult:
    """Ask `converter` for `text`, never letting it break the update."""
    if converter is None:
        return HookResult.not_applicable()
    try:
        value = converter(text, boundary)
    except Exception as exc:
        logger.debug("word converter failed on %r: %s", text, exc)
        return HookResult.not_applicable()
    if not isinstance(value, str) or not value or value == text:
        return HookResult.not_applicable()
    return HookResult.of(value)


def _strip_boundary(value: str, boundary: str, converted_boundary: str) -> str | None:
    for suffix in (converted_boundary, boundary):
        if suffix and value.endswith(suffix) and len(value) > len(suffix):
            return value[:-len(suffix)]
    return None


def converted_word(
    event: CompletionEvent,
    converter: WordConverter | None = None,
    *,
    mark_separators: bool = False,
) -> str:
    """Runes for the completed word alone, without its boundary."""
    text = event.word + event.boundary
    converted_boundary = convert_string(
        event.boundary, mark_separators=mark_separators, closed=False,
    )

    result = consult_hook(converter, text, event.boundary)
    if result.applicable:
        word = _strip_boundary(result.value, event.boundary, converted_boundary)
        if word is not None:
            return word
        logger.debug("word converter result %r does not end in %r", result.value, event.boundary)

    own = convert_string(text, mark_separators=mark_separators, closed=False)
    return own[:len(own) - len(converted_boundary)]


def word_span(
    event: CompletionEvent,
    raw: str,
    *,
    mark_separators: bool = False,
) -> tuple[int, int]:
    """Locate the completed word inside the bulk conversion of `raw`.

    Returns (offset, length).  The offset is counted back from the end:
    a "." escape before the word is eaten by the conversion, so the text
    before the word does not convert on its own to a prefix of the
    buffer.  The length is the word's conversion without its boundary,
    whose runes stay as the bulk pass produced them.
    """
    def conv(s: str) -> str:
        return convert_string(s, mark_separators=mark_separators, closed=False)

    offset = len(conv(raw)) - len(conv(raw[event.start:]))
    length = len(conv(event.word + event.boundary)) - len(conv(event.boundary))
    return offset, length


def apply_completion(
    buffer: str,
    raw: str,
    event: CompletionEvent,
    converter: WordConverter | None = None,
    *,
    mark_separators: bool = False,
) -> str:
    """Splice the conversion of one completed word into `buffer`.

    Args:
        buffer: convert_string(raw), the bulk result
        raw: the editor text the event offsets refer to
        event: the completed word
        converter: optional alternate word converter
        mark_separators: must match the setting used for `buffer`
    """
    offset, length = word_span(event, raw, mark_separators=mark_separators)
    if length < 0 or offset < 0 or offset + length > len(buffer):
        logger.debug("span %d+%d outside buffer of %d, skipping %r",
                      offset, length, len(buffer), event.word)
        return buffer

    # Only a span that still holds the word's own runes is replaced
    if buffer[offset:offset + length] != converted_word(event, mark_separators=mark_separators):
        logger.debug("span %d+%d of %r does not hold %r, skipping",
                     offset, length, buffer, event.word)
        return buffer

    replacement = converted_word(event, converter, mark_separators=mark_separators)
    return buffer[:offset] + replacement + buffer[offset + length:]


def apply_completions(
    buffer: str,
    raw: str,
    events: Iterable[CompletionEvent],
    converter: WordConverter | None = None,
    *,
    mark_separators: bool = False,
) -> str:
    """Apply several completions, rightmost first so offsets stay valid."""
    for event in sorted(events, key=lambda e: e.start, reverse=True):
        buffer = apply_completion(
            buffer, raw, event, converter, mark_separators=mark_separators,
        )
    return buffer
