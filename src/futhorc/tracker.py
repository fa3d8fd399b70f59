"""
Keystroke tracking of the Latin word currently being typed.

The editor always shows runes, so the tracker keeps its own copy of the
Latin letters of the open word.  On every edit it diffs the last value it
saw against the new one and:
- extends the open word with typed Latin letters
- emits a CompletionEvent when a boundary character ends the word
- un-types letters when runes are deleted, using the reverse rule table

State is immutable: track_edit takes a TrackerState and returns a new one.

Usage:
    from futhorc.tracker import TrackerState, track_edit

    result = track_edit(TrackerState(last_value="ᚳᚫᛏ"), "ᚳᚫᛏ ", (4, 4))
    result.events   # (CompletionEvent(word='...', boundary=' ', ...),)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from futhorc.rules import LATIN_OPTIONS, is_boundary, is_latin, is_rune

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TextDiff:
    """A single contiguous edit: `removed` replaced by `added` at `index`."""
    index: int
    removed: str
    added: str

    @property
    def is_empty(self) -> bool:
        return not self.removed and not self.added


@dataclass(frozen=True, slots=True)
class CompletionEvent:
    """A tracked word that was just ended by a boundary character.

    `start` and `end` are offsets into the raw editor text: the first
    rune of the word and the boundary character.
    """
    word: str
    boundary: str
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class TrackerState:
    """Session-lived tracking state for one editor.

    `start` is the offset of the open word in `last_value`.
    """
    word: str = ""
    start: int | None = None
    last_value: str = ""

    @property
    def tracking(self) -> bool:
        return bool(self.word)

    def without_word(self) -> TrackerState:
        return TrackerState(last_value=self.last_value)


@dataclass(frozen=True, slots=True)
class TrackResult:
    """Outcome of one tracker step.

    `restored` holds Latin letters that go back into the text at
    `restore_at` after a compound rune was deleted (deleting ᚦ leaves "t").
    """
    state: TrackerState
    events: tuple[CompletionEvent, ...] = ()
    restored: str = ""
    restore_at: int = 0


# ── Diff ──────────────────────────────────────────────────────────────

def diff_text(previous: str, current: str) -> TextDiff:
    """Common-prefix / common-suffix diff of two editor values.

    Texts with nothing in common come back as a whole-value replacement
    at index 0.
    """
    limit = min(len(previous), len(current))

    prefix = 0
    while prefix < limit and previous[prefix] == current[prefix]:
        prefix += 1

    suffix = 0
    while (suffix < limit - prefix
           and previous[len(previous) - 1 - suffix] == current[len(current) - 1 - suffix]):
        suffix += 1

    return TextDiff(
        index=prefix,
        removed=previous[prefix:len(previous) - suffix],
        added=current[prefix:len(current) - suffix],
    )


# ── Reverse mapping ───────────────────────────────────────────────────

def matching_spelling(word: str, rune: str) -> str | None:
    """Return the first Latin spelling of `rune` that ends `word`."""
    for spelling in LATIN_OPTIONS.get(rune, ()):
        if word.endswith(spelling):
            return spelling
    return None


def unwind(word: str, removed: str, *, restore: bool = True) -> tuple[str, str]:
    """Un-type the removed characters from the tracked word.

    Walks `removed` from the end.  Returns (word, restored) where
    `restored` is non-empty only for a single deleted compound rune: its
    spelling minus the last letter, already appended to `word`.
    """
    single = restore and len(removed) == 1
    restored = ""

    for ch in reversed(removed):
        if is_boundary(ch):
            word = ""
        elif is_rune(ch):
            spelling = matching_spelling(word, ch)
            if spelling is None:
                trim = min(len(LATIN_OPTIONS[ch][0]), len(word))
                logger.debug("no spelling of %r ends %r, trimming %d", ch, word, trim)
                word = word[:len(word) - trim]
            else:
                word = word[:len(word) - len(spelling)]
                if single and len(spelling) > 1:
                    restored = spelling[:-1]
        else:
            word = word[:-1]

    return word + restored, restored


# ── Tracker step ──────────────────────────────────────────────────────

def tracking_allowed(value: str, selection: tuple[int, int], enabled: bool = True) -> bool:
    """Words are tracked only with a collapsed cursor at the end of the text."""
    start, end = selection
    return enabled and start == end == len(value)


def track_edit(
    state: TrackerState,
    current: str,
    selection: tuple[int, int],
    *,
    enabled: bool = True,
) -> TrackResult:
    """Advance the tracker by one edit event.

    Args:
        state: state after the previous event
        current: the editor text as it is now (not yet converted)
        selection: (start, end) selection offsets in `current`
        enabled: whether pronunciation / incremental mode is on

    Returns:
        A TrackResult whose state still carries the old `last_value`;
        the caller stores the converted output there.
    """
    if not tracking_allowed(current, selection, enabled):
        if state.tracking:
            logger.debug("tracking off, dropping %r", state.word)
        return TrackResult(state=state.without_word())

    diff = diff_text(state.last_value, current)
    if diff.is_empty:
        return TrackResult(state=state)

    word, start = state.word, state.start
    restored = ""

    if diff.removed:
        word, restored = unwind(word, diff.removed, restore=not diff.added)
        if not word:
            start = None

    events: list[CompletionEvent] = []
    for offset, ch in enumerate(diff.added):
        pos = diff.index + offset
        if is_boundary(ch):
            if word:
                events.append(CompletionEvent(word=word, boundary=ch, start=start, end=pos))
            word, start = "", None
        elif is_latin(ch):
            if not word:
                start = pos
            word += ch.lower()
        else:
            # only Latin input is tracked
            word, start = "", None

    if word and start is None:
        start = diff.index

    new_state = TrackerState(word=word, start=start, last_value=state.last_value)
    return TrackResult(
        state=new_state,
        events=tuple(events),
        restored=restored,
        restore_at=diff.index,
    )


def finish_word(state: TrackerState, value: str, boundary: str = " ") -> TrackResult:
    """Force the open word to complete as if `boundary` had been typed."""
    if not state.tracking:
        return TrackResult(state=state.without_word())
    event = CompletionEvent(
        word=state.word,
        boundary=boundary,
        start=state.start if state.start is not None else len(value),
        end=len(value),
    )
    return TrackResult(state=state.without_word(), events=(event,))
