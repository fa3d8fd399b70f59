"""
Live conversion of one editor's text, keystroke by keystroke.

Each edit event runs the whole pipeline synchronously:

    tracker diff -> completed words -> bulk convert -> word patches -> cursor

The pure step is `edit`, which takes a TrackerState and returns a new one
inside an EditResult.  EditorSession owns that state for one editor and
adds the finalize-on-copy and clear actions.

Usage:
    from futhorc.session import EditorSession

    session = EditorSession.from_config()      # loads futhorc.toml
    result = session.update("ᚳᚫᛏ ", (4, 4))    # value + selection from the widget
    widget.value, widget.cursor = result.value, result.cursor

    session.type("the cat")                   # replay keystrokes
    text = session.finalize()                 # before copying to clipboard
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path

from futhorc.conversion import convert_string
from futhorc.patch import WordConverter, apply_completions
from futhorc.rules import PHASES, rule_count
from futhorc.settings import (
    DEFAULT_CONFIG, Settings, load_config, resolve_config_paths,
)
from futhorc.tracker import (
    CompletionEvent, TrackerState, finish_word, track_edit,
)

logger = logging.getLogger(__name__)

BACKSPACE = "\b"


@dataclass(frozen=True, slots=True)
class EditResult:
    """What the editor should show after one edit event."""
    value: str
    cursor: int
    state: TrackerState
    events: tuple[CompletionEvent, ...] = ()


def _rebase_word(state: TrackerState, output: str) -> TrackerState:
    """Point the open word's start into the converted output.

    The tracker records `start` against the text it was given, and
    conversion can shorten that text (an "o.a" escape loses its ".").
    The open word always ends the text, so its runes end `output`.
    """
    if not state.tracking:
        return state
    runes = convert_string(state.word, closed=False)
    if not output.endswith(runes):
        logger.debug("open word %r merged into the text before it, dropping", state.word)
        return state.without_word()
    return replace(state, start=len(output) - len(runes))


def edit(
    state: TrackerState,
    value: str,
    selection: tuple[int, int] | None = None,
    settings: Settings | None = None,
    converter: WordConverter | None = None,
) -> EditResult:
    """Run one edit event.

    Args:
        state: tracker state returned by the previous call
        value: raw editor text after the user's edit
        selection: (start, end) in `value`; defaults to the end of the text
        settings: toggles; None means defaults (pronunciation on)
        converter: optional word converter for completed words

    Returns:
        The converted value, the adjusted cursor and the new state.
    """
    if settings is None:
        settings = Settings()
    if selection is None:
        selection = (len(value), len(value))

    track = track_edit(state, value, selection, enabled=settings.pronunciation)

    raw = value
    if track.restored:
        raw = value[:track.restore_at] + track.restored + value[track.restore_at:]

    output = convert_string(raw, mark_separators=settings.mark_separators, closed=False)
    if track.events and converter is not None:
        output = apply_completions(
            output, raw, track.events, converter,
            mark_separators=settings.mark_separators,
        )
    for event in track.events:
        logger.debug("completed %r at %d..%d", event.word, event.start, event.end)

    cursor = selection[0] + (len(output) - len(value))
    cursor = max(0, min(cursor, len(output)))

    new_state = _rebase_word(track.state, output)
    return EditResult(
        value=output,
        cursor=cursor,
        state=replace(new_state, last_value=output),
        events=track.events,
    )


class EditorSession:
    """Owns the tracking state and settings of one editor.

    Not thread-safe and not reentrant: one edit event at a time.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        converter: WordConverter | None = None,
    ):
        self.settings = settings if settings is not None else Settings()
        self.converter = converter
        self.state = TrackerState()

    @classmethod
    def from_config(cls, config_path: str | Path = DEFAULT_CONFIG) -> EditorSession:
        """Build a session from a TOML config file.

        Lexicon paths are resolved relative to the config file's directory
        and glob patterns are expanded.
        """
        config_path = Path(config_path)
        cfg = load_config(config_path)

        settings = Settings.from_mapping(cfg.get("settings"))

        converter = None
        lex_cfg = cfg.get("lexicon")
        if lex_cfg is not None:
            from futhorc.lexicon import SpellingLexicon

            paths = resolve_config_paths(lex_cfg.get("paths", []), config_path.parent)
            converter = SpellingLexicon.from_files(
                *paths, builtin=bool(lex_cfg.get("builtin", True)),
            )

        return cls(settings=settings, converter=converter)

    # ── Editor surface ──────────────────────────────────────────────────

    @property
    def value(self) -> str:
        return self.state.last_value

    @property
    def word(self) -> str:
        """Latin letters of the word being typed, if any."""
        return self.state.word

    def update(self, value: str, selection: tuple[int, int] | None = None) -> EditResult:
        """Handle one input event from the editor."""
        result = edit(self.state, value, selection, self.settings, self.converter)
        self.state = result.state
        return result

    def type(self, keys: str) -> EditResult:
        """Replay keystrokes at the end of the text; "\\b" is backspace."""
        result = EditResult(value=self.value, cursor=len(self.value), state=self.state)
        for key in keys:
            current = self.value
            if key == BACKSPACE:
                current = current[:-1]
            else:
                current += key
            result = self.update(current)
        return result

    # ── Actions ─────────────────────────────────────────────────────────

    def finalize(self) -> str:
        """Complete any open word and return the text to copy.

        The open word is completed as if a space had been typed, and the
        end of the text counts as closed, so a trailing vowel or period
        gets its final form.  The space itself is not kept.
        """
        value = self.state.last_value
        mark = self.settings.mark_separators
        track = finish_word(self.state, value)

        if not track.events:
            output = convert_string(value, mark_separators=mark, closed=True)
        else:
            raw = value + " "
            output = convert_string(raw, mark_separators=mark, closed=True)
            if self.converter is not None:
                output = apply_completions(
                    output, raw, track.events, self.converter, mark_separators=mark,
                )
            space = convert_string(" ", mark_separators=mark)
            if output.endswith(space):
                output = output[:-len(space)]

        self.state = replace(track.state, last_value=output)
        return output

    def clear(self) -> None:
        """Reset the buffer and all tracked state."""
        self.state = TrackerState()

    def summary(self) -> str:
        lines = ["EditorSession"]
        lines.append(f"  Rules: {rule_count()} in {len(PHASES)} phases")
        for sub_line in self.settings.summary().split("\n"):
            lines.append(f"  {sub_line}")
        if self.converter is None:
            lines.append("  Word converter: none")
        elif hasattr(self.converter, "summary"):
            for sub_line in self.converter.summary().split("\n"):
                lines.append(f"  {sub_line}")
        else:
            lines.append(f"  Word converter: {self.converter!r}")
        return "\n".join(lines)
