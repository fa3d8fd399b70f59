"""futhorc: live Latin-to-runic transliteration for text editors."""

from futhorc.conversion import apply_pass, convert_string
from futhorc.tracker import CompletionEvent, TrackerState, track_edit, diff_text
from futhorc.patch import HookResult, apply_completion, apply_completions
from futhorc.settings import Settings
from futhorc.session import EditorSession, EditResult, edit
from futhorc.lexicon import SpellingLexicon

__all__ = [
    "apply_pass", "convert_string",
    "CompletionEvent", "TrackerState", "track_edit", "diff_text",
    "HookResult", "apply_completion", "apply_completions",
    "Settings",
    "EditorSession", "EditResult", "edit",
    "SpellingLexicon",
]
