"""Tests for the incremental edit tracker (tracker.py)."""

from dataclasses import replace

from futhorc.rules import AESC, CEN, ETHEL, IS, THORN, TIW, EH
from futhorc.tracker import (
    CompletionEvent,
    TextDiff,
    TrackerState,
    diff_text,
    finish_word,
    matching_spelling,
    track_edit,
    tracking_allowed,
    unwind,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _at_end(value: str) -> tuple[int, int]:
    return (len(value), len(value))


def _step(state: TrackerState, value: str, shown: str | None = None):
    """Run one tracker step and store `shown` (default: value) as last seen."""
    result = track_edit(state, value, _at_end(value))
    return result, replace(result.state, last_value=value if shown is None else shown)


# ── diff_text ─────────────────────────────────────────────────────────────────

def test_diff_insert_at_end():
    assert diff_text("abc", "abcd") == TextDiff(3, "", "d")


def test_diff_insert_in_middle():
    assert diff_text("abc", "abXc") == TextDiff(2, "", "X")


def test_diff_delete_at_end():
    assert diff_text("abc", "ab") == TextDiff(2, "c", "")


def test_diff_repeated_letter_goes_to_end():
    assert diff_text("aa", "aaa") == TextDiff(2, "", "a")


def test_diff_replacement():
    assert diff_text("abcd", "aXd") == TextDiff(1, "bc", "X")


def test_diff_nothing_in_common_is_whole_value():
    assert diff_text("abc", "xyz") == TextDiff(0, "abc", "xyz")


def test_diff_identical_is_empty():
    assert diff_text("same", "same").is_empty


# ── tracking_allowed ──────────────────────────────────────────────────────────

def test_tracking_allowed_at_end():
    assert tracking_allowed("abc", (3, 3))


def test_tracking_not_allowed_mid_text():
    assert not tracking_allowed("abc", (1, 1))


def test_tracking_not_allowed_with_selection():
    assert not tracking_allowed("abc", (0, 3))


def test_tracking_not_allowed_when_disabled():
    assert not tracking_allowed("abc", (3, 3), enabled=False)


# ── Typing ────────────────────────────────────────────────────────────────────

def test_first_letter_records_start():
    result, _ = _step(TrackerState(last_value=TIW + " "), TIW + " c")
    assert result.state.word == "c"
    assert result.state.start == 2


def test_letters_extend_word():
    state = TrackerState()
    for value in ("c", "ca", "cat"):
        result, state = _step(state, value)
    assert state.word == "cat"
    assert state.start == 0
    assert result.events == ()


def test_upper_case_is_tracked_lower():
    result, _ = _step(TrackerState(), "C")
    assert result.state.word == "c"


def test_boundary_completes_word():
    state = TrackerState(word="cat", start=0, last_value=CEN + AESC + TIW)
    result = track_edit(state, CEN + AESC + TIW + " ", (4, 4))
    assert result.events == (CompletionEvent(word="cat", boundary=" ", start=0, end=3),)
    assert result.state.word == ""
    assert result.state.start is None


def test_punctuation_completes_word():
    state = TrackerState(word="go", start=0, last_value="ᚷᛟ")
    result = track_edit(state, "ᚷᛟ,", (3, 3))
    assert [e.boundary for e in result.events] == [","]


def test_boundary_without_word_emits_nothing():
    result, _ = _step(TrackerState(last_value="x"), "x ")
    assert result.events == ()


def test_paste_completes_several_words():
    result, _ = _step(TrackerState(), "hi there ")
    assert result.events == (
        CompletionEvent(word="hi", boundary=" ", start=0, end=2),
        CompletionEvent(word="there", boundary=" ", start=3, end=8),
    )


def test_typed_rune_clears_word():
    state = TrackerState(word="ca", start=0, last_value=CEN + AESC)
    result = track_edit(state, CEN + AESC + THORN, (3, 3))
    assert result.state.word == ""
    assert result.events == ()


def test_digit_clears_word():
    state = TrackerState(word="ca", start=0, last_value=CEN + AESC)
    result = track_edit(state, CEN + AESC + "4", (3, 3))
    assert result.state.word == ""


def test_mid_document_edit_drops_word():
    state = TrackerState(word="ca", start=0, last_value=CEN + AESC)
    result = track_edit(state, CEN + "x" + AESC, (2, 2))
    assert result.state.word == ""
    assert result.events == ()


def test_disabled_drops_word():
    state = TrackerState(word="ca", start=0, last_value=CEN + AESC)
    result = track_edit(state, CEN + AESC + "t", (3, 3), enabled=False)
    assert result.state.word == ""


def test_no_change_keeps_state():
    state = TrackerState(word="ca", start=0, last_value=CEN + AESC)
    result = track_edit(state, CEN + AESC, (2, 2))
    assert result.state == state


def test_last_value_is_left_for_caller():
    state = TrackerState(last_value="old")
    result = track_edit(state, "old!", (4, 4))
    assert result.state.last_value == "old"


# ── Deleting ──────────────────────────────────────────────────────────────────

def test_matching_spelling_longest_first():
    assert matching_spelling("oa", "ᚩ") == "oa"
    assert matching_spelling("go", "ᚩ") == "o"
    assert matching_spelling("xyz", THORN) is None


def test_delete_simple_rune_untypes_one_letter():
    state = TrackerState(word="cat", start=0, last_value=CEN + AESC + TIW)
    result = track_edit(state, CEN + AESC, (2, 2))
    assert result.state.word == "ca"
    assert result.restored == ""


def test_delete_th_leaves_t():
    """Backspace over ᚦ un-types the 'h' only."""
    state = TrackerState(word="th", start=0, last_value=THORN)
    result = track_edit(state, "", (0, 0))
    assert result.state.word == "t"
    assert result.state.start == 0
    assert result.restored == "t"
    assert result.restore_at == 0


def test_delete_compound_inside_word():
    state = TrackerState(word="bath", start=4, last_value="x y " + "ᛒ" + AESC + THORN)
    result = track_edit(state, "x y " + "ᛒ" + AESC, (6, 6))
    assert result.state.word == "bat"
    assert result.state.start == 4
    assert result.restored == "t"


def test_delete_boundary_clears_word():
    state = TrackerState(word="", start=None, last_value=TIW + " ")
    result = track_edit(state, TIW, (1, 1))
    assert result.state.word == ""


def test_delete_unknown_rune_clamps():
    word, restored = unwind("x", THORN)
    assert word == ""
    assert restored == ""


def test_delete_from_empty_word():
    assert unwind("", TIW) == ("", "")


def test_delete_several_runes_does_not_restore():
    word, restored = unwind("oath", ETHEL + "x" + THORN)
    assert restored == ""
    assert word == ""


def test_delete_double_i_from_ee():
    word, _ = unwind("see", IS)
    assert word == "se"


def test_delete_across_boundary_clears():
    word, _ = unwind("ab", "c d")
    assert word == ""


def test_delete_and_type_in_one_edit():
    state = TrackerState(word="cat", start=0, last_value=CEN + AESC + TIW)
    result = track_edit(state, CEN + AESC + "p", (3, 3))
    assert result.state.word == "cap"
    assert result.restored == ""


# ── finish_word ───────────────────────────────────────────────────────────────

def test_finish_word_emits_space_completion():
    state = TrackerState(word="the", start=2, last_value="ᛁ " + THORN + EH)
    result = finish_word(state, state.last_value)
    assert result.events == (CompletionEvent(word="the", boundary=" ", start=2, end=4),)
    assert result.state.word == ""
    assert result.state.last_value == state.last_value


def test_finish_word_without_word():
    result = finish_word(TrackerState(last_value="x"), "x")
    assert result.events == ()
