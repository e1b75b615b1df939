from __future__ import annotations

from core.focus import FocusState, advance_focus, focus_index


def test_new_trailing_segment_gets_focus() -> None:
    previous = ["a (1/2)", "b (2/2)"]
    current = ["a (1/3)", "b (2/3)", "c (3/3)"]
    assert focus_index(previous, current) == 2


def test_first_changed_segment_gets_focus() -> None:
    assert focus_index(["a", "b", "c"], ["a", "x", "c"]) == 1


def test_no_difference_returns_none() -> None:
    assert focus_index(["a (1/2)", "b (2/2)"], ["a (1/2)", "b (2/2)"]) is None
    assert focus_index(["a", "b"], ["a"]) is None
    assert focus_index([], []) is None


def test_first_render_focuses_first_segment() -> None:
    assert focus_index([], ["a"]) == 0


def test_advance_focus_keeps_prior_index_on_unrelated_render() -> None:
    state, index = advance_focus(FocusState(), ["a", "b"])
    assert index == 0
    state, index = advance_focus(state, ["a", "b2"])
    assert index == 1
    state, index = advance_focus(state, ["a", "b2"])
    assert index == 1
    assert state.previous == ("a", "b2")
    assert state.index == 1


def test_advance_focus_drops_index_outside_batch() -> None:
    state = FocusState(previous=("a", "b", "c"), index=2)
    state, index = advance_focus(state, ["a"])
    assert index is None
    assert state.index is None
