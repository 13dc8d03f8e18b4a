from selection import SelectionRect, SelectionTracker


def test_normalize_is_independent_of_drag_direction():
    forward = SelectionTracker()
    forward.start((1, 1))
    forward.update((4, 3))

    backward = SelectionTracker()
    backward.start((4, 3))
    backward.update((1, 1))

    assert forward.normalize() == backward.normalize() == SelectionRect(1, 4, 1, 3)


def test_contains_false_when_not_selecting():
    sel = SelectionTracker()
    assert not sel.contains(0, 0)
    sel.start((2, 2))
    sel.update((3, 4))
    assert sel.contains(3, 3)
    assert not sel.contains(1, 3)
    sel.cancel()
    assert not sel.contains(3, 3)
    assert sel.normalize() is None


def test_finish_keeps_rectangle_live():
    sel = SelectionTracker()
    sel.start((0, 0))
    sel.update((2, 1))
    rect = sel.finish()
    assert sel.selecting
    assert (rect.height, rect.width) == (3, 2)
    assert sel.size_label() == "3x2"


def test_update_ignored_when_idle():
    sel = SelectionTracker()
    sel.update((5, 5))
    assert sel.active is None
