import pytest

from avlmap import AVLMap, InvalidIteratorError, OutOfRange


def walk_forward(m):
    cursor, keys = m.begin(), []
    while cursor != m.end():
        keys.append(cursor.key)
        cursor.advance()
    return keys


def walk_backward(m):
    cursor, keys = m.end(), []
    while cursor != m.begin():
        cursor.retreat()
        keys.append(cursor.key)
    return keys


def test_forward_iteration_is_ascending(scenario_a):
    assert walk_forward(scenario_a) == [0, 1, 2, 3, 4, 5]
    assert list(scenario_a.begin()) == list(scenario_a.items())


def test_backward_iteration_is_descending(scenario_a):
    assert walk_backward(scenario_a) == [5, 4, 3, 2, 1, 0]


def test_iteration_over_random_tree(rng):
    keys = rng.sample(range(10000), 400)
    m = AVLMap((k, str(k)) for k in keys)
    assert walk_forward(m) == sorted(keys)
    assert walk_backward(m) == sorted(keys, reverse=True)


def test_empty_map_cursors():
    m = AVLMap()
    assert m.begin() == m.end()
    assert m.rbegin() == m.rend()
    assert list(m.begin()) == []
    with pytest.raises(OutOfRange):
        m.end().advance()
    with pytest.raises(OutOfRange):
        m.end().retreat()


def test_advance_past_end_raises(scenario_a):
    cursor = scenario_a.find(5)
    cursor.advance()
    assert cursor.at_end()
    with pytest.raises(OutOfRange):
        cursor.advance()


def test_retreat_before_begin_raises(scenario_a):
    cursor = scenario_a.begin()
    with pytest.raises(OutOfRange):
        cursor.retreat()
    assert cursor.key == 0


def test_retreat_from_end_reaches_largest_key(scenario_a):
    cursor = scenario_a.end()
    cursor.retreat()
    assert cursor.item() == (5, 30)


def test_dereferencing_end_raises(scenario_a):
    with pytest.raises(OutOfRange):
        scenario_a.end().key
    with pytest.raises(OutOfRange):
        scenario_a.end().item()


def test_value_writes_through(scenario_a):
    cursor = scenario_a.find(3)
    cursor.value = "three"
    assert scenario_a.get(3) == "three"


def test_const_cursor_is_read_only(scenario_a):
    cursor = scenario_a.cbegin()
    assert cursor.item() == (0, 0)
    with pytest.raises(TypeError):
        cursor.value = 1
    assert list(cursor) == list(scenario_a.items())
    assert scenario_a.cend().at_end()


def test_cursor_equality_is_node_identity(scenario_a):
    first = scenario_a.begin()
    same = scenario_a.find(0)
    assert first == same
    assert first.copy() == first
    same.advance()
    assert first != same
    assert scenario_a.end() == scenario_a.find(99)
    assert scenario_a.begin() != scenario_a.copy().begin()


def test_cursor_is_a_python_iterator():
    cursor = AVLMap({1: "a", 2: "b"}).begin()
    assert iter(cursor) is cursor
    assert next(cursor) == (1, "a")
    assert next(cursor) == (2, "b")
    assert cursor.at_end()
    with pytest.raises(StopIteration):
        next(cursor)


def test_for_loop_consumes_the_cursor(scenario_a):
    cursor = scenario_a.find(3)
    assert [k for k, _ in cursor] == [3, 4, 5]
    assert cursor.at_end()


def test_iterating_a_copy_keeps_the_position(scenario_a):
    cursor = scenario_a.find(3)
    assert [k for k, _ in cursor.copy()] == [3, 4, 5]
    assert cursor.key == 3


def test_reverse_cursor_is_a_python_iterator(scenario_a):
    cursor = scenario_a.rbegin()
    assert next(cursor) == (5, 30)
    assert cursor.key == 4
    assert [k for k, _ in cursor] == [4, 3, 2, 1, 0]
    assert cursor == scenario_a.rend()
    with pytest.raises(StopIteration):
        next(cursor)


def test_reverse_iteration(scenario_a):
    assert list(reversed(scenario_a)) == [5, 4, 3, 2, 1, 0]
    assert [v for _, v in scenario_a.rbegin()] == [30, 10, 10, -101, -1, 0]


def test_reverse_cursor_stepping(scenario_a):
    cursor = scenario_a.rbegin()
    assert cursor.key == 5
    for _ in range(6):
        cursor.advance()
    assert cursor == scenario_a.rend()
    assert cursor.at_end()
    with pytest.raises(OutOfRange):
        cursor.advance()
    with pytest.raises(OutOfRange):
        cursor.key
    cursor.retreat()
    assert cursor.key == 0
    with pytest.raises(OutOfRange):
        scenario_a.rbegin().retreat()


def test_reverse_cursor_base(scenario_a):
    cursor = scenario_a.rbegin()
    assert cursor.base() == scenario_a.end()
    cursor.value = "five"
    assert scenario_a.get(5) == "five"
    with pytest.raises(TypeError):
        scenario_a.crbegin().value = 0
    assert list(scenario_a.crbegin())[0] == (5, "five")
    assert scenario_a.crend().at_end()


def test_cursor_on_deleted_node_is_invalid(scenario_a):
    cursor = scenario_a.find(2)
    scenario_a.delete(2)
    with pytest.raises(InvalidIteratorError):
        cursor.advance()
    with pytest.raises(InvalidIteratorError):
        cursor.key


def test_cursor_on_moved_donor_stays_valid(scenario_a):
    cursor = scenario_a.find(2)
    scenario_a.delete(3)
    assert cursor.key == 2
    cursor.advance()
    assert cursor.key == 4


def test_untouched_cursors_survive_rotations(rng):
    m = AVLMap((k, k) for k in range(0, 200, 2))
    cursor = m.find(100)
    for key in rng.sample(range(1, 400, 2), 150):
        m.insert(key, key)
    for key in range(0, 60, 2):
        m.delete(key)
    assert [k for k, _ in cursor.copy()] == [k for k in m if k >= 100]
    cursor.retreat()
    assert cursor.key == max(k for k in m if k < 100)


def test_cursor_repr(scenario_a):
    assert repr(scenario_a.find(4)) == "<MapIterator at key=4>"
    assert repr(scenario_a.end()) == "<MapIterator at end>"
