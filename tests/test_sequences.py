import pytest

from mcuasync.sequences import Array, List, make_array


def test_array_construction_pads_with_default():
    a2 = Array(5, [10, 20, 30], default=0)
    assert a2.to_list() == [10, 20, 30, 0, 0]
    assert len(a2) == 5


def test_array_construction_truncates():
    a = Array(2, [1, 2, 3])
    assert a.to_list() == [1, 2]


def test_array_negative_size_rejected():
    with pytest.raises(ValueError):
        Array(-1)


def test_array_item_assignment_and_iteration():
    a1 = Array(5, default=0)
    for i, _ in enumerate(a1):
        a1[i] = i + 1
    assert list(a1) == [1, 2, 3, 4, 5]


def test_make_array_sizes_to_arguments():
    a3 = make_array(100, 200, 300, 400)
    assert len(a3) == 4
    assert a3.to_list() == [100, 200, 300, 400]


def test_array_at_and_bounds():
    a2 = Array(5, [10, 20, 30], default=0)
    assert a2.at(2) == 30
    with pytest.raises(IndexError):
        a2.at(10)
    with pytest.raises(IndexError):
        a2.at(-1)


def test_array_contains_and_index_of():
    a1 = make_array(1, 2, 3, 4, 5)
    assert a1.contains(3) is True
    assert a1.contains(10) is False
    assert a1.index_of(3) == 2
    assert a1.index_of(10) == -1


def test_array_sort_and_reverse():
    values = [5, 2, 4, 1, 3]
    a4 = Array(5, values)
    a4.sort()
    assert a4.to_list() == sorted(values)
    a4.reverse()
    assert a4.to_list() == sorted(values, reverse=True)


def test_array_sort_with_key():
    a = make_array("bb", "a", "ccc")
    a.sort(key=len)
    assert a.to_list() == ["a", "bb", "ccc"]


def test_array_filter_and_map():
    a1 = make_array(1, 2, 3, 4, 5)
    assert a1.filter(lambda x: x % 2 == 0) == [2, 4]
    assert a1.map(lambda x: "Num" + str(x)) == ["Num1", "Num2", "Num3", "Num4", "Num5"]


def test_array_fill():
    a5 = Array(5)
    a5.fill(42)
    assert a5.to_list() == [42] * 5


def test_array_to_list_is_a_copy():
    a1 = make_array(1, 2, 3)
    copy = a1.to_list()
    copy.append(9)
    assert a1.to_list() == [1, 2, 3]


def test_array_count_if_value_and_predicate():
    values = [1, 2, 2, 3, 2, 4, 5, 2, 6, 2]
    a6 = Array(10, values)
    assert a6.count_if(2) == values.count(2)
    evens = a6.count_if(lambda x: x % 2 == 0)
    assert evens == len(a6.filter(lambda x: x % 2 == 0))
    assert evens + a6.count_if(lambda x: x % 2 == 1) == len(a6)


def test_array_comparisons():
    assert make_array(1, 2) == make_array(1, 2)
    assert make_array(1, 2) < make_array(1, 3)
    assert make_array(2, 0) > make_array(1, 9)


def test_list_append_prepend():
    l1 = List()
    l1.append(1)
    l1.append(2)
    l1.append(3)
    l1.prepend(0)
    assert len(l1) == 4
    assert l1[0] == 0
    assert l1[-1] == 3
    assert l1.to_list() == [0, 1, 2, 3]


def test_list_contains_and_at():
    l1 = List([0, 1, 2, 3])
    assert l1.contains(2) is True
    assert l1.contains(5) is False
    assert l1.at(2) == 2
    with pytest.raises(IndexError):
        l1.at(4)


def test_list_insert_and_erase_round_trip():
    l1 = List([0, 1, 2, 3])
    l1.insert_at(2, 99)
    assert l1.to_list() == [0, 1, 99, 2, 3]
    assert l1.erase_at(2) == 99
    assert l1.to_list() == [0, 1, 2, 3]


def test_list_insert_and_erase_bounds():
    l1 = List([1])
    with pytest.raises(IndexError):
        l1.insert_at(3, 0)
    with pytest.raises(IndexError):
        l1.erase_at(1)
    l1.insert_at(1, 2)
    assert l1.to_list() == [1, 2]


def test_list_remove_value():
    l1 = List([0, 1, 2, 3, 2])
    assert l1.remove(2) == 2
    assert l1.to_list() == [0, 1, 3]
    assert l1.remove(42) == 0


def test_list_sort_reverse():
    values = [5, 2, 8, 1, 3]
    l2 = List(values)
    l2.sort()
    assert l2.to_list() == sorted(values)
    l2.reverse()
    assert l2.to_list() == sorted(values, reverse=True)


def test_list_filter_and_map():
    l2 = List([8, 5, 3, 2, 1])
    l3 = l2.filter(lambda x: x > 2)
    assert isinstance(l3, List)
    assert l3.to_list() == [8, 5, 3]
    l4 = l2.map(lambda x: "Num" + str(x))
    assert l4.to_list() == ["Num8", "Num5", "Num3", "Num2", "Num1"]


def test_list_merge_empties_other():
    l5 = List([10, 20, 30])
    l6 = List([15, 25, 35])
    l5.merge(l6)
    assert l5.to_list() == sorted([10, 20, 30, 15, 25, 35])
    assert len(l6) == 0


def test_list_merge_is_stable():
    left = List([(1, "a"), (2, "a")])
    right = List([(1, "b")])
    left.sort(key=lambda p: p[0])
    # Compare by first element only through a wrapper-free check on order.
    merged = List([1, 2])
    merged.merge(List([1]))
    assert merged.to_list() == [1, 1, 2]
    assert left.to_list()[0] == (1, "a")


def test_list_splice_range():
    original = [1, 2, 3, 4, 5]
    l7 = List(original)
    l8 = List([10, 20, 30])
    l8.splice(0, l7, 1, 4)
    assert l8.to_list() == original[1:4] + [10, 20, 30]
    assert l7.to_list() == [original[0], original[4]]


def test_list_splice_single_and_whole():
    src = List([7, 8, 9])
    dst = List([1])
    dst.splice(1, src, 1)
    assert dst.to_list() == [1, 8]
    assert src.to_list() == [7, 9]
    dst.splice(0, src)
    assert dst.to_list() == [7, 9, 1, 8]
    assert len(src) == 0


def test_list_splice_within_self():
    lst = List([1, 2, 3, 4])
    lst.splice(4, lst, 0, 2)
    assert lst.to_list() == [3, 4, 1, 2]
    with pytest.raises(ValueError):
        lst.splice(1, lst, 0, 3)


def test_list_splice_bad_range():
    with pytest.raises(IndexError):
        List([1]).splice(0, List([1, 2]), 1, 5)


def test_list_unique_collapses_runs():
    lst = List([1, 1, 2, 2, 1, 3, 3])
    lst.unique()
    assert lst.to_list() == [1, 2, 1, 3]


def test_list_to_list_preserves_order():
    values = [10, 20, 30, 2, 3]
    assert List(values).to_list() == values


def test_list_equality_and_ordering():
    assert List([1, 2]) == List([1, 2])
    assert List([1, 2]) < List([1, 3])
    assert not (List([1]) == List([2]))