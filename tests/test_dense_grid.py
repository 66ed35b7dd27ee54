import copy

import pytest

from dyarr import DenseGrid, GridError, GridIndexError, ShapeError
from dyarr.src.core.dense_grid import BufferView


def test_allocate():
    arr = DenseGrid.filled(0, [2, 3, 5])
    assert len(arr.buffer_ref()) == 30
    assert arr.shape == (2, 3, 5)
    assert arr.rank == 3


@pytest.mark.parametrize(
    "shape, expected",
    [((), 1), ((7,), 7), ((2, 0, 4), 0), ((1, 1, 1, 1), 1), ((3, 4), 12)],
)
def test_capacity_law(shape, expected):
    assert len(DenseGrid.filled("x", shape)) == expected


def test_filled_does_not_alias_mutable_values():
    grid = DenseGrid.filled([], (2, 2))
    grid[0, 0].append(1)
    assert grid[0, 1] == []


def test_from_raw_checks_length():
    data = list(range(24))
    grid = DenseGrid.from_raw(data, [2, 3, 4])
    assert grid.buffer_ref() == data
    assert grid.buffer_ref()[7] == 7
    with pytest.raises(ShapeError, match="data length not matching dimensions"):
        DenseGrid.from_raw(data, [3, 4, 5])


def test_from_raw_edge_shapes():
    assert DenseGrid.from_raw([9], []).shape == ()
    assert DenseGrid.from_raw([], [3, 0]).shape == (3, 0)
    with pytest.raises(ShapeError):
        DenseGrid.from_raw([], [])
    with pytest.raises(ShapeError):
        DenseGrid.from_raw([1], [3, 0])


def test_from_raw_copies_buffer():
    data = [1, 2, 3]
    grid = DenseGrid.from_raw(data, [3])
    data[0] = 100
    assert grid[0] == 1


def test_offsets_on_grid():
    arr = DenseGrid.filled(0, [3, 4, 5])
    assert arr.offset_of_valid([2, 1, 3]) == 48
    assert arr.try_offset_of_valid([2, 1]) is None
    assert arr.offset([-1, -1, -3]) == -28
    assert arr.offset([]) == 0
    with pytest.raises(GridIndexError):
        arr.offset([2, -4, 4])


def test_indexing():
    arr = DenseGrid.filled(0, [3, 4, 5])
    arr[2, 3, 4] = 1
    assert arr[2, 3, 3] == 0
    assert arr[2, 3, 4] == 1
    assert arr[[2, 3, 4]] == 1
    assert arr.buffer_ref()[59] == 1


def test_write_leaves_other_cells_untouched():
    arr = DenseGrid.filled(0, [2, 3])
    arr[[1, 0]] = 5
    assert [v for _, v in arr.items()] == [0, 0, 0, 5, 0, 0]


def test_basic_use():
    array_3d = DenseGrid.filled(42, [2, 3, 5])
    for i in range(2):
        for j in range(3):
            for k in range(5):
                assert array_3d[i, j, k] == 42
    array_3d[1, 0, 2] = -array_3d[1, 0, 2]
    assert array_3d[1, 0, 2] == -42


def test_indices_length_is_checked():
    array_3d = DenseGrid.filled(42, [2, 3, 5])
    with pytest.raises(GridIndexError):
        array_3d[1, 2]
    with pytest.raises(GridIndexError):
        array_3d[1, 2] = 0
    with pytest.raises(GridIndexError):
        array_3d[0, 1, 6] = 0
    assert array_3d.to_list() == [42] * 30


def test_index_bound_is_checked():
    array_3d = DenseGrid.filled(42, [2, 3, 5])
    with pytest.raises(GridIndexError):
        array_3d[0, 1, 6]
    with pytest.raises(GridIndexError):
        array_3d[0, 1, -1]


def test_grid_index_error_is_index_error():
    grid = DenseGrid.filled(0, [2])
    with pytest.raises(IndexError):
        grid[2]


def test_slicing_is_not_supported():
    grid = DenseGrid.filled(0, [4])
    with pytest.raises(TypeError):
        grid[1:3]


def test_rank_zero_and_rank_one_keys():
    scalar = DenseGrid.from_raw(["only"], [])
    assert scalar[()] == "only"
    line = DenseGrid.from_raw([10, 20, 30], [3])
    assert line[2] == 30
    assert line[(1,)] == 20


def test_get_returns_default():
    grid = DenseGrid.from_raw([1, 2, 3, 4], [2, 2])
    assert grid.get((1, 1)) == 4
    assert grid.get((2, 0)) is None
    assert grid.get((0,), default=-1) == -1


def test_buffer_mut_allows_bulk_updates():
    grid = DenseGrid.filled(1, [2, 2])
    raw = grid.buffer_mut()
    for i in range(len(raw)):
        raw[i] *= i
    assert grid[1, 1] == 3


def test_buffer_length_change_is_detected():
    grid = DenseGrid.filled(1, [2, 2])
    grid.buffer_mut().append(5)
    with pytest.raises(GridError, match="buffer length changed"):
        grid[0, 0]


def test_buffer_ref_is_read_only():
    grid = DenseGrid.filled(1, [3])
    view = grid.buffer_ref()
    assert isinstance(view, BufferView)
    with pytest.raises(TypeError):
        view[0] = 2
    grid[0] = 7
    assert view[0] == 7
    assert view[0:2] == (7, 1)


def test_take_buffer_consumes_grid():
    grid = DenseGrid.from_raw([1, 2, 3, 4], [2, 2])
    assert grid.take_buffer() == [1, 2, 3, 4]
    with pytest.raises(GridError, match="consumed"):
        grid[0, 0]
    with pytest.raises(GridError):
        grid.into_buffer()
    assert "consumed" in repr(grid)


def test_copy_is_independent():
    grid = DenseGrid.from_raw([[1], [2]], [2])
    shallow = grid.copy()
    deep = copy.deepcopy(grid)
    assert shallow == grid and deep == grid
    shallow[0] = [9]
    deep[1].append(3)
    assert grid[0] == [1]
    assert grid[1] == [2]
    assert copy.copy(grid) is not grid


def test_equality_uses_shape_and_data():
    a = DenseGrid.from_raw([1, 2, 3, 4], [2, 2])
    assert a == DenseGrid.from_raw([1, 2, 3, 4], [2, 2])
    assert a != DenseGrid.from_raw([1, 2, 3, 4], [4])
    assert a != DenseGrid.from_raw([1, 2, 3, 5], [2, 2])


def test_indices_follow_buffer_order():
    grid = DenseGrid.from_raw(list(range(6)), [2, 3])
    for idx, value in grid.items():
        assert grid.offset_of_valid(idx) == value


def test_iteration_follows_buffer_order():
    grid = DenseGrid.filled(5, [2, 2])
    assert list(grid) == [5, 5, 5, 5]
    assert 5 in grid
    assert 6 not in grid
    scalar = DenseGrid.from_raw(["only"], [])
    assert list(scalar) == ["only"]
    ramp = DenseGrid.from_raw(list(range(6)), [2, 3])
    assert list(ramp) == [value for _, value in ramp.items()]


def test_iterating_consumed_grid_raises():
    grid = DenseGrid.filled(0, [2, 2])
    grid.take_buffer()
    with pytest.raises(GridError):
        list(grid)


def test_equality_with_consumed_grid():
    grid = DenseGrid.filled(0, [2])
    other = DenseGrid.filled(0, [2])
    other.take_buffer()
    assert grid != other
    assert other != grid
    assert other == other


def test_scalar_shape_is_rejected():
    with pytest.raises(ShapeError):
        DenseGrid.filled(0, 5)
    with pytest.raises(ShapeError):
        DenseGrid.from_raw([0] * 5, 5)
    with pytest.raises(ShapeError):
        DenseGrid.filled(0, "34")
