import pytest
import torch

from tabulon.errors import InvalidRow
from tabulon.specs import VEC3
from tabulon.table import DataTable_, TimeSeriesTable, TimeSeriesTableVec3


@pytest.fixture
def table():
    table = TimeSeriesTable()
    table.set_column_labels(["0", "1", "2", "3", "4"])
    row = torch.zeros(5)
    for i in range(5):
        table.append_row(0.00 + 0.25 * i, row + i)
    return table


@pytest.mark.parametrize("time", [0.5, 1.0])
def test_append_rejects_non_increasing_time(table, time):
    with pytest.raises(InvalidRow):
        table.append_row(time, torch.zeros(5))
    assert table.num_rows == 5
    assert table.get_independent_column()[-1] == 1.0


def test_append_increasing_time(table):
    table.append_row(1.25, torch.ones(5))
    assert table.num_rows == 6
    assert table.get_row(1.25).tolist() == [1.0] * 5


@pytest.mark.parametrize("index, time", [(2, 0.25), (2, 0.75), (0, 0.25), (4, 0.75)])
def test_set_time_rejected_against_neighbours(table, index, time):
    previous = table.get_independent_column()[index]
    with pytest.raises(InvalidRow):
        table.set_independent_value_at_index(index, time)
    assert table.get_independent_column()[index] == previous


def test_set_time_between_neighbours(table):
    table.set_independent_value_at_index(2, 0.4)
    table.set_independent_value_at_index(4, 5.0)
    table.set_independent_value_at_index(0, -1.0)
    assert table.get_independent_column() == [-1.0, 0.25, 0.4, 0.75, 5.0]


def test_time_series_is_data_table():
    table = TimeSeriesTableVec3()
    assert isinstance(table, DataTable_.of(VEC3))
    assert TimeSeriesTableVec3.element_spec == VEC3
    table.set_column_labels(["marker"])
    table.append_row(0.0, [[1, 2, 3]])
    with pytest.raises(InvalidRow):
        table.append_row(0.0, [[1, 2, 3]])
