from .abstract_table import AbstractDataTable
from .data_table import DataTable, DataTable_, DataTableVec3
from .flatten import flatten_table
from .time_series import (
    TimeSeriesTable,
    TimeSeriesTable_,
    TimeSeriesTableQuaternion,
    TimeSeriesTableVec3,
)

__all__ = [
    "AbstractDataTable",
    "DataTable",
    "DataTable_",
    "DataTableVec3",
    "flatten_table",
    "TimeSeriesTable",
    "TimeSeriesTable_",
    "TimeSeriesTableQuaternion",
    "TimeSeriesTableVec3",
]
