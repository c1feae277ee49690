from typing import Any

import torch

from tabulon.errors import InvalidRow
from tabulon.specs import QUATERNION, VEC3
from tabulon.table.data_table import DataTable_


class TimeSeriesTable_(DataTable_):
    """
    A :py:class:`DataTable_` whose independent column is time, kept strictly increasing. Every append and every update of a time value is checked against its neighbours.

    Flattening a time-series table produces a scalar time-series table.
    """

    def validate_row(self, row_index: int, time: Any, row: torch.Tensor) -> None:
        times = self._ind_data
        if row_index > 0 and times[row_index - 1] >= time:
            raise InvalidRow(
                f"Time value {time} at row {row_index} is not greater than the "
                f"previous time value {times[row_index - 1]}."
            )
        if row_index + 1 < len(times) and times[row_index + 1] <= time:
            raise InvalidRow(
                f"Time value {time} at row {row_index} is not less than the "
                f"next time value {times[row_index + 1]}."
            )


TimeSeriesTable = TimeSeriesTable_
TimeSeriesTableVec3 = TimeSeriesTable_.of(VEC3)
TimeSeriesTableQuaternion = TimeSeriesTable_.of(QUATERNION)
