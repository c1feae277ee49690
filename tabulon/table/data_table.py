import copy
import logging
import numbers
from typing import Any, Dict, List, Sequence, Union

import torch

from tabulon.adapters.base import FileAdapter
from tabulon.config import GROWTH_FACTOR, INITIAL_CAPACITY, LABELS_KEY, RENDER_RULE
from tabulon.errors import (
    ColumnIndexOutOfRange,
    IncorrectMetaDataLength,
    IncorrectNumColumns,
    InvalidArgument,
    InvalidMetaData,
    KeyNotFound,
    MetaDataLengthZero,
    MissingMetaData,
    RowIndexOutOfRange,
    TypeMismatch,
)
from tabulon.metadata import ValueArray
from tabulon.specs import (
    SCALAR,
    VEC3,
    ElementSpec,
    ScalarSpec,
    VecOfVecSpec,
    VecSpec,
)
from tabulon.table.abstract_table import AbstractDataTable
from tabulon.table.flatten import flatten_table

SUPPORTED_SPECS = (ScalarSpec, VecSpec, VecOfVecSpec)


def _rebuild(family: type, spec: ElementSpec) -> "DataTable_":
    cls = family.of(spec)
    return cls.__new__(cls)


class DataTable_(AbstractDataTable):
    """
    In-memory table made of an independent column (e.g. time) and a dense matrix of dependent elements, one matrix row per independent value.

    The element type of the matrix is fixed per class by :py:attr:`element_spec`. ``DataTable_`` itself holds scalars, specialized classes are obtained through :py:meth:`of`:

    .. code-block:: python

        DataTableVec3 = DataTable_.of(VEC3)

        table = DataTableVec3()
        table.set_column_labels(["marker0", "marker1"])
        table.append_row(0.1, [[1, 1, 1], [2, 2, 2]])

        flat = table.flatten(["_x", "_y", "_z"])

    The matrix lives in a torch tensor of shape ``(capacity, num_columns, *element_shape)`` that grows geometrically. Row, column, block and matrix accessors return torch views aliasing that storage. A view is only valid until the next :py:meth:`append_row` that grows the storage; views returned by ``get_*`` accessors must be treated as read-only, ``upd_*`` accessors are meant for writing.
    """

    element_spec: ElementSpec = SCALAR
    _specializations: Dict[ElementSpec, type] = {}

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        if not isinstance(cls.element_spec, SUPPORTED_SPECS):
            raise TypeError(
                f"{cls.__name__}: element type {cls.element_spec!r} cannot be split "
                "into scalar components"
            )
        if "_family" not in cls.__dict__:
            cls._family = cls
            cls._specializations = {}

    @classmethod
    def of(cls, spec: Union[ElementSpec, Sequence[int]]) -> type:
        """
        Return the class of this table family holding elements described by ``spec``. The same spec always yields the same class.

        :type spec: Union[ElementSpec, Sequence[int]]
        :param spec:
            An element spec, or an element shape handed to :py:meth:`tabulon.specs.ElementSpec.create`.

        :raises TypeError: if the element type cannot be split into scalars.
        """
        if not isinstance(spec, ElementSpec):
            spec = ElementSpec.create(spec)
        root = cls._family
        if spec == root.element_spec:
            return root
        if spec not in root._specializations:
            bases = (root,) + tuple(
                base.of(spec)
                for base in root.__bases__
                if issubclass(base, DataTable_)
            )
            root._specializations[spec] = type(
                f"{root.__name__}[{spec}]",
                bases,
                {"element_spec": spec, "_family": root, "__module__": root.__module__},
            )
        return root._specializations[spec]

    @classmethod
    def scalar_class(cls) -> type:
        """The class of this family that :py:meth:`flatten` produces."""
        return cls._family.of(ScalarSpec(dtype=cls.element_spec.dtype))

    def __init__(self) -> None:
        super().__init__()
        self._ind_data: List[Any] = []
        self._dep_data = torch.empty(
            (0, 0) + self.element_spec.shape, dtype=self.element_spec.dtype
        )

    def __reduce__(self):
        return (_rebuild, (self._family, self.element_spec), self.__dict__)

    # construction from other tables / files

    @classmethod
    def from_table(
        cls, that: "DataTable_", suffixes: Union[Sequence[str], None] = None
    ) -> "DataTable_":
        """
        Build a scalar table from ``that`` by splitting each of its columns into one column per element component.

        .. seealso::
          :py:func:`tabulon.table.flatten.flatten_table`.
        """
        if not cls.element_spec.is_scalar:
            raise TypeError(
                f"{cls.__name__} holds {cls.element_spec} elements, only scalar "
                "tables can be built by splitting another table"
            )
        return flatten_table(that, cls, suffixes)

    @classmethod
    def from_file(cls, filename: str, tablename: str = "") -> "DataTable_":
        """
        Read the tables stored in ``filename`` through the :py:class:`tabulon.adapters.FileAdapter` registered for its extension and return the one named ``tablename``.

        :type tablename: str
        :param tablename:
            Name of the table in the file. May be omitted if the file contains a single table.

        :raises InvalidArgument: if the file holds several tables and no name was given, if no table has the given name, or if the table is not of this class.

        The returned table is a copy, the adapter keeps no reference to it.
        """
        tables = FileAdapter.read_file(filename)
        if len(tables) > 1 and not tablename:
            raise InvalidArgument(
                f"File '{filename}' contains more than one table and tablename not specified."
            )
        if not tablename:
            if not tables:
                raise InvalidArgument(f"File '{filename}' contains no table.")
            table = next(iter(tables.values()))
        else:
            try:
                table = tables[tablename]
            except KeyError:
                raise InvalidArgument(
                    f"File '{filename}' contains no table named '{tablename}'."
                ) from None
        if not isinstance(table, cls) or type(table).element_spec != cls.element_spec:
            raise InvalidArgument(
                f"{cls.__name__} cannot be created from file '{filename}'. Type mismatch."
            )
        return table.copy()

    def copy(self) -> "DataTable_":
        return copy.deepcopy(self)

    def flatten(self, suffixes: Union[Sequence[str], None] = None) -> "DataTable_":
        """
        Split every column into its element components, returning a new scalar table. The labels of the resulting columns are the source labels followed by ``suffixes``, or by ``_1``, ``_2``, ... if no suffixes are given.
        """
        return self.scalar_class().from_table(self, suffixes)

    # shape

    @property
    def num_rows(self) -> int:
        return len(self._ind_data)

    @property
    def num_columns(self) -> int:
        return self._dep_data.size(1)

    @classmethod
    def num_components_per_element(cls) -> int:
        return cls.element_spec.num_components

    def __len__(self) -> int:
        return self.num_rows

    # rows

    def append_row(self, ind: Any, dep_row: Union[torch.Tensor, Sequence]) -> None:
        """
        Append a row to the table. The first row fixes the number of columns, it has to match the number of column labels if labels were already set.

        :type ind: Any
        :param ind:
            Entry of the independent column.

        :type dep_row: Union[torch.Tensor, Sequence]
        :param dep_row:
            One element per column, anything :py:func:`torch.as_tensor` accepts, shaped ``(num_columns, *element_shape)``.

        :raises InvalidArgument: if the row is not shaped as one element per column, or if an integer element table receives values it cannot store exactly.
        :raises IncorrectNumColumns: if the row width disagrees with the table.
        :raises InvalidRow: if :py:meth:`validate_row` rejects the row.
        """
        row = self._as_row(dep_row)
        self.validate_row(self.num_rows, ind, row)

        if self.num_rows == 0:
            if self.has_column_labels():
                num_labels = len(self._labels_array())
                if row.size(0) != num_labels:
                    raise IncorrectNumColumns(num_labels, row.size(0))
            self._dep_data = torch.empty(
                (max(INITIAL_CAPACITY, 1),) + tuple(row.shape),
                dtype=self.element_spec.dtype,
            )
        elif row.size(0) != self.num_columns:
            raise IncorrectNumColumns(self.num_columns, row.size(0))
        elif self.num_rows == self._dep_data.size(0):
            self._grow()

        self._dep_data[self.num_rows] = row
        self._ind_data.append(ind)

    def get_row_at_index(self, index: int) -> torch.Tensor:
        self._check_row_index(index)
        return self._dep_data[index]

    def upd_row_at_index(self, index: int) -> torch.Tensor:
        self._check_row_index(index)
        return self._dep_data[index]

    def get_row(self, ind: Any) -> torch.Tensor:
        """
        Row of the first entry of the independent column equal to ``ind``.

        Matching is exact, so floating point independent values have to be reproduced bit for bit.
        """
        return self._dep_data[self._find_row(ind)]

    def upd_row(self, ind: Any) -> torch.Tensor:
        return self._dep_data[self._find_row(ind)]

    def validate_row(self, row_index: int, ind: Any, row: torch.Tensor) -> None:
        """
        Hook for specialized tables to reject append/update operations.

        :raises InvalidRow: if the row is considered invalid.
        """

    # columns

    def get_independent_column(self) -> List[Any]:
        """A copy of the independent column, use :py:meth:`set_independent_value_at_index` to change it."""
        return list(self._ind_data)

    def set_independent_value_at_index(self, index: int, value: Any) -> None:
        self._check_row_index(index)
        self.validate_row(index, value, self._dep_data[index])
        self._ind_data[index] = value

    def get_dependent_column_at_index(self, index: int) -> torch.Tensor:
        self._check_column_index(index)
        return self._matrix[:, index]

    def upd_dependent_column_at_index(self, index: int) -> torch.Tensor:
        self._check_column_index(index)
        return self._matrix[:, index]

    def get_dependent_column(self, label: str) -> torch.Tensor:
        return self.get_dependent_column_at_index(self.get_column_index(label))

    def upd_dependent_column(self, label: str) -> torch.Tensor:
        return self.upd_dependent_column_at_index(self.get_column_index(label))

    # matrix

    def get_matrix(self) -> torch.Tensor:
        return self._matrix

    def upd_matrix(self) -> torch.Tensor:
        return self._matrix

    def get_matrix_block(
        self, row_start: int, column_start: int, num_rows: int, num_columns: int
    ) -> torch.Tensor:
        """
        View of ``num_rows`` x ``num_columns`` elements starting at (``row_start``, ``column_start``).

        :raises InvalidArgument: if ``num_rows`` or ``num_columns`` is zero.
        :raises RowIndexOutOfRange: if a row of the block is out of range.
        :raises ColumnIndexOutOfRange: if a column of the block is out of range.
        """
        self._check_block(row_start, column_start, num_rows, num_columns)
        return self._dep_data[
            row_start : row_start + num_rows, column_start : column_start + num_columns
        ]

    def upd_matrix_block(
        self, row_start: int, column_start: int, num_rows: int, num_columns: int
    ) -> torch.Tensor:
        self._check_block(row_start, column_start, num_rows, num_columns)
        return self._dep_data[
            row_start : row_start + num_rows, column_start : column_start + num_columns
        ]

    # metadata validation

    def validate_independent_meta_data(self) -> None:
        """
        :raises MissingMetaData: if the independent metadata has no ``labels`` value.
        """
        try:
            self._independent_meta_data.get_value_for_key(LABELS_KEY)
        except KeyNotFound:
            raise MissingMetaData(LABELS_KEY) from None
        except TypeMismatch:
            raise InvalidMetaData(
                f"Independent metadata '{LABELS_KEY}' must be a single value."
            ) from None

    def validate_dependents_meta_data(self) -> None:
        """
        :raises MissingMetaData: if there is no ``labels`` array.
        :raises MetaDataLengthZero: if the ``labels`` array is empty.
        :raises IncorrectMetaDataLength: if ``labels`` disagrees with the number of columns, or another array disagrees with ``labels``.
        """
        try:
            num_labels = len(self._dependent_array(LABELS_KEY))
        except KeyNotFound:
            raise MissingMetaData(LABELS_KEY) from None

        if num_labels == 0:
            raise MetaDataLengthZero(LABELS_KEY)
        if self.num_columns != 0 and num_labels != self.num_columns:
            raise IncorrectMetaDataLength(LABELS_KEY, self.num_columns, num_labels)

        for key in self._dependents_meta_data.get_keys():
            received = len(self._dependent_array(key))
            if received != num_labels:
                raise IncorrectMetaDataLength(key, num_labels, received)

    def _dependent_array(self, key: str) -> ValueArray:
        try:
            return self._dependents_meta_data.get_value_array_for_key(key)
        except TypeMismatch:
            raise InvalidMetaData(
                f"Dependents metadata '{key}' must be an array with one entry per column."
            ) from None

    # rendering

    def __str__(self) -> str:
        """Debug rendering. Metadata is left out."""
        lines = [
            RENDER_RULE,
            f"NumRows: {self.num_rows}",
            f"NumCols: {self.num_columns}",
        ]
        labels = ""
        if self.has_column_labels():
            labels = "[" + " ".join(f"'{label}'" for label in self.get_column_labels()) + "]"
        lines.append(f"Column-Labels: {labels}")
        for ind, row in zip(self._ind_data, self._matrix):
            elements = " ".join(self.element_spec.format(element) for element in row)
            lines.append(f"{self._format_independent(ind)} [{elements}]")
        lines.append(RENDER_RULE)
        return "\n".join(lines)

    @staticmethod
    def _format_independent(ind: Any) -> str:
        if isinstance(ind, numbers.Real) and not isinstance(ind, bool):
            return f"{ind:g}"
        return str(ind)

    # internals

    @property
    def _matrix(self) -> torch.Tensor:
        return self._dep_data[: self.num_rows]

    def _as_row(self, dep_row: Union[torch.Tensor, Sequence]) -> torch.Tensor:
        spec = self.element_spec
        row = self._stack(dep_row, spec.dtype)
        if row.dim() != 1 + len(spec.shape) or tuple(row.shape[1:]) != spec.shape:
            raise InvalidArgument(
                f"Row of shape {tuple(row.shape)} does not hold {spec} elements"
            )
        if row.size(0) == 0:
            raise InvalidArgument("Cannot append a row without elements")
        # integer elements only take values they represent exactly
        if not spec.dtype.is_floating_point and not torch.equal(
            row.to(torch.float64), self._stack(dep_row, torch.float64)
        ):
            raise InvalidArgument(
                f"Row holds values that cannot be stored as {spec.dtype} elements"
            )
        return row

    @staticmethod
    def _stack(dep_row: Union[torch.Tensor, Sequence], dtype: torch.dtype) -> torch.Tensor:
        if isinstance(dep_row, (list, tuple)) and any(
            isinstance(element, torch.Tensor) for element in dep_row
        ):
            return torch.stack(
                [torch.as_tensor(element, dtype=dtype) for element in dep_row]
            )
        return torch.as_tensor(dep_row, dtype=dtype)

    def _grow(self) -> None:
        capacity = self._dep_data.size(0)
        new_capacity = max(capacity * GROWTH_FACTOR, capacity + 1)
        logging.debug(
            f"<{type(self).__name__}> Growing storage from {capacity} to {new_capacity} rows"
        )
        storage = torch.empty(
            (new_capacity,) + tuple(self._dep_data.shape[1:]),
            dtype=self._dep_data.dtype,
        )
        storage[: self.num_rows] = self._dep_data[: self.num_rows]
        self._dep_data = storage

    def _find_row(self, ind: Any) -> int:
        try:
            return self._ind_data.index(ind)
        except ValueError:
            raise KeyNotFound(ind) from None

    def _check_row_index(self, index: int) -> None:
        if not 0 <= index < self.num_rows:
            raise RowIndexOutOfRange(index, 0, self.num_rows - 1)

    def _check_column_index(self, index: int) -> None:
        if not 0 <= index < self.num_columns:
            raise ColumnIndexOutOfRange(index, 0, self.num_columns - 1)

    def _check_block(
        self, row_start: int, column_start: int, num_rows: int, num_columns: int
    ) -> None:
        if num_rows == 0 or num_columns == 0:
            raise InvalidArgument("Either num_rows or num_columns is zero.")
        self._check_row_index(row_start)
        self._check_row_index(row_start + num_rows - 1)
        self._check_column_index(column_start)
        self._check_column_index(column_start + num_columns - 1)


DataTable_._family = DataTable_

DataTable = DataTable_
DataTableVec3 = DataTable_.of(VEC3)
