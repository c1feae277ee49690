from abc import abstractmethod
from typing import Any, Iterable, List, Union

from tabulon.config import LABELS_KEY
from tabulon.errors import ColumnIndexOutOfRange, InvalidArgument, KeyNotFound, TableError
from tabulon.metadata import MetaDataStore, ValueArray


class AbstractDataTable:
    """
    Element-type agnostic part of a table: the three metadata scopes and the column-label operations built on top of the dependents metadata.

    Metadata is owned by the table:

        * table metadata: free-form single values describing the whole table, e.g. ``DataRate``.
        * independent metadata: single values describing the independent column. Must hold a ``labels`` value once validated.
        * dependents metadata: one :py:class:`tabulon.metadata.ValueArray` per key, one entry per dependent column. Must hold a ``labels`` array whose length is the number of columns once validated.

    Metadata is validated on demand (:py:meth:`validate_dependents_meta_data`) and before label changes, not on every mutation.
    """

    def __init__(self) -> None:
        self._table_meta_data = MetaDataStore()
        self._independent_meta_data = MetaDataStore()
        self._dependents_meta_data = MetaDataStore()

    @property
    @abstractmethod
    def num_rows(self) -> int:
        raise NotImplementedError()

    @property
    @abstractmethod
    def num_columns(self) -> int:
        raise NotImplementedError()

    @classmethod
    @abstractmethod
    def num_components_per_element(cls) -> int:
        raise NotImplementedError()

    @abstractmethod
    def validate_independent_meta_data(self) -> None:
        raise NotImplementedError()

    @abstractmethod
    def validate_dependents_meta_data(self) -> None:
        raise NotImplementedError()

    # table metadata

    def get_table_meta_data(self) -> MetaDataStore:
        return self._table_meta_data

    def upd_table_meta_data(self) -> MetaDataStore:
        return self._table_meta_data

    def set_table_meta_data(self, meta_data: MetaDataStore) -> None:
        self._table_meta_data = meta_data.copy()

    def add_table_meta_data(self, key: str, value: Any) -> None:
        self._table_meta_data.set_value_for_key(key, value)

    def remove_table_meta_data_key(self, key: str) -> None:
        self._table_meta_data.remove_value_for_key(key)

    # independent metadata

    def get_independent_meta_data(self) -> MetaDataStore:
        return self._independent_meta_data

    def upd_independent_meta_data(self) -> MetaDataStore:
        return self._independent_meta_data

    def set_independent_meta_data(self, meta_data: MetaDataStore) -> None:
        """Replace the independent metadata, keeping the previous one if the new one does not validate."""
        previous = self._independent_meta_data
        self._independent_meta_data = meta_data.copy()
        try:
            self.validate_independent_meta_data()
        except TableError:
            self._independent_meta_data = previous
            raise

    # dependents metadata

    def get_dependents_meta_data(self) -> MetaDataStore:
        return self._dependents_meta_data

    def upd_dependents_meta_data(self) -> MetaDataStore:
        return self._dependents_meta_data

    def set_dependents_meta_data(self, meta_data: MetaDataStore) -> None:
        """Replace the dependents metadata, keeping the previous one if the new one does not validate."""
        self._commit_dependents(meta_data.copy())

    def remove_dependents_meta_data_for_key(self, key: str) -> None:
        self._dependents_meta_data.remove_value_array_for_key(key)

    # column labels

    def has_column_labels(self) -> bool:
        return self._dependents_meta_data.has_key(LABELS_KEY)

    def get_column_labels(self) -> List[str]:
        """
        :raises KeyNotFound: if no column labels were set.
        """
        return self._dependents_meta_data.get_value_array_for_key(LABELS_KEY).to_list()

    def set_column_labels(self, labels: Iterable[str]) -> None:
        """
        Set the labels of all dependent columns. Dependents metadata is validated afterwards and the previous labels are restored if validation fails.

        :type labels: Iterable[str]
        :param labels:
            One label per dependent column.

        :raises InvalidArgument: if ``labels`` is a single string.
        """
        if isinstance(labels, str):
            raise InvalidArgument(
                f"Column labels must be a sequence of strings, got the string '{labels}'."
            )
        candidate = self._dependents_meta_data.copy()
        candidate.set_value_array_for_key(LABELS_KEY, ValueArray(labels, str))
        self._commit_dependents(candidate)

    def get_column_label(self, index: int) -> str:
        labels = self._labels_array()
        self._check_label_index(index, len(labels))
        return labels.get(index, str)

    def set_column_label(self, index: int, label: str) -> None:
        labels = self._labels_array()
        self._check_label_index(index, len(labels))
        candidate = self._dependents_meta_data.copy()
        candidate.upd_value_array_for_key(LABELS_KEY).set(index, label)
        self._commit_dependents(candidate)

    def get_column_index(self, label: str) -> int:
        """
        :raises KeyNotFound: if no column carries ``label``.
        """
        if self.has_column_labels():
            for index, existing in enumerate(self._labels_array()):
                if existing == label:
                    return index
        raise KeyNotFound(label)

    def has_column(self, column: Union[str, int]) -> bool:
        """Check for a column either by label or by index."""
        if isinstance(column, str):
            return self.has_column_labels() and column in self._labels_array()
        return 0 <= column < self.num_columns

    def _labels_array(self) -> ValueArray:
        return self._dependents_meta_data.get_value_array_for_key(LABELS_KEY)

    @staticmethod
    def _check_label_index(index: int, num_labels: int) -> None:
        if not 0 <= index < num_labels:
            raise ColumnIndexOutOfRange(index, 0, num_labels - 1)

    def _commit_dependents(self, candidate: MetaDataStore) -> None:
        previous = self._dependents_meta_data
        self._dependents_meta_data = candidate
        try:
            self.validate_dependents_meta_data()
        except TableError:
            self._dependents_meta_data = previous
            raise

    def _adopt_meta_data(self, that: "AbstractDataTable") -> None:
        # copies without validation, the caller validates once labels are final
        self._table_meta_data = that.get_table_meta_data().copy()
        self._independent_meta_data = that.get_independent_meta_data().copy()
        self._dependents_meta_data = that.get_dependents_meta_data().copy()
