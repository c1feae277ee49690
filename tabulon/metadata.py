from collections import OrderedDict
from typing import Any, Iterable, Iterator, List, Union

from tabulon.dtypes import ValueKind, as_kind, coerce, infer_kind, readable_as
from tabulon.errors import KeyNotFound, TypeMismatch


class Value:
    """
    A single type-tagged metadata value.

    :type data: Any
    :param data:
        A string, integer or floating point value.

    :type kind: Union[ValueKind, None]
    :param kind:
        Kind of the value, inferred from ``data`` if not specified. :py:attr:`ValueKind.UNSIGNED` is never inferred and must be requested explicitly.
    """

    __slots__ = ("_data", "_kind")

    def __init__(self, data: Any, kind: Union[ValueKind, type, None] = None) -> None:
        self._kind = infer_kind(data) if kind is None else as_kind(kind)
        self._data = coerce(data, self._kind)

    @property
    def kind(self) -> ValueKind:
        return self._kind

    def get(self, kind: Union[ValueKind, type, None] = None) -> Any:
        """Return the raw value, failing with :py:class:`TypeMismatch` if ``kind`` differs from the stored kind. ``int`` reads both signed and unsigned values."""
        if kind is not None and not readable_as(self._kind, kind):
            raise TypeMismatch(
                f"Value of kind {self._kind.value} read as {as_kind(kind).value}"
            )
        return self._data

    def __eq__(self, other) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self._kind is other._kind and self._data == other._data

    def __repr__(self) -> str:
        return f"Value({self._data!r}, {self._kind})"


class ValueArray:
    """
    A homogeneous sequence of metadata values, one per dependent column.

    An empty array created without ``kind`` adopts the kind of the first appended value.
    """

    def __init__(
        self, values: Iterable[Any] = (), kind: Union[ValueKind, type, None] = None
    ) -> None:
        self._kind = None if kind is None else as_kind(kind)
        self._values: List[Any] = []
        for value in values:
            self.append(value)

    @property
    def kind(self) -> Union[ValueKind, None]:
        return self._kind

    def append(self, value: Any) -> None:
        if isinstance(value, Value):
            if self._kind is None:
                self._kind = value.kind
            value = value.get(self._kind)
        if self._kind is None:
            self._kind = infer_kind(value)
        self._values.append(coerce(value, self._kind))

    def get(self, index: int, kind: Union[ValueKind, type, None] = None) -> Any:
        if kind is not None and not readable_as(self._kind, kind):
            raise TypeMismatch(
                f"ValueArray of kind {self._kind.value if self._kind else None} "
                f"read as {as_kind(kind).value}"
            )
        return self._values[index]

    def set(self, index: int, value: Any) -> None:
        if self._kind is None:
            self._kind = infer_kind(value)
        self._values[index] = coerce(value, self._kind)

    def replicate(self, times: int) -> "ValueArray":
        """Return a new array with every entry repeated ``times`` times, keeping order."""
        return ValueArray(
            [value for value in self._values for _ in range(times)], self._kind
        )

    def to_list(self) -> List[Any]:
        return list(self._values)

    def copy(self) -> "ValueArray":
        return ValueArray(self._values, self._kind)

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index: int) -> Any:
        return self._values[index]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __eq__(self, other) -> bool:
        if isinstance(other, ValueArray):
            return self._kind is other._kind and self._values == other._values
        if isinstance(other, (list, tuple)):
            return self._values == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        kind = self._kind.value if self._kind else None
        return f"ValueArray({self._values!r}, {kind})"


class MetaDataStore:
    """
    Ordered mapping from string keys to metadata entries. An entry is either a single :py:class:`Value` (table and independent column metadata) or a :py:class:`ValueArray` (dependent columns metadata). Key order follows insertion and is stable for the lifetime of the store.

    .. code-block:: python

        store = MetaDataStore()
        store.set_value_for_key("DataRate", 600)
        store.set_value_array_for_key("labels", ["x", "y"])
        store.get_value_for_key("DataRate").get(int)
    """

    def __init__(self) -> None:
        self._entries: "OrderedDict[str, Union[Value, ValueArray]]" = OrderedDict()

    def set_value_for_key(self, key: str, value: Any) -> None:
        self._entries[key] = value if isinstance(value, Value) else Value(value)

    def get_value_for_key(self, key: str) -> Value:
        entry = self._lookup(key)
        if not isinstance(entry, Value):
            raise TypeMismatch(f"Metadata '{key}' holds an array, not a single value")
        return entry

    def remove_value_for_key(self, key: str) -> None:
        if isinstance(self._entries.get(key), Value):
            del self._entries[key]

    def set_value_array_for_key(
        self, key: str, values: Union[ValueArray, Iterable[Any]]
    ) -> None:
        self._entries[key] = (
            values.copy() if isinstance(values, ValueArray) else ValueArray(values)
        )

    def get_value_array_for_key(self, key: str) -> ValueArray:
        entry = self._lookup(key)
        if not isinstance(entry, ValueArray):
            raise TypeMismatch(f"Metadata '{key}' holds a single value, not an array")
        return entry

    def upd_value_array_for_key(self, key: str) -> ValueArray:
        return self.get_value_array_for_key(key)

    def remove_value_array_for_key(self, key: str) -> None:
        if isinstance(self._entries.get(key), ValueArray):
            del self._entries[key]

    def get_keys(self) -> List[str]:
        return list(self._entries.keys())

    def has_key(self, key: str) -> bool:
        return key in self._entries

    def copy(self) -> "MetaDataStore":
        store = MetaDataStore()
        for key, entry in self._entries.items():
            store._entries[key] = entry.copy() if isinstance(entry, ValueArray) else entry
        return store

    def _lookup(self, key: str) -> Union[Value, ValueArray]:
        try:
            return self._entries[key]
        except KeyError:
            raise KeyNotFound(key) from None

    def __contains__(self, key: str) -> bool:
        return self.has_key(key)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"MetaDataStore({dict(self._entries)!r})"
