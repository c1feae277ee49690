"""
Exceptions raised by tabulon tables and metadata stores.

Every error derives from :py:class:`TableError`, and additionally from the builtin exception that best describes it, so ``except IndexError`` keeps working for callers that do not know about tabulon.
"""


class TableError(Exception):
    ...


class InvalidArgument(TableError, ValueError):
    ...


class IncorrectNumColumns(TableError, ValueError):
    def __init__(self, expected: int, received: int) -> None:
        super().__init__(
            f"Incorrect number of columns. Expected {expected}, received {received}."
        )
        self.expected = expected
        self.received = received


class InvalidRow(TableError, ValueError):
    ...


class IndexOutOfRange(TableError, IndexError):
    kind = "Index"

    def __init__(self, index: int, min_index: int, max_index: int) -> None:
        super().__init__(
            f"{self.kind} index out of range. Received {index}, "
            f"valid range [{min_index}, {max_index}]."
        )
        self.index = index
        self.min_index = min_index
        self.max_index = max_index


class RowIndexOutOfRange(IndexOutOfRange):
    kind = "Row"


class ColumnIndexOutOfRange(IndexOutOfRange):
    kind = "Column"


class KeyNotFound(TableError, KeyError):
    def __init__(self, key) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        # KeyError quotes its argument through repr, keep the plain message
        return f"Key '{self.key}' not found."


class TypeMismatch(TableError, TypeError):
    ...


class InvalidMetaData(TableError, ValueError):
    ...


class MissingMetaData(InvalidMetaData):
    def __init__(self, key: str) -> None:
        super().__init__(f"Metadata '{key}' is missing.")
        self.key = key


class MetaDataLengthZero(InvalidMetaData):
    def __init__(self, key: str) -> None:
        super().__init__(f"Metadata '{key}' has length zero.")
        self.key = key


class IncorrectMetaDataLength(InvalidMetaData):
    def __init__(self, key: str, expected: int, received: int) -> None:
        super().__init__(
            f"Metadata '{key}' has incorrect length. "
            f"Expected {expected}, received {received}."
        )
        self.key = key
        self.expected = expected
        self.received = received
