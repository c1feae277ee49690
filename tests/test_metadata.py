import pytest

from tabulon.dtypes import ValueKind
from tabulon.errors import KeyNotFound, TypeMismatch
from tabulon.metadata import MetaDataStore, Value, ValueArray


@pytest.mark.parametrize(
    "data, kind",
    [
        ("/path/to/file", ValueKind.STRING),
        (600, ValueKind.SIGNED),
        (-3, ValueKind.SIGNED),
        (0.5, ValueKind.FLOAT),
    ],
)
def test_value_kind_inference(data, kind):
    value = Value(data)
    assert value.kind is kind
    assert value.get() == data
    assert value.get(kind) == data


def test_value_unsigned_must_be_explicit():
    assert Value(3).kind is ValueKind.SIGNED
    value = Value(3, ValueKind.UNSIGNED)
    assert value.kind is ValueKind.UNSIGNED
    assert value.get(ValueKind.UNSIGNED) == 3
    with pytest.raises(TypeMismatch):
        Value(-1, ValueKind.UNSIGNED)


def test_value_read_as_wrong_kind():
    with pytest.raises(TypeMismatch):
        Value("600").get(int)
    with pytest.raises(TypeMismatch):
        Value(600).get(ValueKind.UNSIGNED)
    assert Value(600).get(int) == 600


def test_int_reads_both_integer_kinds():
    assert Value(5, ValueKind.UNSIGNED).get(int) == 5
    assert ValueArray([1, 2], ValueKind.UNSIGNED).get(1, int) == 2
    with pytest.raises(TypeMismatch):
        Value(5, ValueKind.SIGNED).get(ValueKind.UNSIGNED)
    with pytest.raises(TypeMismatch):
        Value(5.0).get(int)


def test_value_conversions():
    assert Value(3, float).get(float) == 3.0
    with pytest.raises(TypeMismatch):
        Value(3.5, int)
    with pytest.raises(TypeMismatch):
        Value(True)
    with pytest.raises(TypeMismatch):
        Value([1, 2])


def test_value_array_homogeneous():
    values = ValueArray(["1", "2", "3"])
    assert values.kind is ValueKind.STRING
    assert len(values) == 3
    assert values.get(1, str) == "2"
    assert values == ["1", "2", "3"]
    with pytest.raises(TypeMismatch):
        ValueArray(["a", 1])
    with pytest.raises(TypeMismatch):
        values.get(0, int)


def test_value_array_kind_from_values():
    col_index = ValueArray([Value(i, ValueKind.UNSIGNED) for i in range(1, 6)])
    assert col_index.kind is ValueKind.UNSIGNED
    assert list(col_index) == [1, 2, 3, 4, 5]

    empty = ValueArray()
    assert empty.kind is None
    empty.append(0.5)
    assert empty.kind is ValueKind.FLOAT


def test_value_array_replicate():
    units = ValueArray(["m", "s"])
    replicated = units.replicate(3)
    assert replicated.to_list() == ["m", "m", "m", "s", "s", "s"]
    assert replicated.kind is ValueKind.STRING
    assert units.to_list() == ["m", "s"]


class TestMetaDataStore:
    def test_single_values(self):
        store = MetaDataStore()
        store.set_value_for_key("DataRate", 600)
        store.set_value_for_key("Filename", "/path/to/file")
        assert store.get_value_for_key("DataRate").get(int) == 600
        assert store.get_value_for_key("Filename").get(str) == "/path/to/file"

        store.set_value_for_key("DataRate", 100.0)
        assert store.get_value_for_key("DataRate").get(float) == 100.0

    def test_value_arrays(self):
        store = MetaDataStore()
        store.set_value_array_for_key("labels", ["1", "2"])
        store.set_value_array_for_key(
            "column-index", ValueArray([1, 2], ValueKind.UNSIGNED)
        )
        assert store.get_value_array_for_key("labels") == ["1", "2"]
        assert store.get_value_array_for_key("column-index").kind is ValueKind.UNSIGNED

        store.upd_value_array_for_key("labels").set(0, "one")
        assert store.get_value_array_for_key("labels") == ["one", "2"]

    def test_missing_key(self):
        store = MetaDataStore()
        with pytest.raises(KeyNotFound):
            store.get_value_for_key("labels")
        with pytest.raises(KeyError):
            store.get_value_array_for_key("labels")

    def test_wrong_entry_form(self):
        store = MetaDataStore()
        store.set_value_for_key("labels", "time")
        store.set_value_array_for_key("units", ["m"])
        with pytest.raises(TypeMismatch):
            store.get_value_array_for_key("labels")
        with pytest.raises(TypeMismatch):
            store.get_value_for_key("units")

    def test_remove(self):
        store = MetaDataStore()
        store.set_value_array_for_key("units", ["m"])
        store.set_value_for_key("labels", "time")
        store.remove_value_array_for_key("does-not-exist")
        store.remove_value_array_for_key("labels")
        assert store.has_key("labels")
        store.remove_value_array_for_key("units")
        store.remove_value_for_key("labels")
        assert len(store) == 0

    def test_keys_keep_insertion_order(self):
        store = MetaDataStore()
        for key in ["labels", "units", "column-index"]:
            store.set_value_array_for_key(key, ["x"])
        assert store.get_keys() == ["labels", "units", "column-index"]
        store.set_value_array_for_key("labels", ["y"])
        assert store.get_keys() == ["labels", "units", "column-index"]
        assert "units" in store

    def test_copy_is_independent(self):
        store = MetaDataStore()
        store.set_value_array_for_key("labels", ["a", "b"])
        copied = store.copy()
        copied.upd_value_array_for_key("labels").set(0, "c")
        copied.set_value_for_key("DataRate", 600)
        assert store.get_value_array_for_key("labels") == ["a", "b"]
        assert not store.has_key("DataRate")
