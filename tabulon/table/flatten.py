import logging
from typing import TYPE_CHECKING, List, Sequence, Union

from tabulon.config import LABELS_KEY
from tabulon.dtypes import ValueKind
from tabulon.errors import InvalidArgument, TypeMismatch

if TYPE_CHECKING:
    from tabulon.table.data_table import DataTable_


def default_suffixes(num_components: int) -> List[str]:
    return [f"_{i}" for i in range(1, num_components + 1)]


def flatten_table(
    that: "DataTable_",
    target_cls: type,
    suffixes: Union[Sequence[str], None] = None,
) -> "DataTable_":
    """
    Build a ``target_cls`` table of scalars from ``that``. Each column of ``that`` is split into ``that.num_components_per_element()`` columns, e.g. 3 columns of 3-vectors and 4 rows become 9 columns and 4 rows.

    Column labels are the labels of ``that`` followed by each of ``suffixes`` (``_1``, ``_2``, ... when ``suffixes`` is empty). Dependents metadata holding strings is replicated once per component; any other dependents metadata is dropped, as there is no way to tell how it should be split. Table and independent metadata are copied as-is. ``that`` is left untouched.

    :type suffixes: Union[Sequence[str], None]
    :param suffixes:
        One suffix per element component, or ``None``/empty for the default suffixes.

    :raises InvalidArgument: if ``that`` has no column labels, has zero rows or columns, or if the number of suffixes differs from the number of components per element.
    """
    if not that.has_column_labels():
        raise InvalidArgument("DataTable 'that' has no column labels.")
    if that.num_rows == 0 or that.num_columns == 0:
        raise InvalidArgument("DataTable 'that' has zero rows/columns.")
    num_components = that.num_components_per_element()
    if suffixes and len(suffixes) != num_components:
        raise InvalidArgument(
            f"'suffixes' must contain {num_components} elements, the number of "
            f"components per element of DataTable 'that', got {len(suffixes)}."
        )
    suffixes = list(suffixes) if suffixes else default_suffixes(num_components)

    table = target_cls()
    table._adopt_meta_data(that)
    dependents = table.upd_dependents_meta_data()
    for key in dependents.get_keys():
        if key == LABELS_KEY:
            continue
        try:
            values = dependents.get_value_array_for_key(key)
        except TypeMismatch:
            values = None
        if values is not None and values.kind is ValueKind.STRING:
            dependents.set_value_array_for_key(key, values.replicate(num_components))
        else:
            logging.info(
                f"<{target_cls.__name__}> Dropping dependents metadata '{key}', "
                "only string metadata can be replicated across split columns"
            )
            dependents.remove_value_array_for_key(key)
            dependents.remove_value_for_key(key)

    labels = [label + suffix for label in that.get_column_labels() for suffix in suffixes]
    # validates the dependents metadata against the new labels
    table.set_column_labels(labels)

    spec = that.element_spec
    for ind, row in zip(that.get_independent_column(), that.get_matrix()):
        table.append_row(ind, spec.split_row(row))
    return table
