from . import adapters, config, dtypes, errors, metadata, specs, table
from .adapters import FileAdapter
from .dtypes import ValueKind
from .metadata import MetaDataStore, Value, ValueArray
from .specs import QUATERNION, SCALAR, SPATIAL_VEC, VEC3, VEC6, ElementSpec
from .table import (
    DataTable,
    DataTable_,
    DataTableVec3,
    TimeSeriesTable,
    TimeSeriesTable_,
    TimeSeriesTableQuaternion,
    TimeSeriesTableVec3,
)

__all__ = [
    "adapters",
    "config",
    "dtypes",
    "errors",
    "metadata",
    "specs",
    "table",
    # metadata
    "MetaDataStore",
    "Value",
    "ValueArray",
    "ValueKind",
    # element specs
    "ElementSpec",
    "SCALAR",
    "VEC3",
    "QUATERNION",
    "VEC6",
    "SPATIAL_VEC",
    # tables
    "DataTable",
    "DataTable_",
    "DataTableVec3",
    "TimeSeriesTable",
    "TimeSeriesTable_",
    "TimeSeriesTableQuaternion",
    "TimeSeriesTableVec3",
    "FileAdapter",
]
