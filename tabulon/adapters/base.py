import logging
import pathlib
from abc import abstractmethod
from typing import TYPE_CHECKING, Dict, Union

from tabulon.errors import InvalidArgument

if TYPE_CHECKING:
    from tabulon.table.abstract_table import AbstractDataTable


class FileAdapter:
    """
    Boundary to the readers of concrete file formats. A reader derives from ``FileAdapter``, implements :py:meth:`read` and registers itself for the file extensions it understands:

    .. code-block:: python

        class TrcFileAdapter(FileAdapter):
            def read(self, filename):
                return {"markers": markers_table}

        FileAdapter.register("trc", TrcFileAdapter())
        table = TimeSeriesTableVec3.from_file("walk.trc")
    """

    _registry: Dict[str, "FileAdapter"] = {}

    @abstractmethod
    def read(self, filename: Union[str, pathlib.Path]) -> Dict[str, "AbstractDataTable"]:
        """Return the tables in ``filename`` keyed by table name, in file order."""
        raise NotImplementedError()

    @staticmethod
    def register(extension: str, adapter: "FileAdapter") -> None:
        extension = FileAdapter._normalize(extension)
        if extension in FileAdapter._registry:
            logging.warning(
                f"WARNING: <FileAdapter> Replacing the adapter registered for '.{extension}'"
            )
        logging.debug(f"<FileAdapter> {type(adapter).__name__} registered for '.{extension}'")
        FileAdapter._registry[extension] = adapter

    @staticmethod
    def unregister(extension: str) -> None:
        FileAdapter._registry.pop(FileAdapter._normalize(extension), None)

    @staticmethod
    def find_by_extension(extension: str) -> "FileAdapter":
        """
        :raises InvalidArgument: if no adapter is registered for ``extension``.
        """
        try:
            return FileAdapter._registry[FileAdapter._normalize(extension)]
        except KeyError:
            raise InvalidArgument(
                f"No FileAdapter registered for extension '{extension}'"
            ) from None

    @staticmethod
    def read_file(filename: Union[str, pathlib.Path]) -> Dict[str, "AbstractDataTable"]:
        """Read ``filename`` with the adapter registered for its extension."""
        adapter = FileAdapter.find_by_extension(pathlib.Path(filename).suffix)
        return adapter.read(filename)

    @staticmethod
    def _normalize(extension: str) -> str:
        return extension.lstrip(".").lower()
