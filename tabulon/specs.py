from dataclasses import dataclass, field
from typing import Sequence, Tuple, Union

import torch

from tabulon.config import DEFAULT_DTYPE
from tabulon.dtypes import CVT_DTYPES_TORCH_TO_KIND


@dataclass(frozen=True)
class ElementSpec:
    """
    Describe the shape of a single element (matrix cell) of a table. The set of element specs is closed: :py:class:`ScalarSpec`, :py:class:`VecSpec` and :py:class:`VecOfVecSpec`. A table class is bound to one element spec when the class is created.

    .. seealso::
      :py:meth:`tabulon.table.DataTable_.of`.
    """

    dtype: torch.dtype = field(default=DEFAULT_DTYPE, kw_only=True)

    def __post_init__(self):
        if self.dtype not in CVT_DTYPES_TORCH_TO_KIND:
            raise TypeError(f"Unsupported element dtype: {self.dtype}")
        for extent in self.shape:
            if not isinstance(extent, int) or extent <= 0:
                raise TypeError(
                    f"Element extents must be positive integers, got {self.shape}"
                )

    @property
    def shape(self) -> Tuple[int, ...]:
        raise NotImplementedError()

    @property
    def num_components(self) -> int:
        num = 1
        for extent in self.shape:
            num *= extent
        return num

    @property
    def is_scalar(self) -> bool:
        return self.shape == ()

    def split(self, element: Union[torch.Tensor, Sequence]) -> torch.Tensor:
        """
        Split one element into its scalar components.

        Vector components come out in order ``0..N-1``; for a vector of vectors the outer index is major and the inner index minor.

        :rtype: torch.Tensor
        :return:
            1-dim tensor with :py:attr:`num_components` entries.
        """
        element = torch.as_tensor(element, dtype=self.dtype)
        if tuple(element.shape) != self.shape:
            raise TypeError(
                f"Element of shape {tuple(element.shape)} does not match {self}"
            )
        return element.reshape(-1)

    def split_row(self, row: torch.Tensor) -> torch.Tensor:
        """Split every element of a row and concatenate the components in column order."""
        return torch.cat([self.split(element) for element in row])

    def format(self, element: torch.Tensor) -> str:
        raise NotImplementedError()

    @staticmethod
    def _format_number(value: torch.Tensor) -> str:
        return f"{value.item():g}"

    @staticmethod
    def create(
        shape: Sequence[int] = (), dtype: torch.dtype = DEFAULT_DTYPE
    ) -> "ElementSpec":
        """
        Factory function of ElementSpec.

        :type shape: Sequence[int]
        :param shape:
            Shape of a single element. ``()`` for a scalar, ``(n,)`` for a fixed vector of length ``n`` and ``(m, n)`` for ``m`` fixed vectors of length ``n``. Any other rank is rejected.

        :type dtype: torch.dtype
        :param dtype:
            Data type of the element components.

        :return:
            Constructed ElementSpec instance.
        :rtype: :py:class:`tabulon.specs.ElementSpec`.
        """
        shape = tuple(shape)
        if len(shape) == 0:
            return ScalarSpec(dtype=dtype)
        elif len(shape) == 1:
            return VecSpec(shape[0], dtype=dtype)
        elif len(shape) == 2:
            return VecOfVecSpec(shape[0], shape[1], dtype=dtype)
        raise TypeError(f"Element shape {shape} is not splittable into scalars")


@dataclass(frozen=True)
class ScalarSpec(ElementSpec):
    @property
    def shape(self) -> Tuple[int, ...]:
        return ()

    def format(self, element: torch.Tensor) -> str:
        return self._format_number(element)

    def __str__(self) -> str:
        return "Scalar"


@dataclass(frozen=True)
class VecSpec(ElementSpec):
    size: int

    @property
    def shape(self) -> Tuple[int, ...]:
        return (self.size,)

    def format(self, element: torch.Tensor) -> str:
        return "~[" + ",".join(self._format_number(v) for v in element) + "]"

    def __str__(self) -> str:
        return f"Vec{self.size}"


@dataclass(frozen=True)
class VecOfVecSpec(ElementSpec):
    outer: int
    inner: int

    @property
    def shape(self) -> Tuple[int, ...]:
        return (self.outer, self.inner)

    def format(self, element: torch.Tensor) -> str:
        inner = VecSpec(self.inner, dtype=self.dtype)
        return "~[" + ",".join(inner.format(vec) for vec in element) + "]"

    def __str__(self) -> str:
        return f"Vec{self.outer}xVec{self.inner}"


SCALAR = ScalarSpec()
VEC3 = VecSpec(3)
QUATERNION = VecSpec(4)
VEC6 = VecSpec(6)
SPATIAL_VEC = VecOfVecSpec(2, 3)

