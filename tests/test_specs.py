import pickle as pkl

import pytest
import torch

from tabulon.specs import (
    QUATERNION,
    SPATIAL_VEC,
    ElementSpec,
    ScalarSpec,
    VecOfVecSpec,
    VecSpec,
)
from tabulon.table import DataTable_


@pytest.mark.parametrize(
    "shape, dtype, num_components, name",
    [
        ((), torch.float64, 1, "Scalar"),
        ((3,), torch.float64, 3, "Vec3"),
        ((4,), torch.float32, 4, "Vec4"),
        ((6,), torch.int64, 6, "Vec6"),
        ((2, 3), torch.float64, 6, "Vec2xVec3"),
    ],
)
class TestElementSpec:
    def test_element_spec_build(self, shape, dtype, num_components, name):
        spec = ElementSpec.create(shape, dtype)
        assert spec.shape == shape
        assert spec.dtype == dtype
        assert spec.num_components == num_components
        assert str(spec) == name

    def test_element_spec_pickle(self, shape, dtype, num_components, name):
        spec = ElementSpec.create(shape, dtype)
        spec_recovered = pkl.loads(pkl.dumps(spec))
        assert spec == spec_recovered
        assert hash(spec) == hash(spec_recovered)

    def test_element_split(self, shape, dtype, num_components, name):
        spec = ElementSpec.create(shape, dtype)
        element = torch.arange(num_components, dtype=dtype).reshape(shape)
        components = spec.split(element)
        assert components.shape == (num_components,)
        assert torch.equal(components, torch.arange(num_components, dtype=dtype))

    def test_table_class_per_spec(self, shape, dtype, num_components, name):
        spec = ElementSpec.create(shape, dtype)
        cls = DataTable_.of(spec)
        assert cls is DataTable_.of(ElementSpec.create(shape, dtype))
        assert cls.element_spec == spec
        assert cls.num_components_per_element() == num_components


def test_create_dispatch():
    assert isinstance(ElementSpec.create(()), ScalarSpec)
    assert ElementSpec.create((3,)) == VecSpec(3)
    assert ElementSpec.create((2, 3)) == SPATIAL_VEC
    assert ElementSpec.create((4,)) == QUATERNION


def test_vec_of_vec_split_order():
    components = SPATIAL_VEC.split([[1, 2, 3], [4, 5, 6]])
    assert components.tolist() == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]


def test_split_row_concatenates_in_column_order():
    row = torch.tensor([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    assert VecSpec(3).split_row(row).tolist() == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]


def test_split_shape_mismatch():
    with pytest.raises(TypeError):
        VecSpec(3).split([1.0, 2.0])


@pytest.mark.parametrize("shape", [(2, 3, 4), (1, 1, 1, 1)])
def test_unsupported_rank(shape):
    with pytest.raises(TypeError):
        ElementSpec.create(shape)
    with pytest.raises(TypeError):
        DataTable_.of(shape)


def test_unsupported_extent_and_dtype():
    with pytest.raises(TypeError):
        VecSpec(0)
    with pytest.raises(TypeError):
        VecOfVecSpec(2, -1)
    with pytest.raises(TypeError):
        ElementSpec.create((3,), torch.bool)


def test_unsupported_element_rejected_at_class_creation():
    with pytest.raises(TypeError):

        class QuaternionTable(DataTable_):
            element_spec = "quaternion"


def test_element_format():
    assert ScalarSpec().format(torch.tensor(1.5)) == "1.5"
    assert VecSpec(3).format(torch.tensor([1.0, 2.0, 3.0])) == "~[1,2,3]"
    assert SPATIAL_VEC.format(torch.tensor([[1.0, 1.0, 1.0], [2.0, 2.0, 2.0]])) == (
        "~[~[1,1,1],~[2,2,2]]"
    )
