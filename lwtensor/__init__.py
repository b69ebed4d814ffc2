"""
lwtensor: lightweight dense tensors for small-scale linear algebra.

A minimal N-dimensional array type with row-major strided indexing and
element-wise arithmetic, plus thin vector and matrix layers providing dot
and cross products, matrix multiplication, transpose, determinant,
cofactor/adjugate expansion and matrix inverse.

Submodules:
    tensor: Tensor type and element-wise arithmetic
    vector: Rank-1 operations (norm, normalize, cross)
    matrix: Rank-2 operations (matmul, determinant, inverse, ...)
    core: Exceptions, validation, precision and tolerances
"""

__version__ = "0.1.0"

from lwtensor.core.exceptions import (
    LwTensorError,
    ValidationError,
    DimensionError,
    InvalidShapeError,
    ShapeMismatchError,
    IndexOutOfBoundsError,
    AllocationError,
    ReleasedTensorError,
    NumericalError,
    DivisionByZeroError,
    SingularMatrixError,
)
from lwtensor.tensor import (
    Tensor,
    create,
    from_flat,
    copy,
    get_value,
    set_value,
    length,
    destroy,
    add,
    subtract,
    divide,
    hadamard_product,
    add_scalar,
    subtract_scalar,
    divide_scalar,
    scale,
    dot,
    allclose,
)
from lwtensor.vector import (
    Vector,
    create_vector,
    vector,
    from_components,
    norm,
    normalize,
    cross,
)
from lwtensor.matrix import (
    Matrix,
    create_matrix,
    identity,
    matrix,
    row,
    column,
    matmul,
    transform,
    transpose,
    minor,
    cofactor,
    cofactor_matrix,
    adjugate,
    determinant,
    inverse,
)

__all__ = [
    "__version__",
    # Exceptions
    "LwTensorError",
    "ValidationError",
    "DimensionError",
    "InvalidShapeError",
    "ShapeMismatchError",
    "IndexOutOfBoundsError",
    "AllocationError",
    "ReleasedTensorError",
    "NumericalError",
    "DivisionByZeroError",
    "SingularMatrixError",
    # Tensor
    "Tensor",
    "create",
    "from_flat",
    "copy",
    "get_value",
    "set_value",
    "length",
    "destroy",
    "add",
    "subtract",
    "divide",
    "hadamard_product",
    "add_scalar",
    "subtract_scalar",
    "divide_scalar",
    "scale",
    "dot",
    "allclose",
    # Vector
    "Vector",
    "create_vector",
    "vector",
    "from_components",
    "norm",
    "normalize",
    "cross",
    # Matrix
    "Matrix",
    "create_matrix",
    "identity",
    "matrix",
    "row",
    "column",
    "matmul",
    "transform",
    "transpose",
    "minor",
    "cofactor",
    "cofactor_matrix",
    "adjugate",
    "determinant",
    "inverse",
]
