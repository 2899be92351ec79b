from shared.errors import DivisionByZero, InvalidArgument, VectorError
from shared.types import Array2d, Array3d, IVector3, VectorLike
from shared.vector import EPSILON, REL_TOLERANCE, Vector3

__all__ = [
    "Vector3",
    "EPSILON",
    "REL_TOLERANCE",
    "VectorError",
    "InvalidArgument",
    "DivisionByZero",
    "IVector3",
    "VectorLike",
    "Array3d",
    "Array2d",
]
