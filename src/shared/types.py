# shared/types.py
from typing import TYPE_CHECKING, Mapping, Protocol, Sequence, Tuple, Union, runtime_checkable

if TYPE_CHECKING:
    from shared.vector import Vector3

Array3d = Tuple[float, float, float]
Array2d = Tuple[float, float]


@runtime_checkable
class IVector3(Protocol):
    """
    Anything with readable x, y and z components.
    """
    @property
    def x(self) -> float: ...

    @property
    def y(self) -> float: ...

    @property
    def z(self) -> float: ...


VectorLike = Union["Vector3", IVector3, Sequence[float], Mapping[str, float]]
