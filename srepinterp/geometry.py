"""Points, vectors, spokes and skeletal points that make up an elliptical s-rep."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from numbers import Real
from typing import Iterable, Iterator, Optional


@dataclass(order=True)
class Point3d:
    """A location in 3D space. Ordered lexicographically by x, y, z."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __iter__(self) -> Iterator[float]:
        return iter(self.as_tuple())

    def __getitem__(self, index: int) -> float:
        return self.as_tuple()[index]

    def __add__(self, other: object) -> Point3d:
        if isinstance(other, Vector3d):
            return Point3d(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other: object):
        if isinstance(other, Vector3d):
            return Point3d(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, Point3d):
            return Vector3d.from_points(other, self)
        return NotImplemented


@dataclass(order=True)
class Vector3d:
    """A direction with magnitude in 3D space. Ordered lexicographically by x, y, z."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_points(cls, tail: Point3d, head: Point3d) -> Vector3d:
        """The vector pointing from ``tail`` to ``head``."""
        return cls(head.x - tail.x, head.y - tail.y, head.z - tail.z)

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def unit(self) -> Vector3d:
        """The vector of length one in the same direction.

        Raises ValueError for the zero vector.
        """
        length = self.length()
        if length == 0:
            raise ValueError("cannot take the unit of a zero length vector")
        return self / length

    def resized(self, length: float) -> Vector3d:
        """A vector in the same direction with the given length."""
        return self.unit() * length

    def dot(self, other: Vector3d) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __iter__(self) -> Iterator[float]:
        return iter(self.as_tuple())

    def __getitem__(self, index: int) -> float:
        return self.as_tuple()[index]

    def __add__(self, other: object) -> Vector3d:
        if isinstance(other, Vector3d):
            return Vector3d(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other: object) -> Vector3d:
        if isinstance(other, Vector3d):
            return Vector3d(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __neg__(self) -> Vector3d:
        return Vector3d(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: object) -> Vector3d:
        if isinstance(scalar, Real):
            return Vector3d(self.x * scalar, self.y * scalar, self.z * scalar)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, scalar: object) -> Vector3d:
        if isinstance(scalar, Real):
            return Vector3d(self.x / scalar, self.y / scalar, self.z / scalar)
        return NotImplemented


class SpokeOrientation(Enum):
    """Which of a skeletal point's spokes is meant."""

    UP = "up"
    DOWN = "down"
    CREST = "crest"


@dataclass
class Spoke:
    """A vector from a point on the skeleton out to the boundary."""

    skeletal_point: Point3d = field(default_factory=Point3d)
    direction: Vector3d = field(default_factory=Vector3d)

    @classmethod
    def from_points(cls, skeletal_point: Point3d, boundary_point: Point3d) -> Spoke:
        """A spoke running from ``skeletal_point`` to ``boundary_point``."""
        return cls(replace(skeletal_point), Vector3d.from_points(skeletal_point, boundary_point))

    @property
    def boundary_point(self) -> Point3d:
        return self.skeletal_point + self.direction

    @property
    def radius(self) -> float:
        return self.direction.length()

    @radius.setter
    def radius(self, value: float) -> None:
        self.direction = self.direction.resized(value)

    def set_direction_only(self, direction: Vector3d) -> None:
        """Point the spoke along ``direction`` while keeping its radius."""
        self.direction = direction.unit() * self.radius

    def clone(self) -> Spoke:
        return Spoke(replace(self.skeletal_point), replace(self.direction))


class SkeletalPoint:
    """The up, down and optional crest spokes sharing one place on the skeleton."""

    __slots__ = ("_up", "_down", "_crest")

    def __init__(
        self,
        up_spoke: Optional[Spoke] = None,
        down_spoke: Optional[Spoke] = None,
        crest_spoke: Optional[Spoke] = None,
    ) -> None:
        self._up = up_spoke if up_spoke is not None else Spoke()
        self._down = down_spoke if down_spoke is not None else Spoke()
        self._crest = crest_spoke

    @property
    def up_spoke(self) -> Spoke:
        return self._up

    @up_spoke.setter
    def up_spoke(self, spoke: Spoke) -> None:
        if spoke is None:
            raise ValueError("up spoke cannot be None")
        self._up = spoke

    @property
    def down_spoke(self) -> Spoke:
        return self._down

    @down_spoke.setter
    def down_spoke(self, spoke: Spoke) -> None:
        if spoke is None:
            raise ValueError("down spoke cannot be None")
        self._down = spoke

    @property
    def crest_spoke(self) -> Optional[Spoke]:
        return self._crest

    @crest_spoke.setter
    def crest_spoke(self, spoke: Optional[Spoke]) -> None:
        self._crest = spoke

    @property
    def is_crest(self) -> bool:
        return self._crest is not None

    def spoke(self, orientation: SpokeOrientation) -> Optional[Spoke]:
        if orientation is SpokeOrientation.UP:
            return self._up
        if orientation is SpokeOrientation.DOWN:
            return self._down
        if orientation is SpokeOrientation.CREST:
            return self._crest
        raise ValueError(f"unknown spoke orientation: {orientation!r}")

    def set_spoke(self, orientation: SpokeOrientation, spoke: Optional[Spoke]) -> None:
        if orientation is SpokeOrientation.UP:
            self.up_spoke = spoke
        elif orientation is SpokeOrientation.DOWN:
            self.down_spoke = spoke
        elif orientation is SpokeOrientation.CREST:
            self.crest_spoke = spoke
        else:
            raise ValueError(f"unknown spoke orientation: {orientation!r}")

    def clone(self) -> SkeletalPoint:
        """A deep copy: the clone shares no spokes with this point."""
        return SkeletalPoint(
            self._up.clone(),
            self._down.clone(),
            self._crest.clone() if self._crest is not None else None,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SkeletalPoint):
            return NotImplemented
        return (self._up, self._down, self._crest) == (other._up, other._down, other._crest)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SkeletalPoint(up_spoke={self._up!r}, down_spoke={self._down!r}, crest_spoke={self._crest!r})"


class EllipticalSRep:
    """A grid of skeletal points indexed by line (wrapping) and step (outward)."""

    def __init__(self, points: Optional[Iterable[Iterable[SkeletalPoint]]] = None) -> None:
        grid: list[list[SkeletalPoint]] = []
        if points is not None:
            grid = [list(line) for line in points]
            if any(len(line) != len(grid[0]) for line in grid):
                raise ValueError("every line must have the same number of steps")
            for line in grid:
                for point in line:
                    if not isinstance(point, SkeletalPoint):
                        raise TypeError("grid entries must be SkeletalPoint instances")
        self._grid = grid

    @property
    def number_of_lines(self) -> int:
        return len(self._grid)

    @property
    def number_of_steps(self) -> int:
        return len(self._grid[0]) if self._grid else 0

    @property
    def is_empty(self) -> bool:
        return self.number_of_lines == 0 or self.number_of_steps == 0

    def resize(self, number_of_lines: int, number_of_steps: int) -> None:
        """Replace the grid with one of the given shape filled with default points."""
        if number_of_lines < 0 or number_of_steps < 0:
            raise ValueError("grid dimensions cannot be negative")
        self._grid = [
            [SkeletalPoint() for _ in range(number_of_steps)] for _ in range(number_of_lines)
        ]

    def _check_index(self, line: int, step: int) -> None:
        if not (0 <= line < self.number_of_lines and 0 <= step < self.number_of_steps):
            raise IndexError(
                f"({line}, {step}) is outside a {self.number_of_lines}x{self.number_of_steps} grid"
            )

    def skeletal_point(self, line: int, step: int) -> SkeletalPoint:
        self._check_index(line, step)
        return self._grid[line][step]

    def set_skeletal_point(self, line: int, step: int, point: SkeletalPoint) -> None:
        if point is None:
            raise ValueError("skeletal point cannot be None")
        self._check_index(line, step)
        self._grid[line][step] = point

    def clone(self) -> EllipticalSRep:
        return EllipticalSRep([point.clone() for point in line] for line in self._grid)

    def __iter__(self) -> Iterator[tuple[SkeletalPoint, ...]]:
        return (tuple(line) for line in self._grid)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EllipticalSRep):
            return NotImplemented
        return self._grid == other._grid

    __hash__ = None  # type: ignore[assignment]