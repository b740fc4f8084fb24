"""Grid geometry, finite-difference derivatives and averaging for s-rep interpolation.

A grid is a list of lines, each a list of skeletal points (or ``None`` where a
point has not been filled in yet). Lines wrap around; steps do not.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .geometry import Point3d, SkeletalPoint, Spoke, SpokeOrientation, Vector3d

Grid = List[List[Optional[SkeletalPoint]]]

_SECOND_DERIVATIVE_DELTA = 1e-5


@dataclass(frozen=True, order=True)
class LineStep:
    """A location on a grid, ordered by line and then by step."""

    line: int = 0
    step: int = 0

    def __str__(self) -> str:
        return f"({self.line}, {self.step})"


Quad = Tuple[LineStep, LineStep, LineStep, LineStep]


@dataclass
class UVDerivative:
    """Derivatives of a skeleton along lines (u) and along steps (v)."""

    u: Vector3d = field(default_factory=Vector3d)
    v: Vector3d = field(default_factory=Vector3d)


@dataclass
class SkeletalPointDerivative:
    """Derivatives of the up and down skeletons at one grid location."""

    up: UVDerivative = field(default_factory=UVDerivative)
    down: UVDerivative = field(default_factory=UVDerivative)


def is_power_of_two(value: int) -> bool:
    """True when ``value`` is a power of two; values of 0 and 1 count as such."""
    if value <= 1:
        return True
    return value & (value - 1) == 0


def oriented_quads(grid: Sequence[Sequence[object]]) -> List[Quad]:
    """Every quad of neighbouring grid locations, consistently oriented.

    Each quad is (line, step), (next line, step), (line, step + 1),
    (next line, step + 1). Lines wrap around; steps do not.
    """
    quads: List[Quad] = []
    line_count = len(grid)
    for line, points in enumerate(grid):
        next_line = (line + 1) % line_count
        for step in range(len(points) - 1):
            quads.append(
                (
                    LineStep(line, step),
                    LineStep(next_line, step),
                    LineStep(line, step + 1),
                    LineStep(next_line, step + 1),
                )
            )
    return quads


def get_spoke(grid: Grid, loc: LineStep, orientation: SpokeOrientation) -> Spoke:
    """The spoke of the given orientation at ``loc``.

    Raises RuntimeError if there is no point or no such spoke there.
    """
    point = grid[loc.line][loc.step]
    spoke = point.spoke(orientation) if point is not None else None
    if spoke is None:
        raise RuntimeError(f"no {orientation.value} spoke found in grid at {loc}")
    return spoke


def linewise_distance(start: LineStep, end: LineStep, grid: Sequence[Sequence[object]]) -> int:
    """Shortest number of lines between two locations, wrapping around."""
    count = len(grid)
    forward = (end.line - start.line) % count
    return min(forward, count - forward)


def stepwise_distance(start: LineStep, end: LineStep, grid: Sequence[Sequence[object]]) -> int:
    """Number of steps between two locations."""
    count = len(grid[0])
    forward = (end.step - start.step) % count
    return min(forward, count - forward)


def quad_linewise_distance(quad: Quad, grid: Sequence[Sequence[object]]) -> int:
    """Side length of an oriented quad measured along lines.

    Raises ValueError when opposite sides disagree.
    """
    length = linewise_distance(quad[0], quad[1], grid)
    other = linewise_distance(quad[2], quad[3], grid)
    if length != other:
        raise ValueError(f"Breaking assumptions in interpolation lines: {length} != {other}")
    if length == 0:
        left = linewise_distance(quad[0], quad[2], grid)
        right = linewise_distance(quad[1], quad[3], grid)
        if left != right:
            raise ValueError(f"Breaking assumptions in interpolation lines: {left} != {right}")
        return left
    return length


def quad_stepwise_distance(quad: Quad, grid: Sequence[Sequence[object]]) -> int:
    """Side length of an oriented quad measured along steps.

    Raises ValueError when opposite sides disagree.
    """
    length = stepwise_distance(quad[0], quad[2], grid)
    other = stepwise_distance(quad[1], quad[3], grid)
    if length != other:
        raise ValueError(f"Breaking assumptions in interpolation steps: {length} != {other}")
    if length == 0:
        top = stepwise_distance(quad[0], quad[1], grid)
        bottom = stepwise_distance(quad[2], quad[3], grid)
        if top != bottom:
            raise ValueError(f"Breaking assumptions in interpolation lines: {top} != {bottom}")
        return top
    return length


def middle_line_step(a: LineStep, b: LineStep, grid: Sequence[Sequence[object]]) -> LineStep:
    """The location halfway between ``a`` and ``b``, which must not straddle the spine."""
    line_dist = linewise_distance(a, b, grid)
    step_dist = stepwise_distance(a, b, grid)
    count = len(grid)

    if (a.line + line_dist) % count == b.line:
        line = (a.line + line_dist // 2) % count
    else:
        line = (b.line + line_dist // 2) % count

    if a.step + step_dist == b.step:
        step = a.step + step_dist // 2
    else:
        step = b.step + step_dist // 2
    return LineStep(line, step)


def _derivative(
    grid: Grid,
    loc: LineStep,
    lesser: Optional[LineStep],
    greater: Optional[LineStep],
    orientation: SpokeOrientation,
) -> Vector3d:
    if lesser is None and greater is None:
        raise RuntimeError(f"SRep location has neither lesser nor greater neighbors: {loc}")

    def skeletal(at: LineStep) -> Point3d:
        return get_spoke(grid, at, orientation).skeletal_point

    if lesser is None:
        return Vector3d.from_points(skeletal(loc), skeletal(greater))
    if greater is None:
        return Vector3d.from_points(skeletal(lesser), skeletal(loc))
    # central difference spans twice the distance
    return Vector3d.from_points(skeletal(lesser), skeletal(greater)) / 2


def linewise_derivative(grid: Grid, loc: LineStep, orientation: SpokeOrientation) -> Vector3d:
    """Derivative of the skeleton across lines at ``loc``; lines wrap around."""
    count = len(grid)
    previous_line = (loc.line - 1) % count
    next_line = (loc.line + 1) % count
    return _derivative(
        grid, loc, LineStep(previous_line, loc.step), LineStep(next_line, loc.step), orientation
    )


def stepwise_derivative(grid: Grid, loc: LineStep, orientation: SpokeOrientation) -> Vector3d:
    """Derivative of the skeleton along steps at ``loc``; one-sided at the ends."""
    lesser = LineStep(loc.line, loc.step - 1) if loc.step > 0 else None
    last_step = len(grid[loc.line]) - 1
    greater = LineStep(loc.line, loc.step + 1) if loc.step != last_step else None
    return _derivative(grid, loc, lesser, greater, orientation)


def point_derivative(grid: Grid, loc: LineStep) -> SkeletalPointDerivative:
    """Up and down skeleton derivatives at ``loc``."""
    return SkeletalPointDerivative(
        up=UVDerivative(
            u=linewise_derivative(grid, loc, SpokeOrientation.UP),
            v=stepwise_derivative(grid, loc, SpokeOrientation.UP),
        ),
        down=UVDerivative(
            u=linewise_derivative(grid, loc, SpokeOrientation.DOWN),
            v=stepwise_derivative(grid, loc, SpokeOrientation.DOWN),
        ),
    )


def compute_derivatives(grid: Grid) -> List[List[SkeletalPointDerivative]]:
    """Derivatives at every location of the grid, in the grid's shape."""
    return [
        [point_derivative(grid, LineStep(line, step)) for step in range(len(points))]
        for line, points in enumerate(grid)
    ]


def slerp(v1: Vector3d, v2: Vector3d, u: float) -> Vector3d:
    """Spherical interpolation between unit vectors ``v1`` and ``v2`` at fraction ``u``."""
    cosine = max(-1.0, min(1.0, v1.dot(v2)))
    phi = math.acos(cosine)
    sine = math.sin(phi)
    if sine == 0:
        # limit of the spherical weights as the angle vanishes
        first, second = 1 - u, u
    else:
        first = math.sin((1 - u) * phi) / sine
        second = math.sin(u * phi) / sine
    return Vector3d(
        first * v1.x + second * v2.x,
        first * v1.y + second * v2.y,
        first * v1.z + second * v2.z,
    )


def second_derivative(
    start_vector: Vector3d, end_vector: Vector3d, target_vector: Vector3d, d: float
) -> Vector3d:
    """Finite-difference second derivative of the slerp curve at ``d``."""
    delta = _SECOND_DERIVATIVE_DELTA
    start_unit = start_vector.unit()
    end_unit = end_vector.unit()
    ahead = slerp(start_unit, end_unit, d + 2 * delta)
    behind = slerp(start_unit, end_unit, d - 2 * delta)
    target = target_vector.unit()
    return Vector3d(
        0.25 * (behind.x + ahead.x - 2.0 * target.x),
        0.25 * (behind.y + ahead.y - 2.0 * target.y),
        0.25 * (behind.z + ahead.z - 2.0 * target.z),
    )


def hermite_basis(s: float) -> Tuple[float, float, float, float]:
    """The four cubic Hermite basis functions evaluated at ``s``."""
    s2 = s * s
    s3 = s2 * s
    return (
        2 * s3 - 3 * s2 + 1,
        -2 * s3 + 3 * s2,
        s3 - 2 * s2 + s,
        s3 - s2,
    )


def average_vectors(v1: Vector3d, v2: Vector3d) -> Vector3d:
    return (v1 + v2) / 2


def average_points(p1: Point3d, p2: Point3d) -> Point3d:
    mean = average_vectors(Vector3d(*p1.as_tuple()), Vector3d(*p2.as_tuple()))
    return Point3d(*mean.as_tuple())


def average_uv(uv1: UVDerivative, uv2: UVDerivative) -> UVDerivative:
    return UVDerivative(u=average_vectors(uv1.u, uv2.u), v=average_vectors(uv1.v, uv2.v))


def average_spokes(s1: Spoke, s2: Spoke) -> Spoke:
    return Spoke(
        average_points(s1.skeletal_point, s2.skeletal_point),
        average_vectors(s1.direction, s2.direction),
    )


def average_skeletal_points(p1: SkeletalPoint, p2: SkeletalPoint) -> SkeletalPoint:
    """A new skeletal point whose spokes average those of ``p1`` and ``p2``.

    Raises ValueError when only one of the two is a crest point.
    """
    if p1.is_crest != p2.is_crest:
        raise ValueError(
            "How does one average two skeletal points when only one is a crest point?"
        )
    up = average_spokes(p1.up_spoke, p2.up_spoke)
    down = average_spokes(p1.down_spoke, p2.down_spoke)
    if p1.is_crest:
        return SkeletalPoint(up, down, average_spokes(p1.crest_spoke, p2.crest_spoke))
    return SkeletalPoint(up, down)