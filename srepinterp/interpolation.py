"""Densify an elliptical s-rep by recursively interpolating skeletal points."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .geometry import EllipticalSRep, Point3d, SkeletalPoint, Spoke, SpokeOrientation, Vector3d
from .grid import (
    Grid,
    LineStep,
    Quad,
    SkeletalPointDerivative,
    UVDerivative,
    average_skeletal_points,
    average_uv,
    average_vectors,
    compute_derivatives,
    get_spoke,
    hermite_basis,
    is_power_of_two,
    linewise_distance,
    middle_line_step,
    oriented_quads,
    quad_linewise_distance,
    quad_stepwise_distance,
    second_derivative,
    slerp,
    stepwise_distance,
)


class SRepInterpolator:
    """Interpolates an s-rep so its grid becomes ``2 ** interpolation_level`` times denser.

    The input s-rep is copied on construction and never modified.
    """

    def __init__(self, interpolation_level: int, srep: EllipticalSRep) -> None:
        if interpolation_level < 1:
            raise ValueError("Invalid interpolation level")
        if srep.is_empty:
            raise ValueError("Can't interpolate empty srep")
        self.interpolation_level = interpolation_level
        self.density = 2**interpolation_level
        self._original: Grid = [[point.clone() for point in line] for line in srep]
        self._derivatives: List[List[SkeletalPointDerivative]] = compute_derivatives(self._original)
        self._grid: Grid = []

    def interpolate(self) -> EllipticalSRep:
        """Build and return the interpolated s-rep."""
        line_count = len(self._original) * self.density
        step_count = (len(self._original[0]) - 1) * self.density + 1
        self._grid = [[None] * step_count for _ in range(line_count)]

        quads = oriented_quads(self._original)
        for quad in quads:
            for ols in quad:
                ils = self._to_interpolated(ols)
                self._grid[ils.line][ils.step] = self._original[ols.line][ols.step].clone()

        for quad in quads:
            self._interpolate_quad(self._to_interpolated_quad(quad), quad, 1.0)

        grid, self._grid = self._grid, []
        return EllipticalSRep(grid)

    # ------------------------------------------------------------------
    # grid access

    def _to_interpolated(self, ols: LineStep) -> LineStep:
        return LineStep(ols.line * self.density, ols.step * self.density)

    def _to_interpolated_quad(self, quad: Quad) -> Quad:
        return tuple(self._to_interpolated(ls) for ls in quad)  # type: ignore[return-value]

    def _point_at(self, loc: LineStep) -> SkeletalPoint:
        point = self._grid[loc.line][loc.step]
        if point is None:
            raise RuntimeError(f"Nothing found for interpolated grid at {loc}")
        return point

    def _uv_derivative(self, ols: LineStep, orientation: SpokeOrientation) -> UVDerivative:
        derivative = self._derivatives[ols.line][ols.step]
        if orientation is SpokeOrientation.UP:
            return derivative.up
        if orientation is SpokeOrientation.DOWN:
            return derivative.down
        if orientation is SpokeOrientation.CREST:
            return average_uv(derivative.up, derivative.down)
        raise ValueError("Unknown spoke type")

    # ------------------------------------------------------------------
    # recursive subdivision

    def _interpolate_quad(self, iquad: Quad, original_quad: Quad, lam: float) -> None:
        # corners: 0 - 1 on top, 2 - 3 on the bottom
        line_length = quad_linewise_distance(iquad, self._grid)
        step_length = quad_stepwise_distance(iquad, self._grid)
        if line_length != step_length:
            corners = "".join(str(ls) for ls in iquad)
            raise ValueError(
                "Breaking assumptions in interpolation. Should be square. Found "
                f"{line_length}x{step_length} for quad {corners}"
            )
        length = line_length
        if length <= 1:
            return
        if not is_power_of_two(length):
            raise ValueError(
                f"Breaking assumptions that interpolated density is power of two. Found {length}"
            )

        tl, tr, bl, br = iquad
        tm = self._interpolate_middle(tl, tr, original_quad, lam)
        lm = self._interpolate_middle(tl, bl, original_quad, lam)
        rm = self._interpolate_middle(tr, br, original_quad, lam)
        bm = self._interpolate_middle(bl, br, original_quad, lam)

        # the centre is interpolated in both directions and averaged
        mm_left_right = self._interpolate_middle(lm, rm, original_quad, lam)
        left_right_point = self._point_at(mm_left_right).clone()
        mm_up_down = self._interpolate_middle(tm, bm, original_quad, lam)
        up_down_point = self._point_at(mm_up_down)

        if mm_up_down.line != mm_left_right.line:
            raise RuntimeError("bug in getting middle spot linewise")
        if mm_up_down.step != mm_left_right.step:
            raise RuntimeError("bug in getting middle spot stepwise")

        mm = mm_left_right
        self._grid[mm.line][mm.step] = average_skeletal_points(left_right_point, up_down_point)

        if length == 2:
            return

        half = lam / 2
        self._interpolate_quad((tl, tm, lm, mm), original_quad, half)
        self._interpolate_quad((tm, tr, mm, rm), original_quad, half)
        self._interpolate_quad((lm, mm, bl, bm), original_quad, half)
        self._interpolate_quad((mm, rm, bm, br), original_quad, half)

    def _interpolate_middle(
        self, start: LineStep, end: LineStep, original_quad: Quad, lam: float
    ) -> LineStep:
        """Fill in the skeletal point halfway between two locations and return where it went."""
        up = self._middle_spoke(start, end, original_quad, lam, SpokeOrientation.UP)
        down = self._middle_spoke(start, end, original_quad, lam, SpokeOrientation.DOWN)
        middle = middle_line_step(start, end, self._grid)
        crest: Optional[Spoke] = None
        if self._point_at(start).is_crest and self._point_at(end).is_crest:
            crest = self._middle_spoke(start, end, original_quad, lam, SpokeOrientation.CREST)
        self._grid[middle.line][middle.step] = SkeletalPoint(up, down, crest)
        return middle

    def _middle_spoke(
        self,
        start: LineStep,
        end: LineStep,
        original_quad: Quad,
        lam: float,
        orientation: SpokeOrientation,
    ) -> Spoke:
        direction = _middle_spoke_direction(
            get_spoke(self._grid, start, orientation),
            get_spoke(self._grid, end, orientation),
            lam,
        )
        point = self._middle_skeleton_point(start, end, original_quad, orientation)
        return Spoke(point, direction)

    # ------------------------------------------------------------------
    # skeleton positions

    def _middle_skeleton_point(
        self,
        start: LineStep,
        end: LineStep,
        original_quad: Quad,
        orientation: SpokeOrientation,
    ) -> Point3d:
        middle = middle_line_step(start, end, self._grid)
        if orientation in (SpokeOrientation.UP, SpokeOrientation.DOWN):
            return self._skeleton_point(middle, original_quad, orientation)
        if orientation is SpokeOrientation.CREST:
            # the crest runs along a curve: use a degenerate quad spanning its two points
            crest_locs = [
                loc for loc in original_quad if self._original[loc.line][loc.step].is_crest
            ]
            if len(crest_locs) != 2:
                raise RuntimeError(
                    "Cannot interpolate crest when the original enclosing quad "
                    "does not contain two crest points"
                )
            first, second = crest_locs
            return self._skeleton_point(middle, (first, second, first, second), orientation)
        raise ValueError("Unknown spoke type")

    def _skeleton_point(
        self, loc: LineStep, original_quad: Quad, orientation: SpokeOrientation
    ) -> Point3d:
        """Bicubic Hermite estimate of the skeleton position at ``loc``."""
        iquad = self._to_interpolated_quad(original_quad)
        x11, x21, x12, x22 = (
            get_spoke(self._grid, corner, orientation).skeletal_point for corner in iquad
        )
        d11, d21, d12, d22 = (self._uv_derivative(corner, orientation) for corner in original_quad)

        quad_lines = quad_linewise_distance(iquad, self._grid)
        quad_steps = quad_stepwise_distance(iquad, self._grid)
        to_loc_lines = linewise_distance(iquad[0], loc, self._grid)
        to_loc_steps = stepwise_distance(iquad[0], loc, self._grid)
        u = to_loc_lines / quad_lines if quad_lines > 0 else 0.0
        v = to_loc_steps / quad_steps if quad_steps > 0 else 0.0

        hu = hermite_basis(u)
        hv = hermite_basis(v)

        def coordinate(axis: int) -> float:
            matrix: Sequence[Sequence[float]] = (
                (x11[axis], x12[axis], d11.v[axis], d12.v[axis]),
                (x21[axis], x22[axis], d21.v[axis], d22.v[axis]),
                (d11.u[axis], d12.u[axis], 0.0, 0.0),
                (d21.u[axis], d22.u[axis], 0.0, 0.0),
            )
            row = [sum(weight * values[col] for weight, values in zip(hu, matrix)) for col in range(4)]
            return sum(value * weight for value, weight in zip(row, hv))

        return Point3d(coordinate(0), coordinate(1), coordinate(2))


def _middle_spoke_direction(start: Spoke, end: Spoke, lam: float) -> Vector3d:
    start_unit = start.direction.unit()
    end_unit = end.direction.unit()
    start_second = second_derivative(start_unit, end_unit, start_unit, 0)
    end_second = second_derivative(start_unit, end_unit, end_unit, lam)
    average_direction = average_vectors(start.direction, end.direction)
    half = lam / 2
    if start.skeletal_point == end.skeletal_point and start.direction == end.direction:
        return Vector3d(*start.direction.as_tuple())
    middle_unit = slerp(start_unit, end_unit, half)
    radius = middle_unit.dot(average_direction) - (
        half * half * 0.25 * (start_unit.dot(start_second) + end_unit.dot(end_second))
    )
    return middle_unit * radius


def interpolate_srep(interpolation_level: int, srep: EllipticalSRep) -> EllipticalSRep:
    """Return a copy of ``srep`` made ``2 ** interpolation_level`` times denser."""
    return SRepInterpolator(interpolation_level, srep).interpolate()