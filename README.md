# srepinterp

Interpolation of elliptical skeletal representations (s-reps).

An elliptical s-rep is a grid of skeletal points. The grid is arranged in
*lines*, which wrap around, and *steps*, which run outward from the spine and
do not wrap. Every skeletal point has an up spoke and a down spoke. A point can
also have a crest spoke. Each spoke runs from a skeletal point out to a
boundary point.

`srepinterp` makes such a grid denser. At interpolation level `n`, the spacing
between neighbouring points becomes 2ⁿ times finer in both directions. An
input with `L` lines and `S` steps gives an output with `L * 2ⁿ` lines and
`(S - 1) * 2ⁿ + 1` steps. The original points keep their places.

The new points are filled in as follows:

- Skeletal positions come from bicubic Hermite patches built from
  finite-difference grid derivatives.
- Spoke directions come from spherical linear interpolation.
- Spoke radii are corrected with a second-derivative estimate.

## Installation

```
pip install srepinterp
```

The package depends only on the standard library. The `test` extra installs
pytest:

```
pip install "srepinterp[test]"
```

## Usage

```python
import math

from srepinterp.geometry import EllipticalSRep, Point3d, SkeletalPoint, Spoke, Vector3d
from srepinterp.interpolation import interpolate_srep

rows = []
for line in range(4):
    angle = 2 * math.pi * line / 4
    row = []
    for step in range(2):
        radius = step + 1
        position = Point3d(radius * math.cos(angle), radius * math.sin(angle), 0.0)
        row.append(
            SkeletalPoint(
                Spoke(position, Vector3d(0.0, 0.0, 1.0)),
                Spoke(position, Vector3d(0.0, 0.0, -1.0)),
            )
        )
    rows.append(row)

srep = EllipticalSRep(rows)
dense = interpolate_srep(2, srep)
print(dense.number_of_lines, dense.number_of_steps)  # 16 5
```

`interpolate_srep(level, srep)` does not change its input. It returns a new
`EllipticalSRep`. You can also construct `SRepInterpolator(level, srep)`
yourself and call `interpolate()`. The interpolator copies the s-rep when it
is created.

### `srepinterp.geometry`

- `Point3d` and `Vector3d` are small dataclasses with `x`, `y` and `z`
  fields. Both can be iterated and indexed, and both have `as_tuple()`. They
  compare lexicographically by x, then y, then z.
  - `Vector3d` supports `+`, `-` and unary `-` with other vectors, and `*` and
    `/` with numbers.
  - `Vector3d` has `length()`, `unit()`, `resized(length)` and `dot(other)`.
  - `Vector3d.from_points(tail, head)` gives the vector from `tail` to `head`.
  - `Point3d + Vector3d` and `Point3d - Vector3d` give points.
    `Point3d - Point3d` gives a vector.
- `Spoke` has a `skeletal_point` and a `direction`.
  - The computed `boundary_point` is the skeletal point plus the direction.
  - `radius` is the length of the direction. Setting `radius` resizes the
    direction.
  - `set_direction_only(direction)` changes the direction and keeps the
    radius.
  - `Spoke.from_points(skeletal_point, boundary_point)` builds a spoke from
    its two end points.
  - `clone()` makes a deep copy.
- `SpokeOrientation` is an enum with the members `UP`, `DOWN` and `CREST`.
- `SkeletalPoint(up_spoke, down_spoke, crest_spoke)` creates default spokes
  for up and down when they are not given. The crest spoke is optional.
  - It has the properties `up_spoke`, `down_spoke`, `crest_spoke` and
    `is_crest`.
  - It also has `spoke(orientation)`, `set_spoke(orientation, spoke)` and
    `clone()`. `clone()` makes a deep copy.
- `EllipticalSRep(points)` takes rows of skeletal points, one row per line.
  - It has the properties `number_of_lines`, `number_of_steps` and `is_empty`.
  - `resize(lines, steps)` replaces the grid with default points.
  - It also has `skeletal_point(line, step)`,
    `set_skeletal_point(line, step, point)` and `clone()`.
  - Iterating an s-rep yields each line as a tuple.

### `srepinterp.grid`

This module holds the helpers that the interpolator is built on:

- `LineStep` grid locations
- `oriented_quads`
- wrap-aware distances: `linewise_distance`, `stepwise_distance`,
  `quad_linewise_distance`, `quad_stepwise_distance` and `middle_line_step`
- derivatives: `linewise_derivative`, `stepwise_derivative`,
  `point_derivative` and `compute_derivatives`, with results in
  `UVDerivative` and `SkeletalPointDerivative`
- `slerp`, `second_derivative` and `hermite_basis`
- averaging: `average_vectors`, `average_points`, `average_uv`,
  `average_spokes` and `average_skeletal_points`

## Errors

`ValueError` is raised in these cases:

- an interpolation level below 1
- an empty s-rep
- a grid that breaks the interpolation's assumptions, such as a quad that is
  not square or a side that is not a power of two
- averaging a crest point with a non-crest point
- taking `unit()` of a zero vector
- setting an up or down spoke to `None`

`RuntimeError` is raised in these cases:

- a missing spoke in the grid
- a crest that cannot be interpolated

`EllipticalSRep` raises these:

- `IndexError` for a location outside the grid
- `TypeError` when it is given grid entries that are not skeletal points

## What it does not do

`srepinterp` works only on s-reps held in memory. It does not read or write
s-rep files. It does not export spokes as meshes or other visual data. It has
no command-line interface.