import math

import pytest

from srepinterp.geometry import (
    EllipticalSRep,
    Point3d,
    SkeletalPoint,
    Spoke,
    SpokeOrientation,
    Vector3d,
)

TOL = 1e-5


def assert_vec_near(a, b):
    assert a.x == pytest.approx(b.x, abs=TOL)
    assert a.y == pytest.approx(b.y, abs=TOL)
    assert a.z == pytest.approx(b.z, abs=TOL)


# ---------------------------------------------------------------- Point3d

def test_point_default():
    p1, p2 = Point3d(), Point3d()
    assert p1.as_tuple() == (0.0, 0.0, 0.0)
    assert p1 == p2


def test_point_three_values():
    p1 = Point3d(-1.234, 3.21, 9.99)
    p2 = Point3d(-1.234, 3.21, 9.99)
    assert p1.x == pytest.approx(-1.234, abs=TOL)
    assert p1.y == pytest.approx(3.21, abs=TOL)
    assert p1.z == pytest.approx(9.99, abs=TOL)
    assert p1 == p2


def test_point_from_sequence():
    values = (12.234, -31.21, -9.99)
    p1 = Point3d(*values)
    assert p1.as_tuple() == values
    assert p1 == Point3d(*values)
    assert tuple(p1) == values
    assert p1[2] == -9.99


def test_point_sets():
    p = Point3d()
    p.x = 5.55
    assert p.as_tuple() == pytest.approx((5.55, 0.0, 0.0))
    p.z = 2.22
    assert p.as_tuple() == pytest.approx((5.55, 0.0, 2.22))
    p.y = -0.0001
    assert p.as_tuple() == pytest.approx((5.55, -0.0001, 2.22))


def test_point_copies_are_independent():
    p1 = Point3d(1, 2, 3)
    p2 = Point3d(*p1.as_tuple())
    p3 = Point3d(*p1.as_tuple())
    assert p1 == p2 == p3
    p3.x = 0
    assert p1 == p2
    assert not (p1 == p3)
    p2.y = 0
    assert not (p1 == p2)
    assert not (p2 == p3)


@pytest.mark.parametrize("cls", [Point3d, Vector3d])
def test_relational_operators(cls):
    p1 = cls(1, 2, 3)
    p1b = cls(1, 2, 3)
    p2 = cls(2, 2, 3)
    p3 = cls(1, 3, 3)
    p4 = cls(1, 2, 4)

    assert p1 == p1b
    assert not (p1 == p2) and not (p1 == p3) and not (p1 == p4)
    assert not (p1 != p1b)
    assert (p1 != p2) and (p1 != p3) and (p1 != p4)

    assert not (p1 < p1b)
    assert p1 < p2 and p1 < p3 and p1 < p4
    assert not (p2 < p1) and not (p3 < p1) and not (p4 < p1)

    assert not (p1 > p1b)
    assert not (p1 > p2) and not (p1 > p3) and not (p1 > p4)
    assert p2 > p1 and p3 > p1 and p4 > p1

    assert p1 <= p1b
    assert p1 <= p2 and p1 <= p3 and p1 <= p4
    assert not (p2 <= p1) and not (p3 <= p1) and not (p4 <= p1)

    assert p1 >= p1b
    assert not (p1 >= p2) and not (p1 >= p3) and not (p1 >= p4)
    assert p2 >= p1 and p3 >= p1 and p4 >= p1


# ---------------------------------------------------------------- Vector3d

def test_vector_default_and_values():
    assert Vector3d().as_tuple() == (0.0, 0.0, 0.0)
    v = Vector3d(12.234, -31.21, -9.99)
    assert v == Vector3d(12.234, -31.21, -9.99)
    assert v[1] == -31.21


def test_vector_from_points():
    v = Vector3d.from_points(Point3d(1, 2, 3), Point3d(1, 2, 4))
    assert_vec_near(Vector3d(0, 0, 1), v)


@pytest.mark.parametrize(
    "components, expected",
    [
        ((5, 5, 15), 16.583123951777),
        ((-5, -5, 15), 16.583123951777),
        ((0, 0, 0), 0.0),
        ((1, 2, 3), 3.7416573867739413),
        ((5 / 16.583123951777, 5 / 16.583123951777, 15 / 16.583123951777), 1.0),
    ],
)
def test_vector_length(components, expected):
    assert Vector3d(*components).length() == pytest.approx(expected, abs=TOL)


def test_vector_resize_zero_raises():
    with pytest.raises(ValueError):
        Vector3d(0, 0, 0).resized(1)


@pytest.mark.parametrize(
    "components, new_length, expected",
    [
        ((1, -1, 1), 3, (1.73205080757, -1.73205080757, 1.73205080757)),
        ((1, 2, 3), 0, (0, 0, 0)),
        ((3, 4, 0), 10, (6, 8, 0)),
    ],
)
def test_vector_resized(components, new_length, expected):
    v = Vector3d(*components)
    assert_vec_near(Vector3d(*expected), v.resized(new_length))
    assert v == Vector3d(*components)


def test_vector_unit():
    length = 16.583123951777
    assert_vec_near(Vector3d(5 / length, 5 / length, 15 / length), Vector3d(5, 5, 15).unit())
    already = Vector3d(5 / length, 5 / length, 15 / length)
    assert_vec_near(already, already.unit())
    length = 948.6854062332782
    assert_vec_near(Vector3d(900 / length, -2 / length, 300 / length), Vector3d(900, -2, 300).unit())
    with pytest.raises(ValueError):
        Vector3d(0, 0, 0).unit()


@pytest.mark.parametrize(
    "a, b, expected",
    [((1, 2, 3), (4, 5, 6), (5, 7, 9)), ((-1, 2, 3), (4, -5, 6), (3, -3, 9)), ((1, 2, 3), (0, 0, 0), (1, 2, 3))],
)
def test_vector_add(a, b, expected):
    assert_vec_near(Vector3d(*expected), Vector3d(*a) + Vector3d(*b))


@pytest.mark.parametrize(
    "a, b, expected",
    [((1, 2, 3), (4, 5, 6), (-3, -3, -3)), ((-1, 2, 3), (4, -5, 6), (-5, 7, -3)), ((1, 2, 3), (0, 0, 0), (1, 2, 3))],
)
def test_vector_subtract(a, b, expected):
    assert_vec_near(Vector3d(*expected), Vector3d(*a) - Vector3d(*b))


@pytest.mark.parametrize(
    "a, k, expected",
    [
        ((1, 2, 3), 7, (7, 14, 21)),
        ((-1, 2, 3), -7, (7, -14, -21)),
        ((1, 2, 3), 0, (0, 0, 0)),
        ((1, 2, 3), 0.5, (0.5, 1.0, 1.5)),
        ((1, 2, 3), 1, (1, 2, 3)),
    ],
)
def test_vector_multiply(a, k, expected):
    assert_vec_near(Vector3d(*expected), Vector3d(*a) * k)
    assert_vec_near(Vector3d(*expected), k * Vector3d(*a))


@pytest.mark.parametrize(
    "a, k, expected",
    [
        ((1, 2, 3), 2, (0.5, 1.0, 1.5)),
        ((-1, 2, 3), -5, (0.2, -0.4, -0.6)),
        ((1, 2, 3), 0.5, (2, 4, 6)),
        ((1, 2, 3), 1, (1, 2, 3)),
    ],
)
def test_vector_divide(a, k, expected):
    assert_vec_near(Vector3d(*expected), Vector3d(*a) / k)


@pytest.mark.parametrize(
    "p, v, expected",
    [((1, 2, 3), (4, 5, 6), (5, 7, 9)), ((-1, 2, 3), (4, -5, 6), (3, -3, 9)), ((1, 2, 3), (0, 0, 0), (1, 2, 3))],
)
def test_point_plus_vector(p, v, expected):
    result = Point3d(*p) + Vector3d(*v)
    assert isinstance(result, Point3d)
    assert_vec_near(Point3d(*expected), result)


@pytest.mark.parametrize(
    "p, v, expected",
    [((1, 2, 3), (4, 5, 6), (-3, -3, -3)), ((-1, 2, 3), (4, -5, 6), (-5, 7, -3)), ((1, 2, 3), (0, 0, 0), (1, 2, 3))],
)
def test_point_minus_vector(p, v, expected):
    result = Point3d(*p) - Vector3d(*v)
    assert isinstance(result, Point3d)
    assert_vec_near(Point3d(*expected), result)


def test_point_minus_point_is_vector():
    assert Point3d(4, 5, 6) - Point3d(1, 2, 3) == Vector3d(3, 3, 3)


def test_vector_dot():
    assert Vector3d(1, 2, 3).dot(Vector3d(4, -5, 6)) == 12


# ---------------------------------------------------------------- Spoke

def test_spoke_default():
    spoke = Spoke()
    assert spoke.skeletal_point == Point3d(0, 0, 0)
    assert spoke.boundary_point == Point3d(0, 0, 0)
    assert spoke.direction == Vector3d(0, 0, 0)
    assert spoke.radius == 0


def test_spoke_point_and_direction():
    skeletal_point = Point3d(1, 4, 77)
    direction = Vector3d(-2, 55, -0.1)
    spoke = Spoke(skeletal_point, direction)
    assert spoke.skeletal_point == skeletal_point
    assert spoke.boundary_point == skeletal_point + direction
    assert spoke.direction == direction
    assert spoke.radius == direction.length()


def test_spoke_from_points():
    spoke = Spoke.from_points(Point3d(0, 0, 0), Point3d(2, 3, 60))
    assert spoke.skeletal_point == Point3d(0, 0, 0)
    assert spoke.boundary_point == Point3d(2, 3, 60)
    assert spoke.direction == Vector3d(2, 3, 60)
    assert spoke.radius == Vector3d(2, 3, 60).length()


def test_spoke_clone_is_independent():
    spoke = Spoke(Point3d(1, 4, 77), Vector3d(-2, 55, -0.1))
    clone = spoke.clone()
    second = spoke.clone()
    assert clone == spoke
    assert clone is not spoke

    clone.radius = 1234
    assert clone.radius == pytest.approx(1234)
    assert spoke.radius != pytest.approx(1234)

    spoke.set_direction_only(Vector3d(1, 1, 1))
    assert spoke.direction != second.direction
    assert second.direction == Vector3d(-2, 55, -0.1)


def test_spoke_set_get():
    spoke = Spoke()
    spoke.skeletal_point = Point3d(1, 2, 3)
    assert spoke.skeletal_point == Point3d(1, 2, 3)

    spoke.direction = Vector3d(-1, -2, -3)
    assert spoke.direction == Vector3d(-1, -2, -3)
    assert spoke.boundary_point == Point3d(0, 0, 0)

    spoke.set_direction_only(Vector3d(7, 8, 9))
    expected = Vector3d(7, 8, 9).unit() * Vector3d(-1, -2, -3).length()
    assert spoke.direction == expected
    assert spoke.boundary_point == Point3d(1, 2, 3) + expected


def test_spoke_radius_setter_keeps_direction():
    spoke = Spoke(Point3d(0, 0, 0), Vector3d(3, 4, 0))
    spoke.radius = 10
    assert_vec_near(Vector3d(6, 8, 0), spoke.direction)
    assert_vec_near(Point3d(6, 8, 0), spoke.boundary_point)


def test_spoke_direction_only_zero_raises():
    with pytest.raises(ValueError):
        Spoke(Point3d(), Vector3d(1, 0, 0)).set_direction_only(Vector3d(0, 0, 0))


# ---------------------------------------------------------------- SkeletalPoint

def _spokes():
    up = Spoke.from_points(Point3d(0, 0, 0), Point3d(1, 1, 1))
    down = Spoke.from_points(Point3d(0, 0, 0), Point3d(-1, -1, -1))
    crest = Spoke.from_points(Point3d(0, 1, 0), Point3d(0, 5, 0))
    return up, down, crest


def test_skeletal_point_default():
    pt = SkeletalPoint()
    assert pt.up_spoke == Spoke()
    assert pt.down_spoke == Spoke()
    assert pt.crest_spoke is None
    assert pt.is_crest is False


def test_skeletal_point_shares_spokes():
    up, down, crest = _spokes()
    pt = SkeletalPoint(up, down)
    assert pt.up_spoke is up
    assert pt.down_spoke is down
    assert pt.crest_spoke is None
    assert pt.is_crest is False

    crest_pt = SkeletalPoint(up, down, crest)
    assert crest_pt.crest_spoke is crest
    assert crest_pt.is_crest is True


def test_skeletal_point_set_get():
    up, down, crest = _spokes()
    pt = SkeletalPoint()

    pt.up_spoke = up
    assert pt.up_spoke is up
    assert pt.spoke(SpokeOrientation.UP) is up

    pt.down_spoke = down
    assert pt.spoke(SpokeOrientation.DOWN) is down

    assert pt.is_crest is False
    pt.crest_spoke = crest
    assert pt.spoke(SpokeOrientation.CREST) is crest
    assert pt.is_crest is True

    with pytest.raises(ValueError):
        pt.up_spoke = None
    assert pt.up_spoke is up
    with pytest.raises(ValueError):
        pt.down_spoke = None
    assert pt.down_spoke is down
    pt.crest_spoke = None
    assert pt.spoke(SpokeOrientation.CREST) is None
    assert pt.is_crest is False


def test_skeletal_point_set_by_orientation():
    up, down, crest = _spokes()
    pt = SkeletalPoint()

    pt.set_spoke(SpokeOrientation.UP, up)
    assert pt.up_spoke is up
    pt.set_spoke(SpokeOrientation.DOWN, down)
    assert pt.down_spoke is down
    pt.set_spoke(SpokeOrientation.CREST, crest)
    assert pt.crest_spoke is crest
    assert pt.is_crest is True

    with pytest.raises(ValueError):
        pt.set_spoke(SpokeOrientation.UP, None)
    assert pt.spoke(SpokeOrientation.UP) is up
    with pytest.raises(ValueError):
        pt.set_spoke(SpokeOrientation.DOWN, None)
    assert pt.spoke(SpokeOrientation.DOWN) is down
    pt.set_spoke(SpokeOrientation.CREST, None)
    assert pt.crest_spoke is None
    assert pt.is_crest is False


def test_skeletal_point_clone_is_deep():
    up, down, crest = _spokes()
    pt = SkeletalPoint(up, down, crest)
    clone = pt.clone()

    assert clone == pt
    assert clone is not pt
    for orientation in SpokeOrientation:
        assert clone.spoke(orientation) == pt.spoke(orientation)
        assert clone.spoke(orientation) is not pt.spoke(orientation)


def test_skeletal_point_clone_changes_do_not_propagate():
    up, down, crest = _spokes()
    pt = SkeletalPoint(up, down, crest)
    clone = pt.clone()
    other = pt.clone()

    clone.crest_spoke = None
    assert pt.crest_spoke is not None
    assert other.crest_spoke is not None

    other.up_spoke.radius = 1
    pt.up_spoke.radius = 2
    assert other.up_spoke.radius == pytest.approx(1)
    assert pt.up_spoke.radius == pytest.approx(2)


# ---------------------------------------------------------------- EllipticalSRep

def test_srep_default_is_empty():
    srep = EllipticalSRep()
    assert srep.is_empty is True
    assert srep.number_of_lines == 0
    assert srep.number_of_steps == 0


def test_srep_resize_and_access():
    srep = EllipticalSRep()
    srep.resize(4, 3)
    assert (srep.number_of_lines, srep.number_of_steps) == (4, 3)
    assert srep.is_empty is False
    assert srep.skeletal_point(3, 2) == SkeletalPoint()
    assert srep.skeletal_point(0, 0) is not srep.skeletal_point(0, 1)

    up, down, crest = _spokes()
    point = SkeletalPoint(up, down, crest)
    srep.set_skeletal_point(1, 2, point)
    assert srep.skeletal_point(1, 2) is point


def test_srep_index_errors():
    srep = EllipticalSRep()
    srep.resize(2, 2)
    with pytest.raises(IndexError):
        srep.skeletal_point(2, 0)
    with pytest.raises(IndexError):
        srep.skeletal_point(0, -1)
    with pytest.raises(IndexError):
        srep.set_skeletal_point(0, 2, SkeletalPoint())
    with pytest.raises(ValueError):
        srep.set_skeletal_point(0, 0, None)
    with pytest.raises(ValueError):
        srep.resize(-1, 2)


def test_srep_from_grid_must_be_rectangular():
    with pytest.raises(ValueError):
        EllipticalSRep([[SkeletalPoint(), SkeletalPoint()], [SkeletalPoint()]])


def test_srep_clone_is_deep():
    up, down, _ = _spokes()
    srep = EllipticalSRep([[SkeletalPoint(up, down)], [SkeletalPoint()]])
    clone = srep.clone()
    assert clone == srep
    assert clone.skeletal_point(0, 0) is not srep.skeletal_point(0, 0)

    clone.skeletal_point(0, 0).up_spoke.radius = 10
    assert srep.skeletal_point(0, 0).up_spoke.radius == pytest.approx(math.sqrt(3))
    assert clone != srep


def test_srep_iterates_lines():
    srep = EllipticalSRep()
    srep.resize(3, 2)
    lines = list(srep)
    assert len(lines) == 3
    assert all(len(line) == 2 for line in lines)
    assert lines[1][0] is srep.skeletal_point(1, 0)