import pytest

from mandelpix.plane import Point, Viewport, iter_area, pixel_to_point, plane_axes, plane_bounds


def _viewport(width=6, height=4, cx=0.0, cy=0.0, mag=1.0, limit=10):
    return Viewport.from_center(width, height, cx, cy, mag, limit)


def test_point_escape_test_uses_squared_magnitude():
    assert not Point(2.0, 0.0).escapes()
    assert Point(2.0, 0.001).escapes()
    assert Point(-1.5, 1.5).escapes()


def test_point_step():
    z = Point(0.5, 0.25).step(Point(0.1, 0.2))
    assert z.x == pytest.approx(0.2875)
    assert z.y == pytest.approx(0.45)


def test_pixel_step_uses_shorter_side():
    assert _viewport(6, 4).pixel_step == 1.0
    assert _viewport(4, 8, mag=2.0).pixel_step == 0.5


def test_iter_area_count():
    assert sum(1 for _ in iter_area(_viewport())) == 24


def test_iter_area_range():
    samples = list(iter_area(_viewport()))
    assert samples[0].point == Point(-3.0, 2.0)
    assert samples[-1].point == Point(2.0, -1.0)
    xs = [s.point.x for s in samples]
    ys = [s.point.y for s in samples]
    assert (min(xs), max(xs)) == (-3.0, 2.0)
    assert (min(ys), max(ys)) == (-1.0, 2.0)


def test_iter_area_is_row_major_without_gaps():
    viewport = _viewport(5, 3)
    samples = list(iter_area(viewport))
    assert [s.index for s in samples] == list(range(15))
    assert [(s.x, s.y) for s in samples] == [(x, y) for y in range(3) for x in range(5)]


def test_iter_area_restarts():
    viewport = _viewport()
    assert list(iter_area(viewport)) == list(iter_area(viewport))


def test_pixel_to_point_matches_iter_area():
    viewport = _viewport(7, 5, cx=-0.75, cy=0.1, mag=3.3)
    for sample in iter_area(viewport):
        assert pixel_to_point(viewport, sample.x, sample.y) == sample.point


def test_plane_axes_match_iter_area():
    viewport = _viewport(7, 5, cx=-0.75, cy=0.1, mag=3.3)
    xs, ys = plane_axes(viewport)
    for sample in iter_area(viewport):
        assert float(xs[sample.x]) == sample.point.x
        assert float(ys[sample.y]) == sample.point.y


def test_plane_bounds():
    assert plane_bounds(_viewport()) == (-3.0, -1.0, 2.0, 2.0)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(width=0),
        dict(height=-1),
        dict(limit=0),
        dict(limit=-5),
        dict(mag=0.0),
        dict(mag=-1.0),
        dict(mag=float("inf")),
        dict(cx=float("nan")),
    ],
)
def test_viewport_rejects_invalid_parameters(kwargs):
    with pytest.raises(ValueError):
        _viewport(**kwargs)


def test_viewport_rejects_non_integer_dimensions():
    with pytest.raises(ValueError):
        Viewport(width=4.5, height=4, center=Point(0.0, 0.0), magnification=1.0, limit=10)
    with pytest.raises(ValueError):
        Viewport(width=True, height=4, center=Point(0.0, 0.0), magnification=1.0, limit=10)
