# smithtl/tl_validate_chart.py
import numpy as np
import pytest
from .tl_core import LineInputs, basic_params
from .tl_chart import (
    Arc, Circle, Point, MarkerKind, MARKER_STYLE,
    unit_circle, swr_circle, marker_point, build_scene, rotation_arc, smith_grid
)

def test_unit_circle_sampling():
    c = unit_circle(360)
    assert len(c.x) == len(c.y) == 360
    assert c.center == (0.0, 0.0) and c.radius == 1.0
    assert np.allclose(np.hypot(c.x, c.y), 1.0)
    assert (c.x[0], c.y[0]) == (1.0, 0.0)
    # theta in [0, 2*pi): the start point is not repeated at the end
    assert np.isclose(np.arctan2(c.y[-1], c.x[-1]), -2*np.pi/360)

def test_swr_circle_radius():
    c = swr_circle(0.3-0.4j, 200)
    assert np.isclose(c.radius, 0.5)
    assert np.allclose(np.hypot(c.x, c.y), 0.5)

def test_swr_circle_degenerate():
    c = swr_circle(0j)
    assert c.radius == 0.0
    assert np.all(c.x == 0) and np.all(c.y == 0)

def test_resolution_must_be_positive():
    with pytest.raises(ValueError):
        unit_circle(0)
    with pytest.raises(ValueError):
        build_scene(0.5, 0.5, resolution=-3)

def test_marker_identity_is_fixed_per_kind():
    styles = [(s.marker, s.color) for s in MARKER_STYLE.values()]
    assert len(set(styles)) == len(MarkerKind)
    p = marker_point(0.2+0.1j, MarkerKind.INPUT_ADMITTANCE)
    assert (p.x, p.y) == (0.2, 0.1)
    assert p.style is MARKER_STYLE[MarkerKind.INPUT_ADMITTANCE]

def test_scene_order():
    d = basic_params(LineInputs(50.0, 3+4j, 0.3))
    scene = build_scene(d.Gamma_L, d.Gamma_in, resolution=90)
    assert [type(p) for p in scene] == [Circle, Circle, Point, Point, Point, Point]
    assert [p.kind for p in scene[2:]] == [
        MarkerKind.LOAD_IMPEDANCE, MarkerKind.INPUT_IMPEDANCE,
        MarkerKind.LOAD_ADMITTANCE, MarkerKind.INPUT_ADMITTANCE,
    ]
    gl, gin = d.Gamma_L.value, d.Gamma_in.value
    assert scene[0].radius == 1.0
    assert np.isclose(scene[1].radius, abs(gl))
    assert (scene[2].x, scene[2].y) == (gl.real, gl.imag)
    assert (scene[4].x, scene[4].y) == (-gl.real, -gl.imag)
    assert (scene[5].x, scene[5].y) == (-gin.real, -gin.imag)

def test_scene_accepts_plain_complex():
    scene = build_scene(0.5j, -0.5j)
    assert len(scene) == 6

def test_shorted_quarter_wave_marks_open_circuit():
    d = basic_params(LineInputs(50.0, 0j, np.pi/2))
    scene = build_scene(d.Gamma_L, d.Gamma_in)
    points = {p.kind: (p.x, p.y) for p in scene if isinstance(p, Point)}
    assert points[MarkerKind.INPUT_IMPEDANCE] == (1.0, 0.0)
    assert points[MarkerKind.INPUT_ADMITTANCE] == (-1.0, 0.0)
    assert points[MarkerKind.LOAD_IMPEDANCE] == (-1.0, 0.0)
    arc = rotation_arc(d.Gamma_L.value, np.pi/2, 90)
    assert np.isclose(complex(arc.x[-1], arc.y[-1]), 1+0j)

def test_scene_omits_undefined_points():
    d = basic_params(LineInputs(50.0, 0j, np.pi/2), quarter_wave_limit=False)
    scene = build_scene(d.Gamma_L, d.Gamma_in)
    kinds = [p.kind for p in scene if isinstance(p, Point)]
    assert kinds == [MarkerKind.LOAD_IMPEDANCE, MarkerKind.LOAD_ADMITTANCE]
    assert all(np.isfinite([p.x, p.y]).all() for p in scene if isinstance(p, Point))

def test_scene_without_any_gamma():
    d = basic_params(LineInputs(50.0, -50+0j, 0.0))
    scene = build_scene(d.Gamma_L, None)
    assert len(scene) == 1 and scene[0].radius == 1.0

def test_rotation_arc_ends_at_input_gamma():
    d = basic_params(LineInputs(50.0, 30-20j, 0.7))
    arc = rotation_arc(d.Gamma_L.value, 0.7, 100)
    assert isinstance(arc, Arc)
    assert np.isclose(complex(arc.x[0], arc.y[0]), d.Gamma_L.value)
    assert np.isclose(complex(arc.x[-1], arc.y[-1]), d.Gamma_in.value)

def test_smith_grid_inside_unit_disk():
    grid = smith_grid(720)
    for prim in grid:
        assert np.all(np.hypot(prim.x, prim.y) <= 1 + 1e-9), prim.label
    r1 = [p for p in grid if isinstance(p, Circle) and p.label == 'r=1']
    assert len(r1) == 1 and r1[0].center == (0.5, 0.0) and r1[0].radius == 0.5
