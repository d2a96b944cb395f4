# smithtl/tl_chart.py
"""Geometry of the Gamma-plane: circles, arcs and markers ready to draw.

Nothing here knows about matplotlib; tl_plots turns the primitives into
artists.
"""
from __future__ import annotations
import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

from .tl_core import Quantity

DEFAULT_RESOLUTION = 360

# ----------------------------
# Primitives
# ----------------------------

@dataclass(frozen=True)
class Circle:
    center: Tuple[float, float]
    radius: float
    x: np.ndarray
    y: np.ndarray
    label: str = ""

@dataclass(frozen=True)
class Arc:
    x: np.ndarray
    y: np.ndarray
    label: str = ""

class MarkerKind(str, Enum):
    LOAD_IMPEDANCE = "load impedance"
    INPUT_IMPEDANCE = "input impedance"
    LOAD_ADMITTANCE = "load admittance"
    INPUT_ADMITTANCE = "input admittance"

@dataclass(frozen=True)
class MarkerStyle:
    marker: str
    color: str
    label: str

MARKER_STYLE = {
    MarkerKind.LOAD_IMPEDANCE:   MarkerStyle('o', 'orangered', '$Z_L$'),
    MarkerKind.INPUT_IMPEDANCE:  MarkerStyle('s', 'royalblue', '$Z_{in}$'),
    MarkerKind.LOAD_ADMITTANCE:  MarkerStyle('o', 'limegreen', '$Y_L$'),
    MarkerKind.INPUT_ADMITTANCE: MarkerStyle('s', 'darkorange', '$Y_{in}$'),
}

@dataclass(frozen=True)
class Point:
    x: float
    y: float
    kind: MarkerKind

    @property
    def style(self) -> MarkerStyle:
        return MARKER_STYLE[self.kind]

Primitive = Union[Circle, Point, Arc]
GammaLike = Union[complex, Quantity, None]

# ----------------------------
# Builders
# ----------------------------

def _check_resolution(resolution: int) -> int:
    if int(resolution) < 1:
        raise ValueError(f"resolution must be >= 1, got {resolution}")
    return int(resolution)

def _value(Gamma: GammaLike) -> Optional[complex]:
    if isinstance(Gamma, Quantity):
        return Gamma.value
    return Gamma

def draw_circle(c_x: float, c_y: float, r: float, resolution: int = DEFAULT_RESOLUTION,
                label: str = "") -> Circle:
    """Circle sampled at theta in [0, 2*pi)."""
    theta = np.linspace(0, 2*np.pi, _check_resolution(resolution), endpoint=False)
    x = r*np.cos(theta) + c_x
    y = r*np.sin(theta) + c_y
    return Circle(center=(float(c_x), float(c_y)), radius=float(r), x=x, y=y, label=label)

def unit_circle(resolution: int = DEFAULT_RESOLUTION) -> Circle:
    return draw_circle(0.0, 0.0, 1.0, resolution, label='|Γ| = 1')

def swr_circle(Gamma_L: complex, resolution: int = DEFAULT_RESOLUTION) -> Circle:
    """Constant-SWR circle through Gamma_L; zero radius for a matched load."""
    return draw_circle(0.0, 0.0, abs(Gamma_L), resolution, label='SWR circle')

def marker_point(Gamma: complex, kind: MarkerKind) -> Point:
    return Point(float(np.real(Gamma)), float(np.imag(Gamma)), MarkerKind(kind))

def build_scene(Gamma_L: GammaLike, Gamma_in: GammaLike,
                resolution: int = DEFAULT_RESOLUTION) -> List[Primitive]:
    """Primitives in drawing order.

    Unit circle, SWR circle, Z_L, Z_in, Y_L (-Gamma_L), Y_in (-Gamma_in).
    A reflection coefficient that is None or a failed Quantity drops the
    primitives that depend on it.
    """
    gl, gin = _value(Gamma_L), _value(Gamma_in)
    scene: List[Primitive] = [unit_circle(resolution)]
    if gl is not None:
        scene.append(swr_circle(gl, resolution))
        scene.append(marker_point(gl, MarkerKind.LOAD_IMPEDANCE))
    if gin is not None:
        scene.append(marker_point(gin, MarkerKind.INPUT_IMPEDANCE))
    if gl is not None:
        scene.append(marker_point(-gl, MarkerKind.LOAD_ADMITTANCE))
    if gin is not None:
        scene.append(marker_point(-gin, MarkerKind.INPUT_ADMITTANCE))
    return scene

def rotation_arc(Gamma_L: complex, bl: float, resolution: int = DEFAULT_RESOLUTION) -> Arc:
    """Path of Gamma from the load toward the generator: clockwise by 2*bl."""
    phi = np.linspace(0.0, -2.0*bl, _check_resolution(resolution))
    g = complex(Gamma_L)*np.exp(1j*phi)
    return Arc(x=g.real, y=g.imag, label='toward generator')

def smith_grid(resolution: int = DEFAULT_RESOLUTION,
               r_values=(0.2, 0.5, 1.0, 2.0, 5.0),
               x_values=(0.2, 0.5, 1.0, 2.0, 5.0)) -> List[Primitive]:
    """Constant-resistance circles and constant-reactance arcs inside |Gamma| <= 1."""
    grid: List[Primitive] = []
    for r in r_values:
        grid.append(draw_circle(r/(1 + r), 0.0, 1/(1 + r), resolution, label=f'r={r:g}'))
    for xv in x_values:
        for sign in (1, -1):
            c = draw_circle(1.0, sign/xv, 1/xv, resolution)
            inside = c.x**2 + c.y**2 <= 1 + 1e-9
            # order the samples along the arc so the visible part is contiguous
            k = np.argmin(inside) if not inside.all() else 0
            x, y, inside = (np.roll(a, -k) for a in (c.x, c.y, inside))
            grid.append(Arc(x=x[inside], y=y[inside], label=f'x={sign*xv:+g}'))
    return grid
