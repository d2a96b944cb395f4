# smithtl/tl_core.py
from __future__ import annotations
import logging
import numpy as np
import pandas as pd
from dataclasses import dataclass
from enum import Enum
from typing import Optional

log = logging.getLogger(__name__)

EPS = 1e-12  # below this a denominator counts as zero

# ----------------------------
# Errors
# ----------------------------

class TLineError(ArithmeticError):
    """Base class for conditions the engine reports instead of a number."""

class LineDomainError(TLineError):
    """Input is mathematically invalid for the operation (e.g. tan singularity)."""
    def __init__(self, message: str, limit: Optional[complex] = None):
        super().__init__(message)
        self.limit = limit

class LineDivisionByZero(TLineError, ZeroDivisionError):
    """A denominator vanished: degenerate or resonant network."""

# ----------------------------
# Inputs / results
# ----------------------------

@dataclass(frozen=True)
class LineInputs:
    Z0: complex   # characteristic impedance (ohm)
    ZL: complex   # load impedance (ohm)
    bl: float     # electrical length beta*l (rad)

    def check(self) -> "LineInputs":
        if abs(self.Z0) < EPS:
            raise LineDomainError("Z0 must not be zero")
        if np.real(self.Z0) <= 0:
            raise LineDomainError(f"Z0 must have a positive real part, got {self.Z0}")
        if not np.isfinite(self.bl):
            raise LineDomainError(f"electrical length must be finite, got {self.bl}")
        return self

class Status(str, Enum):
    OK = "ok"
    DOMAIN_ERROR = "domain error"
    DIVISION_BY_ZERO = "division by zero"
    OUT_OF_PASSIVE_RANGE = "out of passive range"

@dataclass(frozen=True)
class Quantity:
    value: Optional[complex]
    status: Status = Status.OK
    message: str = ""
    limit: Optional[complex] = None  # analytic limit when the value itself is undefined

    @property
    def ok(self) -> bool:
        """True when a value is available (advisory flags included)."""
        return self.value is not None

    @classmethod
    def failed(cls, err: TLineError) -> "Quantity":
        status = Status.DIVISION_BY_ZERO if isinstance(err, LineDivisionByZero) else Status.DOMAIN_ERROR
        return cls(None, status, str(err), getattr(err, "limit", None))

@dataclass(frozen=True)
class LineDerived:
    Gamma_L: Quantity
    VSWR: Quantity
    Zin: Quantity
    Gamma_in: Quantity
    Y_L: Quantity
    Y_in: Quantity
    RL_dB: Quantity
    ML_dB: Quantity

# ----------------------------
# Transformations
# ----------------------------

def gamma_of_impedance(Z: complex, Z0: complex) -> complex:
    """Reflection coefficient of Z referred to Z0."""
    den = Z + Z0
    if abs(den) < EPS:
        raise LineDivisionByZero(f"Z + Z0 = 0 for Z={Z}, Z0={Z0}")
    return complex((Z - Z0)/den)

def Zin_of_line(Z0: complex, ZL: complex, bl: float, quarter_wave_limit: bool = True) -> complex:
    """Input impedance of a lossless line of electrical length bl terminated by ZL.

    At the tan singularity (bl = pi/2 + k*pi) the analytic limit Z0**2/ZL is
    used unless ``quarter_wave_limit`` is False; a shorted quarter-wave line
    has no finite limit and raises LineDomainError with ``limit=inf``.
    """
    c, s = np.cos(bl), np.sin(bl)
    if abs(c) < EPS:
        if not quarter_wave_limit:
            raise LineDomainError(f"tan(bl) undefined at bl={bl:.6g} rad")
        if abs(ZL) < EPS:
            raise LineDomainError(
                f"short circuit transforms to an open at bl={bl:.6g} rad", limit=complex(np.inf)
            )
        return complex(Z0*Z0/ZL)
    t = s/c
    if t == 0.0:
        return complex(ZL)
    den = Z0 + 1j*ZL*t
    if abs(den) < EPS:
        raise LineDivisionByZero(f"Z0 + j*ZL*tan(bl) = 0 (line resonance) for ZL={ZL}, bl={bl:.6g}")
    return complex(Z0*(ZL + 1j*Z0*t)/den)

def admittance(Z: complex) -> complex:
    if abs(Z) < EPS:
        raise LineDivisionByZero("admittance of a zero impedance")
    return complex(1/Z)

def gamma_of_admittance(Gamma: complex) -> complex:
    """Admittance-plane reflection coefficient: a 180 degree rotation."""
    return -Gamma

def is_passive(Gamma: complex) -> bool:
    return abs(Gamma) <= 1 + EPS

def vswr_from_gamma(Gamma: complex) -> float:
    """Voltage standing wave ratio; inf on the unit circle, negative outside it."""
    g = abs(Gamma)
    if abs(1 - g) <= EPS:
        return np.inf
    return (1 + g)/(1 - g)

def return_loss_db(Gamma: complex) -> float:
    g = abs(Gamma)
    if g == 0:
        return np.inf
    return float(-20*np.log10(g))

def mismatch_loss_db(Gamma: complex) -> float:
    g2 = abs(Gamma)**2
    if g2 > 1 + EPS:
        raise LineDomainError("mismatch loss undefined outside the passive range")
    if 1 - g2 <= EPS:
        return np.inf
    return float(-10*np.log10(1 - g2))

def angle_deg(z: complex) -> float:
    """Phase in degrees, in (-180, 180]."""
    rad = np.arctan2(np.imag(z), np.real(z))
    if rad <= -np.pi:
        rad = np.pi
    return float(np.degrees(rad))

# ----------------------------
# Pipeline
# ----------------------------

def _attempt(fn, *args) -> Quantity:
    try:
        return Quantity(fn(*args))
    except TLineError as err:
        log.debug("%s%r: %s", fn.__name__, args, err)
        return Quantity.failed(err)

def _chain(q: Quantity, fn, *args) -> Quantity:
    """Apply fn to an upstream quantity, inheriting its failure."""
    if not q.ok:
        return q
    return _attempt(fn, q.value, *args)

def basic_params(inp: LineInputs, quarter_wave_limit: bool = True) -> LineDerived:
    inp.check()
    Gamma_L = _attempt(gamma_of_impedance, inp.ZL, inp.Z0)
    Zin = _attempt(Zin_of_line, inp.Z0, inp.ZL, inp.bl, quarter_wave_limit)
    Gamma_in = _chain(Zin, gamma_of_impedance, inp.Z0)
    Y_in = _chain(Zin, admittance)
    if Zin.limit is not None and np.isinf(Zin.limit):
        # open circuit at the input: Gamma -> +1, Y -> 0
        note = "limit of an open circuit at the input"
        Gamma_in = Quantity(1+0j, Status.OK, note)
        Y_in = Quantity(0j, Status.OK, note)

    VSWR = _chain(Gamma_L, vswr_from_gamma)
    if Gamma_L.ok and not is_passive(Gamma_L.value):
        msg = f"|Gamma_L|={abs(Gamma_L.value):.4g} > 1, SWR is not a physical ratio"
        log.warning(msg)
        VSWR = Quantity(VSWR.value, Status.OUT_OF_PASSIVE_RANGE, msg)

    return LineDerived(
        Gamma_L=Gamma_L, VSWR=VSWR, Zin=Zin, Gamma_in=Gamma_in,
        Y_L=_attempt(admittance, inp.ZL),
        Y_in=Y_in,
        RL_dB=_chain(Gamma_L, return_loss_db),
        ML_dB=_chain(Gamma_L, mismatch_loss_db),
    )

def waves_along_line(inp: LineInputs, npts: int = 200) -> pd.DataFrame:
    """Sample the line from the load (bd=0) toward the generator (bd=bl).

    Columns: bd (rad), Gamma (complex), Zin (complex, NaN where undefined)
    and V_norm = |V(d)|/|V+|.
    """
    inp.check()
    Gamma_L = gamma_of_impedance(inp.ZL, inp.Z0)
    bd = np.linspace(0, inp.bl, npts)
    Gamma = Gamma_L*np.exp(-2j*bd)
    with np.errstate(divide='ignore', invalid='ignore'):
        Zin = np.where(np.abs(1 - Gamma) < EPS, np.nan + 0j, inp.Z0*(1 + Gamma)/(1 - Gamma))
    return pd.DataFrame({
        'bd': bd,
        'Gamma': Gamma,
        'Zin': Zin,
        'V_norm': np.abs(1 + Gamma),
    })
