# smithtl/tl_validate.py
import numpy as np
import pytest
from .tl_core import (
    LineInputs, Status, LineDomainError, LineDivisionByZero,
    basic_params, gamma_of_impedance, Zin_of_line, admittance, gamma_of_admittance,
    vswr_from_gamma, angle_deg, waves_along_line
)

def approx(a, b, tol=1e-3):
    """Relative tolerance check: |a-b| <= tol*(1+|b|)."""
    return abs(a - b) <= tol * (1 + abs(b))

def test_reactive_load_unit_length_zero():
    """Z0=50, ZL=3+4j, bl=0: the line does nothing, the load is badly mismatched."""
    d = basic_params(LineInputs(Z0=50.0, ZL=3+4j, bl=0.0))
    g = d.Gamma_L.value
    assert abs(abs(g) - 0.8873) < 1e-3, f"|Gamma_L| wrong: {abs(g)}"
    assert abs(angle_deg(g) - 170.8) < 0.05, f"angle wrong: {angle_deg(g)}"
    assert approx(d.VSWR.value, 16.77, 1e-3), f"VSWR wrong: {d.VSWR.value}"
    assert d.Zin.value == 3+4j, f"Zin must equal ZL at bl=0, got {d.Zin.value}"
    assert approx(d.Y_L.value, 0.12-0.16j, 1e-9)
    assert approx(d.Y_in.value, 0.12-0.16j, 1e-9)
    assert all(q.status is Status.OK for q in vars(d).values())

def test_matched():
    """ZL = Z0: Gamma=0 and SWR=1 whatever the length."""
    for bl in (0.0, 0.3, 1.0, np.pi/3, 2.5, -4.0):
        d = basic_params(LineInputs(50.0, 50+0j, bl))
        assert d.Gamma_L.value == 0, f"Not matched: Γ={d.Gamma_L.value}"
        assert d.VSWR.value == 1.0, f"VSWR not 1: VSWR={d.VSWR.value}"
        assert approx(d.Zin.value, 50.0, 1e-12), f"Zin moved at bl={bl}: {d.Zin.value}"

def test_short_circuit_load():
    d = basic_params(LineInputs(50.0, 0j, 0.4))
    assert d.Gamma_L.value == -1
    assert d.VSWR.value == np.inf
    assert d.Y_L.value is None
    assert d.Y_L.status is Status.DIVISION_BY_ZERO
    assert d.Y_in.ok, "input admittance of a shorted line is finite away from resonance"

def test_shorted_quarter_wave_is_domain_error():
    with pytest.raises(LineDomainError) as exc:
        Zin_of_line(50.0, 0j, np.pi/2)
    assert exc.value.limit == np.inf
    d = basic_params(LineInputs(50.0, 0j, np.pi/2))
    assert d.Zin.status is Status.DOMAIN_ERROR and d.Zin.value is None
    assert d.Zin.limit == np.inf
    # the short becomes an open: Gamma_in and Y_in take their finite limits
    assert d.Gamma_in.ok and d.Gamma_in.value == 1+0j
    assert d.Y_in.ok and d.Y_in.value == 0j
    assert abs(d.Gamma_in.value) == abs(d.Gamma_L.value)

def test_strict_tan_shorted_line_stays_undefined():
    d = basic_params(LineInputs(50.0, 0j, np.pi/2), quarter_wave_limit=False)
    assert d.Zin.limit is None
    assert d.Gamma_in.status is Status.DOMAIN_ERROR and d.Gamma_in.value is None
    assert d.Y_in.status is Status.DOMAIN_ERROR

def test_quarter_wave_transformer():
    for ZL in (100.0, 25+0j, 100+25j, 10-70j):
        Zin = Zin_of_line(50.0, ZL, np.pi/2)
        assert approx(Zin, 50.0**2/ZL, 1e-9), f"Z0²/ZL identity failed for {ZL}: {Zin}"
    assert approx(Zin_of_line(50.0, 100.0, 3*np.pi/2), 25.0, 1e-9)

def test_strict_tan_singularity():
    with pytest.raises(LineDomainError):
        Zin_of_line(50.0, 100.0, np.pi/2, quarter_wave_limit=False)
    d = basic_params(LineInputs(50.0, 100+0j, np.pi/2), quarter_wave_limit=False)
    assert d.Zin.status is Status.DOMAIN_ERROR
    assert d.Gamma_L.ok

def test_line_resonance_is_division_by_zero():
    bl = np.pi/4
    ZL = 1j*50.0/np.tan(bl)   # Z0 + j*ZL*tan(bl) = 0
    with pytest.raises(LineDivisionByZero):
        Zin_of_line(50.0, ZL, bl)
    d = basic_params(LineInputs(50.0, ZL, bl))
    assert d.Zin.status is Status.DIVISION_BY_ZERO
    assert d.Gamma_in.status is Status.DIVISION_BY_ZERO

def test_gamma_division_by_zero():
    with pytest.raises(LineDivisionByZero):
        gamma_of_impedance(-50+0j, 50.0)
    d = basic_params(LineInputs(50.0, -50+0j, 0.0))
    assert d.Gamma_L.status is Status.DIVISION_BY_ZERO
    assert d.VSWR.status is Status.DIVISION_BY_ZERO
    assert d.VSWR.value is None

def test_active_load_is_advisory():
    d = basic_params(LineInputs(50.0, -25+0j, 0.2))
    assert approx(d.Gamma_L.value, -3.0, 1e-12)
    assert d.VSWR.status is Status.OUT_OF_PASSIVE_RANGE
    assert d.VSWR.ok and approx(d.VSWR.value, -2.0, 1e-12)
    assert d.ML_dB.status is Status.DOMAIN_ERROR

def test_passive_loads_stay_inside_unit_circle():
    rng = np.random.default_rng(7)
    Z0 = rng.uniform(1, 200, 500)
    ZL = rng.uniform(0, 1000, 500) + 1j*rng.uniform(-1000, 1000, 500)
    for z0, zl in zip(Z0, ZL):
        g = gamma_of_impedance(zl, z0)
        assert 0 <= abs(g) <= 1 + 1e-12, f"|Γ|={abs(g)} for Z0={z0}, ZL={zl}"

def test_vswr_monotonic():
    g = np.linspace(0, 0.999, 500)
    s = np.array([vswr_from_gamma(x) for x in g])
    assert s[0] == 1.0
    assert np.all(np.diff(s) > 0)
    assert vswr_from_gamma(1.0) == np.inf
    assert vswr_from_gamma(-1j) == np.inf

def test_admittance_round_trip():
    for Z in (3+4j, 50.0, -20j, 1e-3+1e3j):
        assert approx(admittance(admittance(Z)), Z, 1e-12)
    with pytest.raises(LineDivisionByZero):
        admittance(0j)

def test_admittance_gamma_is_exact_negation():
    for g in (0.3-0.4j, -1+0j, 0j, 2.5+1e-9j):
        assert gamma_of_admittance(g) == -g

def test_half_wave_periodicity():
    for bl in (0.1, 0.7, 2.0):
        z1 = Zin_of_line(50.0, 30-20j, bl)
        z2 = Zin_of_line(50.0, 30-20j, bl + np.pi)
        assert approx(z1, z2, 1e-9), f"Zin periodicity failed: {z1} vs {z2}"

def test_input_gamma_on_swr_circle():
    d = basic_params(LineInputs(50.0, 30-20j, 0.7))
    assert approx(abs(d.Gamma_in.value), abs(d.Gamma_L.value), 1e-9)

def test_angle_range():
    assert angle_deg(-1+0j) == pytest.approx(180.0)
    assert angle_deg(complex(-1, -0.0)) == pytest.approx(180.0), "-180 folds onto +180"
    assert angle_deg(1j) == pytest.approx(90.0)
    assert angle_deg(-1j) == pytest.approx(-90.0)
    assert angle_deg(1+0j) == 0.0
    assert angle_deg(-1-1e-12j) > -180.0

def test_invalid_z0():
    with pytest.raises(LineDomainError):
        basic_params(LineInputs(0.0, 50+0j, 0.0))
    with pytest.raises(LineDomainError):
        basic_params(LineInputs(-50.0, 50+0j, 0.0))

def test_waves_along_line():
    inp = LineInputs(50.0, 30-20j, 0.7)
    df = waves_along_line(inp, npts=50)
    assert list(df.columns) == ['bd', 'Gamma', 'Zin', 'V_norm']
    assert len(df) == 50
    g_L = gamma_of_impedance(inp.ZL, inp.Z0)
    assert approx(df['V_norm'].iloc[0], abs(1 + g_L), 1e-12)
    assert approx(df['Zin'].iloc[-1], Zin_of_line(inp.Z0, inp.ZL, inp.bl), 1e-9)
    # half a wavelength sweeps the whole standing-wave pattern
    full = waves_along_line(LineInputs(50.0, 30-20j, np.pi), npts=200)
    assert approx(full['V_norm'].max(), 1 + abs(g_L), 1e-2)
    assert approx(full['V_norm'].min(), 1 - abs(g_L), 1e-2)

if __name__ == '__main__':
    test_matched()
    test_quarter_wave_transformer()
    test_half_wave_periodicity()
    print("OK")
