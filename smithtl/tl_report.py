# smithtl/tl_report.py
import numpy as np
import pandas as pd
from .tl_core import LineDerived, Quantity, Status, angle_deg

# (field, label, unit, polar?)
ROWS = [
    ('Gamma_L',  'Γ_L',   '',   True),
    ('Gamma_in', 'Γ_in',  '',   True),
    ('Zin',      'Z_in',  'Ω',  False),
    ('VSWR',     'SWR',   '',   False),
    ('Y_L',      'Y_L',   'S',  False),
    ('Y_in',     'Y_in',  'S',  False),
    ('RL_dB',    'Return loss',   'dB', False),
    ('ML_dB',    'Mismatch loss', 'dB', False),
]

def format_polar(z, digits=4):
    if z is None:
        return 'undefined'
    return f'{abs(z):.{digits}g} ∠ {angle_deg(z):.1f}°'

def format_rect(z, unit='', digits=4):
    if z is None:
        return 'undefined'
    z = complex(z)
    if not np.isfinite(z.real):
        s = '∞'
    elif z.imag == 0:
        s = f'{z.real:.{digits}g}'
    else:
        sign = '-' if z.imag < 0 else '+'
        s = f'{z.real:.{digits}g} {sign} j{abs(z.imag):.{digits}g}'
    return f'{s} {unit}'.rstrip()

def format_quantity(q: Quantity, unit='', polar=False):
    """Display label; failures read 'undefined (<reason>)'."""
    if not q.ok:
        return f'undefined ({q.status.value})'
    text = format_polar(q.value) if polar else format_rect(q.value, unit)
    if q.status is Status.OUT_OF_PASSIVE_RANGE:
        text += ' [out of passive range]'
    return text

def results_table(d: LineDerived) -> pd.DataFrame:
    """One row per derived quantity, NaN where the value is undefined."""
    records = []
    for field, label, unit, polar in ROWS:
        q = getattr(d, field)
        v = complex(q.value) if q.ok else complex(np.nan, np.nan)
        records.append({
            'quantity': label,
            'real': v.real,
            'imag': v.imag,
            'magnitude': abs(v) if q.ok else np.nan,
            'angle_deg': angle_deg(v) if q.ok and np.isfinite(v.real) else np.nan,
            'unit': unit,
            'status': q.status.value,
            'display': format_quantity(q, unit, polar),
            'note': q.message,
        })
    return pd.DataFrame.from_records(records)
