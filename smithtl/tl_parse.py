# smithtl/tl_parse.py
"""Text fields -> numbers.

Complex loads are written in rectangular form with ``i`` or ``j`` as the
imaginary unit, before or after the magnitude and optionally in parentheses:
``3+4i``, ``50-j25``, ``(75+j10)``, ``-j``, ``1e3``. Electrical lengths are
radians, either literal or a small arithmetic expression in ``pi``
(``pi/4``, ``3*pi/8``) or ``deg(90)``.
"""
from __future__ import annotations
import ast
import operator
import re
import numpy as np

_NUM = r'(?:\d+(?:\.\d*)?|\.\d+)(?:e[+-]?\d+)?'

_COMPLEX_RE = re.compile(
    rf'^(?P<real>[+-]?{_NUM})?'
    rf'(?:(?P<sign>[+-])?(?:[ij](?P<mag_after>{_NUM})?|(?P<mag_before>{_NUM})[ij]))?$'
)

class ParseError(ValueError):
    """Malformed numeric text."""

def parse_complex(text: str) -> complex:
    s = str(text).strip().lower().replace(' ', '').replace(',', '.')
    if s.startswith('(') and s.endswith(')'):
        s = s[1:-1]
    if not s:
        raise ParseError("empty complex number")
    m = _COMPLEX_RE.match(s)
    if not m:
        raise ParseError(f"cannot read {text!r} as a complex number")
    real_str, sign = m.group('real'), m.group('sign')
    has_imag = ('i' in s) or ('j' in s)
    if not has_imag:
        if real_str is None:
            raise ParseError(f"cannot read {text!r} as a complex number")
        return complex(float(real_str), 0.0)
    # "5j": with no sign the number lands in the real group
    if real_str is not None and sign is None:
        if m.group("mag_after") is None and m.group("mag_before") is None:
            return complex(0.0, float(real_str))
        raise ParseError(f"missing sign between parts of {text!r}")
    mag = m.group('mag_after') or m.group('mag_before')
    imag = float(mag) if mag else 1.0
    if sign == '-':
        imag = -imag
    return complex(float(real_str) if real_str else 0.0, imag)

# ----------------------------
# Electrical length expressions
# ----------------------------

_BINOPS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Pow: operator.pow,
}
_UNARY = {ast.UAdd: operator.pos, ast.USub: operator.neg}
_NAMES = {'pi': np.pi}
_FUNCS = {'deg': np.radians}

def _eval(node):
    if isinstance(node, ast.Expression):
        return _eval(node.body)
    if isinstance(node, ast.Constant) and isinstance(node.value, (int, float)) \
            and not isinstance(node.value, bool):
        return float(node.value)
    if isinstance(node, ast.Name) and node.id in _NAMES:
        return _NAMES[node.id]
    if isinstance(node, ast.BinOp) and type(node.op) in _BINOPS:
        return _BINOPS[type(node.op)](_eval(node.left), _eval(node.right))
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY:
        return _UNARY[type(node.op)](_eval(node.operand))
    if isinstance(node, ast.Call) and isinstance(node.func, ast.Name) \
            and node.func.id in _FUNCS and len(node.args) == 1 and not node.keywords:
        return float(_FUNCS[node.func.id](_eval(node.args[0])))
    raise ParseError(f"unsupported expression element: {ast.dump(node)}")

def parse_electrical_length(text: str) -> float:
    """Radians from '0.785', 'pi/4', '3*pi/8', 'deg(45)'."""
    s = str(text).strip().lower().replace('π', 'pi')
    if not s:
        raise ParseError("empty electrical length")
    try:
        tree = ast.parse(s, mode='eval')
        value = float(_eval(tree))
    except ParseError:
        raise
    except (SyntaxError, ValueError, TypeError, ZeroDivisionError, OverflowError,
            RecursionError, MemoryError) as err:
        raise ParseError(f"cannot evaluate electrical length {text!r}: {err}") from err
    if not np.isfinite(value):
        raise ParseError(f"electrical length {text!r} is not finite")
    return value

def parse_positive_real(text: str, field: str = "value") -> float:
    try:
        value = float(str(text).strip().replace(',', '.'))
    except ValueError as err:
        raise ParseError(f"{field}: {text!r} is not a number") from err
    if not np.isfinite(value) or value <= 0:
        raise ParseError(f"{field} must be a positive number, got {text!r}")
    return value
