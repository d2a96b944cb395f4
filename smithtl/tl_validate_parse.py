# smithtl/tl_validate_parse.py
import numpy as np
import pytest
from .tl_parse import ParseError, parse_complex, parse_electrical_length, parse_positive_real

@pytest.mark.parametrize("text, expected", [
    ("3+4i", 3+4j),
    ("3+4j", 3+4j),
    ("50-j25", 50-25j),
    ("(75+j10)", 75+10j),
    ("( 75 + j10 )", 75+10j),
    ("-3-4I", -3-4j),
    ("-j", -1j),
    ("i", 1j),
    ("5j", 5j),
    ("j5", 5j),
    ("+2.5i", 2.5j),
    ("50", 50+0j),
    ("0", 0j),
    ("2.5e1", 25+0j),
    ("1e-3+2e-3j", 1e-3+2e-3j),
    ("1,5+2,5i", 1.5+2.5j),
    (".5-.25j", 0.5-0.25j),
])
def test_parse_complex_forms(text, expected):
    assert parse_complex(text) == expected

@pytest.mark.parametrize("text", ["", "()", "abc", "3+4", "3j4", "1+2k", "3++4j", "4i+3"])
def test_parse_complex_rejects(text):
    with pytest.raises(ParseError):
        parse_complex(text)

def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_complex("nope")

@pytest.mark.parametrize("text, expected", [
    ("0", 0.0),
    ("0.785", 0.785),
    ("pi/4", np.pi/4),
    ("3*pi/8", 3*np.pi/8),
    ("0.5*pi", 0.5*np.pi),
    ("-pi", -np.pi),
    ("π/2", np.pi/2),
    ("PI / 2", np.pi/2),
    ("deg(90)", np.pi/2),
    ("2*(pi/4) + 1", np.pi/2 + 1),
])
def test_parse_electrical_length(text, expected):
    assert parse_electrical_length(text) == pytest.approx(expected)

@pytest.mark.parametrize("text", [
    "", "x", "pi/0", "1j", "(-1)**0.5", "__import__('os')", "pi.real", "sin(pi)", "deg(1, 2)", "[1]", "True",
])
def test_parse_electrical_length_rejects(text):
    with pytest.raises(ParseError):
        parse_electrical_length(text)

def test_parse_positive_real():
    assert parse_positive_real("50") == 50.0
    assert parse_positive_real(" 75,5 ", "Z0") == 75.5
    for bad in ("0", "-5", "abc", "inf"):
        with pytest.raises(ParseError):
            parse_positive_real(bad, "Z0")

@pytest.mark.parametrize("text", ["-"*100000 + "1", "("*5000 + "1" + ")"*5000, "1\x00"])
def test_parse_electrical_length_pathological(text):
    with pytest.raises(ParseError):
        parse_electrical_length(text)
