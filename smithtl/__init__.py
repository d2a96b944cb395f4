from .tl_core import (
    LineInputs, LineDerived, Quantity, Status,
    TLineError, LineDomainError, LineDivisionByZero,
    gamma_of_impedance, Zin_of_line, admittance, gamma_of_admittance,
    vswr_from_gamma, angle_deg, basic_params, waves_along_line
)
from .tl_chart import (
    Circle, Point, Arc, MarkerKind, MARKER_STYLE,
    unit_circle, swr_circle, marker_point, build_scene, rotation_arc, smith_grid
)
from .tl_parse import (
    ParseError, parse_complex, parse_electrical_length
)
from .tl_report import results_table
