# smithtl/tl_validate_report.py
import numpy as np
import pandas as pd
import pytest
from .tl_core import LineInputs, Quantity, Status, basic_params
from .tl_report import format_polar, format_quantity, format_rect, results_table
from .tl_cli import build_parser, main

def test_format_labels():
    assert format_rect(complex(0.12, -0.16), 'S') == '0.12 - j0.16 S'
    assert format_rect(50.0, 'Ω') == '50 Ω'
    assert format_rect(np.inf) == '∞'
    assert format_rect(None) == 'undefined'
    assert format_polar(-1+0j) == '1 ∠ 180.0°'
    assert format_polar(None) == 'undefined'

def test_format_quantity_flags():
    assert format_quantity(Quantity(None, Status.DIVISION_BY_ZERO)) == 'undefined (division by zero)'
    text = format_quantity(Quantity(-2.0, Status.OUT_OF_PASSIVE_RANGE))
    assert text.startswith('-2') and 'out of passive range' in text

def test_results_table_ok():
    df = results_table(basic_params(LineInputs(50.0, 3+4j, 0.0)))
    assert isinstance(df, pd.DataFrame)
    assert list(df['quantity']) == ['Γ_L', 'Γ_in', 'Z_in', 'SWR', 'Y_L', 'Y_in',
                                    'Return loss', 'Mismatch loss']
    assert (df['status'] == 'ok').all()
    row = df.set_index('quantity').loc['Z_in']
    assert (row['real'], row['imag']) == (3.0, 4.0)

def test_results_table_short_circuit():
    df = results_table(basic_params(LineInputs(50.0, 0j, 0.0))).set_index('quantity')
    assert df.loc['Y_L', 'status'] == 'division by zero'
    assert df.loc['Y_L', 'display'].startswith('undefined')
    assert np.isnan(df.loc['Y_L', 'magnitude'])
    assert df.loc['SWR', 'display'] == '∞'

def test_cli_prints_results(capsys):
    assert main(['--ZL', '0', '--bl', 'pi/2', '--no-plots']) == 0
    out = capsys.readouterr().out
    assert 'Z_in = undefined (domain error)' in out
    assert 'Γ_L = 1 ∠ 180.0°' in out

def test_cli_strict_tan(capsys):
    assert main(['--ZL', '100', '--bl', 'pi/2', '--strict-tan', '--no-plots']) == 0
    assert 'Z_in = undefined (domain error)' in capsys.readouterr().out

def test_cli_writes_plots_and_table(tmp_path):
    table = tmp_path / 'results.csv'
    rc = main(['--ZL', '(30-j20)', '--bl', '0.7', '--resolution', '90',
               '--plots_dir', str(tmp_path / 'figs'), '--table', str(table)])
    assert rc == 0
    assert (tmp_path / 'figs' / 'smith.png').stat().st_size > 0
    assert (tmp_path / 'figs' / 'envelope.png').stat().st_size > 0
    df = pd.read_csv(table)
    assert len(df) == 8

@pytest.mark.parametrize("argv", [
    ['--ZL', 'abc'],
    ['--bl', 'pi/0'],
    ['--Z0', '-50'],
    ['--resolution', '0'],
])
def test_cli_rejects_bad_input(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv + ['--no-plots'])
    assert exc.value.code == 2

def test_cli_renders_without_display():
    import matplotlib
    assert matplotlib.get_backend().lower() == 'agg'

def test_cli_negative_load_with_equals_form(capsys):
    assert main(['--ZL=-3+4j', '--no-plots']) == 0
    assert 'ZL=(-3+4j)' in capsys.readouterr().out
    assert main(['--ZL=-j', '--no-plots']) == 0
    assert '--ZL=-j' in build_parser().format_help()

def test_cli_shorted_quarter_wave_marks_input(capsys):
    assert main(['--ZL', '0', '--bl', 'pi/2', '--no-plots']) == 0
    out = capsys.readouterr().out
    assert 'Γ_in = 1 ∠ 0.0°' in out
    assert 'Y_in = 0 S' in out
