# smithtl/tl_cli.py
import argparse, logging, os
import matplotlib
matplotlib.use('Agg')  # files only, no display
from .tl_core import LineInputs, TLineError, basic_params
from .tl_chart import DEFAULT_RESOLUTION, build_scene, rotation_arc, smith_grid
from .tl_parse import ParseError, parse_complex, parse_electrical_length, parse_positive_real
from .tl_plots import plot_envelopes, plot_smith_chart
from .tl_report import results_table

log = logging.getLogger(__name__)

def build_parser():
    ap = argparse.ArgumentParser(
        prog='smithtl',
        description='Reflection coefficient, SWR and input impedance of a lossless line on a Smith chart.')
    ap.add_argument('--Z0', default='50', help="Characteristic impedance (ohm).")
    ap.add_argument('--ZL', default='3+4j', help="Load impedance, e.g. '3+4i', '50-j25', '(75+j10)'. "
                         "Write a leading minus as --ZL=-j or --ZL=-3+4j.")
    ap.add_argument('--bl', default='0', help="Electrical length in rad, e.g. '0.3', 'pi/4', 'deg(45)'.")
    ap.add_argument('--resolution', type=int, default=DEFAULT_RESOLUTION,
                    help="Samples per circle.")
    ap.add_argument('--strict-tan', action='store_true',
                    help="Report bl = pi/2 + k*pi as undefined instead of taking the quarter-wave limit.")
    ap.add_argument('--plots_dir', default='figures')
    ap.add_argument('--no-plots', action='store_true')
    ap.add_argument('--table', default=None, help="Also write the results table to this CSV file.")
    ap.add_argument('-v', '--verbose', action='store_true')
    return ap

def main(argv=None):
    ap = build_parser()
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')
    if args.resolution < 1:
        ap.error('--resolution must be at least 1')

    try:
        inp = LineInputs(
            Z0=parse_positive_real(args.Z0, 'Z0'),
            ZL=parse_complex(args.ZL),
            bl=parse_electrical_length(args.bl),
        ).check()
    except (ParseError, TLineError) as e:
        ap.error(str(e))

    d = basic_params(inp, quarter_wave_limit=not args.strict_tan)
    table = results_table(d)
    print(f'Z0={inp.Z0:g} ohm, ZL={inp.ZL}, bl={inp.bl:.6g} rad')
    for label, text in zip(table['quantity'], table['display']):
        print(f'  {label:>14s} = {text}')

    if args.table:
        table.to_csv(args.table, index=False)
        log.info("Results table written to %s", args.table)

    if args.no_plots:
        return 0
    os.makedirs(args.plots_dir, exist_ok=True)
    scene = build_scene(d.Gamma_L, d.Gamma_in, args.resolution)
    arc = rotation_arc(d.Gamma_L.value, inp.bl, args.resolution) if d.Gamma_L.ok else None
    smith_path = os.path.join(args.plots_dir, 'smith.png')
    plot_smith_chart(scene, smith_path, grid=smith_grid(args.resolution), arc=arc,
                     title=f'Z0={inp.Z0:g} Ω, ZL={args.ZL}, βl={inp.bl:.4g} rad')
    log.info("Smith chart written to %s", smith_path)
    if d.Gamma_L.ok:
        env_path = os.path.join(args.plots_dir, 'envelope.png')
        plot_envelopes(inp, env_path)
        log.info("Envelope plot written to %s", env_path)
    return 0

if __name__ == '__main__':
    raise SystemExit(main())
