# smithtl/tl_plots.py
import numpy as np
import matplotlib.pyplot as plt
from .tl_core import waves_along_line, vswr_from_gamma, gamma_of_impedance
from .tl_chart import Arc, Circle, Point

def _closed(x, y):
    return np.append(x, x[:1]), np.append(y, y[:1])

def plot_smith_chart(scene, savepath, grid=None, arc=None, title=None):
    """Render build_scene() output (plus optional grid and rotation arc)."""
    fig, ax = plt.subplots(figsize=(7,7))
    ax.plot([-1.1,1.1],[0,0], color='grey', linewidth=0.8)
    for prim in grid or []:
        if isinstance(prim, Circle):
            ax.plot(*_closed(prim.x, prim.y), color='lightgrey', linewidth=0.7)
        else:
            ax.plot(prim.x, prim.y, color='lightgrey', linewidth=0.7)
    for prim in scene:
        if isinstance(prim, Circle):
            style = dict(color='tab:purple', linestyle='--') if prim.label == 'SWR circle' else dict(color='black')
            ax.plot(*_closed(prim.x, prim.y), label=prim.label, **style)
        elif isinstance(prim, Point):
            st = prim.style
            ax.plot(prim.x, prim.y, st.marker, color=st.color, label=st.label, markersize=8)
            ax.annotate(st.label, (prim.x, prim.y), textcoords='offset points', xytext=(6, 6))
    if isinstance(arc, Arc) and len(arc.x):
        ax.plot(arc.x, arc.y, ':', color='tab:blue', label=arc.label)
    ax.set_aspect(1)
    ax.set_xlim(-1.2,1.2)
    ax.set_ylim(-1.2,1.2)
    ax.set_xlabel('Re{Γ}')
    ax.set_ylabel('Im{Γ}')
    ax.set_title(title or 'Smith chart')
    ax.legend(loc='upper right', fontsize='small')
    ax.grid(True, linestyle="--", alpha=0.6)
    fig.tight_layout()
    fig.savefig(savepath, dpi=120)
    plt.close(fig)

def plot_envelopes(inp, savepath, npts=600):
    """Standing-wave voltage envelope from the load toward the generator."""
    df = waves_along_line(inp, npts=npts)
    swr = vswr_from_gamma(gamma_of_impedance(inp.ZL, inp.Z0))
    fig, ax = plt.subplots(figsize=(7,5))
    ax.plot(df['bd'], df['V_norm'], label='|V(d)| / |V+|')
    ax.set_xlabel('βd from load (rad)')
    ax.set_ylabel('Magnitude (normalized)')
    ax.set_title(f'Standing-wave envelope | SWR={swr:.2f}')
    ax.legend()
    ax.grid(True, linestyle="--", alpha=0.6)
    fig.tight_layout()
    fig.savefig(savepath, dpi=120)
    plt.close(fig)
