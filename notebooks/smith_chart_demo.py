from smithtl.tl_core import LineInputs, basic_params
from smithtl.tl_chart import build_scene, rotation_arc, smith_grid
from smithtl.tl_plots import plot_smith_chart
from smithtl.tl_report import results_table

inp = LineInputs(50, 3+4j, 0.3)
d = basic_params(inp)

print(results_table(d)[['quantity', 'display']].to_string(index=False))

# Gamma_L rotates clockwise by 2*bl on the SWR circle to reach Gamma_in
scene = build_scene(d.Gamma_L, d.Gamma_in)
plot_smith_chart(scene, 'smith_demo.png', grid=smith_grid(), arc=rotation_arc(d.Gamma_L.value, inp.bl))
print("Saved smith_demo.png")
