# noakit

Building blocks for particle transport simulations. The package has four modules.

- `noakit.layers` holds typed data layers. A `Layer` is a one-dimensional numpy
  array of a single numeric type: signed or unsigned integers of 8 to 64 bits,
  `float32` or `float64`. It has an `alias` and an `export_hint`. A
  `LayerManager` keeps every layer it stores at the same size. `add` returns the
  index of a new layer. `get` returns the data array of a layer, and
  `get_layer` returns the layer itself.
- `noakit.domain` holds a `Domain`, which is a `TriangleMesh` plus one
  `LayerManager` for each mesh dimension: points, edges and cells. The layer
  sizes follow the number of entities in the mesh.
  - `generate_2d_grid(domain, nx, ny, dx, dy)` fills a clean domain with an
    `nx` by `ny` grid of rectangles, each split into two triangles.
  - `Domain.write` saves the mesh as an ASCII VTU file, together with every
    layer whose `export_hint` is set. Cell layers go to `CellData`, point
    layers to `PointData` and edge layers to `FieldData`. A layer without an
    alias is named `cell_layer_<i>`, `point_layer_<i>` or `dim1_layer_<i>`.
  - `Domain.load_from` reads a triangle mesh from an ASCII VTU file.
- `noakit.dcs` holds the muon cross-section helpers:
  - `AtomicElement(atomic_mass, mean_excitation, charge)`
  - the photonuclear pieces: `photonuclear_f2_allm`, `photonuclear_f2a_drss`,
    `photonuclear_r_whitlow`, `photonuclear_d2` and `photonuclear_check`
  - the energy-loss integrands `del_integrand` and `cel_integrand`
  - the analytic close-collision ionisation terms
    `analytic_del_ionisation_interactions` and
    `analytic_cel_ionisation_interactions`
- `noakit.coulomb` holds the elastic Coulomb scattering helpers:
  `coulomb_spin_factor`, `coulomb_wentzel_path` and
  `coulomb_screening_parameters`. The last returns the nine screening factors
  and the inverse mean free path. The module also has
  `coulomb_transport_coefficients` and `coulomb_restricted_cs`.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from noakit.domain import Domain, generate_2d_grid

domain = Domain(2)
generate_2d_grid(domain, 4, 3, 0.5, 0.5)

cells = domain.get_layers(2)
index = cells.add("float64", 0.0)
layer = cells.get_layer(index)
layer.alias = "temperature"
layer.export_hint = True
layer[0] = 300.0

domain.write("grid.vtu")

restored = Domain(2)
restored.load_from("grid.vtu")
restored.mesh == domain.mesh      # True
```

```python
from noakit.dcs import AtomicElement, del_integrand, photonuclear_check
from noakit.coulomb import coulomb_screening_parameters

del_integrand(2.0, 3.0)           # 6.0
photonuclear_check(100.0, 0.5)    # True: transfer below threshold

rock = AtomicElement(atomic_mass=22.0, mean_excitation=136.4e-9, charge=11)
screening, invlambda = coulomb_screening_parameters(1.0, rock, 0.10566)
```

## What the package does not do

- Meshes are triangle meshes only.
- VTU files must use ASCII data arrays. Binary and appended data are not read.
- `Domain.load_from` reads the mesh only. It does not read data layers stored
  in the file back into the domain.
- The package gives no complete differential cross-sections for
  bremsstrahlung, pair production, photonuclear interactions or ionisation.
  It also gives no recoil-energy integrals and no vectorised tabulation over
  energy grids. `noakit.dcs` and `noakit.coulomb` supply the pieces that such
  calculations are built from.
- There is no hard-scattering cutoff solver and no soft-scattering transport
  calculation.
- There is no command-line program.