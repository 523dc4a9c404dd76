# planet_generator/cellular.py

"""
================================================================================
CELLULAR (WORLEY) NOISE
================================================================================
This module generates cellular noise from jittered feature points, one per
lattice cell, and answers nearest-feature queries with a KD-tree. It is used
for blob-like features such as volcano cones and oil basins.

Data Contract:
---------------
- Inputs:
    - seed, frequency, and the radius of the shell being sampled.
    - NumPy arrays of 3D world coordinates.
- Outputs:
    - Distance to the nearest feature point in lattice units, mapped into
      [-1, 1] (a distance of 0 maps to -1, a distance of 1 or more maps to 1).
- Side Effects: None.
- Invariants: Feature points depend only on the seed, frequency and shell
  radius, so queries are deterministic.
================================================================================
"""
import numpy as np
from scipy.spatial import cKDTree

from . import config as DEFAULTS

# Feature points are only generated for cells whose centres lie within this
# many lattice units of the shell. The nearest feature to any point on the
# shell is never further than sqrt(3) units away, so 3 units is sufficient.
SHELL_MARGIN_CELLS = 3.0


def generate_feature_points(seed: int, lattice_radius: float, jitter: float = DEFAULTS.CELLULAR_JITTER) -> np.ndarray:
    """
    Generates one jittered feature point per lattice cell around a spherical
    shell of the given radius (in lattice units), deterministically.
    """
    extent = int(np.ceil(lattice_radius + SHELL_MARGIN_CELLS))
    axis = np.arange(-extent, extent, dtype=np.float64)
    cy, cz = np.meshgrid(axis, axis, indexing='ij')
    cy = cy.ravel()
    cz = cz.ravel()

    rng = np.random.default_rng(seed)
    slabs = []
    # Walk the cube one x-slab at a time to keep memory proportional to the
    # slab. Jitter is drawn for every cell of the slab so the points do not
    # depend on which cells the shell filter keeps.
    for x in axis:
        cells = np.column_stack((np.full_like(cy, x), cy, cz))
        offsets = 0.5 + (rng.random(cells.shape) - 0.5) * jitter
        centre_dist = np.linalg.norm(cells + 0.5, axis=1)
        in_shell = np.abs(centre_dist - lattice_radius) <= SHELL_MARGIN_CELLS
        slabs.append(cells[in_shell] + offsets[in_shell])
    return np.concatenate(slabs)


class CellularNoise:
    """Nearest-feature distance field over a spherical shell."""

    def __init__(self, seed: int, frequency: float, radius: float = DEFAULTS.SPHERE_RADIUS):
        self.seed = seed
        self.frequency = frequency
        self.lattice_radius = radius * frequency
        self.points = generate_feature_points(seed, self.lattice_radius)
        self._tree = cKDTree(self.points)

    def distance(self, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
        """Distance (in lattice units) to the nearest feature point."""
        query_points = np.column_stack((x, y, z)) * self.frequency
        dist, _ = self._tree.query(query_points, k=1)
        return dist

    def sample(self, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
        return np.clip(2.0 * self.distance(x, y, z) - 1.0, -1.0, 1.0)
