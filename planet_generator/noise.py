# planet_generator/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides functions for generating 3D simplex noise and its fractal
(FBm and ridged) sums. It is designed to be a pure, stateless utility.

Data Contract:
---------------
- Inputs:
    - perm: A pre-shuffled NumPy permutation table (int array, length 512).
    - x, y, z: 1D NumPy float arrays of coordinates.
    - frequency, octaves, lacunarity, gain: Standard fractal parameters.
- Outputs:
    - A 1D NumPy array of noise values in the range [-1, 1].
- Side Effects: None.
- Invariants: The output has the same length as the inputs. The same table and
  coordinates always produce bit-identical output.
================================================================================
"""

import numpy as np
from numba import njit

# Fractal kinds understood by fractal_noise_3d.
FRACTAL_FBM = 0
FRACTAL_RIDGED = 1

# Skewing and unskewing factors for three dimensions.
_F3 = 1.0 / 3.0
_G3 = 1.0 / 6.0

# The 12 edge midpoints of a cube, used as gradient directions.
_GRADIENTS_3D = np.array([
    [1, 1, 0], [-1, 1, 0], [1, -1, 0], [-1, -1, 0],
    [1, 0, 1], [-1, 0, 1], [1, 0, -1], [-1, 0, -1],
    [0, 1, 1], [0, -1, 1], [0, 1, -1], [0, -1, -1],
], dtype=np.float64)


def make_permutation_table(seed: int) -> np.ndarray:
    """Builds the doubled 512-entry permutation table for a seed."""
    p = np.arange(256, dtype=np.int64)
    rng = np.random.default_rng(seed)
    rng.shuffle(p)
    return np.concatenate([p, p])


@njit
def _corner(perm, gi, x, y, z):
    "Contribution of one simplex corner."
    t = 0.6 - x * x - y * y - z * z
    if t < 0.0:
        return 0.0
    g = _GRADIENTS_3D[perm[gi] % 12]
    t *= t
    return t * t * (g[0] * x + g[1] * y + g[2] * z)


@njit
def _simplex_3d(perm, x, y, z):
    """Single-octave 3D simplex noise, roughly in [-1, 1]."""
    s = (x + y + z) * _F3
    i = int(np.floor(x + s))
    j = int(np.floor(y + s))
    k = int(np.floor(z + s))
    t = (i + j + k) * _G3
    x0 = x - (i - t)
    y0 = y - (j - t)
    z0 = z - (k - t)

    # Find which of the six tetrahedra of the skewed cube we are in.
    if x0 >= y0:
        if y0 >= z0:
            i1, j1, k1, i2, j2, k2 = 1, 0, 0, 1, 1, 0
        elif x0 >= z0:
            i1, j1, k1, i2, j2, k2 = 1, 0, 0, 1, 0, 1
        else:
            i1, j1, k1, i2, j2, k2 = 0, 0, 1, 1, 0, 1
    else:
        if y0 < z0:
            i1, j1, k1, i2, j2, k2 = 0, 0, 1, 0, 1, 1
        elif x0 < z0:
            i1, j1, k1, i2, j2, k2 = 0, 1, 0, 0, 1, 1
        else:
            i1, j1, k1, i2, j2, k2 = 0, 1, 0, 1, 1, 0

    x1 = x0 - i1 + _G3
    y1 = y0 - j1 + _G3
    z1 = z0 - k1 + _G3
    x2 = x0 - i2 + 2.0 * _G3
    y2 = y0 - j2 + 2.0 * _G3
    z2 = z0 - k2 + 2.0 * _G3
    x3 = x0 - 1.0 + 3.0 * _G3
    y3 = y0 - 1.0 + 3.0 * _G3
    z3 = z0 - 1.0 + 3.0 * _G3

    ii = i & 255
    jj = j & 255
    kk = k & 255

    n0 = _corner(perm, ii + perm[jj + perm[kk]], x0, y0, z0)
    n1 = _corner(perm, ii + i1 + perm[jj + j1 + perm[kk + k1]], x1, y1, z1)
    n2 = _corner(perm, ii + i2 + perm[jj + j2 + perm[kk + k2]], x2, y2, z2)
    n3 = _corner(perm, ii + 1 + perm[jj + 1 + perm[kk + 1]], x3, y3, z3)

    return 32.0 * (n0 + n1 + n2 + n3)


@njit
def fractal_noise_3d(perm, x, y, z, frequency=1.0, octaves=1, lacunarity=2.0, gain=0.5, kind=FRACTAL_FBM):
    """
    Generate fractal 3D simplex noise using a pre-computed permutation table.
    This function is JIT-compiled with Numba. The octave sum is divided by the
    total amplitude so the result stays within [-1, 1] for any octave count.
    """
    n = x.shape[0]
    out = np.zeros(n)

    bounding = 0.0
    amplitude = 1.0
    for _ in range(octaves):
        bounding += amplitude
        amplitude *= gain

    for idx in range(n):
        total = 0.0
        amplitude = 1.0
        freq = frequency
        for _ in range(octaves):
            value = _simplex_3d(perm, x[idx] * freq, y[idx] * freq, z[idx] * freq)
            if kind == FRACTAL_RIDGED:
                value = 1.0 - 2.0 * abs(value)
            total += value * amplitude
            amplitude *= gain
            freq *= lacunarity

        value = total / bounding
        if value > 1.0:
            value = 1.0
        elif value < -1.0:
            value = -1.0
        out[idx] = value

    return out
