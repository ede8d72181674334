"""Nearest-neighbor sampling of the source raster."""

import math

from ..constants import _JIT_DECORATOR, _FALLBACK_PIXEL


@_JIT_DECORATOR
def _sample_pixel(d_image, Nx, Ny, x, y):
    """Channel triple of the pixel containing the continuous point (x, y).

    Coordinates are floored toward the origin; points outside
    ``[0, Nx) x [0, Ny)`` contribute the fallback triple instead of failing.
    """
    ix = int(math.floor(x))
    iy = int(math.floor(y))
    if ix < 0 or iy < 0 or ix >= Nx or iy >= Ny:
        return float(_FALLBACK_PIXEL[0]), float(_FALLBACK_PIXEL[1]), float(_FALLBACK_PIXEL[2])
    return float(d_image[iy, ix, 0]), float(d_image[iy, ix, 1]), float(d_image[iy, ix, 2])
