"""Rendering kernel mapping sinogram buffers to an 8-bit RGBA raster."""

import math

from ..constants import _JIT_DECORATOR, _N_CHANNELS, _OPAQUE


@_JIT_DECORATOR
def _render_rows_kernel(d_sino, n_rows, n_det, vmin, vmax, d_out):
    """Rescale rows ``0 .. n_rows-1`` of `d_sino` into `d_out`.

    Each channel value becomes ``floor((v - vmin) / max(1, vmax - vmin) * 255)``
    clamped to [0, 255]; alpha is set to opaque. Rows from `n_rows` on are
    not read and keep whatever `d_out` holds.
    """
    value_range = max(1.0, vmax - vmin)
    for iang in range(n_rows):
        for idet in range(n_det):
            for c in range(_N_CHANNELS):
                norm = (d_sino[c, iang, idet] - vmin) / value_range
                px = int(math.floor(norm * 255.0))
                if px < 0:
                    px = 0
                elif px > 255:
                    px = 255
                d_out[iang, idet, c] = px
            d_out[iang, idet, _N_CHANNELS] = _OPAQUE
