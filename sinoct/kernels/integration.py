"""Row integration kernel for parallel-beam sinograms.

One call integrates every detector ray of a single projection angle with a
Riemann sum of nearest-neighbor samples and stores the per-channel means.
"""

from ..constants import _JIT_DECORATOR, _INF, _N_CHANNELS
from .sampling import _sample_pixel


@_JIT_DECORATOR
def _integrate_row_kernel(
    d_image, Nx, Ny,
    d_sino, iang, n_det,
    cos_a, sin_a, cx, cy,
    step, n_samples
):
    """Integrate all rays of projection row `iang` into `d_sino`.

    Parameters
    ----------
    d_image : numpy.ndarray
        Source raster, shape (Ny, Nx, 3), uint8.
    Nx : int
        Raster width.
    Ny : int
        Raster height; rays are sampled over ``t in [-Ny/2, Ny/2)``.
    d_sino : numpy.ndarray
        Channel buffers, shape (3, n_ang, n_det), float32. Only row `iang`
        is written.
    iang : int
        Row (projection angle index) to compute.
    n_det : int
        Number of detector elements.
    cos_a, sin_a : float
        Cosine and sine of the projection angle.
    cx, cy : float
        Image center in pixels.
    step : float
        Distance between samples along the ray.
    n_samples : int
        Number of samples per ray, ``floor(Ny / step)``.

    Returns
    -------
    row_min, row_max : float
        Smallest and largest stored value of the row over all channels.
    """
    t_start = -Ny * 0.5
    row_min, row_max = _INF, -_INF

    for idet in range(n_det):
        # Rays of one angle are parallel, shifted along (-sin, cos)
        offset = idet - n_det * 0.5
        sum_r, sum_g, sum_b = 0.0, 0.0, 0.0

        for k in range(n_samples):
            t = t_start + k * step
            x = cx + t * cos_a - offset * sin_a
            y = cy + t * sin_a + offset * cos_a
            r, g, b = _sample_pixel(d_image, Nx, Ny, x, y)
            sum_r += r
            sum_g += g
            sum_b += b

        d_sino[0, iang, idet] = sum_r / n_samples
        d_sino[1, iang, idet] = sum_g / n_samples
        d_sino[2, iang, idet] = sum_b / n_samples

        # Fold the stored (float32) values so rendering hits 0 and 255 exactly
        for c in range(_N_CHANNELS):
            val = d_sino[c, iang, idet]
            if val < row_min:
                row_min = val
            if val > row_max:
                row_max = val

    return row_min, row_max
