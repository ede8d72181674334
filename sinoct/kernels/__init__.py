"""Numba kernels for sinogram computation.

This subpackage contains the JIT-compiled sampling, row integration and
rendering kernels used by :mod:`sinoct.sinogram`.
"""

from .sampling import _sample_pixel
from .integration import _integrate_row_kernel
from .rendering import _render_rows_kernel

__all__ = [
    '_sample_pixel',
    '_integrate_row_kernel',
    '_render_rows_kernel',
]
