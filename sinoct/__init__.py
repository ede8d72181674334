"""sinoct - Incremental sinogram computation for CT teaching demos.

Turns an RGB raster into a parallel-beam sinogram one projection row at a
time, with Numba-compiled ray integration and cooperative scheduling.
"""

from .config import ScanConfig, ConfigurationError

from .geometry import (
    projection_angle,
    projection_angles,
    detector_offset,
    ray_point,
    ray_endpoints,
    parallel_trajectory_2d,
)

from .sinogram import Extremes, Sinogram, sample_pixel

from .scheduler import (
    FrameLoop,
    IncrementalScheduler,
    RunState,
    SchedulerError,
    compute_sinogram,
)

from .utils import ImageBridge, blank_canvas

__version__ = '0.1.0'

__all__ = [
    'ScanConfig',
    'ConfigurationError',
    'projection_angle',
    'projection_angles',
    'detector_offset',
    'ray_point',
    'ray_endpoints',
    'parallel_trajectory_2d',
    'Extremes',
    'Sinogram',
    'sample_pixel',
    'FrameLoop',
    'IncrementalScheduler',
    'RunState',
    'SchedulerError',
    'compute_sinogram',
    'ImageBridge',
    'blank_canvas',
]
