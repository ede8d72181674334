"""Parallel-beam projection geometry.

This module maps (angle index, detector index) pairs to rays in image pixel
coordinates. All rays of one angle are parallel and the whole family rotates
rigidly with the angle; ``rotation_count`` stretches the swept range beyond a
single turn.
"""

import math
import torch

from .utils import _trig_tables


# ============================================================================
# Scalar Ray Geometry
# ============================================================================

def projection_angle(angle_index, config):
    """Angle in radians of sinogram row `angle_index`.

    ``2 * pi * rotation_count * angle_index / angle_count``.
    """
    return (2.0 * math.pi * config.rotation_count * angle_index) / config.angle_count


def detector_offset(detector_index, detector_count):
    """Signed distance of a detector element from the central ray."""
    return detector_index - detector_count / 2


def ray_point(t, offset, cos_a, sin_a, cx, cy):
    """Image coordinates of the sample at parameter `t` along a ray.

    Parameters
    ----------
    t : float
        Position along the ray, measured from the image center.
    offset : float
        Detector offset of the ray (see :func:`detector_offset`).
    cos_a, sin_a : float
        Cosine and sine of the projection angle.
    cx, cy : float
        Image center in pixels.

    Returns
    -------
    x, y : float
        Continuous pixel coordinates.
    """
    x = cx + t * cos_a - offset * sin_a
    y = cy + t * sin_a + offset * cos_a
    return x, y


def ray_endpoints(angle_index, detector_index, config, width, height):
    """First and last sample positions of one ray.

    Parameters
    ----------
    angle_index : int
        Sinogram row.
    detector_index : int
        Sinogram column.
    config : ScanConfig
        Scan parameters.
    width, height : int
        Size of the source raster.

    Returns
    -------
    start, end : tuple of float
        ``(x, y)`` of the first and the last sample taken along the ray.

    Examples
    --------
    >>> ray_endpoints(0, 300, ScanConfig(angle_count=4), 512, 512)
    ((0.0, 256.0), (511.0, 256.0))
    """
    cos_a, sin_a = _trig_tables([projection_angle(angle_index, config)])
    offset = detector_offset(detector_index, config.detector_count)
    cx, cy = width / 2, height / 2
    t_first = -height / 2
    t_last = t_first + (config.sample_count(height) - 1) * config.step_size
    start = ray_point(t_first, offset, float(cos_a[0]), float(sin_a[0]), cx, cy)
    end = ray_point(t_last, offset, float(cos_a[0]), float(sin_a[0]), cx, cy)
    return start, end


# ============================================================================
# Trajectory Tables
# ============================================================================

def projection_angles(config, dtype=torch.float64):
    """All projection angles of a scan.

    Parameters
    ----------
    config : ScanConfig
        Scan parameters.
    dtype : torch.dtype, optional
        Data type of the result (default: torch.float64).

    Returns
    -------
    torch.Tensor
        Angles in radians, shape (angle_count,).
    """
    # Same expression as projection_angle so per-row and tabulated angles agree bitwise
    angles = [projection_angle(a, config) for a in range(config.angle_count)]
    return torch.tensor(angles, dtype=torch.float64).to(dtype)


def parallel_trajectory_2d(config, width, height, device='cpu', dtype=torch.float32):
    """Generate the per-view parallel-beam geometry of a scan.

    Parameters
    ----------
    config : ScanConfig
        Scan parameters.
    width, height : int
        Size of the source raster in pixels.
    device : str or torch.device, optional
        Device for tensors (default: 'cpu').
    dtype : torch.dtype, optional
        Data type for tensors (default: torch.float32).

    Returns
    -------
    ray_dir : torch.Tensor
        Ray direction unit vectors, shape (angle_count, 2).
    det_origin : torch.Tensor
        Image-space point where the central ray (offset 0) crosses the
        detector line through the image center, shape (angle_count, 2).
    det_u_vec : torch.Tensor
        Unit vectors along which detector offsets grow, shape (angle_count, 2).

    Examples
    --------
    >>> ray_dir, det_origin, det_u_vec = parallel_trajectory_2d(
    ...     ScanConfig(angle_count=180, rotation_count=2), 512, 512
    ... )
    >>> print(ray_dir.shape)  # (180, 2)
    """
    angles = projection_angles(config)
    cos_angles = torch.cos(angles)
    sin_angles = torch.sin(angles)

    ray_dir = torch.stack((cos_angles, sin_angles), dim=1)
    # Offsets move perpendicular to the ray: (-sin, cos)
    det_u_vec = torch.stack((-sin_angles, cos_angles), dim=1)
    det_origin = torch.zeros((config.angle_count, 2), dtype=torch.float64)
    det_origin[:, 0] = width / 2
    det_origin[:, 1] = height / 2

    return (
        ray_dir.to(device=device, dtype=dtype),
        det_origin.to(device=device, dtype=dtype),
        det_u_vec.to(device=device, dtype=dtype),
    )
