import math

import pytest
import torch

from sinoct import (
    ScanConfig,
    detector_offset,
    parallel_trajectory_2d,
    projection_angle,
    projection_angles,
    ray_endpoints,
    ray_point,
)


def test_projection_angle_single_rotation():
    config = ScanConfig(angle_count=8)
    assert projection_angle(0, config) == 0.0
    assert projection_angle(2, config) == pytest.approx(math.pi / 2)
    assert projection_angle(4, config) == pytest.approx(math.pi)


def test_rotation_count_stretches_swept_range():
    config = ScanConfig(angle_count=8, rotation_count=2)
    assert projection_angle(4, config) == pytest.approx(2 * math.pi)
    assert projection_angle(7, config) == pytest.approx(2 * math.pi * 7 / 4)


def test_projection_angles_match_scalar_formula():
    config = ScanConfig(angle_count=7, rotation_count=1.5)
    angles = projection_angles(config)
    assert angles.dtype == torch.float64
    assert angles.shape == (7,)
    for a in range(7):
        assert angles[a].item() == projection_angle(a, config)


def test_detector_offset_is_centered():
    assert detector_offset(0, 600) == -300
    assert detector_offset(300, 600) == 0
    assert detector_offset(599, 600) == 299
    assert detector_offset(0, 5) == -2.5


def test_ray_point_at_zero_angle():
    # cos = 1, sin = 0: t runs along x, the offset along y
    assert ray_point(-2.0, 1.0, 1.0, 0.0, 4.0, 4.0) == (2.0, 5.0)


def test_ray_point_at_quarter_turn():
    # cos = 0, sin = 1: t runs along y, the offset along -x
    assert ray_point(3.0, 1.0, 0.0, 1.0, 4.0, 4.0) == (3.0, 7.0)


def test_ray_endpoints_central_ray():
    start, end = ray_endpoints(0, 300, ScanConfig(angle_count=4), 512, 512)
    assert start == (0.0, 256.0)
    assert end == (511.0, 256.0)


def test_ray_endpoints_follow_step_size():
    start, end = ray_endpoints(0, 2, ScanConfig(angle_count=1, detector_count=4, step_size=0.5), 4, 4)
    assert start == (0.0, 2.0)
    assert end == (3.5, 2.0)


def test_parallel_trajectory_2d():
    config = ScanConfig(angle_count=12, rotation_count=2)
    ray_dir, det_origin, det_u_vec = parallel_trajectory_2d(config, 64, 32)

    assert ray_dir.shape == det_origin.shape == det_u_vec.shape == (12, 2)
    assert ray_dir.dtype == torch.float32
    torch.testing.assert_close(torch.linalg.norm(ray_dir, dim=1), torch.ones(12))
    torch.testing.assert_close(torch.linalg.norm(det_u_vec, dim=1), torch.ones(12))
    torch.testing.assert_close((ray_dir * det_u_vec).sum(dim=1), torch.zeros(12), atol=1e-6, rtol=0)
    torch.testing.assert_close(det_origin, torch.tensor([[32.0, 16.0]]).expand(12, 2))


def test_parallel_trajectory_2d_agrees_with_ray_point():
    config = ScanConfig(angle_count=5, rotation_count=1.25)
    ray_dir, det_origin, det_u_vec = parallel_trajectory_2d(config, 16, 16, dtype=torch.float64)
    for a in range(5):
        cos_a, sin_a = ray_dir[a].tolist()
        t, offset = 3.0, -2.0
        expected = det_origin[a] + t * ray_dir[a] + offset * det_u_vec[a]
        x, y = ray_point(t, offset, cos_a, sin_a, 8.0, 8.0)
        torch.testing.assert_close(torch.tensor([x, y], dtype=torch.float64), expected)
