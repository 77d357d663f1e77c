"""Tests for the analytic Frenet/Cartesian relations."""

import math
import pytest
import numpy as np

from path_data.core.coordinate_converter import normalize_angle, SLAnalyticTransformation
from path_data.core.exceptions import DegenerateGeometryError, ProjectionError


def test_normalize_angle():
    """Test angle normalization."""
    assert abs(normalize_angle(0.0)) < 1e-6
    assert abs(normalize_angle(2 * np.pi)) < 1e-6
    assert abs(normalize_angle(np.pi) - np.pi) < 1e-6
    assert abs(normalize_angle(-np.pi) - (-np.pi)) < 1e-6
    assert abs(normalize_angle(3 * np.pi) - (-np.pi)) < 1e-6


def test_normalize_angle_array():
    angles = np.array([0.0, 2.5 * np.pi, -2.5 * np.pi])
    result = normalize_angle(angles)
    assert np.allclose(result, [0.0, 0.5 * np.pi, -0.5 * np.pi])


def test_theta_on_straight_reference():
    """Zero lateral slope keeps the reference heading."""
    theta = SLAnalyticTransformation.calculate_theta(0.3, 0.0, 1.0, 0.0)
    assert theta == pytest.approx(0.3)


def test_theta_with_lateral_slope():
    """Heading is corrected by atan2(dl, 1 - kappa_r * l)."""
    theta = SLAnalyticTransformation.calculate_theta(0.0, 0.1, 2.0, 0.4)
    assert theta == pytest.approx(math.atan2(0.4, 0.8))


def test_theta_wraps_around():
    theta = SLAnalyticTransformation.calculate_theta(math.pi - 0.1, 0.0, 0.0, 1.0)
    assert -math.pi <= theta <= math.pi
    assert theta == pytest.approx(math.pi - 0.1 + math.pi / 4 - 2 * math.pi)


def test_kappa_on_straight_reference():
    """On a straight line curvature reduces to ddl / (1 + dl^2)^1.5."""
    kappa = SLAnalyticTransformation.calculate_kappa(0.0, 0.0, 0.5, 0.2, 0.1)
    assert kappa == pytest.approx(0.1 / (1.0 + 0.04) ** 1.5)


def test_kappa_concentric_circle():
    """Constant offset from a circle of radius R is a circle of radius R - l."""
    rkappa = 0.1
    kappa = SLAnalyticTransformation.calculate_kappa(rkappa, 0.0, 1.0, 0.0, 0.0)
    assert kappa == pytest.approx(1.0 / 9.0)
    
    kappa_outside = SLAnalyticTransformation.calculate_kappa(rkappa, 0.0, -2.0, 0.0, 0.0)
    assert kappa_outside == pytest.approx(1.0 / 12.0)


def test_singular_configuration_rejected():
    """A point on the center of curvature has no defined heading or curvature."""
    with pytest.raises(DegenerateGeometryError):
        SLAnalyticTransformation.calculate_theta(0.0, 0.5, 2.0, 0.0)
    with pytest.raises(DegenerateGeometryError):
        SLAnalyticTransformation.calculate_kappa(0.5, 0.0, 2.0, 0.1, 0.0)


def test_singularity_epsilon_is_configurable():
    # 1 - 0.5 * 1.99 = 0.005
    assert math.isfinite(SLAnalyticTransformation.calculate_kappa(0.5, 0.0, 1.99, 0.0, 0.0))
    with pytest.raises(DegenerateGeometryError):
        SLAnalyticTransformation.calculate_kappa(0.5, 0.0, 1.99, 0.0, 0.0, epsilon=0.01)


def test_degenerate_geometry_is_projection_error():
    assert issubclass(DegenerateGeometryError, ProjectionError)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
