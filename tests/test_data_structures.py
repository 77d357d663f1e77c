"""Tests for Cartesian and Frenet path containers."""

import math
import pytest
import numpy as np

from path_data.core.data_structures import CartesianPoint, CartesianPath, FrenetPoint, FrenetPath
from path_data.core.exceptions import EmptyPathError


@pytest.fixture
def cartesian_path():
    """Three samples along y = 0 with increasing heading and curvature."""
    return CartesianPath([
        CartesianPoint(x=0.0, y=0.0, theta=0.0, kappa=0.0, s=0.0),
        CartesianPoint(x=1.0, y=0.0, theta=0.2, kappa=0.1, s=1.0),
        CartesianPoint(x=3.0, y=0.0, theta=0.4, kappa=0.3, s=3.0),
    ])


def test_evaluate_interpolates_between_samples(cartesian_path):
    point = cartesian_path.evaluate_at_arc_length(2.0)
    
    assert point.x == pytest.approx(2.0)
    assert point.theta == pytest.approx(0.3)
    assert point.kappa == pytest.approx(0.2)
    assert point.s == pytest.approx(2.0)


def test_evaluate_at_sample_returns_sample(cartesian_path):
    point = cartesian_path.evaluate_at_arc_length(1.0)
    assert point.x == pytest.approx(1.0)
    assert point.theta == pytest.approx(0.2)


def test_evaluate_clamps_to_endpoints(cartesian_path):
    """Queries outside the path never extrapolate."""
    before = cartesian_path.evaluate_at_arc_length(-5.0)
    after = cartesian_path.evaluate_at_arc_length(100.0)
    
    assert before == cartesian_path[0]
    assert after == cartesian_path[-1]
    # Returned points are copies
    assert before is not cartesian_path[0]


def test_evaluate_interpolates_heading_across_pi():
    path = CartesianPath([
        CartesianPoint(x=0.0, y=0.0, theta=math.pi - 0.1, s=0.0),
        CartesianPoint(x=1.0, y=0.0, theta=-math.pi + 0.1, s=1.0),
    ])
    point = path.evaluate_at_arc_length(0.5)
    assert abs(abs(point.theta) - math.pi) < 1e-9


def test_evaluate_empty_path_raises():
    with pytest.raises(EmptyPathError):
        CartesianPath().evaluate_at_arc_length(0.0)


def test_from_xy_accumulates_arc_length():
    path = CartesianPath.from_xy([0.0, 3.0, 3.0], [0.0, 4.0, 5.0])
    
    assert len(path) == 3
    assert [p.s for p in path] == pytest.approx([0.0, 5.0, 6.0])
    assert path.length == pytest.approx(6.0)


def test_from_xy_length_mismatch():
    with pytest.raises(ValueError):
        CartesianPath.from_xy([0.0, 1.0], [0.0])


def test_cartesian_to_array(cartesian_path):
    arr = cartesian_path.to_array()
    assert arr.shape == (3, 5)
    assert np.allclose(arr[:, 0], [0.0, 1.0, 3.0])
    assert CartesianPath().to_array().shape == (0, 5)


def test_frenet_from_arrays_defaults_derivatives():
    path = FrenetPath.from_arrays([0.0, 1.0], [0.5, 0.6])
    
    assert len(path) == 2
    assert path[1] == FrenetPoint(s=1.0, l=0.6, dl=0.0, ddl=0.0)
    assert path.to_array().shape == (2, 4)


def test_frenet_from_arrays_length_mismatch():
    with pytest.raises(ValueError):
        FrenetPath.from_arrays([0.0, 1.0], [0.5], [0.0, 0.0], [0.0, 0.0])


def test_point_serialization():
    point = CartesianPoint(x=1.0, y=2.0, theta=0.5, s=3.0)
    data = point.to_dict()
    
    assert data['x'] == 1.0
    assert data['s'] == 3.0
    assert CartesianPoint.from_dict(data) == point
