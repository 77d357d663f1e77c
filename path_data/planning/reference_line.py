"""Spline reference line.

The reference line is the road centerline used as the baseline of the
Frenet frame. It is parameterized by its own arc length s and built as a
natural cubic spline through a list of waypoints.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

import numpy as np
from loguru import logger
from scipy.interpolate import CubicSpline
from scipy.optimize import minimize_scalar

from ..config import PathDataConfig
from ..core.exceptions import ProjectionError


@dataclass(frozen=True)
class ReferencePoint:
    """Point on the reference line with its local geometry."""
    x: float
    y: float
    heading: float
    kappa: float
    dkappa: float
    s: float


@dataclass(frozen=True)
class SLPoint:
    """Frenet coordinates (s, l) of a point."""
    s: float
    l: float


class ReferenceCurve(Protocol):
    """Interface PathData requires from a reference line."""
    
    def point_at_arc_length(self, s: float) -> ReferencePoint:
        ...
    
    def heading_and_curvature_at(self, s: float) -> Tuple[float, float, float]:
        ...
    
    def project_to_frenet(self, x: float, y: float) -> SLPoint:
        ...
    
    def to_cartesian(self, s: float, l: float) -> Tuple[float, float]:
        ...


class ReferenceLine:
    """Cubic spline reference line parameterized by arc length.
    
    Args:
        x: x coordinates of waypoints
        y: y coordinates of waypoints
        config: Supplies projection_samples, projection_tolerance and
            max_lateral_offset; defaults are used when None
    """
    
    def __init__(
        self,
        x: List[float],
        y: List[float],
        config: Optional[PathDataConfig] = None
    ):
        if config is None:
            config = PathDataConfig()
        
        x = np.asarray(x, dtype=float)
        y = np.asarray(y, dtype=float)
        if x.shape != y.shape or x.ndim != 1:
            raise ValueError(f"x and y must be 1-D with the same length, got {x.shape} and {y.shape}")
        if len(x) < 2:
            raise ValueError(f"At least 2 waypoints are required, got {len(x)}")
        
        ds = np.hypot(np.diff(x), np.diff(y))
        if np.any(ds <= 0.0):
            raise ValueError("Consecutive waypoints must be distinct")
        
        self.s = np.concatenate([[0.0], np.cumsum(ds)])
        self.sx = CubicSpline(self.s, x, bc_type='natural')
        self.sy = CubicSpline(self.s, y, bc_type='natural')
        
        self.projection_tolerance = config.projection_tolerance
        self.max_lateral_offset = config.max_lateral_offset
        
        # Coarse lookup table for projection
        self._sample_s = np.linspace(0.0, self.length, max(int(config.projection_samples), 2))
        self._sample_x = self.sx(self._sample_s)
        self._sample_y = self.sy(self._sample_s)
        
        logger.info(f"Reference line built from {len(x)} waypoints, length {self.length:.2f} m")
    
    @classmethod
    def from_config(cls, config: PathDataConfig) -> 'ReferenceLine':
        """Build the reference line from the configured waypoints."""
        return cls(config.reference_waypoints_x, config.reference_waypoints_y, config)
    
    @property
    def length(self) -> float:
        """Total arc length [m]."""
        return float(self.s[-1])
    
    def _clamp(self, s: float) -> float:
        return min(max(float(s), 0.0), self.length)
    
    def heading_and_curvature_at(self, s: float) -> Tuple[float, float, float]:
        """Heading, curvature and curvature rate at arc length s (clamped)."""
        s = self._clamp(s)
        dx, ddx, dddx = self.sx(s, 1), self.sx(s, 2), self.sx(s, 3)
        dy, ddy, dddy = self.sy(s, 1), self.sy(s, 2), self.sy(s, 3)
        
        heading = math.atan2(dy, dx)
        
        a = dx * ddy - dy * ddx
        b = dx * dddy - dy * dddx
        c = dx * ddx + dy * ddy
        d = dx * dx + dy * dy
        kappa = a / d ** 1.5
        dkappa = (b * d - 3.0 * a * c) / (d * d * d)
        return float(heading), float(kappa), float(dkappa)
    
    def point_at_arc_length(self, s: float) -> ReferencePoint:
        """Reference point at arc length s, clamped to [0, length]."""
        s = self._clamp(s)
        heading, kappa, dkappa = self.heading_and_curvature_at(s)
        return ReferencePoint(
            x=float(self.sx(s)),
            y=float(self.sy(s)),
            heading=heading,
            kappa=kappa,
            dkappa=dkappa,
            s=s,
        )
    
    def to_cartesian(self, s: float, l: float) -> Tuple[float, float]:
        """Convert Frenet (s, l) to global (x, y).
        
        Raises:
            ProjectionError: If s lies outside the reference line
        """
        if s < -self.projection_tolerance or s > self.length + self.projection_tolerance:
            raise ProjectionError(
                f"s={s:.3f} is outside the reference line [0, {self.length:.3f}]"
            )
        ref = self.point_at_arc_length(s)
        x = ref.x - math.sin(ref.heading) * l
        y = ref.y + math.cos(ref.heading) * l
        return x, y
    
    def project_to_frenet(self, x: float, y: float) -> SLPoint:
        """Project a global point onto the reference line.
        
        Finds the nearest sample of a coarse lookup table, then refines s
        with a bounded scalar minimization of the squared distance.
        
        Raises:
            ProjectionError: If the point lies beyond either end of the line
                or farther laterally than max_lateral_offset
        """
        dist_sq = (self._sample_x - x) ** 2 + (self._sample_y - y) ** 2
        idx = int(np.argmin(dist_sq))
        best_s = float(self._sample_s[idx])
        best_dist_sq = float(dist_sq[idx])
        
        lo = self._sample_s[max(idx - 1, 0)]
        hi = self._sample_s[min(idx + 1, len(self._sample_s) - 1)]
        result = minimize_scalar(
            lambda s: (self.sx(s) - x) ** 2 + (self.sy(s) - y) ** 2,
            bounds=(lo, hi),
            method='bounded',
            options={'xatol': 1.0e-9},
        )
        if result.success and float(result.fun) < best_dist_sq:
            best_s = float(result.x)
        
        ref = self.point_at_arc_length(best_s)
        dx = x - ref.x
        dy = y - ref.y
        cos_theta_r = math.cos(ref.heading)
        sin_theta_r = math.sin(ref.heading)
        
        longitudinal = cos_theta_r * dx + sin_theta_r * dy
        if abs(longitudinal) > self.projection_tolerance:
            raise ProjectionError(
                f"Point ({x:.3f}, {y:.3f}) lies {longitudinal:+.3f} m beyond "
                f"the reference line end at s={best_s:.3f}"
            )
        
        cross_rd_nd = cos_theta_r * dy - sin_theta_r * dx
        l = math.copysign(math.hypot(dx, dy), cross_rd_nd)
        if self.max_lateral_offset is not None and abs(l) > self.max_lateral_offset:
            raise ProjectionError(
                f"Point ({x:.3f}, {y:.3f}) is {abs(l):.3f} m from the reference line, "
                f"limit is {self.max_lateral_offset:.3f} m"
            )
        
        return SLPoint(s=best_s, l=l)
