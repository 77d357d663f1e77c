"""Core data structures for path representations.

This module defines the two discretizations a planned path is held in:
an absolute Cartesian one (x, y, heading, curvature, arc length) and a
road-relative Frenet one (s, l and the lateral derivatives w.r.t. s).
"""

import bisect
import dataclasses
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence

import numpy as np
from dataclasses_json import dataclass_json

from .coordinate_converter import normalize_angle
from .exceptions import EmptyPathError


@dataclass_json
@dataclass
class CartesianPoint:
    """A sample of a path in the global Cartesian frame.
    
    Attributes:
        x: X coordinate in global frame [m]
        y: Y coordinate in global frame [m]
        z: Elevation [m]
        theta: Heading angle [rad]
        kappa: Curvature [1/m]
        dkappa: Curvature rate w.r.t. arc length [1/m²]
        ddkappa: Second derivative of curvature w.r.t. arc length [1/m³]
        s: Cumulative arc length along this path [m]
    """
    x: float
    y: float
    z: float = 0.0
    theta: float = 0.0
    kappa: float = 0.0
    dkappa: float = 0.0
    ddkappa: float = 0.0
    s: float = 0.0
    
    def to_array(self) -> np.ndarray:
        """Convert to numpy array [x, y, theta, kappa, s]."""
        return np.array([self.x, self.y, self.theta, self.kappa, self.s])


@dataclass_json
@dataclass
class FrenetPoint:
    """A sample of a path in the Frenet frame of a reference line.
    
    Attributes:
        s: Longitudinal position along the reference line [m]
        l: Signed lateral offset, positive to the left [m]
        dl: First derivative of l w.r.t. s
        ddl: Second derivative of l w.r.t. s [1/m]
    """
    s: float
    l: float
    dl: float = 0.0
    ddl: float = 0.0
    
    def to_array(self) -> np.ndarray:
        """Convert to numpy array [s, l, dl, ddl]."""
        return np.array([self.s, self.l, self.dl, self.ddl])


def _lerp(a: float, b: float, ratio: float) -> float:
    return a + (b - a) * ratio


@dataclass
class CartesianPath:
    """Ordered Cartesian discretization of a path.
    
    Insertion order is traversal order. Sample arc lengths are expected
    to be non-decreasing.
    """
    points: List[CartesianPoint] = field(default_factory=list)
    
    def __len__(self) -> int:
        return len(self.points)
    
    def __iter__(self) -> Iterator[CartesianPoint]:
        return iter(self.points)
    
    def __getitem__(self, idx: int) -> CartesianPoint:
        return self.points[idx]
    
    @property
    def length(self) -> float:
        """Arc length of the last sample, 0 for an empty path."""
        if not self.points:
            return 0.0
        return self.points[-1].s
    
    def evaluate_at_arc_length(self, s: float) -> CartesianPoint:
        """Evaluate the path at an arbitrary arc length.
        
        Interpolates linearly between the two bracketing samples (heading
        along the shorter arc). Queries before the first or after the last
        sample return a copy of that endpoint.
        
        Args:
            s: Arc length along the path [m]
            
        Returns:
            Interpolated point
            
        Raises:
            EmptyPathError: If the path has no samples
        """
        if not self.points:
            raise EmptyPathError("Cannot evaluate an empty Cartesian path")
        
        first, last = self.points[0], self.points[-1]
        if s <= first.s:
            return dataclasses.replace(first)
        if s >= last.s:
            return dataclasses.replace(last)
        
        arc_lengths = [p.s for p in self.points]
        i = bisect.bisect_right(arc_lengths, s) - 1
        p0, p1 = self.points[i], self.points[i + 1]
        
        ds = p1.s - p0.s
        if ds <= 0.0:
            return dataclasses.replace(p0)
        ratio = (s - p0.s) / ds
        
        d_theta = normalize_angle(p1.theta - p0.theta)
        return CartesianPoint(
            x=_lerp(p0.x, p1.x, ratio),
            y=_lerp(p0.y, p1.y, ratio),
            z=_lerp(p0.z, p1.z, ratio),
            theta=float(normalize_angle(p0.theta + d_theta * ratio)),
            kappa=_lerp(p0.kappa, p1.kappa, ratio),
            dkappa=_lerp(p0.dkappa, p1.dkappa, ratio),
            ddkappa=_lerp(p0.ddkappa, p1.ddkappa, ratio),
            s=s,
        )
    
    def to_array(self) -> np.ndarray:
        """Convert to numpy array of shape (n, 5): [x, y, theta, kappa, s]."""
        if not self.points:
            return np.empty((0, 5))
        return np.vstack([p.to_array() for p in self.points])
    
    @classmethod
    def from_xy(cls, x: Sequence[float], y: Sequence[float]) -> 'CartesianPath':
        """Create a path from coordinates, accumulating arc length.
        
        Heading and curvature are left at zero; they are not estimated.
        """
        if len(x) != len(y):
            raise ValueError(f"x ({len(x)}) and y ({len(y)}) must have the same length")
        points: List[CartesianPoint] = []
        for ix, iy in zip(x, y):
            s = 0.0
            if points:
                s = points[-1].s + float(np.hypot(ix - points[-1].x, iy - points[-1].y))
            points.append(CartesianPoint(x=float(ix), y=float(iy), s=s))
        return cls(points)


@dataclass
class FrenetPath:
    """Ordered Frenet discretization of a path."""
    points: List[FrenetPoint] = field(default_factory=list)
    
    def __len__(self) -> int:
        return len(self.points)
    
    def __iter__(self) -> Iterator[FrenetPoint]:
        return iter(self.points)
    
    def __getitem__(self, idx: int) -> FrenetPoint:
        return self.points[idx]
    
    def to_array(self) -> np.ndarray:
        """Convert to numpy array of shape (n, 4): [s, l, dl, ddl]."""
        if not self.points:
            return np.empty((0, 4))
        return np.vstack([p.to_array() for p in self.points])
    
    @classmethod
    def from_arrays(
        cls,
        s: Sequence[float],
        l: Sequence[float],
        dl: Optional[Sequence[float]] = None,
        ddl: Optional[Sequence[float]] = None
    ) -> 'FrenetPath':
        """Create from per-sample arrays; missing derivatives default to zero."""
        n = len(s)
        dl = [0.0] * n if dl is None else dl
        ddl = [0.0] * n if ddl is None else ddl
        if not (len(l) == len(dl) == len(ddl) == n):
            raise ValueError("s, l, dl and ddl must have the same length")
        return cls([
            FrenetPoint(s=float(a), l=float(b), dl=float(c), ddl=float(d))
            for a, b, c, d in zip(s, l, dl, ddl)
        ])
