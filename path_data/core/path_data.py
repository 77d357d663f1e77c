"""Path data: a planned path held in Cartesian and Frenet form.

PathData keeps a Cartesian discretization and a Frenet discretization of
the same path consistent with a borrowed reference line. Setting either
one derives the other.

The reference line is not owned: it must outlive the PathData that
references it and must not be mutated while conversions run.

Failure semantics of the setters: the given path is stored first and the
other representation is derived afterwards. If derivation fails, the
stored field keeps the new value while the derived field keeps its
previous value. Callers that need atomicity snapshot and restore around
the call.
"""

import dataclasses
from typing import List, Optional, TYPE_CHECKING

from loguru import logger

from ..config import PathDataConfig
from .coordinate_converter import SLAnalyticTransformation
from .data_structures import CartesianPath, CartesianPoint, FrenetPath, FrenetPoint
from .exceptions import (
    EmptyPathError,
    InternalInconsistencyError,
    MissingReferenceCurveError,
    ProjectionError,
)

if TYPE_CHECKING:
    from ..planning.reference_line import ReferenceCurve


# Reference s closer than this counts as an exact sample match [m]
DISTANCE_EPSILON = 1.0e-3


class PathData:
    """A path in two synchronized coordinate representations.
    
    Args:
        config: Optional configuration supplying the singularity threshold
            and the default debug sample limit
    """
    
    def __init__(self, config: Optional[PathDataConfig] = None):
        self._cartesian_path = CartesianPath()
        self._frenet_path = FrenetPath()
        self._reference_line: Optional['ReferenceCurve'] = None
        
        if config is None:
            config = PathDataConfig()
        self.singularity_epsilon = config.singularity_epsilon
        self.debug_sample_limit = config.debug_sample_limit
    
    @property
    def cartesian_path(self) -> CartesianPath:
        return self._cartesian_path
    
    @property
    def frenet_path(self) -> FrenetPath:
        return self._frenet_path
    
    @property
    def reference_line(self) -> Optional['ReferenceCurve']:
        return self._reference_line
    
    def set_reference_line(self, reference_line: Optional['ReferenceCurve']) -> None:
        """Attach a reference line, discarding both paths."""
        self.clear()
        self._reference_line = reference_line
    
    def set_cartesian_path(self, path: CartesianPath) -> bool:
        """Set the Cartesian path and derive the Frenet path from it.
        
        The path is copied; later changes to the argument do not reach
        this PathData.
        
        Args:
            path: Cartesian discretization of the path
            
        Returns:
            True on success
            
        Raises:
            MissingReferenceCurveError: If no reference line is attached
            ProjectionError: If any sample cannot be projected onto the
                reference line. The Cartesian path is already replaced.
        """
        if self._reference_line is None:
            logger.error(
                "Should NOT set Cartesian path when reference line is None. "
                "Please set reference line first."
            )
            raise MissingReferenceCurveError("No reference line attached")
        
        self._cartesian_path = CartesianPath([dataclasses.replace(p) for p in path])
        try:
            frenet_path = self.cartesian_to_frenet(self._cartesian_path)
        except ProjectionError:
            logger.error("Fail to transfer Cartesian path to Frenet path.")
            raise
        self._frenet_path = frenet_path
        self._check_consistency()
        return True
    
    def set_frenet_path(self, path: FrenetPath) -> bool:
        """Set the Frenet path and derive the Cartesian path from it.
        
        The path is copied, as in set_cartesian_path.
        
        Args:
            path: Frenet discretization of the path
            
        Returns:
            True on success
            
        Raises:
            MissingReferenceCurveError: If no reference line is attached
            ProjectionError: If any sample lies outside the reference line
                or in a singular configuration. The Frenet path is already
                replaced.
        """
        if self._reference_line is None:
            logger.error(
                "Should NOT set Frenet path when reference line is None. "
                "Please set reference line first."
            )
            raise MissingReferenceCurveError("No reference line attached")
        
        self._frenet_path = FrenetPath([dataclasses.replace(p) for p in path])
        try:
            cartesian_path = self.frenet_to_cartesian(self._frenet_path)
        except ProjectionError:
            logger.error("Fail to transfer Frenet path to Cartesian path.")
            raise
        self._cartesian_path = cartesian_path
        self._check_consistency()
        return True
    
    def get_point_with_path_s(self, s: float) -> CartesianPoint:
        """Point at arc length s along this path, clamped to its ends."""
        return self._cartesian_path.evaluate_at_arc_length(s)
    
    def get_point_with_reference_s(self, ref_s: float) -> CartesianPoint:
        """Cartesian sample whose reference line s is nearest to ref_s.
        
        Returns the first sample within DISTANCE_EPSILON of ref_s if one
        exists, otherwise the sample with the smallest |s - ref_s|.
        The returned point is a copy.
        
        Raises:
            InternalInconsistencyError: If the two paths differ in length
            EmptyPathError: If the paths are empty
        """
        self._check_consistency()
        if len(self._frenet_path) == 0:
            raise EmptyPathError("Cannot look up a point on an empty path")
        
        index = 0
        shortest_distance = float('inf')
        for i, frenet_point in enumerate(self._frenet_path):
            curr_distance = abs(ref_s - frenet_point.s)
            if curr_distance < DISTANCE_EPSILON:
                index = i
                break
            if curr_distance < shortest_distance:
                index = i
                shortest_distance = curr_distance
        
        return dataclasses.replace(self._cartesian_path[index])
    
    def clear(self) -> None:
        """Drop both paths and the reference line."""
        self._cartesian_path = CartesianPath()
        self._frenet_path = FrenetPath()
        self._reference_line = None
    
    def debug_string(self, sample_limit: Optional[int] = None) -> str:
        """Render the first sample_limit Cartesian samples, one per line."""
        if sample_limit is None:
            sample_limit = self.debug_sample_limit
        limit = min(len(self._cartesian_path), max(int(sample_limit), 0))
        lines = [p.to_json() for p in self._cartesian_path.points[:limit]]
        return "[\n" + ",\n".join(lines) + "]\n"
    
    def __str__(self) -> str:
        return self.debug_string()
    
    def frenet_to_cartesian(self, frenet_path: FrenetPath) -> CartesianPath:
        """Convert a Frenet path to a Cartesian path on the reference line.
        
        Heading and curvature follow analytically from the reference
        geometry and (l, dl, ddl). Arc length is accumulated along the
        resulting polyline starting at 0. Elevation and higher curvature
        derivatives are zero.
        
        Raises:
            MissingReferenceCurveError: If no reference line is attached
            ProjectionError: If any sample fails; no partial output
        """
        reference_line = self._require_reference_line()
        
        path_points: List[CartesianPoint] = []
        for frenet_point in frenet_path:
            try:
                x, y = reference_line.to_cartesian(frenet_point.s, frenet_point.l)
            except ProjectionError:
                logger.error(
                    f"Fail to convert sl point ({frenet_point.s:.3f}, {frenet_point.l:.3f}) "
                    "to xy point"
                )
                raise
            
            rtheta, rkappa, rdkappa = reference_line.heading_and_curvature_at(frenet_point.s)
            theta = SLAnalyticTransformation.calculate_theta(
                rtheta, rkappa, frenet_point.l, frenet_point.dl,
                epsilon=self.singularity_epsilon
            )
            kappa = SLAnalyticTransformation.calculate_kappa(
                rkappa, rdkappa, frenet_point.l, frenet_point.dl, frenet_point.ddl,
                epsilon=self.singularity_epsilon
            )
            
            if path_points:
                last = path_points[-1]
                s = last.s + ((x - last.x) ** 2 + (y - last.y) ** 2) ** 0.5
            else:
                s = 0.0
            
            path_points.append(CartesianPoint(
                x=x, y=y, z=0.0, theta=theta, kappa=kappa,
                dkappa=0.0, ddkappa=0.0, s=s
            ))
        
        logger.debug(f"Converted {len(path_points)} Frenet points to Cartesian")
        return CartesianPath(path_points)
    
    def cartesian_to_frenet(self, cartesian_path: CartesianPath) -> FrenetPath:
        """Project a Cartesian path onto the reference line.
        
        Only s and l are recovered; dl and ddl are left at zero.
        
        Raises:
            MissingReferenceCurveError: If no reference line is attached
            ProjectionError: If any sample fails; no partial output
        """
        reference_line = self._require_reference_line()
        
        frenet_points: List[FrenetPoint] = []
        for path_point in cartesian_path:
            try:
                sl_point = reference_line.project_to_frenet(path_point.x, path_point.y)
            except ProjectionError:
                logger.error(
                    f"Fail to transfer Cartesian point ({path_point.x:.3f}, {path_point.y:.3f}) "
                    "to Frenet point."
                )
                raise
            # dl and ddl are not recovered by this direction
            frenet_points.append(FrenetPoint(s=sl_point.s, l=sl_point.l))
        
        logger.debug(f"Converted {len(frenet_points)} Cartesian points to Frenet")
        return FrenetPath(frenet_points)
    
    def _require_reference_line(self) -> 'ReferenceCurve':
        if self._reference_line is None:
            raise MissingReferenceCurveError("No reference line attached")
        return self._reference_line
    
    def _check_consistency(self) -> None:
        n_cartesian = len(self._cartesian_path)
        n_frenet = len(self._frenet_path)
        if n_cartesian != n_frenet:
            logger.error(
                f"Cartesian path ({n_cartesian}) and Frenet path ({n_frenet}) diverged"
            )
            raise InternalInconsistencyError(
                f"Cartesian path has {n_cartesian} points, Frenet path has {n_frenet}"
            )
