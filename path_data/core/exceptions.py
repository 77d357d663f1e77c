"""Error kinds raised by path conversion and lookup."""


class PathDataError(RuntimeError):
    """Base class for path data failures."""
    pass


class MissingReferenceCurveError(PathDataError):
    """Raised when a path is set before a reference line is attached."""
    pass


class ProjectionError(PathDataError):
    """Raised when a point lies outside the reference line's valid domain."""
    pass


class DegenerateGeometryError(ProjectionError):
    """Raised when 1 - kappa_ref * l vanishes and heading/curvature are undefined."""
    pass


class InternalInconsistencyError(PathDataError):
    """Raised when the Cartesian and Frenet paths diverge in length."""
    pass


class EmptyPathError(PathDataError):
    """Raised when evaluating a path that holds no samples."""
    pass
