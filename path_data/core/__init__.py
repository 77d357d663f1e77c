"""Core module for path representations and coordinate transforms."""

from .exceptions import (
    PathDataError,
    MissingReferenceCurveError,
    ProjectionError,
    DegenerateGeometryError,
    InternalInconsistencyError,
    EmptyPathError,
)
from .data_structures import (
    CartesianPoint,
    CartesianPath,
    FrenetPoint,
    FrenetPath,
)
from .coordinate_converter import (
    SLAnalyticTransformation,
    normalize_angle,
)
from .path_data import PathData

__all__ = [
    'PathDataError',
    'MissingReferenceCurveError',
    'ProjectionError',
    'DegenerateGeometryError',
    'InternalInconsistencyError',
    'EmptyPathError',
    'CartesianPoint',
    'CartesianPath',
    'FrenetPoint',
    'FrenetPath',
    'SLAnalyticTransformation',
    'normalize_angle',
    'PathData',
]
