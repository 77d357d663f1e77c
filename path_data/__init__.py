"""Synchronized Cartesian / Frenet path representations along a reference line."""

from .core import (
    CartesianPoint,
    CartesianPath,
    FrenetPoint,
    FrenetPath,
    PathData,
    PathDataError,
    MissingReferenceCurveError,
    ProjectionError,
    DegenerateGeometryError,
    InternalInconsistencyError,
    EmptyPathError,
)
from .planning import ReferenceLine, ReferencePoint, SLPoint
from .config import PathDataConfig, load_config, save_config, configure_logging

__version__ = "0.1.0"

__all__ = [
    'CartesianPoint',
    'CartesianPath',
    'FrenetPoint',
    'FrenetPath',
    'PathData',
    'PathDataError',
    'MissingReferenceCurveError',
    'ProjectionError',
    'DegenerateGeometryError',
    'InternalInconsistencyError',
    'EmptyPathError',
    'ReferenceLine',
    'ReferencePoint',
    'SLPoint',
    'PathDataConfig',
    'load_config',
    'save_config',
    'configure_logging',
]
