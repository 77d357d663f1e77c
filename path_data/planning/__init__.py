"""Reference line module."""

from .reference_line import ReferenceCurve, ReferenceLine, ReferencePoint, SLPoint

__all__ = [
    'ReferenceCurve',
    'ReferenceLine',
    'ReferencePoint',
    'SLPoint',
]
