from .body import Body
from .lagrange_point import (
    LagrangePoint,
    CollinearPoint,
    TriangularPoint,
    L1Point,
    L2Point,
    L3Point,
    L4Point,
    L5Point,
    create_lagrange_point,
    lagrange_point_for,
)
from .registry import SystemRegistry

__all__ = [
    'Body',
    'LagrangePoint',
    'CollinearPoint',
    'TriangularPoint',
    'L1Point',
    'L2Point',
    'L3Point',
    'L4Point',
    'L5Point',
    'create_lagrange_point',
    'lagrange_point_for',
    'SystemRegistry',
]
