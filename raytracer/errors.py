"""
Exception types raised by the ray tracer.

Geometric degeneracies (a ray parallel to a plane, a grazing sphere hit,
total internal reflection) are ordinary outcomes and never raise.
"""


class RaytracerError(Exception):
    """Base class for all ray tracer errors."""
    pass


class SingularMatrixError(RaytracerError, ArithmeticError):
    """Raised when inverting a matrix whose determinant is zero."""
    pass


class MatrixDimensionError(RaytracerError, ValueError):
    """Raised when matrix shapes are incompatible for an operation."""
    pass


class MissingLightError(RaytracerError):
    """Raised when shading is requested in a world without a light."""
    pass


class PixelOutOfBoundsError(RaytracerError, IndexError):
    """Raised when a canvas pixel outside the grid is read or written."""
    pass


class InvalidMaterialError(RaytracerError, ValueError):
    """Raised when a material has physically meaningless properties."""
    pass
