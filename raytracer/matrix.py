"""
Matrices and affine transforms.

Implements:
- Square matrices with determinant, cofactor expansion and adjugate inversion
- 4x4 transform builders (translation, scaling, rotations, shearing)
- The view transform used to orient the camera
- The Transformable mixin shared by shapes, patterns and the camera

Transforms compose on the right: `m.translate(...).scale(...)` yields
`m * T * S`, so the operation added last is applied first in object space.
"""

from __future__ import annotations
import dataclasses
import math
from typing import Sequence, Union

import numpy as np

from .errors import MatrixDimensionError, SingularMatrixError
from .tuples import EPSILON, Point, Tuple, Vector


class Matrix:
    """An immutable square matrix of floats.

    The inverse is computed on first use and cached, since shapes and the
    camera invert the same transform for every ray.
    """

    __slots__ = ('_data', '_inverse')

    def __init__(self, rows: Sequence[Sequence[float]]):
        data = np.array(rows, dtype=np.float64)
        if data.ndim != 2 or data.shape[0] != data.shape[1]:
            raise MatrixDimensionError(f"Matrix must be square, got shape {data.shape}")
        self._data = data
        self._inverse = None

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Matrix:
        """Create Matrix from numpy array (no copy)."""
        m = cls.__new__(cls)
        m._data = arr
        m._inverse = None
        return m

    @property
    def size(self) -> int:
        return self._data.shape[0]

    def __getitem__(self, index):
        if isinstance(index, tuple):
            return float(self._data[index])
        return tuple(float(v) for v in self._data[index])

    def __repr__(self) -> str:
        rows = ", ".join(
            "[" + ", ".join(f"{v:.5f}" for v in row) + "]" for row in self._data
        )
        return f"Matrix([{rows}])"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self._data.shape != other._data.shape:
            return False
        return bool(np.allclose(self._data, other._data, rtol=0.0, atol=EPSILON))

    def __hash__(self) -> int:
        # Equality is tolerance based, so only the dimensions can be hashed
        return hash(self._data.shape)

    def __mul__(self, other: Union[Matrix, Tuple]) -> Union[Matrix, Tuple]:
        if isinstance(other, Matrix):
            if self._data.shape != other._data.shape:
                raise MatrixDimensionError(
                    f"Cannot multiply {self._data.shape} by {other._data.shape}"
                )
            return Matrix.from_array(self._data @ other._data)
        if isinstance(other, Tuple):
            if self.size != 4:
                raise MatrixDimensionError(
                    f"Cannot multiply {self._data.shape} matrix by a 4-tuple"
                )
            return Tuple.from_array(self._data @ other._data)
        return NotImplemented

    def transpose(self) -> Matrix:
        """Return the transposed matrix."""
        return Matrix.from_array(self._data.T.copy())

    def submatrix(self, row: int, col: int) -> Matrix:
        """Return a copy with the given row and column removed."""
        data = np.delete(np.delete(self._data, row, axis=0), col, axis=1)
        return Matrix.from_array(data)

    def determinant(self) -> float:
        """Compute the determinant by cofactor expansion along the first row."""
        if self.size == 1:
            return float(self._data[0, 0])
        if self.size == 2:
            a, b = self._data[0]
            c, d = self._data[1]
            return float(a * d - b * c)
        return sum(
            float(self._data[0, col]) * self.cofactor(0, col)
            for col in range(self.size)
        )

    def minor(self, row: int, col: int) -> float:
        """Determinant of the submatrix at (row, col)."""
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        """Signed minor at (row, col)."""
        minor = self.minor(row, col)
        return -minor if (row + col) % 2 else minor

    def is_invertible(self) -> bool:
        return self.determinant() != 0

    def invert(self) -> Matrix:
        """Return the inverse using the adjugate method.

        Raises:
            SingularMatrixError: If the determinant is zero
        """
        if self._inverse is not None:
            return self._inverse

        det = self.determinant()
        if det == 0:
            raise SingularMatrixError(f"Cannot invert singular matrix: {self!r}")

        n = self.size
        cofactors = np.empty((n, n), dtype=np.float64)
        for row in range(n):
            for col in range(n):
                cofactors[row, col] = self.cofactor(row, col)

        inverse = Matrix.from_array(cofactors.T / det)
        self._inverse = inverse
        return inverse

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()

    # Transform builders

    @staticmethod
    def identity(size: int = 4) -> Matrix:
        return Matrix.from_array(np.identity(size, dtype=np.float64))

    @staticmethod
    def translation(x: float, y: float, z: float) -> Matrix:
        m = np.identity(4, dtype=np.float64)
        m[0, 3] = x
        m[1, 3] = y
        m[2, 3] = z
        return Matrix.from_array(m)

    @staticmethod
    def scaling(x: float, y: float, z: float) -> Matrix:
        return Matrix.from_array(np.diag([x, y, z, 1.0]).astype(np.float64))

    @staticmethod
    def rotation_x(r: float) -> Matrix:
        """Rotation of r radians around the x axis."""
        m = np.identity(4, dtype=np.float64)
        m[1, 1] = math.cos(r)
        m[1, 2] = -math.sin(r)
        m[2, 1] = math.sin(r)
        m[2, 2] = math.cos(r)
        return Matrix.from_array(m)

    @staticmethod
    def rotation_y(r: float) -> Matrix:
        """Rotation of r radians around the y axis."""
        m = np.identity(4, dtype=np.float64)
        m[0, 0] = math.cos(r)
        m[0, 2] = math.sin(r)
        m[2, 0] = -math.sin(r)
        m[2, 2] = math.cos(r)
        return Matrix.from_array(m)

    @staticmethod
    def rotation_z(r: float) -> Matrix:
        """Rotation of r radians around the z axis."""
        m = np.identity(4, dtype=np.float64)
        m[0, 0] = math.cos(r)
        m[0, 1] = -math.sin(r)
        m[1, 0] = math.sin(r)
        m[1, 1] = math.cos(r)
        return Matrix.from_array(m)

    @staticmethod
    def shearing(x_to_y: float, x_to_z: float, y_to_x: float,
                 y_to_z: float, z_to_x: float, z_to_y: float) -> Matrix:
        """Skew each coordinate in proportion to the other two."""
        m = np.identity(4, dtype=np.float64)
        m[0, 1] = x_to_y
        m[0, 2] = x_to_z
        m[1, 0] = y_to_x
        m[1, 2] = y_to_z
        m[2, 0] = z_to_x
        m[2, 1] = z_to_y
        return Matrix.from_array(m)

    @staticmethod
    def view_transform(from_point: Point, to: Point, up: Vector) -> Matrix:
        """Orient the world relative to an eye at from_point looking at to.

        Args:
            from_point: Eye position
            to: Point being looked at
            up: Approximate up direction (need not be normalized)

        Returns:
            The world-to-camera transform
        """
        forward = Vector.from_tuple((to - from_point).normalize())
        left = forward.cross(Vector.from_tuple(up.normalize()))
        true_up = left.cross(forward)
        orientation = Matrix([
            [left.x, left.y, left.z, 0.0],
            [true_up.x, true_up.y, true_up.z, 0.0],
            [-forward.x, -forward.y, -forward.z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ])
        return orientation * Matrix.translation(-from_point.x, -from_point.y, -from_point.z)


IDENTITY = Matrix.identity()


class Transformable:
    """Chainable transform builders for dataclasses with a `transform` field.

    Every method returns a new instance; the receiver is never modified.
    """

    def transformed(self, matrix: Matrix):
        """Return a copy with `matrix` composed onto the current transform."""
        return dataclasses.replace(self, transform=self.transform * matrix)

    def translate(self, x: float, y: float, z: float):
        return self.transformed(Matrix.translation(x, y, z))

    def scale(self, x: float, y: float, z: float):
        return self.transformed(Matrix.scaling(x, y, z))

    def rotate_x(self, r: float):
        return self.transformed(Matrix.rotation_x(r))

    def rotate_y(self, r: float):
        return self.transformed(Matrix.rotation_y(r))

    def rotate_z(self, r: float):
        return self.transformed(Matrix.rotation_z(r))

    def skew(self, x_to_y: float, x_to_z: float, y_to_x: float,
             y_to_z: float, z_to_x: float, z_to_y: float):
        return self.transformed(
            Matrix.shearing(x_to_y, x_to_z, y_to_x, y_to_z, z_to_x, z_to_y)
        )

    def with_transform(self, matrix: Matrix):
        """Return a copy whose transform is replaced by `matrix`."""
        return dataclasses.replace(self, transform=matrix)
