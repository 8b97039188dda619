"""Polygon-mesh model shared between importers and exporters.

A :class:`Model` is a list of :class:`Mesh` objects, each a list of
:class:`Face` objects, each an ordered list of :class:`Point3` vertices.
Vertex order within a face is the winding order and is never changed.
"""

from __future__ import annotations

from typing import List, NamedTuple, Optional, Tuple

import numpy as np
import numpy.typing as npt

_Array = npt.NDArray[np.floating]


class Point3(NamedTuple):
    """A 3D coordinate."""

    x: float
    y: float
    z: float


Triangle = Tuple[Point3, Point3, Point3]


class Face:
    """An ordered polygon of vertices."""

    def __init__(self, vertices: Optional[List[Point3]] = None) -> None:
        self.vertices: List[Point3] = list(vertices) if vertices is not None else []

    def __repr__(self) -> str:
        return f"Face({self.vertices!r})"


class Mesh:
    """An ordered collection of faces."""

    def __init__(self, faces: Optional[List[Face]] = None) -> None:
        self.faces: List[Face] = list(faces) if faces is not None else []

    def __len__(self) -> int:
        return len(self.faces)

    def to_array(self) -> _Array:
        """Return the faces as a ``(F, 3, 3)`` float64 array.

        Raises
        ------
        ValueError
            If any face is not a triangle.
        """
        for index, face in enumerate(self.faces):
            if len(face.vertices) != 3:
                raise ValueError(
                    f"Face {index} has {len(face.vertices)} vertices; expected 3"
                )
        if not self.faces:
            return np.zeros((0, 3, 3), dtype=np.float64)
        return np.array([face.vertices for face in self.faces], dtype=np.float64)


class Model:
    """A 3D model made of one or more meshes."""

    def __init__(self, meshes: Optional[List[Mesh]] = None) -> None:
        self.meshes: List[Mesh] = list(meshes) if meshes is not None else []

    @property
    def num_faces(self) -> int:
        return sum(len(mesh) for mesh in self.meshes)
