"""Binary STL detection and import.

Binary STL layout
-----------------
======================  ======  ===========================================
Offset                  Length  Field
======================  ======  ===========================================
0                       80      Header (ignored)
80                      4       Triangle count, ``uint32`` little-endian
84 + 50k                12      Normal of triangle *k* (ignored)
84 + 50k + 12           36      Vertices v1, v2, v3 as 9 ``float32`` (LE)
84 + 50k + 48           2       Attribute byte count (ignored)
======================  ======  ===========================================

A well-formed file is therefore exactly ``84 + 50 * N`` bytes long.

Detection (:func:`estimate`) combines two pieces of evidence, the file
extension and that size invariant, into a probability in ``[0, 1]``.

Import (:class:`StlBinary`) never trusts the declared count further than the
file size allows: the count is clamped to ``(size - 84) // 50`` so a corrupt
header yields a partial model instead of reading past the end of the file.
"""

from __future__ import annotations

import logging
import os
import struct
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

import numpy as np

from .errors import StlReadError
from .model import Face, Mesh, Model, Point3, Triangle

logger = logging.getLogger(__name__)

_PathLike = Union[str, Path]

# ---------------------------------------------------------------------------
# Format constants
# ---------------------------------------------------------------------------
HEADER_SIZE = 80
PREAMBLE_SIZE = HEADER_SIZE + 4
RECORD_SIZE = 50

# Explicitly little-endian, independent of the host byte order.
_COUNT_FORMAT = "<I"
_RECORD_DTYPE = np.dtype([
    ("normal", "<f4", (3,)),
    ("vertices", "<f4", (3, 3)),
    ("attr", "<u2"),
])
assert _RECORD_DTYPE.itemsize == RECORD_SIZE

# ---------------------------------------------------------------------------
# Detection priors
# ---------------------------------------------------------------------------
# Probability that a file's extension does not match its contents.
PROBABILITY_INCORRECT_EXTENSION = 0.01
# Probability that a file has a size inconsistent with its triangle count
# (or a non-STL file happens to match it).
PROBABILITY_INCORRECT_SIZE = 0.0001


def _file_size(handle: BinaryIO) -> int:
    handle.seek(0, os.SEEK_END)
    return handle.tell()


def _read_count(handle: BinaryIO) -> int:
    """Read the declared triangle count; 0 if the file is too short to hold one."""
    handle.seek(HEADER_SIZE)
    raw = handle.read(4)
    if len(raw) < 4:
        return 0
    return struct.unpack(_COUNT_FORMAT, raw)[0]


def estimate(
    path: _PathLike,
    *,
    probability_incorrect_extension: Optional[float] = None,
    probability_incorrect_size: Optional[float] = None,
) -> float:
    """Estimate the probability that *path* is a binary STL file.

    Parameters
    ----------
    path:
        File to inspect.  Only the size and the count field are read.
    probability_incorrect_extension:
        Override for :data:`PROBABILITY_INCORRECT_EXTENSION`.
    probability_incorrect_size:
        Override for :data:`PROBABILITY_INCORRECT_SIZE`.

    Returns
    -------
    float
        Probability in ``[0, 1]``.

    Raises
    ------
    OSError
        If the file cannot be opened or read.
    """
    e_ext = (PROBABILITY_INCORRECT_EXTENSION
             if probability_incorrect_extension is None
             else probability_incorrect_extension)
    e_size = (PROBABILITY_INCORRECT_SIZE
              if probability_incorrect_size is None
              else probability_incorrect_size)

    if os.fspath(path).endswith(".stl"):
        probability = 1.0 - e_ext
    else:
        probability = e_ext

    with open(path, "rb") as handle:
        file_size = _file_size(handle)
        num_triangles = _read_count(handle)

    consistent = (file_size >= PREAMBLE_SIZE
                  and file_size == PREAMBLE_SIZE + RECORD_SIZE * num_triangles)
    if consistent:
        probability = 1.0 - (1.0 - probability) * e_size
    else:
        probability *= e_size

    logger.debug("Binary STL probability for %s: %g (size %d, declared %d triangles)",
                 path, probability, file_size, num_triangles)
    return probability


class StlBinary:
    """Importer for a single binary STL file.

    Use :meth:`import_` for the common case.  :meth:`load` and
    :meth:`to_model` are exposed separately so parsing and conversion can be
    run on their own.
    """

    def __init__(self) -> None:
        self.triangles: List[Triangle] = []

    @classmethod
    def import_(cls, path: _PathLike) -> Model:
        """Read the binary STL file at *path* into a :class:`Model`."""
        logger.info("Importing binary STL file: %s", path)
        stl = cls()
        stl.load(path)
        return stl.to_model()

    def load(self, path: _PathLike) -> List[Triangle]:
        """Parse the triangles of *path* into :attr:`triangles`.

        The declared triangle count is clamped to what the file size can
        hold.  Normals and attribute bytes are discarded.

        Raises
        ------
        OSError
            If the file cannot be opened or read.
        StlReadError
            If the file yields fewer bytes than its size promised.
        """
        with open(path, "rb") as handle:
            declared = _read_count(handle)
            file_size = _file_size(handle)
            capacity = max(file_size - PREAMBLE_SIZE, 0) // RECORD_SIZE
            num_triangles = min(declared, capacity)
            if declared > capacity:
                logger.debug("%s declares %d triangles but only has room for %d",
                             path, declared, capacity)

            handle.seek(PREAMBLE_SIZE)
            expected = num_triangles * RECORD_SIZE
            raw = handle.read(expected)

        if len(raw) < expected:
            raise StlReadError(
                f"Expected {expected} bytes of triangle data in {path}, got {len(raw)}"
            )

        if num_triangles == 0:
            self.triangles = []
            return self.triangles

        records = np.frombuffer(raw, dtype=_RECORD_DTYPE, count=num_triangles)
        self.triangles = [
            _to_triangle(vertices) for vertices in records["vertices"].tolist()
        ]
        return self.triangles

    def to_model(self) -> Model:
        """Convert the loaded triangles into a single-mesh :class:`Model`."""
        mesh = Mesh()  # Binary STL has no sub-objects.
        for triangle in self.triangles:
            mesh.faces.append(Face([triangle[0], triangle[1], triangle[2]]))
        return Model([mesh])


def _to_triangle(vertices: List[List[float]]) -> Triangle:
    v1, v2, v3 = vertices
    return (Point3(*v1), Point3(*v2), Point3(*v3))


def import_stl_binary(path: _PathLike) -> Model:
    """Shorthand for :meth:`StlBinary.import_`."""
    return StlBinary.import_(path)
