"""stlimport — binary STL detection and import.

Reads binary STL files into a polygon-mesh :class:`~stlimport.model.Model`
that exporters can consume.

Quick start
-----------
>>> from stlimport import estimate, import_stl_binary
>>> estimate("part.stl")                      # doctest: +SKIP
0.999999
>>> model = import_stl_binary("part.stl")     # doctest: +SKIP
>>> len(model.meshes)                         # doctest: +SKIP
1

Corrupt input
-------------
The triangle count stored in the header is clamped to what the file size
can hold, so a damaged file produces a partial model rather than an error.
Only genuine I/O failures raise (``OSError``).  ASCII STL is not supported.
"""

from .errors import StlReadError
from .model import Face, Mesh, Model, Point3, Triangle
from .stl_binary import (
    PROBABILITY_INCORRECT_EXTENSION,
    PROBABILITY_INCORRECT_SIZE,
    StlBinary,
    estimate,
    import_stl_binary,
)

__version__ = "0.1.0"

__all__ = [
    # Model
    "Point3",
    "Triangle",
    "Face",
    "Mesh",
    "Model",

    # Binary STL
    "estimate",
    "import_stl_binary",
    "StlBinary",
    "PROBABILITY_INCORRECT_EXTENSION",
    "PROBABILITY_INCORRECT_SIZE",

    # Errors
    "StlReadError",
]
