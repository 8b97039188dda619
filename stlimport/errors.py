"""Exceptions raised by :mod:`stlimport`."""


class StlReadError(OSError):
    """A read returned fewer bytes than the file size promised.

    Usually means the file was truncated or replaced while it was being read.
    """
