"""
Kernel Errors
=============

Input-validation failures raised synchronously by the kernel.

Lookup-style queries (find_zone_for_point, zones_by_sector, ...) never raise
for "not found"; they return None or an empty tuple.
"""


class VastuKernelError(ValueError):
    """Base class for all kernel errors."""


class InvalidBoundaryError(VastuKernelError):
    """Boundary has too few points (or non-finite coordinates) for the operation."""


class DegenerateGeometryError(VastuKernelError):
    """Bounding box has zero width or height, so the partition radius is 0."""


class InvalidWeightError(VastuKernelError):
    """Composite-score weights are negative or do not sum to 1."""


class AnalysisCancelledError(VastuKernelError):
    """Analysis was cancelled through its cancel event before completion."""
