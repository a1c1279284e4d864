"""Correlation-based feature selection over ds2 matrix files.

Submodules: ``ds2`` (file format), ``selection`` (the CFS algorithm) and
``cli`` (the ``cfselect`` command).
"""

__version__ = "0.1.0"
__all__ = ["ds2", "selection", "cli"]