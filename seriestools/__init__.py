"""LOESS smoothing and Box-Cox transforms for numeric series."""

__version__ = "0.1.0"