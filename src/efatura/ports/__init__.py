"""Ports - interfaces for external adapters."""

from .source import DocumentSourcePort

__all__ = ["DocumentSourcePort"]
