"""Utility functions."""

from param_emitter.utils.canonical import canonicalize_params

__all__ = ["canonicalize_params"]
