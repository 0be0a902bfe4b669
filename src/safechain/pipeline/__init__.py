"""Composition helpers built on Chain.map."""

from .pipe import Step, pipe

__all__ = ["Step", "pipe"]
