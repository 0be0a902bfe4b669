"""Unified error handling for safechain.

- ErrorKind: Origin tag of a normalized error (structured, string, opaque)
- ChainError: Raisable form of non-exception failure values
- ErrorInfo: Serializable description of any normalized error
- normalize_error: Coerce any failure value into a raisable error
"""

from .errors import ChainError, ErrorInfo, ErrorKind, classify, normalize_error

__all__ = ["ChainError", "ErrorInfo", "ErrorKind", "classify", "normalize_error"]
