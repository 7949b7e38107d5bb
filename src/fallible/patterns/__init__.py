"""Composition patterns: short-circuiting routines and applicative combinators."""

from .applicative import Chain, apply, chain, zip_
from .safe import safe, safe_async

__all__ = [
    "safe",
    "safe_async",
    "zip_",
    "apply",
    "chain",
    "Chain",
]
