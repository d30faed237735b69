"""Glob segment compilation."""
from .compiler import Pattern, GlobCompiler, compile_glob, translate

__all__ = [
    'Pattern',
    'GlobCompiler',
    'compile_glob',
    'translate',
]
