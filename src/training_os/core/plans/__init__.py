"""
Built-in plan definitions for training-os.

Plans ship as YAML data files and are exposed as immutable plan objects.
"""

from .registry import BUILTIN_PLANS

__all__ = [
    "BUILTIN_PLANS",
]
