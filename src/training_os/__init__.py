"""Daily workout planner: rotating A-D days, intensity modes, soreness-aware."""

__version__ = "0.1.0"
