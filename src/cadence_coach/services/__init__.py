"""Services that combine the analysis steps."""

from .analyzer import CadenceAnalyzer, load_profile, load_samples

__all__ = [
    "CadenceAnalyzer",
    "load_profile",
    "load_samples",
]
