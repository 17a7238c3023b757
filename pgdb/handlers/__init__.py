from . import postgresdatabase, probes

__all__ = ["postgresdatabase", "probes"]
