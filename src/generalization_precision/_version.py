"""Version information for generalization_precision."""

try:
    from generalization_precision._version_info import __version__, __version_tuple__
except ImportError:
    __version__ = "unknown"
    __version_tuple__ = (0, 0, 0, "unknown", "unknown")
