"""Diagnostics package.

- round_trip: always available, stdlib only
- plot_offsets: optional (requires astrotime[diagnostics])
- validate_skyfield: optional (requires astrotime[validation])
"""

__all__ = ["round_trip", "plot_offsets", "validate_skyfield"]
