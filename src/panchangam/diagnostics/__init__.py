"""Diagnostics package.

- diagnostics: always available, light-weight checks (no ephemeris)
- diagnostics.ephem: optional (requires ephemeris extras + a JPL kernel)
"""

__all__ = ["pretty_month", "new_years_table", "compare_models"]
