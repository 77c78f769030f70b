"""Default message functions."""

from parse_diagnostics.locales.en import default_error_map

__all__ = ["default_error_map"]
