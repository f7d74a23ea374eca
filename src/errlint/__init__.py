"""errlint — numbering rules for error-code enums."""

from errlint.marker import valid_error_code

__version__ = "0.1.0"

__all__ = ["__version__", "valid_error_code"]
