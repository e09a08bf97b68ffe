"""Binary floating point values with configurable semantics, rounding and printing."""

__version__ = "0.1.11"

__all__ = ["float", "formatting", "functions", "semantics", "utils"]