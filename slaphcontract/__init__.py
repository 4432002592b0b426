"""Parsing, checking and lookup-table construction for stochastic LapH contractions."""

__version__ = "0.1.0"

__all__ = [
    "cartesian",
    "dilution",
    "input_handling",
    "io_utils",
    "kahan",
    "lookup_tables",
    "model",
    "parsing",
    "ranlxs",
]