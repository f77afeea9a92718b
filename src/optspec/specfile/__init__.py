"""Option specs declared in YAML files."""

from .loader import load_spec_file, specs_from_data

__all__ = [
    "load_spec_file",
    "specs_from_data",
]
