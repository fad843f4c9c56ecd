"""
sysreg utilities package
"""

from .config import FormatterOptions
from .io_utils import read_source_file, read_json_file, write_output_file

__all__ = ["FormatterOptions", "read_source_file", "read_json_file", "write_output_file"]
