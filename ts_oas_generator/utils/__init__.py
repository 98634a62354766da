"""
Utilities Module for TypeScript Client Generation

This module provides utility functions for file operations, TypeScript naming
and other common tasks in the TypeScript client generation process.
"""

from .file_utils import backup_file, restore_file, write_files_to_disk
from .string_case import (
    capitalcase,
    escape_reserved_word,
    lower_first,
    quote_property_key,
    ts_enum_member_name,
    ts_method_name,
    ts_property_name,
    ts_type_name,
    ts_variable_name,
)

__all__ = [
    "backup_file",
    "capitalcase",
    "escape_reserved_word",
    "lower_first",
    "quote_property_key",
    "restore_file",
    "ts_enum_member_name",
    "ts_method_name",
    "ts_property_name",
    "ts_type_name",
    "ts_variable_name",
    "write_files_to_disk",
]
