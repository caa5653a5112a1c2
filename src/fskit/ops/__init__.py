"""Filesystem operations on absolute paths."""

from .directories import copy_directory, delete_directory, make_directory, move_directory
from .files import copy_file, delete_file, move_file, write_file

__all__ = [
    "copy_directory",
    "copy_file",
    "delete_directory",
    "delete_file",
    "make_directory",
    "move_directory",
    "move_file",
    "write_file",
]
