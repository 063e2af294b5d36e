"""File format handlers."""

from .base import FileFormat
from .notation import NotationFormat, parse, parse_file

__all__ = ['FileFormat', 'NotationFormat', 'parse', 'parse_file']
