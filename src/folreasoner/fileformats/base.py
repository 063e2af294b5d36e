"""Base class for file format handlers."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from folreasoner.core.formula import Formula


class FileFormat(ABC):
    """Abstract base class for file format handlers.

    File format handlers are responsible for:
    1. Parsing files in a specific notation
    2. Converting parsed content to Formula objects
    3. Writing formulas back to files
    """

    @abstractmethod
    def parse_file(self, file_path: Path, **kwargs) -> List[Formula]:
        """Parse a file and return its formulas.

        Raises:
            FileNotFoundError: If file doesn't exist
            ParseError: If file content is invalid
        """
        pass

    @abstractmethod
    def parse_string(self, content: str, **kwargs) -> List[Formula]:
        """Parse a string and return its formulas.

        Raises:
            ParseError: If content is invalid
        """
        pass

    @abstractmethod
    def write_file(self, formulas: List[Formula], file_path: Path, **kwargs) -> None:
        pass

    @abstractmethod
    def format_formula(self, formula: Formula, **kwargs) -> str:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this file format."""
        pass

    @property
    @abstractmethod
    def extensions(self) -> List[str]:
        """Return list of file extensions this format handles."""
        pass
