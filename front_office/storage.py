"""
Storage Backend Module

Provides the abstract line storage interface and implementations for
in-memory (testing) and flat text files (persistence). Records are plain
lines; field layout is the business of the record codecs.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Union
from pathlib import Path

from .logging_config import get_logger


logger = get_logger("front_office.storage")


class StorageInterface(ABC):
    """Abstract interface for line-oriented storage backends"""
    
    @abstractmethod
    def read_lines(self) -> Optional[List[str]]:
        """
        Read every stored line.
        
        Returns None when there is nothing to read yet (missing file).
        Raises OSError when the backend exists but cannot be read, or
        UnicodeDecodeError when its content is not valid text.
        """
        pass
    
    @abstractmethod
    def write_lines(self, lines: List[str]) -> None:
        """Replace the stored content with lines"""
        pass
    
    @abstractmethod
    def exists(self) -> bool:
        """Check if anything has been stored"""
        pass
    
    @property
    @abstractmethod
    def location(self) -> str:
        """Human readable location for log messages"""
        pass


class InMemoryStorage(StorageInterface):
    """In-memory storage implementation for testing"""
    
    def __init__(self, lines: Optional[List[str]] = None):
        self._lines: Optional[List[str]] = list(lines) if lines is not None else None
        self.write_count = 0
    
    def read_lines(self) -> Optional[List[str]]:
        if self._lines is None:
            return None
        return list(self._lines)
    
    def write_lines(self, lines: List[str]) -> None:
        self._lines = list(lines)
        self.write_count += 1
    
    def exists(self) -> bool:
        return self._lines is not None
    
    @property
    def location(self) -> str:
        return "<memory>"
    
    @property
    def lines(self) -> List[str]:
        """Stored lines for inspection"""
        return list(self._lines or [])


class FlatFileStorage(StorageInterface):
    """
    Plain text file storage.
    
    Every write truncates and rewrites the whole file. There is no locking
    and no atomic rename: one process per file.
    """
    
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
    
    def read_lines(self) -> Optional[List[str]]:
        if not self.path.exists():
            return None
        with self.path.open("r", encoding="utf-8") as handle:
            return handle.read().splitlines()
    
    def write_lines(self, lines: List[str]) -> None:
        with self.path.open("w", encoding="utf-8") as handle:
            for line in lines:
                handle.write(line + "\n")
        logger.debug(f"Wrote {len(lines)} records to {self.path}")
    
    def exists(self) -> bool:
        return self.path.exists()
    
    @property
    def location(self) -> str:
        return str(self.path)
