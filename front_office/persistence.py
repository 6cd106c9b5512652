"""
Persistence Adapter Module

Round-trips an EntityStore through a line storage backend. Each domain
supplies a RecordCodec mapping one entity to one whitespace-delimited line.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, Hashable, Iterable, List, Optional, TypeVar

from .entity_store import EntityStore
from .logging_config import get_logger
from .results import OperationError
from .storage import StorageInterface


E = TypeVar("E")

logger = get_logger("front_office.persistence")


class MalformedRecord(ValueError):
    """A line that cannot be parsed; loading stops there"""
    pass


class RecordCodec(ABC, Generic[E]):
    """
    Maps entities to and from whitespace-delimited fields
    
    With trailing_text set, the last field takes the rest of the line and
    may contain spaces.
    """
    
    field_count: int = 0
    trailing_text: bool = False
    
    def split(self, line: str) -> List[str]:
        """Split a line into exactly field_count fields"""
        if self.trailing_text:
            fields = line.split(None, self.field_count - 1)
        else:
            fields = line.split()
        if len(fields) != self.field_count:
            raise MalformedRecord(f"expected {self.field_count} fields, got {len(fields)}")
        return fields
    
    def encode_line(self, entity: E) -> str:
        return " ".join(self.encode(entity))
    
    @abstractmethod
    def encode(self, entity: E) -> List[str]:
        """Fields for one entity"""
        pass
    
    @abstractmethod
    def decode(self, fields: List[str]) -> Optional[E]:
        """
        Rebuild an entity from its fields.
        
        Returns None for an unrecognized kind label, raises MalformedRecord
        for unparsable fields and OperationError when rebuilding the
        entity's state violates one of its guards.
        """
        pass
    
    @abstractmethod
    def identifier(self, entity: E) -> Hashable:
        pass


@dataclass
class LoadReport:
    """What happened while loading a store"""
    loaded: int = 0
    skipped: int = 0
    missing: bool = False
    stopped_at: Optional[int] = None  # 1-based line number of the first malformed line


class PersistenceAdapter(Generic[E]):
    """Loads and saves one EntityStore through a StorageInterface"""
    
    def __init__(self, storage: StorageInterface, codec: RecordCodec[E], record_name: str = "record"):
        self.storage = storage
        self.codec = codec
        self.record_name = record_name
    
    def save(self, entities: Iterable[E]) -> bool:
        """
        Overwrite storage with one line per entity, in order.
        
        Returns False (after logging) when the backend cannot be written;
        the caller's in-memory state is untouched either way.
        """
        lines = [self.codec.encode_line(entity) for entity in entities]
        try:
            self.storage.write_lines(lines)
        except OSError as e:
            logger.error(f"Could not save {self.record_name}s to {self.storage.location}: {e}")
            return False
        return True
    
    def load(self, store: EntityStore[E]) -> LoadReport:
        """
        Append every well-formed record from storage to store.
        
        A missing or unreadable backend leaves the store empty. Blank lines
        are ignored, unknown kind labels are dropped, duplicate identifiers
        and records failing a state guard are skipped with a warning, and
        the first malformed line ends the load.
        """
        report = LoadReport()
        try:
            lines = self.storage.read_lines()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {self.storage.location} for loading {self.record_name}s: {e}. Starting empty.")
            report.missing = True
            return report
        
        if lines is None:
            logger.warning(f"No {self.record_name} data at {self.storage.location}. Starting empty.")
            report.missing = True
            return report
        
        for line_number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            
            try:
                entity = self.codec.decode(self.codec.split(line))
            except MalformedRecord as e:
                logger.warning(
                    f"Stopped loading {self.storage.location} at line {line_number}: {e}"
                )
                report.stopped_at = line_number
                break
            except OperationError as e:
                logger.warning(f"Skipping {self.record_name} on line {line_number}: {e}")
                report.skipped += 1
                continue
            
            if entity is None:
                logger.debug(f"Dropping line {line_number}: unrecognized {self.record_name} kind")
                report.skipped += 1
                continue
            
            identifier = self.codec.identifier(entity)
            if store.contains(identifier):
                logger.warning(f"Skipping duplicate {self.record_name} {identifier} on line {line_number}")
                report.skipped += 1
                continue
            
            store.add(entity)
            report.loaded += 1
        
        logger.info(f"Loaded {report.loaded} {self.record_name}s from {self.storage.location}")
        return report
