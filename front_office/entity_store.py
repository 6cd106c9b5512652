"""
Entity Store Module

Ordered in-memory collection of entities keyed by their identifier.
Lookups are linear scans in insertion order.
"""

from contextlib import contextmanager
from typing import Any, Dict, Generic, Hashable, Iterator, List, Optional, Tuple, TypeVar

from .results import FailureKind, OperationError


E = TypeVar("E")


class EntityStore(Generic[E]):
    """
    Owns a list of entities exposing an ``identifier`` attribute
    
    The store does not enforce identifier uniqueness on add; creation flows
    check ``contains`` first.
    """
    
    def __init__(self, entity_name: str = "Entity"):
        self.entity_name = entity_name
        self._entities: List[E] = []
    
    def add(self, entity: E) -> E:
        """Append a new entity"""
        self._entities.append(entity)
        return entity
    
    def find(self, identifier: Hashable) -> Optional[E]:
        """Find an entity by identifier, None when absent"""
        for entity in self._entities:
            if entity.identifier == identifier:
                return entity
        return None
    
    def get(self, identifier: Hashable) -> E:
        """Find an entity by identifier or raise a NOT_FOUND OperationError"""
        entity = self.find(identifier)
        if entity is None:
            raise OperationError(FailureKind.NOT_FOUND, f"{self.entity_name} {identifier} not found.")
        return entity
    
    def remove(self, identifier: Hashable) -> E:
        """Remove and return an entity by identifier"""
        entity = self.get(identifier)
        self._entities.remove(entity)
        return entity
    
    def contains(self, identifier: Hashable) -> bool:
        return self.find(identifier) is not None
    
    def all(self) -> List[E]:
        """All entities in insertion order"""
        return list(self._entities)
    
    def clear(self) -> None:
        self._entities = []
    
    def __len__(self) -> int:
        return len(self._entities)
    
    def __iter__(self) -> Iterator[E]:
        return iter(list(self._entities))
    
    def _snapshot(self) -> Tuple[List[E], List[Dict[str, Any]]]:
        return list(self._entities), [dict(vars(entity)) for entity in self._entities]
    
    def _restore(self, snapshot: Tuple[List[E], List[Dict[str, Any]]]) -> None:
        entities, states = snapshot
        for entity, state in zip(entities, states):
            vars(entity).clear()
            vars(entity).update(state)
        self._entities = entities
    
    @contextmanager
    def atomic(self):
        """Context manager that rolls every entity back if the block raises"""
        snapshot = self._snapshot()
        try:
            yield self
        except Exception:
            self._restore(snapshot)
            raise
