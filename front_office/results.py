"""
Operation Results Module

Every hotel and bank operation reports its outcome through one contract:
an OperationResult holding either a value or a typed Failure.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar


T = TypeVar("T")


class FailureKind(Enum):
    """Closed set of reasons an operation can fail"""
    NOT_FOUND = "not_found"
    ALREADY_IN_STATE = "already_in_state"
    INVALID_AMOUNT = "invalid_amount"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    DUPLICATE_IDENTIFIER = "duplicate_identifier"


@dataclass(frozen=True)
class Failure:
    """Why an operation did not take effect"""
    kind: FailureKind
    message: str
    
    def __str__(self) -> str:
        return self.message


class OperationError(Exception):
    """Raised by entity transitions; carries the typed failure"""
    
    def __init__(self, kind: FailureKind, message: str):
        self.failure = Failure(kind, message)
        super().__init__(message)
    
    @property
    def kind(self) -> FailureKind:
        return self.failure.kind


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """
    Outcome of a store operation.
    
    Exactly one of value/failure is meaningful: a result with a failure
    left in-memory state unchanged. persisted is False when the change was
    applied in memory but could not be written to disk.
    """
    value: Optional[T] = None
    failure: Optional[Failure] = None
    persisted: bool = True
    
    @classmethod
    def ok(cls, value: Any = None, persisted: bool = True) -> "OperationResult":
        return cls(value=value, persisted=persisted)
    
    @classmethod
    def fail(cls, kind: FailureKind, message: str) -> "OperationResult":
        return cls(failure=Failure(kind, message))
    
    @classmethod
    def from_error(cls, error: OperationError) -> "OperationResult":
        return cls(failure=error.failure)
    
    @property
    def is_ok(self) -> bool:
        return self.failure is None
    
    @property
    def kind(self) -> Optional[FailureKind]:
        """Failure kind, or None on success"""
        return self.failure.kind if self.failure else None
    
    def unwrap(self) -> T:
        """Return the value or raise OperationError for a failed result"""
        if self.failure is not None:
            raise OperationError(self.failure.kind, self.failure.message)
        return self.value
