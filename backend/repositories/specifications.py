"""
Specification Pattern

Query criteria as small composable objects. Each specification can test an
in-memory candidate and render itself as a SQLAlchemy filter, so the same
rule serves both repositories and in-memory checks.

Combine with ``&``, ``|`` and ``~``.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from sqlalchemy import and_, not_, or_


T = TypeVar('T')


class Specification(ABC, Generic[T]):
    """A single query criterion."""

    @abstractmethod
    def is_satisfied_by(self, candidate: T) -> bool:
        """Check the criterion against an object."""
        pass

    @abstractmethod
    def to_sql_filter(self):
        """Render the criterion as a SQLAlchemy filter expression."""
        pass

    def __and__(self, other: "Specification[T]") -> "Specification[T]":
        return AndSpecification(self, other)

    def __or__(self, other: "Specification[T]") -> "Specification[T]":
        return OrSpecification(self, other)

    def __invert__(self) -> "Specification[T]":
        return NotSpecification(self)


class AndSpecification(Specification[T]):
    """Both criteria hold."""

    def __init__(self, left: Specification[T], right: Specification[T]):
        self.left = left
        self.right = right

    def is_satisfied_by(self, candidate: T) -> bool:
        return self.left.is_satisfied_by(candidate) and self.right.is_satisfied_by(candidate)

    def to_sql_filter(self):
        return and_(self.left.to_sql_filter(), self.right.to_sql_filter())


class OrSpecification(Specification[T]):
    """Either criterion holds."""

    def __init__(self, left: Specification[T], right: Specification[T]):
        self.left = left
        self.right = right

    def is_satisfied_by(self, candidate: T) -> bool:
        return self.left.is_satisfied_by(candidate) or self.right.is_satisfied_by(candidate)

    def to_sql_filter(self):
        return or_(self.left.to_sql_filter(), self.right.to_sql_filter())


class NotSpecification(Specification[T]):
    """The wrapped criterion does not hold."""

    def __init__(self, spec: Specification[T]):
        self.spec = spec

    def is_satisfied_by(self, candidate: T) -> bool:
        return not self.spec.is_satisfied_by(candidate)

    def to_sql_filter(self):
        return not_(self.spec.to_sql_filter())
