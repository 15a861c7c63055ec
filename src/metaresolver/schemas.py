from pydantic import BaseModel, ConfigDict
from typing import Any, Tuple

# Class descriptors and model objects come from whatever metamodel the caller
# uses, so their fields are typed as Any and never validated or copied.


class ClassPair(BaseModel):
    """
    Ordered pair of class descriptors.

    Used as the containment cache key and as the input of containment
    predicates. Two pairs are equal iff both components are equal, in order.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    first: Any
    second: Any

    @classmethod
    def of(cls, first: Any, second: Any) -> "ClassPair":
        return cls(first=first, second=second)

    def as_tuple(self) -> Tuple[Any, Any]:
        return (self.first, self.second)

    def __str__(self) -> str:
        return f"({getattr(self.first, 'name', self.first)}, {getattr(self.second, 'name', self.second)})"


class ConnectionContext(BaseModel):
    """
    Snapshot handed to connection-validity predicates.

    Describes a prospective connection of type connection_class joining
    source_object to target_object.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    source_object: Any
    target_object: Any
    connection_class: Any
