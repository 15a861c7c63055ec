"""
Metamodel Package.

Lightweight in-memory metamodel the resolver queries.

Components:
- MetaPackage: class catalog
- MetaClass: class descriptor with supertypes and references
- Reference: typed reference slot (containment or plain)
- MetaObject: run-time instance, class_of() returns its MetaClass
"""

from .model import (
    MetaPackage,
    MetaClass,
    Reference,
    MetaObject,
    class_of,
)

__all__ = [
    "MetaPackage",
    "MetaClass",
    "Reference",
    "MetaObject",
    "class_of",
]
