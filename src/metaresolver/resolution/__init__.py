"""
Resolution package.

Provides containment resolution, connection endpoint resolution and
connection validity checks over a metamodel, with memoized answers.
"""

from .resolver import (
    MetaModelResolver,
    EndpointRegistration,
    ContainmentPredicate,
    ConnectionPredicate,
)
from .builder import ResolverBuilder
from .cache import MemoCache
from . import predicates

__all__ = [
    "MetaModelResolver",
    "EndpointRegistration",
    "ContainmentPredicate",
    "ConnectionPredicate",
    "ResolverBuilder",
    "MemoCache",
    "predicates",
]
