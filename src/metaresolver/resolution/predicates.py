"""
Reusable predicates for resolver configuration.

Object predicates take a model object, containment predicates a ClassPair,
connection predicates a ConnectionContext.
"""

from typing import Any, Callable

from metaresolver.metamodel import MetaClass
from metaresolver.schemas import ClassPair, ConnectionContext

Predicate = Callable[[Any], bool]


def is_instance(meta_class: MetaClass) -> Callable[[Any], bool]:
    """True for objects whose class is meta_class or one of its subclasses."""
    return lambda obj: meta_class.is_instance(obj)


def contained_is_abstract() -> Callable[[ClassPair], bool]:
    """Accept only when the contained class (pair.second) is abstract."""
    return lambda pair: bool(pair.second.abstract)


def contained_is_concrete() -> Callable[[ClassPair], bool]:
    """Accept only when the contained class (pair.second) is concrete."""
    return lambda pair: not pair.second.abstract


def source_is_instance(meta_class: MetaClass) -> Callable[[ConnectionContext], bool]:
    """Accept connections whose source object is an instance of meta_class."""
    return lambda context: meta_class.is_instance(context.source_object)


def target_is_instance(meta_class: MetaClass) -> Callable[[ConnectionContext], bool]:
    """Accept connections whose target object is an instance of meta_class."""
    return lambda context: meta_class.is_instance(context.target_object)


def not_(predicate: Predicate) -> Predicate:
    return lambda value: not predicate(value)


def all_of(*predicates: Predicate) -> Predicate:
    """True when every predicate accepts (and for no predicates at all)."""
    return lambda value: all(p(value) for p in predicates)


def any_of(*predicates: Predicate) -> Predicate:
    """True when at least one predicate accepts."""
    return lambda value: any(p(value) for p in predicates)
