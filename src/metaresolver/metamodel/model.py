"""
In-memory metamodel: classes, references and model objects.

A deliberately small Ecore-like model. The resolver only relies on the
attributes documented on MetaClass and Reference, so any metamodel exposing the
same surface can be resolved against.
"""

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from metaresolver.config import get_resolver_config
from metaresolver.exceptions import MetamodelError
from metaresolver.logging_config import logger


class Reference:
    """
    A named, typed relation declared on a MetaClass.

    References hash by identity: two references with the same name on
    different classes are different slots.
    """

    def __init__(
        self,
        name: str,
        container: "MetaClass",
        reference_type: "MetaClass",
        containment: bool = False,
        many: bool = True,
    ):
        self.name = name
        self.container = container
        self.reference_type = reference_type
        self.containment = containment
        self.many = many

    def __repr__(self) -> str:
        kind = "containment" if self.containment else "reference"
        return f"Reference({self.container.name}.{self.name} -> {self.reference_type.name}, {kind})"


@dataclass(frozen=True)
class _Hierarchy:
    """Ancestors and depth of a class, valid for one hierarchy version."""
    version: int
    ancestors: Tuple["MetaClass", ...]
    ancestor_set: FrozenSet["MetaClass"]
    depth: int


class MetaClass:
    """
    A node in the class hierarchy.

    Supports multiple supertypes. Supertypes and references may be added
    while the metamodel is being assembled; once a resolver has been built
    over it the class must be treated as immutable.
    """

    # Bumped whenever any class gains a supertype; invalidates cached hierarchies
    _hierarchy_version = 0

    def __init__(
        self,
        name: str,
        abstract: bool = False,
        super_types: Iterable["MetaClass"] = (),
        package: Optional["MetaPackage"] = None,
    ):
        self.name = name
        self.abstract = abstract
        self.package = package
        self._super_types: List["MetaClass"] = []
        self._references: List[Reference] = []
        self._hierarchy_cache: Optional[_Hierarchy] = None
        for super_type in super_types:
            self.add_super_type(super_type)

    # Assembly

    def add_super_type(self, super_type: "MetaClass") -> "MetaClass":
        """
        Declare a direct supertype.

        Raises:
            MetamodelError: on self-inheritance, cycles, or a hierarchy deeper
                than the configured max_hierarchy_depth
        """
        if super_type is self:
            raise MetamodelError(self.name, "a class cannot be its own supertype")
        if self.is_super_type_of(super_type):
            raise MetamodelError(self.name, f"inheriting from '{super_type.name}' creates a cycle")
        if super_type in self._super_types:
            return self

        max_depth = get_resolver_config().max_hierarchy_depth
        if super_type.hierarchy_depth + 1 > max_depth:
            raise MetamodelError(self.name, f"hierarchy deeper than {max_depth} levels")

        self._super_types.append(super_type)
        MetaClass._hierarchy_version += 1
        return self

    def add_reference(
        self,
        name: str,
        reference_type: "MetaClass",
        containment: bool = False,
        many: bool = True,
    ) -> Reference:
        """
        Declare a reference on this class.

        Args:
            name: Reference name, unique among this class's own references
            reference_type: Declared target class
            containment: Whether the reference owns its targets
            many: Whether the reference holds a collection

        Returns:
            The new Reference
        """
        if any(ref.name == name for ref in self._references):
            raise MetamodelError(self.name, f"duplicate reference '{name}'")
        ref = Reference(name, self, reference_type, containment=containment, many=many)
        self._references.append(ref)
        return ref

    # Hierarchy

    @property
    def super_types(self) -> Tuple["MetaClass", ...]:
        """Direct supertypes in declaration order."""
        return tuple(self._super_types)

    @property
    def all_super_types(self) -> Tuple["MetaClass", ...]:
        """
        Transitive supertypes, ancestors first.

        Each direct supertype is preceded by its own ancestors; classes
        reachable along several paths appear once, at their first position.
        """
        return self._hierarchy().ancestors

    @property
    def hierarchy_depth(self) -> int:
        """Length of the longest supertype chain above this class."""
        return self._hierarchy().depth

    def _hierarchy(self) -> "_Hierarchy":
        # Recomputed only after some class in the metamodel gained a supertype
        cached = self._hierarchy_cache
        if cached is not None and cached.version == MetaClass._hierarchy_version:
            return cached

        ancestors: List["MetaClass"] = []
        seen: Set["MetaClass"] = set()
        depth = 0
        for super_type in self._super_types:
            parent = super_type._hierarchy()
            for ancestor in parent.ancestors + (super_type,):
                if ancestor not in seen:
                    seen.add(ancestor)
                    ancestors.append(ancestor)
            depth = max(depth, parent.depth + 1)

        cached = _Hierarchy(
            version=MetaClass._hierarchy_version,
            ancestors=tuple(ancestors),
            ancestor_set=frozenset(seen),
            depth=depth,
        )
        self._hierarchy_cache = cached
        return cached

    def is_super_type_of(self, other: "MetaClass") -> bool:
        """Class-level compatibility: True if other is this class or a subclass of it."""
        return other is self or self in other._hierarchy().ancestor_set

    def is_instance(self, obj: Any) -> bool:
        """Instance-level compatibility: True if obj's class is this class or a subclass."""
        meta_class = class_of(obj)
        return meta_class is not None and self.is_super_type_of(meta_class)

    # References

    @property
    def references(self) -> Tuple[Reference, ...]:
        """References declared directly on this class."""
        return tuple(self._references)

    @property
    def all_references(self) -> Tuple[Reference, ...]:
        """Inherited references (ancestors first) followed by own references."""
        refs: List[Reference] = []
        for super_type in self.all_super_types:
            refs.extend(super_type._references)
        refs.extend(self._references)
        return tuple(refs)

    @property
    def all_containments(self) -> Tuple[Reference, ...]:
        return tuple(ref for ref in self.all_references if ref.containment)

    def get_reference(self, name: str) -> Optional[Reference]:
        """Look up a reference (own or inherited) by name."""
        for ref in reversed(self.all_references):
            if ref.name == name:
                return ref
        return None

    def __repr__(self) -> str:
        return f"MetaClass({self.name})"


class MetaObject:
    """A run-time instance of a MetaClass."""

    def __init__(self, meta_class: MetaClass, **values: Any):
        self.meta_class = meta_class
        self.values: Dict[str, Any] = dict(values)

    def get(self, name: str, default: Any = None) -> Any:
        return self.values.get(name, default)

    def __repr__(self) -> str:
        return f"MetaObject({self.meta_class.name}, {self.values})"


def class_of(obj: Any) -> Optional[MetaClass]:
    """Return the run-time class of a model object, or None for foreign objects."""
    return getattr(obj, "meta_class", None)


class MetaPackage:
    """
    Catalog of the classes making up one metamodel.

    Example:
        >>> pkg = MetaPackage("plumbing")
        >>> segment = pkg.create_class("Segment")
        >>> valve = pkg.create_class("Valve", super_types=[segment])
        >>> segment.is_super_type_of(valve)
        True
    """

    def __init__(self, name: str):
        self.name = name
        self._classes: Dict[str, MetaClass] = {}

    def create_class(
        self,
        name: str,
        abstract: bool = False,
        super_types: Iterable[MetaClass] = (),
    ) -> MetaClass:
        """
        Create and register a class.

        Raises:
            MetamodelError: if a class with the same name already exists
        """
        if name in self._classes:
            raise MetamodelError(name, f"already defined in package '{self.name}'")
        meta_class = MetaClass(name, abstract=abstract, super_types=super_types, package=self)
        self._classes[name] = meta_class
        logger.debug(f"Registered class {self.name}.{name} (supertypes: {[st.name for st in meta_class.super_types]})")
        return meta_class

    def get_class(self, name: str) -> Optional[MetaClass]:
        return self._classes.get(name)

    @property
    def classes(self) -> List[MetaClass]:
        """All classes in registration order."""
        return list(self._classes.values())

    def __contains__(self, name: str) -> bool:
        return name in self._classes

    def __repr__(self) -> str:
        return f"MetaPackage({self.name}, {len(self._classes)} classes)"
