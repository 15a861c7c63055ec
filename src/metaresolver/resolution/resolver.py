"""
Metamodel resolver.

Answers structural questions about a metamodel and caches the answers:
which containment reference of a class holds instances of another class,
which references are the source and target endpoints of a connection class,
and whether a connection may join two given objects.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from metaresolver.config import ResolverConfig, get_resolver_config
from metaresolver.logging_config import logger
from metaresolver.metamodel import MetaClass, Reference, class_of
from metaresolver.schemas import ClassPair, ConnectionContext
from .cache import MemoCache

ContainmentPredicate = Callable[[ClassPair], bool]
ConnectionPredicate = Callable[[ConnectionContext], bool]


@dataclass(frozen=True)
class EndpointRegistration:
    """Explicit endpoint references of a connection class. Either may be None."""
    source: Optional[Reference]
    target: Optional[Reference]


class MetaModelResolver:
    """
    Resolves (and caches) containment and connection-endpoint references.

    Instances are assembled with ResolverBuilder and are immutable afterwards.
    All answers are memoized for the resolver's lifetime; a resolver is safe
    to share between threads.

    Example:
        >>> resolver = (MetaModelResolver.builder()
        ...     .connection_endpoint_references(flow, flow_source, flow_target)
        ...     .build())
        >>> resolver.resolve_containment(pipe, valve)
        Reference(Pipe.segments -> Segment, containment)
    """

    def __init__(
        self,
        containment_predicates: Mapping[Reference, ContainmentPredicate],
        connection_predicates: Mapping[Reference, ConnectionPredicate],
        endpoint_registrations: Mapping[MetaClass, EndpointRegistration],
        config: Optional[ResolverConfig] = None,
    ):
        self.config = config or get_resolver_config()
        self._containment_predicates = MappingProxyType(dict(containment_predicates))
        self._connection_predicates = MappingProxyType(dict(connection_predicates))
        self._endpoint_registrations = MappingProxyType(dict(endpoint_registrations))

        self._containment_cache = self._new_cache("containment", self._load_containment)
        self._source_cache = self._new_cache(
            "connection_source", lambda conn_class: self._load_endpoint(conn_class, "source")
        )
        self._target_cache = self._new_cache(
            "connection_target", lambda conn_class: self._load_endpoint(conn_class, "target")
        )

        logger.debug(
            f"Built MetaModelResolver: {len(self._containment_predicates)} containment predicates, "
            f"{len(self._connection_predicates)} connection predicates, "
            f"{len(self._endpoint_registrations)} endpoint registrations"
        )

    @classmethod
    def builder(cls) -> "ResolverBuilder":
        from .builder import ResolverBuilder
        return ResolverBuilder()

    def _new_cache(self, name: str, loader) -> MemoCache:
        return MemoCache(
            name,
            loader,
            collect_stats=self.config.collect_stats,
            trace=self.config.trace_resolution,
        )

    # Containment

    def resolve_containment(self, container: MetaClass, contained: MetaClass) -> Optional[Reference]:
        """
        Return the containment reference of container designed to hold contained.

        Args:
            container: The containing class
            contained: The class of the prospective child

        Returns:
            The first containment reference (own or inherited, in declared order)
            whose type accepts contained and whose predicate, if any, accepts the
            pair; None if there is none
        """
        return self._containment_cache.get(ClassPair.of(container, contained))

    def _load_containment(self, pair: ClassPair) -> Optional[Reference]:
        for ref in pair.first.all_containments:
            if not ref.reference_type.is_super_type_of(pair.second):
                continue
            predicate = self._containment_predicates.get(ref)
            if predicate is None or predicate(pair):
                return ref
        return None

    # Connection endpoints

    def resolve_source_reference(self, conn_class: MetaClass) -> Optional[Reference]:
        """
        Return the source reference of a connection class.

        Falls back to the supertypes of conn_class (all_super_types order,
        root-most ancestors first) when it has no explicit registration; the
        first supertype resolving to a reference wins.
        """
        return self._source_cache.get(conn_class)

    def resolve_target_reference(self, conn_class: MetaClass) -> Optional[Reference]:
        """Return the target reference of a connection class (see resolve_source_reference)."""
        return self._target_cache.get(conn_class)

    def resolve_endpoints(self, conn_class: MetaClass) -> Tuple[Optional[Reference], Optional[Reference]]:
        """Return (source reference, target reference) of a connection class."""
        return self.resolve_source_reference(conn_class), self.resolve_target_reference(conn_class)

    def _load_endpoint(self, conn_class: MetaClass, role: str) -> Optional[Reference]:
        # An explicit registration is authoritative, even when its slot is None
        registration = self._endpoint_registrations.get(conn_class)
        if registration is not None:
            return getattr(registration, role)

        cache = self._source_cache if role == "source" else self._target_cache
        # Ancestors first, each through its own memoized lookup
        for super_type in conn_class.all_super_types:
            ref = cache.get(super_type)
            if ref is not None:
                return ref
        return None

    # Connection validity

    def can_connect(self, source_obj: Any, target_obj: Any, conn_class: MetaClass) -> bool:
        """
        Return whether a new conn_class connection may join source_obj to target_obj.

        The source object's class must contain conn_class, conn_class must have
        a target reference accepting target_obj, and the connection predicate
        registered on the containment reference (if any) must accept the
        connection context. A connection class without a target reference is
        never connectable.
        """
        source_class = class_of(source_obj)
        if source_class is None:
            return False
        conn_ref = self.resolve_containment(source_class, conn_class)
        if conn_ref is None:
            return False

        target_ref = self.resolve_target_reference(conn_class)
        if target_ref is None:
            return False
        if not target_ref.reference_type.is_instance(target_obj):
            return False

        predicate = self._connection_predicates.get(conn_ref)
        if predicate is None:
            return True
        context = ConnectionContext(
            source_object=source_obj,
            target_object=target_obj,
            connection_class=conn_class,
        )
        return bool(predicate(context))

    def connectable_classes(
        self,
        source_obj: Any,
        target_obj: Any,
        candidates: Iterable[MetaClass],
    ) -> List[MetaClass]:
        """Filter candidate connection classes down to those that can join the two objects."""
        return [conn_class for conn_class in candidates if self.can_connect(source_obj, target_obj, conn_class)]

    # Introspection

    def cache_stats(self) -> Dict[str, Dict[str, int]]:
        """Return entry and hit/miss counts for each cache."""
        return {
            "containment": self._containment_cache.stats(),
            "connection_source": self._source_cache.stats(),
            "connection_target": self._target_cache.stats(),
        }
