"""Fluent assembly of MetaModelResolver configuration."""

from typing import Dict, Optional

from metaresolver.config import ResolverConfig
from metaresolver.exceptions import ConfigError
from metaresolver.metamodel import MetaClass, Reference
from .resolver import (
    ConnectionPredicate,
    ContainmentPredicate,
    EndpointRegistration,
    MetaModelResolver,
)


class ResolverBuilder:
    """
    Collects predicates and endpoint registrations, then builds a resolver.

    Each build() snapshots the current registrations, so modifying the
    builder afterwards does not affect resolvers already built. Registering
    twice for the same key keeps the later registration.
    """

    def __init__(self):
        self._containment_predicates: Dict[Reference, ContainmentPredicate] = {}
        self._connection_predicates: Dict[Reference, ConnectionPredicate] = {}
        self._endpoint_registrations: Dict[MetaClass, EndpointRegistration] = {}
        self._config: Optional[ResolverConfig] = None

    def containment_predicate(self, ref: Reference, predicate: ContainmentPredicate) -> "ResolverBuilder":
        """
        Add a predicate further restricting when ref may contain a class.

        Args:
            ref: The containment reference
            predicate: Called with the ClassPair (container, contained); ref is
                only selected if it returns True

        Returns:
            self (for fluent API)
        """
        self._check_callable(ref, predicate)
        self._containment_predicates[ref] = predicate
        return self

    def connection_predicate(self, ref: Reference, predicate: ConnectionPredicate) -> "ResolverBuilder":
        """
        Add a predicate checking whether a connection can be created.

        Args:
            ref: The containment reference on the source class holding the connection
            predicate: Called with the ConnectionContext of the prospective connection

        Returns:
            self (for fluent API)
        """
        self._check_callable(ref, predicate)
        self._connection_predicates[ref] = predicate
        return self

    def connection_endpoint_references(
        self,
        conn_class: MetaClass,
        source_ref: Optional[Reference],
        target_ref: Optional[Reference],
    ) -> "ResolverBuilder":
        """
        Register the source and target references of a connection class.

        A None reference records that conn_class has no such endpoint; its
        supertypes are then not consulted for that role.

        Returns:
            self (for fluent API)
        """
        self._endpoint_registrations[conn_class] = EndpointRegistration(source=source_ref, target=target_ref)
        return self

    def with_config(self, config: ResolverConfig) -> "ResolverBuilder":
        """Use config instead of the global resolver configuration."""
        if not isinstance(config, ResolverConfig):
            raise ConfigError(f"Expected ResolverConfig, got {type(config).__name__}")
        self._config = config
        return self

    def build(self) -> MetaModelResolver:
        return MetaModelResolver(
            containment_predicates=self._containment_predicates,
            connection_predicates=self._connection_predicates,
            endpoint_registrations=self._endpoint_registrations,
            config=self._config,
        )

    @staticmethod
    def _check_callable(ref: Reference, predicate) -> None:
        if not callable(predicate):
            raise ConfigError(f"Predicate for {ref!r} is not callable: {predicate!r}")
