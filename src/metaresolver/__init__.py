"""
metaresolver - Structural resolution for object-graph metamodels

Answers which containment reference holds a class, which references are the
endpoints of a connection class, and whether a connection may join two objects.
"""

__version__ = "0.1.0"

from loguru import logger

# Silent by default; applications opt in with logger.enable("metaresolver")
logger.disable("metaresolver")

from metaresolver.config import ResolverConfig, get_resolver_config, reset_resolver_config
from metaresolver.logging_config import setup_logging, teardown_logging
from metaresolver.exceptions import MetaResolverError, ConfigError, MetamodelError
from metaresolver.metamodel import MetaPackage, MetaClass, Reference, MetaObject, class_of
from metaresolver.schemas import ClassPair, ConnectionContext
from metaresolver.resolution import MetaModelResolver, ResolverBuilder, predicates

__all__ = [
    "__version__",
    "ResolverConfig",
    "get_resolver_config",
    "reset_resolver_config",
    "setup_logging",
    "teardown_logging",
    "MetaResolverError",
    "ConfigError",
    "MetamodelError",
    "MetaPackage",
    "MetaClass",
    "Reference",
    "MetaObject",
    "class_of",
    "ClassPair",
    "ConnectionContext",
    "MetaModelResolver",
    "ResolverBuilder",
    "predicates",
]
