"""
Resolver Configuration.

Runtime knobs for the resolver and the bundled metamodel.
All values configurable via METARESOLVER_* environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Dict, Any


ENV_PREFIX = "METARESOLVER_"

DEFAULT_TRACE_RESOLUTION = False       # Log every cache-miss computation
DEFAULT_COLLECT_STATS = True           # Count cache hits and misses
DEFAULT_MAX_HIERARCHY_DEPTH = 50       # Deepest supertype chain accepted

_TRUTHY = frozenset({"true", "1", "yes", "on"})
_FALSY = frozenset({"false", "0", "no", "off"})


def _parse_override(raw: str, default: Any) -> Any:
    """Coerce raw to the type of default; None when it cannot be read that way."""
    if isinstance(default, bool):
        token = raw.strip().lower()
        if token in _TRUTHY:
            return True
        if token in _FALSY:
            return False
        return None
    if isinstance(default, int):
        try:
            value = int(raw.strip())
        except ValueError:
            return None
        return value if value > 0 else None
    return raw


def _from_env(setting: str, default: Any):
    """Factory for a dataclass field reading METARESOLVER_<SETTING> at construction time."""
    def load():
        raw = os.environ.get(ENV_PREFIX + setting.upper())
        if raw is None:
            return default
        parsed = _parse_override(raw, default)
        return default if parsed is None else parsed

    return field(default_factory=load)


@dataclass
class ResolverConfig:
    """
    Resolver configuration.

    Values are loaded from environment variables with the METARESOLVER_ prefix,
    or fall back to the defaults above. Malformed values (and non-positive
    integers) are ignored.

    Environment Variables:
        METARESOLVER_TRACE_RESOLUTION: Log each resolution computed on a cache miss (default: false)
        METARESOLVER_COLLECT_STATS: Track cache hits/misses for cache_stats() (default: true)
        METARESOLVER_MAX_HIERARCHY_DEPTH: Max supertype chain length in the bundled metamodel (default: 50)
    """

    trace_resolution: bool = _from_env("trace_resolution", DEFAULT_TRACE_RESOLUTION)
    collect_stats: bool = _from_env("collect_stats", DEFAULT_COLLECT_STATS)
    max_hierarchy_depth: int = _from_env("max_hierarchy_depth", DEFAULT_MAX_HIERARCHY_DEPTH)

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {
            "trace_resolution": self.trace_resolution,
            "collect_stats": self.collect_stats,
            "max_hierarchy_depth": self.max_hierarchy_depth,
        }


# Global instance for convenience
_default_config: Optional[ResolverConfig] = None


def get_resolver_config() -> ResolverConfig:
    """Get the global resolver configuration."""
    global _default_config
    if _default_config is None:
        _default_config = ResolverConfig()
    return _default_config


def reset_resolver_config() -> None:
    """Reset global config (useful after env var changes or for testing)."""
    global _default_config
    _default_config = None
