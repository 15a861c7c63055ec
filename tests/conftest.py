"""
Pytest configuration for the metaresolver test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- Config reset around each test
- A small plumbing metamodel and matching model objects
"""

import os
from types import SimpleNamespace

import pytest

os.environ.setdefault("METARESOLVER_MACHINE_MODE", "1")

from metaresolver.config import reset_resolver_config
from metaresolver.logging_config import setup_logging, teardown_logging
from metaresolver.metamodel import MetaPackage, MetaObject


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Configure pytest for quiet operation."""
    os.environ.setdefault("METARESOLVER_MACHINE_MODE", "1")


@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - records enabled, console output suppressed.
    """
    setup_logging(level="DEBUG", suppress_console=True)
    yield
    teardown_logging()


@pytest.fixture(autouse=True)
def clean_resolver_config():
    """Drop cached config and METARESOLVER_ overrides set by a test."""
    reset_resolver_config()
    yield
    for key in list(os.environ.keys()):
        if key.startswith("METARESOLVER_") and key != "METARESOLVER_MACHINE_MODE":
            os.environ.pop(key, None)
    reset_resolver_config()


# ============================================================================
# METAMODEL FIXTURES
# ============================================================================

@pytest.fixture
def plumbing():
    """
    Build the plumbing metamodel used across the suite.

    Containment:
        Pipe.segments -> Segment, Pipe.fittings -> Fitting
        HighPressurePipe extends Pipe
        Manifold.inlets -> Segment, Manifold.valves -> Valve (in that order)
        Segment.flows -> Flow, Segment.leaks -> Leak, Segment.signals -> Signal

    Classes:
        Valve extends Segment (concrete)
        AbstractSegmentBase extends Segment (abstract)

    Connections:
        Flow: source -> Segment, target -> Segment (registered by tests)
        PressureFlow extends Flow, ControlFlow extends Flow
        Tagged (no endpoints), TaggedFlow extends Tagged, Flow
        Leak: no endpoint registration anywhere
        Signal: source only
    """
    pkg = MetaPackage("plumbing")
    ns = SimpleNamespace(package=pkg)

    ns.Segment = pkg.create_class("Segment")
    ns.Valve = pkg.create_class("Valve", super_types=[ns.Segment])
    ns.AbstractSegmentBase = pkg.create_class("AbstractSegmentBase", abstract=True, super_types=[ns.Segment])
    ns.Fitting = pkg.create_class("Fitting")

    ns.Pipe = pkg.create_class("Pipe")
    ns.segments = ns.Pipe.add_reference("segments", ns.Segment, containment=True)
    ns.fittings = ns.Pipe.add_reference("fittings", ns.Fitting, containment=True)
    ns.HighPressurePipe = pkg.create_class("HighPressurePipe", super_types=[ns.Pipe])

    ns.Manifold = pkg.create_class("Manifold")
    ns.inlets = ns.Manifold.add_reference("inlets", ns.Segment, containment=True)
    ns.valves = ns.Manifold.add_reference("valves", ns.Valve, containment=True)

    ns.Flow = pkg.create_class("Flow")
    ns.flow_source = ns.Flow.add_reference("source", ns.Segment, many=False)
    ns.flow_target = ns.Flow.add_reference("target", ns.Segment, many=False)
    ns.PressureFlow = pkg.create_class("PressureFlow", super_types=[ns.Flow])
    ns.ControlFlow = pkg.create_class("ControlFlow", super_types=[ns.Flow])
    ns.Tagged = pkg.create_class("Tagged", abstract=True)
    ns.TaggedFlow = pkg.create_class("TaggedFlow", super_types=[ns.Tagged, ns.Flow])

    ns.Leak = pkg.create_class("Leak")
    ns.Signal = pkg.create_class("Signal")
    ns.signal_source = ns.Signal.add_reference("source", ns.Segment, many=False)

    ns.flows = ns.Segment.add_reference("flows", ns.Flow, containment=True)
    ns.leaks = ns.Segment.add_reference("leaks", ns.Leak, containment=True)
    ns.signals = ns.Segment.add_reference("signals", ns.Signal, containment=True)

    return ns


@pytest.fixture
def plumbing_objects(plumbing):
    """Run-time objects of the plumbing metamodel."""
    return SimpleNamespace(
        segment=MetaObject(plumbing.Segment, name="s1"),
        other_segment=MetaObject(plumbing.Segment, name="s2"),
        valve=MetaObject(plumbing.Valve, name="v1"),
        pipe=MetaObject(plumbing.Pipe, name="p1"),
        fitting=MetaObject(plumbing.Fitting, name="f1"),
    )


@pytest.fixture
def endpoint_resolver(plumbing):
    """Resolver with the Flow, ControlFlow and Signal endpoints registered."""
    from metaresolver.resolution import ResolverBuilder

    return (
        ResolverBuilder()
        .connection_endpoint_references(plumbing.Flow, plumbing.flow_source, plumbing.flow_target)
        .connection_endpoint_references(plumbing.ControlFlow, plumbing.flow_source, None)
        .connection_endpoint_references(plumbing.Signal, plumbing.signal_source, None)
        .build()
    )
