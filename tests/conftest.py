"""Shared fixtures for the safety-aware routing tests."""

import pytest

from safety_aware_routing.mapping.network.graph_builder import build_graph
from helpers import P1, P2, make_segment


@pytest.fixture
def safe_segment():
    # Longer but well lit, protected lane, low crime
    return make_segment('safe', [P1, (49.2806, -123.1198), P2], length=0.12,
                        infra=9, light=9, crime=1, amenity=8, disruption=0)


@pytest.fixture
def risky_segment():
    # Shorter, direct, poorly lit, high crime
    return make_segment('risky', [P1, P2], length=0.10,
                        infra=4, light=3, crime=8, amenity=4, disruption=0)


@pytest.fixture
def parallel_graph(safe_segment, risky_segment):
    """Two parallel connections between P1 and P2."""
    return build_graph([safe_segment, risky_segment])


@pytest.fixture
def grid_segments():
    """
    Small street grid::

        a --- b --- c
        |           |
        d --------- e

    a-b-c is the short way, a-d-e-c is longer but safer.
    """
    a = (49.2800, -123.1200)
    b = (49.2800, -123.1190)
    c = (49.2800, -123.1180)
    d = (49.2790, -123.1200)
    e = (49.2790, -123.1180)
    return [
        make_segment('ab', [a, b], length=0.07, infra=4, light=3, crime=8, amenity=4),
        make_segment('bc', [b, c], length=0.07, infra=4, light=3, crime=8, amenity=4),
        make_segment('ad', [a, d], length=0.11, infra=9, light=9, crime=1, amenity=8),
        # digitised e -> d to exercise reversal
        make_segment('de', [e, (49.2790, -123.1190), d], length=0.15, infra=9, light=9, crime=1, amenity=8),
        make_segment('ec', [e, c], length=0.11, infra=9, light=9, crime=1, amenity=8),
    ]


@pytest.fixture
def grid_graph(grid_segments):
    return build_graph(grid_segments)


@pytest.fixture
def disconnected_graph():
    island_a = make_segment('island_a', [(49.0, -123.0), (49.001, -123.0)], length=0.11)
    island_b = make_segment('island_b', [(49.1, -123.1), (49.101, -123.1)], length=0.11)
    return build_graph([island_a, island_b])
