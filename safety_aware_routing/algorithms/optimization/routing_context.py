"""
Routing context: the built graph and its lookup structures, built once.

``RoutingContext`` owns everything queries read (graph, segments, node
locator) and is passed explicitly into the route optimizer. ``ContextLoader``
builds it at most once; callers arriving while a build is in flight wait on
the same future instead of starting another build.
"""

import logging
import threading
import time
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

import networkx as nx

from ...config.routing_config import RoutingConfig
from ...data.distance_utils import get_bounds
from ...data.models import StreetSegment
from ...mapping.network.graph_builder import build_graph, graph_stats
from ...mapping.network.nearest_node import NodeLocator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class RoutingContext:
    """Immutable, shareable state for answering route queries."""
    graph: nx.MultiGraph
    segments: Tuple[StreetSegment, ...]
    locator: NodeLocator
    config: RoutingConfig = field(default_factory=RoutingConfig)
    build_time: float = 0.0

    @classmethod
    def from_segments(cls, segments: Sequence[StreetSegment],
                      config: Optional[RoutingConfig] = None) -> 'RoutingContext':
        """Build the graph and node locator for a set of enriched segments."""
        config = config or RoutingConfig()
        config.validate()

        start_time = time.time()
        graph = build_graph(segments, config)
        locator = NodeLocator(graph)
        build_time = time.time() - start_time

        logger.info(f"Routing context ready: {len(graph.nodes)} nodes, "
                    f"{len(graph.edges)} edges in {build_time * 1000:.1f}ms")
        return cls(graph, tuple(segments), locator, config, build_time)

    def stats(self) -> Dict[str, Any]:
        stats = graph_stats(self.graph)
        stats['segments'] = len(self.segments)
        stats['build_time_ms'] = round(self.build_time * 1000, 1)
        if self.segments:
            stats['bounds'] = get_bounds([c for s in self.segments for c in (s.start, s.end)])
        return stats


class ContextLoader:
    """
    Single-flight lazy builder for a ``RoutingContext``.

    The first caller runs ``build_fn``; concurrent callers block on the same
    future. A failed build is not cached, so a later call retries.
    """

    def __init__(self, build_fn: Callable[[], RoutingContext]):
        """
        Initialize the loader.

        Args:
            build_fn: Zero-argument callable that loads data and builds the context
        """
        self._build_fn = build_fn
        self._lock = threading.Lock()
        self._future: Optional[Future] = None

    @property
    def is_loaded(self) -> bool:
        future = self._future
        return future is not None and future.done() and future.exception() is None

    def get(self, timeout: Optional[float] = None) -> RoutingContext:
        """
        Return the context, building it on first use.

        Args:
            timeout: Seconds to wait for another caller's in-flight build

        Raises:
            Whatever ``build_fn`` raised, for the builder and all waiters
        """
        with self._lock:
            future = self._future
            is_builder = future is None
            if is_builder:
                future = self._future = Future()

        if not is_builder:
            return future.result(timeout)

        logger.info("Building routing context...")
        try:
            context = self._build_fn()
        except BaseException as e:
            # waiters must never be left on an unresolved future
            logger.error(f"Routing context build failed: {e!r}")
            with self._lock:
                self._future = None
            future.set_exception(e)
            raise

        future.set_result(context)
        return context
