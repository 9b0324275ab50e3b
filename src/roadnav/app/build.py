# roadnav/app/build.py
import time
from collections.abc import Mapping
from dataclasses import dataclass

from roadnav.app.protocols import RoutePlanner
from roadnav.app.service import RoutingService
from roadnav.config.models import AppModel, GraphByPath
from roadnav.domain.locations import LocationIndex
from roadnav.domain.road_graph import RoadGraph
from roadnav.domain.spatial.kdtree import SpatialIndex
from roadnav.geo.projection import Projection
from roadnav.io.query_logging import NoopHooks, QueryLogging
from roadnav.runtime.registries import make_router, resolve_graph


@dataclass
class App:
    config: AppModel
    graph: RoadGraph
    index: SpatialIndex
    router: RoutePlanner
    places: LocationIndex
    service: RoutingService


def build(cfg: AppModel | Mapping, *, use_logging: bool = True) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, AppModel) else AppModel.model_validate(cfg)

    hooks = (
        QueryLogging(
            app=model.name,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
        )
        if use_logging
        else NoopHooks()
    )
    source = model.graph.file if isinstance(model.graph, GraphByPath) else "inline"
    hooks.build_start(source=source)
    t0 = time.perf_counter()

    # 1) Graph; any malformed input raises here and nothing is returned
    graph, places = resolve_graph(model.graph)

    # 2) Isolated vertices must be gone before the index sees them
    pruned = graph.prune_isolated()

    # 3) Index over projected coordinates
    projection = Projection(**model.projection.model_dump())
    index = SpatialIndex.from_graph(graph, projection)

    # 4) Router & service
    router = make_router(model.router, graph=graph)
    service = RoutingService(graph=graph, index=index, router=router, places=places, hooks=hooks)

    hooks.build_end(
        vertices=len(graph),
        edges=graph.edge_count(),
        pruned=pruned,
        depth=index.depth(),
        wall_ms=(time.perf_counter() - t0) * 1000,
    )
    return App(model, graph, index, router, places, service)
