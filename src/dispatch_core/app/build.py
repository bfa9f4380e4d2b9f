# dispatch_core/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from pydantic import ValidationError

from dispatch_core.app.channel import EventChannel
from dispatch_core.app.coordinator import DispatchCoordinator
from dispatch_core.app.hooks import DispatchHooks, NoopHooks
from dispatch_core.config.models import DispatchModel
from dispatch_core.domain.errors import ConfigurationError
from dispatch_core.domain.geo.projection import Viewport
from dispatch_core.domain.routing.road_graph import RoadGraph
from dispatch_core.io.dispatch_logging import DispatchLogging  # JSON logs
from dispatch_core.io.line_protocol import LineProtocolHandler
from dispatch_core.io.recorder import Recorder
from dispatch_core.runtime.registries import make_locator


@dataclass
class App:
    model: DispatchModel
    coordinator: DispatchCoordinator
    graph: RoadGraph
    channel: EventChannel
    viewport: Viewport
    protocol: LineProtocolHandler


def load_model(cfg: DispatchModel | Mapping) -> DispatchModel:
    if isinstance(cfg, DispatchModel):
        return cfg
    try:
        return DispatchModel.model_validate(cfg)
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc


def build(
    cfg: DispatchModel | Mapping,
    *,
    use_logging: bool = True,
    recorder: Recorder | None = None,
    hooks: DispatchHooks | None = None,
) -> App:
    # 0) Validate config
    model = load_model(cfg)

    # 1) Static network: registry + undirected road graph
    stations = [s.to_station() for s in model.network.stations]
    graph = RoadGraph.from_segments(len(stations), (r.to_segment() for r in model.network.roads))

    # 2) Hooks & event channel (explicit hooks win over the logging flag)
    if hooks is None:
        hooks = (
            DispatchLogging(
                run_id=model.run_id,
                level=model.log.level,
                debug=model.log.debug,
                recorder=recorder,
            )
            if use_logging
            else NoopHooks()
        )
    channel = EventChannel(hooks=hooks)

    # 3) Coordinator (inject deps explicitly)
    coordinator = DispatchCoordinator(
        stations,
        graph,
        locator=make_locator(model.locator),
        hooks=hooks,
        channel=channel,
    )

    vp = model.viewport
    viewport = Viewport(vp.center[0], vp.center[1], vp.zoom, vp.width, vp.height)

    return App(model, coordinator, graph, channel, viewport, LineProtocolHandler(coordinator))
