# domain/errors.py


class DispatchError(Exception):
    """Base for every failure the dispatch core surfaces to its caller."""


class ConfigurationError(DispatchError):
    """Station registry and road network disagree, or a road weight is not positive."""


class InvalidVertexError(DispatchError):
    def __init__(self, vertex: int, vertex_count: int):
        super().__init__(f"vertex {vertex} outside [0, {vertex_count})")
        self.vertex, self.vertex_count = vertex, vertex_count


class EmptyGraphError(DispatchError):
    pass


class UnreachableError(DispatchError):
    def __init__(self, source: int, destination: int):
        super().__init__(f"no road path from {source} to {destination}")
        self.source, self.destination = source, destination


class NoStationsAvailableError(DispatchError):
    pass


class InvalidSeverityError(DispatchError):
    def __init__(self, severity):
        super().__init__(f"severity must be 1, 2 or 3, got {severity!r}")
        self.severity = severity


class RoutingFailedError(DispatchError):
    """Wraps a graph failure raised while routing on behalf of the coordinator."""


class ProtocolError(DispatchError):
    """A wire line could not be parsed into a request."""
