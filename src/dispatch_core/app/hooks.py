# app/hooks.py
from dispatch_core.app.protocols import DispatchHooks

__all__ = ["DispatchHooks", "NoopHooks"]


class NoopHooks:
    def report_start(self, **_):
        pass

    def incident_reported(self, *_, **__):
        pass

    def route_computed(self, *_, **__):
        pass

    def error(self, *_, **__):
        pass
