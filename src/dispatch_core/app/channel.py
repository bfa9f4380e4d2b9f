# app/channel.py

from collections.abc import Callable

from .events import DispatchEvent
from .hooks import DispatchHooks, NoopHooks

Handler = Callable[[DispatchEvent], None]


class EventChannel:
    """Synchronous publish/subscribe keyed on event type; handlers run in subscription order."""

    def __init__(self, hooks: DispatchHooks | None = None):
        self._seq = 0
        self._subs: dict[type[DispatchEvent], list[Handler]] = {}
        self._hooks = hooks or NoopHooks()

    def on(self, etype: type[DispatchEvent], handler: Handler) -> Callable[[], None]:
        """Subscribe; returns a callable that removes the subscription."""
        self._subs.setdefault(etype, []).append(handler)

        def unsubscribe() -> None:
            handlers = self._subs.get(etype, [])
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def next_seq(self) -> int:
        self._seq += 1
        return self._seq

    def publish(self, ev: DispatchEvent) -> int:
        """Deliver to every handler; returns how many completed without raising.

        A failing handler is reported through the hooks and does not stop
        delivery to the ones after it.
        """
        delivered = 0
        for h in list(self._subs.get(type(ev), ())):
            try:
                h(ev)
            except Exception as exc:
                self._hooks.error(op="publish", exc=exc, event=type(ev).__name__, seq=ev.seq)
                continue
            delivered += 1
        return delivered
