from __future__ import annotations

import copy
from typing import Any, Callable, Dict, List, Optional

from actorsync.core.identity.models import CompositeView


Hook = Callable[[CompositeView], None]

LOGIN = "login"
LOGOUT = "logout"


class LifecycleDispatcher:
    """
    Ordered login / logout hook registries.

    - hooks run in registration order with the composite view at the edge
    - a raising hook is reported and ends its batch (later hooks in the same
      batch are skipped); nothing propagates to the caller
    - registration only affects future batches
    """

    def __init__(self, *, logger=None, error_reporter=None, event_logger=None):
        self.logger = logger
        self.error_reporter = error_reporter
        self.event_logger = event_logger
        self._hooks: Dict[str, List[Hook]] = {LOGIN: [], LOGOUT: []}

    def on_login(self, hook: Hook) -> None:
        self._register(LOGIN, hook)

    def on_logout(self, hook: Hook) -> None:
        self._register(LOGOUT, hook)

    def hooks(self, kind: str) -> List[Hook]:
        return list(self._hooks[self._kind(kind)])

    def fire_login(self, view: CompositeView, *, trace_id: str = "identity") -> int:
        return self._fire(LOGIN, view, trace_id=trace_id)

    def fire_logout(self, view: CompositeView, *, trace_id: str = "identity") -> int:
        return self._fire(LOGOUT, view, trace_id=trace_id)

    # ---- internals ----
    @staticmethod
    def _kind(kind: str) -> str:
        kind = str(kind or "").strip().lower()
        if kind not in {LOGIN, LOGOUT}:
            raise ValueError(f"unknown lifecycle event: {kind}")
        return kind

    def _register(self, kind: str, hook: Hook) -> None:
        if not callable(hook):
            raise ValueError("hook must be callable")
        self._hooks[kind].append(hook)

    def _fire(self, kind: str, view: CompositeView, *, trace_id: str) -> int:
        # snapshot: hooks registered during this batch wait for the next edge
        batch = list(self._hooks[kind])
        if self.event_logger is not None:
            self.event_logger.log(trace_id, f"identity.{kind}", {"actor_id": view.id, "hooks": len(batch)})
        completed = 0
        for hook in batch:
            try:
                hook(view)
            except Exception as e:  # noqa: BLE001
                self._report(kind, hook, e, trace_id=trace_id, skipped=len(batch) - completed - 1)
                break
            completed += 1
        return completed

    def _report(self, kind: str, hook: Hook, exc: Exception, *, trace_id: str, skipped: int) -> None:
        name = getattr(hook, "__name__", "hook")
        if self.logger is not None:
            self.logger.error(f"[{trace_id}] {kind} hook {name} failed: {exc}; skipped {skipped} remaining hook(s)")
        if self.error_reporter is not None:
            ctx: Dict[str, Any] = {"event": kind, "hook": name, "skipped": skipped}
            self.error_reporter.report_exception(exc, trace_id=trace_id, subsystem="hooks", context=ctx)


def view_of(
    actor_id: Optional[str],
    public: Optional[Dict[str, Any]],
    private: Optional[Dict[str, Any]],
    server: Optional[Dict[str, Any]],
) -> CompositeView:
    return CompositeView(
        id=actor_id,
        public=copy.deepcopy(public),
        private=copy.deepcopy(private),
        server=copy.deepcopy(server),
    )
