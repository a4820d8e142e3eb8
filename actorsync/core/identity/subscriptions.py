from __future__ import annotations

import threading
import uuid
from typing import Any, Callable, Dict, List, Mapping, Optional

from actorsync.core.errors import PayloadError, ServiceError
from actorsync.core.identity.lifecycle import LifecycleDispatcher
from actorsync.core.identity.models import ActorSubscription, CompositeView, SubscriptionKind
from actorsync.core.identity.partition import PrivacyPartition


def _describe(err: Any) -> str:
    if isinstance(err, Mapping) and err.get("message"):
        return str(err.get("message"))
    return str(err)


class SubscriptionMultiplexer:
    """
    One current-actor listener plus one lazily opened listener per other actor.

    Current-actor events `(err, data)`:
    - err           -> reported, state untouched
    - data is None  -> logout: fire logout hooks (if an actor was set), then clear
    - data          -> partition; fire login hooks after it if this update is
                       the one that establishes the actor's public profile

    Other-actor events `(err, profile)` stamp and cache the profile. Listeners
    are never closed; a second watch request for the same id is a no-op.
    """

    def __init__(
        self,
        *,
        service: Any,
        partition: PrivacyPartition,
        dispatcher: LifecycleDispatcher,
        view: Callable[[], CompositeView],
        lock: Optional[threading.RLock] = None,
        logger=None,
        error_reporter=None,
        event_logger=None,
    ):
        self.service = service
        self.partition = partition
        self.dispatcher = dispatcher
        self._view = view
        self._lock = lock or threading.RLock()
        self.logger = logger
        self.error_reporter = error_reporter
        self.event_logger = event_logger
        self._current: Optional[ActorSubscription] = None
        self._actors: Dict[str, ActorSubscription] = {}

    @property
    def started(self) -> bool:
        return self._current is not None

    def start(self) -> None:
        with self._lock:
            if self._current is not None:
                return
            self._current = ActorSubscription(kind=SubscriptionKind.current)
        self.service.listen_to_current_actor(self.handle_current)

    def watch_actor(self, actor_id: str) -> bool:
        """Open a listener for `actor_id` unless one is already open. Returns True if opened."""
        if actor_id is None or actor_id == "":
            return False
        with self._lock:
            if actor_id in self._actors:
                return False
            self._actors[actor_id] = ActorSubscription(kind=SubscriptionKind.actor, actor_id=actor_id)
        if self.event_logger is not None:
            self.event_logger.log(f"actor:{actor_id}", "identity.actor_watch", {"actor_id": actor_id})
        try:
            self.service.listen_to_actor(actor_id, lambda err, profile, a=actor_id: self.handle_actor(a, err, profile))
        except Exception as e:  # noqa: BLE001
            # drop the registration so a later miss can reopen it
            with self._lock:
                self._actors.pop(actor_id, None)
            self._report_service_error(e, trace_id=f"actor:{actor_id}", actor_id=actor_id, op="listen_to_actor")
            return False
        return True

    def watched(self) -> List[str]:
        with self._lock:
            return list(self._actors)

    def subscriptions(self) -> List[ActorSubscription]:
        with self._lock:
            subs = [self._current] if self._current is not None else []
            return subs + list(self._actors.values())

    # ---- handlers ----
    def handle_current(self, err: Any, data: Optional[Mapping[str, Any]]) -> None:
        trace_id = uuid.uuid4().hex
        if err:
            self._report_service_error(err, trace_id=trace_id, op="listen_to_current_actor")
            return
        with self._lock:
            if data is None:
                self._handle_logout(trace_id)
                return
            try:
                payload = self.partition.parse(data)
            except PayloadError as e:
                self.report_payload_error(e, trace_id=trace_id, op="listen_to_current_actor")
                return
            previous = self.partition.cache.peek(self.partition.current_id)
            establishing = previous is None and payload.public_info is not None
            self.partition.apply(payload)
            if self.logger is not None:
                self.logger.info(f"[{trace_id}] current actor update id={payload.id} establishing={establishing}")
            if establishing:
                self.dispatcher.fire_login(self._view(), trace_id=trace_id)

    def handle_actor(self, actor_id: str, err: Any, profile: Optional[Dict[str, Any]]) -> None:
        if err:
            self._report_service_error(err, trace_id=f"actor:{actor_id}", actor_id=actor_id, op="listen_to_actor")
            return
        if profile is None:
            return
        with self._lock:
            self.partition.cache.set(actor_id, profile)

    # ---- internals ----
    def _handle_logout(self, trace_id: str) -> None:
        if self.partition.current_id is not None:
            if self.logger is not None:
                self.logger.info(f"[{trace_id}] current actor {self.partition.current_id} logged out")
            self.dispatcher.fire_logout(self._view(), trace_id=trace_id)
        self.partition.clear()

    def _report_service_error(self, err: Any, *, trace_id: str, **ctx: Any) -> None:
        msg = _describe(err)
        if self.logger is not None:
            self.logger.warning(f"[{trace_id}] identity service error: {msg}")
        if self.event_logger is not None:
            self.event_logger.log(trace_id, "identity.service_error", {"error": msg, **ctx})
        if self.error_reporter is not None:
            exc = err if isinstance(err, BaseException) else ServiceError(error=msg, **ctx)
            self.error_reporter.report_exception(exc, trace_id=trace_id, subsystem="service", context=ctx)

    def report_payload_error(self, exc: Exception, *, trace_id: str, op: str) -> None:
        if self.logger is not None:
            self.logger.warning(f"[{trace_id}] rejected current actor payload from {op}: {exc}")
        if self.event_logger is not None:
            self.event_logger.log(trace_id, "identity.payload_rejected", {"op": op})
        if self.error_reporter is not None:
            self.error_reporter.report_exception(exc, trace_id=trace_id, subsystem="partition", context={"op": op})
