from __future__ import annotations

"""
IdentityStore: the process-wide identity state container.

Owns the identity cache, the private/server segments and the current actor id,
and is the only thing that mutates them. Consumers get an instance injected
(see `actorsync.core.bootstrap.build_identity_store`); views read from it and
write only through `login`, `create_user` and `ProfileHandle.save`.
"""

import copy
import threading
import uuid
from typing import Any, Callable, Dict, List, Optional, Sequence

from actorsync.core.errors import PayloadError, PermissionDeniedError, ValidationError
from actorsync.core.events import redact
from actorsync.core.identity.cache import IdentityCache
from actorsync.core.identity.lifecycle import Hook, LifecycleDispatcher, view_of
from actorsync.core.identity.models import CompositeView, ProfileHandle
from actorsync.core.identity.partition import PrivacyPartition
from actorsync.core.identity.subscriptions import SubscriptionMultiplexer


Callback = Callable[[Any, Any], None]


class IdentityStore:
    def __init__(
        self,
        *,
        service: Any,
        display_name_fallback_field: str = "email",
        required_create_fields: Sequence[str] = ("email", "password"),
        logger=None,
        error_reporter=None,
        event_logger=None,
    ):
        self.service = service
        self.logger = logger
        self.error_reporter = error_reporter
        self.event_logger = event_logger
        self.required_create_fields = [str(f) for f in required_create_fields]

        # single coordination point for every write to cache + segments
        self._lock = threading.RLock()
        self.cache = IdentityCache(display_name_fallback_field=display_name_fallback_field)
        self.partition = PrivacyPartition(cache=self.cache)
        self.dispatcher = LifecycleDispatcher(logger=logger, error_reporter=error_reporter, event_logger=event_logger)
        self.subscriptions = SubscriptionMultiplexer(
            service=service,
            partition=self.partition,
            dispatcher=self.dispatcher,
            view=lambda: self.full_user,
            lock=self._lock,
            logger=logger,
            error_reporter=error_reporter,
            event_logger=event_logger,
        )
        self.cache.bind_miss_handler(self.subscriptions.watch_actor)

    def init(self) -> None:
        self.subscriptions.start()

    # ---- hooks ----
    def on_login(self, hook: Hook) -> None:
        """Run `hook(full_user)` each time a current actor becomes established."""
        self.dispatcher.on_login(hook)

    def on_logout(self, hook: Hook) -> None:
        """Run `hook(full_user)` each time the established actor logs out (before state is cleared)."""
        self.dispatcher.on_logout(hook)

    # ---- derived views (always recomputed) ----
    @property
    def user_id(self) -> Optional[str]:
        return self.partition.current_id

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self.cache.peek(self.partition.current_id))

    @property
    def private_info(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self.partition.private_info)

    @property
    def server_info(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self.partition.server_info)

    @property
    def full_user(self) -> CompositeView:
        with self._lock:
            return view_of(self.partition.current_id, self.cache.peek(self.partition.current_id), self.partition.private_info, self.partition.server_info)

    # ---- lookups ----
    def get_user_by_id(self, actor_id: str) -> Optional[Dict[str, Any]]:
        """
        Public profile for `actor_id`, or None.

        A miss opens a listener for that actor (once per id); the profile shows
        up on a later call after the service delivers it.
        """
        with self._lock:
            profile = self.cache.peek(actor_id)
            if profile is not None:
                return copy.deepcopy(profile)
        # the miss opens a listener; never call into the service under the lock
        return copy.deepcopy(self.cache.get(actor_id))

    def get_profile_handle(self, actor_id: str) -> Optional[ProfileHandle]:
        profile = self.get_user_by_id(actor_id)
        if profile is None:
            return None
        return ProfileHandle(actor_id=actor_id, profile=profile, _saver=self._save_public_profile)

    def search_local(self, field: str, query: str) -> List[Dict[str, Any]]:
        """Case-insensitive substring match on a string field of every cached profile."""
        needle = str(query or "").casefold()
        with self._lock:
            profiles = self.cache.values()
        out: List[Dict[str, Any]] = []
        for p in profiles:
            v = p.get(field)
            if isinstance(v, str) and needle in v.casefold():
                out.append(copy.deepcopy(p))
        return out

    # ---- service delegation ----
    def login(self, credentials: Dict[str, Any], callback: Callback) -> None:
        trace_id = uuid.uuid4().hex
        if self.logger is not None:
            self.logger.info(f"[{trace_id}] login requested: {redact(dict(credentials or {}))}")
        self.service.login(credentials, callback)

    def logout(self) -> None:
        actor = self.user
        if self.logger is not None:
            self.logger.info(f"logout requested for {self.user_id}")
        self.service.logout(actor)

    def create_user(self, fields: Optional[Dict[str, Any]], callback: Callback) -> None:
        trace_id = uuid.uuid4().hex
        missing = [f for f in self.required_create_fields if not (fields or {}).get(f)]
        if missing:
            err = ValidationError(f"You must provide: {', '.join(missing)}", missing=missing)
            if self.logger is not None:
                self.logger.warning(f"[{trace_id}] create_user rejected: missing {missing}")
            callback(err, None)
            return

        def _done(err: Any, payload: Any) -> None:
            if err:
                if self.logger is not None:
                    self.logger.warning(f"[{trace_id}] create_user failed: {err}")
                callback(err, None)
                return
            if payload is None:
                callback(None, None)
                return
            try:
                parsed = self.partition.parse(payload)
            except PayloadError as e:
                self.subscriptions.report_payload_error(e, trace_id=trace_id, op="create_user")
                callback(e, None)
                return
            if self.event_logger is not None:
                self.event_logger.log(trace_id, "identity.create_user", {"fields": fields})
            # same path as a current-actor push, so the login edge fires exactly once
            self.subscriptions.handle_current(None, parsed)
            callback(None, payload)

        self.service.create_user(fields, _done)

    # ---- internals ----
    def _save_public_profile(self, actor_id: str, public_fields: Dict[str, Any]) -> None:
        with self._lock:
            if actor_id != self.partition.current_id:
                raise PermissionDeniedError("Only the current actor's public profile can be saved.", actor_id=actor_id)
            self.cache.set(actor_id, public_fields)
        if self.event_logger is not None:
            self.event_logger.log(f"actor:{actor_id}", "identity.profile_saved", {"actor_id": actor_id, "fields": sorted(public_fields)})
        self.service.save_public_profile(actor_id, public_fields)
