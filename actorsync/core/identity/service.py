from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Protocol


Callback = Callable[[Any, Any], None]
CurrentActorHandler = Callable[[Any, Optional[Dict[str, Any]]], None]
ActorHandler = Callable[[Any, Optional[Dict[str, Any]]], None]


class IdentityService(Protocol):
    """
    Remote identity service contract.

    Every callback/handler receives `(err, value)`; `err` is None on success.
    Listener handlers are called repeatedly for the lifetime of the process.
    """

    def login(self, credentials: Dict[str, Any], callback: Callback) -> None: ...

    def logout(self, actor: Optional[Dict[str, Any]]) -> None: ...

    def create_user(self, fields: Dict[str, Any], callback: Callback) -> None: ...

    def listen_to_current_actor(self, handler: CurrentActorHandler) -> None: ...

    def listen_to_actor(self, actor_id: str, handler: ActorHandler) -> None: ...

    def save_public_profile(self, actor_id: str, public_fields: Dict[str, Any]) -> None: ...
