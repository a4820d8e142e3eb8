from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional


class IdentityCache:
    """
    actor id -> public profile.

    A miss never fetches: it notifies `on_miss` (normally the subscription
    multiplexer) and returns None right away. Entries are never evicted.
    """

    def __init__(self, *, on_miss: Optional[Callable[[str], None]] = None, display_name_fallback_field: str = "email"):
        self._profiles: Dict[str, Dict[str, Any]] = {}
        self._on_miss = on_miss
        self.display_name_fallback_field = str(display_name_fallback_field)

    def bind_miss_handler(self, on_miss: Callable[[str], None]) -> None:
        self._on_miss = on_miss

    def get(self, actor_id: str) -> Optional[Dict[str, Any]]:
        profile = self._profiles.get(actor_id)
        if profile is None and self._on_miss is not None:
            self._on_miss(actor_id)
        return profile

    def peek(self, actor_id: Optional[str]) -> Optional[Dict[str, Any]]:
        if actor_id is None:
            return None
        return self._profiles.get(actor_id)

    def set(self, actor_id: str, profile: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if profile is None:
            return None
        stamped = dict(profile)
        if not stamped.get("displayName"):
            stamped["displayName"] = stamped.get(self.display_name_fallback_field)
        stamped["id"] = actor_id
        self._profiles[actor_id] = stamped
        return stamped

    def values(self) -> List[Dict[str, Any]]:
        return list(self._profiles.values())

    def __contains__(self, actor_id: object) -> bool:
        return actor_id in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)
