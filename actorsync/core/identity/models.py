from __future__ import annotations

"""
Identity data model.

Public profiles are plain dicts keyed by actor id; the composite view and the
incoming payload are pydantic models. Behaviour (save) never lives on a profile
record: it is handed out separately as a ProfileHandle.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _iso_now() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


class IdentityPayload(BaseModel):
    """A current-actor update, partitioned by privacy level."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    public_info: Optional[Dict[str, Any]] = Field(default=None, alias="publicInfo")
    private_info: Optional[Dict[str, Any]] = Field(default=None, alias="privateInfo")
    server_info: Optional[Dict[str, Any]] = Field(default=None, alias="serverInfo")

    @field_validator("id", mode="before")
    @classmethod
    def _non_empty(cls, v: Any) -> str:
        # ids are opaque: kept as given, only blank ones are rejected
        v = "" if v is None else str(v)
        if not v.strip():
            raise ValueError("id required")
        return v


class CompositeView(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: Optional[str] = None
    public: Optional[Dict[str, Any]] = None
    private: Optional[Dict[str, Any]] = None
    server: Optional[Dict[str, Any]] = None


class SubscriptionKind(str, Enum):
    current = "current"
    actor = "actor"


@dataclass(frozen=True)
class ActorSubscription:
    kind: SubscriptionKind
    actor_id: Optional[str] = None
    opened_at: str = field(default_factory=_iso_now)


@dataclass
class ProfileHandle:
    """
    Capability pairing a cached public profile with a way to persist it.

    `save()` pushes the profile (or `updated_fields`) back to the identity
    service as this actor's public info, without the `id` key.
    """

    actor_id: str
    profile: Dict[str, Any]
    _saver: Callable[[str, Dict[str, Any]], None] = field(repr=False)

    def save(self, updated_fields: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        fields = dict(self.profile if updated_fields is None else updated_fields)
        fields.pop("id", None)
        self._saver(self.actor_id, fields)
        return fields
