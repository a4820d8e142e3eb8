from __future__ import annotations

"""
Client-side identity state: the signed-in actor plus a cache of other actors'
public profiles, kept in sync with a remote identity service.
"""

from actorsync.core.identity.cache import IdentityCache
from actorsync.core.identity.lifecycle import LifecycleDispatcher
from actorsync.core.identity.models import ActorSubscription, CompositeView, IdentityPayload, ProfileHandle, SubscriptionKind
from actorsync.core.identity.partition import PrivacyPartition
from actorsync.core.identity.service import IdentityService
from actorsync.core.identity.store import IdentityStore
from actorsync.core.identity.subscriptions import SubscriptionMultiplexer

__all__ = [
    "ActorSubscription",
    "CompositeView",
    "IdentityCache",
    "IdentityPayload",
    "IdentityService",
    "IdentityStore",
    "LifecycleDispatcher",
    "PrivacyPartition",
    "ProfileHandle",
    "SubscriptionKind",
    "SubscriptionMultiplexer",
]
