from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError as _PydanticValidationError

from actorsync.core.errors import PayloadError
from actorsync.core.identity.cache import IdentityCache
from actorsync.core.identity.models import IdentityPayload


class PrivacyPartition:
    """
    Splits a current-actor payload into its public / private / server segments.

    - publicInfo  -> identity cache, under payload.id
    - privateInfo -> the single private segment (actor reads + writes)
    - serverInfo  -> the single server segment (actor reads, service writes)

    Missing segments are left as they are. The current actor id is always
    overwritten last.
    """

    def __init__(self, *, cache: IdentityCache):
        self.cache = cache
        self.current_id: Optional[str] = None
        self.private_info: Optional[Dict[str, Any]] = None
        self.server_info: Optional[Dict[str, Any]] = None

    @staticmethod
    def parse(payload: Union[IdentityPayload, Mapping[str, Any]]) -> IdentityPayload:
        """Validate a raw push; anything that is not a well-formed mapping raises PayloadError."""
        if isinstance(payload, IdentityPayload):
            return payload
        if not isinstance(payload, Mapping):
            raise PayloadError(received=type(payload).__name__)
        try:
            return IdentityPayload.model_validate(dict(payload))
        except _PydanticValidationError as e:
            raise PayloadError(error=str(e)) from e

    def apply(self, payload: Union[IdentityPayload, Mapping[str, Any]]) -> IdentityPayload:
        p = self.parse(payload)
        if p.public_info is not None:
            self.cache.set(p.id, p.public_info)
        if p.private_info is not None:
            self.private_info = dict(p.private_info)
        if p.server_info is not None:
            self.server_info = dict(p.server_info)
        self.current_id = p.id
        return p

    def clear(self) -> None:
        self.current_id = None
        self.private_info = None
        self.server_info = None
