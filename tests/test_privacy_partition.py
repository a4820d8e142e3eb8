from __future__ import annotations

import pytest

from actorsync.core.errors import PayloadError
from actorsync.core.identity.cache import IdentityCache
from actorsync.core.identity.models import IdentityPayload
from actorsync.core.identity.partition import PrivacyPartition


def _partition():
    return PrivacyPartition(cache=IdentityCache())


def test_routes_each_segment():
    p = _partition()
    p.apply({"id": "u1", "publicInfo": {"email": "a@b.com"}, "privateInfo": {"theme": "dark"}, "serverInfo": {"plan": "pro"}})
    assert p.current_id == "u1"
    assert p.cache.peek("u1")["email"] == "a@b.com"
    assert p.private_info == {"theme": "dark"}
    assert p.server_info == {"plan": "pro"}


def test_sparse_update_only_touches_present_segments():
    p = _partition()
    p.apply({"id": "u1", "publicInfo": {"email": "a@b.com"}, "privateInfo": {"theme": "dark"}, "serverInfo": {"flag": False}})
    p.apply({"id": "u1", "serverInfo": {"flag": True}})
    assert p.cache.peek("u1")["email"] == "a@b.com"
    assert p.private_info == {"theme": "dark"}
    assert p.server_info == {"flag": True}


def test_id_only_payload_moves_current_pointer():
    p = _partition()
    p.apply({"id": "u1", "privateInfo": {"x": 1}})
    p.apply({"id": "u2"})
    assert p.current_id == "u2"
    assert p.private_info == {"x": 1}


def test_accepts_model_and_snake_case_keys():
    p = _partition()
    p.apply(IdentityPayload(id="u1", public_info={"email": "a@b.com"}))
    p.apply({"id": "u1", "private_info": {"k": "v"}})
    assert p.cache.peek("u1")["id"] == "u1"
    assert p.private_info == {"k": "v"}


@pytest.mark.parametrize("bad", [{}, {"id": ""}, {"id": "   "}, {"publicInfo": {"email": "a@b.com"}}])
def test_payload_without_id_rejected(bad):
    p = _partition()
    with pytest.raises(PayloadError):
        p.apply(bad)
    assert p.current_id is None
    assert len(p.cache) == 0


def test_clear_resets_current_actor_state_but_keeps_cache():
    p = _partition()
    p.apply({"id": "u1", "publicInfo": {"email": "a@b.com"}, "privateInfo": {"x": 1}, "serverInfo": {"y": 2}})
    p.clear()
    assert (p.current_id, p.private_info, p.server_info) == (None, None, None)
    assert "u1" in p.cache


@pytest.mark.parametrize("bad", [["id", "u1"], "u1", None, {"id": "u1", "privateInfo": [1, 2]}])
def test_unusable_payload_raises_payload_error(bad):
    p = _partition()
    with pytest.raises(PayloadError):
        p.apply(bad)
    assert p.current_id is None


def test_id_kept_verbatim():
    p = _partition()
    p.apply({"id": " u1 ", "publicInfo": {"email": "a@b.com"}})
    assert p.current_id == " u1 "
    assert p.cache.peek(" u1 ")["id"] == " u1 "
