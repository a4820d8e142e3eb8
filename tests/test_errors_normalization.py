from __future__ import annotations

from actorsync.core.error_reporter import ErrorReporter, ErrorReporterConfig, normalize_exception
from actorsync.core.errors import HookError, IdentityError, PayloadError, ServiceError, ValidationError


def test_normalize_maps_by_subsystem():
    assert isinstance(normalize_exception(RuntimeError("x"), subsystem="service", context={}), ServiceError)
    assert isinstance(normalize_exception(RuntimeError("x"), subsystem="partition", context={}), PayloadError)
    he = normalize_exception(KeyError("k"), subsystem="hooks", context={"hook": "h"})
    assert isinstance(he, HookError)
    assert he.context["error_type"] == "KeyError"
    generic = normalize_exception(RuntimeError("x"), subsystem="other", context={})
    assert generic.code == "unknown_error"


def test_identity_errors_pass_through():
    ve = ValidationError("bad", field="email")
    assert normalize_exception(ve, subsystem="service", context={}) is ve


def test_to_dict_redacts_context():
    e = IdentityError(code="x", user_message="m", context={"password": "p", "email": "a@b.com"})
    d = e.to_dict()
    assert d["context"]["password"] == "***REDACTED***"
    assert d["context"]["email"] == "a@b.com"


def test_reporter_writes_and_queries(tmp_path):
    rep = ErrorReporter(path=str(tmp_path / "errors.jsonl"))
    rep.report_exception(RuntimeError("down"), trace_id="t1", subsystem="service", context={"token": "abc"})
    rep.report_exception(RuntimeError("again"), trace_id="t2", subsystem="service")
    assert [r["trace_id"] for r in rep.tail(5)] == ["t1", "t2"]
    row = rep.by_trace_id("t1")[0]
    assert row["error_code"] == "service_error"
    assert row["safe_context"]["token"] == "***REDACTED***"
    assert "internal_context" not in row


def test_reporter_tracebacks_when_enabled(tmp_path):
    rep = ErrorReporter(path=str(tmp_path / "errors.jsonl"), cfg=ErrorReporterConfig(include_tracebacks=True))
    try:
        raise RuntimeError("kaboom")
    except RuntimeError as e:
        rep.report_exception(e, trace_id="t", subsystem="hooks")
    row = rep.tail(1)[0]
    assert "kaboom" in row["internal_context"]["traceback"]


def test_tail_on_missing_file(tmp_path):
    rep = ErrorReporter(path=str(tmp_path / "errors.jsonl"))
    assert rep.tail() == []
    assert rep.by_trace_id("t") == []
