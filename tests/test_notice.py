"""Tests for notice models and building."""

import json

import pytest
from pydantic import ValidationError

from errbit_notifier import __version__
from errbit_notifier.classifier import ChainError, SimpleError
from errbit_notifier.config import Config
from errbit_notifier.models import (
    Context,
    ErrorInfo,
    Notice,
    NotifierInfo,
    Severity,
    StackFrame,
    UserInfo,
    serialize_severity,
)
from errbit_notifier.notice import build_notice, context_from_config


def make_config() -> Config:
    return Config(
        host="http://errbit.test",
        project_id="1",
        project_key="key",
        environment="test",
        app_os="linux",
        app_hostname="worker-1",
        app_language="python",
        app_version="1.2.3",
        app_root_directory="/srv/app",
    )


class TestSerialization:
    """Tests for the JSON wire form."""

    def test_notice_with_params(self):
        notice = Notice(
            errors=[ErrorInfo(type_="Error", message="This is test")],
            context=Context(http_method="GET"),
            params={"param1": "1"},
        )
        expected = (
            '{"errors":[{"type":"Error","message":"This is test"}],'
            '"context":{"httpMethod":"GET"},"params":{"param1":"1"}}'
        )
        assert notice.to_json() == expected

    def test_notice_with_notifier_and_severity(self):
        context = Context(http_method="POST", severity=Severity.INFO, notifier=NotifierInfo())
        notice = Notice(errors=[ErrorInfo(type_="Error", message="This is test")], context=context)
        expected = (
            '{"errors":[{"type":"Error","message":"This is test"}],'
            '"context":{"notifier":{"name":"errbit-notifier","version":"'
            + __version__
            + '"},"severity":"info","httpMethod":"POST"}}'
        )
        assert notice.to_json() == expected

    def test_only_mandatory_keys(self):
        """Absent optional fields are omitted, never null."""
        notice = Notice(errors=[ErrorInfo(type_="Error", message="m")])
        text = notice.to_json()
        assert json.loads(text).keys() == {"errors", "context"}
        assert "null" not in text

    def test_camel_case_context_keys(self):
        context = Context(
            user_agent="ua",
            user_addr="10.0.0.1",
            remote_addr="10.0.0.2",
            root_directory="/srv",
            http_method="PUT",
            user=UserInfo(id="7", email="a@example.com"),
        )
        data = json.loads(Notice(errors=[ErrorInfo(type_="E", message="m")], context=context).to_json())
        assert data["context"] == {
            "userAgent": "ua",
            "userAddr": "10.0.0.1",
            "remoteAddr": "10.0.0.2",
            "rootDirectory": "/srv",
            "user": {"id": "7", "email": "a@example.com"},
            "httpMethod": "PUT",
        }

    def test_backtrace_frame_fields(self):
        frame = StackFrame(function="foo", file="bar.py", line=10)
        info = ErrorInfo(type_="E", message="m", backtrace=[frame, StackFrame(file="x.py")])
        data = json.loads(Notice(errors=[info]).to_json())
        assert data["errors"][0]["backtrace"] == [
            {"file": "bar.py", "function": "foo", "line": 10},
            {"file": "x.py"},
        ]

    def test_empty_backtrace_is_kept(self):
        info = ErrorInfo(type_="E", message="m", backtrace=[])
        data = json.loads(Notice(errors=[info]).to_json())
        assert data["errors"][0]["backtrace"] == []


class TestSeverity:
    """Tests for severity tokens."""

    def test_tokens(self):
        assert {str(s) for s in Severity} == {
            "debug",
            "info",
            "notice",
            "warning",
            "error",
            "critical",
            "alert",
            "emergency",
            "invalid",
        }

    def test_absent_is_invalid(self):
        assert serialize_severity(None) == "invalid"
        assert Context().model_dump(mode="json")["severity"] == "invalid"

    def test_set_severity(self):
        assert Context(severity=Severity.EMERGENCY).model_dump(mode="json")["severity"] == "emergency"


class TestValidation:
    """Tests for model invariants."""

    def test_errors_must_not_be_empty(self):
        with pytest.raises(ValidationError):
            Notice(errors=[])

    def test_type_without_whitespace(self):
        with pytest.raises(ValidationError):
            ErrorInfo(type_="Value Error", message="m")

    def test_negative_line_rejected(self):
        with pytest.raises(ValidationError):
            StackFrame(line=-1)

    def test_frame_is_empty(self):
        assert StackFrame().is_empty()
        assert not StackFrame(code={"10": "x = 1"}).is_empty()


class TestBuildNotice:
    """Tests for building notices from errors."""

    def test_context_from_config(self):
        context = context_from_config(make_config())
        assert context.environment == "test"
        assert context.os == "linux"
        assert context.hostname == "worker-1"
        assert context.language == "python"
        assert context.version == "1.2.3"
        assert context.root_directory == "/srv/app"
        assert context.notifier == NotifierInfo()
        assert context.severity is None
        assert context.url is None
        assert context.user_agent is None
        assert context.user is None

    def test_simple_error_notice(self):
        notice = build_notice(SimpleError(KeyError("missing")), make_config())
        assert notice.context.severity == Severity.ERROR
        assert len(notice.errors) == 1
        assert notice.errors[0].type_ == "KeyError"
        assert notice.errors[0].backtrace is None
        assert notice.environment is None
        assert notice.session is None
        assert notice.params is None

    def test_chain_error_notice(self):
        notice = build_notice(ChainError(RuntimeError("boom"), backtrace="f\nat a.py:1:1"), make_config())
        assert notice.context.severity == Severity.ERROR
        assert notice.errors[0].backtrace == [StackFrame(function="f", file="a.py", line=1, column=1)]

    def test_context_can_be_overridden(self):
        notice = build_notice(SimpleError(KeyError("missing")), make_config())
        notice.context.user_agent = "Mozilla/5.0"
        assert json.loads(notice.to_json())["context"]["userAgent"] == "Mozilla/5.0"
