import json

import pytest

from pyselectx import combine_selectors, select_argument
from pyselectx.errors import (
    ArgumentsEncodingError,
    ConfigurationError,
    ErrorHandler,
    PySelectXError,
    SelectorError,
    global_error_handler,
    handle_error,
)


def test_error_to_dict_and_str():
    err = SelectorError("bad selector", selector_name="select_todo", extra=1)
    data = err.to_dict()
    assert data["error_type"] == "SelectorError"
    assert data["message"] == "bad selector"
    assert data["details"] == {"selector_name": "select_todo", "extra": 1}
    assert "selector_name='select_todo'" in str(err)
    assert str(PySelectXError("plain")) == "plain"


def test_arguments_encoding_error_is_a_selector_error():
    err = ArgumentsEncodingError("nope", arguments={"a": [1]})
    assert isinstance(err, SelectorError)
    assert err.details["arguments"] == "{'a': [1]}"


def test_handler_notifies_callbacks_and_wraps_plain_exceptions():
    handler = ErrorHandler(log_to_console=False)
    seen = []
    handler.register_handler(seen.append)
    handler.handle(ValueError("raw"))
    assert isinstance(seen[0], PySelectXError)
    assert seen[0].details["original_type"] == "ValueError"


def test_handler_writes_json_lines_to_file(tmp_path):
    log_file = tmp_path / "errors.log"
    handler = ErrorHandler(log_to_console=False, log_to_file=True, log_file=str(log_file))
    handler.handle(SelectorError("first"))
    handler.handle(SelectorError("second"))
    records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert [r["message"] for r in records] == ["first", "second"]
    assert "timestamp" in records[0]


def test_handler_logs_to_console(capsys):
    ErrorHandler().handle(SelectorError("visible"))
    assert "SelectorError: visible" in capsys.readouterr().err


def test_file_logging_requires_a_path():
    with pytest.raises(ConfigurationError):
        ErrorHandler(log_to_file=True)


def test_handle_error_reports_then_reraises():
    seen = []
    global_error_handler.register_handler(seen.append)
    try:
        @handle_error
        def fail():
            raise SelectorError("boom")

        with pytest.raises(SelectorError):
            fail()
        assert [e.message for e in seen] == ["boom"]
    finally:
        global_error_handler.unregister_handler(seen.append)


def test_selector_binding_reports_encoding_errors():
    seen = []
    global_error_handler.register_handler(seen.append)
    try:
        selector = combine_selectors([select_argument("key")], lambda key: key, cached=True)
        with pytest.raises(ArgumentsEncodingError):
            selector(key=object())
        assert len(seen) == 1
        assert seen[0].details["selector_name"] == "<lambda>"
    finally:
        global_error_handler.unregister_handler(seen.append)
