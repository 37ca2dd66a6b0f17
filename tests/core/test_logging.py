import json
import logging
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from loguru import logger

from app.core import logging as logging_module


def test_serialize_record_basic():
    record = {
        "time": datetime.now(),
        "level": SimpleNamespace(name="INFO"),
        "message": "Created category with ID 1",
        "name": "app.services.categories",
        "function": "create_category",
        "line": 42,
        "extra": {"request_id": "abc-123", "_private": "hidden"},
    }

    payload = json.loads(logging_module.serialize_record(record))

    assert payload["message"] == "Created category with ID 1"
    assert payload["level"] == "INFO"
    assert payload["service"] == "category-api"
    assert payload["module"] == "app.services.categories"
    assert payload["request_id"] == "abc-123"
    assert "_private" not in payload


def test_serialize_record_fallback():
    record = {
        "time": datetime.now(),
        "level": SimpleNamespace(name="ERROR"),
        "message": "Fails",
        "extra": {"custom": object()},
    }

    serialized = logging_module.serialize_record(record)

    assert "Error serializing log" in serialized
    assert "Fails" in serialized


def test_intercept_handler_forwards_to_loguru():
    messages = []
    handler_id = logger.add(lambda msg: messages.append((msg.record["level"].name, msg.record["message"])))
    try:
        std_logger = logging.getLogger("tests.intercept")
        std_logger.handlers = [logging_module.InterceptHandler()]
        std_logger.propagate = False
        std_logger.setLevel(logging.DEBUG)

        std_logger.warning("disk almost full")
        std_logger.log(25, "custom level")
    finally:
        logger.remove(handler_id)

    assert ("WARNING", "disk almost full") in messages
    assert any(message == "custom level" for _, message in messages)


@patch("app.core.logging.logger")
@patch("app.core.logging.settings.JSON_LOGS", True)
def test_configure_logging_json(mock_logger):
    mock_logger.add = MagicMock()
    mock_logger.remove = MagicMock()

    logging_module.configure_logging()

    mock_logger.remove.assert_called_once()
    mock_logger.add.assert_called_once()
    assert callable(mock_logger.add.call_args.args[0])
    assert logging.getLogger("uvicorn.access").disabled is True


@patch("app.core.logging.logger")
@patch("app.core.logging.settings.JSON_LOGS", False)
def test_configure_logging_human(mock_logger):
    mock_logger.add = MagicMock()
    mock_logger.remove = MagicMock()

    logging_module.configure_logging()

    mock_logger.add.assert_called_once()
    assert "format" in mock_logger.add.call_args.kwargs
    assert mock_logger.info.called
