"""
Unit Tests for the structured logging helpers
"""
import logging
import pytest

from taskreport.core.logging_config import logger


class RecordingHandler(logging.Handler):

    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def records():
    handler = RecordingHandler()
    logger.addHandler(handler)
    yield handler.records
    logger.removeHandler(handler)


class TestLogRequest:

    @pytest.mark.parametrize("status_code, level", [
        (200, logging.INFO),
        (404, logging.WARNING),
        (500, logging.ERROR),
    ])
    def test_level_follows_status(self, records, status_code, level):
        logger.log_request("GET", "/api/v1/tasks/7", status_code, 12.5)

        assert records[-1].levelno == level
        assert records[-1].http_status == status_code
        assert records[-1].event_type == "http_request_complete"

    def test_extra_fields(self, records):
        logger.log_request("DELETE", "/api/v1/tasks/7", 204, 3.0, client_ip="10.0.0.1")

        record = records[-1]
        assert record.http_method == "DELETE"
        assert record.http_path == "/api/v1/tasks/7"
        assert record.client_ip == "10.0.0.1"


class TestLogErrorWithContext:

    def test_records_error_details(self, records):
        error = ValueError("bad window")

        logger.log_error_with_context(error, context="GET /api/v1/reports/custom")

        record = records[-1]
        assert record.levelno == logging.ERROR
        assert record.error_type == "ValueError"
        assert record.error_context == "GET /api/v1/reports/custom"
        assert record.exc_info[1] is error
