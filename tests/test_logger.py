import logging

from app.core.logger import get_logger


def test_get_logger_names_and_default():
    assert get_logger("app.services.x").name == "app.services.x"
    assert get_logger().name == "relay"


def test_httpx_request_logs_are_quieted():
    get_logger(__name__)
    assert logging.getLogger("httpx").level == logging.WARNING
