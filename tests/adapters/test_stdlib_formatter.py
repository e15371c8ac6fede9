from __future__ import annotations

import io
import json
import logging
import sys

import pytest

from lib_log_gelf.adapters.stdlib import GelfFormatter
from lib_log_gelf.application.use_cases.build_message import BuildCallable
from lib_log_gelf.config import GelfSettings
from tests.conftest import FIXED_PID, FIXED_TIMESTAMP


@pytest.fixture
def settings() -> GelfSettings:
    return GelfSettings(
        host_name="api01",
        app_name="storefront",
        environment="test",
        version="v3",
        meta={"_team": "core"},
    )


def _record(**overrides: object) -> logging.LogRecord:
    values: dict[str, object] = {
        "name": "shop.cart",
        "levelno": logging.ERROR,
        "levelname": "ERROR",
        "msg": "payment %s failed",
        "args": ("p-17",),
        "pathname": "/srv/shop/cart.py",
        "module": "cart",
        "lineno": 88,
        "funcName": "checkout",
    }
    values.update(overrides)
    return logging.makeLogRecord(values)


def test_formatter_renders_record_as_gelf(settings: GelfSettings, build: BuildCallable) -> None:
    formatter = GelfFormatter(settings, facility="shop", builder=build)

    payload = json.loads(formatter.format(_record()))

    assert payload["host"] == "api01"
    assert payload["short_message"] == "payment p-17 failed"
    assert payload["level"] == 3
    assert payload["timestamp"] == FIXED_TIMESTAMP
    assert payload["_app"] == "storefront"
    assert payload["_env"] == "test"
    assert payload["_version"] == "v3"
    assert payload["_module"] == "shop.cart"
    assert payload["_pkg"] == "cart"
    assert payload["_function"] == "checkout"
    assert payload["_file"] == "cart"
    assert payload["_line"] == 88
    assert payload["_pid"] == FIXED_PID
    assert payload["_team"] == "core"
    assert payload["_id"] == "001"


def test_formatter_numbers_records_sequentially(settings: GelfSettings, build: BuildCallable) -> None:
    formatter = GelfFormatter(settings, builder=build)

    ids = [json.loads(formatter.format(_record()))["_id"] for _ in range(3)]

    assert ids == ["001", "002", "003"]


def test_formatter_falls_back_to_facility_without_app_name(build: BuildCallable) -> None:
    formatter = GelfFormatter(GelfSettings(host_name="h"), facility="shop", builder=build)

    payload = json.loads(formatter.format(_record()))

    assert payload["_app"] == "shop"
    assert payload["_env"] == ""


def test_formatter_merges_record_fields_over_settings(settings: GelfSettings, build: BuildCallable) -> None:
    formatter = GelfFormatter(settings, builder=build)

    payload = json.loads(formatter.format(_record(gelf={"_team": "payments", "_order": "o-1"})))

    assert payload["_team"] == "payments"
    assert payload["_order"] == "o-1"


def test_formatter_puts_exception_into_full_message(settings: GelfSettings, build: BuildCallable) -> None:
    formatter = GelfFormatter(settings, builder=build)
    try:
        raise RuntimeError("card declined")
    except RuntimeError:
        record = _record(exc_info=sys.exc_info())

    payload = json.loads(formatter.format(record))

    assert payload["short_message"] == "payment p-17 failed"
    assert "RuntimeError: card declined" in payload["full_message"]


def test_formatter_survives_delimiter_in_message(settings: GelfSettings, build: BuildCallable) -> None:
    formatter = GelfFormatter(settings, builder=build)

    payload = json.loads(formatter.format(_record(msg="a|b", args=())))

    assert payload["short_message"] == "a¦b"
    assert payload["_function"] == "checkout"


def test_formatter_survives_delimiter_in_record_fields(settings: GelfSettings, build: BuildCallable) -> None:
    formatter = GelfFormatter(settings, builder=build)

    payload = json.loads(formatter.format(_record(name="a|b", module="c|d", funcName="e|f", msg="payment failed", args=())))

    assert payload["short_message"] == "payment failed"
    assert payload["level"] == 3
    assert payload["_module"] == "a\u00a6b"
    assert payload["_pkg"] == "c\u00a6d"
    assert payload["_function"] == "e\u00a6f"


@pytest.mark.parametrize(
    "levelno, expected",
    [(logging.DEBUG, 7), (logging.INFO, 6), (logging.WARNING, 4), (logging.CRITICAL, 2)],
)
def test_formatter_maps_levels(settings: GelfSettings, build: BuildCallable, levelno: int, expected: int) -> None:
    formatter = GelfFormatter(settings, builder=build)

    assert json.loads(formatter.format(_record(levelno=levelno)))["level"] == expected


def test_formatter_works_on_a_real_handler(settings: GelfSettings) -> None:
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(GelfFormatter(settings, facility="shop"))
    logger = logging.getLogger("tests.gelf.handler")
    logger.addHandler(handler)
    logger.propagate = False
    try:
        logger.warning("disk at %d%%", 91)
    finally:
        logger.removeHandler(handler)

    payload = json.loads(stream.getvalue())
    assert payload["short_message"] == "disk at 91%"
    assert payload["level"] == 4
    assert payload["_function"] == "test_formatter_works_on_a_real_handler"
