from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from lib_log_gelf.application.use_cases.build_message import BuildCallable, create_build_message
from lib_log_gelf.domain import LogWrite

FIXED_TIMESTAMP = 1758628800.125
FIXED_PID = 4242


class _FixedClock:
    def __init__(self, value: float) -> None:
        self.value = value

    def now(self) -> float:
        return self.value


@pytest.fixture
def fixed_clock() -> _FixedClock:
    return _FixedClock(FIXED_TIMESTAMP)


@pytest.fixture
def build(fixed_clock: _FixedClock) -> BuildCallable:
    return create_build_message(clock=fixed_clock, process_id=lambda: FIXED_PID)


@pytest.fixture
def write_factory() -> Callable[..., LogWrite]:
    def _factory(payload: bytes | str = b"0a1|shop|cart|checkout|INFO|paid", **overrides: Any) -> LogWrite:
        values: dict[str, Any] = {
            "host_name": "api01",
            "facility": "shop",
            "file": "/srv/shop/cart.py",
            "line": 42,
            "payload": payload,
        }
        values.update(overrides)
        return LogWrite(**values)

    return _factory
