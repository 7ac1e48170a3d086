"""Shared fixtures for netflow5 tests."""

from __future__ import annotations

import logging
from typing import Any

import pytest


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """테스트 환경에서 NETFLOW5_* 환경변수의 영향을 제거한다."""
    for name in (
        "NETFLOW5_CONFIG",
        "NETFLOW5_LOG_LEVEL",
        "NETFLOW5_LOG_FORMAT",
        "NETFLOW5_MAX_RECORDS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_netflow5_logger():
    """setup_logging이 설치한 핸들러를 테스트마다 정리한다."""
    yield
    root = logging.getLogger("netflow5")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)


@pytest.fixture
def flow_kwargs() -> dict[str, Any]:
    """유효한 FlowRecord 생성 인자 18개."""
    return {
        "bytes": 1500,
        "packets": 1,
        "first": 1000,
        "last": 2000,
        "dstaddr": "10.0.0.1",
        "srcaddr": "10.0.0.2",
        "nexthop": "10.0.0.254",
        "dstas": 100,
        "srcas": 200,
        "dstport": 80,
        "srcport": 443,
        "input": 1,
        "output": 2,
        "dstmask": 24,
        "srcmask": 24,
        "protocol": 6,
        "tos": 0,
        "tcpflags": 16,
    }
