"""FlowRecord 필드 도메인 검증 술어.

각 필드는 정확히 하나의 Constraint를 가진다. Constraint는 순서가 있는
(술어, 메시지 템플릿) 목록이며, 처음 실패한 검사의 메시지를 위반 사유로 반환한다.
"""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass
from typing import Any, Callable

# 도트 10진 표기 IPv4 (옥텟당 0-255, 1-3자리)
_IPV4_RE = re.compile(
    r"(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}"
    r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"
)


def is_integer(value: Any) -> bool:
    """bool을 제외한 int 여부."""
    return isinstance(value, int) and not isinstance(value, bool)


def is_unsigned(value: Any) -> bool:
    return is_integer(value) and value > -1


def is_u32(value: Any) -> bool:
    return is_unsigned(value) and value < 4294967296


def is_u16(value: Any) -> bool:
    return is_unsigned(value) and value < 65536


def is_u8(value: Any) -> bool:
    return is_unsigned(value) and value < 256


def is_ipv4_dotted_quad(value: Any) -> bool:
    """도트 10진 문자열 또는 IPv4Address 인스턴스인지 확인한다.

    예약/브로드캐스트 대역은 제한하지 않는다 (0.0.0.0, 255.255.255.255 허용).
    """
    if isinstance(value, ipaddress.IPv4Address):
        return True
    return isinstance(value, str) and _IPV4_RE.fullmatch(value) is not None


@dataclass(frozen=True)
class Constraint:
    """이름이 붙은 도메인 제약. checks는 앞에서부터 평가된다."""
    name:   str
    checks: tuple[tuple[Callable[[Any], bool], str], ...]

    def violation(self, value: Any) -> str | None:
        """위반 시 사람이 읽을 수 있는 메시지를, 통과하면 None을 반환한다."""
        for predicate, template in self.checks:
            if not predicate(value):
                return template.format(value=value)
        return None

    def __call__(self, value: Any) -> bool:
        return self.violation(value) is None


_INTEGER_CHECKS = (
    (is_integer,  "Value ({value}) is not an integer"),
    (is_unsigned, "Number ({value}) is not greater than -1"),
)

UINT32 = Constraint("UnsignedInt32Bit", _INTEGER_CHECKS + (
    (is_u32, "Number ({value}) is not less than 4294967296"),
))
UINT16 = Constraint("UnsignedInt16Bit", _INTEGER_CHECKS + (
    (is_u16, "Number ({value}) is not less than 65536"),
))
UINT8 = Constraint("UnsignedInt8Bit", _INTEGER_CHECKS + (
    (is_u8, "Number ({value}) is not less than 256"),
))
IPV4 = Constraint("IPAddress", (
    (is_ipv4_dotted_quad, "String ({value}) is not a valid IP address"),
))
