"""NetFlow v5 플로우 레코드 모델."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Mapping

from netflow5.validators import IPV4, UINT8, UINT16, UINT32, Constraint


class ValidationError(ValueError):
    """FlowRecord 필드가 선언된 도메인을 벗어남.

    Attributes:
        field: 실패한 필드 이름 (입력 전체가 매핑이 아니면 None).
        value: 입력된 값 (누락 필드는 None).
        constraint: 위반된 제약의 설명.
    """

    def __init__(
        self,
        field: str | None,
        value: Any,
        constraint: str,
        missing: bool = False,
        message: str | None = None,
    ) -> None:
        self.field      = field
        self.value      = value
        self.constraint = constraint
        self.missing    = missing
        if message is None:
            if missing:
                message = f"Attribute ({field}) is required"
            else:
                message = (
                    f"Attribute ({field}) does not pass the type constraint because: "
                    f"{constraint}"
                )
        super().__init__(message)


def _attr(constraint: Constraint) -> Any:
    return field(metadata={"constraint": constraint})


@dataclass(frozen=True)
class FlowRecord:
    """NetFlow v5 단일 플로우 레코드.

    생성 시점에 모든 필드를 검증하며, 생성 이후에는 변경할 수 없다.
    주소 문자열은 파싱하지 않고 입력 그대로 보관한다.
    """
    bytes:    int = _attr(UINT32)  # 플로우의 L3 총 바이트 수
    packets:  int = _attr(UINT32)  # 플로우의 총 패킷 수
    first:    int = _attr(UINT32)  # 플로우 시작 시점 sysuptime (ms)
    last:     int = _attr(UINT32)  # 마지막 패킷 수신 시점 sysuptime (ms)
    dstaddr:  str = _attr(IPV4)
    srcaddr:  str = _attr(IPV4)
    nexthop:  str = _attr(IPV4)    # 다음 홉 라우터 주소
    dstas:    int = _attr(UINT16)  # 목적지 AS 번호
    srcas:    int = _attr(UINT16)
    dstport:  int = _attr(UINT16)
    srcport:  int = _attr(UINT16)
    input:    int = _attr(UINT16)  # 입력 인터페이스 SNMP 인덱스
    output:   int = _attr(UINT16)
    dstmask:  int = _attr(UINT8)   # 목적지 프리픽스 길이
    srcmask:  int = _attr(UINT8)
    protocol: int = _attr(UINT8)   # IP 프로토콜 번호 (6=TCP, 17=UDP)
    tos:      int = _attr(UINT8)
    tcpflags: int = _attr(UINT8)   # TCP 플래그 누적 OR

    def __post_init__(self) -> None:
        for f in dataclasses.fields(self):
            value   = getattr(self, f.name)
            message = f.metadata["constraint"].violation(value)
            if message is not None:
                raise ValidationError(f.name, value, message)

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """선언 순서대로의 필드 이름."""
        return tuple(f.name for f in dataclasses.fields(cls))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FlowRecord:
        """매핑에서 FlowRecord를 생성한다.

        Raises:
            ValidationError: data가 매핑이 아니거나, 필드가 누락되었거나,
                알 수 없는 키가 있거나, 값이 도메인을 벗어난 경우.
        """
        if not isinstance(data, Mapping):
            message = f"Expected a mapping of flow record fields, got {type(data).__name__}"
            raise ValidationError(None, data, message, message=message)

        names = cls.field_names()
        for name in names:
            if name not in data:
                raise ValidationError(name, None, "Attribute is required", missing=True)

        unknown = sorted((key for key in data if key not in names), key=str)
        if unknown:
            listed = ", ".join(str(key) for key in unknown)
            raise ValidationError(
                listed,
                {key: data[key] for key in unknown},
                "Found unknown attribute",
                message=f"Found unknown attribute(s) passed to the constructor: {listed}",
            )
        return cls(**{name: data[name] for name in names})

    def to_dict(self) -> dict[str, Any]:
        """필드 값을 변환 없이 담은 dict를 반환한다."""
        return {name: getattr(self, name) for name in self.field_names()}
