"""NetFlow v5 UDP 페이로드 파서.

24바이트 헤더 뒤에 48바이트 고정 길이 레코드가 count개 이어지는
v5 포맷을 순수 Python struct로 디코딩한다. 와이어 포맷으로의 재인코딩은 제공하지 않는다.
"""

from __future__ import annotations

import logging
import socket
import struct
from dataclasses import dataclass

from netflow5.models import FlowRecord

logger = logging.getLogger("netflow5.parser")

# NetFlow v5 구조체 포맷
_V5_HEADER_FMT  = "!HHIIIIBBH"   # 24 bytes
_V5_HEADER_SIZE = struct.calcsize(_V5_HEADER_FMT)   # 24

_V5_RECORD_FMT  = "!4s4s4sHHIIIIHHBBBBHHBBH"  # 48 bytes
_V5_RECORD_SIZE = struct.calcsize(_V5_RECORD_FMT)   # 48

# 익스포터가 한 데이터그램에 담는 최대 레코드 수
DEFAULT_MAX_RECORDS = 30


class ParseError(ValueError):
    """NetFlow 패킷 파싱 실패."""


@dataclass(frozen=True)
class V5Header:
    """NetFlow v5 패킷 헤더."""
    version:           int
    count:             int
    sys_uptime:        int   # 장비 부팅 후 경과 ms
    unix_secs:         int
    unix_nsecs:        int
    flow_sequence:     int
    engine_type:       int
    engine_id:         int
    sampling_interval: int


def parse_v5_header(data: bytes) -> V5Header:
    """v5 헤더를 디코딩하고 버전을 확인한다.

    Raises:
        ParseError: 데이터가 헤더보다 짧거나 버전이 5가 아닌 경우.
    """
    if len(data) < _V5_HEADER_SIZE:
        raise ParseError(
            f"Packet too short: {len(data)} bytes (minimum {_V5_HEADER_SIZE})"
        )

    header = V5Header(*struct.unpack_from(_V5_HEADER_FMT, data, 0))
    if header.version != 5:
        raise ParseError(f"Expected NetFlow v5, got version={header.version}")
    return header


def parse_netflow_v5(data: bytes, max_records: int = DEFAULT_MAX_RECORDS) -> list[FlowRecord]:
    """NetFlow v5 UDP 페이로드를 파싱하여 FlowRecord 리스트로 반환한다.

    Args:
        data: 수신된 UDP 페이로드 (raw bytes).
        max_records: 헤더 count 상한.

    Returns:
        파싱된 FlowRecord 리스트. 빈 패킷이면 빈 리스트.

    Raises:
        ParseError: 버전 불일치, count 초과, 또는 데이터가 너무 짧은 경우.
        ValidationError: 레코드 필드가 FlowRecord 제약을 벗어난 경우.
    """
    header = parse_v5_header(data)
    count  = header.count

    if count == 0:
        return []

    if count > max_records:
        raise ParseError(
            f"Record count {count} exceeds maximum of {max_records}"
        )

    expected_size = _V5_HEADER_SIZE + count * _V5_RECORD_SIZE
    if len(data) < expected_size:
        raise ParseError(
            f"Packet truncated: expected {expected_size} bytes for {count} records, "
            f"got {len(data)}"
        )
    if len(data) > expected_size:
        logger.debug(
            "Ignoring %d trailing bytes after %d records",
            len(data) - expected_size, count,
        )

    flows: list[FlowRecord] = []
    offset = _V5_HEADER_SIZE

    for _ in range(count):
        (
            srcaddr, dstaddr, nexthop,
            input_iface, output_iface,
            dpkts, doctets,
            first_ms, last_ms,
            srcport, dstport,
            pad1, tcp_flags, prot, tos,
            src_as, dst_as,
            src_mask, dst_mask, pad2,
        ) = struct.unpack_from(_V5_RECORD_FMT, data, offset)
        offset += _V5_RECORD_SIZE

        flows.append(FlowRecord(
            bytes    = doctets,
            packets  = dpkts,
            first    = first_ms,
            last     = last_ms,
            dstaddr  = socket.inet_ntoa(dstaddr),
            srcaddr  = socket.inet_ntoa(srcaddr),
            nexthop  = socket.inet_ntoa(nexthop),
            dstas    = dst_as,
            srcas    = src_as,
            dstport  = dstport,
            srcport  = srcport,
            input    = input_iface,
            output   = output_iface,
            dstmask  = dst_mask,
            srcmask  = src_mask,
            protocol = prot,
            tos      = tos,
            tcpflags = tcp_flags,
        ))

    return flows


def parse_netflow(data: bytes, max_records: int = DEFAULT_MAX_RECORDS) -> list[FlowRecord]:
    """NetFlow 버전을 감지하여 파싱한다. 실패하면 빈 리스트를 반환한다.

    v5만 지원한다.
    """
    if len(data) < 2:
        return []

    version = struct.unpack_from("!H", data, 0)[0]

    if version == 5:
        try:
            return parse_netflow_v5(data, max_records=max_records)
        except ParseError as exc:
            logger.debug("Failed to parse NetFlow v5: %s", exc)
            return []

    logger.debug("Unsupported NetFlow version: %d (only v5 supported)", version)
    return []
