"""진입점: python -m netflow5"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

logger = logging.getLogger("netflow5.cli")


def _decode(paths: list[str], max_records: int) -> int:
    """원시 v5 페이로드 파일을 디코딩하여 레코드당 JSON 한 줄을 출력한다."""
    from netflow5.parser import ParseError, parse_netflow_v5

    status = 0
    for path in paths:
        try:
            data  = Path(path).read_bytes()
            flows = parse_netflow_v5(data, max_records=max_records)
        except (OSError, ParseError) as exc:
            logger.error("%s: %s", path, exc)
            status = 1
            continue
        logger.info("%s: decoded %d flow records", path, len(flows))
        for flow in flows:
            print(json.dumps(flow.to_dict(), default=str))
    return status


def _check(path: str) -> int:
    """JSON Lines 파일의 각 줄을 FlowRecord로 검증한다."""
    from netflow5.models import FlowRecord, ValidationError

    failed = 0
    total  = 0
    with open(path, encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            if not line.strip():
                continue
            total += 1
            try:
                FlowRecord.from_dict(json.loads(line))
            except json.JSONDecodeError as exc:
                print(f"line {lineno}: invalid JSON: {exc}", file=sys.stderr)
                failed += 1
            except ValidationError as exc:
                print(f"line {lineno}: {exc}", file=sys.stderr)
                failed += 1
    logger.info("%s: %d records checked, %d invalid", path, total, failed)
    return 1 if failed else 0


def main(argv: list[str] | None = None) -> int:
    """netflow5 CLI 진입점. 설정을 로드하고 하위 명령을 실행한다."""
    parser = argparse.ArgumentParser(
        prog="netflow5",
        description="NetFlow v5 flow record decoder and validator",
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to configuration YAML file (default: config/default.yaml)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    decode = sub.add_parser("decode", help="Decode raw NetFlow v5 UDP payload files")
    decode.add_argument("files", nargs="+")

    check = sub.add_parser("check", help="Validate a JSON Lines file of flow records")
    check.add_argument("file")

    args = parser.parse_args(argv)

    from netflow5.utils.config import Config
    from netflow5.utils.logging_setup import setup_logging

    config = Config.load(args.config)
    setup_logging(config)

    if args.command == "decode":
        return _decode(args.files, int(config.get("netflow.max_records", 30)))
    return _check(args.file)


if __name__ == "__main__":
    sys.exit(main())
