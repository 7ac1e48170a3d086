"""기본값 병합 기능을 갖춘 YAML 설정 로더."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

# 환경변수 → Config 경로 매핑
_ENV_OVERRIDES: list[tuple[str, str, type]] = [
    ("NETFLOW5_LOG_LEVEL", "logging.level", str),
    ("NETFLOW5_LOG_FORMAT", "logging.format", str),
    ("NETFLOW5_MAX_RECORDS", "netflow.max_records", int),
]


def _set_nested(data: dict, dotted_key: str, value: Any) -> None:
    """점 표기법을 사용하여 중첩 dict에 값을 설정한다."""
    keys = dotted_key.split(".")
    current = data
    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], dict):
            current[key] = {}
        current = current[key]
    current[keys[-1]] = value


def _apply_env_overrides(data: dict) -> None:
    """환경변수가 설정되어 있으면 YAML 값을 오버라이드한다."""
    for env_var, config_path, cast in _ENV_OVERRIDES:
        value = os.environ.get(env_var)
        if value is not None:
            _set_nested(data, config_path, cast(value))


class Config:
    """YAML 파일에서 로드된 불변 설정 컨테이너."""

    def __init__(self, data: dict[str, Any], config_path: str | Path | None = None) -> None:
        self._data = data
        self.config_path: str | None = str(config_path) if config_path else None

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> Config:
        """YAML 파일에서 설정을 로드한다.

        경로가 없으면 환경변수 NETFLOW5_CONFIG, 그다음 프로젝트 루트의
        config/default.yaml 순으로 찾는다. 기본 파일조차 없으면 빈 설정을 사용한다.
        .env 파일이 존재하면 자동으로 로드하여 환경변수를 설정한다.

        Raises:
            FileNotFoundError: 명시적으로 지정한 경로가 존재하지 않는 경우.
        """
        load_dotenv()

        if config_path is None:
            config_path = os.environ.get("NETFLOW5_CONFIG")

        data: dict[str, Any] = {}
        if config_path is None:
            project_root = Path(__file__).resolve().parent.parent.parent
            default_path = project_root / "config" / "default.yaml"
            if default_path.exists():
                config_path = default_path

        if config_path is not None:
            config_path = Path(config_path)
            if not config_path.exists():
                raise FileNotFoundError(f"Config file not found: {config_path}")
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

        inner = data.get("netflow5", data)
        _apply_env_overrides(inner)

        return cls(inner, config_path=config_path)

    def get(self, dotted_key: str, default: Any = None) -> Any:
        """점 표기법으로 값을 조회한다: 'logging.level' -> config['logging']['level']."""
        keys = dotted_key.split(".")
        current = self._data
        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current

    def section(self, key: str) -> dict[str, Any]:
        """주어진 최상위 키에 대한 하위 dict를 반환한다."""
        return self._data.get(key, {})

    @property
    def raw(self) -> dict[str, Any]:
        """설정 데이터의 원본 dict를 반환한다."""
        return self._data
