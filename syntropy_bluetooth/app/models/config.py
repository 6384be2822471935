"""
플러그인 설정

아이콘 설정만 외부 파일에서 덮어쓸 수 있다. 시작 시 한 번 로드해서
포맷/파싱 함수에 인자로 넘긴다.
"""
import json
import os
from pathlib import Path
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


DEFAULT_CONNECTED_ICON = "◍"
DEFAULT_DISCONNECTED_ICON = "○"

CONFIG_ENV_VAR = "SYNTROPY_BLUETOOTH_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/syntropy/plugins/syntropy-bluetooth/config.json")


class PluginConfig(BaseModel):
    """아이콘 설정"""
    model_config = ConfigDict(extra="ignore", frozen=True)

    connected_icon: str = Field(DEFAULT_CONNECTED_ICON, description="연결된 장치 아이콘")
    disconnected_icon: str = Field(DEFAULT_DISCONNECTED_ICON, description="연결 안 된 장치 아이콘")

    @field_validator("connected_icon", "disconnected_icon")
    @classmethod
    def check_icon(cls, value: str) -> str:
        if not value:
            raise ValueError("icon must not be empty")
        if any(ch.isspace() for ch in value):
            raise ValueError("icon must not contain whitespace")
        return value


def resolve_config_path(path: Optional[Union[str, Path]] = None) -> Path:
    """설정 파일 경로 결정 (인자 > 환경변수 > 기본 경로)"""
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def load_config(path: Optional[Union[str, Path]] = None) -> PluginConfig:
    """설정 파일 로드, 없거나 잘못되면 기본값"""
    config_path = resolve_config_path(path)
    if not config_path.exists():
        return PluginConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"⚠️  설정 파일 읽기 실패 ({config_path}): {e}")
        return PluginConfig()

    # 런처 플러그인 오버라이드 형식: {"metadata": {...}, "config": {...}}
    if isinstance(data, dict) and isinstance(data.get("config"), dict):
        data = data["config"]

    if not isinstance(data, dict):
        print(f"⚠️  설정 형식 오류 ({config_path}): object가 아님")
        return PluginConfig()

    try:
        return PluginConfig(**data)
    except ValidationError as e:
        print(f"⚠️  설정 값 오류 ({config_path}): {e.error_count()}개")
        return PluginConfig()
