from enum import Enum
from typing import Literal, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


class StatusKind(str, Enum):
    """상태 메시지 종류"""
    SCANNING = "scanning"
    TIP = "tip"
    ERROR = "error"
    EMPTY = "empty"
    NOTICE = "notice"


class DeviceInfo(BaseModel):
    """장치 정보 (blueutil JSON 레코드)"""
    model_config = ConfigDict(extra="ignore")

    kind: Literal["device"] = "device"
    address: str = Field(..., min_length=1, description="장치 MAC 주소")
    name: str = Field("", description="장치 이름")
    connected: bool = Field(False, description="시스템 연결 여부")

    @field_validator("name", mode="before")
    @classmethod
    def empty_name(cls, value):
        # 검색 결과에는 이름이 null인 장치가 있음
        return "" if value is None else value

    @field_validator("connected", mode="before")
    @classmethod
    def default_connected(cls, value):
        return False if value is None else value

    @property
    def display_name(self) -> str:
        return self.name or "Unknown"


class StatusMessage(BaseModel):
    """장치가 아닌 안내 문구 (검색 중, 팁, 에러)"""
    kind: Literal["status"] = "status"
    status: StatusKind = Field(..., description="메시지 종류")
    text: str = Field(..., description="표시 문구")


DisplayItem = Union[DeviceInfo, StatusMessage]
