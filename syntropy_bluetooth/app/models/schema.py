from typing import Any, List, Optional
from pydantic import BaseModel, Field


class PluginMetadata(BaseModel):
    """플러그인 메타데이터"""
    name: str = Field(..., description="플러그인 이름")
    version: str = Field(..., description="버전")
    icon: str = Field("", description="런처에 표시할 아이콘")
    description: str = Field("", description="설명")
    platforms: List[str] = Field(default_factory=list, description="지원 플랫폼")


class TaskInfo(BaseModel):
    """태스크 설명 (런처 메뉴용)"""
    id: str = Field(..., description="태스크 ID (toggle, forget, scan)")
    name: str = Field(..., description="표시 이름")
    description: str = Field("", description="설명")
    mode: str = Field("none", description="선택 모드")
    exit_on_execute: bool = Field(True, description="실행 후 종료 여부")
    execution_confirmation_message: Optional[str] = Field(None, description="실행 전 확인 문구")
    item_polling_interval: int = Field(0, description="항목 재조회 주기 (ms, 0이면 없음)")
    preview_polling_interval: int = Field(0, description="미리보기 재조회 주기 (ms)")
    tag: str = Field("bt", description="항목 소스 태그")


class PluginInfoResponse(BaseModel):
    """플러그인 정보 응답"""
    metadata: PluginMetadata
    tasks: List[TaskInfo]


class ItemsResponse(BaseModel):
    """항목 목록 응답"""
    task: str = Field(..., description="태스크 ID")
    items: List[str] = Field(..., description="표시 줄 목록")
    polling_interval: int = Field(0, description="재조회 주기 (ms)")


class PreviewRequest(BaseModel):
    """미리보기 요청"""
    item: str = Field(..., description="선택된 표시 줄")


class PreviewResponse(BaseModel):
    """미리보기 응답"""
    task: str = Field(..., description="태스크 ID")
    preview: str = Field(..., description="미리보기 문구")


class ExecuteRequest(BaseModel):
    """실행 요청"""
    items: List[str] = Field(default_factory=list, description="선택된 표시 줄 목록")


class ApiResponse(BaseModel):
    """API 응답"""
    success: bool = Field(..., description="성공 여부")
    message: str = Field(..., description="응답 메시지")
    status: int = Field(..., description="종료 코드 (0 성공, 1 실패)")
    data: Optional[Any] = Field(None, description="응답 데이터")
