"""
태스크 라우터

런처가 HTTP로 items / preview / execute 콜백을 호출할 수 있게 노출
"""
import asyncio
from fastapi import APIRouter, Depends, HTTPException, Request
from app.models.schema import (
    ApiResponse,
    ExecuteRequest,
    ItemsResponse,
    PluginInfoResponse,
    PreviewRequest,
    PreviewResponse,
)
from app.services.task_service import DeviceTask


router = APIRouter()


def get_plugin(request: Request):
    return request.app.state.plugin


def get_task(task_id: str, plugin=Depends(get_plugin)) -> DeviceTask:
    task = plugin.get_task(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail=f"알 수 없는 태스크: {task_id}")
    return task


@router.get("/plugin", response_model=PluginInfoResponse, tags=["Plugin"])
async def plugin_info(plugin=Depends(get_plugin)):
    """플러그인 메타데이터 및 태스크 목록"""
    return plugin.info()


@router.get("/tasks/{task_id}/items", response_model=ItemsResponse, tags=["Tasks"])
async def list_items(task: DeviceTask = Depends(get_task)):
    """태스크 항목 목록 (blueutil 호출은 executor에서)"""
    loop = asyncio.get_event_loop()
    items = await loop.run_in_executor(None, task.items)

    return ItemsResponse(
        task=task.info.id,
        items=items,
        polling_interval=task.info.item_polling_interval
    )


@router.post("/tasks/{task_id}/preview", response_model=PreviewResponse, tags=["Tasks"])
async def preview_item(request: PreviewRequest, task: DeviceTask = Depends(get_task)):
    """선택 항목 미리보기"""
    return PreviewResponse(task=task.info.id, preview=task.preview(request.item))


@router.post("/tasks/{task_id}/execute", response_model=ApiResponse, tags=["Tasks"])
async def execute_task(request: ExecuteRequest, task: DeviceTask = Depends(get_task)):
    """선택 항목 실행"""
    loop = asyncio.get_event_loop()
    message, status = await loop.run_in_executor(None, task.execute, request.items)

    return ApiResponse(
        success=status == 0,
        message=message,
        status=status,
        data={"task": task.info.id}
    )
