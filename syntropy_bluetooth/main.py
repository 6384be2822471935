"""
Syntropy Bluetooth - FastAPI 메인 애플리케이션

사용 방법:
    uvicorn main:app --host 127.0.0.1 --port 8000
"""
from typing import Optional
from fastapi import FastAPI
from app.models.config import PluginConfig
from app.repositories.bluetooth_repository import BluetoothRepository
from app.routers import tasks
from plugin import METADATA, create_plugin


def create_app(
    config: Optional[PluginConfig] = None,
    repository: Optional[BluetoothRepository] = None
) -> FastAPI:
    """앱 생성 (테스트에서는 가짜 repository 주입)"""
    app = FastAPI(
        title="Syntropy Bluetooth",
        version=METADATA.version,
        description=METADATA.description
    )
    app.state.plugin = create_plugin(config, repository)

    # 태스크 라우터 등록
    app.include_router(tasks.router)

    @app.get("/")
    def read_root():
        """API 정보 및 사용 가능한 엔드포인트"""
        return {
            "service": "Syntropy Bluetooth",
            "version": METADATA.version,
            "description": METADATA.description,
            "endpoints": {
                "plugin": "/plugin",
                "items": "/tasks/{task_id}/items",
                "preview": "/tasks/{task_id}/preview",
                "execute": "/tasks/{task_id}/execute",
                "docs": "/docs"
            }
        }

    @app.get("/health")
    def health_check():
        """헬스 체크"""
        return {
            "status": "healthy",
            "blueutil": app.state.plugin.repository.is_available()
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
