"""
Syntropy Bluetooth 플러그인 정의

런처가 읽는 플러그인 테이블(metadata / tasks / item_sources)을 만든다.
설정은 여기서 한 번 로드해서 각 태스크에 넘긴다.
"""
from typing import Any, Dict, Optional
from app.models.config import PluginConfig, load_config
from app.models.schema import PluginInfoResponse, PluginMetadata
from app.repositories.bluetooth_repository import BluetoothRepository
from app.services.bluetooth_service import BluetoothService
from app.services.pairing_service import PairingService
from app.services.task_service import DeviceTask, build_tasks


METADATA = PluginMetadata(
    name="bluetooth",
    version="1.0.0",
    icon="󰂯",
    description="Bluetooth device switcher with connection toggle",
    platforms=["macos"],
)


class BluetoothPlugin:
    """플러그인 인스턴스 (설정 + 태스크)"""

    def __init__(self, config: PluginConfig, repository: BluetoothRepository):
        self.config = config
        self.repository = repository
        self.metadata = METADATA
        self.tasks: Dict[str, DeviceTask] = build_tasks(
            config,
            BluetoothService(repository),
            PairingService(repository)
        )

    def get_task(self, task_id: str) -> Optional[DeviceTask]:
        return self.tasks.get(task_id)

    def info(self) -> PluginInfoResponse:
        return PluginInfoResponse(
            metadata=self.metadata,
            tasks=[task.info for task in self.tasks.values()]
        )

    def definition(self) -> Dict[str, Any]:
        """런처 플러그인 테이블 형식"""
        tasks = {}
        for task_id, task in self.tasks.items():
            descriptor = task.info.model_dump(exclude={"id", "tag"}, exclude_none=True)
            descriptor["item_sources"] = {
                "devices": {
                    "tag": task.info.tag,
                    "items": task.items,
                    "preview": task.preview,
                    "execute": task.execute,
                }
            }
            tasks[task_id] = descriptor
        return {
            "metadata": self.metadata.model_dump(),
            "config": self.config.model_dump(),
            "tasks": tasks,
        }


def create_plugin(
    config: Optional[PluginConfig] = None,
    repository: Optional[BluetoothRepository] = None
) -> BluetoothPlugin:
    """플러그인 생성 (설정 미지정 시 설정 파일에서 로드)"""
    return BluetoothPlugin(
        config if config is not None else load_config(),
        repository if repository is not None else BluetoothRepository()
    )
