"""
런처 태스크 어댑터 (toggle / forget / scan)

런처는 문자열 목록만 주고받으므로 여기서만 표시 줄 <-> 모델 변환을 한다.
모든 실패는 (message, status)로 반환하고 예외를 밖으로 내보내지 않는다.
"""
from typing import Dict, List, Optional, Sequence
from app.exceptions import SelectionError
from app.models.bluetooth_model import DeviceInfo, StatusKind, StatusMessage
from app.models.config import PluginConfig
from app.models.schema import TaskInfo
from app.services import device_codec
from app.services.bluetooth_service import BluetoothService
from app.services.pairing_service import SCAN_INTERVAL_MS, PairingService


NO_SELECTION = "Error: No device selected"
NO_ADDRESS = "Error: Could not extract device address"
WAIT_FOR_SCAN = "Please wait for devices to appear in the scan"


class DeviceTask:
    """태스크 공통 동작"""

    info: TaskInfo

    def __init__(self, config: PluginConfig):
        self.config = config

    def items(self) -> List[str]:
        raise NotImplementedError

    def preview(self, item: str) -> str:
        raise NotImplementedError

    def execute(self, items: Optional[Sequence[str]]) -> tuple[str, int]:
        try:
            device = self._select(items)
        except SelectionError as e:
            return e.message, 1
        return self._run(device)

    def _run(self, device: DeviceInfo) -> tuple[str, int]:
        raise NotImplementedError

    def _select(self, items: Optional[Sequence[str]]) -> DeviceInfo:
        """첫 번째 선택 항목을 장치로 변환"""
        if not items:
            raise SelectionError(NO_SELECTION)
        item = device_codec.parse_line(items[0], self.config)
        if isinstance(item, StatusMessage):
            raise SelectionError(NO_ADDRESS)
        return item

    def _status_icon(self, connected: bool) -> str:
        return self.config.connected_icon if connected else self.config.disconnected_icon


class ToggleTask(DeviceTask):
    """연결 / 연결 해제"""

    info = TaskInfo(
        id="toggle",
        name="Toggle Bluetooth Device",
        description="Connect or disconnect paired Bluetooth devices",
    )

    def __init__(self, config: PluginConfig, service: BluetoothService):
        super().__init__(config)
        self.service = service

    def items(self) -> List[str]:
        return [device_codec.render_item(item, self.config) for item in self.service.list_paired_items()]

    def preview(self, item: str) -> str:
        connected = device_codec.is_connected(item, self.config.connected_icon)
        return (
            f"{self._status_icon(connected)} {'Connected' if connected else 'Disconnected'}\n\n"
            f"Device: {device_codec.extract_name(item)}\n"
            f"Address: {device_codec.extract_address(item)}\n\n"
            f"Action: {'Disconnect' if connected else 'Connect'}"
        )

    def _run(self, device: DeviceInfo) -> tuple[str, int]:
        return self.service.toggle_device(device)


class ForgetTask(DeviceTask):
    """페어링 해제"""

    info = TaskInfo(
        id="forget",
        name="Forget Bluetooth Device",
        description="Unpair selected Bluetooth device permanently",
        execution_confirmation_message="Are you sure you want to unpair:",
    )

    def __init__(self, config: PluginConfig, service: BluetoothService):
        super().__init__(config)
        self.service = service

    def items(self) -> List[str]:
        return [device_codec.render_item(item, self.config) for item in self.service.list_paired_items()]

    def preview(self, item: str) -> str:
        connected = device_codec.is_connected(item, self.config.connected_icon)
        return (
            "⚠️  UNPAIR DEVICE\n\n"
            f"{self._status_icon(connected)} {'Connected' if connected else 'Disconnected'}\n\n"
            f"Device: {device_codec.extract_name(item)}\n"
            f"Address: {device_codec.extract_address(item)}\n\n"
            "Warning: This will permanently unpair the device.\n"
            "You will need to re-pair it to use it again."
        )

    def _run(self, device: DeviceInfo) -> tuple[str, int]:
        return self.service.unpair_device(device)


class ScanTask(DeviceTask):
    """검색 + 페어링"""

    info = TaskInfo(
        id="scan",
        name="Discover & Pair Devices",
        description="Continuously scan for unpaired Bluetooth devices and pair them on selection",
        item_polling_interval=SCAN_INTERVAL_MS,
        preview_polling_interval=0,
    )

    def __init__(self, config: PluginConfig, service: PairingService):
        super().__init__(config)
        self.service = service

    def items(self) -> List[str]:
        return self.service.render_unpaired(self.config.disconnected_icon)

    def preview(self, item: str) -> str:
        return self.service.preview_device(device_codec.parse_line(item, self.config))

    def execute(self, items: Optional[Sequence[str]]) -> tuple[str, int]:
        if not items:
            return NO_SELECTION, 1
        # 검색 중/팁 문구는 페어링 대상이 아님
        selected = device_codec.parse_line(items[0], self.config)
        if isinstance(selected, StatusMessage):
            if selected.status in (StatusKind.SCANNING, StatusKind.TIP):
                return WAIT_FOR_SCAN, 1
            return NO_ADDRESS, 1
        return self._run(selected)

    def _run(self, device: DeviceInfo) -> tuple[str, int]:
        return self.service.pair_device(device.address, device.name or None)


def build_tasks(config: PluginConfig, service: BluetoothService, pairing: PairingService) -> Dict[str, DeviceTask]:
    """태스크 ID -> 태스크"""
    tasks: List[DeviceTask] = [
        ToggleTask(config, service),
        ForgetTask(config, service),
        ScanTask(config, pairing),
    ]
    return {task.info.id: task for task in tasks}
