from typing import List
from app.exceptions import GatewayExecutionError, ParseError, ToolMissingError
from app.models.bluetooth_model import DeviceInfo, DisplayItem, StatusKind, StatusMessage
from app.repositories.bluetooth_repository import BluetoothRepository
from app.services import device_codec


class BluetoothService:
    """
    페어링된 장치 관련 비즈니스 로직
    Repository와 태스크 어댑터 사이의 중간 계층
    """

    def __init__(self, repository: BluetoothRepository):
        self.repo = repository

    def get_paired_devices(self) -> List[DeviceInfo]:
        """페어링된 장치 목록"""
        if not self.repo.is_available():
            raise ToolMissingError()

        result = self.repo.list_paired()
        if not result.ok:
            raise GatewayExecutionError(
                "Error: Failed to get Bluetooth devices",
                output=result.output,
                returncode=result.returncode
            )
        return device_codec.decode(result.output)

    def list_paired_items(self) -> List[DisplayItem]:
        """페어링된 장치 목록 (실패 시 안내 문구)"""
        try:
            devices = self.get_paired_devices()
        except (ToolMissingError, GatewayExecutionError) as e:
            return [StatusMessage(status=StatusKind.ERROR, text=e.message)]
        except ParseError:
            return [StatusMessage(status=StatusKind.ERROR, text="Error: Failed to parse Bluetooth device data")]

        if not devices:
            return [StatusMessage(status=StatusKind.EMPTY, text=device_codec.EMPTY_PAIRED_TEXT)]

        print(f"📱 페어링된 장치 {len(devices)}개")
        return list(devices)

    def toggle_device(self, device: DeviceInfo) -> tuple[str, int]:
        """
        연결 상태 전환
        Returns: (message, status)
        """
        if not device.address:
            return "Error: Could not extract device address", 1

        name = device.name or device.address
        try:
            if device.connected:
                print(f"🔌 '{name}' 연결 해제 중...")
                result = self.repo.disconnect(device.address)
                action = "Disconnected from"
                verb = "disconnect from"
            else:
                print(f"📱 '{name}' 연결 중...")
                result = self.repo.connect(device.address)
                action = "Connected to"
                verb = "connect to"
        except ToolMissingError as e:
            return e.message, 1

        if not result.ok:
            print(f"❌ '{name}' {verb} 실패")
            return f"Error: Failed to {verb} {name}\n{result.output}", 1

        print(f"✅ {action} '{name}'")
        return f"{action}: {name}", 0

    def unpair_device(self, device: DeviceInfo) -> tuple[str, int]:
        """
        페어링 해제
        Returns: (message, status)
        """
        if not device.address:
            return "Error: Could not extract device address", 1

        name = device.name or device.address
        try:
            result = self.repo.unpair(device.address)
        except ToolMissingError as e:
            return e.message, 1

        if not result.ok:
            print(f"❌ '{name}' 페어링 해제 실패")
            return (
                f"Error: Failed to unpair {name}\n{result.output}\n\n"
                "Note: --unpair is experimental in blueutil"
            ), 1

        print(f"✅ '{name}' 페어링 해제 완료")
        return f"Unpaired: {name}", 0
