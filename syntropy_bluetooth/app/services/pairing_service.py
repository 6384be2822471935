"""
장치 검색 및 페어링 서비스

- 검색 결과에서 이미 페어링된 장치 제외
- PIN 없이 -> 0000 -> 1234 -> 1111 순서로 페어링 시도
"""
from typing import List, Optional, Sequence
from app.exceptions import PairingExhaustedError, ParseError, ScanError, ToolMissingError
from app.models.bluetooth_model import DeviceInfo, DisplayItem, StatusKind, StatusMessage
from app.models.config import DEFAULT_DISCONNECTED_ICON
from app.repositories.bluetooth_repository import BluetoothRepository
from app.services import device_codec


SCAN_DURATION = 5
SCAN_INTERVAL_MS = 10000

# None = PIN 없이 시도
CREDENTIAL_LADDER: List[Optional[str]] = [None, "0000", "1234", "1111"]

SCANNING_TEXT = "🔍 Scanning for devices... (auto-refresh every 10s)"
TIP_TEXT = "💡 Tip: Put your device in pairing mode"

SCANNING_PREVIEW = """🔍 Scanning for Bluetooth Devices

Syntropy is continuously scanning for nearby unpaired devices.
New devices will appear automatically in the list.

Scan interval: Every 10 seconds
Scan duration: 5 seconds per scan

Make sure the device you want to pair is:
• Powered on
• In pairing/discoverable mode
• Within Bluetooth range (typically 10 meters)"""

TIP_PREVIEW = """💡 Pairing Mode Instructions

Most Bluetooth devices have a pairing button or sequence:

Headphones/Speakers:
• Hold power button for 5+ seconds until LED flashes

Keyboards/Mice:
• Look for dedicated pairing button
• Some require holding specific key combinations

Smart Devices:
• Check device manual for pairing instructions
• May require app-based pairing first

The device should appear in the list within 10 seconds."""

DEVICE_PREVIEW = """○ New Bluetooth Device Detected

Device Name: {name}
MAC Address: {address}
Status:      Not Paired

Action: Press Enter to Pair

Note: Pairing will be attempted automatically.
      Common PINs (0000, 1234) will be tried if needed.
      Some devices may require manual pairing through
      System Settings > Bluetooth if this fails."""

PAIRING_FAILED = """✗ Pairing Failed

Device: {device}
Error: {output}

Troubleshooting:
1. Ensure device is in pairing/discoverable mode
2. Try pairing manually via System Settings > Bluetooth
3. Some devices require specific PIN codes
4. Device may not support command-line pairing
5. Try resetting the device and scanning again"""


class PairingService:
    """장치 검색 + 페어링"""

    def __init__(self, repository: BluetoothRepository):
        self.repo = repository

    def scan(self) -> List[DeviceInfo]:
        """주변 장치 검색"""
        print(f"🔍 Bluetooth 장치 검색 중 ({SCAN_DURATION}초)...")
        result = self.repo.discover(SCAN_DURATION)
        if not result.ok:
            raise ScanError("Failed to scan for devices")

        try:
            devices = device_codec.decode(result.output)
        except ParseError:
            raise ScanError("Failed to parse scan results") from None

        print(f"✅ {len(devices)}개 장치 발견")
        return devices

    def get_paired_devices(self) -> List[DeviceInfo]:
        """필터링용 페어링 목록 (실패 시 빈 목록)"""
        try:
            result = self.repo.list_paired()
        except ToolMissingError:
            return []
        if not result.ok:
            return []
        try:
            return device_codec.decode(result.output)
        except ParseError:
            return []

    @staticmethod
    def filter_unpaired(discovered: Sequence[DeviceInfo], paired: Sequence[DeviceInfo]) -> List[DeviceInfo]:
        """이미 페어링된 주소 제외"""
        paired_addresses = {device.address for device in paired}
        return [device for device in discovered if device.address not in paired_addresses]

    def list_unpaired(self) -> List[DisplayItem]:
        """페어링 안 된 장치 목록 (없으면 안내 문구 2개)"""
        if not self.repo.is_available():
            return [StatusMessage(status=StatusKind.ERROR, text=ToolMissingError().message)]

        try:
            discovered = self.scan()
        except ScanError as e:
            return [StatusMessage(status=StatusKind.ERROR, text=f"Error: {e.message}")]
        except ToolMissingError as e:
            return [StatusMessage(status=StatusKind.ERROR, text=e.message)]

        unpaired = self.filter_unpaired(discovered, self.get_paired_devices())
        if not unpaired:
            return [
                StatusMessage(status=StatusKind.SCANNING, text=SCANNING_TEXT),
                StatusMessage(status=StatusKind.TIP, text=TIP_TEXT),
            ]

        # 검색 결과는 연결 상태가 의미 없음
        return [device.model_copy(update={"connected": False}) for device in unpaired]

    def render_unpaired(self, unpaired_icon: str = DEFAULT_DISCONNECTED_ICON) -> List[str]:
        """list_unpaired 결과를 표시 줄로 변환"""
        lines = []
        for item in self.list_unpaired():
            if isinstance(item, StatusMessage):
                lines.append(item.text)
            else:
                lines.append(device_codec.render(item, unpaired_icon, unpaired_icon))
        return lines

    def preview_device(self, item: DisplayItem) -> str:
        """선택 항목 미리보기"""
        if isinstance(item, StatusMessage):
            if item.status == StatusKind.SCANNING:
                return SCANNING_PREVIEW
            if item.status == StatusKind.TIP:
                return TIP_PREVIEW
            if item.status == StatusKind.ERROR:
                return item.text
            return "Error: Could not parse device information"

        if not item.name or not item.address:
            return "Error: Could not parse device information"
        return DEVICE_PREVIEW.format(name=item.name, address=item.address)

    def pair_device(self, address: str, name: Optional[str] = None) -> tuple[str, int]:
        """
        페어링 시도
        Returns: (message, status)
        """
        if not address:
            return "Error: Could not extract device address", 1

        label = name or address
        try:
            pin = self._pair_with_ladder(address)
        except PairingExhaustedError as e:
            print(f"❌ '{label}' 페어링 실패 (PIN {len(CREDENTIAL_LADDER) - 1}개 모두 실패)")
            return PAIRING_FAILED.format(device=address, output=e.output), 1
        except ToolMissingError as e:
            return e.message, 1

        print(f"✅ '{label}' 페어링 성공")
        if pin is None:
            return f"✓ Successfully paired with {label}", 0
        return f"✓ Successfully paired with {label} using PIN {pin}", 0

    def _pair_with_ladder(self, address: str) -> Optional[str]:
        """성공한 PIN 반환 (PIN 없이 성공하면 None)"""
        output = ""
        pin = None
        for pin in CREDENTIAL_LADDER:
            if pin is None:
                print(f"📱 '{address}' 페어링 시도 중...")
            else:
                print(f"📱 '{address}' 페어링 재시도 (PIN {pin})")
            result = self.repo.pair(address, pin)
            if result.ok:
                return pin
            output = result.output
        raise PairingExhaustedError(address, output, pin)
