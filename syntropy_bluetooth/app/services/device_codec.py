"""
장치 레코드 <-> 표시 줄 변환

표시 줄 형식: "<아이콘> <이름>\t<주소>"
런처 목록 위젯이 문자열만 받기 때문에 서비스 경계에서만 사용한다.
"""
import json
import re
from typing import List, Optional
from pydantic import ValidationError
from app.exceptions import ParseError
from app.models.bluetooth_model import DeviceInfo, DisplayItem, StatusKind, StatusMessage
from app.models.config import DEFAULT_CONNECTED_ICON, DEFAULT_DISCONNECTED_ICON, PluginConfig


SCANNING_MARKER = "🔍"
TIP_MARKER = "💡"
ERROR_MARKER = "Error:"
EMPTY_PAIRED_TEXT = "No paired Bluetooth devices found"

_NAME_PATTERN = re.compile(r"^\S+ ([^\t]+)\t")


def decode(text: Optional[str]) -> List[DeviceInfo]:
    """blueutil JSON 배열 -> DeviceInfo 목록"""
    if text is None or not text.strip():
        return []

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        raise ParseError("Failed to parse Bluetooth device data") from None

    if not isinstance(data, list):
        raise ParseError("Failed to parse Bluetooth device data")

    devices: List[DeviceInfo] = []
    for entry in data:
        if not isinstance(entry, dict):
            raise ParseError("Failed to parse Bluetooth device data")
        try:
            device = DeviceInfo.model_validate(entry)
        except ValidationError:
            raise ParseError("Failed to parse Bluetooth device data") from None
        # 탭이 있으면 표시 줄 형식이 깨짐 (주소를 잘못 읽게 됨)
        if "\t" in device.name:
            raise ParseError(f"Device name contains a tab: {device.address}")
        if "\t" in device.address or not device.address.strip():
            raise ParseError("Device address is blank or contains a tab")
        devices.append(device)
    return devices


def render(
    device: DeviceInfo,
    connected_icon: str = DEFAULT_CONNECTED_ICON,
    disconnected_icon: str = DEFAULT_DISCONNECTED_ICON
) -> str:
    """DeviceInfo -> 표시 줄"""
    icon = connected_icon if device.connected else disconnected_icon
    return f"{icon} {device.display_name}\t{device.address}"


def render_item(item: DisplayItem, config: PluginConfig) -> str:
    if isinstance(item, StatusMessage):
        return item.text
    return render(item, config.connected_icon, config.disconnected_icon)


def extract_address(line: str) -> str:
    """마지막 탭 뒤의 주소, 탭이 없으면 빈 문자열"""
    _, sep, address = line.rpartition("\t")
    return address if sep else ""


def extract_name(line: str) -> str:
    """아이콘+공백 뒤, 첫 탭 앞의 이름"""
    match = _NAME_PATTERN.match(line)
    return match.group(1) if match else ""


def is_connected(line: str, connected_icon: str = DEFAULT_CONNECTED_ICON) -> bool:
    # 아이콘은 사용자 설정 값이므로 패턴이 아닌 문자열로 비교
    return line.startswith(connected_icon + " ")


def classify_status(line: str) -> Optional[StatusKind]:
    """안내 문구 줄이면 종류 반환, 장치 줄이면 None"""
    if line.startswith(SCANNING_MARKER):
        return StatusKind.SCANNING
    if line.startswith(TIP_MARKER):
        return StatusKind.TIP
    if line.startswith(ERROR_MARKER):
        return StatusKind.ERROR
    if line.startswith(EMPTY_PAIRED_TEXT):
        return StatusKind.EMPTY
    return None


def parse_line(line: str, config: PluginConfig) -> DisplayItem:
    """표시 줄 -> DeviceInfo 또는 StatusMessage"""
    status = classify_status(line)
    if status is not None:
        return StatusMessage(status=status, text=line)

    address = extract_address(line)
    if not address:
        # 주소 없는 줄은 장치로 취급할 수 없음
        return StatusMessage(status=StatusKind.NOTICE, text=line)

    return DeviceInfo(
        address=address,
        name=extract_name(line),
        connected=is_connected(line, config.connected_icon)
    )
