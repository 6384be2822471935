"""
Bluetooth 플러그인 예외 정의

서비스 계층에서 잡아서 (message, status) 형태로 변환한다.
"""
from typing import Optional


class BluetoothError(Exception):
    """플러그인 예외 기본 클래스"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ToolMissingError(BluetoothError):
    """blueutil 미설치"""

    def __init__(self, tool: str = "blueutil", install_hint: str = "brew install blueutil"):
        super().__init__(f"Error: {tool} not installed. Install with: {install_hint}")
        self.tool = tool
        self.install_hint = install_hint


class GatewayExecutionError(BluetoothError):
    """blueutil 명령 실패 (non-zero exit)"""

    def __init__(self, message: str, output: str = "", returncode: int = 1):
        super().__init__(message)
        self.output = output
        self.returncode = returncode


class ParseError(BluetoothError):
    """JSON 파싱 실패"""


class ScanError(BluetoothError):
    """장치 검색 실패"""


class SelectionError(BluetoothError):
    """선택된 항목이 없거나 주소가 없음"""


class PairingExhaustedError(BluetoothError):
    """모든 PIN 시도 실패"""

    def __init__(self, address: str, output: str, pin: Optional[str] = None):
        super().__init__(f"Pairing with {address} failed")
        self.address = address
        self.output = output
        self.last_pin = pin
