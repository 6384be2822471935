import json
from typing import List, Optional
import pytest
from app.models.config import PluginConfig
from app.repositories.bluetooth_repository import BluetoothRepository, GatewayResult


class FakeRepository(BluetoothRepository):
    """blueutil 대신 미리 정한 결과를 돌려주는 repository"""

    def __init__(self, paired=None, discovered=None, available=True):
        super().__init__()
        self.available = available
        self.paired_result = self._json_result(paired or [])
        self.discover_result = self._json_result(discovered or [])
        self.action_results = {}
        self.pair_results: List[GatewayResult] = []
        self.calls = []

    @staticmethod
    def _json_result(devices) -> GatewayResult:
        return GatewayResult(output=json.dumps(devices), returncode=0)

    def is_available(self) -> bool:
        return self.available

    def list_paired(self) -> GatewayResult:
        self.calls.append(("list_paired",))
        return self.paired_result

    def discover(self, duration: int = 5) -> GatewayResult:
        self.calls.append(("discover", duration))
        return self.discover_result

    def connect(self, address: str) -> GatewayResult:
        self.calls.append(("connect", address))
        return self.action_results.get("connect", GatewayResult())

    def disconnect(self, address: str) -> GatewayResult:
        self.calls.append(("disconnect", address))
        return self.action_results.get("disconnect", GatewayResult())

    def unpair(self, address: str) -> GatewayResult:
        self.calls.append(("unpair", address))
        return self.action_results.get("unpair", GatewayResult())

    def pair(self, address: str, pin: Optional[str] = None) -> GatewayResult:
        self.calls.append(("pair", address, pin))
        if self.pair_results:
            return self.pair_results.pop(0)
        return GatewayResult(output="Error: pairing failed", returncode=1)

    def calls_named(self, name: str):
        return [call for call in self.calls if call[0] == name]


@pytest.fixture
def config():
    return PluginConfig()


@pytest.fixture
def repo():
    return FakeRepository(
        paired=[
            {"address": "AA:BB", "name": "Headphones", "connected": True},
            {"address": "CC:DD", "name": "Keyboard", "connected": False},
        ],
        discovered=[
            {"address": "AA:BB", "name": "Headphones"},
            {"address": "EE:FF", "name": "Speaker"},
        ],
    )
