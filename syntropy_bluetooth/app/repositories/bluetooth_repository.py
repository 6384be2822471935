import shutil
import subprocess
from typing import List, Optional
from pydantic import BaseModel, Field
from app.exceptions import ToolMissingError


BLUEUTIL = "blueutil"
INSTALL_HINT = "brew install blueutil"


class GatewayResult(BaseModel):
    """blueutil 실행 결과"""
    output: str = Field("", description="출력 (stdout, 동작 명령은 stderr 포함)")
    returncode: int = Field(0, description="종료 코드")

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class BluetoothRepository:
    """
    blueutil과의 인터페이스
    명령 실행과 출력 수집만 담당 (파싱은 서비스 계층)
    """

    list_timeout = 10
    action_timeout = 15
    pair_timeout = 30

    def __init__(self, binary: str = BLUEUTIL):
        self.binary = binary

    def is_available(self) -> bool:
        """blueutil 설치 여부"""
        return shutil.which(self.binary) is not None

    def list_paired(self) -> GatewayResult:
        """페어링된 장치 목록 (JSON)"""
        return self._run(["--paired", "--format", "json"], self.list_timeout, merge_stderr=False)

    def discover(self, duration: int = 5) -> GatewayResult:
        """주변 장치 검색 (JSON)"""
        return self._run(
            ["--inquiry", str(duration), "--format", "json"],
            duration + self.list_timeout,
            merge_stderr=False
        )

    def connect(self, address: str) -> GatewayResult:
        """장치 연결"""
        return self._run(["--connect", address], self.action_timeout)

    def disconnect(self, address: str) -> GatewayResult:
        """장치 연결 해제"""
        return self._run(["--disconnect", address], self.action_timeout)

    def pair(self, address: str, pin: Optional[str] = None) -> GatewayResult:
        """장치 페어링 (PIN 선택)"""
        args = ["--pair", address]
        if pin is not None:
            args.append(pin)
        return self._run(args, self.pair_timeout)

    def unpair(self, address: str) -> GatewayResult:
        """페어링 해제"""
        return self._run(["--unpair", address], self.action_timeout)

    def _run(self, args: List[str], timeout: int, merge_stderr: bool = True) -> GatewayResult:
        command = [self.binary, *args]
        try:
            result = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT if merge_stderr else subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout
            )
        except FileNotFoundError:
            raise ToolMissingError(self.binary, INSTALL_HINT)
        except subprocess.TimeoutExpired:
            print(f"❌ {' '.join(command)} 시간 초과 ({timeout}초)")
            return GatewayResult(output=f"Command timed out after {timeout}s", returncode=1)
        except (OSError, UnicodeDecodeError) as e:
            print(f"❌ {' '.join(command)} 실행 실패: {e}")
            return GatewayResult(output=str(e), returncode=1)

        if result.returncode != 0:
            print(f"⚠️  {' '.join(command)} 실패 (code={result.returncode})")
        return GatewayResult(output=(result.stdout or "").strip(), returncode=result.returncode)
