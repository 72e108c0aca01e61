# chip8_tracer/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令サイクル後のCPUとバスの状態を記録した不変のデータ構造を定義します。
トレース出力とデバッガへの情報提供に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from chip8_tracer.core.state import CpuState
from chip8_tracer.transport.bus import BusAccessType, BusAccess

__all__ = ["BusAccessType", "BusAccess", "Operation", "Metadata", "Snapshot"]


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令の詳細（命令語、HEX、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode_hex: str # 例: "2208"
    mnemonic: str # 例: "CALL"
    operands: List[str] = field(default_factory=list) # 例: ["$208"]
    opcode: int = 0 # 16bit命令語
    cycle_count: int = 1 # 命令実行に必要なサイクル数
    length: int = 2 # 命令のバイト長

    # @intent:responsibility トレース表示用の命令テキストを返します。
    def text(self) -> str:
        if self.operands:
            return f"{self.mnemonic} {', '.join(self.operands)}"
        return self.mnemonic

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（累計サイクル数、命令テキストなど）を記録するデータクラス。
    """
    cycle_count: int
    symbol_info: Optional[str] = None # 例: "0x0200: LD V1, #$23"

# @intent:responsibility ある一時点におけるCPUとバスの状態を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    ある一時点における、CPUとバスの状態を記録した不変のデータ構造。
    stateはスナップショット生成時のコピーであり、以降のサイクルの影響を受けません。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)
