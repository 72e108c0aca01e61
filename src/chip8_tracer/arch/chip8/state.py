# src/chip8_tracer/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import List

from chip8_tracer.core.state import CpuState

# @intent:constant レジスタ数、スタック深さ、プログラム領域の先頭アドレス。
REGISTER_COUNT = 16
STACK_DEPTH = 16
PROGRAM_START = 0x200  # 0x000-0x1FFはインタプリタ/フォント用に予約
FLAG_REGISTER = 0xF


def _zeroed_registers() -> List[int]:
    return [0] * REGISTER_COUNT


def _zeroed_stack() -> List[int]:
    return [0] * STACK_DEPTH


# @intent:responsibility CHIP-8 CPUの全てのレジスタ（V0-VF, I, DT, ST, PC, SP）とスタック、現在の命令語を保持します。
# @intent:rationale 全てのフィールドは単一の集約が所有し、フィールド間の共有や別名参照はありません。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUのレジスタ状態を保持するデータクラス。
    VF（v[15]）は通常のレジスタとして扱われ、キャリー/ボロー/シフトアウト/衝突の結果が副作用として書き込まれます。
    """
    pc: int = PROGRAM_START
    v: List[int] = field(default_factory=_zeroed_registers)  # V0-VF (8bit)
    i: int = 0x0000          # Index Register (16bit)
    delay_timer: int = 0x00  # DT (8bit)
    sound_timer: int = 0x00  # ST (8bit)
    stack: List[int] = field(default_factory=_zeroed_stack)  # 戻りアドレス (16bit x 16)
    opcode: int = 0x0000     # 最後にフェッチした命令語

    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF
