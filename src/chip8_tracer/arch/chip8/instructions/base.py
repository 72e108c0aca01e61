# src/chip8_tracer/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。

オペランドは全て16bit命令語の固定ビット位置から取り出します。
  x   = bits 8-11 (レジスタ番号)
  y   = bits 4-7  (レジスタ番号)
  n   = bits 0-3  (即値)
  kk  = bits 0-7  (即値)
  nnn = bits 0-11 (アドレス)
"""
from dataclasses import dataclass
from typing import Callable, List

from chip8_tracer.common.types import RandomSource
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.transport.bus import Bus
from chip8_tracer.transport.display import DisplayBuffer
from chip8_tracer.transport.keypad import Keypad
from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.font import FONT_ADDRESS


# @intent:data_structure メインメモリ以外の協調オブジェクトをまとめて命令実装に渡すためのコンテナ。
@dataclass
class Peripherals:
    display: DisplayBuffer
    keypad: Keypad
    random_byte: RandomSource
    font_address: int = FONT_ADDRESS


# 実行関数の型: (state, bus, peripherals, operation) -> None
ExecFunc = Callable[[Chip8CpuState, Bus, Peripherals, Operation], None]
# オペランド表示関数の型: opcode -> operands
FormatFunc = Callable[[int], List[str]]


def group_of(opcode: int) -> int:
    return (opcode & 0xF000) >> 12

def x_of(opcode: int) -> int:
    return (opcode & 0x0F00) >> 8

def y_of(opcode: int) -> int:
    return (opcode & 0x00F0) >> 4

def n_of(opcode: int) -> int:
    return opcode & 0x000F

def kk_of(opcode: int) -> int:
    return opcode & 0x00FF

def nnn_of(opcode: int) -> int:
    return opcode & 0x0FFF


# @intent:utility_function 条件成立時に次の命令をスキップします（フェッチ済みのPCにさらに+2）。
def skip_if(state: Chip8CpuState, condition: bool) -> None:
    if condition:
        state.pc = (state.pc + 2) & 0xFFFF


# --- オペランド表示 ---
# @intent:rationale 表示形式はトレースと逆アセンブラで共有するため、ここに集約します。

def fmt_none(opcode: int) -> List[str]:
    return []

def fmt_addr(opcode: int) -> List[str]:
    return [f"${nnn_of(opcode):03X}"]

def fmt_vx(opcode: int) -> List[str]:
    return [f"V{x_of(opcode):X}"]

def fmt_vx_byte(opcode: int) -> List[str]:
    return [f"V{x_of(opcode):X}", f"#${kk_of(opcode):02X}"]

def fmt_vx_vy(opcode: int) -> List[str]:
    return [f"V{x_of(opcode):X}", f"V{y_of(opcode):X}"]

def fmt_vx_vy_n(opcode: int) -> List[str]:
    return [f"V{x_of(opcode):X}", f"V{y_of(opcode):X}", f"#{n_of(opcode)}"]

def fmt_i_addr(opcode: int) -> List[str]:
    return ["I", f"${nnn_of(opcode):03X}"]

def fmt_v0_addr(opcode: int) -> List[str]:
    return ["V0", f"${nnn_of(opcode):03X}"]

def fmt_operands(*names: str) -> FormatFunc:
    """
    固定の名前とVxを組み合わせたオペランド表示関数を生成します。
    "Vx" はレジスタ番号に置き換えられます。例: fmt_operands("DT", "Vx") -> ["DT", "V3"]
    """
    def _format(opcode: int) -> List[str]:
        register = f"V{x_of(opcode):X}"
        return [register if name == "Vx" else name for name in names]
    return _format
