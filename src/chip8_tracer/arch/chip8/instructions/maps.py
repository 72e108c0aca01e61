# src/chip8_tracer/arch/chip8/instructions/maps.py
"""
命令語と命令実装のマッピング定義。

上位4bit（グループ）で16要素のテーブルを直接インデックスし、
グループ0/8は下位4bit、グループE/Fは下位8bitで二次テーブルを引きます。
二次テーブルの空きスロット（None）は未知命令です。
"""
from typing import Callable, Dict, List, NamedTuple, Optional

from . import alu, control, display, misc
from .base import (
    ExecFunc, FormatFunc,
    group_of, n_of, kk_of,
    fmt_none, fmt_addr, fmt_vx, fmt_vx_byte, fmt_vx_vy, fmt_vx_vy_n,
    fmt_i_addr, fmt_v0_addr, fmt_operands,
)

# @intent:data_structure 1つの具体的な命令の定義（ニーモニック、オペランド表示、実行関数）。
class InstructionEntry(NamedTuple):
    mnemonic: str
    format_operands: FormatFunc
    execute: ExecFunc

# 命令語から命令定義を解決する関数の型
Resolver = Callable[[int], Optional[InstructionEntry]]


def _table(size: int, entries: Dict[int, InstructionEntry]) -> List[Optional[InstructionEntry]]:
    table: List[Optional[InstructionEntry]] = [None] * size
    for selector, entry in entries.items():
        table[selector] = entry
    return table

# @intent:map グループ0: 下位4bitで選択。
SYSTEM_TABLE = _table(0x10, {
    0x0: InstructionEntry("CLS", fmt_none, display.execute_cls),
    0xE: InstructionEntry("RET", fmt_none, control.execute_ret),
})

# @intent:map グループ8: 下位4bitで選択。0x8-0xD, 0xF は未定義。
ARITHMETIC_TABLE = _table(0x10, {
    0x0: InstructionEntry("LD", fmt_vx_vy, alu.execute_ld_reg),
    0x1: InstructionEntry("OR", fmt_vx_vy, alu.execute_or),
    0x2: InstructionEntry("AND", fmt_vx_vy, alu.execute_and),
    0x3: InstructionEntry("XOR", fmt_vx_vy, alu.execute_xor),
    0x4: InstructionEntry("ADD", fmt_vx_vy, alu.execute_add_reg),
    0x5: InstructionEntry("SUB", fmt_vx_vy, alu.execute_sub),
    0x6: InstructionEntry("SHR", fmt_vx, alu.execute_shr),
    0x7: InstructionEntry("SUBN", fmt_vx_vy, alu.execute_subn),
    0xE: InstructionEntry("SHL", fmt_vx, alu.execute_shl),
})

# @intent:map グループE: 下位8bitで選択。
KEY_TABLE = _table(0x100, {
    0x9E: InstructionEntry("SKP", fmt_vx, misc.execute_skp),
    0xA1: InstructionEntry("SKNP", fmt_vx, misc.execute_sknp),
})

# @intent:map グループF: 下位8bitで選択。
MISC_TABLE = _table(0x100, {
    0x07: InstructionEntry("LD", fmt_operands("Vx", "DT"), misc.execute_ld_vx_dt),
    0x0A: InstructionEntry("LD", fmt_operands("Vx", "K"), misc.execute_ld_vx_k),
    0x15: InstructionEntry("LD", fmt_operands("DT", "Vx"), misc.execute_ld_dt_vx),
    0x18: InstructionEntry("LD", fmt_operands("ST", "Vx"), misc.execute_ld_st_vx),
    0x1E: InstructionEntry("ADD", fmt_operands("I", "Vx"), misc.execute_add_i_vx),
    0x29: InstructionEntry("LD", fmt_operands("F", "Vx"), misc.execute_ld_f_vx),
    0x33: InstructionEntry("LD", fmt_operands("B", "Vx"), misc.execute_ld_b_vx),
    0x55: InstructionEntry("LD", fmt_operands("[I]", "Vx"), misc.execute_ld_mem_vx),
    0x65: InstructionEntry("LD", fmt_operands("Vx", "[I]"), misc.execute_ld_vx_mem),
})


def _direct(entry: InstructionEntry) -> Resolver:
    return lambda opcode: entry

def _by_nibble(table: List[Optional[InstructionEntry]]) -> Resolver:
    return lambda opcode: table[n_of(opcode)]

def _by_byte(table: List[Optional[InstructionEntry]]) -> Resolver:
    return lambda opcode: table[kk_of(opcode)]

# @intent:map 上位4bit（0-15）で直接インデックスする一次ディスパッチテーブル。
GROUP_TABLE: List[Resolver] = [
    _by_nibble(SYSTEM_TABLE),                                        # 0
    _direct(InstructionEntry("JP", fmt_addr, control.execute_jp)),    # 1nnn
    _direct(InstructionEntry("CALL", fmt_addr, control.execute_call)),  # 2nnn
    _direct(InstructionEntry("SE", fmt_vx_byte, control.execute_se_byte)),  # 3xkk
    _direct(InstructionEntry("SNE", fmt_vx_byte, control.execute_sne_byte)),  # 4xkk
    _direct(InstructionEntry("SE", fmt_vx_vy, control.execute_se_reg)),  # 5xy0
    _direct(InstructionEntry("LD", fmt_vx_byte, alu.execute_ld_byte)),  # 6xkk
    _direct(InstructionEntry("ADD", fmt_vx_byte, alu.execute_add_byte)),  # 7xkk
    _by_nibble(ARITHMETIC_TABLE),                                    # 8
    _direct(InstructionEntry("SNE", fmt_vx_vy, control.execute_sne_reg)),  # 9xy0
    _direct(InstructionEntry("LD", fmt_i_addr, alu.execute_ld_i)),    # Annn
    _direct(InstructionEntry("JP", fmt_v0_addr, control.execute_jp_v0)),  # Bnnn
    _direct(InstructionEntry("RND", fmt_vx_byte, alu.execute_rnd)),   # Cxkk
    _direct(InstructionEntry("DRW", fmt_vx_vy_n, display.execute_drw)),  # Dxyn
    _by_byte(KEY_TABLE),                                             # E
    _by_byte(MISC_TABLE),                                            # F
]


# @intent:responsibility 命令語に対応する命令定義を返します。未知の命令語ならNone。
def resolve_instruction(opcode: int) -> Optional[InstructionEntry]:
    return GROUP_TABLE[group_of(opcode)](opcode)
