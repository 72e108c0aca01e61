# src/chip8_tracer/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from chip8_tracer.transport.bus import Bus
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.arch.chip8.state import Chip8CpuState
from .base import Peripherals
from .maps import resolve_instruction

UNKNOWN_MNEMONIC = "UNKNOWN"

# @intent:responsibility CHIP-8の命令語をデコードします。
def decode_opcode(opcode: int) -> Operation:
    """
    16bit命令語をデコードし、Operationオブジェクトを返します。
    未知の命令語はニーモニック"UNKNOWN"のOperationになります。
    """
    entry = resolve_instruction(opcode)
    if entry is None:
        return Operation(
            opcode_hex=f"{opcode:04X}", mnemonic=UNKNOWN_MNEMONIC, operands=[f"${opcode:04X}"], opcode=opcode
        )
    return Operation(
        opcode_hex=f"{opcode:04X}",
        mnemonic=entry.mnemonic,
        operands=entry.format_operands(opcode),
        opcode=opcode,
    )

# @intent:responsibility デコードされたCHIP-8命令を実行します。
# @intent:post-condition 未知命令の場合は状態を一切変更せずFalseを返します。
def execute_instruction(operation: Operation, state: Chip8CpuState, bus: Bus, io: Peripherals) -> bool:
    """
    デコードされた命令を実行し、CPUの状態、メモリ、表示バッファを変更します。
    実行できた場合はTrue、未知命令の場合はFalseを返します。
    """
    entry = resolve_instruction(operation.opcode)
    if entry is None:
        return False
    entry.execute(state, bus, io, operation)
    return True
