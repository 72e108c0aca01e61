# src/chip8_tracer/arch/chip8/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のアセンブリ言語（ニーモニック）に変換します。
Instruction Layerのデコードロジックを再利用しますが、バスアクセスログを汚さないように
peek（ログなし読み込み）のみを使用します。
"""
from typing import List, Tuple

from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.instructions import decode_opcode

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(bus: Bus, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。
    マップされた領域の終端で打ち切られます。
    範囲の末尾に1バイトだけ残った場合は、データバイト（DB）として出力します。

    Returns:
        List of (address, hex_word, mnemonic) tuples.
    """
    result = []
    end_addr = min(start_addr + length, bus.get_mapped_end())
    current_addr = start_addr

    while current_addr + 1 < end_addr:
        opcode = (bus.peek(current_addr) << 8) | bus.peek(current_addr + 1)
        operation = decode_opcode(opcode)
        result.append((current_addr, operation.opcode_hex, operation.text()))
        current_addr += operation.length

    if current_addr < end_addr:
        data = bus.peek(current_addr)
        result.append((current_addr, f"{data:02X}", f"DB ${data:02X}"))

    return result
