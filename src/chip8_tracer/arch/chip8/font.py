# src/chip8_tracer/arch/chip8/font.py
"""
組み込みの4x5ピクセル16進フォント。

各グリフは5バイトで、各バイトの上位4ビットが1行分のピクセルです。
"""
from chip8_tracer.transport.bus import Bus

FONT_ADDRESS = 0x050
GLYPH_SIZE = 5

FONT_SET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])

# @intent:responsibility フォントデータをメインメモリの指定アドレスに書き込みます。
def load_font(bus: Bus, base_address: int = FONT_ADDRESS) -> None:
    for offset, data in enumerate(FONT_SET):
        bus.write(base_address + offset, data)
    # ロード時の書き込みは命令サイクルのアクティビティではない
    bus.get_and_clear_activity_log()


def glyph_address(digit: int, base_address: int = FONT_ADDRESS) -> int:
    return base_address + GLYPH_SIZE * (digit & 0xF)
