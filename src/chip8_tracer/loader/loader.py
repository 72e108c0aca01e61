# chip8_tracer/loader/loader.py
"""
コードローダーモジュール。
CHIP-8のROMイメージ（生バイナリ）をメインメモリのプログラム領域にロードします。
"""
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import PROGRAM_START

class RomLoader:
    """
    生バイナリ形式のROMイメージを解析し、データをバスにロードするローダー。
    """
    # @intent:responsibility ファイルからROMイメージを読み込み、バスに書き込みます。
    # @intent:return ロードしたバイト数。
    def load_rom(self, file_path: str, bus: Bus, start_address: int = PROGRAM_START) -> int:
        with open(file_path, 'rb') as f:
            data = f.read()
        if not data:
            raise ValueError(f"ROM image is empty: {file_path}")
        return self.load_bytes(data, bus, start_address)

    # @intent:responsibility バイト列を指定アドレスから順にバスに書き込みます。
    # @intent:pre-condition イメージ全体がマップされた領域に収まる必要があります。
    def load_bytes(self, data: bytes, bus: Bus, start_address: int = PROGRAM_START) -> int:
        end_address = start_address + len(data)
        mapped_end = bus.get_mapped_end()
        if end_address > mapped_end:
            raise ValueError(
                f"ROM image of {len(data)} bytes at {start_address:#05x} does not fit in memory "
                f"(ends at {end_address:#05x}, memory ends at {mapped_end:#05x})"
            )

        for offset, byte_data in enumerate(data):
            bus.write(start_address + offset, byte_data)
        # ロード時の書き込みは命令サイクルのアクティビティではない
        bus.get_and_clear_activity_log()
        return len(data)
