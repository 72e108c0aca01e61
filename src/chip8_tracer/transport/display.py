# chip8_tracer/transport/display.py
"""
Transport Layer (表示バッファ)

メインメモリとは独立した、1ピクセル1バイトの表示用メモリを提供します。
画面への描画はこのモジュールの責務ではありません。
"""
from typing import List

from chip8_tracer.transport.bus import RAM

DEFAULT_WIDTH = 64
DEFAULT_HEIGHT = 32

# @intent:responsibility ピクセル単位のXOR合成と、描画側への読み取り専用ビューを提供します。
class DisplayBuffer(RAM):
    """
    width x height の1bitピクセルを、1セル1バイト（0 or 1）で保持する表示バッファ。
    セルのアドレスは y * width + x です。
    """
    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT):
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid display size {width}x{height}.")
        super().__init__(width * height)
        self.width = width
        self.height = height

    def get_pixel(self, x: int, y: int) -> int:
        return self.read(y * self.width + x)

    # @intent:responsibility 座標のピクセルを反転し、点灯していたピクセルが消えたかどうかを返します。
    # @intent:pre-condition 座標は呼び出し側でラップアラウンド済みである必要があります。
    def xor_pixel(self, x: int, y: int) -> bool:
        address = y * self.width + x
        previous = self.read(address)
        self.write(address, previous ^ 1)
        return previous == 1

    # @intent:responsibility 現在のバッファ内容を不変のバイト列として返します。
    def frame(self) -> bytes:
        return bytes(self._memory)

    def rows(self) -> List[List[int]]:
        return [
            list(self._memory[row * self.width:(row + 1) * self.width])
            for row in range(self.height)
        ]
