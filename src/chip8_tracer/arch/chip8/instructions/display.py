# src/chip8_tracer/arch/chip8/instructions/display.py
"""
表示バッファ操作命令（00E0, Dxyn）の実装。
"""
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8CpuState
from .base import Peripherals, x_of, y_of, n_of

# --- CLS (00E0) ---
def execute_cls(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    io.display.clear()

# --- DRW Vx, Vy, n (Dxyn) ---
# @intent:responsibility Iが指すnバイトのスプライトを(Vx, Vy)にXOR合成し、衝突の有無をVFに格納します。
# @intent:rationale 各バイトは8ピクセル（MSBが左端）。座標は表示バッファの幅/高さでラップアラウンドします。
def execute_drw(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    display = io.display
    origin_x = state.v[x_of(op.opcode)]
    origin_y = state.v[y_of(op.opcode)]

    collision = False
    for row in range(n_of(op.opcode)):
        sprite_byte = bus.read(state.i + row)
        py = (origin_y + row) % display.height
        for col in range(8):
            if sprite_byte & (0x80 >> col):
                px = (origin_x + col) % display.width
                if display.xor_pixel(px, py):
                    collision = True

    state.vf = 1 if collision else 0
