# src/chip8_tracer/arch/chip8/instructions/misc.py
"""
キー入力、タイマー、インデックス、フォント、メモリブロック命令（Ex**, Fx**）の実装。
"""
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.transport.bus import Bus
from chip8_tracer.transport.keypad import KEY_COUNT
from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.font import glyph_address
from .base import Peripherals, skip_if, x_of

# --- SKP Vx (Ex9E) ---
def execute_skp(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    key = state.v[x_of(op.opcode)] & 0xF
    skip_if(state, io.keypad.is_key_pressed(key))

# --- SKNP Vx (ExA1) ---
def execute_sknp(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    key = state.v[x_of(op.opcode)] & 0xF
    skip_if(state, not io.keypad.is_key_pressed(key))

# --- LD Vx, DT (Fx07) ---
def execute_ld_vx_dt(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    state.v[x_of(op.opcode)] = state.delay_timer

# --- LD Vx, K (Fx0A) ---
# @intent:responsibility キーが押されていればその番号（最小のもの）をVxに格納します。
# @intent:rationale 押されていなければPCを2戻し、次のサイクルで同じ命令を再フェッチします。
#                  これにより1サイクルは常にアトミックに完了し、サイクルをまたぐ中間状態を持ちません。
def execute_ld_vx_k(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    for key in range(KEY_COUNT):
        if io.keypad.is_key_pressed(key):
            state.v[x_of(op.opcode)] = key
            return
    state.pc = (state.pc - 2) & 0xFFFF

# --- LD DT, Vx (Fx15) ---
def execute_ld_dt_vx(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    state.delay_timer = state.v[x_of(op.opcode)]

# --- LD ST, Vx (Fx18) ---
def execute_ld_st_vx(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    state.sound_timer = state.v[x_of(op.opcode)]

# --- ADD I, Vx (Fx1E) ---
# Iは16bitレジスタ。VFは変化しない
def execute_add_i_vx(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    state.i = (state.i + state.v[x_of(op.opcode)]) & 0xFFFF

# --- LD F, Vx (Fx29) ---
def execute_ld_f_vx(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    state.i = glyph_address(state.v[x_of(op.opcode)], io.font_address)

# --- LD B, Vx (Fx33) ---
# @intent:responsibility Vxの10進表記の百/十/一の位を I, I+1, I+2 に格納します。
def execute_ld_b_vx(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    value = state.v[x_of(op.opcode)]
    bus.write(state.i, value // 100)
    bus.write(state.i + 1, (value // 10) % 10)
    bus.write(state.i + 2, value % 10)

# --- LD [I], Vx (Fx55) ---
# @intent:responsibility V0..Vx を I から始まるメモリに格納します。Iは変化しません。
def execute_ld_mem_vx(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    for k in range(x_of(op.opcode) + 1):
        bus.write(state.i + k, state.v[k])

# --- LD Vx, [I] (Fx65) ---
# @intent:responsibility I から始まるメモリを V0..Vx に読み込みます。Iは変化しません。
def execute_ld_vx_mem(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    for k in range(x_of(op.opcode) + 1):
        state.v[k] = bus.read(state.i + k)
