# src/chip8_tracer/arch/chip8/instructions/alu.py
"""
データ転送・算術論理演算命令の実装（6xkk, 7xkk, 8xy*, Annn, Cxkk）。

フラグを定義する命令は、結果をVxに書いた後でVFにフラグを書き込みます。
x = F の場合でもVFには必ずフラグが残ります。
"""
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8CpuState
from .base import Peripherals, x_of, y_of, kk_of, nnn_of

# --- LD Vx, byte (6xkk) ---
def execute_ld_byte(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    state.v[x_of(op.opcode)] = kk_of(op.opcode)

# --- ADD Vx, byte (7xkk) ---
# @intent:responsibility 即値を加算します。キャリーは破棄され、VFは変化しません。
def execute_add_byte(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    x = x_of(op.opcode)
    state.v[x] = (state.v[x] + kk_of(op.opcode)) & 0xFF

# --- LD Vx, Vy (8xy0) ---
def execute_ld_reg(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    state.v[x_of(op.opcode)] = state.v[y_of(op.opcode)]

# --- OR Vx, Vy (8xy1) ---
def execute_or(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    state.v[x_of(op.opcode)] |= state.v[y_of(op.opcode)]

# --- AND Vx, Vy (8xy2) ---
def execute_and(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    state.v[x_of(op.opcode)] &= state.v[y_of(op.opcode)]

# --- XOR Vx, Vy (8xy3) ---
def execute_xor(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    state.v[x_of(op.opcode)] ^= state.v[y_of(op.opcode)]

# --- ADD Vx, Vy (8xy4) ---
# @intent:responsibility 加算し、8bitを超えた場合にVF=1（キャリー）とします。
def execute_add_reg(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    x = x_of(op.opcode)
    res = state.v[x] + state.v[y_of(op.opcode)]
    state.v[x] = res & 0xFF
    state.vf = 1 if res > 0xFF else 0

# --- SUB Vx, Vy (8xy5) ---
# @intent:responsibility Vx - Vy。ボローが発生しない場合（Vx >= Vy）にVF=1とします。
def execute_sub(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    x = x_of(op.opcode)
    v1, v2 = state.v[x], state.v[y_of(op.opcode)]
    state.v[x] = (v1 - v2) & 0xFF
    state.vf = 1 if v1 >= v2 else 0

# --- SHR Vx (8xy6) ---
# @intent:responsibility Vxを右シフトし、押し出された最下位ビットをVFに格納します。
def execute_shr(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    x = x_of(op.opcode)
    v1 = state.v[x]
    state.v[x] = v1 >> 1
    state.vf = v1 & 0x01

# --- SUBN Vx, Vy (8xy7) ---
# @intent:responsibility Vy - Vx。ボローが発生しない場合（Vy >= Vx）にVF=1とします。
def execute_subn(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    x = x_of(op.opcode)
    v1, v2 = state.v[x], state.v[y_of(op.opcode)]
    state.v[x] = (v2 - v1) & 0xFF
    state.vf = 1 if v2 >= v1 else 0

# --- SHL Vx (8xyE) ---
# @intent:responsibility Vxを左シフトし、押し出された最上位ビットをVFに格納します。
def execute_shl(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    x = x_of(op.opcode)
    v1 = state.v[x]
    state.v[x] = (v1 << 1) & 0xFF
    state.vf = (v1 & 0x80) >> 7

# --- LD I, addr (Annn) ---
def execute_ld_i(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    state.i = nnn_of(op.opcode)

# --- RND Vx, byte (Cxkk) ---
def execute_rnd(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    state.v[x_of(op.opcode)] = (io.random_byte() & 0xFF) & kk_of(op.opcode)
