# src/chip8_tracer/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。

execute_*が呼ばれる時点で、PCはフェッチにより次の命令を指しています。
"""
from chip8_tracer.common.errors import StackOverflowError, StackUnderflowError
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8CpuState, STACK_DEPTH
from .base import Peripherals, skip_if, x_of, y_of, kk_of, nnn_of

# --- RET (00EE) ---
# @intent:responsibility スタックから戻りアドレスをポップしてPCに設定します。
def execute_ret(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    if state.sp == 0:
        raise StackUnderflowError(f"RET with empty stack at {(state.pc - 2) & 0xFFFF:#05x}")
    state.sp -= 1
    state.pc = state.stack[state.sp]

# --- JP addr (1nnn) ---
def execute_jp(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    state.pc = nnn_of(op.opcode)

# --- CALL addr (2nnn) ---
# @intent:responsibility 戻りアドレス（CALLの次の命令）をプッシュしてからジャンプします。
# @intent:pre-condition スタックの深さはSTACK_DEPTH未満である必要があります。
def execute_call(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    if state.sp >= STACK_DEPTH:
        raise StackOverflowError(
            f"CALL ${nnn_of(op.opcode):03X} with full stack (depth {STACK_DEPTH}) at {(state.pc - 2) & 0xFFFF:#05x}"
        )
    state.stack[state.sp] = state.pc
    state.sp += 1
    state.pc = nnn_of(op.opcode)

# --- SE Vx, byte (3xkk) ---
def execute_se_byte(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    skip_if(state, state.v[x_of(op.opcode)] == kk_of(op.opcode))

# --- SNE Vx, byte (4xkk) ---
def execute_sne_byte(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    skip_if(state, state.v[x_of(op.opcode)] != kk_of(op.opcode))

# --- SE Vx, Vy (5xy0) ---
def execute_se_reg(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    skip_if(state, state.v[x_of(op.opcode)] == state.v[y_of(op.opcode)])

# --- SNE Vx, Vy (9xy0) ---
def execute_sne_reg(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    skip_if(state, state.v[x_of(op.opcode)] != state.v[y_of(op.opcode)])

# --- JP V0, addr (Bnnn) ---
# @intent:responsibility nnn + V0 へジャンプします。範囲外になった場合は次のフェッチで検出されます。
def execute_jp_v0(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Operation) -> None:
    state.pc = (nnn_of(op.opcode) + state.v[0]) & 0xFFFF
