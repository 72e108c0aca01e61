# src/chip8_tracer/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。

このモジュールはCHIP-8 CPUの具体的な実装を提供し、
AbstractCpuインターフェースを実装します。
"""
import random
import warnings
from typing import Dict, List, Optional, Tuple

from chip8_tracer.common.errors import UnknownInstructionError
from chip8_tracer.common.types import (
    RandomSource, RegisterInfo, RegisterLayoutInfo, UnknownInstructionHandler,
)
from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.transport.bus import Bus
from chip8_tracer.transport.display import DisplayBuffer
from chip8_tracer.transport.keypad import Keypad
from chip8_tracer.arch.chip8.state import Chip8CpuState, REGISTER_COUNT, PROGRAM_START
from chip8_tracer.arch.chip8.font import FONT_ADDRESS
from chip8_tracer.arch.chip8.instructions import decode_opcode, execute_instruction
from chip8_tracer.arch.chip8.instructions.base import Peripherals
from chip8_tracer.arch.chip8 import disassembler


# @intent:responsibility 未知命令のデフォルトの報告先。RuntimeWarningとして通知し、実行は継続します。
def warn_unknown_instruction(error: UnknownInstructionError) -> None:
    with warnings.catch_warnings():
        # 同じ位置からの同一メッセージも毎回表示する
        warnings.simplefilter("always", RuntimeWarning)
        warnings.warn(str(error), RuntimeWarning, stacklevel=2)


def default_random_source(seed: Optional[int] = None) -> RandomSource:
    rng = random.Random(seed)
    return lambda: rng.randrange(0x100)


# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 CPUをエミュレートするクラス。
    メインメモリ（Bus）と表示バッファの2つのメモリを参照しますが、その寿命は所有しません。
    """
    # @intent:pre-condition `bus`にはフェッチ対象のメインメモリがマップされている必要があります。
    def __init__(
        self,
        bus: Bus,
        display: DisplayBuffer,
        keypad: Optional[Keypad] = None,
        random_source: Optional[RandomSource] = None,
        font_address: int = FONT_ADDRESS,
        program_start: int = PROGRAM_START,
    ):
        # _create_initial_stateはsuper().__init__から呼ばれるため先に設定する
        self._program_start = program_start
        super().__init__(bus)
        self._io = Peripherals(
            display=display,
            keypad=keypad if keypad is not None else Keypad(),
            random_byte=random_source if random_source is not None else default_random_source(),
            font_address=font_address,
        )
        self._unknown_instruction_handler: UnknownInstructionHandler = warn_unknown_instruction

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState(pc=self._program_start)

    # @intent:responsibility 未知命令の報告先を差し替えます。
    def set_unknown_instruction_handler(self, handler: UnknownInstructionHandler) -> None:
        self._unknown_instruction_handler = handler

    @property
    def keypad(self) -> Keypad:
        return self._io.keypad

    # @intent:responsibility PCから2バイトを読み、上位バイトを先頭とする16bit命令語を組み立ててPCを2進めます。
    # @intent:post-condition 範囲外のPCはメモリのMemoryAccessErrorとしてそのまま送出されます。
    def _fetch(self) -> int:
        pc = self._state.pc
        opcode = (self._bus.read(pc) << 8) | self._bus.read(pc + 1)
        self._state.opcode = opcode
        self._state.pc = (pc + 2) & 0xFFFF
        return opcode

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode)

    # @intent:responsibility Operationを実行し、未知命令であれば報告のみ行います。
    def _execute(self, operation: Operation) -> None:
        if not execute_instruction(operation, self._state, self._bus, self._io):
            address = (self._state.pc - operation.length) & 0xFFFF
            self._unknown_instruction_handler(UnknownInstructionError(operation.opcode, address))

    # @intent:responsibility 遅延タイマーとサウンドタイマーを1ずつ減らします（0未満にはなりません）。
    # @intent:rationale 命令の実行速度とは独立に、外部ドライバが実時間（通常60Hz）で呼び出します。
    def tick_timers(self) -> None:
        state = self._state
        if state.delay_timer > 0:
            state.delay_timer -= 1
        if state.sound_timer > 0:
            state.sound_timer -= 1

    def is_sound_active(self) -> bool:
        return self._state.sound_timer > 0

    # @intent:responsibility 描画側に表示バッファの内容を読み取り専用で提供します。
    def get_display(self) -> bytes:
        return self._io.display.frame()

    def get_display_size(self) -> Tuple[int, int]:
        return self._io.display.width, self._io.display.height

    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        registers = {f"V{index:X}": s.v[index] for index in range(REGISTER_COUNT)}
        registers.update({
            "I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer
        })
        return registers

    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{index:X}", 8) for index in range(REGISTER_COUNT)]),
            RegisterLayoutInfo("Index/Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]

    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        return disassembler.disassemble(self._bus, start_addr, length)
