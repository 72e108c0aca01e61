from typing import Tuple
from chip8_tracer.transport.bus import Bus, RAM
from chip8_tracer.transport.display import DisplayBuffer
from chip8_tracer.transport.keypad import Keypad
from chip8_tracer.arch.chip8.cpu import Chip8Cpu, default_random_source
from chip8_tracer.arch.chip8.font import FONT_SET, load_font
from chip8_tracer.arch.chip8.state import REGISTER_COUNT
from .models import SystemConfig, CpuInitialState

# @intent:responsibility システム構成（Config）に基づいて、Bus、RAM、表示バッファ、キーパッド、CPUを生成・接続し、初期状態を適用します。
class SystemBuilder:
    def build_system(self, config: SystemConfig) -> Tuple[Chip8Cpu, Bus]:
        memory = config.memory
        if memory.font_address < 0 or memory.font_address + len(FONT_SET) > memory.size:
            raise ValueError(f"Font at {memory.font_address:#05x} does not fit in memory of size {memory.size}")

        bus = Bus()
        bus.register_device(0x0000, memory.size - 1, RAM(memory.size))

        display = DisplayBuffer(config.display.width, config.display.height)
        cpu = Chip8Cpu(
            bus,
            display,
            keypad=Keypad(),
            random_source=default_random_source(config.random_seed),
            font_address=memory.font_address,
            program_start=memory.program_start,
        )
        load_font(bus, memory.font_address)

        # 初期状態の適用
        self.apply_initial_state(cpu, config.initial_state)

        return cpu, bus

    # @intent:responsibility Configで定義された初期状態をCPUに適用します。
    def apply_initial_state(self, cpu: Chip8Cpu, config_state: CpuInitialState) -> None:
        """
        CPUをリセットし、Configから指定された初期値を適用します。
        レジスタ名は "V0".."VF", "I", "DT", "ST" です。
        """
        cpu.reset()
        state = cpu.get_state()

        if config_state.pc is not None:
            state.pc = config_state.pc & 0xFFFF

        for reg_name, value in config_state.registers.items():
            if len(reg_name) == 2 and reg_name[0] == "V" and reg_name[1] in "0123456789ABCDEF":
                state.v[int(reg_name[1], 16) % REGISTER_COUNT] = value & 0xFF
            elif reg_name == "I":
                state.i = value & 0xFFFF
            elif reg_name == "DT":
                state.delay_timer = value & 0xFF
            elif reg_name == "ST":
                state.sound_timer = value & 0xFF
            else:
                raise ValueError(f"Unknown register in initial_state: {reg_name}")
