from dataclasses import dataclass, field
from typing import Dict, Optional

from chip8_tracer.arch.chip8.state import PROGRAM_START
from chip8_tracer.arch.chip8.font import FONT_ADDRESS
from chip8_tracer.transport.display import DEFAULT_WIDTH, DEFAULT_HEIGHT

@dataclass
class MemoryConfig:
    size: int = 0x1000
    program_start: int = PROGRAM_START
    font_address: int = FONT_ADDRESS

@dataclass
class DisplayConfig:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT

@dataclass
class TimingConfig:
    cycles_per_tick: int = 10  # 60Hzのタイマー1ティックあたりの命令数

@dataclass
class CpuInitialState:
    pc: Optional[int] = None  # Noneならリセット時の値（0x200）のまま
    registers: Dict[str, int] = field(default_factory=dict)  # "V0".."VF", "I", "DT", "ST"

@dataclass
class SystemConfig:
    memory: MemoryConfig = field(default_factory=MemoryConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    random_seed: Optional[int] = None
    initial_state: CpuInitialState = field(default_factory=CpuInitialState)
