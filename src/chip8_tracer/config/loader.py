import warnings
import yaml
from typing import Dict, Any
from .models import SystemConfig, MemoryConfig, DisplayConfig, TimingConfig, CpuInitialState

KNOWN_SECTIONS = {"memory", "display", "timing", "random_seed", "initial_state"}

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self._parse_config(data or {})

    def _parse_config(self, data: Dict[str, Any]) -> SystemConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Configuration root must be a mapping, got {type(data).__name__}")

        for key in data:
            if key not in KNOWN_SECTIONS:
                warnings.warn(f"Unknown configuration key '{key}' ignored", RuntimeWarning)

        defaults = SystemConfig()

        memory_data = self._section(data, "memory")
        memory = MemoryConfig(
            size=self._parse_int(memory_data.get("size", defaults.memory.size)),
            program_start=self._parse_int(memory_data.get("program_start", defaults.memory.program_start)),
            font_address=self._parse_int(memory_data.get("font_address", defaults.memory.font_address)),
        )
        if memory.size <= 0:
            raise ValueError(f"Invalid memory size: {memory.size}")
        if not 0 <= memory.program_start < memory.size:
            raise ValueError(f"Program start {memory.program_start:#05x} outside memory of size {memory.size}")

        display_data = self._section(data, "display")
        display = DisplayConfig(
            width=self._parse_int(display_data.get("width", defaults.display.width)),
            height=self._parse_int(display_data.get("height", defaults.display.height)),
        )

        timing_data = self._section(data, "timing")
        timing = TimingConfig(
            cycles_per_tick=self._parse_int(timing_data.get("cycles_per_tick", defaults.timing.cycles_per_tick)),
        )
        if timing.cycles_per_tick <= 0:
            raise ValueError(f"cycles_per_tick must be positive: {timing.cycles_per_tick}")

        seed = data.get("random_seed")

        # Parse Initial State
        initial_state_data = self._section(data, "initial_state")
        pc = initial_state_data.get("pc")
        initial_state = CpuInitialState(
            pc=self._parse_int(pc) if pc is not None else None,
            registers={
                str(name).upper(): self._parse_int(value)
                for name, value in self._section(initial_state_data, "registers").items()
            },
        )

        return SystemConfig(
            memory=memory,
            display=display,
            timing=timing,
            random_seed=self._parse_int(seed) if seed is not None else None,
            initial_state=initial_state,
        )

    # @intent:responsibility 指定キーのセクションを取り出します。省略時は空、マッピング以外はValueErrorです。
    def _section(self, data: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = data.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ValueError(f"'{name}' section must be a mapping, got {type(section).__name__}")
        return section

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            value = value.strip()
            try:
                if value.lower().startswith("0x"):
                    return int(value, 16)
                return int(value)
            except ValueError:
                pass
        raise ValueError(f"Invalid integer format: {value}")
