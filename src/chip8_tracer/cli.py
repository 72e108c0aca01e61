# chip8_tracer/cli.py
"""
ヘッドレスのトレーサーのエントリポイント。
システムを構築してROMをロードし、命令サイクルとタイマーティックを駆動しながら
1命令ごとのトレースを出力します。
"""
import argparse
import sys
from typing import List, Optional

from chip8_tracer.common.errors import CpuHaltError
from chip8_tracer.config.builder import SystemBuilder
from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.models import SystemConfig
from chip8_tracer.loader.loader import RomLoader


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chip8-trace", description="Trace a CHIP-8 program headlessly.")
    parser.add_argument("rom", help="Path to a raw CHIP-8 ROM image")
    parser.add_argument("--config", help="YAML system configuration file")
    parser.add_argument("--steps", type=int, default=1000, help="Number of instructions to execute (default: 1000)")
    parser.add_argument("--quiet", action="store_true", help="Do not print a trace line per instruction")
    parser.add_argument("--dump-registers", action="store_true", help="Print the registers after the run")
    parser.add_argument("--disassemble", action="store_true", help="Print a listing of the ROM and exit")
    return parser


# @intent:responsibility コマンドライン引数を解釈して実行し、終了コードを返します。
def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = ConfigLoader().load_from_file(args.config) if args.config else SystemConfig()
        cpu, bus = SystemBuilder().build_system(config)
        rom_size = RomLoader().load_rom(args.rom, bus, config.memory.program_start)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.disassemble:
        for address, hex_word, text in cpu.disassemble(config.memory.program_start, rom_size):
            print(f"{address:04X}  {hex_word}  {text}")
        return 0

    cycles_per_tick = config.timing.cycles_per_tick
    exit_code = 0
    try:
        for step in range(args.steps):
            snapshot = cpu.step()
            if not args.quiet:
                print(snapshot.metadata.symbol_info)
            if (step + 1) % cycles_per_tick == 0:
                cpu.tick_timers()
    except CpuHaltError as e:
        print(f"CPU halted: {e}", file=sys.stderr)
        exit_code = 1

    if args.dump_registers:
        registers = cpu.get_register_map()
        print(" ".join(f"{name}={value:02X}" for name, value in registers.items()))

    return exit_code


if __name__ == '__main__':
    sys.exit(main())
