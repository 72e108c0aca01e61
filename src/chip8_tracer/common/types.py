"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用される汎用的な型エイリアスなどを定義します。
"""
from typing import Callable, List, NamedTuple

from chip8_tracer.common.errors import UnknownInstructionError

# @intent:data_structure 乱数バイト（0-255）を1つ返す関数の型エイリアス。
RandomSource = Callable[[], int]

# @intent:data_structure 未知命令を報告するコールバックの型エイリアス。
UnknownInstructionHandler = Callable[[UnknownInstructionError], None]

# @intent:data_structure 単一のレジスタの表示定義。トレース出力などが動的にフィールドを生成するために使用される。
class RegisterInfo(NamedTuple):
    name: str
    width: int  # ビット幅 (8 or 16)

# @intent:data_structure レジスタグループの表示定義。関連するレジスタ（例: "General", "Timers"）をまとめる。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]
