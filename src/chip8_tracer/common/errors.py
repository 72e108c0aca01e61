"""
共通の例外定義を提供するモジュール。

致命的なエラー（CPUを停止させるもの）と、報告のみで実行を継続できる
未知命令の通知を区別します。
"""


# @intent:responsibility このパッケージが送出する全ての例外の基底クラスです。
class Chip8Error(Exception):
    """CHIP-8コアに関するエラーの基底クラス。"""


# @intent:responsibility 未知の命令語を表します。CPUはこれを送出せず、フックに渡して実行を継続します。
class UnknownInstructionError(Chip8Error):
    """
    デコードできなかった命令語。
    未知命令フックに渡される報告用オブジェクトであり、実行は継続されます。
    """
    def __init__(self, opcode: int, address: int):
        self.opcode = opcode
        self.address = address
        super().__init__(f"Unknown instruction {opcode:04X} at {address:#05x}")


# @intent:responsibility インタプリタを停止させる致命的なエラーの基底クラスです。
class CpuHaltError(Chip8Error):
    """CPUを停止させる致命的なエラー。reset()まで実行を再開できません。"""


class StackOverflowError(CpuHaltError):
    """スタックが満杯の状態でCALLが実行された。"""


class StackUnderflowError(CpuHaltError):
    """スタックが空の状態でRETが実行された。"""


# @intent:responsibility 範囲外のメモリアクセスを表します。
# @intent:rationale IndexErrorを継承し、既存の境界チェックの捕捉方法と互換にします。
class MemoryAccessError(CpuHaltError, IndexError):
    """メモリ容量の範囲外のアドレスへのアクセス。"""
