# chip8_tracer/transport/keypad.py
"""
16キーの16進キーパッド。

ホスト側の入力ポーリングはこのモジュールの責務ではありません。
ホストがpress/releaseで状態を更新し、CPUはis_key_pressedで同期的に参照します。
"""
from typing import List

KEY_COUNT = 16

# @intent:responsibility キーパッドの現在の押下状態を保持します。
class Keypad:
    def __init__(self):
        self._pressed: List[bool] = [False] * KEY_COUNT

    def _check_key(self, key: int) -> None:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"Key {key} is not a valid key index (0-15).")

    def press(self, key: int) -> None:
        self._check_key(key)
        self._pressed[key] = True

    def release(self, key: int) -> None:
        self._check_key(key)
        self._pressed[key] = False

    def release_all(self) -> None:
        self._pressed = [False] * KEY_COUNT

    def is_key_pressed(self, key: int) -> bool:
        self._check_key(key)
        return self._pressed[key]
