# tests/debugger/test_debugger.py
"""
chip8_tracer.debugger.debuggerモジュールの単体テスト。
Debuggerの実行制御、ブレークポイント管理、および条件チェック機能を検証します。
"""
import pytest
from unittest.mock import patch

from chip8_tracer.common.errors import StackUnderflowError
from chip8_tracer.transport.bus import Bus, RAM
from chip8_tracer.transport.display import DisplayBuffer
from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.debugger.debugger import Debugger, BreakpointCondition, BreakpointConditionType

# @intent:test_suite デバッガのブレークポイントと実行制御機能の検証。

# 0x200: LD V0, #$01
# 0x202: ADD V0, #$01
# 0x204: LD I, $300
# 0x206: LD [I], V0
# 0x208: JP $202
PROGRAM = [0x6001, 0x7001, 0xA300, 0xF055, 0x1202]

class TestDebugger:
    """
    Debuggerの単体テスト。
    """
    @pytest.fixture
    def setup_debugger(self):
        bus = Bus()
        bus.register_device(0x0000, 0x0FFF, RAM(0x1000))
        for offset, word in enumerate(PROGRAM):
            bus.write(0x200 + 2 * offset, word >> 8)
            bus.write(0x200 + 2 * offset + 1, word & 0xFF)
        bus.get_and_clear_activity_log()
        cpu = Chip8Cpu(bus, DisplayBuffer())
        debugger = Debugger(cpu)
        return debugger, cpu, bus

    # @intent:test_case_add_remove_breakpoint ブレークポイントの追加と削除が正しく行われることを検証します。
    def test_add_remove_breakpoint(self, setup_debugger):
        debugger, _, _ = setup_debugger
        bp1 = BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x204)
        bp2 = BreakpointCondition(BreakpointConditionType.MEMORY_WRITE, address=0x300)

        debugger.add_breakpoint(bp1)
        debugger.add_breakpoint(bp2)
        debugger.add_breakpoint(bp1) # 重複追加は無視される
        assert debugger.get_breakpoints() == [bp1, bp2]

        debugger.remove_breakpoint(bp1)
        debugger.remove_breakpoint(bp1) # 存在しないブレークポイントの削除はエラーにならない
        assert debugger.get_breakpoints() == [bp2]

    def test_update_breakpoint(self, setup_debugger):
        debugger, _, _ = setup_debugger
        bp = BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x204)
        disabled = BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x204, enabled=False)
        debugger.add_breakpoint(bp)
        debugger.update_breakpoint(bp, disabled)
        assert debugger.get_breakpoints() == [disabled]

    # @intent:test_case_step_instruction step_instructionがcpu.stepを呼び出し、履歴に記録することを検証します。
    def test_step_instruction(self, setup_debugger):
        debugger, cpu, _ = setup_debugger
        snapshot = debugger.step_instruction()
        assert snapshot.state.pc == 0x202
        assert snapshot.state.v[0] == 0x01
        assert debugger.get_last_snapshot() is snapshot
        assert debugger.get_history() == [snapshot]

        with patch.object(cpu, 'step', wraps=cpu.step) as mock_step:
            debugger.step_instruction()
            mock_step.assert_called_once()
        assert len(debugger.get_history()) == 2

    # @intent:test_case_run_pc_match PC_MATCHブレークポイントで実行が中断されることを検証します。
    def test_run_pc_match(self, setup_debugger, capsys):
        debugger, cpu, _ = setup_debugger
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x206))

        steps = debugger.run()

        assert steps == 3
        assert cpu.get_state().pc == 0x206
        assert debugger.is_running() is False
        assert "Breakpoint hit at PC: 0x0206" in capsys.readouterr().out

    # @intent:test_case_run_resume 現在のPCにブレークポイントがある場合でも、再開時は1命令進むことを検証します。
    def test_run_resumes_past_current_breakpoint(self, setup_debugger):
        debugger, cpu, _ = setup_debugger
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x202))
        assert debugger.run() == 1
        # 0x202 -> 0x204 -> 0x206 -> 0x208 -> 0x202
        assert debugger.run() == 4
        assert cpu.get_state().pc == 0x202

    def test_disabled_breakpoint_is_ignored(self, setup_debugger):
        debugger, _, _ = setup_debugger
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x206, enabled=False))
        assert debugger.run(max_steps=10) == 10

    def test_run_max_steps(self, setup_debugger):
        debugger, cpu, _ = setup_debugger
        assert debugger.run(max_steps=0) == 0
        assert cpu.get_state().pc == 0x200
        assert debugger.run(max_steps=2) == 2
        assert cpu.get_state().pc == 0x204

    def test_run_max_steps_zero_with_breakpoint_at_pc(self, setup_debugger):
        debugger, cpu, _ = setup_debugger
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x200))
        assert debugger.run(max_steps=0) == 0
        assert cpu.get_state().pc == 0x200

    # @intent:test_case_memory_write MEMORY_WRITEブレークポイントが書き込み命令の直後で中断させることを検証します。
    def test_memory_write_breakpoint(self, setup_debugger):
        debugger, cpu, _ = setup_debugger
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.MEMORY_WRITE, address=0x300))
        steps = debugger.run(max_steps=100)
        assert steps == 4
        assert cpu.get_state().pc == 0x208

    def test_memory_read_breakpoint(self, setup_debugger):
        debugger, _, _ = setup_debugger
        # 0x204番地の命令フェッチで読み込まれる
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.MEMORY_READ, address=0x205))
        assert debugger.run(max_steps=100) == 3

    def test_register_value_breakpoint(self, setup_debugger):
        debugger, cpu, _ = setup_debugger
        debugger.add_breakpoint(
            BreakpointCondition(BreakpointConditionType.REGISTER_VALUE, register_name="V0", value=0x03)
        )
        debugger.run(max_steps=100)
        assert cpu.get_state().v[0] == 0x03

    def test_register_change_breakpoint(self, setup_debugger):
        debugger, cpu, _ = setup_debugger
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.REGISTER_CHANGE, register_name="I"))
        assert debugger.run(max_steps=100) == 3
        assert cpu.get_state().i == 0x300

    def test_fatal_error_propagates(self, setup_debugger):
        debugger, cpu, bus = setup_debugger
        bus.write(0x200, 0x00)
        bus.write(0x201, 0xEE) # RET with empty stack
        with pytest.raises(StackUnderflowError):
            debugger.run(max_steps=10)
        assert debugger.is_running() is False
        assert cpu.get_state().halted is True

    def test_stop(self, setup_debugger):
        debugger, _, _ = setup_debugger
        original_step = debugger.step_instruction

        def step_and_stop():
            snapshot = original_step()
            debugger.stop()
            return snapshot

        with patch.object(debugger, 'step_instruction', side_effect=step_and_stop):
            assert debugger.run() == 1
