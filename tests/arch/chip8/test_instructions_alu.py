import unittest
from chip8_tracer.transport.bus import Bus, RAM
from chip8_tracer.transport.display import DisplayBuffer
from chip8_tracer.arch.chip8.cpu import Chip8Cpu

class TestChip8AluInstructions(unittest.TestCase):
    def setUp(self):
        self.bus = Bus()
        self.bus.register_device(0x0000, 0x0FFF, RAM(0x1000))
        self.random_values = [0xFF]
        self.cpu = Chip8Cpu(self.bus, DisplayBuffer(), random_source=lambda: self.random_values.pop(0))
        self.state = self.cpu.get_state()

    def _execute(self, opcode, current_pc=0x200):
        self.bus.write(current_pc, opcode >> 8)
        self.bus.write(current_pc + 1, opcode & 0xFF)
        self.state.pc = current_pc
        return self.cpu.step()

    def test_ld_byte(self):
        self._execute(0x6A2B)
        self.assertEqual(self.state.v[0xA], 0x2B)
        self.assertEqual(self.state.pc, 0x202)

    def test_add_byte_wraps_without_flag(self):
        self.state.v[1] = 0xFF
        self.state.vf = 0x55
        self._execute(0x7102)
        self.assertEqual(self.state.v[1], 0x01)
        self.assertEqual(self.state.vf, 0x55)

    def test_logical_ops(self):
        self.state.v[1] = 0b1100
        self.state.v[2] = 0b1010
        self._execute(0x8121)
        self.assertEqual(self.state.v[1], 0b1110)
        self.state.v[1] = 0b1100
        self._execute(0x8122)
        self.assertEqual(self.state.v[1], 0b1000)
        self.state.v[1] = 0b1100
        self._execute(0x8123)
        self.assertEqual(self.state.v[1], 0b0110)
        self._execute(0x8120)
        self.assertEqual(self.state.v[1], 0b1010)

    def test_add_reg_carry(self):
        # 0xFF + 0x01 -> 0x00, VF=1
        self.state.v[1] = 0xFF
        self.state.v[2] = 0x01
        self._execute(0x8124)
        self.assertEqual(self.state.v[1], 0x00)
        self.assertEqual(self.state.vf, 1)

        self.state.v[1] = 0x10
        self._execute(0x8124)
        self.assertEqual(self.state.v[1], 0x11)
        self.assertEqual(self.state.vf, 0)

    def test_sub(self):
        # 0x05 - 0x03 -> 0x02, VF=1
        self.state.v[1] = 0x05
        self.state.v[2] = 0x03
        self._execute(0x8125)
        self.assertEqual(self.state.v[1], 0x02)
        self.assertEqual(self.state.vf, 1)

        # 0x03 - 0x05 -> 0xFE, VF=0
        self.state.v[1] = 0x03
        self.state.v[2] = 0x05
        self._execute(0x8125)
        self.assertEqual(self.state.v[1], 0xFE)
        self.assertEqual(self.state.vf, 0)

    def test_sub_equal_operands_sets_no_borrow(self):
        self.state.v[1] = 0x07
        self.state.v[2] = 0x07
        self._execute(0x8125)
        self.assertEqual(self.state.v[1], 0x00)
        self.assertEqual(self.state.vf, 1)

    def test_subn(self):
        self.state.v[1] = 0x03
        self.state.v[2] = 0x05
        self._execute(0x8127)
        self.assertEqual(self.state.v[1], 0x02)
        self.assertEqual(self.state.vf, 1)

        self.state.v[1] = 0x05
        self.state.v[2] = 0x03
        self._execute(0x8127)
        self.assertEqual(self.state.v[1], 0xFE)
        self.assertEqual(self.state.vf, 0)

    def test_shr(self):
        # 0x05 -> 0x02, VF=1
        self.state.v[1] = 0x05
        self._execute(0x8106)
        self.assertEqual(self.state.v[1], 0x02)
        self.assertEqual(self.state.vf, 1)
        self._execute(0x8106)
        self.assertEqual(self.state.v[1], 0x01)
        self.assertEqual(self.state.vf, 0)

    def test_shl(self):
        self.state.v[1] = 0x81
        self._execute(0x810E)
        self.assertEqual(self.state.v[1], 0x02)
        self.assertEqual(self.state.vf, 1)
        self._execute(0x810E)
        self.assertEqual(self.state.v[1], 0x04)
        self.assertEqual(self.state.vf, 0)

    def test_flag_wins_when_destination_is_vf(self):
        # ADD VF, V1: 0xFF + 0x02 -> result overwritten by carry flag
        self.state.vf = 0xFF
        self.state.v[1] = 0x02
        self._execute(0x8F14)
        self.assertEqual(self.state.vf, 1)

        self.state.vf = 0x02
        self._execute(0x8F06)
        self.assertEqual(self.state.vf, 0)

    def test_ld_i(self):
        self._execute(0xA123)
        self.assertEqual(self.state.i, 0x123)

    def test_rnd_masks_random_byte(self):
        self._execute(0xC30F)
        self.assertEqual(self.state.v[3], 0x0F)

        self.random_values.append(0xAB)
        self._execute(0xC300)
        self.assertEqual(self.state.v[3], 0x00)

if __name__ == '__main__':
    unittest.main()
