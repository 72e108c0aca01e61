import unittest
from chip8_tracer.transport.bus import Bus, RAM
from chip8_tracer.transport.display import DisplayBuffer
from chip8_tracer.arch.chip8.cpu import Chip8Cpu

class TestChip8DisplayInstructions(unittest.TestCase):
    def setUp(self):
        self.bus = Bus()
        self.bus.register_device(0x0000, 0x0FFF, RAM(0x1000))
        self.display = DisplayBuffer()
        self.cpu = Chip8Cpu(self.bus, self.display)
        self.state = self.cpu.get_state()

    def _execute(self, opcode, current_pc=0x200):
        self.bus.write(current_pc, opcode >> 8)
        self.bus.write(current_pc + 1, opcode & 0xFF)
        self.state.pc = current_pc
        return self.cpu.step()

    def _load_sprite(self, address, rows):
        for offset, data in enumerate(rows):
            self.bus.write(address + offset, data)
        self.state.i = address

    def test_drw_sets_pixels_msb_first(self):
        self._load_sprite(0x300, [0b10000001])
        self.state.v[0] = 10
        self.state.v[1] = 5
        self._execute(0xD011)
        self.assertEqual(self.display.get_pixel(10, 5), 1)
        self.assertEqual(self.display.get_pixel(17, 5), 1)
        self.assertEqual(self.display.get_pixel(11, 5), 0)
        self.assertEqual(self.state.vf, 0)

    def test_drw_twice_erases_and_reports_collision(self):
        self._load_sprite(0x300, [0xF0, 0x90, 0xF0])
        self._execute(0xD013)
        self.assertEqual(self.state.vf, 0)
        self.assertEqual(sum(self.cpu.get_display()), 10)

        self._execute(0xD013)
        self.assertEqual(self.state.vf, 1)
        self.assertEqual(self.cpu.get_display(), bytes(64 * 32))

    def test_drw_wraps_around_edges(self):
        self._load_sprite(0x300, [0xFF, 0xFF])
        self.state.v[2] = 60
        self.state.v[3] = 31
        self._execute(0xD232)
        # columns 60..63 and 0..3, rows 31 and 0
        for x in (60, 63, 0, 3):
            self.assertEqual(self.display.get_pixel(x, 31), 1)
            self.assertEqual(self.display.get_pixel(x, 0), 1)
        self.assertEqual(self.display.get_pixel(4, 31), 0)

    def test_drw_zero_rows(self):
        self.state.vf = 1
        snapshot = self._execute(0xD010)
        self.assertEqual(self.state.vf, 0)
        self.assertEqual(self.cpu.get_display(), bytes(64 * 32))
        # fetchの2バイトのみ
        self.assertEqual(len(snapshot.bus_activity), 2)

    def test_drw_reads_sprite_through_bus(self):
        self._load_sprite(0x300, [0x80, 0x80])
        snapshot = self._execute(0xD012)
        read_addresses = [access.address for access in snapshot.bus_activity]
        self.assertEqual(read_addresses, [0x200, 0x201, 0x300, 0x301])

    def test_cls(self):
        self.display.xor_pixel(1, 1)
        self.display.xor_pixel(63, 31)
        self._execute(0x00E0)
        self.assertEqual(self.cpu.get_display(), bytes(64 * 32))
        self.assertEqual(self.state.pc, 0x202)

    def test_custom_display_size(self):
        bus = Bus()
        bus.register_device(0x0000, 0x0FFF, RAM(0x1000))
        display = DisplayBuffer(16, 8)
        cpu = Chip8Cpu(bus, display)
        self.assertEqual(cpu.get_display_size(), (16, 8))
        bus.write(0x300, 0x80)
        bus.write(0x200, 0xA3)
        bus.write(0x201, 0x00)
        bus.write(0x202, 0xD0)
        bus.write(0x203, 0x11)
        cpu.get_state().v[0] = 17 # 17 % 16 == 1
        cpu.get_state().v[1] = 9  # 9 % 8 == 1
        cpu.step()
        cpu.step()
        self.assertEqual(display.get_pixel(1, 1), 1)

if __name__ == '__main__':
    unittest.main()
