import random

import pytest
from hypothesis import given, strategies as st

from chip8 import CPU, StackFault, decode
from conftest import Rig


def test_decode_fields():
    inst = decode(0xD12F)
    assert (inst.op, inst.x, inst.y, inst.n, inst.nn, inst.nnn) == (0xD, 0x1, 0x2, 0xF, 0x2F, 0x12F)


def test_two_instruction_program(rig):
    rig.run(0x600A, 0xA200)
    assert rig.vm.V[0] == 10
    assert rig.vm.I == 0x200
    assert rig.vm.pc == 0x204
    assert rig.cpu.cycles == 2


def test_cls(rig):
    rig.vm.display.draw_sprite([0xFF], 0, 0)
    rig.run(0x00E0)
    assert not rig.vm.get_display().any()


def test_jump(rig):
    rig.run(0x1ABC)
    assert rig.vm.pc == 0xABC


def test_call_then_return_round_trip(rig):
    rig.load(0x2206, 0x0000, 0x0000, 0x00EE)
    rig.step()
    assert rig.vm.pc == 0x206
    assert rig.vm.stack.peek() == 0x202
    rig.step()
    assert rig.vm.pc == 0x202
    assert len(rig.vm.stack) == 0


def test_return_with_empty_stack_faults(rig):
    rig.load(0x00EE)
    with pytest.raises(StackFault):
        rig.step()


def test_call_overflow_faults(rig):
    # subroutine at 0x200 that calls itself forever
    rig.load(0x2200)
    rig.step(16)
    assert len(rig.vm.stack) == 16
    with pytest.raises(StackFault):
        rig.step()


@pytest.mark.parametrize("words, setup, taken", [
    ((0x3A42,), {0xA: 0x42}, True),
    ((0x3A42,), {0xA: 0x41}, False),
    ((0x4A42,), {0xA: 0x41}, True),
    ((0x4A42,), {0xA: 0x42}, False),
    ((0x5AB0,), {0xA: 7, 0xB: 7}, True),
    ((0x5AB0,), {0xA: 7, 0xB: 8}, False),
    ((0x9AB0,), {0xA: 7, 0xB: 8}, True),
    ((0x9AB0,), {0xA: 7, 0xB: 7}, False),
])
def test_skip_instructions(rig, words, setup, taken):
    rig.load(*words)
    for reg, value in setup.items():
        rig.vm.V[reg] = value
    rig.step()
    assert rig.vm.pc == (0x204 if taken else 0x202)


@pytest.mark.parametrize("opcode, pressed, taken", [
    (0xE39E, True, True),
    (0xE39E, False, False),
    (0xE3A1, False, True),
    (0xE3A1, True, False),
])
def test_key_skips(rig, opcode, pressed, taken):
    rig.load(opcode)
    rig.vm.V[3] = 0xB
    rig.vm.set_key(0xB, pressed)
    rig.step()
    assert rig.vm.pc == (0x204 if taken else 0x202)


def test_key_skip_reads_low_nibble_of_vx(rig):
    rig.load(0xE39E)
    rig.vm.V[3] = 0x1B
    rig.vm.set_key(0xB, True)
    rig.step()
    assert rig.vm.pc == 0x204


def test_key_state_is_read_fresh_every_instruction(rig):
    rig.load(0xE09E, 0x0000, 0xE09E)
    rig.vm.set_key(0, True)
    rig.step()
    assert rig.vm.pc == 0x204
    rig.vm.set_key(0, False)
    rig.step()
    assert rig.vm.pc == 0x206


def test_ld_and_add_immediate(rig):
    rig.run(0x65FE, 0x7503)
    assert rig.vm.V[5] == 0x01
    assert rig.vm.V[0xF] == 0


@given(x=st.integers(0, 15), start=st.integers(0, 255), nn1=st.integers(0, 255), nn2=st.integers(0, 255))
def test_add_immediate_composes(x, start, nn1, nn2):
    twice = Rig().load(0x7000 | (x << 8) | nn1, 0x7000 | (x << 8) | nn2)
    twice.vm.V[x] = start
    twice.step(2)

    once = Rig().load(0x7000 | (x << 8) | ((nn1 + nn2) % 256))
    once.vm.V[x] = start
    once.step()

    assert twice.vm.V[x] == once.vm.V[x]


@pytest.mark.parametrize("opcode, vx, vy, result, vf", [
    (0x8120, 0x12, 0x34, 0x34, 0),
    (0x8121, 0x0F, 0xF0, 0xFF, 0),
    (0x8122, 0x3C, 0x0F, 0x0C, 0),
    (0x8123, 0xFF, 0x0F, 0xF0, 0),
    (0x8124, 0xF0, 0x20, 0x10, 1),
    (0x8124, 0x10, 0x20, 0x30, 0),
    (0x8125, 0x30, 0x10, 0x20, 1),
    (0x8125, 0x10, 0x10, 0x00, 1),
    (0x8125, 0x10, 0x30, 0xE0, 0),
    (0x8126, 0x05, 0x00, 0x02, 1),
    (0x8126, 0x04, 0x00, 0x02, 0),
    (0x8127, 0x10, 0x30, 0x20, 1),
    (0x8127, 0x30, 0x10, 0xE0, 0),
    (0x812E, 0x81, 0x00, 0x02, 1),
    (0x812E, 0x41, 0x00, 0x82, 0),
])
def test_alu(rig, opcode, vx, vy, result, vf):
    rig.load(opcode)
    rig.vm.V[1], rig.vm.V[2] = vx, vy
    rig.vm.V[0xF] = 0x55   # every flag-setting op must overwrite this
    rig.step()
    assert rig.vm.V[1] == result
    if opcode & 0xF >= 4:
        assert rig.vm.V[0xF] == vf
    else:
        assert rig.vm.V[0xF] == 0x55


def test_carry_flag_is_overwritten_not_accumulated(rig):
    rig.load(0x8124, 0x8124)
    rig.vm.V[1], rig.vm.V[2] = 0xFF, 0x01
    rig.step()
    assert rig.vm.V[0xF] == 1
    rig.step()
    assert rig.vm.V[1] == 0x01
    assert rig.vm.V[0xF] == 0


def test_shift_uses_vy_with_quirk():
    r = Rig(shift_quirk=True).load(0x8126, 0x834E)
    r.vm.V[1], r.vm.V[2] = 0xFF, 0x03
    r.vm.V[3], r.vm.V[4] = 0x00, 0x80
    r.step(2)
    assert r.vm.V[1] == 0x01
    assert r.vm.V[3] == 0x00
    assert r.vm.V[0xF] == 1


def test_shift_ignores_vy_by_default(rig):
    rig.load(0x8126)
    rig.vm.V[1], rig.vm.V[2] = 0x08, 0xFF
    rig.step()
    assert rig.vm.V[1] == 0x04
    assert rig.vm.V[0xF] == 0


def test_load_index(rig):
    rig.run(0xA123)
    assert rig.vm.I == 0x123


def test_jump_with_offset(rig):
    rig.load(0xB300)
    rig.vm.V[0] = 0x10
    rig.step()
    assert rig.vm.pc == 0x310


def test_jump_with_offset_wraps_to_address_space(rig):
    rig.load(0xBFFF)
    rig.vm.V[0] = 0x03
    rig.step()
    assert rig.vm.pc == 0x002


def test_random_is_masked():
    r = Rig()
    r.cpu = CPU(rng=random.Random(1234))
    r.load(*([0xC10F] * 50))
    for _ in range(50):
        r.step()
        assert r.vm.V[1] & 0xF0 == 0


def test_random_uses_rng():
    a, b = Rig(), Rig()
    a.cpu = CPU(rng=random.Random(7))
    b.cpu = CPU(rng=random.Random(7))
    a.run(0xC2FF)
    b.run(0xC2FF)
    assert a.vm.V[2] == b.vm.V[2]


def test_draw_font_glyph(rig):
    # V0 = 0 (glyph), V1 = x, V2 = y, I = glyph 0, draw 5 rows
    rig.load(0x6000, 0x6108, 0x6204, 0xF029, 0xD125)
    rig.step(5)
    screen = rig.vm.get_display()
    assert screen[4, 8:12].all()            # 0xF0 top row
    assert not screen[4, 12:16].any()
    assert screen[5, 8] and screen[5, 11] and not screen[5, 9]
    assert rig.vm.V[0xF] == 0


def test_draw_twice_restores_and_sets_collision(rig):
    rig.load(0xA20A, 0x6305, 0x6406, 0xD342, 0xD342, 0xFF00)
    rig.step(4)
    drawn = rig.vm.get_display()
    assert drawn.any()
    assert rig.vm.V[0xF] == 0
    rig.step()
    assert not rig.vm.get_display().any()
    assert rig.vm.V[0xF] == 1


def test_draw_coordinates_read_before_flag_reset(rig):
    rig.load(0xA000, 0x6F0A, 0x6100, 0xDF11)
    rig.step(4)
    # font byte 0xF0 at (10, 0)
    assert rig.vm.get_display()[0, 10:14].all()


def test_draw_height_zero_draws_nothing(rig):
    rig.load(0xA000, 0xD010)
    rig.vm.V[0xF] = 1
    rig.step(2)
    assert not rig.vm.get_display().any()
    assert rig.vm.V[0xF] == 0


def test_wait_key_rewinds_until_pressed(rig):
    rig.load(0xF50A)
    rig.step()
    assert rig.vm.pc == 0x200
    rig.step()
    assert rig.vm.pc == 0x200
    rig.vm.set_key(0x9, True)
    rig.vm.set_key(0xC, True)
    rig.step()
    assert rig.vm.pc == 0x202
    assert rig.vm.V[5] == 0x9


def test_timer_registers(rig):
    rig.load(0x6A20, 0xFA15, 0xFA18, 0xFB07)
    rig.step(3)
    assert rig.vm.get_timer_values() == (0x20, 0x20)
    rig.vm.delay = 3
    rig.step()
    assert rig.vm.V[0xB] == 3


def test_add_index(rig):
    rig.load(0xAFFF, 0x6102, 0xF11E)
    rig.vm.V[0xF] = 0x55
    rig.step(3)
    assert rig.vm.I == 0x1001
    assert rig.vm.V[0xF] == 0x55


def test_font_address(rig):
    rig.load(0x630C, 0xF329)
    rig.step(2)
    assert rig.vm.I == 0xC * 5


def test_bcd(rig):
    rig.load(0x679D, 0xA300, 0xF733)
    rig.step(3)
    assert rig.vm.V[7] == 157
    assert list(rig.vm.memory[0x300:0x303]) == [1, 5, 7]


def test_bcd_small_value(rig):
    rig.load(0x6709, 0xA300, 0xF733)
    rig.step(3)
    assert list(rig.vm.memory[0x300:0x303]) == [0, 0, 9]


def test_store_and_load_registers(rig):
    rig.load(0xA400, 0xF355, 0xA400, 0xF265)
    rig.vm.V[:4] = [1, 2, 3, 4]
    rig.step(2)
    assert list(rig.vm.memory[0x400:0x405]) == [1, 2, 3, 4, 0]
    assert rig.vm.I == 0x400
    rig.vm.V[:4] = [0, 0, 0, 0]
    rig.step(2)
    assert rig.vm.V[:4] == [1, 2, 3, 0]


def test_store_wraps_past_end_of_memory(rig):
    rig.load(0xAFFF, 0xF155)
    rig.vm.V[0], rig.vm.V[1] = 0xAA, 0xBB
    rig.step(2)
    assert rig.vm.memory[0xFFF] == 0xAA
    assert rig.vm.memory[0x000] == 0xBB


@pytest.mark.parametrize("opcode", [0x0123, 0x5121, 0x8128, 0x9121, 0xE0FF, 0xF0FF, 0x00FF])
def test_unknown_opcodes_are_no_ops(rig, opcode):
    rig.load(opcode)
    before = (list(rig.vm.V), rig.vm.I, rig.vm.get_display().copy())
    rig.step()
    assert rig.vm.pc == 0x202
    assert (list(rig.vm.V), rig.vm.I) == before[:2]
    assert (rig.vm.get_display() == before[2]).all()


def test_fetch_wraps_at_top_of_memory(rig):
    rig.vm.memory[0xFFF] = 0x60
    rig.vm.memory[0x000] = 0xF0  # first font byte
    rig.vm.pc = 0xFFF
    rig.step()
    assert rig.vm.V[0] == 0xF0
    assert rig.vm.pc == 0x001
