# CHIP8 instruction decoder / executor.
# Each cycle: fetch two bytes at PC (big-endian), move PC past them, decode the
# fields, then run the first handler in the dispatch table whose mask/pattern
# matches. Handlers get the machine passed in; the CPU itself holds no state
# besides the quirk setting, the random source and a cycle counter.
import random
from collections import namedtuple

from .constants import ADDRESS_MASK, INDEX_MASK, GLYPH_SIZE
from .debug import describe
from .log import log, logs_on

#   opcode  nnnn: the 16-bit word
#   op      n___: instruction family
#   x       _x__: register operand 1
#   y       __y_: register operand 2
#   n       ___n: 4-bit constant
#   nn      __nn: 8-bit constant
#   nnn     _nnn: 12-bit address
Instruction = namedtuple("Instruction", "opcode op x y n nn nnn")


def decode(opcode):
    return Instruction(
        opcode=opcode,
        op=(opcode & 0xF000) >> 12,
        x=(opcode & 0x0F00) >> 8,
        y=(opcode & 0x00F0) >> 4,
        n=opcode & 0x000F,
        nn=opcode & 0x00FF,
        nnn=opcode & 0x0FFF,
    )


class CPU:

    def __init__(self, shift_quirk=False, rng=None):
        # shift_quirk: 8XY6/8XYE shift VY into VX (original COSMAC VIP) instead of shifting VX
        self.shift_quirk = shift_quirk
        self.rng = rng if rng is not None else random.Random()
        self.cycles = 0

        # dispatch table
        self.opcodes = [
            (0xF0FF, 0x00E0, self.op_CLS),
            (0xF0FF, 0x00EE, self.op_RET),

            (0xF000, 0x1000, self.op_JP),
            (0xF000, 0x2000, self.op_CALL),
            (0xF000, 0x3000, self.op_SE_Vx_kk),
            (0xF000, 0x4000, self.op_SNE_Vx_kk),
            (0xF00F, 0x5000, self.op_SE_Vx_Vy),
            (0xF000, 0x6000, self.op_LD_Vx_kk),
            (0xF000, 0x7000, self.op_ADD_Vx_kk),

            (0xF00F, 0x8000, self.op_LD_Vx_Vy),
            (0xF00F, 0x8001, self.op_OR),
            (0xF00F, 0x8002, self.op_AND),
            (0xF00F, 0x8003, self.op_XOR),
            (0xF00F, 0x8004, self.op_ADD),
            (0xF00F, 0x8005, self.op_SUB),
            (0xF00F, 0x8006, self.op_SHR),
            (0xF00F, 0x8007, self.op_SUBN),
            (0xF00F, 0x800E, self.op_SHL),

            (0xF00F, 0x9000, self.op_SNE_Vx_Vy),
            (0xF000, 0xA000, self.op_LD_I),
            (0xF000, 0xB000, self.op_JP_V0),
            (0xF000, 0xC000, self.op_RND),
            (0xF000, 0xD000, self.op_DRW),

            (0xF0FF, 0xE09E, self.op_SKP),
            (0xF0FF, 0xE0A1, self.op_SKNP),

            (0xF0FF, 0xF007, self.op_LD_Vx_DT),
            (0xF0FF, 0xF00A, self.op_WAITKEY),
            (0xF0FF, 0xF015, self.op_LD_DT_Vx),
            (0xF0FF, 0xF018, self.op_LD_ST_Vx),
            (0xF0FF, 0xF01E, self.op_ADD_I_Vx),
            (0xF0FF, 0xF029, self.op_FONT),
            (0xF0FF, 0xF033, self.op_BCD),
            (0xF0FF, 0xF055, self.op_STORE),
            (0xF0FF, 0xF065, self.op_LOAD),
        ]

    def handler_for(self, opcode):
        for mask, pattern, handler in self.opcodes:
            if (opcode & mask) == pattern:
                return handler
        return None

    # ---- Cycle ----
    def cycle(self, vm):
        opcode = (vm.read_byte(vm.pc) << 8) | vm.read_byte(vm.pc + 1)
        vm.pc = (vm.pc + 2) & ADDRESS_MASK
        inst = decode(opcode)
        self.cycles += 1

        if logs_on():
            log("Address: 0x%04X, Opcode: 0x%04X, Desc: %s" % ((vm.pc - 2) & ADDRESS_MASK, opcode, describe(inst, vm)))

        handler = self.handler_for(opcode)
        if handler:
            handler(vm, inst)
        else:
            log("Unknown opcode: %04X" % opcode)
        return inst

    def skip(self, vm):
        vm.pc = (vm.pc + 2) & ADDRESS_MASK

    # ---- opcode handlers ----
    def op_CLS(self, vm, inst):
        vm.display.clear()

    def op_RET(self, vm, inst):
        vm.pc = vm.stack.pop()

    def op_JP(self, vm, inst):
        vm.pc = inst.nnn

    def op_CALL(self, vm, inst):
        vm.stack.push(vm.pc)
        vm.pc = inst.nnn

    def op_SE_Vx_kk(self, vm, inst):
        if vm.V[inst.x] == inst.nn:
            self.skip(vm)

    def op_SNE_Vx_kk(self, vm, inst):
        if vm.V[inst.x] != inst.nn:
            self.skip(vm)

    def op_SE_Vx_Vy(self, vm, inst):
        if vm.V[inst.x] == vm.V[inst.y]:
            self.skip(vm)

    def op_LD_Vx_kk(self, vm, inst):
        vm.V[inst.x] = inst.nn

    def op_ADD_Vx_kk(self, vm, inst):
        # carry flag not changed
        vm.V[inst.x] = (vm.V[inst.x] + inst.nn) & 0xFF

    def op_LD_Vx_Vy(self, vm, inst):
        vm.V[inst.x] = vm.V[inst.y]

    def op_OR(self, vm, inst):
        vm.V[inst.x] |= vm.V[inst.y]

    def op_AND(self, vm, inst):
        vm.V[inst.x] &= vm.V[inst.y]

    def op_XOR(self, vm, inst):
        vm.V[inst.x] ^= vm.V[inst.y]

    # VF is written before VX below, so when X is F the result wins over the flag
    def op_ADD(self, vm, inst):
        total = vm.V[inst.x] + vm.V[inst.y]
        vm.V[0xF] = 1 if total > 0xFF else 0
        vm.V[inst.x] = total & 0xFF

    def op_SUB(self, vm, inst):
        vm.V[0xF] = 1 if vm.V[inst.x] >= vm.V[inst.y] else 0
        vm.V[inst.x] = (vm.V[inst.x] - vm.V[inst.y]) & 0xFF

    def op_SHR(self, vm, inst):
        src = vm.V[inst.y] if self.shift_quirk else vm.V[inst.x]
        vm.V[0xF] = src & 1
        vm.V[inst.x] = src >> 1

    def op_SUBN(self, vm, inst):
        vm.V[0xF] = 1 if vm.V[inst.y] >= vm.V[inst.x] else 0
        vm.V[inst.x] = (vm.V[inst.y] - vm.V[inst.x]) & 0xFF

    def op_SHL(self, vm, inst):
        src = vm.V[inst.y] if self.shift_quirk else vm.V[inst.x]
        vm.V[0xF] = (src >> 7) & 1
        vm.V[inst.x] = (src << 1) & 0xFF

    def op_SNE_Vx_Vy(self, vm, inst):
        if vm.V[inst.x] != vm.V[inst.y]:
            self.skip(vm)

    def op_LD_I(self, vm, inst):
        vm.I = inst.nnn

    def op_JP_V0(self, vm, inst):
        vm.pc = (vm.V[0] + inst.nnn) & ADDRESS_MASK

    def op_RND(self, vm, inst):
        vm.V[inst.x] = self.rng.getrandbits(8) & inst.nn

    def op_DRW(self, vm, inst):
        px, py = vm.V[inst.x], vm.V[inst.y]
        vm.V[0xF] = 0
        sprite = vm.read_block(vm.I, inst.n)
        if vm.display.draw_sprite(sprite, px, py):
            vm.V[0xF] = 1

    def op_SKP(self, vm, inst):
        if vm.is_pressed(vm.V[inst.x]):
            self.skip(vm)

    def op_SKNP(self, vm, inst):
        if not vm.is_pressed(vm.V[inst.x]):
            self.skip(vm)

    def op_LD_Vx_DT(self, vm, inst):
        vm.V[inst.x] = vm.delay

    def op_WAITKEY(self, vm, inst):
        # No key yet: step PC back so this instruction runs again next cycle
        for i in range(len(vm.keys)):
            if vm.keys[i]:
                vm.V[inst.x] = i
                return
        vm.pc = (vm.pc - 2) & ADDRESS_MASK

    def op_LD_DT_Vx(self, vm, inst):
        vm.delay = vm.V[inst.x]

    def op_LD_ST_Vx(self, vm, inst):
        vm.sound = vm.V[inst.x]

    def op_ADD_I_Vx(self, vm, inst):
        vm.I = (vm.I + vm.V[inst.x]) & INDEX_MASK

    def op_FONT(self, vm, inst):
        vm.I = vm.V[inst.x] * GLYPH_SIZE

    def op_BCD(self, vm, inst):
        v = vm.V[inst.x]
        vm.write_byte(vm.I, v // 100)
        vm.write_byte(vm.I + 1, (v // 10) % 10)
        vm.write_byte(vm.I + 2, v % 10)

    def op_STORE(self, vm, inst):
        for i in range(inst.x + 1):
            vm.write_byte(vm.I + i, vm.V[i])

    def op_LOAD(self, vm, inst):
        for i in range(inst.x + 1):
            vm.V[i] = vm.read_byte(vm.I + i)
