# One line descriptions of instructions, used by the CPU trace when logs are on.


def describe(inst, vm):
    x, y, n, nn, nnn = inst.x, inst.y, inst.n, inst.nn, inst.nnn
    V = vm.V

    if inst.op == 0x0:
        if nn == 0xE0:
            return "Clear Screen"
        if nn == 0xEE:
            return "Subroutine Return to addr 0x%04X" % (vm.stack.peek() or 0)
        return "Unimplemented Opcode 0 (SYS 0x%03X ignored)" % nnn
    if inst.op == 0x1:
        return "Jump to Address NNN (0x%04X)" % nnn
    if inst.op == 0x2:
        return "Call Subroutine at NNN (0x%04X)" % nnn
    if inst.op == 0x3:
        return "Check if V%X (0x%02X) == NN (0x%02X) and skip next inst if true" % (x, V[x], nn)
    if inst.op == 0x4:
        return "Check if V%X (0x%02X) != NN (0x%02X) and skip next inst if true" % (x, V[x], nn)
    if inst.op == 0x5:
        return "Check if V%X (0x%02X) == V%X (0x%02X) and skip next inst if true" % (x, V[x], y, V[y])
    if inst.op == 0x6:
        return "Set Reg V%X = NN 0x%02X" % (x, nn)
    if inst.op == 0x7:
        return "Set Reg V%X (0x%02X) += NN 0x%02X. Result 0x%02X" % (x, V[x], nn, (V[x] + nn) & 0xFF)
    if inst.op == 0x8:
        ops = {
            0x0: "V%X = V%X (0x%02X)" % (x, y, V[y]),
            0x1: "V%X (0x%02X) |= V%X (0x%02X)" % (x, V[x], y, V[y]),
            0x2: "V%X (0x%02X) &= V%X (0x%02X)" % (x, V[x], y, V[y]),
            0x3: "V%X (0x%02X) ^= V%X (0x%02X)" % (x, V[x], y, V[y]),
            0x4: "V%X (0x%02X) += V%X (0x%02X), VF = carry" % (x, V[x], y, V[y]),
            0x5: "V%X (0x%02X) -= V%X (0x%02X), VF = no borrow" % (x, V[x], y, V[y]),
            0x6: "V%X (0x%02X) >>= 1, VF = shifted out bit" % (x, V[x]),
            0x7: "V%X = V%X (0x%02X) - V%X (0x%02X), VF = no borrow" % (x, y, V[y], x, V[x]),
            0xE: "V%X (0x%02X) <<= 1, VF = shifted out bit" % (x, V[x]),
        }
        if n in ops:
            return "Register " + ops[n]
        return "Unimplemented Opcode 8 (n=%X)" % n
    if inst.op == 0x9:
        return "Check if V%X (0x%02X) != V%X (0x%02X) and skip next inst if true" % (x, V[x], y, V[y])
    if inst.op == 0xA:
        return "Set Reg I to NNN 0x%04X" % nnn
    if inst.op == 0xB:
        return "Jump to V0 (0x%02X) + NNN (0x%04X)" % (V[0], nnn)
    if inst.op == 0xC:
        return "Set V%X = rand() & NN (0x%02X)" % (x, nn)
    if inst.op == 0xD:
        return ("Draw N (%u) height sprite at coords V%X (0x%02X), V%X (0x%02X) "
                "from memory location I (0x%04X)" % (n, x, V[x], y, V[y], vm.I))
    if inst.op == 0xE:
        if nn == 0x9E:
            return "Skip next instruction if key in V%X (0x%X) is pressed" % (x, V[x] & 0xF)
        if nn == 0xA1:
            return "Skip next instruction if key in V%X (0x%X) is not pressed" % (x, V[x] & 0xF)
        return "Unimplemented Opcode E (NN=0x%02X)" % nn
    if inst.op == 0xF:
        ops = {
            0x07: "Set V%X = delay timer (%u)" % (x, vm.delay),
            0x0A: "Await key press and store in V%X" % x,
            0x15: "Set delay timer = V%X (%u)" % (x, V[x]),
            0x18: "Set sound timer = V%X (%u)" % (x, V[x]),
            0x1E: "I (0x%04X) += V%X (0x%02X)" % (vm.I, x, V[x]),
            0x29: "Set I to sprite location for character in V%X (0x%02X)" % (x, V[x]),
            0x33: "Store BCD of V%X (%u) at memory offset I (0x%04X)" % (x, V[x], vm.I),
            0x55: "Dump V0..V%X to memory offset I (0x%04X)" % (x, vm.I),
            0x65: "Load V0..V%X from memory offset I (0x%04X)" % (x, vm.I),
        }
        if nn in ops:
            return ops[nn]
        return "Unimplemented Opcode F (NN=0x%02X)" % nn
    return "Unimplemented Opcodes"
