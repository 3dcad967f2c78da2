import pytest

from chip8 import CPU, Chip8


def program(*words):
    return b"".join(w.to_bytes(2, "big") for w in words)


class Rig:
    """A machine plus a CPU, with a couple of shortcuts for tests."""

    def __init__(self, shift_quirk=False):
        self.vm = Chip8()
        self.cpu = CPU(shift_quirk=shift_quirk)

    def load(self, *words):
        self.vm.load_program(program(*words))
        return self

    def step(self, n=1):
        inst = None
        for _ in range(n):
            inst = self.cpu.cycle(self.vm)
        return inst

    def run(self, *words):
        self.load(*words)
        return self.step(len(words))


@pytest.fixture
def rig():
    return Rig()


@pytest.fixture
def vm():
    return Chip8()
