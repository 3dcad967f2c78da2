# Subroutine stack: fixed array of return addresses plus a depth counter (sp).
import numpy as np

from .constants import STACK_SIZE
from .errors import StackFault


class CallStack:

    def __init__(self, capacity=STACK_SIZE):
        self.capacity = capacity
        self.stack = np.zeros(capacity, dtype=np.uint16)
        self.sp = 0

    def __len__(self):
        return self.sp

    def push(self, addr):
        if self.sp >= self.capacity:
            raise StackFault("Stack overflow on CALL to depth %d" % (self.sp + 1))
        self.stack[self.sp] = addr
        self.sp += 1

    def pop(self):
        if self.sp == 0:
            raise StackFault("Stack underflow on 00EE")
        self.sp -= 1
        return int(self.stack[self.sp])

    def peek(self):
        if self.sp == 0:
            return None
        return int(self.stack[self.sp - 1])

    def reset(self):
        self.stack[:] = 0
        self.sp = 0
