# CHIP-8 virtual machine. The pyglet window lives in chip8.frontend and is not imported here.
from .cadence import CadenceController
from .cpu import CPU, Instruction, decode
from .display import Display
from .errors import Chip8Error, LoadError, StackFault
from .machine import Chip8, State
from .stack import CallStack

__all__ = [
    "CadenceController", "CPU", "Instruction", "decode", "Display",
    "Chip8Error", "LoadError", "StackFault", "Chip8", "State", "CallStack",
]
