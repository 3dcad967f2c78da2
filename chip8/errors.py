# Errors raised by the virtual machine.
# Unknown opcodes are not errors: they are logged and skipped like a no-op.


class Chip8Error(Exception):
    pass


class LoadError(Chip8Error):
    """ROM is unreadable or does not fit in memory above 0x200."""


class StackFault(Chip8Error):
    """Return with an empty stack, or a call with a full one."""
