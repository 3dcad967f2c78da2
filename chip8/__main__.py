# Entry point: python -m chip8 <rom-file> [instructions-per-second] [--shift-quirk] [--log]
import logging
import sys

from . import log as chip8_log
from .constants import cpu_hz
from .errors import LoadError
from .machine import Chip8

USAGE = "Usage: python -m chip8 <rom-file> [instructions-per-second] [--shift-quirk] [--log]"


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    flags = {a for a in args if a.startswith("--")}
    args = [a for a in args if not a.startswith("--")]

    unknown = flags - {"--shift-quirk", "--log"}
    if not args or len(args) > 2 or unknown:
        print(USAGE)
        return 1

    ips = cpu_hz
    if len(args) == 2:
        try:
            ips = int(args[1])
        except ValueError:
            print(USAGE)
            return 1
        if ips <= 0:
            print("instructions per second must be positive")
            return 1

    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    chip8_log.set_logs("--log" in flags)

    vm = Chip8()
    try:
        vm.load_rom(args[0])
    except LoadError as e:
        chip8_log.logger.error("%s", e)
        return 1

    # only pull in pyglet once there is a ROM to show
    from .frontend import Chip8Window

    window = Chip8Window(vm, instructions_per_second=ips, shift_quirk="--shift-quirk" in flags)
    window.run()
    return 1 if vm.fault is not None else 0


if __name__ == "__main__":
    sys.exit(main())
