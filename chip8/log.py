# Logs are off by default; F1 in the window (or --log on the command line) flips them.
# Handlers are set up by whoever runs us (see __main__), this module only picks the level.
import logging

logger = logging.getLogger("chip8")

#make it true if you want the logs
logsOn = False


def log(*args):
    if logsOn:
        logger.debug(" ".join(str(a) for a in args))


def set_logs(on):
    global logsOn
    logsOn = bool(on)
    logger.setLevel(logging.DEBUG if logsOn else logging.INFO)


def logs_on():
    return logsOn
