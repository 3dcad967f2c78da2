# Frame loop: poll input, run a burst of instructions, tick the timers once,
# hand the screen to the renderer, then sleep off whatever is left of the frame.
# Timers and redraw stay at 60Hz no matter how many instructions per second are asked for.
import time

from .constants import cpu_hz, timer_HZ, FRAME_TIME
from .errors import StackFault
from .log import logger
from .machine import State


class CadenceController:

    def __init__(self, vm, cpu, renderer=None, poll_input=None, instructions_per_second=cpu_hz,
                 clock=time.perf_counter, sleep=time.sleep):
        self.vm = vm
        self.cpu = cpu
        self.renderer = renderer
        self.poll_input = poll_input
        self.clock = clock
        self.sleep = sleep
        self.frame_time = FRAME_TIME

        self.frames = 0

        # Performance tracking
        self.fps = 0.0
        self.cycles_per_second = 0
        self._fps_counter = 0
        self._cps_counter = 0
        self._bench_time = None

        self.configure(instructions_per_second)

    def configure(self, instructions_per_second):
        """Set the emulated clock rate.

        Each frame gets ``instructions_per_second / 60`` instructions. The
        fractional part carries over to the next frame, so over one second
        exactly ``instructions_per_second`` instructions run (500 ips runs
        8, 8, 9 per frame over and over, 30 ips runs one every other frame).
        """
        if isinstance(instructions_per_second, bool) or not isinstance(instructions_per_second, int):
            raise ValueError("instructions per second must be an integer, got %r" % (instructions_per_second,))
        if instructions_per_second <= 0:
            raise ValueError("instructions per second must be positive, got %d" % instructions_per_second)
        self.instructions_per_second = instructions_per_second
        self.instructions_per_frame = instructions_per_second / timer_HZ
        self._carry = 0

    def frame_budget(self):
        # _carry holds the sixtieths of an instruction left over from earlier frames
        self._carry += self.instructions_per_second
        budget = self._carry // timer_HZ
        self._carry -= budget * timer_HZ
        return budget

    # ---- state transitions ----
    def toggle_pause(self):
        if self.vm.state == State.RUNNING:
            logger.info("STATE PAUSED")
            self.vm.state = State.PAUSED
        elif self.vm.state == State.PAUSED:
            logger.info("STATE RESUMED")
            self.vm.state = State.RUNNING

    def quit(self):
        self.vm.state = State.QUIT

    @property
    def running(self):
        return self.vm.state != State.QUIT

    # ---- frame ----
    def run_burst(self):
        executed = 0
        try:
            for _ in range(self.frame_budget()):
                self.cpu.cycle(self.vm)
                executed += 1
        except StackFault as e:
            logger.error("Emulation error at PC 0x%03X: %s", self.vm.pc, e)
            self.vm.fault = e
            self.vm.state = State.QUIT
        return executed

    def run_frame(self):
        start = self.clock()

        if self.poll_input is not None:
            self.poll_input()
        if self.vm.state == State.QUIT:
            return False

        if self.vm.state == State.RUNNING:
            self._cps_counter += self.run_burst()
            self.vm.tick_timers()

        if self.renderer is not None:
            self.renderer(self.vm.display)

        self.frames += 1
        self._fps_counter += 1
        self._update_bench(start)

        elapsed = self.clock() - start
        if elapsed < self.frame_time:
            self.sleep(self.frame_time - elapsed)

        return self.running

    def run(self, max_frames=None):
        while self.running:
            if max_frames is not None and self.frames >= max_frames:
                break
            self.run_frame()
        if self.vm.state == State.QUIT:
            logger.info("chip8 quitting ... bye")

    # FPS / CPS
    def _update_bench(self, now):
        if self._bench_time is None:
            self._bench_time = now
            return
        elapsed = now - self._bench_time
        if elapsed >= 1.0:
            self.fps = self._fps_counter / elapsed
            self.cycles_per_second = self._cps_counter
            self._fps_counter = 0
            self._cps_counter = 0
            self._bench_time = now
