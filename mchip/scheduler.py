#!/usr/bin/env python3

"""
Timing Scheduler

Drives the CPU from two independent clocks:
    * The instruction clock, which runs one CPU step per period (240Hz by
      default, or as fast as possible if the clock speed is 0).
    * The timer clock, which counts the delay and sound timers down at 60Hz.

Neither clock is derived from the other, so the timers expire in real time
however fast or slow the CPU happens to be running.  If both fall due at the
same moment, they are processed in deadline order.

Alongside these, the display is refreshed, host inputs are processed and the
buzzer is updated at the display rate, and performance is reported once a
second.

If the host stalls for longer than MAX_LAG seconds, both clocks are
resynchronised rather than trying to replay every missed period at once.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter, sleep
from .constants import DEFAULT_CLOCK_SPEED, TIMER_FREQ, DISPLAY_FREQ

MAX_LAG = 1.0


class Scheduler:
    def __init__(self, cpu, framebuffer, inputs, audio, clock_speed=DEFAULT_CLOCK_SPEED, timer_freq=TIMER_FREQ,
                 display_freq=DISPLAY_FREQ, clock=perf_counter, sleeper=sleep):
        self.cpu = cpu
        self.framebuffer = framebuffer
        self.inputs = inputs
        self.audio = audio
        self.clock = clock
        self.sleeper = sleeper

        # A clock speed of 0 (or less) means uncapped
        self.step_interval = None if clock_speed is None or clock_speed <= 0 else 1.0 / clock_speed
        self.tick_interval = 1.0 / timer_freq
        self.display_interval = 1.0 / display_freq

        self.running = False
        self.buzzer_enabled = False
        self.next_step_time = None
        self.next_tick_time = None

        # Performance-related vars
        self.next_display_update_time = 0
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0

    def start_clocks(self, now):
        self.next_step_time = now
        self.next_tick_time = now

    def poll(self, now, limit=None):
        # Run every timer tick and CPU step which has fallen due by 'now'.  Returns the number of steps run.
        if self.next_tick_time is None:
            self.start_clocks(now)

        if now - self.next_tick_time > MAX_LAG:
            self.next_tick_time = now

        if self.step_interval is None:
            self.next_step_time = now
        elif now - self.next_step_time > MAX_LAG:
            self.next_step_time = now

        steps = 0

        while limit is None or steps < limit:
            step_due = self.next_step_time <= now
            tick_due = self.next_tick_time <= now

            if tick_due and (not step_due or self.next_tick_time <= self.next_step_time):
                self.cpu.tick_timers()
                self.next_tick_time += self.tick_interval
            elif step_due:
                self.cpu.step()
                steps += 1

                if self.step_interval is None:
                    # Uncapped, so one step per poll leaves room for the timers and display
                    self.next_step_time = now + self.display_interval
                    break

                self.next_step_time += self.step_interval
            else:
                break

        if self.step_interval is None:
            self.next_step_time = now

        return steps

    def run(self, max_steps=None):
        # Runs until stopped, the host asks to quit, or 'max_steps' instructions have been run.  Returns steps run.
        self.running = True
        total_steps = 0
        self.start_clocks(self.clock())

        try:
            while self.running:
                this_time = self.clock()

                # Performance counters
                if this_time >= self.next_perf_report_time:
                    self.next_perf_report_time = int(this_time) + 1.0
                    # Reporting the performance should be done before a refresh, as refreshing will likely show it
                    self.framebuffer.report_perf(self.perf_counter_fps, self.perf_counter_ops)
                    self.perf_counter_ops = 0
                    self.perf_counter_fps = 0

                # Prevent unnecessary display rendering in excess of host frame rate
                if this_time >= self.next_display_update_time:
                    if self.inputs.process_messages():  # Process inputs at 60Hz too, to avoid slowdown
                        break

                    self.next_display_update_time = this_time + self.display_interval
                    self.refresh()
                    self.perf_counter_fps += 1

                limit = None if max_steps is None else max_steps - total_steps
                steps = self.poll(this_time, limit)
                total_steps += steps
                self.perf_counter_ops += steps

                if max_steps is not None and total_steps >= max_steps:
                    break

                self._wait()
        finally:
            self.running = False
            self.refresh()

        return total_steps

    def stop(self):
        # Safe to call from another thread.  The loop finishes the current step, then exits.
        self.running = False

    def refresh(self):
        self.framebuffer.refresh_display()
        sound_active = self.cpu.is_sound_active()

        if sound_active != self.buzzer_enabled:
            self.audio.enable_buzzer(sound_active)
            self.buzzer_enabled = sound_active

    def _wait(self):
        # Sleep until the next thing is due, rather than spinning
        if self.step_interval is None:
            return

        next_time = min(self.next_step_time, self.next_tick_time, self.next_display_update_time)
        delay = next_time - self.clock()

        if delay > 0:
            self.sleeper(delay)
