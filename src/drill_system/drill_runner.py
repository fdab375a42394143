"""
Drill runner - frame-limited loop feeding commands and timers into the session machine
"""

import time
from typing import TYPE_CHECKING

import psutil

from utils import OnceInMs

if TYPE_CHECKING:
    from drill_system.session_machine import SessionStateMachine
    from drill_system.timers import TaskScheduler
    from input_system.interfaces import ICommandReader
    from utils import ClassLogger


class DrillRunner:
    """
    Main loop of the drill.

    Each frame:
    1. Read translated commands from the input collaborator
    2. Dispatch them to the session machine
    3. Run every timer task that has come due
    """

    def __init__(self,
                 machine: 'SessionStateMachine',
                 scheduler: 'TaskScheduler',
                 command_reader: 'ICommandReader',
                 cue_player,  # CuePlayer or MockCuePlayer
                 logger: 'ClassLogger',
                 frame_duration_ms: float = 20):
        """
        Args:
            machine: Session state machine to drive
            scheduler: Scheduler shared with the machine's timers
            command_reader: Source of input commands
            cue_player: Audio collaborator (cleaned up on stop)
            logger: Logger for lifecycle and resource usage
            frame_duration_ms: Target frame duration in milliseconds
        """
        self.machine = machine
        self.scheduler = scheduler
        self.command_reader = command_reader
        self.cue_player = cue_player
        self.logger = logger
        self.target_frame_duration = frame_duration_ms / 1000.0
        self.running = True

        # Memory monitoring using OnceInMs
        self._memory_monitor = OnceInMs(60000)  # Log every 60 seconds
        self._process = psutil.Process()

        self.logger.info(f"DrillRunner initialized: {frame_duration_ms}ms frame duration")

    def run(self) -> None:
        """
        Run the drill loop with frame duration limiting until the player exits.
        """
        self.logger.info(f"Starting drill loop with {int(self.target_frame_duration*1000)}ms frame duration")

        try:
            while self.running:
                frame_start = time.time()

                self.update()

                frame_duration = time.time() - frame_start
                sleep_time = self.target_frame_duration - frame_duration

                if sleep_time > 0:
                    time.sleep(sleep_time)

        except KeyboardInterrupt:
            self.logger.info("Drill stopped by user (Ctrl+C)")
            self.logger.flush()
        except Exception as e:
            self.logger.error(f"Drill loop error: {e}", exception=e)
            raise
        finally:
            self.stop()

    def update(self) -> None:
        """One frame: commands first, then due timers."""
        if self._memory_monitor.should_execute():
            self._log_memory_usage()

        for command in self.command_reader.read_commands():
            self.machine.dispatch(command)

        self.scheduler.run_due()

        if self.command_reader.exit_requested:
            self.logger.info("Exit requested")
            self.running = False

    def stop(self) -> None:
        """Stop the loop and release collaborators."""
        self.running = False
        self.machine.shutdown()
        self.command_reader.cleanup()
        self.cue_player.cleanup()
        self.logger.info("Drill stopped")

    def _log_memory_usage(self) -> None:
        """Log current memory and CPU usage of this process and the system"""
        try:
            process_mb = self._process.memory_info().rss / 1024 / 1024
            process_cpu_percent = self._process.cpu_percent(interval=None)
            sys_mem = psutil.virtual_memory()

            self.logger.info(
                f"Memory - Process: {process_mb:.1f}MB | "
                f"System: {sys_mem.used / 1024 / 1024:.0f}/{sys_mem.total / 1024 / 1024:.0f}MB "
                f"({sys_mem.percent:.1f}%) | CPU - Process: {process_cpu_percent:.1f}%"
            )
        except psutil.Error as e:
            self.logger.warning(f"Failed to log system usage: {e}")
