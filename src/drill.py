#!/usr/bin/env python3
"""
Reverse Digit Drill

Timed, adaptive working-memory drill for the terminal: digits are shown one at
a time and must be typed back in reverse order before the session runs out.
"""

import argparse
import logging
import signal
import sys
from pathlib import Path
from typing import List, Optional

# Add src to path for imports when run as a script
sys.path.insert(0, str(Path(__file__).parent))

from audio_system import CuePlayer, MockCuePlayer
from display_system import ConsoleRenderer
from drill_system import DrillConfig, DrillRunner, SessionStateMachine, TaskScheduler
from input_system import KeyboardCommandReader
from utils import HybridLogger

# Global logger reference for signal handlers
_global_logger = None


def emergency_flush_and_log(sig=None, frame=None):
    """Flush logs before the process is terminated"""
    if _global_logger:
        _global_logger.critical(f"SIGNAL RECEIVED: {sig} - Process terminating")
    sys.exit(1)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Timed, adaptive reverse digit span drill"
    )
    parser.add_argument("--level", type=int, default=3,
                        help="Start level (digits per sequence, 3-20)")
    parser.add_argument("--duration", type=int, default=300,
                        help="Session length in seconds")
    parser.add_argument("--mute", action="store_true",
                        help="Start with sound off")
    parser.add_argument("--mock-audio", action="store_true",
                        help="Do not open the audio device")
    parser.add_argument("--log-dir", default="logs",
                        help="Directory for log files")
    parser.add_argument("--debug", action="store_true",
                        help="Log at DEBUG level")
    return parser.parse_args(argv)


def create_drill_config(args: argparse.Namespace) -> DrillConfig:
    """Build and validate the configuration from command line arguments"""
    config = DrillConfig(
        start_level=args.level,
        session_duration_seconds=args.duration,
        sound_enabled=not args.mute,
        use_mock_audio=args.mock_audio,
        log_dir=args.log_dir,
        log_level=logging.DEBUG if args.debug else logging.INFO,
    )
    config.validate()
    return config


def create_drill_system(config: DrillConfig, drill_logger) -> DrillRunner:
    """
    Wire the session machine to its collaborators.

    Args:
        config: Validated configuration
        drill_logger: ClassLogger used to derive component loggers

    Returns:
        DrillRunner ready to run
    """
    machine_logger = drill_logger.create_class_logger("SessionStateMachine", config.log_level)
    runner_logger = drill_logger.create_class_logger("DrillRunner", config.log_level)
    audio_logger = drill_logger.create_class_logger("CuePlayer", config.log_level)
    input_logger = drill_logger.create_class_logger("KeyboardReader", config.log_level)

    if config.use_mock_audio:
        drill_logger.info("Using MockCuePlayer (audio disabled)")
        cue_player = MockCuePlayer(logger=audio_logger)
    else:
        cue_player = CuePlayer(logger=audio_logger)

    command_reader = KeyboardCommandReader(logger=input_logger)
    command_reader.setup()

    scheduler = TaskScheduler()
    machine = SessionStateMachine(
        config=config,
        scheduler=scheduler,
        cue_player=cue_player,
        logger=machine_logger,
    )
    renderer = ConsoleRenderer()
    machine.add_listener(renderer)
    renderer.render(machine.snapshot())

    return DrillRunner(
        machine=machine,
        scheduler=scheduler,
        command_reader=command_reader,
        cue_player=cue_player,
        logger=runner_logger,
        frame_duration_ms=config.frame_duration_ms,
    )


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)

    main_logger = HybridLogger("ReverseDigitDrill", log_dir=args.log_dir)
    drill_logger = main_logger.get_class_logger("Drill")

    global _global_logger
    _global_logger = drill_logger
    signal.signal(signal.SIGTERM, emergency_flush_and_log)

    try:
        config = create_drill_config(args)
        drill_logger.info(f"Start level {config.start_level}, session {config.session_duration_seconds}s, "
                          f"{config.frame_duration_ms}ms frames ({config.target_fps:.1f} FPS)")

        runner = create_drill_system(config, drill_logger)
        runner.run()

    except KeyboardInterrupt:
        drill_logger.info("Drill stopped by user")
    except Exception as e:
        drill_logger.error(f"Drill error: {e}", exception=e)
        raise
    finally:
        drill_logger.info("Drill shut down")
        drill_logger.flush()
        main_logger.cleanup()


if __name__ == "__main__":
    main()
