"""Command-Line Interface handler for LyricSync."""

import argparse
import logging
import sys
from typing import Optional, TextIO

from .config_loader import ConfigLoader, EngineSettings
from .log_setup import setup_logging
from .display_sink import ConsoleSink
from .file_source import PathFileSource
from .models import ApplicationState, ManualOverridePolicy, PlaybackMode
from .teleprompter import Teleprompter
from .exceptions import LyricSyncError, ConfigurationError

logger = logging.getLogger(__name__) # Get logger for this module

FORWARD_KEYS = ("", "n", "j")
BACKWARD_KEYS = ("p", "k")

class CLIHandler:
    """Parses arguments and runs an interactive teleprompter session in the terminal."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Creates the argument parser for the CLI."""
        parser = argparse.ArgumentParser(
            description="LyricSync: show timed lyrics or plain text one chunk at a time.",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter # Show defaults in help
        )
        parser.add_argument(
            "-f", "--file",
            required=True,
            help="Path to the .lrc lyrics file or plain text file to display."
        )
        parser.add_argument(
            "-c", "--config",
            default="config.yaml",
            help="Path to the configuration YAML file."
        )
        parser.add_argument(
            "--log-level",
            default="INFO",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            help="Set the logging level for console and file output."
        )
        parser.add_argument(
            "--mode",
            default=None, # Default taken from config
            choices=[mode.value for mode in PlaybackMode],
            help="Override the playback mode specified in config."
        )
        parser.add_argument(
            "--override-policy",
            default=None, # Default taken from config
            choices=[policy.value for policy in ManualOverridePolicy],
            help="What the clock does after a manual gesture during timed playback."
        )
        parser.add_argument(
            "--quiet",
            action="store_true",
            help="Log to the log file only, keeping the terminal for the display."
        )
        return parser

    def run(self, argv: Optional[list] = None) -> None:
        """Parses arguments, sets up logging, loads config, and runs the session."""
        args = self.parser.parse_args(argv)

        # --- Setup Logging ---
        log_level_name = args.log_level.upper()
        log_level = getattr(logging, log_level_name, logging.INFO)

        # Temporarily setup basic logging to catch config loading errors
        setup_logging(log_level=log_level, log_dir='logs', log_file='lyricsync_init.log')

        # --- Load Configuration ---
        try:
            config_loader = ConfigLoader()
            config = config_loader.load_config(args.config)
            # --- Apply CLI Overrides ---
            if args.mode:
                logger.info(f"Overriding playback_mode from config with CLI argument: {args.mode}")
                config['playback_mode'] = args.mode
            if args.override_policy:
                logger.info(f"Overriding manual_override from config with CLI argument: {args.override_policy}")
                config['manual_override'] = args.override_policy
            settings = EngineSettings.from_config(config)
        except ConfigurationError as e:
            logger.critical(f"Failed to load configuration from {args.config}: {e}", exc_info=True)
            sys.exit(1)
        except FileNotFoundError:
            logger.critical(f"Configuration file not found: {args.config}", exc_info=True)
            sys.exit(1)

        # --- Re-configure Logging with settings from Config ---
        log_dir = config.get('log_dir', 'logs')
        log_file = config.get('log_file', 'lyricsync.log')
        setup_logging(log_level=log_level, log_dir=log_dir, log_file=log_file, console=not args.quiet)
        logger.info("Logging re-configured with settings from config file.")

        teleprompter = None
        try:
            teleprompter = Teleprompter(settings, ConsoleSink(), PathFileSource(args.file))
            if teleprompter.run() is ApplicationState.READY:
                logger.error(f"Nothing to display from {args.file}.")
                sys.exit(1)
            self.interactive_loop(teleprompter, sys.stdin)
            logger.info("LyricSync session ended.")
            sys.exit(0)
        except LyricSyncError as e:
            logger.error(f"A LyricSync error occurred: {e}")
            sys.exit(1)
        except KeyboardInterrupt:
            logger.warning("Session interrupted by user (Ctrl+C). Exiting.")
            sys.exit(1)
        except Exception as e:
            logger.critical(f"An unexpected critical error occurred at the top level: {e}", exc_info=True)
            sys.exit(2) # Use a different exit code for unexpected crashes
        finally:
            if teleprompter is not None:
                teleprompter.close()

    def interactive_loop(self, teleprompter: Teleprompter, input_stream: TextIO) -> None:
        """
        Reads one command per line until 'q' or end of input.

        Enter/n/j moves forward, p/k moves back, r reloads the file and
        starts again, q quits.
        """
        for raw in input_stream:
            command = raw.strip().lower()
            if command in FORWARD_KEYS:
                teleprompter.advance(1)
            elif command in BACKWARD_KEYS:
                teleprompter.advance(-1)
            elif command == "r":
                teleprompter.run()
            elif command == "q":
                break
            else:
                logger.info(f"Unknown command {command!r}. Use Enter/n/j, p/k, r or q.")
        teleprompter.cancel()
