#!/usr/bin/env python3
"""
LyricSync Batch Preview Entry Point

Parses every .lrc and .txt file in a directory, ordered by name, and writes
a preview of exactly what the display would show for each one.
"""

import argparse
import logging
import os
import sys
import time
from typing import List

# Progress bar library
from tqdm import tqdm

from lyricsync.config_loader import ConfigLoader, EngineSettings
from lyricsync.log_setup import setup_logging
from lyricsync.text_wrapper import char_measure
from lyricsync.timeline_formatter import TimelineFormatter
from lyricsync.timeline_parser import decode_content, parse_lrc, parse_plain_text
from lyricsync.exceptions import LyricSyncError, ConfigurationError, FileSystemError
from lyricsync.utils import ensure_dir_exists, file_mode_for

# Initialize logger for this script
logger = logging.getLogger(__name__)

LYRIC_EXTENSIONS = (".lrc", ".txt")

def find_lyric_files(input_dir: str) -> List[str]:
    """
    Finds all .lrc and .txt files in the input directory, sorted by name.

    Args:
        input_dir: The directory to search.

    Returns:
        Sorted list of file paths.

    Raises:
        FileNotFoundError: If the input directory doesn't exist.
        ValueError: If the input path is not a directory.
    """
    if not os.path.exists(input_dir):
        raise FileNotFoundError(f"Input directory not found: {input_dir}")
    if not os.path.isdir(input_dir):
        raise ValueError(f"Input path is not a directory: {input_dir}")

    files = []
    logger.info(f"Scanning directory for lyric files: {input_dir}")
    for filename in sorted(os.listdir(input_dir)):
        if filename.lower().endswith(LYRIC_EXTENSIONS):
            filepath = os.path.join(input_dir, filename)
            if os.path.isfile(filepath):
                files.append(filepath)
    logger.info(f"Found {len(files)} lyric files.")
    return files


def preview_file(path: str, output_dir: str, settings: EngineSettings, formatter: TimelineFormatter) -> int:
    """
    Parses one file and writes its preview next to the others in output_dir.

    Returns:
        Number of entries written; 0 means the file has nothing to display.

    Raises:
        LyricSyncError: If the file cannot be read, decoded or the preview written.
    """
    try:
        with open(path, 'rb') as f:
            content = decode_content(f.read())
    except OSError as e:
        raise FileSystemError(f"Could not read {path}: {e}") from e

    measure = char_measure(settings.char_width)
    base_name = os.path.splitext(os.path.basename(path))[0]
    output_path = os.path.join(output_dir, f"{base_name}.preview.txt")
    if file_mode_for(path) == 'timed':
        timeline = parse_lrc(content, settings.wrap_width, settings.max_lines, measure)
        formatter.format_timeline(timeline, output_path)
        return len(timeline)
    chunks = parse_plain_text(content, settings.wrap_width, settings.max_lines, measure)
    formatter.format_chunks(chunks, output_path)
    return len(chunks)


def run_batch_preview():
    """Parses arguments, sets up, and writes previews for a whole directory."""
    parser = argparse.ArgumentParser(
        description="LyricSync Batch: write display previews for every lyric file in a directory.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "-i", "--input-dir",
        required=True,
        help="Directory containing .lrc and .txt files."
    )
    parser.add_argument(
        "-o", "--output-dir",
        default=None,
        help="Directory for the preview files (default: <input-dir>/Previews)."
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

    args = parser.parse_args()

    # --- Setup Logging (Initial) ---
    log_level_name = args.log_level.upper()
    log_level = getattr(logging, log_level_name, logging.INFO)
    setup_logging(log_level=log_level, log_dir='logs', log_file='lyricsync_batch_init.log')

    # --- Load Configuration ---
    try:
        config_loader = ConfigLoader()
        config = config_loader.load_config(args.config)
        settings = EngineSettings.from_config(config)
    except (ConfigurationError, FileNotFoundError) as e:
        logger.critical(f"Failed to load configuration: {e}", exc_info=True)
        sys.exit(1)

    # --- Re-configure Logging (Final) ---
    log_dir = config.get('log_dir', 'logs')
    log_file = config.get('log_file', 'lyricsync_batch.log')
    setup_logging(log_level=log_level, log_dir=log_dir, log_file=log_file)

    # --- Find Files ---
    try:
        lyric_files = find_lyric_files(args.input_dir)
        if not lyric_files:
            logger.warning(f"No lyric files found in {args.input_dir}. Exiting.")
            sys.exit(0)
    except (FileNotFoundError, ValueError) as e:
        logger.critical(f"Input directory error: {e}")
        sys.exit(1)

    output_dir = args.output_dir or os.path.join(args.input_dir, "Previews")
    try:
        ensure_dir_exists(output_dir)
    except FileSystemError as e:
        logger.critical(f"Could not create output directory: {e}")
        sys.exit(1)

    # --- Process Files Sequentially ---
    formatter = TimelineFormatter()
    total_files = len(lyric_files)
    files_processed = 0
    files_empty = 0
    files_failed = 0
    batch_start_time = time.time()

    with tqdm(total=total_files, unit="file", desc="Starting Batch") as pbar:
        for path in lyric_files:
            filename = os.path.basename(path)
            pbar.set_description(f"Previewing: {filename[:30]}")
            try:
                count = preview_file(path, output_dir, settings, formatter)
                if count == 0:
                    logger.warning(f"{filename} has nothing to display.")
                    files_empty += 1
                files_processed += 1
            except LyricSyncError as e:
                logger.error(f"Preview failed for '{filename}': {e}")
                files_failed += 1
            except KeyboardInterrupt:
                logger.warning("Batch process interrupted by user (Ctrl+C). Exiting.")
                sys.exit(1)
            finally:
                pbar.update(1) # Increment progress bar regardless of success/failure

    batch_end_time = time.time()
    logger.info("--- Batch Preview Finished ---")
    logger.info(f"Total time: {batch_end_time - batch_start_time:.2f} seconds")
    logger.info(f"Previewed: {files_processed}/{total_files} files ({files_empty} with nothing to display)")
    logger.info(f"Failed: {files_failed}/{total_files} files")

    sys.exit(1 if files_failed > 0 else 0)


if __name__ == "__main__":
    if sys.version_info < (3, 8):
        sys.stderr.write("LyricSync requires Python 3.8 or later.\n")
        sys.exit(1)
    run_batch_preview()
