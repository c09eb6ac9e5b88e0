"""
Command-line interface for subkit.

This module provides CLI access to the library operations: format conversion,
timing shifts, linear drift correction, fragmenting, forced duration, merging
and document inspection.
"""

import argparse
import logging
import sys
from datetime import timedelta
from pathlib import Path
from typing import List, Optional
from subkit.core.errors import SubtitleError
from subkit.core.models import Subtitles
from subkit.core.subtitle_formats import SubtitleFormatFactory
from subkit.core.timing_utils import TimeConverter
from subkit.processors.converter import FormatConverter
from subkit.processors.fragmenter import Fragmenter
from subkit.processors.optimizer import StyleOptimizer
from subkit.processors.timing_adjuster import TimingAdjuster
from subkit.utils.backup_manager import BackupManager
from subkit.utils.constants import APP_NAME, APP_VERSION, APP_DESCRIPTION
from subkit.utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def setup_cli_logging(verbose: bool = False, debug: bool = False,
                      log_file: Optional[Path] = None) -> logging.Logger:
    """Set up logging for CLI operations."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    return setup_logging(level=level, log_file=log_file, use_colors=True)


def _duration_argument(value: str) -> timedelta:
    """argparse type for offsets and durations ("2.5s", "-1500ms", "00:00:02,500")."""
    try:
        return TimingAdjuster.parse_offset(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


class CLIHandler:
    """Handles command-line interface operations."""

    def create_parser(self) -> argparse.ArgumentParser:
        """
        Create the main argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog=APP_NAME,
            description=APP_DESCRIPTION,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Convert between formats
  subkit convert movie.ass movie.vtt --optimize

  # Delay subtitles by 2.5 seconds
  subkit shift movie.srt --offset=2.5s --backup

  # Fix drift between two known points
  subkit sync movie.srt --actual1 00:01:00,000 --desired1 00:01:02,000 \\
                        --actual2 01:30:00,000 --desired2 01:33:00,000

  # Split cues on 6 second segment boundaries
  subkit fragment movie.vtt --period 6s -o segmented.vtt
            """
        )

        parser.add_argument('--version', action='version', version=f'{APP_NAME} {APP_VERSION}')
        parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose output')
        parser.add_argument('-d', '--debug', action='store_true', help='Enable debug output')
        parser.add_argument('--log-file', type=Path, help='Also write log messages to this file')

        subparsers = parser.add_subparsers(dest='command', help='Available commands')

        self._add_convert_parser(subparsers)
        self._add_shift_parser(subparsers)
        self._add_sync_parser(subparsers)
        self._add_fragment_parsers(subparsers)
        self._add_force_duration_parser(subparsers)
        self._add_merge_parser(subparsers)
        self._add_info_parser(subparsers)

        return parser

    @staticmethod
    def _add_output_argument(parser) -> None:
        parser.add_argument('-o', '--output', type=Path,
                            help='Output file (default: overwrite the input)')

    def _add_convert_parser(self, subparsers):
        """Add convert command parser."""
        convert_parser = subparsers.add_parser(
            'convert',
            help='Convert a subtitle file to another format',
            description='Convert a subtitle file; the output extension selects the format'
        )
        convert_parser.add_argument('input', type=Path, help='Subtitle file to convert')
        convert_parser.add_argument('output', type=Path, help='Output subtitle file')
        convert_parser.add_argument('--strip-styles', action='store_true',
                                    help='Remove all styling and regions')
        convert_parser.add_argument('--optimize', action='store_true',
                                    help='Remove styles and regions no cue uses')

    def _add_shift_parser(self, subparsers):
        """Add shift command parser."""
        shift_parser = subparsers.add_parser(
            'shift',
            help='Shift subtitle timing by a fixed offset',
            description='Shift every cue; cues moved entirely before zero are dropped'
        )
        shift_parser.add_argument('input', type=Path, help='Subtitle file to shift')
        shift_parser.add_argument('--offset', type=_duration_argument, required=True,
                                  help='Offset such as 2.5s, -1500ms or 00:00:02,500')
        self._add_output_argument(shift_parser)
        shift_parser.add_argument('-b', '--backup', action='store_true',
                                  help='Create backup of original file when overwriting it')

    def _add_sync_parser(self, subparsers):
        """Add sync command parser."""
        sync_parser = subparsers.add_parser(
            'sync',
            help='Correct linear timing drift',
            description='Remap cue times so two reference points land where they should'
        )
        sync_parser.add_argument('input', type=Path, help='Subtitle file to correct')
        for name, help_text in (('--actual1', 'Current time of the first reference point'),
                                ('--desired1', 'Wanted time of the first reference point'),
                                ('--actual2', 'Current time of the second reference point'),
                                ('--desired2', 'Wanted time of the second reference point')):
            sync_parser.add_argument(name, type=_duration_argument, required=True, help=help_text)
        self._add_output_argument(sync_parser)

    def _add_fragment_parsers(self, subparsers):
        """Add fragment and unfragment command parsers."""
        fragment_parser = subparsers.add_parser(
            'fragment',
            help='Split cues on fixed-period boundaries',
            description='Split cues so none spans two windows of the given period'
        )
        fragment_parser.add_argument('input', type=Path, help='Subtitle file to fragment')
        fragment_parser.add_argument('--period', type=_duration_argument, required=True,
                                     help='Window length such as 6s or 2000ms')
        self._add_output_argument(fragment_parser)

        unfragment_parser = subparsers.add_parser(
            'unfragment',
            help='Merge touching cues with identical text',
            description='Merge consecutive same-text cues that touch or overlap'
        )
        unfragment_parser.add_argument('input', type=Path, help='Subtitle file to unfragment')
        self._add_output_argument(unfragment_parser)

    def _add_force_duration_parser(self, subparsers):
        """Add force-duration command parser."""
        force_parser = subparsers.add_parser(
            'force-duration',
            help='Cut or pad subtitles to an exact duration',
            description='Truncate cues past the duration, or pad with a placeholder cue'
        )
        force_parser.add_argument('input', type=Path, help='Subtitle file to adjust')
        force_parser.add_argument('--duration', type=_duration_argument, required=True,
                                  help='Target duration such as 01:30:00,000')
        force_parser.add_argument('--add-dummy', action='store_true',
                                  help='Append a placeholder cue when the file is shorter')
        self._add_output_argument(force_parser)

    def _add_merge_parser(self, subparsers):
        """Add merge command parser."""
        merge_parser = subparsers.add_parser(
            'merge',
            help='Merge two subtitle files into one',
            description='Combine the cues, styles and regions of two subtitle files'
        )
        merge_parser.add_argument('first', type=Path, help='First subtitle file')
        merge_parser.add_argument('second', type=Path, help='Second subtitle file')
        merge_parser.add_argument('-o', '--output', type=Path, required=True,
                                  help='Output subtitle file')

    def _add_info_parser(self, subparsers):
        """Add info command parser."""
        info_parser = subparsers.add_parser(
            'info',
            help='Show a summary of a subtitle file',
            description='Show cue, style and region counts and the time span of a subtitle file'
        )
        info_parser.add_argument('input', type=Path, help='Subtitle file to inspect')

    def handle_command(self, args) -> int:
        """
        Handle the parsed command-line arguments.

        Args:
            args: Parsed arguments from argparse

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        setup_cli_logging(args.verbose, args.debug, args.log_file)

        if not args.command:
            logger.error("No command specified. Use --help for usage information.")
            return 1

        handlers = {
            'convert': self._handle_convert,
            'shift': self._handle_shift,
            'sync': self._handle_sync,
            'fragment': self._handle_fragment,
            'unfragment': self._handle_unfragment,
            'force-duration': self._handle_force_duration,
            'merge': self._handle_merge,
            'info': self._handle_info,
        }
        handler = handlers.get(args.command)
        if handler is None:
            logger.error(f"Unknown command: {args.command}")
            return 1

        try:
            return handler(args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 1
        except (SubtitleError, ValueError) as e:
            logger.error(f"{args.command} failed: {e}")
            if args.debug:
                logger.exception("Details")
            return 1

    @staticmethod
    def _check_input(path: Path) -> bool:
        if not path.exists():
            logger.error(f"Input file not found: {path}")
            return False
        return True

    @staticmethod
    def _rewrite(args, subtitles: Subtitles, backup: bool = False) -> None:
        """Write the result to --output, or back over the input."""
        target = args.output or args.input
        if backup and target == args.input:
            BackupManager().create_backup(args.input)
        SubtitleFormatFactory.write_file(subtitles, target)
        logger.info(f"Wrote {len(subtitles.items)} cues to {target}")

    def _handle_convert(self, args) -> int:
        """Handle convert command."""
        if not self._check_input(args.input):
            return 1

        converter = FormatConverter(strip_styles=args.strip_styles, optimize=args.optimize)
        converter.convert_file(args.input, args.output)
        logger.info(f"Successfully converted: {args.input} -> {args.output}")
        return 0

    def _handle_shift(self, args) -> int:
        """Handle shift command."""
        if not self._check_input(args.input):
            return 1

        adjuster = TimingAdjuster(create_backup=args.backup)
        adjuster.adjust_file_by_offset(args.input, args.offset, args.output)
        return 0

    def _handle_sync(self, args) -> int:
        """Handle sync command."""
        if not self._check_input(args.input):
            return 1

        subtitles = SubtitleFormatFactory.open_file(args.input)
        TimingAdjuster.apply_linear_correction(subtitles, args.actual1, args.desired1,
                                               args.actual2, args.desired2)
        self._rewrite(args, subtitles)
        return 0

    def _handle_fragment(self, args) -> int:
        """Handle fragment command."""
        if not self._check_input(args.input):
            return 1

        subtitles = SubtitleFormatFactory.open_file(args.input)
        Fragmenter.fragment(subtitles, args.period)
        self._rewrite(args, subtitles)
        return 0

    def _handle_unfragment(self, args) -> int:
        """Handle unfragment command."""
        if not self._check_input(args.input):
            return 1

        subtitles = SubtitleFormatFactory.open_file(args.input)
        Fragmenter.unfragment(subtitles)
        self._rewrite(args, subtitles)
        return 0

    def _handle_force_duration(self, args) -> int:
        """Handle force-duration command."""
        if not self._check_input(args.input):
            return 1

        subtitles = SubtitleFormatFactory.open_file(args.input)
        subtitles.order()
        TimingAdjuster.force_duration(subtitles, args.duration, args.add_dummy)
        self._rewrite(args, subtitles)
        return 0

    def _handle_merge(self, args) -> int:
        """Handle merge command."""
        if not (self._check_input(args.first) and self._check_input(args.second)):
            return 1

        subtitles = SubtitleFormatFactory.open_file(args.first)
        StyleOptimizer.merge(subtitles, SubtitleFormatFactory.open_file(args.second))
        SubtitleFormatFactory.write_file(subtitles, args.output)
        logger.info(f"Merged {args.first.name} and {args.second.name} into {args.output}")
        return 0

    def _handle_info(self, args) -> int:
        """Handle info command."""
        if not self._check_input(args.input):
            return 1

        subtitles = SubtitleFormatFactory.open_file(args.input)
        subtitles.order()

        print(f"File: {args.input}")
        print(f"Cues: {len(subtitles.items)}")
        print(f"Styles: {len(subtitles.styles)}")
        print(f"Regions: {len(subtitles.regions)}")
        if subtitles.metadata.title:
            print(f"Title: {subtitles.metadata.title}")
        if subtitles.items:
            first, last = subtitles.items[0], subtitles.items[-1]
            print(f"First cue: {TimeConverter.format_readable(first.start_at)}")
            print(f"Last cue ends: {TimeConverter.format_readable(last.end_at)}")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    cli = CLIHandler()
    parser = cli.create_parser()
    args = parser.parse_args(argv)
    return cli.handle_command(args)


if __name__ == '__main__':
    sys.exit(main())
