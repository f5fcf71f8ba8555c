"""
Command-line interface for the vimdoc to HTML converter.
"""

import argparse
from collections import deque
import logging
from logging.handlers import RotatingFileHandler
import os
import sys
from typing import Deque, List

from vimdoc.vimdoc_converter import VimdocConverter
from vimdoc.vimdoc_error import VimdocError
from vimdoc.vimdoc_settings import VimdocSettings


def setup_logging(verbose: bool, log_file: str | None) -> None:
    """
    Configure logging to stderr and, optionally, to a rotating log file.

    Args:
        verbose: Log debug messages rather than just warnings and errors
        log_file: Path of a log file to write as well, if any
    """
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        # Keep up to 6 log files, max 1MB each
        handlers.append(RotatingFileHandler(
            log_file,
            maxBytes=1024*1024,  # 1MB
            backupCount=5,
            encoding='utf-8'
        ))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser.

    Returns:
        The configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="vimdoc2html",
        description="Convert vimdoc into html.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s doc/myplugin.txt          # Write doc/myplugin.html
  %(prog)s -r doc                    # Convert every .txt file under doc
  %(prog)s < myplugin.txt            # Read stdin, write HTML to stdout
  %(prog)s --debug-output doc/a.txt  # Write the document tree instead of HTML
        """
    )

    parser.add_argument('paths', nargs='*',
                        help='Paths to convert; with none, read vimdoc from stdin and print the HTML')
    parser.add_argument('--extensions', '-e', action='append',
                        help='File extension to look for when converting a directory (default: txt)')
    parser.add_argument('--recursive', '-r', action='store_true',
                        help='Recursively look through directories for vimdoc files')
    parser.add_argument('--debug-output', action='store_true',
                        help='Write out a debug listing of the document tree instead of HTML')
    parser.add_argument('--settings', help='JSON settings file')
    parser.add_argument('--standalone', action='store_true', default=None,
                        help='Wrap the output in a complete HTML page')
    parser.add_argument('--title', help='Page title for standalone output')
    parser.add_argument('--dedent-code', action='store_true', default=None,
                        help='Remove the common indentation of code blocks')
    parser.add_argument('--skip-noise', action='store_true', default=None,
                        help='Leave modelines and help-file title lines out of the output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')
    parser.add_argument('--log-file', help='Also write log messages to this file')
    return parser


def load_settings(args: argparse.Namespace) -> VimdocSettings:
    """
    Build settings from an optional settings file and command-line overrides.

    Args:
        args: The parsed arguments

    Returns:
        The settings to convert with
    """
    settings = VimdocSettings.load(args.settings) if args.settings else VimdocSettings.create_default()

    if args.standalone is not None:
        settings.standalone = args.standalone

    if args.dedent_code is not None:
        settings.dedent_code = args.dedent_code

    if args.skip_noise is not None:
        settings.skip_noise = args.skip_noise

    if args.title is not None:
        settings.title = args.title

    return settings


def collect_files(paths: List[str], extensions: List[str], recursive: bool) -> List[str]:
    """
    Expand the paths given on the command line into the files to convert.

    Files named explicitly are always converted.  Directories contribute the files
    whose extension is listed, and their subdirectories when searching recursively.

    Args:
        paths: Files and directories named on the command line
        extensions: File extensions, without the leading '.', to take from directories
        recursive: Whether to descend into subdirectories

    Returns:
        The files to convert, in discovery order
    """
    wanted = {ext.lstrip('.') for ext in extensions}
    pending: Deque[str] = deque(paths)
    files: List[str] = []

    while pending:
        path = pending.popleft()
        if os.path.isfile(path):
            files.append(path)
            continue

        if not os.path.isdir(path):
            files.append(path)
            continue

        for entry in sorted(os.listdir(path)):
            entry_path = os.path.join(path, entry)
            if os.path.isdir(entry_path):
                if recursive:
                    pending.append(entry_path)

                continue

            if os.path.splitext(entry)[1].lstrip('.') in wanted:
                pending.append(entry_path)

    return files


def output_path(path: str) -> str:
    """
    Get the path that the HTML for an input file is written to.

    Args:
        path: The input file

    Returns:
        The input path with its extension replaced by '.html'
    """
    return os.path.splitext(path)[0] + ".html"


def convert_file(converter: VimdocConverter, path: str, debug_output: bool) -> None:
    """
    Convert one file, writing the result beside it.

    Args:
        converter: The converter to use
        path: The vimdoc file
        debug_output: Write the document tree listing instead of HTML

    Raises:
        OSError: If the file cannot be read or the output cannot be written
        VimdocError: If the file is not valid UTF-8 text
    """
    with open(path, 'rb') as f:
        data = f.read()

    if debug_output:
        out = converter.debug_string(data)

    else:
        out = converter.render(converter.parse(data, path))

    with open(output_path(path), 'w', encoding='utf-8') as f:
        f.write(out)


def main(argv: List[str] | None = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Command-line arguments, or None to use sys.argv

    Returns:
        Process exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.log_file)
    logger = logging.getLogger("VimdocCLI")

    try:
        settings = load_settings(args)

    except (OSError, ValueError) as e:
        print(f"Error: cannot load settings from {args.settings}: {e}", file=sys.stderr)
        return 1

    converter = VimdocConverter(settings)

    if not args.paths:
        try:
            text = sys.stdin.read()
            out = converter.debug_string(text) if args.debug_output else converter.convert(text)

        except VimdocError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        sys.stdout.write(out)
        return 0

    exit_code = 0
    for path in collect_files(args.paths, args.extensions or ["txt"], args.recursive):
        try:
            convert_file(converter, path, args.debug_output)
            logger.info("Converted %s to %s", path, output_path(path))

        except (OSError, VimdocError) as e:
            print(f"Error: {path}: {e}", file=sys.stderr)
            exit_code = 1

    return exit_code
