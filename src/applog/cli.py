"""CLI entry point for applog.

applog wraps commands so their output lands in a journal while the terminal
only shows what matters. Current features:
- run: run a command as a task, journaling its stdout/stderr
- config: manage the applog config file
"""

import argparse
import shlex
import subprocess
import sys
import threading
from typing import IO

from . import debugger
from .config import configure, ensure_config_exists, get_config_path, load_config
from .levels import Level
from .log import get_logger
from .logger import standard_logger
from .writer import LoggedWriter

_log = get_logger("cli")


def _pump(stream: IO[bytes], writer: LoggedWriter) -> None:
    """Copy a child's output into a writer, one entry per line."""
    for line in iter(stream.readline, b""):
        writer.write(line)
    stream.close()


def cmd_run(args: argparse.Namespace) -> None:
    """Run a command as a task, journaling its output."""
    logger = standard_logger()
    configure(load_config(), logger)
    if args.debug:
        # the config file may have switched it off again
        debugger.enable()
    if args.level:
        logger.set_level(Level.from_name(args.level))
    if args.journal is not None:
        logger.set_journal(args.journal)

    command = args.cmd
    if command and command[0] == "--":
        command = command[1:]
    if not command:
        logger.fail("No command given")

    debugger.logf("running %r", command)
    logger.start_task("Running %s", shlex.join(command))
    try:
        proc = subprocess.Popen(command, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
    except OSError as e:
        _log.error("could not start %s: %s", command[0], e)
        logger.fail(e)

    pumps = [
        threading.Thread(target=_pump, args=(proc.stdout, logger.out()), daemon=True),
        threading.Thread(target=_pump, args=(proc.stderr, logger.err()), daemon=True),
    ]
    for pump in pumps:
        pump.start()
    returncode = proc.wait()
    for pump in pumps:
        pump.join()

    _log.info("%s exited with status %d", command[0], returncode)
    if returncode == 0:
        logger.complete_task()
    else:
        logger.warn("%s exited with status %d", command[0], returncode)
    sys.exit(returncode)


def cmd_config_init(args: argparse.Namespace) -> None:
    """Initialize config file with defaults."""
    config_path = ensure_config_exists()
    print(f"Config file at: {config_path}")


def cmd_config_path(args: argparse.Namespace) -> None:
    """Print config file path."""
    print(get_config_path())


def cmd_config_show(args: argparse.Namespace) -> None:
    """Show the settings applog will use."""
    config_path = get_config_path()
    config = load_config(config_path)
    source = config_path if config_path.exists() else "built-in defaults"
    print(f"# from {source}")
    print(f"display.level = {config.display.level.name.lower()}")
    print(f"journal.path  = {config.journal.path!r} -> {config.journal.target() or '(discarded)'}")
    print(f"debug.enabled = {str(config.debug.enabled).lower()}")


def setup_run_parser(subparsers: argparse._SubParsersAction) -> None:
    """Set up the run subcommand."""
    run_parser = subparsers.add_parser(
        "run",
        help="Run a command as a task, journaling its output",
        description="Run CMD, recording its stdout/stderr to the journal at DEBUG level",
    )
    run_parser.add_argument(
        "-l",
        "--level",
        choices=[level.name.lower() for level in Level] + ["info"],
        help="Display level (default: from config, else user)",
    )
    run_parser.add_argument(
        "-j",
        "--journal",
        help='Journal destination: a path, "stdout", "stderr", or "" to discard',
    )
    debugger.add_debug_flag(run_parser)
    run_parser.add_argument("cmd", nargs=argparse.REMAINDER, help="Command to run")
    run_parser.set_defaults(func=cmd_run)


def setup_config_parser(subparsers: argparse._SubParsersAction) -> None:
    """Set up the config subcommand."""
    config_parser = subparsers.add_parser(
        "config",
        help="Manage applog configuration",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_command")

    # config init
    init_parser = config_subparsers.add_parser("init", help="Create default config file")
    init_parser.set_defaults(func=cmd_config_init)

    # config path
    path_parser = config_subparsers.add_parser("path", help="Print config file path")
    path_parser.set_defaults(func=cmd_config_path)

    # config show
    show_parser = config_subparsers.add_parser("show", help="Show current config")
    show_parser.set_defaults(func=cmd_config_show)

    config_parser.set_defaults(func=cmd_config_show, config_command=None)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="applog",
        description="Leveled application logging with a journal",
    )
    subparsers = parser.add_subparsers(dest="command")

    setup_run_parser(subparsers)
    setup_config_parser(subparsers)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
    elif hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
