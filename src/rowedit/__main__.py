"""
Entry point for rowedit.
"""

import argparse
import curses
import sys
from typing import Any, Dict

from .core.editor import Editor
from .ui.input_handler import HELP_STATUS_MESSAGE, InputHandler
from .ui.window import WindowManager
from .utils.config import load_config
from .utils.fileio import read_lines
from .utils.logging_config import logger, setup_logging


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="rowedit - Terminal line editor with syntax highlighting"
    )
    parser.add_argument(
        "file",
        nargs="?",
        type=str,
        help="File to open"
    )
    return parser.parse_args()


def main_with_args(stdscr: 'curses.window', args: argparse.Namespace, config: Dict[str, Any]) -> None:
    """Run the editor until the user quits."""

    editor_config = config["editor"]
    stdscr.keypad(True)
    stdscr.timeout(editor_config["poll_timeout_ms"])

    editor = Editor(tab_stop=editor_config["tab_stop"],
                    message_timeout=editor_config["message_timeout"])
    if args.file:
        lines, size = read_lines(args.file)
        editor.load(lines, args.file, size)

    input_handler = InputHandler(editor, config)
    window_manager = WindowManager(stdscr, editor, input_handler, config)
    editor.status_message.set(HELP_STATUS_MESSAGE)

    while True:
        current_height, current_width = stdscr.getmaxyx()
        if (current_height, current_width) != (window_manager.height, window_manager.width):
            window_manager.resize()

        window_manager.refresh_all()

        try:
            ch = stdscr.getch()
        except KeyboardInterrupt:
            break

        if ch != -1 and not input_handler.handle_input(ch):
            break


def main() -> None:
    """Entry point for the application."""

    args = parse_args()
    config = load_config()
    setup_logging(config)

    try:
        curses.wrapper(main_with_args, args, config)
    except OSError as e:
        logger.error("Could not open %s: %s", args.file, e)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
