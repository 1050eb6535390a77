"""
Entry point for sfmanager.
"""
import argparse
import curses
import locale
import logging
import os

from . import __version__
from .core.app import App
from .core.bootstrap import configure_terminal
from .core.config import load_config
from .core.event_loop import run_app_loop
from .utils import init_colors

LOGGER = logging.getLogger(__name__)

# Ensure UTF-8
try:
    locale.setlocale(locale.LC_ALL, '')
except locale.Error:
    pass


def configure_logging():
    """Enable debug logging when SFMANAGER_DEBUG is set; SFMANAGER_LOG names the file."""
    if not os.environ.get('SFMANAGER_DEBUG'):
        logging.getLogger('sfmanager').addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        level=logging.DEBUG,
        filename=os.environ.get('SFMANAGER_LOG') or None,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    )


def _directory(value):
    path = os.path.abspath(os.path.expanduser(value))
    if not os.path.isdir(path):
        raise argparse.ArgumentTypeError(f'not a directory: {value!r}')
    return path


def build_parser():
    parser = argparse.ArgumentParser(prog='sfmanager', description='Dual-pane terminal file manager.')
    parser.add_argument('--left', type=_directory, help='start directory of the left panel')
    parser.add_argument('--right', type=_directory, help='start directory of the right panel')
    parser.add_argument('--config', help='path to config.toml (default: ~/.config/sfmanager/config.toml)')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(stdscr, args):
    config = load_config(args.config)
    configure_terminal(stdscr)
    init_colors(config.theme)
    app = App(left_path=args.left, right_path=args.right, config=config)
    LOGGER.info('started: left=%s right=%s', app.left.current_directory, app.right.current_directory)
    run_app_loop(app, stdscr)


def run(argv=None):
    """Run sfmanager and return process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging()
    os.environ.setdefault('ESCDELAY', '25')
    try:
        curses.wrapper(main, args)
        return 0
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        # Top-level crash guard restores terminal state before reporting.
        try:
            curses.endwin()
        except curses.error:
            pass
        LOGGER.exception('fatal error')
        print(f'\nError: {e}')
        import traceback
        traceback.print_exc()
        return 1


def main_cli():
    """Console script entrypoint."""
    return run()


if __name__ == '__main__':
    raise SystemExit(main_cli())
