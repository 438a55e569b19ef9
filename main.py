#!/usr/bin/env python3
"""
Desktop TOS - A simulated terminal operating system
Entry point that boots the machine and starts the shell
"""

import argparse
import logging
import sys

from config import ShellConfig
from core import Core
from machine import Computer
from vfs import FileSystem

logger = logging.getLogger(__name__)


def show_banner():
    """Display ASCII banner"""
    banner = """
 ######  #######  #####  ##   ## ######## ######  #####
 ##   ## ##      ##      ##  ##     ##    ##   ## ##   ##
 ##   ## #####    #####  #####      ##    ##   ## ######
 ##   ## ##           ## ##  ##     ##    ##   ## ##
 ######  #######  #####  ##   ##    ##     #####  ##

          Desktop TOS - Terminal Operating System
          =======================================
    """
    print(banner)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="tos",
        description="Simulated terminal operating system over an in-memory file tree.",
    )
    parser.add_argument("--hostname", default=None, help="host part of the prompt")
    parser.add_argument("--boot-delay", dest="boot_delay", type=float, default=None,
                        help="scale of the boot pauses, 0 skips them")
    parser.add_argument("--no-banner", dest="show_banner", action="store_const", const=False,
                        default=None, help="do not print the banner")
    parser.add_argument("--strict-paths", dest="strict_paths", action="store_const", const=True,
                        default=None, help="fail on path segments that do not resolve")
    parser.add_argument("--compat-modes", dest="strict_modes", action="store_const", const=False,
                        default=None, help="let chmod store modes outside 0-7")
    parser.add_argument("--log-level", dest="log_level", default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="diagnostic log level (stderr)")
    return parser


def load_config(argv=None, environ=None):
    """Environment settings overridden by command-line flags"""
    args = build_parser().parse_args(argv)
    try:
        base = ShellConfig.from_env(environ)
    except ValueError as e:
        logger.warning("Ignoring TOS_* environment settings: %s", e)
        base = ShellConfig()
    return base.override(**vars(args))


def configure_logging(level):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def boot_system(config):
    """Boot the machine and mount the file system"""
    computer = Computer.boot(delay=config.boot_delay)

    fs = FileSystem(strict_paths=config.strict_paths)
    fs.populate()

    return Core(fs, computer=computer, config=config)


def main(argv=None):
    """Main entry point"""
    config = load_config(argv)
    configure_logging(config.log_level)

    try:
        if config.show_banner:
            show_banner()

        core = boot_system(config)
        try:
            core.run_shell()
        finally:
            core.fs.close()

    except (KeyboardInterrupt, EOFError):
        print("\n\nSystem shutdown requested...")

    print("Desktop TOS shutdown complete.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
