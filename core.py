#!/usr/bin/env python3
"""
Core system for Desktop TOS
Handles the login gate, the shell loop, argument parsing and command dispatch
"""

import logging
import shlex

from commands import DEFAULT_COMMANDS
from config import ShellConfig
from errors import ShellError
from machine import Computer
from users import default_users, find_user
from vfs import WorkingPath

logger = logging.getLogger(__name__)

AUTHENTICATING = "authenticating"
RUNNING = "running"
TERMINATED = "terminated"


class ParsedArgument:
    """One input line split into program name, options and parameters"""

    def __init__(self, program_name, options=None, parameters=None):
        self.program_name = program_name
        self.options = list(options or [])
        self.parameters = list(parameters or [])

    @property
    def has_parameters(self):
        return len(self.parameters) > 0

    @property
    def has_options(self):
        return len(self.options) > 0

    def __repr__(self):
        return (f"ParsedArgument({self.program_name!r}, options={self.options!r}, "
                f"parameters={self.parameters!r})")


def tokenize(command_line):
    """Split a line on whitespace, quotes keep spaces inside one token.

    Backslashes are ordinary characters, so names like a\\b reach the command intact.
    """
    lexer = shlex.shlex(command_line.rstrip(), posix=True)
    lexer.whitespace_split = True
    lexer.escape = ""
    lexer.commenters = ""
    return list(lexer)


def parse_args(tokens):
    """Sort tokens after the program name into options and parameters"""
    if not tokens:
        return None

    options = []
    parameters = []
    for token in tokens[1:]:
        if token.startswith('-'):
            options.append(token)
        else:
            parameters.append(token)

    return ParsedArgument(tokens[0], options, parameters)


class Core:
    def __init__(self, fs, computer=None, config=None, users=None):
        self.fs = fs
        self.computer = computer or Computer()
        self.config = config or ShellConfig()
        self.users = default_users() if users is None else users
        self.current_user = None
        self.cwd = WorkingPath()
        self.arg = None
        self.state = AUTHENTICATING
        self.commands = {}
        self.descriptions = {}
        self.load_commands()

    def load_commands(self):
        """Register the built-in commands"""
        for name, description, command in DEFAULT_COMMANDS:
            self.register(name, command, description)

    def register(self, name, command, description=""):
        """Bind a command to a name, replacing any earlier binding"""
        if name in self.commands:
            logger.debug("Replacing command '%s'", name)
        self.commands[name] = command
        self.descriptions[name] = description

    @property
    def is_running(self):
        return self.state == RUNNING

    def go(self, name):
        self.cwd.go(name)

    def back(self):
        self.cwd.back()

    def shutdown(self):
        logger.info("Shutdown requested")
        self.state = TERMINATED

    def get_prompt(self):
        login = self.current_user.login if self.current_user else ""
        return f"{login}@{self.config.hostname}:{self.cwd}$ "

    def authenticate(self, read=None):
        """Ask for one login/password pair, True when it matches an account"""
        read = read or input
        login = read("login: ")
        password = read("password: ")

        user = find_user(self.users, login, password)
        if user is None:
            logger.info("Failed login attempt for '%s'", login)
            print("invalid login")
            return False

        self.current_user = user
        self.state = RUNNING
        logger.info("Logged in as '%s' (superuser=%s)", user.login, user.is_superuser)
        return True

    def dispatch(self, arg):
        """Run the command named by arg and return its output"""
        self.arg = arg
        command = self.commands.get(arg.program_name)
        if command is None:
            return f"command not found: {arg.program_name}"

        logger.debug("Dispatching %r", arg)
        try:
            result = command(arg, self)
        except ShellError as e:
            return f"{arg.program_name}: {e}"
        except Exception as e:
            logger.exception("Command '%s' failed", arg.program_name)
            return f"Error executing {arg.program_name}: {e}"

        return result if result is not None else ""

    def execute_command(self, command_line):
        """Execute a command line"""
        if not command_line.strip():
            return ""

        try:
            tokens = tokenize(command_line)
        except ValueError as e:
            return f"Error parsing command: {e}"

        arg = parse_args(tokens)
        if arg is None:
            return ""
        return self.dispatch(arg)

    def run_shell(self, read=None):
        """Login gate followed by the main loop"""
        read = read or input
        while not self.authenticate(read):
            pass

        while self.is_running:
            try:
                command_line = read(self.get_prompt())

                result = self.execute_command(command_line)
                if result:
                    print(result)

            except KeyboardInterrupt:
                print("\nUse 'shutdown' to power off Desktop TOS")
            except EOFError:
                print()
                self.shutdown()
