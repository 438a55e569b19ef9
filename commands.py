#!/usr/bin/env python3
"""
Built-in commands for Desktop TOS

Every command is a function taking the parsed argument and the running
shell. It returns the text to display; failures that abort the command are
raised and rendered by the dispatcher as '<program>: <message>'.
"""

import os
from datetime import datetime

from errors import ConflictError, InvalidOperationError, NotFoundError, ParseError, UsageError
from vfs import DIRECTORY, FILE, Node


def ls_command(arg, shell):
    entries = shell.fs.resolve(shell.cwd)

    if "-l" not in arg.options:
        return ' '.join(node.name for node in entries)

    lines = [f"total {len(entries)}"]
    for node in entries:
        lines.append(f"{node.mode_string()} {node.name}")
    return '\n'.join(lines)


def mkdir_command(arg, shell):
    if not arg.has_parameters:
        raise UsageError("missing operand")

    parent = shell.fs.resolve_directory(shell.cwd)
    messages = []
    for name in arg.parameters:
        try:
            shell.fs.add_child(parent, Node.directory(name))
        except (ConflictError, InvalidOperationError) as e:
            messages.append(f"{arg.program_name}: {e}")

    return '\n'.join(messages)


def rm_command(arg, shell):
    if not arg.has_parameters:
        raise UsageError("missing operand")

    # Directories are never removed, unknown names are ignored
    parent = shell.fs.resolve_directory(shell.cwd)
    for name in arg.parameters:
        target = shell.fs.find(parent, name, FILE)
        if target is not None:
            shell.fs.remove(target)

    return ""


def cd_command(arg, shell):
    if not arg.has_parameters:
        raise UsageError("missing operand")

    target = arg.parameters[0]
    if target == "..":
        shell.back()
        return ""

    parent = shell.fs.resolve_directory(shell.cwd)
    if shell.fs.find(parent, target, DIRECTORY) is None:
        raise NotFoundError("no such file or directory")

    shell.go(target)
    return ""


def chmod_command(arg, shell):
    if len(arg.parameters) < 2:
        raise UsageError("not enough parameter")

    raw_mode, name = arg.parameters[0], arg.parameters[1]
    try:
        mode = int(raw_mode)
    except ValueError:
        raise ParseError(f"invalid mode: '{raw_mode}'")

    parent = shell.fs.resolve_directory(shell.cwd)
    target = shell.fs.find(parent, name)
    if target is None:
        raise NotFoundError("target not found")

    shell.fs.set_permission(target, mode, strict=shell.config.strict_modes)
    return ""


def date_command(arg, shell):
    if not arg.has_parameters:
        return shell.computer.now().ctime()

    if len(arg.parameters) < 2:
        raise UsageError("not enough parameter")

    pattern, value = arg.parameters[0], arg.parameters[1]
    try:
        moment = datetime.strptime(value, pattern)
    except ValueError:
        raise ParseError("failed to change date")

    shell.computer.set_datetime(moment)
    return ""


def clear_command(arg, shell):
    os.system('cls' if os.name == 'nt' else 'clear')
    return ""


def shutdown_command(arg, shell):
    shell.shutdown()
    return ""


def help_command(arg, shell):
    commands_info = []
    for name in sorted(shell.commands):
        commands_info.append(f"{name:10} - {shell.descriptions.get(name, '')}")
    return '\n'.join(commands_info)


DEFAULT_COMMANDS = [
    ('ls', 'List directory contents', ls_command),
    ('mkdir', 'Create directory', mkdir_command),
    ('rm', 'Remove files', rm_command),
    ('cd', 'Change directory', cd_command),
    ('chmod', 'Change permission bits', chmod_command),
    ('date', 'Show or set the system date', date_command),
    ('clear', 'Clear screen', clear_command),
    ('shutdown', 'Power off Desktop TOS', shutdown_command),
    ('help', 'Show available commands', help_command),
]
