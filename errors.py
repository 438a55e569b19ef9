#!/usr/bin/env python3
"""
Exception hierarchy for Desktop TOS
Every error raised by a command is reported at the dispatch boundary
"""


class ShellError(Exception):
    """Base exception for all shell errors"""
    pass


class UsageError(ShellError):
    """Missing operand or not enough parameters"""
    pass


class NotFoundError(ShellError):
    """Missing target file, directory or path segment"""
    pass


class ConflictError(ShellError):
    """Name already taken inside a directory"""
    pass


class ParseError(ShellError):
    """Malformed mode, datetime or command line"""
    pass


class InvalidOperationError(ShellError):
    """Operation not supported by the node kind"""
    pass
