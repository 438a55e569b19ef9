"""
Shared pytest fixtures.

Puts the repository root on sys.path so the flat modules import without an
installed distribution, and provides a populated file system plus a shell
already logged in as root.
"""

import os
import sys

import pytest

_ROOT_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _ROOT_PATH not in sys.path:
    sys.path.insert(0, _ROOT_PATH)

from config import ShellConfig  # noqa: E402
from core import Core  # noqa: E402
from machine import Computer  # noqa: E402
from users import User  # noqa: E402
from vfs import FileSystem  # noqa: E402


@pytest.fixture
def fs():
    """File system holding the demo layout"""
    filesystem = FileSystem()
    filesystem.populate()
    yield filesystem
    filesystem.close()


@pytest.fixture
def empty_fs():
    filesystem = FileSystem()
    yield filesystem
    filesystem.close()


@pytest.fixture
def shell(fs):
    """Shell on the demo layout, logged in as root"""
    core = Core(fs, computer=Computer(), config=ShellConfig(boot_delay=0))
    core.current_user = User.create_superuser("root", "12345678")
    core.state = "running"
    return core


@pytest.fixture
def empty_shell(empty_fs):
    core = Core(empty_fs, computer=Computer(), config=ShellConfig(boot_delay=0))
    core.current_user = User.create("user", "12345678")
    core.state = "running"
    return core


def scripted(lines):
    """Fake input() that replays lines and then signals end of input"""
    remaining = iter(lines)

    def read(prompt=""):
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError

    return read
