#!/usr/bin/env python3
"""
Virtual File System (VFS) for Desktop TOS
Keeps the directory tree in an in-memory SQLite table, one row per node.

Rows reference their parent by id, so a directory is addressed by a stable
integer rather than by a shared list of children. Nothing is written to
disk: the database lives exactly as long as the FileSystem object.
"""

import logging
import sqlite3
from dataclasses import dataclass
from typing import List, Optional

from errors import ConflictError, InvalidOperationError, NotFoundError, ParseError

logger = logging.getLogger(__name__)

FILE = "file"
DIRECTORY = "directory"

READ = 4
WRITE = 2
EXECUTE = 1

ROOT_MARKER = "/"


@dataclass
class Node:
    """A single file or directory entry"""
    name: str
    kind: str
    permission: int = 0
    id: Optional[int] = None
    parent_id: Optional[int] = None

    def __setattr__(self, name, value):
        if name == "kind" and "kind" in self.__dict__:
            raise AttributeError("kind cannot change after creation")
        super().__setattr__(name, value)

    @classmethod
    def directory(cls, name):
        return cls(name, DIRECTORY, 0)

    @classmethod
    def file(cls, name):
        return cls(name, FILE, READ | WRITE)

    @property
    def is_directory(self):
        return self.kind == DIRECTORY

    @property
    def readable(self):
        return (self.permission & READ) == READ

    @property
    def writeable(self):
        return (self.permission & WRITE) == WRITE

    @property
    def executable(self):
        return (self.permission & EXECUTE) == EXECUTE

    def mode_string(self):
        """Render as in `ls -l`, e.g. 'drw-'"""
        return "".join([
            "d" if self.is_directory else "-",
            "r" if self.readable else "-",
            "w" if self.writeable else "-",
            "x" if self.executable else "-",
        ])


class WorkingPath:
    """Directory names walked from the root, first segment is always '/'"""

    def __init__(self, segments=None):
        self.segments = [ROOT_MARKER] + list(segments or [])

    def go(self, name):
        self.segments.append(name)

    def back(self):
        if self.is_root:
            return
        self.segments.pop()

    @property
    def is_root(self):
        return len(self.segments) == 1

    def copy(self):
        return WorkingPath(self.segments[1:])

    def __iter__(self):
        return iter(self.segments)

    def __len__(self):
        return len(self.segments)

    def __eq__(self, other):
        if isinstance(other, WorkingPath):
            return self.segments == other.segments
        return NotImplemented

    def __str__(self):
        return ROOT_MARKER + "/".join(self.segments[1:])

    def __repr__(self):
        return f"WorkingPath({self.segments[1:]!r})"


def _validate_name(name):
    if not name or name in (".", "..") or "/" in name:
        raise InvalidOperationError(f"invalid name '{name}'")


class FileSystem:
    def __init__(self, strict_paths=False):
        self.strict_paths = strict_paths
        self.conn = sqlite3.connect(":memory:")
        self.init_database()

    def init_database(self):
        """Create the node table"""
        cursor = self.conn.cursor()
        cursor.execute('PRAGMA foreign_keys = ON')
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS filesystem (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                parent_id INTEGER REFERENCES filesystem(id) ON DELETE CASCADE,
                name TEXT NOT NULL,
                type TEXT NOT NULL CHECK (type IN ('file', 'directory')),
                permission INTEGER NOT NULL DEFAULT 0
            )
        ''')
        self.conn.commit()

    def close(self):
        self.conn.close()

    @staticmethod
    def _to_node(row):
        node_id, parent_id, name, kind, permission = row
        return Node(name, kind, permission, node_id, parent_id)

    @staticmethod
    def _parent_id(parent):
        if parent is None:
            return None
        if parent.id is None:
            raise InvalidOperationError(f"'{parent.name}' is not part of the tree")
        return parent.id

    def children(self, parent=None) -> List[Node]:
        """Entries of a directory in insertion order, root when parent is None"""
        cursor = self.conn.cursor()
        cursor.execute('''
            SELECT id, parent_id, name, type, permission FROM filesystem
            WHERE parent_id IS ?
            ORDER BY id
        ''', (self._parent_id(parent),))
        return [self._to_node(row) for row in cursor.fetchall()]

    def find(self, parent, name, kind=None) -> Optional[Node]:
        """First entry of parent called name, optionally restricted to a kind"""
        for node in self.children(parent):
            if node.name == name and (kind is None or node.kind == kind):
                return node
        return None

    def add_child(self, parent, node):
        """Append node to the parent directory and return it with its id"""
        if parent is not None and not parent.is_directory:
            raise InvalidOperationError(f"'{parent.name}' is not a directory")
        _validate_name(node.name)

        existing = self.find(parent, node.name)
        if existing is not None:
            raise ConflictError("directory exists" if existing.is_directory else "file exists")

        parent_id = self._parent_id(parent)
        cursor = self.conn.cursor()
        cursor.execute('''
            INSERT INTO filesystem (parent_id, name, type, permission)
            VALUES (?, ?, ?, ?)
        ''', (parent_id, node.name, node.kind, node.permission))
        self.conn.commit()

        node.id = cursor.lastrowid
        node.parent_id = parent_id
        logger.debug("Added %s '%s' (id=%s, parent=%s)", node.kind, node.name, node.id, parent_id)
        return node

    def add_at_root(self, node):
        return self.add_child(None, node)

    def remove(self, node):
        """Delete a node, directories take their whole subtree with them"""
        cursor = self.conn.cursor()
        cursor.execute('DELETE FROM filesystem WHERE id = ?', (node.id,))
        self.conn.commit()
        if cursor.rowcount == 0:
            raise NotFoundError(f"'{node.name}' does not exist")
        logger.debug("Removed %s '%s' (id=%s)", node.kind, node.name, node.id)

    def set_permission(self, node, mask, strict=True):
        """Replace the permission mask of node"""
        if strict and not 0 <= mask <= 7:
            raise ParseError(f"invalid mode: '{mask}'")
        cursor = self.conn.cursor()
        cursor.execute('UPDATE filesystem SET permission = ? WHERE id = ?', (mask, node.id))
        self.conn.commit()
        if cursor.rowcount == 0:
            raise NotFoundError(f"'{node.name}' does not exist")
        node.permission = mask
        return node

    def resolve_directory(self, path) -> Optional[Node]:
        """Walk path from the root, None stands for the root collection.

        Segments that do not name a child directory are skipped and the walk
        carries on from the last resolved level, unless strict_paths is set.
        """
        current = None
        for segment in list(path)[1:]:
            found = self.find(current, segment, DIRECTORY)
            if found is None:
                if self.strict_paths:
                    raise NotFoundError(f"{segment}: no such file or directory")
                logger.debug("Skipping unresolved path segment '%s'", segment)
                continue
            current = found
        return current

    def resolve(self, path) -> List[Node]:
        """Entries found at the end of path"""
        return self.children(self.resolve_directory(path))

    def reset(self):
        """Remove every node"""
        cursor = self.conn.cursor()
        cursor.execute('DELETE FROM filesystem')
        self.conn.commit()

    def populate(self):
        """Replace the tree with the demo layout used on a fresh boot"""
        self.reset()
        tmp = self.add_at_root(Node.directory("tmp"))
        self.add_child(tmp, Node.file("file.txt"))
        self.add_child(tmp, Node.file("file2.txt"))

        self.add_at_root(Node.directory("sys"))

        usr = self.add_at_root(Node.directory("usr"))
        self.add_child(usr, Node.directory("bin"))

        self.add_at_root(Node.file("log.txt"))
