#!/usr/bin/env python3
"""
User accounts for Desktop TOS
Accounts are fixed at startup and only checked by the login gate
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    login: str
    password: str = ""
    is_superuser: bool = False

    @classmethod
    def create(cls, login, password):
        return cls(login, password, False)

    @classmethod
    def create_superuser(cls, login, password):
        return cls(login, password, True)

    def matches(self, login, password):
        return self.login == login and self.password == password


def default_users():
    """Accounts available on a freshly booted machine"""
    return [
        User.create_superuser("root", "12345678"),
        User.create("user", "12345678"),
    ]


def find_user(users, login, password):
    """Return the account matching the credentials, or None"""
    for user in users:
        if user.matches(login, password):
            return user
    return None
