#!/usr/bin/env python3
"""
Configuration for Desktop TOS

Defaults can be overridden from the environment:
    TOS_HOSTNAME      - host part of the prompt
    TOS_BOOT_DELAY    - scale of the boot sequence pauses (0 disables them)
    TOS_SHOW_BANNER   - print the ASCII banner before booting
    TOS_STRICT_PATHS  - fail on path segments that do not resolve
    TOS_STRICT_MODES  - reject chmod modes outside 0-7
    TOS_LOG_LEVEL     - diagnostic log level (written to stderr)
"""

import os
from dataclasses import dataclass, fields

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(name, value):
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name}: expected a boolean, got {value!r}")


@dataclass
class ShellConfig:
    hostname: str = "desktop"
    boot_delay: float = 1.0
    show_banner: bool = True
    # Unmatched path segments are skipped unless strict_paths is set
    strict_paths: bool = False
    strict_modes: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ=None):
        """Build a configuration from TOS_* environment variables"""
        environ = os.environ if environ is None else environ
        values = {}
        for field in fields(cls):
            raw = environ.get("TOS_" + field.name.upper())
            if raw is None:
                continue
            if field.type in (bool, "bool"):
                values[field.name] = _parse_bool(field.name, raw)
            elif field.type in (float, "float"):
                values[field.name] = float(raw)
            else:
                values[field.name] = raw
        return cls(**values)

    def override(self, **changes):
        """Return a copy with every non-None change applied"""
        current = {field.name: getattr(self, field.name) for field in fields(self)}
        current.update({k: v for k, v in changes.items() if v is not None})
        return ShellConfig(**current)
