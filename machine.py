#!/usr/bin/env python3
"""
Simulated hardware for Desktop TOS
Describes the motherboard, plays the boot sequence and keeps the system clock
"""

import logging
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List

logger = logging.getLogger(__name__)

PROGRESS_BAR_WIDTH = 70
PROGRESS_STEP = 0.16


@dataclass
class CPU:
    name: str
    bit: int


@dataclass
class RAM:
    name: str
    capacity: int


@dataclass
class Storage:
    name: str
    capacity: int


@dataclass
class VGA:
    name: str
    capacity: int


@dataclass
class Motherboard:
    name: str = "AMD x570"
    cpu: CPU = field(default_factory=lambda: CPU("AMD Ryzen 7 2700X", 64))
    ram_list: List[RAM] = field(default_factory=lambda: [
        RAM("Corsair Vengeance DDR4", 8),
        RAM("Corsair Vengeance DDR4", 8),
    ])
    storages: List[Storage] = field(default_factory=lambda: [Storage("Samsung SSD 870 EVO", 1024)])
    vga_list: List[VGA] = field(default_factory=lambda: [VGA("Asus ROG Strix RTX 2080", 8)])
    power_supply: str = "Asus ROG Thor"

    @property
    def ram_total(self):
        return sum(ram.capacity for ram in self.ram_list)


def render_progress(progress, width=PROGRESS_BAR_WIDTH):
    """Render one frame of the boot progress bar"""
    pos = int(width * progress)
    bar = []
    for i in range(width):
        if i < pos:
            bar.append("=")
        elif i == pos:
            bar.append(">")
        else:
            bar.append(" ")
    return f"[{''.join(bar)}] {int(progress * 100.0)} %"


class Computer:
    def __init__(self, motherboard=None):
        self.motherboard = motherboard or Motherboard()
        self.clock_offset = timedelta(0)

    def now(self):
        """Current simulated time"""
        return datetime.now() + self.clock_offset

    def set_datetime(self, value):
        """Move the simulated clock so that it reads value right now"""
        self.clock_offset = value - datetime.now()
        logger.info("Clock set to %s", value.isoformat())

    @classmethod
    def boot(cls, motherboard=None, out=None, delay=1.0):
        """Play the BIOS and POST sequence and return the booted machine"""
        out = out or sys.stdout
        computer = cls(motherboard)
        board = computer.motherboard

        def pause(ms):
            if delay > 0:
                time.sleep(ms / 1000.0 * delay)

        def say(text):
            out.write(text + "\n")
            out.flush()

        say("Finding bios...")
        pause(200)
        say("BIOS found")

        say("Executing bios...")
        pause(100)

        say(f"RAM ({board.ram_total}GB):")
        for ram in board.ram_list:
            say(f"  {ram.capacity}GB")

        say("POST")
        for block, ms in (("a", 0), ("b", 300), ("c", 300), ("d", 0), ("e", 100)):
            say(f"  Test block memory {block}...")
            pause(ms)

        say("Checking graphic cards...")
        pause(400)
        say("Graphic card found: ")
        for vga in board.vga_list:
            say(f"  {vga.name}")

        say("Finding operating system...")
        pause(300)
        say("OS found")

        say("Delivering to OS...")
        pause(300)

        say("Booting...")
        progress = 0.0
        while progress < 1.0:
            out.write(render_progress(progress) + "\r")
            out.flush()
            progress += PROGRESS_STEP
            pause(300)
        out.write("\n\n")
        out.flush()

        logger.info("Booted %s with %sGB RAM", board.name, board.ram_total)
        return computer
