from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Point:
    x: float = 0.0 # horizontal, staff spaces
    y: float = 0.0 # vertical, staff spaces; grows downwards, 0 is the top staff line
