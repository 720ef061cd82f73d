"""
Session state - drawing tool, solving flag and animation speed
Passed explicitly to drawing and solving entry points
"""

import logging
from enum import Enum, auto

from utils.constants import SPEED_MIN, SPEED_MAX, SPEED_DEFAULT
from utils.helpers import clamp

logger = logging.getLogger(__name__)


class Tool(Enum):
    """Drawing tools"""
    WALL = auto()
    ERASE = auto()
    START = auto()
    END = auto()


TOOL_ORDER = [Tool.WALL, Tool.ERASE, Tool.START, Tool.END]


class Session:
    """
    State of one interactive session

    The grid is only mutated by one operation at a time: while
    `is_solving` is set, drawing is refused, and clearing the flag
    cancels the running solve at its next step.
    """
    def __init__(self, animation_speed=SPEED_DEFAULT):
        self.tool = Tool.WALL
        self.is_drawing = False
        self.is_solving = False
        self.animation_speed = clamp(animation_speed, SPEED_MIN, SPEED_MAX)
        self.dark_mode = False

    def select_tool(self, tool):
        self.tool = tool

    def set_speed(self, value):
        """Set animation speed, clamped to the slider range"""
        self.animation_speed = clamp(int(value), SPEED_MIN, SPEED_MAX)

    def change_speed(self, delta):
        self.set_speed(self.animation_speed + delta)

    def step_delay(self):
        """
        Seconds to wait between solver steps

        Inverted scale: speed 100 waits 1 ms, speed 1 waits 100 ms.
        """
        return (SPEED_MAX - self.animation_speed + 1) / 1000.0

    def toggle_dark_mode(self):
        self.dark_mode = not self.dark_mode

    def can_edit(self):
        return not self.is_solving

    def start_solving(self):
        self.is_solving = True

    def stop_solving(self):
        """Request cancellation of the running solve"""
        if self.is_solving:
            logger.debug("Solve cancellation requested")
        self.is_solving = False

    def apply_tool(self, grid, row, col):
        """
        Apply the current tool to a cell

        Returns:
            bool: False if refused (solving in progress or out of bounds)
        """
        if not self.can_edit():
            logger.warning("Ignoring edit at (%d, %d): solve in progress", row, col)
            return False
        if not grid.in_bounds(row, col):
            return False

        if self.tool is Tool.WALL:
            grid.set_wall(row, col, True)
        elif self.tool is Tool.ERASE:
            grid.set_wall(row, col, False)
        elif self.tool is Tool.START:
            grid.set_start(row, col)
        elif self.tool is Tool.END:
            grid.set_end(row, col)
        return True

    def __repr__(self):
        return (f"Session(tool={self.tool.name}, solving={self.is_solving}, "
                f"speed={self.animation_speed})")
