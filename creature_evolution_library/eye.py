# creature_evolution_library/eye.py
import math

import numpy as np

from .config import EYE_ANGLE, EYE_CELLS, EYE_RANGE
from .errors import ConstructionError


def wrap_angle(angle):
    """Wraps an angle in radians into (-pi, pi]."""
    wrapped = math.remainder(angle, 2.0 * math.pi)
    return math.pi if wrapped == -math.pi else wrapped


class VisionSensor:
    """
    A creature's eye: splits its field of view into `cells` angular buckets
    and reports how much food energy falls into each one.

    Angles follow the heading convention: 0 points up (negative y on screen)
    and grows clockwise, so food straight ahead lands in the middle cell.
    """

    def __init__(self, fov_range=EYE_RANGE, fov_angle=EYE_ANGLE, cells=EYE_CELLS):
        """
        Args:
            fov_range (float): How far the eye sees.
            fov_angle (float): Width of the field of view, in radians.
            cells (int): Number of buckets the field of view is divided into.
        """
        if not fov_range > 0:
            raise ConstructionError(f"Eye range must be positive, got {fov_range}.")
        if not fov_angle > 0:
            raise ConstructionError(f"Eye angle must be positive, got {fov_angle}.")
        if not isinstance(cells, (int, np.integer)) or cells <= 0:
            raise ConstructionError(f"Eye cell count must be a positive integer, got {cells}.")
        self._fov_range = float(fov_range)
        self._fov_angle = float(fov_angle)
        self._cells = int(cells)

    @property
    def fov_range(self):
        return self._fov_range

    @property
    def fov_angle(self):
        return self._fov_angle

    @property
    def cells(self):
        return self._cells

    def sense(self, position, heading, food_positions):
        """
        Converts the food around an observer into a stimulus vector.

        Args:
            position (tuple): Observer's (x, y).
            heading (float): Observer's heading in radians.
            food_positions (iterable of tuple): (x, y) of every food item.

        Returns:
            numpy.ndarray: `cells` non-negative energies; nearer food weighs more.
        """
        stimuli = np.zeros(self._cells)
        half_angle = self._fov_angle / 2.0
        x, y = position

        for food_x, food_y in food_positions:
            dx = food_x - x
            dy = food_y - y
            distance = math.hypot(dx, dy)
            if distance > self._fov_range:
                continue

            if distance == 0.0:
                angle = 0.0
            else:
                angle = wrap_angle(math.atan2(dx, -dy) - heading)
            if angle < -half_angle or angle > half_angle:
                continue

            cell = int((angle + half_angle) / self._fov_angle * self._cells)
            cell = min(cell, self._cells - 1)
            stimuli[cell] += (self._fov_range - distance) / self._fov_range

        return stimuli

    def __repr__(self):
        return f"VisionSensor(fov_range={self._fov_range}, fov_angle={self._fov_angle:.3f}, cells={self._cells})"
