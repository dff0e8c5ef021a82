# creature_evolution_library/agents.py
import math

from mesa import Agent

from .config import (BRAIN_OUTPUTS, CREATURE_SIZE, BODY_LENGTH, EATEN_DISTANCE,
                     MAX_EAT, MOUTH_DISTANCE, ROTATION_ACCEL, SPEED_ACCEL,
                     SPEED_MAX, SPEED_MIN, FOOD_SIZE, VIS_CREATURE_COLOR,
                     VIS_FOOD_COLOR, VIS_EYE_COLOR, VIS_EYEBALL_COLOR,
                     VIS_EYE_SIZE, VIS_EYEBALL_SIZE, VIS_EYE_POSITION,
                     VIS_EYEBALL_POSITION, VIS_MOUTH_COLOR, VIS_MOUTH_SIZE,
                     VIS_MOUTH_OPEN_ANGLE)
from .errors import InvariantViolation

# Pygame is an optional dependency for drawing, only import if needed for direct use
try:
    import pygame
except ImportError:
    pygame = None


def point_along(position, heading, distance):
    """The point `distance` away from `position` in the direction of `heading`."""
    return (position[0] + math.sin(heading) * distance,
            position[1] - math.cos(heading) * distance)


class Creature(Agent):
    """
    A creature that sees food with its eye, decides how to turn and accelerate
    with its neural network brain, and eats food that reaches its mouth.
    Its fitness is the number of food items eaten this generation.
    """
    def __init__(self, unique_id, model, heading, speed, brain, eye):
        """
        Initializes a Creature. Its position is assigned when the model places it in space.

        Args:
            unique_id: A unique identifier for the creature.
            model: The World this creature belongs to.
            heading (float): Radians, clockwise from "up".
            speed (float): Initial speed, clamped to [SPEED_MIN, SPEED_MAX].
            brain (NeuralNetwork): Maps eye stimuli to (rotation delta, speed delta).
            eye (VisionSensor): The creature's sensor.
        """
        super().__init__(unique_id, model)
        self.heading = heading
        self.speed = min(max(speed, SPEED_MIN), SPEED_MAX)
        self.brain = brain
        self.eye = eye
        self.eaten = 0
        self.color = VIS_CREATURE_COLOR

    @property
    def color_intensity(self):
        return min(self.eaten / MAX_EAT, 1.0)

    @property
    def mouth_position(self):
        return point_along(self.pos, self.heading, MOUTH_DISTANCE)

    def sense(self, foods):
        return self.eye.sense(self.pos, self.heading, [food.pos for food in foods])

    def decide(self, stimuli):
        actions = self.brain.propagate(stimuli)
        if len(actions) != BRAIN_OUTPUTS:
            raise InvariantViolation(f"Brain must produce {BRAIN_OUTPUTS} outputs, got {len(actions)}.")
        return actions

    def act(self, actions):
        """Turns, accelerates and moves; the new position is wrapped onto the torus."""
        rotation_change = min(max(float(actions[0]), -ROTATION_ACCEL), ROTATION_ACCEL)
        speed_change = min(max(float(actions[1]), -SPEED_ACCEL), SPEED_ACCEL)

        # Heading is left unwrapped; only its sine and cosine are ever used.
        self.heading += rotation_change
        self.speed = min(max(self.speed + speed_change, SPEED_MIN), SPEED_MAX)

        new_pos = self.model.wrap_position(point_along(self.pos, self.heading, self.speed))
        self.model.space.move_agent(self, new_pos)

    def eat(self, food):
        """
        Eats `food` if it is within reach of the mouth.

        Returns:
            bool: True if the food was eaten; the caller relocates it.
        """
        mouth_x, mouth_y = self.mouth_position
        distance = math.hypot(food.pos[0] - mouth_x, food.pos[1] - mouth_y)
        if distance > EATEN_DISTANCE:
            return False

        self.eaten += 1
        # White fades to yellow as the creature eats
        self.color = (255, 255, int(round(255 * (1.0 - self.color_intensity))))
        return True

    def step(self):
        """
        One tick: sense the food, decide, move, then try every food item and
        relocate whatever was eaten before the next check.
        """
        stimuli = self.sense(self.model.foods)
        self.act(self.decide(stimuli))

        for food in self.model.foods:
            if self.eat(food):
                self.model.relocate_food(food)

    def draw(self, surface):
        """
        Draws the creature as a triangle body with an eye and a two-part mouth.

        Args:
            surface (pygame.Surface): The Pygame surface to draw on.
        """
        if not pygame or self.pos is None:
            return

        body = [point_along(self.pos, self.heading, BODY_LENGTH),
                point_along(self.pos, self.heading + 2.0 / 3.0 * math.pi, CREATURE_SIZE),
                point_along(self.pos, self.heading + 4.0 / 3.0 * math.pi, CREATURE_SIZE)]
        pygame.draw.polygon(surface, self.color, body)

        pygame.draw.circle(surface, VIS_EYE_COLOR,
                           point_along(self.pos, self.heading, VIS_EYE_POSITION), VIS_EYE_SIZE)
        pygame.draw.circle(surface, VIS_EYEBALL_COLOR,
                           point_along(self.pos, self.heading, VIS_EYEBALL_POSITION), VIS_EYEBALL_SIZE)

        for side in (-1, 1):
            mouth = point_along(self.pos, self.heading + side * VIS_MOUTH_OPEN_ANGLE, MOUTH_DISTANCE)
            pygame.draw.circle(surface, VIS_MOUTH_COLOR, mouth, VIS_MOUTH_SIZE)


class Food(Agent):
    """
    A stationary food item. Eaten food is moved to a new spot instead of
    being removed, so the amount of food in the world never changes.
    """
    def step(self):
        """Food is passive and does not perform actions on its own."""
        pass

    def draw(self, surface):
        if not pygame or self.pos is None:
            return
        pygame.draw.circle(surface, VIS_FOOD_COLOR, self.pos, FOOD_SIZE)
