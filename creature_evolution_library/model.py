# creature_evolution_library/model.py
import math
from collections import namedtuple

from mesa import Model
from mesa.space import ContinuousSpace
from mesa.time import BaseScheduler

from .agents import Creature, Food
from .config import (WORLD_WIDTH, WORLD_HEIGHT, POPULATION_SIZE, FOOD_COUNT,
                     FOOD_SPAWN_MARGIN, NETWORK_TOPOLOGY, SPEED_MIN, SPEED_MAX,
                     BRAIN_OUTPUTS, VIS_BACKGROUND_COLOR, VIS_TEXT_COLOR,
                     VIS_FONT_SIZE)
from .errors import ConstructionError
from .eye import VisionSensor
from .network import NeuralNetwork, validate_topology

# Pygame is an optional dependency for drawing
try:
    import pygame
except ImportError:
    pygame = None

CreatureView = namedtuple("CreatureView", ["position", "heading", "color_intensity", "color"])
FoodView = namedtuple("FoodView", ["position"])
WorldSnapshot = namedtuple("WorldSnapshot", ["creatures", "foods", "age", "foods_eaten"])


class World(Model):
    """
    One generation of the simulation: a toroidal continuous space holding the
    creatures and the food. Creatures are activated in the order they were added.
    """
    def __init__(self, width=WORLD_WIDTH, height=WORLD_HEIGHT,
                 population_size=POPULATION_SIZE, food_count=FOOD_COUNT,
                 topology=NETWORK_TOPOLOGY, brains=None, eye=None, rng=None):
        """
        Initializes the World.

        Args:
            width (float): Width of the space.
            height (float): Height of the space.
            population_size (int): Number of random-brained creatures, used only when `brains` is None.
            food_count (int): Number of food items, constant for the whole generation.
            topology (sequence of int): Brain layer sizes; must start with the eye's cell count.
            brains (list of NeuralNetwork, optional): One creature is created per brain.
            eye (VisionSensor, optional): Shared by every creature.
            rng (random.Random, optional): Source of randomness; replaces the model's own.
        """
        super().__init__() # Initialize the base Mesa Model class
        if rng is not None:
            self.random = rng

        if not width > 0 or not height > 0:
            raise ConstructionError(f"World size must be positive, got {width}x{height}.")
        if food_count <= 0:
            raise ConstructionError(f"Food count must be positive, got {food_count}.")

        self.eye = eye if eye is not None else VisionSensor()
        self.topology = validate_topology(topology)
        if self.topology[0] != self.eye.cells or self.topology[-1] != BRAIN_OUTPUTS:
            raise ConstructionError(
                f"Topology {self.topology} must take {self.eye.cells} eye cells and produce {BRAIN_OUTPUTS} outputs.")

        if brains is None:
            if population_size <= 0:
                raise ConstructionError(f"Population size must be positive, got {population_size}.")
            brains = [NeuralNetwork.random(self.topology, self.random) for _ in range(population_size)]
        elif not brains:
            raise ConstructionError("A world needs at least one brain.")

        self.space = ContinuousSpace(width, height, torus=True)
        self.schedule = BaseScheduler(self) # Creatures activate in insertion order
        self.age = 0
        self.foods_eaten = 0
        self.creatures = []
        self.foods = []
        self.next_agent_id_counter = 0

        for brain in brains:
            if brain.topology != self.topology:
                raise ConstructionError(f"Brain topology {brain.topology} does not match {self.topology}.")
            self.spawn_creature(brain)
        for _ in range(food_count):
            self.spawn_food()

    @property
    def width(self):
        return self.space.width

    @property
    def height(self):
        return self.space.height

    def get_new_agent_id(self):
        """Generates a new unique ID for agents."""
        self.next_agent_id_counter += 1
        return self.next_agent_id_counter

    def random_food_position(self):
        """A uniformly random point inside the food spawn margin."""
        low, high = FOOD_SPAWN_MARGIN, 1.0 - FOOD_SPAWN_MARGIN
        return (self.random.uniform(low, high) * self.width,
                self.random.uniform(low, high) * self.height)

    def spawn_creature(self, brain):
        """Adds a creature with `brain` at a random position, heading and speed."""
        creature = Creature(self.get_new_agent_id(), self,
                            heading=self.random.random() * 2.0 * math.pi,
                            speed=max(self.random.random() * SPEED_MAX, SPEED_MIN),
                            brain=brain, eye=self.eye)
        position = (self.random.random() * self.width, self.random.random() * self.height)
        self.space.place_agent(creature, position)
        self.schedule.add(creature)
        self.creatures.append(creature)
        return creature

    def spawn_food(self):
        food = Food(self.get_new_agent_id(), self)
        self.space.place_agent(food, self.random_food_position())
        self.foods.append(food)
        return food

    def wrap_position(self, position):
        """Wraps a point onto the torus, strictly inside [0, width) x [0, height)."""
        x = position[0] % self.width
        y = position[1] % self.height
        # A tiny negative coordinate rounds up to the size itself
        if x >= self.width:
            x = 0.0
        if y >= self.height:
            y = 0.0
        return (x, y)

    def relocate_food(self, food):
        """Moves an eaten food item to a fresh random position."""
        self.space.move_agent(food, self.random_food_position())
        self.foods_eaten += 1

    def snapshot(self):
        """
        Read-only view of the world for renderers.

        Returns:
            WorldSnapshot: Creature positions, headings and colors, food positions,
            the tick counter and the food eaten so far this generation.
        """
        creatures = tuple(CreatureView(tuple(c.pos), c.heading, c.color_intensity, c.color)
                          for c in self.creatures)
        foods = tuple(FoodView(tuple(f.pos)) for f in self.foods)
        return WorldSnapshot(creatures, foods, self.age, self.foods_eaten)

    def draw_world(self, surface, font=None, overlay_lines=()):
        """
        Draws the food, the creatures and an optional text overlay.

        Args:
            surface (pygame.Surface): The Pygame surface to draw on.
            font (pygame.font.Font, optional): Font for the overlay; no overlay without one.
            overlay_lines (iterable of str): Extra lines shown above the world metrics.
        """
        if not pygame:
            return

        surface.fill(VIS_BACKGROUND_COLOR)
        for food in self.foods:
            food.draw(surface)
        for creature in self.creatures:
            creature.draw(surface)

        if font is None:
            return
        texts_to_render = list(overlay_lines) + [
            f"Tick: {self.age}",
            f"Creatures: {len(self.creatures)}",
            f"Food eaten: {self.foods_eaten}",
        ]
        y_offset = 5
        for text_str in texts_to_render:
            text_surface = font.render(text_str, True, VIS_TEXT_COLOR)
            surface.blit(text_surface, (5, y_offset))
            y_offset += VIS_FONT_SIZE - 5

    def step(self):
        """Advances every creature by one tick."""
        self.schedule.step() # Activate all scheduled creatures (calls their step() method)
        self.age += 1
