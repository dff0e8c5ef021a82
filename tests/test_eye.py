import math
import random

import numpy as np
import pytest

from creature_evolution_library.errors import ConstructionError
from creature_evolution_library.eye import VisionSensor, wrap_angle


@pytest.fixture
def eye():
    return VisionSensor(fov_range=20.0, fov_angle=math.pi, cells=5)


def test_food_straight_ahead_lands_in_middle_cell(eye):
    stimuli = eye.sense((50.0, 50.0), 0.0, [(50.0, 40.0)])
    assert stimuli.tolist() == [0.0, 0.0, 0.5, 0.0, 0.0]


def test_food_on_field_of_view_edges_maps_to_first_and_last_cell(eye):
    left = eye.sense((50.0, 50.0), 0.0, [(40.0, 50.0)])
    right = eye.sense((50.0, 50.0), 0.0, [(60.0, 50.0)])
    assert left.tolist() == [0.5, 0.0, 0.0, 0.0, 0.0]
    assert right.tolist() == [0.0, 0.0, 0.0, 0.0, 0.5]


def test_food_beyond_range_is_ignored(eye):
    stimuli = eye.sense((50.0, 50.0), 0.0, [(50.0, 29.0), (71.0, 50.0)])
    assert not stimuli.any()


def test_food_behind_the_field_of_view_is_ignored(eye):
    assert not eye.sense((50.0, 50.0), 0.0, [(50.0, 60.0)]).any()


def test_food_on_top_of_observer_gives_full_energy(eye):
    stimuli = eye.sense((50.0, 50.0), 1.0, [(50.0, 50.0)])
    assert stimuli[2] == 1.0
    assert stimuli.sum() == 1.0


def test_heading_rotates_the_field_of_view(eye):
    # Facing right, food to the right is straight ahead
    stimuli = eye.sense((50.0, 50.0), math.pi / 2.0, [(60.0, 50.0)])
    assert stimuli.tolist() == [0.0, 0.0, 0.5, 0.0, 0.0]


def test_unwrapped_heading_is_equivalent_to_wrapped_heading(eye):
    foods = [(55.0, 42.0), (43.0, 47.0), (58.0, 51.0)]
    wrapped = eye.sense((50.0, 50.0), 0.4, foods)
    unwrapped = eye.sense((50.0, 50.0), 0.4 + 6.0 * math.pi, foods)
    assert np.allclose(wrapped, unwrapped)


def test_energy_from_food_in_same_cell_accumulates(eye):
    stimuli = eye.sense((50.0, 50.0), 0.0, [(50.0, 40.0), (50.0, 45.0), (50.0, 30.0)])
    assert stimuli[2] == pytest.approx(0.5 + 0.75)


def test_sense_does_not_depend_on_food_order():
    eye = VisionSensor(fov_range=100.0, fov_angle=1.5 * math.pi, cells=9)
    rng = random.Random(2)
    foods = [(rng.uniform(0, 200), rng.uniform(0, 200)) for _ in range(30)]
    shuffled = list(foods)
    rng.shuffle(shuffled)
    assert np.allclose(eye.sense((100.0, 100.0), 0.7, foods), eye.sense((100.0, 100.0), 0.7, shuffled))


def test_full_circle_eye_sees_everything_in_range():
    eye = VisionSensor(fov_range=10.0, fov_angle=2.0 * math.pi, cells=13)
    foods = [(5.0, 0.0), (10.0, 5.0), (5.0, 10.0), (0.0, 5.0)]
    stimuli = eye.sense((5.0, 5.0), 0.0, foods)
    assert stimuli.sum() == pytest.approx(4 * 0.5)
    assert np.all(stimuli >= 0.0)


@pytest.mark.parametrize("fov_range, fov_angle, cells", [
    (0.0, 1.0, 3), (-1.0, 1.0, 3), (10.0, 0.0, 3), (10.0, 1.0, 0), (10.0, 1.0, 2.5)])
def test_invalid_eye_configuration_is_rejected(fov_range, fov_angle, cells):
    with pytest.raises(ConstructionError):
        VisionSensor(fov_range, fov_angle, cells)


def test_wrap_angle_range():
    assert wrap_angle(-math.pi) == math.pi
    assert wrap_angle(math.pi) == math.pi
    assert wrap_angle(2.5 * math.pi) == pytest.approx(0.5 * math.pi)
    assert wrap_angle(-2.5 * math.pi) == pytest.approx(-0.5 * math.pi)
