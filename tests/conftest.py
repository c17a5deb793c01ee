"""Pytest configuration and shared fixtures."""

import pytest
import random
import sys
from pathlib import Path

# Add the source directory to the Python path
src_dir = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_dir))


@pytest.fixture
def rng():
    """Seeded random source, so every test sees the same networks."""
    return random.Random(42)


@pytest.fixture
def config():
    """A small configuration, fully connected (fill rate 1.0) for predictable signals."""
    from neuralator.run.config import Config

    config = Config()
    config.layer_sizes = (2, 3, 2)
    config.population_size = 6
    config.survivors_per_generation = 2
    config.generations = 3
    config.fill_rate = 1.0
    config.min_strength = 0.1
    config.max_strength = 1.0
    config.seed = 42
    return config


@pytest.fixture
def xor_training_set():
    """XOR, with outputs on the two ends of the default output range."""
    from neuralator.run.training import TrainingDatum

    return (TrainingDatum(-1.0, (0.0, 0.0)),
            TrainingDatum( 1.0, (0.0, 1.0)),
            TrainingDatum( 1.0, (1.0, 0.0)),
            TrainingDatum(-1.0, (1.0, 1.0)))
