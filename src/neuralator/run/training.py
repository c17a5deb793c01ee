"""
Neuralator Training Data Module

The training set is a fixed, ordered sequence of TrainingDatum, built once
before the first generation and never modified afterwards.

Classes:
    TrainingDatum: One expected output and the inputs that should produce it

Functions:
    validate_training_set(data): Freeze a training set, rejecting an empty one
    sine_training_set(count):    Binary-encoded integers mapped onto a sine wave
    load_training_set(path):     Read a comma separated file, label in the last column
"""

import math
import os
from dataclasses import dataclass
from typing      import Iterable

import numpy as np

@dataclass(frozen=True)
class TrainingDatum:
    """
    An expected scalar output and the input activations that should produce it.
    """
    expected: float
    inputs  : tuple[float, ...]

    def __post_init__(self):
        # accept any sequence of numbers, store an immutable tuple of floats
        object.__setattr__(self, 'expected', float(self.expected))
        object.__setattr__(self, 'inputs', tuple(float(value) for value in self.inputs))
        if not self.inputs:
            raise ValueError("A training datum needs at least one input value")

def validate_training_set(data: Iterable[TrainingDatum]) -> tuple[TrainingDatum, ...]:
    """
    Return the training set as a tuple.

    Raises:
        ValueError: if the training set is empty
    """
    data = tuple(data)
    if not data:
        raise ValueError("The training set is empty")
    return data

def sine_training_set(count: int = 256, bits: int = 8) -> tuple[TrainingDatum, ...]:
    """
    Build a training set sampling one period of a sine wave.

    Datum 'i' has as inputs the 'bits' lowest bits of 'i' (least significant first),
    and as expected output sin(i * 2pi / 255).

    Parameters:
        count: Number of data
        bits:  Number of inputs per datum
    """
    data = []
    for index in range(count):
        inputs   = [(index >> bit) & 0x1 for bit in range(bits)]
        expected = math.sin(index * (2 * math.pi / 255))
        data.append(TrainingDatum(expected, inputs))
    return tuple(data)

def load_training_set(path: str | os.PathLike, scale: float = 1.0, delimiter: str = ',') -> tuple[TrainingDatum, ...]:
    """
    Load a training set from a delimited text file.

    Each row holds the inputs followed by the expected output. Inputs are divided
    by 'scale' (e.g. 16 for pixel intensities in 0..16).

    Parameters:
        path:      File to read
        scale:     Divisor applied to every input
        delimiter: Column separator

    Returns:
        the training set, in file order
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Training set file '{path}' not found")

    rows = np.loadtxt(path, delimiter=delimiter, ndmin=2)
    if rows.shape[0] == 0:
        raise ValueError(f"Training set file '{path}' holds no data")
    if rows.shape[1] < 2:
        raise ValueError(f"Training set file '{path}' needs at least one input and one output column")

    return tuple(TrainingDatum(row[-1], row[:-1] / scale) for row in rows)
