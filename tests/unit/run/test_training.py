"""
Unit tests for training data: TrainingDatum and the training set builders.
"""

import dataclasses
import math
import pytest

from neuralator.run.training import (TrainingDatum, load_training_set, sine_training_set,
                                     validate_training_set)


class TestTrainingDatum:

    def test_values_converted(self):
        datum = TrainingDatum(1, [0, 1])

        assert datum.expected == 1.0
        assert datum.inputs == (0.0, 1.0)
        assert isinstance(datum.inputs, tuple)

    def test_is_immutable(self):
        datum = TrainingDatum(1.0, (0.5,))

        with pytest.raises(dataclasses.FrozenInstanceError):
            datum.expected = 2.0

    def test_needs_inputs(self):
        with pytest.raises(ValueError, match="at least one input"):
            TrainingDatum(1.0, ())


class TestValidateTrainingSet:

    def test_returns_tuple(self, xor_training_set):
        data = validate_training_set(list(xor_training_set))

        assert data == tuple(xor_training_set)

    def test_accepts_generator(self):
        data = validate_training_set(TrainingDatum(i, (i,)) for i in range(3))

        assert len(data) == 3

    def test_empty_rejected(self):
        with pytest.raises(ValueError, match="empty"):
            validate_training_set([])


class TestSineTrainingSet:

    def test_size_and_width(self):
        data = sine_training_set()

        assert len(data) == 256
        assert all(len(datum.inputs) == 8 for datum in data)

    def test_inputs_are_bits_lowest_first(self):
        data = sine_training_set(count=8, bits=3)

        assert data[0].inputs == (0.0, 0.0, 0.0)
        assert data[1].inputs == (1.0, 0.0, 0.0)
        assert data[6].inputs == (0.0, 1.0, 1.0)

    def test_expected_follows_sine(self):
        data = sine_training_set()

        assert data[0].expected == 0.0
        assert data[255].expected == pytest.approx(0.0, abs=1e-12)
        assert data[64].expected == pytest.approx(math.sin(64 * 2 * math.pi / 255))
        assert max(datum.expected for datum in data) <= 1.0


class TestLoadTrainingSet:

    def test_load(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_text("0,16,1\n8,4,-1\n")

        data = load_training_set(path, scale=16)

        assert data == (TrainingDatum(1.0, (0.0, 1.0)), TrainingDatum(-1.0, (0.5, 0.25)))

    def test_single_row(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_text("1,2,3\n")

        data = load_training_set(path)

        assert data == (TrainingDatum(3.0, (1.0, 2.0)),)

    def test_other_delimiter(self, tmp_path):
        path = tmp_path / "data.txt"
        path.write_text("1 0\n0 1\n")

        data = load_training_set(path, delimiter=' ')

        assert [datum.expected for datum in data] == [0.0, 1.0]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="not found"):
            load_training_set(tmp_path / "missing.csv")

    def test_single_column_rejected(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_text("1\n2\n")

        with pytest.raises(ValueError, match="one output column"):
            load_training_set(path)
