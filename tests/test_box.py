"""Tests for Box class."""

from dataclasses import FrozenInstanceError

import numpy as np
import pytest

from mdbench.system.box import Box


class TestBoxCreation:
    """Test box creation methods."""

    def test_cubic_box(self):
        """Test creating a cubic box."""
        box = Box.cubic(10.0)
        assert np.allclose(box.lengths, [10.0, 10.0, 10.0])
        assert np.isclose(box.volume, 1000.0)

    def test_orthorhombic_box(self):
        """Test creating an orthorhombic box."""
        box = Box.orthorhombic(10.0, 20.0, 30.0)
        assert np.allclose(box.lengths, [10.0, 20.0, 30.0])
        assert np.isclose(box.volume, 6000.0)
        assert box.min_length == 10.0

    def test_scalar_length(self):
        """Test that a scalar length gives a cubic box."""
        box = Box(5.0)
        assert np.allclose(box.lengths, [5.0, 5.0, 5.0])

    def test_invalid_shape(self):
        """Test that invalid shapes raise errors."""
        with pytest.raises(ValueError):
            Box(np.array([1.0, 2.0]))

    def test_non_positive_length(self):
        """Test that zero or negative lengths raise errors."""
        with pytest.raises(ValueError):
            Box.cubic(0.0)

    def test_frozen(self):
        """Test that the box is immutable."""
        box = Box.cubic(3.0)
        with pytest.raises(FrozenInstanceError):
            box.lengths = np.ones(3)


class TestPeriodicBoundaries:
    """Test the minimum image convention."""

    def test_minimum_image_crosses_boundary(self):
        """Test that the nearest image is used across a face."""
        box = Box.cubic(10.0)
        dr = box.minimum_image(np.array([0.5, 0.0, 0.0]), np.array([9.5, 0.0, 0.0]))
        assert np.allclose(dr, [-1.0, 0.0, 0.0])

    def test_minimum_image_several_pairs(self):
        """Test minimum image distances for several pairs."""
        box = Box.cubic(4.0)
        r1 = np.array([[0.0, 0.0, 0.0], [1.0, 1.0, 1.0]])
        r2 = np.array([[3.5, 0.0, 0.0], [1.0, 1.0, 2.5]])
        assert np.allclose(np.linalg.norm(box.minimum_image(r1, r2), axis=1), [0.5, 1.5])

    def test_minimum_image_invariant_under_shift(self):
        """Test that shifting by a box vector does not change the displacement."""
        box = Box.cubic(6.0)
        r1 = np.array([1.0, 2.0, 3.0])
        r2 = np.array([2.0, 5.5, 0.5])
        dr = box.minimum_image(r1, r2)
        dr_shifted = box.minimum_image(r1, r2 + np.array([6.0, -12.0, 18.0]))
        assert np.allclose(dr, dr_shifted)
