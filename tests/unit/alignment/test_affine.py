"""Tests for placement transform utilities."""

import numpy as np
import pytest

from stainframe.alignment.affine import AffineTransform, TransformDirection
from stainframe.alignment.geometry import Point, Polygon, Size


class TestAffineTransform:
    """Tests for the AffineTransform class."""

    def test_identity_transform(self):
        """Test identity transformation."""
        t = AffineTransform.identity()

        # Check matrix is identity
        np.testing.assert_array_almost_equal(t.matrix, np.eye(3))

        # Check properties
        assert t.scale == (1.0, 1.0)
        assert t.rotation == pytest.approx(0.0)
        assert t.translation == (0.0, 0.0)
        assert t.is_identity
        assert not t.has_center

    def test_fields_are_coerced(self):
        """Test that plain tuples become Point/Size with float values."""
        t = AffineTransform(translation=(1, 2), scale=(2, 3), rotation=5, center=(4, 6))

        assert isinstance(t.translation, Point)
        assert isinstance(t.scale, Size)
        assert isinstance(t.center, Point)
        assert isinstance(t.scale.width, float)
        assert isinstance(t.rotation, float)

    def test_scale_translate_transform(self):
        """Test transforming a point with scale and translation."""
        t = AffineTransform(translation=Point(10.0, 20.0), scale=Size(2.0, 3.0))

        # Point (5, 5) -> (2*5 + 10, 3*5 + 20) = (20, 35)
        x, y = t.transform_point(5.0, 5.0)
        assert x == pytest.approx(20.0)
        assert y == pytest.approx(35.0)

    def test_scale_about_center(self):
        """Test that scaling keeps the center fixed."""
        t = AffineTransform(scale=Size(2.0, 2.0), center=Point(10.0, 10.0))

        assert t.transform_point(10.0, 10.0) == pytest.approx((10.0, 10.0))
        # One unit right of center ends up two units right of center
        assert t.transform_point(11.0, 10.0) == pytest.approx((12.0, 10.0))

    def test_rotation_about_origin(self):
        """Test a 90 degree rotation about the origin."""
        t = AffineTransform(rotation=90.0)

        x, y = t.transform_point(1.0, 0.0)
        assert x == pytest.approx(0.0, abs=1e-12)
        assert y == pytest.approx(1.0)

    def test_rotation_about_center(self):
        """Test a 90 degree rotation about an explicit center."""
        t = AffineTransform(rotation=90.0, center=Point(5.0, 5.0))

        x, y = t.transform_point(6.0, 5.0)
        assert x == pytest.approx(5.0)
        assert y == pytest.approx(6.0)

    def test_rotate_then_scale_order(self):
        """Test that rotation happens before non-uniform scaling."""
        t = AffineTransform(rotation=90.0, scale=Size(2.0, 3.0))

        # (1, 0) -> rotate -> (0, 1) -> scale -> (0, 3)
        x, y = t.transform_point(1.0, 0.0)
        assert x == pytest.approx(0.0, abs=1e-12)
        assert y == pytest.approx(3.0)

    def test_transform_multiple_points(self):
        """Test transforming multiple points at once."""
        t = AffineTransform(scale=Size(2.0, 1.0))

        points = np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
        transformed = t.transform_points(points)

        expected = np.array([[2.0, 2.0], [6.0, 4.0], [10.0, 6.0]])
        np.testing.assert_array_almost_equal(transformed, expected)

    def test_inverse_transform(self):
        """Test inverse transformation."""
        t = AffineTransform(
            translation=Point(7.0, -2.0),
            scale=Size(2.0, 0.5),
            rotation=30.0,
            center=Point(3.0, 4.0),
        )

        # Transform point and then inverse should return original
        x, y = 5.0, 7.0
        x1, y1 = t.transform_point(x, y)
        x2, y2 = t.inverse_transform_point(x1, y1)

        assert x2 == pytest.approx(x)
        assert y2 == pytest.approx(y)

    def test_inverse_matrix(self):
        """Test that the inverse matrix undoes the forward matrix."""
        t = AffineTransform(
            translation=Point(-4.0, 9.0),
            scale=Size(1.5, 2.5),
            rotation=-75.0,
            center=Point(12.0, 7.0),
        )

        np.testing.assert_array_almost_equal(t.inverse_matrix @ t.matrix, np.eye(3))

    def test_transform_polygon_directions(self):
        """Test forward and inverse polygon transforms keep vertex order."""
        t = AffineTransform(translation=Point(10.0, 0.0), scale=Size(2.0, 2.0))
        poly = Polygon([(0, 0), (1, 0), (1, 1)])

        forward = t.transform_polygon(poly)
        assert forward.allclose(Polygon([(10, 0), (12, 0), (12, 2)]))

        back = t.transform_polygon(forward, TransformDirection.INVERSE)
        assert back.allclose(poly)

    def test_transform_empty_polygon(self):
        """Test that an empty polygon stays empty."""
        t = AffineTransform(rotation=45.0)

        assert t.transform_polygon(Polygon()).is_empty
        assert t.transform_polygon(Polygon(), TransformDirection.INVERSE).is_empty

    def test_replace(self):
        """Test copying with changed fields."""
        t = AffineTransform(rotation=10.0)
        t2 = t.replace(center=Point(1.0, 2.0))

        assert t2.center == (1.0, 2.0)
        assert t2.rotation == 10.0
        assert t.center == (0.0, 0.0)
        assert t2.has_center

    def test_repr(self):
        """Test string representation."""
        t = AffineTransform.identity()
        repr_str = repr(t)

        assert "AffineTransform" in repr_str
        assert "scale" in repr_str
        assert "rotation" in repr_str
        assert "center" in repr_str
