"""Tests for reading pixel spacing from session files."""

from pathlib import Path

import pytest

from stainframe.metadata.session import read_session_pixel_spacing, session_path_for


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


class TestSessionPathFor:
    """Tests for session_path_for."""

    def test_appends_suffix(self):
        """Test the session file sits next to the image."""
        path = session_path_for("/slides/sample.svs")

        assert path == Path("/slides/sample.svs.session.xml")


class TestReadSessionPixelSpacing:
    """Tests for read_session_pixel_spacing."""

    def test_missing_file(self, tmp_path):
        """Test a missing session file gives unit spacing."""
        spacing = read_session_pixel_spacing(tmp_path / "none.session.xml")

        assert spacing == (1.0, 1.0)

    def test_attribute_form(self, tmp_path):
        """Test spacing stored as attributes."""
        path = _write(
            tmp_path / "a.session.xml",
            '<?xml version="1.0"?>\n'
            "<session><image>"
            '<pixelsize width="0.25" height="0.5"/>'
            "</image></session>\n",
        )

        assert read_session_pixel_spacing(path) == pytest.approx((0.25, 0.5))

    def test_child_element_form(self, tmp_path):
        """Test spacing stored as child elements."""
        path = _write(
            tmp_path / "b.session.xml",
            "<session><pixel-size>"
            "<width>0.3</width><height>0.4</height>"
            "</pixel-size></session>",
        )

        assert read_session_pixel_spacing(path) == pytest.approx((0.3, 0.4))

    def test_unit_attribute(self, tmp_path):
        """Test spacing in millimeters is converted to micrometers."""
        path = _write(
            tmp_path / "c.session.xml",
            '<session><PixelSize x="0.00025" y="0.00025" unit="mm"/></session>',
        )

        assert read_session_pixel_spacing(path) == pytest.approx((0.25, 0.25))

    def test_no_spacing_element(self, tmp_path):
        """Test a session without spacing gives unit spacing."""
        path = _write(tmp_path / "d.session.xml", "<session><view/></session>")

        assert read_session_pixel_spacing(path) == (1.0, 1.0)

    def test_incomplete_spacing(self, tmp_path):
        """Test a spacing element missing an axis gives unit spacing."""
        path = _write(
            tmp_path / "e.session.xml", '<session><pixelsize width="0.5"/></session>'
        )

        assert read_session_pixel_spacing(path) == (1.0, 1.0)

    def test_invalid_xml(self, tmp_path):
        """Test unparseable XML is reported."""
        path = _write(tmp_path / "f.session.xml", "<session><pixelsize")

        with pytest.raises(ValueError, match="Invalid session file"):
            read_session_pixel_spacing(path)

    def test_non_numeric_spacing(self, tmp_path):
        """Test non-numeric spacing values are reported."""
        path = _write(
            tmp_path / "g.session.xml",
            '<session><pixelsize width="wide" height="0.5"/></session>',
        )

        with pytest.raises(ValueError, match="Invalid pixel spacing"):
            read_session_pixel_spacing(path)
