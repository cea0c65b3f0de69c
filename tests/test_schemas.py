"""Tests for schema models and enums."""
import pytest
from schemas.enums import MarkupKind, CONTEXT_MULTIPLIERS, context_multiplier
from schemas.geometry import PDFRect, PixelRect
from schemas.manifest import Manifest, ManifestEntry


class TestEnums:
    def test_markup_values(self):
        assert MarkupKind.NONE.value == "none"
        assert MarkupKind.HIGHLIGHT.value == "highlight"
        assert MarkupKind.POPUP.value == "popup"

    def test_context_multipliers(self):
        assert context_multiplier(MarkupKind.NONE) == 1
        assert context_multiplier(MarkupKind.HIGHLIGHT) == 1
        assert context_multiplier(MarkupKind.POPUP) == 2

    def test_every_kind_has_a_multiplier(self):
        assert set(CONTEXT_MULTIPLIERS) == set(MarkupKind)

    def test_multiplier_accepts_strings(self):
        assert context_multiplier("popup") == 2

    def test_enums_are_str(self):
        """All enums should be str subclasses for YAML/JSON round trips."""
        assert isinstance(MarkupKind.POPUP, str)


class TestPDFRect:
    def test_valid(self):
        rect = PDFRect(x0=1, y0=2, x1=3, y1=4)
        assert (rect.x0, rect.y0, rect.x1, rect.y1) == (1, 2, 3, 4)

    def test_degenerate_is_allowed(self):
        PDFRect(x0=5, y0=5, x1=5, y1=5)

    def test_inverted_corners_rejected(self):
        with pytest.raises(Exception):
            PDFRect(x0=10, y0=0, x1=5, y1=10)
        with pytest.raises(Exception):
            PDFRect(x0=0, y0=10, x1=5, y1=5)

    @pytest.mark.parametrize("bad", [float("inf"), float("nan")])
    def test_non_finite_corners_rejected(self, bad):
        with pytest.raises(Exception):
            PDFRect(x0=0, y0=0, x1=bad, y1=10)


class TestPixelRect:
    def test_edges(self):
        rect = PixelRect(10, 20, 30, 40)
        assert rect.right == 40
        assert rect.bottom == 60
        assert rect.as_tuple() == (10, 20, 30, 40)

    def test_empty(self):
        assert PixelRect(0, 0, 0, 5).is_empty
        assert PixelRect(0, 0, 5, -1).is_empty
        assert not PixelRect(0, 0, 1, 1).is_empty

    def test_clip_inside_is_identity(self):
        assert PixelRect(1, 2, 3, 4).clip(10, 10) == PixelRect(1, 2, 3, 4)

    def test_clip_overhang(self):
        assert PixelRect(-5, 8, 10, 10).clip(10, 10) == PixelRect(0, 8, 5, 2)

    def test_clip_outside(self):
        assert PixelRect(20, 20, 5, 5).clip(10, 10).is_empty


class TestManifest:
    def test_rect_entry(self):
        entry = ManifestEntry(pdf="a.pdf", page=1, rect={"x0": 0, "y0": 0, "x1": 1, "y1": 1})
        assert entry.markup == MarkupKind.NONE
        assert entry.quads is None

    def test_quads_entry(self):
        entry = ManifestEntry(pdf="a.pdf", page=2, markup="highlight", quads=[0] * 16)
        assert entry.markup == MarkupKind.HIGHLIGHT

    def test_short_quads_are_accepted(self):
        entry = ManifestEntry(pdf="a.pdf", page=1, quads=[1, 2, 3])
        assert entry.quads == [1, 2, 3]

    @pytest.mark.parametrize("bad", [float("inf"), float("nan")])
    def test_non_finite_quads_rejected(self, bad):
        with pytest.raises(Exception):
            ManifestEntry(pdf="a.pdf", page=1, quads=[100, 230, bad, 230, 100, 200, 150, 200])

    def test_needs_exactly_one_geometry(self):
        with pytest.raises(Exception):
            ManifestEntry(pdf="a.pdf", page=1)
        with pytest.raises(Exception):
            ManifestEntry(
                pdf="a.pdf", page=1,
                rect={"x0": 0, "y0": 0, "x1": 1, "y1": 1}, quads=[0] * 8,
            )

    def test_page_is_one_indexed(self):
        with pytest.raises(Exception):
            ManifestEntry(pdf="a.pdf", page=0, quads=[0] * 8)

    def test_unknown_markup(self):
        with pytest.raises(Exception):
            ManifestEntry(pdf="a.pdf", page=1, markup="underline", quads=[0] * 8)

    def test_empty_manifest(self):
        assert Manifest().entries == []
