"""Tests for the debug image writer."""
import numpy as np

from annotation_context.debug import DebugImageWriter
from annotation_context.extract import SubImageExtractor
from annotation_context.rendering import load_image
from schemas.geometry import PDFRect


class TestDebugImageWriter:
    def test_writes_png(self, tmp_path):
        img = np.zeros((12, 20, 3), dtype=np.uint8)
        img[..., 0] = 200
        path = DebugImageWriter(tmp_path)(img)
        assert path.exists()
        assert path.name.startswith("context-")
        assert path.suffix == ".png"
        assert np.array_equal(load_image(str(path)), img)

    def test_names_are_unique(self, tmp_path):
        writer = DebugImageWriter(tmp_path)
        img = np.zeros((4, 4, 3), dtype=np.uint8)
        assert writer(img) != writer(img)
        assert len(list(tmp_path.glob("context-*.png"))) == 2

    def test_creates_directory(self, tmp_path):
        target = tmp_path / "nested" / "debug"
        DebugImageWriter(target)(np.zeros((4, 4, 3), dtype=np.uint8))
        assert target.is_dir()

    def test_extractor_dumps_outputs(self, tmp_path, white_page):
        extractor = SubImageExtractor(debug_sink=DebugImageWriter(tmp_path))
        extractor.make_plain_sub_image(white_page, PDFRect(x0=100, y0=200, x1=150, y1=230))
        files = list(tmp_path.glob("context-*.png"))
        assert len(files) == 1
        assert load_image(str(files[0])).shape == (180, 220, 3)

    def test_unwritable_directory_does_not_break_extraction(self, tmp_path, white_page):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x")
        extractor = SubImageExtractor(debug_sink=DebugImageWriter(blocker))
        img = extractor.make_plain_sub_image(white_page, PDFRect(x0=100, y0=200, x1=150, y1=230))
        assert img.shape == (180, 220, 3)

    def test_sink_return_value_is_ignored(self, tmp_path, white_page):
        returned = []

        def sink(img):
            path = DebugImageWriter(tmp_path)(img)
            returned.append(path)
            return path

        extractor = SubImageExtractor(debug_sink=sink)
        img = extractor.make_plain_sub_image(white_page, PDFRect(x0=100, y0=200, x1=150, y1=230))
        assert isinstance(img, np.ndarray)
        assert returned[0].exists()
