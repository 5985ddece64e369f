"""Tests for the deck generator entry point and CLI."""

from __future__ import annotations

from pathlib import Path

import pytest

from yogacards.card_renderer import WarningKind
from yogacards.deck_generator import (
    HtmlGallerySink,
    SvgDirectorySink,
    generate_deck,
    main,
    make_sink,
    parse_rows,
    slugify,
)
from yogacards.ingest import read_pose_table
from yogacards.poses import MissingFieldError

ROWS = [
    {"name": "Mountain", "categories": "standing", "activationCost": "1", "standing": "2"},
    {"name": "Broken", "categories": "standing"},
    {"name": "Crow", "categories": "flying|kneeling", "activationCost": "2"},
]


class CollectingSink:
    def __init__(self):
        self.cards = []

    def __call__(self, index, pose, document):
        self.cards.append((index, pose.name, document))


class TestGenerateDeck:
    """Tests for generate_deck with injected source and sink."""

    def test_renders_good_rows(self) -> None:
        """Parse errors are reported, the rest reaches the sink."""
        sink = CollectingSink()
        report = generate_deck(ROWS, sink)
        assert [(idx, name) for idx, name, _ in sink.cards] == [(0, "Mountain"), (2, "Crow")]
        assert report.rendered == 2
        assert [idx for idx, _ in report.errors] == [1]

    def test_collects_render_warnings(self) -> None:
        """Unknown categories end up in the report."""
        report = generate_deck(ROWS, CollectingSink())
        assert [(idx, w.kind) for idx, w in report.warnings] == [(2, WarningKind.UNKNOWN_CATEGORY)]

    def test_strict_raises(self) -> None:
        """strict aborts on the first bad row."""
        with pytest.raises(MissingFieldError):
            generate_deck(ROWS, CollectingSink(), strict=True)

    def test_row_selection(self) -> None:
        """Only the selected rows are rendered."""
        sink = CollectingSink()
        report = generate_deck(ROWS, sink, rows=[2])
        assert [name for _, name, _ in sink.cards] == ["Crow"]
        assert report.errors == []

    def test_dataframe_source(self, default_csv: Path) -> None:
        """A pandas DataFrame is an accepted source."""
        sink = CollectingSink()
        report = generate_deck(read_pose_table(default_csv), sink, variant="discount")
        assert report.rendered == 8
        assert sink.cards[0][1] == "Mountain"


class TestSinks:
    """Tests for the file sinks."""

    def test_svg_directory(self, tmp_path: Path) -> None:
        """One numbered SVG per card."""
        sink = SvgDirectorySink(str(tmp_path / "out"))
        generate_deck(ROWS, sink)
        names = sorted(p.name for p in (tmp_path / "out").iterdir())
        assert names == ["001_mountain.svg", "003_crow.svg"]
        assert (tmp_path / "out" / "001_mountain.svg").read_text(encoding="utf-8").startswith("<svg")

    def test_html_gallery(self, tmp_path: Path) -> None:
        """All cards land inline on one page."""
        sink = HtmlGallerySink(str(tmp_path / "index.html"))
        generate_deck(ROWS, sink)
        sink.close()
        page = (tmp_path / "index.html").read_text(encoding="utf-8")
        assert page.count("<svg") == 2
        assert 'title="Mountain"' in page

    def test_unknown_format(self, tmp_path: Path) -> None:
        """Only svg, png and html are known."""
        with pytest.raises(ValueError, match="Unknown output format"):
            make_sink("pdf", str(tmp_path))


class TestHelpers:
    """Tests for small helpers."""

    def test_slugify(self) -> None:
        assert slugify("Child's Pose") == "child_s_pose"
        assert slugify("***") == "card"

    def test_parse_rows(self) -> None:
        assert parse_rows("0, 2,,5") == [0, 2, 5]


class TestMain:
    """Tests for the command line."""

    def test_svg_deck(self, default_csv: Path, tmp_path: Path) -> None:
        """The bundled sheet renders to eight SVG files."""
        out = tmp_path / "release"
        assert main(["--csv", str(default_csv), "--outdir", str(out)]) == 0
        assert len(list(out.glob("*.svg"))) == 8

    def test_rows_and_png(self, default_csv: Path, tmp_path: Path) -> None:
        """--rows limits the deck; --format png writes PNGs."""
        out = tmp_path / "png"
        args = ["--csv", str(default_csv), "--outdir", str(out), "--format", "png",
                "--rows", "0,3", "--scale", "1"]
        assert main(args) == 0
        assert sorted(p.name for p in out.iterdir()) == ["001_mountain.png", "004_child_s_pose.png"]

    def test_rows_not_integers(self, default_csv: Path, tmp_path: Path,
                               caplog: pytest.LogCaptureFixture) -> None:
        """A non-numeric --rows value exits with status 1 instead of a traceback."""
        out = tmp_path / "bad_rows"
        with caplog.at_level("ERROR"):
            assert main(["--csv", str(default_csv), "--outdir", str(out), "--rows", "a"]) == 1
        assert "Invalid --rows value 'a'" in caplog.text
        assert not out.exists()

    def test_rows_out_of_range(self, default_csv: Path, tmp_path: Path,
                               caplog: pytest.LogCaptureFixture) -> None:
        """Rows past the end of the sheet are reported and skipped."""
        out = tmp_path / "range"
        with caplog.at_level("WARNING"):
            assert main(["--csv", str(default_csv), "--outdir", str(out), "--rows", "0,99"]) == 0
        assert "Row 99 is out of range" in caplog.text
        assert [p.name for p in out.iterdir()] == ["001_mountain.svg"]

    def test_rows_all_out_of_range(self, default_csv: Path, tmp_path: Path) -> None:
        """Nothing left to render is a failure."""
        out = tmp_path / "none"
        assert main(["--csv", str(default_csv), "--outdir", str(out), "--rows", "99,-1"]) == 1

    def test_random_sample(self, default_csv: Path, tmp_path: Path) -> None:
        """--random N picks N distinct rows."""
        out = tmp_path / "random"
        assert main(["--csv", str(default_csv), "--outdir", str(out), "--random", "3"]) == 0
        assert len(list(out.glob("*.svg"))) == 3

    def test_clean_removes_stale_output(self, default_csv: Path, tmp_path: Path) -> None:
        """--clean wipes the output directory first."""
        out = tmp_path / "release"
        out.mkdir()
        (out / "stale.svg").write_text("old", encoding="utf-8")
        assert main(["--csv", str(default_csv), "--outdir", str(out), "--rows", "0", "--clean"]) == 0
        assert [p.name for p in out.iterdir()] == ["001_mountain.svg"]

    def test_strict_failure(self, tmp_path: Path) -> None:
        """A bad row aborts with exit status 1 under --strict."""
        csv_path = tmp_path / "bad.csv"
        csv_path.write_text("name,categories,activationCost\nBad,standing,lots\n", encoding="utf-8")
        assert main(["--csv", str(csv_path), "--outdir", str(tmp_path / "o"), "--strict"]) == 1

    def test_headerless_html(self, tmp_path: Path) -> None:
        """--no-header reads positional columns; html writes one page."""
        csv_path = tmp_path / "sheet.csv"
        csv_path.write_text("Cobra,prone,1,throat,,,,,,3,Raise heat by 1,\n", encoding="utf-8")
        out = tmp_path / "gallery"
        assert main(["--csv", str(csv_path), "--outdir", str(out), "--no-header", "--format", "html"]) == 0
        assert "Cobra" in (out / "index.html").read_text(encoding="utf-8")
