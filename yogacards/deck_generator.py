# Yoga Flow Cards: deck generator
#
# Reads a pose sheet, renders every card and hands each one to a sink:
# SVG files, PNG files (Pillow) or a single HTML gallery page.
#
#   yogacards --csv data/default-poses.csv --outdir release --format svg
#   yogacards --format png --rows 0,3 --verbose
#   yogacards --variant discount --random 5

import argparse
import html
import logging
import os
import random
import re
import shutil
import sys
from dataclasses import dataclass, field

from .card_renderer import CardVariant, render_card
from .ingest import iter_records, read_pose_table
from .layout import DEFAULT_LAYOUT
from .png_export import SCALE, save_png
from .poses import PoseParseError, parse_pose

logger = logging.getLogger(__name__)

DEFAULT_CSV = os.path.join("data", "default-poses.csv")
DEFAULT_OUTDIR = "release"
FORMATS = ("svg", "png", "html")


def slugify(text, limit=60):
    return re.sub(r"[^a-zA-Z0-9]+", "_", text).strip("_").lower()[:limit] or "card"


def card_filename(index, pose, ext):
    return f"{index + 1:03d}_{slugify(pose.name)}.{ext}"


# ---------------- SINKS ----------------
class SvgDirectorySink:
    """One .svg file per card."""

    def __init__(self, outdir):
        self.outdir = outdir
        self.written = []
        os.makedirs(outdir, exist_ok=True)

    def __call__(self, index, pose, document):
        outpath = os.path.join(self.outdir, card_filename(index, pose, "svg"))
        with open(outpath, "w", encoding="utf-8") as fh:
            fh.write(document.to_svg())
        self.written.append(outpath)

    def close(self):
        pass


class PngDirectorySink(SvgDirectorySink):
    """One .png file per card, rasterized with Pillow."""

    def __init__(self, outdir, scale=SCALE):
        super().__init__(outdir)
        self.scale = scale

    def __call__(self, index, pose, document):
        outpath = os.path.join(self.outdir, card_filename(index, pose, "png"))
        self.written.append(save_png(document, outpath, scale=self.scale))


class HtmlGallerySink:
    """Collects inline SVGs and writes one page on close()."""

    PAGE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
  .cards {{ display: flex; flex-wrap: wrap; gap: 10px; }}
  .card {{ width: 175px; height: 300px; }}
</style>
</head>
<body>
<h1>{title}</h1>
<div class="cards">
{cards}
</div>
</body>
</html>
"""

    def __init__(self, path, title="Yoga Flow Cards"):
        self.path = path
        self.title = title
        self.cards = []
        self.written = []

    def __call__(self, index, pose, document):
        self.cards.append(
            f'<div class="card" title="{html.escape(pose.name)}">\n{document.to_svg()}</div>'
        )

    def close(self):
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as fh:
            fh.write(self.PAGE.format(title=html.escape(self.title), cards="\n".join(self.cards)))
        self.written.append(self.path)


def make_sink(fmt, outdir, scale=SCALE):
    if fmt == "svg":
        return SvgDirectorySink(outdir)
    if fmt == "png":
        return PngDirectorySink(outdir, scale=scale)
    if fmt == "html":
        return HtmlGallerySink(os.path.join(outdir, "index.html"))
    raise ValueError(f"Unknown output format {fmt!r}, expected one of {FORMATS}")


# ---------------- GENERATE ----------------
@dataclass
class DeckReport:
    rendered: int = 0
    errors: list = field(default_factory=list)     # (row_index, PoseParseError)
    warnings: list = field(default_factory=list)   # (row_index, RenderWarning)


def generate_deck(records, sink, variant=CardVariant.TRANSITION, layout=DEFAULT_LAYOUT,
                  strict=False, rows=None):
    """Parse, render and emit every selected record.

    ``records`` is a DataFrame or any iterable of mappings, ``sink`` a
    callable ``sink(index, pose, document)``. ``rows`` restricts the run to
    those 0-based row indices. A bad row is logged and skipped, or re-raised
    when ``strict``.
    """
    wanted = set(rows) if rows is not None else None
    report = DeckReport()
    for idx, row in iter_records(records):
        if wanted is not None and idx not in wanted:
            continue
        try:
            pose = parse_pose(row, row_number=idx)
        except PoseParseError as e:
            if strict:
                raise
            logger.warning("Skipping row %s: %s", idx, e)
            report.errors.append((idx, e))
            continue
        document = render_card(pose, layout, variant)
        for w in document.warnings:
            logger.warning("Card %r (row %s): %s", pose.name, idx, w)
            report.warnings.append((idx, w))
        sink(idx, pose, document)
        report.rendered += 1
        logger.debug("Generated card: %s", pose.name)
    return report


# ---------------- CLI ----------------
def parse_rows(text):
    return [int(x.strip()) for x in text.split(",") if x.strip()]


def build_parser():
    parser = argparse.ArgumentParser(description="Generate yoga pose cards from CSV.")
    parser.add_argument("--csv", type=str, default=DEFAULT_CSV, help="CSV file to use")
    parser.add_argument("--outdir", type=str, default=DEFAULT_OUTDIR, help="Output directory")
    parser.add_argument("--format", choices=FORMATS, default="svg", help="Output format")
    parser.add_argument("--variant", choices=[v.value for v in CardVariant],
                        default=CardVariant.TRANSITION.value,
                        help="Meaning of the per-category values on the right edge")
    parser.add_argument("--rows", type=str, default=None,
                        help="Comma-separated list of row numbers (0-based) to generate only those cards")
    parser.add_argument("--random", nargs="?", const=5, type=int, default=None,
                        help="Generate N random cards (default 5 if not specified)")
    parser.add_argument("--no-header", action="store_true",
                        help="CSV has no header row; columns are in the standard order")
    parser.add_argument("--strict", action="store_true", help="Abort on the first unparseable row")
    parser.add_argument("--scale", type=int, default=SCALE, help="PNG pixels per card unit")
    parser.add_argument("--clean", action="store_true", help="Remove the output directory first")
    parser.add_argument("--verbose", action="store_true", help="Enable debug output")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    df = read_pose_table(args.csv, header=not args.no_header)
    if args.random is not None:
        n = args.random if args.random > 0 else 5
        rows = random.sample(range(len(df)), min(n, len(df)))
    elif args.rows:
        try:
            rows = parse_rows(args.rows)
        except ValueError:
            logger.error("Invalid --rows value %r, expected comma-separated integers", args.rows)
            return 1
        for idx in rows:
            if not 0 <= idx < len(df):
                logger.warning("Row %d is out of range (sheet has %d rows), skipping", idx, len(df))
        rows = [idx for idx in rows if 0 <= idx < len(df)]
        if not rows:
            logger.error("No valid rows selected")
            return 1
    else:
        rows = None

    if args.clean and os.path.exists(args.outdir):
        shutil.rmtree(args.outdir)
    sink = make_sink(args.format, args.outdir, scale=args.scale)
    try:
        report = generate_deck(df, sink, variant=args.variant, strict=args.strict, rows=rows)
    except PoseParseError as e:
        logger.error("Aborted: %s", e)
        return 1
    finally:
        sink.close()

    logger.info("Generated %d card(s) in %s (%d skipped)",
                report.rendered, args.outdir, len(report.errors))
    return 0 if report.rendered else 1


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
