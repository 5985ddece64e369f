# Yoga Flow Cards: PNG export
#
# Paints a CardDocument with Pillow. Every element goes on its own
# transparent layer which is then alpha-composited onto the card, so
# fill-opacity blends with whatever was drawn underneath.

from functools import lru_cache
import logging

from PIL import Image, ImageColor, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

SCALE = 4                        # 175x300 card -> 700x1200 px
DPI = 300                        # Output DPI for PNGs
FONT_REGULAR = "DejaVuSans.ttf"
FONT_BOLD = "DejaVuSans-Bold.ttf"
ANCHORS = {"start": "ls", "middle": "ms", "end": "rs"}   # SVG y is the baseline


@lru_cache(maxsize=None)
def load_font(size, bold=False):
    name = FONT_BOLD if bold else FONT_REGULAR
    try:
        return ImageFont.truetype(name, size)
    except OSError:
        logger.warning("Could not load %s, using default font.", name)
        return ImageFont.load_default(size=size)


def _num(el, name, default=0.0):
    value = el.get(name)
    return default if value is None else float(value)


def _color(value, opacity=1.0):
    """SVG paint -> RGBA tuple, None for 'none' or missing."""
    if value is None or value == "none":
        return None
    r, g, b = ImageColor.getrgb(str(value))[:3]
    return (r, g, b, int(round(255 * opacity)))


# ---------------- DRAW HELPERS ----------------
def draw_rect(draw, el, s):
    x, y = _num(el, "x") * s, _num(el, "y") * s
    w, h = _num(el, "width") * s, _num(el, "height") * s
    box = [x, y, x + w - 1, y + h - 1]
    fill = _color(el.get("fill", "black"), _num(el, "fill-opacity", 1.0))
    outline = _color(el.get("stroke"))
    width = max(1, int(round(_num(el, "stroke-width", 1.0) * s))) if outline else 0
    rx = int(round(_num(el, "rx") * s))
    if rx:
        draw.rounded_rectangle(box, radius=rx, fill=fill, outline=outline, width=width)
    else:
        draw.rectangle(box, fill=fill, outline=outline, width=width)


def draw_circle(draw, el, s):
    cx, cy, r = _num(el, "cx") * s, _num(el, "cy") * s, _num(el, "r") * s
    outline = _color(el.get("stroke"))
    width = max(1, int(round(_num(el, "stroke-width", 1.0) * s))) if outline else 0
    draw.ellipse([cx - r, cy - r, cx + r, cy + r],
                 fill=_color(el.get("fill", "black")), outline=outline, width=width)


def draw_text(draw, el, s):
    if not el.text:
        return
    font = load_font(int(round(_num(el, "font-size", 12) * s)), el.get("font-weight") == "bold")
    anchor = ANCHORS.get(el.get("text-anchor", "start"), "ls")
    draw.text((_num(el, "x") * s, _num(el, "y") * s), el.text, font=font,
              fill=_color(el.get("fill", "black")), anchor=anchor)


DRAWERS = {"rect": draw_rect, "circle": draw_circle, "text": draw_text}


# ---------------- MAIN ----------------
def rasterize(document, scale=SCALE):
    """Paint a CardDocument onto a transparent RGBA canvas, in document order."""
    size = (document.width * scale, document.height * scale)
    base = Image.new("RGBA", size, (0, 0, 0, 0))
    for el in document.iter():
        drawer = DRAWERS.get(el.tag)
        if drawer is None:
            continue
        layer = Image.new("RGBA", size, (0, 0, 0, 0))
        drawer(ImageDraw.Draw(layer, "RGBA"), el, scale)
        base.alpha_composite(layer)
    return base


def save_png(document, outpath, scale=SCALE, dpi=DPI):
    img = rasterize(document, scale)
    img.save(outpath, dpi=(dpi, dpi))
    logger.debug("Saved %s", outpath)
    return outpath
