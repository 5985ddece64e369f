# Yoga Flow Cards: card renderer
#
# Builds a CardDocument (a small tree of SVG elements) from a PoseRecord.
# Rendering never raises on missing or unknown data: lookup misses drop the
# visual element, or fall back to the default tint, and are recorded as
# RenderWarnings on the document.
#
# Card regions (175 x 300 units):
#   cost badge  (25,25) r15          name       centered at x=100, y=30
#   left markers  x=0..20            right markers  x=155..175
#   activate box (25,160) 125x70     "- or -"   y=245
#   discard box  (25,255) 125x25

import html
import logging
from dataclasses import dataclass, field
from enum import Enum

from .layout import (
    BLOCKED,
    CARD_H,
    CARD_W,
    DEFAULT_LAYOUT,
    FONT_FAMILY,
    LINE_HEIGHT,
    MARKER_H,
    MARKER_W,
    WRAP_WIDTH,
)
from .poses import parse_int
from .text_wrap import wrap_text

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"

ACTIVATE_BOX = (25, 160, 125, 70)
DISCARD_BOX = (25, 255, 125, 25)
EFFECT_BOX_FILL, EFFECT_BOX_STROKE = "#f8f8f8", "#ccc"


class CardVariant(str, Enum):
    """Which meaning the per-category values carry on the right edge."""

    TRANSITION = "transition"   # signed energy gained when flowing in
    DISCOUNT = "discount"       # cost discount, "X" marks a blocked entry


class WarningKind(str, Enum):
    UNKNOWN_CATEGORY = "unknown_category"
    UNKNOWN_CHAKRA = "unknown_chakra"
    UNEXPECTED_BLOCKED = "unexpected_blocked"
    INVALID_TRANSITION = "invalid_transition"


@dataclass(frozen=True)
class RenderWarning:
    kind: WarningKind
    value: str
    category: str = ""

    def __str__(self):
        where = f" ({self.category})" if self.category else ""
        return f"{self.kind.value}: {self.value!r}{where}"


def _fmt(value):
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else f"{value:g}"
    return str(value)


@dataclass(frozen=True)
class SvgElement:
    tag: str
    attrs: tuple = ()
    text: str = ""
    children: tuple = ()

    def get(self, name, default=None):
        for key, value in self.attrs:
            if key == name:
                return value
        return default

    @property
    def css_class(self):
        return self.get("class", "")

    def iter(self):
        """Depth-first walk including self."""
        yield self
        for child in self.children:
            yield from child.iter()

    def to_svg(self, indent=1):
        pad = "  " * indent
        attrs = "".join(f' {k}="{html.escape(_fmt(v), quote=True)}"' for k, v in self.attrs)
        if self.children:
            inner = "\n".join(c.to_svg(indent + 1) for c in self.children)
            return f"{pad}<{self.tag}{attrs}>\n{inner}\n{pad}</{self.tag}>"
        if self.text:
            return f"{pad}<{self.tag}{attrs}>{html.escape(self.text, quote=False)}</{self.tag}>"
        return f"{pad}<{self.tag}{attrs}/>"


def element(tag, attrs, text="", children=()):
    # attrs is a dict so hyphenated SVG names (fill-opacity) can be used
    return SvgElement(tag, tuple(attrs.items()), text, tuple(children))


def text_element(x, y, text, size, css_class, **extra):
    attrs = {"class": css_class, "x": x, "y": y, "text-anchor": "middle",
             "font-family": FONT_FAMILY, "font-size": size}
    attrs.update({k.replace("_", "-"): v for k, v in extra.items()})
    return element("text", attrs, text)


@dataclass(frozen=True)
class CardDocument:
    elements: tuple
    width: int = CARD_W
    height: int = CARD_H
    warnings: tuple = field(default=(), compare=False)

    def iter(self):
        for el in self.elements:
            yield from el.iter()

    def find_all(self, css_class):
        return [el for el in self.iter() if el.css_class == css_class]

    def to_svg(self):
        body = "\n".join(el.to_svg() for el in self.elements)
        return (f'<svg xmlns="{SVG_NS}" viewBox="0 0 {self.width} {self.height}">\n'
                f"{body}\n</svg>\n")


def format_signed(value, raw):
    """'+N' for positive values; negative values keep their own spelling."""
    return f"+{value}" if value > 0 else raw


# ---------------- RENDER STEPS ----------------
def draw_background(layout, pose, warnings):
    style, known = layout.chakra_style(pose.chakra_type)
    if pose.chakra_type and not known:
        warnings.append(RenderWarning(WarningKind.UNKNOWN_CHAKRA, pose.chakra_type))
    return [
        element("rect", {"class": "card-bg", "width": CARD_W, "height": CARD_H,
                         "fill": "white", "stroke": "black", "stroke-width": 2}),
        element("rect", {"class": "chakra-bg", "width": CARD_W, "height": CARD_H,
                         "fill": style.color, "fill-opacity": style.opacity}),
    ]


def draw_cost_and_name(pose):
    return [
        element("circle", {"class": "cost-badge", "cx": 25, "cy": 25, "r": 15,
                           "fill": "white", "stroke": "#333", "stroke-width": 1.5}),
        text_element(25, 29, str(pose.cost), 14, "cost", font_weight="bold"),
        text_element(100, 30, pose.name, 16, "title", font_weight="bold"),
    ]


def draw_position_markers(layout, pose, warnings):
    """Left edge: one marker per known category of the pose, in pose order."""
    out = []
    for tag in pose.categories:
        style = layout.category_style(tag)
        if style is None:
            warnings.append(RenderWarning(WarningKind.UNKNOWN_CATEGORY, tag))
            continue
        out.append(element("rect", {"class": "position-marker", "data-category": tag,
                                    "x": 0, "y": style.y, "width": MARKER_W,
                                    "height": MARKER_H, "fill": style.color}))
    return out


def draw_transition_marker(category, style, raw, variant, warnings):
    x = CARD_W - MARKER_W
    cx = CARD_W - MARKER_W // 2
    box = element("rect", {"class": "transition-marker", "data-category": category,
                           "x": x, "y": style.y, "width": MARKER_W, "height": MARKER_H,
                           "fill": style.color})
    if raw == BLOCKED:
        if variant is CardVariant.DISCOUNT:
            return [text_element(cx, style.y + 22, BLOCKED, 20, "blocked-marker",
                                 font_weight="bold", fill=style.color,
                                 data_category=category)]
        warnings.append(RenderWarning(WarningKind.UNEXPECTED_BLOCKED, raw, category))
        return []

    value = parse_int(raw)
    if value is None:
        warnings.append(RenderWarning(WarningKind.INVALID_TRANSITION, raw, category))
        return [box]
    if value == 0:
        return [box]
    return [
        box,
        element("circle", {"class": "transition-badge", "cx": cx, "cy": style.y + 20,
                           "r": 10, "fill": "white", "stroke": style.color}),
        text_element(cx, style.y + 24, format_signed(value, raw), 12, "transition-value",
                     fill=style.color),
    ]


def draw_transition_markers(layout, pose, variant, warnings):
    """Right edge, in table order rather than pose order."""
    out = []
    for category, style in layout.categories.items():
        raw = pose.transition(category)
        if raw:
            out.extend(draw_transition_marker(category.value, style, raw, variant, warnings))
    return out


def draw_effects(pose):
    mid = CARD_W / 2
    ax, ay, aw, ah = ACTIVATE_BOX
    lines = wrap_text(pose.activated_effect, WRAP_WIDTH)
    activate = element("g", {"class": "activate"}, children=[
        element("rect", {"class": "effect-box", "x": ax, "y": ay, "width": aw, "height": ah,
                         "fill": EFFECT_BOX_FILL, "stroke": EFFECT_BOX_STROKE, "rx": 5}),
        text_element(mid, 175, "Activate:", 12, "effect-label"),
    ] + [
        text_element(mid, 190 + i * LINE_HEIGHT, line, 11, "effect-line")
        for i, line in enumerate(lines)
    ])
    dx, dy, dw, dh = DISCARD_BOX
    return [
        activate,
        text_element(mid, 245, "- or -", 14, "separator"),
        element("rect", {"class": "discard-box", "x": dx, "y": dy, "width": dw, "height": dh,
                         "fill": EFFECT_BOX_FILL, "stroke": EFFECT_BOX_STROKE, "rx": 5}),
        text_element(mid, 272, f"Discard: {pose.discard_effect}", 11, "discard-text"),
    ]


# ---------------- MAIN ----------------
def render_card(pose, layout=DEFAULT_LAYOUT, variant=CardVariant.TRANSITION):
    """Render one pose into a CardDocument. Same inputs, same document."""
    variant = CardVariant(variant)
    warnings = []
    elements = []
    elements += draw_background(layout, pose, warnings)
    elements += draw_cost_and_name(pose)
    elements += draw_position_markers(layout, pose, warnings)
    elements += draw_transition_markers(layout, pose, variant, warnings)
    elements += draw_effects(pose)
    for w in warnings:
        logger.debug("Card %r: %s", pose.name, w)
    return CardDocument(tuple(elements), warnings=tuple(warnings))


def render_svg(pose, layout=DEFAULT_LAYOUT, variant=CardVariant.TRANSITION):
    return render_card(pose, layout, variant).to_svg()
