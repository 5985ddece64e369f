"""Yoga Flow Cards: compile pose sheets into SVG card faces."""

from .card_renderer import CardDocument, CardVariant, RenderWarning, WarningKind, render_card, render_svg
from .heat import GamePose, heat_for, transition_energy
from .layout import DEFAULT_LAYOUT, Category, Chakra, LayoutTable
from .poses import InvalidCostError, MissingFieldError, PoseParseError, PoseRecord, parse_pose
from .text_wrap import wrap_text

__version__ = "0.1.0"
