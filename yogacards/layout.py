# Yoga Flow Cards: layout table
#
# Card geometry plus the fixed style tables for position categories and
# chakras. Everything in here is read-only and shared by every render.

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

CARD_W, CARD_H = 175, 300       # viewBox of every card
MARKER_W, MARKER_H = 20, 30     # left/right category markers
WRAP_WIDTH = 20                 # characters per "Activate" line
LINE_HEIGHT = 15                # vertical step between wrapped lines
FONT_FAMILY = "Arial"
NO_EFFECT = "No effect"
BLOCKED = "X"


class Category(str, Enum):
    INVERSION = "inversion"
    STANDING = "standing"
    KNEELING = "kneeling"
    SEATED = "seated"
    SUPINE = "supine"
    PRONE = "prone"


class Chakra(str, Enum):
    ROOT = "root"
    SACRAL = "sacral"
    SOLAR = "solar"
    HEART = "heart"
    THROAT = "throat"
    THIRD_EYE = "thirdEye"
    CROWN = "crown"

    @classmethod
    def lookup(cls, text):
        """Case-insensitive match, None for empty or unknown tags."""
        key = (text or "").strip().lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        return None


@dataclass(frozen=True)
class CategoryStyle:
    color: str
    y: int


@dataclass(frozen=True)
class ChakraStyle:
    color: str
    opacity: float


# Table order is the order right-edge markers are drawn in
CATEGORY_STYLES = MappingProxyType({
    Category.INVERSION: CategoryStyle("#8F00FF", 70),   # purple
    Category.STANDING: CategoryStyle("#228B22", 110),   # forest green
    Category.KNEELING: CategoryStyle("#DAA520", 150),   # goldenrod
    Category.SEATED: CategoryStyle("#CD853F", 190),     # peru
    Category.SUPINE: CategoryStyle("#4169E1", 230),     # royal blue
    Category.PRONE: CategoryStyle("#B22222", 270),      # firebrick
})

CHAKRA_STYLES = MappingProxyType({
    Chakra.ROOT: ChakraStyle("#ff6b6b", 0.1),
    Chakra.SACRAL: ChakraStyle("#ffd93d", 0.1),
    Chakra.SOLAR: ChakraStyle("#6c757d", 0.1),
    Chakra.HEART: ChakraStyle("#95d5b2", 0.1),
    Chakra.THROAT: ChakraStyle("#8ecae6", 0.1),
    Chakra.THIRD_EYE: ChakraStyle("#7209b7", 0.1),
    Chakra.CROWN: ChakraStyle("#9b5de5", 0.1),
})

DEFAULT_CHAKRA_STYLE = ChakraStyle("#ffffff", 0.1)


@dataclass(frozen=True)
class LayoutTable:
    categories: MappingProxyType = field(default_factory=lambda: CATEGORY_STYLES)
    chakras: MappingProxyType = field(default_factory=lambda: CHAKRA_STYLES)
    default_chakra: ChakraStyle = DEFAULT_CHAKRA_STYLE

    # Unknown tags resolve to None; callers skip the marker
    def category_style(self, tag):
        try:
            return self.categories.get(Category(tag))
        except ValueError:
            return None

    def chakra_style(self, tag):
        """Return (style, known). Unset or unknown chakras get the default tint."""
        chakra = Chakra.lookup(tag)
        if chakra is None or chakra not in self.chakras:
            return self.default_chakra, False
        return self.chakras[chakra], True


DEFAULT_LAYOUT = LayoutTable()
