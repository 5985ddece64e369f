# Yoga Flow Cards: pose records
#
# Turns one tabular row (CSV row, pandas Series or plain dict) into an
# immutable PoseRecord. Parsing is per row; whether a bad row skips or aborts
# a batch is up to the caller (see ingest.load_poses).

import math
import re
from dataclasses import dataclass, field
from types import MappingProxyType

from .layout import Category, NO_EFFECT

# CSV column name constants
COL_NAME = "name"
COL_CATEGORIES = "categories"
COL_ACTIVATION_COST = "activationCost"
COL_BASE_COST = "baseCost"
COL_CHAKRA = "chakraType"
COL_ACTIVATED_EFFECT = "activatedEffect"
COL_DISCARD_EFFECT = "discardEffect"
COST_COLUMNS = (COL_ACTIVATION_COST, COL_BASE_COST)
TRANSITION_COLUMNS = tuple(c.value for c in Category)

CATEGORY_DELIMITER = "|"
_INT_RE = re.compile(r"^[+-]?\d+$")


class PoseParseError(ValueError):
    """A row that cannot become a PoseRecord."""

    def __init__(self, message, field=None, row_number=None):
        self.field = field
        self.row_number = row_number
        if row_number is not None:
            message = f"row {row_number}: {message}"
        super().__init__(message)


class MissingFieldError(PoseParseError):
    pass


class InvalidCostError(PoseParseError):
    pass


# Convert value to string, treating a missing cell (None or float NaN) as empty string
def sanitize(val):
    if val is None or (isinstance(val, float) and math.isnan(val)):
        return ""
    return str(val).strip()


def split_categories(text):
    """Split a pipe-delimited category field, keeping order and dropping blanks/repeats."""
    tags = []
    for part in sanitize(text).split(CATEGORY_DELIMITER):
        tag = part.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tuple(tags)


def parse_int(text):
    """Base-10 integer or None. Leading sign allowed."""
    s = sanitize(text)
    return int(s) if _INT_RE.match(s) else None


def _full_transitions(values):
    values = values or {}
    return MappingProxyType({key: sanitize(values.get(key)) for key in TRANSITION_COLUMNS})


@dataclass(frozen=True)
class PoseRecord:
    name: str
    cost: int
    categories: tuple = ()
    chakra_type: str = ""
    transitions: MappingProxyType = field(default_factory=dict)
    activated_effect: str = NO_EFFECT
    discard_effect: str = NO_EFFECT

    # Transitions is a read-only mapping, so records are not hashable
    __hash__ = None

    def __post_init__(self):
        # Always exactly the six category keys, read-only
        object.__setattr__(self, "categories", tuple(self.categories))
        object.__setattr__(self, "transitions", _full_transitions(self.transitions))

    def transition(self, category):
        return self.transitions.get(str(getattr(category, "value", category)), "")


# activationCost wins over baseCost when both are filled in
def _read_cost(row, row_number):
    for col in COST_COLUMNS:
        value = row.get(col)
        if isinstance(value, int) and not isinstance(value, bool):
            cost = value
        else:
            raw = sanitize(value)
            if not raw:
                continue
            cost = parse_int(raw)
        if cost is None or cost < 0:
            raise InvalidCostError(
                f"{col} must be a non-negative integer, got {value!r}", col, row_number
            )
        return cost
    raise MissingFieldError("missing activationCost/baseCost", COL_ACTIVATION_COST, row_number)


def parse_pose(row, row_number=None):
    """Build a PoseRecord from a raw record.

    ``row`` is any mapping with a ``get`` method (dict, pandas Series).
    Raises MissingFieldError when name, categories or cost is absent and
    InvalidCostError when the cost is not a non-negative integer.
    """
    name = sanitize(row.get(COL_NAME))
    if not name:
        raise MissingFieldError("missing name", COL_NAME, row_number)
    cost = _read_cost(row, row_number)
    categories = split_categories(row.get(COL_CATEGORIES))
    if not categories:
        raise MissingFieldError(f"pose {name!r} has no categories", COL_CATEGORIES, row_number)

    return PoseRecord(
        name=name,
        cost=cost,
        categories=categories,
        chakra_type=sanitize(row.get(COL_CHAKRA)).lower(),
        transitions={key: row.get(key) for key in TRANSITION_COLUMNS},
        activated_effect=sanitize(row.get(COL_ACTIVATED_EFFECT)) or NO_EFFECT,
        discard_effect=sanitize(row.get(COL_DISCARD_EFFECT)) or NO_EFFECT,
    )
