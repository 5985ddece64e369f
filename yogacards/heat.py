# Yoga Flow Cards: heat and energy (game variant)
#
# Heat is looked up by priority, first match wins. A pose tagged both
# inversion and supine scores 2, not 0.

from dataclasses import dataclass

from .poses import PoseRecord, parse_int, split_categories

# (category, heat) in priority order
CATEGORY_HEAT = (
    ("inversion", 2),
    ("standing", 1),
    ("prone", 1),
    ("seated", -1),
    ("supine", -2),
)
# Only consulted when no category matched. "moon" is not a chakra on the cards.
CHAKRA_HEAT = (
    (("solar",), 1),
    (("crown", "moon"), -1),
)
MIN_TURN_ENERGY = 1


def heat_for(categories, chakra=""):
    """Heat contribution of a pose; ``categories`` is a list of tags or a pipe-delimited string."""
    if isinstance(categories, str) or categories is None:
        tags = split_categories(categories)
    else:
        tags = [str(c).strip() for c in categories]
    for tag, heat in CATEGORY_HEAT:
        if tag in tags:
            return heat
    chakra = (chakra or "").strip().lower()
    for names, heat in CHAKRA_HEAT:
        if chakra in names:
            return heat
    return 0


@dataclass(frozen=True)
class GamePose:
    pose: PoseRecord
    heat: int
    __hash__ = None

    @classmethod
    def from_pose(cls, pose):
        return cls(pose, heat_for(pose.categories, pose.chakra_type))

    @property
    def name(self):
        return self.pose.name

    @property
    def cost(self):
        return self.pose.cost


def _unwrap(pose):
    return pose.pose if isinstance(pose, GamePose) else pose


def transition_energy(sequence, minimum=MIN_TURN_ENERGY):
    """Energy earned by a played sequence.

    Every consecutive pair adds the current pose's transition value for each
    category the previous pose sits in. Blank, zero, "X" and non-numeric
    values add nothing. The total never drops below ``minimum``.
    """
    poses = [_unwrap(p) for p in sequence]
    gained = 0
    for prev, cur in zip(poses, poses[1:]):
        for category in prev.categories:
            value = parse_int(cur.transition(category))
            if value:
                gained += value
    return max(minimum, gained)
