# Yoga Flow Cards: CSV ingestion
#
# Reads pose sheets with pandas and feeds the rows to the pose parser.
# Two layouts are accepted: a sheet with a header row (column names as in
# POSE_COLUMNS, baseCost allowed instead of activationCost) and a headerless
# sheet whose columns are in POSE_COLUMNS order.

import io
import logging
from dataclasses import dataclass, field

import pandas as pd

from .poses import (
    COL_ACTIVATED_EFFECT,
    COL_ACTIVATION_COST,
    COL_CATEGORIES,
    COL_CHAKRA,
    COL_DISCARD_EFFECT,
    COL_NAME,
    TRANSITION_COLUMNS,
    PoseParseError,
    parse_pose,
)

logger = logging.getLogger(__name__)

POSE_COLUMNS = [
    COL_NAME,
    COL_CATEGORIES,
    COL_ACTIVATION_COST,
    COL_CHAKRA,
    *TRANSITION_COLUMNS,
    COL_ACTIVATED_EFFECT,
    COL_DISCARD_EFFECT,
]


def read_pose_table(source, header=True):
    """Read a pose CSV (path or text buffer) into a DataFrame of strings."""
    df = pd.read_csv(
        source,
        dtype=str,
        keep_default_na=False,
        skipinitialspace=True,
        skip_blank_lines=True,
        header=0 if header else None,
        names=None if header else POSE_COLUMNS,
    )
    df.columns = [str(c).strip() for c in df.columns]
    return df.reset_index(drop=True)


def read_pose_csv_text(text, header=True):
    return read_pose_table(io.StringIO(text), header=header)


@dataclass
class LoadResult:
    poses: list = field(default_factory=list)
    errors: list = field(default_factory=list)   # (row_index, PoseParseError)

    @property
    def ok(self):
        return not self.errors


def iter_records(table):
    """Yield (row_index, record) from a DataFrame or any iterable of mappings."""
    if isinstance(table, pd.DataFrame):
        yield from table.iterrows()
    else:
        yield from enumerate(table)


def load_poses(table, strict=False):
    """Parse every row. Bad rows are logged and collected unless ``strict``."""
    result = LoadResult()
    for idx, row in iter_records(table):
        try:
            result.poses.append(parse_pose(row, row_number=idx))
        except PoseParseError as e:
            if strict:
                raise
            logger.warning("Skipping row %s: %s", idx, e)
            result.errors.append((idx, e))
    return result
