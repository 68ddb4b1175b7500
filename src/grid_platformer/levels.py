"""Level plans: the built-in campaign and JSON plan files.

A plan is a list of strings, one per grid row. Plan files store a set of
plans as ``{"levels": [[row, ...], ...]}``.
"""

import json
import logging
from pathlib import Path
from typing import List, Sequence, Union

logger = logging.getLogger(__name__)

Plan = List[str]


class PlanFileError(ValueError):
    """Raised when a plan file cannot be read as a list of plans."""


LEVEL_0 = [
    "            |        |             ",
    "                                   ",
    "                                   ",
    "                o                  ",
    "                x       x          ",
    "        o       x       x          ",
    "  @    xxx      x       x      o   ",
    "xxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxx",
]

LEVEL_1 = [
    "                                           v                 xxxxxxx      ",
    "     @                                                       v     x      ",
    "                                                                   x      ",
    "  xxx                                               o              x      ",
    "  x              = xxx                           xxxxx             x      ",
    "  x         o o    x           x                                   x      ",
    "  x        xxxxx   x           x         o                      o  x      ",
    "  xxxxx            x     xx    x        xxxx              xxxxxxxxxx      ",
    "      x!!!!!!!!!!!!x           x                                             ",
    "      xxxxxxxxxxxxxx!!!!!!!!!!!xxxxxx!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!",
    "                                                                             ",
    "                                                                             ",
]

LEVEL_2 = [
    "x                                                                          ",
    "x                                                                          ",
    "x                                                                          ",
    "x                                                                          ",
    "x                                                                          ",
    "x                                    o  o                              o   ",
    "x                                   xxxxxx                         =xxxxxxx",
    "x                                     |        xxx=                        ",
    "x                                                                          ",
    "x                 xx       o                              xxxxxx           ",
    "x                        xxxxxx       o             o                      ",
    "x                                     xx      xxxxxxx                      ",
    "x             o  o                                                         ",
    "x            =xxxxx                                                        ",
    "x                                       o                                  ",
    "x@                                    xxxxx                                ",
    "xx                                                                         ",
    "!!!!!!!xxxxxxxxxxxx!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!",
]

GAME_LEVELS: List[Plan] = [LEVEL_0, LEVEL_1, LEVEL_2]


def load_plans(path: Union[str, Path]) -> List[Plan]:
    """Read a list of plans from a JSON plan file.

    Args:
        path: File containing ``{"levels": [[row, ...], ...]}``.

    Returns:
        Plans in file order.

    Raises:
        PlanFileError: If the file is not valid JSON or has the wrong shape.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise PlanFileError(f"{path}: invalid JSON: {e}") from e

    levels = data.get("levels") if isinstance(data, dict) else None
    if not isinstance(levels, list) or not levels:
        raise PlanFileError(f"{path}: expected a non-empty 'levels' list")

    plans = []
    for i, plan in enumerate(levels):
        if (not isinstance(plan, list) or not plan
                or not all(isinstance(row, str) for row in plan)):
            raise PlanFileError(f"{path}: level {i} must be a non-empty list of strings")
        plans.append(list(plan))

    logger.debug("Loaded %d plans from %s", len(plans), path)
    return plans


def save_plans(path: Union[str, Path], plans: Sequence[Sequence[str]]) -> None:
    """Write plans to a JSON plan file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"levels": [list(plan) for plan in plans]}, f, indent=2)
