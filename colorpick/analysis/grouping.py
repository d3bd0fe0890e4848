from __future__ import annotations

from typing import Iterable, List

from colorpick.models.analysis import AnalyzePoint
from colorpick.models.color import colors_within

ColorGroup = List[AnalyzePoint]


class ColorGrouper:
    """
    First-fit color grouping.

    A point joins the first group (in creation order) whose *first* member is
    within 2 * tolerance on every channel; otherwise it starts a new group.
    The reference color of a group never moves.
    """

    def __init__(self, tolerance: int) -> None:
        self._limit = int(tolerance) * 2
        self._groups: List[ColorGroup] = []

    @property
    def groups(self) -> List[ColorGroup]:
        return self._groups

    def offer(self, point: AnalyzePoint) -> bool:
        """
        Returns True when the point was placed (similarity > 0), False when ignored.
        """
        if point.similarity <= 0:
            return False

        for group in self._groups:
            if colors_within(group[0].rgb, point.rgb, self._limit):
                group.append(point)
                return True

        self._groups.append([point])
        return True


def group_points(points: Iterable[AnalyzePoint], tolerance: int) -> List[ColorGroup]:
    grouper = ColorGrouper(tolerance)
    for p in points:
        grouper.offer(p)
    return grouper.groups
