from __future__ import annotations

from typing import List, Sequence

from colorpick.models.analysis import AnalyzePoint


def _by_similarity_desc(points: Sequence[AnalyzePoint]) -> List[AnalyzePoint]:
    # sorted() is stable: ties keep sampling order
    return sorted(points, key=lambda p: p.similarity, reverse=True)


def _per_group_quota(max_points: int, group_count: int) -> int:
    remaining = max_points - 1
    if group_count <= 1:
        # a single group owns the whole remaining budget
        return max(1, remaining)
    return max(1, remaining // (group_count - 1))


def select_points(groups: Sequence[Sequence[AnalyzePoint]], max_points: int) -> List[AnalyzePoint]:
    """
    Pick at most `max_points` representative points out of the color groups.

    1. anchor: first point with the highest similarity (flattening order),
       always emitted first;
    2. each group contributes up to a per-group quota of its best non-anchor
       points;
    3. if the budget is not used up, the leftovers of all groups are merged,
       ranked by similarity and appended;
    4. the result is truncated to max_points.
    """
    if max_points < 1:
        return []

    all_points = [p for group in groups for p in group]
    if not all_points:
        return []

    anchor = max(all_points, key=lambda p: p.similarity)
    quota = _per_group_quota(max_points, len(groups))

    results: List[AnalyzePoint] = [anchor]
    leftovers: List[AnalyzePoint] = []

    for group in groups:
        ranked = _by_similarity_desc([p for p in group if p is not anchor])
        if not ranked:
            continue
        results.extend(ranked[:quota])
        leftovers.extend(ranked[quota:])

    if len(results) < max_points:
        results.extend(_by_similarity_desc(leftovers)[: max_points - len(results)])

    return results[:max_points]
