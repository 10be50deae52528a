"""Non-maximum suppression for oriented boxes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from similari.bbox import Universal2DBox
from similari.metrics import intersection


@dataclass(frozen=True)
class _Candidate:
    bbox: Universal2DBox
    rank: float
    index: int


def nms(
    detections: Iterable[tuple[Universal2DBox, float | None]],
    nms_threshold: float,
    score_threshold: float | None = None,
) -> list[Universal2DBox]:
    """Keep the best-ranked boxes, dropping those that overlap a better one.

    A detection's score defaults to its box height and serves as its rank.
    Detections whose score does not exceed ``score_threshold`` and boxes with
    non-positive height or aspect are discarded first. A box is suppressed when
    its intersection with a better-ranked kept box, divided by its own area,
    exceeds ``nms_threshold``. The survivors are returned best-ranked first.
    """
    threshold = -float("inf") if score_threshold is None else score_threshold
    accepted = (
        (box, score)
        for box, score in detections
        if (float("inf") if score is None else score) > threshold
        and box.height > 0.0
        and box.aspect > 0.0
    )
    candidates: Sequence[_Candidate] = sorted(
        (
            _Candidate(box, box.height if score is None else score, index)
            for index, (box, score) in enumerate(accepted)
        ),
        key=lambda c: c.rank,
        reverse=True,
    )

    excluded: set[int] = set()
    for position, best in enumerate(candidates):
        if best.index in excluded:
            continue
        for other in candidates[position + 1 :]:
            if other.index in excluded:
                continue
            metric = intersection(best.bbox, other.bbox) / other.bbox.area()
            if metric > nms_threshold:
                excluded.add(other.index)

    return [c.bbox for c in candidates if c.index not in excluded]