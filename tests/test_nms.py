import pytest

from similari.bbox import BoundingBox, Universal2DBox
from similari.nms import nms


def test_nms_with_scores_keeps_best():
    bbox1 = BoundingBox(10.0, 11.0, 3.0, 3.8).as_xyaah()
    bbox2 = BoundingBox(10.3, 11.1, 2.9, 3.9).as_xyaah()
    res = nms([(bbox2, 0.9), (bbox1, 1.0)], nms_threshold=0.7, score_threshold=0.0)
    assert len(res) == 1
    assert res[0] is bbox1


def test_nms_without_scores_uses_height():
    bbox1 = BoundingBox(10.0, 11.0, 3.0, 4.0).as_xyaah()
    bbox2 = BoundingBox(10.3, 11.1, 2.9, 3.9).as_xyaah()
    res = nms([(bbox2, None), (bbox1, None)], nms_threshold=0.7, score_threshold=0.0)
    assert res == [bbox1]
    assert res[0] is bbox1


def test_nms_concentric_boxes():
    boxes = [
        Universal2DBox(0.0, 0.0, None, 1.0, 5.0),
        Universal2DBox(0.0, 0.0, None, 1.05, 5.1),
        Universal2DBox(0.0, 0.0, None, 1.0, 4.9),
        Universal2DBox(3.0, 4.0, None, 1.0, 4.5),
    ]
    res = nms([(b, None) for b in boxes], 0.8, None)
    assert len(res) == 2
    assert res[0] is boxes[1]
    assert res[1] is boxes[3]


def test_nms_far_boxes_all_kept_in_rank_order():
    boxes = [Universal2DBox.ltwh(100.0 * i, 0.0, 10.0, 10.0) for i in range(4)]
    scores = [0.2, 0.9, 0.5, 0.7]
    res = nms(list(zip(boxes, scores)), 0.5, None)
    assert len(res) == len(boxes)
    assert [scores[boxes.index(b)] for b in res] == sorted(scores, reverse=True)


def test_nms_score_threshold_filters():
    boxes = [Universal2DBox.ltwh(100.0 * i, 0.0, 10.0, 10.0) for i in range(3)]
    res = nms([(boxes[0], 0.1), (boxes[1], 0.6), (boxes[2], 0.3)], 0.5, 0.3)
    assert res == [boxes[1]]
    assert res[0] is boxes[1]


def test_nms_missing_score_passes_any_threshold():
    box = Universal2DBox.ltwh(0.0, 0.0, 10.0, 10.0)
    res = nms([(box, None)], 0.5, 1000.0)
    assert len(res) == 1 and res[0] is box


def test_nms_drops_degenerate_boxes():
    good = Universal2DBox.ltwh(0.0, 0.0, 10.0, 10.0)
    flat = Universal2DBox(50.0, 50.0, None, 1.0, 0.0)
    negative = Universal2DBox(80.0, 80.0, None, -1.0, 5.0)
    res = nms([(flat, 1.0), (good, 0.5), (negative, 0.9)], 0.5, None)
    assert len(res) == 1 and res[0] is good


def test_nms_empty_input():
    assert nms([], 0.5, None) == []


@pytest.mark.parametrize("angle", [0.0, 0.4, 1.2])
def test_nms_identical_rotated_boxes_collapse(angle):
    a = Universal2DBox(5.0, 5.0, angle, 0.5, 4.0)
    b = Universal2DBox(5.0, 5.0, angle, 0.5, 4.0)
    res = nms([(a, 0.4), (b, 0.8)], 0.5, None)
    assert len(res) == 1 and res[0] is b


def test_nms_result_subset_of_input():
    boxes = [Universal2DBox.ltwh(float(i), float(i), 10.0, 10.0) for i in range(6)]
    res = nms([(b, None) for b in boxes], 0.3, None)
    assert 1 <= len(res) <= len(boxes)
    assert all(any(r is b for b in boxes) for r in res)