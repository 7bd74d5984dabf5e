import pytest

from toolwear.models import ToolCondition
from toolwear.services.wear_classifier import classify, classify_with_warning


@pytest.mark.parametrize(
    "accumulated, useful_life, expected",
    [
        (0, 100000, ToolCondition.OK),
        (69999, 100000, ToolCondition.OK),
        (70000, 100000, ToolCondition.WARN),
        (75000, 100000, ToolCondition.WARN),
        (79999, 100000, ToolCondition.WARN),
        (80000, 100000, ToolCondition.REPLACE),
        (85000, 100000, ToolCondition.REPLACE),
        (150000, 100000, ToolCondition.REPLACE),
    ],
)
def test_classify_thresholds(accumulated, useful_life, expected):
    assert classify(accumulated, useful_life) is expected


def test_classify_boundaries_are_exact_for_awkward_lives():
    # 7/10 and 8/10 of a life that does not divide evenly in binary floating point
    assert classify(7, 10) is ToolCondition.WARN
    assert classify(8, 10) is ToolCondition.REPLACE
    assert classify(84, 120) is ToolCondition.WARN
    assert classify(96, 120) is ToolCondition.REPLACE
    assert classify(83, 120) is ToolCondition.OK


def test_classify_is_monotonic_in_production():
    order = {ToolCondition.OK: 0, ToolCondition.WARN: 1, ToolCondition.REPLACE: 2}
    previous = ToolCondition.OK
    for accumulated in range(0, 1300, 7):
        current = classify(accumulated, 1000)
        assert order[current] >= order[previous]
        previous = current


def test_warning_mirrors_condition():
    assert classify_with_warning(10, 100) == (ToolCondition.OK, False)
    assert classify_with_warning(70, 100) == (ToolCondition.WARN, True)
    assert classify_with_warning(95, 100) == (ToolCondition.REPLACE, True)


def test_condition_labels():
    assert ToolCondition.OK.label == "OK"
    assert ToolCondition.WARN.label == "Atenção!"
    assert ToolCondition.REPLACE.label == "Trocar Ferramenta (TF)"
