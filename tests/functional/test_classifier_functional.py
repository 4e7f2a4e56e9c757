"""Functional tests for Prakriti classification."""

from __future__ import annotations

import itertools

import pytest

from prakriti.logic.classifier import DOMINANCE_THRESHOLD, Tally, classify


def test_dominant_vata_at_threshold():
    result = classify(Tally(15, 0, 0))
    assert result.label == "Vata"
    assert "Vata" in result.description


def test_pitta_when_vata_below_threshold():
    assert classify(Tally(14, 15, 0)).label == "Pitta"


def test_kapha_dominant():
    assert classify(Tally(0, 5, 15)).label == "Kapha"


def test_threshold_checked_in_category_order():
    # Both reach the threshold; Vata is checked first
    assert classify(Tally(15, 20, 0)).label == "Vata"
    assert classify(Tally(0, 15, 30)).label == "Pitta"


def test_three_way_tie_uses_category_order():
    result = classify(Tally(14, 14, 14))
    assert result.label == "Vata-Pitta"
    assert "Vata" in result.description and "Pitta" in result.description


@pytest.mark.parametrize(
    "tally, label",
    [
        (Tally(3, 8, 9), "Kapha-Pitta"),
        (Tally(10, 2, 8), "Vata-Kapha"),
        (Tally(2, 10, 8), "Pitta-Kapha"),
        (Tally(5, 5, 10), "Kapha-Vata"),
        (Tally(4, 8, 8), "Pitta-Kapha"),
        (Tally(8, 4, 8), "Vata-Kapha"),
        (Tally(0, 0, 0), "Vata-Pitta"),
    ],
)
def test_blended_labels(tally, label):
    assert classify(tally).label == label


def test_total_and_deterministic_over_small_grid():
    for a, b, c in itertools.product(range(0, DOMINANCE_THRESHOLD + 2), repeat=3):
        first = classify(Tally(a, b, c))
        assert first == classify(Tally(a, b, c))
        assert first.label and first.description


def test_negative_counts_rejected():
    with pytest.raises(ValueError):
        Tally(-1, 0, 0)


def test_tally_summary_and_counts():
    tally = Tally(15, 3, 2)
    assert tally.total == 20
    assert tally.summary() == "Vata: 15, Pitta: 3, Kapha: 2"
    assert tally.as_counts() == {"vata": 15, "pitta": 3, "kapha": 2}
