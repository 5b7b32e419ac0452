import logging

import pytest

from app.ocr.boundaries import (
    NOT_FOUND,
    CropRegion,
    Found,
    LandmarkPhrases,
    TextLine,
    find_landmark,
    resolve,
    resolve_region,
    round_half_up,
)


def line(text, y, height=20):
    return TextLine(text=text, y=y, height=height)


@pytest.mark.parametrize("image_height", [7, 10, 100, 333, 1000, 2437])
def test_no_lines_falls_back_to_15_85(image_height):
    res = resolve([], image_height)
    top = round_half_up(0.15 * image_height)
    bottom = round_half_up(0.85 * image_height)
    assert res.region == CropRegion(top=top, height=bottom - top)
    assert res.upper_match == NOT_FOUND
    assert res.lower_match == NOT_FOUND
    assert not res.repaired
    assert res.region.height >= 1


def test_scenario_a_upper_only():
    res = resolve([line("Analyse des performances", 100)], 1000)
    assert res.region == CropRegion(top=100, height=750)
    assert res.upper_bound == 100
    assert res.lower_bound == 850
    assert res.upper_match == Found(y=100, phrase="Analyse des performances")


def test_scenario_b_lower_only():
    res = resolve([line("STATISTIQUES détaillées", 900)], 1000)
    # lower bound may run past the image; the resolver does not clamp
    assert res.region == CropRegion(top=150, height=950)
    assert res.lower_bound == 1100


def test_scenario_c_close_landmarks():
    lines = [
        line("Les valeurs sont estimées", 750),
        line("Analysez les problèmes", 800),
    ]
    res = resolve(lines, 1000)
    assert res.region == CropRegion(top=800, height=150)
    assert not res.repaired


def test_scenario_d_asymmetric_repair_leaves_negative_height(caplog):
    # Known defect: only the lower bound is repaired, so an upper landmark
    # below the lower default yields a negative height.
    lines = [
        line("Analyse des performances", 950),
        line("STATISTIQUES", 720),
    ]
    with caplog.at_level(logging.WARNING, logger="landmark_crop"):
        res = resolve(lines, 1000)

    assert res.repaired
    assert res.upper_bound == 950
    assert res.lower_bound == 850
    assert res.region == CropRegion(top=950, height=-100)
    assert res.degenerate
    assert "Degenerate crop region" in caplog.text


def test_upper_phrase_priority_beats_line_order():
    lines = [
        line("Analyse des performances mobiles", 120),
        line("Analysez les problèmes", 400),
    ]
    res = resolve(lines, 1000)
    assert res.upper_bound == 400
    assert res.upper_match.phrase == "Analysez les problèmes"


def test_first_matching_line_wins_for_a_phrase():
    lines = [
        line("Analyse des performances", 300),
        line("Analyse des performances (bis)", 200),
    ]
    assert resolve(lines, 1000).upper_bound == 300


def test_lower_phrase_priority():
    lines = [
        line("Les valeurs sont estimées", 720),
        line("Développer la vue", 760),
        line("STATISTIQUES", 780),
    ]
    res = resolve(lines, 1000)
    assert res.lower_match == Found(y=780, phrase="STATISTIQUES")
    assert res.lower_bound == 980


@pytest.mark.parametrize("y", [100, 500, 699, 700])
def test_lower_match_outside_bottom_zone_is_ignored(y):
    res = resolve([line("STATISTIQUES", y)], 1000)
    assert res.lower_match == NOT_FOUND
    assert res.lower_bound == 850


def test_lower_match_just_inside_bottom_zone():
    res = resolve([line("STATISTIQUES", 701)], 1000)
    assert res.lower_bound == 901


def test_upper_search_is_not_zone_restricted():
    res = resolve([line("Analyse des performances", 980)], 1000)
    assert res.upper_bound == 980
    # repaired lower (850) is above the upper bound
    assert res.repaired
    assert res.degenerate


def test_lower_offset_applied_before_rounding():
    res = resolve([line("Développer la vue", 812.4)], 1000)
    assert res.lower_bound == 1012


def test_repair_when_lower_equals_upper():
    # upper at 950, lower match at 750 -> raw lower 950 == upper
    lines = [line("Analysez les problèmes", 950), line("STATISTIQUES", 750)]
    res = resolve(lines, 1000)
    assert res.repaired
    assert res.lower_bound == 850


def test_matching_is_case_sensitive_substring():
    lines = [line("statistiques", 900), line("xxSTATISTIQUESxx", 950)]
    res = resolve(lines, 1000)
    assert res.lower_match.y == 950


def test_upper_landmark_at_zero_is_kept():
    res = resolve([line("Analyse des performances", 0)], 1000)
    assert res.upper_bound == 0
    assert res.upper_match == Found(y=0, phrase="Analyse des performances")


def test_rounding_half_up():
    assert round_half_up(4.5) == 5
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    # 0.15 * 30 = 4.5, 0.85 * 30 = 25.5
    assert resolve([], 30).region == CropRegion(top=5, height=21)


def test_injected_phrases():
    phrases = LandmarkPhrases(upper=["Header"], lower=["Footer"])
    lines = [line("Header", 50), line("Analyse des performances", 10), line("Footer", 800)]
    res = resolve(lines, 1000, phrases)
    assert res.upper_bound == 50
    assert res.lower_bound == 1000
    assert isinstance(phrases.upper, tuple)


def test_resolve_is_idempotent():
    lines = [line("Analyse des performances", 123), line("STATISTIQUES", 777)]
    assert resolve(lines, 1000) == resolve(lines, 1000)
    assert resolve_region(lines, 1000) == CropRegion(top=123, height=854)


def test_find_landmark_not_found():
    assert find_landmark([line("nothing here", 10)], ["STATISTIQUES"]) is NOT_FOUND


def test_text_line_height_is_required():
    with pytest.raises(TypeError):
        TextLine(text="STATISTIQUES", y=900)
