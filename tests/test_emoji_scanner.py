import random

import pytest

from skribidi.emoji_scanner import iter_emoji_runs, scan_emoji_presentation

EMOJI = 0
TEXT_PRESENTATION = 1
EMOJI_PRESENTATION = 2
MODIFIER_BASE = 3
MODIFIER = 4
REGIONAL_INDICATOR = 6
KEYCAP_BASE = 7
ENCLOSING_KEYCAP = 8
ZWJ = 10
VS15 = 11
VS16 = 12


def test_empty_input():
    assert scan_emoji_presentation([], 0) == (0, False, False)
    assert list(iter_emoji_runs([])) == []


def test_emoji_presentation_char_is_emoji():
    end, is_emoji, has_vs = scan_emoji_presentation([EMOJI_PRESENTATION])
    assert end == 1
    assert is_emoji and not has_vs


def test_text_presentation_char_is_text():
    end, is_emoji, _ = scan_emoji_presentation([TEXT_PRESENTATION])
    assert end == 1
    assert not is_emoji


def test_vs16_forces_emoji():
    seq = [EMOJI, VS16]
    end, is_emoji, has_vs = scan_emoji_presentation(seq)
    assert end == len(seq)
    assert is_emoji and has_vs


def test_vs15_forces_text():
    seq = [TEXT_PRESENTATION, VS15]
    end, is_emoji, has_vs = scan_emoji_presentation(seq)
    assert end == len(seq)
    assert not is_emoji and has_vs


def test_flag_pair_is_one_emoji():
    seq = [REGIONAL_INDICATOR, REGIONAL_INDICATOR]
    end, is_emoji, _ = scan_emoji_presentation(seq)
    assert end == len(seq)
    assert is_emoji


def test_keycap_sequence_is_one_emoji():
    seq = [KEYCAP_BASE, VS16, ENCLOSING_KEYCAP]
    end, is_emoji, has_vs = scan_emoji_presentation(seq)
    assert end == len(seq)
    assert is_emoji and has_vs


def test_run_stops_at_presentation_change():
    runs = list(iter_emoji_runs([EMOJI_PRESENTATION, TEXT_PRESENTATION]))
    assert [r[:2] for r in runs] == [(0, 1), (1, 2)]
    assert [r[2] for r in runs] == [True, False]


def test_scan_from_offset_matches_suffix():
    seq = [TEXT_PRESENTATION, EMOJI, VS16]
    assert scan_emoji_presentation(seq, 1)[1:] == scan_emoji_presentation(seq[1:], 0)[1:]
    assert scan_emoji_presentation(seq, 1)[0] == len(seq)


@pytest.mark.parametrize("start", [-1, 4])
def test_start_out_of_range(start):
    with pytest.raises(ValueError):
        scan_emoji_presentation([EMOJI, EMOJI, EMOJI], start)


def test_runs_cover_input_contiguously():
    rng = random.Random(1234)
    for _ in range(200):
        seq = [rng.randrange(16) for _ in range(rng.randrange(1, 12))]
        runs = list(iter_emoji_runs(seq))
        assert runs[0][0] == 0
        assert runs[-1][1] == len(seq)
        for (_, end, _, _), (start, _, _, _) in zip(runs, runs[1:]):
            assert end == start
        assert all(end > start for start, end, _, _ in runs)


def test_zwj_sequence_stays_together():
    seq = [EMOJI_PRESENTATION, ZWJ, EMOJI_PRESENTATION]
    runs = list(iter_emoji_runs(seq))
    assert len(runs) == 1
    assert runs[0][1] == len(seq)
    assert runs[0][2]


def test_modifier_sequence_stays_together():
    seq = [MODIFIER_BASE, MODIFIER]
    runs = list(iter_emoji_runs(seq))
    assert len(runs) == 1
    assert runs[0][2]