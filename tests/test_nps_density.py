from __future__ import annotations

import math

import pytest

from nps_engine.density import (
    block_samples,
    calculate_avg_nps,
    calculate_by_frequency,
    calculate_distribution,
    calculate_play_nps,
    density_samples,
)

EXAMPLE = [0, 500, 1000, 1500, 2000]


def test_avg_nps_example():
    assert calculate_avg_nps(EXAMPLE, 2000) == 2.5


def test_avg_nps_matches_count_over_seconds():
    for onsets, duration in (([0], 1), ([0, 0, 0], 3000), (list(range(0, 90000, 125)), 90000)):
        assert calculate_avg_nps(onsets, duration) == pytest.approx(len(onsets) / (duration / 1000.0))


def test_avg_nps_undefined():
    assert calculate_avg_nps([], 2000) is None
    assert calculate_avg_nps(EXAMPLE, 0) is None


def test_play_nps_uses_first_to_last_span():
    assert calculate_play_nps([1000, 2000, 3000]) == 1.5
    assert calculate_play_nps([500]) is None
    assert calculate_play_nps([]) is None


def test_distribution_example_final_block_absorbs_map_end():
    # the note at 2000 lands in the closed final block
    assert calculate_distribution(EXAMPLE, 2000, 2) == [2.0, 3.0]


def test_single_block_equals_avg_nps():
    onsets = [12, 340, 341, 980, 1500, 2750, 2999]
    dist = calculate_distribution(onsets, 3000, 1)
    assert dist == [calculate_avg_nps(onsets, 3000)]


@pytest.mark.parametrize("blocks", [1, 2, 3, 7, 13, 64])
def test_every_onset_counted_once(blocks):
    onsets = list(range(0, 1001, 7)) + [1000, 1000]
    samples = block_samples(onsets, 1000, blocks)
    assert len(samples) == blocks
    assert sum(s.count for s in samples) == len(onsets)
    # densities times widths recover the note count
    assert sum(s.nps * (s.end_ms - s.start_ms) / 1000.0 for s in samples) == pytest.approx(len(onsets))


def test_distribution_is_chronological():
    onsets = [0, 10, 20, 30, 2900]
    dist = calculate_distribution(onsets, 3000, 3)
    assert dist == [4.0, 0.0, 1.0]


def test_duplicates_all_counted():
    assert calculate_distribution([0, 0, 0, 1000], 2000, 2) == [3.0, 1.0]


def test_all_notes_at_zero_is_defined():
    assert calculate_distribution([0, 0, 0], 3000, 3) == [3.0, 0.0, 0.0]


def test_unsorted_input_matches_sorted():
    shuffled = [1500, 0, 2000, 500, 1000]
    assert calculate_distribution(shuffled, 2000, 2) == calculate_distribution(EXAMPLE, 2000, 2)
    assert calculate_by_frequency(shuffled, 2000, 1.0) == calculate_by_frequency(EXAMPLE, 2000, 1.0)
    assert shuffled == [1500, 0, 2000, 500, 1000]


def test_distribution_undefined():
    assert calculate_distribution([], 2000, 2) is None
    assert calculate_distribution(EXAMPLE, 0, 2) is None
    assert calculate_distribution(EXAMPLE, 2000, 0) is None
    assert calculate_distribution(EXAMPLE, 2000, -3) is None


def test_distribution_too_many_blocks_is_undefined():
    # blocks narrower than float resolution would collapse to zero width
    assert calculate_distribution([0], 1, 10**18) is None


def test_parallel_matches_serial():
    onsets = [i * 3.7 for i in range(5000)]
    duration = 5000 * 3.7
    serial = calculate_distribution(onsets, duration, 200)
    pooled = calculate_distribution(onsets, duration, 200, workers=4)
    assert pooled == serial
    assert calculate_by_frequency(onsets, duration, 20.0, workers=4) == calculate_by_frequency(onsets, duration, 20.0)


def test_frequency_example():
    assert calculate_by_frequency(EXAMPLE, 2000, 1.0) == [2.0, 3.0]


def test_frequency_truncated_last_window_uses_real_width():
    dist = calculate_by_frequency([0, 1000, 2000, 2400], 2500, 1.0)
    assert dist == [1.0, 1.0, 4.0]


def test_frequency_agrees_with_blocks():
    onsets = [0, 90, 180, 333, 334, 666, 667, 1000, 1333, 1999]
    duration = 2000
    for blocks in (2, 4, 5, 8):
        by_blocks = calculate_distribution(onsets, duration, blocks)
        by_freq = calculate_by_frequency(onsets, duration, blocks * 1000 / duration)
        assert by_freq == pytest.approx(by_blocks)


def test_frequency_undefined():
    assert calculate_by_frequency([], 2000, 1.0) is None
    assert calculate_by_frequency(EXAMPLE, 0, 1.0) is None
    assert calculate_by_frequency(EXAMPLE, 2000, 0.0) is None
    assert calculate_by_frequency(EXAMPLE, 2000, -1.0) is None
    assert calculate_by_frequency(EXAMPLE, 2000, math.nan) is None
    assert calculate_by_frequency(EXAMPLE, 2000, math.inf) is None


def test_density_samples_are_keyed_by_window_start():
    samples = density_samples(EXAMPLE, 2000, 2.0)
    assert [s.start_ms for s in samples] == [0.0, 500.0, 1000.0, 1500.0]
    assert [s.count for s in samples] == [1, 1, 1, 2]
    assert samples[-1].end_ms == 2000
    assert samples[-1].nps == 4.0
