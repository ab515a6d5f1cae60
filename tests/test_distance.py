import unittest
import sys, pathlib
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "src"))

import numpy as np

from handmetrics.distance import UNREACHABLE_PENALTY, honitsu_distance_for_suit, tanyao_distance
from handmetrics.tiles import NUM_TILES, parse_hand
from hands import random_hands
from shared_tables import shared_tables


class TestTanyao(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        shared_tables()

    def test_terminals_and_honors_count_as_discards(self):
        # 12 simples already form 4 melds; the two honors must go
        assert tanyao_distance(parse_hand("234m345p456s678s11z")) == 2

    def test_no_simples_is_penalised(self):
        assert tanyao_distance(parse_hand("111m999p111s999s11z")) == 14 + UNREACHABLE_PENALTY
        assert tanyao_distance([0] * NUM_TILES) == UNREACHABLE_PENALTY

    def test_complete_all_simples_hand(self):
        assert tanyao_distance(parse_hand("234m345p456s678s22p")) == -1

    def test_mixed_hand(self):
        assert tanyao_distance(parse_hand("111m555p999s234m11z")) == 8

    def test_unsigned_counts(self):
        tiles = np.array(parse_hand("123456789m12p11z"), dtype=np.uint8)
        assert tanyao_distance(tiles) == tanyao_distance(parse_hand("123456789m12p11z"))
        assert honitsu_distance_for_suit(tiles, 0) == honitsu_distance_for_suit(parse_hand("123456789m12p11z"), 0)


class TestHonitsu(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        shared_tables()

    def test_per_suit(self):
        tiles = parse_hand("111m555p999s234m11z")
        assert honitsu_distance_for_suit(tiles, 0) == 5
        assert honitsu_distance_for_suit(tiles, 1) == 8
        assert honitsu_distance_for_suit(tiles, 2) == 8

    def test_complete_half_flush(self):
        tiles = parse_hand("123456789m111z22z")
        assert honitsu_distance_for_suit(tiles, 0) == -1
        assert honitsu_distance_for_suit(tiles, 1) == 8

    def test_nothing_kept_is_penalised(self):
        tiles = parse_hand("123456789p12345s")
        assert honitsu_distance_for_suit(tiles, 0) == 14 + UNREACHABLE_PENALTY

    def test_unknown_suit_keeps_only_honors(self):
        tiles = parse_hand("123456789m111z22z")
        assert honitsu_distance_for_suit(tiles, 3) == honitsu_distance_for_suit(tiles, 1)


class TestDistanceBounds(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        shared_tables()

    def test_random_hands(self):
        for tiles in random_hands(2024, 150):
            t = tanyao_distance(tiles)
            assert -1 <= t <= 14 + UNREACHABLE_PENALTY
            for suit in range(3):
                h = honitsu_distance_for_suit(tiles, suit)
                assert -1 <= h <= 14 + UNREACHABLE_PENALTY
            assert tanyao_distance(tiles) == t


if __name__ == "__main__":
    unittest.main()
