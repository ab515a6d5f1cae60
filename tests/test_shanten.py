import unittest
from unittest import mock
import sys, pathlib
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "src"))

from handmetrics import shanten as shanten_mod
from handmetrics.shanten import AGARI, calc_all, calc_chitoi, calc_kokushi, calc_normal
from handmetrics.tiles import NUM_TILES, parse_hand
from hands import random_hands
from shared_tables import shared_tables


def _normal(text: str) -> int:
    tiles = parse_hand(text)
    return calc_normal(tiles, sum(tiles) // 3)


class TestNormal(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        shared_tables()

    def test_complete_hand(self):
        assert _normal("111m555p999s234m11z") == AGARI
        assert _normal("123456789m123p11z") == AGARI

    def test_tenpai(self):
        assert _normal("111m555p999s234m1z") == 0
        assert _normal("123456789m12p11z") == 0

    def test_iishanten(self):
        assert _normal("123456789m1p5s11z") == 1

    def test_empty_hand_needs_a_pair(self):
        assert calc_normal([0] * NUM_TILES, 0) == 1

    def test_single_tile_is_tenpai_on_pair(self):
        assert _normal("5z") == 0

    def test_partial_hand(self):
        # one meld + a pair, 5 tiles
        assert _normal("123m55p") == AGARI
        assert _normal("13m55p") == 0

    def test_len_div3_out_of_range(self):
        with self.assertRaises(ValueError):
            calc_normal([0] * NUM_TILES, 5)
        with self.assertRaises(ValueError):
            calc_normal([0] * NUM_TILES, -1)

    def test_group_outside_table_degrades_without_error(self):
        # 4-4-4-2 in one suit encodes past the end of the suit table
        assert _normal("1111222233334m4m") == AGARI

    def test_four_of_a_kind_cannot_be_triplet_and_pair(self):
        assert _normal("1111m234p567p789s") == 1
        assert _normal("123m456m789m1111z") == 1

    def test_four_of_a_kind_used_by_a_run(self):
        assert _normal("111123m456p789s55z") == AGARI

    def test_explicit_tables_argument(self):
        tiles = parse_hand("111m555p999s234m1z")
        assert calc_normal(tiles, 4, shared_tables()) == 0

    def test_random_hands_bounded_and_deterministic(self):
        for tiles in random_hands(1234, 200):
            m = sum(tiles) // 3
            first = calc_normal(tiles, m)
            assert first >= AGARI
            assert first <= 8
            assert calc_normal(tiles, m) == first


class TestChitoi(unittest.TestCase):
    def test_seven_pairs_complete(self):
        assert calc_chitoi(parse_hand("1133m2244p5566s77z")) == AGARI

    def test_seven_kinds_six_pairs(self):
        assert calc_chitoi(parse_hand("11133m2244p5566s7z")) == 0
        assert calc_chitoi(parse_hand("1133m2244p5566s7z")) == 0

    def test_missing_kinds_are_penalised(self):
        # 4 pairs over 4 kinds: 6 - 4 + (7 - 4)
        assert calc_chitoi(parse_hand("11223344m")) == 5

    def test_empty(self):
        assert calc_chitoi([0] * NUM_TILES) == 13


class TestKokushi(unittest.TestCase):
    def test_complete(self):
        assert calc_kokushi(parse_hand("119m19p19s1234567z")) == AGARI

    def test_thirteen_wait(self):
        assert calc_kokushi(parse_hand("19m19p19s1234567z")) == 0

    def test_ignores_simples(self):
        assert calc_kokushi(parse_hand("2345678m2345678p")) == 13
        assert calc_kokushi(parse_hand("11m2345678p")) == 11


class TestCalcAll(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        shared_tables()

    def test_takes_special_shapes(self):
        assert calc_all(parse_hand("1133m2244p5566s77z"), 4) == AGARI
        assert calc_all(parse_hand("119m19p19s1234567z"), 4) == AGARI

    def test_complete_standard_hand_short_circuits(self):
        assert calc_all(parse_hand("111m555p999s234m11z"), 4) == AGARI

    def test_tenpai_standard_still_checks_special_shapes(self):
        tiles = parse_hand("1133m2244p5566s77z")
        with mock.patch.object(shanten_mod, "calc_normal", return_value=0):
            assert calc_all(tiles, 4) == AGARI

    def test_partial_hand_uses_standard_only(self):
        tiles = parse_hand("1133m22p")
        assert calc_all(tiles, 2) == calc_normal(tiles, 2)

    def test_never_above_standard(self):
        for tiles in random_hands(99, 200):
            m = sum(tiles) // 3
            combined = calc_all(tiles, m)
            normal = calc_normal(tiles, m)
            assert combined <= normal
            if m == 4 and normal >= 0:
                assert combined == min(normal, calc_chitoi(tiles), calc_kokushi(tiles))


if __name__ == "__main__":
    unittest.main()
