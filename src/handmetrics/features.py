"""
Discard-metric feature planes
-----------------------------

Turns the metric bundles of a hand into a (C x 34 x 1) float tensor for a
discard policy network: per-tile planes describe the hand after discarding
that tile, constant planes describe the hand as it is.

Channels:
    0      hand_count (/4)
    1      discard_mask (tile held)
    2      discard -> shanten_normal   (/8)
    3      discard -> shanten_chiitoi  (/6)
    4      discard -> shanten_kokushi  (/13)
    5      discard -> tanyao_distance  (/22)
    6-8    discard -> honitsu_distance m/p/s (/22)
    9      shanten_normal   (global, /8)
    10     shanten_chiitoi  (global, /6)
    11     shanten_kokushi  (global, /13)
    12     tanyao_distance  (global, /22)
    13-15  honitsu_distance m/p/s (global, /22)

Negative values (complete hands) are clipped to 0; tiles that cannot be
discarded read 1.0 on the per-tile metric planes.
"""
from __future__ import annotations
from typing import List, Optional, Sequence

import torch

from handmetrics.distance import UNREACHABLE_PENALTY
from handmetrics.evaluate import HandMetrics, eval_discards, eval_hand
from handmetrics.tables import ShantenTables
from handmetrics.tiles import MAX_COPIES, MAX_HAND, NUM_TILES

WIDTH = 1
# normal, chiitoi, kokushi, tanyao, honitsu x3
METRIC_SCALES = (8.0, 6.0, 13.0) + (float(MAX_HAND + UNREACHABLE_PENALTY),) * 4
NUM_FEATURES = 2 + 2 * len(METRIC_SCALES)


def _flatten(m: HandMetrics) -> List[int]:
    return [m.normal_shanten, m.chiitoi_shanten, m.kokushi_shanten, m.tanyao_distance, *m.honitsu_distance]


class HandMetricFeatures(torch.nn.Module):
    """Builds a (NUM_FEATURES, 34, WIDTH) tensor from a 34-slot hand."""

    def __init__(self, tables: Optional[ShantenTables] = None):
        super().__init__()
        self.tables = tables
        self.register_buffer("scales", torch.tensor(METRIC_SCALES, dtype=torch.float32), persistent=False)

    @staticmethod
    def _broadcast_row(v: torch.Tensor) -> torch.Tensor:
        # v: (34,)
        return v.view(NUM_TILES, 1).expand(NUM_TILES, WIDTH)

    @staticmethod
    def _const_plane(val: float) -> torch.Tensor:
        return torch.full((NUM_TILES, WIDTH), float(val))

    def forward(self, hand_counts: Sequence[int]) -> torch.Tensor:
        hand = torch.as_tensor(list(hand_counts), dtype=torch.float32)
        if hand.numel() != NUM_TILES:
            raise ValueError(f"Expected length {NUM_TILES}, got {hand.numel()}")
        tiles = [int(c) for c in hand_counts]

        planes: List[torch.Tensor] = []
        planes.append(self._broadcast_row(hand.clamp(0, MAX_COPIES) / MAX_COPIES))   # 0 hand_count

        mask = torch.zeros(NUM_TILES, dtype=torch.float32)
        per_tile = torch.ones(len(METRIC_SCALES), NUM_TILES, dtype=torch.float32)
        for d in eval_discards(tiles, self.tables):
            mask[d.tile_index] = 1.0
            values = torch.tensor(_flatten(d), dtype=torch.float32).clamp(min=0)
            per_tile[:, d.tile_index] = (values / self.scales).clamp(max=1.0)
        planes.append(self._broadcast_row(mask))                                      # 1 discard mask
        for row in per_tile:
            planes.append(self._broadcast_row(row))                                   # 2-8 per discard

        current = torch.tensor(_flatten(eval_hand(tiles, self.tables)), dtype=torch.float32).clamp(min=0)
        for v in (current / self.scales).clamp(max=1.0).tolist():
            planes.append(self._const_plane(v))                                       # 9-15 global

        return torch.stack(planes, dim=0)
