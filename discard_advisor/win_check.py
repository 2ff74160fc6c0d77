from __future__ import annotations

from collections import Counter
from functools import lru_cache

from discard_advisor.schemas import RuleSet
from discard_advisor.tiles import ALL_TILES, Hand, Tile

TERMINAL_HONOR_INDICES = frozenset(tile.index for tile in ALL_TILES if tile.is_terminal_or_honor)
DRAGON_INDICES = (31, 32, 33)
HONOR_START = 27
SEVEN_PAIRS = 7

SetPattern = tuple[str, int]


def _is_seven_pairs(counts: list[int]) -> bool:
    pairs = [c for c in counts if c]
    return len(pairs) == SEVEN_PAIRS and set(pairs) == {2}


def _is_thirteen_orphans(counts: list[int]) -> bool:
    held = {i for i, c in enumerate(counts) if c}
    return held == TERMINAL_HONOR_INDICES and sum(counts) == len(held) + 1


@lru_cache(maxsize=20000)
def _set_patterns(counts_tuple: tuple[int, ...], needed_sets: int) -> tuple[tuple[SetPattern, ...], ...]:
    """Every way to split ``counts_tuple`` into exactly ``needed_sets`` triplets/runs."""
    if needed_sets == 0:
        return ((),) if all(c == 0 for c in counts_tuple) else ()

    counts = list(counts_tuple)
    first = next((i for i, c in enumerate(counts) if c > 0), -1)
    if first == -1:
        return ()

    patterns: list[tuple[SetPattern, ...]] = []
    if counts[first] >= 3:
        counts[first] -= 3
        for rest in _set_patterns(tuple(counts), needed_sets - 1):
            patterns.append((("pon", first),) + rest)
        counts[first] += 3

    if first < HONOR_START and first % 9 <= 6 and counts[first + 1] > 0 and counts[first + 2] > 0:
        counts[first] -= 1
        counts[first + 1] -= 1
        counts[first + 2] -= 1
        for rest in _set_patterns(tuple(counts), needed_sets - 1):
            patterns.append((("chi", first),) + rest)
    return tuple(patterns)


def _meld_patterns(hand: Hand) -> list[SetPattern]:
    patterns: list[SetPattern] = []
    for meld in hand.melds:
        lowest = min(tile.index for tile in meld.tiles)
        patterns.append(("chi" if meld.is_run else "pon", lowest))
    return patterns


def _all_set_patterns_with_pair(hand: Hand) -> list[tuple[list[SetPattern], int]]:
    fixed = _meld_patterns(hand)
    needed = 4 - len(fixed)
    counts = hand.counts34()
    if needed < 0 or sum(counts) != needed * 3 + 2:
        return []

    patterns: list[tuple[list[SetPattern], int]] = []
    for i, c in enumerate(counts):
        if c < 2:
            continue
        work = counts[:]
        work[i] -= 2
        for closed in _set_patterns(tuple(work), needed):
            patterns.append((fixed + list(closed), i))
    return patterns


def is_complete_shape(hand: Hand) -> bool:
    counts = hand.counts34()
    if not hand.melds and (_is_seven_pairs(counts) or _is_thirteen_orphans(counts)):
        return True
    return bool(_all_set_patterns_with_pair(hand))


def _set_has_terminal_or_honor(kind: str, index: int) -> bool:
    if kind == "chi":
        return index % 9 in {0, 6}
    return index in TERMINAL_HONOR_INDICES


class YakuWinChecker:
    """Decides whether a complete hand is a legal self-drawn win.

    A closed hand always carries the self-draw yaku; an open hand needs a yaku
    from its shape. Bonus tiles never count.
    """

    def __init__(self, rules: RuleSet, round_wind: int = 0, seat_wind: int = 0) -> None:
        self.rules = rules
        self.round_wind = round_wind
        self.seat_wind = seat_wind

    def is_winning_hand(self, hand: Hand) -> bool:
        if not is_complete_shape(hand):
            return False
        if hand.is_closed:
            return True
        return bool(self.open_yaku(hand))

    def open_yaku(self, hand: Hand) -> list[str]:
        tiles = hand.all_tiles()
        counts = Counter(tile.index for tile in tiles)
        patterns = _all_set_patterns_with_pair(hand)
        yaku: list[str] = []

        value_indices = {HONOR_START + self.round_wind, HONOR_START + self.seat_wind, *DRAGON_INDICES}
        if any(counts[i] >= 3 for i in value_indices):
            yaku.append("yakuhai")
        if self.rules.open_tanyao and all(tile.is_simple for tile in tiles):
            yaku.append("tanyao")
        if any(all(kind == "pon" for kind, _ in sets) for sets, _ in patterns):
            yaku.append("toitoi")
        if _has_flush(tiles):
            yaku.append("honitsu" if any(tile.is_honor for tile in tiles) else "chinitsu")
        if any(_has_ittsuu(sets) for sets, _ in patterns):
            yaku.append("ittsuu")
        if any(_has_sanshoku(sets, "chi") for sets, _ in patterns):
            yaku.append("sanshoku_doujun")
        if any(_has_sanshoku(sets, "pon") for sets, _ in patterns):
            yaku.append("sanshoku_doukou")
        if all(tile.is_terminal_or_honor for tile in tiles):
            yaku.append("honroutou")
        elif any(_is_outside_hand(sets, pair) for sets, pair in patterns):
            yaku.append("chanta")
        concealed_quads = sum(1 for meld in hand.melds if meld.is_quad and not meld.open)
        if any(_concealed_triplets(sets[len(hand.melds):]) + concealed_quads >= 3 for sets, _ in patterns):
            yaku.append("sanankou")
        if _has_shousangen(counts):
            yaku.append("shousangen")
        if sum(1 for meld in hand.melds if meld.is_quad) == 3:
            yaku.append("sankantsu")
        return yaku


def _has_flush(tiles: list[Tile]) -> bool:
    suits = {tile.suit for tile in tiles if not tile.is_honor}
    return len(suits) <= 1


def _has_ittsuu(sets: list[SetPattern]) -> bool:
    starts = {index for kind, index in sets if kind == "chi"}
    return any({base, base + 3, base + 6} <= starts for base in (0, 9, 18))


def _has_sanshoku(sets: list[SetPattern], kind_wanted: str) -> bool:
    by_suit: dict[int, set[int]] = {0: set(), 1: set(), 2: set()}
    for kind, index in sets:
        if kind == kind_wanted and index < HONOR_START:
            by_suit[index // 9].add(index % 9)
    return bool(by_suit[0] & by_suit[1] & by_suit[2])


def _is_outside_hand(sets: list[SetPattern], pair: int) -> bool:
    if pair not in TERMINAL_HONOR_INDICES:
        return False
    return all(_set_has_terminal_or_honor(kind, index) for kind, index in sets)


def _concealed_triplets(closed_sets: list[SetPattern]) -> int:
    # every win is self-drawn, so a triplet completed by the winning tile stays concealed
    return sum(1 for kind, _ in closed_sets if kind == "pon")


def _has_shousangen(counts: Counter) -> bool:
    triplets = sum(1 for i in DRAGON_INDICES if counts[i] >= 3)
    pairs = sum(1 for i in DRAGON_INDICES if counts[i] == 2)
    return triplets == 2 and pairs == 1
