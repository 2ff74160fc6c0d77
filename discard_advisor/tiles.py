from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from enum import Enum

from discard_advisor.errors import InvalidHandError

SUITS = ("m", "p", "s", "z")
NUMBER_SUITS = ("m", "p", "s")
TILE_RE = re.compile(r"^(?:[mps][0-9]|z[1-7])$")
SUIT_RUN_RE = re.compile(r"[mpsz][\d_*+=\-^]+")
MELD_RE = re.compile(r"^([mpsz])([\d\-+=]+)$")
MELD_MARKERS_RE = re.compile(r"[-+=]")
MAX_COPIES = 4


class TileSource(str, Enum):
    concealed = "concealed"
    just_drawn = "just_drawn"


@dataclass(frozen=True)
class Tile:
    suit: str
    rank: int

    def __str__(self) -> str:
        return self.code

    @property
    def code(self) -> str:
        return f"{self.suit}{self.rank}"

    @property
    def is_red(self) -> bool:
        return self.rank == 0

    @property
    def number(self) -> int:
        return 5 if self.rank == 0 else self.rank

    @property
    def normal(self) -> Tile:
        return Tile(self.suit, 5) if self.rank == 0 else self

    @property
    def index(self) -> int:
        return SUITS.index(self.suit) * 9 + self.number - 1

    @property
    def is_honor(self) -> bool:
        return self.suit == "z"

    @property
    def is_terminal_or_honor(self) -> bool:
        return self.is_honor or self.number in {1, 9}

    @property
    def is_simple(self) -> bool:
        return not self.is_terminal_or_honor


ALL_TILES: tuple[Tile, ...] = tuple(
    Tile(suit, rank) for suit in SUITS for rank in range(1, 8 if suit == "z" else 10)
)
RED_TILES: tuple[Tile, ...] = tuple(Tile(suit, 0) for suit in NUMBER_SUITS)


def _sort_key(tile: Tile) -> tuple[int, int, int]:
    # red five sorts immediately before the ordinary fives of its suit
    return SUITS.index(tile.suit), tile.number, 0 if tile.is_red else 1


@dataclass(frozen=True)
class HandTile:
    """A concealed tile tagged with where it came from."""

    tile: Tile
    source: TileSource = TileSource.concealed


@dataclass(frozen=True)
class Meld:
    tiles: tuple[Tile, ...]
    text: str
    open: bool

    @property
    def is_quad(self) -> bool:
        return len(self.tiles) == 4

    @property
    def is_run(self) -> bool:
        return len({t.number for t in self.tiles}) > 1


@dataclass(frozen=True)
class Hand:
    concealed: tuple[HandTile, ...]
    melds: tuple[Meld, ...] = ()

    @property
    def tile_count(self) -> int:
        return len(self.concealed) + 3 * len(self.melds)

    @property
    def is_draw_state(self) -> bool:
        return self.tile_count % 3 == 2

    @property
    def is_closed(self) -> bool:
        return not any(meld.open for meld in self.melds)

    @property
    def drawn(self) -> Tile | None:
        for hand_tile in self.concealed:
            if hand_tile.source is TileSource.just_drawn:
                return hand_tile.tile
        return None

    def concealed_tiles(self) -> list[Tile]:
        return [hand_tile.tile for hand_tile in self.concealed]

    def all_tiles(self) -> list[Tile]:
        tiles = self.concealed_tiles()
        for meld in self.melds:
            tiles.extend(meld.tiles)
        return tiles

    def counts34(self) -> list[int]:
        counts = [0] * 34
        for tile in self.concealed_tiles():
            counts[tile.index] += 1
        return counts

    def full_counts34(self) -> list[int]:
        """Concealed counts plus meld tiles, quads folded to three so the shape stays at 14."""
        counts = self.counts34()
        for meld in self.melds:
            for tile in meld.tiles[:3]:
                counts[tile.index] += 1
        return counts

    def held_counts34(self) -> list[int]:
        counts = [0] * 34
        for tile in self.all_tiles():
            counts[tile.index] += 1
        return counts

    def discard_options(self) -> list[Tile]:
        """Distinct concealed tiles in hand order; a just-drawn copy of a held tile is not repeated."""
        options: list[Tile] = []
        for hand_tile in self.concealed:
            if hand_tile.tile not in options:
                options.append(hand_tile.tile)
        return options

    def discard(self, tile: Tile) -> Hand:
        positions = [i for i, hand_tile in enumerate(self.concealed) if hand_tile.tile == tile]
        if not positions:
            raise InvalidHandError(f"Tile {tile.code} is not in the concealed hand")
        drawn = [i for i in positions if self.concealed[i].source is TileSource.just_drawn]
        removed = drawn[0] if drawn else positions[-1]
        remaining = tuple(
            HandTile(hand_tile.tile) for i, hand_tile in enumerate(self.concealed) if i != removed
        )
        return Hand(concealed=remaining, melds=self.melds)

    def draw(self, tile: Tile) -> Hand:
        return Hand(concealed=self.concealed + (HandTile(tile, TileSource.just_drawn),), melds=self.melds)


def parse_tile(code: str) -> Tile:
    if not isinstance(code, str) or not TILE_RE.fullmatch(code):
        raise InvalidHandError(f"Invalid tile code: {code}")
    return Tile(code[0], int(code[1]))


def parse_tile_runs(text: str) -> list[Tile]:
    """Parse suit runs such as ``m123p05z11`` into tiles, in written order.

    Call markers (``_ * + = - ^``) between digits are tolerated and dropped.
    """
    if SUIT_RUN_RE.sub("", text).strip():
        raise InvalidHandError(f"Unparseable tile string: {text}")
    tiles: list[Tile] = []
    for run in SUIT_RUN_RE.findall(text):
        suit = run[0]
        for digit in re.findall(r"\d", run[1:]):
            tiles.append(parse_tile(suit + digit))
    return tiles


def _parse_meld(text: str) -> Meld:
    match = MELD_RE.fullmatch(text)
    if not match:
        raise InvalidHandError(f"Invalid meld: {text}")
    suit, body = match.groups()
    digits = MELD_MARKERS_RE.sub("", body)
    tiles = tuple(parse_tile(suit + digit) for digit in digits)
    if len(tiles) not in {3, 4}:
        raise InvalidHandError(f"Meld must contain 3 or 4 tiles: {text}")

    numbers = sorted(t.number for t in tiles)
    is_set = len(set(numbers)) == 1
    is_run = len(tiles) == 3 and suit != "z" and numbers == [numbers[0], numbers[0] + 1, numbers[0] + 2]
    if not (is_set or is_run):
        raise InvalidHandError(f"Meld is neither a set nor a run: {text}")
    opened = len(digits) != len(body)
    if is_run and not opened:
        raise InvalidHandError(f"Run meld must be called: {text}")
    return Meld(tiles=tiles, text=text, open=opened)


def _check_copies(tiles: list[Tile]) -> None:
    counts = Counter(tile.normal for tile in tiles)
    for tile, count in counts.items():
        if count > MAX_COPIES:
            raise InvalidHandError(f"Tile appears {count} times: {tile.code}")


def parse_hand(text: str) -> Hand:
    if not isinstance(text, str) or not text.strip():
        raise InvalidHandError("Hand string is empty")

    concealed_text, *meld_texts = text.strip().split(",")
    tiles = parse_tile_runs(concealed_text)
    melds = tuple(_parse_meld(m.strip()) for m in meld_texts if m.strip())

    total = len(tiles) + 3 * len(melds)
    if total not in {13, 14}:
        raise InvalidHandError(f"Hand must hold 13 or 14 tiles, got {total}")

    drawn: Tile | None = None
    if total == 14:
        drawn = tiles.pop()
    concealed = [HandTile(tile) for tile in sorted(tiles, key=_sort_key)]
    if drawn is not None:
        concealed.append(HandTile(drawn, TileSource.just_drawn))

    hand = Hand(concealed=tuple(concealed), melds=melds)
    _check_copies(hand.all_tiles())
    return hand


def format_tiles(tiles: list[Tile]) -> str:
    parts: list[str] = []
    ordered = sorted(tiles, key=_sort_key)
    for suit in SUITS:
        ranks = "".join(str(t.rank) for t in ordered if t.suit == suit)
        if ranks:
            parts.append(suit + ranks)
    return "".join(parts)


def format_hand(hand: Hand) -> str:
    body = format_tiles([ht.tile for ht in hand.concealed if ht.source is TileSource.concealed])
    drawn = hand.drawn
    if drawn is not None:
        body += drawn.code
    return ",".join([body, *(meld.text for meld in hand.melds)])
