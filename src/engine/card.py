"""牌的定义 - 五张抽牌扑克的 52 张牌与牌堆"""

from enum import IntEnum, Enum
from dataclasses import dataclass, field
from typing import List, Optional, Union
import random

from .errors import InvalidRank, InvalidSuit


class Rank(IntEnum):
    """点数枚举（数值即牌力，A 最大）"""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


class Suit(str, Enum):
    """花色枚举（值同时作为前端 CSS class）"""
    SPADE = "spade"
    HEART = "heart"
    DIAMOND = "diamond"
    CLUB = "club"


# 点数显示映射
RANK_DISPLAY = {
    Rank.TWO: "2", Rank.THREE: "3", Rank.FOUR: "4",
    Rank.FIVE: "5", Rank.SIX: "6", Rank.SEVEN: "7",
    Rank.EIGHT: "8", Rank.NINE: "9", Rank.TEN: "10",
    Rank.JACK: "J", Rank.QUEEN: "Q", Rank.KING: "K",
    Rank.ACE: "A",
}

# 花色符号映射（每个花色必须有一项）
SUIT_SYMBOL = {
    Suit.SPADE: "♠",
    Suit.HEART: "♥",
    Suit.DIAMOND: "♦",
    Suit.CLUB: "♣",
}

# 牌堆重建顺序：花色外层，点数内层（A 在最前）
DECK_SUITS = [Suit.SPADE, Suit.HEART, Suit.DIAMOND, Suit.CLUB]
DECK_RANKS = [Rank.ACE] + [r for r in Rank if r != Rank.ACE]

RankLike = Union[Rank, int, str]
SuitLike = Union[Suit, str]


def parse_rank(value: RankLike) -> Rank:
    """把 Rank / 整数牌力 / 显示文本（如 'A', '10'）统一转成 Rank"""
    if isinstance(value, Rank):
        return value
    if isinstance(value, bool):
        raise InvalidRank(f"无法识别的点数: {value!r}")
    if isinstance(value, int):
        try:
            return Rank(value)
        except ValueError:
            raise InvalidRank(f"无法识别的点数: {value!r}") from None
    if isinstance(value, str):
        text = value.strip().upper()
        for rank, label in RANK_DISPLAY.items():
            if label == text:
                return rank
    raise InvalidRank(f"无法识别的点数: {value!r}")


def parse_suit(value: SuitLike) -> Suit:
    """把 Suit / 花色名 / 花色符号统一转成 Suit"""
    if isinstance(value, Suit):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        for suit, symbol in SUIT_SYMBOL.items():
            if text in (suit.value, symbol):
                return suit
    raise InvalidSuit(f"无法识别的花色: {value!r}")


@dataclass(frozen=True)
class Card:
    """一张扑克牌"""
    suit: Suit
    rank: Rank
    strength: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "suit", parse_suit(self.suit))
        object.__setattr__(self, "rank", parse_rank(self.rank))
        object.__setattr__(self, "strength", int(self.rank))

    @property
    def label(self) -> str:
        return RANK_DISPLAY[self.rank]

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOL[self.suit]

    @property
    def display(self) -> str:
        return f"{self.symbol}{self.label}"

    def __repr__(self) -> str:
        return self.display

    def __lt__(self, other: "Card") -> bool:
        return self.strength < other.strength

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.rank == other.rank and self.suit == other.suit

    def __hash__(self) -> int:
        return hash((self.rank, self.suit))


def create_deck() -> List[Card]:
    """按固定顺序创建一副 52 张标准扑克牌（未洗）"""
    deck: List[Card] = []
    for suit in DECK_SUITS:
        for rank in DECK_RANKS:
            deck.append(Card(suit=suit, rank=rank))

    assert len(deck) == 52, f"牌数错误: {len(deck)}"
    return deck


def sort_cards(cards: List[Card]) -> List[Card]:
    """按牌力排序手牌（从大到小）"""
    return sorted(cards, key=lambda c: c.strength, reverse=True)


class Deck:
    """
    一副可重置的牌堆。
    从末尾抽牌，抽出的牌不会再出现在本轮后续的抽牌中。
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.cards: List[Card] = []
        self.reset()

    def __len__(self) -> int:
        return len(self.cards)

    @property
    def size(self) -> int:
        return len(self.cards)

    def reset(self) -> None:
        """重建完整 52 张并洗牌"""
        self.cards = create_deck()
        self.shuffle()

    def shuffle(self) -> None:
        """Fisher-Yates 洗牌：下标从后往前，与 [0, i] 中随机一张交换"""
        cards = self.cards
        for i in range(len(cards) - 1, 0, -1):
            j = self.rng.randint(0, i)
            cards[i], cards[j] = cards[j], cards[i]

    def draw(self, count: int = 1) -> List[Card]:
        """
        从牌堆末尾取出 count 张牌。
        剩余不足时只返回现有的牌，不报错。
        """
        if count < 0:
            raise ValueError(f"抽牌数不能为负: {count}")
        drawn: List[Card] = []
        for _ in range(count):
            if not self.cards:
                break
            drawn.append(self.cards.pop())
        return drawn
