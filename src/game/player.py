"""玩家模型 - 玩家与对手两个座位的手牌与战绩"""

from enum import Enum
from dataclasses import dataclass, field
from typing import List

from src.engine.card import Card


class Seat(str, Enum):
    """座位"""
    PLAYER = "PLAYER"       # 玩家
    OPPONENT = "OPPONENT"   # 对手 AI


@dataclass
class Player:
    """一个座位上的手牌持有者"""
    seat: Seat
    name: str
    hand: List[Card] = field(default_factory=list)
    discard_count: int = 0           # 本局换牌张数
    wins: int = 0                    # 累计胜局

    @property
    def hand_size(self) -> int:
        return len(self.hand)

    def replace_cards(self, discards: List[Card], new_cards: List[Card]) -> None:
        """按牌本身（而非位置）移除 discards，再补入 new_cards"""
        for card in discards:
            self.hand.remove(card)
        self.hand.extend(new_cards)
        self.discard_count += len(discards)

    def has_cards(self, cards: List[Card]) -> bool:
        """检查手牌中是否包含指定的牌"""
        return all(card in self.hand for card in cards)

    def reset_for_new_round(self) -> None:
        """新一局重置（保留战绩）"""
        self.hand.clear()
        self.discard_count = 0
