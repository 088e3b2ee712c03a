"""牌型定义 - 五张扑克的 10 种牌型及评估结果"""

from enum import IntEnum
from dataclasses import dataclass


class HandCategory(IntEnum):
    """牌型枚举（序数越大越强，跨牌型之间严格全序）"""
    HIGH_CARD = 1           # 高牌
    ONE_PAIR = 2            # 一对
    TWO_PAIR = 3            # 两对
    THREE_OF_A_KIND = 4     # 三条
    STRAIGHT = 5            # 顺子
    FLUSH = 6               # 同花
    FULL_HOUSE = 7          # 葫芦
    FOUR_OF_A_KIND = 8      # 四条
    STRAIGHT_FLUSH = 9      # 同花顺
    ROYAL_FLUSH = 10        # 皇家同花顺


# 牌型中文名
CATEGORY_NAME = {
    HandCategory.HIGH_CARD: "高牌",
    HandCategory.ONE_PAIR: "一对",
    HandCategory.TWO_PAIR: "两对",
    HandCategory.THREE_OF_A_KIND: "三条",
    HandCategory.STRAIGHT: "顺子",
    HandCategory.FLUSH: "同花",
    HandCategory.FULL_HOUSE: "葫芦",
    HandCategory.FOUR_OF_A_KIND: "四条",
    HandCategory.STRAIGHT_FLUSH: "同花顺",
    HandCategory.ROYAL_FLUSH: "皇家同花顺",
}


@dataclass(frozen=True)
class Evaluation:
    """一手牌的评估结果"""
    category: HandCategory
    name: str

    @property
    def rank(self) -> int:
        return int(self.category)

    @classmethod
    def of(cls, category: HandCategory) -> "Evaluation":
        return cls(category=category, name=CATEGORY_NAME[category])

    def __repr__(self) -> str:
        return f"[{self.rank}] {self.name}"
