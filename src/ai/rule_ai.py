"""规则引擎 AI - 三种难度的换牌策略，不依赖 LLM"""

import logging
import random
from enum import Enum
from typing import Dict, List, Optional, Protocol, Union
from collections import Counter

from src.engine.card import Card
from src.engine.errors import InvalidDifficulty
from src.engine.hand_category import HandCategory, Evaluation

logger = logging.getLogger(__name__)


class Difficulty(str, Enum):
    """难度枚举，只影响对手的换牌策略"""
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"

    @classmethod
    def parse(cls, value: Union["Difficulty", str]) -> "Difficulty":
        if isinstance(value, Difficulty):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidDifficulty(f"未知难度: {value!r}") from None


# 难度中文名
DIFFICULTY_NAME = {
    Difficulty.EASY: "简单",
    Difficulty.NORMAL: "普通",
    Difficulty.HARD: "困难",
}


class DiscardStrategy(Protocol):
    """换牌决策接口（策略模式）"""

    def decide_discards(self, hand: List[Card], evaluation: Evaluation) -> List[Card]:
        """返回要换掉的牌（0~5 张），调用方负责补牌"""
        ...


# ============================================================
#  共用辅助
# ============================================================

def _lowest(hand: List[Card], count: int) -> List[Card]:
    """牌力最小的 count 张"""
    return sorted(hand, key=lambda c: c.strength)[:count]


def _pair_value(hand: List[Card]) -> Optional[int]:
    """恰好出现两次的点数中最大的一个"""
    counts = Counter(c.strength for c in hand)
    pairs = [v for v, n in counts.items() if n == 2]
    return max(pairs) if pairs else None


def _discard_non_pair(hand: List[Card]) -> List[Card]:
    """保留对子，换掉其余的牌"""
    pair = _pair_value(hand)
    return [c for c in hand if c.strength != pair]


# ============================================================
#  简单：无视牌力，随机换 0~4 张
# ============================================================

class EasyAI:
    """随机换牌"""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def decide_discards(self, hand: List[Card], evaluation: Evaluation) -> List[Card]:
        count = self.rng.randint(0, 4)
        if count == 0:
            return []
        return self.rng.sample(list(hand), count)


# ============================================================
#  普通：基础策略
# ============================================================

class NormalAI:
    """
    顺子及以上不换；一对保留对子换三张；
    其余情况（高牌、两对、三条）一律换掉最小的三张。
    """

    def decide_discards(self, hand: List[Card], evaluation: Evaluation) -> List[Card]:
        if evaluation.category >= HandCategory.STRAIGHT:
            return []
        if evaluation.category == HandCategory.ONE_PAIR:
            return _discard_non_pair(hand)
        return _lowest(hand, 3)


# ============================================================
#  困难：追听顺子 / 同花
# ============================================================

class HardAI:
    """三条及以上不换，两对换单张，一对换三张，否则追听顺子或同花"""

    def decide_discards(self, hand: List[Card], evaluation: Evaluation) -> List[Card]:
        category = evaluation.category
        if category >= HandCategory.THREE_OF_A_KIND:
            return []

        if category == HandCategory.TWO_PAIR:
            counts = Counter(c.strength for c in hand)
            singles = [c for c in hand if counts[c.strength] == 1]
            if singles:
                return [min(singles, key=lambda c: c.strength)]
            return []

        if category == HandCategory.ONE_PAIR:
            return _discard_non_pair(hand)

        return (
            self._straight_draw(hand)
            or self._flush_draw(hand)
            or _lowest(hand, 3)
        )

    @staticmethod
    def _straight_draw(hand: List[Card]) -> List[Card]:
        """四张连续点数：返回顺子以外的那一张，没有则返回空"""
        unique = sorted(set(c.strength for c in hand))
        for i in range(len(unique) - 3):
            low, high = unique[i], unique[i + 3]
            if high - low != 3:
                continue
            run = [c for c in hand if low <= c.strength <= high]
            if len(run) == 4:
                return [c for c in hand if c not in run]
        return []

    @staticmethod
    def _flush_draw(hand: List[Card]) -> List[Card]:
        """四张同花：返回花色不同的那一张，没有则返回空"""
        counts = Counter(c.suit for c in hand)
        for suit, n in counts.items():
            if n == 4:
                return [c for c in hand if c.suit != suit]
        return []


# ============================================================
#  难度分派
# ============================================================

def create_strategy(
    difficulty: Union[Difficulty, str], rng: Optional[random.Random] = None
) -> DiscardStrategy:
    """按难度创建策略实例"""
    difficulty = Difficulty.parse(difficulty)
    strategies: Dict[Difficulty, DiscardStrategy] = {
        Difficulty.EASY: EasyAI(rng),
        Difficulty.NORMAL: NormalAI(),
        Difficulty.HARD: HardAI(),
    }
    return strategies[difficulty]


def decide_discards(
    hand: List[Card],
    evaluation: Evaluation,
    difficulty: Union[Difficulty, str],
    rng: Optional[random.Random] = None,
) -> List[Card]:
    """对手换牌决策的统一入口"""
    strategy = create_strategy(difficulty, rng)
    discards = strategy.decide_discards(hand, evaluation)
    logger.debug("对手(%s) %s -> 换 %d 张: %s",
                 Difficulty.parse(difficulty).value, evaluation.name, len(discards), discards)
    return discards
