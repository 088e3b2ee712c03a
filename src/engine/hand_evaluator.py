"""牌型评估器 - 识别五张牌的最佳牌型并比较两手牌"""

from typing import List, Optional

from .card import Card, Suit, sort_cards
from .errors import InvalidHand
from .hand_category import HandCategory, Evaluation


HAND_SIZE = 5

# A-5-4-3-2 轮盘顺（A 当 1 用）
_WHEEL = [14, 5, 4, 3, 2]


def evaluate(cards: List[Card]) -> Evaluation:
    """
    识别五张牌的牌型。
    牌按牌力从大到小排序后，从最强牌型往下逐个检测，返回第一个命中的。
    """
    if len(cards) != HAND_SIZE or len(set(cards)) != HAND_SIZE:
        raise InvalidHand(f"需要 {HAND_SIZE} 张互不相同的牌，实际: {cards}")

    ordered = sort_cards(cards)
    values = [c.strength for c in ordered]
    suits = [c.suit for c in ordered]

    # 按检测优先级依次尝试
    category = (
        _detect_royal_flush(values, suits)
        or _detect_straight_flush(values, suits)
        or _detect_four_of_a_kind(values, suits)
        or _detect_full_house(values, suits)
        or _detect_flush(values, suits)
        or _detect_straight(values, suits)
        or _detect_three_of_a_kind(values, suits)
        or _detect_two_pair(values, suits)
        or _detect_one_pair(values, suits)
        or HandCategory.HIGH_CARD
    )
    return Evaluation.of(category)


def compare(a: Evaluation, b: Evaluation) -> int:
    """
    比较两手牌：a 胜返回 1，b 胜返回 -1，平局返回 0。
    只比较牌型序数，同牌型一律判平（不比踢脚牌）。
    """
    if a.rank > b.rank:
        return 1
    if a.rank < b.rank:
        return -1
    return 0


# ============================================================
#  辅助函数（values 已按从大到小排序）
# ============================================================

def _is_flush(suits: List[Suit]) -> bool:
    return all(s == suits[0] for s in suits)


def _is_wheel(values: List[int]) -> bool:
    return values == _WHEEL


def _is_straight(values: List[int]) -> bool:
    """五个连续递减的点数，或 A-5-4-3-2"""
    for i in range(HAND_SIZE - 1):
        if values[i] - values[i + 1] != 1:
            return _is_wheel(values)
    return True


# ============================================================
#  牌型检测
# ============================================================

def _detect_royal_flush(values: List[int], suits: List[Suit]) -> Optional[HandCategory]:
    """皇家同花顺：A 打头的同花顺（轮盘顺里的 A 算小，不计入）"""
    if _is_flush(suits) and _is_straight(values) and values[0] == 14 and not _is_wheel(values):
        return HandCategory.ROYAL_FLUSH
    return None


def _detect_straight_flush(values: List[int], suits: List[Suit]) -> Optional[HandCategory]:
    """同花顺"""
    if _is_flush(suits) and _is_straight(values):
        return HandCategory.STRAIGHT_FLUSH
    return None


def _detect_four_of_a_kind(values: List[int], suits: List[Suit]) -> Optional[HandCategory]:
    """四条：前四张或后四张相同"""
    if values[0] == values[3] or values[1] == values[4]:
        return HandCategory.FOUR_OF_A_KIND
    return None


def _detect_full_house(values: List[int], suits: List[Suit]) -> Optional[HandCategory]:
    """葫芦：三条 + 一对，三条在前或在后"""
    if (values[0] == values[2] and values[3] == values[4]) or \
            (values[0] == values[1] and values[2] == values[4]):
        return HandCategory.FULL_HOUSE
    return None


def _detect_flush(values: List[int], suits: List[Suit]) -> Optional[HandCategory]:
    """同花：五张同一花色"""
    if _is_flush(suits):
        return HandCategory.FLUSH
    return None


def _detect_straight(values: List[int], suits: List[Suit]) -> Optional[HandCategory]:
    """顺子"""
    if _is_straight(values):
        return HandCategory.STRAIGHT
    return None


def _detect_three_of_a_kind(values: List[int], suits: List[Suit]) -> Optional[HandCategory]:
    """三条：任意连续三个位置相同"""
    for i in range(HAND_SIZE - 2):
        if values[i] == values[i + 1] == values[i + 2]:
            return HandCategory.THREE_OF_A_KIND
    return None


def _detect_two_pair(values: List[int], suits: List[Suit]) -> Optional[HandCategory]:
    """
    两对：从左往右扫描相邻相同的两张，命中后跳过这一对再继续。
    五张牌最多只能有两对，贪心扫描即可。
    """
    pairs = 0
    i = 0
    while i < HAND_SIZE - 1:
        if values[i] == values[i + 1]:
            pairs += 1
            i += 2
        else:
            i += 1
    if pairs == 2:
        return HandCategory.TWO_PAIR
    return None


def _detect_one_pair(values: List[int], suits: List[Suit]) -> Optional[HandCategory]:
    """一对：存在相邻相同的两张"""
    for i in range(HAND_SIZE - 1):
        if values[i] == values[i + 1]:
            return HandCategory.ONE_PAIR
    return None
