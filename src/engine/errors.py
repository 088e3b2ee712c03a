"""引擎异常 - 所有可恢复错误的统一基类"""


class PokerError(Exception):
    """扑克引擎错误基类，调用方（UI 层）决定是否提示给用户"""


class InvalidRank(PokerError):
    """无法识别的点数"""


class InvalidSuit(PokerError):
    """无法识别的花色"""


class InvalidHand(PokerError):
    """评估的手牌不是 5 张互不相同的牌"""


class InvalidPhase(PokerError):
    """在错误的阶段调用了动作"""


class InvalidSelection(PokerError):
    """换牌位置越界、重复或不是整数"""


class InvalidDifficulty(PokerError):
    """未知的难度名称"""
