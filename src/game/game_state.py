"""游戏状态 - 一局五张抽牌的阶段、事件与结算结果"""

from enum import Enum
from dataclasses import dataclass
from typing import Any, List, Optional

from src.engine.card import Card
from src.engine.hand_category import Evaluation
from src.game.player import Seat


class GamePhase(str, Enum):
    """游戏阶段"""
    WAITING = "WAITING"                     # 等待开始
    DEALT = "DEALT"                         # 刚发完牌（仅供展示节奏使用）
    AWAITING_DISCARD = "AWAITING_DISCARD"   # 等待玩家换牌或停牌
    RESOLVED = "RESOLVED"                   # 已结算


class Winner(str, Enum):
    """胜负判定"""
    PLAYER = "PLAYER"
    OPPONENT = "OPPONENT"
    DRAW = "DRAW"


@dataclass
class GameEvent:
    """游戏事件记录"""
    phase: GamePhase
    seat: Optional[Seat]
    action: str                  # "deal", "discard", "stand", "resolve"
    data: Any = None             # 换牌列表 / RoundResult / None


@dataclass
class RoundResult:
    """一局的最终结果"""
    player_hand: List[Card]
    opponent_hand: List[Card]
    player_evaluation: Evaluation
    opponent_evaluation: Evaluation
    winner: Winner
    player_discards: int = 0
    opponent_discards: int = 0
