# 游戏流程控制模块
from .player import Player, Seat
from .game_state import GamePhase, GameEvent, RoundResult, Winner
from .session import GameSession
