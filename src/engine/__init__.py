# 游戏引擎模块
from .card import Card, Rank, Suit, Deck, create_deck, sort_cards, parse_rank, parse_suit
from .errors import (
    PokerError, InvalidRank, InvalidSuit, InvalidHand,
    InvalidPhase, InvalidSelection, InvalidDifficulty,
)
from .hand_category import HandCategory, Evaluation, CATEGORY_NAME
from .hand_evaluator import evaluate, compare
