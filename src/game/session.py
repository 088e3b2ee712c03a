"""游戏会话 - 驱动一局五张抽牌扑克：发牌、换牌/停牌、对手换牌、结算"""

import logging
import random
from typing import Callable, Iterable, List, Mapping, Optional, Union

from src.engine.card import Card, Deck
from src.engine.errors import InvalidPhase, InvalidSelection
from src.engine.hand_category import Evaluation
from src.engine.hand_evaluator import HAND_SIZE, evaluate, compare
from src.game.player import Player, Seat
from src.game.game_state import GamePhase, GameEvent, RoundResult, Winner
from src.ai.rule_ai import Difficulty, decide_discards

logger = logging.getLogger(__name__)


class GameSession:
    """
    一个可独立构造的游戏会话，由 UI 层持有并驱动。

    阶段流转: WAITING → DEALT → AWAITING_DISCARD → RESOLVED → (start) ...
    非法阶段调用动作会抛出 InvalidPhase，且不改变任何状态。
    """

    def __init__(
        self,
        difficulty: Union[Difficulty, str] = Difficulty.NORMAL,
        rng: Optional[random.Random] = None,
        player_name: str = "你",
        opponent_name: str = "对手",
    ):
        self.rng = rng or random.Random()
        self.difficulty = Difficulty.parse(difficulty)
        self.deck = Deck(self.rng)
        self.player = Player(seat=Seat.PLAYER, name=player_name)
        self.opponent = Player(seat=Seat.OPPONENT, name=opponent_name)
        self.phase = GamePhase.WAITING
        self.result: Optional[RoundResult] = None
        self.rounds_played = 0
        self.draws = 0
        self.events: List[GameEvent] = []  # 本局事件，每局开始时清空
        self._pending: List[GameEvent] = []
        self._callbacks: List[Callable[[GameEvent], None]] = []

    def on_event(self, callback: Callable[[GameEvent], None]) -> None:
        """注册事件回调"""
        self._callbacks.append(callback)

    def _record(self, event: GameEvent) -> None:
        """记录事件，等本次状态转换完成后再通知"""
        self._pending.append(event)

    def _emit(self) -> None:
        """状态转换完成后统一触发事件通知（回调出错也不会留下半完成的状态）"""
        pending, self._pending = self._pending, []
        self.events.extend(pending)
        for event in pending:
            for cb in self._callbacks:
                cb(event)

    def _require_phase(self, action: str, *allowed: GamePhase) -> None:
        if self.phase not in allowed:
            raise InvalidPhase(
                f"{action} 只能在 {'/'.join(p.value for p in allowed)} 阶段调用，"
                f"当前阶段: {self.phase.value}"
            )

    # ============================================================
    #  对外只读视图
    # ============================================================

    @property
    def player_hand(self) -> List[Card]:
        return list(self.player.hand)

    @property
    def opponent_hand(self) -> Optional[List[Card]]:
        """对手手牌，结算前不公开"""
        if self.phase != GamePhase.RESOLVED:
            return None
        return list(self.opponent.hand)

    def player_evaluation(self) -> Optional[Evaluation]:
        """玩家当前牌型（局中可随时查询，未发牌时为 None）"""
        if self.player.hand_size != HAND_SIZE:
            return None
        return evaluate(self.player.hand)

    # ============================================================
    #  发牌
    # ============================================================

    def start(self, difficulty: Union[Difficulty, str, None] = None) -> None:
        """洗牌发牌，进入等待换牌阶段"""
        self._require_phase("start", GamePhase.WAITING, GamePhase.RESOLVED)
        if difficulty is not None:
            self.difficulty = Difficulty.parse(difficulty)

        self.result = None
        self.events = []
        self.player.reset_for_new_round()
        self.opponent.reset_for_new_round()

        self.deck.reset()
        self.player.hand = self.deck.draw(HAND_SIZE)
        self.opponent.hand = self.deck.draw(HAND_SIZE)
        self.phase = GamePhase.DEALT
        self._record(GameEvent(GamePhase.DEALT, None, "deal", self.difficulty))
        logger.debug("发牌完成 difficulty=%s player=%s", self.difficulty.value, self.player.hand)

        self.phase = GamePhase.AWAITING_DISCARD
        self._emit()

    # ============================================================
    #  玩家动作
    # ============================================================

    def player_discard(self, indices: Iterable[int]) -> RoundResult:
        """换掉指定位置的牌并补牌，随后对手行动并结算"""
        self._require_phase("player_discard", GamePhase.AWAITING_DISCARD)
        positions = self._validate_selection(indices)

        # 先把位置换成牌本身，避免逐个删除时下标偏移
        discards = [self.player.hand[i] for i in positions]
        self.player.replace_cards(discards, self.deck.draw(len(discards)))
        self._record(GameEvent(self.phase, Seat.PLAYER, "discard", discards))

        self._opponent_turn()
        result = self._resolve()
        self._emit()
        return result

    def stand(self) -> RoundResult:
        """不换牌，对手照常行动后结算"""
        self._require_phase("stand", GamePhase.AWAITING_DISCARD)
        self._record(GameEvent(self.phase, Seat.PLAYER, "stand"))

        self._opponent_turn()
        result = self._resolve()
        self._emit()
        return result

    def _validate_selection(self, indices: Iterable[int]) -> List[int]:
        """校验换牌位置：必须是整数、不越界、不重复"""
        if isinstance(indices, (str, bytes, Mapping)):
            raise InvalidSelection(f"换牌位置必须是整数序列: {indices!r}")
        try:
            positions = list(indices)
        except TypeError:
            raise InvalidSelection(f"换牌位置必须是整数序列: {indices!r}") from None

        for i in positions:
            if isinstance(i, bool) or not isinstance(i, int):
                raise InvalidSelection(f"换牌位置必须是整数: {i!r}")
            if not 0 <= i < self.player.hand_size:
                raise InvalidSelection(f"换牌位置越界: {i}（手牌 {self.player.hand_size} 张）")
        if len(set(positions)) != len(positions):
            raise InvalidSelection(f"换牌位置重复: {positions}")
        return positions

    # ============================================================
    #  对手 AI
    # ============================================================

    def _opponent_turn(self) -> None:
        """对手按难度策略换牌"""
        evaluation = evaluate(self.opponent.hand)
        discards = decide_discards(list(self.opponent.hand), evaluation, self.difficulty, self.rng)

        # AI 只能换自己手里的牌
        if not self.opponent.has_cards(discards):
            logger.warning("对手策略返回了不在手牌中的牌: %s，改为不换", discards)
            discards = []

        self.opponent.replace_cards(discards, self.deck.draw(len(discards)))
        action = "discard" if discards else "stand"
        self._record(GameEvent(self.phase, Seat.OPPONENT, action, discards))

    # ============================================================
    #  结算
    # ============================================================

    def _resolve(self) -> RoundResult:
        """评估双方最终手牌，判定胜负"""
        player_eval = evaluate(self.player.hand)
        opponent_eval = evaluate(self.opponent.hand)

        outcome = compare(player_eval, opponent_eval)
        if outcome > 0:
            winner = Winner.PLAYER
            self.player.wins += 1
        elif outcome < 0:
            winner = Winner.OPPONENT
            self.opponent.wins += 1
        else:
            winner = Winner.DRAW
            self.draws += 1

        self.result = RoundResult(
            player_hand=list(self.player.hand),
            opponent_hand=list(self.opponent.hand),
            player_evaluation=player_eval,
            opponent_evaluation=opponent_eval,
            winner=winner,
            player_discards=self.player.discard_count,
            opponent_discards=self.opponent.discard_count,
        )
        self.rounds_played += 1
        self.phase = GamePhase.RESOLVED
        self._record(GameEvent(GamePhase.RESOLVED, None, "resolve", self.result))
        logger.info("结算: 玩家 %s vs 对手 %s -> %s",
                    player_eval.name, opponent_eval.name, winner.value)
        return self.result
