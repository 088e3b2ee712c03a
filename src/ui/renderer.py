"""终端可视化渲染器 - 在终端中进行五张抽牌对局"""

import re
from typing import List

from src.engine.card import Card, Suit
from src.engine.errors import InvalidSelection
from src.engine.hand_category import Evaluation
from src.game.player import Player, Seat
from src.game.game_state import GameEvent, RoundResult, Winner
from src.game.session import GameSession
from src.ai.rule_ai import DIFFICULTY_NAME


# 颜色常量 (ANSI)
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
CYAN = "\033[96m"
BOLD = "\033[1m"
DIM = "\033[2m"
RESET = "\033[0m"

# 座位颜色映射
SEAT_COLOR = {
    Seat.PLAYER: GREEN,
    Seat.OPPONENT: RED,
}

# 胜负文案
VERDICT_TEXT = {
    Winner.PLAYER: f"{GREEN}{BOLD}🎉 你赢了！{RESET}",
    Winner.OPPONENT: f"{RED}{BOLD}😢 你输了...{RESET}",
    Winner.DRAW: f"{YELLOW}{BOLD}🤝 平局！{RESET}",
}


def parse_selection(text: str) -> List[int]:
    """
    解析玩家输入的换牌位置（空格或逗号分隔，如 '0 2 4' / '1,3'）。
    空输入表示不换牌。
    """
    tokens = [t for t in re.split(r"[\s,，]+", text.strip()) if t]
    positions = []
    for t in tokens:
        if not t.isdigit():
            raise InvalidSelection(f"无法识别的位置: {t!r}")
        positions.append(int(t))
    return positions


class TerminalRenderer:
    """终端可视化渲染器"""

    # ============================================================
    #  牌面渲染
    # ============================================================

    @staticmethod
    def format_cards(cards: List[Card], with_index: bool = False) -> str:
        """将牌列表格式化为彩色字符串"""
        parts = []
        for i, c in enumerate(cards):
            display = c.display
            # 红色花色高亮
            if c.suit in (Suit.HEART, Suit.DIAMOND):
                display = f"{RED}{display}{RESET}"
            if with_index:
                display = f"{DIM}{i}:{RESET}{display}"
            parts.append(display)
        return " ".join(parts)

    @staticmethod
    def format_hidden(count: int) -> str:
        return " ".join(["🂠"] * count)

    @staticmethod
    def format_player_name(player: Player) -> str:
        """格式化座位名（带颜色）"""
        color = SEAT_COLOR.get(player.seat, DIM)
        return f"{color}{BOLD}{player.name}{RESET}"

    @staticmethod
    def format_evaluation(evaluation: Evaluation) -> str:
        return f"{CYAN}{evaluation.name}{RESET}"

    def print_header(self, title: str) -> None:
        """打印带框的标题"""
        print(f"\n{YELLOW}{BOLD}{'═' * 50}{RESET}")
        print(f"{YELLOW}{BOLD}  {title}{RESET}")
        print(f"{YELLOW}{BOLD}{'═' * 50}{RESET}\n")

    # ============================================================
    #  发牌阶段展示
    # ============================================================

    def show_deal(self, session: GameSession) -> None:
        """展示发牌结果（对手牌背朝上）"""
        self.print_header(f"🃏 发牌完成（难度: {DIFFICULTY_NAME[session.difficulty]}）")
        opp = session.opponent
        print(f"  {self.format_player_name(opp)}: {self.format_hidden(opp.hand_size)}")
        print(f"  {self.format_player_name(session.player)}: "
              f"{self.format_cards(session.player_hand, with_index=True)}")
        evaluation = session.player_evaluation()
        if evaluation is not None:
            print(f"\n  你的牌型: {self.format_evaluation(evaluation)}")
        print()

    def prompt_discard(self) -> List[int]:
        """读取玩家要换的牌，输入非法时重新询问"""
        while True:
            text = input("  输入要换的牌序号（如 0 2 4），直接回车不换: ")
            try:
                return parse_selection(text)
            except InvalidSelection as e:
                print(f"  {RED}{e}{RESET}")

    # ============================================================
    #  结算阶段展示
    # ============================================================

    def show_result(self, session: GameSession, result: RoundResult, comment: str = "") -> None:
        """亮牌并展示胜负"""
        self.print_header("🏆 亮牌")
        for player, hand, evaluation in (
            (session.player, result.player_hand, result.player_evaluation),
            (session.opponent, result.opponent_hand, result.opponent_evaluation),
        ):
            print(f"  {self.format_player_name(player)}: {self.format_cards(hand)}"
                  f"  [{self.format_evaluation(evaluation)}]  (换了{player.discard_count}张)")
        print(f"\n  {VERDICT_TEXT[result.winner]}")
        if comment:
            print(f"  {self.format_player_name(session.opponent)}: 「{comment}」")
        print()

    def show_scoreboard(self, session: GameSession) -> None:
        """展示累计战绩"""
        print(f"  {'─' * 30}")
        print(f"  共 {session.rounds_played} 局  "
              f"胜 {session.player.wins}  负 {session.opponent.wins}  平 {session.draws}")
        print()

    # ============================================================
    #  事件回调（注册到 GameSession）
    # ============================================================

    def make_event_callback(self, session: GameSession):
        """创建事件回调函数，供 GameSession.on_event() 使用"""

        def callback(event: GameEvent) -> None:
            if event.seat != Seat.OPPONENT:
                return
            name = self.format_player_name(session.opponent)
            if event.action == "discard":
                print(f"  {name} 换了 {len(event.data)} 张牌")
            elif event.action == "stand":
                print(f"  {name}: {DIM}不换牌{RESET}")

        return callback
