"""五张抽牌扑克 - 终端对局入口"""

import argparse
import asyncio
import logging
import random

from src.engine.errors import PokerError
from src.game.session import GameSession
from src.ai.rule_ai import Difficulty
from src.ai.llm_ai import create_commentator
from src.ui.renderer import TerminalRenderer


def run_one_round(session: GameSession, renderer: TerminalRenderer, commentator, auto: bool) -> None:
    """运行一局完整对局"""
    session.start()
    renderer.show_deal(session)

    # 换牌：输入非法（越界/重复）时重新询问
    while True:
        indices = [] if auto else renderer.prompt_discard()
        try:
            result = session.player_discard(indices) if indices else session.stand()
            break
        except PokerError as e:
            print(f"  {e}")

    comment = asyncio.run(commentator.comment(result, session.difficulty))
    renderer.show_result(session, result, comment)
    renderer.show_scoreboard(session)


def main():
    """命令行入口"""
    parser = argparse.ArgumentParser(description="五张抽牌扑克 vs AI")
    parser.add_argument("--rounds", type=int, default=1, help="对局数 (默认1)")
    parser.add_argument(
        "--difficulty", choices=[d.value for d in Difficulty],
        default=Difficulty.NORMAL.value, help="对手难度 (默认normal)",
    )
    parser.add_argument("--seed", type=int, default=None, help="随机种子（用于复现）")
    parser.add_argument("--auto", action="store_true", help="自动模式（玩家始终不换牌）")
    parser.add_argument("--log-level", default="WARNING", help="日志级别 (默认WARNING)")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    session = GameSession(difficulty=args.difficulty, rng=random.Random(args.seed))
    renderer = TerminalRenderer()
    session.on_event(renderer.make_event_callback(session))
    commentator = create_commentator()

    for i in range(args.rounds):
        if args.rounds > 1:
            print(f"\n{'=' * 50}")
            print(f"  第 {i + 1}/{args.rounds} 局")
            print(f"{'=' * 50}")
        run_one_round(session, renderer, commentator, args.auto)


if __name__ == "__main__":
    main()
