"""WebSocket 后端服务 - 每个连接持有一个 GameSession，把对局状态推送到前端"""

import json
import logging
from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.staticfiles import StaticFiles
from fastapi.responses import FileResponse

from src.engine.card import Card
from src.engine.errors import PokerError
from src.engine.hand_category import HandCategory, Evaluation, CATEGORY_NAME
from src.game.game_state import RoundResult
from src.game.session import GameSession
from src.ai.rule_ai import Difficulty
from src.ai.llm_ai import create_commentator

logger = logging.getLogger(__name__)


# ============================================================
#  序列化工具
# ============================================================

def card_to_dict(c: Card) -> dict:
    """将 Card 序列化为前端可用的 dict"""
    return {
        "rank": c.label,
        "suit": c.suit.value,
        "symbol": c.symbol,
        "strength": c.strength,
        "display": c.display,
    }


def cards_to_list(cards: List[Card]) -> List[dict]:
    return [card_to_dict(c) for c in cards]


def evaluation_to_dict(e: Optional[Evaluation]) -> Optional[dict]:
    if e is None:
        return None
    return {"rank": e.rank, "name": e.name}


def session_to_dict(session: GameSession) -> dict:
    """当前局面（对手手牌在结算前只给张数）"""
    opponent_hand = session.opponent_hand
    return {
        "phase": session.phase.value,
        "difficulty": session.difficulty.value,
        "player_hand": cards_to_list(session.player_hand),
        "player_evaluation": evaluation_to_dict(session.player_evaluation()),
        "opponent_hand": cards_to_list(opponent_hand) if opponent_hand is not None else None,
        "opponent_hand_size": session.opponent.hand_size,
    }


def result_to_dict(session: GameSession, result: RoundResult) -> dict:
    """结算信息"""
    return {
        "player_hand": cards_to_list(result.player_hand),
        "opponent_hand": cards_to_list(result.opponent_hand),
        "player_evaluation": evaluation_to_dict(result.player_evaluation),
        "opponent_evaluation": evaluation_to_dict(result.opponent_evaluation),
        "winner": result.winner.value,
        "player_discards": result.player_discards,
        "opponent_discards": result.opponent_discards,
        "scoreboard": {
            "rounds": session.rounds_played,
            "wins": session.player.wins,
            "losses": session.opponent.wins,
            "draws": session.draws,
        },
    }


def error_to_dict(e: Exception) -> dict:
    return {"type": "error", "error": type(e).__name__, "message": str(e)}


# ============================================================
#  FastAPI 应用
# ============================================================

STATIC_DIR = Path(__file__).parent / "static"

app = FastAPI(title="五张抽牌扑克")
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

commentator = create_commentator()


@app.get("/")
async def index():
    """返回前端页面"""
    return FileResponse(str(STATIC_DIR / "index.html"))


@app.get("/api/rules")
async def rules():
    """牌型表（从强到弱），供规则弹窗展示"""
    return {
        "categories": [
            {"rank": int(cat), "name": CATEGORY_NAME[cat]}
            for cat in sorted(HandCategory, reverse=True)
        ],
        "tie_rule": "同牌型判平局，不比较踢脚牌",
    }


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    """WebSocket 端点：每个连接一局独立的会话"""
    await ws.accept()
    session = GameSession(difficulty=Difficulty.EASY)
    try:
        while True:
            data = await ws.receive_text()
            reply = await handle_message(session, data)
            await ws.send_text(json.dumps(reply, ensure_ascii=False))
    except WebSocketDisconnect:
        pass


# ============================================================
#  消息分派
# ============================================================

async def handle_message(session: GameSession, data: str) -> dict:
    """处理一条客户端消息，返回要回复的消息"""
    try:
        msg = json.loads(data)
    except json.JSONDecodeError as e:
        return error_to_dict(e)
    if not isinstance(msg, dict):
        return {"type": "error", "error": "BadMessage", "message": "消息必须是 JSON 对象"}

    action = msg.get("action")
    try:
        if action == "start":
            seed = msg.get("seed")
            if isinstance(seed, int):
                session.rng.seed(seed)
            session.start(msg.get("difficulty"))
            return {"type": "deal", **session_to_dict(session)}

        if action == "discard":
            result = session.player_discard(msg.get("indices", []))
        elif action == "stand":
            result = session.stand()
        else:
            return {"type": "error", "error": "BadMessage", "message": f"未知 action: {action!r}"}
    except PokerError as e:
        logger.info("动作 %s 被拒绝: %s", action, e)
        return error_to_dict(e)

    comment = await commentator.comment(result, session.difficulty)
    return {"type": "result", **session_to_dict(session), **result_to_dict(session, result),
            "comment": comment}
