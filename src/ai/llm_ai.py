"""LLM 解说 - 对手在每局结束后的一句话点评（只说话，不参与换牌决策）"""

import asyncio
import json
import logging
import os
from typing import List, Optional

from openai import AsyncOpenAI

from src.engine.card import Card
from src.game.game_state import RoundResult, Winner
from src.ai.rule_ai import Difficulty, DIFFICULTY_NAME

logger = logging.getLogger(__name__)

# 超时上限（秒）
LLM_TIMEOUT = 10

DEFAULT_BASE_URL = "https://api.deepseek.com/v1"
DEFAULT_MODEL = "deepseek-chat"

# 各难度对手的性格 prompt 片段
CHARACTER_PROMPTS = {
    Difficulty.EASY: (
        "你是一个刚学会扑克的新手荷官，说话天真、容易激动，经常不知道自己为什么赢或输。"
    ),
    Difficulty.NORMAL: (
        "你是一个普通的扑克爱好者，说话友好、实在，偶尔开点小玩笑。"
    ),
    Difficulty.HARD: (
        "你是一个老练的职业牌手，说话冷静、自信，点评一针见血。"
    ),
}


# ============================================================
#  序列化辅助
# ============================================================

def _hand_str(cards: List[Card]) -> str:
    """手牌列表 → 空格分隔文本"""
    return " ".join(c.display for c in cards)


# ============================================================
#  规则解说（兜底）
# ============================================================

def describe_discard(result: RoundResult) -> str:
    """根据对手换牌张数和胜负生成一句固定解说"""
    n = result.opponent_discards
    if n == 0:
        move = "一张没换"
    elif n == 1:
        move = "只换了一张"
    else:
        move = f"换了{n}张"

    if result.winner == Winner.OPPONENT:
        verdict = f"{result.opponent_evaluation.name}拿下这局！"
    elif result.winner == Winner.PLAYER:
        verdict = f"还是输给了你的{result.player_evaluation.name}"
    else:
        verdict = f"都是{result.player_evaluation.name}，平局"
    return f"我{move}，{verdict}"


# ============================================================
#  Prompt 构建
# ============================================================

def _build_comment_prompt(result: RoundResult, difficulty: Difficulty) -> str:
    """构建赛后点评 prompt"""
    char_prompt = CHARACTER_PROMPTS[difficulty]
    verdict = {
        Winner.PLAYER: "你输了",
        Winner.OPPONENT: "你赢了",
        Winner.DRAW: "平局（同牌型不比踢脚牌）",
    }[result.winner]

    return f"""{char_prompt}

你刚和玩家打完一局五张抽牌扑克，你是对手（难度: {DIFFICULTY_NAME[difficulty]}）。

【本局结果】
你的手牌: {_hand_str(result.opponent_hand)}（{result.opponent_evaluation.name}，换了{result.opponent_discards}张）
玩家手牌: {_hand_str(result.player_hand)}（{result.player_evaluation.name}，换了{result.player_discards}张）
结果: {verdict}

【输出格式】严格返回 JSON，不要输出其他内容：
{{
  "comment": "一句话点评本局（20字以内，符合你的性格）"
}}"""


# ============================================================
#  JSON 响应解析
# ============================================================

def _extract_json(text: str) -> Optional[dict]:
    """从 LLM 返回文本中提取 JSON 对象（兼容 markdown 代码块包裹）"""
    text = text.strip()
    # 去除 markdown 代码块
    if text.startswith("```"):
        lines = text.split("\n")
        lines = [l for l in lines if not l.strip().startswith("```")]
        text = "\n".join(lines).strip()
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        # 尝试找到第一个 { 和最后一个 }
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end == -1 or end <= start:
            return None
        try:
            data = json.loads(text[start:end + 1])
        except json.JSONDecodeError:
            return None
    return data if isinstance(data, dict) else None


# ============================================================
#  LlmCommentator 类
# ============================================================

class LlmCommentator:
    """基于 LLM 的对手赛后点评，失败时回退到 describe_discard"""

    def __init__(
        self,
        api_key: str = "",
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
    ):
        self.model = model

        # 若未配置 API key，仅使用规则解说
        self._enabled = bool(api_key)
        if self._enabled:
            self._client = AsyncOpenAI(
                api_key=api_key,
                base_url=base_url,
            )
        else:
            self._client = None
            logger.info("LlmCommentator: 未配置 API key，将使用规则解说")

    @property
    def enabled(self) -> bool:
        return self._enabled

    async def _call_llm(self, prompt: str) -> Optional[str]:
        """调用 LLM API，返回文本响应。超时或异常返回 None。"""
        if not self._enabled or self._client is None:
            return None
        try:
            resp = await asyncio.wait_for(
                self._client.chat.completions.create(
                    model=self.model,
                    messages=[{"role": "user", "content": prompt}],
                    temperature=0.9,
                    max_tokens=128,
                ),
                timeout=LLM_TIMEOUT,
            )
            content = resp.choices[0].message.content
            logger.info("LlmCommentator 响应: %s", (content or "")[:200])
            return content
        except asyncio.TimeoutError:
            logger.warning("LlmCommentator: LLM 调用超时(%ds)", LLM_TIMEOUT)
            return None
        except Exception as e:
            logger.warning("LlmCommentator: LLM 调用异常: %s", e)
            return None

    async def comment(self, result: RoundResult, difficulty: Difficulty) -> str:
        """生成赛后点评。失败时回退到规则解说。"""
        raw = await self._call_llm(_build_comment_prompt(result, difficulty))

        if raw is not None:
            data = _extract_json(raw)
            comment = data.get("comment") if data else None
            if isinstance(comment, str) and comment.strip():
                return comment.strip()
            logger.warning("LlmCommentator: 响应缺少 comment 字段")

        return describe_discard(result)


# ============================================================
#  工厂函数：从环境变量创建解说实例
# ============================================================

def create_commentator() -> LlmCommentator:
    """根据环境变量创建 LlmCommentator。

    环境变量：
      POKER_LLM_API_KEY / POKER_LLM_BASE_URL / POKER_LLM_MODEL
    未配置 API key 时自动回退到规则解说。
    """
    return LlmCommentator(
        api_key=os.getenv("POKER_LLM_API_KEY", ""),
        base_url=os.getenv("POKER_LLM_BASE_URL", DEFAULT_BASE_URL),
        model=os.getenv("POKER_LLM_MODEL", DEFAULT_MODEL),
    )
