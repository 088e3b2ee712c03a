"""LLM 解说单元测试（不访问网络）"""

import asyncio
from types import SimpleNamespace

from src.engine.card import Card, Rank, Suit
from src.engine.hand_evaluator import evaluate
from src.game.game_state import RoundResult, Winner
from src.ai.rule_ai import Difficulty
from src.ai.llm_ai import (
    LlmCommentator, describe_discard, _extract_json, _build_comment_prompt,
)


# ============================================================
#  辅助工具
# ============================================================

_SUITS = [Suit.SPADE, Suit.HEART, Suit.DIAMOND, Suit.CLUB]


def _mixed(*ranks: Rank) -> list:
    return [Card(suit=_SUITS[i % 4], rank=r) for i, r in enumerate(ranks)]


def _result(winner: Winner = Winner.OPPONENT, opponent_discards: int = 1) -> RoundResult:
    player = _mixed(Rank.ACE, Rank.JACK, Rank.EIGHT, Rank.SIX, Rank.THREE)
    opponent = [Card(Suit.CLUB, r) for r in (Rank.KING, Rank.TEN, Rank.SEVEN, Rank.FOUR, Rank.TWO)]
    return RoundResult(
        player_hand=player,
        opponent_hand=opponent,
        player_evaluation=evaluate(player),
        opponent_evaluation=evaluate(opponent),
        winner=winner,
        player_discards=0,
        opponent_discards=opponent_discards,
    )


class _FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _commentator_with(completions: _FakeCompletions) -> LlmCommentator:
    commentator = LlmCommentator()
    commentator._enabled = True
    commentator._client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return commentator


# ============================================================
#  规则解说
# ============================================================

class TestDescribeDiscard:

    def test_opponent_wins(self):
        text = describe_discard(_result(Winner.OPPONENT, opponent_discards=1))
        assert "只换了一张" in text
        assert "同花" in text

    def test_player_wins(self):
        text = describe_discard(_result(Winner.PLAYER, opponent_discards=0))
        assert "一张没换" in text
        assert "高牌" in text

    def test_draw(self):
        text = describe_discard(_result(Winner.DRAW, opponent_discards=3))
        assert "换了3张" in text
        assert "平局" in text


# ============================================================
#  JSON 解析
# ============================================================

class TestExtractJson:

    def test_plain(self):
        assert _extract_json('{"comment": "好牌"}') == {"comment": "好牌"}

    def test_markdown_fence(self):
        assert _extract_json('```json\n{"comment": "好牌"}\n```') == {"comment": "好牌"}

    def test_surrounding_text(self):
        assert _extract_json('好的：{"comment": "好牌"} 就这样') == {"comment": "好牌"}

    def test_garbage(self):
        assert _extract_json("没有 JSON") is None
        assert _extract_json("[1, 2]") is None


# ============================================================
#  LlmCommentator
# ============================================================

class TestLlmCommentator:

    def test_disabled_without_api_key(self):
        commentator = LlmCommentator()
        assert commentator.enabled is False
        result = _result()
        assert asyncio.run(commentator.comment(result, Difficulty.HARD)) == describe_discard(result)

    def test_uses_llm_comment(self):
        completions = _FakeCompletions(content='{"comment": "同花，稳了"}')
        commentator = _commentator_with(completions)
        text = asyncio.run(commentator.comment(_result(), Difficulty.HARD))
        assert text == "同花，稳了"
        assert len(completions.calls) == 1

    def test_falls_back_on_bad_response(self):
        commentator = _commentator_with(_FakeCompletions(content='{"other": 1}'))
        result = _result()
        assert asyncio.run(commentator.comment(result, Difficulty.EASY)) == describe_discard(result)

    def test_falls_back_on_error(self):
        commentator = _commentator_with(_FakeCompletions(error=RuntimeError("boom")))
        result = _result(Winner.PLAYER)
        assert asyncio.run(commentator.comment(result, Difficulty.NORMAL)) == describe_discard(result)

    def test_prompt_mentions_both_hands(self):
        prompt = _build_comment_prompt(_result(), Difficulty.HARD)
        assert "♣K" in prompt
        assert "♠A" in prompt
        assert "困难" in prompt
