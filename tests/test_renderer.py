"""终端渲染器测试"""

import random

import pytest
from src.engine.card import Card, Rank, Suit
from src.engine.errors import InvalidSelection
from src.game.session import GameSession
from src.ui.renderer import TerminalRenderer, parse_selection


class TestParseSelection:

    @pytest.mark.parametrize("text, expected", [
        ("", []),
        ("   ", []),
        ("0 2 4", [0, 2, 4]),
        ("1,3", [1, 3]),
        ("1， 3", [1, 3]),
    ])
    def test_valid(self, text, expected):
        assert parse_selection(text) == expected

    @pytest.mark.parametrize("text", ["a", "1 x", "-1"])
    def test_invalid(self, text):
        with pytest.raises(InvalidSelection):
            parse_selection(text)


class TestTerminalRenderer:

    def test_format_cards_with_index(self):
        cards = [Card(Suit.SPADE, Rank.ACE), Card(Suit.HEART, Rank.TEN)]
        text = TerminalRenderer.format_cards(cards, with_index=True)
        assert "♠A" in text and "♥10" in text
        assert "0:" in text and "1:" in text

    def test_round_output(self, capsys):
        renderer = TerminalRenderer()
        session = GameSession(rng=random.Random(4))
        session.on_event(renderer.make_event_callback(session))
        session.start()
        renderer.show_deal(session)
        result = session.stand()
        renderer.show_result(session, result, "下次再来")
        renderer.show_scoreboard(session)
        out = capsys.readouterr().out
        assert "发牌完成" in out
        assert "亮牌" in out
        assert "下次再来" in out
        assert "共 1 局" in out
