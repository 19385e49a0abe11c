import pytest
from PySide6.QtTest import QTest

from xogame.config import COMPUTER_DELAY_MS, GameSettings
from xogame.game_logic import GameMode, InvalidSettingError, Mark, OutcomeKind
from xogame.session import GameSession


def marks_of(engine, mark):
    return [cell.coord for row in engine.board for cell in row if cell.mark is mark]


@pytest.fixture
def single(qapp, rng):
    return GameSession(GameSettings(GameMode.SINGLE, Mark.O, computer_delay_ms=50), rng=rng)


@pytest.fixture
def multiple(qapp, rng):
    return GameSession(GameSettings(GameMode.MULTIPLE, Mark.X), rng=rng)


def test_settings_defaults():
    settings = GameSettings()
    assert settings.mode is GameMode.SINGLE
    assert settings.human_mark is Mark.X
    assert settings.computer_delay_ms == COMPUTER_DELAY_MS == 300


def test_settings_reject_negative_delay():
    with pytest.raises(ValueError):
        GameSettings(computer_delay_ms=-1)


def test_computer_replies_after_default_delay(qapp, rng):
    session = GameSession(GameSettings(GameMode.SINGLE, Mark.O), rng=rng)
    assert session.play(1, 1)
    assert session.engine.awaiting_computer_reply
    assert session.is_reply_pending()
    available = set(session.engine.available)

    # nothing before the delay elapses
    QTest.qWait(100)
    assert marks_of(session.engine, Mark.X) == []

    QTest.qWait(COMPUTER_DELAY_MS + 200)
    placed = marks_of(session.engine, Mark.X)
    assert len(placed) == 1
    assert placed[0] in available
    assert not session.engine.awaiting_computer_reply
    assert not session.is_reply_pending()


def test_clicks_ignored_while_computer_thinks(single):
    assert single.play(0, 0)
    assert not single.play(2, 2)
    assert single.engine.mark_at((2, 2)) is None
    QTest.qWait(200)
    assert len(single.engine.available) == 7
    assert single.play(*single.engine.available[0])


def test_reset_cancels_pending_reply(single):
    thinking = []
    single.computer_thinking.connect(thinking.append)
    single.play(0, 0)
    single.reset()
    assert not single.is_reply_pending()
    QTest.qWait(200)
    assert len(single.engine.available) == 9
    assert thinking == [True, False]


def test_mode_change_cancels_pending_reply(single):
    single.play(0, 0)
    single.set_mode("Multiple")
    QTest.qWait(200)
    assert single.engine.mode is GameMode.MULTIPLE
    assert len(single.engine.available) == 9


def test_mode_reselect_still_resets(multiple):
    multiple.play(0, 0)
    multiple.set_mode("Multiple")
    assert len(multiple.engine.available) == 9


def test_signals_follow_moves(single):
    boards, outcomes = [], []
    single.board_changed.connect(lambda: boards.append(len(single.engine.available)))
    single.outcome_changed.connect(outcomes.append)
    single.play(0, 0)
    QTest.qWait(200)
    assert boards == [8, 7]
    assert [o.kind for o in outcomes] == [OutcomeKind.NONE]


def test_multiple_mode_never_schedules(multiple):
    multiple.play(0, 0)
    assert not multiple.is_reply_pending()
    QTest.qWait(50)
    assert len(multiple.engine.available) == 8


def test_player_switch_clears_advisory(multiple):
    outcomes = []
    multiple.outcome_changed.connect(outcomes.append)
    multiple.play(0, 0)
    multiple.play(1, 1)
    assert multiple.engine.outcome.kind is OutcomeKind.NEEDS_PLAYER_CHANGE
    multiple.set_player("O")
    assert multiple.engine.outcome.kind is OutcomeKind.NONE
    assert [o.kind for o in outcomes] == [OutcomeKind.NEEDS_PLAYER_CHANGE, OutcomeKind.NONE]
    multiple.play(2, 2)
    assert multiple.engine.mark_at((2, 2)) is Mark.O


def test_win_in_multiple_mode(multiple):
    for col in range(3):
        multiple.play(0, col)
    assert multiple.engine.outcome.kind is OutcomeKind.WIN
    assert not multiple.play(2, 2)


def test_bad_mode_keeps_pending_reply(single):
    single.play(0, 0)
    with pytest.raises(InvalidSettingError):
        single.set_mode("Solo")
    assert single.is_reply_pending()
    QTest.qWait(200)
    assert not single.engine.awaiting_computer_reply
    assert len(single.engine.available) == 7
    assert single.play(*single.engine.available[0])
