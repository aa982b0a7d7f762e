import io

import pytest

from dominionsim.cards import Card
from dominionsim.interface import help_text
from dominionsim.player import Console, main


@pytest.fixture
def console():
    return Console(1, out=io.StringIO())


def output(console):
    return console.out.getvalue()


def test_whos_reports_current_player(console):
    assert console.handle("whos") is True
    assert output(console) == "Player 0's turn\n"


def test_exit_ends_session(console):
    assert console.handle("exit") is False


def test_resign_prints_scores_and_ends(console):
    assert console.handle("resign") is False
    assert "Player 0 has a score of" in output(console)
    assert "Player 1 has a score of" in output(console)


def test_num_counts_hand(console):
    console.handle("num")
    assert output(console) == "There are 5 cards in your hand.\n"


def test_add_kingdom_card(console):
    console.handle(f"add {int(Card.SMITHY)}")
    assert console.state.num_hand_cards() == 6
    assert console.state.hand_card(5) == Card.SMITHY
    assert "Player 0 adds Smithy to their hand" in output(console)


def test_add_non_kingdom_card_leaves_hand(console):
    console.handle(f"add {int(Card.DUCHY)}")
    assert console.state.num_hand_cards() == 5
    assert "adds Duchy" in output(console)


def test_buy_copper(console):
    console.handle(f"buy {int(Card.COPPER)}")
    assert Card.COPPER in console.state.discards[0]
    assert "Player 0 buys card 4, Copper" in output(console)


def test_buy_card_not_in_game(console):
    console.handle(f"buy {int(Card.TREASURE_MAP)}")
    assert console.state.discards[0] == []
    assert "cannot buy card 26, Treasure Map" in output(console)


def test_end_before_init_does_nothing(console):
    console.handle("end")
    assert console.state.whose_turn == 0
    assert output(console) == ""


def test_init_then_end_passes_turn(console):
    console.handle("init 2 0")
    assert console.game_started is True
    console.handle("end")
    assert console.state.whose_turn == 1
    assert "Player 1's turn number 0" in output(console)


def test_full_round_increments_turn_number(console):
    console.handle("init 2 0")
    console.handle("end")
    console.handle("end")
    assert console.turn_num == 1
    assert console.state.whose_turn == 0


def test_init_with_too_many_players_fails(console):
    console.handle("init 5 0")
    assert console.game_started is False
    assert console.is_bot == [False] * 4


def test_show_and_stat_need_started_game(console):
    console.handle("show")
    console.handle("stat")
    assert output(console) == ""


def test_stat_after_init(console):
    console.handle("init 2 0")
    console.handle("stat")
    assert "Action phase" in output(console)


def test_help(console):
    console.handle("help")
    assert output(console) == help_text()


def test_unknown_and_short_commands_ignored(console):
    assert console.handle("addx 13") is True
    assert console.handle("") is True
    assert console.state.num_hand_cards() == 5
    assert output(console) == ""


def test_play_smithy(console):
    console.handle(f"add {int(Card.SMITHY)}")
    console.handle("play 5")
    assert "Player 0 plays Smithy" in output(console)
    assert console.state.num_hand_cards() == 8


def test_play_treasure_fails(console):
    first = console.state.hand_card(0)
    console.handle("play 0")
    assert "Player 0 cannot play card 0" in output(console)
    assert console.state.hand_card(0) == first


def test_run_stops_on_exit(console):
    console.run(["whos", "exit", "whos"])
    assert output(console).count("Player 0's turn\n") == 1
    assert output(console).startswith("$ ")


def test_run_stops_at_end_of_input(console):
    console.run(["num"])
    assert output(console).count("$ ") == 2


def test_bots_play_to_the_end(console):
    console.run(["init 2 2"])
    assert console.state.is_game_over()
    assert "the winner(s) are:" in output(console)
    assert console.is_bot[:2] == [True, True]


@pytest.mark.parametrize("argv", [[], ["0"], ["abc"], ["1", "2"]])
def test_main_usage(argv, capsys):
    assert main(argv) == 0
    assert "Usage: player" in capsys.readouterr().out


def test_main_runs_session(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("whos\nexit\n"))
    assert main(["3"]) == 0
    text = capsys.readouterr().out
    assert "Please enter a command" in text
    assert "Player 0's turn" in text