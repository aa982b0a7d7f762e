"""A two-player game between a Smithy bot and an Adventurer bot."""

from __future__ import annotations

import sys
from typing import Sequence, TextIO

from .cards import TREASURE_VALUES, Card
from .effects import play_card
from .game import GameError, GameState, initialize_game

KINGDOM = [
    Card.ADVENTURER,
    Card.GARDENS,
    Card.EMBARGO,
    Card.VILLAGE,
    Card.MINION,
    Card.MINE,
    Card.CUTPURSE,
    Card.SEA_HAG,
    Card.TRIBUTE,
    Card.SMITHY,
]


def _hand_money(state: GameState) -> int:
    return sum(TREASURE_VALUES.get(card, 0) for card in state.hands[state.whose_turn])


def _last_position(state: GameState, wanted: Card) -> int | None:
    positions = [i for i, card in enumerate(state.hands[state.whose_turn]) if card == wanted]
    return positions[-1] if positions else None


def _try_play(state: GameState, hand_pos: int) -> None:
    try:
        play_card(state, hand_pos)
    except GameError:
        pass


def _try_buy(state: GameState, card: Card) -> None:
    try:
        state.buy_card(card)
    except GameError:
        pass


def play_game(seed: int, out: TextIO | None = None) -> tuple[int, int]:
    """Play a whole game from ``seed`` and return the two players' scores."""
    out = sys.stdout if out is None else out
    out.write("Starting game.\n")
    state = initialize_game(2, KINGDOM, seed)

    num_smithies = 0
    num_adventurers = 0

    while not state.is_game_over():
        money = _hand_money(state)
        if state.whose_turn == 0:
            smithy_pos = _last_position(state, Card.SMITHY)
            if smithy_pos is not None:
                out.write(f"0: smithy played from position {smithy_pos}\n")
                _try_play(state, smithy_pos)
                out.write("smithy played.\n")
                money = _hand_money(state)

            if money >= 8:
                out.write("0: bought province\n")
                _try_buy(state, Card.PROVINCE)
            elif money >= 6:
                out.write("0: bought gold\n")
                _try_buy(state, Card.GOLD)
            elif money >= 4 and num_smithies < 2:
                out.write("0: bought smithy\n")
                _try_buy(state, Card.SMITHY)
                num_smithies += 1
            elif money >= 3:
                out.write("0: bought silver\n")
                _try_buy(state, Card.SILVER)

            out.write("0: end turn\n")
            state.end_turn()
        else:
            adventurer_pos = _last_position(state, Card.ADVENTURER)
            if adventurer_pos is not None:
                out.write(f"1: adventurer played from position {adventurer_pos}\n")
                _try_play(state, adventurer_pos)
                money = _hand_money(state)

            if money >= 8:
                out.write("1: bought province\n")
                _try_buy(state, Card.PROVINCE)
            elif money >= 6 and num_adventurers < 2:
                out.write("1: bought adventurer\n")
                _try_buy(state, Card.ADVENTURER)
                num_adventurers += 1
            elif money >= 6:
                out.write("1: bought gold\n")
                _try_buy(state, Card.GOLD)
            elif money >= 3:
                out.write("1: bought silver\n")
                _try_buy(state, Card.SILVER)

            out.write("1: endTurn\n")
            state.end_turn()

    scores = (state.score_for(0), state.score_for(1))
    out.write("Finished game.\n")
    out.write(f"Player 0: {scores[0]}\nPlayer 1: {scores[1]}\n")
    return scores


def main(argv: Sequence[str] | None = None) -> int:
    """Run a game with the seed given as the first argument."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("Usage: playdom [integer random number seed]")
        return 1
    try:
        play_game(int(args[0]))
    except (ValueError, GameError) as exc:
        print(exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())