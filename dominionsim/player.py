"""Interactive console for playing a game from typed commands."""

from __future__ import annotations

import re
import sys
from typing import Iterable, Sequence, TextIO

from .cards import MAX_PLAYERS, Card, card_name
from .effects import play_card
from .game import GameError, GameState, initialize_game
from .interface import (
    add_card_to_hand,
    execute_bot_turn,
    format_deck,
    format_discard,
    format_hand,
    format_played,
    format_scores,
    format_state,
    format_supply,
    help_text,
)

DEFAULT_KINGDOM = [
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

_UNUSED = -1
_NUM_ARGS = 4
_USAGE = "Usage: player [integer random number seed]"
_INT_PREFIX = re.compile(r"[+-]?\d+")


def _parse(line: str) -> tuple[str, list[int]]:
    """Split a command line into the command word and up to four integers."""
    tokens = line.split()
    if not tokens:
        return "", [_UNUSED] * _NUM_ARGS
    args: list[int] = []
    for token in tokens[1 : 1 + _NUM_ARGS]:
        match = _INT_PREFIX.match(token)
        if match is None:
            break
        args.append(int(match.group()))
        if match.end() != len(token):
            break
    args.extend([_UNUSED] * (_NUM_ARGS - len(args)))
    return tokens[0], args


class Console:
    """A game driven by text commands, with optional computer players."""

    def __init__(
        self,
        seed: int,
        out: TextIO | None = None,
        kingdom: Iterable[int] | None = None,
    ) -> None:
        self.seed = seed
        self.out = sys.stdout if out is None else out
        self.kingdom = list(DEFAULT_KINGDOM if kingdom is None else kingdom)
        self.state: GameState = initialize_game(2, self.kingdom, seed)
        self.is_bot = [False] * MAX_PLAYERS
        self.game_started = False
        self.turn_num = 0
        self._commands = {
            "add": self._add,
            "buy": self._buy,
            "end": self._end,
            "exit": self._exit,
            "help": self._help,
            "init": self._init,
            "num": self._num,
            "play": self._play,
            "resi": self._resign,
            "show": self._show,
            "stat": self._stat,
            "supp": self._supply,
            "whos": self._whos,
        }

    def handle(self, line: str) -> bool:
        """Carry out one command line; return False when the session ends."""
        command, args = _parse(line)
        # Only the first four letters of a command are significant.
        action = self._commands.get(command[:4])
        if action is None:
            return True
        return action(*args)

    def run(self, lines: Iterable[str]) -> None:
        """Read commands until exit, resignation, game over or end of input."""
        source = iter(lines)
        while True:
            if self.game_started and self.state.is_game_over():
                self._report_end()
                return
            current = self.state.whose_turn
            if self.is_bot[current]:
                self.turn_num = execute_bot_turn(
                    self.state, current, self.turn_num, self.out
                )
                continue
            self.out.write("$ ")
            line = next(source, None)
            if line is None or not self.handle(line):
                return

    def _report_end(self) -> None:
        state = self.state
        self.out.write(format_scores(state))
        winners = state.get_winners()
        self.out.write(f"After {self.turn_num} turns, the winner(s) are:\n")
        for player in range(state.num_players):
            if winners[player]:
                self.out.write(f"Player {player}\n")
        for player in range(state.num_players):
            self.out.write(format_hand(state, player))
            self.out.write(format_played(state, player))
            self.out.write(format_discard(state, player))
            self.out.write(format_deck(state, player))

    def _add(self, card: int, *_: int) -> bool:
        current = self.state.whose_turn
        try:
            add_card_to_hand(self.state, current, card)
        except GameError:
            pass
        self.out.write(f"Player {current} adds {card_name(card)} to their hand\n\n")
        return True

    def _buy(self, card: int, *_: int) -> bool:
        current = self.state.whose_turn
        try:
            self.state.buy_card(card)
        except (GameError, ValueError):
            verdict = "cannot buy"
        else:
            verdict = "buys"
        self.out.write(f"Player {current} {verdict} card {card}, {card_name(card)}\n\n")
        return True

    def _end(self, *_: int) -> bool:
        if self.game_started:
            if self.state.whose_turn == self.state.num_players - 1:
                self.turn_num += 1
            self.state.end_turn()
            self.out.write(
                f"Player {self.state.whose_turn}'s turn number {self.turn_num}\n\n"
            )
        return True

    def _exit(self, *_: int) -> bool:
        return False

    def _help(self, *_: int) -> bool:
        self.out.write(help_text())
        return True

    def _init(self, num_players: int, num_bots: int, *_: int) -> bool:
        try:
            state = initialize_game(num_players, self.kingdom, self.seed)
        except (GameError, ValueError):
            state = None
        self.out.write("\n")
        if state is not None:
            for player in range(max(num_players - num_bots, 0), num_players):
                self.is_bot[player] = True
            self.state = state
            self.game_started = True
            self.out.write(
                f"Player {state.whose_turn}'s turn number {self.turn_num}\n\n"
            )
        return True

    def _num(self, *_: int) -> bool:
        self.out.write(f"There are {self.state.num_hand_cards()} cards in your hand.\n")
        return True

    def _play(self, hand_pos: int, choice1: int, choice2: int, choice3: int) -> bool:
        current = self.state.whose_turn
        try:
            card: int = self.state.hand_card(hand_pos)
        except GameError:
            card = _UNUSED
        try:
            play_card(self.state, hand_pos, choice1, choice2, choice3)
        except (GameError, ValueError):
            self.out.write(f"Player {current} cannot play card {hand_pos}\n\n")
        else:
            self.out.write(f"Player {current} plays {card_name(card)}\n\n")
        return True

    def _resign(self, *_: int) -> bool:
        self.state.end_turn()
        self.out.write(format_scores(self.state))
        return False

    def _show(self, *_: int) -> bool:
        if self.game_started:
            current = self.state.whose_turn
            self.out.write(format_hand(self.state, current))
            self.out.write(format_played(self.state, current))
        return True

    def _stat(self, *_: int) -> bool:
        if self.game_started:
            self.out.write(format_state(self.state))
        return True

    def _supply(self, *_: int) -> bool:
        self.out.write(format_supply(self.state))
        return True

    def _whos(self, *_: int) -> bool:
        self.out.write(f"Player {self.state.whose_turn}'s turn\n")
        return True


def main(argv: Sequence[str] | None = None) -> int:
    """Start an interactive session with the seed given on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print(_USAGE)
        return 0
    match = _INT_PREFIX.match(args[0].strip())
    seed = int(match.group()) if match else 0
    if seed <= 0:
        print(_USAGE)
        return 0
    console = Console(seed)
    print('Please enter a command or "help" for commands')
    console.run(sys.stdin)
    return 0


if __name__ == "__main__":
    sys.exit(main())