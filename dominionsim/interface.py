"""Text views of a game and the helpers used by the interactive console."""

from __future__ import annotations

import math
import sys
from typing import Iterable, TextIO

from .cards import NUM_K_CARDS, NUM_TOTAL_K_CARDS, TREASURE_VALUES, Card, card_name, cost, phase_name
from .game import GameError, GameState
from .rngs import RandomStreams

_UNUSED_PILE = -1

_HELP = (
    "Commands are: \n"
    "  add [Supply Card Number] \t\t\t- add any card to your hand (teh hacks)\n"
    "  buy [Supply Card Number] \t\t\t- buy a card at supply position\n"
    "  end \t\t\t      \t\t\t- end your turn\n"
    "  init [Number of Players] [Number of Bots] \t- initialize the game\n"
    "  num \t\t\t      \t\t\t- print number of cards in your hand\n"
    "  play [Hand Index] [Choice] [Choice] [Choice]\t- play a card from your hand\n"
    "  resign\t\t\t\t\t- end the game showing the current scores\n"
    "  show \t\t\t\t\t\t- show your current hand\n"
    "  stat \t\t\t\t\t\t- show your turn's status\n"
    "  supp \t\t\t\t\t\t- show the supply\n"
    "  whos \t\t\t      \t\t\t- whos turn\n"
    "  exit \t\t\t      \t\t\t- exit the interface"
    "\n\n"
)


def _format_pile(title: str, cards: Iterable[int], line_end: str) -> str:
    cards = list(cards)
    lines = [title]
    if cards:
        lines.append("#  Card\n")
    lines.extend(
        f"{index:<2} {card_name(card):<13}{line_end}" for index, card in enumerate(cards)
    )
    lines.append("\n")
    return "".join(lines)


def format_hand(state: GameState, player: int) -> str:
    """Numbered listing of a player's hand."""
    return _format_pile(f"Player {player}'s hand:\n", state.hands[player], "\n")


def format_deck(state: GameState, player: int) -> str:
    """Numbered listing of a player's deck, bottom card first."""
    return _format_pile(f"Player {player}'s deck: \n", state.decks[player], "\n")


def format_discard(state: GameState, player: int) -> str:
    """Numbered listing of a player's discard pile."""
    return _format_pile(f"Player {player}'s discard: \n", state.discards[player], " \n")


def format_played(state: GameState, player: int) -> str:
    """Numbered listing of the cards played this turn."""
    return _format_pile(f"Player {player}'s played cards: \n", state.played_cards, " \n")


def format_supply(state: GameState) -> str:
    """Table of the supply piles that are in the game."""
    lines = ["#   Card          Cost   Copies\n"]
    for card in Card:
        count = state.supply[card]
        if count == _UNUSED_PILE:
            continue
        lines.append(f"{int(card):<2}  {card_name(card):<13} {cost(card):<5}  {count:<5}\n")
    lines.append("\n")
    return "".join(lines)


def format_state(state: GameState) -> str:
    """Summary of the current turn: player, phase, actions, coins and buys."""
    return (
        f"Player {state.whose_turn}:\n{phase_name(state.phase)} phase\n"
        f"{state.num_actions} actions\n{state.coins} coins\n{state.num_buys} buys\n\n"
    )


def format_scores(state: GameState) -> str:
    """One line with the score of each player."""
    return "".join(
        f"Player {player} has a score of {state.score_for(player)}\n"
        for player in range(state.num_players)
    )


def help_text() -> str:
    """The list of console commands."""
    return _HELP


def add_card_to_hand(state: GameState, player: int, card: int) -> None:
    """Put a kingdom card straight into a player's hand."""
    if not Card.ADVENTURER <= card < NUM_TOTAL_K_CARDS:
        raise GameError(f"card {card!r} is not a kingdom card")
    state.hands[player].append(Card(card))


def select_kingdom_cards(seed: int) -> list[Card]:
    """Pick ten different kingdom cards at random from a seeded stream."""
    rng = RandomStreams()
    rng.select_stream(1)
    rng.put_seed(seed)
    chosen: list[Card] = []
    while len(chosen) < NUM_K_CARDS:
        card = math.floor(rng.random() * NUM_TOTAL_K_CARDS)
        if card < Card.ADVENTURER or card in chosen:
            continue
        chosen.append(Card(card))
    return chosen


def count_hand_coins(state: GameState, player: int) -> int:
    """Coins the treasures in a player's hand are worth."""
    return sum(TREASURE_VALUES.get(card, 0) for card in state.hands[player])


def execute_bot_turn(
    state: GameState, player: int, turn_num: int, out: TextIO | None = None
) -> int:
    """Play one turn for a computer player and return the updated turn number."""
    out = sys.stdout if out is None else out
    coins = count_hand_coins(state, player)
    out.write(
        f"*****************Executing Bot Player {player} Turn Number {turn_num}"
        "*****************\n"
    )
    out.write(format_supply(state))

    purchase = None
    if coins >= cost(Card.PROVINCE) and state.supply_count(Card.PROVINCE) > 0:
        purchase = Card.PROVINCE
    elif state.supply_count(Card.PROVINCE) == 0 and coins >= cost(Card.DUCHY):
        purchase = Card.DUCHY
    elif coins >= cost(Card.GOLD) and state.supply_count(Card.GOLD) > 0:
        purchase = Card.GOLD
    elif coins >= cost(Card.SILVER) and state.supply_count(Card.SILVER) > 0:
        purchase = Card.SILVER
    if purchase is not None:
        try:
            state.buy_card(purchase)
        except GameError:
            pass
        out.write(f"Player {player} buys card {card_name(purchase)}\n\n")

    if player == state.num_players - 1:
        turn_num += 1
    state.end_turn()
    if not state.is_game_over():
        out.write(f"Player {state.whose_turn}'s turn number {turn_num}\n\n")
    return turn_num