"""Game state and the core rules: setup, drawing, buying, turns and scoring."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable

from .cards import MAX_PLAYERS, NUM_K_CARDS, TREASURE_VALUES, Card, Phase, cost
from .rngs import RandomStreams

_STARTING_ESTATES = 3
_STARTING_COPPERS = 7
_HAND_SIZE = 5
_UNUSED_PILE = -1
_INVALID_SCORE = -9999
# Only the first 25 piles are looked at when counting empty piles.
_PILES_CHECKED_FOR_END = 25


class GameError(Exception):
    """Raised when a game action is not allowed in the current state."""


class Destination(IntEnum):
    """Where a gained card is put."""

    DISCARD = 0
    DECK = 1
    HAND = 2


def kingdom_cards(*args: int) -> list[Card]:
    """Return the ten given cards as a kingdom card list."""
    if len(args) != NUM_K_CARDS:
        raise GameError(f"exactly {NUM_K_CARDS} kingdom cards are required")
    return [Card(card) for card in args]


@dataclass
class GameState:
    """Everything that describes a game in progress.

    Decks are drawn from the end of their list; the last element is the
    top card.
    """

    num_players: int
    supply: list[int] = field(default_factory=lambda: [_UNUSED_PILE] * len(Card))
    embargo_tokens: list[int] = field(default_factory=lambda: [0] * len(Card))
    outpost_played: int = 0
    outpost_turn: int = 0
    whose_turn: int = 0
    phase: Phase = Phase.ACTION
    num_actions: int = 1
    coins: int = 0
    num_buys: int = 1
    hands: list[list[Card]] = field(default_factory=list)
    decks: list[list[Card]] = field(default_factory=list)
    discards: list[list[Card]] = field(default_factory=list)
    played_cards: list[Card] = field(default_factory=list)
    rng: RandomStreams = field(default_factory=RandomStreams, compare=False, repr=False)

    def __post_init__(self) -> None:
        for piles in (self.hands, self.decks, self.discards):
            while len(piles) < self.num_players:
                piles.append([])

    def _check_player(self, player: int) -> None:
        if not 0 <= player < self.num_players:
            raise GameError(f"no player {player}")

    def _check_card(self, card: int) -> None:
        if not 0 <= card < len(self.supply):
            raise GameError(f"unknown card {card!r}")

    def shuffle(self, player: int) -> None:
        """Shuffle the player's deck; raise GameError if it is empty."""
        self._check_player(player)
        deck = self.decks[player]
        if not deck:
            raise GameError(f"player {player} has no cards in the deck")
        # Sorting first makes the result depend only on the seed.
        deck.sort()
        shuffled = []
        while deck:
            pick = math.floor(self.rng.random() * len(deck))
            shuffled.append(deck.pop(pick))
        deck.extend(shuffled)

    def draw_card(self, player: int) -> Card | None:
        """Move the top card of the deck to the hand and return it.

        An empty deck is first refilled from the shuffled discard pile.
        Returns None when there is nothing left to draw.
        """
        self._check_player(player)
        deck = self.decks[player]
        if not deck:
            discard = self.discards[player]
            deck.extend(discard)
            discard.clear()
            if not deck:
                return None
            self.shuffle(player)
        card = deck.pop()
        self.hands[player].append(card)
        return card

    def gain_card(
        self, card: int, player: int, destination: Destination = Destination.DISCARD
    ) -> None:
        """Take one card from its supply pile and give it to the player."""
        self._check_player(player)
        if self.supply_count(card) < 1:
            raise GameError(f"no {Card(card).name} left in the supply")
        gained = Card(card)
        if destination == Destination.DECK:
            self.decks[player].append(gained)
        elif destination == Destination.HAND:
            self.hands[player].append(gained)
        else:
            self.discards[player].append(gained)
        self.supply[gained] -= 1

    def discard_card(self, hand_pos: int, player: int, trash: bool = False) -> Card:
        """Remove a card from the player's hand and return it.

        Unless trashed, the card goes to the played pile.  The last card
        of the hand fills the gap left behind.
        """
        self._check_player(player)
        hand = self.hands[player]
        if not 0 <= hand_pos < len(hand):
            raise GameError(f"no card at hand position {hand_pos}")
        card = hand[hand_pos]
        if not trash:
            self.played_cards.append(card)
        last = hand.pop()
        if hand_pos < len(hand):
            hand[hand_pos] = last
        return card

    def update_coins(self, player: int, bonus: int = 0) -> int:
        """Recount coins from the treasures in the player's hand plus a bonus."""
        self._check_player(player)
        self.coins = sum(TREASURE_VALUES.get(card, 0) for card in self.hands[player]) + bonus
        return self.coins

    def buy_card(self, card: int) -> None:
        """Buy a card for the current player into their discard pile."""
        if self.num_buys < 1:
            raise GameError("no buys left")
        if self.supply_count(card) < 1:
            raise GameError(f"no {Card(card).name} left in the supply")
        price = cost(card)
        if self.coins < price:
            raise GameError(f"not enough coins: have {self.coins}, need {price}")
        self.phase = Phase.BUY
        self.gain_card(card, self.whose_turn, Destination.DISCARD)
        self.coins -= price
        self.num_buys -= 1

    def num_hand_cards(self) -> int:
        """Number of cards in the current player's hand."""
        return len(self.hands[self.whose_turn])

    def hand_card(self, hand_pos: int) -> Card:
        """The card at a position in the current player's hand."""
        hand = self.hands[self.whose_turn]
        if not 0 <= hand_pos < len(hand):
            raise GameError(f"no card at hand position {hand_pos}")
        return hand[hand_pos]

    def supply_count(self, card: int) -> int:
        """Cards left in a supply pile; -1 if the card is not in the game."""
        self._check_card(card)
        return self.supply[card]

    def full_deck_count(self, player: int, card: int) -> int:
        """Copies of a card the player owns across deck, hand and discard."""
        self._check_player(player)
        return sum(
            pile.count(card)
            for pile in (self.decks[player], self.hands[player], self.discards[player])
        )

    def end_turn(self) -> None:
        """Discard the current hand and pass the turn to the next player."""
        current = self.whose_turn
        self.discards[current].extend(self.hands[current])
        self.hands[current].clear()

        self.whose_turn = current + 1 if current < self.num_players - 1 else 0
        self.outpost_played = 0
        self.phase = Phase.ACTION
        self.num_actions = 1
        self.coins = 0
        self.num_buys = 1
        self.played_cards.clear()
        self.hands[self.whose_turn].clear()

        for _ in range(_HAND_SIZE):
            self.draw_card(self.whose_turn)
        self.update_coins(self.whose_turn)

    def is_game_over(self) -> bool:
        """True when the Province pile or three supply piles are empty."""
        if self.supply[Card.PROVINCE] == 0:
            return True
        empty = sum(1 for count in self.supply[:_PILES_CHECKED_FOR_END] if count == 0)
        return empty >= 3

    def score_for(self, player: int) -> int:
        """Victory points of a player."""
        self._check_player(player)
        discard = self.discards[player]
        # The deck is scored only up to the size of the discard pile.
        deck_part = self.decks[player][: len(discard)]
        return sum(
            self._card_points(player, card)
            for card in (*self.hands[player], *discard, *deck_part)
        )

    def _card_points(self, player: int, card: int) -> int:
        if card == Card.CURSE:
            return -1
        if card in (Card.ESTATE, Card.GREAT_HALL):
            return 1
        if card == Card.DUCHY:
            return 3
        if card == Card.PROVINCE:
            return 6
        if card == Card.GARDENS:
            return self.full_deck_count(player, Card.CURSE) // 10
        return 0

    def get_winners(self) -> list[bool]:
        """Flag every winning seat, ties included, for all MAX_PLAYERS seats.

        Players tied for the lead who sit after the current player had one
        turn fewer and win the tie.
        """
        scores = [
            self.score_for(i) if i < self.num_players else _INVALID_SCORE
            for i in range(MAX_PLAYERS)
        ]
        high = max(scores)
        scores = [
            score + 1 if score == high and i > self.whose_turn else score
            for i, score in enumerate(scores)
        ]
        high = max(scores)
        return [score == high for score in scores]


def initialize_game(num_players: int, kingdom: Iterable[int], seed: int) -> GameState:
    """Set up a new game: supply, shuffled starting decks and the first hand."""
    rng = RandomStreams()
    rng.select_stream(1)
    rng.put_seed(seed)

    if num_players > MAX_PLAYERS or num_players < 2:
        raise GameError(f"number of players must be between 2 and {MAX_PLAYERS}")

    chosen = [Card(card) for card in kingdom]
    if len(chosen) != NUM_K_CARDS:
        raise GameError(f"exactly {NUM_K_CARDS} kingdom cards are required")
    if len(set(chosen)) != len(chosen):
        raise GameError("kingdom cards must all be different")

    state = GameState(num_players=num_players, rng=rng)
    supply = state.supply

    supply[Card.CURSE] = {2: 10, 3: 20}.get(num_players, 30)
    victory = 8 if num_players == 2 else 12
    for card in (Card.ESTATE, Card.DUCHY, Card.PROVINCE):
        supply[card] = victory
    supply[Card.COPPER] = 60 - _STARTING_COPPERS * num_players
    supply[Card.SILVER] = 40
    supply[Card.GOLD] = 30

    for card in Card:
        if card < Card.ADVENTURER:
            continue
        if card in chosen:
            supply[card] = victory if card in (Card.GREAT_HALL, Card.GARDENS) else 10
        else:
            supply[card] = _UNUSED_PILE

    for player in range(num_players):
        state.decks[player] = [Card.ESTATE] * _STARTING_ESTATES + [
            Card.COPPER
        ] * _STARTING_COPPERS
    for player in range(num_players):
        state.shuffle(player)

    for _ in range(_HAND_SIZE):
        state.draw_card(state.whose_turn)
    state.update_coins(state.whose_turn)
    return state