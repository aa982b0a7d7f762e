"""Action card effects and playing a card from the hand."""

from __future__ import annotations

from typing import Callable

from .cards import TREASURE_VALUES, Card, Phase, cost
from .game import Destination, GameError, GameState

_VICTORY_CARDS = frozenset(
    {Card.ESTATE, Card.DUCHY, Card.PROVINCE, Card.GARDENS, Card.GREAT_HALL}
)
_FEAST_BUDGET = 5

Handler = Callable[[GameState, int, int, int, int, int], None]


def _hand_at(state: GameState, player: int, pos: int) -> Card:
    hand = state.hands[player]
    if not 0 <= pos < len(hand):
        raise GameError(f"no card at hand position {pos}")
    return hand[pos]


def _cost_or_invalid(card: int) -> int:
    """Cost of a card, or -1 for something that is not a card."""
    try:
        return cost(card)
    except ValueError:
        return -1


def _gain_if_possible(
    state: GameState, card: int, player: int, destination: Destination = Destination.DISCARD
) -> None:
    """Gain a card, doing nothing when its pile is empty or not in the game."""
    try:
        state.gain_card(card, player, destination)
    except GameError:
        pass


def _draw(state: GameState, player: int, count: int) -> None:
    for _ in range(count):
        state.draw_card(player)


def _others(state: GameState, player: int) -> list[int]:
    return [other for other in range(state.num_players) if other != player]


def _adventurer(state, player, choice1, choice2, choice3, hand_pos):
    drawn_treasure = 0
    set_aside: list[Card] = []
    while drawn_treasure < 2:
        card = state.draw_card(player)
        if card is None:
            break
        if card in TREASURE_VALUES:
            drawn_treasure += 1
        else:
            state.hands[player].pop()
            set_aside.append(card)
    state.discards[player].extend(reversed(set_aside))


def _council_room(state, player, choice1, choice2, choice3, hand_pos):
    _draw(state, player, 4)
    state.num_buys += 1
    for other in _others(state, player):
        state.draw_card(other)
    state.discard_card(hand_pos, player)


def _feast(state, player, choice1, choice2, choice3, hand_pos):
    # The hand is set aside while buying, so only the budget counts.
    state.coins = _FEAST_BUDGET
    if state.supply_count(choice1) <= 0:
        raise GameError(f"no card {choice1} left in the supply")
    if state.coins < _cost_or_invalid(choice1):
        raise GameError("That card is too expensive!")
    state.gain_card(choice1, player, Destination.DISCARD)


def _mine(state, player, choice1, choice2, choice3, hand_pos):
    trashed = _hand_at(state, player, choice1)
    if not Card.COPPER <= trashed <= Card.GOLD:
        raise GameError("mine must trash a treasure")
    if not Card.CURSE <= choice2 <= Card.TREASURE_MAP:
        raise GameError(f"unknown card {choice2!r}")
    if cost(trashed) + 3 > cost(choice2):
        raise GameError("gained card costs too much")
    _gain_if_possible(state, choice2, player, Destination.HAND)
    state.discard_card(hand_pos, player)
    hand = state.hands[player]
    pos = next((i for i, card in enumerate(hand) if card == trashed), None)
    if pos is not None:
        state.discard_card(pos, player)


def _remodel(state, player, choice1, choice2, choice3, hand_pos):
    trashed = _hand_at(state, player, choice1)
    if cost(trashed) + 2 > _cost_or_invalid(choice2):
        raise GameError("gained card costs too much")
    _gain_if_possible(state, choice2, player, Destination.DISCARD)
    state.discard_card(hand_pos, player)
    hand = state.hands[player]
    pos = next((i for i, card in enumerate(hand) if card == trashed), None)
    if pos is not None:
        state.discard_card(pos, player)


def _smithy(state, player, choice1, choice2, choice3, hand_pos):
    _draw(state, player, 3)
    state.discard_card(hand_pos, player)


def _village(state, player, choice1, choice2, choice3, hand_pos):
    state.draw_card(player)
    state.num_actions += 2
    state.discard_card(hand_pos, player)


def _gain_estate_for_baron(state: GameState, player: int) -> None:
    if state.supply_count(Card.ESTATE) > 0:
        state.gain_card(Card.ESTATE, player, Destination.DISCARD)
        # The estate pile is reduced a second time on top of the gain.
        state.supply[Card.ESTATE] -= 1


def _baron(state, player, choice1, choice2, choice3, hand_pos):
    state.num_buys += 1
    hand = state.hands[player]
    if choice1 > 0 and Card.ESTATE in hand:
        hand.remove(Card.ESTATE)
        state.discards[player].append(Card.ESTATE)
        state.coins += 4
    else:
        _gain_estate_for_baron(state, player)


def _great_hall(state, player, choice1, choice2, choice3, hand_pos):
    state.draw_card(player)
    state.num_actions += 1
    state.discard_card(hand_pos, player)


def _discard_whole_hand(state: GameState, player: int, hand_pos: int) -> None:
    hand = state.hands[player]
    while hand:
        state.discard_card(min(hand_pos, len(hand) - 1), player)


def _minion(state, player, choice1, choice2, choice3, hand_pos):
    state.num_actions += 1
    state.discard_card(hand_pos, player)
    if choice1:
        state.coins += 2
    elif choice2:
        _discard_whole_hand(state, player, hand_pos)
        _draw(state, player, 4)
        for other in _others(state, player):
            if len(state.hands[other]) > 4:
                _discard_whole_hand(state, other, hand_pos)
                _draw(state, other, 4)


def _steward(state, player, choice1, choice2, choice3, hand_pos):
    if choice1 == 1:
        _draw(state, player, 2)
    elif choice1 == 2:
        state.coins += 2
    else:
        state.discard_card(choice2, player, trash=True)
        state.discard_card(choice3, player, trash=True)
    state.discard_card(hand_pos, player)


def _tribute(state, player, choice1, choice2, choice3, hand_pos):
    next_player = (player + 1) % state.num_players
    deck = state.decks[next_player]
    discard = state.discards[next_player]
    revealed: list[Card | None] = []
    if len(deck) + len(discard) <= 1:
        if deck:
            revealed.append(deck.pop())
        elif discard:
            revealed.append(discard.pop())
    else:
        for _ in range(2):
            if not deck:
                deck.extend(discard)
                discard.clear()
                state.shuffle(next_player)
            revealed.append(deck.pop())
    revealed.extend([None] * (2 - len(revealed)))

    if revealed[0] is not None and revealed[0] == revealed[1]:
        state.played_cards.append(revealed[1])
        revealed[1] = None

    for card in revealed:
        if card in TREASURE_VALUES:
            state.coins += 2
        elif card in _VICTORY_CARDS:
            _draw(state, player, 2)
        else:
            state.num_actions += 2


def _ambassador(state, player, choice1, choice2, choice3, hand_pos):
    if not 0 <= choice2 <= 2:
        raise GameError("ambassador returns between 0 and 2 cards")
    if choice1 == hand_pos:
        raise GameError("ambassador cannot reveal itself")
    hand = state.hands[player]
    revealed = _hand_at(state, player, choice1)
    # Hand positions are compared with the revealed card's number here.
    copies = sum(
        1 for i in range(len(hand)) if i not in (hand_pos, choice1) and i == revealed
    )
    if copies < choice2:
        raise GameError("not enough copies in hand to return")

    state.supply[revealed] += choice2
    for other in _others(state, player):
        _gain_if_possible(state, revealed, other)
    state.discard_card(hand_pos, player)

    for _ in range(choice2):
        if choice1 >= len(hand):
            break
        target = hand[choice1]
        pos = next(i for i, card in enumerate(hand) if card == target)
        state.discard_card(pos, player, trash=True)


def _cutpurse(state, player, choice1, choice2, choice3, hand_pos):
    state.update_coins(player, 2)
    for other in _others(state, player):
        hand = state.hands[other]
        pos = next((i for i, card in enumerate(hand) if card == Card.COPPER), None)
        if pos is not None:
            state.discard_card(pos, other)
    state.discard_card(hand_pos, player)


def _embargo(state, player, choice1, choice2, choice3, hand_pos):
    state.coins += 2
    if state.supply_count(choice1) == -1:
        raise GameError(f"card {choice1} is not in the game")
    state.embargo_tokens[choice1] += 1
    state.discard_card(hand_pos, player, trash=True)


def _outpost(state, player, choice1, choice2, choice3, hand_pos):
    state.outpost_played += 1
    state.discard_card(hand_pos, player)


def _salvager(state, player, choice1, choice2, choice3, hand_pos):
    state.num_buys += 1
    if choice1:
        state.coins += cost(state.hand_card(choice1))
        state.discard_card(choice1, player, trash=True)
    state.discard_card(hand_pos, player)


def _sea_hag(state, player, choice1, choice2, choice3, hand_pos):
    for other in _others(state, player):
        deck = state.decks[other]
        if deck:
            state.discards[other].append(deck.pop())
        deck.append(Card.CURSE)


def _treasure_map(state, player, choice1, choice2, choice3, hand_pos):
    hand = state.hands[player]
    partner = next(
        (i for i, card in enumerate(hand) if card == Card.TREASURE_MAP and i != hand_pos),
        None,
    )
    if partner is None:
        raise GameError("no second treasure map in hand")
    for pos in sorted((hand_pos, partner), reverse=True):
        state.discard_card(pos, player, trash=True)
    for _ in range(4):
        _gain_if_possible(state, Card.GOLD, player, Destination.DECK)


_EFFECTS: dict[Card, Handler] = {
    Card.ADVENTURER: _adventurer,
    Card.COUNCIL_ROOM: _council_room,
    Card.FEAST: _feast,
    Card.MINE: _mine,
    Card.REMODEL: _remodel,
    Card.SMITHY: _smithy,
    Card.VILLAGE: _village,
    Card.BARON: _baron,
    Card.GREAT_HALL: _great_hall,
    Card.MINION: _minion,
    Card.STEWARD: _steward,
    Card.TRIBUTE: _tribute,
    Card.AMBASSADOR: _ambassador,
    Card.CUTPURSE: _cutpurse,
    Card.EMBARGO: _embargo,
    Card.OUTPOST: _outpost,
    Card.SALVAGER: _salvager,
    Card.SEA_HAG: _sea_hag,
    Card.TREASURE_MAP: _treasure_map,
}


def card_effect(
    state: GameState, card: int, choice1: int, choice2: int, choice3: int, hand_pos: int
) -> None:
    """Carry out the effect of ``card`` for the current player.

    Raises GameError when the card has no effect or the choices are invalid.
    """
    handler = _EFFECTS.get(card)
    if handler is None:
        raise GameError(f"card {card!r} cannot be played")
    handler(state, state.whose_turn, choice1, choice2, choice3, hand_pos)


def play_card(
    state: GameState, hand_pos: int, choice1: int = -1, choice2: int = -1, choice3: int = -1
) -> None:
    """Play the action card at ``hand_pos`` of the current player's hand."""
    if state.phase != Phase.ACTION:
        raise GameError("cards can only be played in the action phase")
    if state.num_actions < 1:
        raise GameError("no actions left")
    card = state.hand_card(hand_pos)
    if not Card.ADVENTURER <= card <= Card.TREASURE_MAP:
        raise GameError(f"{Card(card).name} is not an action card")
    card_effect(state, card, choice1, choice2, choice3, hand_pos)
    state.num_actions -= 1
    state.update_coins(state.whose_turn)