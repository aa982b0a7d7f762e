from collections import Counter

import pytest

from dominionsim.cards import Card, MAX_PLAYERS, Phase
from dominionsim.game import (
    Destination,
    GameError,
    GameState,
    initialize_game,
    kingdom_cards,
)

K = [
    Card.ADVENTURER,
    Card.COUNCIL_ROOM,
    Card.FEAST,
    Card.GARDENS,
    Card.MINE,
    Card.REMODEL,
    Card.SMITHY,
    Card.VILLAGE,
    Card.BARON,
    Card.GREAT_HALL,
]


def coppers_in(cards):
    return sum(1 for c in cards if c == Card.COPPER)


def test_supply_test_case():
    state = initialize_game(4, K, 1)
    assert state.supply_count(Card.ADVENTURER) == 10


def test_kingdom_cards_requires_ten():
    assert kingdom_cards(*K) == K
    with pytest.raises(GameError):
        kingdom_cards(*K[:9])


@pytest.mark.parametrize("players", [1, 5])
def test_invalid_player_count(players):
    with pytest.raises(GameError):
        initialize_game(players, K, 1)


def test_duplicate_kingdom_cards():
    bad = K[:9] + [Card.ADVENTURER]
    with pytest.raises(GameError):
        initialize_game(2, bad, 1)


def test_two_player_supply():
    state = initialize_game(2, K, 1)
    assert state.supply_count(Card.CURSE) == 10
    assert state.supply_count(Card.PROVINCE) == 8
    assert state.supply_count(Card.GARDENS) == 8
    assert state.supply_count(Card.SILVER) == 40
    assert state.supply_count(Card.GOLD) == 30
    assert state.supply_count(Card.SEA_HAG) == -1
    assert state.embargo_tokens == [0] * len(Card)


def test_four_player_supply():
    state = initialize_game(4, K, 1)
    assert state.supply_count(Card.CURSE) == 30
    assert state.supply_count(Card.ESTATE) == 12
    assert state.supply_count(Card.GREAT_HALL) == 12


def test_initial_hands_and_decks():
    state = initialize_game(2, K, 1)
    assert state.num_hand_cards() == 5
    assert len(state.decks[0]) == 5
    assert len(state.decks[1]) == 10
    assert state.hands[1] == []
    for player in range(2):
        assert state.full_deck_count(player, Card.ESTATE) == 3
        assert state.full_deck_count(player, Card.COPPER) == 7
    assert state.coins == coppers_in(state.hands[0])
    assert state.phase == Phase.ACTION
    assert state.num_actions == 1 and state.num_buys == 1


def test_same_seed_is_deterministic():
    a = initialize_game(2, K, 7)
    b = initialize_game(2, K, 7)
    assert a == b


def test_shuffle_keeps_cards():
    state = initialize_game(2, K, 3)
    before = Counter(state.decks[1])
    state.shuffle(1)
    assert Counter(state.decks[1]) == before


def test_shuffle_empty_deck_raises():
    state = initialize_game(2, K, 3)
    state.decks[1].clear()
    with pytest.raises(GameError):
        state.shuffle(1)


def test_draw_takes_top_card():
    state = initialize_game(2, K, 1)
    top = state.decks[0][-1]
    deck_size = len(state.decks[0])
    drawn = state.draw_card(0)
    assert drawn == top
    assert state.hands[0][-1] == top
    assert len(state.decks[0]) == deck_size - 1


def test_draw_reshuffles_discard():
    state = initialize_game(2, K, 1)
    state.decks[1] = []
    state.discards[1] = [Card.GOLD, Card.SILVER, Card.ESTATE]
    drawn = state.draw_card(1)
    assert state.discards[1] == []
    assert len(state.decks[1]) == 2
    assert Counter(state.decks[1] + [drawn]) == Counter(
        [Card.GOLD, Card.SILVER, Card.ESTATE]
    )
    assert state.hands[1] == [drawn]


def test_draw_with_nothing_left():
    state = initialize_game(2, K, 1)
    state.decks[1] = []
    state.discards[1] = []
    assert state.draw_card(1) is None
    assert state.hands[1] == []


@pytest.mark.parametrize(
    "destination, pile",
    [(Destination.DISCARD, "discards"), (Destination.DECK, "decks"), (Destination.HAND, "hands")],
)
def test_gain_card_destinations(destination, pile):
    state = initialize_game(2, K, 1)
    supply = state.supply_count(Card.SILVER)
    state.gain_card(Card.SILVER, 1, destination)
    assert getattr(state, pile)[1][-1] == Card.SILVER
    assert state.supply_count(Card.SILVER) == supply - 1


def test_gain_unused_card_raises():
    state = initialize_game(2, K, 1)
    with pytest.raises(GameError):
        state.gain_card(Card.SEA_HAG, 0)
    assert state.supply_count(Card.SEA_HAG) == -1


def test_discard_card_moves_last_into_gap():
    state = initialize_game(2, K, 1)
    hand = list(state.hands[0])
    removed = state.discard_card(0, 0)
    assert removed == hand[0]
    assert state.played_cards == [hand[0]]
    assert state.hands[0] == [hand[4], hand[1], hand[2], hand[3]]


def test_trashed_card_not_played():
    state = initialize_game(2, K, 1)
    hand = list(state.hands[0])
    state.discard_card(4, 0, trash=True)
    assert state.played_cards == []
    assert state.hands[0] == hand[:4]


def test_discard_bad_position_raises():
    state = initialize_game(2, K, 1)
    with pytest.raises(GameError):
        state.discard_card(5, 0)


def test_update_coins_with_bonus():
    state = initialize_game(2, K, 1)
    state.hands[0] = [Card.COPPER, Card.SILVER, Card.GOLD, Card.ESTATE]
    assert state.update_coins(0, 2) == 8
    assert state.coins == 8


def test_buy_card_success_and_no_buys_left():
    state = initialize_game(2, K, 1)
    coins = state.coins
    state.buy_card(Card.CURSE)
    assert state.supply_count(Card.CURSE) == 9
    assert state.discards[0] == [Card.CURSE]
    assert state.num_buys == 0
    assert state.coins == coins
    assert state.phase == Phase.BUY
    with pytest.raises(GameError):
        state.buy_card(Card.CURSE)


def test_buy_too_expensive_or_unused():
    state = initialize_game(2, K, 1)
    with pytest.raises(GameError):
        state.buy_card(Card.PROVINCE)
    with pytest.raises(GameError):
        state.buy_card(Card.SEA_HAG)
    assert state.num_buys == 1


def test_hand_card_and_bad_position():
    state = initialize_game(2, K, 1)
    assert state.hand_card(2) == state.hands[0][2]
    with pytest.raises(GameError):
        state.hand_card(7)


def test_end_turn_passes_turn():
    state = initialize_game(2, K, 1)
    old_hand = list(state.hands[0])
    state.end_turn()
    assert state.whose_turn == 1
    assert state.hands[0] == []
    assert state.discards[0] == old_hand
    assert state.num_hand_cards() == 5
    assert state.coins == coppers_in(state.hands[1])
    state.end_turn()
    assert state.whose_turn == 0


def test_game_over_on_provinces():
    state = initialize_game(2, K, 1)
    assert state.is_game_over() is False
    state.supply[Card.PROVINCE] = 0
    assert state.is_game_over() is True


def test_game_over_on_three_piles():
    state = initialize_game(2, K, 1)
    for card in (Card.GOLD, Card.SILVER, Card.SMITHY):
        state.supply[card] = 0
    assert state.is_game_over() is True


def test_last_piles_do_not_end_game():
    state = initialize_game(2, K, 1)
    for card in (Card.GOLD, Card.SEA_HAG, Card.TREASURE_MAP):
        state.supply[card] = 0
    assert state.is_game_over() is False


def test_score_counts_estates_in_hand():
    state = initialize_game(2, K, 1)
    estates = sum(1 for c in state.hands[0] if c == Card.ESTATE)
    assert state.score_for(0) == estates


def test_winners_tie_goes_to_later_player():
    state = initialize_game(2, K, 1)
    for player in range(2):
        state.hands[player] = [Card.PROVINCE]
        state.discards[player] = []
    assert state.get_winners() == [False, True, False, False]


def test_winners_highest_score():
    state = initialize_game(2, K, 1)
    state.hands[0] = [Card.PROVINCE]
    state.hands[1] = [Card.DUCHY]
    state.discards[0] = []
    state.discards[1] = []
    winners = state.get_winners()
    assert len(winners) == MAX_PLAYERS
    assert winners == [True, False, False, False]


def test_bad_player_raises():
    state = GameState(num_players=2)
    with pytest.raises(GameError):
        state.draw_card(3)