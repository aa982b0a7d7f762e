# dominionsim

An engine for the Dominion deck-building card game. It holds the whole game
state (supply piles, decks, hands, discards, played cards, actions, buys and
coins), carries out the effects of the kingdom cards and keeps score.
Shuffling draws on a seeded Lehmer generator with 256 independent streams,
so a game started from the same seed always plays out the same way.

## Installation

```
pip install .
```

The package depends on nothing outside the standard library. To run the
tests:

```
pip install .[test]
pytest
```

## Commands

### Interactive console

```
dominion-player 7
```

Starts a two-player game from the positive integer seed `7` and reads
commands from standard input. Without exactly one argument, or with a seed
that is not positive, it prints a usage line and stops. Only the first four
letters of a command count. Type `help` for the list. The commands:

- `init <players> <bots>` — start a new game with 2 to 4 players; the last
  `<bots>` seats are played by the computer, which buys Province, Duchy
  (once the Provinces are gone), Gold or Silver as its coins allow
- `show`, `stat`, `supp`, `num`, `whos` — your hand and played cards, your
  turn's status, the supply, your hand size, and whose turn it is
  (`show` and `stat` do nothing until `init` has been run)
- `play <hand index> <choice> <choice> <choice>` — play an action card from
  your hand
- `buy <supply card number>` — buy a card
- `add <supply card number>` — put any kingdom card into your hand
- `end` — end your turn (after `init`)
- `resign` — end the turn, show the scores and leave
- `exit` — leave

Once a game started with `init` is over, the scores, the winners and every
player's hand, played cards, discard pile and deck are printed.

### Scripted game

```
dominion-playdom 7
```

Plays a whole two-player game from seed `7` between two fixed strategies —
one built around Smithy, the other around Adventurer — prints each move and
the final scores.

### Generator search

```
dominion-findvalue 7 123456789
```

Seeds stream 1 of the generator with `7` and draws values in the range
0 to 999,999,999 until `123456789` comes up, then prints `Found the bug!`.
A target outside that range is refused.

## Library use

```python
from dominionsim.effects import play_card
from dominionsim.game import GameError, initialize_game
from dominionsim.interface import format_hand, format_supply, select_kingdom_cards

kingdom = select_kingdom_cards(42)
state = initialize_game(2, kingdom, 42)

print(format_supply(state))
print(format_hand(state, state.whose_turn))

try:
    play_card(state, 0)
except GameError as exc:
    print("cannot play:", exc)

state.end_turn()
print(state.is_game_over())
print([state.score_for(p) for p in range(state.num_players)])
```

The pieces:

- `dominionsim.cards` — the `Card` and `Phase` enumerations, `cost`,
  `card_name` and `phase_name`.
- `dominionsim.rngs` — `RandomStreams`, the multi-stream generator
  (`random`, `plant_seeds`, `put_seed`, `get_seed`, `select_stream`), and
  `find_value`, which returns how many draws it took to reach a target.
- `dominionsim.game` — `initialize_game`, `kingdom_cards` and `GameState`
  with `draw_card`, `gain_card`, `discard_card`, `buy_card`, `shuffle`,
  `update_coins`, `end_turn`, `is_game_over`, `score_for`, `get_winners`
  and the lookups `num_hand_cards`, `hand_card`, `supply_count` and
  `full_deck_count`. Broken rules raise `GameError`; `Destination` says
  where a gained card goes (discard, deck or hand).
- `dominionsim.effects` — `play_card` and `card_effect`, the effects of the
  action cards.
- `dominionsim.interface` — text views of the state (`format_hand`,
  `format_deck`, `format_discard`, `format_played`, `format_supply`,
  `format_state`, `format_scores`, `help_text`), `add_card_to_hand`,
  `select_kingdom_cards`, `count_hand_coins` and the computer player
  `execute_bot_turn`, which returns the updated turn number.
- `dominionsim.playdom` — `play_game`, the scripted two-player game, which
  returns the two scores.
- `dominionsim.player` — `Console`, the interactive command loop; `handle`
  runs one command line and `run` reads lines from any iterable.

## Limits

- A seed of zero is not accepted: `RandomStreams.put_seed` raises
  `ValueError` instead of asking for one, and a negative seed takes the
  state from the system clock.
- There is no saving or loading of games; a game lives only as long as its
  `GameState` object.