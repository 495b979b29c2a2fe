"""
Tests for the reducer (state transitions).

Tests:
- Deterministic deal
- Bidding and turn order
- Card play and trick resolution
- Validation (state unchanged on rejection)
- Rebuilding from an action log
- Terminal state and winner
"""

import pytest

from ..engine_core.action import PlaceBid, PlayCard
from ..engine_core.errors import CorruptHistory, InvalidAction, SetupError
from ..engine_core.state import HouseRules, Player
from ..games.spades import SpadesPhase, Trick, tricks_won
from .conftest import play_out


class TestSetup:
    """Tests for the initial deal."""

    def test_same_seed_same_hands(self, reducer, players):
        a = reducer.initial_state(12345, players)
        b = reducer.initial_state(12345, players)
        assert a.payload.hands == b.payload.hands
        assert a == b

    def test_different_seed_different_hands(self, reducer, players):
        a = reducer.initial_state(1, players)
        b = reducer.initial_state(2, players)
        assert a.payload.hands != b.payload.hands

    def test_hands_partition_the_deck(self, new_game):
        hands = new_game.payload.hands
        assert [len(h) for h in hands] == [13, 13, 13, 13]
        ids = [c.card_id for hand in hands for c in hand]
        assert len(set(ids)) == 52

    def test_initial_state(self, new_game):
        assert new_game.game_id == "spades_42"
        assert new_game.current_player_id == "p1"
        assert new_game.payload.phase == SpadesPhase.BIDDING
        assert new_game.payload.bids == ()
        assert new_game.action_history == ()
        assert not new_game.is_game_over
        assert new_game.winner is None

    def test_explicit_game_id_and_created_at(self, reducer, players):
        state = reducer.initial_state(42, players, game_id="g-1", created_at=1700000000.0)
        assert state.game_id == "g-1"
        assert state.created_at == 1700000000.0

    def test_house_rules_carried_and_hashable(self, reducer, players):
        rules = HouseRules(spectator_mode=True, options=(("variant", "nil"),))
        state = reducer.initial_state(42, players, house_rules=rules)
        assert state.house_rules.option("variant") == "nil"
        assert state.house_rules.option("bags") is None
        assert hash(state) == hash(reducer.initial_state(42, players, house_rules=rules))

    def test_wrong_player_count_fails(self, reducer, players):
        with pytest.raises(SetupError):
            reducer.initial_state(42, players[:3])

    def test_duplicate_player_ids_fail(self, reducer, players):
        dup = players[:3] + (Player(player_id="p1", name="Again"),)
        with pytest.raises(SetupError):
            reducer.initial_state(42, dup)


class TestBidding:
    """Tests for the bidding phase."""

    def test_bid_templates_for_player_on_turn(self, reducer, new_game):
        actions = reducer.get_valid_actions(new_game, "p1")
        assert [a.bid for a in actions] == list(range(14))
        assert all(a.player_id == "p1" for a in actions)

    def test_no_actions_off_turn(self, reducer, new_game):
        assert reducer.get_valid_actions(new_game, "p2") == []
        assert reducer.get_valid_actions(new_game, "stranger") == []

    def test_templates_carry_logical_timestamp(self, reducer, new_game):
        state = reducer.reduce(new_game, PlaceBid(player_id="p1", bid=3))
        actions = reducer.get_valid_actions(state, "p2")
        assert all(a.timestamp == 1.0 for a in actions)
        assert all(a.game_id == "spades_42" for a in actions)

    def test_bid_passes_turn(self, reducer, new_game):
        state = reducer.reduce(new_game, PlaceBid(player_id="p1", bid=3))
        assert state.current_player_id == "p2"
        assert state.payload.bid_map == {"p1": 3}
        assert not state.payload.bid_phase_complete

    def test_four_bids_complete_bidding(self, bid_game):
        gs = bid_game.payload
        assert gs.bid_phase_complete
        assert gs.bid_map == {"p1": 3, "p2": 2, "p3": 4, "p4": 2}
        assert gs.phase == SpadesPhase.PLAYING
        assert bid_game.current_player_id == "p1"
        assert len(bid_game.action_history) == 4

    def test_bids_rebuild_identically(self, reducer, players, bid_game):
        rebuilt = reducer.rebuild(42, players, bid_game.action_history)
        assert rebuilt == bid_game

    def test_bid_out_of_turn_rejected(self, reducer, new_game):
        with pytest.raises(InvalidAction):
            reducer.reduce(new_game, PlaceBid(player_id="p2", bid=1))
        assert new_game.payload.bids == ()
        assert new_game.current_player_id == "p1"

    def test_bid_out_of_range_rejected(self, reducer, new_game):
        with pytest.raises(InvalidAction):
            reducer.reduce(new_game, PlaceBid(player_id="p1", bid=14))

    def test_card_play_during_bidding_rejected(self, reducer, new_game):
        card = new_game.payload.hands[0][0]
        with pytest.raises(InvalidAction):
            reducer.reduce(new_game, PlayCard(player_id="p1", card_id=card.card_id))

    def test_reduce_does_not_mutate(self, reducer, players, new_game):
        reducer.reduce(new_game, PlaceBid(player_id="p1", bid=3))
        assert new_game == reducer.initial_state(42, players)


class TestPlaying:
    """Tests for card play and tricks."""

    def test_play_actions_are_hand(self, reducer, bid_game):
        actions = reducer.get_valid_actions(bid_game, "p1")
        hand_ids = [c.card_id for c in bid_game.payload.hands[0]]
        assert [a.card_id for a in actions] == hand_ids

    def test_play_moves_card_to_trick(self, reducer, bid_game):
        card = bid_game.payload.hands[0][0]
        state = reducer.reduce(bid_game, PlayCard(player_id="p1", card_id=card.card_id))
        gs = state.payload
        assert card not in gs.hands[0]
        assert len(gs.hands[0]) == 12
        assert gs.current_trick[0].card == card
        assert gs.led_suit == card.suit
        assert state.current_player_id == "p2"

    def test_card_not_in_hand_rejected(self, reducer, bid_game):
        other = bid_game.payload.hands[1][0]
        with pytest.raises(InvalidAction):
            reducer.reduce(bid_game, PlayCard(player_id="p1", card_id=other.card_id))

    def test_fourth_play_resolves_trick(self, reducer, bid_game):
        state = bid_game
        for _ in range(4):
            action = reducer.get_valid_actions(state, state.current_player_id)[0]
            state = reducer.reduce(state, action)

        gs = state.payload
        assert len(gs.tricks) == 1
        assert gs.current_trick == ()
        assert gs.led_suit is None
        assert state.current_player_id == gs.tricks[0].winner
        assert [len(h) for h in gs.hands] == [12, 12, 12, 12]


class TestFullGame:
    """Tests over a complete game."""

    @pytest.fixture
    def finished(self, reducer, bid_game):
        return play_out(reducer, bid_game)

    def test_game_ends_after_13_tricks(self, finished):
        gs = finished.payload
        assert finished.is_game_over
        assert len(gs.tricks) == 13
        assert all(len(h) == 0 for h in gs.hands)
        assert gs.phase == SpadesPhase.COMPLETE
        assert len(finished.action_history) == 4 + 52

    def test_every_card_played_once(self, finished):
        played = [p.card.card_id for t in finished.payload.tricks for p in t.plays]
        assert len(played) == 52
        assert len(set(played)) == 52

    def test_winner_has_most_tricks(self, finished):
        counts = tricks_won(finished)
        assert sum(counts.values()) == 13
        assert counts[finished.winner] == max(counts.values())

    def test_no_actions_after_game_over(self, reducer, finished):
        for player_id in finished.player_ids:
            assert reducer.get_valid_actions(finished, player_id) == []

    def test_replay_law(self, reducer, players, finished):
        """Folding reduce over the log and rebuilding give the same state."""
        assert reducer.rebuild(42, players, finished.action_history) == finished


class TestWinner:
    """Tests for winner selection."""

    def _with_tricks(self, state, winners):
        tricks = tuple(Trick(winner=w, plays=()) for w in winners)
        return state._copy_with(payload=state.payload._copy_with(tricks=tricks))

    def test_no_winner_while_running(self, reducer, bid_game):
        assert reducer.get_winner(bid_game) is None

    def test_most_tricks_wins(self, reducer, bid_game):
        state = self._with_tricks(bid_game, ["p3"] * 6 + ["p1"] * 3 + ["p2"] * 2 + ["p4"] * 2)
        assert reducer.get_winner(state) == "p3"

    def test_tie_goes_to_earlier_seat(self, reducer, bid_game):
        state = self._with_tricks(bid_game, ["p4"] * 4 + ["p2"] * 4 + ["p1"] * 3 + ["p3"] * 2)
        assert reducer.get_winner(state) == "p2"


class TestRebuild:
    """Tests for rebuilding from a stored log."""

    def test_empty_log_is_initial_state(self, reducer, players, new_game):
        assert reducer.rebuild(42, players, []) == new_game

    def test_unknown_card_is_corrupt(self, reducer, players, bid_game):
        log = bid_game.action_history + (PlayCard(player_id="p1", card_id="XX-99"),)
        with pytest.raises(CorruptHistory) as exc:
            reducer.rebuild(42, players, log)
        assert exc.value.index == 4

    def test_unknown_player_is_corrupt(self, reducer, players):
        with pytest.raises(CorruptHistory) as exc:
            reducer.rebuild(42, players, [PlaceBid(player_id="zz", bid=1)])
        assert exc.value.index == 0

    def test_double_bid_is_corrupt(self, reducer, players):
        log = [PlaceBid(player_id="p1", bid=1), PlaceBid(player_id="p1", bid=2)]
        with pytest.raises(CorruptHistory) as exc:
            reducer.rebuild(42, players, log)
        assert exc.value.index == 1
        assert "action #1" in str(exc.value)
