"""
Unit tests for the card model.

Tests card creation and parsing, comparison, deck operations and validation.
"""

import dataclasses

import numpy as np
import pytest

from holdem_odds.errors import ErrorCode, PokerError
from holdem_odds.game.cards import (
    Card, SUITS, RANKS, create_card, parse_card, parse_cards, compare_cards, get_constants
)
from holdem_odds.game.deck import (
    Deck, create_deck, shuffle_deck, deal_cards, create_shuffled_deck, remove_cards_from_deck,
    get_remaining_cards, deal_hands, simulate_deal, get_deck_stats, can_deal_cards, reset_deck
)
from holdem_odds.game.validation import (
    validate_cards, validate_poker_hand, validate_texas_holdem_cards,
    validate_game_progression, validate_hand_for_evaluation
)


def codes(result):
    return [e.code for e in result.errors]


class TestCard:
    """Test card creation and parsing"""

    def test_card_creation(self):
        """Test creating cards derives value, display and id"""
        card = create_card('spades', 'A')
        assert card.suit == 'spades'
        assert card.rank == 'A'
        assert card.value == 14
        assert card.display == 'A♠'
        assert card.id == 'AS'

        ten = create_card('hearts', '10')
        assert ten.value == 10
        assert ten.display == '10♥'
        assert ten.id == '10H'

    def test_face_card_values(self):
        """Test J/Q/K values"""
        assert create_card('clubs', 'J').value == 11
        assert create_card('clubs', 'Q').value == 12
        assert create_card('clubs', 'K').value == 13

    def test_invalid_suit(self):
        """Test invalid suit raises INVALID_SUIT"""
        with pytest.raises(PokerError) as exc_info:
            create_card('stars', 'A')
        assert exc_info.value.code == ErrorCode.INVALID_SUIT

    def test_invalid_rank(self):
        """Test invalid rank raises INVALID_RANK"""
        for rank in ('1', '11', 'T', 'a', ''):
            with pytest.raises(PokerError) as exc_info:
                create_card('hearts', rank)
            assert exc_info.value.code == ErrorCode.INVALID_RANK

    def test_card_from_string(self):
        """Test parsing cards from canonical ids"""
        assert parse_card('AS') == create_card('spades', 'A')
        assert parse_card('KH') == create_card('hearts', 'K')
        assert parse_card('2D') == create_card('diamonds', '2')
        assert parse_card('10C') == create_card('clubs', '10')
        assert Card.from_string('QS').id == 'QS'

    def test_suit_letter_case_insensitive(self):
        """Test lowercase suit letters are accepted"""
        assert parse_card('Ah').id == 'AH'
        assert parse_card('10d').id == '10D'

    def test_invalid_string_format(self):
        """Test malformed strings raise INVALID_CARD_STRING"""
        for bad in ('', 'A', '10', 'AX', '1H', '11H', 'XS', 'ASS', '10HH', 'aS', 'TS'):
            with pytest.raises(PokerError) as exc_info:
                parse_card(bad)
            assert exc_info.value.code == ErrorCode.INVALID_CARD_STRING, bad

    def test_round_trip_all_cards(self):
        """Test parse(create(...).id) gives an equal card for all 52"""
        for suit in SUITS:
            for rank in RANKS:
                card = create_card(suit, rank)
                parsed = parse_card(card.id)
                assert parsed == card
                assert (parsed.suit, parsed.rank, parsed.value, parsed.display, parsed.id) == \
                    (card.suit, card.rank, card.value, card.display, card.id)

    def test_parse_cards_list(self):
        """Test comma-separated parsing"""
        cards = parse_cards('AS, KH,10D')
        assert [c.id for c in cards] == ['AS', 'KH', '10D']
        assert parse_cards('') == []

    def test_card_string_representation(self):
        """Test str/repr output"""
        card = parse_card('10H')
        assert str(card) == '10H'
        assert repr(card) == "Card('10H')"

    def test_card_is_immutable(self):
        """Test cards cannot be mutated"""
        card = parse_card('AS')
        with pytest.raises(dataclasses.FrozenInstanceError):
            card.value = 1

    def test_card_hashing(self):
        """Test cards can be used in sets/dicts"""
        cards = {parse_card('AS'), parse_card('KH'), parse_card('AS')}
        assert len(cards) == 2

    def test_card_ordering(self):
        """Test cards sort by value then suit"""
        cards = parse_cards('AS,2H,KD,2C')
        assert [c.id for c in sorted(cards)] == ['2H', '2C', 'KD', 'AS']

    def test_treys_round_trip(self):
        """Test conversion to and from Treys integers"""
        for card in create_deck().available_cards:
            assert Card.from_treys(card.to_treys()) == card

    def test_constants(self):
        """Test constants exposed to consumers"""
        constants = get_constants()
        assert constants['DECK_SIZE'] == 52
        assert constants['SUITS'] == ['hearts', 'diamonds', 'clubs', 'spades']
        assert constants['HAND_TYPES'][0] == 'High Card'
        assert constants['HAND_TYPES'][1] == 'One Pair'
        assert constants['HAND_TYPES'][9] == 'Royal Flush'
        assert constants['UNICODE_SUITS']['spades'] == '♠'


class TestCompareCards:
    """Test card comparison"""

    def test_ace_high(self):
        """Test ace beats king with ace high"""
        result = compare_cards(parse_card('AS'), parse_card('KH'))
        assert result.result == 1
        assert result.reasoning == 'A♠ (14) is higher than K♥ (13) (Ace is high)'

    def test_ace_low(self):
        """Test ace loses to two with ace low"""
        result = compare_cards(parse_card('AS'), parse_card('2H'), ace_high=False)
        assert result.result == -1
        assert result.reasoning == 'A♠ (1) is lower than 2♥ (2) (Ace is low)'

    def test_equal_rank(self):
        """Test same rank different suit ties"""
        result = compare_cards(parse_card('KH'), parse_card('KS'))
        assert result.result == 0
        assert result.reasoning == 'K♥ and K♠ have equal rank (13)'

    def test_lower_card(self):
        """Test lower card without aces"""
        result = compare_cards(parse_card('2C'), parse_card('9D'))
        assert result.result == -1
        assert 'Ace' not in result.reasoning


class TestDeck:
    """Test deck operations"""

    def test_deck_creation(self):
        """Test creating a full deck in canonical order"""
        deck = create_deck()
        assert len(deck.available_cards) == 52
        assert len(deck.used_cards) == 0
        assert deck.total_cards == 52
        assert len({c.id for c in deck.available_cards}) == 52

        ids = [c.id for c in deck.available_cards]
        assert ids[0] == 'AH'
        assert ids[12] == 'KH'
        assert ids[13] == 'AD'
        assert ids[-1] == 'KS'

    def test_shuffle_preserves_cards(self):
        """Test shuffling permutes without losing cards"""
        deck = create_deck()
        shuffled = shuffle_deck(deck, np.random.RandomState(42))

        assert set(shuffled.available_cards) == set(deck.available_cards)
        assert shuffled.used_cards == deck.used_cards
        assert [c.id for c in deck.available_cards][:2] == ['AH', '2H']  # input untouched

    def test_shuffle_deterministic_with_seed(self):
        """Test same seed gives same order"""
        deck1 = shuffle_deck(create_deck(), np.random.RandomState(42))
        deck2 = shuffle_deck(create_deck(), np.random.RandomState(42))
        deck3 = shuffle_deck(create_deck(), np.random.RandomState(99))

        assert deck1.available_cards == deck2.available_cards
        assert deck1.available_cards != deck3.available_cards

    def test_deck_dealing(self):
        """Test dealing never overlaps and moves cards to used"""
        deck = create_shuffled_deck(np.random.RandomState(7))
        first = deal_cards(deck, 5)
        second = deal_cards(first.remaining_deck, 5)

        assert len(first.dealt_cards) == 5
        assert len(first.remaining_deck.available_cards) == 47
        assert len(first.remaining_deck.used_cards) == 5
        assert not {c.id for c in first.dealt_cards} & {c.id for c in second.dealt_cards}
        assert len(second.remaining_deck.used_cards) == 10

        # Original deck untouched
        assert len(deck.available_cards) == 52

    def test_available_and_used_stay_disjoint(self):
        """Test union of available and used is the full deck"""
        result = deal_cards(create_deck(), 13)
        remaining = result.remaining_deck
        available_ids = {c.id for c in remaining.available_cards}
        used_ids = {c.id for c in remaining.used_cards}

        assert not available_ids & used_ids
        assert len(available_ids | used_ids) == 52

    def test_deck_overdeal(self):
        """Test dealing more cards than available raises INSUFFICIENT_CARDS"""
        empty = deal_cards(create_deck(), 52).remaining_deck
        with pytest.raises(PokerError) as exc_info:
            deal_cards(empty, 1)
        assert exc_info.value.code == ErrorCode.INSUFFICIENT_CARDS

        with pytest.raises(ValueError):
            deal_cards(create_deck(), 53)

    def test_deal_negative_count(self):
        """Test a negative count is rejected and deals nothing"""
        deck = create_deck()
        with pytest.raises(PokerError) as exc_info:
            deal_cards(deck, -1)
        assert exc_info.value.code == ErrorCode.INVALID_DEAL_COUNT
        assert len(deck.available_cards) == 52

    def test_deal_zero(self):
        """Test dealing zero cards leaves the deck as it was"""
        result = deal_cards(create_deck(), 0)
        assert result.dealt_cards == ()
        assert len(result.remaining_deck.available_cards) == 52

    def test_total_cards_carried_over(self):
        """Test dealing and removal keep the deck's total"""
        small = Deck(available_cards=create_deck().available_cards[:10], total_cards=10)
        assert deal_cards(small, 3).remaining_deck.total_cards == 10
        assert remove_cards_from_deck(small, parse_cards('AH')).total_cards == 10
        assert get_deck_stats(small)['available_percentage'] == 100.0

    def test_remove_cards(self):
        """Test removing known cards"""
        known = parse_cards('AS,KH')
        deck = remove_cards_from_deck(create_deck(), known)

        assert len(deck.available_cards) == 50
        assert {c.id for c in deck.used_cards} == {'AS', 'KH'}
        assert parse_card('AS') not in deck.available_cards

    def test_remaining_cards(self):
        """Test remaining cards exclude known ids"""
        remaining = get_remaining_cards(parse_cards('AS,KH,10D'))
        assert len(remaining) == 49
        assert not {'AS', 'KH', '10D'} & {c.id for c in remaining}

    def test_deal_hands(self):
        """Test dealing several hands"""
        hands, remaining = deal_hands(create_deck(), 4, 2)
        assert len(hands) == 4
        assert all(len(h) == 2 for h in hands)
        assert len(remaining.available_cards) == 44

        with pytest.raises(PokerError):
            deal_hands(create_deck(), 27, 2)

    def test_simulate_deal(self):
        """Test simulated completions are 7 distinct cards containing the known ones"""
        known = parse_cards('AS,AH')
        simulations = simulate_deal(known, 50, np.random.RandomState(3))

        assert len(simulations) == 50
        for cards in simulations:
            assert len(cards) == 7
            assert len({c.id for c in cards}) == 7
            assert cards[:2] == known

    def test_simulate_deal_complete_hand(self):
        """Test nothing is drawn when 7 cards are known"""
        known = parse_cards('AS,AH,AC,KD,KS,2H,7C')
        simulations = simulate_deal(known, 3, np.random.RandomState(3))
        assert simulations == [known, known, known]

    def test_deck_stats(self):
        """Test suit/rank counts"""
        deck = remove_cards_from_deck(create_deck(), parse_cards('AS,AH'))
        stats = get_deck_stats(deck)

        assert stats['available_count'] == 50
        assert stats['used_count'] == 2
        assert stats['suit_counts']['spades'] == 12
        assert stats['rank_counts']['A'] == 2
        assert stats['available_percentage'] == pytest.approx(50 / 52 * 100)

    def test_can_deal_and_reset(self):
        """Test deal capacity checks and reset"""
        deck = deal_cards(create_deck(), 50).remaining_deck
        assert can_deal_cards(deck, 2)
        assert not can_deal_cards(deck, 3)
        assert len(reset_deck().available_cards) == 52


class TestValidation:
    """Test card set validation"""

    def test_empty_is_valid(self):
        """Test empty input is valid"""
        result = validate_cards([])
        assert result.is_valid
        assert result.errors == []

    def test_duplicate_card(self):
        """Test two copies of a card give exactly one DUPLICATE_CARD"""
        result = validate_cards([parse_card('AS'), parse_card('AS')])
        assert not result.is_valid
        assert codes(result) == [ErrorCode.DUPLICATE_CARD]
        assert result.errors[0].field == 'AS'

    def test_corrupted_value(self):
        """Test wrong derived value is detected"""
        bad = Card(suit='hearts', rank='A', value=1, display='A♥', id='AH')
        assert codes(validate_cards([bad])) == [ErrorCode.INVALID_VALUE]

    def test_corrupted_display_and_id(self):
        """Test wrong display and id are detected"""
        bad = Card(suit='hearts', rank='K', value=13, display='KH', id='KS')
        assert codes(validate_cards([bad])) == [ErrorCode.INVALID_DISPLAY, ErrorCode.INVALID_ID]

    def test_invalid_suit_and_rank(self):
        """Test unknown suit/rank are reported"""
        bad_suit = Card(suit='stars', rank='A', value=14, display='A*', id='A*')
        bad_rank = Card(suit='hearts', rank='1', value=1, display='1♥', id='1H')
        assert codes(validate_cards([bad_suit])) == [ErrorCode.INVALID_SUIT]
        assert codes(validate_cards([bad_rank])) == [ErrorCode.INVALID_RANK]

    def test_valid_poker_hand(self):
        """Test well-formed hands for every stage"""
        hole = parse_cards('AS,AH')
        board = parse_cards('KS,QH,JD,2C,3C')
        assert validate_poker_hand(hole, [], 'pre-flop').is_valid
        assert validate_poker_hand(hole, board[:3], 'flop').is_valid
        assert validate_poker_hand(hole, board[:4], 'turn').is_valid
        assert validate_poker_hand(hole, board, 'river').is_valid

    def test_player_hand_size(self):
        """Test exactly two hole cards are required at every stage"""
        result = validate_poker_hand(parse_cards('AS'), [], 'pre-flop')
        assert codes(result) == [ErrorCode.INVALID_PLAYER_HAND_SIZE]

        result = validate_poker_hand(parse_cards('AS,AH,AD'), parse_cards('KS,QH,JD'), 'flop')
        assert codes(result) == [ErrorCode.INVALID_PLAYER_HAND_SIZE]

    def test_community_count_for_stage(self):
        """Test community card count must match stage"""
        result = validate_poker_hand(parse_cards('AS,AH'), parse_cards('KS,QH'), 'flop')
        assert codes(result) == [ErrorCode.INVALID_COMMUNITY_CARDS]

    def test_duplicate_across_hand_and_board(self):
        """Test duplicates between hole and community cards come first"""
        result = validate_poker_hand(parse_cards('AS,AH'), parse_cards('AS,QH,JD'), 'flop')
        assert result.first_error.code == ErrorCode.DUPLICATE_CARD

    def test_unknown_stage(self):
        """Test unknown stage tags are rejected"""
        result = validate_poker_hand(parse_cards('AS,AH'), [], 'showdown')
        assert codes(result) == [ErrorCode.INVALID_STAGE]

    def test_texas_holdem_ranges(self):
        """Test range-based validator"""
        result = validate_texas_holdem_cards(parse_cards('AS,AH,AD'), [], 'pre-flop')
        assert codes(result) == [ErrorCode.TOO_MANY_HOLE_CARDS, ErrorCode.TOO_MANY_TOTAL_CARDS]

        result = validate_texas_holdem_cards(parse_cards('AS,AH'), parse_cards('KS'), 'flop')
        assert codes(result) == [ErrorCode.INSUFFICIENT_COMMUNITY_CARDS]

        result = validate_texas_holdem_cards(parse_cards('AS,AH'), parse_cards('KS,QH,JD,2C'), 'flop')
        assert ErrorCode.TOO_MANY_COMMUNITY_CARDS in codes(result)

        result = validate_texas_holdem_cards(parse_cards('AS,AS'), [], 'pre-flop')
        assert codes(result) == [ErrorCode.DUPLICATE_CARD]

    def test_game_progression(self):
        """Test stage transitions and their prerequisites"""
        hole = parse_cards('AS,AH')
        flop = parse_cards('KS,QH,JD')

        assert validate_game_progression('pre-flop', 'flop', hole, []).is_valid
        assert validate_game_progression('flop', 'turn', hole, flop).is_valid

        result = validate_game_progression('pre-flop', 'flop', hole[:1], [])
        assert codes(result) == [ErrorCode.MISSING_HOLE_CARDS]

        result = validate_game_progression('pre-flop', 'turn', hole, [])
        assert codes(result) == [ErrorCode.INVALID_STAGE_PROGRESSION, ErrorCode.MISSING_FLOP_CARDS]

        result = validate_game_progression('river', 'flop', hole, flop)
        assert codes(result) == [ErrorCode.INVALID_STAGE_PROGRESSION]

        result = validate_game_progression('turn', 'river', hole, flop)
        assert codes(result) == [ErrorCode.MISSING_TURN_CARD]

    def test_hand_for_evaluation(self):
        """Test evaluation input validation"""
        assert validate_hand_for_evaluation(parse_cards('AS,AH,KS,QH,JD')).is_valid
        assert codes(validate_hand_for_evaluation(parse_cards('AS,AH,KS,QH'))) == \
            [ErrorCode.INSUFFICIENT_CARDS]
        assert codes(validate_hand_for_evaluation(parse_cards('AS,AH,KS,QH,JD,2C,3C,4C'))) == \
            [ErrorCode.TOO_MANY_CARDS]

    def test_validation_to_dict(self):
        """Test JSON shape of validation results"""
        data = validate_cards([parse_card('AS'), parse_card('AS')]).to_dict()
        assert data['isValid'] is False
        assert data['errors'][0]['code'] == 'DUPLICATE_CARD'


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
