"""
Card validation for poker game logic.

Validators never raise: they collect every problem into a ValidationResult
so callers can decide which error to surface (the engine raises the first).
"""

from typing import List, Optional, Sequence
from dataclasses import dataclass, field

from holdem_odds.errors import ErrorCode
from holdem_odds.game.cards import (
    Card, SUITS, RANKS, SUIT_SYMBOLS, SUIT_ABBREVIATIONS, CARD_VALUES
)
from holdem_odds.game.stages import GameStage, STAGE_RULES, STAGE_TRANSITIONS

# Every stage, including pre-flop, requires both hole cards
HOLE_CARDS = 2
MIN_EVALUATION_CARDS = 5
MAX_EVALUATION_CARDS = 7


@dataclass(frozen=True)
class ValidationError:
    code: ErrorCode
    message: str
    field: Optional[str] = None


@dataclass
class ValidationResult:
    errors: List[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def first_error(self) -> Optional[ValidationError]:
        return self.errors[0] if self.errors else None

    def add(self, code: ErrorCode, message: str, field_name: Optional[str] = None):
        self.errors.append(ValidationError(code, message, field_name))

    def extend(self, other: 'ValidationResult'):
        self.errors.extend(other.errors)

    def to_dict(self) -> dict:
        return {
            'isValid': self.is_valid,
            'errors': [
                {'code': e.code.value, 'message': e.message, 'field': e.field}
                for e in self.errors
            ],
        }


def _stage_or_none(stage) -> Optional[GameStage]:
    try:
        return GameStage(stage)
    except ValueError:
        return None


def validate_cards(cards: Sequence[Card]) -> ValidationResult:
    """
    Check a card set for duplicates and structural corruption.

    Reports one DUPLICATE_CARD per repeated id, and INVALID_SUIT /
    INVALID_RANK / INVALID_VALUE / INVALID_DISPLAY / INVALID_ID when a
    card's fields don't match what create_card() would derive.
    Empty input is valid.
    """
    result = ValidationResult()
    seen_ids = set()

    for card in cards:
        if card.id in seen_ids:
            result.add(ErrorCode.DUPLICATE_CARD, f"Card already exists: {card.display}", card.id)
        seen_ids.add(card.id)

        suit_ok = card.suit in SUITS
        rank_ok = card.rank in RANKS
        if not suit_ok:
            result.add(ErrorCode.INVALID_SUIT, f"Invalid suit: {card.suit}", card.id)
        if not rank_ok:
            result.add(ErrorCode.INVALID_RANK, f"Invalid rank: {card.rank}", card.id)

        # Derived fields can only be checked against valid suit/rank
        if rank_ok and card.value != CARD_VALUES[card.rank]:
            result.add(
                ErrorCode.INVALID_VALUE,
                f"Incorrect value for {card.rank}: expected {CARD_VALUES[card.rank]}, got {card.value}",
                card.id
            )
        if suit_ok and rank_ok:
            expected_display = f"{card.rank}{SUIT_SYMBOLS[card.suit]}"
            if card.display != expected_display:
                result.add(
                    ErrorCode.INVALID_DISPLAY,
                    f"Incorrect display format: expected {expected_display}, got {card.display}",
                    card.id
                )
            expected_id = f"{card.rank}{SUIT_ABBREVIATIONS[card.suit]}"
            if card.id != expected_id:
                result.add(
                    ErrorCode.INVALID_ID,
                    f"Incorrect ID format: expected {expected_id}, got {card.id}",
                    card.id
                )

    return result


def validate_poker_hand(
    player_hand: Sequence[Card],
    community_cards: Sequence[Card],
    stage
) -> ValidationResult:
    """
    Validate hole + community cards for a stage.

    Runs validate_cards() on the union, then requires exactly two hole cards
    and the stage's community card count (pre-flop 0, flop 3, turn 4,
    river 5). Unknown stage tags report INVALID_STAGE.
    """
    result = validate_cards(list(player_hand) + list(community_cards))

    if len(player_hand) != HOLE_CARDS:
        result.add(
            ErrorCode.INVALID_PLAYER_HAND_SIZE,
            f"Player hand must have exactly {HOLE_CARDS} cards, got {len(player_hand)}"
        )

    game_stage = _stage_or_none(stage)
    if game_stage is None:
        result.add(ErrorCode.INVALID_STAGE, f"Unknown stage: {stage}")
        return result

    expected = STAGE_RULES[game_stage].community_cards_count
    if len(community_cards) != expected:
        result.add(
            ErrorCode.INVALID_COMMUNITY_CARDS,
            f"{game_stage} stage requires {expected} community cards, got {len(community_cards)}"
        )

    return result


def validate_texas_holdem_cards(
    player_hand: Sequence[Card],
    community_cards: Sequence[Card],
    stage
) -> ValidationResult:
    """
    Range-based variant of validate_poker_hand.

    Card-level errors short-circuit. Otherwise reports too many hole cards,
    too few / too many community cards and too many total cards for the stage.
    """
    card_check = validate_cards(list(player_hand) + list(community_cards))
    if not card_check.is_valid:
        return card_check

    result = ValidationResult()

    if len(player_hand) > HOLE_CARDS:
        result.add(
            ErrorCode.TOO_MANY_HOLE_CARDS,
            f"Player can only have {HOLE_CARDS} hole cards, got {len(player_hand)}"
        )

    game_stage = _stage_or_none(stage)
    if game_stage is None:
        result.add(ErrorCode.INVALID_STAGE, f"Unknown stage: {stage}")
        return result

    rules = STAGE_RULES[game_stage]
    if len(community_cards) < rules.community_cards_count:
        result.add(
            ErrorCode.INSUFFICIENT_COMMUNITY_CARDS,
            f"{game_stage} requires at least {rules.community_cards_count} community cards, "
            f"got {len(community_cards)}"
        )
    if len(community_cards) > rules.community_cards_count:
        result.add(
            ErrorCode.TOO_MANY_COMMUNITY_CARDS,
            f"{game_stage} allows maximum {rules.community_cards_count} community cards, "
            f"got {len(community_cards)}"
        )

    total = len(player_hand) + len(community_cards)
    if total > rules.known_cards:
        result.add(
            ErrorCode.TOO_MANY_TOTAL_CARDS,
            f"{game_stage} allows maximum {rules.known_cards} total cards, got {total}"
        )

    return result


def validate_game_progression(
    current_stage,
    target_stage,
    player_hand: Sequence[Card],
    community_cards: Sequence[Card]
) -> ValidationResult:
    """Check a stage transition and the cards it requires."""
    result = ValidationResult()
    current = _stage_or_none(current_stage)
    target = _stage_or_none(target_stage)

    if current is None or target is None:
        result.add(ErrorCode.INVALID_STAGE, f"Unknown stage: {current_stage if current is None else target_stage}")
        return result

    if target not in STAGE_TRANSITIONS[current]:
        result.add(ErrorCode.INVALID_STAGE_PROGRESSION, f"Cannot progress from {current} to {target}")

    if target == GameStage.FLOP and len(player_hand) < HOLE_CARDS:
        result.add(ErrorCode.MISSING_HOLE_CARDS, 'Both hole cards must be selected before flop')
    if target == GameStage.TURN and len(community_cards) < 3:
        result.add(ErrorCode.MISSING_FLOP_CARDS, 'All 3 flop cards must be selected before turn')
    if target == GameStage.RIVER and len(community_cards) < 4:
        result.add(ErrorCode.MISSING_TURN_CARD, 'Turn card must be selected before river')

    return result


def validate_hand_for_evaluation(cards: Sequence[Card]) -> ValidationResult:
    """5 to 7 distinct, well-formed cards."""
    result = ValidationResult()

    if len(cards) < MIN_EVALUATION_CARDS:
        result.add(
            ErrorCode.INSUFFICIENT_CARDS,
            f"Hand evaluation requires at least {MIN_EVALUATION_CARDS} cards, got {len(cards)}"
        )
    if len(cards) > MAX_EVALUATION_CARDS:
        result.add(
            ErrorCode.TOO_MANY_CARDS,
            f"Hand evaluation supports maximum {MAX_EVALUATION_CARDS} cards, got {len(cards)}"
        )

    result.extend(validate_cards(cards))
    return result
