"""
Texas Hold'em game stages.

A stage tag says how many community cards are known:
pre-flop 0, flop 3, turn 4, river 5.
"""

from typing import Dict, Tuple
from dataclasses import dataclass
from enum import Enum


class GameStage(str, Enum):
    """Game stages, valued by their wire tag"""
    PRE_FLOP = 'pre-flop'
    FLOP = 'flop'
    TURN = 'turn'
    RIVER = 'river'

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class StageRules:
    """Card counts for one stage (hero's perspective)"""

    stage: GameStage
    known_cards: int  # 2, 5, 6, 7
    remaining_cards: int  # 50, 47, 46, 45
    community_cards_count: int  # 0, 3, 4, 5
    is_complete: bool


STAGE_RULES: Dict[GameStage, StageRules] = {
    GameStage.PRE_FLOP: StageRules(GameStage.PRE_FLOP, 2, 50, 0, False),
    GameStage.FLOP: StageRules(GameStage.FLOP, 5, 47, 3, False),
    GameStage.TURN: StageRules(GameStage.TURN, 6, 46, 4, False),
    GameStage.RIVER: StageRules(GameStage.RIVER, 7, 45, 5, True),
}

# Only forward single-step transitions; river is terminal
STAGE_TRANSITIONS: Dict[GameStage, Tuple[GameStage, ...]] = {
    GameStage.PRE_FLOP: (GameStage.FLOP,),
    GameStage.FLOP: (GameStage.TURN,),
    GameStage.TURN: (GameStage.RIVER,),
    GameStage.RIVER: (),
}


def parse_stage(stage) -> GameStage:
    """
    Coerce a stage tag to GameStage.

    Raises:
        ValueError: Unknown stage tag
    """
    if isinstance(stage, GameStage):
        return stage
    return GameStage(stage)


def required_community_cards(stage) -> int:
    return STAGE_RULES[parse_stage(stage)].community_cards_count
