# holdem_odds/logging_utils.py

import logging
import os

# Environment switch:
#   LOG_LEVEL=DEBUG / INFO / WARNING / ERROR
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Call once at program start (poker_engine_cli.py and card_utils_cli.py)."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def format_cards(cards) -> str:
    """Compact card list for log lines: 'AS AH | KS QH JD'."""
    return " ".join(str(c) for c in cards) if cards else "-"
