"""
Centralized logging using Loguru with context-aware verbosity.

LOG() consults the ProgramState connected to the current context, so the
lifecycle code, the jax and the document driver can all log without
having a state object passed to them.

Verbosity levels:
    1 = Normal output: stage summaries, per-item error recovery
    2 = Verbose (-v): document driver stages
    3 = Debug (-vv): every math item state transition

Usage:
    from mathitem.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)
    LOG("Rendered 12 expressions", level=1)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

from ..config import appsettings

# Context variable to hold current ProgramState
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <22}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState (or anything with a `verbosity`) to the
    logging context.

    Args:
        state: Object with an integer verbosity attribute
    """
    _program_state.set(state)


def verbosity_get() -> int:
    """
    Verbosity of the connected state

    Falls back to 3 in debug mode (MATHITEM_DEBUG_MODE=true) and 0
    otherwise, so library use without a CLI state stays quiet.
    """
    state = _program_state.get()
    if state is not None and hasattr(state, 'verbosity'):
        return state.verbosity
    return 3 if appsettings.debug_mode else 0


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if the current verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru metadata

    Example:
        LOG("Compiled 4 expressions", level=2)
        LOG("'x^2': COMPILED -> TYPESET", level=3)
    """
    if verbosity_get() >= level:
        logger.opt(depth=1).debug(message, **kwargs)
