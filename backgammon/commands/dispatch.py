"""
Backgammon Engine - Command Dispatch

Behavior for every command variant, selected through a single table keyed
by variant type. The public entry points (can_execute, execute, can_undo,
undo) enforce the command lifecycle and turn every rule violation into a
CommandResult instead of letting it escape.

Each execute/undo either completes fully or restores whatever it touched
before reporting failure.
"""

from __future__ import annotations

import logging
from typing import Callable, NamedTuple

from backgammon.commands.base import (
    CheckTurnEndCommand,
    Command,
    CommandResult,
    CommandStatus,
    CompositeCommand,
    GameSetupCommand,
    HidePossibleMovesCommand,
    HighlightAvailableCoinsCommand,
    MoveCoinCommand,
    RollDiceCommand,
    ShowPossibleMovesCommand,
)
from backgammon.engine import rules
from backgammon.engine.base import Checker
from backgammon.engine.context import GameContext
from backgammon.engine.dice import dice_to_string, expand_roll
from backgammon.engine.errors import EngineError, IllegalMove, UndoMismatch
from backgammon.engine.point import Point
from backgammon.engine.validators import validate_player_id
from backgammon.events.events import (
    CleanIndicators,
    CoinMoved,
    CoinsHighlighted,
    DiceRolled,
    DiceValueRestored,
    PossibleMovesShown,
    TurnOver,
)

logger = logging.getLogger(__name__)


class CommandHandler(NamedTuple):
    """Behavior of one command variant."""
    check: Callable[[GameContext, Command], None]
    execute: Callable[[GameContext, Command], None]
    undo: Callable[[GameContext, Command], None] | None
    undoable: Callable[[Command], bool]


def _always(cmd: Command) -> bool:
    return True


def _never(cmd: Command) -> bool:
    return False


def _no_check(ctx: GameContext, cmd: Command) -> None:
    return None


def _require_turn(ctx: GameContext, player_id: int) -> None:
    validate_player_id(player_id)
    if not ctx.is_turn_of(player_id):
        raise IllegalMove(
            f"It is player {ctx.current_player}'s turn, not player {player_id}'s."
        )


def _put_back(point: Point, checker: Checker, previous_point: int | None) -> None:
    """Re-add a checker and restore its previous-point bookkeeping."""
    point.add_checker(checker)
    checker.previous_point = previous_point


# === GameSetupCommand ===

def _execute_setup(ctx: GameContext, cmd: GameSetupCommand) -> None:
    ctx.board.setup(cmd.layout, strict=cmd.strict)
    ctx.dice.clear()
    logger.info("Game setup completed")


# === RollDiceCommand ===

def _check_roll(ctx: GameContext, cmd: RollDiceCommand) -> None:
    _require_turn(ctx, cmd.player_id)


def _execute_roll(ctx: GameContext, cmd: RollDiceCommand) -> None:
    values = expand_roll(ctx.dice_source())
    ctx.dice.set_values(values)
    cmd.rolled = tuple(values)
    ctx.bus.publish(DiceRolled(values=cmd.rolled, player_id=cmd.player_id))
    logger.info("Player %d rolled %s", cmd.player_id, dice_to_string(values))


# === MoveCoinCommand ===

def _check_move(ctx: GameContext, cmd: MoveCoinCommand) -> None:
    _require_turn(ctx, cmd.player_id)
    if cmd.die not in ctx.dice:
        raise IllegalMove(
            f"Die {cmd.die} is not available in {dice_to_string(ctx.dice.values)}."
        )
    rules.check_move(ctx.board, cmd.source, cmd.target, cmd.player_id, cmd.die)


def _execute_move(ctx: GameContext, cmd: MoveCoinCommand) -> None:
    option = rules.check_move(ctx.board, cmd.source, cmd.target, cmd.player_id, cmd.die)
    board = ctx.board
    source_point = board.resolve(cmd.source, cmd.player_id)
    target_point = board.point_at(cmd.target)

    rollback: list[Callable[[], None]] = []
    try:
        position = ctx.dice.consume(cmd.die)
        rollback.append(lambda: ctx.dice.restore(cmd.die, position))

        mover_previous = source_point.peek_top().previous_point
        mover = source_point.remove_top()
        rollback.append(lambda: _put_back(source_point, mover, mover_previous))

        victim = None
        victim_previous = None
        if option.is_capture:
            victim_previous = target_point.peek_top().previous_point
            victim = target_point.remove_top()
            rollback.append(lambda: _put_back(target_point, victim, victim_previous))

            entry = board.entry_point_for(victim.owner)
            entry.add_checker(victim)
            rollback.append(lambda: entry.remove_checker(victim))

        target_point.add_checker(mover)
    except EngineError:
        for step in reversed(rollback):
            step()
        raise

    cmd.moved_checker = mover
    cmd.mover_previous_point = mover_previous
    cmd.mover_was_moved = mover.moved_this_turn
    cmd.captured_checker = victim
    cmd.captured_previous_point = victim_previous
    cmd.die_position = position
    mover.moved_this_turn = True

    ctx.bus.publish(CleanIndicators())
    ctx.bus.publish(
        CoinMoved(
            die=cmd.die,
            source_index=cmd.source,
            target_index=cmd.target,
            player_id=cmd.player_id,
            captured=victim is not None,
        )
    )
    if victim is not None:
        logger.info(
            "Player %d captured a checker of player %d on point %d",
            cmd.player_id, victim.owner, cmd.target,
        )
    logger.info("Moved coin from point %d to point %d", cmd.source, cmd.target)


def _undo_move(ctx: GameContext, cmd: MoveCoinCommand) -> None:
    mover = cmd.moved_checker
    if mover is None:
        raise UndoMismatch("Move was never executed.")
    if not ctx.is_turn_of(cmd.player_id):
        raise UndoMismatch(f"Player {cmd.player_id}'s turn is already over.")

    board = ctx.board
    source_point = board.resolve(cmd.source, cmd.player_id)
    target_point = board.point_at(cmd.target)

    top = target_point.peek_top()
    if top is not mover:
        raise UndoMismatch(
            f"Expected {mover!r} on top of point {cmd.target}, found {top!r}."
        )
    landed_previous = mover.previous_point
    target_point.remove_top()

    victim = cmd.captured_checker
    if victim is not None:
        entry = board.entry_point_for(victim.owner)
        if not any(c is victim for c in entry.checkers):
            _put_back(target_point, mover, landed_previous)
            raise UndoMismatch(
                f"Captured {victim!r} is no longer on player {victim.owner}'s entry point."
            )
        entry.remove_checker(victim)
        _put_back(target_point, victim, cmd.captured_previous_point)

    _put_back(source_point, mover, cmd.mover_previous_point)
    mover.moved_this_turn = cmd.mover_was_moved

    ctx.dice.restore(cmd.die, cmd.die_position)
    ctx.bus.publish(CleanIndicators())
    ctx.bus.publish(DiceValueRestored(value=cmd.die, player_id=cmd.player_id))

    cmd.moved_checker = None
    cmd.captured_checker = None
    logger.info(
        "Undone move from point %d to point %d; die %d restored, dice now %s",
        cmd.source, cmd.target, cmd.die, dice_to_string(ctx.dice.values),
    )


# === CheckTurnEndCommand ===

def _execute_check_turn_end(ctx: GameContext, cmd: CheckTurnEndCommand) -> None:
    remaining = cmd.remaining_dice
    moves = rules.available_moves(ctx.board, cmd.player_id, remaining) if remaining else []
    cmd.turn_ended = not moves

    if not cmd.turn_ended:
        logger.info(
            "Turn continues for player %d: %d actions available with dice %s",
            cmd.player_id, len(moves), dice_to_string(remaining),
        )
        if cmd.manual:
            raise IllegalMove(
                f"Player {cmd.player_id} still has {len(moves)} legal moves."
            )
        return

    if remaining:
        logger.info(
            "Turn ended for player %d: no valid moves with dice %s",
            cmd.player_id, dice_to_string(remaining),
        )
    else:
        logger.info("Turn ended for player %d: no dice remaining", cmd.player_id)
    ctx.bus.publish(TurnOver(player_id=cmd.player_id))


# === Presentation-only commands ===

def _check_show_moves(ctx: GameContext, cmd: ShowPossibleMovesCommand) -> None:
    validate_player_id(cmd.player_id)
    if not cmd.dice:
        raise IllegalMove("No dice values to show moves for.")
    point = ctx.board.resolve(cmd.source, cmd.player_id)
    if point.is_empty() or not point.is_owned_by(cmd.player_id):
        raise IllegalMove(
            f"Point {cmd.source} holds no checkers of player {cmd.player_id}."
        )


def _execute_show_moves(ctx: GameContext, cmd: ShowPossibleMovesCommand) -> None:
    ctx.bus.publish(CleanIndicators())
    options = rules.legal_targets(ctx.board, cmd.source, cmd.player_id, cmd.dice)
    cmd.targets = tuple(dict.fromkeys(option.target for option in options))
    ctx.bus.publish(
        PossibleMovesShown(
            source_index=cmd.source,
            player_id=cmd.player_id,
            target_indices=cmd.targets,
        )
    )
    logger.debug("Showed possible moves from point %d: %s", cmd.source, cmd.targets)


def _check_highlight(ctx: GameContext, cmd: HighlightAvailableCoinsCommand) -> None:
    validate_player_id(cmd.player_id)
    if not cmd.dice:
        raise IllegalMove("No dice values to highlight coins for.")


def _execute_highlight(ctx: GameContext, cmd: HighlightAvailableCoinsCommand) -> None:
    ctx.bus.publish(CleanIndicators())
    moves = rules.available_moves(ctx.board, cmd.player_id, cmd.dice)
    cmd.highlighted = tuple(dict.fromkeys(move.source for move in moves))
    ctx.bus.publish(
        CoinsHighlighted(player_id=cmd.player_id, point_indices=cmd.highlighted)
    )
    logger.debug(
        "Highlighted %d points with %d available actions for player %d",
        len(cmd.highlighted), len(moves), cmd.player_id,
    )


def _clear_indicators(ctx: GameContext, cmd: Command) -> None:
    ctx.bus.publish(CleanIndicators())
    if isinstance(cmd, ShowPossibleMovesCommand):
        cmd.targets = ()
    elif isinstance(cmd, HighlightAvailableCoinsCommand):
        cmd.highlighted = ()


# === CompositeCommand ===

def _check_composite(ctx: GameContext, cmd: CompositeCommand) -> None:
    if not cmd.children:
        raise IllegalMove(f"Composite command '{cmd.label}' is empty.")
    # Only the last child may lack an undo, so a later failure can roll back
    for child in cmd.children[:-1]:
        if _handler_for(child).undo is None:
            raise IllegalMove(
                f"'{child.description}' cannot be rolled back inside composite '{cmd.label}'."
            )
    # Later children depend on earlier ones; they are validated as they run
    result = can_execute(ctx, cmd.children[0])
    if not result:
        raise IllegalMove(result.reason)


def _execute_composite(ctx: GameContext, cmd: CompositeCommand) -> None:
    cmd.executed = []
    for child in cmd.children:
        result = execute(ctx, child)
        if not result:
            logger.error("Command failed in composite: %s", child.description)
            _rollback_children(ctx, cmd.executed)
            cmd.executed = []
            raise IllegalMove(f"{child.description}: {result.reason}")
        cmd.executed.append(child)


def _undo_composite(ctx: GameContext, cmd: CompositeCommand) -> None:
    undone: list[Command] = []
    for child in reversed(cmd.executed):
        result = undo(ctx, child)
        if not result:
            # Put the board back the way it was before this undo started
            for redone in reversed(undone):
                execute(ctx, redone)
            raise UndoMismatch(f"{child.description}: {result.reason}")
        undone.append(child)
    cmd.executed = []


def _composite_undoable(cmd: CompositeCommand) -> bool:
    return bool(cmd.executed) and all(can_undo(child) for child in cmd.executed)


def _rollback_children(ctx: GameContext, executed: list[Command]) -> None:
    for child in reversed(executed):
        result = undo(ctx, child)
        if not result:
            logger.error("Rollback failed for %s: %s", child.description, result.reason)


_HANDLERS: dict[type[Command], CommandHandler] = {
    GameSetupCommand: CommandHandler(_no_check, _execute_setup, None, _never),
    RollDiceCommand: CommandHandler(_check_roll, _execute_roll, None, _never),
    MoveCoinCommand: CommandHandler(_check_move, _execute_move, _undo_move, _always),
    CheckTurnEndCommand: CommandHandler(_no_check, _execute_check_turn_end, None, _never),
    ShowPossibleMovesCommand: CommandHandler(
        _check_show_moves, _execute_show_moves, _clear_indicators, _always
    ),
    HighlightAvailableCoinsCommand: CommandHandler(
        _check_highlight, _execute_highlight, _clear_indicators, _always
    ),
    HidePossibleMovesCommand: CommandHandler(_no_check, _clear_indicators, None, _never),
    CompositeCommand: CommandHandler(
        _check_composite, _execute_composite, _undo_composite, _composite_undoable
    ),
}


def _handler_for(cmd: Command) -> CommandHandler:
    try:
        return _HANDLERS[type(cmd)]
    except KeyError:
        raise TypeError(f"No handler registered for {type(cmd).__name__}") from None


# === Public API ===

def can_execute(ctx: GameContext, cmd: Command) -> CommandResult:
    """Check whether cmd may run now, with the reason when it may not."""
    if cmd.status == CommandStatus.EXECUTED:
        return CommandResult.fail(f"'{cmd.description}' has already been executed.")
    try:
        _handler_for(cmd).check(ctx, cmd)
    except (EngineError, ValueError) as exc:
        return CommandResult.fail(str(exc))
    return CommandResult.ok()


def execute(ctx: GameContext, cmd: Command) -> CommandResult:
    """Run cmd. Rule violations become a failed result with a reason."""
    result = can_execute(ctx, cmd)
    if not result:
        return result
    try:
        _handler_for(cmd).execute(ctx, cmd)
    except (EngineError, ValueError) as exc:
        return CommandResult.fail(str(exc))
    cmd.status = CommandStatus.EXECUTED
    return CommandResult.ok()


def can_undo(cmd: Command) -> bool:
    """True if cmd executed successfully and its variant supports undo."""
    handler = _handler_for(cmd)
    return (
        cmd.status == CommandStatus.EXECUTED
        and handler.undo is not None
        and handler.undoable(cmd)
    )


def undo(ctx: GameContext, cmd: Command) -> CommandResult:
    """Reverse cmd. Refused for commands that never executed."""
    if cmd.status != CommandStatus.EXECUTED:
        return CommandResult.fail(f"'{cmd.description}' has not been executed.")
    if not can_undo(cmd):
        return CommandResult.fail(f"'{cmd.description}' cannot be undone.")
    try:
        _handler_for(cmd).undo(ctx, cmd)
    except (EngineError, ValueError) as exc:
        return CommandResult.fail(str(exc))
    cmd.status = CommandStatus.UNDONE
    return CommandResult.ok()
