"""Small property-based testing harness built on NumPy generators.

A :class:`Generator` draws a value from a ``numpy.random.Generator``.
Factories build generators for integers, booleans, choices, arrays,
records and tuples, plus game-specific positions, snakes and states.
:class:`Property` runs a predicate over many generated inputs and
reports the first counterexample.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

import numpy as np

from snake_autopilot.grid import Grid
from snake_autopilot.snake import Direction, GameState, Position

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_ITERATIONS = 100
ITERATIONS: dict[str, int] = {
    "quick": 10,
    "normal": 100,
    "thorough": 1000,
}


class Generator(Generic[T]):
    """Produces pseudo-random values of type ``T``."""

    def __init__(self, draw: Callable[[np.random.Generator], T]) -> None:
        self._draw = draw

    def generate(self, rng: np.random.Generator) -> T:
        return self._draw(rng)

    def map(self, fn: Callable[[T], U]) -> Generator[U]:
        """Return a generator that applies *fn* to every drawn value."""
        return Generator(lambda rng: fn(self._draw(rng)))


# --- basic generators ---

def integers(min_value: int = -1000, max_value: int = 1000) -> Generator[int]:
    """Uniform integers in the closed range ``[min_value, max_value]``."""
    if min_value > max_value:
        raise ValueError("min_value must not exceed max_value.")
    return Generator(lambda rng: int(rng.integers(min_value, max_value + 1)))


def nat(max_value: int = 1000) -> Generator[int]:
    return integers(0, max_value)


def booleans() -> Generator[bool]:
    return Generator(lambda rng: bool(rng.random() < 0.5))


def constant_from(*values: T) -> Generator[T]:
    """Pick uniformly from *values*."""
    if not values:
        raise ValueError("constant_from needs at least one value.")
    return Generator(lambda rng: values[int(rng.integers(len(values)))])


def arrays(
    element: Generator[T], min_length: int = 0, max_length: int = 10,
) -> Generator[list[T]]:
    """Lists of *element* values with a length in ``[min_length, max_length]``."""
    length = integers(min_length, max_length)

    def draw(rng: np.random.Generator) -> list[T]:
        return [element.generate(rng) for _ in range(length.generate(rng))]

    return Generator(draw)


def records(**fields: Generator[Any]) -> Generator[dict[str, Any]]:
    """Dicts with one generated value per keyword."""
    return Generator(
        lambda rng: {name: gen.generate(rng) for name, gen in fields.items()}
    )


def tuples(*generators: Generator[Any]) -> Generator[tuple[Any, ...]]:
    return Generator(
        lambda rng: tuple(gen.generate(rng) for gen in generators)
    )


# --- game generators ---

def positions(size: int = 20) -> Generator[Position]:
    """Cells of a ``size`` x ``size`` grid."""
    return tuples(integers(0, size - 1), integers(0, size - 1))


def directions() -> Generator[Direction]:
    return constant_from(*Direction)


def snakes(
    min_length: int = 1, max_length: int = 10, size: int = 20,
) -> Generator[tuple[Position, ...]]:
    """Self-avoiding walks on the torus, head first.

    The walk stops early if every neighbor of the current tail is taken,
    so a result may be shorter than the drawn length but never shorter
    than one segment.
    """
    grid = Grid(size)
    length = integers(min_length, max_length)
    start = positions(size)

    def draw(rng: np.random.Generator) -> tuple[Position, ...]:
        target = length.generate(rng)
        body = [start.generate(rng)]
        used = {body[0]}
        while len(body) < target:
            options = [
                cell for cell in (grid.neighbor(body[-1], d) for d in Direction)
                if cell not in used
            ]
            if not options:
                break
            nxt = options[int(rng.integers(len(options)))]
            body.append(nxt)
            used.add(nxt)
        return tuple(body)

    return Generator(draw)


def heading_of(snake: Sequence[Position], grid: Grid) -> Direction | None:
    """Return the direction from the neck to the head, if the snake has one."""
    if len(snake) < 2:
        return None
    for direction in Direction:
        if grid.neighbor(snake[1], direction) == snake[0]:
            return direction
    return None


def game_states(
    size: int = 20,
    min_length: int = 1,
    max_length: int = 5,
    *,
    game_over: bool | None = None,
    autopilot_enabled: bool | None = None,
) -> Generator[GameState]:
    """Game states with a consistent heading and food off the snake.

    ``game_over`` and ``autopilot_enabled`` are drawn at random unless
    fixed by the caller.
    """
    grid = Grid(size)
    body_gen = snakes(min_length, max_length, size)
    dir_gen = directions()
    score_gen = nat(100)
    flag_gen = booleans()

    def draw(rng: np.random.Generator) -> GameState:
        body = body_gen.generate(rng)
        if len(body) >= grid.cell_count:
            body = body[:-1]
        direction = heading_of(body, grid) or dir_gen.generate(rng)
        free = grid.free_cells(body)
        food = free[int(rng.integers(len(free)))]
        return GameState(
            snake=body,
            food=food,
            direction=direction,
            score=score_gen.generate(rng),
            game_over=(
                flag_gen.generate(rng) if game_over is None else game_over
            ),
            autopilot_enabled=(
                flag_gen.generate(rng) if autopilot_enabled is None
                else autopilot_enabled
            ),
        )

    return Generator(draw)


# --- property checking ---

class PropertyFailure(AssertionError):
    """Raised by :func:`assert_property` when a counterexample is found."""


@dataclass
class CheckResult:
    """Outcome of running a property."""

    success: bool
    iterations: int
    counter_example: list[Any] = field(default_factory=list)
    iteration: int | None = None
    error: str | None = None


class Property:
    """A predicate that should hold for every generated input tuple.

    The predicate fails by returning ``False`` or by raising.
    """

    def __init__(
        self,
        generators: Sequence[Generator[Any]] | Generator[Any],
        predicate: Callable[..., bool | None],
    ) -> None:
        if isinstance(generators, Generator):
            generators = [generators]
        self.generators = list(generators)
        self.predicate = predicate

    def check(
        self,
        iterations: int = DEFAULT_ITERATIONS,
        seed: int | None = None,
    ) -> CheckResult:
        rng = np.random.default_rng(seed)
        for i in range(iterations):
            inputs: list[Any] = []
            try:
                inputs = [gen.generate(rng) for gen in self.generators]
                if self.predicate(*inputs) is False:
                    return CheckResult(
                        success=False, iterations=i + 1,
                        counter_example=inputs, iteration=i,
                    )
            except AssertionError as exc:
                return CheckResult(
                    success=False, iterations=i + 1,
                    counter_example=inputs, iteration=i,
                    error=str(exc) or "assertion failed",
                )
            except Exception as exc:  # noqa: BLE001
                logger.debug("Property raised on iteration %d.", i, exc_info=True)
                return CheckResult(
                    success=False, iterations=i + 1,
                    counter_example=inputs, iteration=i,
                    error=f"{type(exc).__name__}: {exc}",
                )
        return CheckResult(success=True, iterations=iterations)


def assert_property(
    prop: Property,
    iterations: int = DEFAULT_ITERATIONS,
    seed: int | None = None,
) -> CheckResult:
    """Check *prop* and raise :class:`PropertyFailure` on a counterexample."""
    result = prop.check(iterations, seed=seed)
    if not result.success:
        reason = (
            f"Property failed with error: {result.error}"
            if result.error
            else f"Property failed with counterexample: {result.counter_example!r}"
        )
        raise PropertyFailure(f"{reason} (iteration {result.iteration})")
    return result
