"""Either: a two-variant union with a fixed set of combinators.

An ``Either`` is exactly one of ``First(value)`` or ``Second(value)``. The
combinators are written from the perspective of the ``Second`` payload:
``map``, ``flat_map``, ``exists``, ``filter_or_else`` act on ``Second`` and
pass a ``First`` through untouched, the way a result-or-error union only
transforms its success side.

Example:
    def double_if_large(n: int) -> Either[str, int]:
        return Second(n * 2) if n > 10 else First("too small")

    Second(5).flat_map(double_if_large)     # First("too small")
    Second(15).flat_map(double_if_large)    # Second(30)
"""

from __future__ import annotations

import abc
from collections.abc import Callable
import dataclasses
import typing

from castor._validation import _require, _require_callable
from castor.errors import ContractError
from castor.option import OptionalResult


class Either[P, S](abc.ABC):
    """Base of the ``First``/``Second`` variants.

    The variant is fixed at construction. Every combinator validates its
    callbacks on both variants, so a contract violation surfaces even when
    the callback would not have run.
    """

    __slots__ = ()

    @abc.abstractmethod
    def is_first(self) -> bool: ...

    @abc.abstractmethod
    def is_second(self) -> bool: ...

    @abc.abstractmethod
    def get_first(self) -> P | None:
        """Return the ``First`` payload, or None for ``Second``."""

    @abc.abstractmethod
    def get_second(self) -> S | None:
        """Return the ``Second`` payload, or None for ``First``."""

    @abc.abstractmethod
    def if_first(self, action: Callable[[P], object]) -> None: ...

    @abc.abstractmethod
    def if_second(self, action: Callable[[S], object]) -> None: ...

    @abc.abstractmethod
    def map[U](self, mapper: Callable[[S], U]) -> Either[typing.Any, typing.Any]:
        """Apply ``mapper`` to a ``Second`` payload and wrap the result as ``First``.

        A ``First`` is returned as is; ``mapper`` is never called for it.
        Payloads cannot be None, so a mapper returning None raises
        :class:`ContractError`.
        """

    @abc.abstractmethod
    def flat_map[U](self, mapper: Callable[[S], Either[P, U]]) -> Either[P, U]:
        """Return ``mapper(payload)`` for ``Second``; ``First`` passes through."""

    @abc.abstractmethod
    def filter_or_else(self, predicate: Callable[[S], bool], fallback: P) -> Either[P, S]:
        """Keep a ``Second`` passing ``predicate``, otherwise switch to ``First(fallback)``.

        A None ``fallback`` raises :class:`ContractError` once the predicate fails.
        """

    @abc.abstractmethod
    def exists(self, predicate: Callable[[S], bool]) -> bool:
        """Return ``predicate(payload)`` for ``Second`` and False for ``First``."""

    @abc.abstractmethod
    def fold[R](self, first_fn: Callable[[P], R], second_fn: Callable[[S], R]) -> R:
        """Collapse either variant into one value; exactly one function runs."""

    @abc.abstractmethod
    def for_each(
        self, first_action: Callable[[P], object], second_action: Callable[[S], object]
    ) -> None: ...

    @abc.abstractmethod
    def join_first(self, other: Either[P, S]) -> Either[P, S]:
        """Return ``other`` for ``First``, the receiver for ``Second``."""

    @abc.abstractmethod
    def join_second(self, other: Either[P, S]) -> Either[P, S]:
        """Return the receiver for ``First``, ``other`` for ``Second``."""

    @abc.abstractmethod
    def to_optional_result(self) -> OptionalResult[S]:
        """Present container of the ``Second`` payload; empty for ``First``."""

    def to_optional(self) -> S | None:
        return self.get_second()


def _require_payload(value: object, variant: str) -> None:
    _require(
        condition=value is not None,
        message="payload cannot be None",
        field_name=variant,
    )


def _require_either(other: object) -> None:
    if not isinstance(other, Either):
        raise ContractError(f"other: must be an Either, got {type(other).__name__}")


@dataclasses.dataclass(frozen=True, slots=True)
class First[P, S](Either[P, S]):
    """The primary variant; inert under the ``Second``-side combinators."""

    value: P

    def __post_init__(self) -> None:
        _require_payload(self.value, "First")

    def is_first(self) -> bool:
        return True

    def is_second(self) -> bool:
        return False

    def get_first(self) -> P | None:
        return self.value

    def get_second(self) -> S | None:
        return None

    def if_first(self, action: Callable[[P], object]) -> None:
        _require_callable(action, "action")
        action(self.value)

    def if_second(self, action: Callable[[S], object]) -> None:
        _require_callable(action, "action")

    def map[U](self, mapper: Callable[[S], U]) -> Either[typing.Any, typing.Any]:
        _require_callable(mapper, "mapper")
        return self

    def flat_map[U](self, mapper: Callable[[S], Either[P, U]]) -> Either[P, U]:
        _require_callable(mapper, "mapper")
        return typing.cast("Either[P, U]", self)

    def filter_or_else(self, predicate: Callable[[S], bool], fallback: P) -> Either[P, S]:
        _require_callable(predicate, "predicate")
        return self

    def exists(self, predicate: Callable[[S], bool]) -> bool:
        _require_callable(predicate, "predicate")
        return False

    def fold[R](self, first_fn: Callable[[P], R], second_fn: Callable[[S], R]) -> R:
        _require_callable(first_fn, "first_fn")
        _require_callable(second_fn, "second_fn")
        return first_fn(self.value)

    def for_each(
        self, first_action: Callable[[P], object], second_action: Callable[[S], object]
    ) -> None:
        _require_callable(first_action, "first_action")
        _require_callable(second_action, "second_action")
        first_action(self.value)

    def join_first(self, other: Either[P, S]) -> Either[P, S]:
        _require_either(other)
        return other

    def join_second(self, other: Either[P, S]) -> Either[P, S]:
        _require_either(other)
        return self

    def to_optional_result(self) -> OptionalResult[S]:
        return OptionalResult.empty()


@dataclasses.dataclass(frozen=True, slots=True)
class Second[P, S](Either[P, S]):
    """The secondary variant; the side ``map``/``flat_map``/``exists`` act on."""

    value: S

    def __post_init__(self) -> None:
        _require_payload(self.value, "Second")

    def is_first(self) -> bool:
        return False

    def is_second(self) -> bool:
        return True

    def get_first(self) -> P | None:
        return None

    def get_second(self) -> S | None:
        return self.value

    def if_first(self, action: Callable[[P], object]) -> None:
        _require_callable(action, "action")

    def if_second(self, action: Callable[[S], object]) -> None:
        _require_callable(action, "action")
        action(self.value)

    def map[U](self, mapper: Callable[[S], U]) -> Either[typing.Any, typing.Any]:
        _require_callable(mapper, "mapper")
        return First(mapper(self.value))

    def flat_map[U](self, mapper: Callable[[S], Either[P, U]]) -> Either[P, U]:
        _require_callable(mapper, "mapper")
        result = mapper(self.value)
        if not isinstance(result, Either):
            raise ContractError(
                f"flat_map: mapper must return an Either, got {type(result).__name__}",
                hint="Wrap the value in First(...) or Second(...).",
            )
        return result

    def filter_or_else(self, predicate: Callable[[S], bool], fallback: P) -> Either[P, S]:
        _require_callable(predicate, "predicate")
        if predicate(self.value):
            return self
        return First(fallback)

    def exists(self, predicate: Callable[[S], bool]) -> bool:
        _require_callable(predicate, "predicate")
        return bool(predicate(self.value))

    def fold[R](self, first_fn: Callable[[P], R], second_fn: Callable[[S], R]) -> R:
        _require_callable(first_fn, "first_fn")
        _require_callable(second_fn, "second_fn")
        return second_fn(self.value)

    def for_each(
        self, first_action: Callable[[P], object], second_action: Callable[[S], object]
    ) -> None:
        _require_callable(first_action, "first_action")
        _require_callable(second_action, "second_action")
        second_action(self.value)

    def join_first(self, other: Either[P, S]) -> Either[P, S]:
        _require_either(other)
        return self

    def join_second(self, other: Either[P, S]) -> Either[P, S]:
        _require_either(other)
        return other

    def to_optional_result(self) -> OptionalResult[S]:
        return OptionalResult.of(self.value)
