"""OptionalResult: a nullable-value container with a deferred failure tracker.

The container wraps an optional value plus the outcome of the last fallible
call run against it. A pipeline can attempt a step, continue only on success
and leave the failure branch to a single terminal call instead of a
``try``/``except`` around every step:

    config = (
        OptionalResult.of_absent(path)
        .run_fallible(read_config)
        .on_success(lambda cfg: logger.info("loaded %s", cfg.name))
        .on_failure_run_error()
        .get()
    )

Every operation returns a new container (or the shared empty singleton);
nothing is mutated after construction.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
import dataclasses
import enum
import logging
import typing

from castor._dev_flags import dev_validate_enabled
from castor._validation import (
    _callable_name,
    _require,
    _require_callable,
    _require_type_descriptor,
)
from castor.config import get_config_or_default
from castor.errors import ContractError, EmptyValueError, InvariantViolationError

logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    """Result of the last fallible call run against a container."""

    UNSET = "unset"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclasses.dataclass(frozen=True, slots=True)
class OptionalResult[T]:
    """An optional value plus the outcome of the last fallible call.

    Presence depends on ``value`` alone; ``outcome`` and ``error`` never
    affect it. Build instances with :meth:`of`, :meth:`of_absent` or
    :meth:`empty` rather than the constructor.

    Example:
        OptionalResult.of(5).filter(lambda n: n > 10).is_empty()   # True
        OptionalResult.of(15).filter(lambda n: n > 10).get()       # 15
    """

    value: T | None = None
    outcome: Outcome = Outcome.UNSET
    error: Exception | None = None

    def __post_init__(self) -> None:
        """Validate the tracker invariants."""
        _require(
            condition=isinstance(self.outcome, Outcome),
            message=f"must be an Outcome, got {self.outcome!r}",
            field_name="outcome",
        )
        _require(
            condition=self.value is not None or self.outcome is Outcome.UNSET,
            message="an absent value cannot carry a fallible-call outcome",
            field_name="outcome",
            exc=InvariantViolationError,
        )
        _require(
            condition=(self.error is not None) == (self.outcome is Outcome.FAILED),
            message=(
                "error must be set exactly when outcome is FAILED "
                f"(outcome={self.outcome.name}, error={self.error!r})"
            ),
            field_name="error",
            exc=InvariantViolationError,
        )

    # --- Construction -----------------------------------------------------

    @classmethod
    def of(cls, value: T) -> OptionalResult[T]:
        """Wrap ``value``.

        ``of(None)`` is allowed and yields an empty container, but
        :meth:`of_absent` is the intended factory for possibly-absent values.
        """
        return cls(value)

    @classmethod
    def of_supplier(cls, supplier: Callable[[], T]) -> OptionalResult[T]:
        """Wrap the result of calling a zero-argument ``supplier``."""
        _require_callable(supplier, "supplier")
        return cls(supplier())

    @classmethod
    def of_absent(cls, value: T | None) -> OptionalResult[T]:
        """Return the empty singleton when ``value`` is None, else ``of(value)``."""
        return _EMPTY if value is None else cls(value)

    @staticmethod
    def empty() -> OptionalResult[typing.Any]:
        """Return the shared empty container."""
        return _EMPTY

    # --- Presence ---------------------------------------------------------

    def get(self) -> T | None:
        """Return the raw value, ``None`` when empty."""
        return self.value

    def to_optional(self) -> T | None:
        """Return the value as a native optional (the value or ``None``)."""
        return self.value

    def is_present(self) -> bool:
        return self.value is not None

    def is_empty(self) -> bool:
        return self.value is None

    def is_not_empty(self) -> bool:
        return self.value is not None

    def succeeded(self) -> bool:
        return self.outcome is Outcome.SUCCEEDED

    def failed(self) -> bool:
        return self.outcome is Outcome.FAILED

    # --- Scope functions --------------------------------------------------

    def apply(self, action: Callable[[T], object]) -> OptionalResult[T]:
        """Run ``action(value)`` when present.

        Returns a value-only container; the receiver's outcome and error are
        dropped. Call :meth:`run_fallible` again to start a new tracked step.
        """
        _require_callable(action, "action")
        if self.value is not None:
            action(self.value)
        return OptionalResult.of_absent(self.value)

    def and_(self, action: Callable[[], object]) -> OptionalResult[T]:
        """Run the zero-argument ``action`` unconditionally.

        Like :meth:`apply`, the returned container carries the value only.
        """
        _require_callable(action, "action")
        action()
        return OptionalResult.of_absent(self.value)

    # --- Type filtering ---------------------------------------------------

    def is_instance(self, cls: type | tuple[type, ...]) -> bool:
        """Return True when the value is an instance of ``cls``; False when empty."""
        _require_type_descriptor(cls)
        return self.value is not None and isinstance(self.value, cls)

    @typing.overload
    def if_instance[U](self, cls: type[U]) -> OptionalResult[U]: ...

    @typing.overload
    def if_instance(
        self, cls: type | tuple[type, ...], action: Callable[[T], object]
    ) -> None: ...

    def if_instance(
        self,
        cls: typing.Any,
        action: Callable[[T], object] | None = None,
    ) -> OptionalResult[typing.Any] | None:
        """Narrow to ``cls``, or run ``action(value)`` when the value is an instance.

        Without ``action`` this returns a container of the value when it is
        an instance of ``cls`` and the empty container otherwise. With
        ``action`` it is side-effect only and returns None.
        """
        if action is None:
            if not self.is_instance(cls):
                return _EMPTY
            return OptionalResult.of_absent(self.value)
        _require_callable(action, "action")
        if self.is_instance(cls):
            action(self.value)
        return None

    def if_instance_run(
        self, cls: type | tuple[type, ...], action: Callable[[], object]
    ) -> None:
        """Run the zero-argument ``action`` when the value is an instance of ``cls``."""
        _require_callable(action, "action")
        if self.is_instance(cls):
            action()

    def if_not_instance(self, cls: type | tuple[type, ...]) -> OptionalResult[T]:
        """Keep the value only when it is present and *not* an instance of ``cls``."""
        _require_type_descriptor(cls)
        if self.value is None or isinstance(self.value, cls):
            return _EMPTY
        return OptionalResult.of_absent(self.value)

    # --- Presence combinators ---------------------------------------------

    def if_present(self, action: Callable[[T], object]) -> None:
        _require_callable(action, "action")
        if self.value is not None:
            action(self.value)

    def if_empty(self, action: Callable[[], object]) -> None:
        """Run the zero-argument ``action`` when the container is empty."""
        _require_callable(action, "action")
        if self.value is None:
            action()

    def if_empty_or_else(
        self,
        present_action: Callable[[T], object],
        else_action: Callable[[], object],
    ) -> None:
        """Run ``present_action(value)`` when present, else ``else_action()``."""
        _require_callable(present_action, "present_action")
        _require_callable(else_action, "else_action")
        if self.value is not None:
            present_action(self.value)
            return
        else_action()

    def if_present_or_else[R](
        self,
        mapper: Callable[[T], R],
        or_else: Callable[[], R],
    ) -> R:
        """Fold presence into a single result.

        Args:
            mapper: Called with the value when present.
            or_else: Zero-argument supplier called when empty.

        Returns:
            Whatever the branch that ran produced. Exactly one branch runs.
        """
        _require_callable(mapper, "mapper")
        _require_callable(or_else, "or_else")
        if self.value is None:
            return or_else()
        return mapper(self.value)

    def if_present_or_else_get[R](
        self,
        supplier: Callable[[], R],
        or_else: Callable[[], R],
    ) -> R:
        """Like :meth:`if_present_or_else`, with a value-independent present branch."""
        _require_callable(supplier, "supplier")
        _require_callable(or_else, "or_else")
        return supplier() if self.value is not None else or_else()

    def filter(self, predicate: Callable[[T], bool]) -> OptionalResult[T]:
        """Return the receiver itself when its value passes ``predicate``.

        Empty stays empty; a present value failing the predicate becomes
        the empty singleton.
        """
        _require_callable(predicate, "predicate")
        if self.value is None:
            return self
        return self if predicate(self.value) else _EMPTY

    # --- Transformation ---------------------------------------------------

    def map[U](self, mapper: Callable[[T], U | None]) -> OptionalResult[U]:
        """Transform a present value; a ``None`` result collapses to empty."""
        _require_callable(mapper, "mapper")
        if self.value is None:
            return _EMPTY
        return OptionalResult.of_absent(mapper(self.value))

    def map_to[U](self, mapper: Callable[[T | None], U]) -> U:
        """Unwrap and transform without a presence check.

        ``mapper`` receives ``None`` for an empty container; whatever it
        raises on that input propagates to the caller.
        """
        _require_callable(mapper, "mapper")
        return mapper(self.value)

    def flat_map[U: Iterable[typing.Any]](
        self, mapper: Callable[[T], OptionalResult[U]]
    ) -> OptionalResult[U]:
        """Chain into a container-producing function.

        ``mapper`` must return an :class:`OptionalResult`; returning ``None``
        is a contract violation, not an empty result.
        """
        _require_callable(mapper, "mapper")
        if self.value is None:
            return _EMPTY
        result = mapper(self.value)
        if not isinstance(result, OptionalResult):
            raise ContractError(
                f"flat_map: mapper must return an OptionalResult, got {type(result).__name__}",
                hint="Return OptionalResult.empty() for a missing result.",
            )
        if dev_validate_enabled() and result.value is not None:
            _require(
                condition=isinstance(result.value, Iterable),
                message=f"mapper result must wrap an iterable, got {type(result.value).__name__}",
                field_name="flat_map",
            )
        return result

    def or_else(self, default: T) -> T:
        return self.value if self.value is not None else default

    def or_else_get(self, supplier: Callable[[], T]) -> T:
        _require_callable(supplier, "supplier")
        return self.value if self.value is not None else supplier()

    def or_else_throw(
        self, exception_supplier: Callable[[], BaseException] | None = None
    ) -> T:
        """Return the value, or raise the exception built by ``exception_supplier``.

        Without a supplier an :class:`EmptyValueError` is raised.
        """
        if self.value is not None:
            return self.value
        if exception_supplier is None:
            raise EmptyValueError("or_else_throw called on an empty OptionalResult")
        _require_callable(exception_supplier, "exception_supplier")
        raise _build_exception(exception_supplier)

    # --- Deferred error handling ------------------------------------------

    def run_fallible[U](self, function: Callable[[T], U]) -> OptionalResult[U]:
        """Run ``function(value)`` and record how it went.

        - Empty: returns the empty container (outcome ``UNSET``); ``function``
          is not called.
        - Success: a container of the result with outcome ``SUCCEEDED``. A
          ``None`` result collapses to empty.
        - ``Exception`` raised: a container of the *original* value with
          outcome ``FAILED`` and the exception captured. Nothing propagates
          until a terminal ``on_failure*`` call.

        ``BaseException`` subclasses outside ``Exception`` (``KeyboardInterrupt``,
        ``SystemExit``) are never captured.
        """
        _require_callable(function, "function")
        if self.value is None:
            return _EMPTY
        try:
            result = function(self.value)
        except Exception as exc:
            logger.debug(
                "Captured failure from %s: %s: %s",
                _callable_name(function),
                type(exc).__name__,
                exc,
            )
            return typing.cast(
                "OptionalResult[U]",
                OptionalResult(self.value, Outcome.FAILED, exc),
            )
        return _tracked(result, Outcome.SUCCEEDED)

    def on_success(self, action: Callable[[T], object]) -> OptionalResult[T]:
        """Run ``action(value)`` if the last fallible call succeeded.

        Empty or untracked containers yield the empty container. Otherwise
        the tracker state is preserved as is; a failed state is never cleared
        here.
        """
        _require_callable(action, "action")
        if self.value is None or self.outcome is Outcome.UNSET:
            return _EMPTY
        if self.outcome is Outcome.SUCCEEDED:
            action(self.value)
        return self

    def on_success_to[U](self, mapper: Callable[[T], U]) -> OptionalResult[U]:
        """Map the value of a succeeded container, keeping it ``SUCCEEDED``.

        A failed container passes through with its value and error untouched
        and ``mapper`` is not called. Empty or untracked yields empty.
        """
        _require_callable(mapper, "mapper")
        if self.value is None or self.outcome is Outcome.UNSET:
            return _EMPTY
        if self.outcome is Outcome.SUCCEEDED:
            return _tracked(mapper(self.value), Outcome.SUCCEEDED)
        return typing.cast("OptionalResult[U]", self)

    def on_failure(
        self,
        exception_supplier: Callable[[], BaseException],
        chain_cause: bool | None = None,
    ) -> OptionalResult[T]:
        """Raise a caller-built exception if the last fallible call failed.

        Args:
            exception_supplier: Zero-argument callable building the exception
                to raise.
            chain_cause: When true, the raised exception's ``__cause__`` is
                the captured error. ``None`` defers to
                ``Config.chain_cause_default``.

        Returns:
            The empty container when empty, else the receiver unchanged for
            ``UNSET`` and ``SUCCEEDED`` states.

        Raises:
            BaseException: The supplied exception, for a ``FAILED`` state.
        """
        _require_callable(exception_supplier, "exception_supplier")
        if self.value is None:
            return _EMPTY
        if self.outcome is not Outcome.FAILED:
            return self
        exc = _build_exception(exception_supplier)
        if chain_cause is None:
            chain_cause = get_config_or_default().chain_cause_default
        logger.debug(
            "Raising %s for captured %s (chained=%s)",
            type(exc).__name__,
            type(self.error).__name__,
            chain_cause,
        )
        if chain_cause:
            raise exc from self.error
        raise exc

    def on_failure_run_error(self) -> OptionalResult[T]:
        """Re-raise the captured error if the last fallible call failed.

        When the captured error has an explicit ``__cause__`` that cause is
        raised instead, unwrapping exactly one level. Non-failed states pass
        through like :meth:`on_failure`.
        """
        if self.value is None:
            return _EMPTY
        if self.outcome is not Outcome.FAILED:
            return self
        error = typing.cast("Exception", self.error)
        target = error.__cause__ if error.__cause__ is not None else error
        logger.debug("Re-raising captured %s", type(target).__name__)
        raise target


def _tracked[U](value: U | None, outcome: Outcome) -> OptionalResult[U]:
    return _EMPTY if value is None else OptionalResult(value, outcome)


def _build_exception(supplier: Callable[[], BaseException]) -> BaseException:
    exc = supplier()
    if isinstance(exc, type) and issubclass(exc, BaseException):
        # A bare exception class is accepted the way ``raise`` accepts one.
        exc = exc()
    if not isinstance(exc, BaseException):
        raise ContractError(
            f"exception_supplier: must return an exception, got {type(exc).__name__}"
        )
    return exc


_EMPTY: OptionalResult[typing.Any] = OptionalResult()
