"""
clicraft arguments: the token cursor and positional-count specifications.

Scope
- Arguments: an injectable iterator over raw command-line tokens. The dispatcher
  and every parser level share one cursor, so tokens left unread by a parent level
  are exactly the tokens its subcommand sees.
- ArgumentSpecification: a declarative constraint on how many positional
  arguments an executable command accepts.

Specifications
- zero()                      → exactly no arguments
- minimum(n)                  → at least n
- maximum(n)                  → at most n
- exact(n)                    → exactly n
- end_exclusive(min, max)     → min <= count < max   (requires max > min)
- end_inclusive(min, max)     → min <= count <= max  (requires max >= min)

Range bounds are checked when an ArgumentSpecification is built (InvalidRangeError),
never deferred to validation time.
"""
import shlex
import sys
from collections.abc import Iterable
from enum import Enum

from .faults import (
    Diagnostics,
    ArgumentsNotEqualToZero,
    ArgumentsLessThanMinimum,
    ArgumentsGreaterThanMaximum,
    ArgumentsNotMatchingExpected,
    ArgumentsNotInEndExclusiveRange,
    ArgumentsNotInEndInclusiveRange,
    InvalidRange,
)
from .utils import Unset, pluralize


class Arguments:
    """
    Cursor over raw tokens (program name already removed).

    Iterating consumes tokens; breaking out of a loop leaves the rest in place for
    the next reader.
    """

    def __init__(self, tokens=(), /):
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("arguments must be an iterable of strings")
        self._tokens = list(tokens)
        if not all(isinstance(token, str) for token in self._tokens):
            raise TypeError("arguments must be an iterable of strings")
        self._index = 0

    @classmethod
    def from_process(cls):
        """
        Build a cursor over the process arguments, skipping the program name.
        """
        return cls(sys.argv[1:])

    @classmethod
    def from_prompt(cls, prompt=Unset, /):
        """
        Normalize a prompt into a cursor.

        - Unset: process arguments (sys.argv[1:]).
        - str: shell-like string split with shlex.split.
        - Iterable[str]: already tokenized; items are kept verbatim (empty and
          padded tokens included).
        """
        if prompt is Unset:
            return cls.from_process()
        if isinstance(prompt, Arguments):
            return prompt
        if isinstance(prompt, str):
            return cls(shlex.split(prompt))
        if isinstance(prompt, Iterable):
            tokens = list(prompt)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("prompt must be a string or an iterable of strings")
            return cls(tokens)
        raise TypeError("prompt must be a string or an iterable of strings")

    def next(self):
        """
        Return the next token, or None when the input is exhausted.
        """
        if self._index >= len(self._tokens):
            return None
        token = self._tokens[self._index]
        self._index += 1
        return token

    def skip_first(self):
        self.next()
        return self

    def remaining(self):
        return self._tokens[self._index:]

    def __iter__(self):
        return self

    def __next__(self):
        if (token := self.next()) is None:
            raise StopIteration
        return token

    def __len__(self):
        return len(self._tokens) - self._index

    def __repr__(self):
        return f"Arguments({self.remaining()!r})"


class Arity(Enum):
    ZERO = "zero"
    MINIMUM = "minimum"
    MAXIMUM = "maximum"
    EXACT = "exact"
    END_EXCLUSIVE = "end-exclusive"
    END_INCLUSIVE = "end-inclusive"


def _count(value, label):
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"argument-specification {label!r} must be an integer")
    if value < 0:
        raise ValueError(f"argument-specification {label!r} must be a non-negative integer")
    return value


class ArgumentSpecification:
    """
    Positional-argument count constraint (immutable).

    Usually built through the classmethods; validate(count) raises the argument error
    matching the variant (recorded in `diagnostics` when one is given).
    """
    __slots__ = ("_arity", "_minimum", "_maximum")

    def __init__(self, arity, minimum=0, maximum=0, /, *, diagnostics=Unset):
        """
        Build a specification directly; the classmethods are the usual spelling.

        Ranges with misordered bounds fail with InvalidRangeError (recorded in
        `diagnostics`); bounds that the arity does not use must be left at their
        implied value (ValueError otherwise).
        """
        if not isinstance(arity, Arity):
            raise TypeError("argument-specification arity must be an arity")
        minimum = _count(minimum, "minimum")
        maximum = _count(maximum, "maximum")
        match arity:
            case Arity.END_EXCLUSIVE if maximum <= minimum:
                diagnostics = Diagnostics() if diagnostics is Unset else diagnostics
                raise diagnostics.report_and_fail(InvalidRange(minimum=minimum, maximum=maximum, inclusive=False))
            case Arity.END_INCLUSIVE if maximum < minimum:
                diagnostics = Diagnostics() if diagnostics is Unset else diagnostics
                raise diagnostics.report_and_fail(InvalidRange(minimum=minimum, maximum=maximum, inclusive=True))
            case Arity.ZERO if minimum or maximum:
                raise ValueError("zero argument-specification takes no bounds")
            case Arity.MINIMUM if maximum:
                raise ValueError("minimum argument-specification takes no 'maximum'")
            case Arity.MAXIMUM if minimum:
                raise ValueError("maximum argument-specification takes no 'minimum'")
            case Arity.EXACT if minimum != maximum:
                raise ValueError("exact argument-specification 'minimum' and 'maximum' must be equal")
        self._arity = arity
        self._minimum = minimum
        self._maximum = maximum

    @classmethod
    def zero(cls):
        return cls(Arity.ZERO)

    @classmethod
    def minimum(cls, count, /):
        return cls(Arity.MINIMUM, _count(count, "count"))

    @classmethod
    def maximum(cls, count, /):
        return cls(Arity.MAXIMUM, 0, _count(count, "count"))

    @classmethod
    def exact(cls, count, /):
        count = _count(count, "count")
        return cls(Arity.EXACT, count, count)

    @classmethod
    def end_exclusive(cls, minimum, maximum, /, *, diagnostics=Unset):
        return cls(Arity.END_EXCLUSIVE, minimum, maximum, diagnostics=diagnostics)

    @classmethod
    def end_inclusive(cls, minimum, maximum, /, *, diagnostics=Unset):
        return cls(Arity.END_INCLUSIVE, minimum, maximum, diagnostics=diagnostics)

    @property
    def arity(self):
        return self._arity

    @property
    def bounds(self):
        return self._minimum, self._maximum

    def validate(self, count, /, *, diagnostics=Unset):
        """
        Check `count` positional arguments against this specification.
        """
        count = _count(count, "count")
        diagnostics = Diagnostics() if diagnostics is Unset else diagnostics
        match self._arity:
            case Arity.ZERO if count != 0:
                raise diagnostics.report_and_fail(ArgumentsNotEqualToZero(actual=count))
            case Arity.MINIMUM if count < self._minimum:
                raise diagnostics.report_and_fail(ArgumentsLessThanMinimum(expected=self._minimum, actual=count))
            case Arity.MAXIMUM if count > self._maximum:
                raise diagnostics.report_and_fail(ArgumentsGreaterThanMaximum(expected=self._maximum, actual=count))
            case Arity.EXACT if count != self._minimum:
                raise diagnostics.report_and_fail(ArgumentsNotMatchingExpected(expected=self._minimum, actual=count))
            case Arity.END_EXCLUSIVE if not self._minimum <= count < self._maximum:
                raise diagnostics.report_and_fail(ArgumentsNotInEndExclusiveRange(
                    minimum=self._minimum,
                    maximum=self._maximum,
                    actual=count,
                ))
            case Arity.END_INCLUSIVE if not self._minimum <= count <= self._maximum:
                raise diagnostics.report_and_fail(ArgumentsNotInEndInclusiveRange(
                    minimum=self._minimum,
                    maximum=self._maximum,
                    actual=count,
                ))

    def describe(self):
        """
        Help phrase for this specification (e.g. "accepts exactly 2 arguments").
        """
        match self._arity:
            case Arity.ZERO:
                return "accepts zero arguments"
            case Arity.MINIMUM:
                return f"accepts a minimum of {pluralize("argument", self._minimum)}"
            case Arity.MAXIMUM:
                return f"accepts a maximum of {pluralize("argument", self._maximum)}"
            case Arity.EXACT:
                return f"accepts exactly {pluralize("argument", self._minimum)}"
            case Arity.END_EXCLUSIVE:
                return f"accepts at least {self._minimum} and fewer than {self._maximum} arguments"
            case Arity.END_INCLUSIVE:
                return f"accepts between {self._minimum} and {self._maximum} arguments"

    def __eq__(self, other):
        if not isinstance(other, ArgumentSpecification):
            return NotImplemented
        return (self._arity, self._minimum, self._maximum) == (other._arity, other._minimum, other._maximum)

    def __hash__(self):
        return hash((self._arity, self._minimum, self._maximum))

    def __repr__(self):
        match self._arity:
            case Arity.ZERO:
                return "ArgumentSpecification.zero()"
            case Arity.MINIMUM | Arity.EXACT:
                return f"ArgumentSpecification.{self._arity.name.lower()}({self._minimum})"
            case Arity.MAXIMUM:
                return f"ArgumentSpecification.maximum({self._maximum})"
            case _:
                return f"ArgumentSpecification.{self._arity.name.lower()}({self._minimum}, {self._maximum})"


__all__ = (
    "Arguments",
    "Arity",
    "ArgumentSpecification",
)
