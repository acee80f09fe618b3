"""Tagged results returned by the admin state owner.

A call either succeeds with a value (``Ok``) or fails with one of the
errors from :mod:`mehendi.errors` (``Err``). Callers branch on ``ok`` or
call ``unwrap()`` to get the value or re-raise the carried error.
"""
from dataclasses import dataclass
from typing import Any, Union

from mehendi.errors import MehendiError


@dataclass(frozen=True)
class Ok:
    value: Any = None

    ok = True

    def unwrap(self):
        return self.value


@dataclass(frozen=True)
class Err:
    error: MehendiError

    ok = False

    def unwrap(self):
        raise self.error


Result = Union[Ok, Err]
