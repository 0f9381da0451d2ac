# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Remaining command line arguments."""

from __future__ import annotations

from optspec.errors import UserError

# ###############
# Public Interface
# ###############


class Args(list):
    """The positional arguments left over after interpretation.

    :meth:`extract` and :meth:`expect` check the number of arguments and
    raise :class:`UserError` with a caller supplied message otherwise.
    """

    def extract(self, count: int | range, message: str | None = None) -> str | list[str]:
        """Remove and return leading arguments.

        An integer *count* removes exactly that many arguments from the
        front (from the back if negative); a single argument is returned
        as a string. A range removes as many arguments as available, within
        the bounds of the range, and always returns a list.

        Raises:
            UserError: If there are not enough arguments.
        """
        if isinstance(count, range):
            if len(self) < count.start:
                self._fail(message)
            taken = min(len(self), count.stop - 1)
            result = self[:taken]
            del self[:taken]
            return result

        if abs(count) > len(self):
            self._fail(message)
        if count >= 0:
            result = self[:count]
            del self[:count]
        else:
            result = self[count:]
            del self[count:]
        return result[0] if abs(count) == 1 else result

    def expect(self, count: int | range, message: str | None = None) -> str | list[str]:
        """Return all arguments, checking that their number is *count*.

        A single expected argument is returned as a string.

        Raises:
            UserError: If the number of arguments does not match.
        """
        if len(self) not in (count if isinstance(count, range) else (count,)):
            self._fail(message)
        result = self[:]
        del self[:]
        return result[0] if count == 1 else result

    def _fail(self, message: str | None) -> None:
        raise UserError(message or "Illegal number of arguments")
