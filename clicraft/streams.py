"""
clicraft output plumbing.

OutputStream pairs two rich consoles: one for regular output (help, handler
messages) and one for faults. Tests and embedding hosts inject their own
consoles, e.g. Console(file=io.StringIO()), instead of touching sys.stdout.
"""
from rich.console import Console

from .utils import Unset


class OutputStream:
    """
    Output/error stream used by the help and diagnostics renderers.

    print()/print_error() accept either a %-style format string followed by
    its arguments, or any rich renderable (Text, Table, Group, faults...).
    """

    def __init__(self, output=Unset, error=Unset, /):
        if not isinstance(output, Console | Unset):
            raise TypeError("output-stream 'output' must be a rich console")
        if not isinstance(error, Console | Unset):
            raise TypeError("output-stream 'error' must be a rich console")
        self._output = Console() if output is Unset else output
        self._error = Console(stderr=True) if error is Unset else error

    @property
    def output(self):
        return self._output

    @property
    def error(self):
        return self._error

    @classmethod
    def quiet(cls):
        """
        Return a stream that discards everything (rich quiet consoles).
        """
        return cls(Console(quiet=True), Console(quiet=True))

    @staticmethod
    def _format(message, args):
        if args:
            if not isinstance(message, str):
                raise TypeError("output-stream format must be a string when arguments are given")
            return message % args
        return message

    def print(self, message, /, *args):
        self._output.print(self._format(message, args), markup=False, highlight=False)

    def print_error(self, message, /, *args):
        self._error.print(self._format(message, args), markup=False, highlight=False)


__all__ = (
    "OutputStream",
)
