## bfvm — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘


class BfError(Exception):
    def __init__(self, message: str = "", *, filename=None):
        """Base class for all errors raised while compiling or running a program."""
        super().__init__(message)
        self.filename: str = filename

class BfParseError(BfError):
    def __init__(self, message, *, filename=None, line=None, column=None, token=None):
        super().__init__(message, filename=filename)
        self.line = line
        self.column = column
        self.token = token

class BfIncompleteParse(BfParseError):
    """Raised when the source ends while one or more loops are still open."""
    def __init__(self, message, *, filename=None, line=None, column=None, token=None, unclosed=1):
        super().__init__(message, filename=filename, line=line, column=column, token=token)
        self.unclosed = unclosed

class BfValueError(BfError, ValueError):
    pass


class BfTapeError(BfError, IndexError):
    """Cursor moved at or past the end of the tape."""
    def __init__(self, message: str = "", *, tape_size=None, overflow=None):
        super().__init__(message)
        self.tape_size = tape_size
        self.overflow = overflow


class BfInputError(BfError, EOFError):
    pass
