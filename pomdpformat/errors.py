class FormatError(ValueError):
    """
    A model or value-function file does not follow the text format.

    `lineno` is the 1-based line the problem was found on, or None
    when it is not tied to a single line (e.g. a missing header field).
    """
    def __init__(self, message, lineno=None):
        self.message = message
        self.lineno = lineno
        super().__init__(str(self))

    def __str__(self):
        if self.lineno is None:
            return self.message
        return f"line {self.lineno}: {self.message}"

class NumericParseError(FormatError):
    """A token that must be a number could not be converted."""
    def __init__(self, token, lineno=None, expected="number"):
        self.token = token
        super().__init__(f"expected {expected}, found {token!r}", lineno)
