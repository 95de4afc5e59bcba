"""Parse errors for the turtle instruction language."""


class ParseError(ValueError):
    """Base class for errors raised while parsing a program."""

    message = "Parse error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        self.line_no: int | None = None
        self.line: str | None = None
        super().__init__(self.message)

    def locate(self, line_no: int, line: str) -> "ParseError":
        """Attach the 1-based source line the error came from."""
        self.line_no = line_no
        self.line = line
        return self

    def __str__(self):
        if self.line_no is None:
            return self.message
        return f"line {self.line_no}: {self.message}"


class MissingOperation(ParseError):
    message = "Missing operation"


class MissingParameter(ParseError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Expected argument for parameter `{name}`")


class UnknownOperation(ParseError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Unknown operation `{token}`")


class InvalidCoordinate(ParseError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid coordinate value `{token}`")


class InvalidDirection(ParseError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid direction `{token}`")


class InvalidNumber(ParseError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid number value `{token}`")


class InvalidPenState(ParseError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid pen state `{token}` (expected `down` or `up`)")


class TooManyParameters(ParseError):
    message = "Too many parameters"
