"""KFG error types with source location info."""


class KfgError(Exception):
    def __init__(self, message: str, line: int = 0, column: int = 0, length: int = 0, token=None):
        self.message = message
        self.line = line
        self.column = column
        self.length = length
        self.token = token
        super().__init__(f"{message} at {line}:{column}-{length}")


class ParseError(KfgError):
    pass


class NumberFormatError(ParseError):
    """A symbol where a number or bool was expected did not parse as one."""


class ConfigError(KfgError):
    pass
