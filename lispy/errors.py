

class LispyError(Exception):
    """ Base class for all Lispy host errors"""
    pass

class LispySyntaxError(LispyError):
    """ Raised when source text or a parse tree is malformed"""

    def __init__(self, message: str, filename: str = "<stdin>", line: int = 1, column: int = 1):
        super().__init__(f"{filename}:{line}:{column}: error: {message}")
        self.message = message
        self.filename = filename
        self.line = line
        self.column = column

class LispyTypeError(LispyError):
    """ Raised when a structural operation is applied to the wrong kind of value"""

class LispyIndexError(LispyError):
    """ Raised when a child index is out of bounds"""

class LispyOwnershipError(LispyError):
    """ Raised when a value is used after destroy, destroyed twice or given two parents"""

class LispyConfigError(LispyError):
    """ Raised when a configuration variable holds an invalid value"""
