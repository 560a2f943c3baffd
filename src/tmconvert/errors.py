from pathlib import Path
from typing import ClassVar


class ConversionError(Exception):
    exit_code: ClassVar[int]

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SourceUnavailable(ConversionError):
    pass


class SourceNotFound(SourceUnavailable):
    exit_code = 1

    def __init__(self, path: Path) -> None:
        super().__init__(f"Specified file '{path}' does not exist!")
        self.path = path


class SourceOpenFailure(SourceUnavailable):
    exit_code = 2

    def __init__(self, path: Path, reason: OSError) -> None:
        super().__init__(f"Failed to open file '{path}'! Reason: {reason}")
        self.path = path


class ReadFailure(ConversionError):
    exit_code = 3

    def __init__(self, path: Path, reason: Exception) -> None:
        super().__init__(f"Failed to read next line of '{path}'! Reason: {reason}")
        self.path = path


class MissingField(ConversionError):
    field: ClassVar[str]

    def __init__(self) -> None:
        super().__init__(f"No {self.field} was provided!")


class MissingAlphabet(MissingField):
    exit_code = 4
    field = "alphabet"


class MissingTape(MissingField):
    exit_code = 5
    field = "tape"


class SerializationFailure(ConversionError):
    exit_code = 6


class OutputOpenFailure(SerializationFailure):
    exit_code = 7

    def __init__(self, path: Path, reason: OSError) -> None:
        super().__init__(f"Failed to open '{path}' for output! Reason: {reason}")
        self.path = path


class WriteFailure(SerializationFailure):
    exit_code = 8

    def __init__(self, destination: Path | str, reason: Exception) -> None:
        super().__init__(f"Failed to save json to '{destination}'! Reason: {reason}")
        self.destination = destination


class ParseError(ConversionError):
    exit_code = 9

    def __init__(self, line: str, reason: str) -> None:
        super().__init__(f"Could not parse transition '{line}': {reason}")
        self.line = line
