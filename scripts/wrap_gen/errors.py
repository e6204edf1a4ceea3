"""
Error types

Generation-time failures raised by the wrapper generator. Errors that only
surface when the generated MATLAB/MEX code runs (wrong argument count, no
matching overload) are written into the output instead and have no class
here.
"""


class WrapError(RuntimeError):
    """Base class for generation errors"""


class OverloadNameMismatch(WrapError):
    """An overload was added to a function group with a different leaf name"""

    def __init__(self, expected: str, actual: str):
        super().__init__(
            f'GlobalFunction.add_overload: tried to add overload with name '
            f'{actual} instead of expected {expected}')
        self.expected = expected
        self.actual = actual


class DuplicateWrapperName(WrapError):
    """A wrapper function name was registered twice in one generation pass"""

    def __init__(self, name: str, existing_id: int):
        super().__init__(
            f'wrapper function {name} already registered with id {existing_id}')
        self.name = name
        self.existing_id = existing_id


class TypeAttributesMissing(WrapError):
    """A class type was used without an entry in the type attributes table"""

    def __init__(self, key: str):
        super().__init__(f'Class {key} not found in type attributes table')
        self.key = key


class OutputError(WrapError):
    """Output could not be written where the generator needs it"""
