#!/usr/bin/env python3
"""
decode_errors.py - Error taxonomy for XLong identifier decoding

Every failure is terminal and detected locally. The three kinds are
surfaced verbatim to the caller with a human-readable message:

    EmptyInput     input text is empty or all whitespace
    InvalidFormat  character outside the decimal/base-36 alphabet
    OutOfRange     value above 2^63 - 1, or base-36 overflow past 64 bits

All errors derive from ValueError so callers catching ValueError keep
working.
"""


class DecodeError(ValueError):
    """Base class for identifier decode failures."""
    kind = 'DecodeError'
    default_message = 'Failed to decode ID. Please check the input format.'

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return self.args[0]

    def to_dict(self) -> dict:
        return {'kind': self.kind, 'message': self.message}


class EmptyInputError(DecodeError):
    kind = 'EmptyInput'
    default_message = 'Please enter an ID to decode'


class InvalidFormatError(DecodeError):
    kind = 'InvalidFormat'
    default_message = ('Invalid ID format. Please enter a valid decimal '
                       'number or base-36 string')


class OutOfRangeError(DecodeError):
    kind = 'OutOfRange'
    default_message = ('ID value is out of valid 64-bit range (must be '
                       'between 0 and 9,223,372,036,854,775,807)')
