import string

DIGITS = frozenset(string.digits)
BASE36_DIGITS = frozenset(string.digits + string.ascii_uppercase)


class PitchDecodeError(ValueError):
    """Base class for every failure raised while decoding a PITCH record."""


class IncompleteMessage(PitchDecodeError):
    def __init__(self, field, needed, available):
        self.field = field
        self.needed = needed
        self.available = available
        super().__init__(
            f"Insufficient characters for '{field}': needed {needed}, but only {available} available."
        )


class MalformedField(PitchDecodeError):
    def __init__(self, field, value, reason):
        self.field = field
        self.value = value
        super().__init__(f"Malformed '{field}' field {value!r}: {reason}")


class UnknownMessageType(PitchDecodeError):
    def __init__(self, code):
        self.code = code
        super().__init__(f"Unknown message type: {code!r}")


def ensure_ascii_record(record):
    """Return the record as text, rejecting anything that is not plain ASCII."""
    if isinstance(record, (bytes, bytearray)):
        try:
            record = record.decode('ascii')
        except UnicodeDecodeError as e:
            raise MalformedField('record', bytes(record), f"non-ASCII byte at offset {e.start}") from e
    elif not isinstance(record, str):
        raise TypeError(f"Unexpected type {type(record)} for a PITCH record.")

    if not record.isascii():
        raise MalformedField('record', record, "non-ASCII character")
    return record


def validate_message_length(record, offset, expected_length, field):
    remaining = len(record) - offset
    if remaining < expected_length:
        raise IncompleteMessage(field, expected_length, max(remaining, 0))


def take(record, offset, width, field='field'):
    validate_message_length(record, offset, width, field)
    return record[offset:offset + width], offset + width


def decimal(record, offset, width, bits=32, field='field'):
    """Unsigned base-10 field; every character must be an ASCII digit."""
    raw, offset = take(record, offset, width, field)
    if not raw or not DIGITS.issuperset(raw):
        raise MalformedField(field, raw, "expected ASCII digits")

    value = int(raw)
    if value >> bits:
        raise MalformedField(field, raw, f"overflows unsigned {bits}-bit integer")
    return value, offset


def base36(record, offset, width, bits=64, field='field'):
    """Unsigned base-36 identifier over 0-9 and uppercase A-Z."""
    raw, offset = take(record, offset, width, field)
    if not raw or not BASE36_DIGITS.issuperset(raw):
        raise MalformedField(field, raw, "expected base-36 characters [0-9A-Z]")

    value = int(raw, 36)
    if value >> bits:
        raise MalformedField(field, raw, f"overflows unsigned {bits}-bit integer")
    return value, offset


def char(record, offset, allowed=None, field='field'):
    value, offset = take(record, offset, 1, field)
    if allowed is not None and value not in allowed:
        raise MalformedField(field, value, f"expected one of {', '.join(sorted(allowed))}")
    return value, offset


def optional_trailing(record, offset, width, field='field'):
    """Empty string when the record ends here, otherwise exactly `width` characters."""
    if offset >= len(record):
        return '', offset
    return take(record, offset, width, field)
