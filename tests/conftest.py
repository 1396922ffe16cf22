import pytest


def rec(*parts):
    return ''.join(parts)


# One well-formed record per message kind, built field by field in wire order.
SAMPLE_RECORDS = {
    'J': rec('28800000', 'J', 'AAPL    ', 'O', '0001500000', '0000012345'),
    'A': rec('28800011', 'A', '0000000000A1', 'B', '000100', 'AAPL  ', '0001234500', 'Y'),
    'd': rec('28800012', 'd', '0000000000A2', 'S', '000300', 'MSFT  ', '0000456700', 'N'),
    'I': rec('29000000', 'I', 'MSFT    ', 'C', '0000250000', '0000001000', '0000002000',
             '0000251000', '0000252000'),
    'X': '00034500X0000000000A1000100',
    'E': rec('30000000', 'E', '0000000000A1', '000050', '0000000000B2'),
    'R': rec('31000000', 'R', 'IBM     ', 'B'),
    'B': '00050000B0000000000B2',
    'P': rec('32000000', 'P', '0000000000A1', 'S', '000200', 'GOOG  ', '0009876500', '0000000000B2'),
    'r': rec('32000000', 'r', '0000000000A1', 'S', '000200', 'GOOG    ', '0009876500', '0000000000B2'),
    'H': rec('33000000', 'H', 'TSLA    ', 'H', '1', 'X', 'Y'),
}


@pytest.fixture
def records():
    return dict(SAMPLE_RECORDS)
