from collections import namedtuple

from pitch_messages import (
    AuctionSummaryMsg,
    AddOrderMsg,
    AuctionUpdateMsg,
    OrderCancelMsg,
    OrderExecutedMsg,
    RetailPriceImproveMsg,
    TradeBreakMsg,
    TradeMsg,
    TradingStatusMsg,
    MessageKind,
)
from utils import (
    ensure_ascii_record,
    take,
    decimal,
    base36,
    char,
    optional_trailing,
    MalformedField,
)

# kind: 'dec' unsigned decimal, 'b36' base-36 id, 'chr' single character,
# 'str' fixed text, 'opt' optional trailing text.
# width is either an int or a callable of the values decoded so far.
Field = namedtuple('Field', ['name', 'width', 'kind', 'allowed', 'bits'], defaults=(None, None))


def _msg_type(struct):
    return Field('msg_type', 1, 'chr', MessageKind.for_struct(struct).codes)


def _trade_symbol_width(values):
    return 6 if values['msg_type'] == 'P' else 8


TIMESTAMP = Field('timestamp', 8, 'dec', bits=32)

LAYOUTS = {
    AuctionSummaryMsg: (
        TIMESTAMP,
        _msg_type(AuctionSummaryMsg),
        Field('symbol', 8, 'str'),
        Field('auction_type', 1, 'chr'),
        Field('price', 10, 'dec', bits=64),
        Field('shares', 10, 'dec', bits=32),
    ),
    AddOrderMsg: (
        TIMESTAMP,
        _msg_type(AddOrderMsg),
        Field('order_id', 12, 'b36', bits=64),
        Field('side', 1, 'chr'),
        Field('shares', 6, 'dec', bits=32),
        Field('symbol', 6, 'str'),
        Field('price', 10, 'dec', bits=64),
        Field('display', 1, 'chr'),
        Field('part_id', 4, 'opt'),
    ),
    AuctionUpdateMsg: (
        TIMESTAMP,
        _msg_type(AuctionUpdateMsg),
        Field('symbol', 8, 'str'),
        Field('auction_type', 1, 'chr', frozenset('OCHI')),
        Field('reference_price', 10, 'dec', bits=64),
        Field('buyshares', 10, 'dec', bits=32),
        Field('sellshares', 10, 'dec', bits=32),
        Field('indicative_price', 10, 'dec', bits=64),
        Field('auction_only_price', 10, 'dec', bits=64),
    ),
    OrderCancelMsg: (
        TIMESTAMP,
        _msg_type(OrderCancelMsg),
        Field('order_id', 12, 'b36', bits=64),
        Field('shares', 6, 'dec', bits=32),
    ),
    OrderExecutedMsg: (
        TIMESTAMP,
        _msg_type(OrderExecutedMsg),
        Field('order_id', 12, 'b36', bits=64),
        Field('shares', 6, 'dec', bits=32),
        Field('exec_id', 12, 'b36', bits=64),
    ),
    RetailPriceImproveMsg: (
        TIMESTAMP,
        _msg_type(RetailPriceImproveMsg),
        Field('symbol', 8, 'str'),
        Field('retail_price_improve', 1, 'chr', frozenset('BASN')),
    ),
    TradeBreakMsg: (
        TIMESTAMP,
        _msg_type(TradeBreakMsg),
        Field('exec_id', 12, 'b36', bits=64),
    ),
    TradeMsg: (
        TIMESTAMP,
        _msg_type(TradeMsg),
        Field('order_id', 12, 'b36', bits=64),
        Field('side', 1, 'chr', frozenset('BS')),
        Field('shares', 6, 'dec', bits=32),
        Field('symbol', _trade_symbol_width, 'str'),
        Field('price', 10, 'dec', bits=64),
        Field('exec_id', 12, 'b36', bits=64),
    ),
    TradingStatusMsg: (
        TIMESTAMP,
        _msg_type(TradingStatusMsg),
        Field('symbol', 8, 'str'),
        Field('halt_status', 1, 'chr', frozenset('HQT')),
        Field('reg_sho_action', 1, 'dec', bits=8),
        Field('reserved1', 1, 'chr'),
        Field('reserved2', 1, 'chr'),
    ),
}


def _decode_field(record, offset, field, width):
    if field.kind == 'dec':
        return decimal(record, offset, width, field.bits, field.name)
    elif field.kind == 'b36':
        return base36(record, offset, width, field.bits, field.name)
    elif field.kind == 'chr':
        return char(record, offset, field.allowed, field.name)
    elif field.kind == 'str':
        return take(record, offset, width, field.name)
    elif field.kind == 'opt':
        return optional_trailing(record, offset, width, field.name)
    raise ValueError(f"Unknown field kind {field.kind!r} for '{field.name}'")


def parse_layout(record, struct):
    """
    Decode `record` against the layout registered for `struct`.

    Fields are consumed strictly in wire order and the first failing field
    raises; characters left over after the last field are rejected.
    """
    record = ensure_ascii_record(record)
    values = {}
    offset = 0

    for field in LAYOUTS[struct]:
        width = field.width(values) if callable(field.width) else field.width
        values[field.name], offset = _decode_field(record, offset, field, width)

    if offset != len(record):
        extra = record[offset:]
        raise MalformedField('record', extra, f"{len(extra)} unexpected trailing characters")

    return struct(**values)


def _record_length(struct, code=None, include_optional=False):
    """Exact record length for a message kind (optional trailing fields excluded by default)."""
    if code is None:
        code = min(MessageKind.for_struct(struct).codes)
    values = {'msg_type': code}
    length = 0
    for field in LAYOUTS[struct]:
        if field.kind == 'opt' and not include_optional:
            continue
        length += field.width(values) if callable(field.width) else field.width
    return length


def auction_summary_message(record):
    return parse_layout(record, AuctionSummaryMsg)

def add_order_message(record):
    """
    Parse the 'A' / 'd' (Add Order) message. The 4 character partition id is
    only sent by some feeds; it decodes to '' when absent.
    """
    return parse_layout(record, AddOrderMsg)

def auction_update_message(record):
    return parse_layout(record, AuctionUpdateMsg)

def order_cancel_message(record):
    return parse_layout(record, OrderCancelMsg)

def order_executed_message(record):
    return parse_layout(record, OrderExecutedMsg)

def retail_price_improve_message(record):
    return parse_layout(record, RetailPriceImproveMsg)

def trade_break_message(record):
    return parse_layout(record, TradeBreakMsg)

def trade_message(record):
    """
    Parse the 'P' / 'r' (Trade) message. The symbol is 6 characters wide for
    'P' and 8 for 'r', which shifts price and exec_id.
    """
    return parse_layout(record, TradeMsg)

def trading_status_message(record):
    return parse_layout(record, TradingStatusMsg)
