"""Decoded PITCH message records and the tagged union that carries one of them."""
from dataclasses import dataclass, asdict, fields
from enum import Enum


@dataclass(frozen=True)
class AuctionSummaryMsg:
    timestamp: int
    msg_type: str
    symbol: str
    auction_type: str
    price: int
    shares: int

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class AddOrderMsg:
    timestamp: int
    msg_type: str
    order_id: int
    side: str
    shares: int
    symbol: str
    price: int
    display: str
    part_id: str = ''  # only present on some feed variants

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class AuctionUpdateMsg:
    timestamp: int
    msg_type: str
    symbol: str
    auction_type: str
    reference_price: int
    buyshares: int
    sellshares: int
    indicative_price: int
    auction_only_price: int

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class OrderCancelMsg:
    timestamp: int
    msg_type: str
    order_id: int
    shares: int

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class OrderExecutedMsg:
    timestamp: int
    msg_type: str
    order_id: int
    shares: int
    exec_id: int

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class RetailPriceImproveMsg:
    timestamp: int
    msg_type: str
    symbol: str
    retail_price_improve: str

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class TradeBreakMsg:
    timestamp: int
    msg_type: str
    exec_id: int

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class TradeMsg:
    timestamp: int
    msg_type: str
    order_id: int
    side: str
    shares: int
    symbol: str  # 6 wide for 'P', 8 wide for 'r'
    price: int
    exec_id: int

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class TradingStatusMsg:
    timestamp: int
    msg_type: str
    symbol: str
    halt_status: str
    reg_sho_action: int
    reserved1: str
    reserved2: str

    def to_dict(self):
        return asdict(self)


class MessageKind(Enum):
    """PITCH message kinds, each with the type codes it is sent under."""
    AUCTION_SUMMARY = (AuctionSummaryMsg, frozenset('J'))
    ADD_ORDER = (AddOrderMsg, frozenset('Ad'))  # live / delayed
    AUCTION_UPDATE = (AuctionUpdateMsg, frozenset('I'))
    ORDER_CANCEL = (OrderCancelMsg, frozenset('X'))
    ORDER_EXECUTED = (OrderExecutedMsg, frozenset('E'))
    RETAIL_PRICE_IMPROVE = (RetailPriceImproveMsg, frozenset('R'))
    TRADE_BREAK = (TradeBreakMsg, frozenset('B'))
    TRADE = (TradeMsg, frozenset('Pr'))
    TRADING_STATUS = (TradingStatusMsg, frozenset('H'))

    def __init__(self, struct, codes):
        self.struct = struct
        self.codes = codes

    @classmethod
    def for_struct(cls, struct):
        for kind in cls:
            if kind.struct is struct:
                return kind
        raise TypeError(f"{struct!r} is not a PITCH message type")


@dataclass(frozen=True)
class PitchMessage:
    """Exactly one decoded message, tagged with its kind."""
    kind: MessageKind
    body: object

    def __post_init__(self):
        if not isinstance(self.body, self.kind.struct):
            raise ValueError(f"{self.kind.name} cannot carry {type(self.body).__name__}")
        if self.body.msg_type not in self.kind.codes:
            raise ValueError(f"{self.kind.name} cannot carry type code {self.body.msg_type!r}")

    @classmethod
    def wrap(cls, body):
        return cls(MessageKind.for_struct(type(body)), body)

    @property
    def msg_type(self):
        return self.body.msg_type

    @property
    def timestamp(self):
        return self.body.timestamp

    def narrow(self, variant):
        """
        Return the contained message if it is `variant` (a message class or a
        MessageKind), otherwise None.
        """
        kind = variant if isinstance(variant, MessageKind) else MessageKind.for_struct(variant)
        return self.body if kind is self.kind else None

    def to_dict(self):
        return self.body.to_dict()


def field_names(struct):
    return [f.name for f in fields(struct)]
