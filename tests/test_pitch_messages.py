import dataclasses

import pytest

from pitch_messages import (
    MessageKind,
    PitchMessage,
    OrderCancelMsg,
    TradeBreakMsg,
    TradeMsg,
)


@pytest.fixture
def cancel():
    return OrderCancelMsg(timestamp=34500, msg_type='X', order_id=361, shares=100)


def test_wrap_derives_kind(cancel):
    message = PitchMessage.wrap(cancel)
    assert message.kind is MessageKind.ORDER_CANCEL
    assert message.msg_type == 'X'
    assert message.timestamp == 34500


def test_narrow_by_class_and_kind(cancel):
    message = PitchMessage.wrap(cancel)
    assert message.narrow(OrderCancelMsg) is cancel
    assert message.narrow(MessageKind.ORDER_CANCEL) is cancel


def test_narrow_to_other_variant_is_none(cancel):
    message = PitchMessage.wrap(cancel)
    assert message.narrow(TradeMsg) is None
    assert message.narrow(MessageKind.TRADE_BREAK) is None


def test_narrow_rejects_non_message_types(cancel):
    with pytest.raises(TypeError):
        PitchMessage.wrap(cancel).narrow(dict)


def test_tag_must_match_body(cancel):
    with pytest.raises(ValueError):
        PitchMessage(MessageKind.TRADE, cancel)


def test_tag_must_match_type_code():
    body = TradeBreakMsg(timestamp=1, msg_type='X', exec_id=2)
    with pytest.raises(ValueError):
        PitchMessage.wrap(body)


def test_trade_kind_accepts_both_codes():
    assert MessageKind.TRADE.codes == frozenset('Pr')
    assert MessageKind.ADD_ORDER.codes == frozenset('Ad')


def test_messages_are_immutable(cancel):
    with pytest.raises(dataclasses.FrozenInstanceError):
        cancel.shares = 1
    with pytest.raises(dataclasses.FrozenInstanceError):
        PitchMessage.wrap(cancel).body = None


def test_to_dict(cancel):
    assert PitchMessage.wrap(cancel).to_dict() == {
        'timestamp': 34500, 'msg_type': 'X', 'order_id': 361, 'shares': 100,
    }
