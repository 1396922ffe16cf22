import argparse
import csv
import logging
import sys
from dataclasses import dataclass, field

from pitch_messages import PitchMessage, MessageKind, field_names
from pitch_parsers import (
    add_order_message,
    auction_summary_message,
    auction_update_message,
    order_cancel_message,
    order_executed_message,
    retail_price_improve_message,
    trade_break_message,
    trade_message,
    trading_status_message,
)
from raw import open_pitch_capture
from utils import (
    ensure_ascii_record,
    validate_message_length,
    PitchDecodeError,
    UnknownMessageType,
)

logger = logging.getLogger(__name__)

# Type code sits directly after the 8 digit timestamp.
TYPE_OFFSET = 8

MESSAGE_PARSERS = {
    'A': add_order_message,
    'd': add_order_message,
    'J': auction_summary_message,
    'I': auction_update_message,
    'X': order_cancel_message,
    'E': order_executed_message,
    'R': retail_price_improve_message,
    'B': trade_break_message,
    'P': trade_message,
    'r': trade_message,
    'H': trading_status_message,
}

DEFAULT_MESSAGE_LIMIT = None


def _csv_headers():
    headers = ['msg_type', 'timestamp']
    for kind in MessageKind:
        for name in field_names(kind.struct):
            if name not in headers:
                headers.append(name)
    return headers


CSV_HEADERS = _csv_headers()


@dataclass
class DecodeSummary:
    lines_read: int = 0
    messages_decoded: int = 0
    errors: int = 0
    error_counts: dict = field(default_factory=dict)

    def record_error(self, error):
        self.errors += 1
        name = type(error).__name__
        self.error_counts[name] = self.error_counts.get(name, 0) + 1


def parse_pitch_message(record):
    """
    Decode one PITCH record into a PitchMessage.

    Raises IncompleteMessage, MalformedField or UnknownMessageType; nothing is
    returned for a record that fails.
    """
    record = ensure_ascii_record(record)
    validate_message_length(record, 0, TYPE_OFFSET + 1, 'msg_type')

    msg_type = record[TYPE_OFFSET]
    parser = MESSAGE_PARSERS.get(msg_type)
    if parser is None:
        raise UnknownMessageType(msg_type)

    message = PitchMessage.wrap(parser(record))
    logger.debug("Parsed %s message: %s", msg_type, message.body)
    return message


def _decode_line(line_no, line, skip_errors, summary):
    record = line.rstrip('\r\n')
    if not record:
        logger.debug("Skipping blank line %d", line_no)
        return None

    try:
        message = parse_pitch_message(record)
    except PitchDecodeError as e:
        if summary is not None:
            summary.record_error(e)
        if not skip_errors:
            raise
        logger.warning("Skipping line %d: %s", line_no, e)
        return None

    if summary is not None:
        summary.messages_decoded += 1
    return message


def iter_pitch_messages(lines, skip_errors=True, summary=None):
    """Yield a PitchMessage for each record in `lines`; empty lines are ignored."""
    for line_no, line in enumerate(lines, start=1):
        if summary is not None:
            summary.lines_read += 1
        message = _decode_line(line_no, line, skip_errors, summary)
        if message is not None:
            yield message


def decode_pitch_file(file_path, output_csv, message_limit=DEFAULT_MESSAGE_LIMIT, skip_errors=True):
    """Decode a PITCH capture file and write every decoded field to a CSV."""
    summary = DecodeSummary()

    with open_pitch_capture(file_path) as lines, open(output_csv, 'w', newline='') as csv_file:
        csv_writer = csv.DictWriter(csv_file, fieldnames=CSV_HEADERS, restval='')
        csv_writer.writeheader()

        messages = iter_pitch_messages(lines, skip_errors, summary)
        # Limit is checked before the next record is decoded.
        while message_limit is None or summary.messages_decoded < message_limit:
            message = next(messages, None)
            if message is None:
                break
            csv_writer.writerow(message.to_dict())
        else:
            logger.info("Reached message limit of %d. Stopping processing.", message_limit)

    logger.info(
        "Decoding complete. Output saved to %s. Read %d lines, decoded %d messages, %d errors.",
        output_csv, summary.lines_read, summary.messages_decoded, summary.errors,
    )
    return summary


def main(argv=None):
    parser = argparse.ArgumentParser(description="Decode a BATS PITCH capture file to CSV.")
    parser.add_argument('input', help="PITCH capture, plain text or .zst")
    parser.add_argument('output', help="CSV file to write")
    parser.add_argument('--limit', type=int, default=DEFAULT_MESSAGE_LIMIT,
                        help="stop after this many decoded messages")
    parser.add_argument('--strict', action='store_true',
                        help="stop at the first record that fails to decode")
    parser.add_argument('--log-level', type=str.upper, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format='[%(levelname)s] %(message)s')

    try:
        decode_pitch_file(args.input, args.output, args.limit, skip_errors=not args.strict)
    except PitchDecodeError as e:
        logger.error("Decoding failed: %s", e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
