"""
Export Service

Serializes the message log to the CSV layout used by the admin download.
"""

from typing import Iterable, Optional

from studiobot.models.message import Message

CSV_HEADER = "id,conv_id,role,content,ip,ua,created_at"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def quote_field(value: Optional[str]) -> str:
    """
    Render a free-text field as a quoted CSV cell.

    Carriage returns and line feeds become spaces and embedded double quotes
    are doubled. No other character is changed.
    """
    text = (value or "").replace("\r", " ").replace("\n", " ")
    return '"' + text.replace('"', '""') + '"'


def format_row(message: Message) -> str:
    created_at = message.created_at.strftime(TIMESTAMP_FORMAT) if message.created_at else ""
    return ",".join([
        str(message.id),
        message.conv_id,
        message.role,
        quote_field(message.content),
        quote_field(message.ip),
        quote_field(message.ua),
        created_at,
    ])


def messages_to_csv(messages: Iterable[Message]) -> str:
    """Build the complete CSV document, header first, one line per message."""
    lines = [CSV_HEADER]
    lines.extend(format_row(message) for message in messages)
    return "\n".join(lines) + "\n"
