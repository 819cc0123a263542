"""
Line Item Codec

Packs an ordered list of line items into the single text column stored on
each order, and reads it back.

Format: ``flavor::dozens`` entries joined by ``||``. Text without any ``::``
predates the format and is read as a single item of one dozen.
"""

from typing import Iterable, List

from constants import LineItemFormat
from domain.value_objects.line_item import LineItem


def clean_flavor(flavor: str) -> str:
    """
    The flavor text exactly as it will be stored.

    Separator sequences are removed until none is left, since removing one
    can join the halves of another.
    """
    cleaned = flavor
    while True:
        stripped = (
            cleaned
            .replace(LineItemFormat.VALUE_SEPARATOR, '')
            .replace(LineItemFormat.ENTRY_SEPARATOR, '')
        )
        if stripped == cleaned:
            return cleaned.strip()
        cleaned = stripped


def is_recordable(item: LineItem) -> bool:
    """True when the item keeps a non-blank flavor once cleaned and has a positive quantity."""
    return item.dozens > 0 and bool(clean_flavor(item.flavor))


def encode(items: Iterable[LineItem]) -> str:
    """
    Encode line items for storage.

    Items that are not recordable are dropped. Separator sequences inside a
    flavor are removed.
    """
    return LineItemFormat.ENTRY_SEPARATOR.join(
        f"{clean_flavor(item.flavor)}{LineItemFormat.VALUE_SEPARATOR}{item.dozens}"
        for item in items
        if is_recordable(item)
    )


def _parse_dozens(raw: str) -> int | None:
    raw = raw.strip()
    if raw.startswith('+'):
        raw = raw[1:]
    if not (raw.isascii() and raw.isdigit()):
        return None
    return int(raw)


def decode(text: str) -> List[LineItem]:
    """
    Decode a stored detail column. Never raises.

    Each entry is split at its last ``::``, so a flavor ending in ``:``
    reads back intact. Entries holding more than one ``::`` and malformed
    entries are skipped, the rest are returned in order.
    """
    if not text or not text.strip():
        return []

    if LineItemFormat.VALUE_SEPARATOR not in text:
        flavor = text.strip()
        return [LineItem(flavor=flavor, dozens=1)] if flavor else []

    items = []
    for part in text.split(LineItemFormat.ENTRY_SEPARATOR):
        flavor, separator, raw_dozens = part.rpartition(LineItemFormat.VALUE_SEPARATOR)
        if not separator or LineItemFormat.VALUE_SEPARATOR in flavor:
            continue
        flavor = flavor.strip()
        dozens = _parse_dozens(raw_dozens)
        if not flavor or dozens is None or dozens <= 0:
            continue
        items.append(LineItem(flavor=flavor, dozens=dozens))
    return items


def to_display_text(text: str) -> str:
    """Render a detail column as "flavor (dozens) · ..."; raw text if nothing decodes."""
    items = decode(text)
    if not items:
        return text
    return LineItemFormat.DISPLAY_SEPARATOR.join(str(item) for item in items)


def total_dozens(items: Iterable[LineItem]) -> int:
    """Sum of the dozens of every item."""
    return sum(item.dozens for item in items)
