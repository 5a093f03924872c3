from __future__ import annotations

from enum import Enum

"""Delimited-text tokenizer for free-form CSV exports.

Single forward pass with one-character lookahead over the whole document.
Malformed quoting never raises: an unmatched quote simply keeps the parser in
the quoted state until end of input, where pending content is flushed.

Rules:
- a quote character toggles quoted state; ``""`` inside quotes is a literal quote
- delimiter / CR / LF inside quotes are literal content
- unquoted delimiter ends a field; unquoted CRLF, CR or LF ends a row
- fields are trimmed after unescaping
- rows without pending content (blank lines) are not emitted
"""

__all__ = [
    "DELIMITER",
    "QUOTE",
    "RawRow",
    "TokenizerState",
    "tokenize",
]

DELIMITER = ","
QUOTE = '"'

RawRow = list[str]


class TokenizerState(Enum):
    UNQUOTED = "unquoted"
    QUOTED = "quoted"


class _RowBuffer:
    """Accumulators for the row/field currently being built."""

    def __init__(self) -> None:
        self.row: RawRow = []
        self.field: list[str] = []

    @property
    def pending(self) -> bool:
        # 空白のみのフィールドも「内容あり」とみなす (trim 前判定)
        return bool(self.field) or bool(self.row)

    def end_field(self) -> None:
        self.row.append("".join(self.field).strip())
        self.field = []

    def end_row(self) -> RawRow:
        self.end_field()
        row = self.row
        self.row = []
        return row


def tokenize(text: str, delimiter: str = DELIMITER, quote: str = QUOTE) -> list[RawRow]:
    """Split delimited text into rows of trimmed fields.

    Args:
        text: Complete document content (already decoded)
        delimiter: Single field delimiter character
        quote: Single quote character

    Returns:
        Rows in document order. Rows may have different lengths.

    Examples:
        >>> tokenize('"a,b","c""d",e')
        [['a,b', 'c"d', 'e']]
        >>> tokenize('"line1\\nline2",x')
        [['line1\\nline2', 'x']]
    """
    if len(delimiter) != 1 or len(quote) != 1:
        raise ValueError("delimiter and quote must be single characters")

    rows: list[RawRow] = []
    buf = _RowBuffer()
    state = TokenizerState.UNQUOTED
    i = 0
    n = len(text)

    while i < n:
        char = text[i]
        next_char = text[i + 1] if i + 1 < n else ""

        if char == quote:
            if state is TokenizerState.QUOTED and next_char == quote:
                # escaped quote
                buf.field.append(quote)
                i += 2
                continue
            state = (
                TokenizerState.UNQUOTED if state is TokenizerState.QUOTED else TokenizerState.QUOTED
            )
        elif state is TokenizerState.QUOTED:
            buf.field.append(char)
        elif char == delimiter:
            buf.end_field()
        elif char in ("\r", "\n"):
            if buf.pending:
                rows.append(buf.end_row())
            # CRLF は 1 つの行終端として扱う
            if char == "\r" and next_char == "\n":
                i += 1
        else:
            buf.field.append(char)
        i += 1

    if buf.pending:
        rows.append(buf.end_row())
    return rows
