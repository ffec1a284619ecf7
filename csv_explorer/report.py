"""Plain-text rendering of sniffed metadata, one item per line."""

_ESCAPED = {"\t": "\\t", "\r": "\\r", "\n": "\\n", " ": "' '"}


def display_char(char):
    if char is None:
        return "none"
    if char in _ESCAPED:
        return _ESCAPED[char]
    if not char.isprintable():
        return repr(char)
    return char


def render_dialect(dialect):
    header = dialect.header
    has_header = str(header.has_header_row).lower()
    if not header.confident:
        has_header += " (low confidence)"

    terminator = "CRLF" if dialect.terminator.is_crlf else display_char(dialect.terminator.char)

    lines = [
        "Dialect:",
        f"\tDelimiter: {display_char(dialect.delimiter)}",
        f"\tHas header row?: {has_header}",
        f"\tNumber of preamble rows: {header.num_preamble_rows}",
        f"\tQuote character: {display_char(dialect.quote.char)}",
        f"\tDouble-quote escapes?: {str(dialect.doublequote_escapes).lower()}",
        f"\tEscape character: {display_char(dialect.escape.char)}",
        f"\tComment character: {display_char(dialect.comment.char)}",
        f"\tFlexible: {str(dialect.flexible).lower()}",
        f"\tTerminator: {terminator}",
    ]
    return "\n".join(lines)


def render_report(metadata):
    lines = [
        "Metadata",
        "========",
        render_dialect(metadata.dialect),
        f"Number of fields: {metadata.num_fields}",
        "Types:",
    ]
    for idx, field_type in enumerate(metadata.types):
        lines.append(f"\t{idx}: {field_type!s}")
    return "\n".join(lines) + "\n"
