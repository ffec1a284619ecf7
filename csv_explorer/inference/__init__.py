"""
Delimited File Dialect Inference Engine

Infers how a delimited text file is laid out without being told up front.

This package provides:
- Bounded sampling of the input (line and byte caps), with terminator detection
- Delimiter detection over a fixed, priority-ordered candidate list
- Quote, escape and comment marker detection
- Preamble, header row and fixed/flexible width detection
- Per-column type inference over the Boolean < Integer < Float < Text lattice
- Transparent reading of .gz, .bz2 and .xz files

Basic usage:
    from csv_explorer.inference.sniffer import Sniffer

    metadata = Sniffer().sniff_path("path/to/data.csv")

    Or from an open binary stream (rewound to the start afterwards):
    metadata = Sniffer().sniff_reader(stream)

    print(f"Delimiter: {metadata.dialect.delimiter!r}")
    print(f"Header row: {metadata.dialect.header.has_header_row}")
    for idx, field_type in enumerate(metadata.types):
        print(f"  {idx}: {field_type}")

    with metadata.dialect.open_path("path/to/data.csv") as reader:
        for record in reader:
            ...
"""
