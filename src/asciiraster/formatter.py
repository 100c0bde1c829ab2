LINE_SEPARATOR = "\r\n"


def format_grid(grid: list[str]) -> str:
    """Join rows with CRLF, doubling each character to offset tall monospace cells."""
    return LINE_SEPARATOR.join("".join(char * 2 for char in row) for row in grid)
