"""Text rendering of the board, as shown by the display command"""

WHITE_PIECE_COLOR = "\033[1;31m"
BLACK_PIECE_COLOR = "\033[0;34m"
RESET_COLOR = "\033[0m"
FILE_LABELS = "  a  b  c  d  e  f  g  h\n"


def _render_square(code: str, ansi_colors: bool) -> str:
    if not ansi_colors:
        return f"{code} "
    if code.startswith("W"):
        return f"{WHITE_PIECE_COLOR}{code}{RESET_COLOR} "
    if code.startswith("B"):
        return f"{BLACK_PIECE_COLOR}{code}{RESET_COLOR} "
    return f"{code}{RESET_COLOR} "


def render_board(ranks: list[list[str]], ansi_colors: bool = True) -> str:
    """
    One line per rank, rank 1 on top, followed by the file labels.

    `ranks` holds the two-letter piece codes ('WP', 'BK', '**' for empty), rank 1 first.
    """
    lines = [
        f"{rank_number} "
        + "".join(_render_square(code, ansi_colors) for code in codes)
        + "\n"
        for rank_number, codes in enumerate(ranks, start=1)
    ]
    return "".join(lines) + FILE_LABELS
