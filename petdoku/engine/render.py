from petdoku.common.constants import BOX_SIZE, EMPTY, PETS, SYMBOLS
from petdoku.engine.judge import Grid


def symbol_label(value: int, icons: bool = True) -> str:
    if value == EMPTY:
        return "·"
    return PETS[value][1] if icons else str(value)


def render_board(board: Grid, icons: bool = True) -> str:
    """
    Render the board as text with box separators.

    Pet icons are usually double width in a terminal, so digit cells get a
    trailing pad to keep the columns aligned.
    """
    width = 2 if icons else 1
    lines = []
    for r, row in enumerate(board):
        if r and r % BOX_SIZE == 0:
            lines.append("+".join(["-" * ((width + 1) * BOX_SIZE + 1)] * BOX_SIZE))
        cells = []
        for c, v in enumerate(row):
            if c and c % BOX_SIZE == 0:
                cells.append("|")
            label = symbol_label(v, icons)
            cells.append(label if v != EMPTY or not icons else label + " ")
        lines.append(" " + " ".join(cells))
    return "\n".join(lines)


def render_legend(icons: bool = True) -> str:
    """One line per symbol: value, icon and pet name."""
    return "\n".join(
        f"{v}: {PETS[v][1]} {PETS[v][0]}" if icons else f"{v}: {PETS[v][0]}" for v in SYMBOLS
    )
