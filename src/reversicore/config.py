"""Rules configuration loader."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from reversicore.board import Board, BoardIndexError, Color, Coord, check_coord


@dataclass
class RulesConfig:
    first_player: Color = Color.BLACK
    opening: dict[Coord, Color] | None = None  # None = standard four centre disks

    def opening_board(self) -> Board:
        if self.opening is None:
            return Board.new()
        return Board.from_pieces(self.opening)


def parse_color(value) -> Color:
    """Accept 'black'/'white' in any case, or a Color."""
    if isinstance(value, Color):
        return value
    if isinstance(value, str):
        try:
            return Color(value.strip().lower())
        except ValueError:
            pass
    raise ValueError(f"Unknown color: {value!r}. Use 'black' or 'white'.")


def load_config(path: Path) -> RulesConfig:
    """Load rules config from YAML file.

    Expected layout::

        rules:
          first_player: black
          opening:
            - [3, 3, black]
            - [3, 4, white]
    """
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config must be a mapping. Got: {raw!r}.")
    r = raw.get("rules", {}) or {}
    if not isinstance(r, dict):
        raise ValueError(f"rules must be a mapping. Got: {r!r}.")

    opening = None
    opening_raw = r.get("opening")
    if opening_raw is not None:
        if not isinstance(opening_raw, list):
            raise ValueError(
                f"opening must be a list of [col, row, color]. Got: {opening_raw!r}."
            )
        opening = {}
        for entry in opening_raw:
            if not isinstance(entry, (list, tuple)) or len(entry) != 3:
                raise ValueError(
                    f"Opening entries must be [col, row, color]. Got: {entry!r}."
                )
            col, row, color = entry
            try:
                position = check_coord((col, row))
            except BoardIndexError as e:
                raise ValueError(f"Bad opening coordinate: {e}") from e
            if position in opening:
                raise ValueError(f"Duplicate opening coordinate: {position!r}.")
            opening[position] = parse_color(color)

    return RulesConfig(
        first_player=parse_color(r.get("first_player", "black")),
        opening=opening,
    )
