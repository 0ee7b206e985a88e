"""Shared type definitions for the ADU floor-plan engine.

All positions are pixel-space (x right, y down). Dimensions of doors,
windows and furniture are in feet; room areas are square feet.
"""
from typing import NamedTuple

Point = tuple[float, float]

ROTATIONS = (0, 90, 180, 270)


class Room(NamedTuple):
    id: str
    type: str
    name: str
    color: str
    vertices: tuple[Point, ...]  # >= 3, rectangles as [tl, tr, br, bl]
    area: float                  # sqft


class Door(NamedTuple):
    id: str
    type: str          # "opening" = open passage, no leaf
    position: Point    # center
    rotation: int
    width: float       # ft


class Window(NamedTuple):
    id: str
    type: str
    position: Point
    rotation: int
    width: float       # ft
    height: float      # ft
    sill_height: float = 3.0


class Furniture(NamedTuple):
    id: str
    type: str
    position: Point
    rotation: int
    width: float       # ft
    depth: float       # ft


Item = Door | Window | Furniture
