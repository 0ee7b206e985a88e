"""Type-configuration tables for rooms, doors, windows and furniture.

Lookups never fail: an unknown key yields a config whose label is the raw key
and whose sizes are neutral defaults.
"""
from typing import NamedTuple

from floorplan.constants import MIN_ROOM_SIZE


class RoomConfig(NamedTuple):
    label: str
    color: str
    min_size: float      # sqft
    width: float         # default placement size (ft)
    height: float


class DoorConfig(NamedTuple):
    label: str
    width: float


class WindowConfig(NamedTuple):
    label: str
    width: float
    height: float


class FurnitureConfig(NamedTuple):
    name: str
    width: float
    depth: float
    category: str


ROOM_CONFIGS = {
    "bedroom":   RoomConfig("Bedroom",      "#dbeafe", 70, 10, 10),
    "bathroom":  RoomConfig("Full Bath",    "#fce7f3", 35, 8, 5),
    "half_bath": RoomConfig("Half Bath",    "#fbcfe8", 18, 6, 3),
    "kitchen":   RoomConfig("Kitchen",      "#fef3c7", 50, 10, 8),
    "living":    RoomConfig("Living Room",  "#dcfce7", 120, 12, 12),
    "dining":    RoomConfig("Dining Area",  "#fef9c3", 64, 8, 8),
    "closet":    RoomConfig("Closet",       "#e9d5ff", 6, 3, 2),
    "laundry":   RoomConfig("Laundry",      "#a5f3fc", 15, 5, 3),
    "storage":   RoomConfig("Storage",      "#fed7aa", 10, 4, 3),
    "utility":   RoomConfig("Utility Room", "#d1d5db", 12, 4, 3),
    "entry":     RoomConfig("Entry/Foyer",  "#bfdbfe", 16, 4, 4),
    "corridor":  RoomConfig("Hallway",      "#e0e7ff", 12, 4, 3),
    "flex":      RoomConfig("Flex Space",   "#d9f99d", 70, 10, 7),
    "other":     RoomConfig("Other",        "#f3f4f6", 20, 5, 4),
}

DOOR_CONFIGS = {
    "single":  DoorConfig("Single Door", 3),
    "double":  DoorConfig("Double Door", 6),
    "sliding": DoorConfig("Sliding Door", 6),
    "french":  DoorConfig("French Door", 5),
    "opening": DoorConfig("Open Passage", 4),
}

WINDOW_CONFIGS = {
    "standard": WindowConfig("Standard Window", 3, 4),
    "bay":      WindowConfig("Bay Window", 6, 5),
    "picture":  WindowConfig("Picture Window", 5, 5),
    "sliding":  WindowConfig("Sliding Window", 4, 3),
}

FURNITURE_CONFIGS = {
    # Bedroom
    "bed-double":   FurnitureConfig("Double Bed", 4.5, 6.5, "bedroom"),
    "bed-single":   FurnitureConfig("Single Bed", 3, 6.5, "bedroom"),
    # Living
    "sofa-3seat":   FurnitureConfig("3-Seat Sofa", 7, 3, "living"),
    "sofa-2seat":   FurnitureConfig("2-Seat Sofa", 5, 3, "living"),
    "armchair":     FurnitureConfig("Armchair", 3, 3, "living"),
    "table-dining": FurnitureConfig("Dining Table", 5, 3, "living"),
    "table-coffee": FurnitureConfig("Coffee Table", 4, 2, "living"),
    # Bathroom
    "toilet":       FurnitureConfig("Toilet", 1.5, 2.5, "bathroom"),
    "sink":         FurnitureConfig("Sink", 2, 1.5, "bathroom"),
    "shower":       FurnitureConfig("Shower", 3, 3, "bathroom"),
    "bathtub":      FurnitureConfig("Bathtub", 5, 2.5, "bathroom"),
    # Kitchen
    "stove":        FurnitureConfig("Stove", 2.5, 2, "kitchen"),
    "refrigerator": FurnitureConfig("Refrigerator", 3, 2.5, "kitchen"),
    "dishwasher":   FurnitureConfig("Dishwasher", 2, 2, "kitchen"),
    # Office
    "desk":         FurnitureConfig("Desk", 5, 2.5, "office"),
    "chair":        FurnitureConfig("Chair", 2, 2, "office"),
}

DEFAULT_COLOR = "#f3f4f6"


def room_config(key: str) -> RoomConfig:
    return ROOM_CONFIGS.get(key) or RoomConfig(key, DEFAULT_COLOR, MIN_ROOM_SIZE, 10, 10)

def door_config(key: str) -> DoorConfig:
    return DOOR_CONFIGS.get(key) or DoorConfig(key, 3)

def window_config(key: str) -> WindowConfig:
    return WINDOW_CONFIGS.get(key) or WindowConfig(key, 3, 4)

def furniture_config(key: str) -> FurnitureConfig:
    return FURNITURE_CONFIGS.get(key) or FurnitureConfig(key, 2, 2, "other")

def furniture_by_category() -> dict[str, list[str]]:
    """Furniture keys grouped by category, in table order."""
    groups: dict[str, list[str]] = {}
    for key, cfg in FURNITURE_CONFIGS.items():
        groups.setdefault(cfg.category, []).append(key)
    return groups
