"""Editor state aggregate, user actions and the reducer that applies them.

`reduce(state, action, config)` is pure: it returns a new PlanState or raises
ValidationRejection. `Editor` owns the live state, routes rejections into a
user-facing message, records settled changes into history and notifies
subscribers with the normalized document.
"""
import logging
import time
from typing import Callable, NamedTuple

from shared.types import Point, Room, Door, Window, Furniture
from shared.geometry import ValidationRejection
from floorplan import boundary as bnd
from floorplan import entities as ent
from floorplan.canvas import CanvasConfig, make_canvas_config, snap_and_clamp
from floorplan.constants import (
    SNAP_MODES, SNAP_GRID, MAX_HISTORY, HISTORY_DEBOUNCE, ADU_DEFAULT_AREA,
)
from floorplan.document import FloorPlanDocument, build_document
from floorplan.history import History, Snapshot

logger = logging.getLogger(__name__)

MODES = ("select", "room", "door", "window", "furniture")
DRAW_MODES = ("rectangle", "polygon")
PLACEMENT_TYPES = {"door": "door_type", "window": "window_type", "furniture": "furniture_type"}
COLLECTIONS = {"room": "rooms", "door": "doors", "window": "windows",
               "furniture": "furniture"}


class EditorConfig(NamedTuple):
    """Per-editor parameters and feature flags."""
    canvas: CanvasConfig
    persistence: bool = True
    snap_modes: tuple[str, ...] = SNAP_MODES
    max_history: int = MAX_HISTORY
    history_debounce: float = HISTORY_DEBOUNCE
    boundary_sqft: float = ADU_DEFAULT_AREA


def make_editor_config(canvas: CanvasConfig | None = None, **kw) -> EditorConfig:
    return EditorConfig(canvas or make_canvas_config(), **kw)


# ============================================================
# State
# ============================================================
class Selection(NamedTuple):
    room: str | None = None
    door: str | None = None
    window: str | None = None
    furniture: str | None = None


class Drawing(NamedTuple):
    kind: str                     # "rectangle" | "polygon"
    points: tuple[Point, ...]     # rectangle: (start, current)


class PlanState(NamedTuple):
    rooms: tuple[Room, ...]
    doors: tuple[Door, ...]
    windows: tuple[Window, ...]
    furniture: tuple[Furniture, ...]
    boundary: tuple[Point, ...]
    selection: Selection = Selection()
    mode: str = "select"
    room_type: str = "bedroom"
    door_type: str = "single"
    window_type: str = "standard"
    furniture_type: str | None = None    # nothing placed until one is picked
    draw_mode: str = "rectangle"
    edit_boundary: bool = False
    selected_vertex: int | None = None
    furniture_snap: str = SNAP_GRID
    drawing: Drawing | None = None
    message: str | None = None


def initial_state(config: EditorConfig) -> PlanState:
    return PlanState((), (), (), (), bnd.default_boundary(config.canvas, config.boundary_sqft),
                     furniture_snap=config.snap_modes[0])

def snapshot(state: PlanState) -> Snapshot:
    return Snapshot(state.rooms, state.doors, state.windows, state.furniture, state.boundary)

def restore(state: PlanState, snap: Snapshot) -> PlanState:
    """Replace the plan collections; selection and drawing are not part of history."""
    return state._replace(rooms=snap.rooms, doors=snap.doors, windows=snap.windows,
                          furniture=snap.furniture, boundary=snap.boundary,
                          selection=Selection(), selected_vertex=None, drawing=None)


# ============================================================
# Actions
# ============================================================
class SetMode(NamedTuple):
    mode: str

class SetRoomType(NamedTuple):
    room_type: str

class SetPlacementType(NamedTuple):
    """Type placed by a canvas click in door, window or furniture mode."""
    kind: str
    type: str | None

class SetDrawMode(NamedTuple):
    draw_mode: str

class SetFurnitureSnap(NamedTuple):
    snap: str

class SetBoundaryEdit(NamedTuple):
    on: bool

class ClickCanvas(NamedTuple):
    """Click on empty canvas (no entity under the pointer)."""
    point: Point

class PlaceRoom(NamedTuple):
    room_type: str
    point: Point

class PlaceDoor(NamedTuple):
    door_type: str
    point: Point

class PlaceWindow(NamedTuple):
    window_type: str
    point: Point

class PlaceFurniture(NamedTuple):
    furniture_type: str
    point: Point

class Select(NamedTuple):
    kind: str
    id: str

class ClearSelection(NamedTuple):
    pass

class MoveRoom(NamedTuple):
    id: str
    delta: Point

class MoveItem(NamedTuple):
    kind: str
    id: str
    position: Point

class ResizeRoom(NamedTuple):
    id: str
    origin: Point
    scale_x: float
    scale_y: float

class ResizeItem(NamedTuple):
    kind: str
    id: str
    scale_x: float
    scale_y: float

class Rotate(NamedTuple):
    kind: str
    id: str

class Delete(NamedTuple):
    kind: str
    id: str

class DragRoomVertex(NamedTuple):
    id: str
    index: int
    position: Point

class InsertRoomVertex(NamedTuple):
    id: str
    edge: int

class RemoveRoomVertex(NamedTuple):
    id: str
    index: int

class StartRect(NamedTuple):
    point: Point

class UpdateRect(NamedTuple):
    point: Point

class FinishRect(NamedTuple):
    pass

class CompletePolygon(NamedTuple):
    pass

class CancelDrawing(NamedTuple):
    pass

class SelectVertex(NamedTuple):
    index: int | None

class RemoveBoundaryVertex(NamedTuple):
    index: int

class DragBoundaryVertex(NamedTuple):
    index: int
    position: Point

class ResizeBoundary(NamedTuple):
    sqft: float

class DismissMessage(NamedTuple):
    pass


# ============================================================
# Reducer
# ============================================================
def _coll(state: PlanState, kind: str) -> tuple:
    if kind not in COLLECTIONS:
        raise ValidationRejection(f"Unknown entity kind {kind!r}")
    return getattr(state, COLLECTIONS[kind])

def _put(state: PlanState, kind: str, coll: tuple) -> PlanState:
    return state._replace(**{COLLECTIONS[kind]: coll})

def _update(state: PlanState, kind: str, eid: str, fn) -> PlanState:
    coll = _coll(state, kind)
    return _put(state, kind, ent.replace(coll, fn(ent.find(coll, eid))))

def _select(state: PlanState, kind: str, eid: str | None) -> PlanState:
    return state._replace(selection=Selection(**{kind: eid}))

def _add(state: PlanState, kind: str, e) -> PlanState:
    return _select(_put(state, kind, _coll(state, kind)+(e,)), kind, e.id)


def _set_mode(s, a, c):
    if a.mode not in MODES:
        raise ValidationRejection(f"Unknown mode {a.mode!r}")
    return s._replace(mode=a.mode, drawing=None)

def _set_draw_mode(s, a, c):
    if a.draw_mode not in DRAW_MODES:
        raise ValidationRejection(f"Unknown draw mode {a.draw_mode!r}")
    return s._replace(draw_mode=a.draw_mode, drawing=None)

def _set_furniture_snap(s, a, c):
    if a.snap not in c.snap_modes:
        raise ValidationRejection(f"Snap mode {a.snap!r} is not available")
    return s._replace(furniture_snap=a.snap)

def _set_boundary_edit(s, a, c):
    return s._replace(edit_boundary=a.on, selected_vertex=None, drawing=None,
                      selection=Selection())

def _set_placement_type(s, a, c):
    if a.kind not in PLACEMENT_TYPES:
        raise ValidationRejection(f"No placement type for {a.kind!r}")
    if a.type is None and a.kind != "furniture":
        raise ValidationRejection(f"A {a.kind} type is required")
    return s._replace(**{PLACEMENT_TYPES[a.kind]: a.type})

def _click_canvas(s, a, c):
    if s.edit_boundary:
        return s._replace(boundary=bnd.add_vertex(s.boundary, a.point, c.canvas))
    if s.mode == "room" and s.draw_mode == "polygon":
        pts = s.drawing.points if s.drawing else ()
        p = snap_and_clamp(a.point, c.canvas)
        return s._replace(drawing=Drawing("polygon", pts+(p,)))
    s = s._replace(selection=Selection())
    if s.mode == "door":
        return _place_door(s, PlaceDoor(s.door_type, a.point), c)
    if s.mode == "window":
        return _place_window(s, PlaceWindow(s.window_type, a.point), c)
    if s.mode == "furniture" and s.furniture_type is not None:
        return _place_furniture(s, PlaceFurniture(s.furniture_type, a.point), c)
    return s

def _place_room(s, a, c):
    return _add(s, "room", ent.place_room(s.rooms, a.room_type, a.point, c.canvas))

def _place_door(s, a, c):
    return _add(s, "door", ent.place_door(a.door_type, a.point, c.canvas))

def _place_window(s, a, c):
    return _add(s, "window", ent.place_window(a.window_type, a.point, c.canvas))

def _place_furniture(s, a, c):
    return _add(s, "furniture", ent.place_furniture(a.furniture_type, a.point, c.canvas))

def _select_action(s, a, c):
    ent.find(_coll(s, a.kind), a.id)
    return _select(s, a.kind, a.id)

def _move_room(s, a, c):
    return _update(s, "room", a.id, lambda r: ent.move_room(r, a.delta, c.canvas))

def _move_item(s, a, c):
    if a.kind == "room":
        raise ValidationRejection("Rooms move by delta")
    mode = s.furniture_snap if a.kind == "furniture" else SNAP_GRID
    return _update(s, a.kind, a.id, lambda it: ent.move_item(it, a.position, c.canvas, mode))

def _resize_room(s, a, c):
    return _update(s, "room", a.id,
                   lambda r: ent.resize_room(r, a.origin, a.scale_x, a.scale_y, c.canvas))

def _resize_item(s, a, c):
    if a.kind == "room":
        raise ValidationRejection("Rooms resize from an origin")
    return _update(s, a.kind, a.id, lambda it: ent.resize_item(it, a.scale_x, a.scale_y))

def _rotate(s, a, c):
    fn = ent.rotate_room if a.kind == "room" else ent.rotate_item
    return _update(s, a.kind, a.id, fn)

def _delete(s, a, c):
    s = _put(s, a.kind, ent.delete(_coll(s, a.kind), a.id))
    if getattr(s.selection, a.kind) == a.id:
        s = s._replace(selection=s.selection._replace(**{a.kind: None}))
    return s

def _drag_room_vertex(s, a, c):
    return _update(s, "room", a.id,
                   lambda r: ent.drag_room_vertex(r, a.index, a.position, c.canvas))

def _insert_room_vertex(s, a, c):
    return _update(s, "room", a.id, lambda r: ent.insert_room_vertex(r, a.edge, c.canvas))

def _remove_room_vertex(s, a, c):
    return _update(s, "room", a.id, lambda r: ent.remove_room_vertex(r, a.index, c.canvas))

def _start_rect(s, a, c):
    return s._replace(drawing=Drawing("rectangle", (a.point, a.point)))

def _update_rect(s, a, c):
    if s.drawing is None or s.drawing.kind != "rectangle":
        return s
    return s._replace(drawing=Drawing("rectangle", (s.drawing.points[0], a.point)))

def _finish_rect(s, a, c):
    if s.drawing is None or s.drawing.kind != "rectangle":
        return s
    room = ent.finish_rect(*s.drawing.points, s.room_type, s.rooms, c.canvas)
    s = s._replace(drawing=None)
    return s if room is None else _add(s, "room", room)

def _complete_polygon(s, a, c):
    pts = s.drawing.points if s.drawing and s.drawing.kind == "polygon" else ()
    room = ent.complete_polygon(pts, s.room_type, s.rooms, c.canvas)
    return _add(s._replace(drawing=None), "room", room)

def _cancel_drawing(s, a, c):
    return s._replace(drawing=None)

def _select_vertex(s, a, c):
    if a.index is not None and not 0 <= a.index < len(s.boundary):
        raise ValidationRejection(f"No boundary vertex {a.index}")
    return s._replace(selected_vertex=a.index)

def _remove_boundary_vertex(s, a, c):
    return s._replace(boundary=bnd.remove_vertex(s.boundary, a.index), selected_vertex=None)

def _drag_boundary_vertex(s, a, c):
    return s._replace(boundary=bnd.drag_vertex(s.boundary, a.index, a.position, c.canvas))

def _resize_boundary(s, a, c):
    return s._replace(boundary=bnd.resize_boundary(s.boundary, a.sqft, c.canvas))

def _dismiss_message(s, a, c):
    return s


HANDLERS = {
    SetMode: _set_mode,
    SetRoomType: lambda s, a, c: s._replace(room_type=a.room_type),
    SetPlacementType: _set_placement_type,
    SetDrawMode: _set_draw_mode,
    SetFurnitureSnap: _set_furniture_snap,
    SetBoundaryEdit: _set_boundary_edit,
    ClickCanvas: _click_canvas,
    PlaceRoom: _place_room,
    PlaceDoor: _place_door,
    PlaceWindow: _place_window,
    PlaceFurniture: _place_furniture,
    Select: _select_action,
    ClearSelection: lambda s, a, c: s._replace(selection=Selection()),
    MoveRoom: _move_room,
    MoveItem: _move_item,
    ResizeRoom: _resize_room,
    ResizeItem: _resize_item,
    Rotate: _rotate,
    Delete: _delete,
    DragRoomVertex: _drag_room_vertex,
    InsertRoomVertex: _insert_room_vertex,
    RemoveRoomVertex: _remove_room_vertex,
    StartRect: _start_rect,
    UpdateRect: _update_rect,
    FinishRect: _finish_rect,
    CompletePolygon: _complete_polygon,
    CancelDrawing: _cancel_drawing,
    SelectVertex: _select_vertex,
    RemoveBoundaryVertex: _remove_boundary_vertex,
    DragBoundaryVertex: _drag_boundary_vertex,
    ResizeBoundary: _resize_boundary,
    DismissMessage: _dismiss_message,
}

# Entity interaction is ignored while the boundary is being edited
ENTITY_ACTIONS = (
    PlaceRoom, PlaceDoor, PlaceWindow, PlaceFurniture, Select, MoveRoom, MoveItem,
    ResizeRoom, ResizeItem, Rotate, Delete, DragRoomVertex, InsertRoomVertex,
    RemoveRoomVertex, StartRect, UpdateRect, FinishRect, CompletePolygon,
)
# and boundary vertices are only editable in that mode
BOUNDARY_ACTIONS = (SelectVertex, RemoveBoundaryVertex, DragBoundaryVertex, ResizeBoundary)


def is_suppressed(state: PlanState, action) -> bool:
    if state.edit_boundary:
        return isinstance(action, ENTITY_ACTIONS)
    return isinstance(action, BOUNDARY_ACTIONS)

def reduce(state: PlanState, action, config: EditorConfig) -> PlanState:
    """Apply one action. Suppressed actions return *state* unchanged."""
    handler = HANDLERS.get(type(action))
    if handler is None:
        raise TypeError(f"Unknown action {type(action).__name__}")
    if is_suppressed(state, action):
        return state
    return handler(state._replace(message=None), action, config)


# ============================================================
# Editor facade
# ============================================================
class Editor:
    def __init__(self, config: EditorConfig | None = None,
                 clock: Callable[[], float] = time.monotonic,
                 state: PlanState | None = None):
        self.config = config or make_editor_config()
        self.clock = clock
        self.state = state or initial_state(self.config)
        self.history = History(snapshot(self.state), self.config.max_history,
                               self.config.history_debounce)
        self._subscribers: list[Callable[[FloorPlanDocument], None]] = []

    def subscribe(self, fn: Callable[[FloorPlanDocument], None]) -> Callable[[], None]:
        """Call *fn* with the document after every settled plan change."""
        self._subscribers.append(fn)
        return lambda: self._subscribers.remove(fn)

    def document(self) -> FloorPlanDocument:
        return build_document(self.state, self.config.canvas)

    def _notify(self):
        doc = self.document()
        for fn in list(self._subscribers):
            fn(doc)

    def dispatch(self, action) -> PlanState:
        try:
            new = reduce(self.state, action, self.config)
        except ValidationRejection as e:
            logger.info("Rejected %s: %s", type(action).__name__, e)
            self.state = self.state._replace(message=str(e))
            return self.state
        changed = snapshot(new) != snapshot(self.state)
        self.state = new
        if changed:
            self.history.touch(snapshot(new), self.clock())
            self._notify()
        return self.state

    def tick(self) -> bool:
        """Commit a pending history entry once the debounce window has passed."""
        return self.history.poll(self.clock())

    def flush(self) -> bool:
        return self.history.flush()

    def _replay(self, snap: Snapshot | None) -> bool:
        if snap is None:
            return False
        with self.history.replay():
            self.state = restore(self.state, snap)
            self._notify()
        return True

    def undo(self) -> bool:
        return self._replay(self.history.undo())

    def redo(self) -> bool:
        return self._replay(self.history.redo())

    def can_undo(self) -> bool:
        return self.history.pending or self.history.can_undo()

    def can_redo(self) -> bool:
        return not self.history.pending and self.history.can_redo()

    def drag(self, kind: str, eid: str) -> "DragSession":
        return DragSession(self, kind, eid)


class DragSession:
    """Start / preview / commit interaction for moving one entity.

    Previews never touch the editor state; only `commit` dispatches. Rooms
    take a delta from the drag start, items take their new center.
    """
    def __init__(self, editor: Editor, kind: str, eid: str):
        self.editor = editor
        self.kind = kind
        self.baseline = ent.find(_coll(editor.state, kind), eid)
        self.last = self.baseline

    def _action(self, value: Point):
        if self.kind == "room":
            return MoveRoom(self.baseline.id, value)
        return MoveItem(self.kind, self.baseline.id, value)

    def preview(self, value: Point):
        """Entity as it would look if released at *value*."""
        st = self.editor.state
        if is_suppressed(st, self._action(value)):
            return self.baseline
        cfg = self.editor.config.canvas
        if self.kind == "room":
            self.last = ent.move_room(self.baseline, value, cfg)
        else:
            mode = st.furniture_snap if self.kind == "furniture" else SNAP_GRID
            self.last = ent.move_item(self.baseline, value, cfg, mode)
        return self.last

    def commit(self, value: Point) -> PlanState:
        return self.editor.dispatch(self._action(value))
