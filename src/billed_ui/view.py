"""
Headless view handle over a Dash component tree.

Controllers never look up a global document. They receive a ViewHandle
that owns the mounted component tree and offers the few capabilities they
need: query components by id, replace a container's children, bind and
dispatch events, read and write input values, show a modal, and raise a
blocking alert. The Dash app adapter and the tests drive the same handle.

Ids are matched either exactly or, for pattern-matching ids such as
{"type": "icon-eye", "index": 0}, against their "type" key.
"""

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Sequence

from dash import html
from dash.development.base_component import Component

from billed_ui.lib import logs
from billed_ui.models.common import UploadedFile

LOG = logs.logger(__file__)

Handler = Callable[..., Any]


@dataclass
class FileChangeEvent:
    """Change event of a file input."""

    target: Component | None
    files: Sequence[UploadedFile] = field(default_factory=tuple)


@dataclass
class SubmitEvent:
    """Submit event of a form."""

    target: Component | None = None
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


def iter_components(node: Any) -> Iterator[Component]:
    """Yield every component below node, depth first, node included."""
    if isinstance(node, Component):
        yield node
        yield from iter_components(getattr(node, "children", None))
    elif isinstance(node, (list, tuple)):
        for child in node:
            yield from iter_components(child)


def iter_text(node: Any) -> Iterator[str]:
    """Yield the text nodes below node."""
    if isinstance(node, Component):
        yield from iter_text(getattr(node, "children", None))
    elif isinstance(node, (list, tuple)):
        for child in node:
            yield from iter_text(child)
    elif isinstance(node, (str, int, float)) and not isinstance(node, bool):
        yield str(node)


def matches(component: Component, component_id: Any) -> bool:
    """Return True when the component carries the given id."""
    cid = getattr(component, "id", None)
    if cid is None:
        return False
    if cid == component_id:
        return True
    return isinstance(cid, dict) and cid.get("type") == component_id


def class_names(component: Component) -> list[str]:
    """Return the component's CSS classes."""
    return (getattr(component, "className", None) or "").split()


def add_class(component: Component, name: str) -> None:
    names = class_names(component)
    if name not in names:
        names.append(name)
    component.className = " ".join(names)


def remove_class(component: Component, name: str) -> None:
    component.className = " ".join(n for n in class_names(component) if n != name)


class ViewHandle:
    """
    Mounted view of one browser tab.

    Attributes:
        root: Root container; mounted views are its only child.
        generation: Incremented on every mount; controllers keep the value
            they were built with to detect that they were navigated away.
        alerts: Messages raised through alert(), oldest first.
        shown_modals: Ids passed to show_modal(), oldest first.
    """

    def __init__(self, root_id: str = "root") -> None:
        self.root = html.Div(id=root_id, children=[])
        self.generation = 0
        self.alerts: list[str] = []
        self.shown_modals: list[str] = []
        self._bindings: list[tuple[Component, str, Handler]] = []

    def mount(self, component: Component) -> int:
        """Replace the whole view and return the new mount token."""
        self.root.children = [component]
        self._bindings = []
        self.generation += 1
        return self.generation

    def is_current(self, token: int) -> bool:
        """Return True while the view mounted with token is still displayed."""
        return token == self.generation

    def query(self, component_id: Any) -> Component | None:
        """Return the first component with the given id, if any."""
        return next(self._find(component_id), None)

    def query_all(self, component_id: Any) -> list[Component]:
        """Return every component with the given id, in tree order."""
        return list(self._find(component_id))

    def replace(self, component_id: Any, children: Any) -> Component:
        """
        Replace the children of a container.

        Raises:
            LookupError: No component carries the id.
        """
        target = self.query(component_id)
        if target is None:
            raise LookupError(f"No component with id {component_id!r}")
        live = set(map(id, iter_components(target.children)))
        self._bindings = [b for b in self._bindings if id(b[0]) not in live]
        target.children = children
        return target

    def bind(self, target: Any, event: str, handler: Handler) -> bool:
        """
        Attach handler to a component event.

        Args:
            target: Component instance or id.
            event: Event name ("click", "change", "submit").
            handler: Called with the event payload.

        Returns:
            False when the target is not mounted.
        """
        component = self._resolve(target)
        if component is None:
            return False
        self._bindings.append((component, event, handler))
        return True

    def dispatch(self, target: Any, event: str, payload: Any = None) -> list[Any]:
        """Call the handlers bound to a component event and return their results."""
        component = self._resolve(target)
        if component is None:
            raise LookupError(f"No component with id {target!r}")
        return [
            handler(payload)
            for bound, name, handler in list(self._bindings)
            if bound is component and name == event
        ]

    async def fire(self, target: Any, event: str, payload: Any = None) -> list[Any]:
        """Dispatch an event and await handlers that return awaitables."""
        results = []
        for result in self.dispatch(target, event, payload):
            if inspect.isawaitable(result):
                result = await result
            results.append(result)
        return results

    def value(self, component_id: Any) -> Any:
        component = self.query(component_id)
        return getattr(component, "value", None) if component is not None else None

    def set_value(self, component_id: Any, value: Any) -> None:
        component = self.query(component_id)
        if component is None:
            raise LookupError(f"No component with id {component_id!r}")
        component.value = value

    def alert(self, message: str) -> None:
        """Raise a blocking alert for the user."""
        LOG.info("Alert: %s", message)
        self.alerts.append(message)

    def show_modal(self, component_id: str) -> None:
        """Display the modal with the given id."""
        modal = self.query(component_id)
        if modal is None:
            raise LookupError(f"No component with id {component_id!r}")
        add_class(modal, "show")
        modal.style = {**(getattr(modal, "style", None) or {}), "display": "block"}
        self.shown_modals.append(component_id)

    def text(self) -> str:
        """Return the visible text of the mounted view."""
        return " ".join(iter_text(self.root))

    def _find(self, component_id: Any) -> Iterator[Component]:
        return (c for c in iter_components(self.root) if matches(c, component_id))

    def _resolve(self, target: Any) -> Component | None:
        if isinstance(target, Component):
            return target
        return self.query(target)
