"""A container of named widgets stacked on top of each other."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .primitive import KeyEvent, MouseAction, MouseEvent, Primitive, Screen, SetFocus


@dataclass
class _Page:
    name: str
    item: Primitive
    resize: bool
    visible: bool


class Pages(Primitive):
    """Named pages drawn back to front; visibility and order can change."""

    def __init__(self):
        super().__init__()
        self._pages: list[_Page] = []
        self._set_focus: Optional[SetFocus] = None
        self._changed: Optional[Callable[[], None]] = None

    def set_changed_func(self, handler: Optional[Callable[[], None]]) -> Pages:
        """Call the handler whenever visibility or order of pages changes."""
        self._changed = handler
        return self

    def _notify(self) -> None:
        if self._changed is not None:
            self._changed()

    def _find(self, name: str) -> Optional[_Page]:
        return next((page for page in self._pages if page.name == name), None)

    def __len__(self) -> int:
        return len(self._pages)

    def add_page(self, name: str, item: Primitive, resize: bool, visible: bool) -> Pages:
        """Add a page, replacing any page of the same name."""
        had_focus = self.has_focus()
        existing = self._find(name)
        if existing is not None:
            self._pages.remove(existing)
        self._pages.append(_Page(name, item, resize, visible))
        self._notify()
        if had_focus:
            self.focus(self._set_focus)
        return self

    def add_and_switch_to_page(self, name: str, item: Primitive, resize: bool) -> Pages:
        """Add a page and make it the only visible one."""
        self.add_page(name, item, resize, True)
        self.switch_to_page(name)
        return self

    def remove_page(self, name: str) -> Pages:
        """Remove a page; if no visible page remains, show the last one."""
        had_focus = self.has_focus()
        page = self._find(name)
        if page is not None:
            self._pages.remove(page)
            if page.visible:
                self._notify()
                if self._pages and not any(p.visible for p in self._pages[:-1]):
                    self._pages[-1].visible = True
        if had_focus:
            self.focus(self._set_focus)
        return self

    def has_page(self, name: str) -> bool:
        """Whether a page of this name exists."""
        return self._find(name) is not None

    def _set_visible(self, name: str, visible: bool) -> None:
        page = self._find(name)
        if page is not None:
            page.visible = visible
            self._notify()
        if self.has_focus():
            self.focus(self._set_focus)

    def show_page(self, name: str) -> Pages:
        """Make a page visible in addition to the others."""
        self._set_visible(name, True)
        return self

    def hide_page(self, name: str) -> Pages:
        """Make a page invisible."""
        self._set_visible(name, False)
        return self

    def switch_to_page(self, name: str) -> Pages:
        """Make the named page the only visible one."""
        for page in self._pages:
            page.visible = page.name == name
        self._notify()
        if self.has_focus():
            self.focus(self._set_focus)
        return self

    def send_to_front(self, name: str) -> Pages:
        """Move a page to the end so it is drawn last."""
        page = self._find(name)
        if page is not None:
            self._pages.remove(page)
            self._pages.append(page)
            if page.visible:
                self._notify()
        if self.has_focus():
            self.focus(self._set_focus)
        return self

    def send_to_back(self, name: str) -> Pages:
        """Move a page to the start so it is drawn first."""
        page = self._find(name)
        if page is not None:
            self._pages.remove(page)
            self._pages.insert(0, page)
            if page.visible:
                self._notify()
        if self.has_focus():
            self.focus(self._set_focus)
        return self

    def get_front_page(self) -> tuple[str, Optional[Primitive]]:
        """Return (name, widget) of the front-most visible page, or ("", None)."""
        for page in reversed(self._pages):
            if page.visible:
                return page.name, page.item
        return "", None

    def has_focus(self) -> bool:
        if any(page.item.has_focus() for page in self._pages):
            return True
        return super().has_focus()

    def focus(self, delegate: Optional[SetFocus]) -> None:
        if delegate is None:
            return
        self._set_focus = delegate
        _, top = self.get_front_page()
        if top is not None:
            delegate(top)
        else:
            super().focus(delegate)

    def draw(self, screen: Screen) -> None:
        super().draw(screen)
        for page in self._pages:
            if not page.visible:
                continue
            if page.resize:
                page.item.set_rect(*self.get_inner_rect())
            page.item.draw(screen)

    def handle_mouse(self, action: MouseAction, event: MouseEvent,
                     set_focus: SetFocus) -> tuple[bool, Optional[Primitive]]:
        if not self.in_rect(*event.position()):
            return False, None
        consumed, capture = False, None
        for page in reversed(self._pages):
            if page.visible:
                consumed, capture = page.item.handle_mouse(action, event, set_focus)
                if consumed:
                    break
        return consumed, capture

    def handle_key(self, event: KeyEvent, set_focus: SetFocus) -> None:
        for page in self._pages:
            if page.item.has_focus():
                page.item.handle_key(event, set_focus)
                return