"""Text screens bound to item browser view-models."""

from __future__ import annotations

from itembrowser.viewmodels.item_detail import ItemDetailViewModel
from itembrowser.viewmodels.item_list import ItemListViewModel


class TextScreen:
    """Passive screen: renders its view-model and forwards user commands to it."""

    def __init__(self, screen_id: str, view_model: object) -> None:
        self._screen_id = screen_id
        self._view_model = view_model

    @property
    def screen_id(self) -> str:
        return self._screen_id

    @property
    def view_model(self) -> object:
        return self._view_model

    @property
    def title(self) -> str:
        return self._screen_id

    @property
    def is_busy(self) -> bool:
        return False

    def render(self) -> list[str]:
        return [self.title]

    def handle(self, command: str, argument: str) -> bool:
        """Forward ``command`` to the view-model. Returns whether it was understood."""
        return False

    def on_back(self) -> None:
        """Native back gesture."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._screen_id}>"


class ItemListScreen(TextScreen):
    def __init__(self, view_model: ItemListViewModel) -> None:
        super().__init__("list", view_model)
        self._vm = view_model

    @property
    def title(self) -> str:
        return self._vm.title

    @property
    def is_busy(self) -> bool:
        return self._vm.is_loading

    def render(self) -> list[str]:
        lines = [f"== {self._vm.title} =="]
        if self._vm.is_loading:
            lines.append("  loading...")
            return lines
        if self._vm.error_message:
            lines.append(f"  ! {self._vm.error_message}")
            lines.append("  (refresh to retry)")
            return lines
        if not self._vm.rows:
            lines.append("  (no items)")
            return lines
        for index, row in enumerate(self._vm.rows):
            suffix = f"  <{row.subtitle}>" if row.subtitle else ""
            lines.append(f"  [{index}] {row.initials:>2}  {row.title}{suffix}")
        return lines

    def handle(self, command: str, argument: str) -> bool:
        if command == "open":
            try:
                index = int(argument.strip())
            except ValueError:
                return False
            self._vm.select(index)
            return True
        if command == "refresh":
            self._vm.refresh()
            return True
        if command == "dismiss":
            self._vm.clear_error()
            return True
        if command == "done":
            self._vm.request_finish()
            return True
        return False

    def on_back(self) -> None:
        self._vm.request_finish()


class ItemDetailScreen(TextScreen):
    def __init__(self, view_model: ItemDetailViewModel) -> None:
        super().__init__(f"detail:{view_model.item.item_id}", view_model)
        self._vm = view_model

    @property
    def title(self) -> str:
        return self._vm.title

    def render(self) -> list[str]:
        lines = [f"== {self._vm.initials} {self._vm.title} =="]
        lines.extend(f"  {line}" for line in self._vm.lines())
        return lines

    def handle(self, command: str, argument: str) -> bool:
        if command == "close":
            self._vm.request_close()
            return True
        return False

    def on_back(self) -> None:
        self._vm.request_close()


class TextScreenFactory:
    """Builds the text screen matching a view-model type."""

    def build(self, view_model: object) -> TextScreen:
        if isinstance(view_model, ItemListViewModel):
            return ItemListScreen(view_model)
        if isinstance(view_model, ItemDetailViewModel):
            return ItemDetailScreen(view_model)
        raise TypeError(f"no screen registered for {type(view_model).__name__}")
