"""Interactive TUI for checking off shopping list items."""

import copy
from dataclasses import dataclass

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.coordinate import Coordinate
from textual.widgets import DataTable, Footer, Header, ProgressBar, Static

from .shopping_lists import ShoppingList, ShoppingListItem


@dataclass
class ChecklistResult:
    """Result from the interactive checklist."""

    saved: bool
    shopping_list: ShoppingList


def _check_mark(item: ShoppingListItem) -> str:
    return "☑" if item.checked else "☐"


class ChecklistScreen(App[ChecklistResult]):
    """Tick off shopping list items while shopping.

    Rows follow the list's item order, so a row index is an item index.
    """

    CSS = """
    #status {
        height: auto;
        padding: 0 2;
        background: $boost;
    }

    #progress {
        width: 100%;
        padding: 0 2 1 2;
        background: $boost;
    }

    #checklist {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("space", "toggle_item", "Check/uncheck"),
        Binding("s", "save", "Save"),
        Binding("q", "quit_cancel", "Cancel"),
        Binding("escape", "quit_cancel", "Cancel", show=False),
    ]

    def __init__(self, shopping_list: ShoppingList) -> None:
        super().__init__()
        # Edits are applied to a copy until saved
        self.shopping_list = copy.deepcopy(shopping_list)
        self._original = shopping_list

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(self._get_summary(), id="status")
        yield ProgressBar(total=100, show_eta=False, id="progress")
        yield DataTable(id="checklist", cursor_type="row", zebra_stripes=True)
        yield Footer()

    def on_mount(self) -> None:
        self.title = self.shopping_list.name
        self.sub_title = "space: check, s: save, q: cancel"

        table = self.query_one("#checklist", DataTable)
        table.add_columns("", "Qty", "Unit", "Item", "From")
        for item in self.shopping_list.items:
            table.add_row(
                _check_mark(item),
                item.quantity or "-",
                item.unit or "-",
                item.name,
                ", ".join(item.source_recipe_names) or ("custom" if item.is_custom else ""),
            )

        self._update_status()

    def _get_summary(self) -> str:
        sl = self.shopping_list
        return f"{sl.checked_count} of {sl.total_count} items purchased ({sl.progress}%)"

    def _update_status(self) -> None:
        self.query_one("#status", Static).update(self._get_summary())
        self.query_one("#progress", ProgressBar).update(progress=self.shopping_list.progress)

    def toggle(self, index: int) -> None:
        """Flip the checked state of the item at ``index``."""
        if 0 <= index < len(self.shopping_list.items):
            item = self.shopping_list.items[index]
            item.checked = not item.checked

    def _toggle_row(self, index: int) -> None:
        self.toggle(index)
        if 0 <= index < len(self.shopping_list.items):
            table = self.query_one("#checklist", DataTable)
            table.update_cell_at(Coordinate(index, 0), _check_mark(self.shopping_list.items[index]))
            self._update_status()

    def action_toggle_item(self) -> None:
        table = self.query_one("#checklist", DataTable)
        if table.row_count:
            self._toggle_row(table.cursor_row)

    @on(DataTable.RowSelected)
    def on_row_selected(self, event: DataTable.RowSelected) -> None:
        self._toggle_row(event.cursor_row)

    def action_save(self) -> None:
        self.exit(ChecklistResult(saved=True, shopping_list=self.shopping_list))

    def action_quit_cancel(self) -> None:
        self.exit(ChecklistResult(saved=False, shopping_list=self._original))


def interactive_checklist(shopping_list: ShoppingList) -> ChecklistResult:
    """
    Open the checklist for a shopping list and wait for it to close.

    Returns:
        ChecklistResult with the saved flag and the (possibly edited) list.
        Closing the app any other way counts as cancelled.
    """
    result = ChecklistScreen(shopping_list).run()
    if result is None:
        return ChecklistResult(saved=False, shopping_list=shopping_list)
    return result
