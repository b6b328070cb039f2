"""Todo terminal dashboard - login form, todo list and calendar view"""

import calendar
import sys
from datetime import MAXYEAR, MINYEAR, date
from typing import Any, Dict, List, Optional

from rich import box
from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table
from rich.text import Text

from client.api_client import DEFAULT_BASE_URL, ApiError, TodoApiClient
from client.token_store import FileTokenStore

WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def _todo_date(todo: Dict[str, Any]) -> Optional[date]:
    raw = todo.get("date")
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except (TypeError, ValueError):
        return None


def todos_on(todos: List[Dict[str, Any]], day: date) -> List[Dict[str, Any]]:
    """Todos whose date is exactly this day"""
    return [t for t in todos if _todo_date(t) == day]


def render_todo_table(todos: List[Dict[str, Any]], title: str = "Todos") -> Table:
    """Numbered todo list; the row number is what the menu prompts ask for"""
    table = Table(title=title, box=box.ROUNDED, show_header=True)
    table.add_column("#", style="cyan", justify="right", width=4)
    table.add_column("Done", justify="center", width=6)
    table.add_column("!", justify="center", width=3)
    table.add_column("Text", style="white")
    table.add_column("Date", style="magenta", width=12)

    for i, todo in enumerate(todos, start=1):
        text = Text(todo.get("text", ""))
        if todo.get("completed"):
            text.stylize("strike dim")
        table.add_row(
            str(i),
            "[green]✓[/green]" if todo.get("completed") else "",
            "[bold red]★[/bold red]" if todo.get("important") else "",
            text,
            todo.get("date") or "",
        )
    return table


def render_calendar(todos: List[Dict[str, Any]], year: int, month: int) -> Table:
    """
    Month grid. Each day shows how many dated todos fall on it; days with an
    unfinished important todo are highlighted.
    """
    table = Table(
        title=f"{calendar.month_name[month]} {year}",
        box=box.SQUARE,
        show_header=True,
        show_lines=True,
    )
    for name in WEEKDAYS:
        table.add_column(name, justify="center", width=7)

    for week in calendar.Calendar(firstweekday=0).monthdayscalendar(year, month):
        cells = []
        for day_number in week:
            if day_number == 0:
                cells.append("")
                continue
            day_todos = todos_on(todos, date(year, month, day_number))
            cell = Text(str(day_number))
            if day_todos:
                open_count = sum(1 for t in day_todos if not t.get("completed"))
                style = "bold red" if any(
                    t.get("important") and not t.get("completed") for t in day_todos
                ) else "yellow"
                cell.append(f"\n{open_count}/{len(day_todos)}", style=style)
            cells.append(cell)
        table.add_row(*cells)
    return table


class TodoDashboard:
    """Interactive terminal client on top of TodoApiClient"""

    def __init__(self, client: TodoApiClient, console: Optional[Console] = None):
        self.client = client
        self.console = console or Console()
        self.user: Optional[Dict[str, Any]] = None
        self.todos: List[Dict[str, Any]] = []
        self.running = True

    def _error(self, e: ApiError) -> None:
        self.console.print(f"[bold red]✗ {e.message}[/bold red]")

    def restore_session(self) -> bool:
        """Reuse a stored token if the server still accepts it"""
        if not self.client.is_authenticated():
            return False
        try:
            self.user = self.client.get_current_user()
            return True
        except ApiError:
            self.client.logout()
            return False

    def auth_menu(self) -> None:
        self.console.print(Panel(
            Align.center(Text("Todo", style="bold white")),
            style="bold blue",
            box=box.DOUBLE,
        ))
        choice = Prompt.ask("[L]ogin, [R]egister or [Q]uit", choices=["l", "r", "q"], default="l")
        if choice == "q":
            self.running = False
            return

        email = Prompt.ask("Email")
        password = Prompt.ask("Password", password=True)
        try:
            if choice == "r":
                name = Prompt.ask("Name")
                result = self.client.register(email, password, name)
            else:
                result = self.client.login(email, password)
        except ApiError as e:
            self._error(e)
            return
        self.user = result["user"]
        self.console.print(f"[bold green]✓ Welcome, {self.user['name']}[/bold green]")

    def refresh(self) -> None:
        self.todos = self.client.fetch_todos()

    def show_todos(self) -> None:
        self.console.print(render_todo_table(self.todos, title=f"{self.user['name']}'s todos"))

    def _pick(self) -> Optional[Dict[str, Any]]:
        if not self.todos:
            self.console.print("[yellow]No todos yet[/yellow]")
            return None
        raw = Prompt.ask("Todo #")
        if not raw.isdigit() or not 1 <= int(raw) <= len(self.todos):
            self.console.print("[red]No such todo[/red]")
            return None
        return self.todos[int(raw) - 1]

    def add_todo(self) -> None:
        text = Prompt.ask("Text")
        raw_date = Prompt.ask("Date (YYYY-MM-DD, blank for none)", default="")
        self.client.add_todo(text, raw_date or None)

    def toggle(self, field: str) -> None:
        todo = self._pick()
        if todo:
            self.client.update_todo(todo["id"], {field: not todo.get(field)})

    def edit_text(self) -> None:
        todo = self._pick()
        if todo:
            self.client.update_todo(todo["id"], {"text": Prompt.ask("New text", default=todo["text"])})

    def set_date(self) -> None:
        todo = self._pick()
        if todo:
            raw = Prompt.ask("Date (YYYY-MM-DD, blank to clear)", default="")
            self.client.update_todo(todo["id"], {"date": raw or None})

    def delete_todo(self) -> None:
        todo = self._pick()
        if todo and Confirm.ask(f"Delete '{todo['text']}'?"):
            self.client.delete_todo(todo["id"])

    def show_calendar(self) -> None:
        today = date.today()
        year = IntPrompt.ask("Year", default=today.year)
        if not MINYEAR <= year <= MAXYEAR:
            self.console.print(f"[red]Year must be {MINYEAR}-{MAXYEAR}[/red]")
            return
        month = IntPrompt.ask("Month", default=today.month)
        if not 1 <= month <= 12:
            self.console.print("[red]Month must be 1-12[/red]")
            return
        self.console.print(render_calendar(self.todos, year, month))
        raw_day = Prompt.ask("Show day (blank to skip)", default="")
        if not raw_day.isdigit():
            return
        try:
            day = date(year, month, int(raw_day))
        except ValueError:
            self.console.print("[red]No such day[/red]")
            return
        self.console.print(render_todo_table(todos_on(self.todos, day), title=day.isoformat()))

    def main_menu(self) -> None:
        menu_text = """
[bold cyan]Menu:[/bold cyan]

[A] Add     [C] Complete/undo   [I] Important
[E] Edit    [D] Set date        [X] Delete
[K] Calendar  [R] Refresh  [O] Logout  [Q] Quit
"""
        self.console.print(Panel(menu_text, title="Menu", border_style="cyan"))
        choice = Prompt.ask(
            "Select option",
            choices=["a", "c", "i", "e", "d", "x", "k", "r", "o", "q"],
            default="r",
        )
        actions = {
            "a": self.add_todo,
            "c": lambda: self.toggle("completed"),
            "i": lambda: self.toggle("important"),
            "e": self.edit_text,
            "d": self.set_date,
            "x": self.delete_todo,
            "k": self.show_calendar,
            "r": lambda: None,
        }
        if choice == "q":
            self.running = False
        elif choice == "o":
            self.client.logout()
            self.user = None
            self.todos = []
        else:
            actions[choice]()

    def run(self) -> None:
        self.restore_session()
        while self.running:
            if not self.user:
                self.auth_menu()
                continue
            try:
                self.refresh()
                self.show_todos()
                self.main_menu()
            except ApiError as e:
                self._error(e)
                if e.status_code in (401, 403):
                    self.client.logout()
                    self.user = None
        self.console.print("[yellow]Goodbye![/yellow]")


def main():
    base_url = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_BASE_URL
    dashboard = TodoDashboard(TodoApiClient(base_url, FileTokenStore()))
    try:
        dashboard.run()
    except KeyboardInterrupt:
        dashboard.console.print("\n[yellow]Goodbye![/yellow]")


if __name__ == "__main__":
    main()
