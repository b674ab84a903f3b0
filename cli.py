# cli.py - interactive catalog console with autocomplete
import json
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.catalog_client import CatalogClient
import requests

console = Console()
c = CatalogClient(
    base_url=os.getenv("CATALOG_URL", "http://127.0.0.1:5000"),
    token=os.getenv("CATALOG_TOKEN"),
)


# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})

CORE_FIELDS = ("id", "name", "price")


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], title: str = "📦 Products Catalog"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=15)
    table.add_column("Name", style="bold", width=24)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Other fields", width=36)

    for p in products:
        price = p.get("price")
        extras = {k: v for k, v in p.items() if k not in CORE_FIELDS}
        table.add_row(
            str(p.get("id", "N/A")),
            str(p.get("name", "N/A")),
            f"{price:.2f}" if isinstance(price, (int, float)) else str(price),
            ", ".join(f"{k}={v}" for k, v in extras.items()) or "-",
        )
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper with error reporting
# ---------------------------
def _describe_error(e: Exception) -> str:
    if isinstance(e, requests.exceptions.HTTPError) and e.response is not None:
        return f"HTTP {e.response.status_code}: {e.response.text}"
    if isinstance(e, requests.exceptions.ConnectionError):
        return f"Cannot reach {c.base_url}"
    return str(e)


def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner. Returns the decoded result, or
    None after printing the error.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except requests.exceptions.RequestException as e:
        status_message = f"Error: {_describe_error(e)}"
        console.print(show_status(status_message, False))
        return None


# ---------------------------
# Autocompletion helpers
# ---------------------------
def refresh_product_cache():
    global product_cache
    # the API pages its results; walk pages until one comes back short
    products: List[Dict[str, Any]] = []
    page = 1
    while True:
        batch = try_api(c.list_products, page=page, limit=100)
        if not batch:
            break
        products.extend(batch)
        if len(batch) < 100:
            break
        page += 1
    product_cache = products


def get_product_completer():
    if not product_cache:
        refresh_product_cache()
    ids = [str(p.get("id", "")) for p in product_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def get_name_completer():
    if not product_cache:
        refresh_product_cache()
    names = [str(p.get("name", "")) for p in product_cache]
    return WordCompleter([n for n in names if n], ignore_case=True)


# ---------------------------
# Layout and Header
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    token_state = "[green]token set[/green]" if c.token else "[yellow]read-only[/yellow]"
    header.add_row(
        f"🛍️ Catalog @ {c.base_url}",
        "[bold blue]Product Catalog CLI[/bold blue]",
        f"[dim]{now}[/dim] {token_state}"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_extra_fields() -> Dict[str, Any]:
    while True:
        raw = Prompt.ask("Extra fields as JSON object", default="{}")
        try:
            extra = json.loads(raw)
        except json.JSONDecodeError:
            console.print("[red]Not valid JSON.[/red]")
            continue
        if not isinstance(extra, dict):
            console.print("[red]Please enter a JSON object.[/red]")
            continue
        return extra


def ensure_token() -> bool:
    if c.token:
        return True
    token = Prompt.ask("🔑 API token (needed for writes)", password=True)
    if not token:
        console.print("[red]A token is required for this operation.[/red]")
        return False
    c.token = token
    return True


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message, product_cache

    console.clear()
    console.print(create_header())

    refresh_product_cache()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "5", "✏️ Update product"),
            ("2", "🔍 Search products", "6", "🗑️ Delete product"),
            ("3", "ℹ️ Get product by ID", "7", "❤️ Health check"),
            ("4", "➕ Create product", "q", "👋 Quit"),
        ]

        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 8)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            page = IntPrompt.ask("Page", default=1)
            limit = IntPrompt.ask("Per page", default=10)
            products = try_api(c.list_products, page=page, limit=limit, success_msg=f"Page {page} loaded")
            if products is not None:
                show_products(products, title=f"📦 Products (page {page})")

        elif choice == "2":
            term = prompt_with_autocomplete("Enter search term", completer=get_name_completer())
            res = try_api(c.list_products, term, success_msg=f"Search for '{term}' completed")
            if res is not None:
                show_products(res, title=f"🔍 Matches for '{term}'")

        elif choice == "3":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            resp = try_api(c.get_product, pid, success_msg=f"Product {pid} details loaded")
            if resp:
                show_products([resp])

        elif choice == "4":
            if not ensure_token():
                continue
            name = prompt_with_autocomplete("Enter product name")
            price = ask_float("💰 Price", default=10.0)
            extra = ask_extra_fields()
            resp = try_api(
                c.create_product, name, price, **extra,
                success_msg=f"Product '{name}' created"
            )
            if resp:
                console.print(Panel(f"Created product: [green]{resp['id']}[/green]"))
                refresh_product_cache()

        elif choice == "5":
            if not ensure_token():
                continue
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            current = try_api(c.get_product, pid)
            if not current:
                continue
            name = prompt_with_autocomplete("Product name", default=str(current.get("name", "")))
            price = ask_float("💰 Price", default=current.get("price", 0.0))
            extra = ask_extra_fields()
            resp = try_api(
                c.update_product, pid, name, price, **extra,
                success_msg=f"Product {pid} updated"
            )
            if resp:
                show_products([resp])
                refresh_product_cache()

        elif choice == "6":
            if not ensure_token():
                continue
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                resp = try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                if resp:
                    show_products([resp], title="🗑️ Deleted")
                    refresh_product_cache()

        elif choice == "7":
            resp = try_api(c.health, success_msg="Service is up")
            if resp:
                console.print(Panel.fit(
                    f"Status: [green]{resp.get('status')}[/green]\n"
                    f"Products stored: [bold]{resp.get('products')}[/bold]",
                    title="❤️ Health"
                ))

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
