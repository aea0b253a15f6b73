# cli.py
import argparse
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.product_client import ProductClient, ProductApiError
import requests

console = Console()

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


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
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Description", width=32)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)
    table.add_column("In stock", justify="center", width=8)

    for p in products:
        in_stock = "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]"
        table.add_row(
            p.get("id", "N/A"),
            p.get("name", "N/A"),
            p.get("description", ""),
            f"${p.get('price', 0):.2f}",
            p.get("category", "N/A"),
            in_stock,
        )
    console.print(table)


def show_page(page: Dict[str, Any]):
    products = page.get("products", [])
    title = f"📦 Products (page {page.get('page')}, limit {page.get('limit')}, {page.get('total')} matching)"
    show_products(products, title=title)


def show_stats(stats: Dict[str, Any]):
    table = Table(box=box.ROUNDED, header_style="bold yellow", show_header=True)
    table.add_column("Category")
    table.add_column("Products", justify="right")
    for name, count in stats.get("categories", {}).items():
        table.add_row(name, str(count))

    average = stats.get("averagePrice")
    average_text = f"${average:.2f}" if average is not None else "n/a"
    summary = (
        f"[bold]Total:[/bold] {stats.get('totalProducts', 0)}   "
        f"[green]In stock:[/green] {stats.get('inStock', 0)}   "
        f"[red]Out of stock:[/red] {stats.get('outOfStock', 0)}   "
        f"[bold]Average price:[/bold] {average_text}"
    )
    console.print(Panel(summary, title="📊 Inventory stats", border_style="yellow"))
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    API failures are shown as a status panel and None is returned.
    """
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            console=console,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
    except ProductApiError as e:
        console.print(show_status(f"Error: {e.message} (HTTP {e.status_code})", False))
        return None
    except requests.exceptions.RequestException as e:
        console.print(show_status(f"Error: {e}", False))
        return None

    if success_msg:
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Interactive mode
# ---------------------------
def get_product_completer(c: ProductClient) -> WordCompleter:
    page = try_api(c.list_products, limit=100) or {}
    ids = [p.get("id", "") for p in page.get("products", [])]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def prompt_with_autocomplete(message: str, completer=None, default: str = "") -> str:
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_fields(current: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    current = current or {}
    return {
        "name": Prompt.ask("Name", default=current.get("name")),
        "description": Prompt.ask("Description", default=current.get("description")),
        "price": ask_float("💰 Price", default=current.get("price", 10.0)),
        "category": Prompt.ask("🏷️ Category", default=current.get("category", "general")),
        "in_stock": Confirm.ask("In stock?", default=current.get("inStock", True)),
    }


def create_header():
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    return Panel(
        f"[bold blue]Product API console[/bold blue]   [dim]{now}[/dim]",
        style="bold blue",
    )


MENU = [
    ("1", "📦 List products"),
    ("2", "🔍 Search by name"),
    ("3", "📊 Stats"),
    ("4", "ℹ️ Get product by ID"),
    ("5", "➕ Create product"),
    ("6", "✏️ Update product"),
    ("7", "🗑️ Delete product"),
    ("q", "👋 Quit"),
]


def menu(c: ProductClient):
    console.clear()
    console.print(create_header())

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        for row in MENU:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([key for key, _ in MENU] + ["quit", "exit"])
        ).strip().lower()

        if choice == "1":
            category = Prompt.ask("Category (blank for all)", default="")
            page = try_api(c.list_products, category=category or None)
            if page is not None:
                show_page(page)

        elif choice == "2":
            term = prompt_with_autocomplete("Enter search term")
            page = try_api(c.list_products, search=term, success_msg=f"Search for '{term}' completed")
            if page is not None:
                show_page(page)

        elif choice == "3":
            stats = try_api(c.stats)
            if stats is not None:
                show_stats(stats)

        elif choice == "4":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer(c))
            product = try_api(c.get_product, pid)
            if product:
                show_products([product])

        elif choice == "5":
            fields = ask_product_fields()
            product = try_api(c.create_product, success_msg=f"Product '{fields['name']}' created", **fields)
            if product:
                show_products([product])

        elif choice == "6":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer(c))
            current = try_api(c.get_product, pid)
            if current:
                fields = ask_product_fields(current)
                product = try_api(c.update_product, pid, success_msg=f"Product {pid} updated", **fields)
                if product:
                    show_products([product])

        elif choice == "7":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer(c))
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                product = try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                if product:
                    show_products([product], title="🗑️ Deleted")

        elif choice in ("q", "quit", "exit"):
            console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
            return

        console.print()
        console.rule(style="dim")


# ---------------------------
# Argument parsing
# ---------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Product API CLI")
    parser.add_argument("--base-url", default=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"))
    parser.add_argument("--api-key", default=os.getenv("API_KEY"))
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list", help="List products")
    lp.add_argument("--category", help="Exact category filter")
    lp.add_argument("--search", help="Case-insensitive name search")
    lp.add_argument("--page", type=int, help="Page number (1-based)")
    lp.add_argument("--limit", type=int, help="Products per page")

    gp = subparsers.add_parser("get", help="Get a product by its ID")
    gp.add_argument("product_id")

    for name, help_text in (("create", "Create a product"), ("update", "Replace a product")):
        sp = subparsers.add_parser(name, help=help_text)
        if name == "update":
            sp.add_argument("product_id")
        sp.add_argument("--name", required=True)
        sp.add_argument("--description", required=True)
        sp.add_argument("--price", type=float, required=True)
        sp.add_argument("--category", required=True)
        sp.add_argument("--out-of-stock", action="store_true", help="Mark the product as out of stock")

    dp = subparsers.add_parser("delete", help="Delete a product")
    dp.add_argument("product_id")

    subparsers.add_parser("stats", help="Show inventory statistics")
    subparsers.add_parser("interactive", help="Menu-driven session")
    return parser


def run(args: argparse.Namespace, c: ProductClient) -> int:
    if args.command == "interactive":
        menu(c)
        return 0

    if args.command == "list":
        result = try_api(c.list_products, args.category, args.search, args.page, args.limit)
        render = show_page
    elif args.command == "get":
        result = try_api(c.get_product, args.product_id)
        render = lambda p: show_products([p])
    elif args.command == "create":
        result = try_api(c.create_product, args.name, args.description, args.price,
                         args.category, not args.out_of_stock, success_msg="Product created")
        render = lambda p: show_products([p])
    elif args.command == "update":
        result = try_api(c.update_product, args.product_id, args.name, args.description, args.price,
                         args.category, not args.out_of_stock, success_msg="Product updated")
        render = lambda p: show_products([p])
    elif args.command == "delete":
        result = try_api(c.delete_product, args.product_id, success_msg="Product deleted")
        render = lambda p: show_products([p], title="🗑️ Deleted")
    else:
        result = try_api(c.stats)
        render = show_stats

    if result is None:
        return 1
    render(result)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    c = ProductClient(base_url=args.base_url, api_key=args.api_key)
    return run(args, c)


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
