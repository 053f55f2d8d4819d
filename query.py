#!/usr/bin/env python3
"""Ad hoc query runner for the Food Search services.

Run a single search from the terminal, without any front-end.

Usage:
    python query.py "Spicy Ramen"
    python query.py --mode thinking "A romantic dinner for two"
    python query.py --mode restaurants "Tacos near me"
    python query.py --file images/fridge.jpg "What can I cook?"
    python query.py --recipe "Pad Thai"
    python query.py --mode image --resolution 2K "Lemon tart"
    python query.py --debug "Vegan breakfast"  # Show full JSON state

Features:
- Every operating mode (normal, fast, thinking, searchAgent, restaurants, video, image)
- Optional attachment (image, text, audio or video file)
- Recipe lookup for a single dish
- Rich rendering of items, sources and recipes
"""

import asyncio
import sys

from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from food_search.capabilities.attachments import encode_attachment
from food_search.capabilities.geolocation import default_geolocation_provider
from food_search.models.models import ImageResolution, Recipe, SearchSessionState
from food_search.services.gemini import create_client
from food_search.services.recipes import fetch_recipe
from food_search.session.search import SUGGESTED_TAGS, SearchController
from food_search.utils.errors import FoodSearchError
from food_search.utils.logger import logger

console = Console()

USAGE = 'Usage: python query.py [--debug] [--mode MODE] [--file PATH] [--resolution 1K|2K|4K] [--recipe] "<query>"'


def render_state(state: SearchSessionState) -> None:
    """Print a search session state the way the results page shows it."""
    if state.error:
        console.print(f"[red]✗ {state.error}[/red]")
        return

    if state.video_url:
        console.print(f"[bold magenta]Video:[/bold magenta] {state.video_url}")
    if state.image_url:
        console.print(f"[bold magenta]Image:[/bold magenta] {state.image_url[:80]}... ({len(state.image_url)} chars)")

    if state.results:
        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("ID", style="dim")
        table.add_column("Dish", style="bold")
        table.add_column("Description")
        for item in state.results:
            table.add_row(item.id, item.title, item.description)
        console.print(table)

    if state.show_raw_text:
        console.print("[bold blue]Here's what we found:[/bold blue]")
        console.print(Markdown(state.raw_text or ""))

    if state.sources:
        console.print("[bold]Sources[/bold]")
        for source in state.sources:
            console.print(f"  • {source.title} [dim]{source.uri}[/dim]")


def render_recipe(recipe: Recipe) -> None:
    console.print(f"[bold green]{recipe.dish_name}[/bold green]")
    console.print(f"Prep time: {recipe.prep_time}   Servings: {recipe.servings}")
    console.print("[bold]Ingredients[/bold]")
    for ingredient in recipe.ingredients:
        console.print(f"  • {ingredient}")
    console.print("[bold]Instructions[/bold]")
    for number, step in enumerate(recipe.instructions, start=1):
        console.print(f"  {number}. {step}")
    for source in recipe.sources:
        console.print(f"  [dim]{source.title} {source.uri}[/dim]")


async def run_query(
    query: str,
    mode: str = "normal",
    file_path: str = None,
    recipe: bool = False,
    resolution: str = None,
    debug: bool = False,
) -> None:
    """Execute a single query and print the result."""
    client = create_client()

    if recipe:
        result = await fetch_recipe(client, query, mode)
        if debug:
            console.print_json(data=result.model_dump())
        render_recipe(result)
        return

    controller = SearchController(client, geolocation=default_geolocation_provider(), mode=mode)
    if resolution:
        controller.image_resolution = ImageResolution(resolution)
    if file_path:
        attachment = await encode_attachment(file_path)
        controller.attach(attachment)
        logger.info(f"✓ Loaded {attachment.file_name} ({attachment.mime_type}, {attachment.size_bytes / 1024:.1f} KB)")

    logger.info(f"Running query: {query} (mode={controller.mode.value})")
    state = await controller.search(query)

    if debug:
        console.print_json(data=state.model_dump())
    render_state(state)


def main(argv: list[str]) -> int:
    debug = False
    recipe = False
    mode = "normal"
    file_path = None
    resolution = None
    index = 0

    while index < len(argv) and argv[index].startswith("--"):
        flag = argv[index]
        if flag == "--debug":
            debug = True
        elif flag == "--recipe":
            recipe = True
        elif flag in ("--mode", "--file", "--resolution"):
            index += 1
            if index >= len(argv):
                print(f"Error: {flag} flag requires a value")
                return 1
            if flag == "--mode":
                mode = argv[index]
            elif flag == "--file":
                file_path = argv[index]
            else:
                resolution = argv[index]
        else:
            print(f"Unknown flag: {flag}")
            return 1
        index += 1

    query = " ".join(argv[index:])
    if not query and not file_path:
        print("Error: No query provided")
        print(USAGE)
        print(f"Try one of: {', '.join(SUGGESTED_TAGS)}")
        return 1

    try:
        asyncio.run(run_query(query, mode, file_path, recipe, resolution, debug))
    except KeyboardInterrupt:
        logger.info("Query interrupted by user.")
        return 0
    except (FoodSearchError, ValueError) as e:
        logger.error(f"Query execution failed: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(USAGE)
        sys.exit(1)
    sys.exit(main(sys.argv[1:]))
