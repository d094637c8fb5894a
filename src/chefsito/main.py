"""
Chefsito - CLI Entry Point.

Usage:
    chefsito suggest chicken rice broccoli    Find recipes for your ingredients
    chefsito scan fridge.jpg --suggest        Detect ingredients in photos
    chefsito parse "I've got eggs and spinach"
    chefsito rank candidates.json -i chicken -i rice
    chefsito difficulty 20 4 5
    chefsito cache-stats | cache-clear
    chefsito health
"""

import asyncio
import json
import logging
import sys
from datetime import timedelta
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table

app = typer.Typer(
    name="chefsito",
    help="Chefsito - find recipes from the ingredients you already have.",
    add_completion=False,
)
console = Console()


def setup_logging(level: str = "INFO") -> None:
    """Log to stderr so command output stays clean."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    # Quiet down noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    from chefsito.config import settings

    setup_logging("DEBUG" if verbose else settings.log_level)


def _store():
    from chefsito.cache.store import JsonFileStore
    from chefsito.config import settings

    return JsonFileStore(settings.store_path)


def _recipe_cache():
    from chefsito.cache.recipes import RecipeCache
    from chefsito.config import settings

    return RecipeCache(_store(), ttl=timedelta(minutes=settings.recipe_cache_ttl_minutes))


def _print_recipes(recipes, scores: list[int] | None = None) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Recipe")
    table.add_column("Match", justify="right")
    if scores is not None:
        table.add_column("Score", justify="right")
    table.add_column("Difficulty")
    table.add_column("Time", justify="right")
    table.add_column("Missing")

    for i, recipe in enumerate(recipes):
        row = [str(i + 1), recipe.name, f"{recipe.match_percentage}%"]
        if scores is not None:
            row.append(str(scores[i]))
        row += [
            recipe.difficulty_label,
            recipe.total_time_formatted,
            ", ".join(recipe.missing_ingredients) or "-",
        ]
        table.add_row(*row)
    console.print(table)


@app.command()
def suggest(
    ingredients: list[str] = typer.Argument(..., help="Ingredients you have"),
    number: int = typer.Option(3, "--number", "-n", help="Number of recipes"),
    diet: list[str] = typer.Option([], "--diet", "-d", help="Dietary restriction (repeatable)"),
) -> None:
    """Find verified recipes for the ingredients you have."""
    from chefsito.clients.spoonacular import SpoonacularClient
    from chefsito.errors import ConfigurationError
    from chefsito.models.preferences import DietaryRestriction, UserPreferences
    from chefsito.suggest import RecipeSuggester

    try:
        preferences = UserPreferences(dietary_restrictions=[DietaryRestriction(d) for d in diet])
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=2)

    async def run():
        async with SpoonacularClient(cache=_recipe_cache()) as client:
            return await RecipeSuggester(client).suggest_recipes(ingredients, preferences, number)

    try:
        with Live(Spinner("dots", text="Finding recipes..."), console=console, transient=True):
            result = asyncio.run(run())
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(code=1)

    if result.has_error:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(code=1)
    if not result.has_recipes:
        console.print("[yellow]No recipes found for those ingredients.[/yellow]")
        return
    _print_recipes(result.recipes)


@app.command()
def scan(
    images: list[Path] = typer.Argument(..., exists=True, dir_okay=False, help="Kitchen photos"),
    extra: list[str] = typer.Option([], "--extra", "-e", help="Extra ingredient (repeatable)"),
    suggest_recipes: bool = typer.Option(False, "--suggest", "-s", help="Also suggest recipes"),
    number: int = typer.Option(3, "--number", "-n", help="Number of recipes"),
) -> None:
    """Detect ingredients in kitchen photos."""
    from chefsito.clients.spoonacular import SpoonacularClient
    from chefsito.clients.vision import IngredientScanner
    from chefsito.errors import ChefsitoError
    from chefsito.suggest import RecipeSuggester

    scanner = IngredientScanner()

    async def run():
        if not suggest_recipes:
            return await scanner.analyze_ingredients(images, extra), None
        async with SpoonacularClient(cache=_recipe_cache()) as client:
            suggester = RecipeSuggester(client, scanner)
            scan_result = await scanner.analyze_ingredients(images, extra)
            suggestions = await suggester.suggest_recipes(scan_result.all_ingredients, number_of_recipes=number)
            return scan_result, suggestions

    try:
        with Live(Spinner("dots", text="Looking at your kitchen..."), console=console, transient=True):
            scan_result, suggestions = asyncio.run(run())
    except ChefsitoError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    console.print(
        Panel.fit(
            "\n".join(f"- {i}" for i in scan_result.all_ingredients) or "(nothing detected)",
            title=f"Ingredients (confidence: {scan_result.confidence or 'unknown'})",
            border_style="green",
        )
    )
    if scan_result.notes:
        console.print(f"[dim]{scan_result.notes}[/dim]")

    if suggestions is not None:
        if suggestions.has_error:
            console.print(f"[red]Error: {suggestions.error}[/red]")
            raise typer.Exit(code=1)
        _print_recipes(suggestions.recipes)


@app.command()
def parse(
    text: str = typer.Argument(..., help="What you'd say to Chefsito"),
) -> None:
    """Extract ingredient names from a chat or voice phrase."""
    from chefsito.chat.phrase_parser import SpeechIngredientParser

    ingredients = SpeechIngredientParser().parse(text)
    if not ingredients:
        console.print("I didn't catch any ingredients. Try something like: chicken, rice, tomatoes")
        return
    for ingredient in ingredients:
        console.print(f"- {ingredient}")


@app.command()
def rank(
    candidates_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON list of candidates"),
    ingredient: list[str] = typer.Option(..., "--ingredient", "-i", help="Ingredient you have (repeatable)"),
    limit: int = typer.Option(5, "--limit", "-n", help="Number of recipes to keep"),
) -> None:
    """
    Rank saved candidates against your ingredients.

    The file holds [{"recipe": {...}, "used_ingredients": [...]}, ...].
    """
    from chefsito.models.recipe import Recipe
    from chefsito.ranking.ranker import RankCandidate, find_primary_protein, score_recipes

    try:
        raw = json.loads(candidates_file.read_text(encoding="utf-8"))
        candidates = [
            RankCandidate(
                recipe=Recipe.model_validate(item["recipe"]),
                used_ingredients=item.get("used_ingredients", []),
            )
            for item in raw
        ]
    except (ValueError, KeyError, TypeError) as e:
        console.print(f"[red]Invalid candidates file: {e}[/red]")
        raise typer.Exit(code=2)

    ranked = score_recipes(candidates, ingredient)[:limit]
    console.print(f"[dim]Primary protein: {find_primary_protein(ingredient) or 'none'}[/dim]")
    _print_recipes([r.recipe for r in ranked], scores=[r.score for r in ranked])


@app.command()
def difficulty(
    minutes: int = typer.Argument(..., help="Total time in minutes"),
    steps: int = typer.Argument(..., help="Number of steps"),
    ingredients: int = typer.Argument(..., help="Number of ingredients"),
) -> None:
    """Classify a recipe's difficulty."""
    from chefsito.ranking.difficulty import classify_difficulty, difficulty_score

    score = difficulty_score(minutes, steps, ingredients)
    console.print(f"{classify_difficulty(minutes, steps, ingredients)} (score {score})")


@app.command("cache-stats")
def cache_stats() -> None:
    """Show cached recipe listings and their age."""
    stats = _recipe_cache().stats()
    if not stats:
        console.print("[dim]Cache is empty.[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Key")
    table.add_column("Age (min)", justify="right")
    table.add_column("Cached at")
    table.add_column("Fresh")
    for key, info in stats.items():
        table.add_row(key, str(info["age_minutes"]), info["cached_at"], "yes" if info["fresh"] else "no")
    console.print(table)


@app.command("cache-clear")
def cache_clear() -> None:
    """Clear all cached recipe listings (keeps user settings)."""
    removed = _recipe_cache().clear_all()
    console.print(f"Cleared {removed} cache keys.")


@app.command()
def units(
    system: Optional[str] = typer.Argument(None, help="'metric' or 'imperial'; omit to show"),
) -> None:
    """Show or set the measurement-unit preference."""
    from chefsito.local_settings import LocalSettings

    local = LocalSettings(_store())
    if system is None:
        console.print(f"Using {local.unit_system()} units")
        return

    system = system.lower()
    if system not in ("metric", "imperial"):
        console.print("[red]Choose 'metric' or 'imperial'.[/red]")
        raise typer.Exit(code=2)
    local.set_use_metric_units(system == "metric")
    console.print(f"Using {system} units")


@app.command()
def health() -> None:
    """Check configuration."""
    from chefsito import __version__
    from chefsito.config import get_settings
    from chefsito.errors import ConfigurationError

    console.print(f"\n[bold]Chefsito {__version__} Health Check[/bold]\n")

    try:
        settings = get_settings()
    except Exception as e:
        console.print(f"❌ Configuration error: {e}")
        raise typer.Exit(code=1)

    console.print("✅ Configuration loaded")
    console.print(f"   Environment: {settings.chefsito_env}")
    console.print(f"   Log level: {settings.log_level}")
    console.print(f"   Store: {settings.store_path}")

    for name in ("spoonacular", "openai", "instacart"):
        try:
            settings.require_api_key(name)
            console.print(f"✅ {name.capitalize()} API key configured")
        except ConfigurationError:
            console.print(f"⚠️  {name.capitalize()} API key not configured")


if __name__ == "__main__":
    app()
