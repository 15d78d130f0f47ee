"""Rich display helpers for CLI output."""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from npc_nlu.fuzzy import SearchResult
from npc_nlu.intent.engine import IntentEngineResult
from npc_nlu.parser.intent_seed import IntentSeed
from npc_nlu.parser.noun_phrase import NounPhrase


# Shared console instance
console = Console()


def display_error(message: str) -> None:
    """Display error message.

    Args:
        message: Error message.
    """
    console.print(f"[bold red]Error:[/bold red] {message}")


def display_info(message: str) -> None:
    """Display info message.

    Args:
        message: Info message.
    """
    console.print(f"[dim]{message}[/dim]")


def display_welcome(actor_name: str, role: str) -> None:
    """Display the chat banner."""
    console.print()
    console.print(
        Panel(
            f"[bold cyan]{actor_name}[/bold cyan] the {role}\n"
            "[dim]Type 'quit' to leave.[/dim]",
            style="cyan",
        )
    )
    console.print()


def display_search_results(query: str, results: list[SearchResult]) -> None:
    """Display fuzzy search results as a table.

    Args:
        query: The search query.
        results: Results, best first.
    """
    if not results:
        console.print(f"[dim]No matches for '{query}'.[/dim]")
        return

    table = Table(title=f"Matches for '{query}'", box=box.SIMPLE)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Candidate", style="white")
    table.add_column("Score", justify="right", style="cyan")

    for result in results:
        table.add_row(str(result.index), result.text, f"{result.score:.3f}")

    console.print(table)


def _phrase_label(role: str, phrase: NounPhrase) -> str:
    label = f"[bold]{role}[/bold]: [green]{phrase.head}[/green]"
    if phrase.modifiers:
        label += f" [dim]mods={phrase.modifiers}[/dim]"
    if phrase.is_coordinated:
        label += f" [yellow]coordinated={phrase.coordinated_heads}[/yellow]"
    return label + f"  [dim]\"{phrase.text}\"[/dim]"


def _add_phrase(tree: Tree, role: str, phrase: NounPhrase) -> None:
    branch = tree.add(_phrase_label(role, phrase))
    for prep, complement in phrase.complements.items():
        _add_phrase(branch, prep, complement)


def display_seed(seed: IntentSeed) -> None:
    """Display an intent seed as a tree of roles and phrases."""
    tree = Tree(f"[bold cyan]verb[/bold cyan]: {seed.verb or '[dim]none[/dim]'}")
    for role, phrase in seed.noun_phrases():
        _add_phrase(tree, role, phrase)
    console.print(tree)


def display_engine_result(result: IntentEngineResult) -> None:
    """Display ranked intents, fired rules and the carried recent intent."""
    if result.intents:
        table = Table(title="Intents", box=box.SIMPLE)
        table.add_column("Intent", style="white")
        table.add_column("Slots", style="green")
        table.add_column("Confidence", justify="right", style="cyan")

        for intent in result.intents:
            slots = ", ".join(f"{k}={v}" for k, v in intent.slots.items())
            table.add_row(intent.name, slots or "-", f"{intent.confidence:.3f}")

        console.print(table)
    else:
        console.print("[dim]No intent recognized.[/dim]")

    if result.fired_rules:
        console.print(f"[dim]Rules: {', '.join(result.fired_rules)}[/dim]")

    recent = result.updated_recent_intent
    if recent is not None:
        console.print(f"[dim]Recent intent: {recent.name} ({recent.confidence:.3f})[/dim]")


def display_facts(facts: list[str]) -> None:
    """Display narration facts in a panel."""
    if not facts:
        return
    console.print(Panel("\n".join(facts), title="Facts", border_style="dim", padding=(0, 1)))
