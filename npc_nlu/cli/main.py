"""Developer console for the NPC intent pipeline."""

import logging

import typer
from rich.logging import RichHandler

from npc_nlu.cli.display import (
    console,
    display_engine_result,
    display_error,
    display_facts,
    display_info,
    display_search_results,
    display_seed,
    display_welcome,
)
from npc_nlu.config import get_settings
from npc_nlu.exceptions import NluError
from npc_nlu.fuzzy import SearchOptions, fuzzy_search
from npc_nlu.intent import IntentClassifier, IntentEngine, IntentEngineContext, RecentIntent
from npc_nlu.inventory import ItemResolver, create_shopkeeper
from npc_nlu.parser import (
    IntentSeedExtractor,
    NounPhraseExtractor,
    SlashTagger,
    SpacyTagger,
    SynonymNormalizer,
    Tagger,
)
from npc_nlu.tools import ToolFactory, facts_for_turn

app = typer.Typer(
    name="npc-nlu",
    help="Deterministic intent extraction for conversational NPCs",
    add_completion=False,
)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
    )


def _build_tagger(tagged: bool, spacy: bool) -> Tagger | None:
    if spacy:
        return SpacyTagger(get_settings().spacy_model)
    if tagged:
        return SlashTagger()
    return None


def _load_normalizer() -> SynonymNormalizer | None:
    settings = get_settings()
    path = settings.lexicon_path(settings.synonyms_file)
    if not path.exists():
        return None
    return SynonymNormalizer.from_json_file(path)


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", "-d", help="Show debug logging"),
) -> None:
    """NPC NLU - fuzzy matching, phrase extraction and rule-based intents.

    Tagged input uses word/POS or word/lemma/POS tokens, for example
    'show/VERB me/PRON the/DET cloak/NOUN'.
    """
    settings = get_settings()
    _configure_logging("DEBUG" if debug or settings.debug else settings.log_level)


@app.command()
def search(
    query: str = typer.Argument(..., help="Text (or item index) to search for"),
    items: list[str] = typer.Option(
        None, "--item", "-i", help="Candidate (repeatable); defaults to shop stock"
    ),
    min_similarity: float = typer.Option(0.1, "--min", help="Minimum similarity"),
    limit: int = typer.Option(10, "--limit", "-n", help="Maximum results"),
) -> None:
    """Fuzzy-search candidates for a query."""
    candidates = items or [item.name for item in create_shopkeeper().inventory]
    try:
        options = SearchOptions(minimum_similarity=min_similarity)
    except NluError as e:
        display_error(str(e))
        raise typer.Exit(1)

    display_search_results(query, fuzzy_search(candidates, query, limit, options))


@app.command()
def parse(
    text: str = typer.Argument(..., help="Tagged text, or plain text with --spacy"),
    spacy: bool = typer.Option(False, "--spacy", help="Tag plain text with spaCy"),
    synonyms: bool = typer.Option(False, "--synonyms", help="Apply synonym normalization"),
) -> None:
    """Extract noun phrases and the intent seed from an utterance."""
    tagger = _build_tagger(tagged=True, spacy=spacy)
    try:
        parsed = tagger.tag(text)
        seed = IntentSeedExtractor().extract(parsed)
        if synonyms:
            normalizer = _load_normalizer()
            if normalizer is not None:
                seed = normalizer.process(seed)
    except NluError as e:
        display_error(str(e))
        raise typer.Exit(1)

    phrases = NounPhraseExtractor().extract_all(parsed.tokens)
    display_info(" ".join(str(t) for t in parsed.tokens))
    display_info(f"Noun phrases: {[p.text for p in phrases]}")
    display_seed(seed)


@app.command()
def classify(
    text: str = typer.Argument(..., help="Player utterance"),
    recent: str = typer.Option(None, "--recent", "-r", help="Recent intent name"),
    recent_confidence: float = typer.Option(0.9, "--recent-confidence"),
    tagged: bool = typer.Option(False, "--tagged", "-t", help="Input is word/POS tagged"),
    spacy: bool = typer.Option(False, "--spacy", help="Tag plain text with spaCy"),
) -> None:
    """Classify one utterance for the sample shopkeeper."""
    shopkeeper = create_shopkeeper()
    context = IntentEngineContext(
        RecentIntent(recent, recent_confidence) if recent else None
    )
    try:
        classifier = IntentClassifier(
            tagger=_build_tagger(tagged, spacy), normalizer=_load_normalizer()
        )
        result = IntentEngine(classifier).process(text, shopkeeper, context)
    except NluError as e:
        display_error(str(e))
        raise typer.Exit(1)

    if result.seed is not None:
        display_seed(result.seed)
    display_engine_result(result)


@app.command()
def chat(
    spacy: bool = typer.Option(False, "--spacy", help="Tag input with spaCy"),
) -> None:
    """Talk to the sample shopkeeper and watch intents and facts per turn."""
    shopkeeper = create_shopkeeper()
    tools = ToolFactory().create_tools(shopkeeper)
    resolver = ItemResolver()

    try:
        classifier = IntentClassifier(
            tagger=_build_tagger(False, spacy), normalizer=_load_normalizer()
        )
    except NluError as e:
        display_error(str(e))
        raise typer.Exit(1)

    engine = IntentEngine(classifier)
    context = IntentEngineContext()
    display_welcome(shopkeeper.name, shopkeeper.role)

    while True:
        try:
            line = console.input("[bold green]>[/bold green] ")
        except (EOFError, KeyboardInterrupt):
            break

        if line.strip().lower() in ("quit", "exit"):
            break

        try:
            result = engine.process(line, shopkeeper, context)
        except NluError as e:
            display_error(str(e))
            continue

        context = IntentEngineContext(result.updated_recent_intent)
        display_engine_result(result)
        display_facts(facts_for_turn(result, shopkeeper, tools, resolver))

    console.print("[dim]Farewell.[/dim]")


if __name__ == "__main__":
    app()
