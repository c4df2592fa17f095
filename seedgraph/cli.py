"""CLI commands for seedgraph."""

import json
import logging
import random
import sys
from contextlib import ExitStack

import click

from seedgraph.config import Config
from seedgraph.container import SeedContainer
from seedgraph.exceptions import SeedGraphError
from seedgraph.registry import load_module
from seedgraph.seed import Seed

logger = logging.getLogger(__name__)

# Errors reported as "Error: ..." with exit code 1 instead of a traceback
CLI_ERRORS = (SeedGraphError, ModuleNotFoundError, FileNotFoundError)


def _load_config(path: str | None) -> Config:
    if path is not None:
        return Config.from_toml(path)
    try:
        return Config.find_and_load()
    except FileNotFoundError:
        return Config()


def _existing_lookup(config: Config, seeds: list[type[Seed]], stack: ExitStack):
    """Build a PostgresBackend from [database] config, or None without a URL."""
    database = config.database
    if database.url is None or not database.tables:
        return None

    known: dict[str, type] = {}
    for seed_cls in seeds:
        known[seed_cls.entity_type.__name__] = seed_cls.entity_type
        for dep in seed_cls.dependency_types():
            known[dep.__name__] = dep

    tables: dict[type, str] = {}
    for name, table in database.tables.items():
        if name not in known:
            logger.warning(f"Ignoring table mapping for unknown entity {name} ({table})")
            continue
        tables[known[name]] = table
    if not tables:
        return None

    import psycopg

    from seedgraph.backends.postgres import PostgresBackend

    conn = stack.enter_context(psycopg.connect(database.url))
    return PostgresBackend(conn, tables, schema=database.schema_name)


def _resolve(module: str, config_path: str | None, seed: int | None, count: int | None, stack):
    config = _load_config(config_path)
    if count is not None:
        config.generation.default_count = count

    seeds = load_module(module)
    rng = random.Random(seed) if seed is not None else None
    container = SeedContainer(
        existing=_existing_lookup(config, seeds, stack), config=config, rng=rng
    )
    container.load_seeds(seeds)
    return container


@click.group()
@click.version_option(package_name="seedgraph")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """seedgraph - dependency-ordered test fixture generation."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("module")
@click.option("--config", "config_path", type=click.Path(exists=True), help="seedgraph.toml path")
def order(module: str, config_path: str | None) -> None:
    """Show the resolution order of the seeds registered by MODULE."""
    try:
        with ExitStack() as stack:
            container = _resolve(module, config_path, None, None, stack)
            for position, (entity_type, seed) in enumerate(container.seeds.items(), start=1):
                deps = ", ".join(d.__name__ for d in seed.dependency_types()) or "-"
                click.echo(
                    f"{position:>3}. {entity_type.__name__} ({type(seed).__name__}) "
                    f"count={seed.count} depends_on: {deps}"
                )
    except CLI_ERRORS as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("module")
@click.option("--config", "config_path", type=click.Path(exists=True), help="seedgraph.toml path")
@click.option("--seed", type=int, help="Random seed for deterministic output")
@click.option("--count", type=int, help="Count for seeds that don't declare one")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def generate(
    module: str,
    config_path: str | None,
    seed: int | None,
    count: int | None,
    output_json: bool,
) -> None:
    """Generate objects for the seeds registered by MODULE and report counts."""
    try:
        with ExitStack() as stack:
            batches = _resolve(module, config_path, seed, count, stack).generate()
    except CLI_ERRORS as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if output_json:
        click.echo(json.dumps(batches.counts(), indent=2))
        return

    for name, total in batches.counts().items():
        click.echo(f"{name}: {total}")
    click.echo(f"total: {batches.total}")


if __name__ == "__main__":
    cli()
