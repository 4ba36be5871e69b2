"""Simulated game loop and CLI."""

import argparse
import asyncio
import logging
import random

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .config import EngineSettings
from .errors import LanternError
from .models import Player
from .phases import PhaseMachine
from .roles import Team
from .store import InMemoryRosterStore
from .windows import LocalWindowProvider

console = Console()

NAMES = [
    "Alice", "Bob", "Carol", "David", "Eve", "Frank", "Grace", "Henry", "Iris",
    "Jack", "Kate", "Liam", "Mia", "Noah", "Olivia", "Paul", "Quinn", "Ruby",
    "Sam", "Tina",
]


class ConsoleNotifier:
    """Prints narration to the terminal."""

    async def notify(self, game_id: str, text: str, *, spoken: bool = False) -> None:
        style = "bold cyan" if spoken else "cyan"
        console.print(Panel(text, title=game_id, border_style=style))


async def check_roles(provider: LocalWindowProvider, players: list[Player]) -> None:
    """Every bot asks for its role as soon as the role check opens."""
    window = await provider.wait_for_window("role_reveal")
    for player in players:

        async def respond(text: str, name: str = player.name) -> None:
            console.print(f"  [dim]🔒 {name} learns: {text}[/dim]")

        window.submit(player.id, respond=respond)


async def cast_votes(
    provider: LocalWindowProvider,
    store: InMemoryRosterStore,
    game_id: str,
    rng: random.Random,
) -> None:
    """Bots pick a random living target every night."""
    while True:
        window = await provider.wait_for_window("vote")
        alive = [p for p in await store.get_players(game_id) if p.alive]
        for player in alive:
            target = rng.choice(alive)

            async def respond(text: str, name: str = player.name) -> None:
                console.print(f"  [dim]🗳️  {name}: {text}[/dim]")

            window.submit(player.id, target.id, respond=respond)


def display_roster(players: list[Player], winner: Team | None) -> None:
    """Display the final roles and who survived."""
    table = Table(title="Final Player Roles")
    table.add_column("Name", style="cyan")
    table.add_column("Role", style="magenta")
    table.add_column("Status", style="yellow")
    for player in players:
        role = player.role.value if player.role else "unassigned"
        table.add_row(player.name, role, "✓ alive" if player.alive else "✗ dead")
    console.print(table)

    if winner == Team.VILLAGE:
        console.print("[bold green]The Village has won![/bold green]")
    elif winner == Team.WEREWOLVES:
        console.print("[bold red]The Werewolves have won![/bold red]")
    else:
        console.print("[yellow]No faction has won yet.[/yellow]")


async def simulate(num_players: int, settings: EngineSettings, seed: int | None = None) -> Team | None:
    """Run one game with bot players against the local collaborators."""
    rng = random.Random(seed)
    store = InMemoryRosterStore()
    provider = LocalWindowProvider()
    machine = PhaseMachine(store, provider, ConsoleNotifier(), settings, rng)

    session = await machine.open_game(f"game-{seed if seed is not None else rng.randrange(10_000)}")
    for i in range(num_players):
        await machine.join(session, f"p{i}", NAMES[i % len(NAMES)])

    players = await store.get_players(session.game_id)
    bots = [
        asyncio.create_task(check_roles(provider, players)),
        asyncio.create_task(cast_votes(provider, store, session.game_id, rng)),
    ]
    final_roster: list[Player] = []
    try:
        while session.is_active:
            await machine.step(session)
            final_roster = await store.get_players(session.game_id)
    finally:
        for bot in bots:
            bot.cancel()
        await asyncio.gather(*bots, return_exceptions=True)
        await machine.teardown(session)

    display_roster(final_roster, session.winner)
    return session.winner


def main():
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Lantern - a simulated game of Werewolf",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Play one round with six bots:
    lantern --players 6

  Play until a faction wins, with short timers:
    lantern --rounds 0 --fast
""",
    )
    parser.add_argument(
        "--players",
        type=int,
        default=6,
        choices=range(3, 21),
        metavar="[3-20]",
        help="Number of players in the game (default: 6)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a repeatable game")
    parser.add_argument(
        "--rounds",
        type=int,
        default=None,
        help="Rounds to play, 0 plays until a faction wins (default: LANTERN_MAX_ROUNDS or 1)",
    )
    parser.add_argument("--fast", action="store_true", help="Shrink every timer to a fraction of a second")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show engine debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    try:
        settings = EngineSettings.from_env()
        updates = {}
        if args.rounds is not None:
            updates["max_rounds"] = args.rounds
        if args.fast:
            updates.update(
                vote_window_seconds=0.2,
                role_reveal_seconds=0.2,
                discussion_seconds=0.1,
                narration_pause_seconds=0.0,
            )
        settings = EngineSettings.model_validate({**settings.model_dump(), **updates})

        console.print("\n[bold cyan]🐺 WEREWOLF - Lantern Edition 🐺[/bold cyan]\n")
        asyncio.run(simulate(args.players, settings, args.seed))
    except (LanternError, ValidationError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Game interrupted by user[/yellow]")
        return 0
    return 0


if __name__ == "__main__":
    exit(main())
