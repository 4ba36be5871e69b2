"""Narration and advisory text templates.

The engine decides *what* happened; these helpers only turn those facts into
the lines a notifier reads out.
"""

import random
from collections.abc import Iterable, Mapping

from ..models import DetectiveFinding, NightOutcome, Player, SubmissionVerdict, WerewolfFinding
from ..roles import Role, Team

INTRO_NARRATION = (
    "Nestled amidst whispering forests and moonlit glades, lies a village where shadows "
    "dance with secrets beneath the flickering glow of lanterns."
)
NIGHT_START = "Night phase has started. Werewolves, make your move!"
DAWN = "As the early sun rises and dew covers the fields"
DAY_START = "The day begins, and the villagers gather to discuss the events of the night."

PLAYER_QUOTES = [
    "what a champion",
    "puts the fun in 'fun'",
    "excellence incarnate",
    "always welcome",
    "vibes well",
    "pure sunshine",
    "sparkles with charisma",
    "embraces life's zest",
    "a delight magnet",
    "the soul of spontaneity",
    "spreads contagious laughter",
    "a perpetual smile",
    "defines joie de vivre",
    "a burst of energy",
    "lights up the room",
    "irresistibly vibrant",
    "a walking celebration",
    "effortlessly cool",
    "a master of charm",
    "the epitome of grace",
    "a joy amplifier",
    "a melody of positivity",
    "an endless adventure",
    "brims with enthusiasm",
    "a symphony of kindness",
]

CIVILIAN_QUIPS = [
    "You are a tepid boring civilian with no voting rights, sit {name}",
    "You are very pedestrian, stick to your useless role, sit {name}",
    "Someone trite like you couldn't possibly think you can contribute, sit {name}",
    "Pointlessly picking names because you are bored of your stale existence? sit {name}",
]

DETECTIVE_LINES = {
    DetectiveFinding.NONE: "The detectives did not investigate anyone last night.",
    DetectiveFinding.WITNESSED: "This crime was witnessed, someone knows who the culprit is.",
    DetectiveFinding.SCUFFLE: "A scuffle of disorderly wolves led one of them to be discovered.",
    DetectiveFinding.INVESTIGATION: "A clever investigation led someone to learn who is a dangerous wolf.",
    DetectiveFinding.INNOCENT: "Heavy scrutiny was focused on an innocent person.",
    DetectiveFinding.DISTRACTED: (
        "This attack may have been witnessed, but organization waned and distractions arose."
    ),
}

_ROLE_ORDER = (Role.WEREWOLF, Role.DOCTOR, Role.DETECTIVE, Role.CIVILIAN)
_PLURALS = {
    Role.WEREWOLF: "werewolves",
    Role.DOCTOR: "doctors",
    Role.DETECTIVE: "detectives",
    Role.CIVILIAN: "civilians",
}


def role_census(players: Iterable[Player]) -> str:
    """Announce how many of each role are in play, skipping absent roles."""
    counts = {role: 0 for role in _ROLE_ORDER}
    for player in players:
        if player.role is not None:
            counts[player.role] += 1

    parts = []
    for role in _ROLE_ORDER:
        amount = counts[role]
        if amount:
            noun = _PLURALS[role] if amount > 1 else role.value
            parts.append(f"{amount} {noun}")
    return f"Welcome to the game of Werewolf, this game has {', '.join(parts)}, let's play!"


def player_introductions(players: Iterable[Player], rng: random.Random | None = None) -> str:
    """One line per player pairing their name with a compliment."""
    rng = rng or random
    return "\n".join(f"{p.name}: {rng.choice(PLAYER_QUOTES)}" for p in players)


def werewolf_line(outcome: NightOutcome, names: Mapping[str, str]) -> str:
    """Describe what the werewolves did (or failed to do) overnight."""
    name = names.get(outcome.attacked_player_id or "", "Someone")
    if outcome.werewolf_finding == WerewolfFinding.QUIET:
        return "Whatever is out there is biding its time, no one was harmed this night."
    if outcome.werewolf_finding == WerewolfFinding.STRUGGLE:
        return "There were sounds of struggle, but no villagers were harmed this night."
    if outcome.werewolf_finding == WerewolfFinding.SAVED:
        return f"{name} was attacked by werewolves and lay dying, but was mysteriously saved."
    if outcome.werewolf_finding == WerewolfFinding.FOUND_DEAD:
        return (
            f"{name} was found dead. It appears that someone arrived on the scene "
            "but was unable to save them this time."
        )
    return f"Everyone notices {name} has not appeared in town this day. {name} is dead."


def morning_report(outcome: NightOutcome, names: Mapping[str, str]) -> str:
    """Full dawn narration for a resolved night."""
    return (
        f"{DAWN}\n\n{werewolf_line(outcome, names)}\n\n"
        f"{DETECTIVE_LINES[outcome.detective_finding]}"
    )


def advisory(
    verdict: SubmissionVerdict,
    actor_name: str,
    target_name: str,
    rng: random.Random | None = None,
) -> str:
    """Private reply for a night submission."""
    rng = rng or random
    reason = verdict.reason
    if reason == "pack_member":
        return f"You cannot kill {target_name}, they are in your pack!"
    if reason == "self_cannibalism":
        return "Self cannibalism is frowned upon in wolf society"
    if reason == "target":
        return f"targeting {target_name}"
    if reason == "protect_self":
        return "Protecting yourself you dirty dog!"
    if reason == "protect":
        return f"Protecting {target_name}"
    if reason == "investigate_self":
        return "You cannot investigate yourself..."
    if reason == "investigate_colleague":
        return (
            f"You know {target_name} is clear, you went through your detective cert I "
            "together after all"
        )
    if reason == "investigate":
        return f"Investigating {target_name}"
    if reason == "no_night_action":
        return rng.choice(CIVILIAN_QUIPS).format(name=actor_name)
    return "Your role information is not available."


def game_over_line(winner: Team | None) -> str:
    """Closing narration once the game ends."""
    if winner == Team.VILLAGE:
        return "The village has won! All werewolves have been eliminated."
    if winner == Team.WEREWOLVES:
        return "The werewolves have won! No villagers remain."
    return "The night falls quiet. The game is over for now."
