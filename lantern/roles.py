"""Game roles and their behaviors."""

from enum import Enum


class Role(str, Enum):
    """Available roles in the game."""

    WEREWOLF = "werewolf"
    DOCTOR = "doctor"
    DETECTIVE = "detective"
    CIVILIAN = "civilian"

    def display_name(self) -> str:
        """Get the singular display name for this role."""
        return f"a {self.value.capitalize()}"


class Team(str, Enum):
    """The two factions a role can belong to."""

    WEREWOLVES = "werewolves"
    VILLAGE = "village"


ROLE_DESCRIPTIONS = {
    Role.WEREWOLF: {
        "name": "Werewolf",
        "team": Team.WEREWOLVES,
        "description": "You are a Werewolf. Work with your team to eliminate the villagers!",
        "night_action": True,
    },
    Role.DOCTOR: {
        "name": "Doctor",
        "team": Team.VILLAGE,
        "description": "You are the Doctor. Protect villagers from werewolf attacks!",
        "night_action": True,
    },
    Role.DETECTIVE: {
        "name": "Detective",
        "team": Team.VILLAGE,
        "description": "You are the Detective. Investigate players to find the werewolves!",
        "night_action": True,
    },
    Role.CIVILIAN: {
        "name": "Civilian",
        "team": Team.VILLAGE,
        "description": "You are a Civilian. Stay alive and try to identify the werewolves!",
        "night_action": False,
    },
}

UNKNOWN_ROLE_TEXT = "Your role information is not available."


def get_role_info(role: Role) -> dict:
    """Get information about a role."""
    return ROLE_DESCRIPTIONS[role]


def team_of(role: Role) -> Team:
    """Get the faction a role plays for."""
    return ROLE_DESCRIPTIONS[role]["team"]
