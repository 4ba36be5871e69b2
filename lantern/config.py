"""Engine configuration loaded from the environment."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class EngineSettings(BaseModel):
    """Timing and looping options for a game instance."""

    vote_window_seconds: float = Field(default=10.0, ge=0, description="Night vote window duration")
    role_reveal_seconds: float = Field(default=600.0, ge=0, description="Role check window duration")
    discussion_seconds: float = Field(default=10.0, ge=0, description="Day discussion wait")
    narration_pause_seconds: float = Field(default=1.0, ge=0, description="Pause between intro lines")
    max_rounds: int = Field(default=1, ge=0, description="Rounds before the game ends, 0 = until a faction wins")
    spoken_narration: bool = Field(default=True, description="Ask the notifier to read narration aloud")

    @classmethod
    def from_env(cls, prefix: str = "LANTERN_") -> "EngineSettings":
        """Build settings from ``LANTERN_*`` environment variables.

        A ``.env`` file in the working directory is loaded first; values that
        are not set keep their defaults.
        """
        load_dotenv()
        values = {}
        for name in cls.model_fields:
            raw = os.getenv(f"{prefix}{name.upper()}")
            if raw is not None:
                values[name] = raw
        return cls(**values)

    def allows_another_round(self, rounds_played: int) -> bool:
        """Check whether the round cap leaves room for another night."""
        return self.max_rounds == 0 or rounds_played < self.max_rounds
