import math
from dataclasses import asdict, dataclass, field
from typing import List, Optional

from daily_guesser.errors import DuplicateGuess, GameOver, GuesserError, UnknownCountry

NUM_GUESSES_ALLOWED = 6
EARTH_ANTIPODAL_DISTANCE = 20000

# (upper bound, share emoji, arrow)
BEARING_SECTORS = [
    (22.5, "⬆️", "↑"),
    (67.5, "↗️", "↗"),
    (112.5, "➡️", "→"),
    (157.5, "↘️", "↘"),
    (202.5, "⬇️", "↓"),
    (247.5, "↙️", "↙"),
    (292.5, "⬅️", "←"),
    (337.5, "↖️", "↖"),
    (360.0, "⬆️", "↑"),
]


# ==================== Hints ====================
def distance_pct(distance_km):
    """How close a guess is, 100 meaning on target and 0 the far side of the planet."""
    return math.floor((1 - distance_km / EARTH_ANTIPODAL_DISTANCE) * 100)


def bearing_direction(bearing):
    for upper, emoji, arrow in BEARING_SECTORS:
        if bearing < upper:
            return emoji, arrow
    return BEARING_SECTORS[-1][1:]


# ==================== Game Logic ====================
@dataclass
class Guess:
    country_code: str
    country_name: str
    distance_km: int
    bearing_deg: int
    correct: bool


@dataclass
class DailyGame:
    target_code: str
    puzzle_number: int
    num_guesses_allowed: int = NUM_GUESSES_ALLOWED
    guesses: List[Guess] = field(default_factory=list)
    bonus_guess: Optional[str] = None

    @property
    def num_guesses(self):
        return len(self.guesses)

    @property
    def correct(self):
        return any(g.correct for g in self.guesses)

    @property
    def completed(self):
        return self.correct or self.num_guesses >= self.num_guesses_allowed

    @property
    def bonus_correct(self):
        return self.bonus_guess == self.target_code

    def make_guess(self, metadata, country_code):
        if self.completed:
            raise GameOver(f"Puzzle #{self.puzzle_number} is already finished")
        if any(g.country_code == country_code for g in self.guesses):
            raise DuplicateGuess(country_code)

        entry = metadata.entry_for(country_code)
        guess = Guess(
            country_code=entry.country_code,
            country_name=entry.country_name,
            distance_km=entry.distance_km,
            bearing_deg=entry.bearing_deg,
            correct=country_code == self.target_code,
        )
        self.guesses.append(guess)
        return guess

    def make_bonus_guess(self, metadata, country_code):
        if not self.completed:
            raise GuesserError("The bonus round opens once the main puzzle is finished")
        if self.bonus_guess is not None:
            raise GameOver(f"Bonus round for puzzle #{self.puzzle_number} already played")
        if country_code not in metadata.bonus_candidates:
            raise UnknownCountry(country_code)
        self.bonus_guess = country_code
        return self.bonus_correct

    def remaining_options(self, metadata):
        guessed = {g.country_code for g in self.guesses}
        return [e for e in metadata.distances if e.country_code not in guessed]

    def best_pct(self):
        return max([0, *(distance_pct(g.distance_km) for g in self.guesses)])

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        return cls(
            target_code=data["target_code"],
            puzzle_number=data["puzzle_number"],
            num_guesses_allowed=data.get("num_guesses_allowed", NUM_GUESSES_ALLOWED),
            guesses=[Guess(**g) for g in data.get("guesses", [])],
            bonus_guess=data.get("bonus_guess"),
        )


# ==================== Share Text ====================
def share_text(game, url=None):
    first_line = (
        f"#Worldle+ #{game.puzzle_number} "
        f"{game.num_guesses if game.correct else 'X'}"
        f"{'+' if game.bonus_correct else ''}/{game.num_guesses_allowed}"
    )
    if not game.correct:
        first_line += f" {game.best_pct()}%"

    lines = [first_line]
    for guess in game.guesses:
        pct = distance_pct(guess.distance_km)
        greens = max(pct // 20, 0)
        yellows = 1 if 90 < pct < 100 else 0
        greys = 5 - greens - yellows
        row = "🟩" * greens + "🟨" * yellows + "⬜" * greys
        row += "🎉" if guess.correct else bearing_direction(guess.bearing_deg)[0]
        lines.append(row)

    lines.append(f"Bonus round: {'✅' if game.bonus_correct else '❌'}")
    text = "\n".join(lines)
    if url:
        text += f"\n\n{url}"
    return text
