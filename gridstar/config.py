# gridstar/config.py
from __future__ import annotations
from dataclasses import dataclass, replace
import argparse

@dataclass(frozen=True)
class Settings:
    """Everything a run needs: grid size, obstacle generation and playback speed."""
    width: int = 64
    height: int = 36
    density: float = 0.22
    seed: str = "gridstar"
    guarantee_solvable: bool = True
    speed: float = 6.0   # steps per second, viewer only

    def validate(self) -> "Settings":
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {self.width}x{self.height}")
        if not 0.0 <= self.density <= 1.0:
            raise ValueError(f"density must be within [0, 1], got {self.density}")
        if self.speed <= 0:
            raise ValueError(f"speed must be positive, got {self.speed}")
        return self

    def updated(self, **changes) -> "Settings":
        return replace(self, **changes).validate()

    @staticmethod
    def from_args(args: argparse.Namespace) -> "Settings":
        """Build from parsed CLI options; options the parser lacks keep their defaults."""
        defaults = Settings()
        return Settings(
            width=getattr(args, "width", defaults.width),
            height=getattr(args, "height", defaults.height),
            density=getattr(args, "density", defaults.density),
            seed=getattr(args, "seed", defaults.seed),
            guarantee_solvable=not getattr(args, "no_guarantee", False),
            speed=getattr(args, "speed", defaults.speed),
        ).validate()

GENERATION_OPTIONS = ("width", "height", "density", "seed", "no_guarantee")

def add_settings_arguments(p: argparse.ArgumentParser, suppress_defaults: bool = False) -> None:
    """With `suppress_defaults`, options left off the command line are absent from the namespace."""
    d = Settings()
    def default(v):
        return argparse.SUPPRESS if suppress_defaults else v
    p.add_argument("--width", type=int, default=default(d.width))
    p.add_argument("--height", type=int, default=default(d.height))
    p.add_argument("--density", type=float, default=default(d.density), help="obstacle probability per cell")
    p.add_argument("--seed", type=str, default=default(d.seed))
    p.add_argument("--no-guarantee", action="store_true", default=default(False),
                   help="keep the first layout even if unsolvable")
