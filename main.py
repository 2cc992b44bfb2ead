"""
main.py — Bootstrap

1. Parse the character picks
2. Load tuning + the character roster
3. Build the match session
4. Create the app, push the arena scene
5. Run

    python main.py speed-runner heavy-brawler --seed 42
"""

import argparse
import sys
from core import tuning
from core.app import App
from core.data import load_profiles
from logic.entity_factory import RosterError
from logic.session import MatchSession
from scenes.arena_scene import ArenaScene


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Local carnival arena brawler.")
    parser.add_argument("picks", nargs="*", default=["speed-runner"],
                        help="character id per human player (1-3)")
    parser.add_argument("--seed", type=int, default=None,
                        help="fix the match RNG")
    parser.add_argument("--tuning", default=None,
                        help="alternate tuning.toml")
    parser.add_argument("--list", action="store_true",
                        help="list the characters and exit")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    tuning.load(args.tuning)
    profiles = load_profiles()

    if args.list:
        for pid, p in profiles.items():
            print(f"{pid:<14} {p.name:<14} speed {p.speed:<4} "
                  f"strength {p.strength:<4} {p.ability_name}")
        return 0

    try:
        session = MatchSession.start(args.picks, profiles=profiles, seed=args.seed)
    except RosterError as exc:
        print(f"[MATCH] {exc}")
        return 2

    app = App(title="Carnival Arena")
    app.push_scene(ArenaScene(session))
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
