"""Entry point for playing Tank Duel."""

import argparse
import logging

from tank_duel import MatchConfig, run_autoplay


def main() -> None:
    parser = argparse.ArgumentParser(description="Tank Duel artillery game")
    parser.add_argument("--seed", type=int, default=None, help="seed the random source")
    parser.add_argument(
        "--no-cpu",
        action="store_true",
        help="let two people share the mouse instead of playing the computer",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="run a computer-versus-computer match without opening a window",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="print additional debug information to the console",
    )
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    config = MatchConfig(seed=args.seed, ai_players=() if args.no_cpu else (1,))
    if args.headless:
        report = run_autoplay(config)
        print(f"Winner: tank {report.winner_id} after {report.turns} turns")
        return

    from tank_duel.pygame import run_pygame

    run_pygame(config=config, debug=args.debug)


if __name__ == "__main__":
    main()
