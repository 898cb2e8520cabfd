import argparse
import sys

from crawler.event_system import EventBus, EventData
from crawler.game import Game, GamePhase
from crawler.render import describe_event, HELP_TEXT


def log(message: str) -> None:
    """Log to stderr so diagnostics don't mix with the game screen."""
    print(message, file=sys.stderr)


def main() -> None:
    parser = argparse.ArgumentParser(description="Play the dungeon crawler in a terminal")
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for reproducibility"
    )
    parser.add_argument("--width", type=int, default=80, help="Map width in tiles")
    parser.add_argument("--height", type=int, default=24, help="Map height in tiles")
    parser.add_argument(
        "--debug-events", action="store_true", help="Print every event as it is emitted"
    )
    args = parser.parse_args()

    if args.seed is not None:
        log(f"Using random seed: {args.seed}")

    bus = EventBus()
    bus.set_debug(args.debug_events)

    def show(event_data: EventData) -> None:
        message = describe_event(event_data)
        if message is not None:
            print(message)

    bus.subscribe_all(show)

    game = Game(seed=args.seed, width=args.width, height=args.height, event_bus=bus)

    print("=== Welcome to Dungeon Crawler ===")
    print(HELP_TEXT)

    while game.is_running:
        print(game.render())
        if game.phase == GamePhase.PLAYING:
            print("\nEnter command: ", end="", flush=True)

        line = sys.stdin.readline()
        if not line:
            # Out of input ends the session
            break
        game.handle_command(line)

    print("Thanks for playing! Goodbye!")


if __name__ == "__main__":
    main()
