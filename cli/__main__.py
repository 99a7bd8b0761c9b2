"""Entry point for finyap CLI client."""

import argparse
import sys

from core.config import DEFAULT_SENTENCES_PER_SCENARIO
from core.errors import ConfigurationError
from core.session import validate_quota
from cli.api_client import FinyapAPIClient
from cli.console import ConsoleUI


def main():
    parser = argparse.ArgumentParser(description='Finyap - Finnish sentence reconstruction drills')
    parser.add_argument(
        '--server',
        default='http://localhost:8000',
        help='Server URL (default: http://localhost:8000)'
    )
    parser.add_argument(
        '--per-scenario',
        default=str(DEFAULT_SENTENCES_PER_SCENARIO),
        help=f'Sentences to practice from each selected scenario (default: {DEFAULT_SENTENCES_PER_SCENARIO})'
    )
    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Disable ANSI colors'
    )
    args = parser.parse_args()

    try:
        per_scenario = validate_quota(args.per_scenario)
    except ConfigurationError as e:
        parser.error(str(e))

    client = FinyapAPIClient(base_url=args.server)
    ui = ConsoleUI(client, per_scenario, color=not args.no_color)

    try:
        ui.run()
    except (KeyboardInterrupt, EOFError):
        print('\nGoodbye!')
        sys.exit(0)


if __name__ == '__main__':
    main()
