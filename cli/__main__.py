"""Entry point for vocanova CLI client."""

import argparse
import os
import sys

from cli.api_client import VocanovaAPIClient
from cli.console import ConsoleUI


def main():
    parser = argparse.ArgumentParser(description='Vocanova - pronunciation practice')
    parser.add_argument(
        '--server',
        default=os.environ.get('VOCANOVA_SERVER', 'http://localhost:8000'),
        help='Server URL (default: $VOCANOVA_SERVER or http://localhost:8000)'
    )
    parser.add_argument(
        '--user',
        default='default',
        help='User ID (default: default)'
    )
    args = parser.parse_args()

    client = VocanovaAPIClient(base_url=args.server, user_id=args.user)
    ui = ConsoleUI(client)

    try:
        ui.run()
    except KeyboardInterrupt:
        print('\nGoodbye!')
        sys.exit(0)


if __name__ == '__main__':
    main()
