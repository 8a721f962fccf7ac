#!/usr/bin/env python3
"""
Example: List Games With Card Drops Left

Usage:
    python farm_status.py <access or refresh token> [--export json|csv|both]
"""

import argparse
import sys
import os

# Add the parent directory to Python path to import our modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from steam_web import SteamWeb, SteamWebError, DataExporter, setup_logging
from steam_web.config.settings import FARMABLE_GAME_CSV_FIELDS

def farm_status(token: str, export: str = None):
    """
    Login with a token and print the games that can still drop cards.

    Args:
        token: Steam access token or refresh token
        export: Save the list as 'json', 'csv' or 'both'
    """
    setup_logging()

    with SteamWeb() as steam:
        session = steam.login(token)
        print(f"Logged in as {session.steam_id}")

        games = steam.get_farmable_games()
        for game in sorted(games, key=lambda g: g.remaining_cards, reverse=True):
            print(f"{game.app_id:>8}  {game.remaining_cards:>3} left  {game.play_time:>7.1f} hrs  {game.name}")
        print(f"{sum(g.remaining_cards for g in games)} card drops left in {len(games)} games")

        if export in ['json', 'both']:
            print(f"Saved to {DataExporter.save_to_json(games, f'farmable_{session.steam_id}.json')}")
        if export in ['csv', 'both']:
            path = DataExporter.save_to_csv(games, f'farmable_{session.steam_id}.csv',
                                            fieldnames=FARMABLE_GAME_CSV_FIELDS)
            print(f"Saved to {path}")

        return games

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="List Steam games with card drops remaining")
    parser.add_argument('token', help="Steam access token or refresh token")
    parser.add_argument('--export', choices=['json', 'csv', 'both'])
    args = parser.parse_args()

    try:
        farm_status(args.token, args.export)
    except SteamWebError as e:
        print(f"Failed: {type(e).__name__}: {e}")
        sys.exit(1)
