"""Import or export the contest as flat JSON files.

Usage:
    python -m tools.import_contest data/
    python -m tools.import_contest data/ --dry-run
    python -m tools.import_contest backup/ --export
"""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, "backend")

import app.database as _db
from app.seed import dump_legacy_dir, import_contest, load_legacy_dir
from app.services.contest_store import MongoContestStore


async def run(data_dir: Path, export: bool, dry_run: bool) -> None:
    if dry_run and not export:
        config, players, games = load_legacy_dir(data_dir)
        print(
            f"[dry-run] teams={len(config.teams)} players={len(players)} "
            f"game_days={len(games)} current_day={config.current_day}"
        )
        return

    await _db.connect_db()
    store = MongoContestStore()
    try:
        if export:
            config = await store.load_config()
            if config is None:
                print("No contest config stored, nothing to export.")
                return
            players = await store.load_players()
            games = await store.load_games()
            if dry_run:
                print(f"[dry-run] would export players={len(players)} game_days={len(games)}")
                return
            dump_legacy_dir(data_dir, config, players, games)
            print(f"exported players={len(players)} game_days={len(games)} to {data_dir}")
        else:
            result = await import_contest(store, data_dir)
            print(f"imported {result} from {data_dir}")
    finally:
        await _db.close_db()


def main() -> None:
    parser = argparse.ArgumentParser(description="Import/export the contest as JSON files.")
    parser.add_argument("data_dir", type=Path, help="Directory with config.json, players.json, games.json.")
    parser.add_argument("--export", action="store_true", help="Write the stored contest to data_dir.")
    parser.add_argument("--dry-run", action="store_true", help="Preview without writes.")
    args = parser.parse_args()
    asyncio.run(run(args.data_dir, args.export, args.dry_run))


if __name__ == "__main__":
    main()
