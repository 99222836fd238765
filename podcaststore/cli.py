"""Command line entry point: serve the API or import a single feed."""

from __future__ import annotations

import argparse
import sqlite3
from collections.abc import Sequence
from contextlib import closing

from podcaststore.api import create_app
from podcaststore.feed import FeedError, Podcast, fetch_podcast
from podcaststore.storage import StorageError, add_full_podcast, create_database

SUMMARY_LIMIT = 10
_RULE = "==========="


def open_database(path: str) -> sqlite3.Connection:
    """Open the database at ``path`` and make sure its tables exist."""
    db = sqlite3.connect(path, check_same_thread=False)
    try:
        create_database(db)
    except StorageError:
        db.close()
        raise
    return db


def print_summary(podcast: Podcast, limit: int = SUMMARY_LIMIT) -> None:
    """Print the podcast's details and its first ``limit`` episodes."""
    channel = podcast.feed_data.channel
    print(f"Podcast URL: {podcast.url}")
    print(f"Podcast Title: {channel.title}")
    print(f"Podcast Description: {channel.description}")
    print(f"Number of Episodes: {len(channel.items)}")
    for item in channel.items[:limit]:
        print(_RULE)
        print(f"Episode Title: {item.title}")
        print(f"Episode Link: {item.link}")
        print(f"Enclosure URL: {item.enclosure.url}")
        print(_RULE)


def import_feed(url: str, db: sqlite3.Connection) -> Podcast:
    """Fetch the feed at ``url``, print a summary and store it."""
    podcast = fetch_podcast(url)
    print_summary(podcast, SUMMARY_LIMIT)
    add_full_podcast(podcast, db)
    return podcast


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command; returns the process exit status."""
    parser = argparse.ArgumentParser(prog="podcaststore")
    parser.add_argument("--database", default="data.db")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--import", dest="import_url", metavar="URL")
    args = parser.parse_args(argv)

    try:
        db = open_database(args.database)
    except (sqlite3.Error, StorageError) as exc:
        print(f"error opening DB {exc}")
        return 1

    with closing(db):
        if args.import_url:
            try:
                import_feed(args.import_url, db)
            except (FeedError, StorageError) as exc:
                print(exc)
                return 1
            return 0
        create_app(db).run(host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())