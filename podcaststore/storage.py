"""SQLite storage for podcasts and their episodes."""

from __future__ import annotations

import sqlite3

from podcaststore.feed import Item, Podcast, PodcastMetaData

_PODCASTS_TABLE = """
CREATE TABLE IF NOT EXISTS podcasts (
    Id INTEGER PRIMARY KEY,
    Title TEXT NOT NULL,
    Url TEXT NOT NULL UNIQUE,
    Description TEXT NOT NULL,
    Image TEXT NOT NULL
)
"""

_EPISODES_TABLE = """
CREATE TABLE IF NOT EXISTS episodes (
    Id INTEGER PRIMARY KEY,
    PodcastId INTEGER NOT NULL,
    EpisodeTitle TEXT NOT NULL,
    EpisodeLink TEXT NOT NULL,
    EnclosureUrl TEXT NOT NULL UNIQUE,
    FOREIGN KEY(PodcastId) REFERENCES podcasts (Id)
)
"""

_INSERT_EPISODE = """
INSERT OR IGNORE INTO episodes
(PodcastId, EpisodeTitle, EpisodeLink, EnclosureUrl)
VALUES (?, ?, ?, ?)
"""

_INSERT_PODCAST = """
INSERT OR IGNORE INTO podcasts
(Title, Url, Description, Image)
VALUES (?, ?, ?, ?)
"""

_SELECT_PODCAST_ID = "SELECT Id FROM podcasts WHERE Url = ?"

_SELECT_ALL_PODCASTS = """
SELECT p.Title, p.Url, p.Description, COUNT(e.Id)
FROM podcasts p
LEFT JOIN episodes e ON p.Id = e.PodcastId
GROUP BY p.Id
"""


class StorageError(Exception):
    """Raised when a database operation fails."""


def create_database(db: sqlite3.Connection) -> None:
    """Create the podcasts and episodes tables if they are missing."""
    try:
        db.execute(_PODCASTS_TABLE)
    except sqlite3.Error as exc:
        raise StorageError(f"error executing create podcast table {exc}") from exc
    try:
        db.execute(_EPISODES_TABLE)
    except sqlite3.Error as exc:
        raise StorageError(f"error executing create episodes table {exc}") from exc


def add_episode(episode: Item, podcast_id: int, db: sqlite3.Connection) -> None:
    """Store one episode; an episode whose enclosure is already known is ignored."""
    try:
        with db:
            db.execute(
                _INSERT_EPISODE,
                (podcast_id, episode.title, episode.link, episode.enclosure.url),
            )
    except sqlite3.Error as exc:
        raise StorageError(f"error executing prepared statement for podcast episode {exc}") from exc


def add_podcast(podcast: Podcast, db: sqlite3.Connection) -> int:
    """Store a podcast and return its id, reusing the row if its URL exists."""
    channel = podcast.feed_data.channel
    try:
        with db:
            cursor = db.execute(
                _INSERT_PODCAST,
                (channel.title, podcast.url, channel.description, channel.image.url),
            )
    except sqlite3.Error as exc:
        raise StorageError(f"error inserting podcast {exc}") from exc

    if cursor.rowcount == 0:
        try:
            row = db.execute(_SELECT_PODCAST_ID, (podcast.url,)).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(f"unable to extract podcast ID {exc}") from exc
        if row is None:
            raise StorageError("unable to extract podcast ID: no rows in result set")
        return int(row[0])

    if cursor.lastrowid is None:
        raise StorageError("unable to use last insert ID for podcast ID")
    return cursor.lastrowid


def add_full_podcast(podcast: Podcast, db: sqlite3.Connection) -> None:
    """Store a podcast together with all of its episodes."""
    podcast_id = add_podcast(podcast, db)
    for episode in podcast.feed_data.channel.items:
        add_episode(episode, podcast_id, db)


def get_all_podcasts(db: sqlite3.Connection) -> list[PodcastMetaData]:
    """Return every stored podcast with its episode count."""
    try:
        rows = db.execute(_SELECT_ALL_PODCASTS).fetchall()
    except sqlite3.Error as exc:
        raise StorageError(f"error getting all podcasts {exc}") from exc
    return [
        PodcastMetaData(
            title=title,
            url=url,
            description=description,
            number_of_episodes=count,
        )
        for title, url, description, count in rows
    ]