import sqlite3

import pytest

from podcaststore.feed import RSS, Channel, Enclosure, Image, Item, Podcast
from podcaststore.storage import (
    StorageError,
    add_episode,
    add_full_podcast,
    add_podcast,
    create_database,
    get_all_podcasts,
)


def make_podcast(url, episode_count, title="Show"):
    items = [
        Item(
            title=f"{title} episode {n}",
            link=f"{url}/episodes/{n}",
            enclosure=Enclosure(url=f"{url}/audio/{n}.mp3"),
        )
        for n in range(episode_count)
    ]
    channel = Channel(
        title=title,
        description=f"About {title}",
        image=Image(url=f"{url}/image.jpg"),
        items=items,
    )
    return Podcast(feed_data=RSS(channel=channel), url=url)


@pytest.fixture
def db():
    connection = sqlite3.connect(":memory:")
    create_database(connection)
    yield connection
    connection.close()


def table_names(connection):
    rows = connection.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
    return {name for (name,) in rows}


def test_create_database_is_idempotent(db):
    create_database(db)
    assert table_names(db) == {"podcasts", "episodes"}


def test_add_podcast_returns_same_id_for_same_url(db):
    podcast = make_podcast("http://a.example.com", 0)
    first = add_podcast(podcast, db)
    second = add_podcast(podcast, db)
    assert first == second
    assert db.execute("SELECT COUNT(*) FROM podcasts").fetchone()[0] == 1


def test_add_podcast_distinct_urls_get_distinct_ids(db):
    first = add_podcast(make_podcast("http://a.example.com", 0), db)
    second = add_podcast(make_podcast("http://b.example.com", 0), db)
    assert first != second
    assert table_names(db) == {"podcasts", "episodes"}


def test_add_podcast_stores_channel_fields(db):
    podcast = make_podcast("http://a.example.com", 0, title="Lateral")
    podcast_id = add_podcast(podcast, db)
    row = db.execute(
        "SELECT Title, Url, Description, Image FROM podcasts WHERE Id = ?",
        (podcast_id,),
    ).fetchone()
    channel = podcast.feed_data.channel
    assert row == (channel.title, podcast.url, channel.description, channel.image.url)


def test_add_full_podcast_then_get_all(db):
    podcast = make_podcast("http://a.example.com", 3, title="Lateral")
    add_full_podcast(podcast, db)
    [meta] = get_all_podcasts(db)
    assert meta.title == "Lateral"
    assert meta.url == podcast.url
    assert meta.description == podcast.feed_data.channel.description
    assert meta.number_of_episodes == len(podcast.feed_data.channel.items)


def test_adding_twice_does_not_duplicate_episodes(db):
    podcast = make_podcast("http://a.example.com", 2)
    add_full_podcast(podcast, db)
    add_full_podcast(podcast, db)
    [meta] = get_all_podcasts(db)
    assert meta.number_of_episodes == len(podcast.feed_data.channel.items)


def test_podcast_without_episodes_counts_zero(db):
    add_full_podcast(make_podcast("http://a.example.com", 0), db)
    [meta] = get_all_podcasts(db)
    assert meta.number_of_episodes == 0


def test_add_episode_ignores_duplicate_enclosure(db):
    podcast_id = add_podcast(make_podcast("http://a.example.com", 0), db)
    episode = Item(
        title="One", link="http://a.example.com/1",
        enclosure=Enclosure(url="http://a.example.com/1.mp3"),
    )
    add_episode(episode, podcast_id, db)
    add_episode(episode, podcast_id, db)
    rows = db.execute(
        "SELECT PodcastId, EpisodeTitle, EpisodeLink, EnclosureUrl FROM episodes"
    ).fetchall()
    assert rows == [(podcast_id, episode.title, episode.link, episode.enclosure.url)]


def test_get_all_podcasts_counts_per_podcast(db):
    first = make_podcast("http://a.example.com", 2, title="A")
    second = make_podcast("http://b.example.com", 1, title="B")
    add_full_podcast(first, db)
    add_full_podcast(second, db)
    counts = {meta.url: meta.number_of_episodes for meta in get_all_podcasts(db)}
    assert counts == {
        first.url: len(first.feed_data.channel.items),
        second.url: len(second.feed_data.channel.items),
    }


def test_get_all_podcasts_empty(db):
    assert get_all_podcasts(db) == []


def test_add_podcast_without_tables_raises():
    connection = sqlite3.connect(":memory:")
    with pytest.raises(StorageError, match="error inserting podcast"):
        add_podcast(make_podcast("http://a.example.com", 0), connection)
    connection.close()


def test_get_all_podcasts_without_tables_raises():
    connection = sqlite3.connect(":memory:")
    with pytest.raises(StorageError, match="error getting all podcasts"):
        get_all_podcasts(connection)
    connection.close()


def test_create_database_on_closed_connection_raises():
    connection = sqlite3.connect(":memory:")
    connection.close()
    with pytest.raises(StorageError, match="create podcast table"):
        create_database(connection)