# podcaststore

A small podcast library service. It downloads podcast RSS feeds, keeps each
podcast and its episodes in an SQLite database, and serves the collection
through a JSON HTTP API.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
podcaststore
```

This opens (or creates) `data.db` in the current directory, creates the
`podcasts` and `episodes` tables if they are missing, and serves the API with
Flask's built-in server on `0.0.0.0:8080`.

Options:

- `--database PATH` – the SQLite file to use (default `data.db`).
- `--host HOST` – the address to listen on (default `0.0.0.0`).
- `--port PORT` – the port to listen on (default `8080`).
- `--import URL` – instead of serving, fetch the feed at `URL`, print its
  title, description, episode count and its first 10 episodes, store it,
  and exit.

The command exits with status 1 when the database cannot be opened or, with
`--import`, when the feed cannot be fetched or stored.

## HTTP API

All responses are JSON. Cross-origin requests are answered for any origin,
with credentials allowed; preflight requests are accepted for the methods
GET, POST, PUT, DELETE and OPTIONS. Both `/podcasts` and `/podcasts/` are
served.

### `POST /podcasts`

Adds a podcast by its feed address:

```
{"rssFeed": "https://podcasts.example.com/feed.xml"}
```

On success the answer is

```
{"error": false, "message": "Successfully added podcast <title>"}
```

Error answers have the form `{"error": true, "message": "..."}`:

- a body that is not a JSON object gives 400,
  `Unable to interpret JSON structure`;
- a feed that cannot be fetched, does not answer with status 200, or is not
  valid XML gives 400, `Unable to fetch podcast for feed <url>` (a missing
  `rssFeed` ends up here too);
- a storage failure gives 500, `Unable to add podcast for feed <url>`.

Adding the same feed again is harmless: a podcast is identified by its feed
URL and an episode by its enclosure URL, rows already stored are kept as
they are, and new episodes are added.

### `GET /podcasts`

Lists every stored podcast with its episode count:

```
{
  "error": false,
  "data": [
    {
      "Title": "...",
      "Url": "https://podcasts.example.com/feed.xml",
      "Description": "...",
      "NumberOfEpisodes": 4
    }
  ]
}
```

When nothing is stored yet, `data` is `null`. A database failure gives 500,
`Unable to get all podcasts`.

## Using it as a library

```python
from podcaststore.cli import open_database
from podcaststore.feed import fetch_podcast
from podcaststore.storage import add_full_podcast, get_all_podcasts

db = open_database("data.db")  # also creates the tables

podcast = fetch_podcast("https://podcasts.example.com/feed.xml")
add_full_podcast(podcast, db)

for meta in get_all_podcasts(db):
    print(meta.title, meta.number_of_episodes)
```

- `podcaststore.feed.parse_feed(data)` parses an RSS document (bytes or text)
  into `RSS` → `Channel` (title, description, image URL, items) → `Item`
  (title, link, enclosure URL).
- `podcaststore.feed.fetch_podcast(url)` downloads and parses a feed, raising
  `FeedError` when the request fails, the status is not 200, or the body is
  not valid XML.
- `podcaststore.storage` provides `create_database`, `add_podcast`,
  `add_episode`, `add_full_podcast` and `get_all_podcasts`; they raise
  `StorageError` on database failures.
- `podcaststore.api.create_app(db)` returns the Flask application, for
  serving with any WSGI server.
- `podcaststore.cli.import_feed(url, db)` and `print_summary(podcast, limit)`
  are what `--import` uses.

## What it does not do

The API only lists and adds podcasts. There are no routes for listing a
podcast's episodes, or for updating or deleting podcasts, and a podcast's
stored title, description and image are never refreshed from a later fetch
of the same feed.