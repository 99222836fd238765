"""Fetching and parsing podcast RSS feeds."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any

import requests


class FeedError(Exception):
    """Raised when a feed cannot be fetched or understood."""


@dataclass
class Enclosure:
    url: str = ""


@dataclass
class Item:
    title: str = ""
    link: str = ""
    enclosure: Enclosure = field(default_factory=Enclosure)


@dataclass
class Image:
    url: str = ""


@dataclass
class Channel:
    title: str = ""
    description: str = ""
    image: Image = field(default_factory=Image)
    items: list[Item] = field(default_factory=list)


@dataclass
class RSS:
    channel: Channel = field(default_factory=Channel)


@dataclass
class Podcast:
    feed_data: RSS
    url: str


@dataclass
class PodcastMetaData:
    title: str = ""
    url: str = ""
    description: str = ""
    number_of_episodes: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form used by the HTTP API."""
        return {
            "Title": self.title,
            "Url": self.url,
            "Description": self.description,
            "NumberOfEpisodes": self.number_of_episodes,
        }


def _local(name: str) -> str:
    """Strip any namespace from an element or attribute name."""
    return name.rsplit("}", 1)[-1]


def _text(element: ET.Element) -> str:
    """Character data directly inside an element, nested elements skipped."""
    return "".join([element.text or "", *(child.tail or "" for child in element)])


def _parse_item(element: ET.Element) -> Item:
    item = Item()
    for child in element:
        name = _local(child.tag)
        if name == "title":
            item.title = _text(child)
        elif name == "link":
            item.link = _text(child)
        elif name == "enclosure":
            for key, value in child.attrib.items():
                if _local(key) == "url":
                    item.enclosure.url = value
    return item


def _fill_channel(channel: Channel, element: ET.Element) -> None:
    for child in element:
        name = _local(child.tag)
        if name == "title":
            channel.title = _text(child)
        elif name == "description":
            channel.description = _text(child)
        elif name == "image":
            for url in child:
                if _local(url.tag) == "url":
                    channel.image.url = _text(url)
        elif name == "item":
            channel.items.append(_parse_item(child))


def parse_feed(data: bytes | str) -> RSS:
    """Parse an RSS document into its channel, image and items."""
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise FeedError(f"invalid XML: {exc}") from exc
    rss = RSS()
    for element in root:
        if _local(element.tag) == "channel":
            _fill_channel(rss.channel, element)
    return rss


def fetch_podcast(url: str) -> Podcast:
    """Download the feed at ``url`` and parse it."""
    try:
        response = requests.get(url)
    except requests.RequestException as exc:
        raise FeedError(f"error when making request: {exc}") from exc
    with response:
        if response.status_code != 200:
            raise FeedError(f"unsuccessful response from feed: {response.status_code}")
        return Podcast(feed_data=parse_feed(response.content), url=url)