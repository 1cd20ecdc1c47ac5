"""Builders for Last.fm ``user.getrecenttracks`` payloads used in tests."""

import json
from typing import Any, Dict, List, Optional

NOW_UTS = 1_700_000_000


def make_image(size: str, url: Optional[str] = None) -> Dict[str, str]:
    return {"size": size, "#text": url if url is not None else f"https://img.example/{size}.png"}


def make_track(
    n: int = 1,
    *,
    uts: Optional[Any] = NOW_UTS - 120,
    sizes=("small", "medium", "large", "extralarge"),
    now_playing: bool = False,
    **overrides: Any,
) -> Dict[str, Any]:
    track: Dict[str, Any] = {
        "artist": {"mbid": "", "#text": f"Artist {n}"},
        "streamable": "0",
        "image": [make_image(size, f"https://img.example/{n}/{size}.png") for size in sizes],
        "mbid": "",
        "album": {"mbid": "", "#text": f"Album {n}"},
        "name": f"Track {n}",
        "url": f"https://www.last.fm/music/Artist+{n}/_/Track+{n}",
    }
    if uts is not None:
        track["date"] = {"uts": str(uts), "#text": "14 Nov 2023, 22:11"}
    if now_playing:
        track["@attr"] = {"nowplaying": "true"}
    track.update(overrides)
    return track


def make_payload(tracks: Optional[List[Any]] = None, user: str = "kkyowa") -> Dict[str, Any]:
    tracks = [] if tracks is None else tracks
    return {
        "recenttracks": {
            "track": tracks,
            "@attr": {
                "user": user,
                "totalPages": "1",
                "page": "1",
                "perPage": "10",
                "total": str(len(tracks)),
            },
        }
    }


def payload_text(tracks: Optional[List[Any]] = None) -> str:
    return json.dumps(make_payload(tracks))


__all__ = ["NOW_UTS", "make_image", "make_track", "make_payload", "payload_text"]
