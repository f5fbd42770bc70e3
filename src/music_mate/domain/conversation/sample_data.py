"""
Fixed demonstration dataset shown in sample mode.

Timestamps are computed relative to the moment the dataset is built so the
demo conversation always looks recent.
"""

from datetime import datetime, timedelta, timezone

from music_mate.domain.playlists import ChatTurn, Playlist
from music_mate.domain.tracks import Track

SAMPLE_TRACKS: tuple[Track, ...] = (
    Track(
        title="Celestial Drift",
        artist="Luna Wave",
        genre="Ambient",
        source="Free Music Archive",
        url="https://freemusicarchive.org/example1",
        description="Ethereal ambient soundscape perfect for late-night study sessions.",
    ),
    Track(
        title="Neon Boulevard",
        artist="Retro Synth Collective",
        genre="Synthwave",
        source="Jamendo",
        url="https://jamendo.com/example2",
        description="Pulsating synthwave with 80s vibes and driving basslines.",
    ),
    Track(
        title="Morning Bloom",
        artist="Acoustic Garden",
        genre="Folk",
        source="Creative Commons",
        url="https://creativecommons.org/example3",
        description="Warm acoustic folk guitar with gentle fingerpicking patterns.",
    ),
    Track(
        title="Deep Current",
        artist="Bass Theory",
        genre="Lo-fi Hip Hop",
        source="Free Music Archive",
        url="https://freemusicarchive.org/example4",
        description="Chill lo-fi beats with jazzy samples, ideal for relaxing.",
    ),
    Track(
        title="Electric Pulse",
        artist="Circuit Breaker",
        genre="Electronic",
        source="Jamendo",
        url="https://jamendo.com/example5",
        description="High-energy electronic track with complex layered synths.",
    ),
)


def _ago(seconds: int) -> str:
    return (datetime.now(timezone.utc) - timedelta(seconds=seconds)).isoformat()


def sample_turns() -> tuple[ChatTurn, ...]:
    """The four-turn demo conversation."""
    return (
        ChatTurn(
            id="sample-1",
            role="user",
            content=(
                "I'm looking for some chill ambient music for studying late at night. "
                "Something atmospheric and relaxing."
            ),
            timestamp=_ago(300),
        ),
        ChatTurn(
            id="sample-2",
            role="assistant",
            content=(
                "Great taste! I found some amazing free ambient and chill tracks that are "
                "perfect for late-night study sessions. These range from ethereal "
                "soundscapes to lo-fi beats -- all legally free to listen to."
            ),
            tracks=SAMPLE_TRACKS[:3],
            timestamp=_ago(290),
        ),
        ChatTurn(
            id="sample-3",
            role="user",
            content="These are awesome! Can you find some more upbeat electronic tracks too?",
            timestamp=_ago(200),
        ),
        ChatTurn(
            id="sample-4",
            role="assistant",
            content=(
                "Absolutely! Here are some energetic electronic and synthwave tracks to get "
                "you moving. These are all available for free streaming."
            ),
            tracks=SAMPLE_TRACKS[3:],
            timestamp=_ago(190),
        ),
    )


def sample_playlists() -> tuple[Playlist, ...]:
    """The two demo playlists."""
    return (
        Playlist(
            id="sample-pl-1",
            name="Late Night Study",
            tracks=SAMPLE_TRACKS[:2],
            created_at=_ago(86400),
        ),
        Playlist(
            id="sample-pl-2",
            name="Energy Boost",
            tracks=SAMPLE_TRACKS[3:],
            created_at=_ago(43200),
        ),
    )
