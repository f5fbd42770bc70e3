"""Tests for the conversation/playlist store."""

import json

import pytest

from music_mate.core.storage import (
    STORAGE_KEY_MESSAGES,
    STORAGE_KEY_PLAYLISTS,
    STORAGE_KEY_SESSION,
    MemoryStorage,
)
from music_mate.domain.agent import AgentReply, PlaylistAction
from music_mate.domain.conversation import SAMPLE_TRACKS, ConversationStore, rebuild_last_known
from music_mate.domain.playlists import ChatTurn, Playlist
from music_mate.domain.tracks import Track


def stored(storage: MemoryStorage, key: str):
    return json.loads(storage.raw(key))


class TestLoading:
    """Tests for loading persisted state."""

    def test_empty_storage(self, store: ConversationStore) -> None:
        assert store.turns == ()
        assert store.playlists == ()
        assert store.last_known_tracks == ()

    def test_session_bootstrapped_and_persisted(self, storage: MemoryStorage) -> None:
        store = ConversationStore(storage)
        assert store.session_id
        assert stored(storage, STORAGE_KEY_SESSION) == store.session_id
        assert ConversationStore(storage).session_id == store.session_id

    def test_existing_session_reused(self) -> None:
        storage = MemoryStorage({STORAGE_KEY_SESSION: json.dumps("abc-123")})
        assert ConversationStore(storage).session_id == "abc-123"

    def test_state_survives_reload(self, storage: MemoryStorage, track_a: Track) -> None:
        store = ConversationStore(storage)
        playlist = store.create_playlist("Mix")
        store.append_turn(ChatTurn.user("hi"))
        store.append_turn(ChatTurn.assistant("here", tracks=(track_a,)))

        reloaded = ConversationStore(storage)
        assert reloaded.playlists == store.playlists
        assert [turn.content for turn in reloaded.turns] == ["hi", "here"]
        assert reloaded.get_playlist(playlist.id) is not None

    def test_last_known_rebuilt_from_turns(self, storage: MemoryStorage, track_a: Track, track_b: Track) -> None:
        store = ConversationStore(storage)
        store.append_turn(ChatTurn.assistant("first", tracks=(track_a,)))
        store.append_turn(ChatTurn.assistant("second", tracks=(track_b,)))
        store.append_turn(ChatTurn.assistant("no tracks"))

        assert ConversationStore(storage).last_known_tracks == (track_b,)

    @pytest.mark.parametrize("corrupt", ["not json", "{broken", json.dumps({"a": 1}), json.dumps(5)])
    def test_corrupt_values_treated_as_absent(self, corrupt: str) -> None:
        storage = MemoryStorage(
            {STORAGE_KEY_PLAYLISTS: corrupt, STORAGE_KEY_MESSAGES: corrupt, STORAGE_KEY_SESSION: corrupt}
        )
        store = ConversationStore(storage)
        assert store.playlists == ()
        assert store.turns == ()
        assert isinstance(store.session_id, str) and store.session_id

    def test_unreadable_entries_skipped(self) -> None:
        good = Playlist(name="Good").to_dict()
        storage = MemoryStorage(
            {
                STORAGE_KEY_PLAYLISTS: json.dumps([good, {"name": "no id"}, 7]),
                STORAGE_KEY_MESSAGES: json.dumps([{"role": "user", "content": "ok"}, {"role": "robot"}]),
            }
        )
        store = ConversationStore(storage)
        assert [playlist.name for playlist in store.playlists] == ["Good"]
        assert [turn.content for turn in store.turns] == ["ok"]

    def test_rebuild_last_known_helper(self, track_a: Track) -> None:
        turns = [ChatTurn.assistant("a", tracks=(track_a,)), ChatTurn.user("b")]
        assert rebuild_last_known(turns) == (track_a,)
        assert rebuild_last_known([]) == ()


class TestApplyReply:
    """Tests for applying interpreted agent replies."""

    def test_playlist_updated_before_turn_appended(self, store: ConversationStore, three_tracks) -> None:
        reply = AgentReply(
            message="Made it",
            tracks=tuple(three_tracks),
            action=PlaylistAction(kind="create", playlist_name="Focus", track_indices=(1, 3)),
        )
        turn = store.apply_reply(reply)

        assert store.turns[-1] == turn
        assert turn.playlist_action == reply.action
        assert store.playlists[0].tracks == (three_tracks[0], three_tracks[2])
        assert store.last_known_tracks == tuple(three_tracks)

    def test_follow_up_uses_last_known(self, store: ConversationStore, three_tracks) -> None:
        store.create_playlist("Focus")
        store.apply_reply(AgentReply(message="Recs", tracks=tuple(three_tracks)))
        store.apply_reply(
            AgentReply(
                message="Added",
                action=PlaylistAction(kind="add", playlist_name="focus", track_indices=(2,)),
            )
        )
        assert store.playlists[0].tracks == (three_tracks[1],)
        assert store.last_known_tracks == tuple(three_tracks)

    def test_reply_without_action_persists_turn_only(self, storage: MemoryStorage, store: ConversationStore) -> None:
        store.apply_reply(AgentReply(message="Just chatting"))
        assert stored(storage, STORAGE_KEY_MESSAGES)[-1]["content"] == "Just chatting"
        assert storage.raw(STORAGE_KEY_PLAYLISTS) is None


class TestManualOperations:
    """Tests for user-driven playlist operations."""

    def test_create_persists(self, storage: MemoryStorage, store: ConversationStore) -> None:
        playlist = store.create_playlist("  Road Trip ")
        assert playlist.name == "Road Trip"
        assert stored(storage, STORAGE_KEY_PLAYLISTS)[0]["id"] == playlist.id

    def test_create_blank_name(self, store: ConversationStore) -> None:
        assert store.create_playlist("   ") is None
        assert store.playlists == ()

    def test_delete(self, store: ConversationStore) -> None:
        playlist = store.create_playlist("Temp")
        assert store.delete_playlist(playlist.id) is True
        assert store.playlists == ()
        assert store.delete_playlist(playlist.id) is False

    def test_add_track_dedups(self, store: ConversationStore, track_a: Track) -> None:
        playlist = store.create_playlist("Mix")
        assert store.add_track_manually(playlist.id, track_a) is True
        assert store.add_track_manually(playlist.id, track_a._replace(url="https://other.test")) is False
        assert store.get_playlist(playlist.id).tracks == (track_a,)

    def test_add_to_unknown_playlist(self, store: ConversationStore, track_a: Track) -> None:
        assert store.add_track_manually("missing", track_a) is False

    def test_remove_by_zero_based_index(self, store: ConversationStore, three_tracks) -> None:
        playlist = store.create_playlist("Mix")
        for track in three_tracks:
            store.add_track_manually(playlist.id, track)

        assert store.remove_track_manually(playlist.id, 1) is True
        assert store.get_playlist(playlist.id).tracks == (three_tracks[0], three_tracks[2])

    @pytest.mark.parametrize("index", [-1, 3, 99])
    def test_remove_out_of_range(self, store: ConversationStore, three_tracks, index: int) -> None:
        playlist = store.create_playlist("Mix")
        for track in three_tracks:
            store.add_track_manually(playlist.id, track)
        assert store.remove_track_manually(playlist.id, index) is False
        assert store.get_playlist(playlist.id).track_count == 3

    def test_clear_conversation(self, storage: MemoryStorage, store: ConversationStore, track_a: Track) -> None:
        store.append_turn(ChatTurn.assistant("x", tracks=(track_a,)))
        assert store.clear_conversation() is True
        assert store.turns == ()
        assert store.last_known_tracks == ()
        assert stored(storage, STORAGE_KEY_MESSAGES) == []


class TestSampleMode:
    """Tests for sample mode isolation."""

    def test_sample_data_shown(self, store: ConversationStore) -> None:
        store.set_sample_mode(True)
        assert [playlist.name for playlist in store.playlists] == ["Late Night Study", "Energy Boost"]
        assert len(store.turns) == 4
        assert store.last_known_tracks == SAMPLE_TRACKS[3:]

    def test_toggle_never_touches_live_data(self, storage: MemoryStorage, track_a: Track) -> None:
        store = ConversationStore(storage)
        live = store.create_playlist("Mine")
        store.append_turn(ChatTurn.user("hello"))
        before_playlists = storage.raw(STORAGE_KEY_PLAYLISTS)
        before_turns = storage.raw(STORAGE_KEY_MESSAGES)

        store.set_sample_mode(True)
        sample_id = store.playlists[0].id
        store.create_playlist("Sample only")
        store.add_track_manually(sample_id, track_a)
        store.remove_track_manually(sample_id, 0)
        store.delete_playlist(store.playlists[1].id)
        store.append_turn(ChatTurn.user("sample chat"))
        store.apply_reply(
            AgentReply(message="ok", action=PlaylistAction(kind="create", playlist_name="Demo"))
        )
        store.set_sample_mode(False)

        assert store.playlists == (live,)
        assert [turn.content for turn in store.turns] == ["hello"]
        assert storage.raw(STORAGE_KEY_PLAYLISTS) == before_playlists
        assert storage.raw(STORAGE_KEY_MESSAGES) == before_turns

    def test_reentering_resets_sample_data(self, store: ConversationStore) -> None:
        store.set_sample_mode(True)
        store.create_playlist("Scratch")
        store.set_sample_mode(False)
        store.set_sample_mode(True)
        assert len(store.playlists) == 2

    def test_clear_is_noop_in_sample_mode(self, store: ConversationStore) -> None:
        store.set_sample_mode(True)
        assert store.clear_conversation() is False
        assert len(store.turns) == 4

    def test_start_in_sample_mode(self, storage: MemoryStorage) -> None:
        store = ConversationStore(storage, sample_mode=True)
        assert store.sample_mode is True
        assert len(store.playlists) == 2
        assert storage.raw(STORAGE_KEY_PLAYLISTS) is None
        assert storage.raw(STORAGE_KEY_SESSION) is None

    def test_session_token_not_written_in_sample_mode(self, storage: MemoryStorage) -> None:
        store = ConversationStore(storage, sample_mode=True)
        session_id = store.session_id
        assert session_id
        assert storage.raw(STORAGE_KEY_SESSION) is None

        store.set_sample_mode(False)
        assert stored(storage, STORAGE_KEY_SESSION) == session_id
        assert store.session_id == session_id
