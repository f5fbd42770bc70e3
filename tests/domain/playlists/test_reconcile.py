"""Tests for applying agent playlist commands to a playlist snapshot."""

import pytest

from music_mate.domain.agent import PlaylistAction
from music_mate.domain.playlists import Playlist, apply_action, resolve_indices, select_source_list
from music_mate.domain.tracks import Track


def action(kind: str, name: str = "", indices=()) -> PlaylistAction:
    return PlaylistAction(kind=kind, playlist_name=name, track_indices=tuple(indices))


class TestSourceList:
    """Tests for index source selection and resolution."""

    def test_turn_tracks_win(self, track_a: Track, track_b: Track) -> None:
        assert select_source_list([track_a], [track_b]) == [track_a]

    def test_falls_back_to_last_known(self, track_b: Track) -> None:
        assert select_source_list([], [track_b]) == [track_b]

    def test_resolve_skips_out_of_range(self, three_tracks: list[Track]) -> None:
        assert resolve_indices([0, 1, 3, 4, -1], three_tracks) == [three_tracks[0], three_tracks[2]]

    def test_resolve_keeps_order_given(self, three_tracks: list[Track]) -> None:
        assert resolve_indices([3, 1], three_tracks) == [three_tracks[2], three_tracks[0]]


class TestNoAction:
    """Inputs that leave the collection unchanged."""

    def test_none_action(self, study_playlist: Playlist) -> None:
        assert apply_action(None, [], [], [study_playlist]) == (study_playlist,)

    @pytest.mark.parametrize("kind", ["create", "add", "remove", "rename", "list"])
    def test_empty_name(self, kind: str, study_playlist: Playlist, track_a: Track) -> None:
        assert apply_action(action(kind, "", [1]), [track_a], [], [study_playlist]) == (study_playlist,)

    def test_inputs_not_mutated(self, study_playlist: Playlist, track_a: Track) -> None:
        playlists = [study_playlist]
        apply_action(action("create", "New", [1]), [track_a], [], playlists)
        assert playlists == [study_playlist]


class TestCreate:
    """Tests for the create command."""

    def test_creates_with_resolved_tracks(self, three_tracks: list[Track]) -> None:
        result = apply_action(action("create", "Focus", [2, 1]), three_tracks, [], [])
        assert len(result) == 1
        assert result[0].name == "Focus"
        assert result[0].tracks == (three_tracks[1], three_tracks[0])

    def test_out_of_range_index_skipped(self, track_a: Track) -> None:
        """Test a one-element source with indices [1, 5] yields exactly that element."""
        result = apply_action(action("create", "Y", [1, 5]), [track_a], [], [])
        assert result[0].tracks == (track_a,)

    def test_empty_create(self) -> None:
        result = apply_action(action("create", "Empty"), [], [], [])
        assert result[0].tracks == ()

    def test_duplicate_names_allowed(self, study_playlist: Playlist) -> None:
        result = apply_action(action("create", "Study"), [], [], [study_playlist])
        assert [playlist.name for playlist in result] == ["Study", "Study"]
        assert result[0].id != result[1].id

    def test_appended_at_end(self, study_playlist: Playlist) -> None:
        result = apply_action(action("create", "Later"), [], [], [study_playlist])
        assert result[0] is study_playlist
        assert result[1].name == "Later"

    def test_duplicate_indices_deduplicated(self, track_a: Track) -> None:
        result = apply_action(action("create", "Y", [1, 1]), [track_a], [], [])
        assert result[0].tracks == (track_a,)

    def test_uses_last_known_when_turn_has_no_tracks(self, track_b: Track) -> None:
        result = apply_action(action("create", "Y", [1]), [], [track_b], [])
        assert result[0].tracks == (track_b,)


class TestAdd:
    """Tests for the add command."""

    def test_fallback_to_last_known_and_case_insensitive_match(self, track_a: Track, track_b: Track) -> None:
        """Test {add, "X", [2]} with no turn tracks appends B to a playlist named "x"."""
        playlist = Playlist(name="x")
        result = apply_action(action("add", "X", [2]), [], [track_a, track_b], [playlist])
        assert result[0].tracks == (track_b,)
        assert result[0].id == playlist.id

    def test_adding_twice_keeps_one_copy(self, track_a: Track) -> None:
        playlist = Playlist(name="Mix")
        once = apply_action(action("add", "Mix", [1]), [track_a], [], [playlist])
        twice = apply_action(action("add", "Mix", [1]), [track_a], [], once)
        assert twice[0].tracks == (track_a,)

    def test_dedup_by_title_and_artist(self, track_a: Track) -> None:
        variant = track_a._replace(genre="Other", url="https://elsewhere.test")
        playlist = Playlist(name="Mix", tracks=(track_a,))
        result = apply_action(action("add", "Mix", [1]), [variant], [], [playlist])
        assert result[0].tracks == (track_a,)

    def test_unknown_playlist_is_noop(self, track_a: Track, study_playlist: Playlist) -> None:
        result = apply_action(action("add", "Nope", [1]), [track_a], [], [study_playlist])
        assert result == (study_playlist,)

    def test_first_match_only(self, track_a: Track) -> None:
        first, second = Playlist(name="Mix"), Playlist(name="MIX")
        result = apply_action(action("add", "mix", [1]), [track_a], [], [first, second])
        assert result[0].tracks == (track_a,)
        assert result[1] is second

    def test_out_of_range_indices_ignored(self, track_a: Track) -> None:
        playlist = Playlist(name="Mix")
        result = apply_action(action("add", "Mix", [0, 2, 9]), [track_a], [], [playlist])
        assert result[0].tracks == ()

    def test_position_preserved(self, track_a: Track) -> None:
        playlists = [Playlist(name="One"), Playlist(name="Two"), Playlist(name="Three")]
        result = apply_action(action("add", "two", [1]), [track_a], [], playlists)
        assert [playlist.name for playlist in result] == ["One", "Two", "Three"]
        assert result[1].tracks == (track_a,)


class TestRemove:
    """Tests for the remove command."""

    def test_positions_taken_before_removal(self, study_playlist: Playlist, three_tracks: list[Track]) -> None:
        """Test removing [1, 3] from three tracks leaves exactly the middle one."""
        result = apply_action(action("remove", "study", [1, 3]), [], [], [study_playlist])
        assert result[0].tracks == (three_tracks[1],)

    def test_positions_refer_to_playlist_not_source(self, study_playlist: Playlist, three_tracks, track_a) -> None:
        other = Track(title="Elsewhere", artist="Nobody")
        result = apply_action(action("remove", "Study", [2]), [other, track_a], [], [study_playlist])
        assert result[0].tracks == (three_tracks[0], three_tracks[2])

    def test_out_of_range_positions_ignored(self, study_playlist: Playlist) -> None:
        result = apply_action(action("remove", "Study", [0, 4]), [], [], [study_playlist])
        assert result[0].tracks == study_playlist.tracks

    def test_unknown_playlist_is_noop(self, study_playlist: Playlist) -> None:
        assert apply_action(action("remove", "Nope", [1]), [], [], [study_playlist]) == (study_playlist,)


class TestReadOnlyKinds:
    """rename and list never change the collection."""

    def test_rename_is_inert(self, study_playlist: Playlist, track_a: Track) -> None:
        result = apply_action(action("rename", "Study", [1]), [track_a], [], [study_playlist])
        assert result == (study_playlist,)

    def test_list_is_inert(self, study_playlist: Playlist) -> None:
        assert apply_action(action("list", "Study"), [], [], [study_playlist]) == (study_playlist,)
