"""Multi-room audio: songs and playlists per room."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from pyutopia._constants import DEFAULT_AUDIO_VOLUME
from pyutopia.config import UtopiaConfig
from pyutopia.devices._base import ROOM_NOT_FOUND, Clock, DeviceSimulator, utcnow
from pyutopia.environment import RoomRegistry
from pyutopia.models.enums import AudioSourceType, AudioState
from pyutopia.models.status import AudioStatus


@dataclass
class _RoomAudio:
    state: AudioState = AudioState.STOPPED
    source_type: AudioSourceType | None = None
    source_name: str | None = None
    volume: int = DEFAULT_AUDIO_VOLUME


class AudioSimulator(DeviceSimulator):
    """Room-grouped playback.

    Multi-room commands apply to every room that exists and report the
    unknown ones instead of a success message.
    """

    kind = "audio"

    def __init__(self, registry: RoomRegistry, config: UtopiaConfig, *, clock: Clock = utcnow) -> None:
        super().__init__(registry, config, clock=clock)
        self._rooms = [_RoomAudio() for _ in self._registry.ids()]

    def _partition(self, rooms: Iterable[str]) -> tuple[list[int], list[str]]:
        if isinstance(rooms, str):
            rooms = [rooms]
        found: list[int] = []
        missing: list[str] = []
        for room in rooms:
            room_id = self._resolve(room)
            if room_id is None:
                missing.append(room)
            elif room_id not in found:
                found.append(room_id)
        return found, missing

    def _names(self, room_ids: list[int]) -> str:
        return ", ".join(self._registry.name(room_id) for room_id in room_ids)

    async def _play(self, source_type: AudioSourceType, source_name: str, rooms: Iterable[str]) -> tuple[str, str]:
        found, missing = self._partition(rooms)
        async with self._lock:
            for room_id in found:
                state = self._rooms[room_id]
                state.state = AudioState.PLAYING
                state.source_type = source_type
                state.source_name = source_name
        return self._names(found), ", ".join(missing)

    async def play_song(self, song: str, rooms: Iterable[str]) -> str:
        """Plays a song (on repeat) in one or more rooms."""
        played, missing = await self._play(AudioSourceType.SONG, song, rooms)
        if missing:
            return f"Rooms not found: {missing}"
        return f"Playing song '{song}' in rooms: {played} (repeat mode)."

    async def play_playlist(self, playlist: str, rooms: Iterable[str]) -> str:
        played, missing = await self._play(AudioSourceType.PLAYLIST, playlist, rooms)
        if missing:
            return f"Rooms not found: {missing}"
        return f"Playing playlist '{playlist}' in rooms: {played}."

    async def stop(self, rooms: Iterable[str]) -> str:
        """Stops audio in one or more rooms."""
        found, missing = self._partition(rooms)
        async with self._lock:
            for room_id in found:
                self._rooms[room_id] = _RoomAudio(volume=self._rooms[room_id].volume)
        if missing:
            return f"Rooms not found: {', '.join(missing)}"
        return f"Stopped audio in rooms: {self._names(found)}."

    async def set_volume(self, room: str, volume: int) -> str:
        """Sets the volume in a room, clamped to 0-100."""
        room_id = self._resolve(room)
        if room_id is None:
            return ROOM_NOT_FOUND
        applied = max(0, min(100, int(volume)))
        async with self._lock:
            self._rooms[room_id].volume = applied
        return f"Volume in {self._registry.name(room_id)} set to {applied}."

    async def get_status(self, room: str) -> str:
        room_id = self._resolve(room)
        if room_id is None:
            return ROOM_NOT_FOUND
        name = self._registry.name(room_id)
        async with self._lock:
            state = self._rooms[room_id]
            if state.state is AudioState.STOPPED:
                return f"Audio is stopped in {name}. Volume: {state.volume}"
            if state.source_type is AudioSourceType.SONG:
                return f"Playing song '{state.source_name}' in {name} (repeat). Volume: {state.volume}"
            return f"Playing playlist '{state.source_name}' in {name}. Volume: {state.volume}"

    async def snapshot(self, room: str) -> AudioStatus | None:
        room_id = self._resolve(room)
        if room_id is None:
            return None
        async with self._lock:
            state = self._rooms[room_id]
            return AudioStatus(
                room=self._registry.name(room_id),
                state=state.state,
                source_type=state.source_type,
                source_name=state.source_name,
                volume=state.volume,
            )
