"""
Roster store for Pelada Manager.

Keeps player records keyed by id and notifies subscribers with the full,
name-ordered snapshot when they subscribe and after every committed change.
Snapshots can be written to and read from JSON files.
"""
import json
import logging
import os
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional, Any

from ..models import Participant, Match

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[List[Participant]], None]
ErrorCallback = Callable[[Exception], None]


class PlayerNotFoundError(KeyError):
    """Raised when a player id is not in the roster."""

    def __init__(self, player_id: str) -> None:
        self.player_id = player_id
        super().__init__(player_id)

    def __str__(self) -> str:
        return f"Player not found: {self.player_id}"


class RosterStore:
    """
    In-process document store for players and matches.

    Every read returns copies of the records, so mutating a snapshot or a
    player returned by :meth:`get` never changes the store; writes go through
    :meth:`put`, :meth:`update` and :meth:`batch_update`.
    """

    def __init__(self, players: Optional[Iterable[Participant]] = None) -> None:
        self._players: Dict[str, Participant] = {}
        self._matches: Dict[str, Match] = {}
        self._subscribers: Dict[int, tuple] = {}
        self._next_token = 0
        for player in players or []:
            self._players[player.id] = self._copy(player)

    # ==================== Subscriptions ==================== #

    def subscribe(
        self,
        callback: SnapshotCallback,
        on_error: Optional[ErrorCallback] = None
    ) -> Callable[[], None]:
        """
        Register a snapshot listener.

        The callback runs immediately with the current snapshot and again after
        every mutation.

        Returns:
            A function that unregisters the listener
        """
        token = self._next_token
        self._next_token += 1
        self._subscribers[token] = (callback, on_error)
        self._deliver(token, self.snapshot())

        def dispose() -> None:
            self._subscribers.pop(token, None)

        return dispose

    def snapshot(self) -> List[Participant]:
        """Copies of all players ordered by name."""
        players = sorted(self._players.values(), key=lambda p: (p.name.lower(), p.id))
        return [self._copy(p) for p in players]

    @staticmethod
    def _copy(player: Participant) -> Participant:
        return replace(player, statistics=replace(player.statistics))

    def _deliver(self, token: int, snapshot: List[Participant]) -> None:
        entry = self._subscribers.get(token)
        if entry is None:
            return
        callback, on_error = entry
        try:
            callback(snapshot)
        except Exception as e:
            logger.exception("Roster subscriber failed")
            if on_error is not None:
                on_error(e)

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for token in list(self._subscribers):
            self._deliver(token, snapshot)

    # ==================== Players ==================== #

    def get(self, player_id: str) -> Participant:
        """
        Get a player by id.

        Raises:
            PlayerNotFoundError: If the id is unknown
        """
        return self._copy(self._require(player_id))

    def _require(self, player_id: str) -> Participant:
        try:
            return self._players[player_id]
        except KeyError:
            raise PlayerNotFoundError(player_id) from None

    def contains(self, player_id: str) -> bool:
        return player_id in self._players

    def all(self) -> List[Participant]:
        return [self._copy(p) for p in self._players.values()]

    def is_empty(self) -> bool:
        return not self._players

    def put(self, player: Participant) -> None:
        """Insert or replace a player with a copy of the given record."""
        self._players[player.id] = self._copy(player)
        self._notify()

    def update(self, player_id: str, **fields: Any) -> Participant:
        """
        Set fields on an existing player.

        Raises:
            PlayerNotFoundError: If the id is unknown
            AttributeError: If a field name is not a player attribute
        """
        player = self._require(player_id)
        self._apply(player, fields)
        self._notify()
        return self._copy(player)

    def batch_update(self, changes: Dict[str, Dict[str, Any]]) -> None:
        """Apply several player updates and notify subscribers once."""
        players = {player_id: self._require(player_id) for player_id in changes}
        for player_id, fields in changes.items():
            self._apply(players[player_id], fields)
        self._notify()

    def remove(self, player_id: str) -> Participant:
        self._require(player_id)
        player = self._players.pop(player_id)
        self._notify()
        return player

    @staticmethod
    def _apply(player: Participant, fields: Dict[str, Any]) -> None:
        for name, value in fields.items():
            if not hasattr(player, name) or name == "id":
                raise AttributeError(f"Cannot update player field: {name}")
            setattr(player, name, value)

    # ==================== Matches ==================== #

    def matches(self) -> List[Match]:
        return list(self._matches.values())

    def put_match(self, match: Match) -> None:
        self._matches[match.id] = match

    # ==================== Persistence ==================== #

    def to_json(self) -> dict:
        return {
            "players": [p.to_dict() for p in self._players.values()],
            "matches": [m.to_dict() for m in self._matches.values()],
        }

    def save_to_file(self, file_path: str) -> None:
        """
        Save players and matches to a JSON file.

        Raises:
            OSError: If the file cannot be written
        """
        directory = os.path.dirname(file_path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(self.to_json(), f, indent=2, ensure_ascii=False)

    @classmethod
    def load_from_file(cls, file_path: str) -> "RosterStore":
        """
        Load a store from a JSON file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            json.JSONDecodeError: If the file contains invalid JSON
            KeyError, ValueError: If a record is malformed
        """
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"Roster file not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        store = cls(Participant.from_dict(p) for p in data.get("players", []))
        for match_data in data.get("matches", []):
            store.put_match(Match.from_dict(match_data))
        return store
