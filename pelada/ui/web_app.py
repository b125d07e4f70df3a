"""
Web application module for Pelada Manager.

This module contains the Flask web server that exposes the roster, finance,
scout, match and team draw features as JSON API endpoints.
"""
import logging
import os
from typing import Optional

from flask import Flask, jsonify, request

from ..models import Participant, RoleCategory
from ..services import (
    AvatarUploadError, InsufficientPlayersError, InvalidInputError,
    MatchFullError, MatchValidationError, PlayerNotFoundError,
    PlayerValidationError, ServiceFactory
)
from ..services.roster_partitioner import RandomSource
from ..services.roster_store import RosterStore
from ..utils import APP_TITLE, DEFAULT_RATING

logger = logging.getLogger(__name__)


class WebAppState:
    """
    State holder for the web application.

    Services are created by the factory around one shared roster store. The
    draw session follows the confirmed roster size through a store
    subscription. With a roster file, the store is written back to it after
    every successful change and on close.
    """

    def __init__(
        self,
        store: Optional[RosterStore] = None,
        rng: Optional[RandomSource] = None,
        roster_file: Optional[str] = None
    ):
        self.service_factory = ServiceFactory(store)
        services = self.service_factory.create_complete_service_suite(rng=rng)
        self.store = services['store']
        self.match_service = services['match']
        self.roster_service = services['roster']
        self.draw_session = services['draw']
        self.avatar_storage = services['avatars']
        self.roster_file = roster_file
        self.last_error: Optional[str] = None
        self._unsubscribe = self.store.subscribe(self._on_roster_change, self._on_roster_error)

    def _on_roster_change(self, players) -> None:
        eligible = sum(1 for p in players if p.confirmed)
        self.draw_session.update_eligible_count(eligible)

    def _on_roster_error(self, error: Exception) -> None:
        self.last_error = str(error)

    def save(self) -> None:
        """Write the roster to the roster file, if one is configured."""
        if not self.roster_file:
            return
        try:
            self.store.save_to_file(self.roster_file)
        except OSError as e:
            logger.exception("Could not save roster to %s", self.roster_file)
            self.last_error = str(e)

    def close(self) -> None:
        """Stop following the roster and save it a final time."""
        self._unsubscribe()
        self.save()


def _error(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _player_payload(player: Participant) -> dict:
    data = player.to_dict()
    data["stars"] = player.star_rating()
    return data


def create_app(state: Optional[WebAppState] = None) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        state: Application state; a fresh one with an empty roster if omitted

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app_state = state or WebAppState()
    app.config["APP_STATE"] = app_state

    @app.errorhandler(PlayerNotFoundError)
    def handle_not_found(e):
        return _error(str(e), 404)

    @app.after_request
    def persist_changes(response):
        if request.method == "POST" and response.status_code < 400:
            app_state.save()
        return response

    @app.route("/")
    def index():
        """Basic service information."""
        return jsonify({"success": True, "app": APP_TITLE})

    # ==================== Player Endpoints ==================== #

    @app.route("/api/players", methods=["GET"])
    def get_players():
        """Get all players ordered by name."""
        players = [_player_payload(p) for p in app_state.store.snapshot()]
        return jsonify({
            "success": True,
            "players": players,
            "count": len(players),
            "confirmed": sum(1 for p in players if p["confirmed"]),
            "sync_error": app_state.last_error,
        })

    @app.route("/api/players", methods=["POST"])
    def create_player():
        """Create a new player."""
        data = _json_body()
        try:
            player = app_state.roster_service.create_player(
                player_id=data.get("id", ""),
                name=data.get("name", ""),
                position=data.get("position", RoleCategory.MIDFIELDER.value),
                rating=int(data.get("rating", DEFAULT_RATING)),
                club=data.get("club"),
                number=int(data["number"]) if data.get("number") not in (None, "") else None,
            )
        except (PlayerValidationError, ValueError, TypeError) as e:
            return _error(str(e), 400)
        return jsonify({"success": True, "player": _player_payload(player)}), 201

    @app.route("/api/players/<player_id>", methods=["GET"])
    def get_player(player_id: str):
        """Get a single player."""
        player = app_state.store.get(player_id)
        return jsonify({"success": True, "player": _player_payload(player)})

    @app.route("/api/players/<player_id>/presence", methods=["POST"])
    def toggle_presence(player_id: str):
        """Confirm or withdraw attendance."""
        try:
            player = app_state.roster_service.toggle_presence(player_id)
        except MatchFullError as e:
            return _error(str(e), 409)
        return jsonify({"success": True, "player": _player_payload(player)})

    @app.route("/api/players/<player_id>/payment", methods=["POST"])
    def toggle_payment(player_id: str):
        """Mark the session fee as paid or pending."""
        player = app_state.roster_service.toggle_payment(player_id)
        return jsonify({"success": True, "player": _player_payload(player)})

    @app.route("/api/players/<player_id>/avatar", methods=["POST"])
    def update_avatar(player_id: str):
        """Store a new avatar: raw image bytes, or JSON with an existing URL."""
        app_state.store.get(player_id)
        if request.is_json:
            url = _json_body().get("url")
            if not isinstance(url, str) or not url.strip():
                return _error("Avatar URL is required", 400)
            url = url.strip()
        else:
            try:
                url = app_state.avatar_storage.upload_avatar(
                    player_id, request.get_data(), request.content_type or ""
                )
            except AvatarUploadError as e:
                return _error(str(e), 502)
        player = app_state.roster_service.update_avatar(player_id, url)
        return jsonify({"success": True, "player": _player_payload(player)})

    # ==================== Finance & Scout ==================== #

    @app.route("/api/finance", methods=["GET"])
    def get_finance():
        """Fee summary plus the filtered player list."""
        try:
            players = app_state.roster_service.filter_by_payment(
                request.args.get("filter", "all"),
                request.args.get("search", "")
            )
        except ValueError as e:
            return _error(str(e), 400)
        return jsonify({
            "success": True,
            "summary": app_state.roster_service.finance_summary(),
            "players": [_player_payload(p) for p in players],
        })

    @app.route("/api/scout", methods=["GET"])
    def get_scout():
        """Players ranked by goals."""
        try:
            players = app_state.roster_service.scout_ranking(request.args.get("position"))
        except ValueError as e:
            return _error(str(e), 400)
        return jsonify({"success": True, "players": [_player_payload(p) for p in players]})

    # ==================== Match Endpoints ==================== #

    @app.route("/api/match", methods=["GET"])
    def get_match():
        """Get the active match, if any."""
        match = app_state.match_service.active_match()
        return jsonify({"success": True, "match": match.to_dict() if match else None})

    @app.route("/api/match", methods=["POST"])
    def create_match():
        """Create a new active match and reset attendance and payments."""
        data = _json_body()
        try:
            match = app_state.match_service.create_match(
                location=data.get("location", ""),
                date=data.get("date", ""),
                time=data.get("time", ""),
                match_type=data.get("type", "Society"),
                price=float(data.get("price", 0) or 0),
                limit=int(data.get("limit", 0) or 0),
            )
        except (MatchValidationError, ValueError, TypeError) as e:
            return _error(str(e), 400)
        return jsonify({"success": True, "match": match.to_dict()}), 201

    # ==================== Draw Endpoints ==================== #

    def _draw_state() -> dict:
        eligible = len(app_state.roster_service.confirmed_players())
        return app_state.draw_session.to_dict(eligible)

    @app.route("/api/draw", methods=["GET"])
    def get_draw():
        """Team count, balance toggle and last result."""
        return jsonify({"success": True, "draw": _draw_state()})

    @app.route("/api/draw/config", methods=["POST"])
    def configure_draw():
        """Change the team count or the level-balancing toggle."""
        data = _json_body()
        session = app_state.draw_session
        if "balance_levels" in data and not isinstance(data["balance_levels"], bool):
            return _error("balance_levels must be true or false", 400)
        try:
            if "number_of_teams" in data:
                session.set_number_of_teams(int(data["number_of_teams"]))
            if data.get("step") == "up":
                session.increment()
            elif data.get("step") == "down":
                session.decrement()
            if "balance_levels" in data:
                session.balance_levels = data["balance_levels"]
            if data.get("reset_override"):
                session.reset_override(len(app_state.roster_service.confirmed_players()))
        except (ValueError, TypeError) as e:
            return _error(str(e), 400)
        return jsonify({"success": True, "draw": _draw_state()})

    @app.route("/api/draw", methods=["POST"])
    def run_draw():
        """Draw teams from the confirmed players."""
        eligible = app_state.roster_service.confirmed_players()
        try:
            app_state.draw_session.run_draw(eligible)
        except InsufficientPlayersError as e:
            return jsonify({
                "success": False,
                "error": (
                    f"At least {e.required} confirmed players are needed "
                    f"for {e.number_of_teams} teams"
                ),
                "number_of_teams": e.number_of_teams,
                "eligible_count": e.eligible_count,
            }), 400
        except InvalidInputError as e:
            return _error(str(e), 400)
        return jsonify({"success": True, "draw": _draw_state()})

    @app.route("/api/draw/share", methods=["GET"])
    def share_draw():
        """Shareable text for the last drawn teams."""
        text = app_state.draw_session.share_text()
        if not text:
            return _error("No teams drawn yet", 404)
        return jsonify({"success": True, "text": text})

    return app


def run_web_app(host: str = "127.0.0.1", port: int = 7122, roster_file: Optional[str] = None) -> None:
    """
    Run the web application.

    Args:
        host: Host address to bind to (default: localhost only)
        port: Port number to listen on
        roster_file: Optional JSON roster, loaded at startup if it exists and
            saved after every change
    """
    store = None
    if roster_file and os.path.exists(roster_file):
        store = RosterStore.load_from_file(roster_file)
    state = WebAppState(store, roster_file=roster_file)
    app = create_app(state)
    logger.info("Starting %s on %s:%d", APP_TITLE, host, port)
    try:
        app.run(host=host, port=port, debug=False)
    finally:
        state.close()
