from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import admin_required, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    players = container.player_service

    @app.route("/api/players", methods=["GET"], endpoint="list_players")
    def list_players():
        return jsonify([p.to_dict() for p in players.get_players()])

    @app.route("/api/players/<player_id>", methods=["GET"], endpoint="get_player")
    def get_player(player_id: str):
        player = players.get_player(player_id)
        if player is None:
            return jsonify(None), 404
        return jsonify(player.to_dict())

    @app.route("/api/players", methods=["POST"], endpoint="create_player")
    def create_player():
        player = players.create_player(json_body())
        return jsonify({"ok": True, "player": player.to_dict()}), 201

    @app.route("/api/players/<player_id>", methods=["PUT"], endpoint="update_player")
    def update_player(player_id: str):
        player = players.update_player(player_id, json_body())
        return jsonify({"ok": True, "player": player.to_dict()})

    @app.route("/api/players/<player_id>", methods=["DELETE"], endpoint="delete_player")
    @admin_required
    def delete_player(player_id: str):
        players.delete_player(player_id)
        return jsonify({"ok": True})
