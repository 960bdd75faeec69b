# --------------------------------------------------------------
#  routes.py
# --------------------------------------------------------------
from __future__ import annotations

from logging import Logger
from typing import Any, Dict, Tuple, Union

from flask import Blueprint, Response, current_app, jsonify, request

from nhxedit.exceptions import EditError, SearchPatternError, UnknownNodeError
from nhxedit.session import TreeSession
from webapp.routes.helpers import (
    ActionRequest,
    parse_action_request,
    parse_newick_request,
)
from webapp.services.session_store import SessionNotFound, SessionStore

bp = Blueprint("main", __name__)

JsonResponse = Union[Response, Tuple[Dict[str, Any], int]]


def _store() -> SessionStore:
    return current_app.extensions["nhxedit_sessions"]


@bp.route("/about")
def about() -> Response:
    """Simple health-check / about endpoint."""
    return jsonify({"about": "nhxedit API backend for interactive tree editing."})


# ----------------------------------------------------------------------
# Editing sessions
# ----------------------------------------------------------------------


@bp.route("/sessions", methods=["POST"])
def create_session() -> JsonResponse:
    log: Logger = current_app.logger
    log.info("[sessions] POST /sessions from %s", request.remote_addr)
    try:
        text = parse_newick_request(request)
    except ValueError as e:
        log.warning(f"[sessions] Bad request: {e}")
        return _fail(400, str(e)), 400

    session_id, session = _store().create(text)
    log.info(
        f"[sessions] Created {session_id} with {session.tree.tip_count} tips"
    )
    body = session.to_dict()
    body["id"] = session_id
    return body, 201


@bp.route("/sessions/<session_id>", methods=["GET"])
def get_session(session_id: str) -> JsonResponse:
    with _store().checkout(session_id) as session:
        body = session.to_dict()
    body["id"] = session_id
    return jsonify(body)


@bp.route("/sessions/<session_id>", methods=["DELETE"])
def delete_session(session_id: str) -> JsonResponse:
    _store().delete(session_id)
    current_app.logger.info(f"[sessions] Deleted {session_id}")
    return {"id": session_id, "deleted": True}, 200


@bp.route("/sessions/<session_id>/newick", methods=["GET"])
def get_newick(session_id: str) -> Response:
    with _store().checkout(session_id) as session:
        text = session.text
    return Response(text, mimetype="text/plain")


@bp.route("/sessions/<session_id>/undo", methods=["POST"])
def undo(session_id: str) -> JsonResponse:
    with _store().checkout(session_id) as session:
        applied = session.undo()
        body = session.to_dict()
    body.update(id=session_id, applied=applied)
    return jsonify(body)


@bp.route("/sessions/<session_id>/actions", methods=["POST"])
def apply_action(session_id: str) -> JsonResponse:
    log: Logger = current_app.logger
    try:
        action = parse_action_request(request)
    except ValueError as e:
        log.warning(f"[actions] Bad request: {e}")
        return _fail(400, str(e)), 400

    with _store().checkout(session_id) as session:
        try:
            result = _dispatch(session, action)
        except SearchPatternError as e:
            log.warning(f"[actions] {e}")
            return _fail(400, str(e)), 400
        except UnknownNodeError as e:
            log.warning(f"[actions] {e}")
            return _fail(404, str(e)), 404
        except EditError as e:
            log.warning(f"[actions] Rejected {action.action}: {e}")
            return _fail(409, str(e)), 409
        body = session.to_dict()

    log.info(f"[actions] {session_id}: {action.action} -> {result!r}")
    body.update(id=session_id, action=action.action, result=result)
    return jsonify(body)


def _dispatch(session: TreeSession, action: ActionRequest) -> Any:
    name = action.action
    if name == "rotate":
        return session.rotate(action.node)
    if name == "ladderize":
        return session.ladderize(action.node)
    if name == "reroot":
        return session.reroot(action.node, action.distance)
    if name == "remove":
        return session.remove(action.node)
    if name == "multifurcate":
        return session.multifurcate(action.node)
    if name == "move":
        return session.move(action.node, action.target)
    if name == "collapse":
        return session.toggle_collapse(action.node)
    if name == "highlight":
        return session.highlight(action.node, action.color)
    return session.search(action.pattern)


# ----------------------------------------------------------------------
# Error handlers
# ----------------------------------------------------------------------


@bp.errorhandler(SessionNotFound)
def session_not_found(exc: SessionNotFound):
    current_app.logger.warning(f"[sessions] Unknown session {exc.args[0]}")
    return _fail(404, f"Unknown session: {exc.args[0]}"), 404


@bp.errorhandler(Exception)
def global_error(exc: Exception):
    current_app.logger.error("[global] Unhandled exception", exc_info=True)
    return _fail(500, str(exc)), 500


# ----------------------------------------------------------------------
# Utility: short error JSON helper
# ----------------------------------------------------------------------
def _fail(status_code: int, message: str) -> dict[str, Any]:
    return {
        "error": message,
        "status": status_code,
    }
