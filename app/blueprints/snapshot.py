"""
Snapshot and projection API.

The client edits the snapshot with patches; every change is projected and
then persisted, and the response carries both the snapshot and its results.
"""

from typing import Any

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from app.models.benefit_curve import benefit_multiplier, monthly_benefit
from app.models.snapshot import (
    SnapshotPatch,
    apply_patch,
    merge_with_defaults,
    utc_now,
)
from app.services.projection_service import build_projection_summary
from app.services.snapshot_store import SnapshotStore
from app.storage.base import StorageError

snapshot_bp = Blueprint("snapshot", __name__, url_prefix="/api")


def _store() -> SnapshotStore:
    return current_app.extensions["snapshot_store"]


def _json_body() -> Any:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data


def _validation_error(e: ValidationError) -> Any:
    details = [
        {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
        for err in e.errors()
    ]
    return jsonify({"error": "Invalid snapshot", "details": details}), 400


def _storage_error(action: str, e: StorageError) -> Any:
    current_app.logger.error(f"Error {action} snapshot: {str(e)}")
    return jsonify({"error": "Storage error", "message": str(e)}), 500


def _snapshot_response(snapshot) -> Any:
    return jsonify(
        {
            "snapshot": snapshot.model_dump(mode="json"),
            "projection": build_projection_summary(snapshot).model_dump(mode="json"),
        }
    )


@snapshot_bp.route("/snapshot", methods=["GET"])
def get_snapshot() -> Any:
    """Return the saved snapshot, or the defaults on first run."""
    try:
        snapshot = _store().load_or_default()
    except StorageError as e:
        return _storage_error("loading", e)
    return jsonify(snapshot.model_dump(mode="json"))


@snapshot_bp.route("/snapshot", methods=["PUT"])
def replace_snapshot() -> Any:
    """Replace the whole snapshot and return it with its projection."""
    data = _json_body()
    if data is None:
        return jsonify({"error": "Request body must be a JSON object"}), 400

    try:
        snapshot = merge_with_defaults(
            {**data, "last_updated": utc_now()}, reject_unknown=True
        )
    except ValidationError as e:
        return _validation_error(e)

    response = _snapshot_response(snapshot)
    try:
        _store().save(snapshot)
    except StorageError as e:
        return _storage_error("saving", e)
    return response


@snapshot_bp.route("/snapshot", methods=["PATCH"])
def update_snapshot() -> Any:
    """Apply a partial update, project it, then save it."""
    data = _json_body()
    if data is None:
        return jsonify({"error": "Request body must be a JSON object"}), 400

    try:
        current = _store().load_or_default()
    except StorageError as e:
        return _storage_error("loading", e)

    try:
        snapshot = apply_patch(current, SnapshotPatch.model_validate(data))
    except ValidationError as e:
        return _validation_error(e)

    response = _snapshot_response(snapshot)
    try:
        _store().save(snapshot)
    except StorageError as e:
        return _storage_error("saving", e)
    return response


@snapshot_bp.route("/snapshot", methods=["DELETE"])
def clear_snapshot() -> Any:
    """Delete the saved snapshot."""
    try:
        cleared = _store().clear()
    except StorageError as e:
        return _storage_error("clearing", e)
    return jsonify({"cleared": cleared})


@snapshot_bp.route("/projection", methods=["GET"])
def get_projection() -> Any:
    """Projection for the saved (or default) snapshot."""
    try:
        snapshot = _store().load_or_default()
    except StorageError as e:
        return _storage_error("loading", e)
    return jsonify(build_projection_summary(snapshot).model_dump(mode="json"))


@snapshot_bp.route("/projection", methods=["POST"])
def preview_projection() -> Any:
    """Projection for the snapshot in the request body, without saving it."""
    data = _json_body()
    if data is None:
        return jsonify({"error": "Request body must be a JSON object"}), 400

    try:
        snapshot = merge_with_defaults(data, reject_unknown=True)
    except ValidationError as e:
        return _validation_error(e)
    return jsonify(build_projection_summary(snapshot).model_dump(mode="json"))


@snapshot_bp.route("/benefit-multiplier", methods=["GET"])
def get_benefit_multiplier() -> Any:
    """Multiplier and monthly check for a claiming age (``?age=``)."""
    age = request.args.get("age", type=float)
    if age is None:
        return jsonify({"error": "Query parameter 'age' must be a number"}), 400

    try:
        snapshot = _store().load_or_default()
    except StorageError as e:
        return _storage_error("loading", e)

    return jsonify(
        {
            "age": age,
            "multiplier": benefit_multiplier(age),
            "monthly_benefit": monthly_benefit(snapshot.ssa_monthly, age),
        }
    )
