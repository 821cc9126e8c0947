from __future__ import annotations

from flask import current_app, g, jsonify, request
from sqlalchemy import text

from linksaver.api import api_bp
from linksaver.errors import ValidationError
from linksaver.extensions import db
from linksaver.models import Bookmark
from linksaver.services.enrichment import enrich_url
from linksaver.services.security import api_auth_required


def _json_payload() -> dict:
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return {}
    return payload


def _parse_tags(raw) -> list[str]:
    if raw is None:
        return []
    if not isinstance(raw, list) or not all(isinstance(tag, str) for tag in raw):
        raise ValidationError("tags must be a list of strings")
    return list(raw)


def _parse_bookmark_id(raw) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and raw.strip().isdigit():
        return int(raw.strip())
    return None


@api_bp.route("", methods=["GET"])
def connection_status():
    db.session.execute(text("SELECT 1"))
    return jsonify({"status": "connected"})


@api_bp.route("/bookmarks", methods=["GET"])
@api_auth_required
def bookmarks_list():
    user = g.api_user
    items = (
        Bookmark.query.filter_by(user_id=user.id)
        .order_by(Bookmark.created_at.desc(), Bookmark.id.desc())
        .all()
    )
    return jsonify([item.as_dict() for item in items])


@api_bp.route("/bookmarks", methods=["POST"])
@api_auth_required
def bookmarks_create():
    user = g.api_user
    payload = _json_payload()
    url = payload.get("url")
    if not isinstance(url, str) or not url.strip():
        raise ValidationError("url is required")
    tags = _parse_tags(payload.get("tags"))

    config = current_app.config
    enrichment = enrich_url(
        url,
        timeout=config["CONTENT_FETCH_TIMEOUT"],
        max_bytes=config["CONTENT_MAX_BYTES"],
        summary_endpoint=config["SUMMARY_ENDPOINT"],
        summary_timeout=config["SUMMARY_TIMEOUT"],
    )
    for error in enrichment.errors:
        current_app.logger.warning("Enrichment failed for %s: %s", url, error)

    bookmark = Bookmark(
        user_id=user.id,
        url=url,
        title=enrichment.title,
        favicon=enrichment.favicon,
        summary=enrichment.summary,
        tags=tags,
    )
    db.session.add(bookmark)
    db.session.commit()
    return jsonify(bookmark.as_dict()), 201


@api_bp.route("/bookmarks", methods=["DELETE"])
@api_auth_required
def bookmarks_delete():
    user = g.api_user
    bookmark_id = _parse_bookmark_id(_json_payload().get("id"))
    if bookmark_id is not None:
        Bookmark.query.filter_by(id=bookmark_id, user_id=user.id).delete()
        db.session.commit()
    return jsonify({"success": True})
