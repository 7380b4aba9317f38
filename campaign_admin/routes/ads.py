from flask import Blueprint, jsonify

from ..errors import NotFoundError
from ..repository import get_storage
from ..serializers import serialize_ad
from . import json_body, parse_id

ads_bp = Blueprint("ads", __name__)


@ads_bp.get("/ads")
def list_ads():
    return jsonify([serialize_ad(a) for a in get_storage().ads.list()])


@ads_bp.get("/ads/<aid>")
def get_ad(aid):
    aid = parse_id(aid, "ad")
    a = get_storage().ads.get(aid)
    if not a:
        raise NotFoundError("Ad not found")
    return jsonify(serialize_ad(a))


@ads_bp.post("/ads")
def create_ad():
    a = get_storage().ads.create(json_body())
    return jsonify(serialize_ad(a)), 201


@ads_bp.put("/ads/<aid>")
def update_ad(aid):
    aid = parse_id(aid, "ad")
    a = get_storage().ads.update(aid, json_body())
    if not a:
        raise NotFoundError("Ad not found")
    return jsonify(serialize_ad(a))


@ads_bp.delete("/ads/<aid>")
def delete_ad(aid):
    aid = parse_id(aid, "ad")
    if not get_storage().ads.delete(aid):
        raise NotFoundError("Ad not found")
    return "", 204
