from flask import Blueprint, jsonify

from ..errors import NotFoundError
from ..repository import get_storage
from ..serializers import serialize_ad_group, serialize_ad
from . import json_body, parse_id

ad_groups_bp = Blueprint("ad_groups", __name__)


@ad_groups_bp.get("/ad-groups")
def list_ad_groups():
    rows = get_storage().ad_groups.list()
    return jsonify([serialize_ad_group(g) for g in rows])


@ad_groups_bp.get("/ad-groups/<gid>")
def get_ad_group(gid):
    gid = parse_id(gid, "ad group")
    g = get_storage().ad_groups.get(gid)
    if not g:
        raise NotFoundError("Ad group not found")
    return jsonify(serialize_ad_group(g))


@ad_groups_bp.post("/ad-groups")
def create_ad_group():
    g = get_storage().ad_groups.create(json_body())
    return jsonify(serialize_ad_group(g)), 201


@ad_groups_bp.put("/ad-groups/<gid>")
def update_ad_group(gid):
    gid = parse_id(gid, "ad group")
    g = get_storage().ad_groups.update(gid, json_body())
    if not g:
        raise NotFoundError("Ad group not found")
    return jsonify(serialize_ad_group(g))


@ad_groups_bp.delete("/ad-groups/<gid>")
def delete_ad_group(gid):
    gid = parse_id(gid, "ad group")
    if not get_storage().ad_groups.delete(gid):
        raise NotFoundError("Ad group not found")
    return "", 204


@ad_groups_bp.get("/ad-groups/<gid>/ads")
def list_ad_group_ads(gid):
    gid = parse_id(gid, "ad group")
    rows = get_storage().ads.list_by_ad_group(gid)
    return jsonify([serialize_ad(a) for a in rows])
