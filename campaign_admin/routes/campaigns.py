from flask import Blueprint, jsonify

from ..errors import NotFoundError
from ..repository import get_storage
from ..serializers import serialize_campaign, serialize_ad_group
from . import json_body, parse_id

campaigns_bp = Blueprint("campaigns", __name__)


@campaigns_bp.get("/campaigns")
def list_campaigns():
    rows = get_storage().campaigns.list()
    return jsonify([serialize_campaign(c) for c in rows])


@campaigns_bp.get("/campaigns/<cid>")
def get_campaign(cid):
    cid = parse_id(cid, "campaign")
    c = get_storage().campaigns.get(cid)
    if not c:
        raise NotFoundError("Campaign not found")
    return jsonify(serialize_campaign(c))


@campaigns_bp.post("/campaigns")
def create_campaign():
    c = get_storage().campaigns.create(json_body())
    return jsonify(serialize_campaign(c)), 201


@campaigns_bp.put("/campaigns/<cid>")
def update_campaign(cid):
    cid = parse_id(cid, "campaign")
    c = get_storage().campaigns.update(cid, json_body())
    if not c:
        raise NotFoundError("Campaign not found")
    return jsonify(serialize_campaign(c))


@campaigns_bp.delete("/campaigns/<cid>")
def delete_campaign(cid):
    cid = parse_id(cid, "campaign")
    if not get_storage().campaigns.delete(cid):
        raise NotFoundError("Campaign not found")
    return "", 204


@campaigns_bp.get("/campaigns/<cid>/ad-groups")
def list_campaign_ad_groups(cid):
    cid = parse_id(cid, "campaign")
    rows = get_storage().ad_groups.list_by_campaign(cid)
    return jsonify([serialize_ad_group(g) for g in rows])
