from flask import Blueprint, jsonify

from ..errors import NotFoundError
from ..repository import get_storage
from ..serializers import serialize_program
from . import json_body, parse_id

programs_bp = Blueprint("programs", __name__)


@programs_bp.get("/programs")
def list_programs():
    return jsonify([serialize_program(p) for p in get_storage().programs.list()])


@programs_bp.get("/programs/<pid>")
def get_program(pid):
    pid = parse_id(pid, "program")
    p = get_storage().programs.get(pid)
    if not p:
        raise NotFoundError("Program not found")
    return jsonify(serialize_program(p))


@programs_bp.post("/programs")
def create_program():
    p = get_storage().programs.create(json_body())
    return jsonify(serialize_program(p)), 201


@programs_bp.put("/programs/<pid>")
def update_program(pid):
    pid = parse_id(pid, "program")
    p = get_storage().programs.update(pid, json_body())
    if not p:
        raise NotFoundError("Program not found")
    return jsonify(serialize_program(p))


@programs_bp.delete("/programs/<pid>")
def delete_program(pid):
    pid = parse_id(pid, "program")
    if not get_storage().programs.delete(pid):
        raise NotFoundError("Program not found")
    return "", 204
