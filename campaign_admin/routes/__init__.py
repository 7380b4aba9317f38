from flask import abort, request


def json_body():
    """Parsed JSON body or None; the repositories reject anything but an object."""
    return request.get_json(silent=True)


def parse_id(raw, label):
    """Integer id from a URL segment; anything else is a 400 "Invalid <label> ID"."""
    try:
        return int(raw)
    except ValueError:
        abort(400, description=f"Invalid {label} ID")
