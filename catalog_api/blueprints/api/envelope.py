"""Uniform JSON response envelope."""
from flask import jsonify


def ok(data=None, message=None, status=200, **extra):
    body = {"success": True}
    if message:
        body["message"] = message
    body.update(extra)
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def ok_list(items, **extra):
    """Envelope for a plain (unpaginated) list of model objects."""
    return ok([item.to_dict() for item in items], count=len(items), **extra)


def ok_page(result):
    """Envelope for a page returned by a service ``list_*`` call."""
    items = result["items"]
    return ok(
        [item.to_dict() for item in items],
        count=len(items),
        total=result["total"],
        page=result["page"],
        totalPages=result["total_pages"],
    )


def json_body(request):
    """The request's JSON body, or ``None`` when it is missing or unparsable."""
    return request.get_json(silent=True)
