"""API routes for the Countries resource."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request, url_for

from middleware.auth import editor_required
from services.country_service import CountryService
from utils.odata_query import has_query_options, translate_query


countries_bp = Blueprint("countries", __name__)


def _service() -> CountryService:
    return current_app.extensions["country_service"]


@countries_bp.get("/Countries")
def list_countries():
    """Full name-sorted list (cached), or a filtered page when query options are present."""
    if has_query_options(request.args):
        return _query_countries()

    countries = _service().list_countries()
    return jsonify([c.to_api() for c in countries])


@editor_required
def _query_countries():
    query = translate_query(request.args)
    service = _service()
    countries = [c.to_api() for c in service.query_countries(query)]
    if query.count:
        return jsonify({"@odata.count": service.count_matching(query), "value": countries})
    return jsonify(countries)


@countries_bp.get("/Countries/$count")
@editor_required
def count_countries():
    return jsonify(_service().count_countries())


@countries_bp.get("/Countries/<entity_id>")
def get_country(entity_id: str):
    country = _service().get_country(entity_id)
    return jsonify(country.to_api())


@countries_bp.post("/Countries")
@editor_required
def create_country():
    country = _service().create_country(request.get_json(silent=True))
    response = jsonify(country.to_api())
    response.status_code = 201
    response.headers["Location"] = url_for(
        "countries.get_country", entity_id=country.entity_id, _external=True
    )
    return response


@countries_bp.put("/Countries/<entity_id>")
@editor_required
def replace_country(entity_id: str):
    _service().replace_country(entity_id, request.get_json(silent=True))
    return "", 204


@countries_bp.patch("/Countries/<entity_id>")
@editor_required
def patch_country(entity_id: str):
    _service().patch_country(entity_id, request.get_json(silent=True))
    return "", 204


@countries_bp.delete("/Countries/<entity_id>")
@editor_required
def delete_country(entity_id: str):
    _service().delete_country(entity_id)
    return "", 204
