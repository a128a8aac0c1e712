from __future__ import annotations

from flask import Flask, request

from ..common.http import success
from ..container import Container
from .model import Location


def location_to_dict(location: Location) -> dict:
    return {
        "location_id": location.location_id,
        "name": location.name,
        "location_code": location.location_code,
        "location_type": location.location_type,
        "latitude": location.latitude,
        "longitude": location.longitude,
        "radius_meters": location.radius_meters,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/locations/search", methods=["GET"], endpoint="api_locations_search")
    def api_locations_search():
        found = container.location_service.search(
            request.args.get("location_code"),
            request.args.get("location_type"),
        )
        return success([location_to_dict(loc) for loc in found])

    @app.route("/api/locations/search-exact", methods=["GET"], endpoint="api_locations_search_exact")
    def api_locations_search_exact():
        found = container.location_service.search_exact(
            request.args.get("location_code"),
            request.args.get("location_type"),
        )
        return success([location_to_dict(loc) for loc in found])
