from datetime import date

from flask import Blueprint, Response, jsonify, request

from ..csv_export import export_hierarchy_csv, export_search_results_csv
from ..repository import get_storage
from ..schemas import CampaignSearchFilters
from ..serializers import serialize_campaign, serialize_search_result

api_bp = Blueprint("api", __name__)


def _search_filters():
    # Values go through as sent; only missing/empty parameters are unset
    return {k: request.args.get(k, "") for k in CampaignSearchFilters.model_fields}


def _csv_response(text, prefix):
    filename = f"{prefix}-{date.today().isoformat()}.csv"
    return Response(
        text,
        mimetype="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@api_bp.get("/search")
def search_campaigns():
    results = get_storage().search_campaigns(_search_filters())
    return jsonify([serialize_search_result(r) for r in results])


@api_bp.get("/search/export.csv")
def export_search_csv():
    results = get_storage().search_campaigns(_search_filters())
    return _csv_response(export_search_results_csv(results), "resultados-busqueda")


@api_bp.get("/complete")
def complete_hierarchy():
    campaigns = get_storage().get_complete_hierarchy()
    return jsonify({"campaigns": [serialize_campaign(c, with_hierarchy=True) for c in campaigns]})


@api_bp.get("/complete/export.csv")
def export_complete_csv():
    campaigns = get_storage().get_complete_hierarchy()
    return _csv_response(export_hierarchy_csv(campaigns), "vista-completa")
