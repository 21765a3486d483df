"""
Dashboard API routes.

Provides:
- Dashboard payload for a reference date and optional visit-plan day
- Store maintenance and CSV import
- Checklist toggling (log / delete a sale)
- Visit plan and settings updates
"""

import logging
from dataclasses import replace

from flask import Blueprint, request

from src.models.entities import create_settings_from_dict
from src.models.enums import StoreLevel
from src.models.errors import EntityNotFoundError
from src.services.container import get_container
from src.web.utils.request_helpers import (
    RequestValidationError,
    get_date_parameter,
    get_day_parameter,
    validate_json_request,
    create_success_response,
    handle_request_errors,
    log_requests,
    safe_get_service,
)

logger = logging.getLogger(__name__)

# Create blueprint
dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api")


def _repository():
    return safe_get_service(get_container(), "snapshot_repository")


def _parse_level(raw) -> StoreLevel:
    try:
        return StoreLevel.parse(str(raw))
    except ValueError as e:
        raise RequestValidationError(str(e)) from e


def _parse_name(raw) -> str:
    if not isinstance(raw, str):
        raise RequestValidationError("name must be a string")
    return raw


def _parse_quantity(raw) -> int:
    if isinstance(raw, bool):
        raise RequestValidationError(f"Invalid quantity: {raw!r}")
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise RequestValidationError(f"Invalid quantity: {raw!r}") from e


# ============================================================================
# Dashboard
# ============================================================================

@dashboard_bp.route("/dashboard")
@log_requests
@handle_request_errors
def get_dashboard():
    """Full dashboard for ?date=YYYY-MM-DD (default today) and optional ?day=1..6."""
    service = safe_get_service(get_container(), "dashboard_service")
    data = service.build_dashboard(today=get_date_parameter(), selected_day=get_day_parameter())
    return create_success_response(data.to_dict())


# ============================================================================
# Stores
# ============================================================================

@dashboard_bp.route("/stores", methods=["GET"])
@log_requests
@handle_request_errors
def list_stores():
    stores = _repository().snapshot().stores
    return create_success_response([s.to_dict() for s in stores])


@dashboard_bp.route("/stores", methods=["POST"])
@log_requests
@handle_request_errors
def add_store():
    data = validate_json_request(["name", "level"])
    store = _repository().add_store(_parse_name(data["name"]), _parse_level(data["level"]))
    return create_success_response(store.to_dict(), "Store added", 201)


@dashboard_bp.route("/stores/<store_id>", methods=["PUT"])
@log_requests
@handle_request_errors
def update_store(store_id: str):
    data = validate_json_request()
    repository = _repository()
    current = repository.get_store(store_id)
    if current is None:
        raise EntityNotFoundError(f"Store not found: {store_id}")
    updated = replace(
        current,
        name=_parse_name(data["name"]) if "name" in data else current.name,
        level=_parse_level(data["level"]) if "level" in data else current.level,
    )
    return create_success_response(repository.update_store(updated).to_dict(), "Store updated")


@dashboard_bp.route("/stores/<store_id>", methods=["DELETE"])
@log_requests
@handle_request_errors
def delete_store(store_id: str):
    _repository().delete_store(store_id)
    return create_success_response({"id": store_id}, "Store deleted")


@dashboard_bp.route("/stores/import", methods=["POST"])
@log_requests
@handle_request_errors
def import_stores():
    """Import stores from a `name,level` CSV sent as the request body or as file field `file`."""
    upload = request.files.get("file")
    text = upload.read().decode("utf-8-sig") if upload else request.get_data(as_text=True)
    service = safe_get_service(get_container(), "store_import_service")
    result = service.import_text(text)
    return create_success_response(result.to_dict(), result.summary())


@dashboard_bp.route("/stores/<store_id>/checklist")
@log_requests
@handle_request_errors
def get_store_checklist(store_id: str):
    service = safe_get_service(get_container(), "dashboard_service")
    items = service.get_store_checklist(store_id)
    return create_success_response([item.to_dict() for item in items])


# ============================================================================
# Sales (checklist toggles)
# ============================================================================

@dashboard_bp.route("/sales", methods=["POST"])
@log_requests
@handle_request_errors
def toggle_sale():
    """{"store_id", "product_id", "checked"}: checked logs a sale, unchecked removes the pair."""
    data = validate_json_request(["store_id", "product_id"])
    repository = _repository()
    if data.get("checked", True):
        sale = repository.log_sale(data["store_id"], data["product_id"],
                                   quantity=_parse_quantity(data.get("quantity", 1)))
        return create_success_response(sale.to_dict(), "Sale logged")
    removed = repository.delete_sale(data["store_id"], data["product_id"])
    return create_success_response({"removed": removed}, "Sale removed")


# ============================================================================
# Visit plan & settings
# ============================================================================

@dashboard_bp.route("/visit-plan/<int:day>", methods=["PUT"])
@log_requests
@handle_request_errors
def set_visit_plan(day: int):
    data = validate_json_request(["store_ids"])
    if not isinstance(data["store_ids"], list):
        raise RequestValidationError("store_ids must be a list")
    try:
        plan = _repository().set_visit_plan(day, [str(i) for i in data["store_ids"]])
    except ValueError as e:
        raise RequestValidationError(str(e)) from e
    return create_success_response({"day": day, "store_ids": sorted(plan[day])}, "Visit plan saved")


@dashboard_bp.route("/settings", methods=["PUT"])
@log_requests
@handle_request_errors
def update_settings():
    """{"discounts": {"WS1": 10, ...}, "deadline": "YYYY-MM-DD" | null}"""
    data = validate_json_request()
    try:
        parsed = create_settings_from_dict(data)
    except (TypeError, ValueError) as e:
        raise RequestValidationError(str(e)) from e
    settings = _repository().update_settings(
        discounts=parsed.discounts if "discounts" in data else None,
        deadline=parsed.deadline,
        clear_deadline="deadline" in data and not data["deadline"],
    )
    return create_success_response(settings.to_dict(), "Settings saved")
