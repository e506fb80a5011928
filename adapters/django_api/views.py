"""
Ledger Django Adapter Views
===========================
Pass-through HTTP views over the ScholarshipLedger facade.

Writes:  POST /v1/<operation>   body {"caller": {...}, ...arguments}
Reads:   GET  /v1/<entity>/<id>
Counts:  GET  /v1/<entity>-count

Ledger rejections are ordinary 200 responses carrying the tagged
result; only malformed requests get an HTTP error status.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_ledger
from core.context.caller_context import CallerContext

logger = logging.getLogger("ledger.http")


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return JsonResponse(
        {
            "ok": False,
            "error": {"code": code, "message": message, "details": {}},
        },
        status=status,
    )


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        "METHOD_NOT_ALLOWED",
        "Method not allowed for this endpoint.",
        status=405,
    )


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except Exception as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _parse_caller(body: dict[str, Any]) -> CallerContext:
    caller_payload = body.get("caller")
    if not isinstance(caller_payload, dict):
        raise ValueError("caller must be an object.")
    return CallerContext(
        actor_id=caller_payload["actor_id"],
        block_height=caller_payload.get("block_height", 0),
        is_authorized_institution=caller_payload.get(
            "is_authorized_institution", False
        ),
    )


def _dispatch_write(operation: str, argument_names: tuple[str, ...],
                    request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    try:
        body = _parse_json_body(request)
        caller = _parse_caller(body)
        arguments = {name: body[name] for name in argument_names}
        outcome = getattr(build_ledger(), operation)(caller, **arguments)
    except KeyError as exc:
        return _json_error("INVALID_REQUEST", f"Missing field: {exc.args[0]}")
    except ValueError as exc:
        return _json_error("INVALID_REQUEST", str(exc))

    if outcome.is_rejected:
        logger.info(
            f"{operation} rejected for '{caller.actor_id}': "
            f"{outcome.reason.code} ({outcome.reason.error_code})"
        )
    return JsonResponse(outcome.to_result())


def _dispatch_read(getter: str, request: HttpRequest, record_id: int) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    record = getattr(build_ledger(), getter)(record_id)
    value = record.to_dict() if record is not None else None
    return JsonResponse({"type": "ok", "value": value})


def _dispatch_count(getter: str, request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return JsonResponse({"type": "ok", "value": getattr(build_ledger(), getter)()})


# ── Applicants & applications ─────────────────────────────────


@csrf_exempt
def register_applicant_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_write(
        "register_applicant",
        ("name", "institution", "gpa", "field_of_study"),
        request,
    )


@csrf_exempt
def apply_for_scholarship_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_write(
        "apply_for_scholarship", ("applicant_id", "scholarship_id"), request,
    )


@csrf_exempt
def verify_applicant_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_write("verify_applicant", ("applicant_id",), request)


@csrf_exempt
def update_application_status_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_write(
        "update_application_status", ("application_id", "new_status"), request,
    )


# ── Scholarships ──────────────────────────────────────────────


@csrf_exempt
def create_scholarship_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_write(
        "create_scholarship",
        (
            "name",
            "description",
            "total_amount",
            "award_amount",
            "criteria_gpa",
            "criteria_field",
        ),
        request,
    )


@csrf_exempt
def fund_scholarship_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_write(
        "fund_scholarship", ("scholarship_id", "amount"), request,
    )


@csrf_exempt
def activate_scholarship_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_write("activate_scholarship", ("scholarship_id",), request)


@csrf_exempt
def deactivate_scholarship_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_write("deactivate_scholarship", ("scholarship_id",), request)


# ── Institutions & disbursements ──────────────────────────────


@csrf_exempt
def register_institution_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_write("register_institution", ("name", "principal"), request)


@csrf_exempt
def create_disbursement_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_write(
        "create_disbursement",
        ("application_id", "institution_id", "amount"),
        request,
    )


@csrf_exempt
def process_disbursement_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_write("process_disbursement", ("disbursement_id",), request)


@csrf_exempt
def cancel_disbursement_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_write("cancel_disbursement", ("disbursement_id",), request)


# ── Academic outcomes ─────────────────────────────────────────


@csrf_exempt
def add_academic_record_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_write(
        "add_academic_record",
        ("applicant_id", "semester", "gpa", "credits_completed"),
        request,
    )


@csrf_exempt
def add_milestone_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_write(
        "add_milestone", ("applicant_id", "description"), request,
    )


@csrf_exempt
def mark_milestone_achieved_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_write("mark_milestone_achieved", ("milestone_id",), request)


@csrf_exempt
def update_record_status_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_write(
        "update_record_status", ("record_id", "new_status"), request,
    )


# ── Reads ─────────────────────────────────────────────────────


@csrf_exempt
def applicant_view(request: HttpRequest, record_id: int) -> JsonResponse:
    return _dispatch_read("get_applicant", request, record_id)


@csrf_exempt
def application_view(request: HttpRequest, record_id: int) -> JsonResponse:
    return _dispatch_read("get_application", request, record_id)


@csrf_exempt
def scholarship_view(request: HttpRequest, record_id: int) -> JsonResponse:
    return _dispatch_read("get_scholarship", request, record_id)


@csrf_exempt
def institution_view(request: HttpRequest, record_id: int) -> JsonResponse:
    return _dispatch_read("get_institution", request, record_id)


@csrf_exempt
def disbursement_view(request: HttpRequest, record_id: int) -> JsonResponse:
    return _dispatch_read("get_disbursement", request, record_id)


@csrf_exempt
def academic_record_view(request: HttpRequest, record_id: int) -> JsonResponse:
    return _dispatch_read("get_academic_record", request, record_id)


@csrf_exempt
def milestone_view(request: HttpRequest, record_id: int) -> JsonResponse:
    return _dispatch_read("get_milestone", request, record_id)


# ── Counts ────────────────────────────────────────────────────


@csrf_exempt
def applicant_count_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_count("get_applicant_count", request)


@csrf_exempt
def application_count_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_count("get_application_count", request)


@csrf_exempt
def scholarship_count_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_count("get_scholarship_count", request)


@csrf_exempt
def institution_count_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_count("get_institution_count", request)


@csrf_exempt
def disbursement_count_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_count("get_disbursement_count", request)


@csrf_exempt
def record_count_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_count("get_record_count", request)


@csrf_exempt
def milestone_count_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_count("get_milestone_count", request)
