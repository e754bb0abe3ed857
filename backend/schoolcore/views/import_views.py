import json
import logging
from functools import wraps

from django.conf import settings
from django.contrib.auth.decorators import login_required
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.http import require_GET, require_POST

from schoolcore.services import lifecycle
from schoolcore.services.errors import ImportPipelineError, PartialCommitFailure, ValidationFailed
from schoolcore.services.templates import XLSX_CONTENT_TYPE, build_template, template_filename

logger = logging.getLogger(__name__)

FALSE_FLAGS = {"0", "false", "no", "off"}


def _ok(data, status=200, message=None):
    payload = {"success": True, "data": data}
    if message:
        payload["message"] = message
    return JsonResponse(payload, status=status)


def _error(exc, debug=False):
    if isinstance(exc, ImportPipelineError):
        return JsonResponse(exc.as_dict(), status=exc.status_code)
    payload = {"success": False, "error": "unexpected", "message": "Server error"}
    if debug:
        payload["detail"] = f"{type(exc).__name__}: {exc}"
    return JsonResponse(payload, status=500)


def import_endpoint(view):
    """Translate pipeline errors into JSON; anything else is logged and hidden."""

    @wraps(view)
    def wrapper(request, *args, **kwargs):
        debug = settings.DEBUG
        try:
            return view(request, *args, **kwargs)
        except ImportPipelineError as exc:
            logger.info("%s %s -> %s: %s", request.method, request.path, exc.code, exc.message)
            return _error(exc)
        except Exception as exc:
            logger.exception("%s %s failed", request.method, request.path)
            return _error(exc, debug=debug)

    return wrapper


def _int_param(raw_value, default):
    try:
        return int(raw_value)
    except (TypeError, ValueError):
        return default


def _body(request):
    if request.content_type == "application/json" and request.body:
        try:
            payload = json.loads(request.body)
        except json.JSONDecodeError:
            raise ValidationFailed("Request body is not valid JSON.")
        if not isinstance(payload, dict):
            raise ValidationFailed("Request body must be a JSON object.")
        return payload
    return request.POST


def _flag(raw_value, default=True):
    if raw_value is None or raw_value == "":
        return default
    if isinstance(raw_value, bool):
        return raw_value
    return str(raw_value).strip().lower() not in FALSE_FLAGS


@login_required
@require_GET
@import_endpoint
def import_modules(request: HttpRequest) -> HttpResponse:
    return _ok(lifecycle.list_modules())


@login_required
@require_POST
@import_endpoint
def import_upload(request: HttpRequest, entity: str) -> HttpResponse:
    batch = lifecycle.upload_batch(
        entity,
        request.FILES.get("file"),
        request.POST.get("branch_id"),
        context={
            "grade": request.POST.get("grade"),
            "section": request.POST.get("section"),
            "academic_year": request.POST.get("academic_year"),
        },
        uploaded_by=request.user,
    )
    return _ok(
        {
            "batch_id": batch.batch_id,
            "file_name": batch.file_name,
            "file_size": batch.file_size,
            "stored_filename": batch.stored_path,
            "status": batch.status,
        },
        status=201,
        message="File uploaded successfully",
    )


@login_required
@require_POST
@import_endpoint
def import_validate(request: HttpRequest, entity: str, batch_id: str) -> HttpResponse:
    counts = lifecycle.validate_batch_id(entity, batch_id)
    return _ok(
        {
            "batch_id": batch_id,
            "total": counts.total,
            "valid": counts.valid,
            "invalid": counts.invalid,
        },
        message="Validation completed",
    )


@login_required
@require_GET
@import_endpoint
def import_preview(request: HttpRequest, entity: str, batch_id: str) -> HttpResponse:
    preview = lifecycle.preview_batch(
        entity,
        batch_id,
        status=request.GET.get("status", "").strip() or None,
        page=_int_param(request.GET.get("page"), 1),
        per_page=_int_param(request.GET.get("per_page"), 25),
    )
    return _ok(preview)


@login_required
@require_POST
@import_endpoint
def import_commit(request: HttpRequest, entity: str, batch_id: str) -> HttpResponse:
    skip_invalid = _flag(_body(request).get("skip_invalid"), default=True)
    result = lifecycle.commit_batch_id(entity, batch_id, skip_invalid=skip_invalid)
    if result.failed:
        partial = PartialCommitFailure(
            f"Imported {result.imported} of {result.attempted} rows; {result.failed} failed.",
            result=result,
        )
        return JsonResponse(partial.as_dict(), status=partial.status_code)
    return _ok(result.as_dict(), message=f"Imported {result.imported} rows successfully.")


@login_required
@require_POST
@import_endpoint
def import_cancel(request: HttpRequest, entity: str, batch_id: str) -> HttpResponse:
    return _ok(lifecycle.cancel_batch(entity, batch_id), message="Import cancelled")


@login_required
@require_GET
@import_endpoint
def import_history(request: HttpRequest) -> HttpResponse:
    history = lifecycle.batch_history(
        entity_type=request.GET.get("entity_type", "").strip() or None,
        status=request.GET.get("status", "").strip() or None,
        days=_int_param(request.GET.get("days"), None),
        page=_int_param(request.GET.get("page"), 1),
        per_page=_int_param(request.GET.get("per_page"), 25),
    )
    return _ok(history)


@login_required
@require_GET
@import_endpoint
def import_template(request: HttpRequest, entity: str) -> HttpResponse:
    content = build_template(entity)
    response = HttpResponse(content, content_type=XLSX_CONTENT_TYPE)
    response["Content-Disposition"] = f'attachment; filename="{template_filename(entity)}"'
    return response
