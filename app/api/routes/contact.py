import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.api.dependencies import get_contact_pipeline
from app.core.config import settings
from app.core.errors import PayloadTooLargeAppError, ValidationAppError
from app.core.rate_limit import client_identifier
from app.core.responses import json_envelope
from app.services.contact_pipeline import ContactPipeline
from app.services.submission_builder import RequestContext

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Contact"])

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_body_limited(request: Request) -> bytes:
    """Read the request body in chunks enforcing the max size limit.

    Checks Content-Length first when the client sends it, then counts the
    streamed bytes so chunked bodies are bounded too.

    Raises:
        PayloadTooLargeAppError: If the body exceeds ``APP_MAX_BODY_BYTES``.
    """
    max_bytes = settings.app.max_body_bytes

    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > max_bytes:
        logger.warning(
            "contact.body_rejected_by_header",
            extra={"content_length": int(declared), "max_bytes": max_bytes},
        )
        raise _too_large(max_bytes)

    size = 0
    chunks: list[bytes] = []
    async for chunk in request.stream():
        size += len(chunk)
        if size > max_bytes:
            logger.warning(
                "contact.body_rejected_while_reading",
                extra={"bytes_read": size, "max_bytes": max_bytes},
            )
            raise _too_large(max_bytes)
        chunks.append(chunk)

    return b"".join(chunks)


def _too_large(max_bytes: int) -> PayloadTooLargeAppError:
    return PayloadTooLargeAppError(
        code="body_too_large",
        message="Request body too large",
        details={"max_bytes": max_bytes},
    )


async def _parse_form(request: Request, raw: bytes) -> dict[str, Any]:
    # The stream is already consumed; replay the bounded bytes to the parser
    async def receive() -> dict[str, Any]:
        return {"type": "http.request", "body": raw, "more_body": False}

    form = await Request(request.scope, receive).form()
    return {key: value for key, value in form.items()}


async def read_contact_payload(request: Request) -> Any:
    """Decode the request body as JSON or form data.

    An empty body decodes to an empty object so that validation reports the
    missing fields.

    Raises:
        PayloadTooLargeAppError: If the body exceeds the size limit.
        ValidationAppError: If the body cannot be decoded.
    """
    raw = await read_body_limited(request)

    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(FORM_CONTENT_TYPES):
        return await _parse_form(request, raw)

    if not raw.strip():
        return {}

    # ValueError covers JSONDecodeError, bad UTF-8 and oversized integer literals
    try:
        return json.loads(raw)
    except (ValueError, RecursionError) as exc:
        raise ValidationAppError(
            code="invalid_body",
            message="Invalid request body",
            details={"hint": "Send a JSON object with name, email and message"},
        ) from exc


def _request_context(request: Request) -> RequestContext:
    return RequestContext(
        ip_address=client_identifier(request),
        user_agent=request.headers.get("user-agent"),
    )


@router.post("/contact")
async def submit_contact(
    request: Request,
    pipeline: ContactPipeline = Depends(get_contact_pipeline),
) -> JSONResponse:
    """Accept a contact form submission.

    Rate limits the client, validates the fields, stores the submission and
    emails staff and the submitter. Email failures do not affect the response.

    Returns:
        JSONResponse: 200 with ``data.id`` on success; 400 on validation
            errors; 429 when rate limited; 500 if storage fails.
    """
    logger.info(
        "contact.received",
        extra={
            "request_method": request.method,
            "request_path": request.url.path,
            "origin": request.headers.get("origin") or "none",
            "user_agent": request.headers.get("user-agent"),
        },
    )

    payload = await read_contact_payload(request)
    result = await pipeline.run(payload, _request_context(request))
    return json_envelope(result.status_code, result.body, result.headers)
