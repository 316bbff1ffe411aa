"""Helpers that turn application envelopes into HTTP responses."""

from fastapi.responses import JSONResponse

from app.application.dtos.envelope import ResponseEnvelope

DATA_SOURCE_HEADER = "x-data-source"


def envelope_response(envelope: ResponseEnvelope) -> JSONResponse:
    """Envelope as JSON, with its provenance echoed in the x-data-source header."""
    return JSONResponse(
        status_code=envelope.status_code,
        content=envelope.to_dict(),
        headers={DATA_SOURCE_HEADER: envelope.source},
    )
