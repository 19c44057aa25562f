from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.exception_handlers import http_exception_handler, request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.models.schema import LocalProcessResponse, RemoteProcessResponse
from app.services.processor import DocumentProcessor
from app.utils.logger import Log

router = APIRouter()

INFO_PAGE = """<!DOCTYPE html>
<html>
<head><title>PDF Marker API</title></head>
<body>
<h1>PDF Marker API</h1>
<p>POST a multipart form to <code>/process</code> with a <code>pdf</code> file
and an optional <code>markerId</code>. The first page receives a QR code and a
<code>Plan-ID</code> label.</p>
</body>
</html>
"""


def get_processor(request: Request) -> DocumentProcessor:
    return request.app.state.processor


@router.get("/", response_class=HTMLResponse)
def index():
    return INFO_PAGE


@router.get("/healthz")
def healthz():
    return {"status": "ok"}


@router.post("/process")
async def process_pdf(
    pdf: Optional[UploadFile] = File(None),
    marker_id: Optional[str] = Form(None, alias="markerId"),
    processor: DocumentProcessor = Depends(get_processor),
):
    try:
        pdf_bytes = await pdf.read() if pdf is not None else None
        result = processor.process(pdf_bytes, marker_id)
    except Exception as e:
        Log.error(f"/process failed: {e}")
        raise HTTPException(status_code=500, detail=f"Processing failed: {e}")

    if result.stored.remote:
        body = RemoteProcessResponse(marker_id=result.marker_id, public_pdf_url=result.stored.location)
    else:
        body = LocalProcessResponse(marker_id=result.marker_id, final_pdf_path=result.stored.location)
    return body.model_dump(by_alias=True)


def _upload_failure(message: str) -> JSONResponse:
    Log.error(f"/process failed: {message}")
    return JSONResponse(status_code=500, content={"detail": f"Processing failed: {message}"})


async def upload_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed /process forms fail like every other processing error."""
    if request.url.path != "/process":
        return await request_validation_exception_handler(request, exc)
    reasons = "; ".join(str(err.get("msg", "")) for err in exc.errors()) or "invalid form"
    return _upload_failure(f"malformed upload ({reasons})")


async def upload_body_handler(request: Request, exc: StarletteHTTPException):
    # unparseable multipart bodies surface as 400 before the endpoint runs
    if request.url.path == "/process" and exc.status_code == 400:
        return _upload_failure(f"malformed upload ({exc.detail})")
    return await http_exception_handler(request, exc)
