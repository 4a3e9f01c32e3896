# localmedia/main.py
from fastapi import FastAPI, APIRouter, Body, File, HTTPException, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Any, Dict, List, Optional
import logging
import os
import requests

from . import crud, schemas, utils, youtube_client
from .config import Settings, get_settings
from .storage import JsonStore

log = logging.getLogger(__name__)

CONFIG_HINT = "Missing YT_API_KEY on server. See README to add one."


def collection_router(name, store, next_id):
    """CRUD routes for one record collection under /api/<name>."""
    router = APIRouter(prefix=f"/api/{name}", tags=[name])

    @router.get("")
    def list_items():
        return crud.list_records(store)

    @router.post("")
    def create_item(payload: Optional[Dict[str, Any]] = Body(None)):
        # an empty body creates a record holding only its id
        return crud.create_record(store, payload or {}, next_id)

    @router.put("/{item_id}")
    def update_item(item_id: str, payload: Dict[str, Any] = Body(...)):
        item = crud.update_record(store, item_id, payload)
        if item is None:
            raise HTTPException(status_code=404, detail="Not found")
        return item

    @router.delete("/{item_id}", response_model=schemas.OkOut)
    def delete_item(item_id: str):
        crud.delete_record(store, item_id)
        return {"ok": True}

    return router


def create_app(
    settings: Optional[Settings] = None,
    library_store=None,
    journal_store=None,
    next_id=None,
) -> FastAPI:
    """Build the server. Stores and the id generator can be swapped in; the
    outbound HTTP session lives on app.state.http."""
    settings = settings or get_settings()
    os.makedirs(settings.data_dir, exist_ok=True)
    os.makedirs(settings.images_dir, exist_ok=True)
    os.makedirs(settings.static_dir, exist_ok=True)

    app = FastAPI(title="Local Media Server")
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    app.state.settings = settings
    app.state.library = library_store or JsonStore(settings.library_path)
    app.state.journal = journal_store or JsonStore(settings.journal_path)
    app.state.next_id = next_id or crud.TimestampIds()
    app.state.http = requests.Session()

    # -----------------
    # Errors
    # -----------------
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
        return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.middleware("http")
    async def limit_json_body(request: Request, call_next):
        ctype = request.headers.get("content-type", "")
        length = request.headers.get("content-length")
        if ctype.startswith("application/json") and length and length.isdigit():
            if int(length) > settings.max_json_bytes:
                return JSONResponse(status_code=413, content={"error": "Request body too large"})
        return await call_next(request)

    # -----------------
    # Collections
    # -----------------
    app.include_router(collection_router("library", app.state.library, app.state.next_id))
    app.include_router(collection_router("journal", app.state.journal, app.state.next_id))

    @app.get("/api/ping", response_model=schemas.OkOut)
    def ping():
        return {"ok": True}

    # -----------------
    # Gallery & upload
    # -----------------
    @app.get("/api/images", response_model=List[schemas.ImageOut])
    def images():
        try:
            return utils.list_images(settings.images_dir)
        except OSError:
            log.exception("Could not list %s", settings.images_dir)
            raise HTTPException(status_code=500, detail="failed")

    @app.post("/upload", response_model=schemas.UploadOut)
    def upload(image: Optional[UploadFile] = File(None)):
        if image is None:
            raise HTTPException(status_code=400, detail="No file")
        fname = utils.unique_image_name(image.filename)
        dest = os.path.join(settings.images_dir, fname)
        try:
            size = utils.save_upload(image.file, dest, settings.max_upload_bytes)
        except utils.UploadTooLarge:
            raise HTTPException(status_code=413, detail="File too large")
        log.info("Stored upload %s (%d bytes)", fname, size)
        return {"url": utils.image_url(fname)}

    # -----------------
    # Video search proxy
    # -----------------
    @app.get("/api/search-youtube", response_model=List[schemas.VideoOut])
    def search_youtube(q: Optional[str] = None):
        if not q:
            raise HTTPException(status_code=400, detail="Missing query (q)")
        if not settings.yt_api_key:
            raise HTTPException(status_code=400, detail=CONFIG_HINT)
        if app.state.http is None:
            raise HTTPException(status_code=500, detail="Server missing HTTP transport")
        try:
            return youtube_client.search_videos(app.state.http, settings.yt_api_key, q, timeout=settings.yt_timeout)
        except youtube_client.UpstreamError as e:
            raise HTTPException(
                status_code=502,
                detail={"error": "YouTube API error", "status": e.status, "body": e.body},
            )
        except Exception:
            log.exception("YouTube search failed for %r", q)
            raise HTTPException(status_code=500, detail="failed")

    # -----------------
    # Static files
    # -----------------
    @app.get("/", include_in_schema=False)
    def index():
        path = os.path.join(settings.static_dir, settings.index_file)
        if not os.path.isfile(path):
            raise HTTPException(status_code=404, detail="Not Found")
        return FileResponse(path)

    app.mount("/images", StaticFiles(directory=settings.images_dir), name="images")
    # catch-all, keep last
    app.mount("/", StaticFiles(directory=settings.static_dir), name="static")

    return app
