import logging

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from resume_builder.api.routes.parse import router as parse_router
from resume_builder.api.routes.variants import router as variants_router
from resume_builder.core.config import get_settings

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Resume Builder (Resume Structuring Service)",
    description="Heuristic resume structuring service: turns DOCX/PDF/TXT resumes into editable records, stores named variants, and renders them to LaTeX",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.include_router(parse_router)
app.include_router(variants_router)

@app.get("/", tags=["health"])
def root():
    return {"service": "resume-builder", "status": "running"}

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}

def custom_openapi():
    """Generate OpenAPI schema with custom settings."""
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Resume Builder API",
        version="0.1.0",
        description="Resume structuring API with named variants and LaTeX export",
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi
