from fastapi import FastAPI
from fastapi.responses import JSONResponse

from apps.api.routers import files

app = FastAPI(title="File Tree API")

app.include_router(files.router, prefix="/api")


@app.get("/", tags=["meta"])
async def root():
    return JSONResponse(
        {
            "app": "torrent-filetree",
            "status": "ok",
            "api_base": "/api",
            "docs": "/docs",
            "message": "File tree server running. POST a file list to /api/files/tree.",
        }
    )
