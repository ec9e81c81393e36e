from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kiraya.core.config import settings
from kiraya.core.logging import setup_logging
from kiraya.api.routes.pending import router as pending_router
from kiraya.api.routes.statements import router as statements_router
from kiraya.api.routes.tenants import router as tenants_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    yield


app = FastAPI(lifespan=lifespan)

origins = [o.strip() for o in (settings.cors_origins or "").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/health")
@app.get("/api/health")
def health():
    return {"status": "ok"}

app.include_router(pending_router)
app.include_router(statements_router)
app.include_router(tenants_router)
