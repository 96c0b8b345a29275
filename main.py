import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, APIRouter
from fastapi.middleware.cors import CORSMiddleware

from config.database import Base, engine
from config.settings import CORS_ORIGINS, LOG_LEVEL

# Modelos precisam estar importados antes do create_all
from app.models import child_model, daily_report_model, entry_model  # noqa: F401

from app.routes.entry_routes import router as entry_routes
from app.routes.report_routes import router as report_routes

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    yield


# Cria a instância do FastAPI
app = FastAPI(
    title="Daycare Entries API",
    version="0.1.0",
    description="Registros diários das crianças e relatórios para os responsáveis",
    lifespan=lifespan,
)

# Configura CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Cria o roteador principal com prefixo /api
routerAPI = APIRouter(prefix="/api")

routerAPI.include_router(entry_routes)
routerAPI.include_router(report_routes)

# Anexa o roteador à aplicação principal
app.include_router(routerAPI)



@app.get("/", tags=["Root"])
async def read_root():
    return {"status": "Daycare Entries API está no ar!"}
