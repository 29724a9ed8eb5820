from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from workbench import __version__
from workbench.config import CORS_ORIGINS
from workbench.database import init_db
from workbench.routes.project_routes import router as project_router
from workbench.routes.report_routes import router as report_router
from workbench.routes.task_routes import router as task_router



@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize db configuration
    init_db()
    yield


app = FastAPI(title="Workbench", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(project_router)
app.include_router(task_router)
app.include_router(report_router)


@app.get("/api/v1/health-check")
def health():
    return {"status": "ok", "message": "Workbench backend is alive!"}


def run():
    import uvicorn
    uvicorn.run("workbench.main:app", host="127.0.0.1", port=8000)


if __name__ == "__main__":
    run()
