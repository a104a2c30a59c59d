"""FastAPI application serving flowboard sessions."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from flowboard.config import load_settings
from server.session_routes import router as session_router
from server.sessions import clear_sessions, list_sessions

settings = load_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Print a startup banner; drop all sessions on shutdown."""
    print("=" * 60)
    print("Starting Flowboard API")
    print(f"chat endpoint: {settings.chat_url}")
    print(f"run records: {settings.run_log_dir or 'in memory'}")
    print("=" * 60)
    yield
    clear_sessions()


app = FastAPI(
    title="Flowboard API",
    description="API server for editing and running node-graph workflows",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(session_router, prefix="/api")


@app.get("/")
def root():
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": "0.1.0",
        "active_sessions": len(list_sessions()),
        "endpoints": {
            "sessions": "/api/sessions",
            "run": "/api/sessions/{session_id}/run",
            "log": "/api/sessions/{session_id}/log",
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
