from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from apis import auth, profile, users, notes, chat, websockets
from helpers.errors import InternalError, ValidationError
from realtime.manager import ConnectionManager
from settings import get_settings, logger

settings = get_settings()

app = FastAPI(
    title="Brainjot API",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc"
)

# Chat session registry shared by the websocket handlers
app.state.hub = ConnectionManager()

# CORS middleware for development
if settings.environment == "development":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected malformed request", extra={
        "path": request.url.path,
        "errors": len(exc.errors())
    })
    error = ValidationError()
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error", extra={"path": request.url.path})
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail})


app.include_router(auth.router, prefix="/api")
app.include_router(profile.router, prefix="/api")
app.include_router(users.router, prefix="/api")
app.include_router(notes.router, prefix="/api")
app.include_router(websockets.router, prefix="/api")
# Chat history lives at the root
app.include_router(chat.router)


@app.get("/api/health", status_code=status.HTTP_200_OK)
async def root():
    """API health check."""
    return {"message": "Brainjot API is running"}
