"""FastAPI application - the local trip planner surface."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tripbook.api.routes.budget import router as budget_router
from tripbook.api.routes.essentials import router as essentials_router
from tripbook.api.routes.export import router as export_router
from tripbook.api.routes.health import router as health_router
from tripbook.api.routes.itinerary import router as itinerary_router
from tripbook.api.routes.state import router as state_router
from tripbook.errors import TripValidationError

app = FastAPI(title="Tripbook", version="0.1.0")

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(state_router)
app.include_router(itinerary_router)
app.include_router(budget_router)
app.include_router(essentials_router)
app.include_router(export_router)


@app.exception_handler(TripValidationError)
async def trip_validation_error(request: Request, exc: TripValidationError) -> JSONResponse:
    """Rejected user input; state is unchanged."""
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc)},
    )


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Tripbook", "version": "0.1.0"}
