"""FastAPI application entrypoint."""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pollen_router.api.endpoints import router as route_router, zones_router


app = FastAPI(
    title="Pollen Router",
    description=(
        "Walking routes that detour around High and Very High pollen zones. "
        "Coordinates are [lat, lon]; distances are flat-earth miles."
    ),
)

# Enable CORS for all origins (adjust in production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(zones_router, tags=["zones"])
app.include_router(route_router, tags=["routing"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
