import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import admin, availability, bookings, stays
from app.core.config import get_settings

settings = get_settings()

logging.basicConfig(
    format="[%(asctime)s] %(levelname)s in %(name)s: %(message)s",
    level=settings.log_level,
)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.api_route("/ping", methods=["GET", "HEAD", "OPTIONS"], tags=["public"])
async def ping() -> dict[str, str]:
    return {"status": "ok"}


# Guest-facing catalog and booking flow
app.include_router(stays.router)
app.include_router(availability.router)
app.include_router(bookings.router)

# Operator back-office
app.include_router(admin.router)


@app.get("/", tags=["public"])
async def root() -> dict[str, str]:
    return {"message": f"Welcome to {settings.app_name}"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
