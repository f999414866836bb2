"""
Main FastAPI application entry point.
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fleetbook.api import dashboard, exports, resources, sheets, shipments
from fleetbook.db.database import engine, Base, settings
import fleetbook.models  # noqa: F401  (registers tables on Base.metadata)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# Create database tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Fleetbook Logistics Dashboard",
    description="Shipment records, KPIs and exports for a trucking business",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(shipments.router, prefix="/api/shipments", tags=["shipments"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])
app.include_router(resources.router, prefix="/api/resources", tags=["resources"])
app.include_router(exports.router, prefix="/api/exports", tags=["exports"])
app.include_router(sheets.router, prefix="/api/sheets", tags=["sheets"])


@app.get("/")
async def root():
    return {"message": "Fleetbook Logistics Dashboard API"}


@app.get("/health")
async def health():
    return {"status": "healthy"}
