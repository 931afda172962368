# API routers package

from app.routers.stations import router as stations_router
from app.routers.basins import router as basins_router

# Re-export for easy importing
stations = stations_router
basins = basins_router
