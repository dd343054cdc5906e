from fastapi import APIRouter

from api.routers import products, regions, table_sessions, tables

routes = APIRouter()

# Include all routers
routes.include_router(regions.router)
routes.include_router(tables.router)
routes.include_router(table_sessions.router)
routes.include_router(products.router)
