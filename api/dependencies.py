# api/dependencies.py
from fastapi import Depends, Request

from core.sa.database import Database
from core.services.catalog_service import CatalogService
from core.services.lending_service import LendingService

def get_database(request: Request) -> Database:
    """Database owned by the running application (set in create_app)"""
    return request.app.state.database

def get_catalog_service(db: Database = Depends(get_database)) -> CatalogService:
    return CatalogService(db)

def get_lending_service(db: Database = Depends(get_database)) -> LendingService:
    return LendingService(db)
