from fastapi import APIRouter

from app.api.entregas.router.router_taxa_entrega import router as router_taxa_entrega

api_entregas = APIRouter(
    tags=["API - Entregas"]
)

api_entregas.include_router(router_taxa_entrega)
