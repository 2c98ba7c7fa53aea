from fastapi import APIRouter

from app.api.pagamentos.router import router_pix, router_status, router_webhooks

api_pagamentos = APIRouter(tags=["API - Pagamentos"])

# Todos públicos: chamados pelo storefront e pelos gateways
api_pagamentos.include_router(router_webhooks.router)
api_pagamentos.include_router(router_status.router)
api_pagamentos.include_router(router_pix.router)
