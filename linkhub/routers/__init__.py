"""
FastAPI routers grouped by domain (public directory, admin categories, admin links).

Each module exposes an APIRouter included by linkhub.app. Routers call the
data_service facade and never touch repositories directly.
"""
