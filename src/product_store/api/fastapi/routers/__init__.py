from . import health, products

ROUTERS = (health.router, products.router)

__all__ = ["ROUTERS", "health", "products"]
