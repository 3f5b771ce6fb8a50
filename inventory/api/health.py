from fastapi import APIRouter, Depends

from inventory.database import ProductRepository, get_store

router = APIRouter(prefix="/health", tags=["Health"])


@router.get(
    "/",
    summary="Health check",
    description="Basic health check endpoint."
)
def health_check():
    """Simple health check."""
    return {"status": "healthy"}


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check that the product store is available."
)
def readiness_check(store: ProductRepository = Depends(get_store)):
    """
    Readiness check for the product store.

    Returns the number of stored products.
    """
    return {
        "status": "ready",
        "checks": {
            "store": True,
            "products": store.count()
        }
    }
