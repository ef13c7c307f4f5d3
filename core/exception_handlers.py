from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from core.errors import InventoryError


def setup_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(InventoryError)
    async def inventory_error_handler(request: Request, exc: InventoryError):
        return JSONResponse(
            content={"error": exc.to_dict()},
            status_code=exc.status_code,
        )
